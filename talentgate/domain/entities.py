"""
===============================================================================
CRC CARD — domain/entities.py
===============================================================================

Module:
    Matchable profiles (talents and opportunities)

Responsibilities:
    - TalentProfile / Opportunity: what the match endpoints return.
    - Carry the stored embedding next to the public fields.
    - ProfileMatch: a profile plus its similarity to the query (0..1).

Collaborators:
    - domain/repositories.py: TalentProfileRepository, OpportunityRepository.
    - application/usecases/matching.py: producers and consumers.

Notes:
    - `embedding` never leaves the API; to_public() drops it.
===============================================================================
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Generic, TypeVar
from uuid import UUID


@dataclass(frozen=True)
class TalentProfile:
    id: UUID
    full_name: str = ""
    email: str = ""
    bio: str = ""
    education: str = ""
    skills: list[str] = field(default_factory=list)
    embedding: list[float] = field(default_factory=list, repr=False)

    def to_public(self) -> dict[str, Any]:
        data = asdict(self)
        data.pop("embedding")
        data["id"] = str(self.id)
        return data


@dataclass(frozen=True)
class Opportunity:
    id: UUID
    title: str
    company_name: str = ""
    description: str = ""
    location: str = ""
    industry: str = ""
    workstyle: str = ""
    skills: list[str] = field(default_factory=list)
    employer_id: UUID | None = None
    embedding: list[float] = field(default_factory=list, repr=False)

    def to_public(self) -> dict[str, Any]:
        data = asdict(self)
        data.pop("embedding")
        data["id"] = str(self.id)
        data["employer_id"] = str(self.employer_id) if self.employer_id else None
        return data


P = TypeVar("P", TalentProfile, Opportunity)


@dataclass(frozen=True)
class ProfileMatch(Generic[P]):
    """R: Search result; similarity is the cosine similarity to the query."""

    profile: P
    similarity: float

    def to_public(self) -> dict[str, Any]:
        return {**self.profile.to_public(), "similarity": self.similarity}
