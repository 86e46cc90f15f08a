"""
===============================================================================
CRC CARD — domain/repositories.py
===============================================================================

Module:
    Repository ports (Protocols)

Responsibilities:
    - Define the persistence contracts for accounts, talent profiles and
      opportunities (the latter two searchable by embedding).
    - Keep identity/application code independent of storage details.

Collaborators:
    - infrastructure/repositories/*: concrete implementations.
    - identity/accounts.py, api/auth_routes.py: consumers.
===============================================================================
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol
from uuid import UUID

if TYPE_CHECKING:
    from ..identity.accounts import Account
    from .entities import Opportunity, ProfileMatch, TalentProfile


class AccountRepository(Protocol):
    """Persistence contract for accounts."""

    def get_by_email(self, email: str) -> "Account | None": ...

    def get_by_id(self, account_id: UUID) -> "Account | None": ...

    def add(self, account: "Account") -> "Account":
        """Store a new account; raises ValueError if the email is taken."""
        ...

    def mark_onboarded(self, account_id: UUID) -> "Account | None": ...


class TalentProfileRepository(Protocol):
    """Talent profiles with their embeddings."""

    def upsert(self, profile: "TalentProfile") -> "TalentProfile": ...

    def get_by_id(self, profile_id: UUID) -> "TalentProfile | None": ...

    def find_similar(
        self, embedding: list[float], *, threshold: float, top_k: int
    ) -> "list[ProfileMatch[TalentProfile]]":
        """R: Profiles with similarity >= threshold, best first, at most top_k."""
        ...


class OpportunityRepository(Protocol):
    """Posted opportunities with their embeddings."""

    def upsert(self, opportunity: "Opportunity") -> "Opportunity": ...

    def get_by_id(self, opportunity_id: UUID) -> "Opportunity | None": ...

    def find_similar(
        self, embedding: list[float], *, threshold: float, top_k: int
    ) -> "list[ProfileMatch[Opportunity]]": ...
