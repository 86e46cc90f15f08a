"""
Name: Matching Use Cases

Responsibilities:
  - Index a talent profile / opportunity with an embedding of its text
  - Match talents against an employer's free-text prompt
  - Match opportunities against a stored talent profile

Collaborators:
  - domain.services.EmbeddingService
  - domain.repositories.TalentProfileRepository, OpportunityRepository
  - domain.entities.TalentProfile, Opportunity, ProfileMatch

Constraints:
  - No HTTP concerns; provider failures surface as EmbeddingError
  - Threshold and count come from the caller (Settings in production)
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from uuid import UUID

from ...crosscutting.logger import logger
from ...domain.entities import Opportunity, ProfileMatch, TalentProfile
from ...domain.repositories import OpportunityRepository, TalentProfileRepository
from ...domain.services import EmbeddingService

DEFAULT_MATCH_THRESHOLD = 0.75
DEFAULT_MATCH_COUNT = 5


def talent_embedding_text(profile: TalentProfile, resume_text: str = "") -> str:
    """R: Resume, skills, bio and education joined by spaces."""
    parts = [resume_text, ", ".join(profile.skills), profile.bio, profile.education]
    return " ".join(p for p in parts if p)


def opportunity_embedding_text(opportunity: Opportunity) -> str:
    parts = [
        opportunity.title,
        opportunity.company_name,
        opportunity.workstyle,
        opportunity.location,
        opportunity.industry,
        opportunity.description,
        ", ".join(opportunity.skills),
    ]
    return " ".join(p for p in parts if p)


@dataclass(frozen=True)
class MatchLimits:
    threshold: float = DEFAULT_MATCH_THRESHOLD
    count: int = DEFAULT_MATCH_COUNT


@dataclass
class IndexTalentInput:
    profile: TalentProfile
    resume_text: str = ""


class IndexTalentProfileUseCase:
    """R: Embed a talent profile and store it (replacing any previous one)."""

    def __init__(
        self, embedding_service: EmbeddingService, talents: TalentProfileRepository
    ):
        self.embedding_service = embedding_service
        self.talents = talents

    def execute(self, input_data: IndexTalentInput) -> TalentProfile:
        text = talent_embedding_text(input_data.profile, input_data.resume_text)
        embedding = self.embedding_service.embed_text(text)
        stored = self.talents.upsert(replace(input_data.profile, embedding=embedding))
        logger.info("talent profile indexed", extra={"talent_id": str(stored.id)})
        return stored


class PostOpportunityUseCase:
    """R: Embed an opportunity and store it."""

    def __init__(
        self, embedding_service: EmbeddingService, opportunities: OpportunityRepository
    ):
        self.embedding_service = embedding_service
        self.opportunities = opportunities

    def execute(self, opportunity: Opportunity) -> Opportunity:
        embedding = self.embedding_service.embed_text(
            opportunity_embedding_text(opportunity)
        )
        stored = self.opportunities.upsert(replace(opportunity, embedding=embedding))
        logger.info(
            "opportunity posted", extra={"opportunity_id": str(stored.id)}
        )
        return stored


class MatchTalentsUseCase:
    """R: Employer prompt -> best-matching talents."""

    def __init__(
        self,
        embedding_service: EmbeddingService,
        talents: TalentProfileRepository,
        limits: MatchLimits | None = None,
    ):
        self.embedding_service = embedding_service
        self.talents = talents
        self.limits = limits or MatchLimits()

    def execute(self, prompt: str) -> list[ProfileMatch[TalentProfile]]:
        embedding = self.embedding_service.embed_text(prompt)
        matches = self.talents.find_similar(
            embedding, threshold=self.limits.threshold, top_k=self.limits.count
        )
        logger.info("talents matched", extra={"match_count": len(matches)})
        return matches


class MatchOpportunitiesUseCase:
    """R: Stored talent profile -> best-matching opportunities.

    An unknown talent, or one never embedded, has no matches.
    """

    def __init__(
        self,
        talents: TalentProfileRepository,
        opportunities: OpportunityRepository,
        limits: MatchLimits | None = None,
    ):
        self.talents = talents
        self.opportunities = opportunities
        self.limits = limits or MatchLimits()

    def execute(self, talent_id: UUID) -> list[ProfileMatch[Opportunity]]:
        talent = self.talents.get_by_id(talent_id)
        if talent is None or not talent.embedding:
            logger.info(
                "no embedded talent profile", extra={"talent_id": str(talent_id)}
            )
            return []
        return self.opportunities.find_similar(
            talent.embedding, threshold=self.limits.threshold, top_k=self.limits.count
        )
