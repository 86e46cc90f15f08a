"""
Name: Matching Use Case Tests

Responsibilities:
  - Index/post embed the composed profile text and store the vector
  - MatchTalents embeds the prompt and applies the configured limits
  - MatchOpportunities uses the stored talent vector; unknown talent -> []
"""

from unittest.mock import Mock
from uuid import uuid4

import pytest

from talentgate.application.usecases import (
    IndexTalentInput,
    IndexTalentProfileUseCase,
    MatchLimits,
    MatchOpportunitiesUseCase,
    MatchTalentsUseCase,
    PostOpportunityUseCase,
)
from talentgate.application.usecases.matching import (
    opportunity_embedding_text,
    talent_embedding_text,
)
from talentgate.crosscutting.exceptions import EmbeddingError
from talentgate.domain.entities import Opportunity, TalentProfile
from talentgate.infrastructure.repositories import (
    InMemoryOpportunityRepository,
    InMemoryTalentProfileRepository,
)
from talentgate.infrastructure.services import FakeEmbeddingService

pytestmark = pytest.mark.unit


@pytest.fixture
def embeddings():
    return FakeEmbeddingService(dimension=16)


@pytest.fixture
def talents():
    return InMemoryTalentProfileRepository()


@pytest.fixture
def opportunities():
    return InMemoryOpportunityRepository()


class TestEmbeddingText:
    def test_talent_text_joins_resume_skills_bio_education(self):
        profile = TalentProfile(
            id=uuid4(), bio="Backend dev", education="BSc", skills=["python", "sql"]
        )

        text = talent_embedding_text(profile, "Resume body")

        assert text == "Resume body python, sql Backend dev BSc"

    def test_opportunity_text_skips_empty_fields(self):
        opp = Opportunity(id=uuid4(), title="Engineer", location="Remote")

        assert opportunity_embedding_text(opp) == "Engineer Remote"


class TestIndexAndPost:
    def test_index_talent_stores_embedding(self, embeddings, talents):
        profile = TalentProfile(id=uuid4(), bio="Backend dev")

        stored = IndexTalentProfileUseCase(embeddings, talents).execute(
            IndexTalentInput(profile=profile, resume_text="Resume")
        )

        assert stored.embedding == embeddings.embed_text("Resume Backend dev")
        assert talents.get_by_id(profile.id) == stored

    def test_post_opportunity_stores_embedding(self, embeddings, opportunities):
        opp = Opportunity(id=uuid4(), title="Engineer")

        stored = PostOpportunityUseCase(embeddings, opportunities).execute(opp)

        assert stored.embedding == embeddings.embed_text("Engineer")
        assert opportunities.get_by_id(opp.id) is not None

    def test_provider_failure_stores_nothing(self, talents):
        failing = Mock()
        failing.embed_text.side_effect = EmbeddingError("quota exceeded")
        profile = TalentProfile(id=uuid4(), bio="Backend dev")

        with pytest.raises(EmbeddingError):
            IndexTalentProfileUseCase(failing, talents).execute(
                IndexTalentInput(profile=profile)
            )

        assert talents.get_by_id(profile.id) is None


class TestMatchTalents:
    def test_prompt_equal_to_profile_text_is_a_perfect_match(self, embeddings, talents):
        profile = TalentProfile(id=uuid4(), bio="Distributed systems engineer")
        IndexTalentProfileUseCase(embeddings, talents).execute(
            IndexTalentInput(profile=profile)
        )

        matches = MatchTalentsUseCase(embeddings, talents).execute(
            "Distributed systems engineer"
        )

        assert [m.profile.id for m in matches] == [profile.id]
        assert matches[0].similarity == pytest.approx(1.0)

    def test_limits_are_passed_to_the_repository(self):
        embedder = Mock()
        embedder.embed_text.return_value = [1.0, 0.0]
        repo = Mock()
        repo.find_similar.return_value = []

        MatchTalentsUseCase(embedder, repo, MatchLimits(threshold=0.5, count=2)).execute(
            "prompt"
        )

        repo.find_similar.assert_called_once_with([1.0, 0.0], threshold=0.5, top_k=2)

    def test_default_limits(self):
        limits = MatchLimits()

        assert (limits.threshold, limits.count) == (0.75, 5)


class TestMatchOpportunities:
    def test_uses_stored_talent_vector(self, talents, opportunities):
        talent = talents.upsert(TalentProfile(id=uuid4(), embedding=[1.0, 0.0]))
        near = opportunities.upsert(
            Opportunity(id=uuid4(), title="near", embedding=[1.0, 0.1])
        )
        opportunities.upsert(Opportunity(id=uuid4(), title="far", embedding=[0.0, 1.0]))

        matches = MatchOpportunitiesUseCase(talents, opportunities).execute(talent.id)

        assert [m.profile.id for m in matches] == [near.id]

    def test_unknown_talent_has_no_matches(self, talents, opportunities):
        opportunities.upsert(Opportunity(id=uuid4(), title="x", embedding=[1.0, 0.0]))

        assert MatchOpportunitiesUseCase(talents, opportunities).execute(uuid4()) == []

    def test_talent_without_embedding_has_no_matches(self, talents, opportunities):
        talent = talents.upsert(TalentProfile(id=uuid4()))
        opportunities.upsert(Opportunity(id=uuid4(), title="x", embedding=[1.0, 0.0]))

        assert MatchOpportunitiesUseCase(talents, opportunities).execute(talent.id) == []
