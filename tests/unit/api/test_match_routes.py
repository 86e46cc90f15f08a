"""
Name: Matching Route Tests

Responsibilities:
  - /api/talents/profile and /api/opportunities: role-gated indexing
  - /api/match: prompt -> talents with similarity; 400 on missing prompt
  - /api/match-opps: talent id -> opportunities; 400 on missing/invalid id
"""

from unittest.mock import Mock
from uuid import UUID, uuid4

import pytest

from talentgate import container
from talentgate.application.usecases import MatchTalentsUseCase
from talentgate.container import get_match_talents_use_case
from talentgate.crosscutting.exceptions import EmbeddingError
from talentgate.domain.entities import Opportunity, TalentProfile
from talentgate.identity.roles import Role

pytestmark = pytest.mark.unit


def _bearer(signed_in) -> dict[str, str]:
    return {"Authorization": f"Bearer {signed_in.token}"}


@pytest.fixture
def talents():
    return container.get_talent_profile_repository()


@pytest.fixture
def opportunities():
    return container.get_opportunity_repository()


# ============================================================================
# Indexing
# ============================================================================


class TestSaveTalentProfile:
    def test_talent_saves_profile_under_own_id(self, client, make_account, talents):
        talent = make_account(Role.TALENT)

        response = client.post(
            "/api/talents/profile",
            json={"bio": "Backend dev", "skills": "python, sql", "resumeText": "CV"},
            headers=_bearer(talent),
        )

        assert response.status_code == 201
        body = response.json()
        assert body["id"] == str(talent.account.id)
        assert body["skills"] == ["python", "sql"]
        assert "embedding" not in body
        assert talents.get_by_id(talent.account.id).embedding

    def test_employer_is_403(self, client, make_account):
        employer = make_account(Role.EMPLOYER)

        response = client.post(
            "/api/talents/profile", json={"bio": "x"}, headers=_bearer(employer)
        )

        assert response.status_code == 403

    def test_anonymous_is_401(self, client):
        assert client.post("/api/talents/profile", json={"bio": "x"}).status_code == 401


class TestPostOpportunity:
    def test_employer_posts_opportunity(self, client, make_account, opportunities):
        employer = make_account(Role.EMPLOYER, company_name="Acme")

        response = client.post(
            "/api/opportunities",
            json={"title": "Platform Engineer", "skills": ["go"]},
            headers=_bearer(employer),
        )

        assert response.status_code == 201
        body = response.json()
        assert body["company_name"] == "Acme"
        assert body["employer_id"] == str(employer.account.id)
        assert opportunities.get_by_id(UUID(body["id"])) is not None

    def test_talent_is_403(self, client, make_account):
        talent = make_account(Role.TALENT)

        response = client.post(
            "/api/opportunities", json={"title": "x"}, headers=_bearer(talent)
        )

        assert response.status_code == 403

    def test_missing_title_is_422(self, client, make_account):
        employer = make_account(Role.EMPLOYER)

        response = client.post("/api/opportunities", json={}, headers=_bearer(employer))

        assert response.status_code == 422


# ============================================================================
# /api/match
# ============================================================================


class TestMatchTalents:
    def test_returns_matching_talents_with_similarity(self, client, make_account):
        talent = make_account(Role.TALENT)
        client.post(
            "/api/talents/profile",
            json={"bio": "Distributed systems engineer"},
            headers=_bearer(talent),
        )

        response = client.post("/api/match", json="Distributed systems engineer")

        assert response.status_code == 200
        (match,) = response.json()
        assert match["id"] == str(talent.account.id)
        assert match["similarity"] == pytest.approx(1.0)

    def test_below_threshold_is_excluded(self, client, talents):
        talents.upsert(TalentProfile(id=uuid4(), embedding=[0.0] * 767 + [1.0]))

        response = client.post("/api/match", json="anything")

        assert response.status_code == 200
        assert response.json() == []

    def test_at_most_five_results(self, app, client, talents):
        fixed = Mock()
        fixed.embed_text.return_value = [1.0, 0.0]
        app.dependency_overrides[get_match_talents_use_case] = lambda: MatchTalentsUseCase(
            fixed, talents
        )
        for i in range(7):
            talents.upsert(TalentProfile(id=uuid4(), embedding=[1.0, 0.01 * i]))

        response = client.post("/api/match", json="prompt")

        assert len(response.json()) == 5

    @pytest.mark.parametrize("body", [b'""', b'"  "', b"42", b'{"prompt": "x"}', b"", b"{bad"])
    def test_missing_or_invalid_prompt_is_400(self, client, body):
        response = client.post(
            "/api/match", content=body, headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Missing or invalid prompt"

    def test_provider_failure_is_503(self, app, client, talents):
        failing = Mock()
        failing.embed_text.side_effect = EmbeddingError("quota exceeded")
        app.dependency_overrides[get_match_talents_use_case] = lambda: MatchTalentsUseCase(
            failing, talents
        )

        response = client.post("/api/match", json="prompt")

        assert response.status_code == 503
        assert response.json()["code"] == "EMBEDDING_ERROR"


# ============================================================================
# /api/match-opps
# ============================================================================


class TestMatchOpportunities:
    def test_returns_opportunities_for_talent(self, client, talents, opportunities):
        talent = talents.upsert(TalentProfile(id=uuid4(), embedding=[1.0, 0.0]))
        near = opportunities.upsert(
            Opportunity(id=uuid4(), title="near", embedding=[1.0, 0.2])
        )
        opportunities.upsert(Opportunity(id=uuid4(), title="far", embedding=[0.0, 1.0]))

        response = client.post("/api/match-opps", json={"id": str(talent.id)})

        assert response.status_code == 200
        (match,) = response.json()
        assert match["id"] == str(near.id)
        assert match["title"] == "near"
        assert 0.75 <= match["similarity"] <= 1.0
        assert "embedding" not in match

    def test_unknown_talent_is_empty_list(self, client):
        response = client.post("/api/match-opps", json={"id": str(uuid4())})

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.parametrize(
        "payload", [{}, {"id": ""}, {"id": "not-a-uuid"}, "just a string", None]
    )
    def test_missing_or_invalid_id_is_400(self, client, payload):
        response = client.post("/api/match-opps", json=payload)

        assert response.status_code == 400
        assert response.json()["detail"] == "Missing or invalid ID"
