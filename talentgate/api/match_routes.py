"""
===============================================================================
CRC CARD — talentgate/api/match_routes.py (semantic matching endpoints)
===============================================================================

Responsibilities:
  - POST /api/talents/profile: a signed-in talent stores its embedded profile
  - POST /api/opportunities: a signed-in employer posts an embedded opportunity
  - POST /api/match: JSON string prompt -> best-matching talents
  - POST /api/match-opps: {"id": <talent id>} -> best-matching opportunities

Collaborators:
  - container: matching use cases
  - identity.session_check.require_session
  - crosscutting.error_responses: RFC 7807 factories

Constraints:
  - Matches carry `similarity` (cosine, 0..1) and never the stored embedding.
  - Embedding calls are blocking; they run in the threadpool.
===============================================================================
"""

from __future__ import annotations

import json
from typing import Any
from uuid import UUID, uuid4

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, ConfigDict, Field, field_validator
from starlette.concurrency import run_in_threadpool

from ..application.usecases import (
    IndexTalentInput,
    IndexTalentProfileUseCase,
    MatchOpportunitiesUseCase,
    MatchTalentsUseCase,
    PostOpportunityUseCase,
)
from ..container import (
    get_index_talent_profile_use_case,
    get_match_opportunities_use_case,
    get_match_talents_use_case,
    get_post_opportunity_use_case,
)
from ..crosscutting.error_responses import (
    OPENAPI_ERROR_RESPONSES,
    bad_request,
    forbidden,
)
from ..domain.entities import Opportunity, TalentProfile
from ..identity.roles import Role
from ..identity.session_check import require_session
from ..identity.sessions import Session

router = APIRouter(prefix="/api", tags=["matching"], responses=OPENAPI_ERROR_RESPONSES)

MISSING_PROMPT_MESSAGE = "Missing or invalid prompt"
MISSING_ID_MESSAGE = "Missing or invalid ID"


# -----------------------------------------------------------------------------
# HTTP models (DTOs)
# -----------------------------------------------------------------------------


def _split_skills(v: Any) -> Any:
    """R: Accept "a, b" as well as ["a", "b"]."""
    if isinstance(v, str):
        return [s.strip() for s in v.split(",") if s.strip()]
    return v


class TalentProfileRequest(BaseModel):
    full_name: str = ""
    bio: str = ""
    education: str = ""
    skills: list[str] = Field(default_factory=list)
    resume_text: str = Field(default="", alias="resumeText")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("skills", mode="before")
    @classmethod
    def split_skills(cls, v: Any) -> Any:
        return _split_skills(v)


class TalentProfileResponse(BaseModel):
    id: str
    full_name: str
    email: str
    bio: str
    education: str
    skills: list[str]


class OpportunityRequest(BaseModel):
    title: str = Field(min_length=1)
    company_name: str = ""
    description: str = ""
    location: str = ""
    industry: str = ""
    workstyle: str = ""
    skills: list[str] = Field(default_factory=list)

    @field_validator("skills", mode="before")
    @classmethod
    def split_skills(cls, v: Any) -> Any:
        return _split_skills(v)


class OpportunityResponse(BaseModel):
    id: str
    title: str
    company_name: str
    description: str
    location: str
    industry: str
    workstyle: str
    skills: list[str]
    employer_id: str | None = None


class TalentMatchResponse(TalentProfileResponse):
    similarity: float


class OpportunityMatchResponse(OpportunityResponse):
    similarity: float


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------


async def _json_body(request: Request) -> Any:
    raw = await request.body()
    if not raw:
        return None
    try:
        return json.loads(raw)
    except (ValueError, UnicodeDecodeError):
        return None


def _require_role(session: Session, role: Role) -> None:
    if session.role != role:
        raise forbidden(f"Only {role.value} accounts can do this.")


# -----------------------------------------------------------------------------
# Endpoints
# -----------------------------------------------------------------------------


@router.post("/talents/profile", response_model=TalentProfileResponse, status_code=201)
async def save_talent_profile(
    req: TalentProfileRequest,
    session: Session = Depends(require_session()),
    use_case: IndexTalentProfileUseCase = Depends(get_index_talent_profile_use_case),
):
    """The profile id is the talent's account id; saving again replaces it."""
    _require_role(session, Role.TALENT)
    profile = TalentProfile(
        id=session.user_id,
        full_name=req.full_name or session.full_name or "",
        email=session.email,
        bio=req.bio,
        education=req.education,
        skills=req.skills,
    )
    stored = await run_in_threadpool(
        use_case.execute, IndexTalentInput(profile=profile, resume_text=req.resume_text)
    )
    return stored.to_public()


@router.post("/opportunities", response_model=OpportunityResponse, status_code=201)
async def post_opportunity(
    req: OpportunityRequest,
    session: Session = Depends(require_session()),
    use_case: PostOpportunityUseCase = Depends(get_post_opportunity_use_case),
):
    _require_role(session, Role.EMPLOYER)
    opportunity = Opportunity(
        id=uuid4(),
        title=req.title,
        company_name=req.company_name or session.company_name or "",
        description=req.description,
        location=req.location,
        industry=req.industry,
        workstyle=req.workstyle,
        skills=req.skills,
        employer_id=session.user_id,
    )
    stored = await run_in_threadpool(use_case.execute, opportunity)
    return stored.to_public()


@router.post("/match", response_model=list[TalentMatchResponse])
async def match_talents(
    request: Request,
    use_case: MatchTalentsUseCase = Depends(get_match_talents_use_case),
):
    """Body is a raw JSON string describing the ideal candidate."""
    prompt = await _json_body(request)
    if not isinstance(prompt, str) or not prompt.strip():
        raise bad_request(MISSING_PROMPT_MESSAGE)

    matches = await run_in_threadpool(use_case.execute, prompt)
    return [m.to_public() for m in matches]


@router.post("/match-opps", response_model=list[OpportunityMatchResponse])
async def match_opportunities(
    request: Request,
    use_case: MatchOpportunitiesUseCase = Depends(get_match_opportunities_use_case),
):
    """Body is {"id": "<talent id>"}; an unknown talent has no matches."""
    body = await _json_body(request)
    raw_id = body.get("id") if isinstance(body, dict) else None
    try:
        talent_id = UUID(str(raw_id)) if raw_id else None
    except ValueError:
        talent_id = None
    if talent_id is None:
        raise bad_request(MISSING_ID_MESSAGE)

    matches = await run_in_threadpool(use_case.execute, talent_id)
    return [m.to_public() for m in matches]
