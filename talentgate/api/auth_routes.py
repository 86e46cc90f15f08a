"""
===============================================================================
CRC CARD — talentgate/api/auth_routes.py (Sign-up / sign-in / session)
===============================================================================

Responsibilities:
  - Sign-up and sign-in per role, issuing a JWT (body + httpOnly cookie).
  - Reject sign-in through the other role's login page (403).
  - Logout (idempotent cookie removal) and current-session lookup.
  - Mark the current account as onboarded.

Collaborators:
  - identity.accounts: register_account, authenticate_account
  - identity.sessions: create_access_token, Session
  - identity.session_check.require_session
  - container.get_account_repository
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, Field, field_validator

from ..container import get_account_repository
from ..crosscutting.error_responses import (
    OPENAPI_ERROR_RESPONSES,
    conflict,
    unauthorized,
)
from ..domain.repositories import AccountRepository
from ..identity.accounts import Account, authenticate_account, register_account
from ..identity.roles import Role, home_path_for
from ..identity.session_check import require_session
from ..identity.sessions import Session, create_access_token, get_token_settings

router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)


# -----------------------------------------------------------------------------
# HTTP models (DTOs)
# -----------------------------------------------------------------------------


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=1, max_length=512)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class SignupRequest(LoginRequest):
    password: str = Field(..., min_length=8, max_length=512)
    full_name: str | None = Field(default=None, max_length=200)
    company_name: str | None = Field(default=None, max_length=200)


class SessionResponse(BaseModel):
    id: UUID
    email: str
    role: Role
    is_onboarded: bool
    full_name: str | None = None
    company_name: str | None = None


class AuthResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: SessionResponse
    redirect_to: str


class OnboardingResponse(BaseModel):
    user: SessionResponse
    redirect_to: str


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------


def _to_session_response(session: Session) -> SessionResponse:
    return SessionResponse(
        id=session.user_id,
        email=session.email,
        role=session.role,
        is_onboarded=session.is_onboarded,
        full_name=session.full_name,
        company_name=session.company_name,
    )


def _set_auth_cookie(response: Response, token: str, expires_in: int) -> None:
    settings = get_token_settings()
    response.set_cookie(
        key=settings.jwt_cookie_name,
        value=token,
        httponly=True,
        secure=settings.jwt_cookie_secure,
        samesite="lax",
        max_age=expires_in,
        path="/",
    )


def _clear_auth_cookie(response: Response) -> None:
    settings = get_token_settings()
    response.delete_cookie(
        key=settings.jwt_cookie_name,
        path="/",
        samesite="lax",
        secure=settings.jwt_cookie_secure,
    )


def _signed_in(response: Response, account: Account) -> AuthResponse:
    token, expires_in = create_access_token(account)
    _set_auth_cookie(response, token, expires_in)
    return AuthResponse(
        access_token=token,
        expires_in=expires_in,
        user=_to_session_response(Session.from_account(account)),
        redirect_to=home_path_for(account.role, is_onboarded=account.is_onboarded),
    )


# -----------------------------------------------------------------------------
# Endpoints
# -----------------------------------------------------------------------------


@router.post(
    "/auth/{role}/signup",
    response_model=AuthResponse,
    status_code=201,
    tags=["auth"],
)
def signup(
    role: Role,
    req: SignupRequest,
    response: Response,
    accounts: AccountRepository = Depends(get_account_repository),
):
    """Create an account for `role` and sign it in."""
    try:
        account = register_account(
            accounts,
            email=req.email,
            password=req.password,
            role=role,
            full_name=req.full_name,
            company_name=req.company_name,
        )
    except ValueError as exc:
        raise conflict("An account with this email already exists.") from exc

    return _signed_in(response, account)


@router.post("/auth/{role}/login", response_model=AuthResponse, tags=["auth"])
def login(
    role: Role,
    req: LoginRequest,
    response: Response,
    accounts: AccountRepository = Depends(get_account_repository),
):
    """
    Sign in through the login page of `role`.

    - 401 on bad credentials.
    - 403 when the account belongs to the other role.
    """
    account = authenticate_account(accounts, req.email, req.password, role=role)
    if account is None:
        raise unauthorized("Invalid credentials.")

    return _signed_in(response, account)


@router.post("/auth/logout", tags=["auth"])
def logout(response: Response):
    """Always clears the cookie. Needs no session, so it is idempotent."""
    _clear_auth_cookie(response)
    return {"ok": True}


@router.get("/auth/me", response_model=SessionResponse, tags=["auth"])
def me(session: Session = Depends(require_session())):
    return _to_session_response(session)


@router.post("/onboarding/complete", response_model=OnboardingResponse, tags=["auth"])
def complete_onboarding(
    session: Session = Depends(require_session()),
    accounts: AccountRepository = Depends(get_account_repository),
):
    """Flag the signed-in account as onboarded; returns its dashboard path."""
    account = accounts.mark_onboarded(session.user_id)
    if account is None:
        raise unauthorized("Not signed in.")

    updated = Session.from_account(account)
    return OnboardingResponse(
        user=_to_session_response(updated),
        redirect_to=home_path_for(updated.role, is_onboarded=True),
    )
