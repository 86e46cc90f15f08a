"""
===============================================================================
CRC CARD — identity/sessions.py
===============================================================================

Module:
    Sessions (JWT access tokens -> Session)

Responsibilities:
    - Define Session, the resolved proof of authentication the gates read.
    - Issue signed access tokens for an account (HS256).
    - Decode/validate tokens (signature, exp, minimal claims).
    - Resolve the current Session from a request (cookie or Bearer header).

Collaborators:
    - crosscutting.config.get_settings: secret, TTL, cookie name.
    - domain.repositories.AccountRepository: authoritative role/onboarding.
    - identity.roles.Role.

Design decisions:
    - Token problems resolve to "no session" instead of raising: the gates
      turn a missing session into a redirect, never into an error page.
    - The account record wins over token claims, so role/onboarding changes
      take effect without re-issuing the token.
    - Never log tokens.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Protocol
from uuid import UUID

import jwt
from starlette.requests import HTTPConnection

from ..crosscutting.config import get_settings
from ..crosscutting.logger import logger
from ..domain.repositories import AccountRepository
from .accounts import Account
from .roles import Role

JWT_ALGORITHM: str = "HS256"

CLAIM_SUB: str = "sub"
CLAIM_EMAIL: str = "email"
CLAIM_ROLE: str = "role"
CLAIM_IAT: str = "iat"
CLAIM_EXP: str = "exp"
CLAIM_TYP: str = "typ"

TOKEN_TYPE_ACCESS: str = "access"


@dataclass(frozen=True, slots=True)
class Session:
    """Resolved authentication: identity + role. Read-only for the gates."""

    user_id: UUID
    email: str
    role: Role
    is_onboarded: bool = False
    full_name: str | None = None
    company_name: str | None = None

    @classmethod
    def from_account(cls, account: Account) -> "Session":
        return cls(
            user_id=account.id,
            email=account.email,
            role=account.role,
            is_onboarded=account.is_onboarded,
            full_name=account.full_name,
            company_name=account.company_name,
        )


@dataclass(frozen=True, slots=True)
class TokenSettings:
    """Snapshot of token settings (overridable in tests)."""

    jwt_secret: str
    jwt_access_ttl_minutes: int
    jwt_cookie_name: str
    jwt_cookie_secure: bool


def get_token_settings() -> TokenSettings:
    s = get_settings()
    return TokenSettings(
        jwt_secret=s.jwt_secret,
        jwt_access_ttl_minutes=s.jwt_access_ttl_minutes,
        jwt_cookie_name=s.jwt_cookie_name,
        jwt_cookie_secure=s.jwt_cookie_secure,
    )


def create_access_token(
    account: Account, settings: TokenSettings | None = None
) -> tuple[str, int]:
    """Sign an access token for `account`. Returns (token, expires_in_seconds)."""
    token_settings = settings or get_token_settings()

    now = datetime.now(timezone.utc)
    expires_in = int(token_settings.jwt_access_ttl_minutes * 60)

    payload: dict[str, object] = {
        CLAIM_SUB: str(account.id),
        CLAIM_EMAIL: account.email,
        CLAIM_ROLE: account.role.value,
        CLAIM_IAT: int(now.timestamp()),
        CLAIM_EXP: int((now + timedelta(seconds=expires_in)).timestamp()),
        CLAIM_TYP: TOKEN_TYPE_ACCESS,
    }

    token = jwt.encode(payload, token_settings.jwt_secret, algorithm=JWT_ALGORITHM)
    return token, expires_in


def decode_access_token(
    token: str, settings: TokenSettings | None = None
) -> UUID | None:
    """Validate a token and return the account id it names, or None."""
    token_settings = settings or get_token_settings()

    try:
        payload = jwt.decode(
            token,
            token_settings.jwt_secret,
            algorithms=[JWT_ALGORITHM],
            options={"require": [CLAIM_SUB, CLAIM_EMAIL, CLAIM_ROLE, CLAIM_EXP]},
        )
    except jwt.ExpiredSignatureError:
        logger.info("session token expired")
        return None
    except jwt.InvalidTokenError as exc:
        logger.warning("session token rejected", extra={"error_type": type(exc).__name__})
        return None

    if payload.get(CLAIM_TYP, TOKEN_TYPE_ACCESS) != TOKEN_TYPE_ACCESS:
        return None

    try:
        return UUID(str(payload[CLAIM_SUB]))
    except ValueError:
        return None


def _extract_bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1].strip() or None


def extract_access_token(conn: HTTPConnection) -> str | None:
    """Token from `Authorization: Bearer` or from the session cookie."""
    token = _extract_bearer_token(conn.headers.get("authorization"))
    if token:
        return token
    return conn.cookies.get(get_token_settings().jwt_cookie_name) or None


class SessionResolver(Protocol):
    """Resolves the current session for an incoming request."""

    def resolve(self, conn: HTTPConnection) -> Session | None: ...


class TokenSessionResolver:
    """SessionResolver backed by access tokens + the account repository."""

    def __init__(
        self,
        accounts: AccountRepository,
        settings: TokenSettings | None = None,
    ) -> None:
        self._accounts = accounts
        self._settings = settings

    def resolve(self, conn: HTTPConnection) -> Session | None:
        token = extract_access_token(conn)
        if not token:
            return None

        account_id = decode_access_token(token, self._settings)
        if account_id is None:
            return None

        account = self._accounts.get_by_id(account_id)
        if account is None or not account.is_active:
            return None
        return Session.from_account(account)
