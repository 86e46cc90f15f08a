"""
===============================================================================
CRC CARD — identity/accounts.py
===============================================================================

Module:
    Portal accounts (credentials + role + onboarding flag)

Responsibilities:
    - Define the Account record used by sign-up / sign-in.
    - Hash/verify passwords (Argon2).
    - Validate credentials against the intended role.

Collaborators:
    - domain.repositories.AccountRepository: storage.
    - identity.roles.Role.
    - crosscutting.error_responses: forbidden for role mismatch / inactive.

Notes:
    - "User does not exist" and "wrong password" are indistinguishable (None).
    - An account registered under one role cannot sign in through the other
      role's login page.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from uuid import UUID, uuid4

from argon2 import PasswordHasher
from argon2.exceptions import VerificationError, VerifyMismatchError

from ..crosscutting.error_responses import forbidden
from ..crosscutting.logger import logger
from ..domain.repositories import AccountRepository
from .roles import Role

_password_hasher = PasswordHasher()


@dataclass(frozen=True, slots=True)
class Account:
    """Stored portal user."""

    email: str
    password_hash: str
    role: Role
    id: UUID = field(default_factory=uuid4)
    is_onboarded: bool = False
    is_active: bool = True
    full_name: str | None = None
    company_name: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def onboarded(self) -> "Account":
        return replace(self, is_onboarded=True)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def hash_password(password: str) -> str:
    """Hash a password with Argon2."""
    return _password_hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return _password_hasher.verify(password_hash, password)
    except (VerifyMismatchError, VerificationError):
        return False


def register_account(
    repo: AccountRepository,
    *,
    email: str,
    password: str,
    role: Role,
    full_name: str | None = None,
    company_name: str | None = None,
) -> Account:
    """Create an account; ValueError from the repository means the email is taken."""
    account = Account(
        email=normalize_email(email),
        password_hash=hash_password(password),
        role=role,
        full_name=full_name,
        company_name=company_name,
    )
    stored = repo.add(account)
    logger.info(
        "account registered",
        extra={"account_id": str(stored.id), "role": stored.role.value},
    )
    return stored


def authenticate_account(
    repo: AccountRepository, email: str, password: str, *, role: Role
) -> Account | None:
    """Validate credentials for the login page of `role`.

    Returns None on bad credentials. Raises 403 when the account is inactive
    or registered under another role.
    """
    normalized_email = normalize_email(email)
    if not normalized_email:
        return None

    account = repo.get_by_email(normalized_email)
    if account is None or not verify_password(password, account.password_hash):
        return None

    if not account.is_active:
        logger.warning("sign-in rejected: inactive account", extra={"email": normalized_email})
        raise forbidden("This account is inactive.")

    if account.role != role:
        logger.info(
            "sign-in rejected: role mismatch",
            extra={"account_role": account.role.value, "requested_role": role.value},
        )
        raise forbidden(
            f"This account is registered as a {account.role.value}. "
            "Please use the correct login page."
        )

    return account
