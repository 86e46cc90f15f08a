"""
===============================================================================
CRC CARD — identity/access_policy.py
===============================================================================

Module:
    AccessPolicy (one role predicate, two deny strategies)

Responsibilities:
    - Own the single role predicate used by every gate (strict equality).
    - Classify an AuthState as resolving / authorized / denied (+ reason).
    - RedirectOnDeny: server-side strategy, denial -> RedirectRequired.
    - RenderFallbackOnDeny: client-side strategy, denial -> fallback or None.

Collaborators:
    - identity.auth_state.AuthState: input of decide().
    - identity.sessions.Session: input of RedirectOnDeny.enforce().
    - identity.roles.home_path_for: role-mismatch destination.
    - identity.session_check: raises/handles RedirectRequired.
    - identity.render_guard: uses RenderFallbackOnDeny.

Policy:
    - Unauthenticated -> sign-in path.
    - Role mismatch   -> the user's own home, unless a single
      "unauthorized" path is configured.
===============================================================================
"""

from __future__ import annotations

from abc import ABC
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, TypeVar

from .auth_state import AuthState
from .roles import Role, home_path_for
from .sessions import Session

T = TypeVar("T")


def has_required_role(user_role: Role | None, required_role: Role | None) -> bool:
    """True when no role is required or the roles are equal. No hierarchy."""
    if required_role is None:
        return True
    return user_role is not None and user_role == required_role


class AccessOutcome(str, Enum):
    RESOLVING = "resolving"
    AUTHORIZED = "authorized"
    DENIED = "denied"


class DenialReason(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    ROLE_MISMATCH = "role_mismatch"


@dataclass(frozen=True, slots=True)
class AccessDecision:
    outcome: AccessOutcome
    reason: DenialReason | None = None

    @property
    def allowed(self) -> bool:
        return self.outcome is AccessOutcome.AUTHORIZED


class AccessPolicy(ABC):
    """Role gate shared by the redirect and render strategies."""

    def __init__(self, required_role: Role | None = None) -> None:
        self.required_role = required_role

    def decide(self, state: AuthState) -> AccessDecision:
        if state.is_loading:
            return AccessDecision(AccessOutcome.RESOLVING)
        if not state.is_authenticated:
            return AccessDecision(AccessOutcome.DENIED, DenialReason.UNAUTHENTICATED)
        if not has_required_role(state.user_role, self.required_role):
            return AccessDecision(AccessOutcome.DENIED, DenialReason.ROLE_MISMATCH)
        return AccessDecision(AccessOutcome.AUTHORIZED)

    def decide_session(self, session: Session | None) -> AccessDecision:
        """Same decision for an already-resolved (never loading) session."""
        return self.decide(AuthState.from_session(session))


# -----------------------------------------------------------------------------
# Redirect strategy
# -----------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class RedirectTargets:
    """Where denied visitors are sent. Empty unauthorized_path = user's home."""

    sign_in_path: str = "/"
    unauthorized_path: str = ""

    @classmethod
    def from_settings(cls) -> "RedirectTargets":
        from ..crosscutting.config import get_settings

        settings = get_settings()
        return cls(
            sign_in_path=settings.sign_in_path or "/",
            unauthorized_path=settings.unauthorized_redirect_path,
        )


class RedirectRequired(Exception):
    """Navigation signal: abort the page and send the visitor to `location`."""

    def __init__(
        self,
        location: str,
        reason: DenialReason,
        *,
        clear_cookie: bool = False,
    ) -> None:
        super().__init__(f"redirect to {location} ({reason.value})")
        self.location = location
        self.reason = reason
        self.clear_cookie = clear_cookie


class RedirectOnDeny(AccessPolicy):
    """Server-side strategy: the caller gets a Session or a redirect signal."""

    def __init__(
        self,
        required_role: Role | None = None,
        targets: RedirectTargets | None = None,
    ) -> None:
        super().__init__(required_role)
        self.targets = targets or RedirectTargets()

    def enforce(self, session: Session | None) -> Session:
        decision = self.decide_session(session)
        if decision.allowed and session is not None:
            return session
        reason = decision.reason or DenialReason.UNAUTHENTICATED
        raise RedirectRequired(self.location_for(reason, session), reason)

    def location_for(self, reason: DenialReason, session: Session | None) -> str:
        if reason is DenialReason.UNAUTHENTICATED or session is None:
            return self.targets.sign_in_path
        if self.targets.unauthorized_path:
            return self.targets.unauthorized_path
        return home_path_for(session.role, is_onboarded=session.is_onboarded)


# -----------------------------------------------------------------------------
# Render strategy
# -----------------------------------------------------------------------------
Renderable = Any  # a value, or a zero-arg callable producing it


def materialize(content: Renderable) -> Any:
    """Produce content lazily: callables run only when selected."""
    return content() if callable(content) else content


class RenderFallbackOnDeny(AccessPolicy, Generic[T]):
    """Client-side strategy: children when authorized, else fallback or None."""

    def __init__(
        self,
        required_role: Role | None = None,
        fallback: "T | Callable[[], T] | None" = None,
    ) -> None:
        super().__init__(required_role)
        self.fallback = fallback

    def select(
        self, state: AuthState, children: "T | Callable[[], T]"
    ) -> "T | None":
        decision = self.decide(state)
        if decision.outcome is AccessOutcome.RESOLVING:
            return None
        if decision.allowed:
            return materialize(children)
        if self.fallback is None:
            return None
        return materialize(self.fallback)
