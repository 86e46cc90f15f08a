"""
===============================================================================
CRC CARD — identity/route_guard.py
===============================================================================

Class: RoleRouteMiddleware

Responsibilities:
    - Apply the portal's path rules to page navigations before routing.
    - Send signed-in users away from login/signup and finished onboarding.
    - Keep each role inside its own area; require onboarding for dashboards.
    - Send visitors without a session to "/" and drop the auth cookie.

Collaborators:
    - container.get_session_resolver (overridable per instance)
    - identity.roles: home/login paths
    - identity.session_check.redirect_response

Constraints:
    - Only GET/HEAD page requests are gated; API calls are not.
    - Resolution failures fail open (logged); the page-level Session Role
      Check still runs.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ..crosscutting.logger import logger
from .roles import (
    EMPLOYER_DASHBOARD_PATH,
    EMPLOYER_ONBOARDING_PATH,
    TALENT_ONBOARDING_PATH,
    TALENT_OPPORTUNITIES_PATH,
    Role,
    home_path_for,
    login_path_for,
)
from .session_check import redirect_response
from .sessions import Session, SessionResolver, extract_access_token

PUBLIC_PATHS = frozenset({"/", "/auth/callback"})

AUTH_PAGES = frozenset(
    f"/auth/{role.value}/{page}" for role in Role for page in ("login", "signup")
)

ONBOARDING_PAGES: dict[str, Role] = {
    EMPLOYER_ONBOARDING_PATH: Role.EMPLOYER,
    TALENT_ONBOARDING_PATH: Role.TALENT,
}

_SKIPPED_PREFIXES = ("/api/", "/docs", "/redoc", "/openapi.json", "/healthz")
_SKIPPED_PATHS = frozenset({"/auth/me", "/auth/logout"})
_GATED_METHODS = frozenset({"GET", "HEAD"})


@dataclass(frozen=True, slots=True)
class RouteDecision:
    location: str
    clear_cookie: bool = False


def _under(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix + "/")


def is_gated(method: str, path: str) -> bool:
    if method.upper() not in _GATED_METHODS:
        return False
    if path in _SKIPPED_PATHS or path.startswith(_SKIPPED_PREFIXES):
        return False
    # static assets
    return "." not in path.rsplit("/", 1)[-1]


def route_decision(path: str, session: Session | None) -> RouteDecision | None:
    """Redirect for `path` given the current session, or None to proceed."""
    if path in PUBLIC_PATHS:
        return None

    if path in AUTH_PAGES:
        if session is not None:
            return RouteDecision(
                home_path_for(session.role, is_onboarded=session.is_onboarded)
            )
        return None

    if session is None:
        return RouteDecision("/", clear_cookie=True)

    home = home_path_for(session.role, is_onboarded=session.is_onboarded)

    onboarding_role = ONBOARDING_PAGES.get(path)
    if onboarding_role is not None:
        if session.role != onboarding_role or session.is_onboarded:
            return RouteDecision(home)
        return None

    if _under(path, "/talent"):
        if session.role is Role.EMPLOYER:
            return RouteDecision(EMPLOYER_DASHBOARD_PATH)
        if session.role is not Role.TALENT:
            return RouteDecision(login_path_for(Role.TALENT))
        if _under(path, TALENT_OPPORTUNITIES_PATH) and not session.is_onboarded:
            return RouteDecision(TALENT_ONBOARDING_PATH)
        return None

    if _under(path, "/employer"):
        if session.role is Role.TALENT:
            return RouteDecision(TALENT_OPPORTUNITIES_PATH)
        if session.role is not Role.EMPLOYER:
            return RouteDecision(login_path_for(Role.EMPLOYER))
        if _under(path, "/employer/dashboard") and not session.is_onboarded:
            return RouteDecision(EMPLOYER_ONBOARDING_PATH)
        return None

    return None


class RoleRouteMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app,
        resolver_provider: Callable[[], SessionResolver] | None = None,
    ) -> None:
        super().__init__(app)
        if resolver_provider is None:
            from ..container import get_session_resolver

            resolver_provider = get_session_resolver
        self._resolver_provider = resolver_provider

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        if not is_gated(request.method, path):
            return await call_next(request)

        try:
            session = self._resolver_provider().resolve(request)
        except Exception as exc:
            logger.error(
                "route gate could not resolve session",
                extra={"error_type": type(exc).__name__},
            )
            return await call_next(request)

        decision = route_decision(path, session)
        if decision is None:
            return await call_next(request)

        clear_cookie = decision.clear_cookie and extract_access_token(request) is not None
        logger.info(
            "route gate redirect",
            extra={"redirect_to": decision.location},
        )
        return redirect_response(decision.location, clear_cookie=clear_cookie)
