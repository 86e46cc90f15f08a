"""
===============================================================================
CRC CARD — identity/session_check.py
===============================================================================

Module:
    Session Role Check (server-side gate for page routes)

Responsibilities:
    - Resolve the session before the page handler runs.
    - Return the Session when the role matches; otherwise raise
      RedirectRequired so no page content is produced.
    - A resolver failure counts as "no session": logged, then redirected.
    - Convert RedirectRequired into a 303 redirect (and drop a stale cookie).
    - require_session(): JSON-API variant answering 401 instead of redirecting.

Collaborators:
    - identity.access_policy.RedirectOnDeny / RedirectTargets
    - identity.sessions.SessionResolver, extract_access_token
    - container.get_session_resolver
===============================================================================
"""

from __future__ import annotations

from typing import Callable

from fastapi import Depends, Request
from fastapi.responses import RedirectResponse
from starlette.requests import HTTPConnection

from ..container import get_session_resolver
from ..crosscutting.error_responses import unauthorized
from ..crosscutting.logger import logger
from .access_policy import RedirectOnDeny, RedirectRequired, RedirectTargets
from .roles import Role
from .sessions import Session, SessionResolver, extract_access_token, get_token_settings


def resolve_session_for_role(
    resolver: SessionResolver,
    conn: HTTPConnection,
    required_role: Role,
    policy: RedirectOnDeny | None = None,
) -> Session:
    """Session for `required_role` or RedirectRequired. Never returns None."""
    gate = policy or RedirectOnDeny(required_role, RedirectTargets.from_settings())
    resolved = True
    try:
        session = resolver.resolve(conn)
    except Exception as exc:
        logger.error(
            "session resolution failed",
            extra={
                "required_role": required_role.value,
                "error_type": type(exc).__name__,
            },
        )
        session = None
        resolved = False

    try:
        return gate.enforce(session)
    except RedirectRequired as redirect:
        # an outage is not a stale cookie
        if resolved and session is None and extract_access_token(conn):
            redirect.clear_cookie = True
        logger.info(
            "page access denied",
            extra={
                "required_role": required_role.value,
                "reason": redirect.reason.value,
                "redirect_to": redirect.location,
            },
        )
        raise


def require_role(role: Role | str) -> Callable:
    """FastAPI dependency: Session with `role`, or a redirect before the handler."""
    required_role = Role(role)

    async def dependency(
        request: Request,
        resolver: SessionResolver = Depends(get_session_resolver),
    ) -> Session:
        session = resolve_session_for_role(resolver, request, required_role)
        request.state.session = session
        return session

    return dependency


def require_session() -> Callable:
    """FastAPI dependency for JSON endpoints: any signed-in session, else 401."""

    async def dependency(
        request: Request,
        resolver: SessionResolver = Depends(get_session_resolver),
    ) -> Session:
        session = resolver.resolve(request)
        if session is None:
            raise unauthorized("Not signed in.")
        request.state.session = session
        return session

    return dependency


def redirect_response(location: str, *, clear_cookie: bool = False) -> RedirectResponse:
    response = RedirectResponse(url=location, status_code=303)
    if clear_cookie:
        settings = get_token_settings()
        response.delete_cookie(
            key=settings.jwt_cookie_name,
            path="/",
            samesite="lax",
            secure=settings.jwt_cookie_secure,
        )
    return response


async def redirect_required_handler(
    request: Request, exc: RedirectRequired
) -> RedirectResponse:
    """Turn the redirect signal into navigation."""
    return redirect_response(exc.location, clear_cookie=exc.clear_cookie)
