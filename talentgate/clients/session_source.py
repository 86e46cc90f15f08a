"""
SessionSource backed by the portal API.

Lets an AuthContext resolve its session with GET /auth/me and end it with
POST /auth/logout.
"""

from __future__ import annotations

from ..identity.sessions import Session
from .portal_client import PortalClient


class PortalSessionSource:
    def __init__(self, client: PortalClient):
        self._client = client

    def current_session(self) -> Session | None:
        return self._client.me()

    def sign_out(self) -> None:
        self._client.logout()
