"""
Name: Session Role Check Tests

Responsibilities:
  - Matching role reaches the handler with the Session
  - Other role / no session redirect BEFORE the handler runs
  - Stale cookie is dropped on the redirect
  - A failing resolver redirects to sign-in and keeps the cookie
  - require_session answers 401 (JSON) instead of redirecting
"""

from unittest.mock import Mock
from uuid import uuid4

import pytest
from fastapi import Depends, FastAPI
from fastapi.responses import HTMLResponse
from fastapi.testclient import TestClient

from talentgate.api.exception_handlers import register_exception_handlers
from talentgate.container import get_session_resolver
from talentgate.identity.roles import Role
from talentgate.identity.session_check import require_role, require_session
from talentgate.identity.sessions import Session

pytestmark = pytest.mark.unit


class StubResolver:
    def __init__(self, session: Session | None):
        self.session = session

    def resolve(self, conn):
        return self.session


class FailingResolver:
    def resolve(self, conn):
        raise RuntimeError("auth backend down")


def _session(role: Role, *, onboarded: bool = True) -> Session:
    return Session(user_id=uuid4(), email="a@b.com", role=role, is_onboarded=onboarded)


@pytest.fixture
def handler():
    return Mock(side_effect=lambda session: f"Welcome, {session.email}")


def _client(session: Session | None, handler: Mock, *, resolver=None) -> TestClient:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/talent/profile", response_class=HTMLResponse)
    def talent_page(session: Session = Depends(require_role(Role.TALENT))):
        return handler(session)

    @app.get("/me")
    def me(session: Session = Depends(require_session())):
        return {"email": session.email}

    app.dependency_overrides[get_session_resolver] = lambda: resolver or StubResolver(
        session
    )
    return TestClient(app, follow_redirects=False)


def test_matching_role_renders_page(handler):
    response = _client(_session(Role.TALENT), handler).get("/talent/profile")

    assert response.status_code == 200
    assert "Welcome, a@b.com" in response.text
    handler.assert_called_once()


def test_other_role_is_redirected_home_without_running_handler(handler):
    response = _client(_session(Role.EMPLOYER), handler).get("/talent/profile")

    assert response.status_code == 303
    assert response.headers["location"] == "/employer/dashboard/home"
    handler.assert_not_called()


def test_missing_session_is_redirected_to_sign_in(handler):
    response = _client(None, handler).get("/talent/profile")

    assert response.status_code == 303
    assert response.headers["location"] == "/"
    assert "set-cookie" not in response.headers
    handler.assert_not_called()


def test_stale_cookie_is_deleted_on_redirect(handler):
    client = _client(None, handler)
    client.cookies.set("access_token", "expired-or-forged")

    response = client.get("/talent/profile")

    assert response.status_code == 303
    assert "access_token=" in response.headers["set-cookie"]
    assert "Max-Age=0" in response.headers["set-cookie"]


def test_resolver_failure_redirects_to_sign_in(handler):
    client = _client(None, handler, resolver=FailingResolver())

    response = client.get("/talent/profile")

    assert response.status_code == 303
    assert response.headers["location"] == "/"
    handler.assert_not_called()


def test_resolver_failure_keeps_the_cookie(handler):
    client = _client(None, handler, resolver=FailingResolver())
    client.cookies.set("access_token", "probably-still-valid")

    response = client.get("/talent/profile")

    assert response.status_code == 303
    assert "set-cookie" not in response.headers


def test_configured_unauthorized_path(handler, monkeypatch):
    monkeypatch.setenv("UNAUTHORIZED_REDIRECT_PATH", "/unauthorized")

    response = _client(_session(Role.EMPLOYER), handler).get("/talent/profile")

    assert response.headers["location"] == "/unauthorized"


def test_require_session_answers_401(handler):
    response = _client(None, handler).get("/me")

    assert response.status_code == 401
    assert response.json()["detail"] == "Not signed in."


def test_require_session_accepts_any_role(handler):
    response = _client(_session(Role.EMPLOYER), handler).get("/me")

    assert response.status_code == 200
    assert response.json() == {"email": "a@b.com"}
