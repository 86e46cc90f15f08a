"""
Unit tests for auth routes: sign-up, sign-in per role, logout, me, onboarding.
"""

import pytest

from talentgate.identity.roles import Role

pytestmark = pytest.mark.unit


def _signup(client, role: str, email: str = "new@example.com", **extra):
    payload = {"email": email, "password": "long-enough-pw", **extra}
    return client.post(f"/auth/{role}/signup", json=payload)


class TestSignup:
    def test_signup_signs_in_and_points_to_onboarding(self, client):
        response = _signup(client, "employer", email=" Boss@Example.com ", company_name="Acme")

        assert response.status_code == 201
        body = response.json()
        assert body["token_type"] == "bearer"
        assert body["user"]["email"] == "boss@example.com"
        assert body["user"]["role"] == "employer"
        assert body["user"]["company_name"] == "Acme"
        assert body["user"]["is_onboarded"] is False
        assert body["redirect_to"] == "/employer/onboarding"
        assert "access_token=" in response.headers["set-cookie"]
        assert "httponly" in response.headers["set-cookie"].lower()

    def test_duplicate_email_is_409(self, client):
        _signup(client, "talent")

        response = _signup(client, "employer")

        assert response.status_code == 409
        assert response.json()["detail"] == "An account with this email already exists."

    def test_short_password_is_422(self, client):
        response = client.post(
            "/auth/talent/signup", json={"email": "a@b.com", "password": "short"}
        )
        assert response.status_code == 422

    def test_unknown_role_is_422(self, client):
        response = _signup(client, "admin")
        assert response.status_code == 422


class TestLogin:
    def test_login_through_own_role_page(self, client, make_account):
        talent = make_account(Role.TALENT, onboarded=True)

        response = client.post(
            "/auth/talent/login",
            json={"email": talent.account.email, "password": talent.password},
        )

        assert response.status_code == 200
        assert response.json()["redirect_to"] == "/talent/dashboard"

    def test_login_through_other_role_page_is_403(self, client, make_account):
        employer = make_account(Role.EMPLOYER)

        response = client.post(
            "/auth/talent/login",
            json={"email": employer.account.email, "password": employer.password},
        )

        assert response.status_code == 403
        assert "registered as a employer" in response.json()["detail"]
        assert "set-cookie" not in response.headers

    def test_wrong_password_is_401(self, client, make_account):
        talent = make_account(Role.TALENT)

        response = client.post(
            "/auth/talent/login",
            json={"email": talent.account.email, "password": "nope"},
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid credentials."

    def test_unknown_email_is_401(self, client):
        response = client.post(
            "/auth/employer/login", json={"email": "ghost@example.com", "password": "x"}
        )
        assert response.status_code == 401


class TestSession:
    def test_me_returns_current_session(self, client, make_account):
        talent = make_account(Role.TALENT, email="ada@example.com")

        response = client.get(
            "/auth/me", headers={"Authorization": f"Bearer {talent.token}"}
        )

        assert response.status_code == 200
        assert response.json()["email"] == "ada@example.com"
        assert response.json()["role"] == "talent"

    def test_me_without_session_is_401(self, client):
        response = client.get("/auth/me")

        assert response.status_code == 401
        assert response.headers["content-type"] == "application/problem+json"

    def test_logout_clears_cookie_and_is_idempotent(self, client):
        first = client.post("/auth/logout")
        second = client.post("/auth/logout")

        assert first.json() == {"ok": True}
        assert second.status_code == 200
        assert "Max-Age=0" in first.headers["set-cookie"]

    def test_complete_onboarding_opens_dashboard(self, client, make_account):
        employer = make_account(Role.EMPLOYER)
        client.cookies.set("access_token", employer.token)

        before = client.get("/employer/dashboard/home")
        done = client.post("/onboarding/complete")
        after = client.get("/employer/dashboard/home")

        assert before.status_code == 303
        assert before.headers["location"] == "/employer/onboarding"
        assert done.status_code == 200
        assert done.json()["redirect_to"] == "/employer/dashboard/home"
        assert done.json()["user"]["is_onboarded"] is True
        assert after.status_code == 200

    def test_complete_onboarding_requires_session(self, client):
        assert client.post("/onboarding/complete").status_code == 401
