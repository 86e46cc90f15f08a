"""
Name: AccessPolicy Tests

Responsibilities:
  - Role predicate (strict equality, no hierarchy)
  - Decision classification (resolving / authorized / denied + reason)
  - RedirectOnDeny destinations
  - RenderFallbackOnDeny output selection (lazy children)
"""

from unittest.mock import Mock
from uuid import uuid4

import pytest

from talentgate.identity.access_policy import (
    AccessOutcome,
    DenialReason,
    RedirectOnDeny,
    RedirectRequired,
    RedirectTargets,
    RenderFallbackOnDeny,
    has_required_role,
)
from talentgate.identity.auth_state import AuthState
from talentgate.identity.roles import Role
from talentgate.identity.sessions import Session

pytestmark = pytest.mark.unit


def _session(role: Role, *, onboarded: bool = True, email: str = "a@b.com") -> Session:
    return Session(user_id=uuid4(), email=email, role=role, is_onboarded=onboarded)


def _signed_in(role: Role | None) -> AuthState:
    return AuthState(is_authenticated=True, is_loading=False, user_role=role)


@pytest.mark.parametrize("role", list(Role))
def test_has_required_role_accepts_equal_roles_and_no_requirement(role):
    assert has_required_role(role, role) is True
    assert has_required_role(role, None) is True
    assert has_required_role(None, None) is True


def test_has_required_role_rejects_other_role_and_missing_role():
    assert has_required_role(Role.EMPLOYER, Role.TALENT) is False
    assert has_required_role(Role.TALENT, Role.EMPLOYER) is False
    assert has_required_role(None, Role.TALENT) is False


class TestDecide:
    def test_loading_is_resolving_regardless_of_other_fields(self):
        policy = RedirectOnDeny(Role.EMPLOYER)
        for state in (
            AuthState(is_authenticated=True, is_loading=True, user_role=Role.EMPLOYER),
            AuthState(is_authenticated=False, is_loading=True, user_role=None),
        ):
            assert policy.decide(state).outcome is AccessOutcome.RESOLVING

    def test_signed_out_is_denied_unauthenticated(self):
        decision = RedirectOnDeny(Role.EMPLOYER).decide(AuthState.signed_out())
        assert decision.outcome is AccessOutcome.DENIED
        assert decision.reason is DenialReason.UNAUTHENTICATED

    def test_other_role_is_denied_role_mismatch(self):
        decision = RedirectOnDeny(Role.EMPLOYER).decide(_signed_in(Role.TALENT))
        assert decision.outcome is AccessOutcome.DENIED
        assert decision.reason is DenialReason.ROLE_MISMATCH

    def test_matching_role_is_authorized(self):
        decision = RedirectOnDeny(Role.TALENT).decide(_signed_in(Role.TALENT))
        assert decision.allowed
        assert decision.reason is None


class TestRedirectOnDeny:
    def test_enforce_returns_the_session_when_role_matches(self):
        session = _session(Role.TALENT)
        assert RedirectOnDeny(Role.TALENT).enforce(session) is session

    def test_missing_session_redirects_to_sign_in(self):
        policy = RedirectOnDeny(Role.TALENT, RedirectTargets(sign_in_path="/signin"))
        with pytest.raises(RedirectRequired) as exc_info:
            policy.enforce(None)
        assert exc_info.value.location == "/signin"
        assert exc_info.value.reason is DenialReason.UNAUTHENTICATED

    def test_role_mismatch_redirects_to_the_users_own_home(self):
        policy = RedirectOnDeny(Role.TALENT)
        with pytest.raises(RedirectRequired) as exc_info:
            policy.enforce(_session(Role.EMPLOYER, onboarded=True))
        assert exc_info.value.location == "/employer/dashboard/home"
        assert exc_info.value.reason is DenialReason.ROLE_MISMATCH

    def test_role_mismatch_for_user_still_onboarding(self):
        policy = RedirectOnDeny(Role.EMPLOYER)
        with pytest.raises(RedirectRequired) as exc_info:
            policy.enforce(_session(Role.TALENT, onboarded=False))
        assert exc_info.value.location == "/onboarding/talent"

    def test_configured_unauthorized_path_wins_for_mismatch_only(self):
        targets = RedirectTargets(sign_in_path="/", unauthorized_path="/unauthorized")
        policy = RedirectOnDeny(Role.TALENT, targets)

        with pytest.raises(RedirectRequired) as mismatch:
            policy.enforce(_session(Role.EMPLOYER))
        with pytest.raises(RedirectRequired) as missing:
            policy.enforce(None)

        assert mismatch.value.location == "/unauthorized"
        assert missing.value.location == "/"


class TestRenderFallbackOnDeny:
    def test_children_for_authorized_state(self):
        policy = RenderFallbackOnDeny(Role.EMPLOYER, fallback="fallback")
        assert policy.select(_signed_in(Role.EMPLOYER), "children") == "children"

    def test_fallback_for_denied_state(self):
        policy = RenderFallbackOnDeny(Role.EMPLOYER, fallback="fallback")
        assert policy.select(_signed_in(Role.TALENT), "children") == "fallback"
        assert policy.select(AuthState.signed_out(), "children") == "fallback"

    def test_nothing_while_resolving_even_with_fallback(self):
        policy = RenderFallbackOnDeny(Role.EMPLOYER, fallback="fallback")
        assert policy.select(AuthState.resolving(), "children") is None

    def test_nothing_when_denied_without_fallback(self):
        policy = RenderFallbackOnDeny(Role.EMPLOYER)
        assert policy.select(AuthState.signed_out(), "children") is None

    def test_callable_children_are_not_produced_when_denied(self):
        children = Mock(return_value="secret")
        policy = RenderFallbackOnDeny(Role.EMPLOYER)

        assert policy.select(_signed_in(Role.TALENT), children) is None
        children.assert_not_called()

        assert policy.select(_signed_in(Role.EMPLOYER), children) == "secret"
        children.assert_called_once_with()
