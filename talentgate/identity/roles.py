"""
===============================================================================
CRC CARD — identity/roles.py
===============================================================================

Module:
    Roles and role-based landing paths

Responsibilities:
    - Define the Role enum (employer / talent), compared by value.
    - Map a role + onboarding status to the user's home path.
    - Map a role to its sign-in page.

Collaborators:
    - identity/sessions.py: Session carries a Role.
    - identity/access_policy.py: role predicate and redirect targets.
    - identity/route_guard.py: path rules.

Notes:
    - No role hierarchy: every comparison is strict equality.
===============================================================================
"""

from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User categories that gate dashboards."""

    EMPLOYER = "employer"
    TALENT = "talent"


TALENT_DASHBOARD_PATH = "/talent/dashboard"
TALENT_OPPORTUNITIES_PATH = "/talent/opportunities"
TALENT_ONBOARDING_PATH = "/onboarding/talent"
EMPLOYER_DASHBOARD_PATH = "/employer/dashboard/home"
EMPLOYER_ONBOARDING_PATH = "/employer/onboarding"

_HOME_PATHS: dict[Role, tuple[str, str]] = {
    # role: (onboarded, not onboarded)
    Role.TALENT: (TALENT_DASHBOARD_PATH, TALENT_ONBOARDING_PATH),
    Role.EMPLOYER: (EMPLOYER_DASHBOARD_PATH, EMPLOYER_ONBOARDING_PATH),
}

_LOGIN_PATHS: dict[Role, str] = {
    Role.TALENT: "/auth/talent/login",
    Role.EMPLOYER: "/auth/employer/login",
}


def home_path_for(role: Role | None, *, is_onboarded: bool) -> str:
    """Where a signed-in user belongs; "/" when the role is unknown."""
    if role is None:
        return "/"
    onboarded_path, onboarding_path = _HOME_PATHS[role]
    return onboarded_path if is_onboarded else onboarding_path


def login_path_for(role: Role) -> str:
    return _LOGIN_PATHS[role]
