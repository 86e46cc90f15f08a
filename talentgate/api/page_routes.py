"""
===============================================================================
CRC CARD — talentgate/api/page_routes.py (Role-gated pages)
===============================================================================

Responsibilities:
  - Serve the landing page and the sign-in/sign-up pages (public).
  - Serve each role's dashboard and onboarding page behind require_role.
  - Render minimal HTML; user data is always escaped.

Collaborators:
  - identity.session_check.require_role (Session Role Check)
  - identity.roles: page paths

Notes:
  - A denied visitor never reaches a handler here: the dependency raises
    RedirectRequired, which the app answers with a 303.
===============================================================================
"""

from __future__ import annotations

from html import escape

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from ..identity.roles import (
    EMPLOYER_DASHBOARD_PATH,
    EMPLOYER_ONBOARDING_PATH,
    TALENT_DASHBOARD_PATH,
    TALENT_ONBOARDING_PATH,
    Role,
)
from ..identity.session_check import require_role
from ..identity.sessions import Session

router = APIRouter(tags=["pages"], default_response_class=HTMLResponse)

_PAGE = """<!doctype html>
<html lang="en">
<head><meta charset="utf-8"><title>{title}</title></head>
<body>
<main>
{body}
</main>
</body>
</html>
"""


def render_page(title: str, body: str) -> str:
    return _PAGE.format(title=escape(title), body=body)


def welcome_line(session: Session) -> str:
    return f"<h1>Welcome, {escape(session.email)}</h1>"


@router.get("/")
def landing():
    links = "".join(
        f'<li><a href="/auth/{role.value}/login">{role.value.title()} sign in</a></li>'
        for role in Role
    )
    return render_page("Talentgate", f"<h1>Talentgate</h1><ul>{links}</ul>")


@router.get("/auth/{role}/login")
def login_page(role: Role):
    return render_page(
        f"{role.value.title()} sign in",
        f'<h1>{role.value.title()} sign in</h1>'
        f'<p>POST your credentials to /auth/{role.value}/login.</p>',
    )


@router.get("/auth/{role}/signup")
def signup_page(role: Role):
    return render_page(
        f"{role.value.title()} sign up",
        f'<h1>{role.value.title()} sign up</h1>'
        f'<p>POST your details to /auth/{role.value}/signup.</p>',
    )


@router.get(EMPLOYER_DASHBOARD_PATH)
def employer_dashboard(session: Session = Depends(require_role(Role.EMPLOYER))):
    company = (
        f"<p>{escape(session.company_name)}</p>" if session.company_name else ""
    )
    return render_page("Employer dashboard", welcome_line(session) + company)


@router.get(EMPLOYER_ONBOARDING_PATH)
def employer_onboarding(session: Session = Depends(require_role(Role.EMPLOYER))):
    return render_page(
        "Employer onboarding",
        welcome_line(session) + "<p>Tell us about your company.</p>",
    )


@router.get(TALENT_DASHBOARD_PATH)
def talent_dashboard(session: Session = Depends(require_role(Role.TALENT))):
    return render_page("Talent dashboard", welcome_line(session))


@router.get(TALENT_ONBOARDING_PATH)
def talent_onboarding(session: Session = Depends(require_role(Role.TALENT))):
    return render_page(
        "Talent onboarding",
        welcome_line(session) + "<p>Upload your resume to get started.</p>",
    )
