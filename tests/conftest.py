"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure a hermetic test environment (fake AI providers, no .env)
  - Reset cached settings/singletons between tests
  - Provide account/session factories and a ready TestClient

Notes:
  - Environment variables are set BEFORE importing talentgate, because the
    logger reads settings at import time
"""

import os

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("FAKE_LLM", "1")
os.environ.setdefault("FAKE_EMBEDDINGS", "1")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("LOG_JSON", "0")

from dataclasses import dataclass  # noqa: E402
from typing import Callable  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from talentgate.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None

from talentgate import container  # noqa: E402
from talentgate.identity.accounts import Account, register_account  # noqa: E402
from talentgate.identity.roles import Role  # noqa: E402
from talentgate.identity.sessions import Session, create_access_token  # noqa: E402


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )


@pytest.fixture(autouse=True)
def _reset_singletons():
    """R: Fresh settings, repositories and providers for every test."""
    app_config.get_settings.cache_clear()
    container.clear_container_caches()
    yield
    app_config.get_settings.cache_clear()
    container.clear_container_caches()


# ============================================================================
# Accounts / sessions
# ============================================================================


@dataclass
class SignedInAccount:
    account: Account
    password: str
    token: str

    @property
    def session(self) -> Session:
        return Session.from_account(self.account)


@pytest.fixture
def accounts():
    """R: The account repository the app under test uses."""
    return container.get_account_repository()


@pytest.fixture
def make_account(accounts) -> Callable[..., SignedInAccount]:
    """R: Register an account (optionally onboarded) and mint its token."""

    def create(
        role: Role,
        *,
        email: str | None = None,
        password: str = "correct-horse-battery",
        onboarded: bool = False,
        company_name: str | None = None,
    ) -> SignedInAccount:
        account = register_account(
            accounts,
            email=email or f"{role.value}@example.com",
            password=password,
            role=role,
            company_name=company_name,
        )
        if onboarded:
            account = accounts.mark_onboarded(account.id)
        token, _ = create_access_token(account)
        return SignedInAccount(account=account, password=password, token=token)

    return create


# ============================================================================
# App / client
# ============================================================================


@pytest.fixture
def app():
    from talentgate.api.main import create_app

    return create_app()


@pytest.fixture
def client(app) -> TestClient:
    """R: TestClient that does NOT follow redirects (tests assert on them)."""
    return TestClient(app, follow_redirects=False)
