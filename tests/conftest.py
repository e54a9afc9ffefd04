"""
Test configuration and fixtures for the TapRight Waitlist API.

The Supabase store and the Resend mailer are replaced through FastAPI
dependency overrides so no test talks to a real collaborator.
"""

from typing import Generator
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from app.features.waitlist.dependencies.waitlist import get_mailer, get_supabase_store
from app.platform.config import Settings, get_settings

ALERT_EMAIL = "team@tapright.app"

ADA = {
    "fullName": "Ada Lovelace",
    "email": "ada@example.com",
    "spendFocus": "travel",
    "notes": "",
    "optIn": True,
}


def make_settings(**overrides) -> Settings:
    """Fully configured settings unless a test overrides a value."""
    values = {
        "RESEND_API_KEY": "re_test_key",
        "SUPABASE_URL": "https://project.supabase.co/",
        "SUPABASE_SERVICE_ROLE_KEY": "service-role-key",
        "SUPABASE_WAITLIST_TABLE": "waitlist_signups",
        "WAITLIST_ALERT_EMAIL": ALERT_EMAIL,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture(scope="session")
def test_app():
    """Create FastAPI test application."""
    from app.main import app

    return app


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def store():
    fake = MagicMock()
    fake.insert_signup = AsyncMock(return_value=None)
    fake.count_signups = AsyncMock(return_value=0)
    return fake


@pytest.fixture
def mailer():
    fake = MagicMock()
    fake.send = AsyncMock(return_value=None)
    return fake


@pytest.fixture(scope="function")
def client(test_app, settings, store, mailer) -> Generator[TestClient, None, None]:
    """
    TestClient with settings, store and mailer overridden for the duration
    of one test.
    """
    test_app.dependency_overrides[get_settings] = lambda: settings
    test_app.dependency_overrides[get_supabase_store] = lambda: store
    test_app.dependency_overrides[get_mailer] = lambda: mailer

    with TestClient(test_app) as test_client:
        yield test_client

    test_app.dependency_overrides.clear()
