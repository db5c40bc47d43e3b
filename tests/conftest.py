"""
Shared pytest fixtures: sample payloads, fake database and HTTP client
"""

import copy

import httpx
import pytest
import pytest_asyncio

from qa_backend.api.dependencies import get_database
from qa_backend.app import create_app
from qa_backend.config.settings import Settings
from tests.fakes import FakeConnection, FakeDatabase


ALICE_PAYLOAD = {
    "testerInfo": {"name": "Alice", "role": "QA", "date": "2024-01-01"},
    "finalFeedback": {"overallRating": 80, "suggestions": "Ship it"},
    "passengerApp": {
        "features": {"login": {"status": "Pass"}},
    },
    "bugReports": [
        {"priority": "High", "description": "Crash on submit"},
    ],
}

FULL_PAYLOAD = {
    "testerInfo": {"name": "Bob", "role": "Lead QA", "date": "2024-02-15"},
    "finalFeedback": {"overallRating": 65, "suggestions": "Improve onboarding"},
    "passengerApp": {
        "uiuxRating": {"rating": 70},
        "comments": "Smooth booking flow",
        "features": {
            "login": {"status": "Pass"},
            "booking": {"status": "Fail"},
        },
    },
    "driverApp": {
        "uiuxRating": {"rating": 40},
        "comments": "Map lags",
        "features": {"accept_ride": {"status": "Not Tested"}},
    },
    "crossApp": {
        "features": {},
    },
    "bugReports": [
        {"priority": "Critical", "description": "Payment fails", "screenshot": "https://cdn.example.com/1.png"},
        {"priority": "Low", "description": "Typo on settings page"},
    ],
}


@pytest.fixture
def alice_payload():
    return copy.deepcopy(ALICE_PAYLOAD)


@pytest.fixture
def full_payload():
    return copy.deepcopy(FULL_PAYLOAD)


@pytest.fixture
def test_settings():
    return Settings(database_url="postgresql://qa:qa@localhost/qa_test", environment="test")


@pytest.fixture
def fake_connection():
    return FakeConnection()


@pytest.fixture
def fake_database(fake_connection):
    return FakeDatabase(fake_connection)


@pytest.fixture
def app(test_settings, fake_database):
    application = create_app(test_settings)
    application.dependency_overrides[get_database] = lambda: fake_database
    return application


@pytest_asyncio.fixture
async def client(app):
    """HTTP client bound to the app; the lifespan is not run"""
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client
