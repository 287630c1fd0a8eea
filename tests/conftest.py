"""
Global pytest configuration and fixtures for the Impact Tracker API test suite.
"""

import os

# Settings are read at import time
os.environ["JWT_SECRET"] = "test-secret-key-for-testing-only-32-chars"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"

from typing import Callable, Dict, Generator  # noqa: E402

import jwt  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from impactapi.main import app  # noqa: E402
from impactapi.shared.access.dependencies import get_access_repository  # noqa: E402

# Import fixtures from fixture modules
from tests.fixtures.access_fixtures import *  # noqa: F403, F401, E402
from tests.fixtures.database_fixtures import *  # noqa: F403, F401, E402


@pytest.fixture
def test_jwt_secret() -> str:
    """JWT secret for generating test tokens."""
    return "test-secret-key-for-testing-only-32-chars"


@pytest.fixture
def make_token(test_jwt_secret: str) -> Callable[[str], str]:
    """Factory for session tokens whose subject is the given account URI."""

    def _make_token(principal_uri: str) -> str:
        return jwt.encode(
            {"sub": principal_uri, "aud": "authenticated"},
            test_jwt_secret,
            algorithm="HS256",
        )

    return _make_token


@pytest.fixture
def auth_headers(make_token: Callable[[str], str]) -> Callable[[str], Dict[str, str]]:
    """Factory for Authorization headers for the given account URI."""

    def _auth_headers(principal_uri: str) -> Dict[str, str]:
        return {"Authorization": f"Bearer {make_token(principal_uri)}"}

    return _auth_headers


@pytest.fixture
def client(access_repository) -> Generator[TestClient, None, None]:
    """TestClient whose access checks run against the in-memory repository."""
    app.dependency_overrides[get_access_repository] = lambda: access_repository
    yield TestClient(app)
    app.dependency_overrides.clear()
