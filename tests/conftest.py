"""
Shared fixtures and configuration for the test suite.

The environment is pointed at a throwaway SQLite database and a fixed signing
secret *before* any taskboard module is imported, because the settings object
and the database engine are built at import time.
"""

import asyncio
import os
import tempfile
from collections.abc import Generator

_TEST_DIR = tempfile.mkdtemp(prefix="taskboard-tests-")
TEST_JWT_SECRET = "test-signing-secret"

os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR}/test.db"
os.environ["JWT_SECRET"] = TEST_JWT_SECRET
os.environ["LOG_DIR"] = os.path.join(_TEST_DIR, "logs")

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from taskboard.db import close_db, reset_db  # noqa: E402


async def _reset_database() -> None:
    await reset_db()
    # Pooled connections must not outlive the event loop that opened them
    await close_db()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    """
    Create a new application instance for the test session.
    """
    from main import create_app

    return create_app()


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """
    Test client on empty tables. Entering the client runs the app lifespan,
    which builds the token service and password hasher.
    """
    asyncio.run(_reset_database())
    with TestClient(app) as c:
        yield c


@pytest.fixture
def lenient_client(app: FastAPI) -> Generator[TestClient, None, None]:
    """
    Like ``client``, but unhandled server errors come back as 500 responses
    instead of being re-raised into the test.
    """
    asyncio.run(_reset_database())
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


@pytest.fixture
def token_service(client: TestClient):
    return client.app.state.token_service


@pytest_asyncio.fixture
async def fresh_db():
    """Empty tables for tests that talk to the store directly."""
    await reset_db()
    yield
    await close_db()


def register_and_login(
    client: TestClient, username: str, password: str = "secret1"
) -> dict[str, str]:
    """Create a user and return the Authorization header for it."""
    response = client.post(
        "/auth/register", json={"username": username, "password": password}
    )
    assert response.status_code == 201, response.text
    response = client.post(
        "/auth/login", json={"username": username, "password": password}
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def alice_headers(client: TestClient) -> dict[str, str]:
    return register_and_login(client, "alice")


@pytest.fixture
def bob_headers(client: TestClient) -> dict[str, str]:
    return register_and_login(client, "bob", "secret2")


@pytest.fixture
def login_as(client: TestClient):
    """Factory fixture: ``login_as("carol")`` returns auth headers for a new user."""

    def _login_as(username: str, password: str = "secret1") -> dict[str, str]:
        return register_and_login(client, username, password)

    return _login_as
