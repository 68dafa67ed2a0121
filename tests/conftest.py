# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.
"""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import Mock
from typing import Generator

from main import create_app
from dependencies.auth import CurrentUser, get_current_user
from dependencies.store import get_store, get_supabase
from services.inventory_ledger import InventoryLedger
from tests.fakes import FakeDocumentStore


def make_user(role: str = "system admin", user_id: str = "test-user-id") -> CurrentUser:
    return CurrentUser(
        id=user_id,
        email=f"{user_id}@angaza.test",
        role=role,
        name=f"Test {role.title()}",
    )


@pytest.fixture
def store() -> FakeDocumentStore:
    """Fresh in-memory document store."""
    return FakeDocumentStore()


@pytest.fixture
def ledger(store) -> InventoryLedger:
    return InventoryLedger(store, max_attempts=3)


@pytest.fixture
def mock_supabase_client():
    """Create a mock Supabase client."""
    mock_client = Mock()
    mock_table = Mock()
    mock_client.table.return_value = mock_table
    return mock_client


@pytest.fixture(scope="function")
def app(store, mock_supabase_client):
    """Test application wired to the in-memory store."""
    app = create_app()
    app.dependency_overrides[get_supabase] = lambda: mock_supabase_client
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_current_user] = lambda: make_user()
    yield app
    app.dependency_overrides = {}


@pytest.fixture
def login(app):
    """
    Switch the authenticated principal:
        login("board")
    """

    def _login(role: str = "system admin", user_id: str = "test-user-id") -> CurrentUser:
        user = make_user(role, user_id)
        app.dependency_overrides[get_current_user] = lambda: user
        return user

    return _login


@pytest.fixture(scope="function")
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(autouse=True)
def reset_cache():
    """Reset cache before each test."""
    from core.cache import cache_clear
    cache_clear()
    yield
    cache_clear()
