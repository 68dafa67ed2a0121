# tests/test_supabase_client.py

"""
The Supabase client is built once per process and reused by every request.
"""

import pytest
from unittest.mock import Mock

from core import supabase_client
from core.config import settings


@pytest.fixture(autouse=True)
def fresh_client_cache():
    supabase_client.reset_supabase_client()
    yield
    supabase_client.reset_supabase_client()


@pytest.fixture
def credentials(monkeypatch):
    monkeypatch.setattr(settings, "SUPABASE_URL", "https://angaza.supabase.co")
    monkeypatch.setattr(settings, "SUPABASE_SERVICE_ROLE_KEY", "service-role-key")


def test_client_is_built_once(monkeypatch, credentials):
    factory = Mock(side_effect=lambda url, key: Mock(name="client"))
    monkeypatch.setattr(supabase_client, "create_client", factory)

    first = supabase_client.get_supabase_client()
    second = supabase_client.get_supabase_client()

    assert first is second
    factory.assert_called_once_with("https://angaza.supabase.co", "service-role-key")


def test_failed_build_is_retried(monkeypatch, credentials):
    client = Mock(name="client")
    factory = Mock(side_effect=[Exception("dns failure"), client])
    monkeypatch.setattr(supabase_client, "create_client", factory)

    assert supabase_client.get_supabase_client() is None
    assert supabase_client.get_supabase_client() is client
    assert factory.call_count == 2


def test_missing_credentials(monkeypatch):
    monkeypatch.setattr(settings, "SUPABASE_URL", None)
    factory = Mock()
    monkeypatch.setattr(supabase_client, "create_client", factory)

    assert supabase_client.get_supabase_client() is None
    factory.assert_not_called()
