# tests/test_access_api.py

"""
Role gating across the HTTP surface.
"""

import pytest
from unittest.mock import Mock


@pytest.mark.parametrize(
    "path",
    ["/api/audit-logs", "/api/resources", "/api/donations", "/api/grants", "/api/staff"],
)
def test_system_admin_reaches_everything(client, path):
    assert client.get(path).status_code == 200


def test_board_cannot_read_audit_logs(client, login):
    login("board")
    res = client.get("/api/audit-logs")
    assert res.status_code == 403
    assert "admin" in res.json()["error"]


def test_board_cannot_create_users(client, login):
    login("board")
    res = client.post("/api/users", json={
        "name": "Eve", "email": "eve@example.org", "password": "secret1", "role": "board",
    })
    assert res.status_code == 403


def test_board_reads_inventory(client, login):
    login("board")
    assert client.get("/api/inventory/low-stock").status_code == 200


@pytest.mark.parametrize(
    "role,path,expected",
    [
        ("office assistant", "/api/donations", 403),
        ("office assistant", "/api/beneficiaries", 200),
        ("project officer", "/api/grants", 403),
        ("project officer", "/api/donations", 200),
        ("programs lead", "/api/grants", 403),
        ("finance lead", "/api/grants", 200),
        ("volunteer", "/api/grants", 200),
        ("volunteer", "/api/audit-logs", 403),
    ],
)
def test_area_gates(client, login, role, path, expected):
    login(role)
    assert client.get(path).status_code == expected


def test_access_me(client, login):
    login("office assistant")
    body = client.get("/api/access/me").json()
    assert body["role"] == "office assistant"
    assert body["knownRole"] is True
    assert "donations" not in body["areas"]
    assert "resources" in body["areas"]


def test_access_check(client, login):
    login("board")
    body = client.get("/api/access/check", params={"route": "/admin"}).json()
    assert body == {"route": "/admin", "area": "admin", "allowed": False}

    body = client.get("/api/access/check", params={"route": "/grants/12"}).json()
    assert body["area"] == "grants"
    assert body["allowed"] is True


def test_health_app_needs_no_auth(client):
    res = client.get("/health/app")
    assert res.status_code == 200
    assert res.json()["status"] == "ok"


def test_health_db_reports_each_collection(client, monkeypatch, mock_supabase_client):
    mock_supabase_client.table.return_value.select.return_value.limit.return_value.execute.return_value = Mock(data=[{"id": "x"}])
    monkeypatch.setattr("routers.health.get_supabase_client", lambda: mock_supabase_client)

    body = client.get("/health/db").json()
    assert body["status"] == "ok"
    assert body["collections"]["resources"] == {"status": "ok", "rows_found": 1}


def test_health_db_not_configured(client, monkeypatch):
    monkeypatch.setattr("routers.health.get_supabase_client", lambda: None)
    assert client.get("/health/db").json()["status"] == "not_configured"
