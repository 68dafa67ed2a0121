# tests/test_users_api.py

from unittest.mock import Mock

from core.errors import StoreError


NEW_USER = {
    "name": "Wanjiru",
    "email": "wanjiru@angaza.org",
    "password": "secret123",
    "role": "Project Officer",
    "department": "no-department",
}


def test_create_user(client, store, mock_supabase_client):
    mock_supabase_client.auth.admin.create_user.return_value = Mock(user=Mock(id="new-uid"))

    res = client.post("/api/users", json=NEW_USER)
    assert res.status_code == 200

    doc = store.get("users", "new-uid")
    assert doc["role"] == "project officer"
    assert doc["status"] == "Active"
    assert "department" not in doc

    args = mock_supabase_client.auth.admin.create_user.call_args[0][0]
    assert args["email"] == "wanjiru@angaza.org"
    assert args["email_confirm"] is True

    assert store.list("auditLogs")[0]["action"] == "User Created"


def test_create_user_invalid_role(client):
    res = client.post("/api/users", json={**NEW_USER, "role": "janitor"})
    assert res.status_code == 400


def test_create_user_duplicate_email(client, mock_supabase_client):
    mock_supabase_client.auth.admin.create_user.side_effect = Exception("User already registered")

    res = client.post("/api/users", json=NEW_USER)
    assert res.status_code == 409


def test_failed_profile_write_removes_auth_user(client, store, mock_supabase_client):
    mock_supabase_client.auth.admin.create_user.return_value = Mock(user=Mock(id="new-uid"))

    def broken_set(*args, **kwargs):
        raise StoreError("Failed to write users/new-uid", "boom")

    store.set = broken_set

    res = client.post("/api/users", json=NEW_USER)
    assert res.status_code == 500
    mock_supabase_client.auth.admin.delete_user.assert_called_once_with("new-uid")


def test_delete_user(client, store, mock_supabase_client):
    store.seed("users", {"id": "u9", "name": "Old", "role": "board"})

    res = client.delete("/api/users/u9")
    assert res.status_code == 200
    assert store.get("users", "u9") is None
    mock_supabase_client.auth.admin.delete_user.assert_called_once_with("u9")


def test_cannot_delete_self(client, mock_supabase_client):
    res = client.delete("/api/users/test-user-id")
    assert res.status_code == 400
    mock_supabase_client.auth.admin.delete_user.assert_not_called()


def test_list_users_for_sharing(client, store, login):
    login("office assistant", user_id="me")
    store.seed(
        "users",
        {"id": "me", "name": "Me", "role": "office assistant"},
        {"id": "a", "name": "Root", "role": "System Admin"},
        {"id": "b", "email": "b@angaza.org", "role": "board"},
    )

    users = client.get("/api/users/list").json()["users"]
    assert users == [{"id": "b", "name": "Unknown User", "email": "b@angaza.org", "role": "board"}]
