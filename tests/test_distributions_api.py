# tests/test_distributions_api.py

import pytest


@pytest.fixture
def maize(store):
    store.seed("resources", {
        "id": "maize",
        "name": "Maize Flour",
        "category": "Food",
        "quantity": 10,
        "unit": "bags",
        "value": 12,
    })
    return store


def distribute(client, quantity=4, resource_id="maize", **extra):
    body = {
        "resourceId": resource_id,
        "quantity": quantity,
        "recipient": "Mathare Youth Group",
        "location": "Nairobi",
    }
    body.update(extra)
    return client.post("/api/distributions", json=body)


def test_record_distribution(client, maize):
    res = distribute(client)
    assert res.status_code == 200
    created = res.json()

    assert created["status"] == "pending"
    assert created["totalValue"] == 48
    assert created["recordedBy"] == "test-user-id"
    assert maize.get("resources", "maize")["quantity"] == 6

    audit = maize.list("auditLogs")
    assert [a["action"] for a in audit] == ["Resource Distributed"]
    assert audit[0]["targetId"] == created["id"]


def test_overdraw_is_409(client, maize):
    res = distribute(client, quantity=11)
    assert res.status_code == 409
    assert "Insufficient stock" in res.json()["error"]
    assert maize.get("resources", "maize")["quantity"] == 10


@pytest.mark.parametrize("quantity", [0, -2])
def test_non_positive_quantity_is_400(client, maize, quantity):
    res = distribute(client, quantity=quantity)
    assert res.status_code == 400
    assert maize.get("resources", "maize")["quantity"] == 10


def test_fractional_quantity_is_400(client, maize):
    assert distribute(client, quantity=1.5).status_code == 400


@pytest.mark.parametrize("quantity", [True, "4"])
def test_quantity_must_be_a_json_integer(client, maize, quantity):
    res = distribute(client, quantity=quantity)
    assert res.status_code == 400
    assert res.json()["error"].startswith("quantity:")
    assert maize.get("resources", "maize")["quantity"] == 10
    assert maize.list("distributions") == []


def test_unparseable_date_is_400_and_keeps_stock(client, maize):
    res = distribute(client, date="not-a-date")
    assert res.status_code == 400
    assert res.json()["error"].startswith("date:")
    assert maize.get("resources", "maize")["quantity"] == 10


def test_date_is_stored_as_utc_iso(client, maize):
    res = distribute(client, date="2024-05-01T13:00:00+03:00")
    assert res.status_code == 200
    assert res.json()["date"] == "2024-05-01T10:00:00+00:00"


def test_unknown_resource_is_404(client, maize):
    res = distribute(client, resource_id="nope")
    assert res.status_code == 404
    assert res.json() == {"error": "Resource 'nope' not found"}


def test_missing_recipient_is_400(client, maize):
    res = client.post("/api/distributions", json={"resourceId": "maize", "quantity": 1, "location": "Nairobi"})
    assert res.status_code == 400
    assert res.json() == {"error": "Missing required fields: recipient"}


def test_insert_failure_is_500_and_restores_stock(client, maize):
    maize.fail_on_add.add("distributions")

    res = distribute(client)
    assert res.status_code == 500
    assert res.json() == {"error": "Database error"}
    assert maize.get("resources", "maize")["quantity"] == 10


def test_list_and_filter(client, maize):
    maize.seed("resources", {"id": "soap", "name": "Soap", "category": "Hygiene", "quantity": 5, "value": 1})
    distribute(client, quantity=1)
    distribute(client, quantity=2, resource_id="soap")

    body = client.get("/api/distributions").json()
    assert body["totalCount"] == 2
    assert {d["category"] for d in body["distributions"]} == {"Food", "Hygiene"}

    body = client.get("/api/distributions", params={"category": "Hygiene"}).json()
    assert body["totalCount"] == 1
    assert body["distributions"][0]["resourceId"] == "soap"


def test_update_status(client, maize):
    created = distribute(client).json()

    res = client.put(f"/api/distributions/{created['id']}", json={"status": "completed"})
    assert res.status_code == 200
    stored = maize.get("distributions", created["id"])
    assert stored["status"] == "completed"
    assert stored["quantity"] == 4


def test_update_rejects_unknown_status(client, maize):
    created = distribute(client).json()
    res = client.put(f"/api/distributions/{created['id']}", json={"status": "lost"})
    assert res.status_code == 400


def test_update_with_nothing_to_change(client, maize):
    created = distribute(client).json()
    res = client.put(f"/api/distributions/{created['id']}", json={})
    assert res.status_code == 400


def test_delete_keeps_stock(client, maize):
    created = distribute(client).json()

    assert client.delete(f"/api/distributions/{created['id']}").status_code == 200
    assert client.get(f"/api/distributions/{created['id']}").status_code == 404
    assert maize.get("resources", "maize")["quantity"] == 6


def test_distribution_stats_endpoint(client, maize):
    distribute(client, quantity=3)
    stats = client.get("/api/inventory/distribution-stats").json()
    assert stats == {
        "totalDistributions": 1,
        "valueDistributed": 36,
        "quantitiesDistributed": 3,
        "pendingDistributions": 1,
    }


def test_recent_distributions_endpoint(client, maize):
    distribute(client, quantity=1)
    recent = client.get("/api/inventory/recent-distributions").json()["distributions"]
    assert len(recent) == 1
