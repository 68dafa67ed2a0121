# tests/test_finance.py

"""
Finance requests and liquidations: the workflow service and /api/finance.
"""

import pytest

from core.errors import ConflictError, ForbiddenError, ValidationError
from services.finance import FINANCE_REQUESTS, FinanceWorkflow
from tests.conftest import make_user


RECEIPTS = [
    {"name": "Fuel", "amount": 30000, "date": "2024-05-02", "description": "Site visit"},
    {"name": "Lunch", "amount": 15000, "date": "2024-05-02T12:30:00Z", "fileUrl": "https://files/r2.pdf"},
]


@pytest.fixture
def workflow(store):
    return FinanceWorkflow(store)


@pytest.fixture
def pending_request(store):
    store.seed(FINANCE_REQUESTS, {
        "id": "fr-1",
        "requesterId": "req-1",
        "requesterName": "Chikondi",
        "amount": 45000,
        "currency": "MWK",
        "purpose": "Field trip",
        "status": "pending",
        "createdAt": "2024-05-01T08:00:00+00:00",
    })
    return "fr-1"


def submit_request(client, **overrides):
    body = {"amount": 45000, "purpose": "Field trip to Dedza", "department": "Programs"}
    body.update(overrides)
    return client.post("/api/finance/requests", json=body)


# ============================================================
# Service
# ============================================================
def test_rejection_needs_a_reason(workflow, pending_request):
    with pytest.raises(ValidationError):
        workflow.reject_request(pending_request, make_user("executive director", "ed-1"), "   ")


def test_only_the_requester_cancels(workflow, pending_request):
    with pytest.raises(ForbiddenError):
        workflow.cancel_request(pending_request, make_user("programs lead", "someone-else"))

    cancelled = workflow.cancel_request(pending_request, make_user("programs lead", "req-1"))
    assert cancelled["status"] == "cancelled"


def test_a_decided_request_cannot_be_decided_again(workflow, pending_request):
    approver = make_user("executive director", "ed-1")
    workflow.reject_request(pending_request, approver, "Over budget")

    with pytest.raises(ConflictError, match="rejected"):
        workflow.approve_request(pending_request, approver)


def test_concurrent_decisions_conflict(store, workflow, pending_request, monkeypatch):
    compare_and_set = store.compare_and_set

    def other_approver_first(*args, **kwargs):
        store.collections[FINANCE_REQUESTS][pending_request]["status"] = "rejected"
        return compare_and_set(*args, **kwargs)

    monkeypatch.setattr(store, "compare_and_set", other_approver_first)

    with pytest.raises(ConflictError, match="status changed to 'rejected'"):
        workflow.approve_request(pending_request, make_user("executive director", "ed-1"))
    assert store.get(FINANCE_REQUESTS, pending_request)["status"] == "rejected"


def test_liquidation_needs_an_approved_request(workflow, pending_request):
    from models.finance import LiquidationCreate

    payload = LiquidationCreate.model_validate({"requestId": pending_request, "receipts": RECEIPTS})
    with pytest.raises(ConflictError, match="pending"):
        workflow.submit_liquidation(make_user("programs lead", "req-1"), payload)


# ============================================================
# HTTP
# ============================================================
def test_request_approval_and_liquidation_cycle(client, login, store):
    login("programs lead", "req-1")
    res = submit_request(client)
    assert res.status_code == 200
    request = res.json()
    assert request["status"] == "pending"
    assert request["requesterId"] == "req-1"
    assert request["requesterName"] == "Test Programs Lead"
    assert request["currency"] == "MWK"

    # Requesters cannot approve
    assert client.post(f"/api/finance/requests/{request['id']}/approve").status_code == 403

    login("executive director", "ed-1")
    res = client.post(f"/api/finance/requests/{request['id']}/approve")
    assert res.status_code == 200
    approved = res.json()
    assert approved["status"] == "approved"
    assert approved["approvedBy"] == "Test Executive Director"
    assert approved["approvedAt"]
    assert client.post(f"/api/finance/requests/{request['id']}/approve").status_code == 409

    # An approved request must be liquidated before the next one
    login("programs lead", "req-1")
    res = submit_request(client, purpose="Second trip")
    assert res.status_code == 409
    assert client.get("/api/finance/requests").json()["mustLiquidate"] == [request["id"]]

    res = client.post("/api/finance/liquidations", json={"requestId": request["id"], "receipts": RECEIPTS})
    assert res.status_code == 200
    liquidation = res.json()
    assert liquidation["status"] == "submitted"
    assert liquidation["amount"] == 45000
    assert liquidation["submittedAt"]
    assert liquidation["receipts"][1]["fileUrl"] == "https://files/r2.pdf"
    assert liquidation["receipts"][0]["date"] == "2024-05-02T00:00:00+00:00"
    assert all(r["id"] for r in liquidation["receipts"])

    dup = client.post("/api/finance/liquidations", json={"requestId": request["id"], "receipts": RECEIPTS})
    assert dup.status_code == 409

    # Rejected, then resubmitted with corrected receipts
    login("executive director", "ed-1")
    assert client.post(f"/api/finance/liquidations/{liquidation['id']}/reject", json={"reason": " "}).status_code == 400
    res = client.post(f"/api/finance/liquidations/{liquidation['id']}/reject", json={"reason": "Missing fuel receipt"})
    assert res.json()["status"] == "rejected"
    assert res.json()["rejectionReason"] == "Missing fuel receipt"

    login("programs lead", "req-1")
    res = client.put(f"/api/finance/liquidations/{liquidation['id']}", json={"receipts": RECEIPTS[:1]})
    assert res.status_code == 200
    assert res.json()["status"] == "submitted"
    assert res.json()["amount"] == 30000
    assert res.json()["rejectionReason"] is None

    login("executive director", "ed-1")
    assert client.post(f"/api/finance/liquidations/{liquidation['id']}/review").json()["status"] == "under-review"
    assert client.post(f"/api/finance/liquidations/{liquidation['id']}/approve").json()["status"] == "approved"

    login("programs lead", "req-1")
    assert client.put(
        f"/api/finance/liquidations/{liquidation['id']}", json={"receipts": RECEIPTS}
    ).status_code == 409
    assert submit_request(client, purpose="Second trip").status_code == 200

    actions = {log["action"] for log in store.list("auditLogs")}
    assert {"Finance Request Approved", "Liquidation Rejected", "Liquidation Approved"} <= actions


def test_requesters_only_see_their_own_records(client, login):
    login("programs lead", "req-1")
    request = submit_request(client).json()

    login("programs lead", "req-2")
    assert client.get("/api/finance/requests").json()["requests"] == []
    assert client.get(f"/api/finance/requests/{request['id']}").status_code == 403
    assert client.post(f"/api/finance/requests/{request['id']}/cancel").status_code == 403

    login("finance lead", "fl-1")
    listed = client.get("/api/finance/requests").json()["requests"]
    assert [r["id"] for r in listed] == [request["id"]]
    assert client.get("/api/finance/requests", params={"mine": True}).json()["requests"] == []


def test_cancel_then_filter_by_status(client, login):
    login("programs lead", "req-1")
    request = submit_request(client).json()
    res = client.post(f"/api/finance/requests/{request['id']}/cancel")
    assert res.json()["status"] == "cancelled"
    assert client.post(f"/api/finance/requests/{request['id']}/cancel").status_code == 409

    assert client.get("/api/finance/requests", params={"status": "pending"}).json()["totalCount"] == 0
    assert client.get("/api/finance/requests", params={"status": "cancelled"}).json()["totalCount"] == 1


@pytest.mark.parametrize(
    "body",
    [
        {"purpose": "Fuel"},
        {"amount": 0, "purpose": "Fuel"},
        {"amount": 100, "purpose": "  "},
        {"amount": 100, "purpose": "Fuel", "currency": "KWACHA"},
    ],
)
def test_invalid_requests_are_400(client, login, body):
    login("programs lead", "req-1")
    assert client.post("/api/finance/requests", json=body).status_code == 400


def test_liquidation_needs_receipts(client, login):
    login("programs lead", "req-1")
    res = client.post("/api/finance/liquidations", json={"requestId": "fr-1", "receipts": []})
    assert res.status_code == 400


def test_finance_area_is_required(client, login):
    login("office assistant")
    assert client.get("/api/finance/requests").status_code == 403
    assert submit_request(client).status_code == 403
