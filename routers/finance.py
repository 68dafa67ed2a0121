# routers/finance.py

from typing import Optional
from fastapi import APIRouter, Depends

from core.permission_helpers import requires_area, requires_role
from core.permissions import FINANCE_APPROVERS
from dependencies.auth import get_current_user, CurrentUser
from dependencies.store import get_finance
from models.enums import FeatureArea
from models.finance import FinanceRequestCreate, LiquidationCreate, LiquidationUpdate, RejectionPayload
from services.audit import record_audit
from services.finance import FinanceWorkflow


router = APIRouter(
    prefix="/api/finance",
    tags=["Finance"],
    dependencies=[Depends(requires_area(FeatureArea.finance))],
)

approvers_only = [Depends(requires_role(FINANCE_APPROVERS))]


# ============================================================
# REQUESTS
# ============================================================
@router.get(
    "/requests",
    summary="List Finance Requests",
    description="""
    Reviewers (executive director, finance lead, board, system admin) see
    every request; everyone else sees their own.

    **Query Parameters:**
    - `status`: only requests in this status (`all` = no filter)
    - `mine`: only the caller's own requests
    """,
)
def list_requests(
    status: Optional[str] = None,
    mine: bool = False,
    finance: FinanceWorkflow = Depends(get_finance),
    current_user: CurrentUser = Depends(get_current_user),
):
    requests = finance.list_requests(current_user, status=status, mine=mine)
    return {
        "requests": requests,
        "totalCount": len(requests),
        "mustLiquidate": [r["id"] for r in finance.unliquidated_requests(current_user.id)],
    }


@router.post("/requests", summary="Submit Finance Request")
def create_request(
    payload: FinanceRequestCreate,
    finance: FinanceWorkflow = Depends(get_finance),
    current_user: CurrentUser = Depends(get_current_user),
):
    created = finance.create_request(current_user, payload)
    record_audit(
        finance.store, "Finance Request Submitted", current_user,
        f"{created.get('amount')} {created.get('currency')}: {created.get('purpose')}",
        created.get("id"),
    )
    return created


@router.get("/requests/{request_id}", summary="Get Finance Request")
def get_request(
    request_id: str,
    finance: FinanceWorkflow = Depends(get_finance),
    current_user: CurrentUser = Depends(get_current_user),
):
    return finance.get_request(request_id, current_user)


@router.post("/requests/{request_id}/cancel", summary="Cancel Finance Request")
def cancel_request(
    request_id: str,
    finance: FinanceWorkflow = Depends(get_finance),
    current_user: CurrentUser = Depends(get_current_user),
):
    updated = finance.cancel_request(request_id, current_user)
    record_audit(finance.store, "Finance Request Cancelled", current_user, target_id=request_id)
    return updated


@router.post("/requests/{request_id}/approve", summary="Approve Finance Request", dependencies=approvers_only)
def approve_request(
    request_id: str,
    finance: FinanceWorkflow = Depends(get_finance),
    current_user: CurrentUser = Depends(get_current_user),
):
    updated = finance.approve_request(request_id, current_user)
    record_audit(finance.store, "Finance Request Approved", current_user, target_id=request_id)
    return updated


@router.post("/requests/{request_id}/reject", summary="Reject Finance Request", dependencies=approvers_only)
def reject_request(
    request_id: str,
    payload: RejectionPayload,
    finance: FinanceWorkflow = Depends(get_finance),
    current_user: CurrentUser = Depends(get_current_user),
):
    updated = finance.reject_request(request_id, current_user, payload.reason)
    record_audit(finance.store, "Finance Request Rejected", current_user, payload.reason, request_id)
    return updated


@router.post("/requests/{request_id}/complete", summary="Complete Finance Request", dependencies=approvers_only)
def complete_request(
    request_id: str,
    finance: FinanceWorkflow = Depends(get_finance),
    current_user: CurrentUser = Depends(get_current_user),
):
    updated = finance.complete_request(request_id, current_user)
    record_audit(finance.store, "Finance Request Completed", current_user, target_id=request_id)
    return updated


# ============================================================
# LIQUIDATIONS
# ============================================================
@router.get("/liquidations", summary="List Liquidations")
def list_liquidations(
    status: Optional[str] = None,
    mine: bool = False,
    finance: FinanceWorkflow = Depends(get_finance),
    current_user: CurrentUser = Depends(get_current_user),
):
    liquidations = finance.list_liquidations(current_user, status=status, mine=mine)
    return {"liquidations": liquidations, "totalCount": len(liquidations)}


@router.post("/liquidations", summary="Submit Liquidation")
def submit_liquidation(
    payload: LiquidationCreate,
    finance: FinanceWorkflow = Depends(get_finance),
    current_user: CurrentUser = Depends(get_current_user),
):
    created = finance.submit_liquidation(current_user, payload)
    record_audit(
        finance.store, "Liquidation Submitted", current_user,
        f"{len(created.get('receipts') or [])} receipts, {created.get('amount')} {created.get('currency')}",
        created.get("id"),
    )
    return created


@router.get("/liquidations/{liquidation_id}", summary="Get Liquidation")
def get_liquidation(
    liquidation_id: str,
    finance: FinanceWorkflow = Depends(get_finance),
    current_user: CurrentUser = Depends(get_current_user),
):
    return finance.get_liquidation(liquidation_id, current_user)


@router.put(
    "/liquidations/{liquidation_id}",
    summary="Edit Liquidation Receipts",
    description="A rejected liquidation goes back to `submitted` when its receipts are replaced.",
)
def update_liquidation(
    liquidation_id: str,
    payload: LiquidationUpdate,
    finance: FinanceWorkflow = Depends(get_finance),
    current_user: CurrentUser = Depends(get_current_user),
):
    updated = finance.update_liquidation(liquidation_id, current_user, payload)
    record_audit(finance.store, "Liquidation Updated", current_user, target_id=liquidation_id)
    return updated


@router.post("/liquidations/{liquidation_id}/review", summary="Start Liquidation Review", dependencies=approvers_only)
def review_liquidation(
    liquidation_id: str,
    finance: FinanceWorkflow = Depends(get_finance),
    current_user: CurrentUser = Depends(get_current_user),
):
    return finance.review_liquidation(liquidation_id, current_user)


@router.post("/liquidations/{liquidation_id}/approve", summary="Approve Liquidation", dependencies=approvers_only)
def approve_liquidation(
    liquidation_id: str,
    finance: FinanceWorkflow = Depends(get_finance),
    current_user: CurrentUser = Depends(get_current_user),
):
    updated = finance.approve_liquidation(liquidation_id, current_user)
    record_audit(finance.store, "Liquidation Approved", current_user, target_id=liquidation_id)
    return updated


@router.post("/liquidations/{liquidation_id}/reject", summary="Reject Liquidation", dependencies=approvers_only)
def reject_liquidation(
    liquidation_id: str,
    payload: RejectionPayload,
    finance: FinanceWorkflow = Depends(get_finance),
    current_user: CurrentUser = Depends(get_current_user),
):
    updated = finance.reject_liquidation(liquidation_id, current_user, payload.reason)
    record_audit(finance.store, "Liquidation Rejected", current_user, payload.reason, liquidation_id)
    return updated


@router.post("/liquidations/{liquidation_id}/complete", summary="Complete Liquidation", dependencies=approvers_only)
def complete_liquidation(
    liquidation_id: str,
    finance: FinanceWorkflow = Depends(get_finance),
    current_user: CurrentUser = Depends(get_current_user),
):
    updated = finance.complete_liquidation(liquidation_id, current_user)
    record_audit(finance.store, "Liquidation Completed", current_user, target_id=liquidation_id)
    return updated
