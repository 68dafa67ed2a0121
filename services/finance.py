# services/finance.py

"""
Cash-advance requests and their liquidations.

A request starts ``pending`` and is approved, rejected or cancelled once.
An approved request is liquidated by submitting receipts; the liquidation
goes ``submitted`` → (``under-review``) → ``approved``/``rejected``, and a
rejected liquidation can be resubmitted with new receipts. Every status
change is a compare-and-set on ``status``, so two approvers acting on the
same record cannot both win.
"""

from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

from core.document_store import DocumentStore, new_document_id
from core.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from core.logging_config import logger
from core.permissions import FINANCE_REVIEWERS, has_role
from core.timestamps import utcnow_iso
from models.enums import FinanceRequestStatus as RS, LiquidationStatus as LS


FINANCE_REQUESTS = "financeRequests"
LIQUIDATIONS = "liquidations"

# action → (statuses it may start from, resulting status)
REQUEST_TRANSITIONS: Dict[str, Tuple[FrozenSet[str], str]] = {
    "approve": (frozenset({RS.pending.value}), RS.approved.value),
    "reject": (frozenset({RS.pending.value}), RS.rejected.value),
    "cancel": (frozenset({RS.pending.value}), RS.cancelled.value),
    "complete": (frozenset({RS.approved.value}), RS.completed.value),
}

LIQUIDATION_TRANSITIONS: Dict[str, Tuple[FrozenSet[str], str]] = {
    "review": (frozenset({LS.submitted.value}), LS.under_review.value),
    "approve": (frozenset({LS.submitted.value, LS.under_review.value}), LS.approved.value),
    "reject": (frozenset({LS.submitted.value, LS.under_review.value}), LS.rejected.value),
    "complete": (frozenset({LS.approved.value}), LS.completed.value),
}

# Receipts can be replaced until the liquidation is decided
EDITABLE_LIQUIDATION = frozenset({LS.pending.value, LS.submitted.value, LS.rejected.value})


def _display_name(user) -> str:
    return user.name or user.email or "Unknown User"


def _receipt_documents(receipts: Iterable) -> List[dict]:
    documents = []
    for receipt in receipts:
        doc = {
            "id": receipt.id or new_document_id(),
            "name": receipt.name,
            "amount": receipt.amount,
            "date": receipt.date,
            "description": receipt.description or "",
        }
        if receipt.file_url:
            doc["fileUrl"] = receipt.file_url
        documents.append(doc)
    return documents


class FinanceWorkflow:

    def __init__(self, store: DocumentStore):
        self.store = store

    # ============================================================
    # VISIBILITY
    # ============================================================
    def can_see_all(self, user) -> bool:
        return has_role(user.role, FINANCE_REVIEWERS)

    def _check_visible(self, user, record: dict, label: str) -> dict:
        if record.get("requesterId") != user.id and not self.can_see_all(user):
            raise ForbiddenError(f"You can only view your own {label}s")
        return record

    def _list(self, collection: str, user, status: Optional[str], mine: bool) -> List[dict]:
        where = []
        if mine or not self.can_see_all(user):
            where.append(("requesterId", "==", user.id))
        if status and status != "all":
            where.append(("status", "==", status))
        return self.store.list(collection, where, order_by="createdAt")

    # ============================================================
    # REQUESTS
    # ============================================================
    def list_requests(self, user, status: Optional[str] = None, mine: bool = False) -> List[dict]:
        return self._list(FINANCE_REQUESTS, user, status, mine)

    def get_request(self, request_id: str, user=None) -> dict:
        request = self.store.get(FINANCE_REQUESTS, request_id)
        if request is None:
            raise NotFoundError("Finance request not found")
        if user is not None:
            self._check_visible(user, request, "request")
        return request

    def unliquidated_requests(self, requester_id: str) -> List[dict]:
        """Approved requests with no submitted or approved liquidation."""
        approved = self.store.list(
            FINANCE_REQUESTS,
            [("requesterId", "==", requester_id), ("status", "==", RS.approved.value)],
        )
        if not approved:
            return []
        liquidated = {
            liq.get("requestId")
            for liq in self.store.list(LIQUIDATIONS, [("requesterId", "==", requester_id)])
            if liq.get("status") in (LS.submitted.value, LS.approved.value)
        }
        return [r for r in approved if r.get("id") not in liquidated]

    def create_request(self, user, payload) -> dict:
        """
        Raises ConflictError while the requester still has an approved
        request without a liquidation.
        """
        if self.unliquidated_requests(user.id):
            raise ConflictError(
                "Liquidate your approved requests before making a new request"
            )

        now = utcnow_iso()
        request = {
            "requesterId": user.id,
            "requesterName": _display_name(user),
            "requesterRole": user.role,
            "amount": payload.amount,
            "currency": payload.currency,
            "purpose": payload.purpose,
            "department": payload.department or user.department or "",
            "status": RS.pending.value,
            "createdAt": now,
            "updatedAt": now,
        }
        if payload.project:
            request["project"] = payload.project

        created = self.store.add(FINANCE_REQUESTS, request)
        logger.info(f"Finance request {created.get('id')} submitted by {user.id}: {payload.amount} {payload.currency}")
        return created

    def cancel_request(self, request_id: str, user) -> dict:
        request = self.get_request(request_id)
        if request.get("requesterId") != user.id:
            raise ForbiddenError("Only the requester can cancel a request")
        return self._transition(FINANCE_REQUESTS, request, "cancel", REQUEST_TRANSITIONS)

    def approve_request(self, request_id: str, approver) -> dict:
        request = self.get_request(request_id)
        return self._transition(
            FINANCE_REQUESTS, request, "approve", REQUEST_TRANSITIONS,
            approvedBy=_display_name(approver),
            approvedById=approver.id,
            approvedAt=utcnow_iso(),
        )

    def reject_request(self, request_id: str, approver, reason: str) -> dict:
        reason = (reason or "").strip()
        if not reason:
            raise ValidationError("A rejection reason is required")
        request = self.get_request(request_id)
        return self._transition(
            FINANCE_REQUESTS, request, "reject", REQUEST_TRANSITIONS,
            rejectionReason=reason,
            rejectedBy=_display_name(approver),
        )

    def complete_request(self, request_id: str, approver) -> dict:
        request = self.get_request(request_id)
        return self._transition(FINANCE_REQUESTS, request, "complete", REQUEST_TRANSITIONS)

    # ============================================================
    # LIQUIDATIONS
    # ============================================================
    def list_liquidations(self, user, status: Optional[str] = None, mine: bool = False) -> List[dict]:
        return self._list(LIQUIDATIONS, user, status, mine)

    def get_liquidation(self, liquidation_id: str, user=None) -> dict:
        liquidation = self.store.get(LIQUIDATIONS, liquidation_id)
        if liquidation is None:
            raise NotFoundError("Liquidation not found")
        if user is not None:
            self._check_visible(user, liquidation, "liquidation")
        return liquidation

    def submit_liquidation(self, user, payload) -> dict:
        """
        One liquidation per approved request, submitted by its requester.
        The amount is the sum of the receipts.
        """
        request = self.get_request(payload.request_id)
        if request.get("requesterId") != user.id:
            raise ForbiddenError("Only the requester can liquidate a request")
        if request.get("status") != RS.approved.value:
            raise ConflictError(f"Only approved requests can be liquidated (status is '{request.get('status')}')")
        if self.store.list(LIQUIDATIONS, [("requestId", "==", payload.request_id)], limit=1):
            raise ConflictError("This request already has a liquidation")

        receipts = _receipt_documents(payload.receipts)
        now = utcnow_iso()
        liquidation = {
            "requestId": payload.request_id,
            "requesterId": user.id,
            "requesterName": _display_name(user),
            "requesterRole": user.role,
            "amount": sum(r["amount"] for r in receipts),
            "currency": request.get("currency") or "MWK",
            "purpose": request.get("purpose") or "",
            "receipts": receipts,
            "status": LS.submitted.value,
            "submittedAt": now,
            "createdAt": now,
            "updatedAt": now,
        }
        created = self.store.add(LIQUIDATIONS, liquidation)
        logger.info(f"Liquidation {created.get('id')} submitted for request {payload.request_id}")
        return created

    def update_liquidation(self, liquidation_id: str, user, payload) -> dict:
        liquidation = self.get_liquidation(liquidation_id)
        if liquidation.get("requesterId") != user.id:
            raise ForbiddenError("Only the requester can edit a liquidation")

        current = liquidation.get("status")
        if current not in EDITABLE_LIQUIDATION:
            raise ConflictError(f"A liquidation that is '{current}' can no longer be edited")

        receipts = _receipt_documents(payload.receipts)
        now = utcnow_iso()
        changes = {
            "receipts": receipts,
            "amount": sum(r["amount"] for r in receipts),
            "updatedAt": now,
        }
        new_status = current
        if current == LS.rejected.value:
            new_status = LS.submitted.value
            changes["submittedAt"] = now
            changes["rejectionReason"] = None

        if not self.store.compare_and_set(LIQUIDATIONS, liquidation_id, "status", current, new_status, changes):
            raise ConflictError("Liquidation was changed by someone else; reload and try again")
        return {**liquidation, **changes, "status": new_status}

    def review_liquidation(self, liquidation_id: str, reviewer) -> dict:
        liquidation = self.get_liquidation(liquidation_id)
        return self._transition(
            LIQUIDATIONS, liquidation, "review", LIQUIDATION_TRANSITIONS,
            reviewedBy=_display_name(reviewer),
            reviewedAt=utcnow_iso(),
        )

    def approve_liquidation(self, liquidation_id: str, approver) -> dict:
        liquidation = self.get_liquidation(liquidation_id)
        return self._transition(
            LIQUIDATIONS, liquidation, "approve", LIQUIDATION_TRANSITIONS,
            approvedBy=_display_name(approver),
            approvedById=approver.id,
            approvedAt=utcnow_iso(),
        )

    def reject_liquidation(self, liquidation_id: str, approver, reason: str) -> dict:
        reason = (reason or "").strip()
        if not reason:
            raise ValidationError("A rejection reason is required")
        liquidation = self.get_liquidation(liquidation_id)
        return self._transition(
            LIQUIDATIONS, liquidation, "reject", LIQUIDATION_TRANSITIONS,
            rejectionReason=reason,
            rejectedBy=_display_name(approver),
        )

    def complete_liquidation(self, liquidation_id: str, approver) -> dict:
        liquidation = self.get_liquidation(liquidation_id)
        return self._transition(LIQUIDATIONS, liquidation, "complete", LIQUIDATION_TRANSITIONS)

    # ============================================================
    # STATUS CHANGES
    # ============================================================
    def _transition(self, collection: str, record: dict, action: str, transitions, **stamps) -> dict:
        allowed_from, new_status = transitions[action]
        current = record.get("status")
        if current not in allowed_from:
            raise ConflictError(f"Cannot {action} a record that is '{current}'")

        changes = {**stamps, "updatedAt": utcnow_iso()}
        if not self.store.compare_and_set(collection, record["id"], "status", current, new_status, changes):
            latest = self.store.get(collection, record["id"]) or {}
            raise ConflictError(
                f"Cannot {action}: status changed to '{latest.get('status', 'deleted')}'"
            )

        logger.info(f"{collection}/{record['id']}: {current} → {new_status}")
        return {**record, **changes, "status": new_status}
