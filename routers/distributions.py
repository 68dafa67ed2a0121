# routers/distributions.py

from typing import Optional
from fastapi import APIRouter, Depends, Query

from core.config import settings
from core.document_store import DocumentStore
from core.errors import NotFoundError, ValidationError
from core.permission_helpers import requires_area
from core.timestamps import utcnow_iso
from dependencies.auth import get_current_user, CurrentUser
from dependencies.store import get_ledger, get_store
from models.distribution import DistributionCreate, DistributionUpdate
from models.enums import FeatureArea
from services.audit import record_audit
from services.inventory_ledger import DISTRIBUTIONS, InventoryLedger


router = APIRouter(
    prefix="/api/distributions",
    tags=["Distributions"],
    dependencies=[Depends(requires_area(FeatureArea.resources))],
)


# ============================================================
# LIST DISTRIBUTIONS
# ============================================================
@router.get(
    "",
    summary="List Distributions",
    description="""
    Newest first. Each row carries its resource's `category`
    (`Unknown` when the resource no longer exists).

    **Query Parameters:**
    - `limit`: page size (0 = no limit)
    - `category`: only distributions of resources in this category (`all` = no filter)
    """,
)
def list_distributions(
    limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=0),
    category: Optional[str] = None,
    ledger: InventoryLedger = Depends(get_ledger),
):
    rows, total = ledger.list_distributions(limit=limit, category_filter=category)
    return {"distributions": rows, "totalCount": total}


# ============================================================
# RECORD DISTRIBUTION (decrements stock)
# ============================================================
@router.post("", summary="Record Distribution")
def create_distribution(
    payload: DistributionCreate,
    ledger: InventoryLedger = Depends(get_ledger),
    current_user: CurrentUser = Depends(get_current_user),
):
    created = ledger.record_distribution(
        payload.resource_id,
        payload.quantity,
        payload.recipient,
        payload.location,
        notes=payload.notes,
        date=payload.date,
        recorded_by={"id": current_user.id, "name": current_user.name or current_user.email},
    )

    record_audit(
        ledger.store,
        "Resource Distributed",
        current_user,
        f"{created.get('quantity')} × {created.get('resourceName')} to {created.get('recipient')}",
        created.get("id"),
    )
    return created


# ============================================================
# GET DISTRIBUTION
# ============================================================
@router.get("/{distribution_id}", summary="Get Distribution")
def get_distribution(distribution_id: str, store: DocumentStore = Depends(get_store)):
    distribution = store.get(DISTRIBUTIONS, distribution_id)
    if distribution is None:
        raise NotFoundError("Distribution not found")
    return {"success": True, "id": distribution_id, "exists": True, "data": distribution}


# ============================================================
# UPDATE DISTRIBUTION (status / recipient / notes)
# ============================================================
@router.put("/{distribution_id}", summary="Update Distribution")
def update_distribution(
    distribution_id: str,
    payload: DistributionUpdate,
    store: DocumentStore = Depends(get_store),
    current_user: CurrentUser = Depends(get_current_user),
):
    changes = payload.to_document(exclude_unset=True)
    if not changes:
        raise ValidationError("No updatable fields supplied")
    changes["updatedAt"] = utcnow_iso()

    if store.update(DISTRIBUTIONS, distribution_id, changes) is None:
        raise NotFoundError("Distribution not found")

    record_audit(store, "Distribution Updated", current_user, ", ".join(sorted(changes)), distribution_id)
    return {
        "success": True,
        "message": "Distribution updated successfully",
        "id": distribution_id,
    }


# ============================================================
# DELETE DISTRIBUTION
# ============================================================
@router.delete("/{distribution_id}", summary="Delete Distribution")
def delete_distribution(
    distribution_id: str,
    store: DocumentStore = Depends(get_store),
    current_user: CurrentUser = Depends(get_current_user),
):
    # Stock is not returned: the record is removed from history only.
    if not store.delete(DISTRIBUTIONS, distribution_id):
        raise NotFoundError("Distribution not found")

    record_audit(store, "Distribution Deleted", current_user, target_id=distribution_id)
    return {
        "success": True,
        "id": distribution_id,
        "message": "Distribution deleted successfully",
    }
