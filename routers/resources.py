# routers/resources.py

from fastapi import APIRouter, Depends

from core.document_store import DocumentStore
from core.errors import NotFoundError
from core.permission_helpers import requires_area
from core.timestamps import utcnow_iso
from dependencies.auth import get_current_user, CurrentUser
from dependencies.store import get_store
from models.enums import FeatureArea
from models.resource import ResourceCreate, ResourceUpdate
from services.audit import record_audit


router = APIRouter(
    prefix="/api/resources",
    tags=["Resources"],
    dependencies=[Depends(requires_area(FeatureArea.resources))],
)

RESOURCES = "resources"


# ============================================================
# LIST RESOURCES
# ============================================================
@router.get("", summary="List Resources")
def list_resources(store: DocumentStore = Depends(get_store)):
    return {"resources": store.list(RESOURCES, order_by="name", descending=False)}


# ============================================================
# CREATE RESOURCE
# ============================================================
@router.post("", summary="Add Resource to Inventory")
def create_resource(
    payload: ResourceCreate,
    store: DocumentStore = Depends(get_store),
    current_user: CurrentUser = Depends(get_current_user),
):
    now = utcnow_iso()
    data = {**payload.to_document(), "createdAt": now, "updatedAt": now}

    created = store.add(RESOURCES, data)

    record_audit(
        store,
        "Resource Added",
        current_user,
        f"{created.get('quantity')} {created.get('unit')} of {created.get('name')}",
        created.get("id"),
    )
    return created


# ============================================================
# GET RESOURCE
# ============================================================
@router.get("/{resource_id}", summary="Get Resource")
def get_resource(resource_id: str, store: DocumentStore = Depends(get_store)):
    resource = store.get(RESOURCES, resource_id)
    if resource is None:
        raise NotFoundError("Resource not found")
    return {"success": True, "id": resource_id, "data": resource}


# ============================================================
# UPDATE RESOURCE
# ============================================================
@router.put("/{resource_id}", summary="Update Resource")
def update_resource(
    resource_id: str,
    payload: ResourceUpdate,
    store: DocumentStore = Depends(get_store),
    current_user: CurrentUser = Depends(get_current_user),
):
    changes = payload.to_document(exclude_unset=True)
    changes["updatedAt"] = utcnow_iso()

    updated = store.update(RESOURCES, resource_id, changes)
    if updated is None:
        raise NotFoundError("Resource not found")

    record_audit(store, "Resource Updated", current_user, ", ".join(sorted(changes)), resource_id)
    return {"success": True, "id": resource_id, "message": "Resource updated successfully"}


# ============================================================
# DELETE RESOURCE
# ============================================================
@router.delete("/{resource_id}", summary="Delete Resource")
def delete_resource(
    resource_id: str,
    store: DocumentStore = Depends(get_store),
    current_user: CurrentUser = Depends(get_current_user),
):
    if not store.delete(RESOURCES, resource_id):
        raise NotFoundError("Resource not found")

    record_audit(store, "Resource Deleted", current_user, target_id=resource_id)
    return {"success": True, "id": resource_id, "message": "Resource deleted successfully"}
