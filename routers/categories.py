# routers/categories.py

from fastapi import APIRouter, Depends

from core.document_store import DocumentStore
from core.permission_helpers import requires_area
from dependencies.auth import get_current_user, CurrentUser
from dependencies.store import get_store
from models.category import CategoryCreate
from models.enums import FeatureArea
from services import categories as category_service
from services.audit import record_audit


router = APIRouter(
    prefix="/api/categories",
    tags=["Categories"],
    dependencies=[Depends(requires_area(FeatureArea.resources))],
)


@router.get("", summary="List Categories")
def list_categories(store: DocumentStore = Depends(get_store)):
    return {"success": True, "categories": category_service.list_categories(store)}


@router.post("", summary="Create Category")
def create_category(
    payload: CategoryCreate,
    store: DocumentStore = Depends(get_store),
    current_user: CurrentUser = Depends(get_current_user),
):
    created = category_service.create_category(store, payload.name)
    record_audit(store, "Category Created", current_user, created.get("name"), created.get("id"))
    return {"success": True, **created}


@router.get("/{category_id}", summary="Get Category")
def get_category(category_id: str, store: DocumentStore = Depends(get_store)):
    category = category_service.get_category(store, category_id)
    return {"success": True, "id": category_id, "exists": True, "data": category}


@router.delete(
    "/{category_id}",
    summary="Delete Category",
    description="Refused with 409 while any resource still uses the category.",
)
def delete_category(
    category_id: str,
    store: DocumentStore = Depends(get_store),
    current_user: CurrentUser = Depends(get_current_user),
):
    deleted = category_service.delete_category(store, category_id)
    record_audit(store, "Category Deleted", current_user, deleted.get("name"), category_id)
    return {
        "success": True,
        "id": category_id,
        "message": "Category deleted successfully",
    }
