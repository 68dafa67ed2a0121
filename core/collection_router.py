# core/collection_router.py

"""
CRUD router for the open-schema collections (beneficiaries, donations,
grants, ...). Each collection declares a Create/Update model pair; fields
the models do not name are stored as sent.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Type

from fastapi import APIRouter, Depends, Query

from core.config import settings
from core.document_store import DocumentStore
from core.errors import NotFoundError, ValidationError
from core.permission_helpers import requires_area
from core.timestamps import utcnow_iso
from core.utils import sanitize
from dependencies.auth import get_current_user, CurrentUser
from dependencies.store import get_store
from models.base import DocumentModel
from models.enums import FeatureArea
from services.audit import record_audit


@dataclass(frozen=True)
class CollectionSpec:
    collection: str
    area: FeatureArea
    label: str
    create_model: Type[DocumentModel]
    update_model: Type[DocumentModel]
    # Date fields set to "now" when a create omits them
    default_now: Tuple[str, ...] = ()
    audit: bool = False
    create_action: Optional[str] = None


def prepare_create(spec: CollectionSpec, payload: DocumentModel) -> dict:
    data = sanitize(payload.to_document())

    now = utcnow_iso()
    for name in spec.default_now:
        if data.get(name) is None:
            data[name] = now

    data["createdAt"] = now
    data["updatedAt"] = now
    return data


def prepare_update(spec: CollectionSpec, payload: DocumentModel) -> dict:
    data = {
        k: v
        for k, v in sanitize(payload.to_document(exclude_unset=True)).items()
        if v is not None
    }
    if not data:
        raise ValidationError("No fields to update")

    data["updatedAt"] = utcnow_iso()
    return data


def build_collection_router(spec: CollectionSpec, *, write_area: Optional[FeatureArea] = None) -> APIRouter:
    """
    GET/POST on the collection, PUT/DELETE on /{doc_id}.
    `write_area` gates the mutating routes when it differs from the read area.
    """
    router = APIRouter(
        prefix=f"/api/{spec.collection}",
        tags=[spec.collection.title()],
        dependencies=[Depends(requires_area(spec.area))],
    )
    write_dependencies = [Depends(requires_area(write_area))] if write_area else []

    @router.get("", summary=f"List {spec.collection.title()}")
    def list_documents(
        limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=0),
        store: DocumentStore = Depends(get_store),
    ):
        rows = store.list(spec.collection, order_by="createdAt", limit=limit or None)
        return {spec.collection: rows, "totalCount": store.count(spec.collection)}

    @router.post("", summary=f"Create {spec.label}", dependencies=write_dependencies)
    def create_document(
        payload: spec.create_model,
        store: DocumentStore = Depends(get_store),
        current_user: CurrentUser = Depends(get_current_user),
    ):
        created = store.add(spec.collection, prepare_create(spec, payload))
        if spec.audit:
            action = spec.create_action or f"{spec.label} Created"
            record_audit(store, action, current_user, created.get("name"), created.get("id"))
        return created

    @router.put("/{doc_id}", summary=f"Update {spec.label}", dependencies=write_dependencies)
    def update_document(
        doc_id: str,
        payload: spec.update_model,
        store: DocumentStore = Depends(get_store),
        current_user: CurrentUser = Depends(get_current_user),
    ):
        updated = store.update(spec.collection, doc_id, prepare_update(spec, payload))
        if updated is None:
            raise NotFoundError(f"{spec.label} not found")
        if spec.audit:
            record_audit(store, f"{spec.label} Updated", current_user, target_id=doc_id)
        return {"success": True, "id": doc_id, **updated}

    @router.delete("/{doc_id}", summary=f"Delete {spec.label}", dependencies=write_dependencies)
    def delete_document(
        doc_id: str,
        store: DocumentStore = Depends(get_store),
        current_user: CurrentUser = Depends(get_current_user),
    ):
        if not store.delete(spec.collection, doc_id):
            raise NotFoundError(f"{spec.label} not found")
        if spec.audit:
            record_audit(store, f"{spec.label} Deleted", current_user, target_id=doc_id)
        return {"success": True, "id": doc_id, "message": f"{spec.label} deleted successfully"}

    return router
