# routers/audit_logs.py

from typing import Optional
from fastapi import APIRouter, Depends, Query

from core.document_store import DocumentStore
from core.permission_helpers import requires_area
from dependencies.store import get_store
from models.enums import FeatureArea
from services.audit import list_audit_logs


router = APIRouter(
    prefix="/api/audit-logs",
    tags=["Audit Logs"],
    dependencies=[Depends(requires_area(FeatureArea.admin))],
)


@router.get("", summary="List Audit Logs")
def get_audit_logs(
    action: Optional[str] = None,
    limit: int = Query(100, ge=0, le=1000),
    store: DocumentStore = Depends(get_store),
):
    """Newest first; `action` matches case-insensitively (`all` = no filter)."""
    return {"logs": list_audit_logs(store, action=action, limit=limit)}
