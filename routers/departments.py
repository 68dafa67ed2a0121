# routers/departments.py

from fastapi import APIRouter, Depends

from core.document_store import DocumentStore
from core.errors import ConflictError, ValidationError
from core.permission_helpers import requires_area
from core.timestamps import utcnow_iso
from dependencies.auth import get_current_user, CurrentUser
from dependencies.store import get_store
from models.department import DepartmentCreate
from models.enums import FeatureArea
from services.audit import record_audit


router = APIRouter(
    prefix="/api/departments",
    tags=["Departments"],
)

DEPARTMENTS = "departments"


@router.get(
    "",
    summary="List Departments",
    dependencies=[Depends(requires_area(FeatureArea.staff))],
)
def list_departments(store: DocumentStore = Depends(get_store)):
    return {"departments": store.list(DEPARTMENTS, order_by="name", descending=False)}


@router.post(
    "",
    summary="Create Department",
    dependencies=[Depends(requires_area(FeatureArea.admin))],
)
def create_department(
    payload: DepartmentCreate,
    store: DocumentStore = Depends(get_store),
    current_user: CurrentUser = Depends(get_current_user),
):
    name = payload.name.strip()
    if not name:
        raise ValidationError("Department name is required")

    if store.list(DEPARTMENTS, [("name", "==", name)], limit=1):
        raise ConflictError("Department already exists")

    now = utcnow_iso()
    created = store.add(DEPARTMENTS, {
        "name": name,
        "description": (payload.description or "").strip(),
        "createdAt": now,
        "updatedAt": now,
    })

    record_audit(store, "Department Created", current_user, name, created.get("id"))
    return created
