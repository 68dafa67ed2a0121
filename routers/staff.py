# routers/staff.py

from fastapi import APIRouter, Depends

from core.document_store import DocumentStore
from core.permission_helpers import requires_area
from dependencies.store import get_store
from models.enums import FeatureArea, Role


router = APIRouter(
    prefix="/api/staff",
    tags=["Staff"],
    dependencies=[Depends(requires_area(FeatureArea.staff))],
)


def _staff_entry(doc: dict, *, is_system_user: bool) -> dict:
    fallback_name = "Unknown User" if is_system_user else "Unknown Staff"
    return {
        "id": doc.get("id"),
        "name": doc.get("name") or doc.get("displayName") or fallback_name,
        "email": doc.get("email") or "",
        "role": doc.get("role") or "No Role",
        "department": doc.get("department") or "",
        "position": doc.get("position") or "",
        "status": doc.get("status") or "Active",
        "phoneNumber": doc.get("phoneNumber") or "",
        "address": doc.get("address") or "",
        "dateOfBirth": doc.get("dateOfBirth"),
        "hireDate": doc.get("hireDate"),
        "isSystemUser": is_system_user,
        "createdAt": doc.get("createdAt"),
    }


# ============================================================
# LIST STAFF: dashboard users (minus system admins) + other staff
# ============================================================
@router.get("", summary="List Staff")
def list_staff(store: DocumentStore = Depends(get_store)):
    staff = [
        _staff_entry(user, is_system_user=True)
        for user in store.list("users")
        if user.get("role") and str(user["role"]).lower() != Role.system_admin.value
    ]
    staff.extend(_staff_entry(doc, is_system_user=False) for doc in store.list("staff"))
    return {"staff": staff}
