# routers/users.py

from fastapi import APIRouter, Depends
from supabase import Client

from core.document_store import DocumentStore
from core.errors import ConflictError, StoreError, ValidationError, extract_store_error
from core.logging_config import logger
from core.permission_helpers import requires_area
from core.timestamps import utcnow_iso
from dependencies.auth import get_current_user, CurrentUser
from dependencies.store import get_store, get_supabase
from models.enums import FeatureArea, Role
from models.user import UserCreate
from services.audit import record_audit


router = APIRouter(
    prefix="/api/users",
    tags=["Users"],
)

USERS = "users"


# ============================================================
# CREATE USER (Supabase Auth + users document)
# ============================================================
@router.post(
    "",
    summary="Create dashboard user",
    dependencies=[Depends(requires_area(FeatureArea.admin))],
)
def create_user(
    payload: UserCreate,
    client: Client = Depends(get_supabase),
    store: DocumentStore = Depends(get_store),
    current_user: CurrentUser = Depends(get_current_user),
):
    try:
        result = client.auth.admin.create_user({
            "email": payload.email,
            "password": payload.password,
            "email_confirm": True,
            "user_metadata": {"name": payload.name, "role": payload.role.value},
        })
    except Exception as e:
        detail = extract_store_error(e)
        if "already" in detail.lower():
            raise ConflictError("A user with this email already exists")
        logger.error(f"Failed to create auth user {payload.email}: {detail}")
        raise StoreError("Failed to create auth user", detail) from e

    uid = result.user.id
    user_doc = {
        "uid": uid,
        "name": payload.name,
        "email": payload.email,
        "role": payload.role.value,
        "status": "Active",
        "createdAt": utcnow_iso(),
    }
    if payload.department:
        user_doc["department"] = payload.department

    try:
        saved = store.set(USERS, uid, user_doc)
    except StoreError:
        # Don't leave a login behind with no users document (it would have no role)
        try:
            client.auth.admin.delete_user(uid)
        except Exception as cleanup_error:
            logger.error(f"Orphaned auth user {uid} after failed users write: {cleanup_error}")
        raise

    record_audit(store, "User Created", current_user, f"{payload.email} ({payload.role.value})", uid)
    return {"success": True, "id": uid, "user": saved}


# ============================================================
# LIST USERS (sharing dropdown)
# ============================================================
@router.get(
    "/list",
    summary="Users available for sharing",
    dependencies=[Depends(requires_area(FeatureArea.files))],
)
def list_users(
    store: DocumentStore = Depends(get_store),
    current_user: CurrentUser = Depends(get_current_user),
):
    users = [
        {
            "id": doc.get("id"),
            "name": doc.get("name") or "Unknown User",
            "email": doc.get("email") or "",
            "role": doc.get("role") or "user",
        }
        for doc in store.list(USERS)
        if doc.get("id") != current_user.id
        and str(doc.get("role") or "").lower() != Role.system_admin.value
    ]
    return {"success": True, "users": users}


# ============================================================
# DELETE USER
# ============================================================
@router.delete(
    "/{user_id}",
    summary="Delete dashboard user",
    dependencies=[Depends(requires_area(FeatureArea.admin))],
)
def delete_user(
    user_id: str,
    client: Client = Depends(get_supabase),
    store: DocumentStore = Depends(get_store),
    current_user: CurrentUser = Depends(get_current_user),
):
    if user_id == current_user.id:
        raise ValidationError("You cannot delete your own account")

    try:
        client.auth.admin.delete_user(user_id)
    except Exception as e:
        detail = extract_store_error(e)
        logger.error(f"Failed to delete auth user {user_id}: {detail}")
        raise StoreError("Failed to delete auth user", detail) from e

    store.delete(USERS, user_id)

    record_audit(store, "User Deleted", current_user, target_id=user_id)
    return {
        "success": True,
        "id": user_id,
        "message": "User deleted successfully from both authentication and the users collection",
    }
