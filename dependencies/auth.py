from typing import Optional, List
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel
from supabase import Client

from core.config import settings
from core.document_store import DocumentStore
from core.logging_config import logger
from core.permissions import allowed_areas, is_known_role, normalize_role
from dependencies.store import get_store, get_supabase


bearer_scheme = HTTPBearer()


# ============================================================
# Current User Model (principal for one request)
# ============================================================
class CurrentUser(BaseModel):
    id: str
    email: str
    role: str

    name: Optional[str] = None
    department: Optional[str] = None

    @property
    def areas(self) -> List[str]:
        return sorted(area.value for area in allowed_areas(self.role))


# ============================================================
# AUTH DECODING (Supabase: validates JWT, role from users doc)
# ============================================================
def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    client: Client = Depends(get_supabase),
    store: DocumentStore = Depends(get_store),
) -> CurrentUser:

    token = credentials.credentials

    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired authentication token",
        headers={"WWW-Authenticate": "Bearer"},
    )

    # ---------------------------------------------------------
    # Validate JWT via Supabase Auth
    # ---------------------------------------------------------
    try:
        auth_resp = client.auth.get_user(token)
    except Exception as e:
        logger.warning(f"Token validation failed: {e}")
        raise unauthorized

    if not auth_resp or not auth_resp.user:
        raise unauthorized

    auth_user = auth_resp.user
    metadata = auth_user.user_metadata or {}

    if not auth_user.email:
        raise unauthorized

    # ---------------------------------------------------------
    # Role lives on the users document; metadata is the fallback
    # ---------------------------------------------------------
    profile = store.get("users", auth_user.id) or {}
    role = normalize_role(profile.get("role") or metadata.get("role"))

    if not role:
        raise HTTPException(status.HTTP_403_FORBIDDEN, "No role assigned")

    if not is_known_role(role):
        if settings.STRICT_ROLES:
            raise HTTPException(status.HTTP_403_FORBIDDEN, f"Unrecognized role '{role}'")
        logger.warning(f"User {auth_user.id} has unrecognized role '{role}', using default areas")

    return CurrentUser(
        id=auth_user.id,
        email=auth_user.email,
        role=role,
        name=profile.get("name") or metadata.get("name") or metadata.get("full_name"),
        department=profile.get("department"),
    )

