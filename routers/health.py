# routers/health.py

from fastapi import APIRouter

from core.document_store import SupabaseDocumentStore
from core.supabase_client import get_supabase_client

router = APIRouter(
    prefix="/health",
    tags=["Health"],
)

PING_COLLECTIONS = ["resources", "distributions", "categories", "users"]


# -----------------------------------------------------
# GET /health/db
# Checks store connection + one query per collection
# No auth required
# -----------------------------------------------------
@router.get("/db", summary="Document store health check")
def health_db():
    """
    - Checks if URL + key are configured
    - Attempts to query several collections
    - Returns row-count + error details per collection
    """
    client = get_supabase_client()
    if client is None:
        return {"service": "Supabase", "status": "not_configured"}

    collections = SupabaseDocumentStore(client).ping(PING_COLLECTIONS)
    failed = any(c["status"] != "ok" for c in collections.values())

    return {
        "service": "Supabase",
        "status": "degraded" if failed else "ok",
        "collections": collections,
    }


# -----------------------------------------------------
# GET /health/app
# Simple API health check for uptime monitors
# -----------------------------------------------------
@router.get("/app", summary="App health check")
def health_app():
    return {
        "service": "Angaza Foundation API",
        "status": "ok",
    }
