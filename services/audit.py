# services/audit.py

from typing import Optional

from core.document_store import DocumentStore
from core.errors import StoreError
from core.logging_config import logger
from core.timestamps import utcnow_iso


AUDIT_LOGS = "auditLogs"


def record_audit(store: DocumentStore, action: str, user=None, details: Optional[str] = None, target_id: Optional[str] = None):
    """
    Append an entry to auditLogs.
    A failed audit write is logged; it never fails the request that caused it.
    """
    entry = {
        "action": action,
        "userId": getattr(user, "id", None),
        "userName": getattr(user, "name", None) or getattr(user, "email", None),
        "details": details or "",
        "targetId": target_id,
        "timestamp": utcnow_iso(),
    }
    try:
        return store.add(AUDIT_LOGS, entry)
    except StoreError as e:
        logger.warning(f"Audit log write failed for '{action}': {e}")
        return None


def list_audit_logs(store: DocumentStore, action: Optional[str] = None, limit: Optional[int] = 100):
    if not action or action == "all":
        return store.list(AUDIT_LOGS, order_by="timestamp", limit=limit or None)

    wanted = action.lower()
    logs = [
        log for log in store.list(AUDIT_LOGS, order_by="timestamp")
        if str(log.get("action", "")).lower() == wanted
    ]
    return logs[:limit] if limit else logs
