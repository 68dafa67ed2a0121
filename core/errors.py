# core/errors.py

# ============================================================
# Typed errors raised by the services
# ============================================================
class AngazaError(Exception):
    """Base class for expected, user-visible failures."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AngazaError):
    """Missing or malformed input."""

    status_code = 400


class ForbiddenError(AngazaError):
    """The principal may see the area but not this record or action."""

    status_code = 403


class NotFoundError(AngazaError):
    status_code = 404


class ConflictError(AngazaError):
    """Duplicate names, categories in use, stock conflicts."""

    status_code = 409


class InsufficientStockError(ConflictError):
    def __init__(self, resource_id: str, requested: int, available: int):
        super().__init__(
            f"Insufficient stock: requested {requested}, only {available} available"
        )
        self.resource_id = resource_id
        self.requested = requested
        self.available = available


class ConcurrentUpdateError(ConflictError):
    """Compare-and-set kept losing to other writers. Safe to retry."""


class StoreError(Exception):
    """
    Infrastructure failure talking to the document store.
    `detail` is for the logs only; clients get a generic message.
    """

    def __init__(self, operation: str, detail: str = ""):
        super().__init__(f"{operation}: {detail}" if detail else operation)
        self.operation = operation
        self.detail = detail


# ============================================================
# Store client error helpers
# ============================================================
def extract_store_error(error: Exception) -> str:
    """
    Safely extract readable details from Supabase Python client errors.
    Handles:
      • PostgREST errors (.message)
      • Auth errors
      • Generic Python exceptions
    """
    if isinstance(error, StoreError):
        return error.detail or error.operation

    message = getattr(error, "message", None)
    if message:
        return str(message)

    if getattr(error, "args", None):
        return str(error.args[0])

    return str(error) or "Unknown store error"

