# core/timestamps.py

"""
Timestamp normalization for documents leaving the store.

Records written by the old dashboard hold timestamps in several shapes:
native datetimes, ISO strings (often with a trailing ``Z``), epoch numbers,
and serialized Firestore timestamps (``{"seconds", "nanoseconds"}`` or
``{"_seconds", "_nanoseconds"}``). Everything is converted to an ISO-8601
UTC string here, once, at the store boundary.
"""

from datetime import date, datetime, timezone
from typing import Any, Iterable, Optional

from core.errors import ValidationError


TIMESTAMP_FIELDS = (
    "createdAt",
    "updatedAt",
    "timestamp",
    "date",
    "startDate",
    "endDate",
    "dateOfBirth",
    "hireDate",
    "submittedAt",
    "approvedAt",
    "reviewedAt",
    "checkInTime",
    "checkOutTime",
    "timesheetApprovedAt",
)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def utcnow_iso() -> str:
    return utcnow().isoformat()


def _seconds_map_to_datetime(value: dict) -> Optional[datetime]:
    seconds = value.get("seconds", value.get("_seconds"))
    if seconds is None:
        return None
    nanos = value.get("nanoseconds", value.get("_nanoseconds", 0)) or 0
    return datetime.fromtimestamp(seconds + nanos / 1e9, tz=timezone.utc)


def to_datetime(value: Any) -> Optional[datetime]:
    """
    Convert any supported timestamp shape to an aware UTC datetime.
    Returns None when the value is empty or not a timestamp.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)

    if isinstance(value, (int, float)):
        # Millisecond epochs (JS Date.getTime) are far larger than second epochs
        seconds = value / 1000 if abs(value) > 1e11 else value
        return datetime.fromtimestamp(seconds, tz=timezone.utc)

    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return None
        if stripped.endswith("Z"):
            stripped = stripped[:-1] + "+00:00"
        try:
            return to_datetime(datetime.fromisoformat(stripped))
        except ValueError:
            return None

    if isinstance(value, dict):
        return _seconds_map_to_datetime(value)

    # Store-native timestamp objects
    for method in ("to_datetime", "ToDatetime", "toDate"):
        converter = getattr(value, method, None)
        if callable(converter):
            return to_datetime(converter())

    return None


def normalize_timestamp(value: Any) -> Any:
    """
    ISO-8601 string for anything that looks like a timestamp.
    Values that cannot be parsed are returned unchanged.
    """
    converted = to_datetime(value)
    if converted is None:
        return value
    return converted.isoformat()


def parse_timestamp(value: Any, field: str = "date") -> str:
    """
    Write-side conversion: ISO-8601 UTC string, or ValidationError when the
    value is not a timestamp. Reads use normalize_timestamp instead.
    """
    converted = to_datetime(value)
    if converted is None:
        raise ValidationError(f"'{field}' must be a date or an ISO-8601 timestamp")
    return converted.isoformat()


def normalize_document(doc: Optional[dict], fields: Iterable[str] = TIMESTAMP_FIELDS) -> Optional[dict]:
    if doc is None:
        return None
    normalized = dict(doc)
    for field in fields:
        if field in normalized and normalized[field] is not None:
            normalized[field] = normalize_timestamp(normalized[field])
    return normalized


def serialize_for_store(data: dict) -> dict:
    """Datetimes → ISO strings so the payload is JSON-safe for the client."""
    clean = {}
    for key, value in data.items():
        if isinstance(value, (datetime, date)):
            clean[key] = normalize_timestamp(value)
        else:
            clean[key] = value
    return clean
