# services/attendance.py

"""
Staff clock-in / clock-out, breaks and timesheet approval.

Office hours are local time (``ATTENDANCE_UTC_OFFSET_HOURS``). A record is
open while ``checkOutTime`` is null; each user has at most one open record.
"""

from collections import defaultdict
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from core.config import settings
from core.document_store import DocumentStore
from core.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from core.logging_config import logger
from core.permissions import ATTENDANCE_EXEMPT, has_role
from core.timestamps import parse_timestamp, to_datetime, utcnow
from models.enums import AttendanceStatus, BreakType


ATTENDANCE = "attendance"

GENERAL_WORK = "general-work"
AUTO_REJECTED_BY = "System (Auto-rejected - Checkout after midnight)"

# Overnight records whose length (minutes) falls strictly inside this span
# are auto-rejected at clock-out
OVERNIGHT_MIN_MINUTES = 60
OVERNIGHT_MAX_MINUTES = 960


def local_zone() -> timezone:
    return timezone(timedelta(hours=settings.ATTENDANCE_UTC_OFFSET_HOURS))


def _local(value) -> Optional[datetime]:
    converted = to_datetime(value)
    return converted.astimezone(local_zone()) if converted else None


def _minutes(start: datetime, end: datetime) -> int:
    return max(0, int((end - start).total_seconds() // 60))


def _display_name(user) -> str:
    return user.name or user.email or "Unknown User"


# ============================================================
# READS
# ============================================================
def open_record(store: DocumentStore, user_id: str) -> Optional[dict]:
    rows = store.list(
        ATTENDANCE,
        [("userId", "==", user_id), ("checkOutTime", "==", None)],
        order_by="checkInTime",
        limit=1,
    )
    return rows[0] if rows else None


def list_records(store: DocumentStore, user_id: Optional[str] = None, limit: Optional[int] = None) -> List[dict]:
    where = [("userId", "==", user_id)] if user_id else []
    return store.list(ATTENDANCE, where, order_by="checkInTime", limit=limit or None)


def get_record(store: DocumentStore, record_id: str) -> dict:
    record = store.get(ATTENDANCE, record_id)
    if record is None:
        raise NotFoundError("Attendance record not found")
    return record


# ============================================================
# CLOCK IN / OUT
# ============================================================
def clock_in(store: DocumentStore, user, program_id: Optional[str] = None, now: Optional[datetime] = None) -> dict:
    """
    Raises ForbiddenError for roles that do not clock in, ValidationError
    outside office hours and ConflictError when already clocked in.
    """
    if has_role(user.role, ATTENDANCE_EXEMPT):
        raise ForbiddenError("Attendance is not tracked for this role")

    now = now or utcnow()
    local_time = now.astimezone(local_zone()).time()
    if local_time < settings.WORKDAY_START or local_time >= settings.WORKDAY_END:
        raise ValidationError(
            f"Clock in is only allowed between {settings.WORKDAY_START:%H:%M} and {settings.WORKDAY_END:%H:%M}"
        )

    if open_record(store, user.id):
        raise ConflictError("Already clocked in")

    stamp = now.isoformat()
    record = {
        "userId": user.id,
        "userName": _display_name(user),
        "userRole": user.role,
        "checkInTime": stamp,
        "checkOutTime": None,
        "status": AttendanceStatus.checked_in.value,
        "currentStatus": "working",
        "breaks": [],
        "totalTime": 0,
        "overtime": 0,
        "createdAt": stamp,
        "updatedAt": stamp,
    }
    if program_id and program_id != GENERAL_WORK:
        record["programId"] = program_id

    created = store.add(ATTENDANCE, record)
    logger.info(f"{user.id} clocked in ({created.get('id')})")
    return created


def clock_out(store: DocumentStore, user, now: Optional[datetime] = None) -> dict:
    """
    Closes the open record: totalTime and overtime (past WORKDAY_END on the
    check-in day) in whole minutes. A checkout on a later local day is
    auto-rejected.
    """
    record = open_record(store, user.id)
    if record is None:
        raise NotFoundError("Not clocked in")

    now = now or utcnow()
    checked_in = to_datetime(record.get("checkInTime")) or now
    local_in = checked_in.astimezone(local_zone())
    end_of_day = datetime.combine(local_in.date(), settings.WORKDAY_END, tzinfo=local_zone())

    total = _minutes(checked_in, now)
    overtime = _minutes(end_of_day, now) if now > end_of_day else 0
    stamp = now.isoformat()

    changes = {
        "checkOutTime": stamp,
        "totalTime": total,
        "overtime": overtime,
        "currentStatus": "in-office",
        "breaks": [
            {**b, "endTime": b.get("endTime") or stamp}
            for b in record.get("breaks") or []
        ],
        "updatedAt": stamp,
    }

    crossed_midnight = now.astimezone(local_zone()).date() != local_in.date()
    if crossed_midnight and OVERNIGHT_MIN_MINUTES < total < OVERNIGHT_MAX_MINUTES:
        changes.update({
            "timesheetApproved": False,
            "timesheetApprovedBy": AUTO_REJECTED_BY,
            "timesheetApprovedAt": stamp,
        })
        logger.info(f"Timesheet {record['id']} auto-rejected: checkout after midnight")

    if not store.compare_and_set(
        ATTENDANCE, record["id"], "status",
        AttendanceStatus.checked_in.value, AttendanceStatus.checked_out.value, changes,
    ):
        raise ConflictError("Already clocked out")

    logger.info(f"{user.id} clocked out after {total} min ({overtime} overtime)")
    return {**record, **changes, "status": AttendanceStatus.checked_out.value}


# ============================================================
# BREAKS
# ============================================================
def start_break(store: DocumentStore, user, break_type: BreakType = BreakType.regular, now: Optional[datetime] = None) -> dict:
    record = open_record(store, user.id)
    if record is None:
        raise NotFoundError("Not clocked in")

    breaks = list(record.get("breaks") or [])
    if any(not b.get("endTime") for b in breaks):
        raise ConflictError("Already on a break")

    break_type = BreakType(break_type)
    stamp = (now or utcnow()).isoformat()
    breaks.append({"type": break_type.value, "startTime": stamp, "endTime": None})
    changes = {
        "breaks": breaks,
        "currentStatus": "lunch-break" if break_type == BreakType.lunch else "on-break",
        "updatedAt": stamp,
    }
    return store.update(ATTENDANCE, record["id"], changes)


def end_break(store: DocumentStore, user, now: Optional[datetime] = None) -> dict:
    record = open_record(store, user.id)
    if record is None:
        raise NotFoundError("Not clocked in")

    breaks = list(record.get("breaks") or [])
    if not any(not b.get("endTime") for b in breaks):
        raise ConflictError("No active break")

    stamp = (now or utcnow()).isoformat()
    changes = {
        "breaks": [{**b, "endTime": b.get("endTime") or stamp} for b in breaks],
        "currentStatus": "working",
        "updatedAt": stamp,
    }
    return store.update(ATTENDANCE, record["id"], changes)


# ============================================================
# TIMESHEET APPROVAL
# ============================================================
def set_timesheet_status(store: DocumentStore, record_id: str, approved: Optional[bool], approver) -> dict:
    """approved=None resets the timesheet to pending."""
    record = get_record(store, record_id)
    if not record.get("checkOutTime"):
        raise ConflictError("Timesheet is still open")

    if approved is None:
        changes = {"timesheetApproved": None, "timesheetApprovedBy": None, "timesheetApprovedAt": None}
    else:
        changes = {
            "timesheetApproved": approved,
            "timesheetApprovedBy": _display_name(approver),
            "timesheetApprovedAt": utcnow().isoformat(),
        }
    changes["updatedAt"] = utcnow().isoformat()
    return store.update(ATTENDANCE, record_id, changes)


# ============================================================
# ANALYTICS
# ============================================================
def is_late(record: dict) -> bool:
    checked_in = _local(record.get("checkInTime"))
    return bool(checked_in) and checked_in.time() > settings.WORKDAY_START


def attendance_summary(records: List[dict]) -> dict:
    """Totals across records plus one row per user."""
    per_user = defaultdict(lambda: {"records": 0, "totalMinutes": 0, "overtimeMinutes": 0, "lateArrivals": 0})
    approved = rejected = pending = late = 0

    for record in records:
        row = per_user[record.get("userId")]
        row["userName"] = record.get("userName")
        row["records"] += 1
        row["totalMinutes"] += int(record.get("totalTime") or 0)
        row["overtimeMinutes"] += int(record.get("overtime") or 0)
        if is_late(record):
            row["lateArrivals"] += 1
            late += 1

        status = record.get("timesheetApproved")
        if status is True:
            approved += 1
        elif status is False:
            rejected += 1
        else:
            pending += 1

    total_minutes = sum(r["totalMinutes"] for r in per_user.values())
    overtime_minutes = sum(r["overtimeMinutes"] for r in per_user.values())
    return {
        "totalRecords": len(records),
        "totalHours": round(total_minutes / 60, 2),
        "overtimeHours": round(overtime_minutes / 60, 2),
        "lateArrivals": late,
        "approved": approved,
        "rejected": rejected,
        "pending": pending,
        "users": [{"userId": uid, **row} for uid, row in sorted(per_user.items(), key=lambda kv: str(kv[0]))],
    }


def records_between(store: DocumentStore, start=None, end=None, user_id: Optional[str] = None) -> List[dict]:
    """Records whose check-in falls in [start, end]; either bound may be open."""
    start_at = to_datetime(parse_timestamp(start, "start")) if start else None
    end_at = to_datetime(parse_timestamp(end, "end")) if end else None
    rows = []
    for record in list_records(store, user_id):
        checked_in = to_datetime(record.get("checkInTime"))
        if checked_in is None:
            continue
        if start_at and checked_in < start_at:
            continue
        if end_at and checked_in > end_at:
            continue
        rows.append(record)
    return rows
