# routers/attendance.py

from typing import Optional
from fastapi import APIRouter, Depends, Query

from core.config import settings
from core.document_store import DocumentStore
from core.permission_helpers import requires_area, requires_role
from core.permissions import ATTENDANCE_ANALYSTS, TIMESHEET_APPROVERS, has_role
from dependencies.auth import get_current_user, CurrentUser
from dependencies.store import get_store
from models.attendance import BreakStart, ClockIn, TimesheetDecision
from models.enums import FeatureArea
from services import attendance as attendance_service
from services.audit import record_audit


router = APIRouter(
    prefix="/api/attendance",
    tags=["Attendance"],
    dependencies=[Depends(requires_area(FeatureArea.staff))],
)


# ============================================================
# OWN RECORD
# ============================================================
@router.get("/current", summary="Current Attendance Record")
def current_record(
    store: DocumentStore = Depends(get_store),
    current_user: CurrentUser = Depends(get_current_user),
):
    record = attendance_service.open_record(store, current_user.id)
    return {"clockedIn": record is not None, "record": record}


@router.post("/clock-in", summary="Clock In")
def clock_in(
    payload: Optional[ClockIn] = None,
    store: DocumentStore = Depends(get_store),
    current_user: CurrentUser = Depends(get_current_user),
):
    program_id = payload.program_id if payload else None
    return attendance_service.clock_in(store, current_user, program_id)


@router.post("/clock-out", summary="Clock Out")
def clock_out(
    store: DocumentStore = Depends(get_store),
    current_user: CurrentUser = Depends(get_current_user),
):
    return attendance_service.clock_out(store, current_user)


@router.post("/breaks/start", summary="Start Break")
def start_break(
    payload: Optional[BreakStart] = None,
    store: DocumentStore = Depends(get_store),
    current_user: CurrentUser = Depends(get_current_user),
):
    payload = payload or BreakStart()
    return attendance_service.start_break(store, current_user, payload.type)


@router.post("/breaks/end", summary="End Break")
def end_break(
    store: DocumentStore = Depends(get_store),
    current_user: CurrentUser = Depends(get_current_user),
):
    return attendance_service.end_break(store, current_user)


# ============================================================
# TIMESHEETS
# ============================================================
@router.get(
    "",
    summary="List Timesheets",
    description="""
    Timesheet approvers and attendance analysts see every record
    (optionally one user's); everyone else sees their own.
    """,
)
def list_timesheets(
    user_id: Optional[str] = Query(None, alias="userId"),
    limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=0),
    store: DocumentStore = Depends(get_store),
    current_user: CurrentUser = Depends(get_current_user),
):
    sees_all = has_role(current_user.role, TIMESHEET_APPROVERS | ATTENDANCE_ANALYSTS)
    if not sees_all:
        user_id = current_user.id
    records = attendance_service.list_records(store, user_id, limit=limit)
    return {"records": records, "totalCount": len(records)}


@router.put(
    "/{record_id}/approval",
    summary="Approve / Reject Timesheet",
    dependencies=[Depends(requires_role(TIMESHEET_APPROVERS))],
)
def decide_timesheet(
    record_id: str,
    payload: TimesheetDecision,
    store: DocumentStore = Depends(get_store),
    current_user: CurrentUser = Depends(get_current_user),
):
    updated = attendance_service.set_timesheet_status(store, record_id, payload.approved, current_user)
    label = {True: "Approved", False: "Rejected", None: "Reset"}[payload.approved]
    record_audit(store, f"Timesheet {label}", current_user, updated.get("userName"), record_id)
    return updated


# ============================================================
# ANALYTICS
# ============================================================
@router.get(
    "/analytics",
    summary="Attendance Analytics",
    dependencies=[Depends(requires_role(ATTENDANCE_ANALYSTS))],
)
def analytics(
    start: Optional[str] = None,
    end: Optional[str] = None,
    user_id: Optional[str] = Query(None, alias="userId"),
    store: DocumentStore = Depends(get_store),
):
    records = attendance_service.records_between(store, start, end, user_id)
    return attendance_service.attendance_summary(records)
