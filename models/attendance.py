# models/attendance.py

from typing import Optional

from .base import DocumentModel
from .enums import BreakType


class ClockIn(DocumentModel):
    # "general-work" is the dashboard's option for time not tied to a program
    program_id: Optional[str] = None


class BreakStart(DocumentModel):
    type: BreakType = BreakType.regular


class TimesheetDecision(DocumentModel):
    """approved: true / false, or null to reset the timesheet to pending."""

    approved: Optional[bool] = None
