from enum import Enum


class BaseStrEnum(str, Enum):
    """
    Base enum that serializes cleanly to a string
    and provides a .list() method for UI dropdowns.
    """

    def __str__(self):
        return str(self.value)

    @classmethod
    def list(cls):
        return [item.value for item in cls]


# -----------------------------------------------------
# ROLE
# -----------------------------------------------------
class Role(BaseStrEnum):
    """Job functions stored on users documents (always lower-case)."""

    executive_director = "executive director"
    finance_lead = "finance lead"
    programs_lead = "programs lead"
    project_officer = "project officer"
    office_assistant = "office assistant"
    system_admin = "system admin"
    board = "board"
    default = "default"


# -----------------------------------------------------
# FEATURE AREA
# -----------------------------------------------------
class FeatureArea(BaseStrEnum):
    """Navigation tabs / feature sections of the dashboard."""

    overview = "overview"
    projects = "projects"
    staff = "staff"
    donations = "donations"
    finance = "finance"
    beneficiaries = "beneficiaries"
    programs = "programs"
    resources = "resources"
    partners = "partners"
    grants = "grants"
    reports = "reports"
    files = "files"
    admin = "admin"


# -----------------------------------------------------
# DISTRIBUTION STATUS
# -----------------------------------------------------
class DistributionStatus(BaseStrEnum):
    pending = "pending"
    completed = "completed"
    cancelled = "cancelled"


# -----------------------------------------------------
# RESOURCE UNIT
# -----------------------------------------------------
class ResourceUnit(BaseStrEnum):
    units = "units"
    sets = "sets"
    kits = "kits"
    packages = "packages"
    boxes = "boxes"
    pieces = "pieces"
    kilograms = "kilograms"
    liters = "liters"
    meters = "meters"


# -----------------------------------------------------
# FINANCE WORKFLOW
# -----------------------------------------------------
class FinanceRequestStatus(BaseStrEnum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"
    completed = "completed"
    cancelled = "cancelled"


class LiquidationStatus(BaseStrEnum):
    pending = "pending"
    submitted = "submitted"
    under_review = "under-review"
    approved = "approved"
    rejected = "rejected"
    completed = "completed"


# -----------------------------------------------------
# ATTENDANCE
# -----------------------------------------------------
class AttendanceStatus(BaseStrEnum):
    checked_in = "checked-in"
    checked_out = "checked-out"


class BreakType(BaseStrEnum):
    regular = "break"
    lunch = "lunch-break"
