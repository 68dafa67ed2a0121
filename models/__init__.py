# -------------------------
# Enums
# -------------------------
from .enums import (
    Role,
    FeatureArea,
    DistributionStatus,
    ResourceUnit,
    FinanceRequestStatus,
    LiquidationStatus,
    AttendanceStatus,
    BreakType,
)

# -------------------------
# Inventory Models
# -------------------------
from .resource import ResourceCreate, ResourceUpdate
from .distribution import DistributionCreate, DistributionUpdate
from .category import CategoryCreate

# -------------------------
# Programme Data (open schema)
# -------------------------
from .beneficiary import BeneficiaryCreate, BeneficiaryUpdate
from .donation import DonationCreate, DonationUpdate
from .grant import GrantCreate, GrantUpdate
from .project import ProjectCreate, ProjectUpdate
from .program import ProgramCreate, ProgramUpdate
from .partner import PartnerCreate, PartnerUpdate

# -------------------------
# Finance / Attendance
# -------------------------
from .finance import FinanceRequestCreate, LiquidationCreate, LiquidationUpdate, Receipt, RejectionPayload
from .attendance import BreakStart, ClockIn, TimesheetDecision

# -------------------------
# User Models (Supabase Auth + users collection)
# -------------------------
from .user import UserCreate
from .department import DepartmentCreate

__all__ = [
    # enums
    "Role",
    "FeatureArea",
    "DistributionStatus",
    "ResourceUnit",
    "FinanceRequestStatus",
    "LiquidationStatus",
    "AttendanceStatus",
    "BreakType",

    # inventory
    "ResourceCreate",
    "ResourceUpdate",
    "DistributionCreate",
    "DistributionUpdate",
    "CategoryCreate",

    # programme data
    "BeneficiaryCreate",
    "BeneficiaryUpdate",
    "DonationCreate",
    "DonationUpdate",
    "GrantCreate",
    "GrantUpdate",
    "ProjectCreate",
    "ProjectUpdate",
    "ProgramCreate",
    "ProgramUpdate",
    "PartnerCreate",
    "PartnerUpdate",

    # finance / attendance
    "FinanceRequestCreate",
    "LiquidationCreate",
    "LiquidationUpdate",
    "Receipt",
    "RejectionPayload",
    "BreakStart",
    "ClockIn",
    "TimesheetDecision",

    # users
    "UserCreate",
    "DepartmentCreate",
]
