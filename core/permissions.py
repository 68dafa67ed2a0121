# ============================================
# CENTRALIZED ROLE → FEATURE AREA MAP
# ============================================
#
# This table is the single source of truth for who sees what.
# Every role × area pair is a fixed fact; tests/test_access_policy.py
# pins the whole matrix.

from typing import FrozenSet, Optional, Union

from models.enums import FeatureArea as A, Role


ROLE_AREAS = {

    # =====================================================
    # EXECUTIVE DIRECTOR: everything except admin/reports
    # =====================================================
    Role.executive_director: frozenset({
        A.overview, A.projects, A.staff, A.donations, A.finance,
        A.beneficiaries, A.programs, A.resources, A.partners,
        A.grants, A.files,
    }),

    # =====================================================
    # FINANCE LEAD
    # =====================================================
    Role.finance_lead: frozenset({
        A.overview, A.projects, A.staff, A.donations, A.finance,
        A.beneficiaries, A.partners, A.programs, A.resources,
        A.grants, A.files,
    }),

    # =====================================================
    # PROGRAMS LEAD: no grants
    # =====================================================
    Role.programs_lead: frozenset({
        A.overview, A.projects, A.staff, A.files, A.donations,
        A.finance, A.beneficiaries, A.partners, A.programs,
        A.resources,
    }),

    # =====================================================
    # PROJECT OFFICER: no finance, no grants
    # =====================================================
    Role.project_officer: frozenset({
        A.overview, A.projects, A.staff, A.files, A.donations,
        A.beneficiaries, A.partners, A.programs, A.resources,
    }),

    # =====================================================
    # OFFICE ASSISTANT: no money views
    # =====================================================
    Role.office_assistant: frozenset({
        A.overview, A.projects, A.staff, A.beneficiaries,
        A.programs, A.resources, A.partners, A.files,
    }),

    # =====================================================
    # SYSTEM ADMIN: the only role with admin
    # =====================================================
    Role.system_admin: frozenset({
        A.overview, A.projects, A.staff, A.donations, A.finance,
        A.beneficiaries, A.programs, A.resources, A.partners,
        A.grants, A.reports, A.files, A.admin,
    }),

    # =====================================================
    # BOARD MEMBER
    # =====================================================
    Role.board: frozenset({
        A.overview, A.projects, A.staff, A.donations, A.finance,
        A.beneficiaries, A.programs, A.resources, A.partners,
        A.grants, A.reports, A.files,
    }),

    # =====================================================
    # FALLBACK: any role not listed above
    # =====================================================
    Role.default: frozenset({
        A.overview, A.projects, A.staff, A.donations, A.finance,
        A.beneficiaries, A.programs, A.resources, A.partners,
        A.grants, A.reports, A.files,
    }),
}


# ============================================
# ROLES FOR ACTIONS FINER THAN AN AREA
# ============================================
# Approve or reject finance requests and liquidations
FINANCE_APPROVERS = frozenset({Role.executive_director, Role.system_admin})

# See every requester's finance records, not just their own
FINANCE_REVIEWERS = FINANCE_APPROVERS | {Role.finance_lead, Role.board}

# Approve or reject staff timesheets
TIMESHEET_APPROVERS = frozenset({Role.executive_director, Role.finance_lead, Role.system_admin})

# Attendance analytics across all staff
ATTENDANCE_ANALYSTS = frozenset({Role.executive_director, Role.board, Role.system_admin})

# Roles that do not clock in
ATTENDANCE_EXEMPT = frozenset({Role.system_admin, Role.board})


# ============================================
# ROUTE → AREA MAP
# ============================================
ROUTE_AREAS = {
    "/": A.overview,
    "/executive-director": A.overview,
    "/finance-lead": A.overview,
    "/programs-lead": A.overview,
    "/project-officer": A.overview,
    "/office-assistant": A.overview,
    "/board": A.overview,
    "/projects": A.projects,
    "/staff": A.staff,
    "/donations": A.donations,
    "/finance": A.finance,
    "/beneficiaries": A.beneficiaries,
    "/programs": A.programs,
    "/resources": A.resources,
    "/partners": A.partners,
    "/grants": A.grants,
    "/reports": A.reports,
    "/files": A.files,
    "/system-admin": A.admin,
    "/admin": A.admin,
}

# Reachable by every authenticated principal
SPECIAL_ROUTES = {
    "/dashboard": A.overview,
    "/unauthorized": A.overview,
    "/login": A.overview,
}

_ROLES_BY_VALUE = {role.value: role for role in Role}


def normalize_role(role: Optional[Union[str, Role]]) -> str:
    if role is None:
        return ""
    return str(role).strip().lower()


def is_known_role(role: Optional[Union[str, Role]]) -> bool:
    """True when the role has its own entry (the fallback entry does not count)."""
    normalized = normalize_role(role)
    return normalized in _ROLES_BY_VALUE and normalized != Role.default.value


def allowed_areas(role: Optional[Union[str, Role]]) -> FrozenSet[A]:
    """Feature areas for a role. Unknown or empty roles get the default set."""
    key = _ROLES_BY_VALUE.get(normalize_role(role), Role.default)
    return ROLE_AREAS[key]


def can_access_area(role: Optional[Union[str, Role]], area: Union[str, A]) -> bool:
    try:
        area = A(str(area).strip().lower())
    except ValueError:
        return False
    return area in allowed_areas(role)


def _clean_route(route: str) -> str:
    path = (route or "/").split("?", 1)[0].split("#", 1)[0].strip() or "/"
    if not path.startswith("/"):
        path = f"/{path}"
    if len(path) > 1:
        path = path.rstrip("/") or "/"
    return path


def area_for_route(route: str) -> A:
    """
    Resolve a route path to the feature area guarding it:
    special routes, then exact matches, then the first path segment,
    then overview.
    """
    path = _clean_route(route)

    if path in SPECIAL_ROUTES:
        return SPECIAL_ROUTES[path]

    if path in ROUTE_AREAS:
        return ROUTE_AREAS[path]

    prefix = "/" + path.split("/")[1]
    if prefix in ROUTE_AREAS:
        return ROUTE_AREAS[prefix]

    return A.overview


def can_access_route(role: Optional[Union[str, Role]], route: str) -> bool:
    return area_for_route(route) in allowed_areas(role)


def has_role(role: Optional[Union[str, Role]], roles) -> bool:
    return normalize_role(role) in {str(r) for r in roles}
