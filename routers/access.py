# routers/access.py

from fastapi import APIRouter, Depends, Query

from core.permissions import area_for_route, can_access_route, is_known_role
from dependencies.auth import get_current_user, CurrentUser


router = APIRouter(
    prefix="/api/access",
    tags=["Access"],
)


# -----------------------------------------------------
# GET /api/access/me
# What the navigation should show for the caller
# -----------------------------------------------------
@router.get("/me", summary="Feature areas for the current user")
def my_access(current_user: CurrentUser = Depends(get_current_user)):
    return {
        "id": current_user.id,
        "role": current_user.role,
        "knownRole": is_known_role(current_user.role),
        "areas": current_user.areas,
    }


# -----------------------------------------------------
# GET /api/access/check?route=/resources/123
# Route guard for the dashboard frontend
# -----------------------------------------------------
@router.get("/check", summary="Can the current user open a route?")
def check_route(
    route: str = Query(..., min_length=1),
    current_user: CurrentUser = Depends(get_current_user),
):
    return {
        "route": route,
        "area": area_for_route(route).value,
        "allowed": can_access_route(current_user.role, route),
    }
