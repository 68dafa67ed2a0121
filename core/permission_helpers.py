from fastapi import Depends, HTTPException

from core.logging_config import logger
from core.permissions import can_access_area, has_role
from dependencies.auth import get_current_user, CurrentUser
from models.enums import FeatureArea


# -----------------------------------------------------
# Area evaluation
# -----------------------------------------------------
def has_area(user: CurrentUser, area) -> bool:
    return can_access_area(user.role, area)


# -----------------------------------------------------
# FastAPI dependency wrapper
# -----------------------------------------------------
def requires_area(area):
    """
    Usage:
        @router.post("", dependencies=[Depends(requires_area(FeatureArea.resources))])
    """
    area = FeatureArea(area)

    def dependency(current_user: CurrentUser = Depends(get_current_user)):
        if not has_area(current_user, area):
            logger.info(f"Denied '{area}' to {current_user.id} (role '{current_user.role}')")
            raise HTTPException(
                status_code=403,
                detail=f"Insufficient permissions: '{area}' access required",
            )
        return current_user

    return dependency


def requires_role(roles):
    """
    Usage:
        @router.post("/{id}/approve", dependencies=[Depends(requires_role(FINANCE_APPROVERS))])
    """
    allowed = sorted(str(r) for r in roles)

    def dependency(current_user: CurrentUser = Depends(get_current_user)):
        if not has_role(current_user.role, allowed):
            logger.info(f"Denied role-gated action to {current_user.id} (role '{current_user.role}')")
            raise HTTPException(
                status_code=403,
                detail=f"Requires one of: {', '.join(allowed)}",
            )
        return current_user

    return dependency
