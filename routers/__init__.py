# routers/__init__.py

from fastapi import APIRouter

from .access import router as access_router
from .attendance import router as attendance_router
from .audit_logs import router as audit_logs_router
from .beneficiaries import router as beneficiaries_router
from .categories import router as categories_router
from .departments import router as departments_router
from .distributions import router as distributions_router
from .donations import router as donations_router
from .finance import router as finance_router
from .grants import router as grants_router
from .health import router as health_router
from .inventory import router as inventory_router
from .partners import router as partners_router
from .programs import router as programs_router
from .projects import router as projects_router
from .resources import router as resources_router
from .staff import router as staff_router
from .users import router as users_router


# Master router mounted by main.create_app()
api_router = APIRouter()

# Access + accounts
api_router.include_router(access_router)
api_router.include_router(users_router)
api_router.include_router(staff_router)
api_router.include_router(departments_router)
api_router.include_router(attendance_router)

# Inventory
api_router.include_router(resources_router)
api_router.include_router(distributions_router)
api_router.include_router(categories_router)
api_router.include_router(inventory_router)

# Programme data
api_router.include_router(beneficiaries_router)
api_router.include_router(donations_router)
api_router.include_router(grants_router)
api_router.include_router(projects_router)
api_router.include_router(programs_router)
api_router.include_router(partners_router)

# Finance workflow
api_router.include_router(finance_router)

# Admin
api_router.include_router(audit_logs_router)

# Health (no auth)
api_router.include_router(health_router)

__all__ = ["api_router"]
