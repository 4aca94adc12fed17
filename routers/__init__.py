# routers/__init__.py

from fastapi import APIRouter

# Auth & staff
from .auth import router as auth_router
from .users import router as users_router

# Properties & rooms
from .properties import router as properties_router
from .rooms import router as rooms_router

# Guests, bookings, payments
from .guests import router as guests_router
from .bookings import router as bookings_router
from .payments import router as payments_router

# Operations
from .cleaning_tasks import router as cleaning_tasks_router
from .inventory import router as inventory_router
from .maintenance import router as maintenance_router

# Public leads & access control
from .inquiries import router as inquiries_router
from .banned_users import router as banned_users_router
from .master_codes import router as master_codes_router
from .audit_logs import router as audit_logs_router

# Ledgers & insights
from .cash import router as cash_router
from .dashboard import router as dashboard_router
from .reports import router as reports_router

from .health import router as health_router


api_router = APIRouter()

api_router.include_router(auth_router)
api_router.include_router(users_router)

api_router.include_router(properties_router)
api_router.include_router(rooms_router)

api_router.include_router(guests_router)
api_router.include_router(bookings_router)
api_router.include_router(payments_router)

api_router.include_router(cleaning_tasks_router)
api_router.include_router(inventory_router)
api_router.include_router(maintenance_router)

api_router.include_router(inquiries_router)
api_router.include_router(banned_users_router)
api_router.include_router(master_codes_router)
api_router.include_router(audit_logs_router)

api_router.include_router(cash_router)
api_router.include_router(dashboard_router)
api_router.include_router(reports_router)

api_router.include_router(health_router)

__all__ = ["api_router"]
