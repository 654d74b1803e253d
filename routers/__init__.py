# routers/__init__.py

from fastapi import APIRouter

from .auth import router as auth_router
from .health import router as health_router
from .users import router as users_router
from .houses import router as houses_router
from .rooms import router as rooms_router
from .tenancies import router as tenancies_router
from .move_out import router as move_out_router
from .inspections import router as inspections_router
from .move_in import router as move_in_router
from .uploads import router as uploads_router
from .notifications import router as notifications_router


# Master router, in the order main.create_app registers them
api_router = APIRouter()

for _router in (
    auth_router,
    users_router,
    houses_router,
    rooms_router,
    tenancies_router,
    move_out_router,
    inspections_router,
    move_in_router,
    uploads_router,
    notifications_router,
    health_router,
):
    api_router.include_router(_router)

__all__ = ["api_router"]
