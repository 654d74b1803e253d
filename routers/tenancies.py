# routers/tenancies.py

from fastapi import APIRouter, Depends
from typing import Optional

from dependencies.auth import CurrentUser, requires_role
from models.tenancy import TenancyCreate, TenancyRead
from services import tenancies as tenancy_service
from services.move_in import get_pending_move_in_tenancy


router = APIRouter(
    prefix="/tenancies",
    tags=["Tenancies"],
)

ADMIN_ONLY = requires_role(["ADMIN"])
TENANT_ONLY = requires_role(["TENANT"])


# -------------------------------------------------------------
# Tenant views (declared before /{tenancy_id} routes)
# -------------------------------------------------------------
@router.get("/me", response_model=Optional[TenancyRead])
def my_active_tenancy(current_user: CurrentUser = Depends(TENANT_ONLY)):
    return tenancy_service.get_active_tenancy(current_user)


@router.get("/me/move-in", response_model=Optional[TenancyRead])
def my_move_in_tenancy(current_user: CurrentUser = Depends(TENANT_ONLY)):
    return get_pending_move_in_tenancy(current_user)


# -------------------------------------------------------------
# Admin
# -------------------------------------------------------------
@router.get("")
def list_tenancies(current_user: CurrentUser = Depends(ADMIN_ONLY)):
    return tenancy_service.list_tenancies()


@router.post("", response_model=TenancyRead, status_code=201)
def create_tenancy(payload: TenancyCreate, current_user: CurrentUser = Depends(ADMIN_ONLY)):
    return tenancy_service.create_tenancy(payload)


@router.post("/{tenancy_id}/end", response_model=TenancyRead)
def end_tenancy(tenancy_id: str, current_user: CurrentUser = Depends(ADMIN_ONLY)):
    return tenancy_service.end_tenancy(tenancy_id)
