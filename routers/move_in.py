# routers/move_in.py

from fastapi import APIRouter, Depends, Request

from dependencies.auth import CurrentUser, requires_role
from models.move_in import MoveInAcknowledgementRead, MoveInComplete
from models.tenancy import TenancyRead
from services import move_in as move_in_service


router = APIRouter(
    prefix="/move-in",
    tags=["Move-In"],
)

TENANT_ONLY = requires_role(["TENANT"])


@router.post("/{tenancy_id}/keys", response_model=TenancyRead)
def confirm_keys(tenancy_id: str, current_user: CurrentUser = Depends(TENANT_ONLY)):
    return move_in_service.confirm_keys_received(current_user, tenancy_id)


@router.post("/{tenancy_id}/sign", response_model=MoveInAcknowledgementRead, status_code=201)
def sign_move_in(
    tenancy_id: str,
    payload: MoveInComplete,
    request: Request,
    current_user: CurrentUser = Depends(TENANT_ONLY),
):
    audit = {
        "ip": request.client.host if request.client else None,
        "user_agent": request.headers.get("user-agent"),
    }
    return move_in_service.complete_move_in(
        current_user, tenancy_id, payload.signature_image, audit=audit
    )
