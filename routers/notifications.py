# routers/notifications.py

from fastapi import APIRouter, Depends

from core.notifications import notify
from dependencies.auth import CurrentUser, requires_role
from models.notification import NotificationRequest


router = APIRouter(
    prefix="/notifications",
    tags=["Notifications"],
)


@router.post("", summary="Trigger a lifecycle notification")
def send_notification(
    payload: NotificationRequest,
    current_user: CurrentUser = Depends(requires_role(["ADMIN", "COORDINATOR"])),
):
    return notify(payload.type, payload.data)
