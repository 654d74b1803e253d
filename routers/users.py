# routers/users.py

from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from dependencies.auth import CurrentUser, requires_role
from models.enums import UserRole
from models.user import ProfileRead, UserCreate
from services import users as user_service


router = APIRouter(
    prefix="/users",
    tags=["Users"],
)


@router.get("", response_model=List[ProfileRead])
def list_users(
    role: Optional[UserRole] = Query(None, description="Filter by role"),
    current_user: CurrentUser = Depends(requires_role(["ADMIN"])),
):
    return user_service.list_users(role.value if role else None)


@router.post("", response_model=ProfileRead, status_code=201)
def create_user(payload: UserCreate, current_user: CurrentUser = Depends(requires_role(["ADMIN"]))):
    return user_service.create_user(payload)
