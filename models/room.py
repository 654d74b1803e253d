# models/room.py

from typing import List, Literal, Optional
from pydantic import BaseModel


RoomCapacity = Literal[1, 2]


class RoomCreate(BaseModel):
    label: str
    capacity: RoomCapacity = 1


class RoomUpdate(BaseModel):
    label: Optional[str] = None
    capacity: Optional[RoomCapacity] = None
    active: Optional[bool] = None


class RoomRead(BaseModel):
    id: str
    house_id: str
    label: str
    capacity: int = 1
    active: bool = True


class RoomWithTenancies(RoomRead):
    tenancies: List[dict] = []
