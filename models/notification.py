# models/notification.py

from pydantic import BaseModel, Field


class NotificationRequest(BaseModel):
    type: str
    data: dict = Field(default_factory=dict)
