"""Notification schemas."""
from typing import Any

from pydantic import BaseModel


class NotificationResponse(BaseModel):
    id: str
    user_id: str
    type: str
    message: str
    read: bool
    created_at: str
    updated_at: str

    class Config:
        from_attributes = True


class NotificationUpdate(BaseModel):
    """Request to mark one notification read or unread."""

    notification_id: Any = None
    read: bool = True
