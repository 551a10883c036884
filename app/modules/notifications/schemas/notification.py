from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict

class NotificationBase(BaseModel):
    type: str
    content: str
    related_id: Optional[str] = None

class NotificationCreate(NotificationBase):
    user_id: str
    actor_id: Optional[str] = None  # ID of the user who triggered the notification

class NotificationUpdate(BaseModel):
    is_read: bool = True

class Notification(NotificationBase):
    """Notification model returned to client"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    actor_id: Optional[str] = None
    is_read: bool
    created_at: datetime
