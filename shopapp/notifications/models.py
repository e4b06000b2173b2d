from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict


class NotificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    message: str
    is_read: bool
    created_at: datetime
    user_id: Optional[int] = None
    admin_id: Optional[int] = None


class NotificationCount(BaseModel):
    count: int
