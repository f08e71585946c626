from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from eepdb.database import MAX_DB_INT

from .models import NotificationStatus, NotificationType


class NotificationRead(BaseModel):
    id: int
    type: NotificationType
    message: str
    status: NotificationStatus
    part_id: Optional[int] = None
    risk_id: Optional[int] = None
    created_at: datetime
    resolved_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class NotificationResolveRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    notification_id: int = Field(..., alias="notificationId", ge=1, le=MAX_DB_INT)


class NotificationResolveResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    notification_id: int = Field(..., alias="notificationId")
