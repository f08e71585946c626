from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from eepdb.database import MAX_DB_INT

from . import models


class PartOrderCreate(BaseModel):
    part_id: int = Field(..., ge=1, le=MAX_DB_INT)
    # The lower bound is checked in the service so it surfaces as a 400.
    quantity: int = Field(..., le=MAX_DB_INT)
    ordered_by: Optional[int] = Field(None, ge=1, le=MAX_DB_INT)
    priority: models.OrderPriorityEnum = models.OrderPriorityEnum.MEDIUM


class PartOrderRead(BaseModel):
    id: int
    part_id: int
    quantity: int
    ordered_by: int
    priority: models.OrderPriorityEnum
    status: models.OrderStatusEnum
    created_at: datetime
    delivered_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    part_name: Optional[str] = None
    user_name: Optional[str] = None
    user_email: Optional[str] = None

    class Config:
        from_attributes = True


class OrderActionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    order_id: int = Field(..., alias="orderId", ge=1, le=MAX_DB_INT)


class OrderCreateResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    order: PartOrderRead
    inventory_updated: bool = Field(True, alias="inventoryUpdated")
    notification_created: bool = Field(..., alias="notificationCreated")
    new_stock_level: int = Field(..., alias="newStockLevel")
    notifications: List[str] = Field(default_factory=list)


class OrderCancelResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    updated_order: PartOrderRead = Field(..., alias="updatedOrder")
    inventory_restored: bool = Field(..., alias="inventoryRestored")
    message: str = "Order cancelled successfully"


class OrderCompleteResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    updated_order: PartOrderRead = Field(..., alias="updatedOrder")
    message: str = "Order marked as completed successfully"
