from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from eepdb.database import MAX_DB_INT, MIN_DB_INT

from . import models


class PartCreate(BaseModel):
    name: str = Field(..., min_length=1)
    type: Optional[str] = None
    location: Optional[str] = None
    stock_level: int = Field(0, ge=0, le=MAX_DB_INT)
    min_threshold: int = Field(5, ge=0, le=MAX_DB_INT)
    max_threshold: int = Field(100, ge=0, le=MAX_DB_INT)
    supplier_id: Optional[int] = Field(None, ge=1, le=MAX_DB_INT)
    image_url: Optional[str] = None


class PartRead(BaseModel):
    id: int
    name: str
    type: Optional[str] = None
    location: Optional[str] = None
    stock_level: int
    min_threshold: int
    max_threshold: int
    supplier_id: Optional[int] = None
    image_url: Optional[str] = None
    status: models.StockStatusEnum
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class StockMovementRead(BaseModel):
    id: int
    part_id: int
    movement_type: models.StockMovementTypeEnum
    quantity: int
    stock_before: int
    stock_after: int
    order_id: Optional[int] = None
    actor_user_id: Optional[int] = None
    notes: Optional[str] = None
    occurred_at: datetime

    class Config:
        from_attributes = True


class StockUpdateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    part_id: int = Field(..., alias="partId", ge=1, le=MAX_DB_INT)
    change: int = Field(..., ge=MIN_DB_INT, le=MAX_DB_INT)
    notes: Optional[str] = None


class StockUpdateResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    updated_part: PartRead = Field(..., alias="updatedPart")
    notification: Optional[str] = None


class RestockRecommendationRead(BaseModel):
    part_id: int
    stock_level: int
    action: str
    recommendation: str
    priority: str
    suggested_quantity: int
