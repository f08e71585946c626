from __future__ import annotations

import enum
from datetime import datetime, timezone

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    Enum as SAEnum,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from eepdb.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class StockStatusEnum(str, enum.Enum):
    CRITICAL = "Critical"
    LOW = "Low"
    AVAILABLE = "Available"


class StockMovementTypeEnum(str, enum.Enum):
    ORDER_PLACED = "ORDER_PLACED"
    ORDER_CANCELLED = "ORDER_CANCELLED"
    ADJUSTMENT = "ADJUSTMENT"


class Supplier(Base):
    __tablename__ = "suppliers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    contact_email = Column(String(255), nullable=True)
    contact_phone = Column(String(64), nullable=True)
    performance_rating = Column(Float, nullable=True)
    lead_time_days = Column(Integer, nullable=True)


class Part(Base):
    __tablename__ = "parts"
    __table_args__ = (
        CheckConstraint("stock_level >= 0", name="ck_parts_stock_level_non_negative"),
        Index("ix_parts_status", "status"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    type = Column(String(128), nullable=True)
    location = Column(String(128), nullable=True)
    stock_level = Column(Integer, nullable=False, default=0)
    min_threshold = Column(Integer, nullable=False, default=5)
    max_threshold = Column(Integer, nullable=False, default=100)
    supplier_id = Column(Integer, ForeignKey("suppliers.id", ondelete="SET NULL"), nullable=True)
    image_url = Column(String(512), nullable=True)
    status = Column(
        SAEnum(
            StockStatusEnum,
            name="part_stock_status_enum",
            native_enum=False,
            values_callable=_enum_values,
        ),
        nullable=False,
        default=StockStatusEnum.AVAILABLE,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    supplier = relationship("Supplier")

    def __repr__(self) -> str:
        return f"<Part id={self.id} name={self.name!r} stock_level={self.stock_level}>"


class StockMovement(Base):
    """One row per change to `Part.stock_level`."""

    __tablename__ = "stock_movements"
    __table_args__ = (
        Index("ix_stock_movements_part", "part_id", "occurred_at"),
        Index("ix_stock_movements_order", "order_id"),
    )

    id = Column(Integer, primary_key=True, index=True)
    part_id = Column(Integer, ForeignKey("parts.id", ondelete="CASCADE"), nullable=False)
    movement_type = Column(
        SAEnum(
            StockMovementTypeEnum,
            name="stock_movement_type_enum",
            native_enum=False,
            values_callable=_enum_values,
        ),
        nullable=False,
        index=True,
    )
    quantity = Column(Integer, nullable=False)
    stock_before = Column(Integer, nullable=False)
    stock_after = Column(Integer, nullable=False)
    order_id = Column(Integer, ForeignKey("part_orders.id", ondelete="SET NULL"), nullable=True)
    actor_user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    notes = Column(Text, nullable=True)
    occurred_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    part = relationship("Part", lazy="joined")
