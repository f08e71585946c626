from __future__ import annotations

import enum
from datetime import datetime, timezone

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    Enum as SAEnum,
    ForeignKey,
    Index,
    Integer,
)
from sqlalchemy.orm import relationship

from eepdb.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class OrderPriorityEnum(str, enum.Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    URGENT = "Urgent"


class OrderStatusEnum(str, enum.Enum):
    PENDING = "Pending"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


TERMINAL_STATUSES = frozenset({OrderStatusEnum.COMPLETED, OrderStatusEnum.CANCELLED})
ALERTING_PRIORITIES = frozenset({OrderPriorityEnum.HIGH, OrderPriorityEnum.URGENT})


class PartOrder(Base):
    __tablename__ = "part_orders"
    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_part_orders_quantity_positive"),
        Index("ix_part_orders_status_created", "status", "created_at"),
        Index("ix_part_orders_part", "part_id"),
    )

    id = Column(Integer, primary_key=True, index=True)
    part_id = Column(Integer, ForeignKey("parts.id", ondelete="RESTRICT"), nullable=False)
    quantity = Column(Integer, nullable=False)
    ordered_by = Column(Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)
    priority = Column(
        SAEnum(
            OrderPriorityEnum,
            name="order_priority_enum",
            native_enum=False,
            values_callable=_enum_values,
        ),
        nullable=False,
        default=OrderPriorityEnum.MEDIUM,
    )
    status = Column(
        SAEnum(
            OrderStatusEnum,
            name="order_status_enum",
            native_enum=False,
            values_callable=_enum_values,
        ),
        nullable=False,
        default=OrderStatusEnum.PENDING,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    delivered_at = Column(DateTime(timezone=True), nullable=True)
    cancelled_at = Column(DateTime(timezone=True), nullable=True)

    part = relationship("Part", lazy="joined", innerjoin=True)
    user = relationship("User", lazy="joined", innerjoin=True)

    @property
    def part_name(self):
        return self.part.name if self.part is not None else None

    @property
    def user_name(self):
        return self.user.name if self.user is not None else None

    @property
    def user_email(self):
        return self.user.email if self.user is not None else None

    def __repr__(self) -> str:
        return f"<PartOrder id={self.id} part_id={self.part_id} quantity={self.quantity} status={self.status}>"
