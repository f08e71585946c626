from __future__ import annotations

from datetime import datetime, timezone
import enum

from sqlalchemy import Column, DateTime, Enum as SAEnum, ForeignKey, Index, Integer, Text

from eepdb.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class NotificationType(str, enum.Enum):
    INVENTORY = "Inventory"
    RISK = "Risk"


class NotificationStatus(str, enum.Enum):
    PENDING = "Pending"
    RESOLVED = "Resolved"


class Notification(Base):
    __tablename__ = "notifications"
    __table_args__ = (
        Index("ix_notifications_status_created", "status", "created_at"),
        Index("ix_notifications_part", "part_id"),
    )

    id = Column(Integer, primary_key=True, index=True)
    type = Column(
        SAEnum(
            NotificationType,
            name="notification_type_enum",
            native_enum=False,
            values_callable=_enum_values,
        ),
        nullable=False,
        index=True,
    )
    message = Column(Text, nullable=False)
    status = Column(
        SAEnum(
            NotificationStatus,
            name="notification_status_enum",
            native_enum=False,
            values_callable=_enum_values,
        ),
        nullable=False,
        default=NotificationStatus.PENDING,
    )
    part_id = Column(Integer, ForeignKey("parts.id", ondelete="SET NULL"), nullable=True)
    # Risks live outside this service; the id is kept for display only.
    risk_id = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    resolved_at = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<Notification id={self.id} type={self.type} status={self.status}>"
