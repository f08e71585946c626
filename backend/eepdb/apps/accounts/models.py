# backend/eepdb/apps/accounts/models.py

from __future__ import annotations

import enum
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Enum, Index, Integer, String

from eepdb.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class UserRole(str, enum.Enum):
    """Roles a portal user can hold."""

    ADMIN = "Admin"
    WAREHOUSE_STAFF = "Warehouse Staff"
    MAINTENANCE_STAFF = "Maintenance Staff"


class User(Base):
    __tablename__ = "users"
    __table_args__ = (Index("idx_users_role_active", "role", "is_active"),)

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    company_id = Column(
        String(64),
        nullable=False,
        unique=True,
        doc="Employee number used as the login name.",
    )
    email = Column(String(255), nullable=True, unique=True, index=True)
    role = Column(
        Enum(UserRole, name="user_role_enum", values_callable=_enum_values),
        nullable=False,
        default=UserRole.WAREHOUSE_STAFF,
        index=True,
    )
    is_active = Column(Boolean, nullable=False, default=True)
    hashed_password = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def __repr__(self) -> str:
        return f"<User id={self.id} company_id={self.company_id} role={self.role}>"
