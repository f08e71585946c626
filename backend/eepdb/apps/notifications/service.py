from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from eepdb.errors import NotFoundError, ValidationError

from . import models

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def record_notification(
    db: Session,
    *,
    type: models.NotificationType,
    message: str,
    part_id: Optional[int] = None,
    risk_id: Optional[int] = None,
) -> models.Notification:
    """
    Add a Pending notification to the caller's transaction.

    Nothing is committed here; the notification lands or rolls back together
    with the stock change that produced it.
    """
    if not message or not message.strip():
        raise ValidationError("Notification message is required")
    notification = models.Notification(
        type=type,
        message=message.strip(),
        status=models.NotificationStatus.PENDING,
        part_id=part_id,
        risk_id=risk_id,
    )
    db.add(notification)
    db.flush()
    logger.info(
        "Notification recorded",
        extra={"notification_id": notification.id, "type": type.value, "part_id": part_id},
    )
    return notification


def resolve_notification(db: Session, notification_id: int) -> models.Notification:
    notification = db.get(models.Notification, notification_id)
    if notification is None:
        raise NotFoundError("Notification not found")
    if notification.status == models.NotificationStatus.RESOLVED:
        return notification
    notification.status = models.NotificationStatus.RESOLVED
    notification.resolved_at = _utcnow()
    db.flush()
    logger.info("Notification resolved", extra={"notification_id": notification.id})
    return notification


def list_notifications(
    db: Session,
    *,
    status: Optional[models.NotificationStatus] = None,
    type: Optional[models.NotificationType] = None,
    part_id: Optional[int] = None,
    skip: int = 0,
    limit: int = 100,
) -> List[models.Notification]:
    qs = db.query(models.Notification)
    if status:
        qs = qs.filter(models.Notification.status == status)
    if type:
        qs = qs.filter(models.Notification.type == type)
    if part_id is not None:
        qs = qs.filter(models.Notification.part_id == part_id)
    return (
        qs.order_by(models.Notification.created_at.desc(), models.Notification.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )
