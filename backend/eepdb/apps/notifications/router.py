from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from eepdb.apps.accounts.models import User
from eepdb.database import MAX_DB_INT, get_db, transaction
from eepdb.errors import InventoryError, as_http_exception
from eepdb.security import get_current_active_user

from . import models, schemas, service


router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=List[schemas.NotificationRead])
def list_notifications(
    status: Optional[models.NotificationStatus] = None,
    type: Optional[models.NotificationType] = None,
    part_id: Optional[int] = Query(None, le=MAX_DB_INT),
    skip: int = Query(0, ge=0, le=MAX_DB_INT),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    return service.list_notifications(
        db, status=status, type=type, part_id=part_id, skip=skip, limit=limit
    )


@router.post(
    "/resolve",
    response_model=schemas.NotificationResolveResponse,
    response_model_by_alias=True,
)
def resolve_notification(
    payload: schemas.NotificationResolveRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        with transaction(db):
            notification = service.resolve_notification(db, payload.notification_id)
    except InventoryError as exc:
        raise as_http_exception(exc)
    return schemas.NotificationResolveResponse(
        message="Notification marked as resolved",
        notification_id=notification.id,
    )
