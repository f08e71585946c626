from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import update
from sqlalchemy.orm import Session

from eepdb.apps.notifications import models as notification_models
from eepdb.apps.notifications import service as notification_service
from eepdb.database import MAX_DB_INT
from eepdb.errors import InsufficientStockError, NotFoundError, ValidationError

from . import models, schemas, thresholds

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class StockChange:
    part: models.Part
    previous_level: int
    new_level: int
    movement: models.StockMovement
    classification: thresholds.Classification
    notification: Optional[notification_models.Notification] = None


# ---------------------------------------------------------------------------
# Parts
# ---------------------------------------------------------------------------


def get_part(db: Session, part_id: int) -> models.Part:
    part = db.get(models.Part, part_id)
    if part is None:
        raise NotFoundError("Part not found")
    return part


def lock_part(db: Session, part_id: int) -> models.Part:
    """
    Load a part with a row lock held until the surrounding transaction ends.

    SQLite has no row locks and ignores FOR UPDATE; the conditional update in
    `apply_stock_change` is what keeps stock from going negative there.
    """
    part = (
        db.query(models.Part)
        .filter(models.Part.id == part_id)
        .populate_existing()
        .with_for_update()
        .one_or_none()
    )
    if part is None:
        raise NotFoundError("Part not found")
    return part


def create_part(db: Session, payload: schemas.PartCreate) -> models.Part:
    if payload.min_threshold > payload.max_threshold:
        raise ValidationError("min_threshold cannot exceed max_threshold")
    if payload.supplier_id is not None and db.get(models.Supplier, payload.supplier_id) is None:
        raise NotFoundError("Supplier not found")
    part = models.Part(
        name=payload.name.strip(),
        type=payload.type,
        location=payload.location,
        stock_level=payload.stock_level,
        min_threshold=payload.min_threshold,
        max_threshold=payload.max_threshold,
        supplier_id=payload.supplier_id,
        image_url=payload.image_url,
        status=thresholds.tier_for(payload.stock_level),
    )
    db.add(part)
    db.flush()
    logger.info("Part created", extra={"part_id": part.id, "stock_level": part.stock_level})
    return part


def list_parts(
    db: Session,
    *,
    status: Optional[models.StockStatusEnum] = None,
    search: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
) -> List[models.Part]:
    query = db.query(models.Part)
    if status:
        query = query.filter(models.Part.status == status)
    if search:
        query = query.filter(models.Part.name.ilike(f"%{search.strip()}%"))
    return query.order_by(models.Part.name.asc(), models.Part.id.asc()).offset(skip).limit(limit).all()


def list_movements(
    db: Session,
    *,
    part_id: int,
    skip: int = 0,
    limit: int = 100,
) -> List[models.StockMovement]:
    get_part(db, part_id)
    return (
        db.query(models.StockMovement)
        .filter(models.StockMovement.part_id == part_id)
        .order_by(models.StockMovement.occurred_at.desc(), models.StockMovement.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


# ---------------------------------------------------------------------------
# Stock ledger
# ---------------------------------------------------------------------------


def apply_stock_change(
    db: Session,
    *,
    part: models.Part,
    delta: int,
    movement_type: models.StockMovementTypeEnum,
    actor_user_id: Optional[int],
    order_id: Optional[int] = None,
    notes: Optional[str] = None,
) -> StockChange:
    """
    Move `part.stock_level` by `delta` inside the caller's transaction.

    The check and the write are one statement, so a stale read of the part
    can never drive stock below zero. The previous level is derived from the
    post-update value rather than from whatever the caller loaded earlier.
    """
    result = db.execute(
        update(models.Part)
        .where(models.Part.id == part.id, models.Part.stock_level + delta >= 0)
        .values(stock_level=models.Part.stock_level + delta, updated_at=_utcnow())
        .execution_options(synchronize_session=False)
    )
    db.refresh(part)
    if result.rowcount != 1:
        logger.warning(
            "Stock change rejected",
            extra={"part_id": part.id, "stock_level": part.stock_level, "delta": delta},
        )
        raise InsufficientStockError(
            f"Not enough stock available for {part.name}: "
            f"{part.stock_level} on hand, change of {delta} requested"
        )

    new_level = part.stock_level
    previous_level = new_level - delta
    classification = thresholds.classify(new_level, previous_level, part_name=part.name)
    part.status = classification.tier

    movement = models.StockMovement(
        part_id=part.id,
        movement_type=movement_type,
        quantity=delta,
        stock_before=previous_level,
        stock_after=new_level,
        order_id=order_id,
        actor_user_id=actor_user_id,
        notes=notes,
    )
    db.add(movement)
    db.flush()

    notification = None
    if classification.message:
        notification = notification_service.record_notification(
            db,
            type=notification_models.NotificationType.INVENTORY,
            message=classification.message,
            part_id=part.id,
        )

    logger.info(
        "Stock level changed",
        extra={
            "part_id": part.id,
            "movement_type": movement_type.value,
            "stock_before": previous_level,
            "stock_after": new_level,
            "order_id": order_id,
        },
    )
    return StockChange(
        part=part,
        previous_level=previous_level,
        new_level=new_level,
        movement=movement,
        classification=classification,
        notification=notification,
    )


def adjust_stock(
    db: Session,
    *,
    part_id: int,
    change: int,
    actor_user_id: Optional[int],
    notes: Optional[str] = None,
) -> StockChange:
    if change == 0:
        raise ValidationError("change must be a non-zero integer")
    part = lock_part(db, part_id)
    if part.stock_level + change < 0:
        raise InsufficientStockError(
            f"Insufficient stock for {part.name}: {part.stock_level} on hand, "
            f"cannot apply change of {change}"
        )
    if part.stock_level + change > MAX_DB_INT:
        raise ValidationError(f"Stock level for {part.name} cannot exceed {MAX_DB_INT}")
    return apply_stock_change(
        db,
        part=part,
        delta=change,
        movement_type=models.StockMovementTypeEnum.ADJUSTMENT,
        actor_user_id=actor_user_id,
        notes=notes,
    )
