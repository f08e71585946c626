from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import update
from sqlalchemy.orm import Session

from eepdb.apps.accounts import models as account_models
from eepdb.apps.inventory import models as inventory_models
from eepdb.apps.inventory import services as inventory_services
from eepdb.apps.notifications import models as notification_models
from eepdb.apps.notifications import service as notification_service
from eepdb.database import MAX_DB_INT
from eepdb.errors import (
    InsufficientStockError,
    InvalidStateTransition,
    NotFoundError,
    ValidationError,
)

from . import models

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class OrderPlacement:
    order: models.PartOrder
    new_stock_level: int
    notifications: List[notification_models.Notification] = field(default_factory=list)

    @property
    def notification_created(self) -> bool:
        return bool(self.notifications)


@dataclass
class OrderCancellation:
    order: models.PartOrder
    inventory_restored: bool


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


def get_order(db: Session, order_id: int) -> models.PartOrder:
    order = db.get(models.PartOrder, order_id)
    if order is None:
        raise NotFoundError("Order not found")
    return order


def list_orders(
    db: Session,
    *,
    status: Optional[models.OrderStatusEnum] = None,
    part_id: Optional[int] = None,
    ordered_by: Optional[int] = None,
    skip: int = 0,
    limit: int = 100,
) -> List[models.PartOrder]:
    query = db.query(models.PartOrder)
    if status:
        query = query.filter(models.PartOrder.status == status)
    if part_id is not None:
        query = query.filter(models.PartOrder.part_id == part_id)
    if ordered_by is not None:
        query = query.filter(models.PartOrder.ordered_by == ordered_by)
    return (
        query.order_by(models.PartOrder.created_at.desc(), models.PartOrder.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def resolve_orderer(actor: account_models.User, requested_user_id: Optional[int]) -> int:
    """
    Decide who an order is placed for.

    Users order for themselves. Only an Admin may name somebody else.
    """
    if requested_user_id is None or requested_user_id == actor.id:
        return actor.id
    if actor.is_admin:
        return requested_user_id
    raise ValidationError("ordered_by must match the authenticated user")


def _get_active_user(db: Session, user_id: int) -> account_models.User:
    user = db.get(account_models.User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    if not user.is_active:
        raise ValidationError("User account is inactive")
    return user


def _compare_and_set_status(
    db: Session,
    order: models.PartOrder,
    *,
    expected: models.OrderStatusEnum,
    new: models.OrderStatusEnum,
    **values,
) -> bool:
    result = db.execute(
        update(models.PartOrder)
        .where(models.PartOrder.id == order.id, models.PartOrder.status == expected)
        .values(status=new, **values)
        .execution_options(synchronize_session=False)
    )
    db.refresh(order)
    return result.rowcount == 1


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


def create_order(
    db: Session,
    *,
    part_id: int,
    quantity: int,
    ordered_by: int,
    priority: models.OrderPriorityEnum = models.OrderPriorityEnum.MEDIUM,
) -> OrderPlacement:
    """
    Place a Pending order and take its quantity out of stock.

    Runs inside the caller's transaction: the order row, the stock decrement,
    the ledger entry and any notifications are committed together or not at
    all.
    """
    if quantity is None or quantity < 1:
        raise ValidationError("quantity must be at least 1")
    if quantity > MAX_DB_INT:
        raise ValidationError(f"quantity cannot exceed {MAX_DB_INT}")

    user = _get_active_user(db, ordered_by)
    part = inventory_services.lock_part(db, part_id)
    if quantity > part.stock_level:
        logger.warning(
            "Order rejected for insufficient stock",
            extra={"part_id": part.id, "stock_level": part.stock_level, "quantity": quantity},
        )
        raise InsufficientStockError(
            f"Not enough stock available for {part.name}: "
            f"{part.stock_level} on hand, {quantity} requested"
        )

    order = models.PartOrder(
        part_id=part.id,
        quantity=quantity,
        ordered_by=user.id,
        priority=priority,
        status=models.OrderStatusEnum.PENDING,
    )
    db.add(order)
    db.flush()

    change = inventory_services.apply_stock_change(
        db,
        part=part,
        delta=-quantity,
        movement_type=inventory_models.StockMovementTypeEnum.ORDER_PLACED,
        actor_user_id=user.id,
        order_id=order.id,
    )
    notifications = [change.notification] if change.notification else []

    if priority in models.ALERTING_PRIORITIES:
        notifications.append(
            notification_service.record_notification(
                db,
                type=notification_models.NotificationType.INVENTORY,
                message=(
                    f"{priority.value} priority order #{order.id} placed for "
                    f"{quantity} x {part.name} by {user.name}."
                ),
                part_id=part.id,
            )
        )

    logger.info(
        "Order created",
        extra={
            "order_id": order.id,
            "part_id": part.id,
            "quantity": quantity,
            "priority": priority.value,
            "stock_after": change.new_level,
        },
    )
    return OrderPlacement(order=order, new_stock_level=change.new_level, notifications=notifications)


def cancel_order(
    db: Session,
    *,
    order_id: int,
    actor_user_id: Optional[int],
) -> OrderCancellation:
    """
    Cancel an order, returning its quantity to stock if it was still Pending.

    Cancelling an already Cancelled order changes nothing. Completed orders
    have been delivered and cannot be cancelled.
    """
    order = get_order(db, order_id)
    if order.status == models.OrderStatusEnum.CANCELLED:
        return OrderCancellation(order=order, inventory_restored=False)
    if order.status == models.OrderStatusEnum.COMPLETED:
        raise InvalidStateTransition("Completed orders cannot be cancelled")

    part = inventory_services.lock_part(db, order.part_id)
    if not _compare_and_set_status(
        db,
        order,
        expected=models.OrderStatusEnum.PENDING,
        new=models.OrderStatusEnum.CANCELLED,
        cancelled_at=_utcnow(),
    ):
        # Another request moved the order first.
        if order.status == models.OrderStatusEnum.CANCELLED:
            return OrderCancellation(order=order, inventory_restored=False)
        raise InvalidStateTransition(f"Cannot cancel an order that is {order.status.value}")

    inventory_services.apply_stock_change(
        db,
        part=part,
        delta=order.quantity,
        movement_type=inventory_models.StockMovementTypeEnum.ORDER_CANCELLED,
        actor_user_id=actor_user_id,
        order_id=order.id,
    )
    logger.info(
        "Order cancelled",
        extra={"order_id": order.id, "part_id": part.id, "restored": order.quantity},
    )
    return OrderCancellation(order=order, inventory_restored=True)


def complete_order(
    db: Session,
    *,
    order_id: int,
) -> models.PartOrder:
    order = get_order(db, order_id)
    if order.status in models.TERMINAL_STATUSES or not _compare_and_set_status(
        db,
        order,
        expected=models.OrderStatusEnum.PENDING,
        new=models.OrderStatusEnum.COMPLETED,
        delivered_at=_utcnow(),
    ):
        logger.warning(
            "Order completion rejected",
            extra={"order_id": order.id, "status": order.status.value},
        )
        raise InvalidStateTransition(f"Cannot complete an order that is {order.status.value}")

    logger.info("Order completed", extra={"order_id": order.id})
    return order
