from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from eepdb.apps.accounts import models as account_models
from eepdb.database import MAX_DB_INT, get_db, transaction
from eepdb.errors import InventoryError, as_http_exception
from eepdb.security import get_current_active_user

from . import models, schemas, services

router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("", response_model=List[schemas.PartOrderRead])
def list_orders(
    status: Optional[models.OrderStatusEnum] = None,
    part_id: Optional[int] = Query(None, le=MAX_DB_INT),
    skip: int = Query(0, ge=0, le=MAX_DB_INT),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
    current_user: account_models.User = Depends(get_current_active_user),
):
    return services.list_orders(db, status=status, part_id=part_id, skip=skip, limit=limit)


@router.get("/{order_id}", response_model=schemas.PartOrderRead)
def get_order(
    order_id: int = Path(..., le=MAX_DB_INT),
    db: Session = Depends(get_db),
    current_user: account_models.User = Depends(get_current_active_user),
):
    try:
        return services.get_order(db, order_id)
    except InventoryError as exc:
        raise as_http_exception(exc)


@router.post(
    "",
    response_model=schemas.OrderCreateResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_order(
    payload: schemas.PartOrderCreate,
    db: Session = Depends(get_db),
    current_user: account_models.User = Depends(get_current_active_user),
):
    try:
        with transaction(db):
            placement = services.create_order(
                db,
                part_id=payload.part_id,
                quantity=payload.quantity,
                ordered_by=services.resolve_orderer(current_user, payload.ordered_by),
                priority=payload.priority,
            )
    except InventoryError as exc:
        raise as_http_exception(exc)
    return schemas.OrderCreateResponse(
        order=schemas.PartOrderRead.model_validate(placement.order),
        inventory_updated=True,
        notification_created=placement.notification_created,
        new_stock_level=placement.new_stock_level,
        notifications=[n.message for n in placement.notifications],
    )


@router.post("/cancel", response_model=schemas.OrderCancelResponse)
def cancel_order(
    payload: schemas.OrderActionRequest,
    db: Session = Depends(get_db),
    current_user: account_models.User = Depends(get_current_active_user),
):
    try:
        with transaction(db):
            outcome = services.cancel_order(db, order_id=payload.order_id, actor_user_id=current_user.id)
    except InventoryError as exc:
        raise as_http_exception(exc)
    return schemas.OrderCancelResponse(
        updated_order=schemas.PartOrderRead.model_validate(outcome.order),
        inventory_restored=outcome.inventory_restored,
    )


@router.post("/complete", response_model=schemas.OrderCompleteResponse)
def complete_order(
    payload: schemas.OrderActionRequest,
    db: Session = Depends(get_db),
    current_user: account_models.User = Depends(get_current_active_user),
):
    try:
        with transaction(db):
            order = services.complete_order(db, order_id=payload.order_id)
    except InventoryError as exc:
        raise as_http_exception(exc)
    return schemas.OrderCompleteResponse(
        updated_order=schemas.PartOrderRead.model_validate(order),
    )
