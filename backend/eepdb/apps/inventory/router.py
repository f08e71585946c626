from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from eepdb.apps.accounts import models as account_models
from eepdb.database import MAX_DB_INT, get_db, transaction
from eepdb.errors import InventoryError, as_http_exception
from eepdb.security import get_current_active_user, require_roles

from . import models, schemas, services, thresholds

router = APIRouter(prefix="", tags=["inventory"])

INVENTORY_WRITE_ROLES = [
    account_models.UserRole.ADMIN,
    account_models.UserRole.WAREHOUSE_STAFF,
]


@router.get("/parts", response_model=List[schemas.PartRead])
def list_parts(
    status: Optional[models.StockStatusEnum] = None,
    search: Optional[str] = None,
    skip: int = Query(0, ge=0, le=MAX_DB_INT),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
    current_user: account_models.User = Depends(get_current_active_user),
):
    return services.list_parts(db, status=status, search=search, skip=skip, limit=limit)


@router.post(
    "/parts",
    response_model=schemas.PartRead,
    status_code=status.HTTP_201_CREATED,
)
def create_part(
    payload: schemas.PartCreate,
    db: Session = Depends(get_db),
    current_user: account_models.User = Depends(require_roles(*INVENTORY_WRITE_ROLES)),
):
    try:
        with transaction(db):
            part = services.create_part(db, payload)
    except InventoryError as exc:
        raise as_http_exception(exc)
    return part


@router.get("/parts/{part_id}", response_model=schemas.PartRead)
def get_part(
    part_id: int = Path(..., le=MAX_DB_INT),
    db: Session = Depends(get_db),
    current_user: account_models.User = Depends(get_current_active_user),
):
    try:
        return services.get_part(db, part_id)
    except InventoryError as exc:
        raise as_http_exception(exc)


@router.get(
    "/parts/{part_id}/recommendation",
    response_model=schemas.RestockRecommendationRead,
)
def get_restock_recommendation(
    part_id: int = Path(..., le=MAX_DB_INT),
    db: Session = Depends(get_db),
    current_user: account_models.User = Depends(get_current_active_user),
):
    try:
        part = services.get_part(db, part_id)
    except InventoryError as exc:
        raise as_http_exception(exc)
    advice = thresholds.recommend_restock(part.stock_level)
    return schemas.RestockRecommendationRead(
        part_id=part.id,
        stock_level=part.stock_level,
        action=advice.action,
        recommendation=advice.recommendation,
        priority=advice.priority,
        suggested_quantity=advice.suggested_quantity,
    )


@router.get(
    "/parts/{part_id}/movements",
    response_model=List[schemas.StockMovementRead],
)
def list_movements(
    part_id: int = Path(..., le=MAX_DB_INT),
    skip: int = Query(0, ge=0, le=MAX_DB_INT),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
    current_user: account_models.User = Depends(get_current_active_user),
):
    try:
        return services.list_movements(db, part_id=part_id, skip=skip, limit=limit)
    except InventoryError as exc:
        raise as_http_exception(exc)


@router.post(
    "/inventory/update-stock",
    response_model=schemas.StockUpdateResponse,
)
def update_stock(
    payload: schemas.StockUpdateRequest,
    db: Session = Depends(get_db),
    current_user: account_models.User = Depends(require_roles(*INVENTORY_WRITE_ROLES)),
):
    try:
        with transaction(db):
            change = services.adjust_stock(
                db,
                part_id=payload.part_id,
                change=payload.change,
                actor_user_id=current_user.id,
                notes=payload.notes,
            )
    except InventoryError as exc:
        raise as_http_exception(exc)
    return schemas.StockUpdateResponse(
        updated_part=schemas.PartRead.model_validate(change.part),
        notification=change.notification.message if change.notification else None,
    )
