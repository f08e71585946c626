from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from eepdb.database import get_db, transaction
from eepdb.errors import InventoryError, as_http_exception
from eepdb.security import get_optional_current_user

from . import models, schemas, services

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=schemas.UserRead,
    status_code=status.HTTP_201_CREATED,
)
def register(
    payload: schemas.UserRegister,
    db: Session = Depends(get_db),
    actor: Optional[models.User] = Depends(get_optional_current_user),
):
    try:
        with transaction(db):
            user = services.register_user(db, payload, actor=actor)
    except services.RoleAssignmentError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc))
    except services.DuplicateUserError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    except InventoryError as exc:
        raise as_http_exception(exc)
    return user


@router.post("/login", response_model=schemas.Token)
def login(
    payload: schemas.LoginRequest,
    db: Session = Depends(get_db),
):
    try:
        user = services.authenticate_user(db, username=payload.username, password=payload.password)
    except services.AuthenticationError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc) or "Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return schemas.Token(
        access_token=services.issue_access_token_for_user(user),
        user=schemas.UserRead.model_validate(user),
    )
