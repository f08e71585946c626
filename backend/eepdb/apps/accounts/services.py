from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from eepdb import security
from . import models, schemas

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class AuthenticationError(Exception):
    """Raised when login credentials are invalid or the account is inactive."""


class DuplicateUserError(Exception):
    """Raised when a company id or email is already registered."""


class RoleAssignmentError(Exception):
    """Raised when the caller may not create an account with the requested role."""


# ---------------------------------------------------------------------------
# Normalisation helpers
# ---------------------------------------------------------------------------


def _normalise_email(value: str) -> str:
    return value.strip().lower()


def _normalise_company_id(value: str) -> str:
    return value.strip().upper()


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


def find_user_by_login(db: Session, username: str) -> Optional[models.User]:
    username = (username or "").strip()
    if not username:
        return None
    return (
        db.query(models.User)
        .filter(
            or_(
                models.User.company_id == _normalise_company_id(username),
                models.User.email == _normalise_email(username),
            )
        )
        .first()
    )


def register_user(
    db: Session,
    payload: schemas.UserRegister,
    *,
    actor: Optional[models.User] = None,
) -> models.User:
    """
    Create an account. Only an active Admin may create another Admin;
    anonymous callers get any of the staff roles.
    """
    if payload.role == models.UserRole.ADMIN and not (
        actor is not None and actor.is_active and actor.is_admin
    ):
        logger.warning("Admin registration refused", extra={"actor_id": getattr(actor, "id", None)})
        raise RoleAssignmentError("Only an administrator can create administrator accounts")

    company_id = _normalise_company_id(payload.company_id)
    email = _normalise_email(payload.email)
    existing = (
        db.query(models.User)
        .filter(or_(models.User.company_id == company_id, models.User.email == email))
        .first()
    )
    if existing:
        raise DuplicateUserError("User with this Company ID or Email already exists")

    user = models.User(
        name=payload.name.strip(),
        company_id=company_id,
        email=email,
        role=payload.role,
        is_active=True,
        hashed_password=security.get_password_hash(payload.password),
    )
    db.add(user)
    db.flush()
    logger.info("User registered", extra={"user_id": user.id, "role": user.role.value})
    return user


def authenticate_user(db: Session, *, username: str, password: str) -> models.User:
    user = find_user_by_login(db, username)
    if not user or not security.verify_password(password, user.hashed_password):
        logger.warning("Login failed", extra={"username": username})
        raise AuthenticationError("Invalid credentials")
    if not user.is_active:
        logger.warning("Login refused for inactive user", extra={"user_id": user.id})
        raise AuthenticationError("Inactive user account")
    return user


def issue_access_token_for_user(user: models.User) -> str:
    return security.create_access_token(
        data={"sub": str(user.id), "role": user.role.value},
    )
