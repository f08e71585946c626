from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

ROOT = Path(__file__).resolve().parent
sys.path.append(str(ROOT))

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
# Keep password hashing cheap in tests.
os.environ.setdefault("ARGON2_TIME_COST", "1")
os.environ.setdefault("ARGON2_MEMORY_COST", "8")
os.environ.setdefault("ARGON2_PARALLELISM", "1")

import eepdb  # noqa: E402,F401
from eepdb.database import Base  # noqa: E402
from eepdb.apps.accounts import models as account_models  # noqa: E402
from eepdb.apps.inventory import models as inventory_models  # noqa: E402


@pytest.fixture()
def db_session():
    engine = create_engine("sqlite+pysqlite:///:memory:")
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(
        bind=engine,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
    )
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture()
def api_engine():
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture()
def client(api_engine):
    from fastapi.testclient import TestClient

    from eepdb.main import create_app

    with TestClient(create_app(engine=api_engine)) as test_client:
        yield test_client


@pytest.fixture()
def api_session(api_engine):
    """Session on the same database the `client` fixture serves."""
    TestingSession = sessionmaker(bind=api_engine, autoflush=False, expire_on_commit=False)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


def create_user(
    db,
    *,
    company_id: str = "EMP-1",
    name: str = "Store Keeper",
    email: str = "store@example.com",
    role: account_models.UserRole = account_models.UserRole.WAREHOUSE_STAFF,
    is_active: bool = True,
) -> account_models.User:
    user = account_models.User(
        name=name,
        company_id=company_id,
        email=email,
        role=role,
        is_active=is_active,
        hashed_password="hash",
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def create_part(db, *, name: str = "Servo Motor", stock_level: int = 10) -> inventory_models.Part:
    from eepdb.apps.inventory import thresholds

    part = inventory_models.Part(
        name=name,
        type="Motor",
        location="Rack A",
        stock_level=stock_level,
        status=thresholds.tier_for(stock_level),
    )
    db.add(part)
    db.commit()
    db.refresh(part)
    return part


def auth_headers(user: account_models.User) -> dict:
    from eepdb.apps.accounts import services as account_services

    return {"Authorization": f"Bearer {account_services.issue_access_token_for_user(user)}"}
