# backend/eepdb/main.py
import logging
import os
from typing import List, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine

from .database import create_db_engine, create_session_factory

from .apps.accounts.router import router as accounts_router
from .apps.inventory.router import router as inventory_router
from .apps.orders.router import router as orders_router
from .apps.notifications.router import router as notifications_router

logger = logging.getLogger(__name__)


def _allowed_origins() -> List[str]:
    """
    Parse CORS_ALLOWED_ORIGINS from env.

    Accepts comma-separated origins. If unset, defaults to local dev ports.
    """
    raw = os.getenv("CORS_ALLOWED_ORIGINS", "")
    if raw:
        origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
        if origins:
            return origins
    return [
        "http://127.0.0.1:3000",
        "http://localhost:3000",
    ]


def create_app(
    database_url: Optional[str] = None,
    *,
    engine: Optional[Engine] = None,
) -> FastAPI:
    """
    Build the API around an explicit engine.

    Tests pass their own engine; deployments let the URL come from the
    environment.
    """
    engine = engine or create_db_engine(database_url)

    app = FastAPI(title="EEP Inventory API", version="1.0.0")
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    cors_origins = _allowed_origins()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials="*" not in cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/", tags=["health"])
    def read_root():
        return {"status": "ok", "message": "EEP inventory backend is running"}

    @app.get("/health", tags=["health"])
    def health():
        return {"status": "ok"}

    app.include_router(accounts_router)
    app.include_router(inventory_router)
    app.include_router(orders_router)
    app.include_router(notifications_router)

    logger.info("Application created", extra={"database": engine.url.render_as_string(hide_password=True)})
    return app
