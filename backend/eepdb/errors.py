# backend/eepdb/errors.py
"""
Domain errors raised by the inventory and order services.

Services raise these; routers turn them into HTTP responses with
`as_http_exception`, so the service layer stays usable outside FastAPI.
"""

from __future__ import annotations

from fastapi import HTTPException, status


class InventoryError(Exception):
    """Base class for every error the stock core raises on purpose."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(InventoryError):
    """Missing or malformed input, e.g. a quantity below 1."""


class NotFoundError(InventoryError):
    """A referenced part, order, user or notification does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class InsufficientStockError(InventoryError):
    """The requested quantity exceeds the stock on hand."""


class InvalidStateTransition(InventoryError):
    """The order is in a state that does not allow the requested action."""

    status_code = status.HTTP_409_CONFLICT


class StorageError(InventoryError):
    """The transaction could not be committed; it has been rolled back."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def as_http_exception(exc: InventoryError) -> HTTPException:
    if isinstance(exc, StorageError):
        # Never leak driver detail to the client.
        return HTTPException(status_code=exc.status_code, detail="Internal server error")
    return HTTPException(status_code=exc.status_code, detail=exc.message)
