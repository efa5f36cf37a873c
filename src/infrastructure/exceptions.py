"""
Infrastructure exceptions for the event catalog.

This module defines infrastructure-level exceptions raised by the store
adapters when the backend itself rejects a write.
"""

from src.domain.exceptions import CatalogException


# Store Exceptions
class StoreException(CatalogException):
    """Base exception for store operations."""

    pass


class StoreConflictException(StoreException):
    """A write was rejected by a store constraint, usually a lost race."""

    def __init__(self, message: str, constraint: str | None = None):
        super().__init__(
            message,
            "STORE_CONFLICT",
            {"constraint": constraint} if constraint else {},
        )
