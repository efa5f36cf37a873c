"""
Domain exceptions for the Event Catalog application.

This module defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns.
"""

from typing import Any


class CatalogException(Exception):
    """
    Base exception for all Event Catalog application errors.

    All custom exceptions should inherit from this class to allow
    for consistent error handling and logging.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable error code for API responses
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(CatalogException):
    """Raised when a business rule or input constraint is violated."""

    def __init__(self, message: str, field: str | None = None):
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class ResourceNotFoundException(CatalogException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: int | str):
        super().__init__(
            f"{resource_type} with ID {resource_id} not found",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class DuplicateResourceException(CatalogException):
    """Raised when a name is already taken by another resource of the same kind."""

    def __init__(self, resource_type: str, name: str):
        super().__init__(
            f"{resource_type} with name '{name}' already exists",
            "DUPLICATE_RESOURCE",
            {"resource_type": resource_type, "name": name},
        )


class VenueInUseException(ValidationException):
    """Raised when deleting a venue that still has events attached."""

    def __init__(self, venue_id: int, event_count: int):
        super().__init__(
            f"Cannot delete venue with ID {venue_id} because it has "
            f"{event_count} associated event(s)",
            field="id",
        )
        self.details["event_count"] = event_count
        self.venue_id = venue_id
        self.event_count = event_count
