"""
Custom exceptions for the power plant service domain.

These exceptions represent domain-level errors and are independent
of infrastructure concerns (HTTP, database, etc.).
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..validators import FieldErrors


class PowerPlantServiceException(Exception):
    """Base exception for all power plant service errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class PowerPlantValidationException(PowerPlantServiceException):
    """Raised when one or more fields of a creation request are invalid."""

    def __init__(self, errors: "FieldErrors"):
        self.errors = errors
        fields = ", ".join(errors.keys())
        super().__init__(
            message=f"Validation failed for: {fields}",
            details={"errors": errors.to_dict()},
        )


class PowerPlantNotFoundException(PowerPlantServiceException):
    """Raised when no power plant has the requested identifier."""

    def __init__(self, plant_id: str):
        super().__init__(
            message=f"Power plant not found: {plant_id}",
            details={"id": plant_id},
        )


class RepositoryException(PowerPlantServiceException):
    """Raised when the storage backend fails."""

    def __init__(self, operation: str, reason: Optional[str] = None):
        message = f"Repository {operation} failed"
        if reason:
            message += f": {reason}"
        super().__init__(
            message=message, details={"operation": operation, "reason": reason}
        )


class RequestCancelledException(PowerPlantServiceException):
    """Raised when the client went away while a repository call was pending."""

    def __init__(self, operation: str):
        super().__init__(
            message=f"Request cancelled by client during {operation}",
            details={"operation": operation},
        )
