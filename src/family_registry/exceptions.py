"""Domain exception hierarchy for Family Registry.

All domain-specific exceptions inherit from FamilyRegistryError.
This allows catching all application errors with a single base class
while preserving specificity for individual error types.
"""

from typing import Any


class FamilyRegistryError(Exception):
    """Base exception for all Family Registry errors.

    Includes optional error_code for API responses and extra context.
    """

    error_code: str = "FR_ERROR"
    status_code: int = 500

    def __init__(
        self,
        message: str,
        *,
        error_code: str | None = None,
        status_code: int | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code
        if status_code:
            self.status_code = status_code
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "context": self.context,
        }


# =============================================================================
# Family Errors
# =============================================================================


class FamilyError(FamilyRegistryError):
    """Base exception for family-related errors."""

    error_code = "FAMILY_ERROR"
    status_code = 400


class FamilyNotFoundError(FamilyError):
    """Raised when a status change targets a family that does not exist."""

    error_code = "FAMILY_NOT_FOUND"
    status_code = 404

    def __init__(self, family_id: int) -> None:
        self.family_id = family_id
        super().__init__(
            f"Family not found with ID: {family_id}",
            context={"family_id": family_id},
        )


class FamilyOperationError(FamilyError):
    """Wraps an underlying store failure raised during a family operation."""

    operation: str = "operation"

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(
            f"Error during family {self.operation}: {cause}",
            context={"cause": str(cause), "cause_type": type(cause).__name__},
        )


class FamilyCreationError(FamilyOperationError):
    """Raised when any store call fails while creating a family."""

    error_code = "FAMILY_CREATION_FAILED"
    status_code = 400
    operation = "creation"


class FamilyUpdateError(FamilyOperationError):
    """Raised when any store call fails while updating a family."""

    error_code = "FAMILY_UPDATE_FAILED"
    status_code = 500
    operation = "update"


class FamilyStatusChangeError(FamilyOperationError):
    """Raised when a status change fails for a reason other than not-found."""

    error_code = "FAMILY_STATUS_CHANGE_FAILED"
    status_code = 500
    operation = "status change"


# =============================================================================
# Validation Errors
# =============================================================================


class InvalidFamilyStatusError(FamilyRegistryError):
    """Raised when a status value is neither active nor inactive."""

    error_code = "INVALID_FAMILY_STATUS"
    status_code = 422

    def __init__(self, value: object) -> None:
        super().__init__(
            f"Invalid family status: {value!r}",
            context={"value": str(value)},
        )


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(FamilyRegistryError):
    """Raised when settings cannot produce a working component."""

    error_code = "CONFIGURATION_ERROR"
    status_code = 500
