"""
Custom exception classes for the application.

Every error carries a machine-readable code, an HTTP status and a details
dict so routes can render it with to_dict().
"""

from typing import Optional, Any
from datetime import datetime, timezone


class AppError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        code: Error code (e.g., "SUPPLIER_NOT_FOUND")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class NotFoundError(AppError):
    """Resource not found (404)."""

    def __init__(
        self,
        resource: str,
        identifier: str,
        code: Optional[str] = None
    ):
        super().__init__(
            code=code or f"{resource.upper()}_NOT_FOUND",
            message=f"{resource} not found",
            status_code=404,
            details={"id": identifier}
        )


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


class ConfigurationError(AppError):
    """Required configuration is missing or unusable (500)."""

    def __init__(
        self,
        message: str,
        code: str = "CONFIGURATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=500,
            details=details
        )


class DatabaseError(AppError):
    """Database operation failed (500)."""

    def __init__(
        self,
        operation: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="DATABASE_ERROR",
            message=f"Database {operation} failed: {message}",
            status_code=500,
            details={"operation": operation, **(details or {})}
        )


# ===================
# STORE ERRORS
# ===================

class StoreNotFoundError(NotFoundError):
    """Store not found."""

    def __init__(self, store_id: str):
        super().__init__(
            resource="Store",
            identifier=store_id,
            code="STORE_NOT_FOUND"
        )


class StoreTimezoneMissingError(ConfigurationError):
    """Store has no usable canonical timezone."""

    def __init__(self, store_id: str, timezone_name: Optional[str] = None):
        super().__init__(
            code="STORE_TIMEZONE_MISSING",
            message="Store has no valid timezone configured",
            details={"store_id": store_id, "timezone": timezone_name}
        )


class InvalidOffsetError(ValidationError):
    """Alert offset must be a non-negative number of days."""

    def __init__(self, offset: int):
        super().__init__(
            code="INVALID_ALERT_OFFSET",
            message="Alert offset must be zero or more days",
            details={"provided": offset}
        )


# ===================
# SUPPLIER ERRORS
# ===================

class SupplierNotFoundError(NotFoundError):
    """Supplier not found."""

    def __init__(self, supplier_id: str):
        super().__init__(
            resource="Supplier",
            identifier=supplier_id,
            code="SUPPLIER_NOT_FOUND"
        )


class InvalidWeekdayError(ValidationError):
    """Weekday outside 0 (Sunday) .. 6 (Saturday)."""

    def __init__(self, weekday: int):
        super().__init__(
            code="INVALID_WEEKDAY",
            message="Weekday must be between 0 (Sunday) and 6 (Saturday)",
            details={"provided": weekday, "valid": list(range(7))}
        )


# ===================
# LEDGER ERRORS
# ===================

class LedgerWriteError(AppError):
    """Resolution could not be recorded (503)."""

    def __init__(
        self,
        attempts: int,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="LEDGER_WRITE_FAILED",
            message=f"Could not record order status after {attempts} attempts: {message}",
            status_code=503,
            details={"attempts": attempts, **(details or {})}
        )
