"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    ValidationError,
    ConfigurationError,
    DatabaseError,

    # Stores
    StoreNotFoundError,
    StoreTimezoneMissingError,
    InvalidOffsetError,

    # Suppliers
    SupplierNotFoundError,
    InvalidWeekdayError,

    # Ledger
    LedgerWriteError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "ValidationError",
    "ConfigurationError",
    "DatabaseError",

    # Stores
    "StoreNotFoundError",
    "StoreTimezoneMissingError",
    "InvalidOffsetError",

    # Suppliers
    "SupplierNotFoundError",
    "InvalidWeekdayError",

    # Ledger
    "LedgerWriteError",
]
