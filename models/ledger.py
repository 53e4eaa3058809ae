"""
Resolution ledger schemas.

Each row records one operator action on one delivery occurrence. Rows are
append-only; the alert path only asks whether any resolved row exists.
"""

from datetime import date, datetime
from enum import Enum
from pydantic import Field

from models.base import BaseSchema


class ResolutionStatus(str, Enum):
    """Operator actions that close an alert."""

    ORDERED = "ordered"
    CHECKED_STOCK = "checked_stock"
    SKIPPED = "skipped"


RESOLVED_STATUSES = frozenset(ResolutionStatus)


class LedgerEntryCreate(BaseSchema):
    """Record an operator action for an alert."""

    supplier_id: str = Field(..., min_length=1)
    delivery_date: date = Field(..., description="Delivery date the alert was about")
    status: ResolutionStatus


class LedgerEntryResponse(BaseSchema):
    """Stored ledger row."""

    id: str
    store_id: str
    supplier_id: str
    delivery_date: date
    status: ResolutionStatus
    created_at: datetime
