"""
Supplier alert schemas.

Alerts are computed on every request and never stored. One alert means
"a purchasing decision for this supplier is due today" for a specific
delivery date.
"""

from datetime import date
from typing import Optional
from pydantic import Field

from models.base import BaseSchema


class SupplierAlert(BaseSchema):
    """Ordering alert for one supplier and one delivery occurrence."""

    supplier_id: str
    supplier_name: str
    delivery_date: date = Field(..., description="Delivery the order is for")
    cutoff_time: str = Field(..., description="HH:MM on the deadline day")
    lead_days: int = Field(..., ge=0)
    is_preference_based: bool = Field(
        False,
        description="Raised because today is the store's preferred order day"
    )
    preferred_day: Optional[int] = Field(
        None,
        ge=0,
        le=6,
        description="Store's preferred order day for this supplier, if any"
    )
