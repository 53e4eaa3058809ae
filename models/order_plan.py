"""
Order plan schemas.

A plan groups every shopping-list item matched to one supplier; the whole
batch must be ordered by the tightest deadline among its items.
"""

from datetime import date, datetime
from typing import Optional
from pydantic import Field

from models.base import BaseSchema


class OrderPlanRequest(BaseSchema):
    """Free-text shopping list."""

    items: list[str] = Field(..., description="Item names as typed by the operator")


class PlanItem(BaseSchema):
    """A shopping-list line and the catalog entry it matched."""

    searched_text: str
    matched_catalog_name: str


class SupplierPlan(BaseSchema):
    """Consolidated order for one supplier."""

    supplier_id: str
    supplier_name: str
    items: list[PlanItem] = Field(default_factory=list)
    order_deadline: datetime = Field(..., description="Earliest hard deadline across items")
    delivery_date: date = Field(..., description="Delivery tied to order_deadline")
    minimum_order_value: Optional[float] = None
    is_tax_exclusive: Optional[bool] = None


class OrderPlanResponse(BaseSchema):
    """Plans per supplier plus the lines nothing could serve."""

    plans: list[SupplierPlan] = Field(default_factory=list)
    unmatched: list[str] = Field(default_factory=list)
