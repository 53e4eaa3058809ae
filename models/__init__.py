"""
Pydantic models for validation and serialization.
"""

from models.base import BaseSchema
from models.supplier import (
    DEFAULT_CUTOFF_TIME,
    ScheduleEntry,
    TemporarySchedule,
    CatalogItem,
    StorePreference,
    AlertSettings,
    Supplier,
    PreferredOrderDayUpdate,
)
from models.store import (
    StoreAlertException,
    SupplierAlertPreferences,
    StoreSettings,
    Store,
    AlertExceptionUpdate,
)
from models.ledger import (
    ResolutionStatus,
    RESOLVED_STATUSES,
    LedgerEntryCreate,
    LedgerEntryResponse,
)
from models.alert import SupplierAlert
from models.order_plan import (
    OrderPlanRequest,
    PlanItem,
    SupplierPlan,
    OrderPlanResponse,
)

__all__ = [
    # Base
    "BaseSchema",

    # Supplier
    "DEFAULT_CUTOFF_TIME",
    "ScheduleEntry",
    "TemporarySchedule",
    "CatalogItem",
    "StorePreference",
    "AlertSettings",
    "Supplier",
    "PreferredOrderDayUpdate",

    # Store
    "StoreAlertException",
    "SupplierAlertPreferences",
    "StoreSettings",
    "Store",
    "AlertExceptionUpdate",

    # Ledger
    "ResolutionStatus",
    "RESOLVED_STATUSES",
    "LedgerEntryCreate",
    "LedgerEntryResponse",

    # Alerts & plans
    "SupplierAlert",
    "OrderPlanRequest",
    "PlanItem",
    "SupplierPlan",
    "OrderPlanResponse",
]
