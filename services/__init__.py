"""
Business logic services.

Each service handles one domain area.
"""

from services.supplier_service import SupplierService, get_supplier_service
from services.store_service import StoreService, get_store_service
from services.ledger_service import LedgerService, get_ledger_service
from services.supplier_alert_service import (
    SupplierAlertService,
    get_supplier_alert_service,
)
from services.order_plan_service import (
    OrderPlanService,
    get_order_plan_service,
    CatalogMatcher,
    SubstringMatcher,
)

__all__ = [
    "SupplierService",
    "get_supplier_service",
    "StoreService",
    "get_store_service",
    "LedgerService",
    "get_ledger_service",
    "SupplierAlertService",
    "get_supplier_alert_service",
    "OrderPlanService",
    "get_order_plan_service",
    "CatalogMatcher",
    "SubstringMatcher",
]
