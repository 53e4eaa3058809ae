"""
Supplier alert API routes.

Today's ordering alerts for a store, resolving them, and the per-store
supplier preferences that shape them.
"""

from datetime import date
from typing import Optional
from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse
import structlog

from models.alert import SupplierAlert
from models.ledger import LedgerEntryCreate, LedgerEntryResponse
from models.store import AlertExceptionUpdate, SupplierAlertPreferences
from models.supplier import PreferredOrderDayUpdate, StorePreference
from services.supplier_alert_service import get_supplier_alert_service
from services.supplier_service import get_supplier_service
from services.store_service import get_store_service
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/stores/{store_id}", tags=["Supplier Alerts"])


# ===================
# EXCEPTION HANDLER
# ===================

def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )


# ===================
# ALERT ROUTES
# ===================

@router.get("/supplier-alerts", response_model=list[SupplierAlert])
def list_supplier_alerts(
    store_id: str,
    today: Optional[date] = Query(
        None,
        description="Reference day (YYYY-MM-DD). Defaults to today in the store's timezone."
    ),
):
    """
    Suppliers that need an ordering decision today.

    Alerts already marked ordered, checked or skipped for the same delivery
    are left out.
    """
    try:
        service = get_supplier_alert_service()
        return service.get_alerts_for_store(store_id, today=today)

    except Exception as e:
        return handle_error(e)


@router.get("/supplier-alerts/history", response_model=list[LedgerEntryResponse])
def list_supplier_alert_history(
    store_id: str,
    supplier_id: Optional[str] = Query(None, description="Only this supplier's actions"),
):
    """Alerts already marked ordered, checked or skipped, newest first."""
    try:
        service = get_supplier_alert_service()
        return service.list_resolutions(store_id, supplier_id=supplier_id)

    except Exception as e:
        return handle_error(e)


@router.post(
    "/supplier-alerts/resolve",
    response_model=LedgerEntryResponse,
    status_code=status.HTTP_201_CREATED,
)
def resolve_supplier_alert(store_id: str, data: LedgerEntryCreate):
    """
    Mark an alert as ordered, checked_stock or skipped.

    Returns 503 if the action could not be recorded; the client must retry
    or tell the operator, otherwise the alert comes back.
    """
    try:
        service = get_supplier_alert_service()
        entry = service.resolve_alert(
            store_id,
            data.supplier_id,
            data.delivery_date,
            data.status,
        )

        logger.info(
            "supplier_alert_resolved_via_api",
            store_id=store_id,
            supplier_id=data.supplier_id,
            status=data.status.value
        )

        return entry

    except Exception as e:
        return handle_error(e)


# ===================
# PREFERENCE ROUTES
# ===================

@router.put(
    "/suppliers/{supplier_id}/preferred-order-day",
    response_model=Optional[StorePreference],
)
def set_preferred_order_day(store_id: str, supplier_id: str, data: PreferredOrderDayUpdate):
    """
    Set the weekday this store always orders from the supplier.

    Send null to clear it and go back to window-based alerts.
    """
    try:
        service = get_supplier_service()
        if data.preferred_order_day is None:
            supplier = service.clear_preferred_order_day(supplier_id, store_id)
        else:
            supplier = service.set_preferred_order_day(
                supplier_id,
                store_id,
                data.preferred_order_day,
            )
        return supplier.preference_for(store_id)

    except Exception as e:
        return handle_error(e)


@router.put(
    "/suppliers/{supplier_id}/alert-exception",
    response_model=SupplierAlertPreferences,
)
def set_alert_exception(store_id: str, supplier_id: str, data: AlertExceptionUpdate):
    """Override the alert offset for one supplier, or ignore it entirely."""
    try:
        service = get_store_service()
        return service.set_alert_exception(
            store_id,
            supplier_id,
            alert_offset_days=data.alert_offset_days,
            ignored=data.ignored,
        )

    except Exception as e:
        return handle_error(e)
