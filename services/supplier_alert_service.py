"""
Supplier ordering alerts for a store.

For every active supplier the store can order from:
    calendar -> alert policy -> scanner -> ledger check

and returns the alerts still waiting on an operator today. Resolving an
alert appends to the ledger, which hides that delivery occurrence for good;
the following occurrence alerts again as usual.
"""

from datetime import date, datetime
from typing import Optional
from pydantic import ValidationError as PydanticValidationError
import structlog

from models.alert import SupplierAlert
from models.ledger import LedgerEntryResponse, ResolutionStatus
from models.supplier import Supplier
from models.store import SupplierAlertPreferences
from services.alert_policy_service import (
    PreferencePolicy,
    SuppressedPolicy,
    resolve_policy,
)
from services.alert_scan_service import scan
from services.schedule_service import resolve_schedule
from services.ledger_service import get_ledger_service
from services.store_service import get_store_service
from services.supplier_service import get_supplier_service
from exceptions import NotFoundError

logger = structlog.get_logger(__name__)


class SupplierAlertService:
    """
    Computes and resolves supplier ordering alerts.

    Stateless between calls: every result is derived from supplier and
    store configuration plus the ledger.
    """

    def __init__(self):
        self.supplier_service = get_supplier_service()
        self.store_service = get_store_service()
        self.ledger_service = get_ledger_service()

    def get_alerts_for_store(
        self,
        store_id: str,
        today: Optional[date] = None,
    ) -> list[SupplierAlert]:
        """
        Alerts due today for a store.

        Args:
            store_id: Store UUID
            today: Reference day in the store's zone (defaults to now there)

        Returns:
            One alert per supplier with an unresolved occurrence due today

        Raises:
            StoreNotFoundError: If the store doesn't exist
            ConfigurationError: If today is omitted and the store has no timezone
        """
        store = self.store_service.get_by_id(store_id)
        if today is None:
            tz = self.store_service.get_timezone(store_id, store=store)
            today = datetime.now(tz).date()

        preferences = self.store_service.get_alert_preferences(store_id, store=store)
        suppliers = self.supplier_service.list_active_for_store(store_id)

        logger.info(
            "scanning_supplier_alerts",
            store_id=store_id,
            today=today.isoformat(),
            suppliers=len(suppliers)
        )

        alerts = []
        for supplier in suppliers:
            try:
                alert = self._alert_for_supplier(store_id, supplier, preferences, today)
            except (NotFoundError, PydanticValidationError, ValueError) as e:
                # One broken supplier must not hide the others
                logger.warning(
                    "supplier_alert_skipped",
                    store_id=store_id,
                    supplier_id=supplier.id,
                    error=str(e),
                    error_type=type(e).__name__
                )
                continue

            if alert is not None:
                alerts.append(alert)

        logger.info("supplier_alerts_computed", store_id=store_id, count=len(alerts))
        return alerts

    def _alert_for_supplier(
        self,
        store_id: str,
        supplier: Supplier,
        preferences: SupplierAlertPreferences,
        today: date,
    ) -> Optional[SupplierAlert]:
        exception = preferences.exception_for(supplier.id)
        policy = resolve_policy(store_id, supplier, exception)
        if isinstance(policy, SuppressedPolicy):
            return None

        schedule = resolve_schedule(supplier, today)
        occurrence = scan(today, schedule, policy)
        if occurrence is None:
            return None

        if self.ledger_service.has_resolution(store_id, supplier.id, occurrence.delivery_date):
            logger.debug(
                "supplier_alert_already_resolved",
                store_id=store_id,
                supplier_id=supplier.id,
                delivery_date=occurrence.delivery_date.isoformat()
            )
            return None

        preference = supplier.preference_for(store_id)
        is_preference_based = isinstance(policy, PreferencePolicy)

        logger.info(
            "supplier_alert_raised",
            store_id=store_id,
            supplier_id=supplier.id,
            delivery_date=occurrence.delivery_date.isoformat(),
            preference_based=is_preference_based
        )

        return SupplierAlert(
            supplier_id=supplier.id,
            supplier_name=supplier.name,
            delivery_date=occurrence.delivery_date,
            cutoff_time=occurrence.cutoff_time,
            lead_days=occurrence.lead_days,
            is_preference_based=is_preference_based,
            preferred_day=preference.preferred_order_day if preference else None,
        )

    def resolve_alert(
        self,
        store_id: str,
        supplier_id: str,
        delivery_date: date,
        status: ResolutionStatus,
    ) -> LedgerEntryResponse:
        """
        Record an operator action for one occurrence.

        Raises:
            StoreNotFoundError / SupplierNotFoundError: Unknown ids
            LedgerWriteError: If the action could not be recorded
        """
        self.store_service.get_by_id(store_id)
        self.supplier_service.get_by_id(supplier_id)

        logger.info(
            "resolving_supplier_alert",
            store_id=store_id,
            supplier_id=supplier_id,
            delivery_date=delivery_date.isoformat(),
            status=ResolutionStatus(status).value
        )

        return self.ledger_service.append(store_id, supplier_id, delivery_date, status)

    def list_resolutions(
        self,
        store_id: str,
        supplier_id: Optional[str] = None,
    ) -> list[LedgerEntryResponse]:
        """
        Recorded operator actions for a store, newest first.

        Raises:
            StoreNotFoundError: If the store doesn't exist
        """
        self.store_service.get_by_id(store_id)
        return self.ledger_service.list_for_store(store_id, supplier_id=supplier_id)


# Singleton instance
_supplier_alert_service: Optional[SupplierAlertService] = None


def get_supplier_alert_service() -> SupplierAlertService:
    """Get or create SupplierAlertService instance."""
    global _supplier_alert_service
    if _supplier_alert_service is None:
        _supplier_alert_service = SupplierAlertService()
    return _supplier_alert_service
