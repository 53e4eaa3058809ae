"""
Store settings service.

Provides each store's canonical timezone and its supplier alert
preferences, and upserts per-supplier alert exceptions.
"""

from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import structlog

from config import get_supabase_client
from models.store import Store, StoreAlertException, SupplierAlertPreferences
from exceptions import (
    DatabaseError,
    InvalidOffsetError,
    StoreNotFoundError,
    StoreTimezoneMissingError,
)

logger = structlog.get_logger(__name__)


class StoreService:
    """
    Store lookups.

    Table: stores
    """

    def __init__(self):
        self.db = get_supabase_client()
        self.table = "stores"

    def get_by_id(self, store_id: str) -> Store:
        """
        Get a single store.

        Raises:
            StoreNotFoundError: If the store doesn't exist
        """
        return Store.model_validate(self._get_row(store_id))

    def _get_row(self, store_id: str) -> dict:
        try:
            result = (
                self.db.table(self.table)
                .select("id, name, timezone, settings")
                .eq("id", store_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error("get_store_failed", store_id=store_id, error=str(e))
            raise DatabaseError("select", str(e))

        if not result.data:
            raise StoreNotFoundError(store_id)

        return result.data[0]

    def get_alert_preferences(
        self,
        store_id: str,
        store: Optional[Store] = None,
    ) -> SupplierAlertPreferences:
        """Store-wide supplier alert preferences (offset exceptions, ignores)."""
        store = store or self.get_by_id(store_id)
        return store.settings.supplier_alert_preferences

    def get_timezone(self, store_id: str, store: Optional[Store] = None) -> ZoneInfo:
        """
        Canonical timezone for deadline arithmetic.

        There is no fallback zone: deadlines computed in the wrong zone
        would be silently wrong.

        Raises:
            StoreTimezoneMissingError: If the zone is missing or unknown
        """
        store = store or self.get_by_id(store_id)

        if not store.timezone:
            logger.error("store_timezone_missing", store_id=store_id)
            raise StoreTimezoneMissingError(store_id)

        try:
            return ZoneInfo(store.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            logger.error("store_timezone_invalid", store_id=store_id, timezone=store.timezone)
            raise StoreTimezoneMissingError(store_id, store.timezone)

    def set_alert_exception(
        self,
        store_id: str,
        supplier_id: str,
        alert_offset_days: Optional[int] = None,
        ignored: bool = False,
    ) -> SupplierAlertPreferences:
        """
        Upsert the store's alert exception for a supplier.

        Existing exceptions for the supplier are replaced, never duplicated.

        Args:
            store_id: Store UUID
            supplier_id: Supplier UUID
            alert_offset_days: Offset override, None to use the supplier default
            ignored: Suppress all alerts for this supplier

        Returns:
            Updated preferences
        """
        if alert_offset_days is not None and alert_offset_days < 0:
            raise InvalidOffsetError(alert_offset_days)

        row = self._get_row(store_id)
        store = Store.model_validate(row)
        preferences = store.settings.supplier_alert_preferences

        exceptions = [e for e in preferences.exceptions if e.supplier_id != supplier_id]
        exceptions.append(StoreAlertException(
            supplier_id=supplier_id,
            alert_offset_days=alert_offset_days,
            ignored=ignored,
        ))
        preferences = SupplierAlertPreferences(
            default_offset_days=preferences.default_offset_days,
            exceptions=exceptions,
        )

        # Keep unrelated store settings as read; concurrent settings edits are last-writer-wins
        settings_payload = dict(row.get("settings") or {})
        settings_payload["supplier_alert_preferences"] = preferences.model_dump()

        logger.info(
            "setting_alert_exception",
            store_id=store_id,
            supplier_id=supplier_id,
            alert_offset_days=alert_offset_days,
            ignored=ignored
        )

        try:
            self.db.table(self.table).update(
                {"settings": settings_payload}
            ).eq("id", store_id).execute()
        except Exception as e:
            logger.error("set_alert_exception_failed", store_id=store_id, error=str(e))
            raise DatabaseError("update", str(e))

        return preferences


# Singleton instance
_store_service: Optional[StoreService] = None


def get_store_service() -> StoreService:
    """Get or create StoreService instance."""
    global _store_service
    if _store_service is None:
        _store_service = StoreService()
    return _store_service
