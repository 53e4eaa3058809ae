"""
Supplier directory service.

Reads supplier configuration and maintains per-store preferred order days.
Catalog management itself lives elsewhere.
"""

from typing import Optional
from pydantic import ValidationError as PydanticValidationError
import structlog

from config import get_supabase_client
from models.supplier import StorePreference, Supplier
from exceptions import (
    DatabaseError,
    InvalidWeekdayError,
    SupplierNotFoundError,
)

logger = structlog.get_logger(__name__)


class SupplierService:
    """
    Supplier lookup and store preference updates.

    Table: suppliers
    """

    def __init__(self):
        self.db = get_supabase_client()
        self.table = "suppliers"

    # ===================
    # READ OPERATIONS
    # ===================

    def list_active_for_store(self, store_id: str) -> list[Supplier]:
        """
        Active suppliers a store may order from.

        Includes global suppliers and those scoped to this store, in name
        order. Rows that fail validation are logged and skipped so one bad
        supplier cannot break the whole listing.

        Args:
            store_id: Store UUID

        Returns:
            Eligible suppliers
        """
        logger.debug("listing_active_suppliers", store_id=store_id)

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("active", True)
                .order("name")
                .execute()
            )
        except Exception as e:
            logger.error("list_suppliers_failed", store_id=store_id, error=str(e))
            raise DatabaseError("select", str(e))

        suppliers = []
        for row in result.data:
            try:
                supplier = Supplier.model_validate(row)
            except PydanticValidationError as e:
                logger.warning(
                    "supplier_config_invalid",
                    supplier_id=row.get("id"),
                    errors=e.error_count()
                )
                continue

            if supplier.is_available_to(store_id):
                suppliers.append(supplier)

        logger.debug("active_suppliers_listed", store_id=store_id, count=len(suppliers))
        return suppliers

    def get_by_id(self, supplier_id: str) -> Supplier:
        """
        Get a single supplier.

        Raises:
            SupplierNotFoundError: If the supplier doesn't exist
        """
        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("id", supplier_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error("get_supplier_failed", supplier_id=supplier_id, error=str(e))
            raise DatabaseError("select", str(e))

        if not result.data:
            raise SupplierNotFoundError(supplier_id)

        return Supplier.model_validate(result.data[0])

    # ===================
    # WRITE OPERATIONS
    # ===================

    def set_preferred_order_day(
        self,
        supplier_id: str,
        store_id: str,
        weekday: Optional[int],
    ) -> Supplier:
        """
        Set the day a store always orders from this supplier.

        Any existing preference for the store is removed before the new one
        is added, so exactly one survives per (supplier, store).

        Args:
            supplier_id: Supplier UUID
            store_id: Store UUID
            weekday: 0 (Sunday) .. 6 (Saturday), or None to clear

        Returns:
            Updated supplier
        """
        if weekday is not None and not 0 <= weekday <= 6:
            raise InvalidWeekdayError(weekday)

        supplier = self.get_by_id(supplier_id)

        preferences = [p for p in supplier.store_preferences if p.store_id != store_id]
        if weekday is not None:
            preferences.append(StorePreference(store_id=store_id, preferred_order_day=weekday))

        logger.info(
            "setting_preferred_order_day",
            supplier_id=supplier_id,
            store_id=store_id,
            weekday=weekday
        )

        # Rewrites the whole column: concurrent edits to this supplier are last-writer-wins
        try:
            result = (
                self.db.table(self.table)
                .update({"store_preferences": [p.model_dump() for p in preferences]})
                .eq("id", supplier_id)
                .execute()
            )
        except Exception as e:
            logger.error("set_preferred_order_day_failed", supplier_id=supplier_id, error=str(e))
            raise DatabaseError("update", str(e))

        if not result.data:
            raise SupplierNotFoundError(supplier_id)

        return Supplier.model_validate(result.data[0])

    def clear_preferred_order_day(self, supplier_id: str, store_id: str) -> Supplier:
        """Remove the store's preferred order day for this supplier."""
        return self.set_preferred_order_day(supplier_id, store_id, None)


# Singleton instance
_supplier_service: Optional[SupplierService] = None


def get_supplier_service() -> SupplierService:
    """Get or create SupplierService instance."""
    global _supplier_service
    if _supplier_service is None:
        _supplier_service = SupplierService()
    return _supplier_service
