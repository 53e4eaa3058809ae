"""
Resolution ledger service.

Append-only log of operator actions (ordered / checked stock / skipped) on
delivery occurrences. The alert path only asks whether a resolved row
exists, so duplicate rows for the same occurrence are harmless.

Appends retry with exponential backoff and raise LedgerWriteError once all
attempts fail. A lost "ordered" record would bring the alert back and lead
to a duplicate physical order.
"""

from datetime import date
from typing import Optional
import time
import structlog

from config import get_supabase_client, settings
from models.ledger import (
    RESOLVED_STATUSES,
    LedgerEntryResponse,
    ResolutionStatus,
)
from exceptions import DatabaseError, LedgerWriteError

logger = structlog.get_logger(__name__)


def backoff_delay(attempt: int, base_delay: float, max_delay: float) -> float:
    """
    Delay before the next attempt.

    Formula: min(base_delay * 2 ** attempt, max_delay)
    Example with 0.5s base: 0.5, 1.0, 2.0, 4.0, 5.0 (capped)
    """
    return min(base_delay * (2 ** attempt), max_delay)


class LedgerService:
    """
    Reads and appends resolution ledger rows.

    Table: supplier_order_checks
    """

    def __init__(self):
        self.db = get_supabase_client()
        self.table = "supplier_order_checks"
        self.max_attempts = settings.ledger_write_retry_attempts
        self.base_delay = settings.ledger_write_retry_base_delay
        self.max_delay = settings.ledger_write_retry_max_delay

    # ===================
    # READ OPERATIONS
    # ===================

    def has_resolution(
        self,
        store_id: str,
        supplier_id: str,
        delivery_date: date,
    ) -> bool:
        """
        Check whether an occurrence has been resolved.

        Args:
            store_id: Store UUID
            supplier_id: Supplier UUID
            delivery_date: Delivery date the alert was about

        Returns:
            True if any resolved row exists for the exact triple
        """
        try:
            result = (
                self.db.table(self.table)
                .select("id")
                .eq("store_id", store_id)
                .eq("supplier_id", supplier_id)
                .eq("delivery_date", delivery_date.isoformat())
                .in_("status", [s.value for s in RESOLVED_STATUSES])
                .limit(1)
                .execute()
            )
            return bool(result.data)

        except Exception as e:
            logger.error(
                "ledger_lookup_failed",
                store_id=store_id,
                supplier_id=supplier_id,
                delivery_date=delivery_date.isoformat(),
                error=str(e)
            )
            raise DatabaseError("select", str(e))

    def list_for_store(
        self,
        store_id: str,
        supplier_id: Optional[str] = None,
    ) -> list[LedgerEntryResponse]:
        """
        Ledger history for a store, newest first.

        Args:
            store_id: Store UUID
            supplier_id: Optional supplier filter
        """
        try:
            query = self.db.table(self.table).select("*").eq("store_id", store_id)
            if supplier_id:
                query = query.eq("supplier_id", supplier_id)
            result = query.order("created_at", desc=True).execute()

            return [LedgerEntryResponse.model_validate(row) for row in result.data]

        except Exception as e:
            logger.error("ledger_list_failed", store_id=store_id, error=str(e))
            raise DatabaseError("select", str(e))

    # ===================
    # WRITE OPERATIONS
    # ===================

    def append(
        self,
        store_id: str,
        supplier_id: str,
        delivery_date: date,
        status: ResolutionStatus,
    ) -> LedgerEntryResponse:
        """
        Append one resolution row.

        Args:
            store_id: Store UUID
            supplier_id: Supplier UUID
            delivery_date: Delivery date the alert was about
            status: Operator action

        Returns:
            Stored row

        Raises:
            LedgerWriteError: If every attempt failed
        """
        row = {
            "store_id": store_id,
            "supplier_id": supplier_id,
            "delivery_date": delivery_date.isoformat(),
            "status": ResolutionStatus(status).value,
        }

        logger.info("appending_ledger_entry", **row)

        last_error: Optional[Exception] = None
        for attempt in range(self.max_attempts):
            try:
                result = self.db.table(self.table).insert(row).execute()
                entry = LedgerEntryResponse.model_validate(result.data[0])

                logger.info("ledger_entry_appended", entry_id=entry.id, attempt=attempt + 1)
                return entry

            except Exception as e:
                last_error = e
                if attempt < self.max_attempts - 1:
                    delay = backoff_delay(attempt, self.base_delay, self.max_delay)
                    logger.warning(
                        "ledger_append_retry",
                        attempt=attempt + 1,
                        max_attempts=self.max_attempts,
                        delay=delay,
                        error=str(e)
                    )
                    time.sleep(delay)

        logger.error(
            "ledger_append_failed",
            attempts=self.max_attempts,
            error=str(last_error),
            **row
        )
        raise LedgerWriteError(
            self.max_attempts,
            str(last_error),
            details=row
        ) from last_error


# Singleton instance
_ledger_service: Optional[LedgerService] = None


def get_ledger_service() -> LedgerService:
    """Get or create LedgerService instance."""
    global _ledger_service
    if _ledger_service is None:
        _ledger_service = LedgerService()
    return _ledger_service
