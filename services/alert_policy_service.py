"""
Alert policy resolution for a (store, supplier) pair.

Decides which alerting rule applies:
1. SuppressedPolicy - the store ignores this supplier
2. PreferencePolicy - the store always orders on a fixed weekday
3. WindowPolicy     - alert from (delivery - offset) until the hard deadline

The window offset comes from OFFSET_RESOLVERS, tried in order. The first
resolver returning a value wins; if none does, each occurrence falls back
to its own lead days.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Union
import structlog

from models.store import StoreAlertException
from models.supplier import ScheduleEntry, Supplier

logger = structlog.get_logger(__name__)


class OffsetSource(str, Enum):
    """Where a window offset came from."""

    STORE_EXCEPTION = "store_exception"
    SUPPLIER_DEFAULT = "supplier_default"
    LEAD_DAYS = "lead_days"


@dataclass(frozen=True)
class SuppressedPolicy:
    """No alerts for this pair."""


@dataclass(frozen=True)
class PreferencePolicy:
    preferred_day: int


@dataclass(frozen=True)
class WindowPolicy:
    """
    Offset-window alerting.

    offset_days None means "use each occurrence's lead days".
    """

    offset_days: Optional[int]
    source: OffsetSource

    def offset_for(self, entry: ScheduleEntry) -> int:
        if self.offset_days is None:
            return entry.lead_days
        return self.offset_days


AlertPolicy = Union[SuppressedPolicy, PreferencePolicy, WindowPolicy]

OffsetResolver = Callable[[Optional[StoreAlertException], Supplier], Optional[int]]


def store_exception_offset(
    exception: Optional[StoreAlertException],
    supplier: Supplier,
) -> Optional[int]:
    if exception is None:
        return None
    return exception.alert_offset_days


def supplier_default_offset(
    exception: Optional[StoreAlertException],
    supplier: Supplier,
) -> Optional[int]:
    return supplier.alert_settings.default_offset_days


# Order is precedence
OFFSET_RESOLVERS: tuple[tuple[OffsetSource, OffsetResolver], ...] = (
    (OffsetSource.STORE_EXCEPTION, store_exception_offset),
    (OffsetSource.SUPPLIER_DEFAULT, supplier_default_offset),
)


def resolve_offset(
    exception: Optional[StoreAlertException],
    supplier: Supplier,
    resolvers: tuple[tuple[OffsetSource, OffsetResolver], ...] = OFFSET_RESOLVERS,
) -> WindowPolicy:
    """Walk the resolver chain and build the window policy."""
    for source, resolver in resolvers:
        offset = resolver(exception, supplier)
        if offset is not None:
            return WindowPolicy(offset_days=offset, source=source)
    return WindowPolicy(offset_days=None, source=OffsetSource.LEAD_DAYS)


def resolve_policy(
    store_id: str,
    supplier: Supplier,
    exception: Optional[StoreAlertException] = None,
) -> AlertPolicy:
    """
    Select the alert policy for a store and supplier.

    Args:
        store_id: Store UUID
        supplier: Supplier configuration (carries store preferences)
        exception: The store's alert exception for this supplier, if any

    Returns:
        SuppressedPolicy, PreferencePolicy or WindowPolicy
    """
    if exception is not None and exception.ignored:
        logger.debug("supplier_alerts_ignored", store_id=store_id, supplier_id=supplier.id)
        return SuppressedPolicy()

    preference = supplier.preference_for(store_id)
    if preference is not None and preference.preferred_order_day is not None:
        return PreferencePolicy(preferred_day=preference.preferred_order_day)

    return resolve_offset(exception, supplier)
