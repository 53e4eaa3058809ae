"""
Unit tests for alert policy resolution.

The offset precedence is store exception > supplier default > lead days;
tests assert which source won, not only the resulting number.
"""

import pytest

from models.store import StoreAlertException
from models.supplier import ScheduleEntry, Supplier
from services.alert_policy_service import (
    OFFSET_RESOLVERS,
    OffsetSource,
    PreferencePolicy,
    SuppressedPolicy,
    WindowPolicy,
    resolve_offset,
    resolve_policy,
    supplier_default_offset,
)
from tests.factories import SupplierFactory, schedule_entry, MONDAY, TUESDAY

STORE_ID = "store-1"


def make_supplier(**overrides) -> Supplier:
    overrides.setdefault("id", "sup-1")
    overrides.setdefault("delivery_schedule", [schedule_entry(TUESDAY, 1)])
    return Supplier.model_validate(SupplierFactory.create(**overrides))


def make_exception(**overrides) -> StoreAlertException:
    overrides.setdefault("supplier_id", "sup-1")
    return StoreAlertException(**overrides)


class TestOffsetPrecedence:
    """Tests for the offset resolver chain."""

    def test_store_exception_beats_supplier_default(self):
        supplier = make_supplier(default_offset_days=3)
        exception = make_exception(alert_offset_days=1)

        policy = resolve_policy(STORE_ID, supplier, exception)

        assert policy == WindowPolicy(offset_days=1, source=OffsetSource.STORE_EXCEPTION)

    def test_supplier_default_when_no_exception(self):
        supplier = make_supplier(default_offset_days=3)

        policy = resolve_policy(STORE_ID, supplier, None)

        assert policy == WindowPolicy(offset_days=3, source=OffsetSource.SUPPLIER_DEFAULT)

    def test_supplier_default_when_exception_has_no_offset(self):
        supplier = make_supplier(default_offset_days=3)
        exception = make_exception(alert_offset_days=None, ignored=False)

        policy = resolve_policy(STORE_ID, supplier, exception)

        assert policy.source == OffsetSource.SUPPLIER_DEFAULT
        assert policy.offset_days == 3

    def test_lead_days_when_nothing_configured(self):
        supplier = make_supplier()

        policy = resolve_policy(STORE_ID, supplier, None)

        assert policy == WindowPolicy(offset_days=None, source=OffsetSource.LEAD_DAYS)

    def test_lead_days_fallback_is_per_occurrence(self):
        policy = WindowPolicy(offset_days=None, source=OffsetSource.LEAD_DAYS)

        assert policy.offset_for(ScheduleEntry(day_of_week=MONDAY, lead_days=2)) == 2
        assert policy.offset_for(ScheduleEntry(day_of_week=TUESDAY, lead_days=5)) == 5

    def test_explicit_offset_ignores_lead_days(self):
        policy = WindowPolicy(offset_days=4, source=OffsetSource.SUPPLIER_DEFAULT)

        assert policy.offset_for(ScheduleEntry(day_of_week=MONDAY, lead_days=1)) == 4

    def test_zero_offset_is_a_real_value(self):
        """An explicit 0 must not fall through to the next resolver."""
        supplier = make_supplier(default_offset_days=3)
        exception = make_exception(alert_offset_days=0)

        policy = resolve_policy(STORE_ID, supplier, exception)

        assert policy.source == OffsetSource.STORE_EXCEPTION
        assert policy.offset_days == 0

    def test_chain_order(self):
        assert [source for source, _ in OFFSET_RESOLVERS] == [
            OffsetSource.STORE_EXCEPTION,
            OffsetSource.SUPPLIER_DEFAULT,
        ]

    def test_custom_chain(self):
        """The chain is data; callers may pass their own."""
        supplier = make_supplier(default_offset_days=6)
        exception = make_exception(alert_offset_days=1)

        policy = resolve_offset(
            exception,
            supplier,
            resolvers=((OffsetSource.SUPPLIER_DEFAULT, supplier_default_offset),),
        )

        assert policy.offset_days == 6


class TestPolicySelection:
    """Tests for resolve_policy() branch selection."""

    def test_ignored_exception_suppresses(self):
        supplier = make_supplier(default_offset_days=3)

        policy = resolve_policy(STORE_ID, supplier, make_exception(ignored=True))

        assert isinstance(policy, SuppressedPolicy)

    def test_ignored_wins_over_preferred_day(self):
        supplier = make_supplier(
            store_preferences=[{"store_id": STORE_ID, "preferred_order_day": MONDAY}]
        )

        policy = resolve_policy(STORE_ID, supplier, make_exception(ignored=True))

        assert isinstance(policy, SuppressedPolicy)

    def test_preferred_day_wins_over_offsets(self):
        supplier = make_supplier(
            default_offset_days=3,
            store_preferences=[{"store_id": STORE_ID, "preferred_order_day": MONDAY}],
        )

        policy = resolve_policy(STORE_ID, supplier, make_exception(alert_offset_days=1))

        assert policy == PreferencePolicy(preferred_day=MONDAY)

    def test_preferred_day_of_other_store_is_ignored(self):
        supplier = make_supplier(
            store_preferences=[{"store_id": "other-store", "preferred_order_day": MONDAY}]
        )

        policy = resolve_policy(STORE_ID, supplier, None)

        assert isinstance(policy, WindowPolicy)

    def test_preference_without_day_falls_back_to_window(self):
        supplier = make_supplier(
            store_preferences=[{"store_id": STORE_ID, "preferred_order_day": None}]
        )

        policy = resolve_policy(STORE_ID, supplier, None)

        assert isinstance(policy, WindowPolicy)

    @pytest.mark.parametrize("weekday", range(7))
    def test_any_weekday_is_a_valid_preference(self, weekday):
        supplier = make_supplier(
            store_preferences=[{"store_id": STORE_ID, "preferred_order_day": weekday}]
        )

        assert resolve_policy(STORE_ID, supplier).preferred_day == weekday
