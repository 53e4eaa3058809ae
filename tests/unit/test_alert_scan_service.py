"""
Unit tests for the alert scanner.

Calendar reference: 2025-01-06 is a Monday.
"""

import pytest
from datetime import date, timedelta

from models.supplier import ScheduleEntry
from services.alert_policy_service import (
    OffsetSource,
    PreferencePolicy,
    SuppressedPolicy,
    WindowPolicy,
)
from services.alert_scan_service import (
    PREFERENCE_LOOKAHEAD_DAYS,
    WINDOW_LOOKAHEAD_DAYS,
    scan,
    scan_alert_window,
    scan_preferred_day,
)
from tests.factories import MONDAY, TUESDAY, THURSDAY, FRIDAY

MON = date(2025, 1, 6)
TUE = date(2025, 1, 7)
FRI = date(2025, 1, 10)

LEAD_DAYS_POLICY = WindowPolicy(offset_days=None, source=OffsetSource.LEAD_DAYS)


def entry(day: int, lead_days: int = 0, cutoff_time: str = "17:00") -> ScheduleEntry:
    return ScheduleEntry(day_of_week=day, lead_days=lead_days, cutoff_time=cutoff_time)


def offset_policy(days: int) -> WindowPolicy:
    return WindowPolicy(offset_days=days, source=OffsetSource.SUPPLIER_DEFAULT)


class TestLookaheadConstants:
    def test_bounds_are_fixed(self):
        assert WINDOW_LOOKAHEAD_DAYS == 14
        assert PREFERENCE_LOOKAHEAD_DAYS == 21


class TestWindowScan:
    """Tests for scan_alert_window()"""

    def test_tuesday_delivery_alerts_on_monday(self):
        """Produce Co: Tuesday delivery, one lead day, no offset configured."""
        schedule = [entry(TUESDAY, lead_days=1)]

        occurrence = scan_alert_window(MON, schedule, LEAD_DAYS_POLICY)

        assert occurrence is not None
        assert occurrence.delivery_date == TUE
        assert occurrence.lead_days == 1

    def test_no_alert_the_day_before_the_deadline_day(self):
        """With offset == lead days the alert only shows on the deadline day."""
        schedule = [entry(TUESDAY, lead_days=1)]

        assert scan_alert_window(date(2025, 1, 5), schedule, LEAD_DAYS_POLICY) is None

    @pytest.mark.parametrize(
        "today,expected",
        [
            (FRI - timedelta(days=4), None),
            (FRI - timedelta(days=3), FRI),  # alert start
            (FRI - timedelta(days=2), FRI),  # hard deadline day
            (FRI - timedelta(days=1), None),  # past the deadline
        ],
    )
    def test_window_boundaries(self, today, expected):
        """lead_days=2, offset=3: alert from D-3 through D-2 inclusive."""
        schedule = [entry(FRIDAY, lead_days=2)]

        occurrence = scan_alert_window(today, schedule, offset_policy(3))

        if expected is None:
            assert occurrence is None
        else:
            assert occurrence.delivery_date == expected

    def test_cutoff_time_does_not_matter_at_day_level(self):
        """Even a 00:00 cutoff keeps the deadline day inside the window."""
        schedule = [entry(TUESDAY, lead_days=1, cutoff_time="00:00")]

        assert scan_alert_window(MON, schedule, LEAD_DAYS_POLICY).delivery_date == TUE

    def test_earliest_qualifying_occurrence_wins(self):
        schedule = [entry(TUESDAY), entry(THURSDAY)]

        occurrence = scan_alert_window(MON, schedule, offset_policy(3))

        assert occurrence.delivery_date == TUE

    def test_today_is_included(self):
        """A same-day delivery with no lead time is alertable today."""
        schedule = [entry(TUESDAY, lead_days=0)]

        assert scan_alert_window(TUE, schedule, LEAD_DAYS_POLICY).delivery_date == TUE

    def test_skips_passed_deadline_and_finds_later_occurrence(self):
        """Today's delivery is no longer orderable, Thursday's window is open."""
        schedule = [entry(MONDAY, lead_days=1), entry(THURSDAY, lead_days=1)]

        occurrence = scan_alert_window(MON, schedule, offset_policy(3))

        assert occurrence.delivery_date == date(2025, 1, 9)

    def test_early_alert_with_offset_beyond_lead_days(self):
        schedule = [entry(FRIDAY, lead_days=1)]

        occurrence = scan_alert_window(MON, schedule, offset_policy(5))

        assert occurrence.delivery_date == FRI

    def test_occurrence_beyond_lookahead_is_never_alerted(self):
        """Deadline needs a delivery 14+ days out, outside the window."""
        schedule = [entry(MONDAY, lead_days=14)]

        assert scan_alert_window(MON, schedule, offset_policy(20)) is None

    def test_lead_days_fallback_uses_each_entry(self):
        schedule = [entry(TUESDAY, lead_days=0), entry(THURSDAY, lead_days=3)]

        occurrence = scan_alert_window(MON, schedule, LEAD_DAYS_POLICY)

        assert occurrence.delivery_date == date(2025, 1, 9)
        assert occurrence.lead_days == 3


class TestPreferredDayScan:
    """Tests for scan_preferred_day()"""

    def test_alerts_on_preferred_day(self):
        schedule = [entry(TUESDAY, lead_days=1)]

        occurrence = scan_preferred_day(MON, schedule, MONDAY)

        assert occurrence.delivery_date == TUE

    def test_silent_on_other_days(self):
        schedule = [entry(TUESDAY, lead_days=1)]

        assert scan_preferred_day(TUE, schedule, MONDAY) is None

    def test_skips_deliveries_that_cannot_meet_lead_time(self):
        schedule = [entry(TUESDAY, lead_days=3)]

        occurrence = scan_preferred_day(MON, schedule, MONDAY)

        assert occurrence.delivery_date == date(2025, 1, 14)

    def test_today_is_excluded(self):
        schedule = [entry(MONDAY, lead_days=0)]

        occurrence = scan_preferred_day(MON, schedule, MONDAY)

        assert occurrence.delivery_date == date(2025, 1, 13)

    def test_delivery_on_exact_lead_boundary_qualifies(self):
        schedule = [entry(THURSDAY, lead_days=3)]

        assert scan_preferred_day(MON, schedule, MONDAY).delivery_date == date(2025, 1, 9)

    def test_nothing_within_lookahead(self):
        schedule = [entry(TUESDAY, lead_days=25)]

        assert scan_preferred_day(MON, schedule, MONDAY) is None


class TestScanDispatch:
    """Tests for scan()"""

    def test_empty_schedule_never_alerts(self):
        assert scan(MON, [], LEAD_DAYS_POLICY) is None
        assert scan(MON, [], PreferencePolicy(preferred_day=MONDAY)) is None

    def test_suppressed_never_alerts(self):
        assert scan(MON, [entry(TUESDAY, 1)], SuppressedPolicy()) is None

    def test_dispatches_to_preference_branch(self):
        schedule = [entry(TUESDAY, lead_days=3)]

        occurrence = scan(MON, schedule, PreferencePolicy(preferred_day=MONDAY))

        assert occurrence.delivery_date == date(2025, 1, 14)

    def test_deterministic(self):
        schedule = [entry(TUESDAY, 1), entry(FRIDAY, 2)]
        policy = offset_policy(4)

        assert scan(MON, schedule, policy) == scan(MON, schedule, policy)
