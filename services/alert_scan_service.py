"""
Alert scanner.

Given today, a resolved weekly schedule and an alert policy, finds the
delivery occurrence (if any) an operator should be alerted about today.

Lookahead bounds are fixed:
- window policy checks today and the next 13 days
- preference policy checks the next 21 days (today excluded)
"""

from datetime import date, timedelta
from typing import Optional

from models.supplier import ScheduleEntry
from services.alert_policy_service import (
    AlertPolicy,
    PreferencePolicy,
    WindowPolicy,
)
from services.schedule_service import (
    DeliveryOccurrence,
    compute_alert_start,
    compute_deadline_date,
    day_of_week,
    find_entry,
)

WINDOW_LOOKAHEAD_DAYS = 14
PREFERENCE_LOOKAHEAD_DAYS = 21


def scan_preferred_day(
    today: date,
    schedule: list[ScheduleEntry],
    preferred_day: int,
) -> Optional[DeliveryOccurrence]:
    """
    Nearest delivery orderable today, but only on the preferred weekday.

    A delivery qualifies when ordering today still meets its lead time,
    i.e. delivery - lead_days >= today.
    """
    if day_of_week(today) != preferred_day:
        return None

    for i in range(1, PREFERENCE_LOOKAHEAD_DAYS + 1):
        candidate = today + timedelta(days=i)
        entry = find_entry(schedule, candidate)
        if entry is None:
            continue
        if compute_deadline_date(entry, candidate) >= today:
            return DeliveryOccurrence(delivery_date=candidate, entry=entry)

    return None


def scan_alert_window(
    today: date,
    schedule: list[ScheduleEntry],
    policy: WindowPolicy,
) -> Optional[DeliveryOccurrence]:
    """
    Earliest delivery whose alert window contains today.

    Window is [delivery - offset, delivery - lead_days] in whole days; the
    cutoff time does not matter here.
    """
    for i in range(WINDOW_LOOKAHEAD_DAYS):
        candidate = today + timedelta(days=i)
        entry = find_entry(schedule, candidate)
        if entry is None:
            continue

        alert_start = compute_alert_start(candidate, policy.offset_for(entry))
        deadline = compute_deadline_date(entry, candidate)

        if alert_start <= today <= deadline:
            return DeliveryOccurrence(delivery_date=candidate, entry=entry)

    return None


def scan(
    today: date,
    schedule: list[ScheduleEntry],
    policy: AlertPolicy,
) -> Optional[DeliveryOccurrence]:
    """
    Dispatch to the branch matching the policy.

    A suppressed policy or an empty schedule never yields an occurrence.
    """
    if not schedule:
        return None
    if isinstance(policy, PreferencePolicy):
        return scan_preferred_day(today, schedule, policy.preferred_day)
    if isinstance(policy, WindowPolicy):
        return scan_alert_window(today, schedule, policy)
    return None
