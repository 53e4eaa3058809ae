"""
Delivery calendar resolution and deadline arithmetic.

Pure functions, no database access:
- resolve_schedule: which weekly schedule applies on a date
- find_entry: the schedule entry for a date's weekday
- compute_deadline / compute_deadline_date: when an order is due
- compute_alert_start: first day an alert may be raised

Weekdays follow the stored convention: 0 = Sunday ... 6 = Saturday.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Optional
from zoneinfo import ZoneInfo

from models.supplier import ScheduleEntry, Supplier


@dataclass(frozen=True)
class DeliveryOccurrence:
    """One concrete delivery date produced by a schedule entry."""

    delivery_date: date
    entry: ScheduleEntry

    @property
    def lead_days(self) -> int:
        return self.entry.lead_days

    @property
    def cutoff_time(self) -> str:
        return self.entry.cutoff_time


def day_of_week(d: date) -> int:
    """Weekday with Sunday as 0."""
    return d.isoweekday() % 7


def resolve_schedule(supplier: Supplier, on_date: date) -> list[ScheduleEntry]:
    """
    Effective weekly schedule for a supplier on a date.

    The first temporary override (in stored order) whose range contains the
    date wins, even when several overlap. Otherwise the default schedule.

    Args:
        supplier: Supplier configuration
        on_date: Date to resolve for

    Returns:
        Schedule entries (possibly empty: the supplier never delivers)
    """
    for override in supplier.temporary_schedules:
        if override.covers(on_date):
            return override.schedule
    return supplier.delivery_schedule


def find_entry(schedule: list[ScheduleEntry], on_date: date) -> Optional[ScheduleEntry]:
    """Schedule entry for the date's weekday, or None when nothing is delivered."""
    weekday = day_of_week(on_date)
    return next((e for e in schedule if e.day_of_week == weekday), None)


def parse_cutoff(cutoff_time: str) -> time:
    hours, minutes = (int(part) for part in cutoff_time.split(":"))
    return time(hours, minutes)


def compute_deadline_date(entry: ScheduleEntry, delivery_date: date) -> date:
    """Last calendar day an order can be placed for this delivery."""
    return delivery_date - timedelta(days=entry.lead_days)


def compute_deadline(entry: ScheduleEntry, delivery_date: date, tz: ZoneInfo) -> datetime:
    """
    Hard order deadline: delivery date minus lead days, at the cutoff time.

    Args:
        entry: Schedule entry for the delivery weekday
        delivery_date: Delivery date
        tz: Store's canonical timezone

    Returns:
        Timezone-aware deadline
    """
    return datetime.combine(
        compute_deadline_date(entry, delivery_date),
        parse_cutoff(entry.cutoff_time),
        tzinfo=tz,
    )


def compute_alert_start(delivery_date: date, offset_days: int) -> date:
    """
    First day (start of day) an alert for this delivery may be shown.

    The offset may exceed the lead days, which gives an early alert before
    the order is actually due.
    """
    if offset_days < 0:
        raise ValueError("offset_days must be non-negative")
    return delivery_date - timedelta(days=offset_days)
