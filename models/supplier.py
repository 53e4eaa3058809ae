"""
Supplier schemas.

A supplier owns its catalog, its weekly delivery calendar (with temporary
overrides) and the per-store preferred ordering days. Rows come straight
from the `suppliers` table, whose JSON columns map onto the nested models.

Weekdays are 0 (Sunday) through 6 (Saturday).
"""

from pydantic import Field, field_validator, model_validator
from typing import Optional
from datetime import date

from models.base import BaseSchema


DEFAULT_CUTOFF_TIME = "17:00"
CUTOFF_TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class ScheduleEntry(BaseSchema):
    """One delivery weekday and how far ahead it must be ordered."""

    day_of_week: int = Field(..., ge=0, le=6, description="0 = Sunday")
    lead_days: int = Field(0, ge=0, description="Days before delivery the order is due")
    cutoff_time: str = Field(
        DEFAULT_CUTOFF_TIME,
        pattern=CUTOFF_TIME_PATTERN,
        description="Local HH:MM on the deadline day"
    )

    @field_validator("lead_days", mode="before")
    @classmethod
    def default_lead_days(cls, v):
        """Stored rows may carry null lead days."""
        return 0 if v is None else v

    @field_validator("cutoff_time", mode="before")
    @classmethod
    def default_cutoff(cls, v):
        return v or DEFAULT_CUTOFF_TIME


def _check_one_entry_per_weekday(schedule: list[ScheduleEntry]) -> list[ScheduleEntry]:
    seen = set()
    for entry in schedule:
        if entry.day_of_week in seen:
            raise ValueError(f"Duplicate schedule entry for weekday {entry.day_of_week}")
        seen.add(entry.day_of_week)
    return schedule


class TemporarySchedule(BaseSchema):
    """Schedule that replaces the default one between two dates (inclusive)."""

    start_date: date
    end_date: date
    schedule: list[ScheduleEntry] = Field(default_factory=list)

    @field_validator("schedule")
    @classmethod
    def one_entry_per_weekday(cls, v: list[ScheduleEntry]) -> list[ScheduleEntry]:
        return _check_one_entry_per_weekday(v)

    @model_validator(mode="after")
    def validate_range(self):
        """Ensure the range is not inverted."""
        if self.end_date < self.start_date:
            raise ValueError("Override end date must not be before its start date")
        return self

    def covers(self, on_date: date) -> bool:
        return self.start_date <= on_date <= self.end_date


class CatalogItem(BaseSchema):
    """Catalog entry used for shopping-list matching."""

    name: str = Field(..., min_length=1)


class StorePreference(BaseSchema):
    """Store-specific ordering preference for one supplier."""

    store_id: str
    preferred_order_day: Optional[int] = Field(None, ge=0, le=6)


class AlertSettings(BaseSchema):
    """Supplier-wide alert settings."""

    default_offset_days: Optional[int] = Field(
        None,
        ge=0,
        description="Days before delivery to start alerting; None means use lead days"
    )


class Supplier(BaseSchema):
    """
    Supplier with delivery policy.

    store_id None means the supplier is global (available to every store);
    otherwise it is exclusive to that store.
    """

    id: str
    name: str
    active: bool = True
    store_id: Optional[str] = None
    items: list[CatalogItem] = Field(default_factory=list)
    delivery_schedule: list[ScheduleEntry] = Field(default_factory=list)
    temporary_schedules: list[TemporarySchedule] = Field(default_factory=list)
    store_preferences: list[StorePreference] = Field(default_factory=list)
    alert_settings: AlertSettings = Field(default_factory=AlertSettings)

    # Informational, passed through to plans
    minimum_order_value: Optional[float] = None
    minimum_order_is_tax_exclusive: Optional[bool] = None

    @field_validator(
        "items", "delivery_schedule", "temporary_schedules", "store_preferences",
        mode="before"
    )
    @classmethod
    def null_to_empty(cls, v):
        return v or []

    @field_validator("alert_settings", mode="before")
    @classmethod
    def null_settings(cls, v):
        return v or {}

    @field_validator("delivery_schedule")
    @classmethod
    def one_entry_per_weekday(cls, v: list[ScheduleEntry]) -> list[ScheduleEntry]:
        return _check_one_entry_per_weekday(v)

    @property
    def is_global(self) -> bool:
        return self.store_id is None

    def is_available_to(self, store_id: str) -> bool:
        """Global suppliers serve every store; scoped ones only their own."""
        return self.is_global or self.store_id == store_id

    def preference_for(self, store_id: str) -> Optional[StorePreference]:
        """First preference recorded for the store, if any."""
        return next(
            (p for p in self.store_preferences if p.store_id == store_id),
            None
        )


class PreferredOrderDayUpdate(BaseSchema):
    """Set (or clear, with None) a store's preferred order day for a supplier."""

    preferred_order_day: Optional[int] = Field(
        None,
        ge=0,
        le=6,
        description="0 = Sunday ... 6 = Saturday; null clears the preference"
    )
