"""
Store schemas.

Only the parts of a store the ordering engine reads: its canonical timezone
and its supplier alert preferences (stored under `settings`).
"""

from pydantic import Field, field_validator, ValidationError
from typing import Optional
import structlog

from models.base import BaseSchema

logger = structlog.get_logger(__name__)


class StoreAlertException(BaseSchema):
    """Per-supplier alert override for one store."""

    supplier_id: str
    alert_offset_days: Optional[int] = Field(
        None,
        ge=0,
        description="Overrides the supplier's default offset"
    )
    ignored: bool = Field(False, description="Suppress all alerts for this supplier")

    @field_validator("ignored", mode="before")
    @classmethod
    def null_is_false(cls, v):
        return bool(v)


class SupplierAlertPreferences(BaseSchema):
    """Store-wide supplier alert preferences."""

    default_offset_days: Optional[int] = Field(None, ge=0)
    exceptions: list[StoreAlertException] = Field(default_factory=list)

    @field_validator("default_offset_days", mode="before")
    @classmethod
    def drop_invalid_default(cls, v):
        if v is None:
            return None
        try:
            offset = int(v)
        except (TypeError, ValueError):
            offset = -1
        if offset < 0:
            logger.warning("store_default_offset_invalid", value=v)
            return None
        return offset

    @field_validator("exceptions", mode="before")
    @classmethod
    def drop_invalid_exceptions(cls, v):
        """One malformed entry must not invalidate the whole store."""
        valid = []
        for raw in v or []:
            try:
                valid.append(StoreAlertException.model_validate(raw))
            except ValidationError as e:
                logger.warning(
                    "store_alert_exception_invalid",
                    supplier_id=raw.get("supplier_id") if isinstance(raw, dict) else None,
                    error=str(e)
                )
        return valid

    def exception_for(self, supplier_id: str) -> Optional[StoreAlertException]:
        return next(
            (e for e in self.exceptions if e.supplier_id == supplier_id),
            None
        )


class StoreSettings(BaseSchema):
    supplier_alert_preferences: SupplierAlertPreferences = Field(
        default_factory=SupplierAlertPreferences
    )

    @field_validator("supplier_alert_preferences", mode="before")
    @classmethod
    def null_preferences(cls, v):
        return v or {}


class Store(BaseSchema):
    """Store row."""

    id: str
    name: Optional[str] = None
    timezone: Optional[str] = Field(None, description="IANA zone, e.g. Europe/Madrid")
    settings: StoreSettings = Field(default_factory=StoreSettings)

    @field_validator("settings", mode="before")
    @classmethod
    def null_settings(cls, v):
        return v or {}


class AlertExceptionUpdate(BaseSchema):
    """Upsert a store's alert exception for one supplier."""

    alert_offset_days: Optional[int] = Field(None, ge=0)
    ignored: bool = False
