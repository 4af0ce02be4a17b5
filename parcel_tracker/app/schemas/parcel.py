"""
Parcel Pydantic schemas.

Defines the input of ParcelStore.add and the records returned by lookups.
"""

from datetime import datetime, timezone
from pydantic import BaseModel, Field, field_validator
from parcel_tracker.app.models.parcel_enums import ParcelStatus

RFC3339_UTC = "%Y-%m-%dT%H:%M:%SZ"


def format_timestamp(moment: datetime) -> str:
    """Render ``moment`` as RFC3339 in UTC, second precision."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).strftime(RFC3339_UTC)


def utc_now() -> str:
    return format_timestamp(datetime.now(timezone.utc))


class ParcelCreate(BaseModel):
    """Schema for creating a new parcel."""
    # bounded to a signed 64-bit INTEGER column
    client: int = Field(..., ge=-2**63, lt=2**63, description="Owning client identifier")
    status: ParcelStatus = Field(default=ParcelStatus.REGISTERED, description="Initial status")
    address: str = Field(..., description="Delivery address")
    created_at: str = Field(..., description="Creation time, RFC3339 UTC")

    @field_validator("created_at", mode="before")
    @classmethod
    def normalize_created_at(cls, value):
        if isinstance(value, datetime):
            return format_timestamp(value)
        try:
            parsed = datetime.strptime(value, RFC3339_UTC)
        except (TypeError, ValueError):
            raise ValueError(f"created_at must be RFC3339 UTC ({RFC3339_UTC}), got {value!r}")
        # strptime also takes unpadded fields; store the canonical form
        return format_timestamp(parsed)


class ParcelRecord(ParcelCreate):
    """Schema for a stored parcel."""
    number: int = Field(..., gt=0, description="Store-assigned parcel number")

    class Config:
        from_attributes = True

