"""Data models for outages and site device rosters."""

from datetime import UTC, datetime
from typing import Annotated

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)


def format_timestamp(value: datetime) -> str:
    """Render a UTC instant the way the outage API emits it.

    Args:
        value: Timezone-aware datetime.

    Returns:
        ISO-8601 string with a ``Z`` suffix. Milliseconds are used unless
        the instant carries sub-millisecond precision, which is kept.
    """
    value = value.astimezone(UTC)
    timespec = "milliseconds" if value.microsecond % 1000 == 0 else "microseconds"
    return value.isoformat(timespec=timespec).replace("+00:00", "Z")


class Outage(BaseModel):
    """A time interval during which a device was unavailable."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(description="Device identifier")
    begin: datetime = Field(description="Start of the outage (UTC)")
    end: datetime = Field(description="End of the outage (UTC)")

    @field_validator("begin", "end")
    @classmethod
    def validate_utc(cls, v: datetime) -> datetime:
        """Reject naive timestamps and normalize to UTC."""
        if v.tzinfo is None or v.utcoffset() is None:
            msg = "Timestamp must carry a timezone"
            raise ValueError(msg)
        return v.astimezone(UTC)

    @field_serializer("begin", "end")
    def serialize_timestamp(self, value: datetime) -> str:
        """Serialize timestamps in the API's wire format."""
        return format_timestamp(value)


class Device(BaseModel):
    """A device registered at a site."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    name: str


class SiteInfo(BaseModel):
    """A site and its device roster at fetch time."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: Annotated[str, Field(min_length=1)]
    name: str
    devices: list[Device] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_unique_device_ids(self) -> "SiteInfo":
        """Ensure device IDs are unique within the roster."""
        seen: set[str] = set()
        for device in self.devices:
            if device.id in seen:
                msg = f"Duplicate device ID in site {self.id}: {device.id}"
                raise ValueError(msg)
            seen.add(device.id)
        return self

    @property
    def device_ids(self) -> set[str]:
        """Get the set of device IDs at this site."""
        return {device.id for device in self.devices}

    def find_device(self, device_id: str) -> Device | None:
        """Look up a device by ID.

        Args:
            device_id: Device identifier.

        Returns:
            The matching Device, or None if the site has no such device.
        """
        for device in self.devices:
            if device.id == device_id:
                return device
        return None


class OutageWithDeviceName(Outage):
    """An outage enriched with the display name of its device."""

    name: str = Field(description="Display name of the device")

    @classmethod
    def from_outage(cls, outage: Outage, device: Device) -> "OutageWithDeviceName":
        """Create an enriched outage from an outage and its device.

        Args:
            outage: The outage to enrich.
            device: The device whose ID matches the outage.

        Returns:
            OutageWithDeviceName carrying the device name.
        """
        return cls(id=outage.id, name=device.name, begin=outage.begin, end=outage.end)
