"""Base model for pygeofence domain objects.

Every model inherits from :class:`GeofenceBaseModel` which provides:

* ``alias_generator=to_camel`` so camelCase wire keys (``vehicleId``,
  ``currentZoneId``) map automatically to snake_case fields.
* ``populate_by_name`` so Python callers can use either spelling.
* Frozen instances; state changes always produce a new object.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def ensure_tz_aware(value: datetime) -> datetime:
    """Assume UTC for naive datetimes."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


AwareDatetime = Annotated[datetime, AfterValidator(ensure_tz_aware)]
"""Annotated datetime that is always timezone-aware (naive values become UTC)."""


class GeofenceBaseModel(BaseModel):
    """Base for pygeofence models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def to_wire(self) -> dict[str, Any]:
        """Dump using camelCase keys and JSON-compatible values."""
        return self.model_dump(mode="json", by_alias=True)
