"""Models exchanged with the host geolocation and geocoding capabilities."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import Field, PositiveFloat, field_validator

from pymapsync._constants import POSITION_MAXIMUM_AGE_S, POSITION_TIMEOUT_S
from pymapsync.models._base import MapSyncBaseModel
from pymapsync.models.geometry import Coordinate


class PermissionState(StrEnum):
    UNKNOWN = "unknown"
    GRANTED = "granted"
    DENIED = "denied"
    PROMPT = "prompt"
    UNSUPPORTED = "unsupported"

    @classmethod
    def _missing_(cls, value: object) -> PermissionState:
        return cls.UNKNOWN


class PositionOptions(MapSyncBaseModel):
    """Position request configuration.

    Parameters
    ----------
    maximum_age : float
        Oldest cached fix (seconds) that may be returned instead of a new one.
    timeout : float
        Seconds to wait for a fix before giving up.
    enable_high_accuracy : bool
        Ask for a precise (slower, battery hungry) fix.
    """

    maximum_age: float = Field(default=POSITION_MAXIMUM_AGE_S, ge=0)
    timeout: PositiveFloat = POSITION_TIMEOUT_S
    enable_high_accuracy: bool = False


class GeoPosition(MapSyncBaseModel):
    """A position fix reported by the host."""

    coordinate: Coordinate
    accuracy: float | None = None
    high_accuracy: bool = False
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("timestamp")
    @classmethod
    def _ensure_tz_aware(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value


class GeocodeResult(MapSyncBaseModel):
    formatted_address: str


class GeocodeResponse(MapSyncBaseModel):
    """Status plus result list, as returned by a reverse geocoding service."""

    status: str
    results: list[GeocodeResult] = Field(default_factory=list)
