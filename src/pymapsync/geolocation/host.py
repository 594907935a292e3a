"""Host capabilities consumed by the geolocation flow.

Each capability is optional: a host without one passes ``None`` and the
flow reports the matching ``*Unsupported``/``*Unavailable`` failure.
"""

from __future__ import annotations

from typing import Protocol

from pymapsync.models.geolocation import GeocodeResponse, GeoPosition, PositionOptions
from pymapsync.models.geometry import Coordinate


class PermissionQuery(Protocol):
    async def query(self, name: str) -> str:
        """Return the permission state string (``granted``, ``prompt``...)."""
        ...


class PositionProvider(Protocol):
    async def get_current_position(self, options: PositionOptions) -> GeoPosition:
        """Produce a fix.

        Implementations raise :class:`~pymapsync.exceptions.PositionUnavailable`
        or :class:`~pymapsync.exceptions.PositionTimeout`; any other exception
        is reported as unavailable.
        """
        ...


class ReverseGeocoder(Protocol):
    async def reverse_geocode(self, coordinate: Coordinate) -> GeocodeResponse: ...
