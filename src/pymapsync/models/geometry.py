"""Canonical geometry models.

Everything downstream of the ingestion boundary works with
:class:`Coordinate` only. GeoJSON dicts are produced at the very last step,
when data is handed to the surface.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, NamedTuple

from pydantic import AliasChoices, Field, NonNegativeInt

from pymapsync.models._base import MapSyncBaseModel


class Coordinate(MapSyncBaseModel):
    """Canonical point in WGS84 degrees.

    Parameters
    ----------
    longitude : float
        Longitude in degrees.
    latitude : float
        Latitude in degrees.
    """

    longitude: float = Field(validation_alias=AliasChoices("longitude", "lng", "lon"))
    latitude: float = Field(validation_alias=AliasChoices("latitude", "lat"))

    def as_lon_lat(self) -> tuple[float, float]:
        return (self.longitude, self.latitude)

    def to_geojson(self) -> dict[str, Any]:
        """GeoJSON Point geometry."""
        return {"type": "Point", "coordinates": [self.longitude, self.latitude]}


class Feature(MapSyncBaseModel):
    """A canonical point tagged with the id of the item it came from."""

    id: str | int | None = None
    coordinate: Coordinate

    def to_geojson(self) -> dict[str, Any]:
        return {
            "type": "Feature",
            "geometry": self.coordinate.to_geojson(),
            "properties": {"id": self.id},
        }


def feature_collection(features: Iterable[Feature] = ()) -> dict[str, Any]:
    """Build a GeoJSON FeatureCollection from *features*."""
    return {
        "type": "FeatureCollection",
        "features": [feature.to_geojson() for feature in features],
    }


def line_string(coordinates: Iterable[Coordinate]) -> dict[str, Any]:
    """Build a GeoJSON LineString Feature from ordered *coordinates*."""
    return {
        "type": "Feature",
        "properties": {},
        "geometry": {
            "type": "LineString",
            "coordinates": [[c.longitude, c.latitude] for c in coordinates],
        },
    }


class BoundingBox(NamedTuple):
    """Axis-aligned box ``[min_lon, min_lat, max_lon, max_lat]``."""

    min_lon: float
    min_lat: float
    max_lon: float
    max_lat: float

    @property
    def is_degenerate(self) -> bool:
        return self.min_lon == self.max_lon and self.min_lat == self.max_lat


class FitPadding(MapSyncBaseModel):
    """Screen-space padding (pixels) reserved around a camera fit.

    The defaults leave room for a bottom sheet.
    """

    top: NonNegativeInt = 100
    bottom: NonNegativeInt = 300
    left: NonNegativeInt = 50
    right: NonNegativeInt = 50

    def as_dict(self) -> dict[str, int]:
        return {"top": self.top, "bottom": self.bottom, "left": self.left, "right": self.right}


class TerminalPair(MapSyncBaseModel):
    """Pickup and dropoff coordinates; only meaningful as a complete pair."""

    pickup: Coordinate
    dropoff: Coordinate

    @classmethod
    def from_optional(cls, pickup: Coordinate | None, dropoff: Coordinate | None) -> TerminalPair | None:
        """Return a pair, or ``None`` when either side is missing."""
        if pickup is None or dropoff is None:
            return None
        return cls(pickup=pickup, dropoff=dropoff)
