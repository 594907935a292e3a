"""Coordinate normalization.

Domain records carry their position either as top-level ``long``/``lat``
fields or nested under ``coords``. This module resolves that once and emits
:class:`~pymapsync.models.geometry.Coordinate` values. All functions are
pure.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pymapsync.exceptions import MissingCoordinateError, RouteTooShortError
from pymapsync.ingestion.normalize import lookup, safe_float
from pymapsync.models.geometry import Coordinate, Feature
from pymapsync.models.items import MapItem


def _pair(record: Any) -> tuple[float, float] | None:
    longitude = safe_float(lookup(record, "long"))
    latitude = safe_float(lookup(record, "lat"))
    if longitude is None or latitude is None:
        return None
    return longitude, latitude


def normalize(item: MapItem | Any) -> Coordinate:
    """Resolve the coordinate of a single map item.

    Top-level ``long``/``lat`` win when both are present; otherwise the nested
    ``coords`` pair is used.

    Raises
    ------
    MissingCoordinateError
        If neither shape yields two numeric values.
    """
    if isinstance(item, Coordinate):
        return item

    pair = _pair(item) or _pair(lookup(item, "coords"))
    if pair is None:
        item_id = lookup(item, "id")
        raise MissingCoordinateError(f"Map item {item_id!r} has no usable coordinate", item_id=item_id)
    longitude, latitude = pair
    return Coordinate(longitude=longitude, latitude=latitude)


def normalize_batch(items: Iterable[MapItem | Any]) -> list[Feature]:
    """Normalize *items* into features, preserving input order."""
    return [Feature(id=lookup(item, "id"), coordinate=normalize(item)) for item in items]


def normalize_route(points: Iterable[MapItem | Any]) -> list[Coordinate]:
    """Normalize ordered route waypoints.

    Raises
    ------
    RouteTooShortError
        If fewer than two waypoints are given.
    """
    coordinates = [normalize(point) for point in points]
    if len(coordinates) < 2:
        raise RouteTooShortError(f"A route needs at least 2 waypoints, got {len(coordinates)}")
    return coordinates
