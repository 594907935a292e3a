"""Domain map items as they arrive from the delivery backend."""

from __future__ import annotations

from typing import Any

from pydantic import field_validator

from pymapsync.ingestion.normalize import safe_float
from pymapsync.models._base import MapSyncBaseModel


class NestedCoords(MapSyncBaseModel):
    """The ``coords`` sub-object some records use instead of top-level fields."""

    long: float | None = None
    lat: float | None = None

    @field_validator("long", "lat", mode="before")
    @classmethod
    def _coerce_floats(cls, value: Any) -> float | None:
        return safe_float(value)


class MapItem(MapSyncBaseModel):
    """A vehicle, charger or terminal record.

    The coordinate is either top-level (``long``/``lat``) or nested under
    ``coords``. Which shape wins is decided once, by
    :func:`pymapsync.ingestion.coordinates.normalize`.

    Parameters
    ----------
    id : str, int or None
        Identifier forwarded to click handlers.
    long, lat : float or None
        Top-level coordinate fields.
    coords : NestedCoords or None
        Nested coordinate fields.
    """

    id: str | int | None = None
    long: float | None = None
    lat: float | None = None
    coords: NestedCoords | None = None

    @field_validator("long", "lat", mode="before")
    @classmethod
    def _coerce_floats(cls, value: Any) -> float | None:
        return safe_float(value)

    @field_validator("coords", mode="before")
    @classmethod
    def _drop_non_mapping_coords(cls, value: Any) -> Any:
        if value is None or isinstance(value, (dict, NestedCoords)):
            return value
        return None
