"""Data models for map items, geometry and host capabilities."""

from pymapsync.models._base import MapSyncBaseModel
from pymapsync.models.events import ItemClick, MapState
from pymapsync.models.geolocation import (
    GeocodeResponse,
    GeocodeResult,
    GeoPosition,
    PermissionState,
    PositionOptions,
)
from pymapsync.models.geometry import (
    BoundingBox,
    Coordinate,
    Feature,
    FitPadding,
    TerminalPair,
    feature_collection,
    line_string,
)
from pymapsync.models.items import MapItem, NestedCoords
from pymapsync.models.resources import (
    EAGER_RESOURCES,
    ICON_ASSETS,
    ITEM_RESOURCES,
    RESOURCE_ICONS,
    TERMINAL_RESOURCES,
    ItemType,
    MapIcon,
    ResourceName,
)

__all__ = [
    "EAGER_RESOURCES",
    "ICON_ASSETS",
    "ITEM_RESOURCES",
    "RESOURCE_ICONS",
    "TERMINAL_RESOURCES",
    "BoundingBox",
    "Coordinate",
    "Feature",
    "FitPadding",
    "GeoPosition",
    "GeocodeResponse",
    "GeocodeResult",
    "ItemClick",
    "ItemType",
    "MapIcon",
    "MapItem",
    "MapState",
    "MapSyncBaseModel",
    "NestedCoords",
    "PermissionState",
    "PositionOptions",
    "ResourceName",
    "TerminalPair",
    "feature_collection",
    "line_string",
]
