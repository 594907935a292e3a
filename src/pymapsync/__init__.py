"""pymapsync - Keep live delivery data in sync with an interactive map surface."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pymapsync")
except PackageNotFoundError:
    __version__ = "0+local"
from pymapsync._gate import LoadGate, run_when_ready
from pymapsync.camera import compute_bounds, fit_camera
from pymapsync.config import MapConfig, MapSyncSettings
from pymapsync.controller import (
    MapController,
    add_route,
    add_terminals,
    clear_route,
    clear_terminals,
    create_map,
    initiate_zoom_transition,
    update_map,
)
from pymapsync.exceptions import (
    EmptyBoundsError,
    GeocoderFailure,
    GeocoderNoResults,
    GeocoderUnavailable,
    GeolocationError,
    MapSyncConfigError,
    MapSyncError,
    MissingCoordinateError,
    MissingSourceError,
    PermissionDenied,
    PermissionUnsupported,
    PositionTimeout,
    PositionUnavailable,
    RouteTooShortError,
)
from pymapsync.geolocation import (
    GeolocationFlow,
    GoogleGeocoder,
    StepResult,
    get_device_location,
    get_device_location_place,
)
from pymapsync.icons import HttpIconLoader
from pymapsync.ingestion.coordinates import normalize, normalize_batch, normalize_route
from pymapsync.models import (
    BoundingBox,
    Coordinate,
    Feature,
    FitPadding,
    GeoPosition,
    ItemClick,
    ItemType,
    MapIcon,
    MapItem,
    MapState,
    PermissionState,
    PositionOptions,
    ResourceName,
    TerminalPair,
)
from pymapsync.registry import FeatureSourceRegistry
from pymapsync.surface import Surface, SurfaceOptions

__all__ = [
    "__version__",
    "BoundingBox",
    "Coordinate",
    "EmptyBoundsError",
    "Feature",
    "FeatureSourceRegistry",
    "FitPadding",
    "GeoPosition",
    "GeocoderFailure",
    "GeocoderNoResults",
    "GeocoderUnavailable",
    "GeolocationError",
    "GeolocationFlow",
    "GoogleGeocoder",
    "HttpIconLoader",
    "ItemClick",
    "ItemType",
    "LoadGate",
    "MapConfig",
    "MapController",
    "MapIcon",
    "MapItem",
    "MapState",
    "MapSyncConfigError",
    "MapSyncError",
    "MapSyncSettings",
    "MissingCoordinateError",
    "MissingSourceError",
    "PermissionDenied",
    "PermissionState",
    "PermissionUnsupported",
    "PositionOptions",
    "PositionTimeout",
    "PositionUnavailable",
    "ResourceName",
    "RouteTooShortError",
    "StepResult",
    "Surface",
    "SurfaceOptions",
    "TerminalPair",
    "add_route",
    "add_terminals",
    "clear_route",
    "clear_terminals",
    "compute_bounds",
    "create_map",
    "fit_camera",
    "get_device_location",
    "get_device_location_place",
    "initiate_zoom_transition",
    "normalize",
    "normalize_batch",
    "normalize_route",
    "run_when_ready",
    "update_map",
]
