"""Configuration for pymapsync."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from pymapsync._constants import DEFAULT_ZOOM, GOOGLE_GEOCODE_URL, ICON_MIN_ZOOM
from pymapsync.exceptions import MapSyncConfigError
from pymapsync.ingestion.coordinates import normalize
from pymapsync.models.events import ItemClick
from pymapsync.models.geolocation import PositionOptions
from pymapsync.models.geometry import Coordinate, FitPadding
from pymapsync.surface import SurfaceFactory

if TYPE_CHECKING:
    from pymapsync.geolocation.flow import GeolocationFlow
    from pymapsync.icons import IconLoader

DEFAULT_STYLE_URL = "mapbox://styles/mapbox/streets-v12"
DEFAULT_RTL_TEXT_PLUGIN_URL = "/lib/mapbox-gl-rtl-text.js.min"


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_float(env: Mapping[str, str], key: str) -> float | None:
    value = env.get(key)
    if value is None:
        return None
    try:
        return float(value)
    except ValueError as exc:
        raise MapSyncConfigError(f"{key} must be a number, got {value!r}") from exc


def _no_stage() -> str | None:
    return None


@dataclasses.dataclass(frozen=True)
class MapSyncSettings:
    """Deployment settings shared by every map instance.

    Parameters
    ----------
    style : str or mapping
        Map style URL or inline style document.
    zoom : float
        Initial zoom level.
    icon_min_zoom : float
        Symbol layers are hidden below this zoom.
    icon_base_url : str or None
        Base URL of the icon assets. ``None`` disables HTTP icon loading.
    rtl_text_plugin_url : str or None
        Right-to-left text shaping plugin installed on the surface.
    google_api_key : str or None
        API key for reverse geocoding. ``None`` leaves the geocoder unset.
    geocoder_url : str
        Geocoding endpoint.
    position : PositionOptions
        Position request configuration (cache age, timeout, accuracy).
    fit_padding : FitPadding
        Default padding for camera fits.
    """

    style: str | Mapping[str, Any] = DEFAULT_STYLE_URL
    zoom: float = DEFAULT_ZOOM
    icon_min_zoom: float = ICON_MIN_ZOOM
    icon_base_url: str | None = None
    rtl_text_plugin_url: str | None = DEFAULT_RTL_TEXT_PLUGIN_URL
    google_api_key: str | None = None
    geocoder_url: str = GOOGLE_GEOCODE_URL
    position: PositionOptions = dataclasses.field(default_factory=PositionOptions)
    fit_padding: FitPadding = dataclasses.field(default_factory=FitPadding)

    @classmethod
    def from_env(cls, **overrides: Any) -> MapSyncSettings:
        """Create settings from ``MAPSYNC_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "MAPSYNC_STYLE_URL": "style",
            "MAPSYNC_ICON_BASE_URL": "icon_base_url",
            "MAPSYNC_RTL_PLUGIN_URL": "rtl_text_plugin_url",
            "MAPSYNC_GOOGLE_API_KEY": "google_api_key",
            "MAPSYNC_GEOCODER_URL": "geocoder_url",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        zoom = _env_float(env, "MAPSYNC_ZOOM")
        if zoom is not None and "zoom" not in overrides:
            config_kwargs["zoom"] = zoom

        if "position" not in overrides:
            position_kwargs: dict[str, Any] = {}
            timeout = _env_float(env, "MAPSYNC_POSITION_TIMEOUT")
            if timeout is not None:
                position_kwargs["timeout"] = timeout
            max_age = _env_float(env, "MAPSYNC_POSITION_MAX_AGE")
            if max_age is not None:
                position_kwargs["maximum_age"] = max_age
            position_kwargs["enable_high_accuracy"] = _env_bool(env.get("MAPSYNC_HIGH_ACCURACY"), False)
            config_kwargs["position"] = PositionOptions(**position_kwargs)

        config_kwargs.update(overrides)
        return cls(**config_kwargs)


@dataclasses.dataclass(frozen=True)
class MapConfig:
    """Per-map configuration passed to :func:`pymapsync.create_map`.

    Parameters
    ----------
    container_id : str
        Id of the element (or engine container) that hosts the surface.
    initial_coordinate : Coordinate
        Initial camera center. Any map-item shape accepted by the
        normalizer is converted on construction.
    surface_factory : callable
        Builds the rendering surface from :class:`~pymapsync.surface.SurfaceOptions`.
    on_item_click : callable
        Receives an :class:`~pymapsync.models.events.ItemClick` for clicks
        on vehicles and chargers.
    on_camera_move : callable
        Receives the camera center after every completed move.
    add_controls : bool
        Add the geolocate and compact attribution controls.
    stage_provider : callable
        Returns the current workflow stage. A fresh position fix recenters
        the camera only while this returns ``"draft"``.
    geolocation : GeolocationFlow or None
        Device geolocation flow run once at construction, typically built
        with :meth:`GeolocationFlow.from_settings`. ``None`` skips it.
    icon_loader : IconLoader or None
        Loader for icon images. ``None`` falls back to an
        :class:`~pymapsync.icons.HttpIconLoader` on ``settings.icon_base_url``,
        or skips icon registration when that is unset too.
    settings : MapSyncSettings
        Deployment settings.
    """

    container_id: str
    initial_coordinate: Coordinate
    surface_factory: SurfaceFactory
    on_item_click: Callable[[ItemClick], None]
    on_camera_move: Callable[[Coordinate], None]
    add_controls: bool = False
    stage_provider: Callable[[], str | None] = _no_stage
    geolocation: GeolocationFlow | None = None
    icon_loader: IconLoader | None = None
    settings: MapSyncSettings = dataclasses.field(default_factory=MapSyncSettings)

    def __post_init__(self) -> None:
        if not self.container_id or not self.container_id.strip():
            raise MapSyncConfigError("container_id must be non-empty")
        if not isinstance(self.initial_coordinate, Coordinate):
            object.__setattr__(self, "initial_coordinate", normalize(self.initial_coordinate))
