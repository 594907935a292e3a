"""Map lifecycle controller and the public map operations."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Coroutine, Iterable, Mapping
from typing import Any

from pymapsync._constants import DRAFT_STAGE
from pymapsync._gate import LoadGate, Operation
from pymapsync.camera import compute_bounds, fit_camera
from pymapsync.config import MapConfig
from pymapsync.geolocation.flow import GeolocationFlow
from pymapsync.icons import HttpIconLoader, IconLoader, register_icon
from pymapsync.ingestion.coordinates import normalize, normalize_batch, normalize_route
from pymapsync.models.events import ItemClick, MapState
from pymapsync.models.geometry import Coordinate, Feature, FitPadding, TerminalPair
from pymapsync.models.resources import EAGER_RESOURCES, ITEM_RESOURCES, ItemType, MapIcon, ResourceName
from pymapsync.registry import FeatureSourceRegistry
from pymapsync.surface import Surface, SurfaceEventHandler, SurfaceOptions

_logger = logging.getLogger(__name__)


class MapController:
    """Owns one surface and keeps it in sync with delivery data.

    Must be constructed inside a running event loop: icon loading and the
    device location lookup run as background tasks.

    Usage::

        controller = create_map(config)
        update_map(controller, vehicles, ItemType.VEHICLE)
        ...
        await controller.aclose()
    """

    def __init__(self, config: MapConfig) -> None:
        self._config = config
        self._settings = config.settings
        self._state = MapState.UNINITIALIZED
        self._loop = asyncio.get_running_loop()
        self._tasks: set[asyncio.Task[Any]] = set()
        self._owned_icon_loader: HttpIconLoader | None = None
        self._icon_loader: IconLoader | None = config.icon_loader
        if self._icon_loader is None and self._settings.icon_base_url:
            self._owned_icon_loader = HttpIconLoader(self._settings.icon_base_url)
            self._icon_loader = self._owned_icon_loader

        center = config.initial_coordinate
        self._surface = config.surface_factory(
            SurfaceOptions(
                container=config.container_id,
                style=self._settings.style,
                center=center.as_lon_lat(),
                zoom=self._settings.zoom,
                attribution_control=False,
            )
        )
        self._state = MapState.INITIALIZING
        _logger.debug("Surface created container=%s center=%s", config.container_id, center.as_lon_lat())

        self._registry = FeatureSourceRegistry(self._surface, icon_min_zoom=self._settings.icon_min_zoom)
        self._gate = LoadGate(self._surface)

        if self._settings.rtl_text_plugin_url:
            self._surface.set_rtl_text_plugin(self._settings.rtl_text_plugin_url)
        if config.add_controls:
            self._add_controls()

        # First waiter: eager resources must exist before queued caller updates run.
        self._gate.run_when_ready(self._on_ready)
        self._surface.on("moveend", self._on_move_end)

        if config.geolocation is not None:
            self._spawn(self._show_device_location(config.geolocation))

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def surface(self) -> Surface:
        return self._surface

    @property
    def registry(self) -> FeatureSourceRegistry:
        return self._registry

    @property
    def gate(self) -> LoadGate:
        return self._gate

    @property
    def state(self) -> MapState:
        return self._state

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _spawn(self, coro: Coroutine[Any, Any, Any]) -> None:
        task = self._loop.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def settle(self) -> None:
        """Wait until icon loading and the location lookup have finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def aclose(self) -> None:
        """Cancel outstanding background work and close an owned icon loader."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        for task in tasks:
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._tasks.clear()
        if self._owned_icon_loader is not None:
            await self._owned_icon_loader.close()

    def _add_controls(self) -> None:
        self._surface.add_control(
            {
                "type": "geolocate",
                "position_options": {"enable_high_accuracy": True},
                "track_user_location": True,
            },
            "bottom-left",
        )
        self._surface.add_control({"type": "attribution", "compact": True})

    def _on_ready(self) -> None:
        loader = self._icon_loader
        if loader is not None:
            for icon in MapIcon:
                self._spawn(register_icon(self._surface, loader, icon))

        for name in EAGER_RESOURCES:
            self._registry.ensure_resource(name)
            self._surface.on("click", self._click_handler(name), name)

        self._state = MapState.READY
        _logger.debug("Map ready; eager resources created")

    def _click_handler(self, resource: ResourceName) -> SurfaceEventHandler:
        def _on_click(event: Mapping[str, Any]) -> None:
            features = event.get("features") or []
            if not features:
                return
            properties = features[0].get("properties") or {}
            self._config.on_item_click(ItemClick(id=properties.get("id"), resource_type=resource))

        return _on_click

    def _on_move_end(self, _event: Mapping[str, Any] | None = None) -> None:
        longitude, latitude = self._surface.get_center()
        self._config.on_camera_move(Coordinate(longitude=longitude, latitude=latitude))

    async def _show_device_location(self, flow: GeolocationFlow) -> None:
        """Place the user marker and, in the draft stage, center on it.

        Every failure here is non-fatal: the map works without the marker.
        """
        try:
            result = await flow.locate()
            if not result.ok:
                _logger.debug("Device location unavailable: %s", result.error)
                return
            coordinate = result.unwrap().coordinate
            self._run(lambda: self._show_user_marker(coordinate), activates=False)
            if self._config.stage_provider() == DRAFT_STAGE:
                self._surface.set_center(coordinate.as_lon_lat())
        except Exception:
            _logger.debug("Device location flow failed", exc_info=True)

    def _show_user_marker(self, coordinate: Coordinate) -> None:
        try:
            self._registry.ensure_resource(ResourceName.LOCATION)
            self._registry.set_point(ResourceName.LOCATION, coordinate)
        except Exception:
            _logger.debug("Could not show device location marker", exc_info=True)

    def _run(self, operation: Operation, *, activates: bool = True) -> None:
        def _gated() -> None:
            operation()
            if activates and self._state is MapState.READY:
                self._state = MapState.ACTIVE

        self._gate.run_when_ready(_gated)

    # ------------------------------------------------------------------
    # Map operations
    # ------------------------------------------------------------------

    def update(
        self,
        items: Iterable[Any] | None,
        item_type: ItemType | str | None = None,
        *,
        pickup: Any = None,
        dropoff: Any = None,
        vehicle_location: Any = None,
    ) -> None:
        """Push items, the tracked vehicle and terminal positions to the map.

        Inputs are normalized immediately, so bad coordinates raise here;
        the surface is updated once it is ready. Terminal positions are only
        applied when both are given and the terminal resources exist.
        """
        resource: ResourceName | None = None
        features: list[Feature] | None = None
        if items is not None:
            if item_type is None:
                raise ValueError("item_type is required when items are given")
            resource = ITEM_RESOURCES[ItemType(item_type)]
            features = normalize_batch(items)

        vehicle = normalize_batch([vehicle_location]) if vehicle_location is not None else None
        terminals = TerminalPair.from_optional(
            normalize(pickup) if pickup is not None else None,
            normalize(dropoff) if dropoff is not None else None,
        )

        def _apply() -> None:
            if resource is not None and features is not None:
                self._registry.set_data(resource, features)
            if vehicle is not None:
                self._registry.set_data(ResourceName.VEHICLES, vehicle)
            if terminals is not None and self._registry.terminals_present():
                self._registry.set_point(ResourceName.PICKUP, terminals.pickup)
                self._registry.set_point(ResourceName.DROPOFF, terminals.dropoff)

        self._run(_apply)

    def zoom_to(
        self,
        terminals: Mapping[str, Any] | Iterable[Any],
        padding: FitPadding | Mapping[str, int] | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> None:
        """Frame all *terminals* with a camera transition once ready.

        *options* are extra engine fit options; *padding* replaces any
        ``padding`` key in them.
        """
        values = terminals.values() if isinstance(terminals, Mapping) else terminals
        box = compute_bounds([normalize(t) for t in values])
        if padding is None:
            fit_padding = self._settings.fit_padding
        elif isinstance(padding, FitPadding):
            fit_padding = padding
        else:
            fit_padding = FitPadding.model_validate(padding)
        self._run(lambda: fit_camera(self._surface, box, fit_padding, options), activates=False)

    def add_route(self, ordered_terminals: Iterable[Any]) -> None:
        coordinates = normalize_route(ordered_terminals)
        self._run(lambda: self._registry.add_route(coordinates))

    def clear_route(self) -> None:
        self._run(self._registry.clear_route)

    def add_terminals(self) -> None:
        self._run(self._registry.add_terminal_pair)

    def clear_terminals(self) -> None:
        self._run(self._registry.clear_terminal_pair)


# ----------------------------------------------------------------------
# Functional API
# ----------------------------------------------------------------------


def create_map(config: MapConfig) -> MapController:
    """Create the surface and wire every component together."""
    return MapController(config)


def update_map(
    handle: MapController,
    items: Iterable[Any] | None,
    item_type: ItemType | str | None = None,
    *,
    pickup: Any = None,
    dropoff: Any = None,
    vehicle_location: Any = None,
) -> None:
    handle.update(items, item_type, pickup=pickup, dropoff=dropoff, vehicle_location=vehicle_location)


def initiate_zoom_transition(
    handle: MapController,
    terminals: Mapping[str, Any] | Iterable[Any],
    padding: FitPadding | Mapping[str, int] | None = None,
    options: Mapping[str, Any] | None = None,
) -> None:
    handle.zoom_to(terminals, padding, options)


def add_route(handle: MapController, ordered_terminals: Iterable[Any]) -> None:
    handle.add_route(ordered_terminals)


def clear_route(handle: MapController) -> None:
    handle.clear_route()


def add_terminals(handle: MapController) -> None:
    handle.add_terminals()


def clear_terminals(handle: MapController) -> None:
    handle.clear_terminals()
