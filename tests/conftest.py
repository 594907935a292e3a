from __future__ import annotations

import asyncio
from collections.abc import Callable, Mapping
from typing import Any

import pytest

from pymapsync.config import MapConfig, MapSyncSettings
from pymapsync.exceptions import GeolocationError
from pymapsync.models.events import ItemClick
from pymapsync.models.geolocation import GeocodeResponse, GeoPosition, PositionOptions
from pymapsync.models.geometry import Coordinate
from pymapsync.models.resources import MapIcon
from pymapsync.surface import SurfaceOptions


class FakeSource:
    def __init__(self, spec: Mapping[str, Any]) -> None:
        self.spec = dict(spec)
        self.data = spec.get("data")

    def set_data(self, data: Mapping[str, Any]) -> None:
        self.data = data


class FakeSurface:
    """In-memory map engine that enforces the engine's pairing rules."""

    def __init__(self, options: SurfaceOptions | None = None, *, loaded: bool = False) -> None:
        self.options = options
        self._loaded = loaded
        self.sources: dict[str, FakeSource] = {}
        self.layers: dict[str, dict[str, Any]] = {}
        self.images: dict[str, Any] = {}
        self.handlers: list[tuple[str, str | None, Callable[[Mapping[str, Any]], None]]] = []
        self.fit_calls: list[tuple[tuple[float, ...], dict[str, Any]]] = []
        self.center: tuple[float, float] = options.center if options is not None else (0.0, 0.0)
        self.center_calls: list[tuple[float, float]] = []
        self.controls: list[tuple[Mapping[str, Any], str | None]] = []
        self.rtl_plugin: str | None = None
        self.calls: list[tuple[str, str]] = []

    # engine API -------------------------------------------------------

    def loaded(self) -> bool:
        return self._loaded

    def on(self, event: str, handler: Callable[[Mapping[str, Any]], None], layer_id: str | None = None) -> None:
        self.handlers.append((event, layer_id, handler))

    def add_image(self, image_id: str, image: Any) -> None:
        self.images[image_id] = image

    def add_source(self, source_id: str, spec: Mapping[str, Any]) -> None:
        if source_id in self.sources:
            raise ValueError(f"There is already a source with ID {source_id!r}")
        self.sources[source_id] = FakeSource(spec)
        self.calls.append(("add_source", source_id))

    def get_source(self, source_id: str) -> FakeSource | None:
        return self.sources.get(source_id)

    def remove_source(self, source_id: str) -> None:
        if any(layer["source"] == source_id for layer in self.layers.values()):
            raise ValueError(f"Source {source_id!r} is still used by a layer")
        del self.sources[source_id]
        self.calls.append(("remove_source", source_id))

    def add_layer(self, spec: Mapping[str, Any]) -> None:
        layer_id = spec["id"]
        if layer_id in self.layers:
            raise ValueError(f"Layer {layer_id!r} already exists")
        if spec["source"] not in self.sources:
            raise ValueError(f"Layer {layer_id!r} references missing source {spec['source']!r}")
        self.layers[layer_id] = dict(spec)
        self.calls.append(("add_layer", layer_id))

    def get_layer(self, layer_id: str) -> dict[str, Any] | None:
        return self.layers.get(layer_id)

    def remove_layer(self, layer_id: str) -> None:
        del self.layers[layer_id]
        self.calls.append(("remove_layer", layer_id))

    def fit_bounds(self, bounds: tuple[float, ...], options: Mapping[str, Any]) -> None:
        self.fit_calls.append((tuple(bounds), dict(options)))

    def set_center(self, center: tuple[float, float]) -> None:
        self.center = center
        self.center_calls.append(center)

    def get_center(self) -> tuple[float, float]:
        return self.center

    def add_control(self, control: Mapping[str, Any], position: str | None = None) -> None:
        self.controls.append((control, position))

    def set_rtl_text_plugin(self, url: str) -> None:
        self.rtl_plugin = url

    # test helpers -----------------------------------------------------

    def fire(self, event: str, payload: Mapping[str, Any] | None = None, layer_id: str | None = None) -> None:
        if event == "load":
            self._loaded = True
        for name, target, handler in list(self.handlers):
            if name == event and target == layer_id:
                handler(payload or {})

    def feature_ids(self, source_id: str) -> list[Any]:
        data = self.sources[source_id].data
        return [feature["properties"]["id"] for feature in data["features"]]


class FakePermissions:
    def __init__(self, state: str = "granted") -> None:
        self.state = state
        self.names: list[str] = []

    async def query(self, name: str) -> str:
        self.names.append(name)
        return self.state


class FakePositions:
    def __init__(
        self,
        coordinate: Coordinate | None = None,
        *,
        error: Exception | None = None,
        delay: float = 0.0,
    ) -> None:
        self.coordinate = coordinate or Coordinate(longitude=-122.0, latitude=37.0)
        self.error = error
        self.delay = delay
        self.requests: list[PositionOptions] = []

    async def get_current_position(self, options: PositionOptions) -> GeoPosition:
        self.requests.append(options)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return GeoPosition(coordinate=self.coordinate, high_accuracy=options.enable_high_accuracy)


class FakeGeocoder:
    def __init__(self, response: GeocodeResponse | None = None, *, error: GeolocationError | None = None) -> None:
        self.response = response or GeocodeResponse(status="OK", results=[])
        self.error = error
        self.requests: list[Coordinate] = []

    async def reverse_geocode(self, coordinate: Coordinate) -> GeocodeResponse:
        self.requests.append(coordinate)
        if self.error is not None:
            raise self.error
        return self.response


class FakeIconLoader:
    def __init__(self, failing: set[MapIcon] | None = None) -> None:
        self.failing = failing or set()
        self.requested: list[MapIcon] = []

    async def load(self, icon: MapIcon) -> bytes:
        self.requested.append(icon)
        await asyncio.sleep(0)
        if icon in self.failing:
            raise OSError(f"cannot decode {icon}")
        return f"<{icon}>".encode()


@pytest.fixture
def fakes() -> Any:
    """Namespace with the fake host classes."""

    class _Fakes:
        Surface = FakeSurface
        Permissions = FakePermissions
        Positions = FakePositions
        Geocoder = FakeGeocoder
        IconLoader = FakeIconLoader

    return _Fakes


@pytest.fixture
def surface() -> FakeSurface:
    return FakeSurface()


@pytest.fixture
def map_config() -> Callable[..., tuple[MapConfig, dict[str, Any]]]:
    """Build a MapConfig wired to a FakeSurface and recording handlers."""

    def _build(**overrides: Any) -> tuple[MapConfig, dict[str, Any]]:
        recorded: dict[str, Any] = {"clicks": [], "moves": [], "surfaces": []}

        def _factory(options: SurfaceOptions) -> FakeSurface:
            created = FakeSurface(options)
            recorded["surfaces"].append(created)
            return created

        def _on_click(click: ItemClick) -> None:
            recorded["clicks"].append(click)

        def _on_move(center: Coordinate) -> None:
            recorded["moves"].append(center)

        kwargs: dict[str, Any] = {
            "container_id": "map",
            "initial_coordinate": Coordinate(longitude=4.9, latitude=52.37),
            "surface_factory": _factory,
            "on_item_click": _on_click,
            "on_camera_move": _on_move,
            "settings": MapSyncSettings(rtl_text_plugin_url=None),
        }
        kwargs.update(overrides)
        return MapConfig(**kwargs), recorded

    return _build
