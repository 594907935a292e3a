"""Structural interface of the rendering surface.

The surface (a map engine instance) is a black box: pymapsync only creates
sources, layers and images on it, pushes GeoJSON data, and asks for camera
transitions. Any object satisfying :class:`Surface` works; tests use an
in-memory double.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Mapping
from typing import Any, Protocol

#: Event handlers receive the engine's event payload as a mapping.
#: Layer ``click`` events carry ``{"features": [{"properties": {...}}, ...]}``.
SurfaceEventHandler = Callable[[Mapping[str, Any]], None]


class GeoJsonSource(Protocol):
    def set_data(self, data: Mapping[str, Any]) -> None: ...


class Surface(Protocol):
    """Operations pymapsync needs from a map engine."""

    def loaded(self) -> bool: ...

    def on(self, event: str, handler: SurfaceEventHandler, layer_id: str | None = None) -> None: ...

    def add_image(self, image_id: str, image: Any) -> None: ...

    def add_source(self, source_id: str, spec: Mapping[str, Any]) -> None: ...

    def get_source(self, source_id: str) -> GeoJsonSource | None: ...

    def remove_source(self, source_id: str) -> None: ...

    def add_layer(self, spec: Mapping[str, Any]) -> None: ...

    def get_layer(self, layer_id: str) -> Any | None: ...

    def remove_layer(self, layer_id: str) -> None: ...

    def fit_bounds(self, bounds: tuple[float, float, float, float], options: Mapping[str, Any]) -> None: ...

    def set_center(self, center: tuple[float, float]) -> None: ...

    def get_center(self) -> tuple[float, float]:
        """Current camera center as ``(longitude, latitude)``."""
        ...

    def add_control(self, control: Mapping[str, Any], position: str | None = None) -> None: ...

    def set_rtl_text_plugin(self, url: str) -> None: ...


@dataclasses.dataclass(frozen=True)
class SurfaceOptions:
    """Construction parameters handed to the surface factory."""

    container: str
    style: str | Mapping[str, Any]
    center: tuple[float, float]
    zoom: float
    attribution_control: bool = False


SurfaceFactory = Callable[[SurfaceOptions], Surface]
