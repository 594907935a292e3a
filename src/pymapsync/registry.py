"""Named source/layer pairs on a surface.

Every resource is a GeoJSON source plus a layer with the same id. The
registry keeps the pairing intact: a layer is only added after its source
exists, and removed before its source goes away. The surface itself is the
record of what exists, so repeated or interleaved calls (from the ready
handler, caller updates and the location flow) always see current state.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from pymapsync._constants import ICON_MIN_ZOOM, ROUTE_LINE_COLOR, ROUTE_LINE_WIDTH
from pymapsync.exceptions import MissingSourceError
from pymapsync.models.geometry import Coordinate, Feature, feature_collection, line_string
from pymapsync.models.resources import RESOURCE_ICONS, TERMINAL_RESOURCES, MapIcon, ResourceName
from pymapsync.surface import Surface

_logger = logging.getLogger(__name__)


def _empty_source(data: dict[str, Any] | None = None) -> dict[str, Any]:
    return {"type": "geojson", "data": data if data is not None else feature_collection()}


class FeatureSourceRegistry:
    """Idempotent creation, update and removal of named resources."""

    def __init__(self, surface: Surface, *, icon_min_zoom: float = ICON_MIN_ZOOM) -> None:
        self._surface = surface
        self._icon_min_zoom = icon_min_zoom

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def has_source(self, name: str) -> bool:
        return self._surface.get_source(name) is not None

    def has_layer(self, name: str) -> bool:
        return self._surface.get_layer(name) is not None

    def names(self) -> list[ResourceName]:
        """Managed resources whose source currently exists."""
        return [name for name in ResourceName if self.has_source(name)]

    # ------------------------------------------------------------------
    # Symbol resources
    # ------------------------------------------------------------------

    def ensure_resource(self, name: str, icon: MapIcon | str | None = None) -> None:
        """Create an empty source and its symbol layer unless the source exists.

        Icons always render: overlap is allowed and placement collisions are
        ignored, so dense clusters are never culled.
        """
        if self.has_source(name):
            return
        icon_id = icon if icon is not None else RESOURCE_ICONS[ResourceName(name)]
        self._surface.add_source(name, _empty_source())
        self._surface.add_layer(
            {
                "id": name,
                "type": "symbol",
                "source": name,
                "minzoom": self._icon_min_zoom,
                "layout": {
                    "icon-image": str(icon_id),
                    "icon-allow-overlap": True,
                    "icon-ignore-placement": True,
                },
            }
        )
        _logger.debug("Created symbol resource name=%s icon=%s", name, icon_id)

    def set_data(self, name: str, features: Iterable[Feature]) -> None:
        """Replace the whole feature collection bound to *name*.

        Raises
        ------
        MissingSourceError
            If the source has not been created.
        """
        source = self._surface.get_source(name)
        if source is None:
            raise MissingSourceError(name)
        features = list(features)
        source.set_data(feature_collection(features))
        _logger.debug("Source data replaced name=%s features=%d", name, len(features))

    def set_point(self, name: str, coordinate: Coordinate) -> None:
        """Replace the data of *name* with a single point."""
        self.set_data(name, [Feature(coordinate=coordinate)])

    def remove_pair(self, names: Iterable[str]) -> None:
        """Remove layer then source for each name where both exist."""
        for name in names:
            if not (self.has_layer(name) and self.has_source(name)):
                continue
            self._surface.remove_layer(name)
            self._surface.remove_source(name)
            _logger.debug("Removed resource name=%s", name)

    # ------------------------------------------------------------------
    # Route
    # ------------------------------------------------------------------

    def add_route(self, coordinates: Iterable[Coordinate]) -> None:
        """Create the route line unless one already exists.

        An existing route keeps its geometry; clear it first to redraw.
        """
        name = ResourceName.ROUTE
        if self.has_source(name):
            return
        coordinates = list(coordinates)
        self._surface.add_source(name, _empty_source(line_string(coordinates)))
        self._surface.add_layer(
            {
                "id": name,
                "type": "line",
                "source": name,
                "layout": {"line-join": "round", "line-cap": "round"},
                "paint": {"line-color": ROUTE_LINE_COLOR, "line-width": ROUTE_LINE_WIDTH},
            }
        )
        _logger.debug("Created route with %d waypoints", len(coordinates))

    def clear_route(self) -> None:
        self.remove_pair([ResourceName.ROUTE])

    # ------------------------------------------------------------------
    # Terminals
    # ------------------------------------------------------------------

    def add_terminal_pair(self) -> None:
        """Create pickup and dropoff together, only when neither exists."""
        if any(self.has_source(name) for name in TERMINAL_RESOURCES):
            return
        for name in TERMINAL_RESOURCES:
            self.ensure_resource(name)

    def clear_terminal_pair(self) -> None:
        """Remove pickup and dropoff together, only when both pairs are complete."""
        complete = all(self.has_source(name) and self.has_layer(name) for name in TERMINAL_RESOURCES)
        if not complete:
            return
        self.remove_pair(TERMINAL_RESOURCES)

    def terminals_present(self) -> bool:
        return all(self.has_source(name) for name in TERMINAL_RESOURCES)
