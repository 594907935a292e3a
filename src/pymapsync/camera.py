"""Camera fitting over dynamic point sets."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pymapsync.exceptions import EmptyBoundsError
from pymapsync.models.geometry import BoundingBox, Coordinate, FitPadding
from pymapsync.surface import Surface

_logger = logging.getLogger(__name__)


def compute_bounds(points: Iterable[Coordinate]) -> BoundingBox:
    """Return the minimal box covering *points*.

    A single point gives a zero-area box, which is valid.

    Raises
    ------
    EmptyBoundsError
        If *points* is empty.
    """
    points = list(points)
    if not points:
        raise EmptyBoundsError("Cannot compute bounds of an empty point set")
    longitudes = [p.longitude for p in points]
    latitudes = [p.latitude for p in points]
    return BoundingBox(min(longitudes), min(latitudes), max(longitudes), max(latitudes))


def fit_camera(
    surface: Surface,
    box: BoundingBox,
    padding: FitPadding | None = None,
    options: Mapping[str, Any] | None = None,
) -> None:
    """Ask the surface for an animated transition framing *box*.

    Returns immediately; completion surfaces as a ``moveend`` event.
    Engine *options* (``duration``, ``maxZoom``...) are passed through, but
    *padding* always replaces a ``padding`` key in them.
    """
    padding = padding or FitPadding()
    fit_options: dict[str, Any] = {**(options or {}), "padding": padding.as_dict()}
    _logger.debug("Camera fit requested box=%s padding=%s", tuple(box), fit_options["padding"])
    surface.fit_bounds(tuple(box), fit_options)
