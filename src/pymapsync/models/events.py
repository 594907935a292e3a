"""Events the controller forwards to caller handlers."""

from __future__ import annotations

from enum import StrEnum

from pymapsync.models._base import MapSyncBaseModel
from pymapsync.models.resources import ResourceName


class MapState(StrEnum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    ACTIVE = "active"


class ItemClick(MapSyncBaseModel):
    """A click on a vehicle or charger icon."""

    id: str | int | None
    resource_type: ResourceName
