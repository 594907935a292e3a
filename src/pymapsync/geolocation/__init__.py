"""Device geolocation flow and its host capabilities."""

from __future__ import annotations

from pymapsync.geolocation.flow import (
    GeolocationFlow,
    StepResult,
    get_device_location,
    get_device_location_place,
)
from pymapsync.geolocation.geocoder import GoogleGeocoder
from pymapsync.geolocation.host import PermissionQuery, PositionProvider, ReverseGeocoder

__all__ = [
    "GeolocationFlow",
    "GoogleGeocoder",
    "PermissionQuery",
    "PositionProvider",
    "ReverseGeocoder",
    "StepResult",
    "get_device_location",
    "get_device_location_place",
]
