"""Custom exception hierarchy for pymapsync."""

from __future__ import annotations


class MapSyncError(Exception):
    """Base exception for all pymapsync errors."""


class MapSyncConfigError(MapSyncError):
    """Invalid or missing configuration."""


class MissingCoordinateError(MapSyncError, ValueError):
    """A map item carries neither a top-level nor a nested coordinate pair."""

    def __init__(self, message: str, *, item_id: object = None) -> None:
        self.item_id = item_id
        super().__init__(message)


class RouteTooShortError(MapSyncError, ValueError):
    """A route needs at least two waypoints."""


class EmptyBoundsError(MapSyncError, ValueError):
    """Bounds were requested for an empty point set."""


class MissingSourceError(MapSyncError):
    """Data was pushed to a source that has not been created yet.

    This indicates a caller-ordering bug: the mutation ran before the
    matching ``ensure_resource`` call or outside the load gate.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Source {name!r} does not exist on the surface")


class GeolocationError(MapSyncError):
    """Base for every failure of the device geolocation flow."""


class PermissionUnsupported(GeolocationError):
    """The host exposes no permission query capability."""


class PermissionDenied(GeolocationError):
    """Geolocation permission is not already granted.

    ``prompt`` counts as denied: the flow never asks the user itself.
    """

    def __init__(self, state: str) -> None:
        self.state = state
        super().__init__(f"Geolocation permission not granted (state={state})")


class PositionUnavailable(GeolocationError):
    """The host could not produce a position fix."""


class PositionTimeout(GeolocationError):
    """No position fix arrived within the configured timeout."""


class GeocoderUnavailable(GeolocationError):
    """No reverse geocoding capability is configured."""


class GeocoderNoResults(GeolocationError):
    """The geocoder answered successfully but returned no places."""


class GeocoderFailure(GeolocationError):
    """The geocoder answered with a non-success status."""

    def __init__(self, status: str) -> None:
        self.status = status
        super().__init__(f"Geocoder failed due to: {status}")
