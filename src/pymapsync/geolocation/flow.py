"""Device geolocation: permission check, position fix, reverse geocode.

Each step returns a :class:`StepResult` instead of raising, so every
failure mode is a plain value callers can inspect. Steps are chained with
short-circuit semantics: the first failure is returned as-is and later steps
never run.

The flow never prompts the user. It only proceeds when the geolocation
permission is *already* granted.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar, cast

from pymapsync._constants import GEOCODER_OK, GEOCODER_ZERO_RESULTS, GEOLOCATION_PERMISSION
from pymapsync.exceptions import (
    GeocoderFailure,
    GeocoderNoResults,
    GeocoderUnavailable,
    GeolocationError,
    PermissionDenied,
    PermissionUnsupported,
    PositionTimeout,
    PositionUnavailable,
)
from pymapsync.geolocation.geocoder import GoogleGeocoder
from pymapsync.geolocation.host import PermissionQuery, PositionProvider, ReverseGeocoder
from pymapsync.models.geolocation import GeoPosition, PermissionState, PositionOptions
from pymapsync.models.geometry import Coordinate

if TYPE_CHECKING:
    import aiohttp

    from pymapsync.config import MapSyncSettings

_logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class StepResult(Generic[T]):
    """Tagged outcome of one geolocation step."""

    value: T | None = None
    error: GeolocationError | None = None

    @classmethod
    def success(cls, value: T) -> StepResult[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: GeolocationError) -> StepResult[Any]:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, or raise the carried error."""
        if self.error is not None:
            raise self.error
        return cast(T, self.value)


class GeolocationFlow:
    """Sequential, short-circuiting geolocation chain.

    Parameters
    ----------
    permissions
        Permission query capability, or ``None`` when the host has none.
    positions
        Position fix capability, or ``None``.
    geocoder
        Reverse geocoder, or ``None``.
    options
        Position request configuration.
    clock
        Monotonic clock used to age the cached fix.
    """

    def __init__(
        self,
        *,
        permissions: PermissionQuery | None = None,
        positions: PositionProvider | None = None,
        geocoder: ReverseGeocoder | None = None,
        options: PositionOptions | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._permissions = permissions
        self._positions = positions
        self._geocoder = geocoder
        self._options = options or PositionOptions()
        self._clock = clock
        self._last_fix: tuple[float, GeoPosition] | None = None
        self._owned_geocoder: GoogleGeocoder | None = None

    @classmethod
    def from_settings(
        cls,
        settings: MapSyncSettings,
        *,
        permissions: PermissionQuery | None = None,
        positions: PositionProvider | None = None,
        session: aiohttp.ClientSession | None = None,
    ) -> GeolocationFlow:
        """Build a flow using the position options and geocoder in *settings*.

        A :class:`GoogleGeocoder` is created only when ``google_api_key`` is
        set; it is closed by :meth:`aclose`.
        """
        geocoder: GoogleGeocoder | None = None
        if settings.google_api_key:
            geocoder = GoogleGeocoder(settings.google_api_key, base_url=settings.geocoder_url, session=session)
        flow = cls(permissions=permissions, positions=positions, geocoder=geocoder, options=settings.position)
        flow._owned_geocoder = geocoder
        return flow

    async def aclose(self) -> None:
        if self._owned_geocoder is not None:
            await self._owned_geocoder.close()

    @property
    def options(self) -> PositionOptions:
        return self._options

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    async def query_permission(self) -> StepResult[PermissionState]:
        if self._permissions is None:
            return StepResult.failure(PermissionUnsupported("Permission query capability is not available"))
        try:
            raw_state = await self._permissions.query(GEOLOCATION_PERMISSION)
        except Exception:
            _logger.debug("Permission query failed", exc_info=True)
            return StepResult.failure(PermissionDenied(PermissionState.UNKNOWN))

        state = PermissionState(str(raw_state).strip().lower())
        if state is PermissionState.GRANTED:
            return StepResult.success(state)
        return StepResult.failure(PermissionDenied(state))

    async def get_position(self) -> StepResult[GeoPosition]:
        """Get a position fix, reusing the last one while it is fresh enough."""
        if self._positions is None:
            return StepResult.failure(PositionUnavailable("Geolocation capability is not available"))

        options = self._options
        if self._last_fix is not None and options.maximum_age > 0:
            fetched_at, fix = self._last_fix
            if self._clock() - fetched_at <= options.maximum_age:
                _logger.debug("Reusing cached position fix")
                return StepResult.success(fix)

        try:
            fix = await asyncio.wait_for(self._positions.get_current_position(options), options.timeout)
        except TimeoutError:
            return StepResult.failure(PositionTimeout(f"No position fix within {options.timeout}s"))
        except (PositionUnavailable, PositionTimeout) as exc:
            return StepResult.failure(exc)
        except Exception as exc:
            _logger.debug("Position provider failed", exc_info=True)
            return StepResult.failure(PositionUnavailable(str(exc) or type(exc).__name__))

        self._last_fix = (self._clock(), fix)
        return StepResult.success(fix)

    async def resolve_address(self, coordinate: Coordinate) -> StepResult[str]:
        """Reverse geocode *coordinate* to its first formatted address."""
        if self._geocoder is None:
            return StepResult.failure(GeocoderUnavailable("No reverse geocoder is configured"))
        try:
            response = await self._geocoder.reverse_geocode(coordinate)
        except GeolocationError as exc:
            return StepResult.failure(exc)
        except Exception:
            _logger.debug("Reverse geocoder raised", exc_info=True)
            return StepResult.failure(GeocoderFailure("UNKNOWN_ERROR"))

        if response.status == GEOCODER_OK:
            if response.results:
                return StepResult.success(response.results[0].formatted_address)
            return StepResult.failure(GeocoderNoResults("Geocoder: No results found"))
        if response.status == GEOCODER_ZERO_RESULTS:
            return StepResult.failure(GeocoderNoResults("Geocoder: No results found"))
        return StepResult.failure(GeocoderFailure(response.status))

    # ------------------------------------------------------------------
    # Chains
    # ------------------------------------------------------------------

    async def locate(self) -> StepResult[GeoPosition]:
        """Permission check, then position fix."""
        permission = await self.query_permission()
        if not permission.ok:
            return StepResult.failure(cast(GeolocationError, permission.error))
        return await self.get_position()

    async def locate_place(self) -> StepResult[str]:
        """Permission check, position fix, then reverse geocode."""
        position = await self.locate()
        if not position.ok:
            return StepResult.failure(cast(GeolocationError, position.error))
        return await self.resolve_address(position.unwrap().coordinate)


async def get_device_location(flow: GeolocationFlow) -> Coordinate:
    """Current device coordinate.

    Like a plain host position request this does not check permission first.

    Raises
    ------
    PositionUnavailable, PositionTimeout
    """
    return (await flow.get_position()).unwrap().coordinate


async def get_device_location_place(flow: GeolocationFlow) -> str:
    """Human readable address of the device position.

    Raises
    ------
    GeolocationError
        The first failing step's error.
    """
    return (await flow.locate_place()).unwrap()
