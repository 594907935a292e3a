"""Reverse geocoding against the Google Geocoding HTTP API."""

from __future__ import annotations

import json
import logging
from typing import Any

import aiohttp
from pydantic import ValidationError

from pymapsync._constants import GOOGLE_GEOCODE_URL
from pymapsync._redact import redact_for_log
from pymapsync.exceptions import GeocoderFailure, MapSyncConfigError
from pymapsync.models.geolocation import GeocodeResponse
from pymapsync.models.geometry import Coordinate

_logger = logging.getLogger(__name__)


class GoogleGeocoder:
    """Async reverse geocoder.

    Usage::

        async with GoogleGeocoder(api_key) as geocoder:
            response = await geocoder.reverse_geocode(coordinate)

    An externally owned :class:`aiohttp.ClientSession` may be passed in; it is
    then left open on exit.
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = GOOGLE_GEOCODE_URL,
        session: aiohttp.ClientSession | None = None,
        timeout: float = 10.0,
    ) -> None:
        if not api_key:
            raise MapSyncConfigError("A geocoding API key is required")
        self._api_key = api_key
        self._base_url = base_url
        self._external_session = session is not None
        self._http_session = session
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    async def __aenter__(self) -> GoogleGeocoder:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession(timeout=self._timeout)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    async def close(self) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
        self._http_session = None

    def _require_session(self) -> aiohttp.ClientSession:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession(timeout=self._timeout)
        return self._http_session

    async def reverse_geocode(self, coordinate: Coordinate) -> GeocodeResponse:
        """Issue one reverse geocoding request for *coordinate*.

        Transport failures and malformed bodies raise
        :class:`~pymapsync.exceptions.GeocoderFailure`; service-level statuses
        are returned as-is for the flow to interpret.
        """
        params = {
            "latlng": f"{coordinate.latitude},{coordinate.longitude}",
            "key": self._api_key,
        }
        _logger.debug("Geocode request url=%s params=%s", self._base_url, redact_for_log(params))
        http = self._require_session()
        try:
            async with http.get(self._base_url, params=params) as response:
                if response.status != 200:
                    raise GeocoderFailure(f"HTTP_{response.status}")
                body = await response.json(content_type=None)
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise GeocoderFailure("REQUEST_FAILED") from exc
        except json.JSONDecodeError as exc:
            raise GeocoderFailure("INVALID_RESPONSE") from exc

        if not isinstance(body, dict):
            raise GeocoderFailure("INVALID_RESPONSE")
        try:
            parsed = GeocodeResponse.model_validate(body)
        except ValidationError as exc:
            raise GeocoderFailure("INVALID_RESPONSE") from exc
        _logger.debug("Geocode response status=%s results=%d", parsed.status, len(parsed.results))
        return parsed
