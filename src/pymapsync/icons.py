"""Icon images for the symbol layers.

Icons load independently of each other and of layer creation: a layer may
reference an icon id before its image arrives, and the engine draws it once
``add_image`` is called. A failing icon is logged and skipped.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

import aiohttp

from pymapsync._redact import redact_url
from pymapsync.models.resources import ICON_ASSETS, MapIcon
from pymapsync.surface import Surface

_logger = logging.getLogger(__name__)


class IconLoader(Protocol):
    async def load(self, icon: MapIcon) -> Any:
        """Return image data accepted by ``Surface.add_image``."""
        ...


class HttpIconLoader:
    """Fetch icon assets over HTTP from ``base_url``.

    The raw bytes are handed to the surface as-is; decoding is the engine's
    job.
    """

    def __init__(self, base_url: str, *, session: aiohttp.ClientSession | None = None) -> None:
        self._base_url = base_url.rstrip("/")
        self._external_session = session is not None
        self._http_session = session

    def url_for(self, icon: MapIcon) -> str:
        return f"{self._base_url}/{ICON_ASSETS[icon]}"

    async def load(self, icon: MapIcon) -> bytes:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        url = self.url_for(icon)
        async with self._http_session.get(url) as response:
            response.raise_for_status()
            return await response.read()

    async def close(self) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
        self._http_session = None

    async def __aenter__(self) -> HttpIconLoader:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()


async def register_icon(surface: Surface, loader: IconLoader, icon: MapIcon) -> bool:
    """Load *icon* and add it to *surface*. Returns ``False`` on failure."""
    try:
        image = await loader.load(icon)
        surface.add_image(str(icon), image)
    except Exception:
        target = redact_url(loader.url_for(icon)) if isinstance(loader, HttpIconLoader) else icon
        _logger.debug("Icon load failed icon=%s source=%s", icon, target, exc_info=True)
        return False
    _logger.debug("Icon registered icon=%s", icon)
    return True
