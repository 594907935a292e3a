"""Deferral of surface mutations until the first ``load`` event.

The gate subscribes to ``load`` exactly once. Until the event fires,
operations are kept in an ordered waiter list; when it fires every waiter
runs once, in registration order, and the list is discarded for good.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable, Mapping
from typing import Any

from pymapsync.surface import Surface

_logger = logging.getLogger(__name__)

Operation = Callable[[], None]


class LoadGate:
    """Ready flag plus FIFO waiter list for one surface."""

    def __init__(self, surface: Surface) -> None:
        self._surface = surface
        self._ready = False
        self._draining = False
        self._waiters: deque[Operation] = deque()
        surface.on("load", self._on_load)

    @property
    def is_ready(self) -> bool:
        return self._ready

    @property
    def pending(self) -> int:
        """Number of operations waiting for the ready signal."""
        return len(self._waiters)

    def run_when_ready(self, operation: Operation) -> None:
        """Run *operation* now if the surface is ready, otherwise queue it.

        The same operation registered twice runs twice.
        """
        if not self._ready and not self._draining and self._surface.loaded():
            # The surface finished loading before its event reached us; the
            # operation goes behind the queued ones so it runs even if they fail.
            self._waiters.append(operation)
            self._drain()
            return
        if self._ready:
            operation()
            return
        self._waiters.append(operation)
        _logger.debug("Surface not ready; queued operation (pending=%d)", len(self._waiters))

    def _on_load(self, _event: Mapping[str, Any] | None = None) -> None:
        if self._ready or self._draining:
            return
        self._drain()

    def _drain(self) -> None:
        self._draining = True
        errors: list[Exception] = []
        try:
            while self._waiters:
                operation = self._waiters.popleft()
                try:
                    operation()
                except Exception as exc:
                    errors.append(exc)
                    if len(errors) > 1:
                        _logger.debug("Queued operation failed", exc_info=True)
        finally:
            self._ready = True
            self._draining = False
            self._waiters.clear()
        _logger.debug("Surface ready; load gate open")
        if errors:
            raise errors[0]


def run_when_ready(gate: LoadGate, operation: Operation) -> None:
    """Module-level shorthand for :meth:`LoadGate.run_when_ready`."""
    gate.run_when_ready(operation)
