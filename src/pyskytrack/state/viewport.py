"""Viewport controller.

Holds the map's center and zoom and publishes every change to subscribers
(the poller). Two phases: ``uninitialized`` until a geolocation answer
arrives, ``active`` afterwards. A failed or unsupported geolocation leaves
the configured default in place and is never retried.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from enum import StrEnum

from pyskytrack._api.geolocation import GeolocationProvider
from pyskytrack.config import TrackerConfig
from pyskytrack.exceptions import GeolocationError
from pyskytrack.geo import clamp_zoom, normalize_coordinates
from pyskytrack.models.viewport import ViewportState

_logger = logging.getLogger(__name__)

ViewportListener = Callable[[ViewportState], None]


class ViewportPhase(StrEnum):
    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"


class ViewportController:
    def __init__(self, config: TrackerConfig) -> None:
        self._config = config
        lat, lon = config.default_center
        self._state = self._make_state(lat, lon, config.default_zoom)
        self._phase = ViewportPhase.UNINITIALIZED
        self._listeners: list[ViewportListener] = []
        self._geolocation_attempted = False
        self._user_moved = False

    @property
    def state(self) -> ViewportState:
        return self._state

    @property
    def phase(self) -> ViewportPhase:
        return self._phase

    def subscribe(self, listener: ViewportListener) -> Callable[[], None]:
        """Register *listener* for viewport changes. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _make_state(self, lat: float, lon: float, zoom: float) -> ViewportState:
        norm_lat, norm_lon = normalize_coordinates(lat, lon)
        return ViewportState.create(
            norm_lat,
            norm_lon,
            clamp_zoom(zoom, self._config.min_zoom, self._config.max_zoom),
        )

    def _publish(self, state: ViewportState) -> bool:
        if state == self._state:
            return False
        self._state = state
        _logger.debug("Viewport -> center=%s zoom=%d", state.center.as_tuple(), state.zoom)
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                _logger.warning("Viewport listener %r failed", listener, exc_info=True)
        return True

    def on_map_moved(self, lat: float, lon: float, zoom: float) -> bool:
        """Pan/zoom-end from the map surface. Returns ``True`` if the viewport changed."""
        self._user_moved = True
        return self._publish(self._make_state(lat, lon, zoom))

    def apply_geolocation(self, lat: float, lon: float) -> bool:
        """Center on a resolved location at the configured initial zoom.

        Ignored once the user has moved the map themselves. Returns ``True``
        if the location was accepted.
        """
        if self._user_moved:
            _logger.debug("Ignoring geolocation (%s, %s): map already moved by user", lat, lon)
            return False
        state = self._make_state(lat, lon, self._config.initial_zoom)
        self._phase = ViewportPhase.ACTIVE
        self._publish(state)
        return True

    def geolocation_failed(self, reason: str) -> None:
        _logger.warning("Geolocation unavailable (%s); keeping default viewport", reason)

    async def resolve_geolocation(
        self,
        provider: GeolocationProvider | None,
        *,
        timeout: float | None = None,
    ) -> bool:
        """One-shot geolocation request. Returns ``True`` if it was applied.

        ``provider=None`` means geolocation is unsupported.
        """
        if self._geolocation_attempted:
            return False
        self._geolocation_attempted = True

        if provider is None:
            self.geolocation_failed("unsupported")
            return False
        try:
            async with asyncio.timeout(timeout):
                position = await provider.locate()
        except GeolocationError as exc:
            self.geolocation_failed(str(exc))
            return False
        except TimeoutError:
            self.geolocation_failed(f"timed out after {timeout}s")
            return False
        try:
            return self.apply_geolocation(position.lat, position.lon)
        except ValueError as exc:
            self.geolocation_failed(f"invalid position: {exc}")
            return False
