"""High-level async tracking session."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import aiohttp

from pyskytrack._api.enrichment import AirlinersNetProvider, EnrichmentProvider
from pyskytrack._api.feed import AdsbLolFeed, AircraftFeed
from pyskytrack._api.geolocation import GeolocationProvider, IpGeolocationProvider, StaticGeolocationProvider
from pyskytrack._transport import HttpTransport
from pyskytrack.config import TrackerConfig
from pyskytrack.exceptions import SkyTrackError
from pyskytrack.models.enrichment import EnrichmentRecord
from pyskytrack.models.marker import MarkerDescriptor
from pyskytrack.models.viewport import ViewportState
from pyskytrack.poller import LiveDataPoller
from pyskytrack.presentation import build_render_list
from pyskytrack.state.enrichment import EnrichmentCache
from pyskytrack.state.snapshot import Snapshot
from pyskytrack.state.viewport import ViewportController

_logger = logging.getLogger(__name__)

_UNSET: Any = object()


class LiveTracker:
    """Live aircraft tracking for one map session.

    Usage::

        async with LiveTracker(TrackerConfig.from_env()) as tracker:
            tracker.on_map_moved(48.85, 2.35, 8)
            markers = tracker.render()

    Collaborators (feed, enrichment provider, geolocation provider) default
    to the HTTP implementations and can be injected for testing.
    ``geolocation=None`` behaves like a client without geolocation support:
    the configured default viewport is kept.
    """

    def __init__(
        self,
        config: TrackerConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        feed: AircraftFeed | None = None,
        enrichment: EnrichmentProvider | None = None,
        geolocation: GeolocationProvider | None = _UNSET,
        on_snapshot: Callable[[Snapshot], None] | None = None,
        on_enrichment: Callable[[EnrichmentRecord], None] | None = None,
    ) -> None:
        self._config = config or TrackerConfig()
        self._external_session = session is not None
        self._http_session = session
        self._feed = feed
        self._enrichment = enrichment
        self._geolocation = geolocation
        self._on_snapshot = on_snapshot
        self._on_enrichment = on_enrichment
        self._controller = ViewportController(self._config)
        self._cache: EnrichmentCache | None = None
        self._poller: LiveDataPoller | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> LiveTracker:
        needs_http = (
            self._feed is None
            or self._enrichment is None
            or (self._geolocation is _UNSET and self._config.use_geolocation and self._config.user_location is None)
        )
        if needs_http and self._http_session is None:
            self._http_session = aiohttp.ClientSession()

        transport = HttpTransport(self._config, self._http_session) if self._http_session is not None else None
        feed = self._feed
        if feed is None:
            assert transport is not None  # noqa: S101
            feed = AdsbLolFeed(self._config, transport)
        provider = self._enrichment
        if provider is None:
            assert transport is not None  # noqa: S101
            provider = AirlinersNetProvider(self._config, transport)

        self._cache = EnrichmentCache(
            provider,
            timeout=self._config.request_timeout,
            on_resolved=self._on_enrichment,
        )
        self._poller = LiveDataPoller(
            self._config,
            feed,
            self._controller,
            self._cache,
            on_snapshot=self._on_snapshot,
        )

        try:
            if self._config.use_geolocation:
                await self._controller.resolve_geolocation(
                    self._resolve_geolocation_provider(transport),
                    timeout=self._config.request_timeout,
                )
            self._poller.start()
        except BaseException:
            await self._close()
            raise
        _logger.debug("Tracker started at %s (%s)", self._controller.state, self._controller.phase)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self._close()

    async def _close(self) -> None:
        try:
            if self._poller is not None:
                await self._poller.stop()
            if self._cache is not None:
                await self._cache.aclose()
        finally:
            if not self._external_session and self._http_session is not None:
                await self._http_session.close()
                self._http_session = None

    def _resolve_geolocation_provider(self, transport: HttpTransport | None) -> GeolocationProvider | None:
        if self._geolocation is not _UNSET:
            return self._geolocation
        if self._config.user_location is not None:
            lat, lon = self._config.user_location
            return StaticGeolocationProvider(lat, lon)
        if transport is None:
            return None
        return IpGeolocationProvider(self._config, transport)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_poller(self) -> LiveDataPoller:
        if self._poller is None:
            raise SkyTrackError("Tracker not started. Use 'async with LiveTracker(...) as tracker:'")
        return self._poller

    def _require_cache(self) -> EnrichmentCache:
        if self._cache is None:
            raise SkyTrackError("Tracker not started. Use 'async with LiveTracker(...) as tracker:'")
        return self._cache

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def config(self) -> TrackerConfig:
        return self._config

    @property
    def controller(self) -> ViewportController:
        return self._controller

    @property
    def viewport(self) -> ViewportState:
        return self._controller.state

    @property
    def snapshot(self) -> Snapshot:
        return self._require_poller().snapshot

    @property
    def enrichment(self) -> EnrichmentCache:
        return self._require_cache()

    def on_map_moved(self, lat: float, lon: float, zoom: float) -> bool:
        """Forward a pan/zoom-end event from the map surface."""
        return self._controller.on_map_moved(lat, lon, zoom)

    async def refresh(self) -> bool:
        """Refresh the snapshot now for the current viewport."""
        return await self._require_poller().refresh()

    async def wait_for_enrichment(self) -> None:
        await self._require_cache().join()

    def render(self) -> list[MarkerDescriptor]:
        """Marker descriptors for the current snapshot."""
        return build_render_list(
            self.snapshot.aircraft,
            self._require_cache(),
            enrichment_base_url=self._config.enrichment_base_url,
        )

    @property
    def stats(self) -> dict[str, Any]:
        return {
            "viewport": self._controller.phase.value,
            "poller": self._require_poller().stats,
            "enrichment": self._require_cache().stats,
        }
