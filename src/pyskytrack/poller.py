"""Live data poller.

Two triggers feed one ``refresh`` operation:

* every viewport change published by the :class:`ViewportController`;
* a fixed interval timer (``config.poll_interval``), independent of how
  long individual requests take.

Each refresh runs as its own task so a slow feed request never holds up the
timer. A failed refresh keeps the previous snapshot; the next trigger is the
retry. After every applied snapshot, unseen registrations are handed to the
enrichment cache without waiting for the lookups.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from pyskytrack._api.feed import AircraftFeed
from pyskytrack.config import TrackerConfig
from pyskytrack.exceptions import FeedFetchError
from pyskytrack.models.viewport import ViewportState
from pyskytrack.state.enrichment import EnrichmentCache
from pyskytrack.state.snapshot import Snapshot, SnapshotStore
from pyskytrack.state.viewport import ViewportController

_logger = logging.getLogger(__name__)


class LiveDataPoller:
    """Keeps a tracked-aircraft snapshot in sync with the viewport.

    Usage::

        async with LiveDataPoller(config, feed, controller, cache) as poller:
            ...
            poller.snapshot.aircraft
    """

    def __init__(
        self,
        config: TrackerConfig,
        feed: AircraftFeed,
        controller: ViewportController,
        cache: EnrichmentCache,
        *,
        store: SnapshotStore | None = None,
        on_snapshot: Callable[[Snapshot], None] | None = None,
    ) -> None:
        self._config = config
        self._feed = feed
        self._controller = controller
        self._cache = cache
        self._store = store or SnapshotStore(discard_stale=config.discard_stale_responses)
        self._on_snapshot = on_snapshot
        self._timer: asyncio.Task[None] | None = None
        self._inflight: set[asyncio.Task[bool]] = set()
        self._unsubscribe: Callable[[], None] | None = None
        self._requests = 0
        self._successes = 0
        self._failures = 0
        self._discarded = 0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> LiveDataPoller:
        self.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.stop()

    @property
    def is_running(self) -> bool:
        return self._timer is not None

    def start(self) -> None:
        """Subscribe to viewport changes and start the interval timer."""
        if self._timer is not None:
            return
        self._unsubscribe = self._controller.subscribe(self._on_viewport_changed)
        self._timer = asyncio.get_running_loop().create_task(self._interval_loop(), name="pyskytrack-poll-timer")
        _logger.debug("Poller started (interval=%ss)", self._config.poll_interval)

    async def stop(self) -> None:
        """Cancel the timer and every in-flight refresh."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

        timer = self._timer
        self._timer = None
        tasks = list(self._inflight)
        if timer is not None:
            tasks.append(timer)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._inflight.clear()
        _logger.debug("Poller stopped")

    # ------------------------------------------------------------------
    # Triggers
    # ------------------------------------------------------------------

    async def _interval_loop(self) -> None:
        while True:
            self.trigger_refresh()
            await asyncio.sleep(self._config.poll_interval)

    def _on_viewport_changed(self, viewport: ViewportState) -> None:
        if self.is_running:
            self.trigger_refresh(viewport)

    def trigger_refresh(self, viewport: ViewportState | None = None) -> asyncio.Task[bool]:
        """Schedule a refresh without waiting for it."""
        task = asyncio.get_running_loop().create_task(self._guarded_refresh(viewport))
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)
        return task

    async def _guarded_refresh(self, viewport: ViewportState | None) -> bool:
        try:
            return await self.refresh(viewport)
        except Exception:
            self._failures += 1
            _logger.warning("Refresh raised unexpectedly; polling continues", exc_info=True)
            return False

    # ------------------------------------------------------------------
    # Refresh
    # ------------------------------------------------------------------

    @property
    def snapshot(self) -> Snapshot:
        return self._store.snapshot

    async def refresh(self, viewport: ViewportState | None = None) -> bool:
        """Fetch aircraft for *viewport* (default: current) and apply them.

        Returns ``True`` when the response became the current snapshot.
        Feed failures are logged and leave the snapshot untouched.
        """
        target = viewport if viewport is not None else self._controller.state
        sequence = self._store.next_sequence()
        self._requests += 1
        _logger.debug(
            "Refresh #%d center=%s radius=%snm",
            sequence,
            target.center.as_tuple(),
            target.radius_nm,
        )

        try:
            async with asyncio.timeout(self._config.request_timeout):
                aircraft = await self._feed.fetch_aircraft(target)
        except FeedFetchError as exc:
            self._failures += 1
            _logger.warning("Feed refresh #%d failed, keeping previous snapshot: %s", sequence, exc)
            return False
        except TimeoutError:
            self._failures += 1
            _logger.warning(
                "Feed refresh #%d timed out after %ss, keeping previous snapshot",
                sequence,
                self._config.request_timeout,
            )
            return False

        if not self._store.apply(sequence, target, aircraft):
            self._discarded += 1
            _logger.debug("Discarded stale response #%d (applied #%d)", sequence, self._store.snapshot.sequence)
            return False

        self._successes += 1
        snapshot = self._store.snapshot
        _logger.debug("Applied snapshot #%d with %d aircraft", sequence, len(snapshot))
        self._cache.ensure_many(snapshot.registrations())

        if self._on_snapshot is not None:
            try:
                self._on_snapshot(snapshot)
            except Exception:
                _logger.warning("on_snapshot callback failed", exc_info=True)
        return True

    @property
    def stats(self) -> dict[str, int]:
        return {
            "requests": self._requests,
            "successes": self._successes,
            "failures": self._failures,
            "discarded": self._discarded,
            "in_flight": len(self._inflight),
        }
