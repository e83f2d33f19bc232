"""Per-registration enrichment cache.

Records are created at most once per registration and only ever move from
``pending`` to one terminal status. Failures are cached like successes so a
flaky or blocking photo site is hit once per registration per session.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from pyskytrack._api.enrichment import EnrichmentProvider
from pyskytrack.exceptions import EnrichmentFetchError, SkyTrackError
from pyskytrack.ingestion.normalize import normalize_registration
from pyskytrack.models.enrichment import EnrichmentRecord, EnrichmentStatus

_logger = logging.getLogger(__name__)


class EnrichmentCache:
    """Memoized photo/author lookups keyed by registration.

    Usage::

        cache = EnrichmentCache(provider, timeout=10.0)
        cache.ensure_fetched("G-ABCD")
        await cache.join()
        cache.lookup("G-ABCD")
    """

    def __init__(
        self,
        provider: EnrichmentProvider,
        *,
        timeout: float | None = None,
        on_resolved: Callable[[EnrichmentRecord], None] | None = None,
    ) -> None:
        self._provider = provider
        self._timeout = timeout
        self._on_resolved = on_resolved
        self._records: dict[str, EnrichmentRecord] = {}
        self._tasks: set[asyncio.Task[None]] = set()
        self._lookup_calls = 0
        self._closed = False

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, registration: object) -> bool:
        return normalize_registration(registration) in self._records

    def lookup(self, registration: str | None) -> EnrichmentRecord | None:
        """Current record for *registration*, or ``None`` if never requested."""
        key = normalize_registration(registration)
        if key is None:
            return None
        return self._records.get(key)

    def records(self) -> Mapping[str, EnrichmentRecord]:
        return dict(self._records)

    @property
    def pending_count(self) -> int:
        return len(self._tasks)

    def ensure_fetched(self, registration: str | None) -> asyncio.Task[None] | None:
        """Start a lookup for *registration* unless one exists already.

        The pending record is inserted before anything is awaited, so any
        number of callers on the same event loop trigger one lookup.

        Returns the lookup task, or ``None`` when nothing was started.
        """
        key = normalize_registration(registration)
        if key is None or key in self._records:
            return None
        if self._closed:
            raise SkyTrackError("Enrichment cache is closed")

        self._records[key] = EnrichmentRecord.pending(key)
        task = asyncio.get_running_loop().create_task(self._fetch(key), name=f"enrich:{key}")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def ensure_many(self, registrations: Iterable[str | None]) -> list[asyncio.Task[None]]:
        started: list[asyncio.Task[None]] = []
        for registration in registrations:
            task = self.ensure_fetched(registration)
            if task is not None:
                started.append(task)
        if started:
            _logger.debug("Queued %d enrichment lookups (%d cached)", len(started), len(self._records))
        return started

    async def _fetch(self, registration: str) -> None:
        self._lookup_calls += 1
        try:
            async with asyncio.timeout(self._timeout):
                credit = await self._provider.lookup(registration)
        except (EnrichmentFetchError, TimeoutError) as exc:
            _logger.warning("Enrichment lookup for %s failed: %s", registration, exc or type(exc).__name__)
            self._resolve(EnrichmentRecord.failed(registration, str(exc) or type(exc).__name__))
            return
        except Exception as exc:
            _logger.warning("Enrichment lookup for %s raised unexpectedly", registration, exc_info=True)
            self._resolve(EnrichmentRecord.failed(registration, repr(exc)))
            return

        if credit is None or not credit.is_complete:
            self._resolve(EnrichmentRecord.not_found(registration))
        else:
            self._resolve(EnrichmentRecord.found(registration, credit))

    def _resolve(self, record: EnrichmentRecord) -> None:
        current = self._records.get(record.registration)
        if current is None or current.status is not EnrichmentStatus.PENDING:
            _logger.debug("Ignoring late resolution for %s (%s)", record.registration, current)
            return
        self._records[record.registration] = record
        _logger.debug("Enrichment %s -> %s", record.registration, record.status)
        if self._on_resolved is not None:
            try:
                self._on_resolved(record)
            except Exception:
                _logger.warning("on_resolved callback failed for %s", record.registration, exc_info=True)

    async def join(self) -> None:
        """Wait until every lookup started so far has resolved."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def aclose(self) -> None:
        """Cancel outstanding lookups. Resolved records stay readable."""
        self._closed = True
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    @property
    def stats(self) -> dict[str, Any]:
        counts = {status.value: 0 for status in EnrichmentStatus}
        for record in self._records.values():
            counts[record.status.value] += 1
        return {
            "entries": len(self._records),
            "lookups": self._lookup_calls,
            "in_flight": len(self._tasks),
            **counts,
        }
