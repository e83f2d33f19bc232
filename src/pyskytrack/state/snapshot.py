"""Atomic holder for the current tracked-aircraft snapshot.

Feed responses can arrive out of order when a viewport-change refresh races
the interval refresh. By default the response that *arrives* last wins.
With ``discard_stale=True`` every request carries a sequence number and a
response older than the applied one is dropped instead.
"""

from __future__ import annotations

import itertools
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from pyskytrack.ingestion.normalize import distinct_registrations
from pyskytrack.models.aircraft import TrackedAircraft
from pyskytrack.models.viewport import ViewportState


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Full set of tracked aircraft as of the last applied poll response."""

    sequence: int
    viewport: ViewportState | None
    aircraft: tuple[TrackedAircraft, ...]
    received_at: float | None = None

    def __len__(self) -> int:
        return len(self.aircraft)

    def registrations(self) -> list[str]:
        """Distinct registrations in snapshot order."""
        return distinct_registrations(ac.registration for ac in self.aircraft)


EMPTY_SNAPSHOT = Snapshot(sequence=-1, viewport=None, aircraft=())


class SnapshotStore:
    def __init__(
        self,
        *,
        discard_stale: bool = False,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._discard_stale = discard_stale
        self._clock = clock
        self._sequence = itertools.count()
        self._snapshot = EMPTY_SNAPSHOT

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    @property
    def discard_stale(self) -> bool:
        return self._discard_stale

    def next_sequence(self) -> int:
        """Sequence number for a request about to be issued."""
        return next(self._sequence)

    def apply(
        self,
        sequence: int,
        viewport: ViewportState | None,
        aircraft: Iterable[TrackedAircraft],
    ) -> bool:
        """Replace the snapshot wholesale. Returns ``False`` if discarded."""
        if self._discard_stale and sequence < self._snapshot.sequence:
            return False
        self._snapshot = Snapshot(
            sequence=sequence,
            viewport=viewport,
            aircraft=tuple(aircraft),
            received_at=self._clock(),
        )
        return True
