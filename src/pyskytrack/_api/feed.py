"""Live-traffic feed endpoint.

adsb.lol compatible ``GET /v2/point/{lat}/{lon}/{radius}`` which answers
``{"ac": [...], "now": ..., "total": ...}`` with readsb-style aircraft
records.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from pydantic import ValidationError

from pyskytrack._transport import Transport
from pyskytrack.config import TrackerConfig
from pyskytrack.exceptions import FeedFetchError, SkyTrackTransportError
from pyskytrack.models.aircraft import TrackedAircraft
from pyskytrack.models.viewport import ViewportState

_logger = logging.getLogger(__name__)


class AircraftFeed(Protocol):
    """Anything that can list the aircraft inside a viewport."""

    async def fetch_aircraft(self, viewport: ViewportState) -> list[TrackedAircraft]: ...


def build_point_url(base_url: str, lat: float, lon: float, radius_nm: float) -> str:
    return f"{base_url.rstrip('/')}/v2/point/{lat:.6f}/{lon:.6f}/{radius_nm:g}"


def parse_feed_response(payload: Any) -> list[TrackedAircraft]:
    """Parse a point-query response into tracked aircraft.

    A missing or null ``ac`` list means "nothing in range". Individual
    records without a usable position are skipped; a payload that is not
    an object, or whose ``ac`` is not a list, raises :class:`FeedFetchError`.
    """
    if not isinstance(payload, dict):
        raise FeedFetchError(f"Feed payload is not an object: {type(payload).__name__}")

    records = payload.get("ac")
    if records is None:
        return []
    if not isinstance(records, list):
        raise FeedFetchError(f"Feed 'ac' field is not a list: {type(records).__name__}")

    aircraft: list[TrackedAircraft] = []
    skipped = 0
    for record in records:
        if not isinstance(record, dict):
            skipped += 1
            continue
        try:
            aircraft.append(TrackedAircraft.model_validate(record))
        except ValidationError:
            skipped += 1
    if skipped:
        _logger.debug("Skipped %d feed records without a usable position", skipped)
    return aircraft


class AdsbLolFeed:
    """Point-and-radius queries against an adsb.lol compatible feed."""

    def __init__(self, config: TrackerConfig, transport: Transport) -> None:
        self._config = config
        self._transport = transport

    async def fetch_aircraft(self, viewport: ViewportState) -> list[TrackedAircraft]:
        url = build_point_url(
            self._config.feed_base_url,
            viewport.center.lat,
            viewport.center.lon,
            viewport.radius_nm,
        )
        try:
            payload = await self._transport.get_json(url)
        except SkyTrackTransportError as exc:
            raise FeedFetchError(f"Feed request failed: {exc}") from exc
        return parse_feed_response(payload)
