"""Geolocation providers used once at startup to center the viewport."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from pydantic import ValidationError

from pyskytrack._transport import Transport
from pyskytrack.config import TrackerConfig
from pyskytrack.exceptions import GeolocationError, SkyTrackTransportError
from pyskytrack.ingestion.normalize import safe_float
from pyskytrack.models.viewport import GeoPosition

_logger = logging.getLogger(__name__)


class GeolocationProvider(Protocol):
    async def locate(self) -> GeoPosition: ...


class StaticGeolocationProvider:
    """Returns a fixed, configured observer location."""

    def __init__(self, lat: float, lon: float) -> None:
        self._position = GeoPosition(lat=lat, lon=lon)

    async def locate(self) -> GeoPosition:
        return self._position


def parse_ip_location(payload: Any) -> GeoPosition:
    """Parse an IP geolocation answer (ipapi.co or ip-api.com shape)."""
    if not isinstance(payload, dict):
        raise GeolocationError("Geolocation payload is not an object")
    if payload.get("error") or payload.get("status") == "fail":
        reason = payload.get("reason") or payload.get("message") or "unknown reason"
        raise GeolocationError(f"Geolocation service refused the lookup: {reason}")

    lat = safe_float(payload.get("latitude", payload.get("lat")))
    lon = safe_float(payload.get("longitude", payload.get("lon")))
    if lat is None or lon is None:
        raise GeolocationError("Geolocation payload has no coordinates")
    try:
        return GeoPosition(lat=lat, lon=lon)
    except ValidationError as exc:
        raise GeolocationError(f"Geolocation returned invalid coordinates ({lat}, {lon})") from exc


class IpGeolocationProvider:
    """Approximate location of this host from its public IP address."""

    def __init__(self, config: TrackerConfig, transport: Transport) -> None:
        self._config = config
        self._transport = transport

    async def locate(self) -> GeoPosition:
        try:
            payload = await self._transport.get_json(self._config.geolocation_url)
        except SkyTrackTransportError as exc:
            raise GeolocationError(f"Geolocation request failed: {exc}") from exc
        position = parse_ip_location(payload)
        _logger.debug("IP geolocation resolved to %s", position)
        return position
