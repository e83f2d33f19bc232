from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pytest

from pyskytrack._api.geolocation import IpGeolocationProvider, StaticGeolocationProvider, parse_ip_location
from pyskytrack.config import TrackerConfig
from pyskytrack.exceptions import GeolocationError, SkyTrackTransportError


class FakeTransport:
    def __init__(self, payload: Any = None, error: Exception | None = None) -> None:
        self.payload = payload
        self.error = error

    async def get_json(self, url: str, *, params: Mapping[str, str] | None = None) -> Any:
        if self.error is not None:
            raise self.error
        return self.payload

    async def get_text(self, url: str, *, params: Mapping[str, str] | None = None) -> str:
        raise AssertionError("unused")


def test_parse_ip_location_accepts_both_shapes() -> None:
    assert parse_ip_location({"latitude": 52.37, "longitude": 4.89}).as_tuple() == (52.37, 4.89)
    assert parse_ip_location({"status": "success", "lat": "40.7", "lon": "-74.0"}).as_tuple() == (40.7, -74.0)


@pytest.mark.parametrize(
    "payload",
    [
        None,
        {"error": True, "reason": "RateLimited"},
        {"status": "fail", "message": "private range"},
        {"city": "Nowhere"},
        {"latitude": 123.0, "longitude": 0.0},
    ],
)
def test_parse_ip_location_errors(payload: Any) -> None:
    with pytest.raises(GeolocationError):
        parse_ip_location(payload)


@pytest.mark.asyncio
async def test_static_provider_returns_configured_location() -> None:
    position = await StaticGeolocationProvider(48.85, 2.35).locate()
    assert position.as_tuple() == (48.85, 2.35)


@pytest.mark.asyncio
async def test_ip_provider_maps_transport_errors() -> None:
    provider = IpGeolocationProvider(TrackerConfig(), FakeTransport(error=SkyTrackTransportError("offline")))
    with pytest.raises(GeolocationError, match="offline"):
        await provider.locate()


@pytest.mark.asyncio
async def test_ip_provider_resolves_position() -> None:
    provider = IpGeolocationProvider(TrackerConfig(), FakeTransport(payload={"latitude": 52.37, "longitude": 4.89}))
    assert (await provider.locate()).as_tuple() == (52.37, 4.89)
