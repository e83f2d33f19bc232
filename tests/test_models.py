from __future__ import annotations

import pytest
from pydantic import ValidationError

from pyskytrack.models import (
    EnrichmentRecord,
    EnrichmentStatus,
    GeoPosition,
    PhotoCredit,
    TrackedAircraft,
    ViewportState,
)


def test_tracked_aircraft_from_feed_record() -> None:
    aircraft = TrackedAircraft.model_validate(
        {
            "hex": "406a3b",
            "type": "adsb_icao",
            "flight": "BAW123  ",
            "r": "g-abcd",
            "t": "A320",
            "alt_baro": 35000,
            "alt_geom": 35575,
            "gs": 451.3,
            "track": 271.4,
            "lat": 51.47,
            "lon": -0.4543,
        }
    )

    assert aircraft.registration == "G-ABCD"
    assert aircraft.callsign == "BAW123"
    assert aircraft.aircraft_type == "A320"
    assert aircraft.altitude == 35575
    assert aircraft.speed == pytest.approx(451.3)
    assert aircraft.heading == pytest.approx(271.4)
    assert aircraft.hex == "406a3b"
    assert aircraft.raw["type"] == "adsb_icao"


def test_tracked_aircraft_placeholders_become_none() -> None:
    aircraft = TrackedAircraft.model_validate({"r": "", "flight": "   ", "lat": 10.0, "lon": 20.0})

    assert aircraft.registration is None
    assert aircraft.callsign is None
    assert aircraft.heading == 0.0
    assert aircraft.altitude is None


def test_tracked_aircraft_ground_altitude_and_heading_fallback() -> None:
    aircraft = TrackedAircraft.model_validate(
        {"alt_baro": "ground", "true_heading": 365.0, "lat": 1.0, "lon": 2.0}
    )

    assert aircraft.altitude == 0
    assert aircraft.heading == pytest.approx(5.0)


def test_tracked_aircraft_requires_position() -> None:
    with pytest.raises(ValidationError):
        TrackedAircraft.model_validate({"r": "G-ABCD", "lon": 2.0})
    with pytest.raises(ValidationError):
        TrackedAircraft.model_validate({"r": "G-ABCD", "lat": 120.0, "lon": 2.0})


def test_identity_key_prefers_registration() -> None:
    registered = TrackedAircraft(registration="G-ABCD", lat=0.0, lon=0.0)
    anonymous = TrackedAircraft(lat=0.0, lon=0.0)

    assert registered.identity_key(3) == "G-ABCD"
    assert anonymous.identity_key(3) == "#3"


def test_tracked_aircraft_is_frozen() -> None:
    aircraft = TrackedAircraft(lat=0.0, lon=0.0)
    with pytest.raises(ValidationError):
        aircraft.lat = 1.0  # type: ignore[misc]


def test_viewport_state_radius_and_longitude_wrap() -> None:
    viewport = ViewportState.create(51.505, 179.0 + 2.0, 5)

    assert viewport.center.lon == pytest.approx(-179.0)
    assert viewport.radius_nm == pytest.approx(125.0)


def test_geo_position_rejects_invalid_latitude() -> None:
    with pytest.raises(ValidationError):
        GeoPosition(lat=-91.0, lon=0.0)


def test_enrichment_record_factories() -> None:
    found = EnrichmentRecord.found("G-ABCD", PhotoCredit(image_url=" https://img/x.jpg ", author=" Jane "))
    missing = EnrichmentRecord.not_found("G-ABCD")
    failed = EnrichmentRecord.failed("G-ABCD", "boom")

    assert found.status is EnrichmentStatus.FOUND
    assert found.image_url == "https://img/x.jpg"
    assert found.author == "Jane"
    assert missing.image_url is None and missing.author == "Unknown"
    assert failed.status is EnrichmentStatus.FAILED and failed.error == "boom"
    assert EnrichmentRecord.pending("G-ABCD").status is EnrichmentStatus.PENDING
    assert not EnrichmentStatus.PENDING.is_terminal
    assert all(s.is_terminal for s in (EnrichmentStatus.FOUND, EnrichmentStatus.NOT_FOUND, EnrichmentStatus.FAILED))


def test_photo_credit_completeness() -> None:
    assert PhotoCredit(image_url="https://img/x.jpg", author="Jane").is_complete
    assert not PhotoCredit(image_url=None, author="").is_complete
    assert not PhotoCredit(image_url="https://img/x.jpg", author="  ").is_complete
