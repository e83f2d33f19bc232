from __future__ import annotations

from pyskytrack.models.aircraft import TrackedAircraft
from pyskytrack.models.enrichment import EnrichmentRecord, PhotoCredit
from pyskytrack.models.marker import PopupKind
from pyskytrack.presentation import (
    aircraft_details,
    build_marker,
    build_popup,
    build_render_list,
    heading_icon_html,
)


class DictRecords:
    def __init__(self, records: dict[str, EnrichmentRecord]) -> None:
        self._records = records

    def lookup(self, registration: str | None) -> EnrichmentRecord | None:
        if registration is None:
            return None
        return self._records.get(registration)


def _aircraft(**overrides: object) -> TrackedAircraft:
    values: dict[str, object] = {
        "r": "G-ABCD",
        "flight": "BAW123 ",
        "lat": 51.47,
        "lon": -0.45,
        "track": 270.0,
        "alt_geom": 3500,
        "gs": 180.4,
        "t": "A320",
    }
    values.update(overrides)
    return TrackedAircraft.model_validate(values)


def test_heading_icon_rotates_to_heading() -> None:
    icon = heading_icon_html(270.0)
    assert "rotate(270.0deg)" in icon
    assert "clip-path" in icon


def test_details_fall_back_to_not_available() -> None:
    aircraft = TrackedAircraft(lat=1.0, lon=2.0)
    assert aircraft_details(aircraft) == (
        "Altitude: N/A",
        "Aircraft Type: N/A",
        "Speed: N/A",
        "Heading: 0°",
        "Registration: N/A",
    )


def test_missing_record_shows_loading() -> None:
    popup = build_popup(_aircraft(), None)
    assert popup.kind is PopupKind.LOADING
    assert popup.title == "Flight: BAW123"
    assert popup.lines == ("Loading...",)


def test_pending_record_shows_loading() -> None:
    popup = build_popup(_aircraft(), EnrichmentRecord.pending("G-ABCD"))
    assert popup.kind is PopupKind.LOADING


def test_found_record_shows_photo_and_credit() -> None:
    record = EnrichmentRecord.found("G-ABCD", PhotoCredit(image_url="https://img/x.jpg", author="Jane Doe"))
    popup = build_popup(_aircraft(), record)

    assert popup.kind is PopupKind.PHOTO
    assert popup.image_url == "https://img/x.jpg"
    assert popup.author == "Jane Doe"
    assert popup.photo_link == "https://www.airliners.net/search?keywords=G-ABCD"
    assert "Altitude: 3500 ft" in popup.lines
    assert "Speed: 180 kt" in popup.lines


def test_photo_link_uses_configured_site() -> None:
    record = EnrichmentRecord.found("G-ABCD", PhotoCredit(image_url="https://img/x.jpg", author="Jane"))
    popup = build_popup(_aircraft(), record, enrichment_base_url="http://photos.test")
    assert popup.photo_link == "http://photos.test/search?keywords=G-ABCD"


def test_terminal_misses_show_details_only() -> None:
    for record in (EnrichmentRecord.not_found("G-ABCD"), EnrichmentRecord.failed("G-ABCD", "HTTP 503")):
        popup = build_popup(_aircraft(), record)
        assert popup.kind is PopupKind.DETAILS
        assert popup.image_url is None
        assert "Registration: G-ABCD" in popup.lines


def test_unregistered_aircraft_shows_details_without_loading() -> None:
    popup = build_popup(_aircraft(r=None, flight=None), None)
    assert popup.kind is PopupKind.DETAILS
    assert popup.title == "Flight: Unknown"


def test_marker_carries_position_heading_and_key() -> None:
    marker = build_marker(_aircraft(), None, 0)
    assert marker.key == "G-ABCD"
    assert marker.position.as_tuple() == (51.47, -0.45)
    assert marker.heading == 270.0


def test_render_list_preserves_order_and_keys() -> None:
    snapshot = [
        _aircraft(r="G-ABCD"),
        _aircraft(r=None, flight="ANON1"),
        _aircraft(r="G-WXYZ", track=45.0),
    ]
    records = DictRecords(
        {
            "G-ABCD": EnrichmentRecord.not_found("G-ABCD"),
            "G-WXYZ": EnrichmentRecord.found("G-WXYZ", PhotoCredit(image_url="https://img/w.jpg", author="Sam")),
        }
    )

    markers = build_render_list(snapshot, records)

    assert [m.key for m in markers] == ["G-ABCD", "#1", "G-WXYZ"]
    assert [m.popup.kind for m in markers] == [PopupKind.DETAILS, PopupKind.DETAILS, PopupKind.PHOTO]
    assert markers[2].heading == 45.0


def test_render_list_is_stable_for_unchanged_inputs() -> None:
    snapshot = [_aircraft()]
    records = DictRecords({})
    assert build_render_list(snapshot, records) == build_render_list(snapshot, records)
