"""Marker presentation.

Pure functions from (tracked aircraft, enrichment record or nothing) to the
marker descriptors a map surface renders. Safe to call on every frame.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from pyskytrack._api.enrichment import build_search_url
from pyskytrack._constants import ENRICHMENT_BASE_URL
from pyskytrack.models.aircraft import TrackedAircraft
from pyskytrack.models.enrichment import EnrichmentRecord, EnrichmentStatus
from pyskytrack.models.marker import MarkerDescriptor, PopupContent, PopupKind
from pyskytrack.models.viewport import GeoPosition

_ICON_TEMPLATE = (
    '<div style="transform: rotate({heading:.1f}deg); width: 20px; height: 20px; '
    'background: red; clip-path: polygon(50% 0%, 0% 100%, 100% 100%);"></div>'
)
_NOT_AVAILABLE = "N/A"


class RecordSource(Protocol):
    def lookup(self, registration: str | None) -> EnrichmentRecord | None: ...


def heading_icon_html(heading: float) -> str:
    """Triangle marker rotated to *heading* degrees (for a Leaflet ``divIcon``)."""
    return _ICON_TEMPLATE.format(heading=heading % 360.0)


def aircraft_details(aircraft: TrackedAircraft) -> tuple[str, ...]:
    altitude = f"{aircraft.altitude} ft" if aircraft.altitude is not None else _NOT_AVAILABLE
    speed = f"{aircraft.speed:.0f} kt" if aircraft.speed is not None else _NOT_AVAILABLE
    return (
        f"Altitude: {altitude}",
        f"Aircraft Type: {aircraft.aircraft_type or _NOT_AVAILABLE}",
        f"Speed: {speed}",
        f"Heading: {aircraft.heading:.0f}°",
        f"Registration: {aircraft.registration or _NOT_AVAILABLE}",
    )


def popup_title(aircraft: TrackedAircraft) -> str:
    return f"Flight: {aircraft.callsign or aircraft.registration or 'Unknown'}"


def build_popup(
    aircraft: TrackedAircraft,
    record: EnrichmentRecord | None,
    *,
    enrichment_base_url: str = ENRICHMENT_BASE_URL,
) -> PopupContent:
    """Popup for one aircraft, branching on enrichment status.

    No record or ``pending`` shows a loading placeholder, ``found`` the
    photo credit, ``not_found``/``failed`` the aircraft details only.
    Aircraft without a registration never get a record and show details.
    """
    title = popup_title(aircraft)
    lines = aircraft_details(aircraft)

    if aircraft.registration is None:
        return PopupContent(kind=PopupKind.DETAILS, title=title, lines=lines)

    if record is None or record.status is EnrichmentStatus.PENDING:
        return PopupContent(kind=PopupKind.LOADING, title=title, lines=("Loading...",))

    if record.status is EnrichmentStatus.FOUND:
        return PopupContent(
            kind=PopupKind.PHOTO,
            title=title,
            lines=lines,
            image_url=record.image_url,
            author=record.author,
            photo_link=build_search_url(aircraft.registration, enrichment_base_url),
        )

    return PopupContent(kind=PopupKind.DETAILS, title=title, lines=lines)


def build_marker(
    aircraft: TrackedAircraft,
    record: EnrichmentRecord | None,
    index: int,
    *,
    enrichment_base_url: str = ENRICHMENT_BASE_URL,
) -> MarkerDescriptor:
    return MarkerDescriptor(
        key=aircraft.identity_key(index),
        position=GeoPosition(lat=aircraft.lat, lon=aircraft.lon),
        heading=aircraft.heading,
        heading_icon=heading_icon_html(aircraft.heading),
        popup=build_popup(aircraft, record, enrichment_base_url=enrichment_base_url),
    )


def build_render_list(
    aircraft: Sequence[TrackedAircraft],
    records: RecordSource,
    *,
    enrichment_base_url: str = ENRICHMENT_BASE_URL,
) -> list[MarkerDescriptor]:
    """Marker descriptors for a snapshot, in snapshot order."""
    return [
        build_marker(ac, records.lookup(ac.registration), index, enrichment_base_url=enrichment_base_url)
        for index, ac in enumerate(aircraft)
    ]
