"""Data models for tracked aircraft, viewports, enrichment and markers."""

from pyskytrack.models._base import SkyTrackBaseModel
from pyskytrack.models.aircraft import TrackedAircraft
from pyskytrack.models.enrichment import EnrichmentRecord, EnrichmentStatus, PhotoCredit
from pyskytrack.models.marker import MarkerDescriptor, PopupContent, PopupKind
from pyskytrack.models.viewport import GeoPosition, ViewportState

__all__ = [
    "EnrichmentRecord",
    "EnrichmentStatus",
    "GeoPosition",
    "MarkerDescriptor",
    "PhotoCredit",
    "PopupContent",
    "PopupKind",
    "SkyTrackBaseModel",
    "TrackedAircraft",
    "ViewportState",
]
