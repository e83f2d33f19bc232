"""pyskytrack - Async live aircraft tracking for a map viewport."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyskytrack")
except PackageNotFoundError:
    __version__ = "0+local"
from pyskytrack.config import TrackerConfig
from pyskytrack.exceptions import (
    EnrichmentFetchError,
    FeedFetchError,
    GeolocationError,
    SkyTrackConfigError,
    SkyTrackError,
    SkyTrackTransportError,
)
from pyskytrack.geo import radius_from_zoom
from pyskytrack.models import (
    EnrichmentRecord,
    EnrichmentStatus,
    GeoPosition,
    MarkerDescriptor,
    PhotoCredit,
    PopupContent,
    PopupKind,
    TrackedAircraft,
    ViewportState,
)
from pyskytrack.poller import LiveDataPoller
from pyskytrack.presentation import build_marker, build_popup, build_render_list
from pyskytrack.state.enrichment import EnrichmentCache
from pyskytrack.state.snapshot import Snapshot, SnapshotStore
from pyskytrack.state.viewport import ViewportController, ViewportPhase
from pyskytrack.tracker import LiveTracker

__all__ = [
    "__version__",
    "EnrichmentCache",
    "EnrichmentFetchError",
    "EnrichmentRecord",
    "EnrichmentStatus",
    "FeedFetchError",
    "GeoPosition",
    "GeolocationError",
    "LiveDataPoller",
    "LiveTracker",
    "MarkerDescriptor",
    "PhotoCredit",
    "PopupContent",
    "PopupKind",
    "SkyTrackConfigError",
    "SkyTrackError",
    "SkyTrackTransportError",
    "Snapshot",
    "SnapshotStore",
    "TrackedAircraft",
    "TrackerConfig",
    "ViewportController",
    "ViewportPhase",
    "ViewportState",
    "build_marker",
    "build_popup",
    "build_render_list",
    "radius_from_zoom",
]
