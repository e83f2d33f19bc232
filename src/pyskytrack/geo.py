"""Geo helpers: query radius and coordinate normalization."""

from __future__ import annotations

import math

from pyskytrack._constants import MAX_FEED_RADIUS_NM, RADIUS_ZOOM_REFERENCE


def radius_from_zoom(zoom: float) -> float:
    """Return the feed query radius in nautical miles for a map zoom level.

    The radius grows linearly with zoom and is capped at the feed's maximum
    supported radius (250 nm), so ``radius_from_zoom(5) == 125`` and any
    zoom of 10 or more yields 250.

    Raises :class:`ValueError` for negative or non-finite zoom.
    """
    if not math.isfinite(zoom) or zoom < 0:
        raise ValueError(f"zoom must be a non-negative number, got {zoom}")
    return min(MAX_FEED_RADIUS_NM * zoom / RADIUS_ZOOM_REFERENCE, MAX_FEED_RADIUS_NM)


def clamp_latitude(lat: float) -> float:
    return max(-90.0, min(90.0, lat))


def normalize_longitude(lon: float) -> float:
    """Wrap a longitude into ``[-180, 180)``."""
    if -180.0 <= lon < 180.0:
        return lon
    return ((lon + 180.0) % 360.0) - 180.0


def normalize_coordinates(lat: float, lon: float) -> tuple[float, float]:
    """Clamp latitude and wrap longitude.

    Map surfaces report longitudes beyond +/-180 after panning across the
    antimeridian; the feed only accepts the canonical range.
    """
    lat_f = float(lat)
    lon_f = float(lon)
    if not (math.isfinite(lat_f) and math.isfinite(lon_f)):
        raise ValueError(f"coordinates must be finite, got ({lat}, {lon})")
    return clamp_latitude(lat_f), normalize_longitude(lon_f)


def normalize_heading(heading: float) -> float:
    """Wrap a heading in degrees into ``[0, 360)``."""
    value = float(heading)
    if 0.0 <= value < 360.0:
        return value
    return value % 360.0


def clamp_zoom(zoom: float, min_zoom: int, max_zoom: int) -> int:
    return int(max(min_zoom, min(max_zoom, round(zoom))))
