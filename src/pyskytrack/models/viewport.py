"""Geographic position and viewport models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pyskytrack.geo import normalize_longitude, radius_from_zoom


class GeoPosition(BaseModel):
    """A latitude/longitude pair in decimal degrees."""

    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90.0, le=90.0, allow_inf_nan=False)
    lon: float = Field(..., allow_inf_nan=False)

    @field_validator("lon")
    @classmethod
    def _wrap_longitude(cls, value: float) -> float:
        return normalize_longitude(value)

    def as_tuple(self) -> tuple[float, float]:
        return (self.lat, self.lon)


class ViewportState(BaseModel):
    """The map's current center and zoom, i.e. the active query region.

    Zoom range enforcement is the controller's job because the valid range
    comes from :class:`~pyskytrack.config.TrackerConfig`.
    """

    model_config = ConfigDict(frozen=True)

    center: GeoPosition
    zoom: int = Field(..., ge=0)

    @classmethod
    def create(cls, lat: float, lon: float, zoom: int) -> ViewportState:
        return cls(center=GeoPosition(lat=lat, lon=lon), zoom=zoom)

    @property
    def radius_nm(self) -> float:
        """Feed query radius for this viewport."""
        return radius_from_zoom(self.zoom)
