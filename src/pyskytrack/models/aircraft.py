"""Tracked aircraft model."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, Field, field_validator

from pyskytrack.geo import normalize_heading, normalize_longitude
from pyskytrack.ingestion.normalize import normalize_registration, safe_float, safe_int, safe_str
from pyskytrack.models._base import SkyTrackBaseModel


class TrackedAircraft(SkyTrackBaseModel):
    """One live position/state record from the traffic feed.

    Field aliases follow the adsb.lol/readsb JSON schema (``r``, ``flight``,
    ``track``, ``alt_geom``, ``gs``, ``t``) and also accept the snake_case
    field names, so instances can be built either from feed records or
    directly.

    Parameters
    ----------
    registration : str or None
        Tail registration, upper-cased. ``None`` for unregistered or
        anonymized targets.
    callsign : str or None
        Flight callsign, padding stripped.
    lat, lon : float
        Position in decimal degrees.
    heading : float
        Ground track in degrees clockwise from north, ``[0, 360)``.
    altitude : int or None
        Altitude in feet. ``0`` when the feed reports ``"ground"``.
    speed : float or None
        Ground speed in knots.
    aircraft_type : str or None
        ICAO type designator (e.g. ``A320``).
    hex : str or None
        24-bit ICAO transponder address.
    """

    registration: str | None = Field(default=None, validation_alias=AliasChoices("registration", "r"))
    callsign: str | None = Field(default=None, validation_alias=AliasChoices("callsign", "flight"))
    lat: float = Field(..., ge=-90.0, le=90.0, allow_inf_nan=False)
    lon: float = Field(..., validation_alias=AliasChoices("lon", "lng"), allow_inf_nan=False)
    heading: float = Field(
        default=0.0,
        validation_alias=AliasChoices("heading", "track", "true_heading", "mag_heading"),
    )
    altitude: int | None = Field(default=None, validation_alias=AliasChoices("altitude", "alt_geom", "alt_baro"))
    speed: float | None = Field(default=None, validation_alias=AliasChoices("speed", "gs"))
    aircraft_type: str | None = Field(default=None, validation_alias=AliasChoices("aircraft_type", "t"))
    hex: str | None = None

    @field_validator("registration", mode="before")
    @classmethod
    def _coerce_registration(cls, value: Any) -> str | None:
        return normalize_registration(value)

    @field_validator("callsign", "aircraft_type", "hex", mode="before")
    @classmethod
    def _coerce_str(cls, value: Any) -> str | None:
        return safe_str(value)

    @field_validator("lon")
    @classmethod
    def _wrap_longitude(cls, value: float) -> float:
        return normalize_longitude(value)

    @field_validator("heading", mode="before")
    @classmethod
    def _coerce_heading(cls, value: Any) -> float:
        parsed = safe_float(value)
        if parsed is None:
            return 0.0
        return normalize_heading(parsed)

    @field_validator("altitude", mode="before")
    @classmethod
    def _coerce_altitude(cls, value: Any) -> int | None:
        if isinstance(value, str) and value.strip().lower() == "ground":
            return 0
        return safe_int(value)

    @field_validator("speed", mode="before")
    @classmethod
    def _coerce_speed(cls, value: Any) -> float | None:
        return safe_float(value)

    def identity_key(self, index: int) -> str:
        """Registration when known, else the positional index.

        Index keys are only stable within one snapshot.
        """
        if self.registration:
            return self.registration
        return f"#{index}"
