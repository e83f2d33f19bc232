"""Tracker configuration for pyskytrack."""

from __future__ import annotations

import dataclasses
import math
import os
from typing import Any

from pyskytrack import _constants
from pyskytrack.exceptions import SkyTrackConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def parse_location(value: str | None) -> tuple[float, float] | None:
    """Parse a ``"lat,lon"`` string into a tuple, or ``None`` if empty/invalid."""
    if not value:
        return None
    try:
        lat, lon = value.split(",")
        return (float(lat.strip()), float(lon.strip()))
    except (ValueError, AttributeError):
        return None


@dataclasses.dataclass(frozen=True)
class TrackerConfig:
    """Tracker configuration.

    Parameters
    ----------
    feed_base_url : str
        Base URL of the adsb.lol compatible live-traffic feed.
    enrichment_base_url : str
        Base URL of the photo search site used for enrichment.
    geolocation_url : str
        IP geolocation endpoint used when no fixed location is configured.
    user_agent : str
        ``User-Agent`` sent with every request.
    poll_interval : float
        Seconds between unconditional feed refreshes.
    request_timeout : float
        Upper bound in seconds for any single feed, enrichment or
        geolocation request.
    default_center : tuple of float
        Viewport center used until (or instead of) geolocation.
    default_zoom : int
        Viewport zoom used until (or instead of) geolocation.
    initial_zoom : int
        Zoom applied when geolocation resolves.
    min_zoom, max_zoom : int
        Valid zoom range; map events outside it are clamped.
    user_location : tuple of float or None
        Fixed observer location. When set it is used instead of IP lookup.
    use_geolocation : bool
        Resolve the starting viewport once at startup.
    discard_stale_responses : bool
        Drop feed responses whose request was issued before the currently
        applied one. When ``False`` the last response to arrive wins.
    """

    feed_base_url: str = _constants.FEED_BASE_URL
    enrichment_base_url: str = _constants.ENRICHMENT_BASE_URL
    geolocation_url: str = _constants.GEOLOCATION_URL
    user_agent: str = _constants.USER_AGENT
    poll_interval: float = _constants.POLL_INTERVAL_SECONDS
    request_timeout: float = _constants.REQUEST_TIMEOUT_SECONDS
    default_center: tuple[float, float] = _constants.DEFAULT_CENTER
    default_zoom: int = _constants.DEFAULT_ZOOM
    initial_zoom: int = _constants.INITIAL_ZOOM
    min_zoom: int = _constants.MIN_ZOOM
    max_zoom: int = _constants.MAX_ZOOM
    user_location: tuple[float, float] | None = None
    use_geolocation: bool = True
    discard_stale_responses: bool = False

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Raise :class:`SkyTrackConfigError` if any value is out of range."""
        if not self.poll_interval > 0:
            raise SkyTrackConfigError(f"poll_interval must be positive, got {self.poll_interval}")
        if not self.request_timeout > 0:
            raise SkyTrackConfigError(f"request_timeout must be positive, got {self.request_timeout}")
        if self.min_zoom < 0 or self.min_zoom > self.max_zoom:
            raise SkyTrackConfigError(f"invalid zoom range [{self.min_zoom}, {self.max_zoom}]")
        for name in ("default_zoom", "initial_zoom"):
            value = getattr(self, name)
            if not self.min_zoom <= value <= self.max_zoom:
                raise SkyTrackConfigError(f"{name}={value} outside [{self.min_zoom}, {self.max_zoom}]")
        for name in ("default_center", "user_location"):
            value = getattr(self, name)
            if value is None:
                continue
            lat, lon = value
            if not (math.isfinite(lat) and math.isfinite(lon)) or not -90.0 <= lat <= 90.0:
                raise SkyTrackConfigError(f"{name}={value!r} is not a valid lat/lon pair")

    @classmethod
    def from_env(cls, **overrides: Any) -> TrackerConfig:
        """Create configuration from ``PYSKYTRACK_*`` environment variables.

        Explicit keyword arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        TrackerConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_STR_MAP = {
            "PYSKYTRACK_FEED_BASE_URL": "feed_base_url",
            "PYSKYTRACK_ENRICHMENT_BASE_URL": "enrichment_base_url",
            "PYSKYTRACK_GEOLOCATION_URL": "geolocation_url",
            "PYSKYTRACK_USER_AGENT": "user_agent",
        }
        _ENV_FLOAT_MAP = {
            "PYSKYTRACK_POLL_INTERVAL": "poll_interval",
            "PYSKYTRACK_REQUEST_TIMEOUT": "request_timeout",
        }
        _ENV_INT_MAP = {
            "PYSKYTRACK_DEFAULT_ZOOM": "default_zoom",
            "PYSKYTRACK_INITIAL_ZOOM": "initial_zoom",
            "PYSKYTRACK_MIN_ZOOM": "min_zoom",
            "PYSKYTRACK_MAX_ZOOM": "max_zoom",
        }

        config_kwargs: dict[str, Any] = {}
        try:
            for env_key, field_name in _ENV_STR_MAP.items():
                val = env.get(env_key)
                if val is not None:
                    config_kwargs[field_name] = val
            for env_key, field_name in _ENV_FLOAT_MAP.items():
                val = env.get(env_key)
                if val is not None:
                    config_kwargs[field_name] = float(val)
            for env_key, field_name in _ENV_INT_MAP.items():
                val = env.get(env_key)
                if val is not None:
                    config_kwargs[field_name] = int(val)
        except ValueError as exc:
            raise SkyTrackConfigError(f"Invalid numeric environment value: {exc}") from exc

        center = parse_location(env.get("PYSKYTRACK_DEFAULT_CENTER"))
        if center is not None:
            config_kwargs["default_center"] = center

        location = parse_location(env.get("PYSKYTRACK_USER_LOCATION"))
        if location is not None:
            config_kwargs["user_location"] = location

        if "use_geolocation" not in overrides:
            config_kwargs["use_geolocation"] = _env_bool(env.get("PYSKYTRACK_USE_GEOLOCATION"), True)

        if "discard_stale_responses" not in overrides:
            config_kwargs["discard_stale_responses"] = _env_bool(
                env.get("PYSKYTRACK_DISCARD_STALE_RESPONSES"),
                False,
            )

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
