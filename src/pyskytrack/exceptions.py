"""Custom exception hierarchy for pyskytrack."""

from __future__ import annotations


class SkyTrackError(Exception):
    """Base exception for all pyskytrack errors."""


class SkyTrackConfigError(SkyTrackError):
    """Invalid or missing configuration."""


class SkyTrackTransportError(SkyTrackError):
    """HTTP-level failure (network, non-200, undecodable body, invalid JSON, timeout)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str = "",
    ) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class FeedFetchError(SkyTrackError):
    """The live-traffic feed could not be fetched or parsed.

    Non-fatal: the poller keeps the previous snapshot and retries on the
    next trigger.
    """


class EnrichmentFetchError(SkyTrackError):
    """The photo/author lookup for a registration failed.

    Non-fatal: the registration is cached as ``failed`` and never retried
    for the rest of the session.
    """

    def __init__(self, message: str, *, registration: str = "") -> None:
        self.registration = registration
        super().__init__(message)


class GeolocationError(SkyTrackError):
    """The geolocation provider could not resolve a position.

    Non-fatal: the viewport stays on its configured default.
    """
