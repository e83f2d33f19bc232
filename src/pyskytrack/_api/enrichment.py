"""Photo/author lookup by tail registration.

Scrapes the airliners.net search results page. The selectors depend on the
site's current markup, so a layout change shows up as "not found" rather
than an error.
"""

from __future__ import annotations

import logging
from typing import Protocol
from urllib.parse import quote

from bs4 import BeautifulSoup

from pyskytrack._constants import AUTHOR_SELECTOR, ENRICHMENT_BASE_URL, PHOTO_SELECTOR
from pyskytrack._transport import Transport
from pyskytrack.config import TrackerConfig
from pyskytrack.exceptions import EnrichmentFetchError, SkyTrackTransportError
from pyskytrack.models.enrichment import PhotoCredit

_logger = logging.getLogger(__name__)


class EnrichmentProvider(Protocol):
    """Lookup contract consumed by the enrichment cache.

    Returns a :class:`PhotoCredit` when something was found, ``None`` when
    the collaborator reports nothing, and raises
    :class:`EnrichmentFetchError` on failure.
    """

    async def lookup(self, registration: str) -> PhotoCredit | None: ...


def build_search_url(registration: str, base_url: str = ENRICHMENT_BASE_URL) -> str:
    return f"{base_url.rstrip('/')}/search?keywords={quote(registration, safe='')}"


def parse_search_page(html: str) -> PhotoCredit | None:
    """Extract the first photo and its photographer from a search page."""
    soup = BeautifulSoup(html, "html.parser")

    image_url: str | None = None
    image = soup.select_one(PHOTO_SELECTOR)
    if image is not None:
        src = image.get("src") or image.get("data-src")
        if isinstance(src, str) and src.strip():
            image_url = src.strip()

    author: str | None = None
    author_el = soup.select_one(AUTHOR_SELECTOR)
    if author_el is not None:
        author = author_el.get_text(strip=True) or None

    if image_url is None and author is None:
        return None
    return PhotoCredit(image_url=image_url, author=author)


class AirlinersNetProvider:
    """:class:`EnrichmentProvider` backed by the airliners.net search page."""

    def __init__(self, config: TrackerConfig, transport: Transport) -> None:
        self._config = config
        self._transport = transport

    async def lookup(self, registration: str) -> PhotoCredit | None:
        url = build_search_url(registration, self._config.enrichment_base_url)
        try:
            html = await self._transport.get_text(url)
        except SkyTrackTransportError as exc:
            raise EnrichmentFetchError(
                f"Photo lookup for {registration} failed: {exc}",
                registration=registration,
            ) from exc
        credit = parse_search_page(html)
        _logger.debug("Photo lookup %s -> %s", registration, credit)
        return credit
