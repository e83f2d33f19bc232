from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import pytest

from pyskytrack._api.enrichment import AirlinersNetProvider, build_search_url, parse_search_page
from pyskytrack.config import TrackerConfig
from pyskytrack.exceptions import EnrichmentFetchError, SkyTrackTransportError

_RESULTS_PAGE = """
<html><body>
  <div class="ps-v2-results-row">
    <div class="ps-v2-results-col-photo">
      <a href="/photo/123"><img class="lazy-load" src="https://imgproc.airliners.net/photos/123.jpg"></a>
    </div>
    <div class="ps-v2-results-col-user">
      <a class="ua-name-content" href="/user/1"> Jane Spotter </a>
    </div>
  </div>
  <div class="ps-v2-results-row">
    <a class="ua-name-content" href="/user/2">Someone Else</a>
  </div>
</body></html>
"""


@dataclass
class FakeTransport:
    html: str = ""
    error: Exception | None = None
    urls: list[str] = field(default_factory=list)

    async def get_json(self, url: str, *, params: Mapping[str, str] | None = None) -> Any:
        raise AssertionError("enrichment must not request JSON")

    async def get_text(self, url: str, *, params: Mapping[str, str] | None = None) -> str:
        self.urls.append(url)
        if self.error is not None:
            raise self.error
        return self.html


def test_parse_search_page_takes_first_photo_and_author() -> None:
    credit = parse_search_page(_RESULTS_PAGE)

    assert credit is not None
    assert credit.image_url == "https://imgproc.airliners.net/photos/123.jpg"
    assert credit.author == "Jane Spotter"
    assert credit.is_complete


def test_parse_search_page_falls_back_to_data_src() -> None:
    html = (
        '<div class="ps-v2-results-col-photo"><img class="lazy-load" data-src="https://img/lazy.jpg"></div>'
        '<a class="ua-name-content">Jane</a>'
    )
    credit = parse_search_page(html)
    assert credit is not None
    assert credit.image_url == "https://img/lazy.jpg"


def test_parse_search_page_without_results() -> None:
    assert parse_search_page("<html><body><p>No results</p></body></html>") is None


def test_parse_search_page_partial_match_is_incomplete() -> None:
    credit = parse_search_page('<a class="ua-name-content">Jane</a>')
    assert credit is not None
    assert not credit.is_complete


def test_build_search_url_escapes_registration() -> None:
    assert build_search_url("G-ABCD") == "https://www.airliners.net/search?keywords=G-ABCD"
    assert build_search_url("N 1/2", "https://example.test/") == "https://example.test/search?keywords=N%201%2F2"


@pytest.mark.asyncio
async def test_provider_lookup_uses_configured_base_url() -> None:
    transport = FakeTransport(html=_RESULTS_PAGE)
    provider = AirlinersNetProvider(TrackerConfig(enrichment_base_url="https://example.test"), transport)

    credit = await provider.lookup("G-ABCD")

    assert transport.urls == ["https://example.test/search?keywords=G-ABCD"]
    assert credit is not None and credit.author == "Jane Spotter"


@pytest.mark.asyncio
async def test_provider_lookup_maps_transport_errors() -> None:
    transport = FakeTransport(error=SkyTrackTransportError("HTTP 403", status_code=403))
    provider = AirlinersNetProvider(TrackerConfig(), transport)

    with pytest.raises(EnrichmentFetchError) as exc_info:
        await provider.lookup("G-ABCD")
    assert exc_info.value.registration == "G-ABCD"
