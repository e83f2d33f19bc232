"""HTTP transport with timeout and error mapping."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from pyskytrack.config import TrackerConfig
from pyskytrack.exceptions import SkyTrackTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by the collaborator modules.

    Having a protocol here makes it easy to pass test doubles while keeping
    the production implementation (`HttpTransport`) concrete.
    """

    async def get_json(self, url: str, *, params: Mapping[str, str] | None = None) -> Any: ...

    async def get_text(self, url: str, *, params: Mapping[str, str] | None = None) -> str: ...


class HttpTransport:
    """aiohttp-backed transport that bounds every request by ``request_timeout``."""

    def __init__(self, config: TrackerConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)
        self._headers = {"user-agent": config.user_agent}

    async def get_text(self, url: str, *, params: Mapping[str, str] | None = None) -> str:
        _logger.debug("GET %s params=%s", url, dict(params) if params else None)
        try:
            async with self._http.get(url, params=params, headers=self._headers, timeout=self._timeout) as resp:
                body = await resp.read()
                charset = resp.charset or "utf-8"
                if resp.status != 200:
                    snippet = body[:200].decode("utf-8", errors="replace")
                    raise SkyTrackTransportError(
                        f"HTTP {resp.status} from {url}: {snippet}",
                        status_code=resp.status,
                        url=url,
                    )
                try:
                    text = body.decode(charset)
                except (UnicodeDecodeError, LookupError) as exc:
                    raise SkyTrackTransportError(
                        f"Undecodable {charset} body from {url}: {exc}",
                        status_code=resp.status,
                        url=url,
                    ) from exc
        except SkyTrackTransportError:
            raise
        except TimeoutError as exc:
            raise SkyTrackTransportError(
                f"Request to {url} timed out after {self._config.request_timeout}s",
                url=url,
            ) from exc
        except aiohttp.ClientError as exc:
            raise SkyTrackTransportError(f"Request to {url} failed: {exc}", url=url) from exc
        return text

    async def get_json(self, url: str, *, params: Mapping[str, str] | None = None) -> Any:
        text = await self.get_text(url, params=params)
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise SkyTrackTransportError(f"Invalid JSON from {url}: {text[:200]}", url=url) from exc
