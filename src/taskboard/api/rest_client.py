"""JSON REST client for the task store.

Thin transport over an aiohttp session: joins URLs, serializes bodies and
classifies each response into a parsed JSON body or a :class:`RemoteError`.
No retries; every request settles exactly once.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Mapping
from urllib.parse import quote

import aiohttp

from taskboard.core.errors import ProtocolError, TransportError

log = logging.getLogger("taskboard.api.rest_client")

JSON_CONTENT_TYPE = "application/json"
SUCCESS_STATUSES = (200, 201)


def mk_url(base: str, path: str) -> str:
    """Join ``base`` and ``path`` with exactly one ``/`` between them."""
    parts = [p.strip("/") for p in (base, path)]
    return "/".join(p for p in parts if p)


def build_query(params: Mapping[str, Any] | None) -> str:
    """Build ``?a=1&flag`` from a mapping; falsy values emit the bare key."""
    if not params:
        return ""
    pairs = []
    for key, value in params.items():
        if value:
            pairs.append(f"{quote(str(key), safe='')}={quote(str(value), safe='')}")
        else:
            pairs.append(quote(str(key), safe=""))
    return "?" + "&".join(pairs)


def is_json_content_type(content_type: str | None) -> bool:
    if not content_type:
        return False
    mime = content_type.split(";", 1)[0].strip().lower()
    return mime == JSON_CONTENT_TYPE or mime.endswith("+json")


class RestClient:
    """Async HTTP+JSON client rooted at a base URL."""

    def __init__(
        self,
        base_url: str,
        headers: Mapping[str, str] | None = None,
        timeout: float | None = None,
        session: aiohttp.ClientSession | None = None,
    ):
        self.base_url = base_url
        self.headers = dict(headers or {})
        self.timeout = timeout
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> RestClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.timeout) if self.timeout else None
            self._session = aiohttp.ClientSession(timeout=timeout)
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None

    # --- verbs ---

    async def get(self, path: str, body: Any = None,
                  query: Mapping[str, Any] | None = None,
                  headers: Mapping[str, str] | None = None) -> Any:
        return await self.request("GET", path, body, query, headers)

    async def post(self, path: str, body: Any = None,
                   query: Mapping[str, Any] | None = None,
                   headers: Mapping[str, str] | None = None) -> Any:
        return await self.request("POST", path, body, query, headers)

    async def put(self, path: str, body: Any = None,
                  query: Mapping[str, Any] | None = None,
                  headers: Mapping[str, str] | None = None) -> Any:
        return await self.request("PUT", path, body, query, headers)

    async def delete(self, path: str, body: Any = None,
                     query: Mapping[str, Any] | None = None,
                     headers: Mapping[str, str] | None = None) -> Any:
        return await self.request("DELETE", path, body, query, headers)

    async def request(self, method: str, path: str, body: Any = None,
                      query: Mapping[str, Any] | None = None,
                      headers: Mapping[str, str] | None = None) -> Any:
        url = mk_url(self.base_url, path) + build_query(query)
        request_headers = dict(self.headers)
        request_headers.update(headers or {})

        data = None
        if body is not None:
            data = json.dumps(body)
            request_headers["Content-Type"] = JSON_CONTENT_TYPE

        log.debug("%s %s", method, url)
        session = await self._get_session()
        try:
            async with session.request(method, url, data=data,
                                       headers=request_headers) as response:
                text = await response.text()
                content_type = response.headers.get("Content-Type")
                status = response.status
        except aiohttp.ClientError as e:
            log.warning("%s %s failed: %s", method, url, e)
            raise TransportError(None, response=str(e), url=url) from e
        except asyncio.TimeoutError as e:
            log.warning("%s %s timed out", method, url)
            raise TransportError(None, response="timeout", url=url) from e

        return self._settle(method, url, status, content_type, text)

    @staticmethod
    def _settle(method: str, url: str, status: int,
                content_type: str | None, text: str) -> Any:
        """Turn a raw response into a parsed body or raise."""
        is_json = is_json_content_type(content_type)

        if status in SUCCESS_STATUSES:
            if not text.strip():
                log.debug("%s %s -> %d (empty)", method, url, status)
                return None
            if not is_json:
                raise ProtocolError(f"not a JSON response from {url} ({content_type})")
            try:
                payload = json.loads(text)
            except ValueError as e:
                raise ProtocolError(f"invalid JSON from {url}: {e}") from e
            log.debug("%s %s -> %d", method, url, status)
            return payload

        if is_json:
            try:
                error_body = json.loads(text)
            except ValueError:
                raise TransportError(status, response=text, url=url) from None
            log.debug("%s %s -> %d %s", method, url, status, error_body)
            raise TransportError(status, json=error_body, url=url)

        log.debug("%s %s -> %d %s", method, url, status, text[:200])
        raise TransportError(status, response=text, url=url)
