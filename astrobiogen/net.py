from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional, Tuple, Union

import httpx
from fastapi import Request

from astrobiogen.clients.sources import Source, _auth_params, _join_url, _make_headers, api_key_for, build_sources
from astrobiogen.settings import Settings

log = logging.getLogger("astrobiogen.net")

# ------------------------- Error taxonomy -----------------------------

class UpstreamError(Exception):
    """Any failure talking to (or making sense of) an upstream API."""

    def __init__(self, source: str, message: str = "", *, status_code: Optional[int] = None):
        self.source = source
        self.message = message or self.__class__.__name__
        self.status_code = status_code
        super().__init__(f"{source}: {self.message}")


class UpstreamUnavailable(UpstreamError):
    pass


class UpstreamTimeout(UpstreamError):
    pass


class UpstreamBadStatus(UpstreamError):
    pass


class UpstreamMalformedPayload(UpstreamError):
    pass


class ValidationFailure(UpstreamError):
    pass


class ConfigMissing(UpstreamError):
    pass


class UpstreamCancelled(UpstreamError):
    """The caller went away and the in-flight call was cancelled."""


# ------------------------- Async HTTP -----------------------------

JsonShape = Union[type, Tuple[type, ...]]


class Upstream:
    """Single-attempt calls against the registered sources.

    One instance per process, sharing the app's httpx.AsyncClient. Every call is
    bounded by its source timeout and either returns the decoded body or raises
    an UpstreamError subclass. Nothing is retried.
    """

    def __init__(self, http: httpx.AsyncClient, settings: Settings, sources: Optional[Dict[str, Source]] = None):
        self.http = http
        self.settings = settings
        self.sources = sources or build_sources(settings)

    def source(self, name: str) -> Source:
        return self.sources[name]

    async def _send(
        self,
        source_name: str,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json_body: Optional[Any] = None,
    ) -> httpx.Response:
        src = self.source(source_name)
        if src.required_key and not api_key_for(src, self.settings):
            raise ConfigMissing(source_name, f"{src.key_attr} is not configured")

        url = _join_url(src.base_url, path)
        query = {k: v for k, v in (params or {}).items() if v is not None}
        query.update(_auth_params(src, self.settings))
        headers = _make_headers(src, self.settings)

        try:
            r = await asyncio.wait_for(
                self.http.request(method, url, headers=headers, params=query or None, json=json_body, timeout=src.timeout),
                timeout=src.timeout,
            )
        except asyncio.TimeoutError:
            raise UpstreamTimeout(source_name, f"no response within {src.timeout:g}s") from None
        except httpx.TimeoutException as e:
            raise UpstreamTimeout(source_name, e.__class__.__name__) from e
        except httpx.HTTPError as e:
            raise UpstreamUnavailable(source_name, f"{e.__class__.__name__}: {e}") from e

        if not (200 <= r.status_code < 300):
            raise UpstreamBadStatus(source_name, f"{method} {url} -> {r.status_code}", status_code=r.status_code)
        return r

    @staticmethod
    def _decode(source_name: str, r: httpx.Response, shape: JsonShape) -> Any:
        try:
            data = r.json()
        except ValueError:
            raise UpstreamMalformedPayload(source_name, "body is not JSON") from None
        if not isinstance(data, shape):
            raise UpstreamMalformedPayload(source_name, f"unexpected JSON shape {type(data).__name__}")
        return data

    async def get_json(
        self,
        source_name: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        shape: JsonShape = (dict, list),
    ) -> Any:
        r = await self._send(source_name, "GET", path, params=params)
        return self._decode(source_name, r, shape)

    async def post_json(
        self,
        source_name: str,
        path: str,
        payload: Dict[str, Any],
        *,
        shape: JsonShape = (dict, list),
    ) -> Any:
        r = await self._send(source_name, "POST", path, json_body=payload)
        return self._decode(source_name, r, shape)

    async def get_text(self, source_name: str, path: str, *, params: Optional[Dict[str, Any]] = None) -> str:
        r = await self._send(source_name, "GET", path, params=params)
        return r.text


def get_upstream(request: Request) -> Upstream:
    return request.app.state.upstream
