# astrobiogen/hybrid.py
# One-file hybrid layer: mode routing (auto|live|fallback), provenance, degradation headers, disconnect cancellation.

from __future__ import annotations

import asyncio
import inspect
import logging
import time
from typing import Any, Callable, Literal, Optional

from fastapi import Header, Query, Request, Response
from pydantic import BaseModel, Field, ValidationError

from astrobiogen.net import ConfigMissing, Upstream, UpstreamCancelled, UpstreamError, ValidationFailure

log = logging.getLogger("astrobiogen.hybrid")

SourceMode = Literal["auto", "live", "fallback"]

# ---------- Provenance & Evidence envelopes ----------
class Provenance(BaseModel):
    mode: SourceMode
    source: str
    retrieved_at: Optional[str] = None
    router_reason: Optional[str] = None


class Diagnostics(BaseModel):
    latency_ms: Optional[int] = None
    error: Optional[str] = None
    fallbacks: list[dict] = Field(default_factory=list)


class Evidence(BaseModel):
    kind: str
    status: Literal["OK", "FALLBACK"]
    degraded: bool
    data: Any
    provenance: Provenance
    diagnostics: Diagnostics = Diagnostics()


def _now_iso() -> str:
    # RFC3339-lite
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())


# ---------- Mode resolution as a FastAPI dependency ----------
async def get_source_mode(
    mode: Optional[SourceMode] = Query(default=None),
    x_source_mode: Optional[SourceMode] = Header(default=None),
) -> SourceMode:
    # prefer explicit query over header; default to auto
    return (mode or x_source_mode or "auto")  # type: ignore[return-value]


# ---------- Helpers to call sync/async functions uniformly ----------
async def _maybe_await(func: Callable, *args, **kwargs):
    if inspect.iscoroutinefunction(func):
        return await func(*args, **kwargs)
    return func(*args, **kwargs)


async def _race_disconnect(coro, request: Request, source: str, poll: float = 0.1):
    """Run `coro` until it finishes or the client disconnects, whichever comes first."""
    task = asyncio.ensure_future(coro)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=poll)
            if done:
                return task.result()
            if await request.is_disconnected():
                task.cancel()
                await asyncio.wait({task})
                raise UpstreamCancelled(source, "client disconnected")
    finally:
        if not task.done():
            task.cancel()


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    return hasattr(value, "__len__") and not isinstance(value, (str, bytes, BaseModel)) and len(value) == 0


# ---------- The core wrapper factory ----------
def hybridize(
    kind: str,
    live_fn: Callable[..., Any],
    fallback_fn: Callable[..., Any],
    *,
    normalize: Optional[Callable[[Any], Any]] = None,
    source_name_live: str = "LIVE",
    source_name_fallback: str = "FALLBACK",
) -> Callable[..., Any]:
    """
    Wrap a 'live' upstream callable with fallback behavior:
      - choose mode: auto | live | fallback
      - live: raw payload -> normalize; empty result counts as a failure
      - auto: any UpstreamError -> fallback_fn, logged as a warning
      - live mode never falls back; the UpstreamError propagates (502 at the edge)
      - attach provenance + diagnostics

    live_fn is called as live_fn(upstream, **params); fallback_fn as fallback_fn(**params).
    Return type: Evidence.
    """

    async def _live(upstream: Upstream, params: dict) -> Any:
        payload = await _maybe_await(live_fn, upstream, **params)
        try:
            data = normalize(payload) if normalize else payload
        except ValidationError as e:
            raise ValidationFailure(source_name_live, f"{e.error_count()} invalid field(s)") from None
        if _is_empty(data):
            raise ValidationFailure(source_name_live, "normalized result is empty")
        return data

    async def _wrapped(
        upstream: Upstream,
        *,
        mode: Optional[SourceMode] = None,
        request: Optional[Request] = None,
        **params,
    ) -> Evidence:
        chosen: SourceMode = (mode or "auto")  # type: ignore[assignment]
        t0 = time.time()
        fallbacks: list[dict] = []
        error: Optional[str] = None

        if chosen != "fallback":
            try:
                call = _live(upstream, params)
                if request is not None and upstream.settings.cancel_on_disconnect:
                    data = await _race_disconnect(call, request, source_name_live)
                else:
                    data = await call
                return Evidence(
                    kind=kind,
                    status="OK",
                    degraded=False,
                    data=data,
                    provenance=Provenance(
                        mode=chosen,
                        source=source_name_live,
                        retrieved_at=_now_iso(),
                        router_reason="live_ok",
                    ),
                    diagnostics=Diagnostics(latency_ms=int((time.time() - t0) * 1000)),
                )
            except UpstreamError as e:
                if chosen == "live":
                    raise
                error = f"{e.__class__.__name__}: {e.message}"
                if isinstance(e, ConfigMissing):
                    log.warning("%s: %s key absent, serving fallback", kind, e.source)
                else:
                    log.warning("%s: %s from %s, serving fallback", kind, e.__class__.__name__, e.source)
                fallbacks.append({"kind": kind, "from": "live", "to": "fallback", "reason": e.__class__.__name__})

        data = await _maybe_await(fallback_fn, **params)
        return Evidence(
            kind=kind,
            status="FALLBACK",
            degraded=True,
            data=data,
            provenance=Provenance(
                mode=chosen,
                source=source_name_fallback,
                retrieved_at=_now_iso(),
                router_reason="user_forced" if chosen == "fallback" else "auto_fallback",
            ),
            diagnostics=Diagnostics(latency_ms=int((time.time() - t0) * 1000), error=error, fallbacks=fallbacks),
        )

    # keep repr informative
    _wrapped.__name__ = f"hybrid_{kind}"
    return _wrapped


def respond(ev: Evidence, response: Response) -> Any:
    """Attach the degradation headers and hand back the canonical body."""
    response.headers["X-Data-Source"] = ev.provenance.source
    response.headers["X-Degraded"] = "true" if ev.degraded else "false"
    return ev.data
