"""
Wrapper state machine: modes, soft failures, logging and disconnect cancellation.
"""

import asyncio
import logging
from types import SimpleNamespace

import pytest
from fastapi import Response

from astrobiogen.hybrid import hybridize, respond
from astrobiogen.models import IssLocation
from astrobiogen.net import ConfigMissing, UpstreamTimeout
from astrobiogen.settings import Settings

UP = SimpleNamespace(settings=Settings())


def _fallback(**params):
    return ["fallback", params.get("item")]


class TestModes:
    def setup_method(self):
        self.live_calls = 0

    async def _live_ok(self, up, *, item, **_):
        self.live_calls += 1
        return [item]

    async def _live_timeout(self, up, **_):
        self.live_calls += 1
        raise UpstreamTimeout("demo", "no response")

    def test_auto_live_ok(self):
        wrapped = hybridize("demo", self._live_ok, _fallback, source_name_live="Demo", source_name_fallback="DEMO_FB")
        ev = asyncio.run(wrapped(UP, item="x"))
        assert ev.status == "OK"
        assert ev.degraded is False
        assert ev.data == ["x"]
        assert ev.provenance.source == "Demo"
        assert ev.provenance.mode == "auto"

    def test_auto_falls_back_on_upstream_error(self):
        wrapped = hybridize("demo", self._live_timeout, _fallback, source_name_fallback="DEMO_FB")
        ev = asyncio.run(wrapped(UP, item="x"))
        assert ev.status == "FALLBACK"
        assert ev.degraded is True
        assert ev.data == ["fallback", "x"]
        assert ev.provenance.source == "DEMO_FB"
        assert "UpstreamTimeout" in ev.diagnostics.error
        assert ev.diagnostics.fallbacks[0]["reason"] == "UpstreamTimeout"

    def test_live_mode_never_falls_back(self):
        wrapped = hybridize("demo", self._live_timeout, _fallback)
        with pytest.raises(UpstreamTimeout):
            asyncio.run(wrapped(UP, mode="live", item="x"))

    def test_fallback_mode_skips_upstream(self):
        wrapped = hybridize("demo", self._live_ok, _fallback)
        ev = asyncio.run(wrapped(UP, mode="fallback", item="x"))
        assert self.live_calls == 0
        assert ev.degraded is True
        assert ev.provenance.router_reason == "user_forced"

    def test_empty_normalized_result_falls_back(self):
        wrapped = hybridize("demo", self._live_ok, _fallback, normalize=lambda payload: [])
        ev = asyncio.run(wrapped(UP, item="x"))
        assert self.live_calls == 1
        assert ev.status == "FALLBACK"
        assert "ValidationFailure" in ev.diagnostics.error

    def test_invalid_normalized_record_falls_back(self):
        def normalize(payload):
            return IssLocation.model_validate({"timestamp": "soon"})

        wrapped = hybridize("demo", self._live_ok, _fallback, normalize=normalize)
        ev = asyncio.run(wrapped(UP, item="x"))
        assert ev.status == "FALLBACK"
        assert ev.data == ["fallback", "x"]
        assert "ValidationFailure" in ev.diagnostics.error

    def test_non_upstream_errors_propagate(self):
        async def broken(up, **_):
            raise RuntimeError("bug")

        wrapped = hybridize("demo", broken, _fallback)
        with pytest.raises(RuntimeError):
            asyncio.run(wrapped(UP, item="x"))

    def test_missing_key_logged_as_key_absent(self, caplog):
        async def keyless(up, **_):
            raise ConfigMissing("groq", "groq_api_key is not configured")

        wrapped = hybridize("demo", keyless, _fallback)
        with caplog.at_level(logging.WARNING, logger="astrobiogen.hybrid"):
            ev = asyncio.run(wrapped(UP, item="x"))
        assert ev.degraded is True
        assert "key absent" in caplog.text


class _GoneRequest:
    """Stands in for a Starlette request whose client has hung up."""

    async def is_disconnected(self):
        return True


class _StayingRequest:
    async def is_disconnected(self):
        return False


class TestDisconnect:
    def test_disconnect_cancels_inflight_call(self):
        state = {"cancelled": False}

        async def slow(up, **_):
            try:
                await asyncio.sleep(5)
            except asyncio.CancelledError:
                state["cancelled"] = True
                raise
            return ["late"]

        wrapped = hybridize("demo", slow, _fallback)
        ev = asyncio.run(wrapped(UP, request=_GoneRequest(), item="x"))
        assert state["cancelled"] is True
        assert ev.degraded is True
        assert "UpstreamCancelled" in ev.diagnostics.error

    def test_connected_client_gets_live_result(self):
        async def quick(up, **_):
            await asyncio.sleep(0.01)
            return ["live"]

        wrapped = hybridize("demo", quick, _fallback)
        ev = asyncio.run(wrapped(UP, request=_StayingRequest()))
        assert ev.data == ["live"]

    def test_cancellation_can_be_switched_off(self):
        async def quick(up, **_):
            return ["live"]

        up = SimpleNamespace(settings=Settings(cancel_on_disconnect=False))
        wrapped = hybridize("demo", quick, _fallback)
        ev = asyncio.run(wrapped(up, request=_GoneRequest()))
        assert ev.data == ["live"]


def test_respond_sets_degradation_headers():
    async def live(up, **_):
        return {"a": 1}

    wrapped = hybridize("demo", live, _fallback, source_name_live="Demo")
    ev = asyncio.run(wrapped(UP, mode="fallback", item="x"))
    response = Response()
    body = respond(ev, response)
    assert body == ["fallback", "x"]
    assert response.headers["X-Data-Source"] == "FALLBACK"
    assert response.headers["X-Degraded"] == "true"
