"""
Upstream client: one attempt per call, every failure mapped onto the UpstreamError taxonomy.
"""

import asyncio

import httpx
import pytest

from astrobiogen.clients import genelab, space
from astrobiogen.net import (
    ConfigMissing,
    Upstream,
    UpstreamBadStatus,
    UpstreamMalformedPayload,
    UpstreamTimeout,
    UpstreamUnavailable,
)
from tests.conftest import KEYED, UNKEYED


def _run(handler, call, settings=KEYED):
    async def _go():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
            return await call(Upstream(http, settings))
    return asyncio.run(_go())


class TestErrorMapping:
    def test_non_2xx_is_bad_status(self):
        handler = lambda r: httpx.Response(503, text="busy")
        with pytest.raises(UpstreamBadStatus) as exc:
            _run(handler, lambda up: up.get_json("open_notify", "/iss-now.json"))
        assert exc.value.status_code == 503
        assert exc.value.source == "open_notify"

    def test_connect_error_is_unavailable(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)
        with pytest.raises(UpstreamUnavailable):
            _run(handler, lambda up: up.get_json("spacedevs", "/launch/upcoming/"))

    def test_read_timeout_is_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)
        with pytest.raises(UpstreamTimeout):
            _run(handler, lambda up: up.get_json("nasa_images", "/search"))

    def test_non_json_is_malformed(self):
        handler = lambda r: httpx.Response(200, text="<html>maintenance</html>")
        with pytest.raises(UpstreamMalformedPayload):
            _run(handler, lambda up: up.get_json("open_notify", "/iss-now.json"))

    def test_wrong_shape_is_malformed(self):
        handler = lambda r: httpx.Response(200, json=[1, 2, 3])
        with pytest.raises(UpstreamMalformedPayload):
            _run(handler, lambda up: up.get_json("open_notify", "/iss-now.json", shape=dict))

    def test_missing_key_fails_before_io(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={})

        with pytest.raises(ConfigMissing):
            _run(handler, lambda up: up.post_json("groq", "/chat/completions", {}), settings=UNKEYED)
        assert seen == []


class TestRequestShape:
    def test_bearer_and_query_keys(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"ok": True})

        async def calls(up):
            await up.post_json("tavily", "/search", {"query": "q"})
            await up.get_json("nasa_api", "/planetary/apod")

        _run(handler, calls)
        tavily_req, apod_req = seen
        assert tavily_req.headers["Authorization"] == "Bearer test-tavily-key"
        assert str(tavily_req.url) == "https://api.tavily.com/search"
        assert apod_req.url.params["api_key"] == "DEMO_KEY"
        assert "Authorization" not in apod_req.headers

    def test_none_params_are_dropped(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={})

        _run(handler, lambda up: up.get_json("spacedevs", "/launch/upcoming/", params={"limit": 5, "mode": None}))
        assert dict(seen[0].url.params) == {"limit": "5"}


class TestClients:
    def test_dge_csv_rows(self):
        csv_text = "Symbol,Name,log2FoldChange,padj\nMT1,Metallothionein 1,2.7,0.0002\n"
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, text=csv_text)

        rows = _run(handler, lambda up: genelab.fetch_dge_rows(up, experiment_id="GLDS-47"))
        assert rows == [{"Symbol": "MT1", "Name": "Metallothionein 1", "log2FoldChange": "2.7", "padj": "0.0002"}]
        assert str(seen[0].url) == "https://dge.example.org/GLDS-47_dge.csv"

    def test_dge_without_url_is_config_missing(self):
        with pytest.raises(ConfigMissing):
            _run(lambda r: httpx.Response(200), lambda up: genelab.fetch_dge_rows(up, experiment_id="GLDS-47"),
                 settings=UNKEYED)

    def test_space_weather_feeds_degrade_independently(self):
        from datetime import date

        def handler(request):
            feed = request.url.path.rsplit("/", 1)[-1]
            if feed == "CME":
                return httpx.Response(500)
            if feed == "FLR":
                return httpx.Response(200, text="")
            return httpx.Response(200, json=[{"sepID": "S1", "eventTime": "2026-10-01T00:00Z"}])

        bundle = _run(handler, lambda up: space.fetch_space_weather(
            up, start_date=date(2026, 10, 1), end_date=date(2026, 10, 8)))
        assert bundle == {"CME": [], "FLR": [], "SEP": [{"sepID": "S1", "eventTime": "2026-10-01T00:00Z"}]}

    def test_space_weather_error_object_fails_one_feed(self):
        from datetime import date

        def handler(request):
            feed = request.url.path.rsplit("/", 1)[-1]
            if feed == "CME":
                return httpx.Response(200, json={"error": "rate limit"})
            return httpx.Response(200, json=[{"flrID": "F1", "beginTime": "2026-10-02T00:00Z"}])

        bundle = _run(handler, lambda up: space.fetch_space_weather(
            up, start_date=date(2026, 10, 1), end_date=date(2026, 10, 8)))
        assert bundle["CME"] == []
        assert bundle["FLR"] == [{"flrID": "F1", "beginTime": "2026-10-02T00:00Z"}]

    def test_space_weather_all_feeds_down_raises(self):
        from datetime import date

        with pytest.raises(UpstreamBadStatus):
            _run(lambda r: httpx.Response(502), lambda up: space.fetch_space_weather(
                up, start_date=date(2026, 10, 1), end_date=date(2026, 10, 8)))
