"""
Shared fixtures: an app wired to httpx.MockTransport so no test touches the network.

`upstreams.on(host, handler)` registers a fake upstream; any host without a
handler behaves like an unreachable network (httpx.ConnectError).
"""

from typing import Callable, Dict, List

import httpx
import pytest
from fastapi.testclient import TestClient

from astrobiogen.main import create_app
from astrobiogen.settings import Settings

KEYED = Settings(
    groq_api_key="test-groq-key",
    tavily_api_key="test-tavily-key",
    genelab_dge_url="https://dge.example.org/{id}_dge.csv",
)
UNKEYED = Settings()


class FakeUpstreams:
    """Dispatch outbound requests by host."""

    def __init__(self):
        self.handlers: Dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self.calls: List[httpx.Request] = []

    def on(self, host: str, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.handlers[host] = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        handler = self.handlers.get(request.url.host)
        if handler is None:
            raise httpx.ConnectError("network unreachable", request=request)
        return handler(request)

    def hosts(self) -> List[str]:
        return [r.url.host for r in self.calls]


def groq_reply(text: str) -> Callable[[httpx.Request], httpx.Response]:
    def _handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"choices": [{"message": {"role": "assistant", "content": text}}]})
    return _handler


def tavily_reply(answer, results=None, images=None) -> Callable[[httpx.Request], httpx.Response]:
    def _handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"answer": answer, "results": results or [], "images": images or []})
    return _handler


@pytest.fixture
def upstreams() -> FakeUpstreams:
    return FakeUpstreams()


@pytest.fixture
def make_client(upstreams):
    opened = []

    def _make(settings: Settings = KEYED) -> TestClient:
        app = create_app(settings=settings, transport=httpx.MockTransport(upstreams))
        client = TestClient(app, raise_server_exceptions=False)
        client.__enter__()
        opened.append(client)
        return client

    yield _make
    for client in opened:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client) -> TestClient:
    return make_client()
