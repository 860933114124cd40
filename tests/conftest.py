"""Shared pytest fixtures for all tests."""

import json
from typing import Any, Callable, Dict, List, Tuple, Union
from urllib.parse import parse_qs

import httpx
import pytest

from facebook_ads.client import GraphClient, set_client
from facebook_ads.config import settings

BASE_URI = "https://graph.facebook.com/v21.0"

Reply = Union[httpx.Response, Callable[[httpx.Request], httpx.Response]]


class MockGraph:
    """Routes requests by (method, path) to queued replies and records them."""

    def __init__(self):
        self.routes: Dict[Tuple[str, str], List[Reply]] = {}
        self.requests: List[httpx.Request] = []

    def add(self, method: str, path: str, json_body: Any = None, status: int = 200):
        reply = httpx.Response(status, json=json_body if json_body is not None else {})
        self.routes.setdefault((method, f"/v21.0{path}"), []).append(reply)

    def add_text(self, method: str, path: str, text: str, status: int = 200):
        reply = httpx.Response(status, text=text, headers={"content-type": "text/html"})
        self.routes.setdefault((method, f"/v21.0{path}"), []).append(reply)

    def add_error(self, method: str, path: str, exc: Exception):
        def raise_exc(request: httpx.Request) -> httpx.Response:
            raise exc

        self.routes.setdefault((method, f"/v21.0{path}"), []).append(raise_exc)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        replies = self.routes.get((request.method, request.url.path))
        if not replies:
            return httpx.Response(
                404, json={"error": {"message": f"No route for {request.url.path}", "code": 803}}
            )
        reply = replies.pop(0) if len(replies) > 1 else replies[0]
        if callable(reply) and not isinstance(reply, httpx.Response):
            return reply(request)
        return reply

    def params(self, index: int = -1) -> Dict[str, str]:
        """Query params of a recorded request, single-valued."""
        return dict(self.requests[index].url.params)

    def form(self, index: int = -1) -> Dict[str, str]:
        """Form body of a recorded POST, single-valued."""
        body = parse_qs(self.requests[index].content.decode())
        return {key: values[0] for key, values in body.items()}

    def json_param(self, key: str, index: int = -1) -> Any:
        return json.loads(self.params(index)[key])


@pytest.fixture(autouse=True)
def fast_settings(monkeypatch: pytest.MonkeyPatch):
    """Pin the base URI and disable backoff sleeps."""
    monkeypatch.setattr(settings, "meta_base_uri", BASE_URI)
    monkeypatch.setattr(settings, "retry_base_delay", 0)
    monkeypatch.setattr(settings, "max_retries", 3)
    monkeypatch.setattr(settings, "max_pages", 50)
    monkeypatch.setattr(settings, "default_page_limit", 100)
    yield
    set_client(None)


@pytest.fixture
def graph() -> MockGraph:
    return MockGraph()


@pytest.fixture
def client(graph: MockGraph) -> GraphClient:
    return GraphClient(
        access_token="test-token", transport=httpx.MockTransport(graph.handler)
    )
