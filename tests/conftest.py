"""Pytest configuration and fixtures."""

import asyncio
import inspect
import json
import os
import time
from collections.abc import Awaitable, Callable

import httpx
import pytest

from knows.config.settings import KnowsSettings
from knows.tools import KnowsToolkit, build_toolkit

# Set test environment
os.environ["KNOWS_ENVIRONMENT"] = "development"
os.environ["KNOWS_LOG_LEVEL"] = "DEBUG"

TEST_BASE_URL = "http://knows.test"

Responder = Callable[[httpx.Request], "httpx.Response | Awaitable[httpx.Response]"]


def envelope(data) -> httpx.Response:
    """JSON response wrapped the way the KnowS API wraps every payload."""
    return httpx.Response(200, json={"code": 0, "data": data})


def echo_path(request: httpx.Request) -> httpx.Response:
    return envelope({"path": request.url.path})


class FakeKnowsAPI:
    """In-process stand-in for the KnowS API.

    Records every request and tracks how many are in flight at once, so tests
    can assert on call counts and on concurrency.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.responder: Responder = echo_path
        self.delay = 0.0
        self.in_flight = 0
        self.peak_in_flight = 0
        self.spans: list[tuple[float, float]] = []

    async def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        self.in_flight += 1
        self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
        started = time.monotonic()
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            response = self.responder(request)
            if inspect.isawaitable(response):
                response = await response
            return response
        finally:
            self.in_flight -= 1
            self.spans.append((started, time.monotonic()))

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    @property
    def paths(self) -> list[str]:
        return [request.url.path for request in self.requests]

    def payload(self, index: int = -1) -> dict:
        return json.loads(self.requests[index].content)


@pytest.fixture
def fake_api() -> FakeKnowsAPI:
    """Fake KnowS API answering every path with an enveloped echo."""
    return FakeKnowsAPI()


@pytest.fixture
def make_settings() -> Callable[..., KnowsSettings]:
    """Factory for settings that ignore the local .env file."""

    def factory(**overrides) -> KnowsSettings:
        values = {
            "api_key": "test-key",
            "api_base_url": TEST_BASE_URL,
            "request_timeout": 10,
            "retry_backoff": 0.001,
        }
        values.update(overrides)
        return KnowsSettings(_env_file=None, **values)

    return factory


@pytest.fixture
def make_toolkit(fake_api, make_settings) -> Callable[..., KnowsToolkit]:
    """Factory for toolkits wired to the fake API."""

    def factory(**overrides) -> KnowsToolkit:
        return build_toolkit(make_settings(**overrides), transport=fake_api.transport)

    return factory
