"""
Unit tests for RateLimitMiddleware with a controllable clock.
"""
from unittest.mock import AsyncMock

import pytest
from starlette.requests import Request

from users_api.api.middleware.rate_limit import RateLimitMiddleware


class FakeClock:

    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


def _request(host, path="/users"):
    return Request({
        "type": "http",
        "method": "GET",
        "path": path,
        "query_string": b"",
        "headers": [],
        "client": (host, 50000),
    })


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def middleware(clock):
    return RateLimitMiddleware(AsyncMock(), requests_per_second=1, clock=clock)


class TestRateLimitMiddleware:

    @pytest.mark.asyncio
    async def test_window_reopens_after_one_second(self, middleware, clock):
        call_next = AsyncMock(return_value="ok")

        assert await middleware.dispatch(_request("10.0.0.1"), call_next) == "ok"
        limited = await middleware.dispatch(_request("10.0.0.1"), call_next)
        assert limited.status_code == 429

        clock.now += 1.0
        assert await middleware.dispatch(_request("10.0.0.1"), call_next) == "ok"
        assert call_next.await_count == 2

    @pytest.mark.asyncio
    async def test_clients_are_limited_independently(self, middleware):
        call_next = AsyncMock(return_value="ok")

        assert await middleware.dispatch(_request("10.0.0.1"), call_next) == "ok"
        assert await middleware.dispatch(_request("10.0.0.2"), call_next) == "ok"

    @pytest.mark.asyncio
    async def test_idle_clients_are_forgotten(self, middleware, clock):
        call_next = AsyncMock(return_value="ok")
        for host in ("10.0.0.1", "10.0.0.2", "10.0.0.3"):
            await middleware.dispatch(_request(host), call_next)
        assert len(middleware._requests) == 3

        clock.now += 5.0
        await middleware.dispatch(_request("10.0.0.4"), call_next)

        assert set(middleware._requests) == {"10.0.0.4"}

    @pytest.mark.asyncio
    async def test_other_paths_are_not_tracked(self, middleware):
        call_next = AsyncMock(return_value="ok")

        for _ in range(3):
            assert await middleware.dispatch(_request("10.0.0.1", path="/ping"), call_next) == "ok"
        assert middleware._requests == {}
