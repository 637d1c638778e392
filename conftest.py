"""Shared fixtures: fake feed endpoints and an httpx transport that routes by host."""

import asyncio
from typing import Callable, Dict

import httpx
import pytest

from competitor_radar.config import Settings
from competitor_radar.schemas import FeedEndpoint

RSS_OK = (
    '<?xml version="1.0"?><rss version="2.0"><channel><title>t</title>'
    "<item><title>Acme launches analytics suite - TechCrunch</title>"
    "<link>https://example.com/1</link>"
    "<pubDate>Mon, 01 Jan 2024 12:00:00 GMT</pubDate></item>"
    "<item><title>Acme pricing plan revised - Reuters</title>"
    "<link>https://example.com/2</link></item>"
    "<item><title>Acme CTO podcast interview</title>"
    "<link>https://example.com/3</link></item>"
    "</channel></rss>"
)


def make_endpoints(n: int = 3):
    return [
        FeedEndpoint(name=f"ep{i}", template=f"https://ep{i}.test/raw?url={{url}}", proxied=True)
        for i in range(n)
    ]


def host_router(behaviours: Dict[str, Callable]):
    """MockTransport whose response depends on the endpoint host.

    behaviours maps "ep0" etc. to a callable(request) returning a Response or
    raising an httpx error. Unlisted hosts answer 404.
    """
    calls = []

    async def handler(request: httpx.Request):
        name = request.url.host.split(".")[0]
        calls.append(name)
        behaviour = behaviours.get(name)
        if behaviour is None:
            return httpx.Response(404)
        result = behaviour(request)
        if asyncio.iscoroutine(result):
            result = await result
        return result

    transport = httpx.MockTransport(handler)
    transport.calls = calls
    return transport


def ok_feed(request):
    return httpx.Response(200, text=RSS_OK)


def server_error(request):
    return httpx.Response(503, text="unavailable")


def garbage(request):
    return httpx.Response(200, text="<html><body>rate limited</body></html>")


def connect_error(request):
    raise httpx.ConnectError("connection refused", request=request)


async def hang(request):
    await asyncio.sleep(5)
    return httpx.Response(200, text=RSS_OK)


@pytest.fixture
def settings():
    return Settings(
        fetch_timeout_seconds=0.2,
        digest_deadline_seconds=5.0,
        newsapi_key="",
        mock_mode=False,
    )
