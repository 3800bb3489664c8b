# File: tests/conftest.py
from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from typing import NamedTuple, Optional

import pytest
import pytest_asyncio
from aiohttp import ClientSession, web

from crawl_proxy.config import ProxyConfig
from crawl_proxy.server import create_app

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


class RunningProxy(NamedTuple):
    url: str
    endpoint: str
    upstream_port: int


async def start_site(app: web.Application, port: int) -> web.AppRunner:
    """Start *app* on 127.0.0.1:*port* and return its runner for cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "127.0.0.1", port)
    await site.start()
    return runner


@pytest.fixture(autouse=True)
def clean_environ(monkeypatch):
    """Keep the developer's shell from leaking into configuration."""
    for name in ("LISTEN_IP", "LISTEN_PORT", "CRAWL4AI_ENDPOINT"):
        monkeypatch.delenv(name, raising=False)


@pytest_asyncio.fixture
async def serve_upstream(unused_tcp_port_factory) -> AsyncIterator[Callable[[Handler], Awaitable[str]]]:
    """
    Start a fake crawl4ai answering ``POST /md`` with *handler*.
    Returns the endpoint URL.
    """
    runners: list[web.AppRunner] = []

    async def _serve(handler: Handler) -> str:
        port = unused_tcp_port_factory()
        app = web.Application()
        app.router.add_post("/md", handler)
        runners.append(await start_site(app, port))
        return f"http://127.0.0.1:{port}/md"

    yield _serve
    for runner in reversed(runners):
        await runner.cleanup()


@pytest_asyncio.fixture
async def start_proxy(unused_tcp_port_factory) -> AsyncIterator[Callable[..., Awaitable[RunningProxy]]]:
    """
    Start the proxy in front of a fake crawl4ai served by *upstream*.
    Without a handler nothing listens on the upstream port; *app_options*
    go to create_app.
    """
    runners: list[web.AppRunner] = []

    async def _start(upstream: Optional[Handler] = None, **app_options) -> RunningProxy:
        upstream_port = unused_tcp_port_factory()
        if upstream is not None:
            app = web.Application()
            app.router.add_post("/md", upstream)
            runners.append(await start_site(app, upstream_port))

        endpoint = f"http://127.0.0.1:{upstream_port}/md"
        proxy_port = unused_tcp_port_factory()
        config = ProxyConfig(crawl4ai_endpoint=endpoint, listen_ip="127.0.0.1", listen_port=proxy_port)
        runners.append(await start_site(create_app(config, **app_options), proxy_port))
        return RunningProxy(f"http://127.0.0.1:{proxy_port}", endpoint, upstream_port)

    yield _start
    for runner in reversed(runners):
        await runner.cleanup()


@pytest_asyncio.fixture
async def http() -> AsyncIterator[ClientSession]:
    async with ClientSession() as session:
        yield session
