"""
HTTP front end: ``POST /crawl`` and ``POST /md`` accept the client schema,
forward it to crawl4ai and answer with ``[{content, metadata}]``.
"""
from __future__ import annotations

import json
from typing import AsyncIterator, List

from aiohttp import web
from pydantic import ValidationError

from crawl_proxy.config import ProxyConfig
from crawl_proxy.errors import InvalidContentType, InvalidRequest, MethodNotAllowed, ProxyError, UpstreamError
from crawl_proxy.logger import logger
from crawl_proxy.models import CrawlRequest, ErrorBody, OutputItem
from crawl_proxy.translate import (
    build_output_items,
    build_payload_candidates,
    decode_results,
    normalize_request_urls,
)
from crawl_proxy.upstream.client import UpstreamClient

__all__ = ["ROUTES", "CLIENT_MAX_SIZE", "CONFIG_KEY", "UPSTREAM_KEY", "create_app", "crawl_endpoint", "run"]

ROUTES = ("/crawl", "/md")
JSON_CONTENT_TYPE = "application/json"
#: request bodies above this size are answered with a JSON 413
CLIENT_MAX_SIZE = 64 * 1024 * 1024

CONFIG_KEY = web.AppKey("config", ProxyConfig)
UPSTREAM_KEY = web.AppKey("upstream", UpstreamClient)


async def _parse_request(request: web.Request) -> CrawlRequest:
    if request.method != "POST":
        raise MethodNotAllowed()

    if not request.headers.get("Content-Type", "").startswith(JSON_CONTENT_TYPE):
        raise InvalidContentType()

    raw = await request.read()
    try:
        payload = json.loads(raw)
    except ValueError as exc:
        raise InvalidRequest(str(exc)) from exc

    try:
        return CrawlRequest.model_validate(payload)
    except ValidationError as exc:
        raise InvalidRequest(str(exc)) from exc


async def _crawl(request: web.Request) -> List[OutputItem]:
    crawl_request = await _parse_request(request)
    urls = normalize_request_urls(crawl_request)
    logger.info("Request to crawl %s from %s", urls, request.remote)

    upstream = request.app[UPSTREAM_KEY]
    result = await upstream.call_with_fallback(build_payload_candidates(urls))
    result.raise_for_failure()

    records = decode_results(result.data)
    if records is None:
        raise UpstreamError("invalid json structure received from crawl api")
    return build_output_items(records)


async def crawl_endpoint(request: web.Request) -> web.Response:
    """Route handler shared by every alias in :data:`ROUTES`."""
    try:
        items = await _crawl(request)
    except UpstreamError as exc:
        logger.error("%d %s - %s :: %s", exc.status, exc.error, exc.detail, request.remote)
        return web.json_response(exc.to_dict(), status=exc.status)
    except ProxyError as exc:
        logger.warning("%d %s :: %s", exc.status, exc.error, request.remote)
        return web.json_response(exc.to_dict(), status=exc.status)
    except web.HTTPException as exc:
        # raised by aiohttp itself, e.g. an oversized body in request.read()
        error = exc.reason.lower()
        logger.warning("%d %s - %s :: %s", exc.status, error, exc.text, request.remote)
        body: ErrorBody = {"error": error}
        if exc.text:
            body["detail"] = exc.text
        return web.json_response(body, status=exc.status)

    logger.info("200 :: %s", request.remote)
    return web.json_response(items, status=200)


def create_app(config: ProxyConfig, *, client_max_size: int = CLIENT_MAX_SIZE) -> web.Application:
    """Build the application; the upstream session lives as long as the app."""
    app = web.Application(client_max_size=client_max_size)
    app[CONFIG_KEY] = config

    async def upstream_ctx(app: web.Application) -> AsyncIterator[None]:
        async with UpstreamClient(config) as client:
            app[UPSTREAM_KEY] = client
            yield

    app.cleanup_ctx.append(upstream_ctx)
    for path in ROUTES:
        # every method, so that non-POST requests get the JSON 405 body
        app.router.add_route("*", path, crawl_endpoint)
    return app


def run(config: ProxyConfig) -> None:
    """Serve until interrupted."""
    logger.info("Listening on %s", config.listen_address)
    web.run_app(
        create_app(config),
        host=config.listen_ip or None,
        port=config.listen_port,
        access_log=None,
        print=None,
    )
