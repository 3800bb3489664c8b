# === FILE: crawl_proxy/upstream/client.py ===
"""
Upstream caller: POSTs payload candidates to the crawl4ai endpoint and stops
at the first one that comes back as 200 with a JSON body.
"""
from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from aiohttp import ClientError, ClientSession, ClientTimeout, TCPConnector

from crawl_proxy.config import ProxyConfig
from crawl_proxy.errors import UpstreamError
from crawl_proxy.translate.candidates import PayloadCandidate

__all__ = ("CallResult", "UpstreamClient", "preview_body", "PREVIEW_LIMIT")

PREVIEW_LIMIT = 300
INVALID_JSON = "invalid json received from crawl api"


def preview_body(body: bytes, limit: int = PREVIEW_LIMIT) -> str:
    """Whitespace-trimmed body text, cut to *limit* characters."""
    text = body.decode("utf-8", errors="replace").strip()
    if len(text) > limit:
        return text[:limit] + "..."
    return text


@dataclass(slots=True)
class CallResult:
    """Outcome of one POST to the crawl API."""

    shape: str
    status: Optional[int] = None
    data: Any = None
    body_preview: str = ""
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.status == 200

    def raise_for_failure(self) -> None:
        """Raise :class:`UpstreamError` describing this result unless it is ok."""
        if self.error is not None:
            raise UpstreamError(self.error)
        if self.status != 200:
            detail = f"crawl api returned status {self.status}"
            if self.body_preview:
                detail += f": {self.body_preview}"
            raise UpstreamError(detail)


class UpstreamClient:
    """Talks to one fixed crawl4ai endpoint.

    Used as an async context manager it owns its ``ClientSession``; a session
    passed in explicitly is left open. No timeout and no connection cap are
    applied: a hanging upstream blocks only the call waiting on it.
    """

    def __init__(self, config: ProxyConfig, session: Optional[ClientSession] = None) -> None:
        self.config = config
        self.endpoint = config.endpoint
        self.session = session
        self._owns_session = session is None
        self.logger = logging.getLogger("CrawlProxy")

    async def __aenter__(self) -> UpstreamClient:
        if self.session is None:
            self.session = ClientSession(
                connector=TCPConnector(limit=0),
                timeout=ClientTimeout(total=None),
                raise_for_status=False,
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    async def call(self, candidate: PayloadCandidate) -> CallResult:
        if not self.session:
            raise RuntimeError("Session not initialized")
        try:
            async with self.session.post(
                self.endpoint,
                data=candidate.body,
                headers={"Content-Type": "application/json"},
            ) as resp:
                status = resp.status
                body = await resp.read()
        except (ClientError, asyncio.TimeoutError) as e:
            return CallResult(shape=candidate.shape, error=str(e) or type(e).__name__)

        if status != 200:
            return CallResult(shape=candidate.shape, status=status, body_preview=preview_body(body))

        try:
            data = json.loads(body)
        except ValueError:
            return CallResult(shape=candidate.shape, status=status, error=INVALID_JSON)

        return CallResult(shape=candidate.shape, status=status, data=data)

    async def call_with_fallback(self, candidates: Sequence[PayloadCandidate]) -> CallResult:
        """First successful result, otherwise the result of the last attempt.

        The last failure is the one reported: for a single URL that is always
        the ``urls``-shaped attempt.
        """
        if not candidates:
            raise ValueError("at least one payload candidate is required")

        for candidate in candidates:
            result = await self.call(candidate)
            if result.ok:
                return result
            self.logger.debug(
                "crawl api attempt with %r payload failed: status=%s error=%s",
                candidate.shape,
                result.status,
                result.error,
            )
        return result
