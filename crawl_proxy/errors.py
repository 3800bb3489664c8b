"""Exceptions raised while serving a crawl request.

Each class knows the HTTP status and the short machine-readable name it is
reported with; the route handler is the only place that turns them into
responses.
"""
from __future__ import annotations

from typing import Optional

from crawl_proxy.models import ErrorBody

__all__ = [
    "ProxyError",
    "MethodNotAllowed",
    "InvalidContentType",
    "InvalidRequest",
    "UpstreamError",
]


class ProxyError(Exception):
    """Base class: a request outcome that is reported as ``{error, detail?}``."""

    status: int = 500
    error: str = "internal error"

    def __init__(self, detail: Optional[str] = None) -> None:
        super().__init__(detail or self.error)
        self.detail = detail

    def to_dict(self) -> ErrorBody:
        body: ErrorBody = {"error": self.error}
        if self.detail:
            body["detail"] = self.detail
        return body


class MethodNotAllowed(ProxyError):
    status = 405
    error = "method not allowed"


class InvalidContentType(ProxyError):
    status = 400
    error = "content type must be application/json"


class InvalidRequest(ProxyError):
    """Unparseable body, wrong field types, or no usable URL."""

    status = 400
    error = "invalid json"


class UpstreamError(ProxyError):
    """The crawl API was unreachable or answered with something unusable."""

    status = 502
    error = "bad gateway"
