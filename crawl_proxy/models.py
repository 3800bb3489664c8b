"""
Data models for the client-facing side of the proxy.
"""
from __future__ import annotations

from typing import Dict, List, Optional, TypedDict

from pydantic import BaseModel, ConfigDict


class CrawlRequest(BaseModel):
    """Body posted by the client; unknown fields are ignored."""

    model_config = ConfigDict(extra="ignore")

    urls: Optional[List[Optional[str]]] = None
    url: Optional[str] = None


class OutputItem(TypedDict):
    """One translated result: page text plus string-only metadata."""

    content: str
    metadata: Dict[str, str]


class ErrorBody(TypedDict, total=False):
    error: str
    detail: str
