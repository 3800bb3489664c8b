"""
Alternate request bodies for the crawl4ai API.

Deployed crawl4ai versions disagree on whether a single page is requested
with ``url`` or with a one-element ``urls`` list, so a single URL gets both
shapes (``url`` first). Several URLs only have the list shape.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Sequence

__all__ = (
    "PayloadCandidate",
    "DEFAULT_BROWSER_CONFIG",
    "DEFAULT_CRAWLER_RUN_CONFIG",
    "default_options",
    "build_payload_candidates",
)

Shape = Literal["url", "urls"]

DEFAULT_BROWSER_CONFIG: Dict[str, Any] = {"text_mode": True}
DEFAULT_CRAWLER_RUN_CONFIG: Dict[str, Any] = {
    "remove_overlay_elements": True,
    "magic": True,
    "exclude_all_images": True,
}


@dataclass(frozen=True, slots=True)
class PayloadCandidate:
    """One serialized request body and the shape it was encoded with."""

    shape: Shape
    body: bytes

    def decoded(self) -> Dict[str, Any]:
        return json.loads(self.body)


def default_options() -> Dict[str, Any]:
    # fresh copies per payload
    return {
        "browserConfig": dict(DEFAULT_BROWSER_CONFIG),
        "crawlerRunConfig": dict(DEFAULT_CRAWLER_RUN_CONFIG),
    }


def _encode(shape: Shape, urls: Sequence[str]) -> PayloadCandidate:
    target: Any = urls[0] if shape == "url" else list(urls)
    payload = {shape: target, **default_options()}
    return PayloadCandidate(shape=shape, body=json.dumps(payload).encode("utf-8"))


def build_payload_candidates(urls: Sequence[str]) -> List[PayloadCandidate]:
    """Ordered candidates for *urls* (already normalized, non-empty)."""
    if len(urls) == 1:
        return [_encode("url", urls), _encode("urls", urls)]
    return [_encode("urls", urls)]
