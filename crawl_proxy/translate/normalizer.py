"""Turn a client body into the ordered list of URLs to crawl."""
from __future__ import annotations

from typing import List

from crawl_proxy.errors import InvalidRequest
from crawl_proxy.models import CrawlRequest

__all__ = ["normalize_request_urls"]


def normalize_request_urls(request: CrawlRequest) -> List[str]:
    """Non-empty entries of ``urls`` followed by ``url`` when it is non-empty.

    Order is kept and duplicates are not removed. Raises
    :class:`InvalidRequest` when nothing usable is left.
    """
    urls = [u for u in request.urls or () if u]
    if request.url:
        urls.append(request.url)

    if not urls:
        raise InvalidRequest("request must include `url` or `urls`")
    return urls
