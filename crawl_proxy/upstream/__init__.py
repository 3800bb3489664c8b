"""Client for the upstream crawl4ai API."""
from crawl_proxy.upstream.client import CallResult, UpstreamClient

__all__ = ["CallResult", "UpstreamClient"]
