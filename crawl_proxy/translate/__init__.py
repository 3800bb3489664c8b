"""
Translation between the client request schema and crawl4ai responses.
"""
from crawl_proxy.translate.candidates import PayloadCandidate, build_payload_candidates
from crawl_proxy.translate.decoder import decode_results
from crawl_proxy.translate.extractor import extract_content
from crawl_proxy.translate.metadata import build_metadata, build_output_items
from crawl_proxy.translate.normalizer import normalize_request_urls

__all__ = [
    "PayloadCandidate",
    "build_payload_candidates",
    "decode_results",
    "extract_content",
    "build_metadata",
    "build_output_items",
    "normalize_request_urls",
]
