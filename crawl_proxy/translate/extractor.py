"""Pick the page text out of a result record."""
from __future__ import annotations

from crawl_proxy.translate.json_value import JsonObject, as_object, first_text

__all__ = ["extract_content", "CONTENT_KEYS", "NESTED_MARKDOWN_KEYS"]

# filtered/fit markdown first, then raw markdown, then plain content
CONTENT_KEYS = (
    "filtered_markdown",
    "fit_markdown",
    "markdown",
    "raw_markdown",
    "content",
    "page_content",
)
NESTED_MARKDOWN_KEYS = ("filtered_markdown", "fit_markdown", "markdown", "raw_markdown")


def extract_content(record: JsonObject) -> str:
    """Best available text for *record*, or an empty string.

    Newer crawl4ai versions return ``markdown`` as an object
    (``{"raw_markdown": ..., "fit_markdown": ...}``); it is searched only when
    no top-level key matched.
    """
    text = first_text(record, CONTENT_KEYS)
    if text is not None:
        return text

    nested = as_object(record.get("markdown"))
    if nested is not None:
        text = first_text(nested, NESTED_MARKDOWN_KEYS)
        if text is not None:
            return text

    return ""
