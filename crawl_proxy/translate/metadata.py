"""Metadata for each result and assembly of the response items."""
from __future__ import annotations

from typing import Dict, List, Sequence

from crawl_proxy.models import OutputItem
from crawl_proxy.translate.extractor import extract_content
from crawl_proxy.translate.json_value import JsonObject, as_object, as_text

__all__ = ["build_metadata", "build_output_items"]


def build_metadata(record: JsonObject) -> Dict[str, str]:
    """String-only copy of ``record["metadata"]`` plus ``source`` from ``url``.

    Values that are not non-empty strings are dropped. A non-empty ``url``
    always wins over an upstream ``source`` entry.
    """
    metadata: Dict[str, str] = {}

    upstream = as_object(record.get("metadata"))
    if upstream is not None:
        for key, value in upstream.items():
            text = as_text(value)
            if text is not None:
                metadata[key] = text

    source = as_text(record.get("url"))
    if source is not None:
        metadata["source"] = source

    return metadata


def build_output_items(records: Sequence[JsonObject]) -> List[OutputItem]:
    """One output item per record, in the same order."""
    return [
        OutputItem(content=extract_content(record), metadata=build_metadata(record))
        for record in records
    ]
