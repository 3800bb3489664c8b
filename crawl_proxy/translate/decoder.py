"""Pull the list of per-URL result records out of a crawl4ai response."""
from __future__ import annotations

from typing import List, Optional

from crawl_proxy.translate.json_value import JsonObject, JsonValue, as_object, objects_in

__all__ = ["decode_results", "RESULT_LIST_KEYS"]

#: object keys that may hold the result array, checked in order
RESULT_LIST_KEYS = ("results", "data")


def decode_results(payload: JsonValue) -> Optional[List[JsonObject]]:
    """
    Return the result records contained in *payload*.

    * top-level array: its object elements;
    * object with an array under ``results`` (then ``data``): that array's objects;
    * any other object: the object itself as the only record.

    Non-object elements are dropped, so an empty list is a valid answer.
    None is returned for anything else (scalars, null), which callers must
    treat as a malformed response rather than as zero results.
    """
    records = objects_in(payload)
    if records is not None:
        return records

    obj = as_object(payload)
    if obj is None:
        return None

    for key in RESULT_LIST_KEYS:
        records = objects_in(obj.get(key))
        if records is not None:
            return records

    return [obj]
