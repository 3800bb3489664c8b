"""Helpers for inspecting JSON values of unknown shape.

Parsed JSON is already a tagged union in Python (``None``, ``bool``, numbers,
``str``, ``list``, ``dict``); the helpers below give each runtime check a name
so the lookup rules in the decoder, extractor and metadata modules read as
ordered key lists instead of ad hoc ``isinstance`` chains.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Union

JsonValue = Union[None, bool, int, float, str, List[Any], Dict[str, Any]]
JsonObject = Dict[str, JsonValue]

__all__ = (
    "JsonValue",
    "JsonObject",
    "as_object",
    "as_array",
    "as_text",
    "objects_in",
    "first_text",
)


def as_object(value: JsonValue) -> Optional[JsonObject]:
    """Return *value* if it is a JSON object, else None."""
    return value if isinstance(value, dict) else None


def as_array(value: JsonValue) -> Optional[List[JsonValue]]:
    """Return *value* if it is a JSON array, else None."""
    return value if isinstance(value, list) else None


def as_text(value: JsonValue) -> Optional[str]:
    """Return *value* if it is a non-empty string, else None."""
    if isinstance(value, str) and value:
        return value
    return None


def objects_in(value: JsonValue) -> Optional[List[JsonObject]]:
    """Objects contained in an array, in order.

    None means *value* is not an array at all; an array without objects
    gives an empty list.
    """
    items = as_array(value)
    if items is None:
        return None
    return [item for item in items if isinstance(item, dict)]


def first_text(obj: JsonObject, keys: Sequence[str]) -> Optional[str]:
    """First non-empty string found under *keys*, checked in order."""
    for key in keys:
        text = as_text(obj.get(key))
        if text is not None:
            return text
    return None
