"""Tests for request normalization, payload candidates and response translation."""
from __future__ import annotations

import pytest
from crawl_proxy.errors import InvalidRequest
from crawl_proxy.models import CrawlRequest
from crawl_proxy.translate import (
    build_metadata,
    build_output_items,
    build_payload_candidates,
    decode_results,
    extract_content,
    normalize_request_urls,
)

# --------------------------------------------------------------------------- #
#                               Normalization                                 #
# --------------------------------------------------------------------------- #


def test_normalize_keeps_order_drops_empties_appends_single_url():
    request = CrawlRequest(urls=["a", "", "b"], url="c")
    assert normalize_request_urls(request) == ["a", "b", "c"]


def test_normalize_single_url_only():
    request = CrawlRequest(url="https://example.com/single")
    assert normalize_request_urls(request) == ["https://example.com/single"]


def test_normalize_keeps_duplicates():
    request = CrawlRequest(urls=["a", "a"], url="a")
    assert normalize_request_urls(request) == ["a", "a", "a"]


@pytest.mark.parametrize(
    "body",
    [{}, {"urls": []}, {"urls": ["", ""]}, {"url": ""}, {"urls": None, "url": None}, {"urls": [""], "url": ""}],
)
def test_normalize_rejects_empty_url_set(body):
    with pytest.raises(InvalidRequest) as excinfo:
        normalize_request_urls(CrawlRequest.model_validate(body))
    assert excinfo.value.status == 400
    assert excinfo.value.to_dict() == {
        "error": "invalid json",
        "detail": "request must include `url` or `urls`",
    }


# --------------------------------------------------------------------------- #
#                             Payload candidates                              #
# --------------------------------------------------------------------------- #


def assert_default_options(payload: dict) -> None:
    assert payload["browserConfig"] == {"text_mode": True}
    assert payload["crawlerRunConfig"] == {
        "remove_overlay_elements": True,
        "magic": True,
        "exclude_all_images": True,
    }


def test_single_url_yields_url_then_urls_candidate():
    candidates = build_payload_candidates(["only"])
    assert [c.shape for c in candidates] == ["url", "urls"]

    first, second = (c.decoded() for c in candidates)
    assert first["url"] == "only"
    assert "urls" not in first
    assert second["urls"] == ["only"]
    assert "url" not in second

    assert_default_options(first)
    assert_default_options(second)
    assert first["browserConfig"] == second["browserConfig"]
    assert first["crawlerRunConfig"] == second["crawlerRunConfig"]


def test_several_urls_yield_one_list_candidate():
    candidates = build_payload_candidates(["a", "b"])
    assert len(candidates) == 1
    payload = candidates[0].decoded()
    assert candidates[0].shape == "urls"
    assert payload["urls"] == ["a", "b"]
    assert "url" not in payload
    assert_default_options(payload)


def test_candidates_are_serialized_bytes():
    candidate = build_payload_candidates(["https://example.com"])[0]
    assert isinstance(candidate.body, bytes)
    assert candidate.body.startswith(b"{")


# --------------------------------------------------------------------------- #
#                                  Decoding                                   #
# --------------------------------------------------------------------------- #


@pytest.mark.parametrize(
    "payload,expected",
    [
        ({"results": [{"url": "x"}]}, [{"url": "x"}]),
        ([{"url": "x"}], [{"url": "x"}]),
        ({"foo": "bar"}, [{"foo": "bar"}]),
        ({"data": [{"url": "y"}]}, [{"url": "y"}]),
        ({"results": [1, {"url": "x"}, "s", None, [2]]}, [{"url": "x"}]),
        ([1, "two", None], []),
        ([], []),
        ({"results": []}, []),
        ({"results": [{"a": 1}], "data": [{"b": 2}]}, [{"a": 1}]),
        ({"results": "oops", "data": [{"b": 2}]}, [{"b": 2}]),
        ({"results": {"url": "x"}}, [{"results": {"url": "x"}}]),
        ({}, [{}]),
    ],
)
def test_decode_results(payload, expected):
    assert decode_results(payload) == expected


@pytest.mark.parametrize("payload", ["a string", 42, 4.2, True, None])
def test_decode_scalars_are_malformed(payload):
    result = decode_results(payload)
    assert result is None
    assert result != []


# --------------------------------------------------------------------------- #
#                              Content extraction                             #
# --------------------------------------------------------------------------- #


@pytest.mark.parametrize(
    "record,expected",
    [
        ({"markdown": {"raw_markdown": "raw", "fit_markdown": "fit"}}, "fit"),
        ({"content": "c"}, "c"),
        ({"page_content": "p"}, "p"),
        ({"markdown": "md", "content": "c"}, "md"),
        ({"filtered_markdown": "filtered", "fit_markdown": "fit", "markdown": "md"}, "filtered"),
        ({"fit_markdown": "", "raw_markdown": "raw"}, "raw"),
        ({"markdown": {"raw_markdown": "raw"}, "content": "c"}, "c"),
        ({"markdown": {"markdown": "nested", "raw_markdown": "raw"}}, "nested"),
        ({"markdown": {"filtered_markdown": "", "raw_markdown": "raw"}}, "raw"),
        ({"markdown": {"content": "not searched"}}, ""),
        ({"markdown": 5}, ""),
        ({"content": 7, "page_content": None}, ""),
        ({}, ""),
    ],
)
def test_extract_content(record, expected):
    assert extract_content(record) == expected


# --------------------------------------------------------------------------- #
#                                  Metadata                                   #
# --------------------------------------------------------------------------- #


def test_metadata_keeps_only_non_empty_strings():
    record = {
        "metadata": {
            "title": "Example",
            "empty": "",
            "count": 3,
            "flag": True,
            "nested": {"a": "b"},
            "list": ["x"],
            "none": None,
        }
    }
    assert build_metadata(record) == {"title": "Example"}


def test_metadata_url_overwrites_source():
    record = {"url": "https://example.com", "metadata": {"source": "upstream", "title": "T"}}
    assert build_metadata(record) == {"source": "https://example.com", "title": "T"}


@pytest.mark.parametrize("url", ["", None, 12, ["https://example.com"]])
def test_metadata_ignores_unusable_url(url):
    record = {"url": url, "metadata": {"source": "upstream"}}
    assert build_metadata(record) == {"source": "upstream"}


@pytest.mark.parametrize("metadata", [None, "text", ["a"], 1])
def test_metadata_field_that_is_not_an_object(metadata):
    assert build_metadata({"metadata": metadata, "url": "u"}) == {"source": "u"}


def test_output_items_match_records_one_to_one():
    records = [
        {"url": "https://a", "markdown": {"fit_markdown": "A"}},
        {"nothing": "useful"},
        {"url": "https://c", "content": "C", "metadata": {"lang": "en"}},
    ]
    assert build_output_items(records) == [
        {"content": "A", "metadata": {"source": "https://a"}},
        {"content": "", "metadata": {}},
        {"content": "C", "metadata": {"lang": "en", "source": "https://c"}},
    ]


def test_normalize_treats_null_entries_as_empty():
    request = CrawlRequest.model_validate({"urls": [None, "a", None]})
    assert normalize_request_urls(request) == ["a"]
