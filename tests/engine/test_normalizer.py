from __future__ import annotations

import pytest

from quote_fetcher.engine import QuoteRecord, RawQuotePayload, extract_payload, normalize_post, normalize_quote
from quote_fetcher.engine.normalizer import SKIP_EMPTY_TEXT, SKIP_NO_PAYLOAD


def test_fragments_are_concatenated_in_order() -> None:
    record = normalize_quote(RawQuotePayload(["A", {"item": "B"}, "C"], page_no="12"))
    assert record == QuoteRecord(text="ABC", page="12")


def test_object_form_uses_text_field() -> None:
    record = normalize_quote(RawQuotePayload({"text": "Hello"}))
    assert record is not None
    assert record.text == "Hello"
    assert record.page is None


@pytest.mark.parametrize("raw", [{"text": "   "}, [], None, 42, "bare string", {"other": "x"}])
def test_empty_or_unknown_shapes_yield_nothing(raw) -> None:
    assert normalize_quote(RawQuotePayload(raw)) is None


def test_unknown_fragments_contribute_nothing() -> None:
    raw = ["  Life ", 7, {"item": None}, {"item": 3}, {"other": "x"}, ["nested"], {"item": "goes on  "}]
    record = normalize_quote(RawQuotePayload(raw))
    assert record is not None
    assert record.text == "Life goes on"


def test_non_string_text_counts_as_empty() -> None:
    assert normalize_quote(RawQuotePayload({"text": ["a"]})) is None


def test_post_path_keys_match_case_insensitively(make_post) -> None:
    post = {"Alt": {"ALINTI": {"Parse": {"Raw": [{"item": "Bir"}, " iki"]}, "Sayfa_No": "5"}}}
    record, reason = normalize_post(post)
    assert reason is None
    assert record == QuoteRecord(text="Bir iki", page="5")


def test_fragment_and_text_keys_are_case_sensitive() -> None:
    record = normalize_quote(RawQuotePayload([{"Item": "dropped"}, {"item": "kept"}]))
    assert record == QuoteRecord(text="kept")
    assert normalize_quote(RawQuotePayload({"Text": "dropped"})) is None


def test_extract_payload_renders_numeric_page(make_post) -> None:
    payload = extract_payload(make_post(["x"], page_no=88))
    assert payload is not None
    assert payload.page_no == "88"


@pytest.mark.parametrize(
    "post",
    [None, [], {}, {"alt": None}, {"alt": {"alinti": None}}, {"alt": {"alinti": "text"}}, "junk"],
)
def test_posts_without_quote_are_skipped(post) -> None:
    assert normalize_post(post) == (None, SKIP_NO_PAYLOAD)


def test_missing_parse_is_empty_text() -> None:
    assert normalize_post({"alt": {"alinti": {"sayfa_no": "3"}}}) == (None, SKIP_EMPTY_TEXT)


def test_record_is_immutable() -> None:
    record = QuoteRecord(text="x")
    with pytest.raises(AttributeError):
        record.text = "y"  # type: ignore[misc]
    assert record.as_dict() == {"text": "x", "page": None}
