"""Turn loosely-typed post entries into :class:`QuoteRecord` values."""

from __future__ import annotations

from typing import Any, Mapping

from .models import QuoteRecord, RawQuotePayload

SKIP_NO_PAYLOAD = "no_quote_payload"
SKIP_EMPTY_TEXT = "empty_text"

# post -> alt -> alinti -> parse -> raw
_QUOTE_PATH = ("alt", "alinti")


def _get(mapping: Any, key: str) -> Any:
    """Case-insensitive lookup; exact spelling wins over other casings."""
    if not isinstance(mapping, Mapping):
        return None
    if key in mapping:
        return mapping[key]
    lowered = key.lower()
    for candidate, value in mapping.items():
        if isinstance(candidate, str) and candidate.lower() == lowered:
            return value
    return None


def _page_label(value: Any) -> str | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return None


def extract_payload(post: Any) -> RawQuotePayload | None:
    """Lift the nested quote body out of a post, or ``None`` when absent."""

    node = post
    for key in _QUOTE_PATH:
        node = _get(node, key)
        if not isinstance(node, Mapping):
            return None
    parse = _get(node, "parse")
    raw = _get(parse, "raw") if isinstance(parse, Mapping) else None
    return RawQuotePayload(raw_parse=raw, page_no=_page_label(_get(node, "sayfa_no")))


def _fragment_text(fragment: Any) -> str:
    if isinstance(fragment, str):
        return fragment
    item = fragment.get("item") if isinstance(fragment, Mapping) else None
    if isinstance(item, str):
        return item
    return ""


def normalize_quote(payload: RawQuotePayload) -> QuoteRecord | None:
    """Rebuild quote text from either payload shape.

    ``raw_parse`` is an ordered list of fragments (strings or ``{"item": ...}``
    objects) concatenated without separator, or an object with a ``text``
    field. Any other shape, or whitespace-only text, yields ``None``.
    """

    raw = payload.raw_parse
    if isinstance(raw, list):
        content = "".join(_fragment_text(fragment) for fragment in raw)
    elif isinstance(raw, Mapping):
        text = raw.get("text")
        content = text if isinstance(text, str) else ""
    else:
        content = ""
    content = content.strip()
    if not content:
        return None
    return QuoteRecord(text=content, page=payload.page_no)


def normalize_post(post: Any) -> tuple[QuoteRecord | None, str | None]:
    """Return ``(record, None)`` or ``(None, skip_reason)`` for one post."""

    payload = extract_payload(post)
    if payload is None:
        return None, SKIP_NO_PAYLOAD
    record = normalize_quote(payload)
    if record is None:
        return None, SKIP_EMPTY_TEXT
    return record, None


__all__ = [
    "SKIP_EMPTY_TEXT",
    "SKIP_NO_PAYLOAD",
    "extract_payload",
    "normalize_post",
    "normalize_quote",
]
