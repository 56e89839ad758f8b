"""Decode a raw page response into a :class:`PageResult`."""

from __future__ import annotations

import json

from pydantic import ValidationError

from .errors import DecodeError, DecodeErrorKind
from .models import PageResult


def decode_page(body: bytes) -> PageResult:
    """Parse one page body.

    Field names are matched case-insensitively and a missing ``posts`` list
    decodes as empty. Anything that is not a JSON object fails with
    :class:`DecodeError`.
    """

    try:
        text = body.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise DecodeError(DecodeErrorKind.INVALID_ENCODING, f"Response is not UTF-8: {exc}") from exc
    try:
        payload = json.loads(text)
    except (ValueError, RecursionError) as exc:
        raise DecodeError(DecodeErrorKind.MALFORMED, f"Response is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise DecodeError(
            DecodeErrorKind.MALFORMED,
            f"Expected a JSON object, got {type(payload).__name__}",
        )
    try:
        return PageResult.model_validate(payload)
    except ValidationError as exc:
        fields = ", ".join(".".join(str(part) for part in err["loc"]) for err in exc.errors())
        raise DecodeError(DecodeErrorKind.INVALID_FIELD, f"Invalid page fields: {fields}") from exc


__all__ = ["decode_page"]
