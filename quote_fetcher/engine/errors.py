"""Error taxonomy shared by transport, decoding and export."""

from __future__ import annotations

from enum import Enum
from pathlib import Path


class QuoteFetcherError(Exception):
    """Base class for all quote fetcher failures."""


class TransportError(QuoteFetcherError):
    """Network or HTTP failure while requesting a page."""

    def __init__(self, message: str, status_code: int | None = None, url: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class DecodeErrorKind(str, Enum):
    MALFORMED = "malformed"
    INVALID_ENCODING = "invalid_encoding"
    INVALID_FIELD = "invalid_field"


class DecodeError(QuoteFetcherError):
    """Page body could not be turned into a page result."""

    def __init__(self, kind: DecodeErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.args[0]}"


class SinkError(QuoteFetcherError):
    """Writing records to their destination failed."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


__all__ = [
    "DecodeError",
    "DecodeErrorKind",
    "QuoteFetcherError",
    "SinkError",
    "TransportError",
]
