"""Engine components orchestrating fetch → decode → normalize → export."""

from .decoder import decode_page
from .errors import DecodeError, DecodeErrorKind, QuoteFetcherError, SinkError, TransportError
from .fetcher import QuotesClient
from .models import (
    PageResult,
    PaginationState,
    QuoteRecord,
    RawQuotePayload,
    WalkOutcome,
    WalkSummary,
)
from .normalizer import extract_payload, normalize_post, normalize_quote
from .pagination import CancellationToken, NullDiagnostics, QuoteWalk, WalkDiagnostics, walk_quotes

__all__ = [
    "CancellationToken",
    "DecodeError",
    "DecodeErrorKind",
    "NullDiagnostics",
    "PageResult",
    "PaginationState",
    "QuoteFetcherError",
    "QuoteRecord",
    "QuoteWalk",
    "QuotesClient",
    "RawQuotePayload",
    "SinkError",
    "TransportError",
    "WalkDiagnostics",
    "WalkOutcome",
    "WalkSummary",
    "decode_page",
    "extract_payload",
    "normalize_post",
    "normalize_quote",
    "walk_quotes",
]
