"""Domain types flowing between decoder, normalizer and pagination engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, model_validator

from .errors import QuoteFetcherError


@dataclass(frozen=True, slots=True)
class QuoteRecord:
    """A single normalised quote."""

    text: str
    page: str | None = None

    def as_dict(self) -> dict[str, str | None]:
        return {"text": self.text, "page": self.page}


@dataclass(slots=True)
class RawQuotePayload:
    """Untrusted quote body lifted out of a post."""

    raw_parse: Any
    page_no: str | None = None


class PageResult(BaseModel):
    """One decoded page of the user's post listing."""

    posts: list[Any] = Field(default_factory=list)
    total_pages: int = 0
    cluster: int = 0
    z: int = 0

    @model_validator(mode="before")
    @classmethod
    def _fold_keys(cls, value: Any) -> Any:
        # Upstream casing is inconsistent; first spelling of each key wins.
        if not isinstance(value, dict):
            return value
        folded: dict[str, Any] = {}
        for key, item in value.items():
            folded.setdefault(str(key).lower(), item)
        if folded.get("posts") is None:
            folded["posts"] = []
        return folded


@dataclass(slots=True)
class PaginationState:
    """Cursor position for the next page request."""

    page_number: int = 1
    cluster: int = 0
    z: int = 0

    def advance(self, page: PageResult) -> None:
        self.cluster = page.cluster
        self.z = page.z
        self.page_number += 1


class WalkOutcome(str, Enum):
    """How a walk terminated."""

    COMPLETED = "completed"
    CANCELLED = "cancelled"
    TRANSPORT_ERROR = "transport_error"
    DECODE_ERROR = "decode_error"

    @property
    def failed(self) -> bool:
        return self in (WalkOutcome.TRANSPORT_ERROR, WalkOutcome.DECODE_ERROR)


@dataclass(slots=True)
class WalkSummary:
    """Counters and terminal signal for one walk."""

    outcome: WalkOutcome | None = None
    pages_fetched: int = 0
    records_emitted: int = 0
    posts_skipped: int = 0
    total_pages: int | None = None
    error: QuoteFetcherError | None = None

    @property
    def finished(self) -> bool:
        return self.outcome is not None


__all__ = [
    "PageResult",
    "PaginationState",
    "QuoteRecord",
    "RawQuotePayload",
    "WalkOutcome",
    "WalkSummary",
]
