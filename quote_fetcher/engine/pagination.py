"""Cursor-driven walk over a user's quote pages."""

from __future__ import annotations

from threading import Event
from typing import Callable, Iterator, Protocol

import structlog

from .decoder import decode_page
from .errors import DecodeError, QuoteFetcherError, TransportError
from .models import PaginationState, QuoteRecord, WalkOutcome, WalkSummary
from .normalizer import normalize_post

FetchPage = Callable[[str, int, int, int], bytes]


class CancellationToken:
    """Cooperative stop signal checked at page boundaries."""

    def __init__(self) -> None:
        self._event = Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


class WalkDiagnostics(Protocol):
    """Receives progress notifications from a walk."""

    def page_started(self, page: int) -> None: ...

    def page_fetched(self, page: int, total_pages: int, post_count: int) -> None: ...

    def post_skipped(self, page: int, index: int, reason: str) -> None: ...

    def walk_failed(self, page: int, error: QuoteFetcherError) -> None: ...

    def walk_finished(self, summary: WalkSummary) -> None: ...


class NullDiagnostics:
    def page_started(self, page: int) -> None:
        return

    def page_fetched(self, page: int, total_pages: int, post_count: int) -> None:
        return

    def post_skipped(self, page: int, index: int, reason: str) -> None:
        return

    def walk_failed(self, page: int, error: QuoteFetcherError) -> None:
        return

    def walk_finished(self, summary: WalkSummary) -> None:
        return


class QuoteWalk:
    """Lazy, single-pass iterator of quote records for one user.

    One page is requested at a time. The cursor (``cluster``/``z``) echoed on
    each request is exactly the one decoded from the previous response, and
    the walk continues while the page counter does not exceed the most
    recently reported ``total_pages``. Transport and decode failures end the
    iteration; the reason is available on :attr:`summary` afterwards.
    """

    def __init__(
        self,
        user_id: str,
        fetch: FetchPage,
        *,
        cancel_token: CancellationToken | None = None,
        diagnostics: WalkDiagnostics | None = None,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.user_id = user_id
        self.fetch = fetch
        self.cancel_token = cancel_token or CancellationToken()
        self.diagnostics = diagnostics or NullDiagnostics()
        self.logger = (logger or structlog.get_logger("quote_fetcher.walk")).bind(user=user_id)
        self.state = PaginationState()
        self.summary = WalkSummary()
        self._records = self._run()

    def __iter__(self) -> "QuoteWalk":
        return self

    def __next__(self) -> QuoteRecord:
        return next(self._records)

    def close(self) -> None:
        """Stop the walk early; no further pages are requested."""
        self._records.close()

    # ------------------------------------------------------------------
    def _run(self) -> Iterator[QuoteRecord]:
        state = self.state
        while True:
            if self.cancel_token.cancelled:
                self._finish(WalkOutcome.CANCELLED)
                return
            page_number = state.page_number
            self.diagnostics.page_started(page_number)
            try:
                body = self.fetch(self.user_id, page_number, state.cluster, state.z)
            except TransportError as exc:
                self._fail(WalkOutcome.TRANSPORT_ERROR, page_number, exc)
                return
            try:
                page = decode_page(body)
            except DecodeError as exc:
                self._fail(WalkOutcome.DECODE_ERROR, page_number, exc)
                return

            self.summary.pages_fetched += 1
            self.summary.total_pages = page.total_pages
            self.diagnostics.page_fetched(page_number, page.total_pages, len(page.posts))
            self.logger.info(
                "page_fetched",
                page=page_number,
                total_pages=page.total_pages,
                posts=len(page.posts),
                cluster=page.cluster,
                z=page.z,
            )

            for index, post in enumerate(page.posts):
                record, reason = normalize_post(post)
                if record is None:
                    self.summary.posts_skipped += 1
                    self.logger.debug("post_skipped", page=page_number, index=index, reason=reason)
                    self.diagnostics.post_skipped(page_number, index, reason or "")
                    continue
                self.summary.records_emitted += 1
                yield record

            state.advance(page)
            if state.page_number > page.total_pages:
                self._finish(WalkOutcome.COMPLETED)
                return

    def _fail(self, outcome: WalkOutcome, page: int, error: QuoteFetcherError) -> None:
        self.summary.error = error
        self.logger.error("walk_failed", page=page, outcome=outcome.value, error=str(error))
        self.diagnostics.walk_failed(page, error)
        self._finish(outcome)

    def _finish(self, outcome: WalkOutcome) -> None:
        self.summary.outcome = outcome
        self.logger.info(
            "walk_finished",
            outcome=outcome.value,
            pages=self.summary.pages_fetched,
            records=self.summary.records_emitted,
            skipped=self.summary.posts_skipped,
        )
        self.diagnostics.walk_finished(self.summary)


def walk_quotes(
    user_id: str,
    fetch: FetchPage,
    *,
    cancel_token: CancellationToken | None = None,
    diagnostics: WalkDiagnostics | None = None,
    logger: structlog.BoundLogger | None = None,
) -> QuoteWalk:
    return QuoteWalk(
        user_id,
        fetch,
        cancel_token=cancel_token,
        diagnostics=diagnostics,
        logger=logger,
    )


__all__ = [
    "CancellationToken",
    "FetchPage",
    "NullDiagnostics",
    "QuoteWalk",
    "WalkDiagnostics",
    "walk_quotes",
]
