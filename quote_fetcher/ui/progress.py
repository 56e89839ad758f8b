"""Terminal progress helpers with Rich-based rendering."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.status import Status

from ..engine.errors import DecodeError, QuoteFetcherError, TransportError
from ..engine.models import WalkOutcome, WalkSummary


class ProgressActivity:
    """Indeterminate activity indicator using Rich Status spinner."""

    def __init__(self, enabled: bool = True, console: Console | None = None) -> None:
        self.console = console or Console()
        self.enabled = enabled and self.console.is_terminal
        self._status: Status | None = None

    def start(self, message: str) -> None:
        if not self.enabled:
            return
        if self._status is None:
            self._status = self.console.status(message)
            self._status.start()
        else:
            self._status.update(message)

    def close(self) -> None:
        if self._status is not None:
            self._status.stop()
            self._status = None


class ConsoleDiagnostics:
    """Report walk progress on a Rich console.

    Prints one line per page and a spinner while a request is in flight.
    With ``enabled=False`` only failures are shown.
    """

    def __init__(self, console: Console | None = None, enabled: bool = True) -> None:
        self.console = console or Console()
        self.enabled = enabled
        self.skipped = 0
        self._activity = ProgressActivity(enabled=enabled, console=self.console)

    def page_started(self, page: int) -> None:
        if not self.enabled:
            return
        self.console.print(f"[grey50]Fetching page {page}...[/]")
        self._activity.start(f"Waiting for page {page}")

    def page_fetched(self, page: int, total_pages: int, post_count: int) -> None:
        self._activity.close()
        if self.enabled:
            self.console.print(f"[yellow]Page {page} of {total_pages}[/] [dim]({post_count} posts)[/]")

    def post_skipped(self, page: int, index: int, reason: str) -> None:
        self.skipped += 1

    def walk_failed(self, page: int, error: QuoteFetcherError) -> None:
        self._activity.close()
        if isinstance(error, TransportError):
            label = "HTTP error"
        elif isinstance(error, DecodeError):
            label = "JSON parsing error"
        else:
            label = "Unexpected error"
        self.console.print(f"[red]{label} on page {page}: {escape(str(error))}[/]")

    def walk_finished(self, summary: WalkSummary) -> None:
        self._activity.close()
        if summary.outcome is WalkOutcome.CANCELLED:
            self.console.print(
                f"[yellow]Cancelled after {summary.pages_fetched} page(s).[/]"
            )
        elif self.enabled and self.skipped:
            self.console.print(f"[dim]Skipped {self.skipped} post(s) without quote text.[/]")


__all__ = ["ConsoleDiagnostics", "ProgressActivity"]
