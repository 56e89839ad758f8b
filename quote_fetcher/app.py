"""Typer CLI entrypoint for the quote fetcher."""

from __future__ import annotations

import signal
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator, Optional, Sequence

import structlog
import typer
import yaml
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import AppConfig, ConfigRepository
from .engine import CancellationToken, QuoteRecord, QuotesClient, SinkError, walk_quotes
from .engine.exporter import FileExporter, resolve_format
from .logging_conf import (
    available_user_logs,
    configure_logging,
    global_log_path,
    tail_log,
    user_log_path,
    user_logger,
)
from .ui import ConsoleDiagnostics

app = typer.Typer(
    help="Fetch a user's public quotes and print or save them (see: quote-fetcher fetch USER).",
    no_args_is_help=True,
    rich_markup_mode=None,
)
config_app = typer.Typer(
    name="config",
    help="Inspect the client configuration.",
    no_args_is_help=True,
    rich_markup_mode=None,
)
log_app = typer.Typer(
    name="log",
    help="View log files.",
    no_args_is_help=True,
    rich_markup_mode=None,
)

console = Console()


@dataclass
class AppState:
    repository: ConfigRepository
    config: AppConfig
    client_factory: Callable[[structlog.BoundLogger], QuotesClient]
    logger_factory: Callable[[str], structlog.BoundLogger]


def build_state(verbose: bool) -> AppState:
    repository = ConfigRepository()
    config = repository.load()
    configure_logging(verbose=verbose)

    def _client(logger: structlog.BoundLogger) -> QuotesClient:
        return QuotesClient(config.client, logger=logger)

    return AppState(
        repository=repository,
        config=config,
        client_factory=_client,
        logger_factory=lambda user: user_logger(user, verbose=verbose),
    )


def _get_state(ctx: typer.Context) -> AppState:
    state = ctx.obj
    if state is None:
        state = build_state(verbose=False)
        ctx.obj = state
    return state


@contextmanager
def _cancel_on_interrupt(token: CancellationToken) -> Iterator[None]:
    """Turn Ctrl+C into a cooperative cancellation for the current walk."""

    def _handler(_signum, _frame) -> None:
        console.print("[yellow]Interrupted, finishing the current page...[/]")
        token.cancel()

    try:
        previous = signal.signal(signal.SIGINT, _handler)
    except ValueError:
        # Not in the main thread; leave default handling alone.
        yield
        return
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


def _render_quotes_table(rows: Sequence[QuoteRecord]) -> Table:
    table = Table(box=box.SIMPLE, show_lines=False)
    table.add_column(" # ", justify="center", style="dim")
    table.add_column("Page", justify="center", style="cyan")
    table.add_column("Quote", overflow="fold")
    for index, row in enumerate(rows, start=1):
        table.add_row(str(index), row.page or "-", escape(row.text))
    return table


def _save(rows: Sequence[QuoteRecord], path: Path, fmt: str) -> None:
    exporter = FileExporter(path, fmt)  # type: ignore[arg-type]
    with exporter:
        exporter.export_many(rows)


app.add_typer(config_app, name="config")
app.add_typer(log_app, name="log")


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging."),
) -> None:
    ctx.obj = build_state(verbose)


@app.command(
    "fetch",
    help=(
        "Fetch every quote for USER and show them as a table. "
        "Usage: quote-fetcher fetch USER [-o quotes.json]"
    ),
)
def fetch(
    ctx: typer.Context,
    user: str = typer.Argument(..., help="User identifier on the quote service."),
    out: Optional[Path] = typer.Option(
        None, "--out", "-o", help="Also save the quotes to this file (.json or .csv)."
    ),
    fmt: Optional[str] = typer.Option(
        None, "--format", help="Output file format: json or csv (default: by extension)."
    ),
    quiet: bool = typer.Option(False, "--quiet", help="Hide per-page progress."),
) -> None:
    state = _get_state(ctx)
    output_format = None
    if out is not None:
        try:
            output_format = resolve_format(out, fmt, state.config.default_output_format)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--format") from exc

    logger = state.logger_factory(user)
    console.print(f"[yellow]Fetching quotes for user: {escape(user)}[/]")
    token = CancellationToken()
    diagnostics = ConsoleDiagnostics(console, enabled=state.config.show_progress and not quiet)

    with state.client_factory(logger) as client, _cancel_on_interrupt(token):
        walk = walk_quotes(user, client, cancel_token=token, diagnostics=diagnostics, logger=logger)
        rows = list(walk)
    summary = walk.summary

    if rows:
        console.print(_render_quotes_table(rows))
        console.print(f"[green]Found {len(rows)} quotes[/]")
    elif not (summary.outcome and summary.outcome.failed):
        console.print("[yellow]No quotes found for this user.[/]")

    if out is not None and output_format is not None and rows:
        console.print(f"[yellow]Saving to: {escape(str(out))}[/]")
        try:
            _save(rows, out, output_format)
        except SinkError as exc:
            logger.error("save_failed", path=str(out), error=str(exc))
            console.print(f"[red]Error saving file: {escape(str(exc))}[/]")
            raise typer.Exit(code=1)
        console.print("[green]Save completed successfully[/]")

    if summary.outcome and summary.outcome.failed:
        console.print(
            f"[red]Error: fetching stopped after {summary.pages_fetched} page(s): "
            f"{escape(str(summary.error))}[/]"
        )
        raise typer.Exit(code=1)


@config_app.command("show", help="Print the effective configuration as YAML.")
def config_show(ctx: typer.Context) -> None:
    state = _get_state(ctx)
    payload = state.config.model_dump(mode="json")
    console.print(yaml.safe_dump(payload, allow_unicode=True, sort_keys=False), markup=False)


@config_app.command("path", help="Print the configuration file location.")
def config_path(ctx: typer.Context) -> None:
    state = _get_state(ctx)
    console.print(str(state.repository.locator.config_path()), markup=False, soft_wrap=True)


@log_app.command("list", help="List per-user log files.")
def log_list() -> None:
    logs = list(available_user_logs())
    if not logs:
        console.print("No user logs yet.", style="dim")
        return
    table = Table(box=box.SIMPLE_HEAD)
    table.add_column("File", style="green")
    for path in logs:
        table.add_row(path.name)
    console.print(table)


@log_app.command("show", help="Show the most recent log lines.")
def log_show(
    user: Optional[str] = typer.Option(None, "--user", help="User whose log to show (default: global log)."),
    tail: int = typer.Option(100, "--tail", help="Number of lines to show."),
) -> None:
    if user:
        path = user_log_path(user)
    else:
        path = global_log_path()
    lines = tail_log(path, tail)
    if not lines:
        console.print("No log entries yet.", style="dim")
        return
    console.print(f"{path.name} · last {len(lines)} lines", style="cyan")
    console.print("".join(lines), markup=False)


def cli() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    cli()
