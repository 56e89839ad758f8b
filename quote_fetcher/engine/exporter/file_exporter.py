"""File based exporter supporting a JSON array or CSV."""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Literal

from ..errors import SinkError
from ..models import QuoteRecord
from .base import BaseExporter

ExportFormat = Literal["json", "csv"]
CSV_HEADER = ("Quote", "Book", "Author")


def resolve_format(
    path: Path, explicit: str | None = None, default: ExportFormat = "json"
) -> ExportFormat:
    """Pick the output format from an explicit choice or the file extension."""

    if explicit:
        fmt = explicit.lower()
        if fmt not in ("json", "csv"):
            raise ValueError(f"Unsupported output format: {explicit}")
        return fmt  # type: ignore[return-value]
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return "csv"
    if suffix == ".json":
        return "json"
    return default


class FileExporter(BaseExporter):
    """Write quotes to a single file.

    JSON output is one indented array of ``{"text", "page"}`` objects and is
    written when the exporter is flushed. CSV rows are streamed under the
    ``Quote,Book,Author`` header; book and author stay empty because the
    listing API does not provide them.
    """

    def __init__(self, path: Path, fmt: ExportFormat = "json") -> None:
        self.path = Path(path)
        self.format = fmt
        self._records: list[dict[str, str | None]] = []
        self._csv_writer = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._file = self.path.open("w", encoding="utf-8", newline="")
            if self.format == "csv":
                self._csv_writer = csv.writer(self._file)
                self._csv_writer.writerow(CSV_HEADER)
        except OSError as exc:
            raise SinkError(f"Cannot open {self.path}: {exc}", self.path) from exc

    def export(self, record: QuoteRecord) -> None:
        if self._csv_writer is not None:
            try:
                self._csv_writer.writerow((record.text, "", ""))
            except OSError as exc:
                raise SinkError(f"Cannot write {self.path}: {exc}", self.path) from exc
        else:
            self._records.append(record.as_dict())

    def flush(self) -> None:
        try:
            if self.format == "json" and not self._file.closed:
                self._file.seek(0)
                self._file.truncate()
                json.dump(self._records, self._file, ensure_ascii=False, indent=2)
                self._file.write("\n")
            self._file.flush()
        except OSError as exc:
            raise SinkError(f"Cannot write {self.path}: {exc}", self.path) from exc

    def close(self) -> None:
        if self._file.closed:
            return
        try:
            self.flush()
        finally:
            self._file.close()


__all__ = ["CSV_HEADER", "ExportFormat", "FileExporter", "resolve_format"]
