"""Exporter Service Provider Interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable

from ..models import QuoteRecord


class BaseExporter(ABC):
    """Uniform exporter contract for quote sinks."""

    @abstractmethod
    def export(self, record: QuoteRecord) -> None:
        """Persist a single record."""

    def export_many(self, records: Iterable[QuoteRecord]) -> int:
        count = 0
        for record in records:
            self.export(record)
            count += 1
        return count

    @abstractmethod
    def flush(self) -> None:
        """Flush buffered data to destination."""

    @abstractmethod
    def close(self) -> None:
        """Release underlying resources."""

    def __enter__(self) -> "BaseExporter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = ["BaseExporter"]
