"""User interaction helpers."""

from .progress import ConsoleDiagnostics, ProgressActivity

__all__ = ["ConsoleDiagnostics", "ProgressActivity"]
