"""Exporter SPI and implementations."""

from .base import BaseExporter
from .file_exporter import CSV_HEADER, FileExporter, resolve_format

__all__ = ["BaseExporter", "CSV_HEADER", "FileExporter", "resolve_format"]
