"""Adapters turning external data into native records."""

from __future__ import annotations

from .exports import ExportFormatError, load_records

__all__ = ["ExportFormatError", "load_records"]
