"""Exceptions raised by the table layout engine."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Invalid caller input: width budget, target width, column counts or options.

    Raised before any output is produced.  Overflowing tables and oversized
    cell content are *not* configuration errors; they render best-effort.
    """
