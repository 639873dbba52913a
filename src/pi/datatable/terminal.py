"""Terminal width detection for ``Table.for_terminal`` and the CLI."""

from __future__ import annotations

import logging
import os
import sys
from typing import TextIO

from pi.datatable.errors import ConfigurationError

logger = logging.getLogger(__name__)


def _columns_from_env() -> int | None:
    value = os.environ.get("COLUMNS", "").strip()
    if not value:
        return None
    try:
        columns = int(value)
    except ValueError:
        logger.debug("Ignoring non-numeric COLUMNS=%r", value)
        return None
    return columns if columns > 0 else None


def terminal_width(stream: TextIO | None = None) -> int:
    """Return the column count of the terminal behind *stream*.

    A positive ``COLUMNS`` environment variable wins; otherwise the size of
    the terminal attached to *stream* (default ``sys.stdout``) is queried.
    Raises :class:`ConfigurationError` when neither gives a width.
    """
    columns = _columns_from_env()
    if columns is not None:
        return columns

    stream = stream if stream is not None else sys.stdout
    try:
        columns = os.get_terminal_size(stream.fileno()).columns
    except (AttributeError, OSError, ValueError) as e:
        raise ConfigurationError(
            "Cannot determine the terminal width; pass an explicit width"
        ) from e
    if columns <= 0:
        raise ConfigurationError("Terminal reports no columns; pass an explicit width")
    return columns
