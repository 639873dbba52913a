"""Grid assembler: turn wrapped cells and resolved widths into output lines.

Every line of one grid has the same display width: borders, padding and
column widths add up identically for rules and content lines.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from pi.datatable.cell import Alignment
from pi.datatable.errors import ConfigurationError
from pi.datatable.layout import LayoutResult
from pi.datatable.options import TableOptions
from pi.datatable.style import TableStyle
from pi.datatable.wrap import Line, WrappedCell

logger = logging.getLogger(__name__)

_BLANK = Line("", 0)


class Section(str, Enum):
    HEADER = "header"
    BODY = "body"


@dataclass(frozen=True)
class WrappedRow:
    cells: tuple[WrappedCell, ...]
    section: Section = Section.BODY
    separator: bool | None = None

    @property
    def height(self) -> int:
        return max((cell.height for cell in self.cells), default=1)


def align(line: Line, width: int, alignment: Alignment) -> str:
    """Pad *line* with spaces to *width* columns."""
    gap = max(0, width - line.width)
    if alignment is Alignment.RIGHT:
        return " " * gap + line.text
    if alignment is Alignment.CENTER:
        left = gap // 2
        return " " * left + line.text + " " * (gap - left)
    return line.text + " " * gap


def _rule(style: TableStyle, left: str, junction: str, right: str, widths: list[int], padding: int) -> str:
    runs = [style.horizontal * (width + 2 * padding) for width in widths]
    return left + junction.join(runs) + right


def padding_delta(override: int | None, padding: int) -> int:
    """Columns a cell's padding *override* takes beyond the table's *padding*."""
    if override is None:
        return 0
    return 2 * (override - padding)


def _content_lines(row: WrappedRow, widths: list[int], style: TableStyle, padding: int) -> list[str]:
    lines: list[str] = []
    for index in range(row.height):
        parts = [style.vertical]
        for cell, width in zip(row.cells, widths):
            line = cell.lines[index] if index < cell.height else _BLANK
            pad = " " * (padding if cell.padding is None else cell.padding)
            inner = width - padding_delta(cell.padding, padding)
            parts.append(pad + align(line, inner, cell.alignment) + pad)
            parts.append(style.vertical)
        lines.append("".join(parts))
    return lines


def effective_widths(layout: LayoutResult, rows: Sequence[WrappedRow], padding: int = 0) -> list[int]:
    """Resolved widths, widened where a forced-overflow line does not fit.

    *padding* is the table's cell padding; cells that override it need the
    difference on top of their content width.
    """
    widths = list(layout.widths)
    for row in rows:
        for column, cell in enumerate(row.cells):
            needed = cell.width + padding_delta(cell.padding, padding)
            if needed > widths[column]:
                widths[column] = needed
    for column, (resolved, actual) in enumerate(zip(layout.widths, widths)):
        if actual != resolved:
            logger.warning(
                "Column %d widened from %d to %d to fit unbreakable content",
                column,
                resolved,
                actual,
            )
    return widths


def assemble(
    layout: LayoutResult,
    rows: Sequence[WrappedRow],
    options: TableOptions | None = None,
) -> list[str]:
    """Draw the grid for *rows* laid out with *layout*.

    Raises :class:`ConfigurationError` if a row's cell count differs from the
    layout's column count.
    """
    options = options or TableOptions()
    count = layout.column_count
    for position, row in enumerate(rows):
        if len(row.cells) != count:
            raise ConfigurationError(
                f"Row {position} has {len(row.cells)} cells but the layout has {count} columns"
            )
    if count == 0:
        return []

    style = options.style
    padding = options.cell_padding
    widths = effective_widths(layout, rows, padding)
    rules = style.has_rules

    lines: list[str] = []
    if rules and options.top_border:
        lines.append(_rule(style, style.top_left, style.top_junction, style.top_right, widths, padding))

    previous: WrappedRow | None = None
    for row in rows:
        if previous is not None and rules:
            if row.separator is not None:
                separate = row.separator
            elif previous.section is not row.section:
                separate = options.show_header_separator
            else:
                separate = options.separate_rows
            if separate:
                lines.append(
                    _rule(style, style.left_junction, style.intersection, style.right_junction, widths, padding)
                )
        lines.extend(_content_lines(row, widths, style, padding))
        previous = row

    if rules and options.bottom_border:
        lines.append(
            _rule(style, style.bottom_left, style.bottom_junction, style.bottom_right, widths, padding)
        )
    return lines
