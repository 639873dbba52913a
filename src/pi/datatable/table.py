"""Table: the data model's entry point.

A :class:`Table` owns its column specs, header and body rows and options.
Rendering runs the pipeline measure -> resolve -> wrap -> assemble::

    table = Table(header=[("Name", "Size")], body=[("a.txt", 12), ("b.txt", 3)])
    print(table.render(40))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, TextIO

from pi.datatable.cell import Alignment, Cell, Row, row_headers, row_of, rows_of
from pi.datatable.errors import ConfigurationError
from pi.datatable.grid import Section, WrappedRow, assemble, padding_delta
from pi.datatable.layout import ColumnSpec, LayoutResult, check_budget, resolve
from pi.datatable.options import TableOptions, load_options
from pi.datatable.terminal import terminal_width
from pi.datatable.wrap import minimum_width, natural_width, wrap_cell

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Table:
    """Column specs plus header and body rows.

    Rows may be given as :class:`Row` objects, tuples, lists or any value
    with a ``to_row()`` method.  When ``columns`` is omitted the column count
    is taken from the rows and every column gets a default
    :class:`ColumnSpec`.
    """

    header: tuple[Row, ...] = ()
    body: tuple[Row, ...] = ()
    columns: tuple[ColumnSpec, ...] | None = None
    options: TableOptions = field(default_factory=TableOptions)

    def __post_init__(self) -> None:
        header = rows_of(self.header)
        body = rows_of(self.body)
        object.__setattr__(self, "header", header)
        object.__setattr__(self, "body", body)
        object.__setattr__(self, "options", load_options(self.options))

        if self.columns is None:
            first = next(iter(header + body), None)
            columns = tuple(ColumnSpec() for _ in range(len(first) if first is not None else 0))
        else:
            columns = tuple(self.columns)
            for spec in columns:
                if not isinstance(spec, ColumnSpec):
                    raise ConfigurationError(f"Expected ColumnSpec, got {type(spec).__name__}")
        object.__setattr__(self, "columns", columns)

        for section, rows in (("header", header), ("body", body)):
            for position, row in enumerate(rows):
                if len(row) != len(columns):
                    raise ConfigurationError(
                        f"{section.capitalize()} row {position} has {len(row)} cells, "
                        f"expected {len(columns)}"
                    )

    @property
    def column_count(self) -> int:
        return len(self.columns)

    @property
    def rows(self) -> tuple[Row, ...]:
        """Header rows followed by body rows."""
        return self.header + self.body

    def with_options(self, **changes: Any) -> Table:
        return Table(self.header, self.body, self.columns, self.options.merged(**changes))

    def _alignment(self, cell: Cell, column: int) -> Alignment:
        return cell.alignment or self.columns[column].alignment or self.options.default_alignment

    def _column_widths(self) -> tuple[list[int], list[int]]:
        natural = [0] * self.column_count
        minimum = [0] * self.column_count
        for row in self.rows:
            for column, cell in enumerate(row):
                delta = padding_delta(cell.padding, self.options.cell_padding)
                natural[column] = max(natural[column], natural_width(cell) + delta)
                minimum[column] = max(minimum[column], minimum_width(cell) + delta)
        return natural, minimum

    def layout(self, width: int) -> LayoutResult:
        """Resolve column widths for a total display width of *width*."""
        width = check_budget(width)
        natural, minimum = self._column_widths()
        return resolve(
            self.columns,
            natural,
            width,
            minimum_widths=minimum,
            overhead=self.options.overhead(self.column_count),
            expand=self.options.expand,
        )

    def render_lines(self, width: int) -> list[str]:
        """Render the table as lines of equal display width."""
        layout = self.layout(width)
        wrapped = [
            self._wrap_row(row, layout, Section.HEADER) for row in self.header
        ] + [self._wrap_row(row, layout, Section.BODY) for row in self.body]
        lines = assemble(layout, wrapped, self.options)
        logger.debug("Rendered %d lines for %d rows", len(lines), len(wrapped))
        return lines

    def render(self, width: int) -> str:
        return "\n".join(self.render_lines(width))

    def for_terminal(self, stream: TextIO | None = None) -> str:
        """Render at the width of the terminal attached to *stream* (default stdout)."""
        return self.render(terminal_width(stream))

    def _wrap_row(self, row: Row, layout: LayoutResult, section: Section) -> WrappedRow:
        cells = tuple(
            wrap_cell(
                cell,
                max(1, layout[column] - padding_delta(cell.padding, self.options.cell_padding)),
                self._alignment(cell, column),
            )
            for column, cell in enumerate(row)
        )
        return WrappedRow(cells, section, row.separator)


def data_table(
    items: Iterable[Any],
    *,
    headers: Iterable[Any] | None = None,
    header: bool = True,
    columns: Iterable[ColumnSpec] | None = None,
    options: TableOptions | Mapping[str, Any] | None = None,
) -> Table:
    """Build a table from row-like values.

    *items* may hold tuples, lists, :class:`Row` objects or values with a
    ``to_row()`` method.  The header row is *headers* when given, else the
    ``headers()`` of the first item if it has one.  ``header=False`` drops it.
    """
    items = list(items)
    body = tuple(row_of(item) for item in items)

    head: tuple[Row, ...] = ()
    if header:
        if headers is not None:
            head = (row_of(tuple(headers)),)
        elif items:
            found = row_headers(items[0])
            if found is not None:
                head = (found,)

    return Table(
        header=head,
        body=body,
        columns=tuple(columns) if columns is not None else None,
        options=load_options(options),
    )
