"""Table data model: fragments, cells, rows and the ``ToRow`` protocol."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Iterable, Iterator, Protocol, runtime_checkable

from pi.datatable.errors import ConfigurationError
from pi.datatable.width import TAB_WIDTH, display_width


class Alignment(str, Enum):
    """Horizontal alignment of content within a cell."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


@dataclass(frozen=True)
class Fragment:
    """A run of cell text.

    ``width`` declares the display width of a pre-rendered span.  A fragment
    with a declared width is measured by that width and never broken
    internally.
    """

    text: str
    width: int | None = None

    def __post_init__(self) -> None:
        if self.width is not None and (
            isinstance(self.width, bool) or not isinstance(self.width, int) or self.width < 0
        ):
            raise ConfigurationError(f"Fragment width must be a non-negative integer, got {self.width!r}")
        if "\t" in self.text:
            object.__setattr__(self, "text", self.text.replace("\t", " " * TAB_WIDTH))

    @property
    def display_width(self) -> int:
        if self.width is not None:
            return self.width
        return display_width(self.text)


def _check_hint(name: str, value: int | None) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigurationError(f"Cell {name} must be a positive integer, got {value!r}")


@dataclass(frozen=True)
class Cell:
    """One table cell: styled fragments plus alignment and width hints.

    ``alignment=None`` inherits the column's alignment, then the table's
    default.  ``padding`` overrides the table's cell padding for this cell
    only; the column keeps its width, so the content area grows or shrinks
    by the difference.
    """

    fragments: tuple[Fragment, ...] = ()
    alignment: Alignment | None = None
    min_width: int | None = None
    max_width: int | None = None
    padding: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "fragments", tuple(self.fragments))
        if self.padding is not None and (
            isinstance(self.padding, bool) or not isinstance(self.padding, int) or self.padding < 0
        ):
            raise ConfigurationError(f"Cell padding must be a non-negative integer, got {self.padding!r}")
        _check_hint("min_width", self.min_width)
        _check_hint("max_width", self.max_width)
        if self.min_width is not None and self.max_width is not None and self.min_width > self.max_width:
            raise ConfigurationError(
                f"Cell min_width ({self.min_width}) exceeds max_width ({self.max_width})"
            )

    @classmethod
    def of(cls, value: Any, *, alignment: Alignment | None = None, padding: int | None = None) -> Cell:
        """Build a cell from a string, a fragment, or any value via ``str()``."""
        if isinstance(value, Cell):
            return value
        if isinstance(value, Fragment):
            return cls((value,), alignment=alignment, padding=padding)
        text = "" if value is None else str(value)
        return cls((Fragment(text),), alignment=alignment, padding=padding)

    @property
    def text(self) -> str:
        """The cell's raw text, escape sequences included."""
        return "".join(fragment.text for fragment in self.fragments)


@dataclass(frozen=True)
class Row:
    """An ordered sequence of cells.

    ``separator`` decides whether a rule separates this row from the one
    before it, overriding the table's ``separate_rows`` and
    ``show_header_separator`` options; ``None`` follows them.  The top border
    is governed by the table options alone.
    """

    cells: tuple[Cell, ...] = field(default_factory=tuple)
    separator: bool | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "cells", tuple(Cell.of(cell) for cell in self.cells))

    @classmethod
    def of(cls, *values: Any, separator: bool | None = None) -> Row:
        return cls(tuple(values), separator)

    def with_separator(self, separator: bool | None) -> Row:
        return replace(self, separator=separator)

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    def __getitem__(self, index: int) -> Cell:
        return self.cells[index]


@runtime_checkable
class ToRow(Protocol):
    """Anything that can present itself as a table row.

    ``headers`` is optional -- :func:`row_headers` checks for it with
    ``getattr``.
    """

    def to_row(self) -> Row:
        """Return the value's fields as cells."""
        ...


def row_of(value: Any) -> Row:
    """Convert a ``ToRow`` value, a ``Row``, a tuple or a list into a row."""
    if isinstance(value, Row):
        return value
    if isinstance(value, ToRow):
        return value.to_row()
    if isinstance(value, (tuple, list)):
        return Row(tuple(value))
    raise ConfigurationError(
        f"Cannot convert {type(value).__name__} to a row; implement to_row() or pass a tuple"
    )


def row_headers(value: Any) -> Row | None:
    headers = getattr(value, "headers", None)
    if callable(headers):
        return row_of(headers())
    return None


def rows_of(values: Iterable[Any]) -> tuple[Row, ...]:
    return tuple(row_of(value) for value in values)
