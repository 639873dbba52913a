"""Cell wrapper: break a cell's text into display lines of a target width.

Lines end at the opportunities reported by :mod:`pi.datatable.breaks`.  A
segment that does not fit starts a new line; a mandatory break always starts
one.  A single unbreakable segment wider than the target is emitted on its
own line rather than cut, so no content is ever lost.

Styled cells keep their escape sequences.  SGR state or a hyperlink that is
still active at the end of a line is closed there and re-opened on the
following line.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterator, NamedTuple

import grapheme

from pi.datatable.ansi import ANSI_RE, AnsiCodeTracker, split_ansi
from pi.datatable.breaks import breaks
from pi.datatable.cell import Alignment, Cell
from pi.datatable.errors import ConfigurationError
from pi.datatable.width import cluster_width

# Stands in for an opaque (declared-width) fragment in the break finder.
_OPAQUE = "\ufffc"
_TRIMMABLE = frozenset(" \r\n\x0b\x0c\x85\u2028\u2029\u200b")


class _Atom(NamedTuple):
    raw: str  # emitted text, escapes included
    plain: str  # text seen by the break finder
    width: int

    @property
    def trimmable(self) -> bool:
        return bool(self.plain) and all(ch in _TRIMMABLE for ch in self.plain)


class Line(NamedTuple):
    text: str
    width: int


@dataclass(frozen=True)
class WrappedCell:
    """A cell laid out at a fixed width, ready for the grid.

    ``padding`` is the cell's own padding override, ``None`` for the table's.
    """

    lines: tuple[Line, ...]
    alignment: Alignment
    padding: int | None = None

    @property
    def height(self) -> int:
        return len(self.lines)

    @property
    def width(self) -> int:
        return max((line.width for line in self.lines), default=0)


def _atoms(cell: Cell) -> list[_Atom]:
    atoms: list[_Atom] = []
    pending = ""
    for fragment in cell.fragments:
        if fragment.width is not None:
            atoms.append(_Atom(pending + fragment.text, _OPAQUE, fragment.width))
            pending = ""
            continue
        for chunk, is_escape in split_ansi(fragment.text):
            if is_escape:
                pending += chunk
                continue
            for cluster in grapheme.graphemes(chunk):
                atoms.append(_Atom(pending + cluster, cluster, cluster_width(cluster)))
                pending = ""

    if pending:
        # Trailing escapes stay with the last visible cluster
        if atoms:
            atoms[-1] = atoms[-1]._replace(raw=atoms[-1].raw + pending)
        else:
            atoms.append(_Atom(pending, "", 0))
    return atoms


def _trimmed_end(atoms: list[_Atom], start: int, end: int) -> int:
    while end > start and atoms[end - 1].trimmable:
        end -= 1
    return end


def _span_width(atoms: list[_Atom], start: int, end: int) -> int:
    return sum(atom.width for atom in atoms[start:end])


def _escapes(atoms: list[_Atom], start: int, end: int) -> str:
    return "".join("".join(ANSI_RE.findall(atom.raw)) for atom in atoms[start:end])


def _segments(atoms: list[_Atom]) -> Iterator[tuple[int, int, bool]]:
    """Yield ``(start, end, mandatory)`` atom ranges between break opportunities."""
    ends = {0: 0}
    offset = 0
    for index, atom in enumerate(atoms):
        offset += len(atom.plain)
        ends[offset] = index + 1

    start = 0
    for position, mandatory in breaks("".join(atom.plain for atom in atoms)):
        end = ends.get(position)
        if end is None:
            # falls inside a grapheme cluster
            continue
        if end == start and not mandatory:
            continue
        yield start, end, mandatory
        start = end


def _line_spans(atoms: list[_Atom], target_width: float) -> Iterator[tuple[int, int, int]]:
    """Yield ``(start, content_start, end)`` atom ranges, one per line.

    Atoms before *content_start* are leading whitespace dropped because the
    first word did not fit after it.
    """
    line_start = content_start = 0
    line_width = 0
    for start, end, mandatory in _segments(atoms):
        visible = _span_width(atoms, start, _trimmed_end(atoms, start, end))
        if start > content_start and line_width + visible > target_width:
            if _trimmed_end(atoms, content_start, start) == content_start:
                content_start = start
            else:
                yield line_start, content_start, start
                line_start = content_start = start
            line_width = 0
        line_width += _span_width(atoms, start, end)
        if mandatory:
            yield line_start, content_start, end
            line_start = content_start = end
            line_width = 0


def _check_target(target_width: Any) -> None:
    if target_width == math.inf:
        return
    if isinstance(target_width, bool) or not isinstance(target_width, int):
        raise ConfigurationError(f"Target width must be a positive integer, got {target_width!r}")
    if target_width < 1:
        raise ConfigurationError(f"Target width must be positive, got {target_width}")


def layout_lines(cell: Any, target_width: float) -> list[Line]:
    """Wrap *cell* and return each line with its display width."""
    _check_target(target_width)
    cell = Cell.of(cell)
    atoms = _atoms(cell)
    tracker = AnsiCodeTracker()
    lines: list[Line] = []

    for start, content_start, end in _line_spans(atoms, target_width):
        visible_end = _trimmed_end(atoms, content_start, end)
        # Escapes riding on dropped or trimmed whitespace still have to be emitted
        lead = _escapes(atoms, start, content_start)
        body = "".join(atom.raw for atom in atoms[content_start:visible_end])
        tail = _escapes(atoms, visible_end, end)
        prefix = tracker.active_codes()
        for code in ANSI_RE.findall(lead + body + tail):
            tracker.process(code)
        text = prefix + lead + body + tail + tracker.line_end_reset()
        lines.append(Line(text, _span_width(atoms, content_start, visible_end)))

    return lines


def wrap(cell: Any, target_width: float) -> list[str]:
    """Wrap a cell, fragment or string to *target_width* columns.

    *target_width* is a positive integer or ``math.inf``.  Lines never exceed
    it except for a single unbreakable segment that is wider on its own.
    """
    return [line.text for line in layout_lines(cell, target_width)]


def wrap_cell(cell: Cell, target_width: int, alignment: Alignment) -> WrappedCell:
    return WrappedCell(tuple(layout_lines(cell, target_width)), alignment, cell.padding)


def minimum_width(cell: Any) -> int:
    """Width of the widest unbreakable segment, raised to ``cell.min_width``."""
    cell = Cell.of(cell)
    atoms = _atoms(cell)
    widest = 0
    for start, end, _mandatory in _segments(atoms):
        widest = max(widest, _span_width(atoms, start, _trimmed_end(atoms, start, end)))
    if cell.min_width is not None:
        widest = max(widest, cell.min_width)
    return widest


def natural_width(cell: Any) -> int:
    """Width of the cell laid out without wrapping.

    Capped by ``cell.max_width`` but never below :func:`minimum_width`.
    """
    cell = Cell.of(cell)
    natural = max((line.width for line in layout_lines(cell, math.inf)), default=0)
    if cell.max_width is not None:
        natural = min(natural, cell.max_width)
    return max(natural, minimum_width(cell))
