"""Column width resolver.

Given per-column natural and minimum widths, the resolver hands out a total
display-width budget:

1. every column starts at its explicit width, else at its minimum;
2. spare budget goes, one column at a time, to the growable column that has
   received the smallest fraction of the width it still wants
   (``given / (natural - start)``), until every column is natural-width or the
   budget is spent.  Handing out single units keeps the result monotone in
   the budget;
3. with ``expand`` the leftover is spread evenly over growable columns;
4. a budget smaller than the starting widths shrinks the widest column above
   its floor, one unit at a time, until the table fits.  The floor is the
   larger of the declared minimum and the content minimum.  A table that
   still does not fit is returned anyway and flagged as overflowing.

Ties always favour the lowest column index.
"""

from __future__ import annotations

import heapq
import logging
from dataclasses import dataclass
from fractions import Fraction
from typing import Any, Iterator, Sequence

from pi.datatable.cell import Alignment
from pi.datatable.errors import ConfigurationError

logger = logging.getLogger(__name__)


def _positive(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")


@dataclass(frozen=True)
class ColumnSpec:
    """Per-column constraints.

    ``width`` pins the column; a pinned column never grows and only shrinks
    when the table overflows.  ``min_width`` is the smallest width the column
    is ever given.
    """

    width: int | None = None
    min_width: int = 1
    alignment: Alignment | None = None
    growable: bool = True

    def __post_init__(self) -> None:
        if self.width is not None:
            _positive("Column width", self.width)
        _positive("Column min_width", self.min_width)


@dataclass(frozen=True)
class LayoutResult:
    """Resolved width of every column, in column order."""

    widths: tuple[int, ...]
    budget: int
    overhead: int = 0
    overflow: bool = False

    @property
    def column_count(self) -> int:
        return len(self.widths)

    @property
    def total_width(self) -> int:
        return sum(self.widths) + self.overhead

    def as_mapping(self) -> dict[int, int]:
        return dict(enumerate(self.widths))

    def __getitem__(self, column: int) -> int:
        return self.widths[column]

    def __len__(self) -> int:
        return len(self.widths)

    def __iter__(self) -> Iterator[int]:
        return iter(self.widths)


def check_budget(budget: Any) -> int:
    """Validate a total width budget supplied by the caller."""
    if budget is None:
        raise ConfigurationError("A width budget is required; pass it explicitly or use for_terminal()")
    _positive("Width budget", budget)
    return budget


def _grow(widths: list[int], targets: list[int], growable: list[bool], spare: int) -> int:
    """Hand out *spare* columns; returns what is left once every column is satisfied."""
    heap: list[tuple[Fraction, int]] = []
    given = [0] * len(widths)
    wanted = [targets[i] - widths[i] for i in range(len(widths))]
    for i, want in enumerate(wanted):
        if growable[i] and want > 0:
            heap.append((Fraction(0), i))
    heapq.heapify(heap)

    while spare > 0 and heap:
        _ratio, i = heapq.heappop(heap)
        widths[i] += 1
        given[i] += 1
        spare -= 1
        if given[i] < wanted[i]:
            heapq.heappush(heap, (Fraction(given[i], wanted[i]), i))
    return spare


def _expand(widths: list[int], growable: list[bool], spare: int) -> int:
    columns = [i for i, flag in enumerate(growable) if flag]
    if not columns:
        return spare
    share, extra = divmod(spare, len(columns))
    for rank, i in enumerate(columns):
        widths[i] += share + (1 if rank < extra else 0)
    return 0


def _shrink(widths: list[int], floors: list[int], deficit: int) -> int:
    """Take *deficit* columns away, widest first; returns what could not be removed."""
    while deficit > 0:
        candidates = [i for i in range(len(widths)) if widths[i] > floors[i]]
        if not candidates:
            break
        widest = max(candidates, key=lambda i: (widths[i], -i))
        # Level the widest column down to the next width in one step
        others = [widths[i] for i in candidates if widths[i] < widths[widest]]
        step = min(deficit, widths[widest] - max(others + [floors[widest]]))
        if sum(1 for i in candidates if widths[i] == widths[widest]) > 1:
            step = 1
        widths[widest] -= step
        deficit -= step
    return deficit


def resolve(
    columns: Sequence[ColumnSpec],
    natural_widths: Sequence[int],
    budget: int,
    *,
    minimum_widths: Sequence[int] | None = None,
    overhead: int = 0,
    expand: bool = False,
) -> LayoutResult:
    """Compute one width per column for a total *budget*.

    *natural_widths* are the widths each column would need unwrapped and
    *minimum_widths* the widths below which its content would overflow.
    *overhead* is what borders and padding take out of the budget.
    """
    budget = check_budget(budget)
    count = len(columns)
    if len(natural_widths) != count:
        raise ConfigurationError(f"Expected {count} natural widths, got {len(natural_widths)}")
    if minimum_widths is None:
        minimum_widths = [0] * count
    elif len(minimum_widths) != count:
        raise ConfigurationError(f"Expected {count} minimum widths, got {len(minimum_widths)}")

    floors = [max(spec.min_width, minimum_widths[i]) for i, spec in enumerate(columns)]
    widths = [
        spec.width if spec.width is not None else max(spec.min_width, minimum_widths[i])
        for i, spec in enumerate(columns)
    ]
    targets = [max(widths[i], natural_widths[i]) for i in range(count)]
    growable = [spec.growable and spec.width is None for spec in columns]

    remaining = budget - overhead - sum(widths)
    if remaining >= 0:
        remaining = _grow(widths, targets, growable, remaining)
        if expand and remaining > 0:
            _expand(widths, growable, remaining)
    else:
        _shrink(widths, floors, -remaining)

    # A pinned column narrower than its content is drawn at the content width
    total = sum(max(widths[i], minimum_widths[i]) for i in range(count)) + overhead
    overflow = total > budget
    if overflow:
        logger.warning(
            "Table needs %d columns but only %d are available; rendering wider than requested",
            total,
            budget,
        )
    logger.debug("Resolved column widths %s for budget %d", widths, budget)
    return LayoutResult(tuple(widths), budget, overhead, overflow)
