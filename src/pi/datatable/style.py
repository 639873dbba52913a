"""Border glyph sets.

A :class:`TableStyle` names every glyph the grid needs.  Presets are exposed
through the closed :class:`BorderStyle` enum so configuration never has to
parse glyph strings.

Example (``BorderStyle.THIN``)::

    ┌──────┬──────┐
    │ left │ both │
    ├──────┼──────┤
    │ a    │    b │
    └──────┴──────┘
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum

from pi.datatable.errors import ConfigurationError
from pi.datatable.width import display_width


@dataclass(frozen=True)
class TableStyle:
    top_left: str
    top_right: str
    bottom_left: str
    bottom_right: str
    left_junction: str  # outer left edge of a separator line
    right_junction: str
    top_junction: str  # column boundary on the top border
    bottom_junction: str
    intersection: str
    vertical: str
    horizontal: str

    def __post_init__(self) -> None:
        edge = display_width(self.vertical)
        for item in fields(self):
            if item.name == "horizontal":
                continue
            glyph = getattr(self, item.name)
            if display_width(glyph) != edge:
                raise ConfigurationError(
                    f"Glyph {item.name}={glyph!r} must be as wide as the vertical glyph"
                )
        if display_width(self.horizontal) not in (0, 1):
            raise ConfigurationError("The horizontal glyph must be one column wide or empty")

    @property
    def border_width(self) -> int:
        """Columns taken by one vertical border."""
        return display_width(self.vertical)

    @property
    def has_rules(self) -> bool:
        """Whether horizontal rules (borders and separators) are drawn."""
        return bool(self.horizontal)

    def overhead(self, columns: int, padding: int) -> int:
        """Columns consumed by borders and padding around *columns* cells."""
        if columns == 0:
            return 0
        return self.border_width * (columns + 1) + 2 * padding * columns


SIMPLE = TableStyle(
    top_left="+",
    top_right="+",
    bottom_left="+",
    bottom_right="+",
    left_junction="+",
    right_junction="+",
    top_junction="+",
    bottom_junction="+",
    intersection="+",
    vertical="|",
    horizontal="-",
)

EXTENDED = TableStyle(
    top_left="╔",
    top_right="╗",
    bottom_left="╚",
    bottom_right="╝",
    left_junction="╠",
    right_junction="╣",
    top_junction="╦",
    bottom_junction="╩",
    intersection="╬",
    vertical="║",
    horizontal="═",
)

THIN = TableStyle(
    top_left="┌",
    top_right="┐",
    bottom_left="└",
    bottom_right="┘",
    left_junction="├",
    right_junction="┤",
    top_junction="┬",
    bottom_junction="┴",
    intersection="┼",
    vertical="│",
    horizontal="─",
)

ROUNDED = TableStyle(
    top_left="╭",
    top_right="╮",
    bottom_left="╰",
    bottom_right="╯",
    left_junction="├",
    right_junction="┤",
    top_junction="┬",
    bottom_junction="┴",
    intersection="┼",
    vertical="│",
    horizontal="─",
)

ELEGANT = TableStyle(
    top_left="╔",
    top_right="╗",
    bottom_left="╚",
    bottom_right="╝",
    left_junction="╠",
    right_junction="╣",
    top_junction="╦",
    bottom_junction="╩",
    intersection="┼",
    vertical="│",
    horizontal="─",
)

EMPTY = TableStyle(*(" " for _ in range(11)))

BLANK = TableStyle(*("" for _ in range(11)))


class BorderStyle(str, Enum):
    """Preset glyph sets selectable from configuration."""

    SIMPLE = "simple"
    EXTENDED = "extended"
    THIN = "thin"
    ROUNDED = "rounded"
    ELEGANT = "elegant"
    EMPTY = "empty"
    BLANK = "blank"

    @property
    def glyphs(self) -> TableStyle:
        return _PRESETS[self]


_PRESETS = {
    BorderStyle.SIMPLE: SIMPLE,
    BorderStyle.EXTENDED: EXTENDED,
    BorderStyle.THIN: THIN,
    BorderStyle.ROUNDED: ROUNDED,
    BorderStyle.ELEGANT: ELEGANT,
    BorderStyle.EMPTY: EMPTY,
    BorderStyle.BLANK: BLANK,
}
