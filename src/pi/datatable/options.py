"""Layout options.

Options are a frozen pydantic model.  Field names are snake_case with
camelCase aliases so that JSON written by other tools loads unchanged.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pi.datatable.cell import Alignment
from pi.datatable.errors import ConfigurationError
from pi.datatable.style import BorderStyle, TableStyle


class TableOptions(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    border_style: BorderStyle = Field(default=BorderStyle.EXTENDED, alias="borderStyle")
    show_header_separator: bool = Field(default=True, alias="showHeaderSeparator")
    cell_padding: int = Field(default=1, ge=0, alias="cellPadding")
    default_alignment: Alignment = Field(default=Alignment.LEFT, alias="defaultAlignment")
    separate_rows: bool = Field(default=False, alias="separateRows")
    top_border: bool = Field(default=True, alias="topBorder")
    bottom_border: bool = Field(default=True, alias="bottomBorder")
    expand: bool = False

    @property
    def style(self) -> TableStyle:
        return self.border_style.glyphs

    def overhead(self, columns: int) -> int:
        return self.style.overhead(columns, self.cell_padding)

    def merged(self, **changes: Any) -> TableOptions:
        """Return a copy with *changes* applied and validated."""
        data = self.model_dump()
        data.update({key: value for key, value in changes.items() if value is not None})
        return load_options(data)


def load_options(source: TableOptions | Mapping[str, Any] | str | Path | None = None) -> TableOptions:
    """Build :class:`TableOptions` from a mapping, a JSON string or a JSON file.

    ``None`` gives the defaults.  Invalid input raises
    :class:`ConfigurationError`.
    """
    if source is None:
        return TableOptions()
    if isinstance(source, TableOptions):
        return source

    if isinstance(source, Path):
        try:
            data = json.loads(source.read_text(encoding="utf-8"))
        except OSError as e:
            raise ConfigurationError(f"Cannot read options file {source}: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in {source}: {e}") from e
    elif isinstance(source, str):
        try:
            data = json.loads(source)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid options JSON: {e}") from e
    else:
        data = source

    if not isinstance(data, Mapping):
        raise ConfigurationError(f"Options must be a JSON object, got {type(data).__name__}")

    try:
        return TableOptions.model_validate(dict(data))
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '(root)'}: {err['msg']}" for err in e.errors()
        )
        raise ConfigurationError(f"Invalid table options: {problems}") from e
