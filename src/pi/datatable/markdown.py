"""Build a :class:`Table` from a GFM pipe table."""

from __future__ import annotations

from typing import Any, Mapping

from markdown_it import MarkdownIt
from markdown_it.token import Token

from pi.datatable.cell import Alignment
from pi.datatable.errors import ConfigurationError
from pi.datatable.layout import ColumnSpec
from pi.datatable.options import TableOptions
from pi.datatable.table import Table

_md_parser = MarkdownIt("commonmark").enable("table")

_ALIGNMENTS = {
    "left": Alignment.LEFT,
    "center": Alignment.CENTER,
    "right": Alignment.RIGHT,
}


def _inline_text(token: Token) -> str:
    """Flatten an inline token to plain text, dropping emphasis markers."""
    parts: list[str] = []
    for child in token.children or []:
        if child.type in ("text", "code_inline", "image", "html_inline"):
            parts.append(child.content)
        elif child.type in ("softbreak", "hardbreak"):
            parts.append(" ")
    return "".join(parts)


def _alignment(token: Token) -> Alignment | None:
    style = token.attrGet("style")
    if not isinstance(style, str):
        return None
    key, _, value = style.partition(":")
    if key.strip() != "text-align":
        return None
    return _ALIGNMENTS.get(value.strip().rstrip(";"))


def _table_tokens(tokens: list[Token]) -> list[Token]:
    start = next((i for i, tok in enumerate(tokens) if tok.type == "table_open"), None)
    if start is None:
        return []
    end = next(i for i in range(start, len(tokens)) if tokens[i].type == "table_close")
    return tokens[start + 1 : end]


def _parse_table_tokens(
    tokens: list[Token],
) -> tuple[list[str], list[Alignment | None], list[list[str]]]:
    """Walk table sub-tokens and extract header cells, alignments and body rows."""
    header_cells: list[str] = []
    alignments: list[Alignment | None] = []
    body_rows: list[list[str]] = []
    in_thead = False
    current_row: list[str] | None = None

    i = 0
    n = len(tokens)
    while i < n:
        tok = tokens[i]
        t = tok.type

        if t == "thead_open":
            in_thead = True
        elif t == "thead_close":
            in_thead = False
        elif t == "tr_open":
            current_row = []
        elif t == "tr_close":
            if current_row is not None:
                if in_thead:
                    header_cells.extend(current_row)
                else:
                    body_rows.append(current_row)
            current_row = None
        elif t in ("th_open", "td_open"):
            if t == "th_open":
                alignments.append(_alignment(tok))
            inline_tok = tokens[i + 1] if i + 1 < n else None
            cell_text = ""
            if inline_tok is not None and inline_tok.type == "inline":
                cell_text = _inline_text(inline_tok)
                i += 1
            if current_row is not None:
                current_row.append(cell_text)
        i += 1

    return header_cells, alignments, body_rows


def table_from_markdown(
    text: str,
    options: TableOptions | Mapping[str, Any] | None = None,
) -> Table:
    """Parse the first pipe table in *text*.

    Column alignment comes from the delimiter row (``:--``, ``:-:``,
    ``--:``).  Rows shorter than the header are padded with empty cells.
    """
    tokens = _table_tokens(_md_parser.parse(text))
    if not tokens:
        raise ConfigurationError("No markdown table found in input")

    header_cells, alignments, body_rows = _parse_table_tokens(tokens)
    count = len(header_cells)
    body = [tuple(row[:count]) + ("",) * (count - len(row)) for row in body_rows]
    columns = tuple(ColumnSpec(alignment=alignment) for alignment in alignments)

    return Table(
        header=(tuple(header_cells),),
        body=tuple(body),
        columns=columns,
        options=options,
    )
