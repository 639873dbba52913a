"""CLI entry point for pi-datatable. Uses Click for argument parsing."""

from __future__ import annotations

import csv
import io
import json
import logging
from pathlib import Path

import click

from pi.datatable.cell import Alignment
from pi.datatable.errors import ConfigurationError
from pi.datatable.options import TableOptions, load_options
from pi.datatable.style import BorderStyle
from pi.datatable.table import Table
from pi.datatable.terminal import terminal_width

logger = logging.getLogger(__name__)


def _padded(rows: list[list[str]]) -> list[tuple[str, ...]]:
    count = max((len(row) for row in rows), default=0)
    return [tuple(row) + ("",) * (count - len(row)) for row in rows]


def _split_header(rows: list[tuple], header: bool) -> tuple[list[tuple], list[tuple]]:
    if header and rows:
        return rows[:1], rows[1:]
    return [], rows


def _from_json(text: str, header: bool, options: TableOptions) -> Table:
    try:
        data = json.loads(text) if text.strip() else []
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON input: {e}") from e
    if not isinstance(data, list):
        raise ConfigurationError("JSON input must be a list of rows")

    if data and all(isinstance(item, dict) for item in data):
        keys: list[str] = []
        for item in data:
            keys.extend(key for key in item if key not in keys)
        body = [tuple(item.get(key) for key in keys) for item in data]
        head = [tuple(keys)] if header else []
        return Table(header=head, body=body, options=options)

    if all(isinstance(item, list) for item in data):
        head, body = _split_header(_padded(data), header)
        return Table(header=head, body=body, options=options)

    raise ConfigurationError("JSON input must be a list of lists or a list of objects")


def _from_csv(text: str, header: bool, options: TableOptions) -> Table:
    rows = [row for row in csv.reader(io.StringIO(text)) if row]
    head, body = _split_header(_padded(rows), header)
    return Table(header=head, body=body, options=options)


def _from_markdown(text: str, header: bool, options: TableOptions) -> Table:
    from pi.datatable.markdown import table_from_markdown

    table = table_from_markdown(text, options)
    if header:
        return table
    return Table(body=table.rows, columns=table.columns, options=options)


_READERS = {
    "json": _from_json,
    "csv": _from_csv,
    "markdown": _from_markdown,
}


@click.command()
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(sorted(_READERS)),
    default="json",
    show_default=True,
    help="Input format",
)
@click.option("--width", type=click.IntRange(min=1), default=None, help="Total table width (default: terminal width)")
@click.option("--style", type=click.Choice([s.value for s in BorderStyle]), default=None, help="Border style")
@click.option("--align", type=click.Choice([a.value for a in Alignment]), default=None, help="Default cell alignment")
@click.option("--padding", type=click.IntRange(min=0), default=None, help="Spaces inside each cell edge")
@click.option("--header/--no-header", default=True, help="Treat the first row as a header")
@click.option("--header-separator/--no-header-separator", default=None, help="Draw a rule below the header")
@click.option("--separate-rows/--no-separate-rows", default=None, help="Draw a rule between body rows")
@click.option("--expand/--no-expand", default=None, help="Fill the whole width")
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="JSON file with table options",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"]),
    default="warning",
    show_default=True,
)
def main(source, fmt, width, style, align, padding, header, header_separator, separate_rows, expand, config, log_level):
    """Render tabular data from FILE (or stdin) as a text table."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        options = load_options(config).merged(
            border_style=style,
            default_alignment=align,
            cell_padding=padding,
            show_header_separator=header_separator,
            separate_rows=separate_rows,
            expand=expand,
        )
        table = _READERS[fmt](source.read(), header, options)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e

    if width is None:
        try:
            width = terminal_width()
        except ConfigurationError as e:
            raise click.UsageError(f"{e} (use --width)") from e

    logger.debug("Rendering %d rows at width %d", len(table.rows), width)
    try:
        output = table.render(width)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e
    if output:
        click.echo(output)


if __name__ == "__main__":
    main()
