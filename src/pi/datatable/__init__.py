"""pi-datatable: Unicode-aware text table layout for terminals."""

from pi.datatable.breaks import Break, BreakOpportunities, breaks
from pi.datatable.cell import Alignment, Cell, Fragment, Row, ToRow, row_of
from pi.datatable.errors import ConfigurationError
from pi.datatable.grid import Section, WrappedRow, assemble
from pi.datatable.layout import ColumnSpec, LayoutResult, resolve
from pi.datatable.markdown import table_from_markdown
from pi.datatable.options import TableOptions, load_options
from pi.datatable.style import BorderStyle, TableStyle
from pi.datatable.table import Table, data_table
from pi.datatable.terminal import terminal_width
from pi.datatable.width import display_width
from pi.datatable.wrap import WrappedCell, minimum_width, natural_width, wrap

__all__ = [
    # Data model
    "Alignment",
    "Cell",
    "Fragment",
    "Row",
    "ToRow",
    "row_of",
    "ColumnSpec",
    "Table",
    "data_table",
    # Options
    "BorderStyle",
    "TableStyle",
    "TableOptions",
    "load_options",
    "ConfigurationError",
    # Engine
    "display_width",
    "Break",
    "BreakOpportunities",
    "breaks",
    "wrap",
    "WrappedCell",
    "natural_width",
    "minimum_width",
    "LayoutResult",
    "resolve",
    "Section",
    "WrappedRow",
    "assemble",
    # Adapters
    "terminal_width",
    "table_from_markdown",
]
