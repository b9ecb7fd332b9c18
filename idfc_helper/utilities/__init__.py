from .config_layout import DEFAULT_LAYOUT, StatementLayout, load_layout
from .config_logging import configure_logging
from .converters_scalar import (
    format_amount,
    is_numeric_cell,
    parse_amount,
    parse_statement_date,
)
from .core_util import (
    cell_text,
    is_null_or_whitespace,
    open_for_read,
    open_for_write,
    render_row,
    truncate,
)
from .errors import StatementError, StatementFormatError, WorkbookLoadError

__all__ = [
    "DEFAULT_LAYOUT",
    "StatementLayout",
    "load_layout",
    "configure_logging",
    "parse_amount",
    "is_numeric_cell",
    "format_amount",
    "parse_statement_date",
    "cell_text",
    "is_null_or_whitespace",
    "open_for_read",
    "open_for_write",
    "render_row",
    "truncate",
    "StatementError",
    "StatementFormatError",
    "WorkbookLoadError",
]
