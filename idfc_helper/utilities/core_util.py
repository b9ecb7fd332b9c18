"""
Core Utilities

Features:
- Cell/text helpers shared by the row scanner and the report printers
- File I/O helpers
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import IO, Any, Literal, Optional, Sequence, overload

# region Common functions


def is_null_or_whitespace(s: Optional[str]) -> bool:
    """Check if a string is None, empty, or consists only of whitespace."""
    return s is None or s.strip() == ""


def cell_text(value: Any) -> str:
    """Text form of a cell; empty cells become ''."""
    return "" if value is None else str(value)


def truncate(value: Any, width: int) -> str:
    return cell_text(value)[:width]


def render_row(row: Optional[Sequence[Any]]) -> str:
    """JSON rendering of a row-array row, used for console dumps and text search."""
    if row is None:
        return "null"
    return json.dumps(list(row), default=str, ensure_ascii=False)


@overload
def open_for_read(path: Path, binary: Literal[True], **kwargs: Any) -> IO[bytes]: ...
@overload
def open_for_read(path: Path, binary: Literal[False], **kwargs: Any) -> IO[str]: ...


def open_for_read(path: Path, binary: bool = False, **kwargs: Any) -> IO[Any]:
    mode = "rb" if binary else "r"
    return open(path, mode, **kwargs)


def open_for_write(path: Path, **kwargs: Any) -> IO[str]:
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    return open(path, "w", **kwargs)


# endregion Common functions
