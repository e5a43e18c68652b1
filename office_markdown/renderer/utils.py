"""Common helpers shared by the Markdown rendering code."""
from __future__ import annotations

from typing import List, Sequence

from office_markdown.model.elements import clamp_heading_level


def heading_prefix(level: int) -> str:
    """Hash marks for a heading, never more than six."""
    return "#" * clamp_heading_level(level)


def escape_cell(value: str) -> str:
    """Escape pipes so a cell value cannot break the table row."""
    return value.replace("|", "\\|")


def pad_row(row: Sequence[str], column_count: int) -> List[str]:
    """Extend a short row with empty cells up to ``column_count``."""
    cells = list(row[:column_count])
    cells.extend("" for _ in range(column_count - len(cells)))
    return cells
