"""Formatting utilities for git-history-browser.

- date: Timestamp formatting
- text: Commit message, id and preview helpers
- diff: Rich renderables for change lists and patches
"""

from .date import format_timestamp
from .text import first_line, short_id, truncate_preview
from .diff import (
    format_status,
    format_diff_line,
    format_line_numbers,
    format_tree_item,
)

__all__ = [
    "format_timestamp",
    "first_line",
    "short_id",
    "truncate_preview",
    "format_status",
    "format_diff_line",
    "format_line_numbers",
    "format_tree_item",
]
