"""Rich formatting for change statuses, patch lines and tree entries."""

from typing import Optional

from rich.text import Text

from git_history_browser.constants import DIFF_LINE_COLORS, STATUS_COLORS, SYMBOL_DIRECTORY
from git_history_browser.models.diff import DiffLine, DiffLineType
from git_history_browser.models.tree import FileTreeItem


_LINE_PREFIXES = {
    DiffLineType.CONTEXT: " ",
    DiffLineType.ADDITION: "+",
    DiffLineType.DELETION: "-",
}


def format_status(status) -> Text:
    """
    Format a change status with its color.

    Args:
        status: ChangeStatus or StagedStatus member

    Returns:
        Styled status text
    """
    return Text(status.value, style=STATUS_COLORS.get(status.value) or "")


def format_line_numbers(line: DiffLine, width: int = 5) -> str:
    """Format the old/new line number gutter of a patch line."""
    old = _number(line.old_line_number)
    new = _number(line.new_line_number)
    return f"{old:>{width}} {new:>{width}}"


def format_diff_line(line: DiffLine) -> Text:
    """Format one patch line with gutter, prefix and color."""
    text = Text(format_line_numbers(line) + " ", style="dim")
    text.append(
        _LINE_PREFIXES[line.line_type] + line.content,
        style=DIFF_LINE_COLORS.get(line.line_type.value) or "",
    )
    return text


def format_tree_item(item: FileTreeItem) -> Text:
    """Format a file tree node label."""
    if item.is_directory:
        return Text(item.name + SYMBOL_DIRECTORY, style="bold blue")
    label = Text(item.name)
    label.append(f"  {item.file_type.value}", style="dim")
    if item.size is not None:
        label.append(f"  {item.size} B", style="dim")
    return label


def _number(value: Optional[int]) -> str:
    return "" if value is None else str(value)
