"""Display and formatting service for history query results"""
import json
from typing import List, Optional, Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from git_history_browser.constants import (
    BRANCH_COLUMNS,
    CHANGE_COLUMNS,
    COMMIT_COLUMNS,
    DEFAULT_DATE_FORMAT,
    SEARCH_COLUMNS,
    SEARCH_KIND_LABELS,
    STASH_COLUMNS,
    SYMBOL_CURRENT_BRANCH,
    ColumnDefinition,
)
from git_history_browser.formatters import (
    format_diff_line,
    format_status,
    format_timestamp,
    format_tree_item,
)
from git_history_browser.models.blame import BlameLine
from git_history_browser.models.branch import Branch
from git_history_browser.models.commit import CommitSummary, GitStash
from git_history_browser.models.diff import FileChange, FileDiff, StagedChange
from git_history_browser.models.search import SearchResult, SearchResultKind
from git_history_browser.models.tree import FileTreeItem
from git_history_browser.logging_config import get_logger

logger = get_logger(__name__)


class DisplayService:
    """Renders query results as rich tables and trees, or as JSON."""

    def __init__(self, console: Optional[Console] = None, date_format: str = DEFAULT_DATE_FORMAT):
        self.console = console or Console()
        self.date_format = date_format

    def _table(self, columns: List[ColumnDefinition]) -> Table:
        table = Table()
        for col in columns:
            if col.width:
                table.add_column(col.label, width=col.width)
            else:
                table.add_column(col.label)
        return table

    def display_json(self, items) -> None:
        """Print a result (or list of results) as JSON."""
        if isinstance(items, (list, tuple)):
            payload = [item.to_dict() if hasattr(item, "to_dict") else item for item in items]
        elif hasattr(items, "to_dict"):
            payload = items.to_dict()
        else:
            payload = items
        self.console.print_json(json.dumps(payload))

    def display_branches(self, branches: Sequence[Branch]) -> None:
        """Display local branches, marking the current one."""
        table = self._table(BRANCH_COLUMNS)
        for branch in branches:
            name = branch.name + (SYMBOL_CURRENT_BRANCH if branch.is_current else "")
            last_commit = (
                format_timestamp(branch.last_commit_timestamp, self.date_format)
                if branch.last_commit_timestamp
                else "unknown"
            )
            table.add_row(name, last_commit, style="green" if branch.is_current else None)
        self.console.print(table)

    def display_commits(self, commits: Sequence[CommitSummary]) -> None:
        """Display a commit log."""
        if not commits:
            self.console.print("[dim]No commits found[/dim]")
            return
        table = self._table(COMMIT_COLUMNS)
        for commit in commits:
            table.add_row(Text(commit.short_id, style="yellow"), commit.message, commit.author, commit.date)
        self.console.print(table)

    def display_changes(self, changes: Sequence[FileChange]) -> None:
        """Display a file-level change summary."""
        if not changes:
            self.console.print("[dim]No file changes found[/dim]")
            return
        table = self._table(CHANGE_COLUMNS)
        for change in changes:
            table.add_row(
                format_status(change.status),
                change.path,
                Text(str(change.additions), style="green"),
                Text(str(change.deletions), style="red"),
            )
        self.console.print(table)

    def display_staged(self, changes: Sequence[StagedChange]) -> None:
        """Display staged changes."""
        if not changes:
            self.console.print("[dim]Nothing staged[/dim]")
            return
        table = self._table(CHANGE_COLUMNS[:2])
        for change in changes:
            path = f"{change.old_path} -> {change.path}" if change.old_path else change.path
            table.add_row(format_status(change.status), path)
        self.console.print(table)

    def display_diff(self, diff: FileDiff) -> None:
        """Display the line diff of one file."""
        header = Text(f"{diff.path} ", style="bold")
        header.append_text(Text("(").append_text(format_status(diff.status)).append(")"))
        self.console.print(header)

        if diff.is_binary:
            self.console.print("[dim]Binary file - cannot display diff[/dim]")
            return
        if not diff.lines:
            self.console.print("[dim]No changes to display[/dim]")
            return
        for line in diff.lines:
            self.console.print(format_diff_line(line), highlight=False, soft_wrap=True)

    def display_blame(self, lines: Sequence[BlameLine]) -> None:
        """Display blame output, one row per line."""
        if not lines:
            self.console.print("[dim]File is empty[/dim]")
            return
        width = len(str(lines[-1].line_number))
        previous_commit = None
        for line in lines:
            if line.commit_id != previous_commit:
                gutter = f"{line.short_id} {line.author[:16]:<16} {line.date}"
            else:
                gutter = " " * (9 + 16 + 1 + len(line.date))
            previous_commit = line.commit_id

            text = Text(gutter, style="yellow")
            text.append(f" {line.line_number:>{width}} ", style="dim")
            text.append(line.content)
            self.console.print(text, highlight=False, soft_wrap=True)

    def display_tree(self, items: Sequence[FileTreeItem], title: str = ".") -> None:
        """Display a file tree."""
        root = Tree(Text(title, style="bold"))
        self._add_tree_items(root, items)
        self.console.print(root)

    def _add_tree_items(self, node: Tree, items: Sequence[FileTreeItem]) -> None:
        for item in items:
            child = node.add(format_tree_item(item))
            if item.children:
                self._add_tree_items(child, item.children)

    def display_stashes(self, stashes: Sequence[GitStash]) -> None:
        """Display stash entries."""
        if not stashes:
            self.console.print("[dim]No stash entries[/dim]")
            return
        table = self._table(STASH_COLUMNS)
        for stash in stashes:
            table.add_row(f"stash@{{{stash.index}}}", stash.message, stash.author, stash.date)
        self.console.print(table)

    def display_search_results(self, results: Sequence[SearchResult]) -> None:
        """Display search results in walk order, labelled by match kind."""
        if not results:
            self.console.print("[dim]No results[/dim]")
            return
        table = self._table(SEARCH_COLUMNS)
        for result in results:
            if result.kind == SearchResultKind.COMMIT:
                title = result.commit_message
            else:
                title = result.file_path or result.commit_message

            detail = Text()
            if result.content_preview:
                detail.append(f"{result.line_number}: ", style="dim")
                detail.append(result.content_preview)
            else:
                detail.append(f"{result.commit_author} • {result.commit_date}", style="dim")

            table.add_row(
                SEARCH_KIND_LABELS[result.kind.value],
                Text(result.commit_id[:8], style="yellow"),
                title,
                detail,
            )
        self.console.print(table)
        self.console.print(f"[dim]{len(results)} results[/dim]")
