"""Read-only projections returned by git-history-browser queries."""

from .branch import Branch
from .commit import CommitSummary, GitStash
from .diff import (
    ChangeStatus,
    StagedStatus,
    DiffLineType,
    FileChange,
    StagedChange,
    DiffLine,
    FileDiff,
)
from .blame import BlameLine
from .tree import FileType, FileTreeItem
from .search import SearchResultKind, SearchResult

__all__ = [
    "Branch",
    "CommitSummary",
    "GitStash",
    "ChangeStatus",
    "StagedStatus",
    "DiffLineType",
    "FileChange",
    "StagedChange",
    "DiffLine",
    "FileDiff",
    "BlameLine",
    "FileType",
    "FileTreeItem",
    "SearchResultKind",
    "SearchResult",
]
