"""Diff models and related enums"""
from enum import Enum
from dataclasses import dataclass
from typing import Optional, Tuple


class ChangeStatus(Enum):
    """Status of a file between two trees."""
    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"
    COPIED = "copied"
    UNKNOWN = "unknown"


class StagedStatus(Enum):
    """Status of a file between HEAD and the staging index.

    Type changes are reported as MODIFIED.
    """
    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"


class DiffLineType(Enum):
    """Kind of a line in a flattened patch."""
    CONTEXT = "context"
    ADDITION = "addition"
    DELETION = "deletion"


@dataclass(frozen=True)
class FileChange:
    """File-level change summary."""
    path: str
    status: ChangeStatus
    additions: int = 0
    deletions: int = 0

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "status": self.status.value,
            "additions": self.additions,
            "deletions": self.deletions,
        }


@dataclass(frozen=True)
class StagedChange:
    """A change recorded in the staging index."""
    path: str
    status: StagedStatus
    old_path: Optional[str] = None  # Only set for renames

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "status": self.status.value,
            "old_path": self.old_path,
        }


@dataclass(frozen=True)
class DiffLine:
    """One line of a flattened patch."""
    line_type: DiffLineType
    content: str
    old_line_number: Optional[int] = None  # None for additions
    new_line_number: Optional[int] = None  # None for deletions

    def to_dict(self) -> dict:
        return {
            "line_type": self.line_type.value,
            "content": self.content,
            "old_line_number": self.old_line_number,
            "new_line_number": self.new_line_number,
        }


@dataclass(frozen=True)
class FileDiff:
    """Line-level diff of a single file. Binary files carry no lines."""
    path: str
    status: ChangeStatus
    is_binary: bool
    lines: Tuple[DiffLine, ...] = ()

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "status": self.status.value,
            "is_binary": self.is_binary,
            "diff_lines": [line.to_dict() for line in self.lines],
        }
