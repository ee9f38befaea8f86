"""Commit and stash models"""
from dataclasses import dataclass


@dataclass(frozen=True)
class CommitSummary:
    """One row of a commit log."""
    id: str
    short_id: str  # Always the first 8 hex characters of id
    message: str  # First line only
    author: str
    date: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "short_id": self.short_id,
            "message": self.message,
            "author": self.author,
            "date": self.date,
        }


@dataclass(frozen=True)
class GitStash:
    """A stash entry.

    ``index`` is the position in the stash list at enumeration time. It is not
    a stable identifier: pushing or dropping a stash shifts every index.
    """
    index: int
    message: str
    commit_id: str
    author: str
    date: str

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "message": self.message,
            "commit_id": self.commit_id,
            "author": self.author,
            "date": self.date,
        }
