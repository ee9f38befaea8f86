"""Search result model and related enums"""
from enum import Enum
from dataclasses import dataclass
from typing import Optional


class SearchResultKind(Enum):
    """What part of a commit matched the query."""
    COMMIT = "commit"
    FILE = "file"
    CONTENT = "content"


@dataclass(frozen=True)
class SearchResult:
    """A single search hit."""
    kind: SearchResultKind
    commit_id: str
    commit_message: str
    commit_author: str
    commit_date: str
    file_path: Optional[str] = None
    content_preview: Optional[str] = None
    line_number: Optional[int] = None  # Only set for content hits

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "commit_id": self.commit_id,
            "commit_message": self.commit_message,
            "commit_author": self.commit_author,
            "commit_date": self.commit_date,
            "file_path": self.file_path,
            "content_preview": self.content_preview,
            "line_number": self.line_number,
        }
