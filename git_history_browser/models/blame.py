"""Blame model"""
from dataclasses import dataclass


@dataclass(frozen=True)
class BlameLine:
    """Attribution of one line of a file to the commit that last touched it."""
    commit_id: str
    short_id: str
    author: str
    date: str
    line_number: int  # 1-based
    content: str
    commit_message: str  # First line only

    def to_dict(self) -> dict:
        return {
            "commit_id": self.commit_id,
            "short_id": self.short_id,
            "author": self.author,
            "date": self.date,
            "line_number": self.line_number,
            "content": self.content,
            "commit_message": self.commit_message,
        }
