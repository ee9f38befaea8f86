"""Branch model"""
from dataclasses import dataclass


@dataclass(frozen=True)
class Branch:
    """A local branch as shown in the branch list."""
    name: str
    is_current: bool
    last_commit_timestamp: int  # Epoch seconds, 0 if the tip could not be resolved

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "is_current": self.is_current,
            "last_commit_timestamp": self.last_commit_timestamp,
        }
