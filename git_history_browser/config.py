"""Configuration handling for git-history-browser"""

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Union

from git_history_browser.constants import (
    DEFAULT_BLAME_MAX_BYTES,
    DEFAULT_BLAME_MAX_LINES,
    DEFAULT_CONTEXT_LINES,
    DEFAULT_DATE_FORMAT,
    DEFAULT_LOG_LIMIT,
    DEFAULT_MAX_DIFF_BYTES,
    DEFAULT_PREVIEW_LENGTH,
    DEFAULT_SEARCH_COMMIT_LIMIT,
    DEFAULT_SEARCH_RESULT_LIMIT,
)


@dataclass
class Config:
    """Configuration for git-history-browser with validation.

    Every bound that keeps a query from hanging or exhausting memory on a
    pathological repository lives here.
    """

    # Commit log
    log_limit: int = DEFAULT_LOG_LIMIT

    # Search bounds
    search_commit_limit: int = DEFAULT_SEARCH_COMMIT_LIMIT
    search_result_limit: int = DEFAULT_SEARCH_RESULT_LIMIT
    preview_length: int = DEFAULT_PREVIEW_LENGTH

    # Diff bounds
    max_diff_bytes: int = DEFAULT_MAX_DIFF_BYTES
    context_lines: int = DEFAULT_CONTEXT_LINES
    find_similar: bool = False  # Rename/copy detection is opt-in

    # Blame guards
    blame_max_bytes: int = DEFAULT_BLAME_MAX_BYTES
    blame_max_lines: int = DEFAULT_BLAME_MAX_LINES

    # Output
    date_format: str = DEFAULT_DATE_FORMAT
    verbose: bool = False
    debug: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_positive(
            "log_limit",
            "search_commit_limit",
            "search_result_limit",
            "max_diff_bytes",
            "blame_max_bytes",
            "blame_max_lines",
        )
        self._validate_context_lines()
        self._validate_preview_length()
        self._validate_date_format()
        self._validate_flags("find_similar", "verbose", "debug")

    @staticmethod
    def _is_int(value) -> bool:
        return isinstance(value, int) and not isinstance(value, bool)

    def _validate_positive(self, *names: str):
        """Validate that integer limits are positive."""
        for name in names:
            value = getattr(self, name)
            if not self._is_int(value) or value <= 0:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")

    def _validate_context_lines(self):
        """Validate context_lines is a non-negative integer."""
        if not self._is_int(self.context_lines) or self.context_lines < 0:
            raise ValueError(f"context_lines must be a non-negative integer, got {self.context_lines!r}")

    def _validate_preview_length(self):
        """Validate preview_length leaves room for the ellipsis."""
        if not self._is_int(self.preview_length) or self.preview_length < 4:
            raise ValueError(f"preview_length must be an integer of at least 4, got {self.preview_length!r}")

    def _validate_date_format(self):
        """Validate date_format is a non-empty string."""
        if not isinstance(self.date_format, str) or not self.date_format.strip():
            raise ValueError(f"date_format must be a non-empty string, got {self.date_format!r}")

    def _validate_flags(self, *names: str):
        """Validate that switches are booleans."""
        for name in names:
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ValueError(f"{name} must be true or false, got {value!r}")

    def to_dict(self) -> dict:
        """Convert config to a plain dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def get(self, key: str, default=None):
        """Get config value by key."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary, ignoring unknown keys."""
        known_fields = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "Config":
        """Create Config from a JSON file.

        Args:
            path: Path to a JSON object whose keys are Config field names

        Raises:
            ValueError: If the file does not hold a JSON object or a value is invalid
            OSError: If the file cannot be read
        """
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON in config file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a JSON object")
        return cls.from_dict(data)
