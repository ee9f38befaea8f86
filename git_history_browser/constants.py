"""Shared constants for git-history-browser."""

from dataclasses import dataclass
from typing import Dict, List

from git_history_browser.models.tree import FileType


# Query bounds
DEFAULT_LOG_LIMIT = 50
DEFAULT_SEARCH_COMMIT_LIMIT = 100
DEFAULT_SEARCH_RESULT_LIMIT = 50
DEFAULT_PREVIEW_LENGTH = 100

# Diff and blame guards
DEFAULT_MAX_DIFF_BYTES = 1024 * 1024
DEFAULT_CONTEXT_LINES = 3
DEFAULT_BLAME_MAX_BYTES = 1024 * 1024
DEFAULT_BLAME_MAX_LINES = 3000

# Number of leading bytes inspected for NUL when sniffing binary content (same as git)
BINARY_SNIFF_BYTES = 8000

DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M"

SHORT_ID_LENGTH = 8

# Well-known id of the empty tree; git resolves it without it being stored
EMPTY_TREE_SHA = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"

UNKNOWN = "Unknown"
ELLIPSIS = "..."


# Case-insensitive extension lookup for file tree type tags
FILE_TYPES_BY_EXTENSION: Dict[str, FileType] = {
    # Languages
    "py": FileType.PYTHON,
    "pyi": FileType.PYTHON,
    "js": FileType.JAVASCRIPT,
    "mjs": FileType.JAVASCRIPT,
    "cjs": FileType.JAVASCRIPT,
    "jsx": FileType.JAVASCRIPT,
    "ts": FileType.TYPESCRIPT,
    "tsx": FileType.TYPESCRIPT,
    "rs": FileType.RUST,
    "go": FileType.GO,
    "java": FileType.JAVA,
    "kt": FileType.KOTLIN,
    "c": FileType.C,
    "h": FileType.C,
    "cpp": FileType.CPP,
    "cc": FileType.CPP,
    "cxx": FileType.CPP,
    "hpp": FileType.CPP,
    "cs": FileType.CSHARP,
    "rb": FileType.RUBY,
    "php": FileType.PHP,
    "swift": FileType.SWIFT,
    "sh": FileType.SHELL,
    "bash": FileType.SHELL,
    "zsh": FileType.SHELL,
    "sql": FileType.SQL,
    # Markup and styles
    "html": FileType.HTML,
    "htm": FileType.HTML,
    "css": FileType.CSS,
    "scss": FileType.CSS,
    "less": FileType.CSS,
    "md": FileType.MARKDOWN,
    "markdown": FileType.MARKDOWN,
    "rst": FileType.TEXT,
    "txt": FileType.TEXT,
    "xml": FileType.XML,
    "svg": FileType.IMAGE,
    # Data and config
    "json": FileType.JSON,
    "yaml": FileType.YAML,
    "yml": FileType.YAML,
    "toml": FileType.CONFIG,
    "ini": FileType.CONFIG,
    "cfg": FileType.CONFIG,
    "conf": FileType.CONFIG,
    "env": FileType.CONFIG,
    "lock": FileType.CONFIG,
    "csv": FileType.DATA,
    "tsv": FileType.DATA,
    # Binary assets
    "png": FileType.IMAGE,
    "jpg": FileType.IMAGE,
    "jpeg": FileType.IMAGE,
    "gif": FileType.IMAGE,
    "ico": FileType.IMAGE,
    "webp": FileType.IMAGE,
    "bmp": FileType.IMAGE,
    "zip": FileType.ARCHIVE,
    "tar": FileType.ARCHIVE,
    "gz": FileType.ARCHIVE,
    "tgz": FileType.ARCHIVE,
    "bz2": FileType.ARCHIVE,
    "xz": FileType.ARCHIVE,
    "7z": FileType.ARCHIVE,
}


@dataclass
class ColumnDefinition:
    """Definition of a table column."""

    key: str
    label: str
    width: int = 0  # 0 means auto-width


BRANCH_COLUMNS: List[ColumnDefinition] = [
    ColumnDefinition("branch", "Branch", 30),
    ColumnDefinition("last_commit", "Last Commit", 16),
]

COMMIT_COLUMNS: List[ColumnDefinition] = [
    ColumnDefinition("short_id", "Commit", 8),
    ColumnDefinition("message", "Message"),
    ColumnDefinition("author", "Author", 20),
    ColumnDefinition("date", "Date", 16),
]

CHANGE_COLUMNS: List[ColumnDefinition] = [
    ColumnDefinition("status", "Status", 9),
    ColumnDefinition("path", "Path"),
    ColumnDefinition("additions", "+", 6),
    ColumnDefinition("deletions", "-", 6),
]

STASH_COLUMNS: List[ColumnDefinition] = [
    ColumnDefinition("index", "Stash", 10),
    ColumnDefinition("message", "Message"),
    ColumnDefinition("author", "Author", 20),
    ColumnDefinition("date", "Date", 16),
]

SEARCH_COLUMNS: List[ColumnDefinition] = [
    ColumnDefinition("kind", "Match", 14),
    ColumnDefinition("commit", "Commit", 8),
    ColumnDefinition("title", "Title"),
    ColumnDefinition("detail", "Detail"),
]


# Symbol constants
SYMBOL_CURRENT_BRANCH = " *"
SYMBOL_DIRECTORY = "/"


# Rich styles for change statuses and diff lines
STATUS_COLORS = {
    "added": "green",
    "modified": "yellow",
    "deleted": "red",
    "renamed": "cyan",
    "copied": "cyan",
    "unknown": "magenta",
}

DIFF_LINE_COLORS = {
    "context": None,
    "addition": "green",
    "deletion": "red",
}

SEARCH_KIND_LABELS = {
    "commit": "Commit Message",
    "file": "File Name",
    "content": "File Content",
}
