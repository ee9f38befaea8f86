"""File tree model and file type tags"""
from enum import Enum
from dataclasses import dataclass
from typing import Optional, Tuple


class FileType(Enum):
    """Display category of a file tree entry."""
    DIRECTORY = "directory"
    FILE = "file"  # Unrecognized or missing extension
    PYTHON = "python"
    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    RUST = "rust"
    GO = "go"
    JAVA = "java"
    KOTLIN = "kotlin"
    C = "c"
    CPP = "cpp"
    CSHARP = "csharp"
    RUBY = "ruby"
    PHP = "php"
    SWIFT = "swift"
    SHELL = "shell"
    SQL = "sql"
    HTML = "html"
    CSS = "css"
    MARKDOWN = "markdown"
    TEXT = "text"
    XML = "xml"
    JSON = "json"
    YAML = "yaml"
    CONFIG = "config"
    DATA = "data"
    IMAGE = "image"
    ARCHIVE = "archive"


@dataclass(frozen=True)
class FileTreeItem:
    """A node of a commit's file tree.

    Siblings are always ordered directories first, then by case-insensitive name.
    """
    name: str
    path: str  # Root-relative, '/'-joined
    is_directory: bool
    file_type: FileType
    size: Optional[int] = None  # Files only
    children: Optional[Tuple["FileTreeItem", ...]] = None  # Directories only

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "path": self.path,
            "is_directory": self.is_directory,
            "file_type": self.file_type.value,
            "size": self.size,
            "children": (
                [child.to_dict() for child in self.children]
                if self.children is not None
                else None
            ),
        }
