"""File tree materialization for git-history-browser."""

import posixpath
from typing import List

import git

from git_history_browser.constants import FILE_TYPES_BY_EXTENSION
from git_history_browser.models.tree import FileTreeItem, FileType
from git_history_browser.logging_config import get_logger

logger = get_logger(__name__)


def file_type_for(name: str) -> FileType:
    """Categorize a file by its extension, case-insensitively."""
    extension = posixpath.splitext(name)[1].lstrip(".").lower()
    if not extension:
        return FileType.FILE
    return FILE_TYPES_BY_EXTENSION.get(extension, FileType.FILE)


def sort_key(item: FileTreeItem):
    """Directories first, then case-insensitive name."""
    return (not item.is_directory, item.name.lower(), item.name)


def build_tree_items(tree: git.Tree) -> List[FileTreeItem]:
    """Recursively render one tree level and everything below it.

    There is no depth limit: trees in a content-addressed store cannot form cycles.
    """
    items = []
    for entry in tree:
        if entry.type == "tree":
            items.append(
                FileTreeItem(
                    name=entry.name,
                    path=entry.path,
                    is_directory=True,
                    file_type=FileType.DIRECTORY,
                    children=tuple(build_tree_items(entry)),
                )
            )
        elif entry.type == "blob":
            items.append(
                FileTreeItem(
                    name=entry.name,
                    path=entry.path,
                    is_directory=False,
                    file_type=file_type_for(entry.name),
                    size=entry.size,
                )
            )
        else:
            # Submodule gitlink: the target commit lives in another repository
            logger.debug(f"Rendering submodule {entry.path} as an empty directory")
            items.append(
                FileTreeItem(
                    name=posixpath.basename(entry.path),
                    path=entry.path,
                    is_directory=True,
                    file_type=FileType.DIRECTORY,
                    children=(),
                )
            )

    items.sort(key=sort_key)
    return items


def build_file_tree(commit: git.Commit) -> List[FileTreeItem]:
    """Render a commit's whole file tree, sorted at every level."""
    return build_tree_items(commit.tree)
