"""Scoped access to the Git object store through GitPython.

Every query opens its own ``git.Repo`` and closes it on the way out, so no
handle or cursor state is shared between calls.
"""

import re
from contextlib import contextmanager
from typing import Iterator, Optional

import git
from git.exc import BadName, BadObject, InvalidGitRepositoryError, NoSuchPathError

from git_history_browser.constants import BINARY_SNIFF_BYTES, EMPTY_TREE_SHA
from git_history_browser.exceptions import (
    BinaryFileError,
    CommitNotFoundError,
    FileNotFoundInCommitError,
    FileTooLargeError,
    InvalidCommitIdError,
    InvalidEncodingError,
    RepositoryNotFoundError,
)
from git_history_browser.logging_config import get_logger

logger = get_logger(__name__)

# Abbreviated or full SHA-1/SHA-256 object names
_COMMIT_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{4,64}$")


@contextmanager
def open_repository(repo_path: str, search_parent_directories: bool = True) -> Iterator[git.Repo]:
    """Open a repository for the duration of one query.

    Args:
        repo_path: Path to the repository or any directory inside its work tree
        search_parent_directories: Walk up from repo_path to find the repository

    Yields:
        git.Repo: A fresh repository instance, closed when the block exits

    Raises:
        RepositoryNotFoundError: If the path is missing or not inside a repository
    """
    try:
        repo = git.Repo(repo_path, search_parent_directories=search_parent_directories)
    except NoSuchPathError as e:
        raise RepositoryNotFoundError(str(repo_path), "Path does not exist") from e
    except InvalidGitRepositoryError as e:
        raise RepositoryNotFoundError(str(repo_path), "Not a git repository") from e

    logger.debug(f"Opened repository {repo.git_dir}")
    try:
        yield repo
    finally:
        repo.close()


def get_commit(repo: git.Repo, commit_id: str) -> git.Commit:
    """Look up a commit by full or abbreviated id.

    Raises:
        InvalidCommitIdError: If commit_id is not a hexadecimal object name
        CommitNotFoundError: If no commit has that id
    """
    commit_id = (commit_id or "").strip()
    if not _COMMIT_ID_PATTERN.match(commit_id):
        raise InvalidCommitIdError(commit_id)

    try:
        commit = repo.commit(commit_id)
        # Full ids are resolved lazily; reading the header proves the object exists
        repo.odb.info(commit.binsha)
    except (BadName, BadObject, ValueError) as e:
        logger.debug(f"Commit lookup failed for {commit_id}: {e}")
        raise CommitNotFoundError(commit_id) from e
    return commit


def empty_tree(repo: git.Repo) -> git.Tree:
    """Return the empty tree, used as the old side of a root commit's diff."""
    return git.Tree(repo, bytes.fromhex(EMPTY_TREE_SHA))


def first_parent_tree(commit: git.Commit) -> Optional[git.Tree]:
    """Return the tree of the commit's first parent, or None for a root commit."""
    if not commit.parents:
        return None
    return commit.parents[0].tree


def is_binary_data(data: bytes) -> bool:
    """Detect binary content the way git does: a NUL byte near the start."""
    return b"\0" in data[:BINARY_SNIFF_BYTES]


def is_binary_blob(blob: Optional[git.Blob]) -> bool:
    """Check whether a blob holds binary content. Missing blobs are not binary."""
    if blob is None:
        return False
    stream = blob.data_stream
    return is_binary_data(stream.read(BINARY_SNIFF_BYTES))


def lookup_blob(commit: git.Commit, file_path: str) -> git.Blob:
    """Find a file in a commit's tree.

    Raises:
        FileNotFoundInCommitError: If the path is missing or is not a regular file
    """
    try:
        item = commit.tree / file_path
    except KeyError as e:
        raise FileNotFoundInCommitError(file_path, commit.hexsha) from e

    if item.type != "blob":
        raise FileNotFoundInCommitError(file_path, commit.hexsha)
    return item


def read_text_blob(blob: git.Blob, file_path: str, max_bytes: int) -> str:
    """Read a blob as UTF-8 text, enforcing the binary, size and encoding guards.

    Oversized blobs are only sniffed, never read in full.

    Raises:
        BinaryFileError: If the content is binary
        FileTooLargeError: If the blob is larger than max_bytes
        InvalidEncodingError: If the content is not valid UTF-8
    """
    size = blob.size
    if size > max_bytes:
        if is_binary_blob(blob):
            raise BinaryFileError(file_path)
        raise FileTooLargeError(file_path, size, max_bytes)

    data = blob.data_stream.read()
    if is_binary_data(data):
        raise BinaryFileError(file_path)

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidEncodingError(file_path) from e


def split_lines(text: str) -> list:
    """Split text into physical lines the way git counts them.

    A trailing newline does not start a new line, and carriage returns of
    CRLF endings are dropped.
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]
