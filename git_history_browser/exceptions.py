"""Custom exceptions for git-history-browser"""

from typing import Optional


class GitHistoryBrowserError(Exception):
    """Base exception for all git-history-browser errors."""
    pass


class RepositoryNotFoundError(GitHistoryBrowserError):
    """Exception raised when a path is missing or is not a git repository."""

    def __init__(self, path: str, message: Optional[str] = None):
        self.path = path
        self.message = message

        error_msg = f"Repository not found at '{path}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class GitOperationError(GitHistoryBrowserError):
    """Exception raised for errors in Git operations."""

    def __init__(self, operation: str, target: Optional[str] = None, message: Optional[str] = None):
        self.operation = operation
        self.target = target
        self.message = message

        error_msg = f"Git operation '{operation}' failed"
        if target:
            error_msg += f" for '{target}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class RefNotFoundError(GitOperationError):
    """Exception raised when neither the named branch nor HEAD resolves."""

    def __init__(self, ref: str):
        self.ref = ref
        super().__init__("resolve_ref", ref, "Branch or HEAD could not be resolved")


class InvalidCommitIdError(GitOperationError):
    """Exception raised when a commit id is not a hexadecimal object name."""

    def __init__(self, commit_id: str):
        self.commit_id = commit_id
        super().__init__("parse_commit_id", commit_id, "Not a valid commit id")


class CommitNotFoundError(GitOperationError):
    """Exception raised when a commit id does not name a commit."""

    def __init__(self, commit_id: str):
        self.commit_id = commit_id
        super().__init__("find_commit", commit_id, "Commit not found")


class FileNotFoundInCommitError(GitOperationError):
    """Exception raised when a path is absent from a commit's tree."""

    def __init__(self, file_path: str, commit_id: str):
        self.file_path = file_path
        self.commit_id = commit_id
        super().__init__("find_file", file_path, f"File not found in commit {commit_id[:8]}")


class FileNotInDiffError(GitOperationError):
    """Exception raised when a path is not part of a change set."""

    def __init__(self, file_path: str):
        self.file_path = file_path
        super().__init__("find_file_in_diff", file_path, "File not found in diff")


class BinaryFileError(GitOperationError):
    """Exception raised when an operation requires text but the file is binary."""

    def __init__(self, file_path: str):
        self.file_path = file_path
        super().__init__("read_text", file_path, "Binary files are not supported")


class InvalidEncodingError(GitOperationError):
    """Exception raised when file content is not valid UTF-8 text."""

    def __init__(self, file_path: str):
        self.file_path = file_path
        super().__init__("decode_text", file_path, "File content is not valid UTF-8")


class FileTooLargeError(GitOperationError):
    """Exception raised when a file exceeds the configured size limit."""

    def __init__(self, file_path: str, size: int, limit: int):
        self.file_path = file_path
        self.size = size
        self.limit = limit
        super().__init__("read_text", file_path, f"File is {size} bytes, limit is {limit} bytes")


class DiffTooLargeError(GitOperationError):
    """Exception raised when a single file diff exceeds the configured size limit."""

    def __init__(self, file_path: str, size: int, limit: int):
        self.file_path = file_path
        self.size = size
        self.limit = limit
        super().__init__("file_diff", file_path, f"Diff is {size} bytes, limit is {limit} bytes")


class TooManyLinesError(GitOperationError):
    """Exception raised when a file has more lines than blame allows."""

    def __init__(self, file_path: str, line_count: int, limit: int):
        self.file_path = file_path
        self.line_count = line_count
        self.limit = limit
        super().__init__("blame", file_path, f"File has {line_count} lines, limit is {limit} lines")


class StashNotFoundError(GitOperationError):
    """Exception raised when a stash index is out of range."""

    def __init__(self, index: int):
        self.index = index
        super().__init__("find_stash", f"stash@{{{index}}}", "Stash entry not found")


class StaleStashIndexError(GitOperationError):
    """Exception raised when a stash index now points at a different stash commit."""

    def __init__(self, index: int, expected_commit_id: str, actual_commit_id: str):
        self.index = index
        self.expected_commit_id = expected_commit_id
        self.actual_commit_id = actual_commit_id
        super().__init__(
            "find_stash",
            f"stash@{{{index}}}",
            f"Stash list changed: expected {expected_commit_id[:8]}, found {actual_commit_id[:8]}",
        )


class InvalidQueryError(GitHistoryBrowserError):
    """Exception raised for search queries that cannot be executed.

    Empty queries are not an error; they produce no results.
    """

    def __init__(self, query: str, message: Optional[str] = None):
        self.query = query
        self.message = message

        error_msg = f"Invalid search query '{query}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)
