"""Commit message and preview text helpers."""

from git_history_browser.constants import ELLIPSIS, SHORT_ID_LENGTH


def first_line(message) -> str:
    """Return the first line of a commit message.

    GitPython can return bytes for messages in an unknown encoding.
    """
    if isinstance(message, bytes):
        message = message.decode("utf-8", errors="replace")
    stripped = message.strip()
    return stripped.split("\n", 1)[0].rstrip("\r") if stripped else ""


def short_id(commit_id: str) -> str:
    """Return the abbreviated form of a full commit id."""
    return commit_id[:SHORT_ID_LENGTH]


def truncate_preview(text: str, max_length: int) -> str:
    """Trim a line and cut it to max_length characters, ellipsis included."""
    text = text.strip()
    if len(text) <= max_length:
        return text
    return text[: max_length - len(ELLIPSIS)] + ELLIPSIS
