"""Core functionality for git-history-browser."""

from .history_browser import HistoryBrowser

__all__ = ["HistoryBrowser"]
