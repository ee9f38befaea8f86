"""
git-history-browser - Read-only history, diff, blame and search queries for Git repositories
"""

from .__version__ import __version__
from .config import Config
from .core import HistoryBrowser

__all__ = ["HistoryBrowser", "Config", "__version__"]
