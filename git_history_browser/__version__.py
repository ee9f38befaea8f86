"""Version information for git-history-browser."""

try:
    from git_history_browser._version import __version__
except ImportError:
    # Fallback for development without tags or when running from source
    __version__ = "0.0.0+unknown"
