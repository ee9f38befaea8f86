"""Services for git-history-browser."""
