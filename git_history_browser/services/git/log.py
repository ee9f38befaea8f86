"""Commit log walking for git-history-browser."""

from typing import Iterator

import git

from git_history_browser.constants import DEFAULT_DATE_FORMAT, DEFAULT_LOG_LIMIT
from git_history_browser.formatters.date import format_timestamp
from git_history_browser.formatters.text import first_line, short_id
from git_history_browser.models.commit import CommitSummary
from git_history_browser.logging_config import get_logger

logger = get_logger(__name__)


def iter_commits(
    repo: git.Repo, start: git.Commit, limit: int = DEFAULT_LOG_LIMIT
) -> Iterator[git.Commit]:
    """Walk history from start, newest first, yielding at most limit commits.

    git applies the cap itself (``--max-count``), so the walk stops after
    limit commits however deep or tangled the history is. Ties in commit time
    keep git's own order.
    """
    if limit <= 0:
        raise ValueError(f"limit must be positive, got {limit}")

    logger.debug(f"Walking history from {start.hexsha[:8]} (limit {limit})")
    return repo.iter_commits(start.hexsha, max_count=limit, date_order=True)


def summarize_commit(commit: git.Commit, date_format: str = DEFAULT_DATE_FORMAT) -> CommitSummary:
    """Build the log row for a commit."""
    return CommitSummary(
        id=commit.hexsha,
        short_id=short_id(commit.hexsha),
        message=first_line(commit.message),
        author=commit.author.name or "",
        date=format_timestamp(commit.committed_date, date_format),
    )


def walk_commits(
    repo: git.Repo,
    start: git.Commit,
    limit: int = DEFAULT_LOG_LIMIT,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> Iterator[CommitSummary]:
    """Lazily produce commit summaries, truncated at limit without error."""
    for commit in iter_commits(repo, start, limit):
        yield summarize_commit(commit, date_format)
