"""Free-text search across commit messages, changed paths and changed lines."""

from typing import Iterator, List, Optional

import git

from git_history_browser.config import Config
from git_history_browser.exceptions import GitOperationError
from git_history_browser.formatters.date import format_timestamp
from git_history_browser.formatters.text import first_line, truncate_preview
from git_history_browser.models.diff import DiffLineType
from git_history_browser.models.search import SearchResult, SearchResultKind
from git_history_browser.services.git.diffs import (
    DiffMaterializer,
    delta_path,
    is_binary_patch,
    parse_patch,
)
from git_history_browser.services.git.log import iter_commits
from git_history_browser.services.git.refs import resolve_start_commit
from git_history_browser.logging_config import get_logger

logger = get_logger(__name__)


class SearchService:
    """Runs one case-insensitive substring query over recent history.

    Two hard bounds apply: at most ``max_commits`` commits are visited and at
    most ``config.search_result_limit`` results are returned, whichever is hit
    first. Merge commits are skipped entirely, since their diff against a
    single parent does not say which side introduced a line.
    """

    def __init__(self, repo: git.Repo, config: Optional[Config] = None):
        self.repo = repo
        self.config = config or Config()
        self.diffs = DiffMaterializer(repo, self.config)

    def _result(self, commit: git.Commit, kind: SearchResultKind, **extra) -> SearchResult:
        return SearchResult(
            kind=kind,
            commit_id=commit.hexsha,
            commit_message=first_line(commit.message),
            commit_author=commit.author.name or "",
            commit_date=format_timestamp(commit.committed_date, self.config.date_format),
            **extra,
        )

    def _search_commit(self, commit: git.Commit, needle: str) -> Iterator[SearchResult]:
        """Yield message, path and content hits for one non-merge commit."""
        message = commit.message
        if isinstance(message, bytes):
            message = message.decode("utf-8", errors="replace")
        if needle in message.lower():
            yield self._result(commit, SearchResultKind.COMMIT)

        try:
            deltas = self.diffs.commit_deltas(commit)
            searchable = [delta_path(d) for d in deltas if self.diffs.fits_diff_limit(d)]
            paths = None if len(searchable) == len(deltas) else searchable
            patches = {delta_path(p): p for p in self.diffs.commit_patches(commit, paths)}
        except GitOperationError as e:
            logger.warning(f"Skipping diff of {commit.hexsha[:8]} during search: {e}")
            return

        for delta in deltas:
            path = delta_path(delta)
            if needle in path.lower():
                yield self._result(commit, SearchResultKind.FILE, file_path=path)

            patch = patches.get(path)
            if patch is None:
                logger.debug(f"Not searching content of {path} in {commit.hexsha[:8]}: over size limit")
                continue
            raw = patch.diff or b""
            if not raw or is_binary_patch(raw):
                continue
            if len(raw) > self.config.max_diff_bytes:
                logger.debug(f"Not searching content of {path} in {commit.hexsha[:8]}: {len(raw)} bytes")
                continue

            # At most one content hit per file per commit
            for line in parse_patch(raw):
                if line.line_type == DiffLineType.CONTEXT:
                    continue
                if needle in line.content.lower():
                    line_number = (
                        line.new_line_number
                        if line.line_type == DiffLineType.ADDITION
                        else line.old_line_number
                    )
                    yield self._result(
                        commit,
                        SearchResultKind.CONTENT,
                        file_path=path,
                        content_preview=truncate_preview(line.content, self.config.preview_length),
                        line_number=line_number,
                    )
                    break

    def search(
        self,
        query: str,
        branch_name: Optional[str] = None,
        max_commits: Optional[int] = None,
    ) -> List[SearchResult]:
        """Search history reachable from a branch (or HEAD).

        Args:
            query: Text to look for; empty or whitespace-only yields no results
            branch_name: Branch to start from, falling back to HEAD
            max_commits: Commits to visit (defaults to config.search_commit_limit)

        Returns:
            Results in walk order, at most config.search_result_limit of them

        Raises:
            RefNotFoundError: If neither the branch nor HEAD resolves
        """
        needle = (query or "").strip().lower()
        if not needle:
            return []

        if max_commits is None:
            max_commits = self.config.search_commit_limit
        if max_commits <= 0:
            raise ValueError(f"max_commits must be positive, got {max_commits}")
        result_limit = self.config.search_result_limit

        start = resolve_start_commit(self.repo, branch_name)

        results: List[SearchResult] = []
        visited = 0
        for commit in iter_commits(self.repo, start, max_commits):
            visited += 1
            if len(commit.parents) > 1:
                continue

            for result in self._search_commit(commit, needle):
                results.append(result)
                if len(results) >= result_limit:
                    logger.info(f"Search hit the {result_limit} result limit after {visited} commits")
                    return results

        logger.info(f"Search found {len(results)} results in {visited} commits")
        return results
