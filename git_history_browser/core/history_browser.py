"""Core functionality for git-history-browser"""

from typing import List, Optional, Union

from git_history_browser.config import Config
from git_history_browser.models.blame import BlameLine
from git_history_browser.models.branch import Branch
from git_history_browser.models.commit import CommitSummary, GitStash
from git_history_browser.models.diff import FileChange, FileDiff, StagedChange
from git_history_browser.models.search import SearchResult
from git_history_browser.models.tree import FileTreeItem
from git_history_browser.services.git import (
    BlameReconstructor,
    BranchQueries,
    DiffMaterializer,
    StashIndexer,
    build_file_tree,
    get_commit,
    open_repository,
    resolve_start_commit,
    walk_commits,
)
from git_history_browser.services.git.store import lookup_blob, read_text_blob
from git_history_browser.services.search_service import SearchService
from git_history_browser.logging_config import get_logger

logger = get_logger(__name__)


class HistoryBrowser:
    """Entry point for every read-only history query.

    Each method takes the repository path, opens its own handle and releases
    it before returning, including when it raises. Nothing is cached between
    calls, so calls for the same repository can run concurrently.
    """

    def __init__(self, config: Union[Config, dict, None] = None):
        """Initialize HistoryBrowser.

        Args:
            config: Configuration dict or Config object (defaults apply when None)
        """
        if config is None:
            self.config = Config()
        elif isinstance(config, dict):
            self.config = Config.from_dict(config)
        else:
            self.config = config

    # ------------------------------------------------------------------
    # Branches and history
    # ------------------------------------------------------------------

    def get_branches(self, repo_path: str) -> List[Branch]:
        """List local branches."""
        with open_repository(repo_path) as repo:
            return BranchQueries(repo).list_branches()

    def get_commits(
        self, repo_path: str, branch_name: Optional[str] = None, limit: Optional[int] = None
    ) -> List[CommitSummary]:
        """Get the newest commits reachable from a branch, or HEAD.

        Args:
            repo_path: Path to the repository
            branch_name: Branch to list; missing or unknown names fall back to HEAD
            limit: Maximum commits to return (defaults to config.log_limit)
        """
        if limit is None:
            limit = self.config.log_limit
        with open_repository(repo_path) as repo:
            start = resolve_start_commit(repo, branch_name)
            return list(walk_commits(repo, start, limit, self.config.date_format))

    # ------------------------------------------------------------------
    # Diffs
    # ------------------------------------------------------------------

    def get_commit_changes(self, repo_path: str, commit_id: str) -> List[FileChange]:
        """Summarize the files changed by a commit."""
        with open_repository(repo_path) as repo:
            commit = get_commit(repo, commit_id)
            return DiffMaterializer(repo, self.config).commit_changes(commit)

    def get_file_diff(self, repo_path: str, commit_id: str, file_path: str) -> FileDiff:
        """Get the line diff of one file changed by a commit."""
        with open_repository(repo_path) as repo:
            commit = get_commit(repo, commit_id)
            return DiffMaterializer(repo, self.config).commit_file_diff(commit, file_path)

    def get_staged_changes(self, repo_path: str) -> List[StagedChange]:
        """List changes staged for the next commit."""
        with open_repository(repo_path) as repo:
            return DiffMaterializer(repo, self.config).staged_changes()

    def get_staged_file_diff(self, repo_path: str, file_path: str) -> FileDiff:
        """Get the line diff of one staged file against HEAD."""
        with open_repository(repo_path) as repo:
            return DiffMaterializer(repo, self.config).staged_file_diff(file_path)

    # ------------------------------------------------------------------
    # File content
    # ------------------------------------------------------------------

    def get_blame(self, repo_path: str, commit_id: str, file_path: str) -> List[BlameLine]:
        """Attribute every line of a file at a commit."""
        with open_repository(repo_path) as repo:
            commit = get_commit(repo, commit_id)
            return BlameReconstructor(repo, self.config).blame_file(commit, file_path)

    def get_file_tree(self, repo_path: str, commit_id: str) -> List[FileTreeItem]:
        """Render the file tree of a commit."""
        with open_repository(repo_path) as repo:
            commit = get_commit(repo, commit_id)
            return build_file_tree(commit)

    def get_file_content(self, repo_path: str, commit_id: str, file_path: str) -> str:
        """Read a text file as of a commit, e.g. to hand it to an external editor.

        Raises:
            FileNotFoundInCommitError, BinaryFileError, FileTooLargeError, InvalidEncodingError
        """
        with open_repository(repo_path) as repo:
            commit = get_commit(repo, commit_id)
            blob = lookup_blob(commit, file_path)
            return read_text_blob(blob, file_path, self.config.max_diff_bytes)

    # ------------------------------------------------------------------
    # Stashes
    # ------------------------------------------------------------------

    def get_stashes(self, repo_path: str) -> List[GitStash]:
        """List stash entries."""
        with open_repository(repo_path) as repo:
            return StashIndexer(repo, self.config).list_stashes()

    def get_stash_changes(
        self, repo_path: str, index: int, expected_commit_id: Optional[str] = None
    ) -> List[FileChange]:
        """Summarize the files changed by a stash entry."""
        with open_repository(repo_path) as repo:
            return StashIndexer(repo, self.config).stash_changes(index, expected_commit_id)

    def get_stash_file_diff(
        self,
        repo_path: str,
        index: int,
        file_path: str,
        expected_commit_id: Optional[str] = None,
    ) -> FileDiff:
        """Get the line diff of one file in a stash entry."""
        with open_repository(repo_path) as repo:
            return StashIndexer(repo, self.config).stash_file_diff(index, file_path, expected_commit_id)

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def search(
        self,
        repo_path: str,
        query: str,
        branch_name: Optional[str] = None,
        max_commits: Optional[int] = None,
    ) -> List[SearchResult]:
        """Search commit messages, changed paths and changed lines."""
        if not (query or "").strip():
            logger.debug("Empty search query, returning no results")
            return []
        with open_repository(repo_path) as repo:
            return SearchService(repo, self.config).search(query, branch_name, max_commits)
