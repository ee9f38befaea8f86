"""Stash enumeration for git-history-browser."""

from typing import List, Optional, Tuple

import git
from git.exc import BadName, BadObject, GitCommandError

from git_history_browser.config import Config
from git_history_browser.exceptions import GitOperationError, StaleStashIndexError, StashNotFoundError
from git_history_browser.formatters.date import format_timestamp
from git_history_browser.models.commit import GitStash
from git_history_browser.models.diff import FileChange, FileDiff
from git_history_browser.services.git.diffs import DiffMaterializer
from git_history_browser.services.git.store import first_parent_tree
from git_history_browser.logging_config import get_logger

logger = get_logger(__name__)

# Full id, then the reflog subject ("WIP on main: ..."), tab separated
_STASH_LIST_FORMAT = "--format=%H%x09%gs"


class StashIndexer:
    """Lists stash entries and exposes their diffs.

    Indices are positions in the stash list at the time of the call. Any stash
    push or drop in between shifts them; callers that remember the commit id
    from the listing can pass it back as ``expected_commit_id`` to detect that.
    """

    def __init__(self, repo: git.Repo, config: Optional[Config] = None):
        self.repo = repo
        self.config = config or Config()
        self.diffs = DiffMaterializer(repo, self.config)

    def _stash_entries(self) -> List[Tuple[str, str]]:
        """Read (commit id, message) pairs from the stash reflog, newest first."""
        try:
            output = self.repo.git.stash("list", _STASH_LIST_FORMAT)
        except GitCommandError as e:
            raise GitOperationError("stash_list", message=str(e.stderr or e).strip()) from e

        entries = []
        for line in output.splitlines():
            if not line.strip():
                continue
            commit_id, _, message = line.partition("\t")
            entries.append((commit_id.strip(), message))
        return entries

    def list_stashes(self) -> List[GitStash]:
        """List stash entries in stash order.

        Entries whose commit cannot be read are skipped; the remaining entries
        keep their stash positions.
        """
        stashes = []
        for index, (commit_id, message) in enumerate(self._stash_entries()):
            try:
                commit = self.repo.commit(commit_id)
                stashes.append(
                    GitStash(
                        index=index,
                        message=message,
                        commit_id=commit.hexsha,
                        author=commit.author.name or "",
                        date=format_timestamp(commit.committed_date, self.config.date_format),
                    )
                )
            except (BadName, BadObject, ValueError, GitCommandError) as e:
                logger.warning(f"Skipping stash@{{{index}}} ({commit_id[:8]}): {e}")
                continue

        logger.debug(f"Found {len(stashes)} stash entries")
        return stashes

    def get_stash_commit(self, index: int, expected_commit_id: Optional[str] = None) -> git.Commit:
        """Resolve a stash position to its commit.

        Raises:
            StashNotFoundError: If there is no stash at index
            StaleStashIndexError: If the stash at index is not expected_commit_id
        """
        entries = self._stash_entries()
        if index < 0 or index >= len(entries):
            raise StashNotFoundError(index)

        commit_id = entries[index][0]
        if expected_commit_id and not commit_id.startswith(expected_commit_id.strip().lower()):
            raise StaleStashIndexError(index, expected_commit_id, commit_id)

        try:
            return self.repo.commit(commit_id)
        except (BadName, BadObject, ValueError) as e:
            raise StashNotFoundError(index) from e

    def stash_changes(self, index: int, expected_commit_id: Optional[str] = None) -> List[FileChange]:
        """Summarize a stash against the commit it was taken from."""
        stash = self.get_stash_commit(index, expected_commit_id)
        return self.diffs.tree_changes(first_parent_tree(stash), stash.tree)

    def stash_file_diff(
        self, index: int, file_path: str, expected_commit_id: Optional[str] = None
    ) -> FileDiff:
        """Diff one file of a stash against the commit it was taken from."""
        stash = self.get_stash_commit(index, expected_commit_id)
        return self.diffs.file_diff(first_parent_tree(stash), stash.tree, file_path)
