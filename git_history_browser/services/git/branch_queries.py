"""Branch query service for git-history-browser."""

from typing import List, Optional

import git

from git_history_browser.models.branch import Branch
from git_history_browser.logging_config import get_logger

logger = get_logger(__name__)


class BranchQueries:
    """Service for querying local branches of an open repository."""

    def __init__(self, repo: git.Repo):
        """Initialize the branch queries service.

        Args:
            repo: Open repository, owned by the caller
        """
        self.repo = repo

    def get_current_branch_name(self) -> Optional[str]:
        """Get the name of the branch HEAD points at, or None when detached."""
        try:
            if self.repo.head.is_detached:
                return None
            return self.repo.head.reference.name
        except TypeError:
            # Detached HEAD
            return None

    def get_last_commit_timestamp(self, head: git.Head) -> int:
        """Get the commit time of a branch tip in epoch seconds, 0 if unresolvable."""
        try:
            return int(head.commit.committed_date)
        except (ValueError, TypeError) as e:
            logger.debug(f"Error getting last commit time for {head.name}: {e}")
            return 0

    def list_branches(self) -> List[Branch]:
        """List local branches in the order git reports them.

        At most one branch is current; none when HEAD is detached.
        """
        current_name = self.get_current_branch_name()

        branches = []
        for head in self.repo.heads:
            branches.append(
                Branch(
                    name=head.name,
                    is_current=head.name == current_name,
                    last_commit_timestamp=self.get_last_commit_timestamp(head),
                )
            )

        logger.debug(f"Found {len(branches)} local branches (current: {current_name})")
        return branches
