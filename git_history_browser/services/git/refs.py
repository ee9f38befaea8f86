"""Reference resolution for git-history-browser.

Every query that takes an optional branch name goes through
``resolve_start_commit`` so the fallback order is the same everywhere:

1. the named branch's tip, if a name is given and the branch exists
2. HEAD: the tip of the branch it points at, or the commit itself when detached
"""

from typing import Callable, List, Optional

import git

from git_history_browser.exceptions import RefNotFoundError
from git_history_browser.logging_config import get_logger

logger = get_logger(__name__)

Resolver = Callable[[git.Repo, Optional[str]], Optional[git.Commit]]


def resolve_branch(repo: git.Repo, branch_name: Optional[str]) -> Optional[git.Commit]:
    """Return the tip of a local branch, or None if there is no such branch."""
    if not branch_name:
        return None
    try:
        return repo.heads[branch_name].commit
    except (IndexError, ValueError) as e:
        logger.debug(f"Branch {branch_name} not resolvable: {e}")
        return None


def resolve_head(repo: git.Repo, branch_name: Optional[str] = None) -> Optional[git.Commit]:
    """Return the commit HEAD refers to, or None on an unborn or broken HEAD."""
    try:
        if repo.head.is_detached:
            return repo.head.commit
        return repo.head.reference.commit
    except (TypeError, ValueError) as e:
        logger.debug(f"HEAD not resolvable: {e}")
        return None


RESOLUTION_CHAIN: List[Resolver] = [resolve_branch, resolve_head]


def resolve_start_commit(repo: git.Repo, branch_name: Optional[str] = None) -> git.Commit:
    """Resolve the starting commit for a walk.

    Args:
        repo: Open repository
        branch_name: Optional local branch name

    Returns:
        The first commit produced by the resolution chain

    Raises:
        RefNotFoundError: If neither the named branch nor HEAD resolves
    """
    for resolver in RESOLUTION_CHAIN:
        commit = resolver(repo, branch_name)
        if commit is not None:
            if branch_name and resolver is not resolve_branch:
                logger.info(f"Branch {branch_name} not found, falling back to HEAD")
            return commit

    raise RefNotFoundError(branch_name or "HEAD")
