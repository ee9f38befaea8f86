"""Git-related services for git-history-browser."""

from .store import open_repository, get_commit
from .refs import resolve_start_commit
from .branch_queries import BranchQueries
from .log import walk_commits
from .diffs import DiffMaterializer, STAGING_INDEX
from .blame import BlameReconstructor
from .file_tree import build_file_tree
from .stash import StashIndexer

__all__ = [
    "open_repository",
    "get_commit",
    "resolve_start_commit",
    "BranchQueries",
    "walk_commits",
    "DiffMaterializer",
    "STAGING_INDEX",
    "BlameReconstructor",
    "build_file_tree",
    "StashIndexer",
]
