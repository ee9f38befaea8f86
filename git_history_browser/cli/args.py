"""Command-line argument parsing for git-history-browser."""

import argparse
from typing import List, Optional

from git_history_browser.__version__ import __version__


def _add_commit_file(parser: argparse.ArgumentParser):
    parser.add_argument("commit", help="Commit id (4 to 64 hex digits)")
    parser.add_argument("file", help="Path of the file inside the repository")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per query."""
    parser = argparse.ArgumentParser(
        prog="git-history-browser",
        description="Read-only history, diff, blame and search queries for Git repositories",
    )
    parser.add_argument("--version", action="version", version=f"git-history-browser {__version__}")
    parser.add_argument(
        "-C", "--repo", default=".", help="Repository path, or any directory inside it (default: .)"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("--config", metavar="FILE", help="JSON file with configuration overrides")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    subparsers.add_parser("branches", help="List local branches")

    log = subparsers.add_parser("log", help="List recent commits of a branch (or HEAD)")
    log.add_argument("branch", nargs="?", help="Branch name (falls back to HEAD)")
    log.add_argument("-n", "--limit", type=int, help="Maximum number of commits")

    show = subparsers.add_parser("show", help="Summarize the files changed by a commit")
    show.add_argument("commit", help="Commit id (4 to 64 hex digits)")
    show.add_argument(
        "--find-similar", action="store_true", help="Detect renames and copies"
    )

    diff = subparsers.add_parser("diff", help="Show the line diff of one file in a commit")
    _add_commit_file(diff)

    staged = subparsers.add_parser("staged", help="List staged changes, or diff one staged file")
    staged.add_argument("file", nargs="?", help="Show the diff of this staged file")

    blame = subparsers.add_parser("blame", help="Attribute every line of a file")
    _add_commit_file(blame)

    tree = subparsers.add_parser("tree", help="Show the file tree of a commit")
    tree.add_argument("commit", help="Commit id (4 to 64 hex digits)")

    cat = subparsers.add_parser("cat", help="Print a text file as of a commit")
    _add_commit_file(cat)

    stash = subparsers.add_parser("stash", help="List stashes, or inspect one entry")
    stash.add_argument("index", nargs="?", type=int, help="Stash position (0 is newest)")
    stash.add_argument("file", nargs="?", help="Show the diff of this file in the stash")
    stash.add_argument(
        "--expect",
        metavar="COMMIT",
        help="Commit id the stash entry is expected to have; fails if the list has shifted",
    )

    search = subparsers.add_parser("search", help="Search messages, paths and changed lines")
    search.add_argument("query", help="Case-insensitive text to look for")
    search.add_argument("-b", "--branch", help="Branch to search (falls back to HEAD)")
    search.add_argument("--max-commits", type=int, help="Maximum number of commits to visit")

    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    return build_parser().parse_args(argv)
