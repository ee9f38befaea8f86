"""Command-line entry point for git-history-browser"""

import sys
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from git_history_browser.cli.args import parse_args
from git_history_browser.config import Config
from git_history_browser.core import HistoryBrowser
from git_history_browser.exceptions import GitHistoryBrowserError
from git_history_browser.logging_config import setup_logging
from git_history_browser.services.display_service import DisplayService

console = Console()


def _build_config(parsed_args) -> Config:
    config = Config.load(parsed_args.config) if parsed_args.config else Config()
    overrides = {"verbose": parsed_args.verbose, "debug": parsed_args.debug}
    if getattr(parsed_args, "find_similar", False):
        overrides["find_similar"] = True
    return Config.from_dict({**config.to_dict(), **overrides})


def run(parsed_args, browser: HistoryBrowser, display: DisplayService):
    """Run one subcommand and render its result."""
    repo = parsed_args.repo
    command = parsed_args.command

    if command == "branches":
        result = browser.get_branches(repo)
        render = display.display_branches
    elif command == "log":
        result = browser.get_commits(repo, parsed_args.branch, parsed_args.limit)
        render = display.display_commits
    elif command == "show":
        result = browser.get_commit_changes(repo, parsed_args.commit)
        render = display.display_changes
    elif command == "diff":
        result = browser.get_file_diff(repo, parsed_args.commit, parsed_args.file)
        render = display.display_diff
    elif command == "staged":
        if parsed_args.file:
            result = browser.get_staged_file_diff(repo, parsed_args.file)
            render = display.display_diff
        else:
            result = browser.get_staged_changes(repo)
            render = display.display_staged
    elif command == "blame":
        result = browser.get_blame(repo, parsed_args.commit, parsed_args.file)
        render = display.display_blame
    elif command == "tree":
        result = browser.get_file_tree(repo, parsed_args.commit)
        render = display.display_tree
    elif command == "cat":
        content = browser.get_file_content(repo, parsed_args.commit, parsed_args.file)
        if parsed_args.json:
            display.display_json({"path": parsed_args.file, "content": content})
        else:
            display.console.out(content, end="", highlight=False)
        return
    elif command == "stash":
        if parsed_args.index is None:
            result = browser.get_stashes(repo)
            render = display.display_stashes
        elif parsed_args.file:
            result = browser.get_stash_file_diff(
                repo, parsed_args.index, parsed_args.file, parsed_args.expect
            )
            render = display.display_diff
        else:
            result = browser.get_stash_changes(repo, parsed_args.index, parsed_args.expect)
            render = display.display_changes
    elif command == "search":
        result = browser.search(repo, parsed_args.query, parsed_args.branch, parsed_args.max_commits)
        render = display.display_search_results
    else:
        raise ValueError(f"Unknown command: {command}")

    if parsed_args.json:
        display.display_json(result)
    else:
        render(result)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    parsed_args = parse_args(argv)
    setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)

    try:
        config = _build_config(parsed_args)

        if parsed_args.debug:
            console.print("[yellow]Configuration:[/yellow]")
            for key, value in config.to_dict().items():
                console.print(f"  {key}: {value}")

        browser = HistoryBrowser(config)
        display = DisplayService(console, config.date_format)
        run(parsed_args, browser, display)
        return 0
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except (GitHistoryBrowserError, ValueError, OSError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        if parsed_args.debug:
            console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())
