"""Blame reconstruction for git-history-browser."""

from typing import Dict, List, Optional

import git
from git.exc import GitCommandError

from git_history_browser.config import Config
from git_history_browser.constants import UNKNOWN
from git_history_browser.exceptions import GitOperationError, TooManyLinesError
from git_history_browser.formatters.date import format_timestamp
from git_history_browser.formatters.text import first_line, short_id
from git_history_browser.models.blame import BlameLine
from git_history_browser.services.git.store import lookup_blob, read_text_blob, split_lines
from git_history_browser.logging_config import get_logger

logger = get_logger(__name__)


class BlameReconstructor:
    """Maps each line of a file at a commit to the commit that last touched it.

    Blame can walk the whole history once per line, so oversized, binary and
    non-text files are rejected before git is invoked.
    """

    def __init__(self, repo: git.Repo, config: Optional[Config] = None):
        self.repo = repo
        self.config = config or Config()

    def _load_lines(self, commit: git.Commit, file_path: str) -> List[str]:
        """Apply the guards in order and return the file's physical lines."""
        blob = lookup_blob(commit, file_path)
        text = read_text_blob(blob, file_path, self.config.blame_max_bytes)

        lines = split_lines(text)
        if len(lines) > self.config.blame_max_lines:
            logger.info(f"Refusing blame of {file_path}: {len(lines)} lines")
            raise TooManyLinesError(file_path, len(lines), self.config.blame_max_lines)
        return lines

    def _attribute(self, commit: git.Commit, file_path: str) -> Dict[int, git.Commit]:
        """Run git blame and index the attributing commit by 1-based line number.

        Moves and copies are only followed within the same commit (-M -C);
        cross-commit copy detection is too expensive to run interactively.
        """
        attribution: Dict[int, git.Commit] = {}
        try:
            for entry in self.repo.blame_incremental(commit.hexsha, file_path, M=True, C=True):
                for line_number in entry.linenos:
                    attribution[line_number] = entry.commit
        except GitCommandError as e:
            raise GitOperationError("blame", file_path, str(e.stderr or e).strip()) from e
        return attribution

    def _fallback_line(self, commit: git.Commit, line_number: int, content: str) -> BlameLine:
        return BlameLine(
            commit_id=commit.hexsha,
            short_id=short_id(commit.hexsha),
            author=UNKNOWN,
            date=UNKNOWN,
            line_number=line_number,
            content=content,
            commit_message=UNKNOWN,
        )

    def blame_file(self, commit: git.Commit, file_path: str) -> List[BlameLine]:
        """Blame every line of a file as of commit.

        Lines git cannot attribute get a placeholder record carrying the
        requested commit's id and "Unknown" fields, so one bad line never
        fails the whole file.

        Raises:
            FileNotFoundInCommitError: If the file is not in the commit's tree
            BinaryFileError: If the file is binary
            FileTooLargeError: If the file exceeds blame_max_bytes
            InvalidEncodingError: If the file is not valid UTF-8
            TooManyLinesError: If the file exceeds blame_max_lines
        """
        lines = self._load_lines(commit, file_path)
        if not lines:
            return []

        attribution = self._attribute(commit, file_path)
        date_format = self.config.date_format

        result = []
        unattributed = 0
        for line_number, content in enumerate(lines, start=1):
            source = attribution.get(line_number)
            if source is None:
                unattributed += 1
                result.append(self._fallback_line(commit, line_number, content))
                continue

            result.append(
                BlameLine(
                    commit_id=source.hexsha,
                    short_id=short_id(source.hexsha),
                    author=source.author.name or UNKNOWN,
                    date=format_timestamp(source.authored_date, date_format),
                    line_number=line_number,
                    content=content,
                    commit_message=first_line(source.message),
                )
            )

        if unattributed:
            logger.warning(f"{unattributed} lines of {file_path} could not be attributed")
        return result
