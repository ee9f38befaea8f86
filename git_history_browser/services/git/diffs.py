"""Diff materialization for git-history-browser.

Turns GitPython diffs between two trees (or a tree and the staging index)
into file-level change summaries and flattened per-file line diffs.
"""

import re
from typing import Dict, Iterator, List, Optional, Tuple, Union

import git
from git.exc import GitCommandError

from git_history_browser.config import Config
from git_history_browser.exceptions import DiffTooLargeError, FileNotInDiffError, GitOperationError
from git_history_browser.models.diff import (
    ChangeStatus,
    DiffLine,
    DiffLineType,
    FileChange,
    FileDiff,
    StagedChange,
    StagedStatus,
)
from git_history_browser.services.git.refs import resolve_head
from git_history_browser.services.git.store import empty_tree, first_parent_tree, is_binary_blob
from git_history_browser.logging_config import get_logger

logger = get_logger(__name__)


class _StagingIndex:
    """Marker for the staging index as the new side of a diff."""

    def __repr__(self):
        return "STAGING_INDEX"


STAGING_INDEX = _StagingIndex()

NewSide = Union[git.Tree, _StagingIndex]

_CHANGE_STATUSES = {
    "A": ChangeStatus.ADDED,
    "M": ChangeStatus.MODIFIED,
    "D": ChangeStatus.DELETED,
    "R": ChangeStatus.RENAMED,
    "C": ChangeStatus.COPIED,
}

_STAGED_STATUSES = {
    "A": StagedStatus.ADDED,
    "C": StagedStatus.ADDED,
    "M": StagedStatus.MODIFIED,
    "T": StagedStatus.MODIFIED,
    "U": StagedStatus.MODIFIED,
    "D": StagedStatus.DELETED,
    "R": StagedStatus.RENAMED,
}

# @@ -old_start[,old_count] +new_start[,new_count] @@
_HUNK_HEADER = re.compile(rb"^@@ -(\d+)(?:,\d+)? \+(\d+)(?:,\d+)? @@")

_BINARY_PATCH_MARKERS = (b"Binary files ", b"GIT binary patch")

# Tree entry mode of a submodule commit pointer
_GITLINK_MODE = 0o160000


def delta_path(delta: git.Diff) -> str:
    """Path a delta is listed under: the new path, or the old one for deletions."""
    return delta.b_path or delta.a_path


def delta_change_type(delta: git.Diff) -> str:
    """Single-letter change type of a delta.

    Raw diffs carry it directly; patch diffs only carry flags.
    """
    if delta.change_type:
        return delta.change_type[0]
    if delta.new_file:
        return "A"
    if delta.deleted_file:
        return "D"
    if delta.renamed_file:
        return "R"
    if getattr(delta, "copied_file", False):
        return "C"
    return "M"


def change_status(delta: git.Diff) -> ChangeStatus:
    """Map a delta to its ChangeStatus. Type changes and conflicts are UNKNOWN."""
    return _CHANGE_STATUSES.get(delta_change_type(delta), ChangeStatus.UNKNOWN)


def staged_status(delta: git.Diff) -> StagedStatus:
    """Map a HEAD-to-index delta to its StagedStatus."""
    return _STAGED_STATUSES.get(delta_change_type(delta), StagedStatus.MODIFIED)


def is_binary_patch(patch: bytes) -> bool:
    """Check whether git emitted a binary notice instead of text hunks."""
    return patch.lstrip().startswith(_BINARY_PATCH_MARKERS)


def parse_patch(patch: bytes) -> Iterator[DiffLine]:
    """Flatten the hunks of a single-file patch into ordered diff lines.

    Context lines carry both line numbers, additions only the new one and
    deletions only the old one. "No newline at end of file" markers are dropped.
    """
    old_line = new_line = 0
    in_hunk = False

    for raw_line in patch.split(b"\n"):
        header = _HUNK_HEADER.match(raw_line)
        if header:
            old_line = int(header.group(1))
            new_line = int(header.group(2))
            in_hunk = True
            continue
        if not in_hunk or not raw_line:
            continue

        prefix = raw_line[:1]
        content = raw_line[1:].decode("utf-8", errors="replace").rstrip("\r")

        if prefix == b" ":
            yield DiffLine(DiffLineType.CONTEXT, content, old_line, new_line)
            old_line += 1
            new_line += 1
        elif prefix == b"+":
            yield DiffLine(DiffLineType.ADDITION, content, None, new_line)
            new_line += 1
        elif prefix == b"-":
            yield DiffLine(DiffLineType.DELETION, content, old_line, None)
            old_line += 1


def parse_numstat(output: str) -> Dict[str, Tuple[int, int]]:
    """Parse ``git diff --numstat -z`` output into per-path (additions, deletions).

    Renames and copies list the old and new paths as separate NUL-terminated
    fields after an empty path; they are keyed by the new path. Binary files
    report "-" counts and are recorded as zero.
    """
    counts: Dict[str, Tuple[int, int]] = {}
    fields = output.split("\0")
    i = 0
    while i < len(fields):
        record = fields[i]
        i += 1
        if not record.strip():
            continue

        parts = record.split("\t", 2)
        if len(parts) != 3:
            logger.debug(f"Skipping malformed numstat record: {record!r}")
            continue
        added, deleted, path = parts
        if not path:
            # Rename or copy: old path, then new path
            if i + 1 >= len(fields):
                break
            path = fields[i + 1]
            i += 2

        counts[path] = (
            int(added) if added.isdigit() else 0,
            int(deleted) if deleted.isdigit() else 0,
        )
    return counts


class DiffMaterializer:
    """Builds change summaries and file diffs for one open repository."""

    def __init__(self, repo: git.Repo, config: Optional[Config] = None):
        """Initialize the diff materializer.

        Args:
            repo: Open repository, owned by the caller
            config: Limits for diff size and context width
        """
        self.repo = repo
        self.config = config or Config()

    # ------------------------------------------------------------------
    # Low-level diff access
    # ------------------------------------------------------------------

    def _old_side(self, old_tree: Optional[git.Tree]) -> git.Tree:
        return old_tree if old_tree is not None else empty_tree(self.repo)

    def _diff(
        self,
        old_tree: git.Tree,
        new_side: NewSide,
        find_similar: bool = False,
        **kwargs,
    ) -> git.DiffIndex:
        """Run a GitPython diff from old_tree to new_side.

        Similarity detection is only switched on when asked for; otherwise
        renames are explicitly disabled so user git config cannot enable them.
        """
        options = dict(kwargs)
        if find_similar:
            options["find_renames"] = True
            options["find_copies"] = True
        else:
            options["no_renames"] = True

        try:
            if new_side is STAGING_INDEX:
                # GitPython diffs against the index when no other side is given
                return old_tree.diff(**options)
            return old_tree.diff(new_side, **options)
        except GitCommandError as e:
            raise GitOperationError("diff", str(new_side), str(e.stderr or e).strip()) from e

    def _line_counts(
        self, old_tree: git.Tree, new_side: NewSide, find_similar: bool
    ) -> Dict[str, Tuple[int, int]]:
        """Get exact per-file addition and deletion counts."""
        args = ["--numstat", "-z", "--no-color", "--no-ext-diff", "--no-textconv"]
        args.append("--find-renames" if find_similar else "--no-renames")
        if find_similar:
            args.append("--find-copies")

        if new_side is STAGING_INDEX:
            args += ["--cached", old_tree.hexsha]
        else:
            args += [old_tree.hexsha, new_side.hexsha]

        try:
            output = self.repo.git.diff(*args)
        except GitCommandError as e:
            logger.warning(f"Could not compute line counts: {e}")
            return {}
        return parse_numstat(output)

    # ------------------------------------------------------------------
    # File-level summaries
    # ------------------------------------------------------------------

    def tree_changes(
        self,
        old_tree: Optional[git.Tree],
        new_side: NewSide,
        find_similar: Optional[bool] = None,
    ) -> List[FileChange]:
        """Summarize the changes between two trees, or a tree and the index.

        Args:
            old_tree: Old side; None means the empty tree (everything added)
            new_side: New tree or STAGING_INDEX
            find_similar: Detect renames and copies (defaults to config.find_similar)

        Returns:
            FileChange list in git's path order
        """
        if find_similar is None:
            find_similar = self.config.find_similar
        old_tree = self._old_side(old_tree)

        deltas = self._diff(old_tree, new_side, find_similar)
        counts = self._line_counts(old_tree, new_side, find_similar)

        changes = []
        for delta in deltas:
            path = delta_path(delta)
            additions, deletions = counts.get(path, (0, 0))
            changes.append(FileChange(path, change_status(delta), additions, deletions))

        logger.debug(f"Found {len(changes)} changed files")
        return changes

    def commit_changes(self, commit: git.Commit, find_similar: Optional[bool] = None) -> List[FileChange]:
        """Summarize a commit against its first parent (empty tree for a root commit)."""
        return self.tree_changes(first_parent_tree(commit), commit.tree, find_similar)

    def commit_deltas(self, commit: git.Commit) -> git.DiffIndex:
        """Raw (blob ids only) diff of a whole commit against its first parent, without renames."""
        return self._diff(self._old_side(first_parent_tree(commit)), commit.tree)

    def fits_diff_limit(self, delta: git.Diff) -> bool:
        """Check that both sides of a delta are regular blobs within max_diff_bytes."""
        limit = self.config.max_diff_bytes
        for blob in (delta.a_blob, delta.b_blob):
            if blob is None:
                continue
            if blob.mode == _GITLINK_MODE or blob.size > limit:
                return False
        return True

    def commit_patches(self, commit: git.Commit, paths: Optional[List[str]] = None) -> List[git.Diff]:
        """Patch-format diff of a commit against its first parent, limited to paths.

        None means every changed file; an empty list means none. Callers filter
        paths with fits_diff_limit first so no oversized blob is ever turned
        into patch text.
        """
        if paths is not None and not paths:
            return []
        return self._diff(
            self._old_side(first_parent_tree(commit)),
            commit.tree,
            paths=paths,
            create_patch=True,
            unified=self.config.context_lines,
            no_textconv=True,
        )

    def _head_tree(self) -> Optional[git.Tree]:
        head = resolve_head(self.repo)
        return head.tree if head is not None else None

    def staged_changes(self, find_similar: Optional[bool] = None) -> List[StagedChange]:
        """List changes staged in the index relative to HEAD.

        On an unborn branch everything in the index is reported as added.
        """
        if find_similar is None:
            find_similar = self.config.find_similar
        old_tree = self._old_side(self._head_tree())

        changes = []
        for delta in self._diff(old_tree, STAGING_INDEX, find_similar):
            status = staged_status(delta)
            old_path = delta.a_path if status == StagedStatus.RENAMED else None
            changes.append(StagedChange(delta_path(delta), status, old_path))
        return changes

    # ------------------------------------------------------------------
    # Per-file diffs
    # ------------------------------------------------------------------

    def _check_blob_size(self, blob: Optional[git.Blob], file_path: str):
        if blob is None:
            return
        limit = self.config.max_diff_bytes
        if blob.size > limit:
            logger.info(f"Refusing diff of {file_path}: blob is {blob.size} bytes")
            raise DiffTooLargeError(file_path, blob.size, limit)

    def file_diff(self, old_tree: Optional[git.Tree], new_side: NewSide, file_path: str) -> FileDiff:
        """Build the line-level diff of one file.

        The path is matched exactly against the change set; the first match wins.

        Raises:
            FileNotInDiffError: If the file is not part of the change set
            DiffTooLargeError: If either side or the patch exceeds max_diff_bytes
        """
        old_tree = self._old_side(old_tree)

        delta = next(
            (d for d in self._diff(old_tree, new_side) if delta_path(d) == file_path),
            None,
        )
        if delta is None:
            raise FileNotInDiffError(file_path)

        status = change_status(delta)
        if is_binary_blob(delta.a_blob) or is_binary_blob(delta.b_blob):
            return FileDiff(file_path, status, is_binary=True)

        self._check_blob_size(delta.a_blob, file_path)
        self._check_blob_size(delta.b_blob, file_path)

        paths = sorted({p for p in (delta.a_path, delta.b_path) if p})
        patches = self._diff(
            old_tree,
            new_side,
            paths=paths,
            create_patch=True,
            unified=self.config.context_lines,
            no_textconv=True,
        )
        patch = next((p for p in patches if delta_path(p) == file_path), None)
        raw = patch.diff if patch is not None and patch.diff else b""

        if len(raw) > self.config.max_diff_bytes:
            raise DiffTooLargeError(file_path, len(raw), self.config.max_diff_bytes)
        if is_binary_patch(raw):
            return FileDiff(file_path, status, is_binary=True)

        return FileDiff(file_path, status, is_binary=False, lines=tuple(parse_patch(raw)))

    def commit_file_diff(self, commit: git.Commit, file_path: str) -> FileDiff:
        """Diff one file of a commit against the commit's first parent."""
        return self.file_diff(first_parent_tree(commit), commit.tree, file_path)

    def staged_file_diff(self, file_path: str) -> FileDiff:
        """Diff one staged file against HEAD."""
        return self.file_diff(self._head_tree(), STAGING_INDEX, file_path)
