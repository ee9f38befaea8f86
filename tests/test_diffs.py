"""Tests for DiffMaterializer and patch parsing"""
from pathlib import Path

import pytest

from git_history_browser.config import Config
from git_history_browser.exceptions import DiffTooLargeError, FileNotInDiffError
from git_history_browser.models.diff import (
    ChangeStatus,
    DiffLine,
    DiffLineType,
    FileChange,
    StagedStatus,
)
from git_history_browser.services.git.diffs import DiffMaterializer, parse_numstat, parse_patch

PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01"


class TestCommitChanges:
    """Test file-level change summaries of commits."""

    def test_root_commit_lists_everything_as_added(self, git_repo_with_history, history_commits):
        changes = DiffMaterializer(git_repo_with_history).commit_changes(history_commits[0])
        assert changes == [FileChange("README.md", ChangeStatus.ADDED, 1, 0)]

    def test_modified_and_added(self, git_repo_with_history, history_commits):
        changes = DiffMaterializer(git_repo_with_history).commit_changes(history_commits[2])
        assert changes == [
            FileChange("docs/guide.md", ChangeStatus.ADDED, 4, 0),
            FileChange("src/app.py", ChangeStatus.MODIFIED, 1, 1),
        ]

    def test_deleted(self, git_repo_with_history, history_commits):
        changes = DiffMaterializer(git_repo_with_history).commit_changes(history_commits[3])
        assert changes == [FileChange("docs/guide.md", ChangeStatus.DELETED, 0, 4)]

    def test_binary_file_counts_are_zero(self, git_repo, commit_files):
        commit = commit_files(git_repo, {"logo.png": PNG_BYTES}, "Add logo")
        changes = DiffMaterializer(git_repo).commit_changes(commit)
        assert changes == [FileChange("logo.png", ChangeStatus.ADDED, 0, 0)]

    def test_rename_without_similarity_is_delete_and_add(self, git_repo_with_history):
        repo = git_repo_with_history
        repo.git.mv("src/app.py", "src/main.py")
        commit = repo.index.commit("Rename app")

        changes = DiffMaterializer(repo).commit_changes(commit)
        assert changes == [
            FileChange("src/app.py", ChangeStatus.DELETED, 0, 2),
            FileChange("src/main.py", ChangeStatus.ADDED, 2, 0),
        ]

    def test_rename_with_similarity(self, git_repo_with_history):
        repo = git_repo_with_history
        repo.git.mv("src/app.py", "src/main.py")
        commit = repo.index.commit("Rename app")

        changes = DiffMaterializer(repo, Config(find_similar=True)).commit_changes(commit)
        assert changes == [FileChange("src/main.py", ChangeStatus.RENAMED, 0, 0)]

    def test_merge_commit_compares_against_first_parent(self, git_repo_with_branches):
        repo = git_repo_with_branches
        changes = DiffMaterializer(repo).commit_changes(repo.head.commit)
        assert [c.path for c in changes] == ["feature.txt"]


class TestCommitFileDiff:
    """Test per-file line diffs of commits."""

    def test_modified_file_lines(self, git_repo_with_history, history_commits):
        diff = DiffMaterializer(git_repo_with_history).commit_file_diff(history_commits[2], "src/app.py")
        assert diff.status == ChangeStatus.MODIFIED
        assert diff.is_binary is False
        assert diff.lines == (
            DiffLine(DiffLineType.CONTEXT, "def main():", 1, 1),
            DiffLine(DiffLineType.DELETION, "    return 1", 2, None),
            DiffLine(DiffLineType.ADDITION, "    return 2", None, 2),
        )

    def test_root_commit_file_is_all_additions(self, git_repo_with_history, history_commits):
        diff = DiffMaterializer(git_repo_with_history).commit_file_diff(history_commits[0], "README.md")
        assert diff.status == ChangeStatus.ADDED
        assert diff.lines == (DiffLine(DiffLineType.ADDITION, "# Test Repository", None, 1),)

    def test_deleted_file_is_all_deletions(self, git_repo_with_history, history_commits):
        diff = DiffMaterializer(git_repo_with_history).commit_file_diff(history_commits[3], "docs/guide.md")
        assert diff.status == ChangeStatus.DELETED
        assert [line.line_type for line in diff.lines] == [DiffLineType.DELETION] * 4
        assert [line.old_line_number for line in diff.lines] == [1, 2, 3, 4]

    def test_line_totals_match_summary(self, git_repo_with_history, history_commits):
        materializer = DiffMaterializer(git_repo_with_history)
        commit = history_commits[2]
        for change in materializer.commit_changes(commit):
            diff = materializer.commit_file_diff(commit, change.path)
            additions = sum(1 for l in diff.lines if l.line_type == DiffLineType.ADDITION)
            deletions = sum(1 for l in diff.lines if l.line_type == DiffLineType.DELETION)
            assert (additions, deletions) == (change.additions, change.deletions)

    def test_file_not_in_diff(self, git_repo_with_history, history_commits):
        with pytest.raises(FileNotInDiffError) as exc_info:
            DiffMaterializer(git_repo_with_history).commit_file_diff(history_commits[2], "README.md")
        assert "README.md" in str(exc_info.value)

    def test_binary_file(self, git_repo, commit_files):
        commit = commit_files(git_repo, {"logo.png": PNG_BYTES}, "Add logo")
        diff = DiffMaterializer(git_repo).commit_file_diff(commit, "logo.png")
        assert diff.is_binary is True
        assert diff.lines == ()

    def test_too_large(self, git_repo_with_history, history_commits):
        materializer = DiffMaterializer(git_repo_with_history, Config(max_diff_bytes=16))
        with pytest.raises(DiffTooLargeError) as exc_info:
            materializer.commit_file_diff(history_commits[2], "src/app.py")
        assert exc_info.value.limit == 16

    def test_context_lines_config(self, git_repo, commit_files):
        body = "".join(f"line {i}\n" for i in range(1, 21))
        commit_files(git_repo, {"long.txt": body}, "Add long file")
        commit = commit_files(git_repo, {"long.txt": body.replace("line 10\n", "line ten\n")}, "Edit")

        wide = DiffMaterializer(git_repo).commit_file_diff(commit, "long.txt")
        narrow = DiffMaterializer(git_repo, Config(context_lines=0)).commit_file_diff(commit, "long.txt")

        assert sum(1 for l in wide.lines if l.line_type == DiffLineType.CONTEXT) == 6
        assert [l.line_type for l in narrow.lines] == [DiffLineType.DELETION, DiffLineType.ADDITION]
        assert narrow.lines[0].old_line_number == 10
        assert narrow.lines[1].new_line_number == 10


class TestStagedChanges:
    """Test HEAD-to-index diffs."""

    def test_nothing_staged(self, git_repo):
        assert DiffMaterializer(git_repo).staged_changes() == []

    def test_modified_added_deleted(self, git_repo_with_history):
        repo = git_repo_with_history
        repo_path = Path(repo.working_dir)
        (repo_path / "README.md").write_text("# Test Repository\n\nStaged line\n")
        (repo_path / "new.txt").write_text("new\n")
        repo.index.add(["README.md", "new.txt"])
        repo.index.remove(["src/app.py"], working_tree=True)

        changes = {c.path: c for c in DiffMaterializer(repo).staged_changes()}
        assert changes["README.md"].status == StagedStatus.MODIFIED
        assert changes["new.txt"].status == StagedStatus.ADDED
        assert changes["src/app.py"].status == StagedStatus.DELETED
        assert all(c.old_path is None for c in changes.values())

    def test_unstaged_edits_are_ignored(self, git_repo):
        (Path(git_repo.working_dir) / "README.md").write_text("changed but not staged\n")
        assert DiffMaterializer(git_repo).staged_changes() == []

    def test_rename_with_similarity(self, git_repo_with_history):
        repo = git_repo_with_history
        repo.git.mv("src/app.py", "src/main.py")

        changes = DiffMaterializer(repo, Config(find_similar=True)).staged_changes()
        assert len(changes) == 1
        assert changes[0].path == "src/main.py"
        assert changes[0].status == StagedStatus.RENAMED
        assert changes[0].old_path == "src/app.py"

    def test_unborn_branch_stages_everything_as_added(self, empty_repo):
        (Path(empty_repo.working_dir) / "a.txt").write_text("a\n")
        empty_repo.index.add(["a.txt"])

        changes = DiffMaterializer(empty_repo).staged_changes()
        assert [(c.path, c.status) for c in changes] == [("a.txt", StagedStatus.ADDED)]

    def test_staged_file_diff(self, git_repo):
        (Path(git_repo.working_dir) / "README.md").write_text("# Test Repository\nStaged line\n")
        git_repo.index.add(["README.md"])

        diff = DiffMaterializer(git_repo).staged_file_diff("README.md")
        assert diff.status == ChangeStatus.MODIFIED
        assert diff.lines == (
            DiffLine(DiffLineType.CONTEXT, "# Test Repository", 1, 1),
            DiffLine(DiffLineType.ADDITION, "Staged line", None, 2),
        )

    def test_staged_file_diff_not_staged(self, git_repo):
        with pytest.raises(FileNotInDiffError):
            DiffMaterializer(git_repo).staged_file_diff("README.md")


class TestParsePatch:
    """Test hunk flattening."""

    def test_multiple_hunks(self):
        patch = (
            b"@@ -1,2 +1,2 @@\n"
            b" keep\n"
            b"-old\n"
            b"+new\n"
            b"@@ -10 +10,2 @@\n"
            b" ten\n"
            b"+eleven\n"
        )
        assert list(parse_patch(patch)) == [
            DiffLine(DiffLineType.CONTEXT, "keep", 1, 1),
            DiffLine(DiffLineType.DELETION, "old", 2, None),
            DiffLine(DiffLineType.ADDITION, "new", None, 2),
            DiffLine(DiffLineType.CONTEXT, "ten", 10, 10),
            DiffLine(DiffLineType.ADDITION, "eleven", None, 11),
        ]

    def test_no_newline_marker_dropped(self):
        patch = b"@@ -1 +1 @@\n-a\n\\ No newline at end of file\n+b\n\\ No newline at end of file\n"
        assert [l.content for l in parse_patch(patch)] == ["a", "b"]

    def test_crlf_and_invalid_utf8(self):
        patch = b"@@ -0,0 +1,2 @@\n+dos line\r\n+bad \xff byte\n"
        lines = list(parse_patch(patch))
        assert lines[0].content == "dos line"
        assert lines[1].content == "bad � byte"

    def test_lines_before_first_hunk_ignored(self):
        assert list(parse_patch(b"+not a hunk\n")) == []


class TestParseNumstat:
    """Test numstat parsing."""

    def test_plain_and_binary(self):
        output = "3\t1\tsrc/a.py\x00-\t-\tlogo.png\x00"
        assert parse_numstat(output) == {"src/a.py": (3, 1), "logo.png": (0, 0)}

    def test_rename_keyed_by_new_path(self):
        output = "2\t0\t\x00old.py\x00new.py\x001\t1\tother.py\x00"
        assert parse_numstat(output) == {"new.py": (2, 0), "other.py": (1, 1)}

    def test_empty(self):
        assert parse_numstat("") == {}


class TestCommitPatches:
    """Test the size-filtered patches used by search."""

    def test_oversized_blob_excluded_before_patching(self, git_repo, commit_files):
        big = ("needle " + "x" * 80 + "\n") * 15000
        commit = commit_files(git_repo, {"big.txt": big, "small.txt": "needle\n"}, "Add files")
        materializer = DiffMaterializer(git_repo)

        deltas = materializer.commit_deltas(commit)
        searchable = [d.b_path for d in deltas if materializer.fits_diff_limit(d)]
        assert [d.b_path for d in deltas] == ["big.txt", "small.txt"]
        assert searchable == ["small.txt"]

        patches = materializer.commit_patches(commit, searchable)
        assert [p.b_path for p in patches] == ["small.txt"]
        assert sum(len(p.diff) for p in patches) < 1024

    def test_empty_path_list_yields_nothing(self, git_repo):
        assert DiffMaterializer(git_repo).commit_patches(git_repo.head.commit, []) == []

    def test_whole_commit_by_default(self, git_repo_with_history, history_commits):
        patches = DiffMaterializer(git_repo_with_history).commit_patches(history_commits[2])
        assert sorted(p.b_path for p in patches) == ["docs/guide.md", "src/app.py"]
