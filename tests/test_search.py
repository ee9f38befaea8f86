"""Tests for SearchService"""
from unittest.mock import patch

import pytest

from git_history_browser.config import Config
from git_history_browser.models.search import SearchResultKind
from git_history_browser.services.git.diffs import DiffMaterializer
from git_history_browser.services.search_service import SearchService


@pytest.fixture
def token_repo(git_repo, commit_files):
    """Repository whose last commit adds 30 files mentioning 'token'."""
    files = {f"pkg/module_{i:02d}.py": f"import os\nAUTH_TOKEN_{i} = os.environ['X']\n" for i in range(30)}
    commit_files(git_repo, files, "Add token handling")
    return git_repo


class TestSearch:
    """Test free-text search over history."""

    @pytest.mark.parametrize("query", ["", "   ", "\n\t"])
    def test_empty_query_has_no_results(self, git_repo_with_history, query):
        assert SearchService(git_repo_with_history).search(query) == []

    def test_token_scenario(self, token_repo):
        results = SearchService(token_repo).search("token")
        kinds = {r.kind for r in results}

        assert len(results) > 10
        assert len(results) <= 50
        assert SearchResultKind.COMMIT in kinds
        assert SearchResultKind.CONTENT in kinds
        assert results[0].kind == SearchResultKind.COMMIT
        assert results[0].commit_message == "Add token handling"

    def test_one_content_hit_per_file(self, token_repo):
        results = SearchService(token_repo).search("token")
        content = [r for r in results if r.kind == SearchResultKind.CONTENT]
        assert len(content) == 30
        assert len({r.file_path for r in content}) == 30
        assert all(r.line_number == 2 for r in content)

    def test_case_insensitive(self, token_repo):
        assert len(SearchService(token_repo).search("TOKEN")) == len(
            SearchService(token_repo).search("token")
        )

    def test_result_limit(self, git_repo, commit_files):
        files = {f"f{i:02d}.txt": "needle\n" for i in range(60)}
        commit_files(git_repo, files, "Many files")
        results = SearchService(git_repo).search("needle")
        assert len(results) == 50

    def test_configured_result_limit(self, token_repo):
        results = SearchService(token_repo, Config(search_result_limit=5)).search("token")
        assert len(results) == 5

    def test_message_path_and_content_hits_in_walk_order(self, git_repo_with_history, history_commits):
        results = SearchService(git_repo_with_history).search("guide")

        assert [r.kind for r in results] == [
            SearchResultKind.COMMIT,
            SearchResultKind.FILE,
            SearchResultKind.CONTENT,
            SearchResultKind.COMMIT,
            SearchResultKind.FILE,
            SearchResultKind.CONTENT,
        ]
        assert results[0].commit_id == history_commits[3].hexsha
        assert results[3].commit_id == history_commits[2].hexsha
        # Body-only match still counts, reported with the subject line
        assert results[3].commit_message == "Update app"
        assert results[1].file_path == "docs/guide.md"
        assert results[2].content_preview == "# Guide"
        assert results[2].line_number == 1

    def test_deleted_line_uses_old_line_number(self, git_repo, commit_files):
        commit_files(git_repo, {"cfg.txt": "a\nb\nsecret = 1\n"}, "Add cfg")
        commit_files(git_repo, {"cfg.txt": "a\nb\n"}, "Drop value")
        results = SearchService(git_repo).search("secret")

        assert results[0].commit_message == "Drop value"
        assert results[0].kind == SearchResultKind.CONTENT
        assert results[0].line_number == 3

    def test_context_lines_do_not_match(self, git_repo, commit_files):
        commit_files(git_repo, {"a.txt": "marker\nx\n"}, "First")
        commit_files(git_repo, {"a.txt": "marker\ny\n"}, "Second")
        results = SearchService(git_repo).search("marker")
        assert [r.commit_message for r in results] == ["First"]

    def test_preview_truncated(self, git_repo, commit_files):
        commit_files(git_repo, {"long.txt": "   needle " + "x" * 300 + "\n"}, "Long line")
        result = SearchService(git_repo).search("needle")[0]
        assert len(result.content_preview) == 100
        assert result.content_preview.startswith("needle")
        assert result.content_preview.endswith("...")

    def test_merge_commits_skipped(self, git_repo_with_branches):
        repo = git_repo_with_branches
        merge_id = repo.head.commit.hexsha

        results = SearchService(repo).search("merge")
        assert all(r.commit_id != merge_id for r in results)

        results = SearchService(repo).search("feature")
        assert all(r.commit_id != merge_id for r in results)
        assert {r.kind for r in results} == {
            SearchResultKind.COMMIT,
            SearchResultKind.FILE,
            SearchResultKind.CONTENT,
        }

    def test_commit_cap(self, git_repo_with_history):
        service = SearchService(git_repo_with_history)
        assert service.search("initial", max_commits=3) == []
        assert len(service.search("initial", max_commits=4)) == 1

    def test_binary_content_not_searched(self, git_repo, commit_files):
        commit_files(git_repo, {"blob.bin": b"needle\x00needle"}, "Add blob")
        assert SearchService(git_repo).search("needle") == []

    def test_unknown_branch_falls_back_to_head(self, token_repo):
        assert SearchService(token_repo).search("token", branch_name="missing")

    def test_non_positive_cap_rejected(self, git_repo):
        with pytest.raises(ValueError):
            SearchService(git_repo).search("x", max_commits=0)

    def test_oversized_text_file_never_patched(self, git_repo, commit_files):
        big = ("needle " + "x" * 80 + "\n") * 15000
        commit_files(git_repo, {"big.txt": big, "small.txt": "needle\n"}, "Add files")

        requested = []
        original = DiffMaterializer.commit_patches

        def recording_patches(materializer, commit, paths=None):
            requested.append(paths)
            return original(materializer, commit, paths)

        with patch.object(DiffMaterializer, "commit_patches", recording_patches):
            results = SearchService(git_repo).search("needle")

        assert [(r.kind, r.file_path) for r in results] == [(SearchResultKind.CONTENT, "small.txt")]
        assert ["small.txt"] in requested
        assert all(paths is None or "big.txt" not in paths for paths in requested)
