"""Pytest fixtures for git-history-browser tests"""
import tempfile
from pathlib import Path

import pytest
import git

from git_history_browser.config import Config


def _configure_user(repo):
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")
        writer.set_value("commit", "gpgsign", "false")


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def config():
    """Default configuration."""
    return Config()


@pytest.fixture
def commit_files():
    """Return a helper that writes files, stages them and commits.

    Values of None remove the file. Bytes are written as-is.
    """

    def _commit(repo, files, message):
        repo_path = Path(repo.working_dir)
        for rel_path, content in files.items():
            target = repo_path / rel_path
            if content is None:
                repo.index.remove([rel_path], working_tree=True)
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                target.write_bytes(content)
            else:
                target.write_text(content)
            repo.index.add([rel_path])
        return repo.index.commit(message)

    return _commit


@pytest.fixture
def empty_repo(temp_dir):
    """Create a repository with no commits (unborn HEAD)."""
    repo_path = temp_dir / "empty_repo"
    repo_path.mkdir()
    repo = git.Repo.init(repo_path)
    _configure_user(repo)

    yield repo

    repo.close()


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository with one commit on main."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    repo = git.Repo.init(repo_path)
    _configure_user(repo)

    test_file = repo_path / "README.md"
    test_file.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    repo.git.branch("-M", "main")

    yield repo

    repo.close()


@pytest.fixture
def git_repo_with_history(git_repo, commit_files):
    """Repository with four linear commits on main.

    1. Initial commit: README.md
    2. Add app: src/app.py
    3. Update app: src/app.py modified, docs/guide.md added
    4. Remove guide: docs/guide.md deleted
    """
    repo = git_repo
    commit_files(repo, {"src/app.py": "def main():\n    return 1\n"}, "Add app")
    commit_files(
        repo,
        {
            "src/app.py": "def main():\n    return 2\n",
            "docs/guide.md": "# Guide\n\nStep one\nStep two\n",
        },
        "Update app\n\nBump the return value and add a guide.",
    )
    commit_files(repo, {"docs/guide.md": None}, "Remove guide")

    yield repo


@pytest.fixture
def history_commits(git_repo_with_history):
    """Commits of git_repo_with_history, oldest first."""
    return list(reversed(list(git_repo_with_history.iter_commits("main"))))


@pytest.fixture
def git_repo_with_branches(git_repo, commit_files):
    """Repository with a feature branch merged back into main with --no-ff."""
    repo = git_repo

    repo.git.checkout("-b", "feature/to-merge")
    commit_files(repo, {"feature.txt": "Feature content\n"}, "Add feature")

    repo.git.checkout("main")
    commit_files(repo, {"main.txt": "Main content\n"}, "Work on main")
    repo.git.merge("feature/to-merge", "--no-ff", "-m", "Merge feature/to-merge")

    yield repo


@pytest.fixture
def git_repo_with_stash(git_repo_with_history):
    """Repository with two stash entries; stash@{0} is the newest."""
    repo = git_repo_with_history
    repo_path = Path(repo.working_dir)

    (repo_path / "README.md").write_text("# Test Repository\n\nFirst stash\n")
    repo.git.stash("push", "-m", "first stash")

    (repo_path / "src" / "app.py").write_text("def main():\n    return 3\n")
    repo.git.stash("push", "-m", "second stash")

    yield repo
