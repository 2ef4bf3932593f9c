"""Unit tests for git operations."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from bump_py.exceptions import GitError, NotAGitRepositoryError, RemoteUrlError
from bump_py.vcs.git import GitRepository


def completed(stdout: str = "", returncode: int = 0, stderr: str = "") -> MagicMock:
    return MagicMock(stdout=stdout, returncode=returncode, stderr=stderr)


def log_record(full_hash: str, date: str, refs: str, subject: str, body: str = "") -> str:
    return "\x1f".join([full_hash, full_hash[:7], date, refs, subject, body]) + "\x1e"


@pytest.fixture
def repo(tmp_path: Path) -> GitRepository:
    return GitRepository(tmp_path)


class TestRun:
    """Tests for command execution."""

    def test_runs_in_repository(self, repo: GitRepository, tmp_path: Path):
        """Run git in the repository directory."""
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = completed("true\n")

            assert repo.is_repo()

            args, kwargs = mock_run.call_args
            assert args[0] == ["git", "rev-parse", "--is-inside-work-tree"]
            assert kwargs["cwd"] == tmp_path

    def test_git_not_installed(self, repo: GitRepository):
        """Report a missing git executable."""
        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = FileNotFoundError("git")

            with pytest.raises(GitError, match="git is not installed"):
                repo.commit("x")

    def test_failure_carries_stderr(self, repo: GitRepository):
        """Raise GitError with git's stderr."""
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = completed(returncode=128, stderr="fatal: tag 'v1.0.0' already exists\n")

            with pytest.raises(GitError, match="already exists") as exc_info:
                repo.annotate_tag("v1.0.0", "v1.0.0")

            assert exc_info.value.stderr.startswith("fatal:")


class TestQueries:
    """Tests for read-only repository queries."""

    def test_not_a_repo(self, repo: GitRepository):
        """A failing rev-parse means no repository."""
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = completed(returncode=128, stderr="fatal: not a git repository")

            assert not repo.is_repo()

    def test_discover(self, tmp_path: Path):
        """Root the repository at the top level of the working tree."""
        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = [completed("true\n"), completed(f"{tmp_path}\n")]

            assert GitRepository.discover(tmp_path / "src").path == tmp_path

    def test_discover_outside_repository(self, tmp_path: Path):
        """Raise outside of a repository."""
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = completed(returncode=128)

            with pytest.raises(NotAGitRepositoryError):
                GitRepository.discover(tmp_path)

    def test_hooks_path_relative(self, repo: GitRepository, tmp_path: Path):
        """Resolve a relative hooks path against the repository."""
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = completed(".git/hooks\n")

            assert repo.hooks_path() == tmp_path / ".git" / "hooks"

    def test_remote_url(self, repo: GitRepository):
        """Normalize the origin URL."""
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = completed("git@github.com:owner/repo.git\n")

            assert repo.remote_url() == "https://github.com/owner/repo"
            assert mock_run.call_args.args[0] == ["git", "remote", "get-url", "origin"]

    def test_remote_url_missing(self, repo: GitRepository):
        """A missing remote is a RemoteUrlError."""
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = completed(returncode=2, stderr="error: No such remote 'origin'")

            with pytest.raises(RemoteUrlError, match="origin"):
                repo.remote_url()

    def test_status(self, repo: GitRepository):
        """Parse porcelain status lines."""
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = completed(" M VERSION\n?? notes.txt\n")

            assert repo.status() == [" M VERSION", "?? notes.txt"]
            assert not repo.is_clean()

    def test_clean(self, repo: GitRepository):
        """No status lines means clean."""
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = completed("")

            assert repo.is_clean()


class TestHistory:
    """Tests for history()."""

    def test_history(self, repo: GitRepository):
        """Parse every record of the log, newest first."""
        h1, h2 = "1" * 40, "2" * 40
        output = (
            log_record(h1, "2024-02-01", "HEAD -> main, tag: v1.1.0", "chore(release): v1.1.0")
            + "\n"
            + log_record(h2, "2024-01-15", "", "feat: a | b", "first line\nsecond line\n\n")
        )

        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = [completed("abc\n"), completed(output)]

            commits = repo.history()

        assert [c.hash for c in commits] == [h1, h2]
        assert commits[0].refs == "HEAD -> main, tag: v1.1.0"
        assert commits[0].short_hash == h1[:7]
        assert commits[0].date == "2024-02-01"
        assert commits[1].subject == "feat: a | b"
        assert commits[1].body == "first line\nsecond line"
        assert "--date=short" in mock_run.call_args.args[0]

    def test_empty_repository(self, repo: GitRepository):
        """A repository without commits has an empty history."""
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = completed(returncode=1)

            assert repo.history() == []
            mock_run.assert_called_once()


class TestMutations:
    """Tests for add, commit and tag."""

    def test_add(self, repo: GitRepository):
        """Stage a single path."""
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = completed()

            repo.add(Path("VERSION"))

            assert mock_run.call_args.args[0] == ["git", "add", "--", "VERSION"]

    def test_commit(self, repo: GitRepository):
        """Commit with the message passed as a single argument."""
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = completed()

            repo.commit("chore(release): v1.0.0\n\nbody")

            assert mock_run.call_args.args[0] == ["git", "commit", "-m", "chore(release): v1.0.0\n\nbody"]

    def test_annotate_tag(self, repo: GitRepository):
        """Create an annotated tag."""
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = completed()

            repo.annotate_tag("v1.0.0", "v1.0.0")

            assert mock_run.call_args.args[0] == ["git", "tag", "-a", "v1.0.0", "-m", "v1.0.0"]
