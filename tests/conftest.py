"""Shared fixtures for bump-py tests."""

from __future__ import annotations

import io
import itertools
import shutil
import subprocess
from typing import TYPE_CHECKING, Any

import pytest
from rich.console import Console

from bump_py.config.models import BumpPyConfig
from bump_py.core.commits import Commit

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

REPO_URL = "https://github.com/owner/repo"


@pytest.fixture
def make_commit() -> Callable[..., Commit]:
    """Factory for commits with unique, predictable hashes."""
    counter = itertools.count(1)

    def factory(subject: str, *, refs: str = "", body: str = "", date: str = "2024-01-01") -> Commit:
        full_hash = f"{next(counter):040x}"
        return Commit(
            hash=full_hash,
            short_hash=full_hash[-7:],
            date=date,
            subject=subject,
            refs=refs,
            body=body,
        )

    return factory


@pytest.fixture
def make_config() -> Callable[..., BumpPyConfig]:
    """Factory for configurations using a text provider on VERSION."""

    def factory(**overrides: Any) -> BumpPyConfig:
        data: dict[str, Any] = {"provider": {"type": "text", "path": "VERSION"}}
        data.update(overrides)
        return BumpPyConfig.model_validate(data)

    return factory


@pytest.fixture
def quiet_console() -> Console:
    """A console writing into a buffer instead of the terminal."""
    return Console(file=io.StringIO(), width=200)


# =============================================================================
# Real git repositories
# =============================================================================


def git(cwd: Path, *args: str) -> str:
    result = subprocess.run(["git", *args], cwd=cwd, check=True, capture_output=True, text=True)
    return result.stdout.strip()


@pytest.fixture
def run_git() -> Callable[..., str]:
    """Run a git command in a directory and return its stdout."""
    return git


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """An empty git repository with a local identity and an origin remote."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    repo = tmp_path / "project"
    repo.mkdir()
    git(repo, "init", "-q")
    git(repo, "config", "user.name", "Test User")
    git(repo, "config", "user.email", "test@example.com")
    git(repo, "config", "commit.gpgsign", "false")
    git(repo, "config", "tag.gpgsign", "false")
    git(repo, "remote", "add", "origin", "git@github.com:owner/repo.git")
    return repo


@pytest.fixture
def commit_file(git_repo: Path) -> Callable[..., None]:
    """Commit a change to a scratch file, optionally tagging the commit."""
    counter = itertools.count(1)

    def factory(message: str, *, tag: str | None = None) -> None:
        scratch = git_repo / "notes.txt"
        with scratch.open("a", encoding="utf-8") as f:
            f.write(f"change {next(counter)}\n")
        git(git_repo, "add", "notes.txt")
        git(git_repo, "commit", "-q", "-m", message)
        if tag is not None:
            git(git_repo, "tag", "-a", tag, "-m", tag)

    return factory
