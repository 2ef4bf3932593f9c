"""Shared setup for CLI commands: project root, git and configuration."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from bump_py.config import load_config
from bump_py.exceptions import BumpPyError, GitError
from bump_py.vcs import GitRepository

if TYPE_CHECKING:
    from rich.console import Console

    from bump_py.config.models import BumpPyConfig

logger = logging.getLogger(__name__)


def resolve_root(path: str | None) -> tuple[Path, GitRepository]:
    """Find the project root for ``path`` (cwd by default).

    Inside a git repository the root is the top level of the working tree;
    elsewhere it is the directory itself.
    """
    project_path = Path(path).resolve() if path else Path.cwd()
    repo = GitRepository(project_path)
    try:
        if repo.is_repo():
            repo = GitRepository(repo.root_path())
    except GitError as e:
        logger.debug("Using %s as the project root: %s", project_path, e)
    return repo.path, repo


def load_project(
    path: str | None,
    config_file: str | None,
    err_console: Console,
) -> tuple[Path, GitRepository, BumpPyConfig]:
    """Resolve the root and load the configuration, exiting with status 1 on error."""
    try:
        root, repo = resolve_root(path)
        config = load_config(root, Path(config_file) if config_file else None)
    except BumpPyError as e:
        err_console.print(f"[red]Error loading config:[/] {e}")
        raise SystemExit(1) from e
    return root, repo, config
