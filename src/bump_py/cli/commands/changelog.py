"""Implementation of the 'changelog' command.

Writes the changelog for the whole history without committing it.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from bump_py.cli.context import load_project
from bump_py.core.changelog import DEFAULT_CHANGELOG_FILENAME, save_changelog
from bump_py.exceptions import BumpPyError, NotAGitRepositoryError

if TYPE_CHECKING:
    from rich.console import Console


def run_changelog(
    path: str | None,
    config_file: str | None,
    output: str | None,
    console: Console,
    err_console: Console,
) -> None:
    """Generate the changelog and save it.

    Args:
        path: Optional path to project directory
        config_file: Optional explicit configuration file
        output: Output file, ``CHANGELOG.md`` in the project root by default
        console: Console for standard output
        err_console: Console for error output
    """
    root, repo, config = load_project(path, config_file, err_console)
    target = Path(output).resolve() if output else root / DEFAULT_CHANGELOG_FILENAME

    try:
        if not repo.is_repo():
            raise NotAGitRepositoryError()
        with console.status("[blue]bump[/] generating changelog"):
            save_changelog(repo, config, target)
    except BumpPyError as e:
        err_console.print(f"[red]Error generating changelog:[/] {e}")
        raise SystemExit(1) from e
    except OSError as e:
        err_console.print(f"[red]Error writing changelog:[/] {e}")
        raise SystemExit(1) from e

    console.print(f"[green]✓[/] saved changelog to {target}")
