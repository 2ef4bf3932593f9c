"""Implementation of the 'hook' command.

Installs a ``commit-msg`` git hook that rejects commit messages which do not
follow the conventional commit format, so the changelog stays structured.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.prompt import Confirm

from bump_py.cli.context import resolve_root
from bump_py.exceptions import BumpPyError, NotAGitRepositoryError

if TYPE_CHECKING:
    from rich.console import Console

HOOK_NAME = "commit-msg"

HOOK_SCRIPT = r"""#!/bin/sh
#
# Installed by bump-py: verifies that the commit message follows the
# conventional commit format, <type>[(scope)][!]: <description>.
#
# See https://www.conventionalcommits.org/en/v1.0.0/#summary

COMMIT_MSG_FILE=$1
SUBJECT=$(head -n 1 "$COMMIT_MSG_FILE")

case "$SUBJECT" in
  "Merge "* | "Revert "* | "fixup! "* | "squash! "*) exit 0 ;;
esac

if ! printf '%s\n' "$SUBJECT" | grep -Eq '^[[:alnum:]_]+(\(.*\))? ?!? ?: ?.*$'; then
  echo "
The commit message is invalid, it must follow the conventional commit format:

  <type>[(scope)][!]: <description>

See https://www.conventionalcommits.org/en/v1.0.0/#summary"
  exit 1
fi
"""


def run_hook(
    path: str | None,
    *,
    force: bool,
    console: Console,
    err_console: Console,
) -> None:
    """Install the commit-msg hook into the repository."""
    try:
        _root, repo = resolve_root(path)
        if not repo.is_repo():
            raise NotAGitRepositoryError()
        hooks_dir = repo.hooks_path()
    except BumpPyError as e:
        err_console.print(f"[red]Error:[/] {e}")
        raise SystemExit(1) from e

    hook_path = hooks_dir / HOOK_NAME

    if hook_path.exists():
        if hook_path.read_text(encoding="utf-8") == HOOK_SCRIPT:
            console.print("[blue]info[/] the hook has already been installed.")
            return
        if not force and not Confirm.ask(
            f"there already exists a hook at {hook_path}, would you like to overwrite it?",
            console=console,
            default=False,
        ):
            console.print("[blue]info[/] command cancelled.")
            return

    hooks_dir.mkdir(parents=True, exist_ok=True)
    hook_path.write_text(HOOK_SCRIPT, encoding="utf-8")
    hook_path.chmod(0o755)
    console.print(f"[green]ok[/] hook installed at {hook_path}")
