"""Implementation of the 'init' command.

Writes a starter ``.bumprc.json`` for the project.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

from rich.prompt import Confirm

from bump_py.cli.context import resolve_root
from bump_py.config.loader import CONFIG_FILENAME, default_config
from bump_py.exceptions import BumpPyError

if TYPE_CHECKING:
    from rich.console import Console


def run_init(
    path: str | None,
    config_file: str | None,
    *,
    force: bool,
    console: Console,
    err_console: Console,
) -> None:
    """Create the configuration file, asking before overwriting one."""
    try:
        root, _repo = resolve_root(path)
    except BumpPyError as e:
        err_console.print(f"[red]Error:[/] {e}")
        raise SystemExit(1) from e

    target = Path(config_file).resolve() if config_file else root / CONFIG_FILENAME

    if target.exists() and not force:
        overwrite = Confirm.ask(
            f"there is already a configuration file at {target}, would you like to overwrite it?",
            console=console,
            default=False,
        )
        if not overwrite:
            console.print("[blue]info[/] command cancelled.")
            return

    try:
        target.write_text(json.dumps(default_config(), indent=2) + "\n", encoding="utf-8")
    except OSError as e:
        err_console.print(f"[red]Error writing {target}:[/] {e}")
        raise SystemExit(1) from e

    console.print(f"[blue]info[/] saved configuration file to {target}")
