"""Implementation of the 'phase' command.

Runs the pre-bump or post-bump tasks on their own, without touching the
version, so a configuration can be tried out before a real release.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from rich.markup import escape

from bump_py.cli.context import load_project
from bump_py.core.tasks import TaskRunner
from bump_py.exceptions import NoTasksError, TaskError

if TYPE_CHECKING:
    from rich.console import Console


def run_phase(
    phase: Literal["pre", "post"],
    path: str | None,
    config_file: str | None,
    *,
    verbose: bool,
    console: Console,
    err_console: Console,
) -> None:
    """Run every task of one phase."""
    root, _repo, config = load_project(path, config_file, err_console)

    tasks = config.tasks.pre if phase == "pre" else config.tasks.post
    if not tasks:
        err_console.print(f"[red]Error:[/] {NoTasksError(phase)}")
        raise SystemExit(1)

    runner = TaskRunner(root, console, verbose=verbose)
    try:
        runner.run_phase(phase, tasks)
    except TaskError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        if e.output:
            err_console.print(f"\n{escape(e.output)}\n", highlight=False)
        raise SystemExit(1) from e

    console.print(f"[green]✓[/] {phase}-bump phase finished ({len(tasks)} task(s))")
