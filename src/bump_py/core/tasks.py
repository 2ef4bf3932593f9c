"""Execution of pre-bump and post-bump hook tasks.

Tasks of a phase run strictly one after another in declared order, since a
task may rely on what an earlier one left behind (format before build, build
before publish). The first failure ends the phase; later tasks never run.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape

from bump_py.exceptions import ScriptError, TaskError
from bump_py.process import run_command

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from bump_py.config.models import TaskConfig
    from bump_py.process import CommandRunner

logger = logging.getLogger(__name__)


class TaskRunner:
    """Runs the tasks of a phase in the project root.

    Args:
        root: Working directory for every task
        console: Console for progress output
        verbose: Print each successful task's output
        runner: Command runner, ``run_command`` by default
    """

    def __init__(
        self,
        root: Path,
        console: Console | None = None,
        *,
        verbose: bool = False,
        runner: CommandRunner = run_command,
    ) -> None:
        self.root = root
        self.console = console or Console()
        self.verbose = verbose
        self.runner = runner

    def run_task(self, phase: str, task: TaskConfig) -> str:
        """Run a single task and return its output.

        Raises:
            TaskError: If the task fails or times out
        """
        logger.debug("[%s] running task %r: %s", phase, task.name, task.command)
        label = f"[blue]{phase}[/] executing task: {escape(task.name)}"

        try:
            if task.no_spinner:
                self.console.print(label)
                output = self.runner(task.command, self.root, task.timeout)
            else:
                with self.console.status(label):
                    output = self.runner(task.command, self.root, task.timeout)
        except ScriptError as e:
            self.console.print(f"  [red]✗[/] {escape(task.name)}")
            raise TaskError(phase, task.name, e.output) from e

        self.console.print(f"  [green]✓[/] {escape(task.name)}")
        if self.verbose and output:
            self.console.print(f"    [dim]{escape(output)}[/]", highlight=False)
        return output

    def run_phase(self, phase: str, tasks: Sequence[TaskConfig]) -> list[str]:
        """Run every task of ``phase`` in order, stopping at the first failure.

        Returns:
            The output of each task

        Raises:
            TaskError: For the first failing task
        """
        return [self.run_task(phase, task) for task in tasks]
