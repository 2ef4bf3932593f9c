"""Implementation of the 'release' command.

The release command bumps the version, commits and tags it, optionally
regenerates the changelog, and runs the configured pre-bump and post-bump
tasks around it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm

from bump_py.cli.context import load_project
from bump_py.core.release import ReleasePipeline
from bump_py.core.tasks import TaskRunner
from bump_py.core.version import BumpType
from bump_py.exceptions import BumpPyError, ReleaseError, TaskError
from bump_py.project import create_provider

if TYPE_CHECKING:
    from rich.console import Console


def run_release(
    bump_type: BumpType,
    path: str | None,
    config_file: str | None,
    *,
    clean: bool,
    body: str | None,
    verbose: bool,
    changelog: bool,
    output: str | None,
    force: bool,
    console: Console,
    err_console: Console,
) -> None:
    """Run the release command.

    Args:
        bump_type: Version component to bump
        path: Optional path to project directory
        config_file: Optional explicit configuration file
        clean: Require a clean working tree
        body: Extra text for the release commit and tag messages
        verbose: Print task output
        changelog: Also regenerate and commit the changelog
        output: Changelog output path (requires ``changelog``)
        force: Skip the confirmation prompt
        console: Console for standard output
        err_console: Console for error output
    """
    if output and not changelog:
        err_console.print("[red]Error:[/] [cyan]--output[/] can only be used together with [cyan]--changelog[/].")
        raise SystemExit(1)

    root, repo, config = load_project(path, config_file, err_console)

    try:
        provider = create_provider(config.provider, root)
    except BumpPyError as e:
        err_console.print(f"[red]Error:[/] {e}")
        raise SystemExit(1) from e

    if config.prompt and not force:
        try:
            current = provider.read()
        except BumpPyError as e:
            err_console.print(f"[red]Error getting version:[/] {e}")
            raise SystemExit(1) from e

        confirmed = Confirm.ask(
            f"are you sure you want to bump the project from [bold]{current}[/] to [bold]{current.bump(bump_type)}[/]?",
            console=console,
        )
        if not confirmed:
            console.print("[blue]info[/] command cancelled.")
            return

    pipeline = ReleasePipeline(
        config=config,
        root=root,
        repo=repo,
        provider=provider,
        task_runner=TaskRunner(root, console, verbose=verbose),
        console=console,
    )

    try:
        result = pipeline.run(
            bump_type,
            changelog=changelog,
            output=output,
            body=body,
            require_clean=clean,
        )
    except ReleaseError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        cause = e.__cause__
        if isinstance(cause, TaskError) and cause.output:
            err_console.print(f"\n{escape(cause.output)}\n", highlight=False)
        raise SystemExit(1) from e

    console.print(
        Panel(
            f"[green]Released version {result.after}![/]\n\n"
            "Next steps:\n"
            "  1. Review the release commit and tag\n"
            "  2. Push: [cyan]git push --follow-tags[/]",
            title=f"[green]{result.substitutions.tag}[/]",
            border_style="green",
        )
    )
