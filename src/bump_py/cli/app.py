"""Command-line interface for bump-py."""

import logging
from enum import StrEnum
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from bump_py import __version__
from bump_py.cli.commands.changelog import run_changelog
from bump_py.cli.commands.hook import run_hook
from bump_py.cli.commands.init import run_init
from bump_py.cli.commands.phase import run_phase
from bump_py.cli.commands.release import run_release
from bump_py.core.version import BumpType

app = typer.Typer(
    name="bump-py",
    help="Release projects: bump the version, run hook tasks and generate changelogs.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()
err_console = Console(stderr=True)


class Phase(StrEnum):
    PRE = "pre"
    POST = "post"


PathOption = Annotated[
    str | None,
    typer.Option("--path", "-p", help="Project directory (defaults to the current directory)."),
]
ConfigOption = Annotated[
    str | None,
    typer.Option("--config", "-c", help="An alternative configuration file to use."),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Print the output of tasks after execution."),
]


def configure_logging(debug: bool) -> None:
    """Route bump-py's loggers to stderr through rich when debugging."""
    logger = logging.getLogger("bump_py")
    if not debug:
        logger.setLevel(logging.WARNING)
        return
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        logger.addHandler(RichHandler(console=err_console, show_path=False, markup=False))
    logger.setLevel(logging.DEBUG)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"bump-py {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    debug: Annotated[bool, typer.Option("--debug", help="Log every git command and stage transition.")] = False,
    version: Annotated[
        bool,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show the version and exit."),
    ] = False,
) -> None:
    """bump-py: repeatable, scriptable releases."""
    configure_logging(debug)


@app.command()
def release(
    bump_type: Annotated[BumpType, typer.Argument(help="The type of release to perform.", case_sensitive=False)],
    clean: Annotated[bool, typer.Option("--clean", help="Ensure the repository is clean before bumping.")] = False,
    body: Annotated[str | None, typer.Option("--body", "-b", help="The body to use for the release's commit.")] = None,
    verbose: VerboseOption = False,
    changelog: Annotated[bool, typer.Option("--changelog", help="Also generate the changelog for the release.")] = False,
    output: Annotated[
        str | None,
        typer.Option("--output", "-o", help="Changelog output file (requires --changelog)."),
    ] = None,
    force: Annotated[bool, typer.Option("--force", "-f", help="Do not prompt for confirmation.")] = False,
    path: PathOption = None,
    config: ConfigOption = None,
) -> None:
    """Release a new version of your project.

    Runs the pre-bump tasks, bumps the version, commits and tags it,
    optionally regenerates the changelog, then runs the post-bump tasks.
    The process halts at the first error. Push the result with
    [cyan]git push --follow-tags[/].
    """
    run_release(
        bump_type,
        path,
        config,
        clean=clean,
        body=body,
        verbose=verbose,
        changelog=changelog,
        output=output,
        force=force,
        console=console,
        err_console=err_console,
    )


@app.command()
def phase(
    phase: Annotated[Phase, typer.Argument(help="The phase to run.")],
    verbose: VerboseOption = False,
    path: PathOption = None,
    config: ConfigOption = None,
) -> None:
    """Run the pre-bump or post-bump tasks without bumping the version."""
    run_phase(
        phase.value,
        path,
        config,
        verbose=verbose,
        console=console,
        err_console=err_console,
    )


@app.command("changelog")
def changelog_command(
    output: Annotated[str | None, typer.Option("--output", "-o", help="The desired output file.")] = None,
    path: PathOption = None,
    config: ConfigOption = None,
) -> None:
    """Generate a changelog from the commits in the repository."""
    run_changelog(path, config, output, console, err_console)


@app.command()
def init(
    force: Annotated[bool, typer.Option("--force", "-f", help="Overwrite an existing file without asking.")] = False,
    path: PathOption = None,
    config: ConfigOption = None,
) -> None:
    """Create a configuration file for the project."""
    run_init(path, config, force=force, console=console, err_console=err_console)


@app.command()
def hook(
    force: Annotated[bool, typer.Option("--force", "-f", help="Overwrite an existing hook without asking.")] = False,
    path: PathOption = None,
) -> None:
    """Install a git hook that enforces conventional commit messages."""
    run_hook(path, force=force, console=console, err_console=err_console)
