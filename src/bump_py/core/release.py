"""Release orchestration.

A release runs through these stages, each one a precondition for the next::

    PREFLIGHT -> PRE_HOOKS -> VERSION_BUMP -> COMMIT_AND_TAG -> [CHANGELOG] -> POST_HOOKS -> DONE

``PREFLIGHT`` only validates (repository, clean tree, current version,
changelog output path) and never changes anything. Every later stage has side
effects, and none of them is rolled back when a later stage fails: the
pipeline moves forward only and ends in ``FAILED``, leaving the operator to
inspect and reset the working tree by hand.

The changelog is committed separately, after the release commit has been
tagged. The entry describing a release therefore only shows up in the history
of the next tag.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console

from bump_py.core.changelog import DEFAULT_CHANGELOG_FILENAME, save_changelog, validate_output_path
from bump_py.core.version import BumpType, Version, bump
from bump_py.exceptions import (
    BumpPyError,
    ChangelogError,
    DirtyRepositoryError,
    NotAGitRepositoryError,
    ReleaseError,
)

if TYPE_CHECKING:
    from bump_py.config.models import BumpPyConfig
    from bump_py.core.tasks import TaskRunner
    from bump_py.project.providers import VersionProvider
    from bump_py.vcs.git import GitRepository

logger = logging.getLogger(__name__)


class ReleaseStage(StrEnum):
    PREFLIGHT = "preflight"
    PRE_HOOKS = "pre-bump hooks"
    VERSION_BUMP = "version bump"
    COMMIT_AND_TAG = "commit and tag"
    CHANGELOG = "changelog"
    POST_HOOKS = "post-bump hooks"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class Substitutions:
    """Templated strings for one release."""

    tag: str
    commit_subject: str
    changelog_subject: str


def substitute(template: str, values: dict[str, str]) -> str:
    """Replace every ``{{name}}`` placeholder in ``template``.

    >>> substitute("v{{after}}", {"after": "1.2.0"})
    'v1.2.0'
    """
    for name, value in values.items():
        template = template.replace(f"{{{{{name}}}}}", value)
    return template


def build_substitutions(config: BumpPyConfig, before: Version, after: Version) -> Substitutions:
    """Fill the tag, release-subject and changelog-subject templates.

    The tag template sees ``{{before}}`` and ``{{after}}``; both subjects can
    also reference the resulting ``{{tag}}``.
    """
    values = {"before": str(before), "after": str(after)}
    tag = substitute(config.tag, values)
    values["tag"] = tag
    return Substitutions(
        tag=tag,
        commit_subject=substitute(config.release_subject, values),
        changelog_subject=substitute(config.changelog_subject, values),
    )


def _with_body(subject: str, body: str | None) -> str:
    return f"{subject}\n\n{body}" if body else subject


@dataclass(frozen=True)
class ReleaseResult:
    before: Version
    after: Version
    substitutions: Substitutions
    changelog_path: Path | None = None


class ReleasePipeline:
    """Runs a release for one project.

    Args:
        config: Validated configuration
        root: Project root; relative paths are resolved against it
        repo: Git repository of the project
        provider: Version medium
        task_runner: Runner for the pre/post-bump tasks
        console: Console for progress output
    """

    def __init__(
        self,
        config: BumpPyConfig,
        root: Path,
        repo: GitRepository,
        provider: VersionProvider,
        task_runner: TaskRunner,
        console: Console | None = None,
    ) -> None:
        self.config = config
        self.root = root
        self.repo = repo
        self.provider = provider
        self.task_runner = task_runner
        self.console = console or Console()
        self.stage = ReleaseStage.PREFLIGHT
        self.completed: list[ReleaseStage] = []

    def _enter(self, stage: ReleaseStage) -> None:
        logger.debug("Entering stage: %s", stage)
        self.stage = stage

    def _finish(self) -> None:
        self.completed.append(self.stage)

    def changelog_path(self, output: Path | str | None = None) -> Path:
        path = Path(output) if output else Path(DEFAULT_CHANGELOG_FILENAME)
        return path if path.is_absolute() else self.root / path

    def run(
        self,
        bump_type: BumpType | str,
        *,
        changelog: bool = False,
        output: Path | str | None = None,
        body: str | None = None,
        require_clean: bool = False,
    ) -> ReleaseResult:
        """Run the release.

        Args:
            bump_type: Which version component to bump
            changelog: Also regenerate and commit the changelog
            output: Changelog path, ``CHANGELOG.md`` in the root by default
            body: Extra text appended to the release commit and tag messages
            require_clean: Refuse to run on a dirty working tree

        Returns:
            The versions and substituted strings of the release

        Raises:
            ReleaseError: If any stage fails; ``error.stage`` names it and the
                original error is chained as ``__cause__``
        """
        bump_type = BumpType(bump_type)
        changelog_output = self.changelog_path(output) if changelog else None

        try:
            self._preflight(require_clean=require_clean, changelog_output=changelog_output)

            if self.config.tasks.pre:
                self._enter(ReleaseStage.PRE_HOOKS)
                self.task_runner.run_phase("pre", self.config.tasks.pre)
                self._finish()

            self._enter(ReleaseStage.VERSION_BUMP)
            before, after = self._bump_version(bump_type)
            substitutions = build_substitutions(self.config, before, after)
            self._finish()

            self._enter(ReleaseStage.COMMIT_AND_TAG)
            self._commit_and_tag(substitutions, body)
            self._finish()

            if changelog_output is not None:
                self._enter(ReleaseStage.CHANGELOG)
                self._commit_changelog(changelog_output, substitutions)
                self._finish()

            if self.config.tasks.post:
                self._enter(ReleaseStage.POST_HOOKS)
                self.task_runner.run_phase("post", self.config.tasks.post)
                self._finish()
        except BumpPyError as e:
            failed = self.stage
            self.stage = ReleaseStage.FAILED
            logger.debug("Release failed during %s: %s", failed, e)
            raise ReleaseError(failed.value, f"release aborted during {failed}: {e}") from e
        except BaseException:
            # Interrupts and unexpected errors propagate untouched
            logger.debug("Release interrupted during %s", self.stage)
            self.stage = ReleaseStage.FAILED
            raise

        self.stage = ReleaseStage.DONE
        return ReleaseResult(before=before, after=after, substitutions=substitutions, changelog_path=changelog_output)

    def _preflight(self, *, require_clean: bool, changelog_output: Path | None) -> None:
        self._enter(ReleaseStage.PREFLIGHT)
        if not self.repo.is_repo():
            raise NotAGitRepositoryError()
        if require_clean and not self.repo.is_clean():
            raise DirtyRepositoryError()
        self.provider.read()
        if changelog_output is not None:
            validate_output_path(changelog_output)
            self.repo.remote_url()
        self._finish()

    def _bump_version(self, bump_type: BumpType) -> tuple[Version, Version]:
        before = self.provider.read()
        after = bump(before, bump_type)
        self.provider.write(after)
        self.console.print(f"[blue]bump[/] bumped version from [bold]{before}[/] to [bold]{after}[/]")
        return before, after

    def _commit_and_tag(self, substitutions: Substitutions, body: str | None) -> None:
        with self.console.status("[blue]bump[/] committing changes"):
            self.repo.add(self.provider.file_path)
            self.repo.commit(_with_body(substitutions.commit_subject, body))
            self.repo.annotate_tag(substitutions.tag, _with_body(substitutions.tag, body))
        self.console.print(f"  [green]✓[/] committed and tagged {substitutions.tag}")

    def _commit_changelog(self, output: Path, substitutions: Substitutions) -> None:
        with self.console.status("[blue]bump[/] generating changelog"):
            try:
                save_changelog(self.repo, self.config, output)
            except OSError as e:
                raise ChangelogError(f"could not write the changelog to `{output}`: {e}") from e
            self.repo.add(output)
            self.repo.commit(substitutions.changelog_subject)
        self.console.print(f"  [green]✓[/] generated {output}")
