"""Exception hierarchy for bump-py.

Every error raised by bump-py derives from :class:`BumpPyError`, so the CLI
can report any failure with a single human-readable message.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class BumpPyError(Exception):
    """Base exception for all bump-py errors."""


# =============================================================================
# Configuration
# =============================================================================


class ConfigError(BumpPyError):
    """Base exception for configuration problems."""


class ConfigNotFoundError(ConfigError):
    """No configuration file could be located."""


class ConfigValidationError(ConfigError):
    """The configuration file exists but is malformed or invalid."""


# =============================================================================
# Version medium
# =============================================================================


class ProviderError(BumpPyError):
    """Base exception for version-medium (provider) problems."""


class VersionFileNotFoundError(ProviderError):
    """The file holding the project's version does not exist."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"the version file at `{path}` does not exist.")
        self.path = path


class InvalidVersionFileError(ProviderError):
    """The version file exists but cannot be used (wrong kind or unparseable)."""

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message)
        self.path = path


class InvalidVersionError(ProviderError):
    """A version string does not follow the ``major.minor.patch`` grammar."""


# =============================================================================
# Git
# =============================================================================


class GitError(BumpPyError):
    """A git command failed."""

    def __init__(self, message: str, stderr: str | None = None) -> None:
        super().__init__(message)
        self.stderr = stderr


class NotAGitRepositoryError(GitError):
    """The command was run outside of a git repository."""

    def __init__(self, message: str = "this command must be run from inside a git repository.") -> None:
        super().__init__(message)


class DirtyRepositoryError(GitError):
    """The working tree has uncommitted changes but a clean one was required."""

    def __init__(self, message: str = "the git repository is dirty.") -> None:
        super().__init__(message)


class RemoteUrlError(GitError):
    """The repository's remote URL could not be resolved to an HTTPS URL."""


# =============================================================================
# Hook scripts
# =============================================================================


class ScriptError(BumpPyError):
    """A shell command exited non-zero, failed to launch, or timed out."""

    def __init__(
        self,
        message: str,
        *,
        stdout: str = "",
        stderr: str = "",
        returncode: int | None = None,
        timed_out: bool = False,
    ) -> None:
        super().__init__(message)
        self.stdout = stdout
        self.stderr = stderr
        self.returncode = returncode
        self.timed_out = timed_out

    @property
    def output(self) -> str:
        """Captured stdout and stderr, or the message when nothing was captured."""
        if self.stdout.strip() or self.stderr.strip():
            return f"{self.stdout.strip()}\n\n{self.stderr.strip()}".strip()
        return str(self)


class TaskError(BumpPyError):
    """A task within a phase failed; the rest of the phase was not attempted."""

    def __init__(self, phase: str, task_name: str, output: str) -> None:
        super().__init__(f"task `{task_name}` failed during the {phase}-bump phase")
        self.phase = phase
        self.task_name = task_name
        self.output = output


class NoTasksError(BumpPyError):
    """A phase was requested explicitly but declares no tasks."""

    def __init__(self, phase: str) -> None:
        super().__init__(f"no tasks were specified for the {phase}-bump phase.")
        self.phase = phase


# =============================================================================
# Changelog
# =============================================================================


class ChangelogError(BumpPyError):
    """Changelog generation or saving failed."""


class InvalidOutputPathError(ChangelogError):
    """The changelog output path points at a directory."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"the output file cannot be saved to a directory: `{path}`.")
        self.path = path


class MissingDirectoryError(ChangelogError):
    """The parent directory of the changelog output path does not exist."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"the directory at `{path}` does not exist.")
        self.path = path


# =============================================================================
# Release pipeline
# =============================================================================


class ReleaseError(BumpPyError):
    """The release pipeline aborted.

    Side effects of stages completed before ``stage`` are kept.
    """

    def __init__(self, stage: str, message: str) -> None:
        super().__init__(message)
        self.stage = stage
