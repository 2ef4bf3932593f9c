"""Git repository operations.

This module wraps the handful of git commands bump-py needs. Every call goes
through :meth:`GitRepository._run`, so tests can mock ``subprocess.run``.
A :class:`GitRepository` is passed explicitly to whatever needs git; there is
no module-level client.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from bump_py.core.commits import Commit
from bump_py.exceptions import GitError, NotAGitRepositoryError, RemoteUrlError
from bump_py.vcs.remote import normalize_remote_url

logger = logging.getLogger(__name__)

# Unit and record separators keep subjects and bodies containing "|" or
# newlines intact
_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"
HISTORY_FORMAT = _FIELD_SEP.join(["%H", "%h", "%ad", "%D", "%s", "%b"]) + _RECORD_SEP


class GitRepository:
    """A git working tree."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"GitRepository({str(self.path)!r})"

    @classmethod
    def discover(cls, start: Path | None = None) -> GitRepository:
        """Return the repository containing ``start``, rooted at its top level.

        Raises:
            NotAGitRepositoryError: If ``start`` is not inside a git repository
        """
        probe = cls(start or Path.cwd())
        if not probe.is_repo():
            raise NotAGitRepositoryError()
        return cls(probe.root_path())

    def _run(self, args: list[str], check: bool = True) -> subprocess.CompletedProcess[str]:
        """Run a git command in the repository directory.

        Raises:
            GitError: If git is not installed, or the command exits non-zero
                while ``check`` is True
        """
        full_cmd = ["git", *args]
        logger.debug("Executing git command: %s", " ".join(full_cmd))
        try:
            result = subprocess.run(
                full_cmd,
                cwd=self.path,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except FileNotFoundError as e:
            raise GitError("git is not installed.") from e

        if check and result.returncode != 0:
            logger.debug("git %s failed: %s", args[0], result.stderr.strip())
            raise GitError(
                f"git {args[0]} failed: {result.stderr.strip() or result.stdout.strip()}",
                stderr=result.stderr,
            )
        return result

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_repo(self) -> bool:
        """Return True if the path is inside a git working tree."""
        result = self._run(["rev-parse", "--is-inside-work-tree"], check=False)
        return result.returncode == 0 and result.stdout.strip() == "true"

    def root_path(self) -> Path:
        """Return the top-level directory of the working tree."""
        return Path(self._run(["rev-parse", "--show-toplevel"]).stdout.strip())

    def hooks_path(self) -> Path:
        """Return the directory git reads hook scripts from."""
        hooks = Path(self._run(["rev-parse", "--git-path", "hooks"]).stdout.strip())
        return hooks if hooks.is_absolute() else self.path / hooks

    def remote_url(self, remote: str = "origin") -> str:
        """Return the HTTPS URL of ``remote``.

        Raises:
            RemoteUrlError: If the remote does not exist or its URL cannot
                be converted to HTTPS
        """
        result = self._run(["remote", "get-url", remote], check=False)
        if result.returncode != 0:
            raise RemoteUrlError(f"the repository has no `{remote}` remote.")
        return normalize_remote_url(result.stdout)

    def has_commits(self) -> bool:
        return self._run(["rev-parse", "--verify", "--quiet", "HEAD"], check=False).returncode == 0

    def history(self) -> list[Commit]:
        """Return every commit reachable from HEAD, newest first."""
        if not self.has_commits():
            return []

        output = self._run(["log", "--date=short", f"--pretty=format:{HISTORY_FORMAT}"]).stdout
        commits = []
        for record in output.split(_RECORD_SEP):
            record = record.strip("\n")
            if not record:
                continue
            full_hash, short_hash, date, refs, subject, body = record.split(_FIELD_SEP, 5)
            commits.append(
                Commit(
                    hash=full_hash,
                    short_hash=short_hash,
                    date=date,
                    refs=refs,
                    subject=subject,
                    body=body.strip(),
                )
            )
        return commits

    def status(self) -> list[str]:
        """Return ``git status --porcelain`` lines; empty when clean."""
        output = self._run(["status", "--porcelain"]).stdout
        return [line for line in output.splitlines() if line.strip()]

    def is_clean(self) -> bool:
        return not self.status()

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(self, path: Path | str) -> None:
        self._run(["add", "--", str(path)])

    def commit(self, message: str) -> None:
        self._run(["commit", "-m", message])

    def annotate_tag(self, name: str, message: str) -> None:
        """Create an annotated tag ``name`` on HEAD."""
        self._run(["tag", "-a", name, "-m", message])
