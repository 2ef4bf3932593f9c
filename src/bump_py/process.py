"""Shell command execution for hook tasks."""

from __future__ import annotations

import logging
import subprocess
from typing import TYPE_CHECKING, Protocol

from bump_py.exceptions import ScriptError

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


class CommandRunner(Protocol):
    def __call__(self, command: str, cwd: Path, timeout_ms: int) -> str: ...


def _decode(output: str | bytes | None) -> str:
    if output is None:
        return ""
    # TimeoutExpired carries raw bytes even when text mode was requested
    if isinstance(output, bytes):
        return output.decode("utf-8", errors="replace")
    return output


def run_command(command: str, cwd: Path, timeout_ms: int) -> str:
    """Run ``command`` through the shell in ``cwd``.

    Args:
        command: Shell command line
        cwd: Working directory
        timeout_ms: Milliseconds before the process is killed

    Returns:
        The command's stripped stdout

    Raises:
        ScriptError: If the command exits non-zero, cannot be launched, or
            exceeds the timeout
    """
    logger.debug("Running %r in %s (timeout %sms)", command, cwd, timeout_ms)
    try:
        result = subprocess.run(
            command,
            shell=True,
            cwd=cwd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=True,
            timeout=timeout_ms / 1000,
        )
    except subprocess.TimeoutExpired as e:
        raise ScriptError(
            f"`{command}` timed out after {timeout_ms}ms",
            stdout=_decode(e.stdout),
            stderr=_decode(e.stderr),
            timed_out=True,
        ) from e
    except subprocess.CalledProcessError as e:
        raise ScriptError(
            f"`{command}` failed with exit code {e.returncode}",
            stdout=_decode(e.stdout),
            stderr=_decode(e.stderr),
            returncode=e.returncode,
        ) from e
    except OSError as e:
        raise ScriptError(f"`{command}` could not be started: {e}") from e

    return result.stdout.strip()
