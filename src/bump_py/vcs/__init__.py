"""Version control integration."""

from __future__ import annotations

from bump_py.vcs.git import GitRepository
from bump_py.vcs.remote import normalize_remote_url

__all__ = ["GitRepository", "normalize_remote_url"]
