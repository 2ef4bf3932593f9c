"""Project version media (JSON key or text file)."""

from __future__ import annotations

from bump_py.project.providers import (
    JsonVersionProvider,
    TextVersionProvider,
    VersionProvider,
    create_provider,
)

__all__ = [
    "JsonVersionProvider",
    "TextVersionProvider",
    "VersionProvider",
    "create_provider",
]
