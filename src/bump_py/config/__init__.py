"""Configuration management for bump-py."""

from __future__ import annotations

from bump_py.config.loader import load_config
from bump_py.config.models import (
    BumpPyConfig,
    CommitTypeConfig,
    JsonProviderConfig,
    ProviderConfig,
    TaskConfig,
    TasksConfig,
    TextProviderConfig,
)

__all__ = [
    "BumpPyConfig",
    "CommitTypeConfig",
    "JsonProviderConfig",
    "ProviderConfig",
    "TaskConfig",
    "TasksConfig",
    "TextProviderConfig",
    "load_config",
]
