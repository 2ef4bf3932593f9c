"""Configuration discovery and loading.

Configuration is read from, in order of precedence:

1. An explicitly given file (``--config``)
2. ``.bumprc.json`` in the project directory or one of its parents
3. The ``[tool.bump-py]`` table of ``pyproject.toml``
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from bump_py.config.models import BumpPyConfig
from bump_py.exceptions import ConfigNotFoundError, ConfigValidationError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".bumprc.json"
PYPROJECT_TABLE = "bump-py"


def find_config_file(start: Path | None = None) -> Path:
    """Find ``.bumprc.json`` by walking up from ``start``.

    Raises:
        ConfigNotFoundError: If no configuration file is found
    """
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    raise ConfigNotFoundError(f"Could not find {CONFIG_FILENAME} in {current} or any parent directory")


def find_pyproject_toml(start: Path | None = None) -> Path:
    """Find ``pyproject.toml`` by walking up from ``start``.

    Raises:
        ConfigNotFoundError: If no pyproject.toml is found
    """
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    raise ConfigNotFoundError(f"Could not find pyproject.toml in {current} or any parent directory")


def read_config_file(path: Path) -> dict[str, Any]:
    """Read the raw configuration mapping from a JSON or pyproject.toml file.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigValidationError: If the file cannot be read or parsed
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"Configuration file not found: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ConfigValidationError(f"{path} is not valid UTF-8: {e}") from e
    except OSError as e:
        raise ConfigValidationError(f"Could not read {path}: {e}") from e

    if path.name == "pyproject.toml":
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as e:
            raise ConfigValidationError(f"Invalid TOML in {path}: {e}") from e
        section = data.get("tool", {}).get(PYPROJECT_TABLE)
        if section is None:
            raise ConfigNotFoundError(f"No [tool.{PYPROJECT_TABLE}] table in {path}")
        return section

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigValidationError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigValidationError(f"The configuration in {path} must be a JSON object")
    return data


def format_validation_error(error: ValidationError) -> str:
    """Flatten a pydantic error into ``location: message`` lines."""
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "<root>"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)


def parse_config(data: dict[str, Any], source: Path | None = None) -> BumpPyConfig:
    """Validate a raw configuration mapping.

    Raises:
        ConfigValidationError: If the mapping does not match the schema
    """
    try:
        return BumpPyConfig.model_validate(data)
    except ValidationError as e:
        where = f" ({source})" if source else ""
        raise ConfigValidationError(f"the configuration file is invalid{where}: {format_validation_error(e)}") from e


def load_config(path: Path | None = None, config_file: Path | None = None) -> BumpPyConfig:
    """Load and validate the configuration for the project at ``path``.

    Args:
        path: Project directory to search from (defaults to cwd)
        config_file: Explicit configuration file, bypassing discovery

    Returns:
        Validated configuration

    Raises:
        ConfigNotFoundError: If no configuration exists
        ConfigValidationError: If the configuration is invalid
    """
    if config_file is not None:
        source = config_file
    else:
        try:
            source = find_config_file(path)
        except ConfigNotFoundError:
            try:
                source = find_pyproject_toml(path)
            except ConfigNotFoundError:
                raise ConfigNotFoundError(
                    f"No configuration found. Create {CONFIG_FILENAME} (see `bump-py init`) "
                    f"or add a [tool.{PYPROJECT_TABLE}] table to pyproject.toml."
                ) from None

    logger.debug("Loading configuration from %s", source)
    return parse_config(read_config_file(source), source)


def default_config() -> dict[str, Any]:
    """The starter configuration written by ``bump-py init``."""
    return {
        "tasks": {
            "pre": [
                {"name": "test", "command": "pytest", "timeout": 120000},
            ],
            "post": [],
        },
        "provider": {"type": "text", "path": "VERSION"},
        "types": [
            {"type": "feat", "name": "Features"},
            {"type": "fix", "name": "Bug Fixes"},
            {"type": "chore", "hidden": True},
        ],
        "unreleasedHeader": "Unreleased",
        "includeBody": False,
        "includeNonConventionalCommits": True,
        "tag": "v{{after}}",
        "releaseSubject": "chore(release): {{tag}}",
        "changelogSubject": "docs(changelog): update changelog for {{tag}}",
        "prompt": False,
    }
