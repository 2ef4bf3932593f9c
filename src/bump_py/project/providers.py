"""Version medium providers.

A provider reads and writes the project's version from whatever file holds
it. Two media are supported:

- ``json``: a key of a JSON object, e.g. ``"version"`` in ``package.json``
- ``text``: a text file containing nothing but the version, e.g. ``VERSION``

Both share the :class:`VersionProvider` protocol and are selected by the
``provider.type`` field of the configuration.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from bump_py.config.models import JsonProviderConfig, TextProviderConfig
from bump_py.core.version import Version
from bump_py.exceptions import (
    InvalidVersionError,
    InvalidVersionFileError,
    ProviderError,
    VersionFileNotFoundError,
)

if TYPE_CHECKING:
    from pathlib import Path

    from bump_py.config.models import ProviderConfig

logger = logging.getLogger(__name__)


class VersionProvider(Protocol):
    """Reads and writes the project's version."""

    @property
    def file_path(self) -> Path: ...

    def read(self) -> Version: ...

    def write(self, version: Version) -> None: ...


def _resolve(root: Path, path: Path) -> Path:
    return path if path.is_absolute() else (root / path).resolve()


def _check_file(path: Path) -> None:
    if not path.exists():
        raise VersionFileNotFoundError(path)
    if not path.is_file():
        raise InvalidVersionFileError(f"the path `{path}` is not a file.", path)


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise InvalidVersionFileError(f"the file at `{path}` is not valid UTF-8.", path) from e
    except OSError as e:
        raise InvalidVersionFileError(f"the file at `{path}` could not be read: {e}", path) from e


@dataclass(frozen=True)
class JsonVersionProvider:
    """Version stored under a top-level key of a JSON object."""

    path: Path
    key: str = "version"

    @property
    def file_path(self) -> Path:
        return self.path

    def _load(self) -> dict[str, Any]:
        _check_file(self.path)
        if self.path.suffix != ".json":
            raise InvalidVersionFileError(f"the path `{self.path}` is not a JSON file.", self.path)
        try:
            data = json.loads(_read_text(self.path))
        except json.JSONDecodeError as e:
            raise InvalidVersionFileError(f"the JSON file at `{self.path}` is invalid.", self.path) from e
        if not isinstance(data, dict):
            raise InvalidVersionFileError(f"the JSON file at `{self.path}` is not an object.", self.path)
        return data

    def read(self) -> Version:
        """Read the version from the JSON file.

        Raises:
            VersionFileNotFoundError: If the file does not exist
            InvalidVersionFileError: If the file is not valid JSON
            InvalidVersionError: If the key is missing or not a valid version
        """
        data = self._load()
        value = data.get(self.key)
        if not isinstance(value, str):
            raise InvalidVersionError(
                f"the key `{self.key}` within `{self.path}` does not contain a valid semantic version: {value}"
            )
        try:
            return Version.parse(value)
        except InvalidVersionError as e:
            raise InvalidVersionError(
                f"the key `{self.key}` within `{self.path}` does not contain a valid semantic version: {value}"
            ) from e

    def write(self, version: Version) -> None:
        """Write ``version`` under the key, keeping every other key as is."""
        data = self._load()
        data[self.key] = str(version)
        try:
            self.path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
        except OSError as e:
            raise ProviderError(f"could not write the version to `{self.path}`: {e}") from e
        logger.debug("Wrote version %s to %s[%s]", version, self.path, self.key)


@dataclass(frozen=True)
class TextVersionProvider:
    """Version stored as the whole content of a text file."""

    path: Path

    @property
    def file_path(self) -> Path:
        return self.path

    def read(self) -> Version:
        """Read the version from the text file.

        Raises:
            VersionFileNotFoundError: If the file does not exist
            InvalidVersionFileError: If the path is not a readable UTF-8 file
            InvalidVersionError: If the content is not a valid version
        """
        _check_file(self.path)
        content = _read_text(self.path).strip()
        try:
            return Version.parse(content)
        except InvalidVersionError as e:
            raise InvalidVersionError(
                f"the version specified within `{self.path}` is not a valid semantic version: {content}"
            ) from e

    def write(self, version: Version) -> None:
        try:
            self.path.write_text(f"{version}\n", encoding="utf-8")
        except OSError as e:
            raise ProviderError(f"could not write the version to `{self.path}`: {e}") from e
        logger.debug("Wrote version %s to %s", version, self.path)


def create_provider(config: ProviderConfig, root: Path) -> VersionProvider:
    """Build the provider selected by ``config.type``.

    Relative paths are resolved against the project ``root``.
    """
    match config:
        case JsonProviderConfig():
            return JsonVersionProvider(path=_resolve(root, config.path), key=config.key)
        case TextProviderConfig():
            return TextVersionProvider(path=_resolve(root, config.path))
    raise ProviderError(f"unsupported provider type: {config.type}")
