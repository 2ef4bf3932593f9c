"""Unit tests for configuration loading and validation."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from bump_py.config.loader import (
    CONFIG_FILENAME,
    default_config,
    find_config_file,
    load_config,
    parse_config,
    read_config_file,
)
from bump_py.config.models import (
    BumpPyConfig,
    JsonProviderConfig,
    TaskConfig,
    TextProviderConfig,
)
from bump_py.exceptions import ConfigNotFoundError, ConfigValidationError


def write_json(path: Path, data: object) -> Path:
    path.write_text(json.dumps(data))
    return path


class TestModels:
    """Tests for the configuration models."""

    def test_defaults(self):
        """Only the provider is required."""
        config = BumpPyConfig.model_validate({"provider": {"type": "text", "path": "VERSION"}})

        assert config.tasks.pre == []
        assert config.tasks.post == []
        assert config.types is None
        assert config.unreleased_header == "Unreleased"
        assert config.include_body is False
        assert config.include_non_conventional_commits is True
        assert config.tag == "v{{after}}"
        assert config.release_subject == "chore(release): {{tag}}"
        assert config.changelog_subject == "docs(changelog): update changelog for {{tag}}"
        assert config.prompt is False

    def test_camel_case_keys(self):
        """Read camelCase keys into snake_case attributes."""
        config = parse_config(
            {
                "provider": {"type": "json", "path": "package.json"},
                "unreleasedHeader": "Next",
                "includeBody": True,
                "includeNonConventionalCommits": False,
                "releaseSubject": "release {{tag}}",
                "tasks": {"pre": [{"name": "build", "command": "make", "noSpinner": True}]},
            }
        )

        assert config.unreleased_header == "Next"
        assert config.include_body is True
        assert config.include_non_conventional_commits is False
        assert config.release_subject == "release {{tag}}"
        assert config.tasks.pre[0].no_spinner is True

    def test_provider_discriminator(self):
        """Select the provider model by its type."""
        json_config = parse_config({"provider": {"type": "json", "path": "package.json"}})
        text_config = parse_config({"provider": {"type": "text", "path": "VERSION"}})

        assert isinstance(json_config.provider, JsonProviderConfig)
        assert json_config.provider.key == "version"
        assert json_config.provider.path == Path("package.json")
        assert isinstance(text_config.provider, TextProviderConfig)

    def test_task_timeout_default(self):
        """Tasks time out after 15 seconds by default."""
        assert TaskConfig(name="x", command="true").timeout == 15000

    def test_type_options(self):
        """Look up commit type options case-insensitively."""
        config = parse_config(
            {
                "provider": {"type": "text", "path": "VERSION"},
                "types": [{"type": "Feat", "name": "Features"}, {"type": "chore", "hidden": True}],
            }
        )

        assert config.type_options("feat").name == "Features"
        assert config.type_options("CHORE").hidden is True
        assert config.type_options("fix") is None

    def test_frozen(self):
        """Configuration cannot be modified after loading."""
        config = parse_config({"provider": {"type": "text", "path": "VERSION"}})

        with pytest.raises(ValueError):
            config.prompt = True


class TestValidation:
    """Tests for invalid configurations."""

    def test_missing_provider(self):
        """Require a provider."""
        with pytest.raises(ConfigValidationError, match="provider"):
            parse_config({})

    def test_unknown_provider_type(self):
        """Reject provider types that do not exist."""
        with pytest.raises(ConfigValidationError, match="the configuration file is invalid"):
            parse_config({"provider": {"type": "yaml", "path": "x.yaml"}})

    def test_unknown_key(self):
        """Reject misspelled keys."""
        with pytest.raises(ConfigValidationError, match="includeBodies"):
            parse_config({"provider": {"type": "text", "path": "VERSION"}, "includeBodies": True})

    def test_task_without_command(self):
        """Tasks need a command."""
        with pytest.raises(ConfigValidationError, match="command"):
            parse_config({"provider": {"type": "text", "path": "VERSION"}, "tasks": {"pre": [{"name": "x"}]}})

    def test_non_positive_timeout(self):
        """Timeouts must be positive."""
        with pytest.raises(ConfigValidationError, match="timeout"):
            parse_config(
                {
                    "provider": {"type": "text", "path": "VERSION"},
                    "tasks": {"post": [{"name": "x", "command": "true", "timeout": 0}]},
                }
            )

    def test_source_in_message(self, tmp_path: Path):
        """Name the offending file."""
        source = tmp_path / CONFIG_FILENAME

        with pytest.raises(ConfigValidationError, match=CONFIG_FILENAME):
            parse_config({}, source)


# =============================================================================
# Discovery and loading
# =============================================================================


class TestLoadConfig:
    """Tests for load_config() and file discovery."""

    def test_load_bumprc(self, tmp_path: Path):
        """Load .bumprc.json from the project directory."""
        write_json(tmp_path / CONFIG_FILENAME, {"provider": {"type": "text", "path": "VERSION"}, "prompt": True})

        assert load_config(tmp_path).prompt is True

    def test_found_in_parent(self, tmp_path: Path):
        """Walk up to find the configuration."""
        config_path = write_json(tmp_path / CONFIG_FILENAME, {"provider": {"type": "text", "path": "VERSION"}})
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)

        assert find_config_file(nested) == config_path

    def test_explicit_file(self, tmp_path: Path):
        """An explicit file bypasses discovery."""
        write_json(tmp_path / CONFIG_FILENAME, {"provider": {"type": "text", "path": "VERSION"}})
        other = write_json(tmp_path / "release.json", {"provider": {"type": "json", "path": "package.json"}})

        assert isinstance(load_config(tmp_path, other).provider, JsonProviderConfig)

    def test_explicit_file_missing(self, tmp_path: Path):
        """A missing explicit file is reported as such."""
        with pytest.raises(ConfigNotFoundError, match="not found"):
            load_config(tmp_path, tmp_path / "nope.json")

    def test_pyproject_table(self, tmp_path: Path):
        """Fall back to [tool.bump-py] in pyproject.toml."""
        (tmp_path / "pyproject.toml").write_text(
            '[project]\nname = "demo"\n\n'
            "[tool.bump-py]\n"
            'provider = { type = "text", path = "VERSION" }\n'
            'unreleasedHeader = "Upcoming"\n'
        )

        assert load_config(tmp_path).unreleased_header == "Upcoming"

    def test_pyproject_without_table(self, tmp_path: Path):
        """A pyproject.toml without the table is not a configuration."""
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "demo"\n')

        with pytest.raises(ConfigNotFoundError, match=r"\[tool.bump-py\]"):
            read_config_file(path)

    def test_invalid_json(self, tmp_path: Path):
        """Report JSON syntax errors."""
        path = tmp_path / CONFIG_FILENAME
        path.write_text("{ not json")

        with pytest.raises(ConfigValidationError, match="Invalid JSON"):
            read_config_file(path)

    def test_json_not_an_object(self, tmp_path: Path):
        """The top level must be an object."""
        path = write_json(tmp_path / CONFIG_FILENAME, ["provider"])

        with pytest.raises(ConfigValidationError, match="JSON object"):
            read_config_file(path)

    def test_not_utf8(self, tmp_path: Path):
        """Report a configuration file with bytes that are not UTF-8."""
        (tmp_path / CONFIG_FILENAME).write_bytes(b'{"provider": {"type": "text", "path": "\xff"}}')

        with pytest.raises(ConfigValidationError, match="not valid UTF-8"):
            load_config(tmp_path)

    def test_unreadable(self, tmp_path: Path):
        """Report a configuration file that cannot be opened."""
        path = write_json(tmp_path / CONFIG_FILENAME, {"provider": {"type": "text", "path": "VERSION"}})

        with patch.object(Path, "read_text", side_effect=PermissionError("Permission denied")):
            with pytest.raises(ConfigValidationError, match="Could not read"):
                read_config_file(path)

    def test_invalid_toml(self, tmp_path: Path):
        """Report TOML syntax errors."""
        path = tmp_path / "pyproject.toml"
        path.write_text("[tool.bump-py\n")

        with pytest.raises(ConfigValidationError, match="Invalid TOML"):
            read_config_file(path)


class TestDefaultConfig:
    """Tests for the starter configuration."""

    def test_default_config_is_valid(self):
        """The file written by init loads without changes."""
        config = parse_config(default_config())

        assert isinstance(config.provider, TextProviderConfig)
        assert config.provider.path == Path("VERSION")
        assert config.type_options("chore").hidden is True

    def test_default_config_round_trips_through_json(self):
        """The starter configuration is plain JSON."""
        assert json.loads(json.dumps(default_config())) == default_config()
