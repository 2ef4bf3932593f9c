"""Pydantic models describing the bump-py configuration file.

The configuration file (``.bumprc.json``) uses camelCase keys; the models
expose them as snake_case attributes and accept either spelling.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, PositiveInt
from pydantic.alias_generators import to_camel

DEFAULT_TASK_TIMEOUT_MS = 15_000


class _ConfigModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )


class TaskConfig(_ConfigModel):
    """A shell command run before or after the version is bumped."""

    name: str
    command: str
    timeout: PositiveInt = Field(
        default=DEFAULT_TASK_TIMEOUT_MS,
        description="Milliseconds to wait before the command is terminated",
    )
    no_spinner: bool = Field(
        default=False,
        description="Show the command's own output live instead of a spinner",
    )


class TasksConfig(_ConfigModel):
    """Tasks for the pre-bump and post-bump phases, in execution order."""

    pre: list[TaskConfig] = Field(default_factory=list)
    post: list[TaskConfig] = Field(default_factory=list)


class JsonProviderConfig(_ConfigModel):
    """The version is stored under a key of a JSON file, e.g. package.json."""

    type: Literal["json"]
    path: Path
    key: str = "version"


class TextProviderConfig(_ConfigModel):
    """The version is the entire content of a text file."""

    type: Literal["text"]
    path: Path


ProviderConfig = Annotated[JsonProviderConfig | TextProviderConfig, Field(discriminator="type")]


class CommitTypeConfig(_ConfigModel):
    """Rendering options for one commit type in the changelog."""

    type: str
    hidden: bool = False
    name: str | None = Field(default=None, description="Section title used instead of the raw type")


class BumpPyConfig(_ConfigModel):
    """Root configuration model."""

    tasks: TasksConfig = Field(default_factory=TasksConfig)
    provider: ProviderConfig
    types: list[CommitTypeConfig] | None = None
    unreleased_header: str = "Unreleased"
    include_body: bool = False
    include_non_conventional_commits: bool = True
    tag: str = "v{{after}}"
    release_subject: str = "chore(release): {{tag}}"
    changelog_subject: str = "docs(changelog): update changelog for {{tag}}"
    prompt: bool = False

    def type_options(self, commit_type: str) -> CommitTypeConfig | None:
        """Find the options declared for ``commit_type`` (case-insensitive)."""
        for option in self.types or []:
            if option.type.lower() == commit_type.lower():
                return option
        return None
