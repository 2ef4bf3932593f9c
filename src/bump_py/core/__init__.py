"""Core business logic for bump-py.

This package contains the fundamental building blocks:
- Version parsing and bumping (major.minor.patch)
- Conventional commit parsing
- Grouping of history into releases
- Markdown changelog generation
- Hook task execution
- Release orchestration
"""

from __future__ import annotations

from bump_py.core.changelog import generate_changelog, render_section, save_changelog
from bump_py.core.commits import Commit, ConventionalSubject, classify
from bump_py.core.release import ReleasePipeline, ReleaseResult, ReleaseStage, Substitutions
from bump_py.core.releases import Release, extract_tag, group_by_release
from bump_py.core.tasks import TaskRunner
from bump_py.core.version import BumpType, Version, bump, parse_version

__all__ = [
    "BumpType",
    "Commit",
    "ConventionalSubject",
    "Release",
    "ReleasePipeline",
    "ReleaseResult",
    "ReleaseStage",
    "Substitutions",
    "TaskRunner",
    "Version",
    "bump",
    "classify",
    "extract_tag",
    "generate_changelog",
    "group_by_release",
    "parse_version",
    "render_section",
    "save_changelog",
]
