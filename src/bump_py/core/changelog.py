"""Markdown changelog generation from conventional commits.

The whole history is walked newest first, split into releases at every
version tag, and each release is rendered as a markdown section::

    ## [v1.1.0](https://github.com/owner/repo/compare/v1.0.0...v1.1.0) (2024-02-01)

    - tidy up <code>[abc1234](https://github.com/owner/repo/commit/abc1234...)</code>

    ### Features

    - add streaming <code>[def5678](...)</code>

    - **api**: add pagination <code>[0a1b2c3](...)</code>

The output is meant to be read, not parsed back: there is no round-trip
from markdown to commits.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from bump_py.core.commits import Commit, ConventionalSubject
from bump_py.core.releases import group_by_release, pairwise_releases
from bump_py.exceptions import InvalidOutputPathError, MissingDirectoryError

if TYPE_CHECKING:
    from pathlib import Path

    from bump_py.config.models import BumpPyConfig
    from bump_py.core.releases import Release
    from bump_py.vcs.git import GitRepository

logger = logging.getLogger(__name__)

ISSUE_PATTERN = re.compile(r"#(?P<id>\d+)")

DEFAULT_CHANGELOG_FILENAME = "CHANGELOG.md"


def compare_link(url: str, previous: str, current: str) -> str:
    return f"{url}/compare/{previous}...{current}"


def hash_link(url: str, commit: Commit) -> str:
    return f"<code>[{commit.short_hash}]({url}/commit/{commit.hash})</code>"


def link_issues(text: str, url: str) -> str:
    """Turn ``#123`` references into links to the repository's issue tracker."""
    return ISSUE_PATTERN.sub(lambda m: f"[#{m.group('id')}]({url}/issues/{m.group('id')})", text)


def _section_header(current: Release, previous: Release | None, url: str) -> str:
    if current.date is None:
        return f"## {current.version}"
    if previous is not None and previous.date is not None:
        return f"## [{current.version}]({compare_link(url, previous.version, current.version)}) ({current.date})"
    return f"## {current.version} ({current.date})"


def format_commit(commit: Commit, url: str, *, include_body: bool = False) -> str:
    """Render one commit as a markdown bullet.

    Args:
        commit: Commit to render
        url: Repository HTTPS URL, for the hash link
        include_body: Append the commit body, tab-indented, after the bullet

    Returns:
        Markdown bullet (possibly followed by body lines)
    """
    subject = commit.classified
    link = hash_link(url, commit)

    if isinstance(subject, ConventionalSubject):
        scope = f"**{subject.scope}**: " if subject.scope else ""
        line = f"- {scope}{subject.description} {link}"
    else:
        line = f"- {subject} {link}"

    if include_body and commit.body.strip():
        body = "\n".join(f"\t{body_line}" for body_line in commit.body.strip().splitlines())
        line = f"{line}\n\n{body}"

    return line


def group_commits_by_type(commits: list[Commit]) -> tuple[dict[str, list[Commit]], list[Commit]]:
    """Split commits into conventional commits by type, and the rest.

    Returns:
        ``(by_type, non_conventional)``; ``by_type`` keeps the order in which
        types were first seen
    """
    by_type: dict[str, list[Commit]] = {}
    non_conventional: list[Commit] = []

    for commit in commits:
        subject = commit.classified
        if isinstance(subject, ConventionalSubject):
            by_type.setdefault(subject.type, []).append(commit)
        else:
            non_conventional.append(commit)

    return by_type, non_conventional


def sort_by_scope(commits: list[Commit]) -> list[Commit]:
    """Unscoped commits first, then scoped ones by scope; ties keep their order."""

    def key(commit: Commit) -> tuple[bool, str]:
        subject = commit.classified
        scope = subject.scope if isinstance(subject, ConventionalSubject) else None
        return (scope is not None, scope or "")

    return sorted(commits, key=key)


def render_section(
    current: Release,
    previous: Release | None,
    url: str,
    config: BumpPyConfig,
) -> str:
    """Render one release as a markdown section.

    Args:
        current: The release to render
        previous: The next-older release, used for the compare link
        url: Repository HTTPS URL
        config: Configuration (type options, body and non-conventional flags)

    Returns:
        The section, or an empty string for an unreleased release with
        nothing to show
    """
    blocks = [_section_header(current, previous, url)]
    bullets = 0

    by_type, non_conventional = group_commits_by_type(current.commits)

    if config.include_non_conventional_commits:
        for commit in non_conventional:
            blocks.append(format_commit(commit, url, include_body=config.include_body))
            bullets += 1

    for commit_type, commits in by_type.items():
        options = config.type_options(commit_type)
        if options is not None and options.hidden:
            continue

        blocks.append(f"### {options.name if options and options.name else commit_type}")
        for commit in sort_by_scope(commits):
            blocks.append(format_commit(commit, url, include_body=config.include_body))
            bullets += 1

    if current.is_unreleased and bullets == 0:
        return ""

    section = "\n".join(f"{block}\n" for block in blocks)
    return link_issues(section, url)


def generate_changelog(repo: GitRepository, config: BumpPyConfig) -> str:
    """Generate the markdown changelog for the whole history of ``repo``.

    Args:
        repo: Git repository
        config: Configuration

    Returns:
        Every non-empty release section, newest release first

    Raises:
        RemoteUrlError: If the repository's URL cannot be resolved
        GitError: If reading the history fails
    """
    url = repo.remote_url()
    commits = repo.history()
    releases = group_by_release(commits, config.unreleased_header)
    logger.debug("Rendering %d release(s) from %d commit(s)", len(releases), len(commits))

    sections = [render_section(current, previous, url, config) for current, previous in pairwise_releases(releases)]
    return "\n".join(section for section in sections if section)


def validate_output_path(output: Path) -> None:
    """Check that the changelog can be written to ``output``.

    Raises:
        InvalidOutputPathError: If ``output`` is an existing directory
        MissingDirectoryError: If the parent directory does not exist
    """
    if output.exists() and not output.is_file():
        raise InvalidOutputPathError(output)
    if not output.parent.is_dir():
        raise MissingDirectoryError(output.parent)


def save_changelog(repo: GitRepository, config: BumpPyConfig, output: Path) -> Path:
    """Generate the changelog and write it to ``output``, replacing its content.

    Returns:
        The path written
    """
    validate_output_path(output)
    content = generate_changelog(repo, config)
    output.write_text(content, encoding="utf-8")
    logger.debug("Wrote changelog to %s", output)
    return output
