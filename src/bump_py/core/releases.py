"""Grouping of commit history into releases.

Every version tag in the history marks a release. Walking the history from
newest to oldest, a tagged commit opens a new release and every untagged
commit after it (i.e. older than it) belongs to that release, up to the next
tag. Commits newer than the most recent tag form the synthetic "unreleased"
release.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from bump_py.core.commits import Commit

TAG_PATTERN = re.compile(r"tag:\s*(?P<version>[^,\s]+)")


@dataclass
class Release:
    """A labeled bucket of commits.

    ``date``, ``hash`` and ``short_hash`` describe the tagged commit that
    opened the release; they are all ``None`` for the unreleased bucket.
    """

    version: str
    date: str | None = None
    hash: str | None = None
    short_hash: str | None = None
    commits: list[Commit] = field(default_factory=list)

    @property
    def is_unreleased(self) -> bool:
        return self.date is None


def extract_tag(refs: str) -> str | None:
    """Extract the first tag name from a ref decoration string.

    >>> extract_tag("HEAD -> main, tag: v1.0.0, origin/main")
    'v1.0.0'
    >>> extract_tag("HEAD -> main") is None
    True
    """
    match = TAG_PATTERN.search(refs or "")
    return match.group("version") if match else None


def group_by_release(commits: Iterable[Commit], unreleased_label: str) -> dict[str, Release]:
    """Partition a newest-first commit history into releases.

    Args:
        commits: Commits ordered newest first
        unreleased_label: Label of the bucket holding untagged commits newer
            than the latest tag

    Returns:
        Releases keyed by label, in discovery order (newest first). A tagged
        commit only provides the metadata of the release it opens; it never
        appears in any release's ``commits``.
    """
    releases: dict[str, Release] = {}
    current = unreleased_label

    for commit in commits:
        tag = extract_tag(commit.refs)

        if tag is not None:
            current = tag
            releases[tag] = Release(
                version=tag,
                date=commit.date,
                hash=commit.hash,
                short_hash=commit.short_hash,
            )
        elif current in releases:
            releases[current].commits.append(commit)
        else:
            releases[current] = Release(version=current, commits=[commit])

    return releases


def pairwise_releases(releases: dict[str, Release]) -> Iterator[tuple[Release, Release | None]]:
    """Yield ``(current, previous)`` pairs; ``previous`` is the next-older release."""
    ordered = list(releases.values())
    for index, release in enumerate(ordered):
        previous = ordered[index + 1] if index + 1 < len(ordered) else None
        yield release, previous
