"""Semantic version parsing and bumping.

Versions are plain ``major.minor.patch`` triples. There is no support for
pre-release or build metadata; the version medium is expected to hold exactly
the triple.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum

from bump_py.exceptions import InvalidVersionError

SEMVER_PATTERN = re.compile(r"^(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)$")


class BumpType(StrEnum):
    """The kind of release, i.e. which component of the version to bump."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"


@dataclass(frozen=True, order=True)
class Version:
    """A semantic version triple."""

    major: int
    minor: int
    patch: int

    def __post_init__(self) -> None:
        if min(self.major, self.minor, self.patch) < 0:
            raise InvalidVersionError(f"version components must be non-negative: {self.major}.{self.minor}.{self.patch}")

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse a ``major.minor.patch`` string.

        Raises:
            InvalidVersionError: If the string is not a valid triple
        """
        match = SEMVER_PATTERN.match(text.strip()) if isinstance(text, str) else None
        if match is None:
            raise InvalidVersionError(f"`{text}` is not a valid semantic version (expected major.minor.patch)")
        return cls(int(match["major"]), int(match["minor"]), int(match["patch"]))

    def bump(self, bump_type: BumpType | str) -> Version:
        """Return the next version for the given release kind."""
        return bump(self, bump_type)


def parse_version(text: str) -> Version:
    """Parse a version string. See :meth:`Version.parse`."""
    return Version.parse(text)


def bump(version: Version, bump_type: BumpType | str) -> Version:
    """Increment ``version`` according to ``bump_type``.

    >>> str(bump(Version(1, 2, 3), BumpType.MAJOR))
    '2.0.0'
    >>> str(bump(Version(1, 2, 3), BumpType.MINOR))
    '1.3.0'
    >>> str(bump(Version(1, 2, 3), BumpType.PATCH))
    '1.2.4'
    """
    kind = BumpType(bump_type)
    if kind is BumpType.MAJOR:
        return Version(version.major + 1, 0, 0)
    if kind is BumpType.MINOR:
        return Version(version.major, version.minor + 1, 0)
    return Version(version.major, version.minor, version.patch + 1)
