"""Conventional commit parsing.

Commit subjects are matched against the Conventional Commits grammar::

    <type>[(<scope>)][!]: <description>

A subject that does not follow the grammar is not an error; it is kept as
the raw string and rendered as a "non-conventional" commit.

See https://www.conventionalcommits.org/en/v1.0.0/
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import cached_property

CONVENTIONAL_COMMIT_PATTERN = re.compile(
    r"^(?P<type>\w+)(?:\((?P<scope>.*)\))?\s?(?P<breaking>!)?\s?:\s?(?P<description>.*)$"
)


@dataclass(frozen=True)
class ConventionalSubject:
    """The structured parts of a conventional commit subject."""

    type: str
    description: str
    scope: str | None = None
    breaking: bool = False


ClassifiedSubject = ConventionalSubject | str


def classify(subject: str) -> ClassifiedSubject:
    """Parse a commit subject into a :class:`ConventionalSubject`.

    Args:
        subject: The first line of a commit message

    Returns:
        The parsed subject, or ``subject`` itself, unmodified, when it does
        not follow the conventional format
    """
    match = CONVENTIONAL_COMMIT_PATTERN.match(subject)
    if match is None:
        return subject

    return ConventionalSubject(
        type=match.group("type"),
        # "feat(): x" carries an empty scope, which renders as no scope at all
        scope=match.group("scope") or None,
        breaking=match.group("breaking") is not None,
        description=match.group("description"),
    )


@dataclass(frozen=True)
class Commit:
    """A single commit, as recorded in the repository's history.

    Attributes:
        hash: Full commit SHA
        short_hash: Abbreviated SHA
        date: Commit date, ``YYYY-MM-DD``
        refs: Ref decorations, e.g. ``"HEAD -> main, tag: v1.0.0"``
        subject: First line of the message
        body: Remaining lines of the message
    """

    hash: str
    short_hash: str
    date: str
    subject: str
    refs: str = ""
    body: str = ""

    @cached_property
    def classified(self) -> ClassifiedSubject:
        """The classified form of this commit's subject."""
        return classify(self.subject)
