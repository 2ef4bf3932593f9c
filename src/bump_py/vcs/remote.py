"""Remote URL normalization.

Links in the changelog point at the repository's web UI, so whatever URL the
``origin`` remote was cloned with has to be turned into its HTTPS form.
"""

from __future__ import annotations

import re
from urllib.parse import urlsplit

from bump_py.exceptions import RemoteUrlError

# git@github.com:owner/repo.git
SCP_LIKE_PATTERN = re.compile(r"^(?:[\w.\-]+@)?(?P<host>[\w.\-]+):(?!//)(?P<path>[^\s]+?)(?:\.git)?/?$")


def normalize_remote_url(url: str) -> str:
    """Convert a git remote URL into a canonical ``https://host/owner/repo`` URL.

    >>> normalize_remote_url("git@github.com:owner/repo.git")
    'https://github.com/owner/repo'
    >>> normalize_remote_url("https://github.com/owner/repo.git")
    'https://github.com/owner/repo'
    >>> normalize_remote_url("ssh://git@gitlab.com/group/repo.git")
    'https://gitlab.com/group/repo'

    Raises:
        RemoteUrlError: If the URL is empty or in an unsupported form
    """
    url = url.strip()
    if not url:
        raise RemoteUrlError("the repository has no remote URL for `origin`.")

    if "://" in url:
        parts = urlsplit(url)
        if parts.scheme not in ("http", "https", "ssh", "git", "git+ssh") or not parts.hostname:
            raise RemoteUrlError(f"unsupported remote URL: {url}")
        path = parts.path.strip("/").removesuffix(".git")
        if not path:
            raise RemoteUrlError(f"remote URL has no repository path: {url}")
        host = parts.hostname
        # Keep non-default ports only for web URLs; SSH ports mean nothing to a browser
        if parts.port and parts.scheme in ("http", "https"):
            host = f"{host}:{parts.port}"
        return f"https://{host}/{path}"

    match = SCP_LIKE_PATTERN.match(url)
    if match is None:
        raise RemoteUrlError(f"unsupported remote URL: {url}")
    return f"https://{match.group('host')}/{match.group('path')}"
