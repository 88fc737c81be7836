"""Repository reference normalisation for npm package metadata."""

from __future__ import annotations

import re
from typing import Any


_REWRITES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"^git\+"), ""),
    (re.compile(r"^git://"), "https://"),
    (re.compile(r"\.git\Z"), ""),
    (re.compile(r"^github:"), "https://github.com/"),
)


def normalize_repository_url(raw: str) -> str:
    """Rewrite a repository reference into a plain HTTPS URL.

    Handles ``git+https://…/repo.git``, ``git://…`` and ``github:owner/repo``
    shorthand. The result is not validated.
    """
    url = raw
    for pattern, replacement in _REWRITES:
        url = pattern.sub(replacement, url, count=1)
    return url


def extract_repository_url(repository: Any) -> str | None:
    """Return the normalised URL from a string or ``{"type", "url"}`` reference."""
    if isinstance(repository, str) and repository:
        return normalize_repository_url(repository)
    if isinstance(repository, dict):
        url = repository.get("url")
        if isinstance(url, str) and url:
            return normalize_repository_url(url)
    return None
