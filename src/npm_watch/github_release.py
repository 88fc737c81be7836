"""GitHub release lookup for a published package version.

Repositories tag releases inconsistently, so several tag names are tried in
order and the first one that resolves wins.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from typing import Any, TypeAlias
from urllib.parse import quote

from .http import DEFAULT_TIMEOUT_MS, USER_AGENT, Fetcher, FetchRequest
from .models import ReleaseRecord

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"

_GITHUB_REPO_PATTERN = re.compile(r"github\.com[/:]([\w-]+)/([\w-]+)")

ReleaseFetcher: TypeAlias = Callable[[str, str, str], Any]


def parse_github_repository(repository_url: str) -> tuple[str, str] | None:
    """Return ``(owner, repo)`` for a GitHub URL, or None."""
    match = _GITHUB_REPO_PATTERN.search(repository_url)
    if not match:
        return None
    return match.group(1), match.group(2)


def candidate_tags(repo: str, version: str) -> list[str]:
    return [
        f"v{version}",
        version,
        f"{repo}@{version}",
        f"{repo}-{version}",
    ]


def make_release_fetcher(
    fetch: Fetcher,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    user_agent: str = USER_AGENT,
) -> ReleaseFetcher:
    """Bind ``fetch`` to the GitHub release-by-tag endpoint."""

    def fetch_release(owner: str, repo: str, tag: str) -> Any:
        url = f"{GITHUB_API_URL}/repos/{owner}/{repo}/releases/tags/{quote(tag, safe='@')}"
        return fetch(
            FetchRequest(
                url=url,
                timeout_ms=timeout_ms,
                headers={
                    "Accept": "application/vnd.github.v3+json",
                    "User-Agent": user_agent,
                },
            )
        )

    return fetch_release


def resolve_release(
    repository_url: str,
    version: str,
    fetch_release: ReleaseFetcher,
) -> ReleaseRecord | None:
    """Find the release for ``version`` in a GitHub repository.

    Candidate tags are tried in order: ``v<version>``, ``<version>``,
    ``<repo>@<version>``, ``<repo>-<version>``. A failed or empty lookup moves
    on to the next candidate; None is returned once all are exhausted.
    """
    parsed = parse_github_repository(repository_url)
    if parsed is None:
        return None
    owner, repo = parsed

    for tag in candidate_tags(repo, version):
        try:
            payload = fetch_release(owner, repo, tag)
        except Exception as exc:
            logger.debug("No release %s/%s@%s: %s", owner, repo, tag, exc)
            continue

        record = ReleaseRecord.from_payload(payload, tag)
        if record is not None:
            return record

    logger.debug("No GitHub release found for %s/%s %s", owner, repo, version)
    return None
