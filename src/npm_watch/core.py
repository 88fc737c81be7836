"""Core watch entrypoint.

This module MUST NOT depend on how the last-seen store is persisted so it can
be driven by the CLI, a scheduler or tests with a plain dict.
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from dataclasses import dataclass, field

from .checker import check_package_version
from .config import WatchSettings
from .http import Fetcher
from .models import VersionChange

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class WatchResult:
    """Changes detected in one run, plus packages whose check failed."""

    changes: list[VersionChange] = field(default_factory=list)
    failures: dict[str, str] = field(default_factory=dict)


def watch_packages(
    settings: WatchSettings,
    last_seen: MutableMapping[str, str],
    fetch: Fetcher,
) -> WatchResult:
    """Check every configured package and collect detected changes.

    A failure checking one package is logged and recorded; the remaining
    packages are still checked. Debug mode clears ``last_seen`` first so every
    run simulates a change.
    """
    result = WatchResult()

    if settings.debug_mode:
        logger.warning("DEBUG MODE: clearing last-seen state")
        last_seen.clear()

    if not settings.packages:
        logger.warning("No packages configured")
        return result

    tag = settings.effective_tag
    for package in settings.packages:
        try:
            change = check_package_version(
                package,
                last_seen,
                fetch,
                tag=tag,
                registry_url=settings.registry_base_url,
                timeout_ms=settings.timeout_ms,
                include_prerelease=settings.include_prerelease,
                skip_initial=settings.skip_initial,
                debug_mode=settings.debug_mode,
                enrich=settings.fetch_release_info,
            )
        except Exception as exc:
            logger.error("Failed to check %s: %s", package, exc)
            result.failures[package] = str(exc)
            continue

        if change is not None:
            result.changes.append(change)

    return result
