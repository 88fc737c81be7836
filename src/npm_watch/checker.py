"""Per-package dist-tag check against the last-seen store."""

from __future__ import annotations

import logging
from collections.abc import MutableMapping

from .changes import build_version_change
from .github_release import make_release_fetcher
from .http import DEFAULT_TIMEOUT_MS, Fetcher
from .models import VersionChange
from .registry import DEFAULT_REGISTRY_URL, fetch_registry_metadata
from .versions import INITIAL_VERSION, is_prerelease, simulate_previous_version

logger = logging.getLogger(__name__)


def check_package_version(
    package: str,
    last_seen: MutableMapping[str, str],
    fetch: Fetcher,
    *,
    tag: str = "latest",
    registry_url: str = DEFAULT_REGISTRY_URL,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    include_prerelease: bool = True,
    skip_initial: bool = True,
    debug_mode: bool = False,
    enrich: bool = True,
) -> VersionChange | None:
    """Check one package and return a VersionChange when its tag has moved.

    ``last_seen`` maps package names to the version last observed for ``tag``
    and is updated in place before returning whenever a new version is seen.
    Debug mode never writes to it. Registry fetch errors propagate.
    """
    metadata = fetch_registry_metadata(fetch, registry_url, package, timeout_ms)

    current = metadata.version_for(tag)
    if current is None:
        logger.debug('%s has no "%s" dist-tag', package, tag)
        return None

    if not include_prerelease and is_prerelease(current):
        logger.debug("%s@%s is a prerelease, skipping", package, current)
        return None

    fetch_release = make_release_fetcher(fetch, timeout_ms) if enrich else None
    previous = last_seen.get(package)

    if debug_mode and not previous:
        simulated = simulate_previous_version(current)
        logger.warning("DEBUG: simulating %s previous version as %s", package, simulated)
        return build_version_change(
            package, simulated, current, tag, metadata, enrich, fetch_release
        )

    if not previous:
        last_seen[package] = current
        if skip_initial:
            logger.info("%s@%s initialised (notification skipped)", package, current)
            return None
        logger.info("%s@%s initialised", package, current)

    if previous == current:
        return None

    logger.info("%s updated: %s -> %s", package, previous or INITIAL_VERSION, current)
    last_seen[package] = current

    return build_version_change(
        package,
        previous or INITIAL_VERSION,
        current,
        tag,
        metadata,
        enrich,
        fetch_release,
    )
