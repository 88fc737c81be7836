"""Assemble VersionChange records, optionally enriched with release notes."""

from __future__ import annotations

import logging

from .github_release import ReleaseFetcher, resolve_release
from .models import RegistryMetadata, VersionChange
from .registry import build_package_page_url
from .repository import extract_repository_url
from .versions import classify_change

logger = logging.getLogger(__name__)


def fallback_changelog_url(repository_url: str, version: str) -> str:
    tag = version if version.startswith("v") else f"v{version}"
    return f"{repository_url}/releases/tag/{tag}"


def build_version_change(
    package: str,
    from_version: str,
    to_version: str,
    tag: str,
    metadata: RegistryMetadata,
    enrich: bool,
    fetch_release: ReleaseFetcher | None = None,
) -> VersionChange:
    """Build the change record for ``package``.

    With ``enrich`` set, the repository reference is normalised and, for GitHub
    repositories, the matching release is looked up. Enrichment failures are
    logged and leave the enrichment fields unset.
    """
    repository_url: str | None = None
    changelog_url: str | None = None
    release_title: str | None = None
    release_notes: str | None = None

    if enrich:
        try:
            repository_url = extract_repository_url(metadata.repository)
            if repository_url and "github.com" in repository_url:
                release = None
                if fetch_release is not None:
                    release = resolve_release(repository_url, to_version, fetch_release)
                if release is not None:
                    changelog_url = release.url
                    release_notes = release.body
                    release_title = release.name
                else:
                    changelog_url = fallback_changelog_url(repository_url, to_version)
        except Exception as exc:
            logger.debug("Failed to fetch release info for %s: %s", package, exc)
            repository_url = changelog_url = release_title = release_notes = None

    return VersionChange(
        package=package,
        from_version=from_version,
        to_version=to_version,
        tag=tag,
        change_kind=classify_change(from_version, to_version),
        published_at=metadata.published_at(to_version),
        registry_url=build_package_page_url(package, to_version),
        repository_url=repository_url,
        changelog_url=changelog_url,
        release_title=release_title,
        release_notes=release_notes,
    )
