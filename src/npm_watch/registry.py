"""npm registry access."""

from __future__ import annotations

from urllib.parse import quote

from .http import DEFAULT_TIMEOUT_MS, Fetcher, FetchRequest
from .models import RegistryMetadata

DEFAULT_REGISTRY_URL = "https://registry.npmjs.org"
NPM_WEB_URL = "https://www.npmjs.com"


def build_registry_url(base_url: str, package: str) -> str:
    """Return the package document URL; ``@scope/name`` is one encoded segment."""
    return f"{base_url}/{quote(package, safe='')}"


def build_package_page_url(package: str, version: str) -> str:
    return f"{NPM_WEB_URL}/package/{package}/v/{version}"


def fetch_registry_metadata(
    fetch: Fetcher,
    base_url: str,
    package: str,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
) -> RegistryMetadata:
    """Fetch and parse the registry document for ``package``.

    Transport failures propagate to the caller.
    """
    payload = fetch(
        FetchRequest(
            url=build_registry_url(base_url, package),
            timeout_ms=timeout_ms,
            headers={"Accept": "application/json"},
        )
    )
    return RegistryMetadata.from_payload(payload)
