"""Data models for npm dist-tag watching."""

from __future__ import annotations

from .registry_metadata import RegistryMetadata
from .release_record import ReleaseRecord
from .version_change import VersionChange

__all__ = [
    "RegistryMetadata",
    "ReleaseRecord",
    "VersionChange",
]
