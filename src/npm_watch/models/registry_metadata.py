"""Registry metadata model for a single npm package document."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class RegistryMetadata:
    """The parts of a registry package document needed to detect changes."""

    dist_tags: dict[str, str]
    time: dict[str, str] = field(default_factory=dict)
    repository: str | dict[str, Any] | None = None

    def version_for(self, tag: str) -> str | None:
        version = self.dist_tags.get(tag)
        return version or None

    def published_at(self, version: str) -> str | None:
        return self.time.get(version)

    @classmethod
    def from_payload(cls, payload: Any) -> RegistryMetadata:
        """Build metadata from a decoded registry response.

        Missing or wrongly-typed sections are treated as empty.
        """
        if not isinstance(payload, dict):
            return cls(dist_tags={})

        raw_tags = payload.get("dist-tags")
        dist_tags = (
            {str(k): str(v) for k, v in raw_tags.items() if isinstance(v, str)}
            if isinstance(raw_tags, dict)
            else {}
        )

        raw_time = payload.get("time")
        time = (
            {str(k): str(v) for k, v in raw_time.items() if isinstance(v, str)}
            if isinstance(raw_time, dict)
            else {}
        )

        repository = payload.get("repository")
        if not isinstance(repository, (str, dict)):
            repository = None

        return cls(dist_tags=dist_tags, time=time, repository=repository)
