"""Version change record emitted for each detected dist-tag transition."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from ..versions import ChangeKind


@dataclass(frozen=True)
class VersionChange:
    """Describe one package moving from a prior to a newly published version."""

    package: str
    from_version: str
    to_version: str
    tag: str
    change_kind: str
    published_at: str | None = None
    registry_url: str | None = None
    repository_url: str | None = None
    changelog_url: str | None = None
    release_title: str | None = None
    release_notes: str | None = None

    def __post_init__(self) -> None:
        if not self.package:
            raise ValueError("package must be non-empty")
        if not self.to_version:
            raise ValueError("to_version must be non-empty")
        if self.change_kind not in ChangeKind.ALL:
            raise ValueError(f"Invalid change kind: {self.change_kind}")

    @property
    def update_command(self) -> str:
        return f"npm install {self.package}@{self.to_version}"

    def to_dict(self) -> dict[str, str]:
        data = {
            "package": self.package,
            "from": self.from_version,
            "to": self.to_version,
            "tag": self.tag,
            "changeType": self.change_kind,
        }
        optional = {
            "publishedAt": self.published_at,
            "npmUrl": self.registry_url,
            "repositoryUrl": self.repository_url,
            "changelogUrl": self.changelog_url,
            "releaseTitle": self.release_title,
            "releaseNotes": self.release_notes,
        }
        data.update({key: value for key, value in optional.items() if value is not None})
        return data

    def to_output_item(self, detected_at: datetime | None = None) -> dict[str, str]:
        """Return the notification payload including detection time and install command."""
        timestamp = detected_at or datetime.now(timezone.utc)
        item = self.to_dict()
        item["detectedAt"] = timestamp.isoformat().replace("+00:00", "Z")
        item["updateCommand"] = self.update_command
        return item
