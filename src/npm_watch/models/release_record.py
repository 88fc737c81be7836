"""Release record model for GitHub releases."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ReleaseRecord:
    """A published release on the source-hosting platform."""

    url: str
    body: str
    name: str

    @classmethod
    def from_payload(cls, payload: Any, tag: str) -> ReleaseRecord | None:
        """Return a record for a release response, or None without ``html_url``.

        The title falls back to the release's ``tag_name`` and then to ``tag``.
        """
        if not isinstance(payload, dict):
            return None

        url = payload.get("html_url")
        if not isinstance(url, str) or not url:
            return None

        body = payload.get("body") or ""
        name = payload.get("name") or payload.get("tag_name") or tag
        return cls(url=url, body=str(body), name=str(name))
