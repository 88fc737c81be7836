"""JSON file persistence for the last-seen version store."""

from __future__ import annotations

import json
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any


DEFAULT_STATE_PATH = Path(".npm-watch-state.json")


class StateError(RuntimeError):
    """Raised when the state file exists but cannot be read or parsed."""


def _now() -> datetime:
    return datetime.now(timezone.utc)


class StateFile:
    """Persist ``{"lastSeen": {...}, "initializedAt": ...}`` between runs.

    ``last_seen`` is the mutable mapping handed to the checker; ``save`` writes
    whatever it holds at that point.
    """

    def __init__(self, path: Path | str = DEFAULT_STATE_PATH) -> None:
        self.path = Path(path)
        self.last_seen: dict[str, str] = {}
        self.initialized_at: str | None = None

    def load(self) -> dict[str, str]:
        if not self.path.exists():
            self.last_seen = {}
            self.initialized_at = _now().isoformat().replace("+00:00", "Z")
            return self.last_seen

        try:
            data: Any = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise StateError(f"Failed to read state file {self.path}: {exc}") from exc

        if not isinstance(data, dict):
            raise StateError(f"State file {self.path} must contain a JSON object")

        last_seen = data.get("lastSeen")
        if last_seen is None:
            last_seen = {}
        if not isinstance(last_seen, dict):
            raise StateError(f"State file {self.path} has an invalid 'lastSeen' mapping")

        invalid = sorted(str(k) for k, v in last_seen.items() if not isinstance(v, str) or not v)
        if invalid:
            raise StateError(
                f"State file {self.path} has invalid versions for: {', '.join(invalid)}"
            )

        self.last_seen = dict(last_seen)
        self.initialized_at = data.get("initializedAt")
        return self.last_seen

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"lastSeen": dict(sorted(self.last_seen.items()))}
        if self.initialized_at:
            data["initializedAt"] = self.initialized_at
        return data

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=".npm-watch-", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(self.to_dict(), handle, indent=2)
                handle.write("\n")
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
