"""Report aggregation and schema-friendly output."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from typing import Any

from .models import VersionChange


def aggregate(
    changes: Sequence[VersionChange],
    failures: Mapping[str, str] | None = None,
    detected_at: datetime | None = None,
) -> dict[str, Any]:
    """Aggregate one run's changes and failures into a single report.

    Every change shares the same ``detectedAt`` timestamp.
    """
    timestamp = detected_at or datetime.now(timezone.utc)
    failures = failures or {}

    items = [change.to_output_item(timestamp) for change in changes]
    failed = [{"package": name, "error": error} for name, error in failures.items()]

    return {
        "version": "1",
        "hasChanges": bool(items),
        "changes": items,
        "failures": failed,
        "totals": {
            "changes": len(items),
            "failures": len(failed),
        },
    }
