"""Best-effort version comparison for dist-tag transitions.

Versions published to npm are not always valid semver, so nothing here raises:
- a prerelease is any version containing a hyphen (``1.2.0-beta.1``)
- everything except digits and dots is discarded before comparing
- missing or unparsable components compare as ``0``
"""

from __future__ import annotations

import re


INITIAL_VERSION = "(initial)"

_NON_NUMERIC = re.compile(r"[^0-9.]")
_LEADING_DIGITS = re.compile(r"\d+")


class ChangeKind:
    """Classification of a detected version transition."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    PRERELEASE = "prerelease"
    UNKNOWN = "unknown"

    ALL = (MAJOR, MINOR, PATCH, PRERELEASE, UNKNOWN)


def is_prerelease(version: str) -> bool:
    return "-" in version


def _components(version: str) -> tuple[int, int, int]:
    parts = _NON_NUMERIC.sub("", version).split(".")
    numbers: list[int] = []
    for part in parts[:3]:
        numbers.append(int(part) if part.isdigit() else 0)
    while len(numbers) < 3:
        numbers.append(0)
    return numbers[0], numbers[1], numbers[2]


def classify_change(from_version: str | None, to_version: str) -> str:
    """Return the ChangeKind for a move from ``from_version`` to ``to_version``."""
    if not from_version or from_version == INITIAL_VERSION:
        return ChangeKind.UNKNOWN

    if is_prerelease(to_version):
        return ChangeKind.PRERELEASE

    old_major, old_minor, old_patch = _components(from_version)
    new_major, new_minor, new_patch = _components(to_version)

    if new_major > old_major:
        return ChangeKind.MAJOR
    if new_minor > old_minor:
        return ChangeKind.MINOR
    if new_patch > old_patch:
        return ChangeKind.PATCH
    return ChangeKind.UNKNOWN


def simulate_previous_version(version: str) -> str:
    """Derive a fake prior version by decrementing the patch component.

    Used by debug mode to force a change notification without touching the
    last-seen store.
    """
    parts = version.split(".")
    if len(parts) < 3:
        return "0.0.0"

    leading = _LEADING_DIGITS.match(parts[2])
    patch = int(leading.group()) if leading else 0
    parts[2] = str(max(0, patch - 1))
    return ".".join(parts)
