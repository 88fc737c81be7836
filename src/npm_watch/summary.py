"""Human-readable summary rendering for $GITHUB_STEP_SUMMARY."""

from __future__ import annotations

from typing import Any


def render_summary(report: dict[str, Any]) -> str:
    """Return a Markdown string with totals and a table of detected changes."""
    totals = report.get("totals", {})
    changes = report.get("changes", [])
    failures = report.get("failures", [])

    lines = []
    lines.append("# npm-watch Summary")
    lines.append("")
    lines.append(f"Changes: {totals.get('changes', 0)} | Failures: {totals.get('failures', 0)}")
    lines.append("")
    lines.append("| Package | From | To | Type | Changelog |")
    lines.append("| --- | --- | --- | --- | --- |")

    if not changes:
        lines.append("| (no changes detected) | n/a | n/a | n/a | n/a |")

    for change in changes:
        pkg = change.get("package", "")
        old = change.get("from", "")
        new = change.get("to", "")
        kind = change.get("changeType", "unknown")
        link = change.get("changelogUrl")
        if link:
            title = change.get("releaseTitle") or new
            link = f"[{title}]({link})"
        lines.append(f"| {pkg} | {old} | {new} | {kind} | {link or 'n/a'} |")

    if failures:
        lines.append("")
        lines.append("Failed checks:")
        for failure in failures:
            lines.append(f"- {failure.get('package')}: {failure.get('error')}")

    return "\n".join(lines) + "\n"
