"""Command-line entrypoint for a single watch run.

Usage:
  npm-watch [--config npm-watch.json] [--state .npm-watch-state.json]
            [--packages "react, @types/node"] [--tag next] [--debug]

Prints the JSON report to stdout. Exit codes: 0 on success, 1 when every
package check failed, 2 on configuration or state errors.
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import os
import sys
from pathlib import Path

from .config import TAG_CHOICES, ConfigError, WatchSettings, load_settings, parse_packages
from .core import watch_packages
from .http import RequestsFetcher
from .report import aggregate
from .state import DEFAULT_STATE_PATH, StateError, StateFile
from .summary import render_summary
from .validators.report import validate_report

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="npm-watch", description="Watch npm dist-tags.")
    parser.add_argument("--config", type=Path, default=None, help="Path to settings JSON")
    parser.add_argument("--state", type=Path, default=DEFAULT_STATE_PATH)
    parser.add_argument("--packages", default=None, help="Comma-separated package names")
    parser.add_argument("--tag", default=None, help=f"One of {', '.join(TAG_CHOICES)} or any dist-tag")
    parser.add_argument("--registry", default=None)
    parser.add_argument("--no-release-info", action="store_true")
    parser.add_argument("--debug", action="store_true", help="Simulate changes on every run")
    parser.add_argument("--summary", type=Path, default=None, help="Append Markdown summary here")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def resolve_settings(args: argparse.Namespace) -> WatchSettings:
    """Load settings from file and apply command-line overrides."""
    try:
        settings = load_settings(args.config)
    except ConfigError:
        # Without an explicit config, --packages alone is enough to run.
        if args.config is not None or os.environ.get("NPM_WATCH_CONFIG") or not args.packages:
            raise
        settings = WatchSettings(packages=())

    overrides: dict[str, object] = {}
    if args.packages:
        overrides["packages"] = parse_packages(args.packages)
    if args.tag:
        if args.tag in TAG_CHOICES:
            overrides["tag"] = args.tag
        else:
            overrides["tag"] = "custom"
            overrides["custom_tag"] = args.tag
    if args.registry:
        overrides["registry"] = args.registry
    if args.no_release_info:
        overrides["fetch_release_info"] = False
    if args.debug:
        overrides["debug_mode"] = True

    return dataclasses.replace(settings, **overrides)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        settings = resolve_settings(args)
        state = StateFile(args.state)
        last_seen = state.load()
    except (ConfigError, StateError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2

    result = watch_packages(settings, last_seen, RequestsFetcher())
    state.save()

    report = aggregate(result.changes, result.failures)
    try:
        validate_report(report)
    except ValueError as exc:
        print(f"ERROR: generated report is invalid:{exc}", file=sys.stderr)
        return 1
    print(json.dumps(report, indent=2))

    if args.summary is not None:
        with args.summary.open("a", encoding="utf-8") as handle:
            handle.write(render_summary(report))

    if settings.packages and len(result.failures) == len(settings.packages):
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
