"""Schema validation for npm-watch reports.

``npm-watch`` checks every report before printing it; the
``npm-watch-validate-report`` script checks a saved report file.
"""

from __future__ import annotations

import argparse
import json
import sys
from functools import lru_cache
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

DEFAULT_SCHEMA = Path(__file__).resolve().parents[1] / "schemas" / "report.schema.json"


@lru_cache(maxsize=None)
def _validator(schema_path: Path) -> Draft202012Validator:
    schema = json.loads(schema_path.read_text(encoding="utf-8"))
    Draft202012Validator.check_schema(schema)
    return Draft202012Validator(schema)


def _describe(error: ValidationError) -> str:
    location = "/".join(str(part) for part in error.absolute_path) or "<root>"
    return f"- {location}: {error.message}"


def validate_report(document: Any, schema_path: Path = DEFAULT_SCHEMA) -> None:
    """Raise ValueError listing every schema violation in ``document``."""
    errors = sorted(
        _validator(schema_path).iter_errors(document),
        key=lambda e: [str(part) for part in e.absolute_path],
    )
    if errors:
        raise ValueError("\n" + "\n".join(_describe(error) for error in errors))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Validate an npm-watch JSON report.")
    parser.add_argument("report", type=Path, help="Report file written by npm-watch")
    parser.add_argument("--schema", type=Path, default=DEFAULT_SCHEMA)
    args = parser.parse_args(argv)

    try:
        document = json.loads(args.report.read_text(encoding="utf-8"))
    except OSError as exc:
        print(f"ERROR: cannot read {args.report}: {exc}", file=sys.stderr)
        return 1
    except json.JSONDecodeError as exc:
        print(f"ERROR: {args.report} is not valid JSON: {exc}", file=sys.stderr)
        return 1

    try:
        validate_report(document, args.schema)
    except ValueError as exc:
        print(f"ERROR: {args.report} does not match the report schema:{exc}", file=sys.stderr)
        return 1

    print(f"{args.report}: valid")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
