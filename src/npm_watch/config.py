"""Configuration loader for npm-watch.

Settings are read from a JSON object (default: ``npm-watch.json`` in the
working directory). Example::

    {
      "packages": "react, @types/node",
      "tag": "custom",
      "customTag": "canary",
      "includePrerelease": false
    }

Unknown keys are ignored. ``packages`` may also be a list of names.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .http import DEFAULT_TIMEOUT_MS
from .registry import DEFAULT_REGISTRY_URL


DEFAULT_CONFIG_PATH = Path("npm-watch.json")
CONFIG_PATH_ENV_VAR = "NPM_WATCH_CONFIG"

TAG_CHOICES = ("latest", "next", "beta", "custom")
DEFAULT_TAG = "latest"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be loaded or is invalid."""


def parse_packages(raw: str | list[str]) -> tuple[str, ...]:
    """Split a comma-separated string (or list) into trimmed package names."""
    items = raw.split(",") if isinstance(raw, str) else raw
    return tuple(item.strip() for item in items if item.strip())


def _bool_field(data: dict[str, Any], key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"Invalid '{key}' field (must be boolean)")
    return value


@dataclass(slots=True, frozen=True)
class WatchSettings:
    """Settings for one watch run."""

    packages: tuple[str, ...]
    tag: str = DEFAULT_TAG
    custom_tag: str = ""
    registry: str = DEFAULT_REGISTRY_URL
    include_prerelease: bool = True
    skip_initial: bool = True
    fetch_release_info: bool = True
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    debug_mode: bool = False

    @property
    def effective_tag(self) -> str:
        """The dist-tag to query; an empty custom tag falls back to ``latest``."""
        if self.tag == "custom":
            return self.custom_tag or DEFAULT_TAG
        return self.tag

    @property
    def registry_base_url(self) -> str:
        return self.registry[:-1] if self.registry.endswith("/") else self.registry

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WatchSettings:
        """Create settings from a dictionary, validating each field."""
        raw_packages = data.get("packages", [])
        if isinstance(raw_packages, list):
            if not all(isinstance(item, str) for item in raw_packages):
                raise ConfigError("Invalid 'packages' field (list entries must be strings)")
        elif not isinstance(raw_packages, str):
            raise ConfigError("Invalid 'packages' field (must be string or list)")

        tag = data.get("tag", DEFAULT_TAG)
        if tag not in TAG_CHOICES:
            raise ConfigError(
                f"Invalid 'tag' field '{tag}' (expected one of: {', '.join(TAG_CHOICES)})"
            )

        custom_tag = data.get("customTag", "")
        if not isinstance(custom_tag, str):
            raise ConfigError("Invalid 'customTag' field (must be string)")

        registry = data.get("registry", DEFAULT_REGISTRY_URL)
        if not isinstance(registry, str) or not registry:
            raise ConfigError("Invalid 'registry' field (must be non-empty string)")

        timeout_ms = data.get("timeoutMs", DEFAULT_TIMEOUT_MS)
        if isinstance(timeout_ms, bool) or not isinstance(timeout_ms, int) or timeout_ms <= 0:
            raise ConfigError("Invalid 'timeoutMs' field (must be a positive integer)")

        return cls(
            packages=parse_packages(raw_packages),
            tag=tag,
            custom_tag=custom_tag.strip(),
            registry=registry,
            include_prerelease=_bool_field(data, "includePrerelease", True),
            skip_initial=_bool_field(data, "skipInitial", True),
            fetch_release_info=_bool_field(data, "fetchReleaseInfo", True),
            timeout_ms=timeout_ms,
            debug_mode=_bool_field(data, "debugMode", False),
        )


def _resolve_config_path(path: Path | str | None = None) -> Path:
    """Resolve the configuration file path.

    Priority:
    1. Explicit path argument
    2. NPM_WATCH_CONFIG environment variable
    3. npm-watch.json in the working directory
    """
    if path is not None:
        return Path(path)

    env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if env_path:
        return Path(env_path)

    return DEFAULT_CONFIG_PATH


def load_settings(path: Path | str | None = None) -> WatchSettings:
    """Load and validate settings from a JSON file.

    Raises:
        ConfigError: If the file cannot be read or contains invalid data.
    """
    config_path = _resolve_config_path(path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration file: {exc}") from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in configuration file: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a JSON object")

    return WatchSettings.from_dict(data)
