"""Configuration loader for catalog checks.

Reads options from a JSON or YAML file (default: ``.npmcatalogrc.json`` in the
working directory) and validates them against ``OPTIONS_SCHEMA``. All keys are
optional; ``include`` and ``exclude`` are lists of glob patterns matched
against package names.
"""

from __future__ import annotations

import json
import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator

DEFAULT_CONFIG_NAME = ".npmcatalogrc.json"
CONFIG_PATH_ENV_VAR = "NPM_CATALOG_CONFIG"

OPTIONS_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "include": {"type": "array", "items": {"type": "string", "minLength": 1}},
        "exclude": {"type": "array", "items": {"type": "string", "minLength": 1}},
        "manifest": {"type": "string", "minLength": 1},
    },
}


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be loaded or is invalid."""


@dataclass(slots=True, frozen=True)
class Options:
    """Options shared by the catalog loader and writer."""

    cwd: Path = field(default_factory=Path.cwd)
    include: tuple[str, ...] = ()
    exclude: tuple[str, ...] = ()
    manifest: str = "package.json"

    def should_update(self, name: str) -> bool:
        """Return True when ``name`` passes the include/exclude filters."""
        if self.include and not any(fnmatchcase(name, p) for p in self.include):
            return False
        return not any(fnmatchcase(name, p) for p in self.exclude)

    @classmethod
    def from_dict(cls, data: dict[str, Any], cwd: Path) -> Options:
        return cls(
            cwd=cwd,
            include=tuple(data.get("include", ())),
            exclude=tuple(data.get("exclude", ())),
            manifest=data.get("manifest", "package.json"),
        )


def _format_errors(errors: Iterable) -> str:
    messages = []
    for error in errors:
        pointer = "/".join(str(p) for p in error.path)
        messages.append(f"- {pointer or '<root>'}: {error.message}")
    return "\n".join(messages)


def _resolve_config_path(path: Path | str | None, cwd: Path) -> tuple[Path, bool]:
    """Resolve the configuration file path and whether it was asked for.

    Priority:
    1. Explicit path argument
    2. NPM_CATALOG_CONFIG environment variable
    3. Default file in the working directory (optional)
    """
    if path is not None:
        return Path(path), True

    env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if env_path:
        return Path(env_path), True

    return cwd / DEFAULT_CONFIG_NAME, False


def _parse(config_path: Path, content: str) -> Any:
    if config_path.suffix in {".yaml", ".yml"}:
        try:
            return yaml.safe_load(content) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in configuration file: {exc}") from exc
    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in configuration file: {exc}") from exc


def load_options(path: Path | str | None = None, cwd: Path | str | None = None) -> Options:
    """Load and validate options from a configuration file.

    Args:
        path: Optional path to the config file. If not provided, uses the
            NPM_CATALOG_CONFIG env var or falls back to the default file in
            ``cwd``, which may be absent.
        cwd: Directory manifests are resolved against; defaults to the
            current working directory.

    Returns:
        An Options object.

    Raises:
        ConfigError: If a requested file is missing, unreadable or invalid.
    """
    base = Path(cwd) if cwd is not None else Path.cwd()
    config_path, explicit = _resolve_config_path(path, base)

    if not config_path.exists():
        if explicit:
            raise ConfigError(f"Configuration file not found: {config_path}")
        return Options(cwd=base)

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration file: {exc}") from exc

    data = _parse(config_path, content)

    validator = Draft202012Validator(OPTIONS_SCHEMA)
    errors = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.path])
    if errors:
        raise ConfigError("Configuration failed validation:\n" + _format_errors(errors))

    return Options.from_dict(data, base)
