"""Catalog naming, shape checks and nested-mapping helpers."""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Any

CATALOG_PREFIX = "bun-catalog:"
DEFAULT_CATALOG_KEY = "default"
DEFAULT_CATALOG_NAME = f"{CATALOG_PREFIX}{DEFAULT_CATALOG_KEY}"


def as_catalog_table(value: Any) -> dict[str, Any] | None:
    """Return ``value`` when it is usable as a catalog table, else None.

    Only JSON objects qualify; arrays, strings, numbers and null are not
    catalogs and are ignored rather than reported.
    """
    if isinstance(value, dict):
        return value
    return None


def catalog_name(key: str) -> str:
    return f"{CATALOG_PREFIX}{key}"


def is_catalog_name(name: str) -> bool:
    return name.startswith(CATALOG_PREFIX)


def catalog_key(name: str) -> str:
    """Strip the catalog prefix, e.g. "bun-catalog:react17" -> "react17"."""
    if not is_catalog_name(name):
        raise ValueError(f"Not a catalog name: {name!r}")
    return name[len(CATALOG_PREFIX) :]


def get_or_insert(mapping: MutableMapping[str, Any], key: str) -> dict[str, Any]:
    """Return ``mapping[key]``, storing a new empty dict there if it is missing.

    Raises:
        TypeError: If ``key`` holds something other than an object or null.
    """
    value = mapping.get(key)
    if value is None:
        value = {}
        mapping[key] = value
    elif not isinstance(value, dict):
        raise TypeError(f"Expected an object at {key!r}, found {type(value).__name__}")
    return value


def merge_versions(table: MutableMapping[str, Any], versions: Mapping[str, str]) -> None:
    """Shallow-merge ``versions`` into ``table``; new values win."""
    table.update(versions)
