"""Load and write Bun workspace catalogs in ``package.json``.

Catalogs may be declared at the document root or under ``workspaces``::

    {
      "catalog": {"react": "^18.2.0"},
      "catalogs": {"react17": {"react": "^17.0.2"}},
      "workspaces": {"catalog": {...}, "catalogs": {...}}
    }

When the same catalog name exists in both places the root one wins.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from functools import partial
from typing import Any

from ..config import Options
from ..dependencies import dump_dependencies, parse_dependency
from ..models import CatalogEntry, CatalogLocation
from .catalogs import (
    DEFAULT_CATALOG_KEY,
    DEFAULT_CATALOG_NAME,
    as_catalog_table,
    catalog_key,
    catalog_name,
    get_or_insert,
    is_catalog_name,
    merge_versions,
)
from .files import read_text, write_json

logger = logging.getLogger(__name__)

SOURCE = "bun-workspace"


class ManifestParseError(ValueError):
    """Raised when a manifest is not valid JSON."""


def _create_entry(
    name: str,
    table: dict[str, Any],
    location: CatalogLocation,
    *,
    relative: str,
    options: Options,
    raw: dict[str, Any],
    should_update: Callable[[str], bool],
) -> CatalogEntry:
    deps = [
        parse_dependency(pkg, version, SOURCE, should_update) for pkg, version in table.items()
    ]
    return CatalogEntry(
        name=name,
        location=location,
        relative=relative,
        filepath=options.cwd / relative,
        raw=raw,
        deps=deps,
    )


def _extract_catalogs(
    source: dict[str, Any],
    location: CatalogLocation,
    claimed: set[str],
    create: Callable[[str, dict[str, Any], CatalogLocation], CatalogEntry],
) -> list[CatalogEntry]:
    result: list[CatalogEntry] = []

    default = as_catalog_table(source.get("catalog"))
    if default is not None and DEFAULT_CATALOG_NAME not in claimed:
        result.append(create(DEFAULT_CATALOG_NAME, default, location))
        claimed.add(DEFAULT_CATALOG_NAME)
    elif "catalog" in source and default is None:
        logger.debug("Ignoring non-object catalog at %s", location.value)

    named = as_catalog_table(source.get("catalogs"))
    if named is None:
        return result

    for key, value in named.items():
        name = catalog_name(key)
        table = as_catalog_table(value)
        if table is None:
            logger.debug("Ignoring non-object catalog %s at %s", name, location.value)
            continue
        if name in claimed:
            logger.debug("Catalog %s at %s is shadowed by an earlier one", name, location.value)
            continue
        result.append(create(name, table, location))
        claimed.add(name)

    return result


def load_bun_workspace(
    relative: str,
    options: Options,
    should_update: Callable[[str], bool],
    existing_raw: dict[str, Any] | None = None,
) -> list[CatalogEntry]:
    """Return one entry per catalog declared in the manifest at ``relative``.

    Args:
        relative: Manifest path relative to ``options.cwd``.
        options: Loader options.
        should_update: Decides whether a dependency is scheduled for an update.
        existing_raw: Already parsed manifest to use instead of reading the file.

    Raises:
        ManifestParseError: If the file is not valid JSON.
        OSError: If the file cannot be read.
    """
    filepath = options.cwd / relative
    if existing_raw is not None:
        raw = existing_raw
    else:
        try:
            raw = json.loads(read_text(filepath))
        except json.JSONDecodeError as exc:
            raise ManifestParseError(f"Failed to parse {filepath}: {exc}") from exc

    if not isinstance(raw, dict):
        return []

    create = partial(
        _create_entry,
        relative=relative,
        options=options,
        raw=raw,
        should_update=should_update,
    )

    claimed: set[str] = set()
    catalogs = _extract_catalogs(raw, CatalogLocation.TOP_LEVEL, claimed, create)

    workspaces = as_catalog_table(raw.get("workspaces"))
    if workspaces is not None:
        catalogs.extend(_extract_catalogs(workspaces, CatalogLocation.WORKSPACES, claimed, create))

    logger.debug("Loaded %d catalog(s) from %s", len(catalogs), filepath)
    return catalogs


def set_catalog_versions(
    raw: dict[str, Any],
    location: CatalogLocation,
    key: str,
    versions: dict[str, str],
) -> None:
    """Merge ``versions`` into the catalog ``key`` at ``location`` of ``raw``."""
    target = raw if location is CatalogLocation.TOP_LEVEL else get_or_insert(raw, "workspaces")

    if key == DEFAULT_CATALOG_KEY:
        table = get_or_insert(target, "catalog")
    else:
        table = get_or_insert(get_or_insert(target, "catalogs"), key)
    merge_versions(table, versions)


def write_bun_workspace(entry: CatalogEntry, options: Options) -> None:
    """Write the updated versions of ``entry`` back to its manifest.

    Nothing is written when no dependency of the entry changed.

    Raises:
        OSError: If the manifest cannot be read or written.
    """
    versions = dump_dependencies(entry.resolved, SOURCE)
    if not versions:
        return

    if not is_catalog_name(entry.name):
        return

    set_catalog_versions(entry.raw, entry.location, catalog_key(entry.name), versions)
    write_json(entry.filepath, entry.raw)
    logger.info("Updated %d version(s) in %s (%s)", len(versions), entry.relative, entry.name)
