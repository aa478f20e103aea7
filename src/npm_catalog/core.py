"""Core catalog entrypoints.

This module ties discovery, loading and write-back together so that the CLI
and other callers share one code path.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from .config import Options
from .dependencies import resolve_change
from .discovery import discover_manifests
from .io.bun_workspaces import load_bun_workspace, write_bun_workspace
from .models import CatalogEntry
from .report import aggregate

logger = logging.getLogger(__name__)


def load_catalogs(options: Options) -> list[CatalogEntry]:
    """Load the catalogs of every manifest under ``options.cwd``.

    Manifests are loaded in path order; each one gets its own document, shared
    by all of its entries.
    """
    root = options.cwd.resolve()
    entries: list[CatalogEntry] = []
    for path in discover_manifests(root, options.manifest):
        relative = path.relative_to(root).as_posix()
        found = load_bun_workspace(relative, options, options.should_update)
        if found:
            logger.info("Found %d catalog(s) in %s", len(found), relative)
        entries.extend(found)
    return entries


def resolve_targets(entries: Iterable[CatalogEntry], targets: Mapping[str, str]) -> None:
    """Fill ``resolved`` on each entry from a ``{package: version}`` mapping.

    Dependencies without a target keep their current version.
    """
    for entry in entries:
        entry.resolved = [resolve_change(dep, targets.get(dep.name, "")) for dep in entry.deps]


def apply_targets(
    entries: list[CatalogEntry],
    targets: Mapping[str, str],
    options: Options,
) -> int:
    """Resolve ``entries`` against ``targets`` and write changed catalogs.

    Writes happen one entry at a time, so entries sharing a manifest see each
    other's changes. Returns the number of catalogs that changed.
    """
    resolve_targets(entries, targets)
    written = 0
    for entry in entries:
        if not any(change.update for change in entry.resolved):
            continue
        write_bun_workspace(entry, options)
        written += 1
    return written


def check_catalogs(
    options: Options,
    targets: Mapping[str, str] | None = None,
    write: bool = False,
) -> dict[str, Any]:
    """Load all catalogs, optionally apply ``targets``, and return a report.

    Params:
        options: loader options (working directory and package filters)
        targets: optional package -> version mapping to move catalogs to
        write: if True, changed catalogs are written back to their manifests

    Returns: dict report (see ``report.aggregate``)
    """
    entries = load_catalogs(options)
    if targets:
        if write:
            apply_targets(entries, targets, options)
        else:
            resolve_targets(entries, targets)
    return aggregate(entries)
