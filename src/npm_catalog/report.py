"""Report aggregation and schema-friendly output."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from .models import CatalogEntry


def aggregate(entries: Iterable[CatalogEntry]) -> dict[str, Any]:
    """Aggregate catalog entries into a single report.

    Each catalog contributes its name, location, manifest path, declared
    dependencies and any pending updates. Totals count catalogs, declared
    dependencies and updates across all manifests.
    """
    catalogs = [entry.to_dict() for entry in entries]
    total_dependencies = sum(len(c["dependencies"]) for c in catalogs)
    total_updates = sum(len(c["updates"]) for c in catalogs)

    return {
        "version": "1",
        "hasUpdates": total_updates > 0,
        "catalogs": catalogs,
        "totals": {
            "catalogs": len(catalogs),
            "dependencies": total_dependencies,
            "updates": total_updates,
        },
    }
