"""Catalog entry model."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .dependency import RawDep, ResolvedDepChange


class CatalogLocation(enum.Enum):
    """Where in the manifest a catalog table was found."""

    TOP_LEVEL = "top-level"
    WORKSPACES = "workspaces"


@dataclass
class CatalogEntry:
    """A named view over one catalog table of a manifest.

    ``raw`` is the parsed manifest shared by every entry loaded from the same
    file; the writer mutates it in place. ``location`` and ``name`` together
    locate the table inside it.
    """

    name: str
    location: CatalogLocation
    relative: str
    filepath: Path
    raw: dict[str, Any]
    deps: list[RawDep] = field(default_factory=list)
    resolved: list[ResolvedDepChange] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "location": self.location.value,
            "path": self.relative,
            "dependencies": {dep.alias_name or dep.name: dep.current_version for dep in self.deps},
            "updates": [change.to_dict() for change in self.resolved if change.update],
        }
