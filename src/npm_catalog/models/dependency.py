"""Dependency records shared by the loader, resolver and writer."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class RawDep:
    """A dependency as declared in a manifest."""

    name: str
    current_version: str
    source: str
    update: bool = True
    alias_name: str | None = None
    protocol: str | None = None


@dataclass(slots=True)
class ResolvedDepChange(RawDep):
    """A dependency paired with the version it should move to."""

    target_version: str = ""
    diff: str | None = None
    resolve_error: str | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.alias_name or self.name,
            "currentVersion": self.current_version,
            "targetVersion": self.target_version,
            "diff": self.diff,
            "update": self.update,
        }
