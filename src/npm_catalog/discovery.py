"""Manifest discovery utilities."""

from __future__ import annotations

from pathlib import Path


EXCLUDES = {"node_modules", ".git", ".venv"}


def discover_manifests(root: Path, manifest: str = "package.json") -> list[Path]:
    """Find manifests named ``manifest`` under root, excluding vendor dirs.

    Paths are returned sorted so callers process files in a stable order.
    """
    root = root.resolve()
    found: list[Path] = []

    def should_skip(p: Path) -> bool:
        parts = set(p.parts)
        return any(ex in parts for ex in EXCLUDES)

    for path in root.rglob(manifest):
        if not path.is_file():
            continue
        if should_skip(path.relative_to(root)):
            continue
        found.append(path)

    return sorted(found)
