"""Human-readable Markdown summary of a catalog report."""

from __future__ import annotations

from typing import Any


def render_summary(report: dict[str, Any]) -> str:
    """Return a Markdown string with totals and a table of catalog versions."""
    totals = report.get("totals", {})
    catalogs = report.get("catalogs", [])

    lines = []
    lines.append("# npm-catalog Summary")
    lines.append("")
    lines.append(
        f"Catalogs: {totals.get('catalogs', 0)} | Dependencies: {totals.get('dependencies', 0)}"
        f" | Updates: {totals.get('updates', 0)}"
    )
    lines.append("")
    lines.append("| Manifest | Catalog | Location | Package | Current | Target |")
    lines.append("| --- | --- | --- | --- | --- | --- |")

    has_rows = False

    for catalog in catalogs:
        path = catalog.get("path") or "(unknown manifest)"
        name = catalog.get("name", "")
        location = catalog.get("location", "")
        targets = {u.get("name"): u.get("targetVersion") for u in catalog.get("updates") or []}
        for pkg, current in (catalog.get("dependencies") or {}).items():
            target = targets.get(pkg, "n/a")
            lines.append(f"| {path} | {name} | {location} | {pkg} | {current} | {target} |")
            has_rows = True

    if not has_rows:
        lines.append("| (no catalogs found) | n/a | n/a | n/a | n/a | n/a |")

    return "\n".join(lines) + "\n"
