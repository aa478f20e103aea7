"""Normalise raw manifest entries into dependency records and back."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from .models import RawDep, ResolvedDepChange
from .parsers.semver import range_prefix, strip_range, version_diff

# Versions with these prefixes point somewhere other than the registry.
NON_REGISTRY_PROTOCOLS = (
    "workspace:",
    "catalog:",
    "link:",
    "file:",
    "portal:",
    "patch:",
    "github:",
    "git+",
    "git:",
    "http:",
    "https:",
)


def _split_alias(version: str) -> tuple[str, str] | None:
    """Return (real_name, range) for an ``npm:<name>@<range>`` alias."""
    if not version.startswith("npm:"):
        return None
    spec = version[len("npm:") :]
    # scoped names carry a leading "@" that is not the version separator
    idx = spec.rfind("@")
    if idx <= 0:
        return spec, ""
    return spec[:idx], spec[idx + 1 :]


def parse_dependency(
    name: str,
    version: str,
    source: str,
    should_update: Callable[[str], bool] | None = None,
) -> RawDep:
    """Build a ``RawDep`` for one ``name: version`` manifest pair.

    Protocol versions (``workspace:``, ``catalog:``, git and file references)
    are recorded but never scheduled for an update.
    """
    version = str(version)

    for protocol in NON_REGISTRY_PROTOCOLS:
        if version.startswith(protocol):
            return RawDep(
                name=name,
                current_version=version,
                source=source,
                update=False,
                protocol=protocol.rstrip(":+"),
            )

    alias = _split_alias(version)
    if alias is not None:
        real_name, version = alias
        return RawDep(
            name=real_name,
            current_version=version,
            source=source,
            update=should_update(real_name) if should_update else True,
            alias_name=name,
            protocol="npm",
        )

    return RawDep(
        name=name,
        current_version=version,
        source=source,
        update=should_update(name) if should_update else True,
    )


def resolve_change(dep: RawDep, target_version: str) -> ResolvedDepChange:
    """Pair ``dep`` with ``target_version``, keeping its range operator.

    ``target_version`` may be a bare version ("18.3.1") or a full range
    ("^18.3.1"); bare versions inherit the operator of the current range.
    """
    target = target_version.strip()
    if target and target == strip_range(target):
        target = f"{range_prefix(dep.current_version)}{target}"

    diff = version_diff(dep.current_version, target) if target else None
    resolve_error = "Unable to compare versions" if diff == "error" else None

    return ResolvedDepChange(
        name=dep.name,
        current_version=dep.current_version,
        source=dep.source,
        update=dep.update and bool(target) and target != dep.current_version,
        alias_name=dep.alias_name,
        protocol=dep.protocol,
        target_version=target or dep.current_version,
        diff=diff,
        resolve_error=resolve_error,
    )


def dump_dependencies(resolved: Iterable[ResolvedDepChange], source: str) -> dict[str, str]:
    """Collapse updated changes of one ``source`` into a ``{name: version}`` map."""
    data: dict[str, str] = {}
    for change in resolved:
        if change.source != source or not change.update:
            continue
        if change.alias_name:
            data[change.alias_name] = f"npm:{change.name}@{change.target_version}"
        else:
            data[change.name] = change.target_version
    return data
