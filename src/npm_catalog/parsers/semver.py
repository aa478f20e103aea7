"""Minimal semver range handling built atop packaging.version.

Works on single ranges such as "1.2.3", "^1.2.3", "~1.2.3" or ">=1.2.3";
"x" wildcards in the last positions (e.g., "4.12.x") read as zero.
"""

from __future__ import annotations

import re

from packaging.version import InvalidVersion, Version

_PREFIX_RE = re.compile(r"^(\^|~|>=|<=|>|<|==|=)?\s*")


def _parse_version(v: str) -> Version:
    return Version(v.replace(".x", ".0").replace(".*", ".0"))


def range_prefix(expr: str) -> str:
    """Return the operator in front of a single range, e.g. "^" for "^1.2.3"."""
    match = _PREFIX_RE.match(expr.strip())
    return (match.group(1) if match else None) or ""


def strip_range(expr: str) -> str:
    """Return the bare version of a single range, e.g. "1.2.3" for "^1.2.3"."""
    return _PREFIX_RE.sub("", expr.strip(), count=1)


def version_diff(current: str, target: str) -> str | None:
    """Classify the move from ``current`` to ``target``.

    Returns "major", "minor" or "patch" for the most significant component
    that changed, None when both resolve to the same version and "error" when
    either side is not a plain version or single range.
    """
    try:
        old = _parse_version(strip_range(current))
        new = _parse_version(strip_range(target))
    except InvalidVersion:
        return "error"

    if old == new:
        return None
    if old.major != new.major:
        return "major"
    if old.minor != new.minor:
        return "minor"
    return "patch"
