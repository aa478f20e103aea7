"""Data models for catalog loading and write-back."""

from __future__ import annotations

from .catalog_entry import CatalogEntry, CatalogLocation
from .dependency import RawDep, ResolvedDepChange

__all__ = [
    "CatalogEntry",
    "CatalogLocation",
    "RawDep",
    "ResolvedDepChange",
]
