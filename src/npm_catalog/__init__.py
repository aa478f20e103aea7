"""npm-catalog core package.

Loads Bun workspace catalogs from ``package.json`` manifests and writes
updated versions back without disturbing the rest of the document.
"""

__all__ = [
    "core",
]
