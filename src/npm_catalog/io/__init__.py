"""Manifest readers and writers."""

from .bun_workspaces import ManifestParseError, load_bun_workspace, write_bun_workspace

__all__ = [
    "ManifestParseError",
    "load_bun_workspace",
    "write_bun_workspace",
]
