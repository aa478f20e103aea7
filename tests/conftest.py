"""Shared pytest fixtures."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from npm_catalog.config import Options


@pytest.fixture
def options(tmp_path: Path) -> Options:
    """Return options rooted at a temporary directory."""
    return Options(cwd=tmp_path)


@pytest.fixture
def write_manifest(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper that writes a manifest below ``tmp_path``."""

    def _write(data: dict[str, Any], relative: str = "package.json", indent: Any = 2) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=indent) + "\n", encoding="utf-8")
        return path

    return _write
