"""File primitives used by manifest loaders and writers."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_INDENT = "  "

_INDENT_RE = re.compile(r"^(?: +|\t+)")
_LONE_SURROGATE_RE = re.compile(r"[\ud800-\udfff]")


def read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def write_text(path: Path, content: str) -> None:
    # encode before opening so a failed encode leaves the file untouched
    path.write_bytes(content.encode("utf-8"))


def _count_indents(lines: list[str], ignore_single_spaces: bool) -> dict[tuple[str, int], list[int]]:
    # (char, size) -> [uses, weight]
    indents: dict[tuple[str, int], list[int]] = {}
    previous_size = 0
    previous_char: str | None = None
    key: tuple[str, int] | None = None

    for line in lines:
        if not line.strip():
            continue

        match = _INDENT_RE.match(line)
        if match is None:
            previous_size = 0
            previous_char = None
            continue

        whitespace = match.group(0)
        char = whitespace[0]
        size = len(whitespace)

        if ignore_single_spaces and char == " " and size == 1:
            continue

        if char != previous_char:
            previous_size = 0
        previous_char = char

        difference = size - previous_size
        previous_size = size

        if difference == 0:
            if key is not None:
                indents[key][1] += 1
            continue

        key = (char, abs(difference))
        counts = indents.setdefault(key, [0, 0])
        counts[0] += 1

    return indents


def detect_indent(text: str) -> str:
    """Return the indentation unit used by ``text``, or "" if there is none.

    The unit is the indentation step seen most often between consecutive
    lines, with ties broken by how many lines kept that step.
    """
    lines = text.splitlines()
    indents = _count_indents(lines, ignore_single_spaces=True)
    if not indents:
        indents = _count_indents(lines, ignore_single_spaces=False)
    if not indents:
        return ""

    char, size = max(indents, key=lambda k: (indents[k][0], indents[k][1]))
    return char * size


def write_json(path: Path, data: dict[str, Any]) -> None:
    """Serialise ``data`` to ``path`` keeping the indentation already on disk.

    The current file is read again so that edits made since loading are
    reflected; a file without indentation falls back to two spaces.
    """
    indent = detect_indent(read_text(path)) or DEFAULT_INDENT
    content = json.dumps(data, indent=indent, ensure_ascii=False)
    # paired surrogates are already joined by json.loads, so any left are lone
    content = _LONE_SURROGATE_RE.sub(lambda m: f"\\u{ord(m.group(0)):04x}", content)
    write_text(path, f"{content}\n")
    logger.debug("Wrote %s with indent %r", path, indent)
