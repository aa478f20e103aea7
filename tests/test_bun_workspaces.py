from __future__ import annotations

import json
from pathlib import Path

import pytest

from npm_catalog.dependencies import resolve_change
from npm_catalog.io import bun_workspaces
from npm_catalog.io.bun_workspaces import (
    ManifestParseError,
    load_bun_workspace,
    set_catalog_versions,
    write_bun_workspace,
)
from npm_catalog.models import CatalogEntry, CatalogLocation, ResolvedDepChange


def _all(_name: str) -> bool:
    return True


def _summary(entries: list[CatalogEntry]) -> list[tuple[str, str]]:
    return [(e.name, e.location.value) for e in entries]


def _versions(entry: CatalogEntry) -> dict[str, str]:
    return {dep.name: dep.current_version for dep in entry.deps}


def test_loads_default_and_named_catalogs(write_manifest, options):
    write_manifest(
        {"catalog": {"react": "^18.2.0"}, "catalogs": {"react17": {"react": "^17.0.2"}}}
    )

    entries = load_bun_workspace("package.json", options, _all)

    assert _summary(entries) == [
        ("bun-catalog:default", "top-level"),
        ("bun-catalog:react17", "top-level"),
    ]
    assert _versions(entries[0]) == {"react": "^18.2.0"}
    assert _versions(entries[1]) == {"react": "^17.0.2"}
    assert all(dep.source == "bun-workspace" for e in entries for dep in e.deps)
    assert entries[0].raw is entries[1].raw
    assert entries[0].filepath == options.cwd / "package.json"


def test_top_level_catalogs_take_priority_over_workspaces(write_manifest, options):
    write_manifest(
        {
            "catalog": {"react": "^18.2.0"},
            "catalogs": {"shared": {"lodash": "^4.17.21"}},
            "workspaces": {
                "packages": ["packages/*"],
                "catalog": {"react": "^17.0.2"},
                "catalogs": {
                    "shared": {"lodash": "^3.0.0"},
                    "extra": {"zod": "^3.22.0"},
                },
            },
        }
    )

    entries = load_bun_workspace("package.json", options, _all)

    assert _summary(entries) == [
        ("bun-catalog:default", "top-level"),
        ("bun-catalog:shared", "top-level"),
        ("bun-catalog:extra", "workspaces"),
    ]
    assert _versions(entries[0]) == {"react": "^18.2.0"}
    assert _versions(entries[1]) == {"lodash": "^4.17.21"}


def test_order_is_top_level_then_workspaces(write_manifest, options):
    write_manifest(
        {
            "catalogs": {"b": {"x": "1.0.0"}, "a": {"y": "1.0.0"}},
            "workspaces": {
                "catalog": {"react": "^18.2.0"},
                "catalogs": {"z": {"w": "1.0.0"}, "a": {"y": "2.0.0"}},
            },
        }
    )

    entries = load_bun_workspace("package.json", options, _all)

    assert _summary(entries) == [
        ("bun-catalog:b", "top-level"),
        ("bun-catalog:a", "top-level"),
        ("bun-catalog:default", "workspaces"),
        ("bun-catalog:z", "workspaces"),
    ]


@pytest.mark.parametrize("bad", [["react"], "react", 18, None, True])
def test_non_object_catalogs_are_ignored(write_manifest, options, bad):
    write_manifest(
        {
            "catalog": bad,
            "catalogs": {"bad": bad, "ok": {"react": "^18.2.0"}},
            "workspaces": {"catalogs": bad},
        }
    )

    entries = load_bun_workspace("package.json", options, _all)

    assert _summary(entries) == [("bun-catalog:ok", "top-level")]


def test_workspaces_array_and_missing_catalogs(write_manifest, options):
    write_manifest({"name": "root", "workspaces": ["packages/*"], "catalogs": []})

    assert load_bun_workspace("package.json", options, _all) == []


def test_uses_preparsed_document_without_reading(options):
    raw = {"catalog": {"react": "^18.2.0"}}

    entries = load_bun_workspace("missing/package.json", options, _all, existing_raw=raw)

    assert [e.name for e in entries] == ["bun-catalog:default"]
    assert entries[0].raw is raw


def test_should_update_is_passed_to_dependencies(write_manifest, options):
    write_manifest({"catalog": {"react": "^18.2.0", "vue": "^3.4.0"}})

    entries = load_bun_workspace("package.json", options, lambda name: name != "react")

    assert {dep.name: dep.update for dep in entries[0].deps} == {"react": False, "vue": True}


def test_invalid_json_raises_parse_error(tmp_path: Path, options):
    (tmp_path / "package.json").write_text("{ not json", encoding="utf-8")

    with pytest.raises(ManifestParseError):
        load_bun_workspace("package.json", options, _all)


def test_missing_file_raises_os_error(options):
    with pytest.raises(FileNotFoundError):
        load_bun_workspace("package.json", options, _all)


def test_write_updates_default_catalog(write_manifest, options):
    path = write_manifest(
        {"catalog": {"react": "^18.2.0"}, "catalogs": {"react17": {"react": "^17.0.2"}}}
    )
    entry = load_bun_workspace("package.json", options, _all)[0]
    entry.resolved = [resolve_change(dep, "^18.3.1") for dep in entry.deps]

    write_bun_workspace(entry, options)

    assert json.loads(path.read_text(encoding="utf-8")) == {
        "catalog": {"react": "^18.3.1"},
        "catalogs": {"react17": {"react": "^17.0.2"}},
    }


def test_write_preserves_everything_else(write_manifest, options):
    original = {
        "name": "monorepo",
        "private": True,
        "custom": {"nested": [1, 2, {"deep": None}]},
        "catalog": {"react": "^18.2.0", "react-dom": "^18.2.0"},
        "catalogs": {"legacy": {"react": "^16.14.0"}},
        "workspaces": {"packages": ["apps/*"], "catalog": {"vite": "^5.0.0"}},
        "scripts": {"build": "bun run build"},
    }
    path = write_manifest(original)
    entry = load_bun_workspace("package.json", options, _all)[0]
    entry.resolved = [resolve_change(entry.deps[0], "18.3.1")]

    write_bun_workspace(entry, options)

    expected = json.loads(json.dumps(original))
    expected["catalog"]["react"] = "^18.3.1"
    assert path.read_text(encoding="utf-8") == json.dumps(expected, indent=2) + "\n"


def test_write_workspaces_catalog(write_manifest, options):
    path = write_manifest(
        {"workspaces": {"packages": ["packages/*"], "catalogs": {"tools": {"eslint": "^8.0.0"}}}}
    )
    entry = load_bun_workspace("package.json", options, _all)[0]
    entry.resolved = [resolve_change(entry.deps[0], "^9.1.0")]

    write_bun_workspace(entry, options)

    assert json.loads(path.read_text(encoding="utf-8")) == {
        "workspaces": {"packages": ["packages/*"], "catalogs": {"tools": {"eslint": "^9.1.0"}}}
    }


def test_write_creates_missing_workspaces_catalog(write_manifest, options):
    path = write_manifest({"name": "root", "version": "1.0.0"})
    raw = json.loads(path.read_text(encoding="utf-8"))
    entry = CatalogEntry(
        name="bun-catalog:tools",
        location=CatalogLocation.WORKSPACES,
        relative="package.json",
        filepath=path,
        raw=raw,
        resolved=[
            ResolvedDepChange(
                name="eslint",
                current_version="^8.0.0",
                source="bun-workspace",
                target_version="^9.0.0",
            )
        ],
    )

    write_bun_workspace(entry, options)

    assert json.loads(path.read_text(encoding="utf-8")) == {
        "name": "root",
        "version": "1.0.0",
        "workspaces": {"catalogs": {"tools": {"eslint": "^9.0.0"}}},
    }


def test_sequential_writes_share_the_document(write_manifest, options):
    path = write_manifest(
        {"catalog": {"react": "^18.2.0"}, "catalogs": {"react17": {"react": "^17.0.2"}}}
    )
    default, react17 = load_bun_workspace("package.json", options, _all)
    default.resolved = [resolve_change(default.deps[0], "^18.3.1")]
    react17.resolved = [resolve_change(react17.deps[0], "^17.0.3")]

    write_bun_workspace(default, options)
    write_bun_workspace(react17, options)

    assert json.loads(path.read_text(encoding="utf-8")) == {
        "catalog": {"react": "^18.3.1"},
        "catalogs": {"react17": {"react": "^17.0.3"}},
    }


def test_empty_updates_do_not_write(write_manifest, options, monkeypatch):
    write_manifest({"catalog": {"react": "^18.2.0"}})
    calls: list[Path] = []
    monkeypatch.setattr(bun_workspaces, "write_json", lambda path, data: calls.append(path))
    entry = load_bun_workspace("package.json", options, _all)[0]

    write_bun_workspace(entry, options)
    entry.resolved = [resolve_change(entry.deps[0], "^18.2.0")]
    write_bun_workspace(entry, options)

    assert calls == []


@pytest.mark.parametrize("indent", ["\t", 4, 2])
def test_write_keeps_file_indentation(write_manifest, options, indent):
    path = write_manifest({"name": "x", "catalog": {"react": "^18.2.0"}}, indent=indent)
    entry = load_bun_workspace("package.json", options, _all)[0]
    entry.resolved = [resolve_change(entry.deps[0], "^18.3.1")]

    write_bun_workspace(entry, options)

    expected = {"name": "x", "catalog": {"react": "^18.3.1"}}
    assert path.read_text(encoding="utf-8") == json.dumps(expected, indent=indent) + "\n"


def test_write_falls_back_to_two_spaces(tmp_path: Path, options):
    path = tmp_path / "package.json"
    path.write_text('{"catalog":{"react":"^18.2.0"}}', encoding="utf-8")
    entry = load_bun_workspace("package.json", options, _all)[0]
    entry.resolved = [resolve_change(entry.deps[0], "^18.3.1")]

    write_bun_workspace(entry, options)

    assert path.read_text(encoding="utf-8") == '{\n  "catalog": {\n    "react": "^18.3.1"\n  }\n}\n'


def test_set_catalog_versions_merges_shallowly():
    raw = {"catalogs": {"ui": {"react": "^18.2.0", "clsx": "^2.0.0"}}}

    set_catalog_versions(raw, CatalogLocation.TOP_LEVEL, "ui", {"react": "^18.3.1", "zod": "^3.0.0"})

    assert raw == {"catalogs": {"ui": {"react": "^18.3.1", "clsx": "^2.0.0", "zod": "^3.0.0"}}}
    assert list(raw["catalogs"]["ui"]) == ["react", "clsx", "zod"]


def test_write_round_trips_escaped_surrogates(tmp_path: Path, options):
    path = tmp_path / "package.json"
    path.write_text(
        '{\n  "description": "\\ud800",\n  "catalog": {\n    "react": "^18.2.0"\n  }\n}\n',
        encoding="utf-8",
    )
    entry = load_bun_workspace("package.json", options, _all)[0]
    entry.resolved = [resolve_change(entry.deps[0], "^18.3.1")]

    write_bun_workspace(entry, options)

    assert path.read_text(encoding="utf-8") == (
        '{\n  "description": "\\ud800",\n  "catalog": {\n    "react": "^18.3.1"\n  }\n}\n'
    )


def test_empty_package_name_is_loaded(write_manifest, options):
    write_manifest({"catalog": {"": "1.0.0", "react": "^18.2.0"}})

    entries = load_bun_workspace("package.json", options, _all)

    assert _versions(entries[0]) == {"": "1.0.0", "react": "^18.2.0"}
