"""Tests for makepot.catalog.merge."""

from __future__ import annotations

from pathlib import Path

from makepot.catalog.merge import load_merge_base
from makepot.catalog.po import write_catalog
from makepot.models import Catalog, CatalogEntry
from tests._fixtures.project_builder import ProjectBuilder


class RecordingReader:
    """Reader double that records which paths were decoded."""

    def __init__(self, catalog: Catalog) -> None:
        self.catalog = catalog
        self.paths: list[Path] = []

    def read(self, path: Path) -> Catalog:
        self.paths.append(path)
        return self.catalog


def test_without_merge_returns_empty_catalog(project_builder: ProjectBuilder) -> None:
    reader = RecordingReader(Catalog())

    catalog = load_merge_base(project_builder.config(), reader)

    assert len(catalog) == 0
    assert reader.paths == []


def test_merge_carries_entries_but_not_headers_or_comment(project_builder: ProjectBuilder) -> None:
    existing = Catalog(domain="old", comment="Copyright (C) 2001 Old", headers={"X-Old": "1"})
    existing.add(CatalogEntry(original="From JS build", references=["build/index.js:1"]))
    destination = project_builder.path() / "my-project.pot"
    write_catalog(existing, destination)

    config = project_builder.config(merge=True)
    catalog = load_merge_base(config)

    entry = catalog.find("From JS build")
    assert entry is not None
    assert entry.references == ["build/index.js:1"]
    assert catalog.comment == ""
    assert "X-Old" not in catalog.headers
    assert catalog.domain is None


def test_merge_uses_injected_reader(project_builder: ProjectBuilder, tmp_path: Path) -> None:
    existing_path = tmp_path / "other.pot"
    existing_path.write_text('msgid ""\nmsgstr ""\n', encoding="utf-8")
    existing = Catalog()
    existing.add(CatalogEntry(original="Injected"))
    reader = RecordingReader(existing)

    catalog = load_merge_base(project_builder.config(merge=str(existing_path)), reader)

    assert reader.paths == [existing_path]
    assert catalog.find("Injected") is not None
