"""Tests for makepot.diagnostics."""

from __future__ import annotations

import logging

import pytest

from makepot.diagnostics import find_ambiguous_comments, report_ambiguous_comments
from makepot.models import Catalog, CatalogEntry


def _catalog() -> Catalog:
    catalog = Catalog()
    catalog.add(CatalogEntry(original="Single", extracted_comments=["translators: one"]))
    catalog.add(
        CatalogEntry(
            original="Conflicted",
            extracted_comments=["translators: %s: user name", "translators: %s: post title"],
        )
    )
    catalog.add(CatalogEntry(original="Bare"))
    return catalog


def test_find_ambiguous_comments_reports_entries_with_several_comments() -> None:
    conflicts = find_ambiguous_comments(_catalog())

    assert len(conflicts) == 1
    assert conflicts[0].original == "Conflicted"
    assert conflicts[0].count == 2


def test_report_ambiguous_comments_warns_without_raising(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("tests.diagnostics")
    caplog.set_level(logging.WARNING, logger="tests.diagnostics")

    conflicts = report_ambiguous_comments(_catalog(), logger)

    assert len(conflicts) == 1
    assert caplog.messages == ['The string "Conflicted" has 2 different translator comments.']


def test_report_ambiguous_comments_is_silent_for_clean_catalog(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("tests.diagnostics")
    caplog.set_level(logging.WARNING, logger="tests.diagnostics")
    catalog = Catalog()
    catalog.add(CatalogEntry(original="Fine", extracted_comments=["translators: ok"]))

    assert report_ambiguous_comments(catalog, logger) == []
    assert caplog.messages == []
