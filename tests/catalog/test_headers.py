"""Tests for makepot.catalog.headers."""

from __future__ import annotations

from makepot.catalog.headers import GENERATOR, apply_headers, file_comment
from makepot.models import Catalog
from tests._fixtures.project_builder import ProjectBuilder

THEME = """
/*
Theme Name: Foo
Author: Jane
Version: 1.4
License: GNU General Public License v2 or later
Text Domain: foo
*/
"""

PLUGIN = """
<?php
/**
 * Plugin Name: Bar
 * Author: Someone Else
 * Version: 2.0.1
 */
"""


def test_theme_headers(project_builder: ProjectBuilder) -> None:
    project_builder.write({"style.css": THEME})
    config = project_builder.config()
    catalog = Catalog()

    apply_headers(catalog, config, year=2024)

    assert catalog.get_header("Project-Id-Version") == "Foo 1.4"
    assert catalog.get_header("Report-Msgid-Bugs-To") == "https://wordpress.org/support/theme/my-project"
    assert catalog.get_header("Last-Translator") == "FULL NAME <EMAIL@ADDRESS>"
    assert catalog.get_header("Language-Team") == "LANGUAGE <LL@li.org>"
    assert catalog.get_header("X-Generator") == GENERATOR
    assert "Language" not in catalog.headers
    assert catalog.domain == "foo"
    assert catalog.comment == (
        "Copyright (C) 2024 Jane\n"
        "This file is distributed under the GNU General Public License v2 or later."
    )


def test_plugin_headers_use_plugin_name_as_holder(project_builder: ProjectBuilder) -> None:
    project_builder.write({"bar.php": PLUGIN})
    config = project_builder.config(slug="bar")
    catalog = Catalog()

    apply_headers(catalog, config, year=2024)

    assert catalog.get_header("Project-Id-Version") == "Bar 2.0.1"
    assert catalog.get_header("Report-Msgid-Bugs-To") == "https://wordpress.org/support/plugin/bar"
    assert catalog.comment == (
        "Copyright (C) 2024 Bar\n"
        "This file is distributed under the same license as the Bar package."
    )


def test_generic_project_uses_overrides_and_has_no_bugs_address(project_builder: ProjectBuilder) -> None:
    config = project_builder.config(package_name="Pkg", copyright_holder="ACME")
    catalog = Catalog()

    apply_headers(catalog, config, year=2024)

    assert catalog.get_header("Project-Id-Version") == "Pkg"
    assert "Report-Msgid-Bugs-To" not in catalog.headers
    assert catalog.comment == (
        "Copyright (C) 2024 ACME\n"
        "This file is distributed under the same license as the Pkg package."
    )


def test_generic_project_falls_back_to_unknown(project_builder: ProjectBuilder) -> None:
    config = project_builder.config()

    assert file_comment(config, year=2024) == (
        "Copyright (C) 2024 Unknown\n"
        "This file is distributed under the same license as the Unknown package."
    )


def test_wp_version_file_wins_over_metadata_version(project_builder: ProjectBuilder) -> None:
    project_builder.write(
        {
            "bar.php": PLUGIN,
            "wp-includes/version.php": "<?php\n$wp_version = '6.5';\n",
        }
    )
    catalog = Catalog()

    apply_headers(catalog, project_builder.config(), year=2024)

    assert catalog.get_header("Project-Id-Version") == "Bar 6.5"


def test_user_headers_override_computed_values(project_builder: ProjectBuilder) -> None:
    project_builder.write({"style.css": THEME})
    config = project_builder.config(
        headers={"Language-Team": "French <fr@example.com>", "Language": "fr", "X-Extra": "yes"}
    )
    catalog = Catalog()

    apply_headers(catalog, config, year=2024)

    assert catalog.get_header("Language-Team") == "French <fr@example.com>"
    assert catalog.get_header("X-Extra") == "yes"
    assert "Language" not in catalog.headers


def test_ignore_domain_leaves_catalog_without_domain(project_builder: ProjectBuilder) -> None:
    catalog = Catalog()

    apply_headers(catalog, project_builder.config(ignore_domain=True), year=2024)

    assert catalog.domain is None
