"""Computation of POT headers and the leading copyright comment."""

from __future__ import annotations

from datetime import date
from typing import Optional

from .. import __version__
from ..config import MakePotConfig
from ..metadata import GenericProject, PluginMetadata, ThemeMetadata, detect_wp_version
from ..models import HEADER_LANGUAGE, Catalog

UNKNOWN = "Unknown"
LAST_TRANSLATOR = "FULL NAME <EMAIL@ADDRESS>"
LANGUAGE_TEAM = "LANGUAGE <LL@li.org>"
GENERATOR = f"makepot {__version__}"

THEME_SUPPORT_URL = "https://wordpress.org/support/theme/{slug}"
PLUGIN_SUPPORT_URL = "https://wordpress.org/support/plugin/{slug}"


def project_display_name(config: MakePotConfig) -> str:
    metadata = config.metadata
    if isinstance(metadata, (ThemeMetadata, PluginMetadata)) and metadata.name:
        return metadata.name
    return config.package_name or UNKNOWN


def copyright_holder(config: MakePotConfig) -> str:
    metadata = config.metadata
    holder: Optional[str] = None
    if isinstance(metadata, ThemeMetadata):
        holder = metadata.author
    elif isinstance(metadata, PluginMetadata):
        holder = metadata.name
    elif not isinstance(metadata, GenericProject):  # pragma: no cover - exhaustive union
        raise TypeError(f"Unsupported project metadata: {metadata!r}")
    return holder or config.copyright_holder or UNKNOWN


def project_version(config: MakePotConfig) -> Optional[str]:
    version = detect_wp_version(config.source)
    if version:
        return version
    metadata = config.metadata
    if isinstance(metadata, (ThemeMetadata, PluginMetadata)) and metadata.version:
        return metadata.version
    return None


def bugs_address(config: MakePotConfig) -> Optional[str]:
    metadata = config.metadata
    if isinstance(metadata, ThemeMetadata):
        return THEME_SUPPORT_URL.format(slug=config.slug)
    if isinstance(metadata, PluginMetadata):
        return PLUGIN_SUPPORT_URL.format(slug=config.slug)
    return None


def file_comment(config: MakePotConfig, *, year: Optional[int] = None) -> str:
    """Return the copyright comment written above the POT headers."""
    year = year or date.today().year
    holder = copyright_holder(config)
    metadata = config.metadata

    if isinstance(metadata, ThemeMetadata) and metadata.license:
        return (
            f"Copyright (C) {year} {holder}\n"
            f"This file is distributed under the {metadata.license}."
        )

    return (
        f"Copyright (C) {year} {holder}\n"
        f"This file is distributed under the same license as the "
        f"{project_display_name(config)} package."
    )


def apply_headers(catalog: Catalog, config: MakePotConfig, *, year: Optional[int] = None) -> None:
    """Set the computed headers, domain and comment on ``catalog``.

    User supplied headers are applied last and win over computed values.
    """
    catalog.comment = file_comment(config, year=year)

    name = project_display_name(config)
    version = project_version(config)
    catalog.set_header("Project-Id-Version", f"{name} {version}" if version else name)

    address = bugs_address(config)
    if address is not None:
        catalog.set_header("Report-Msgid-Bugs-To", address)
    else:
        catalog.delete_header("Report-Msgid-Bugs-To")

    catalog.set_header("Last-Translator", LAST_TRANSLATOR)
    catalog.set_header("Language-Team", LANGUAGE_TEAM)
    catalog.set_header("X-Generator", GENERATOR)

    for key, value in config.headers:
        catalog.set_header(key, value)

    # Templates are not localized files.
    catalog.delete_header(HEADER_LANGUAGE)

    if config.domain:
        catalog.domain = config.domain


__all__ = [
    "GENERATOR",
    "LANGUAGE_TEAM",
    "LAST_TRANSLATOR",
    "UNKNOWN",
    "apply_headers",
    "bugs_address",
    "copyright_holder",
    "file_comment",
    "project_display_name",
    "project_version",
]
