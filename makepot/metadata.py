"""Detection of WordPress theme and plugin metadata headers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Tuple, Union

from .logging import get_logger

logger = get_logger("metadata")

# Header data must live within the first 8 KiB of the main file.
HEADER_READ_LIMIT = 8192

STYLESHEET_NAME = "style.css"
PLUGIN_EXTENSION = ".php"
VERSION_FILE = Path("wp-includes") / "version.php"

THEME_HEADERS: Tuple[str, ...] = (
    "Theme Name",
    "Theme URI",
    "Description",
    "Author",
    "Author URI",
    "Version",
    "License",
    "Domain Path",
    "Text Domain",
)

PLUGIN_HEADERS: Tuple[str, ...] = (
    "Plugin Name",
    "Plugin URI",
    "Description",
    "Author",
    "Author URI",
    "Version",
    "Domain Path",
    "Text Domain",
)

# Fields that describe the package rather than being user-facing strings.
NON_TRANSLATABLE_HEADERS = frozenset({"Version", "License", "Domain Path", "Text Domain"})

_HEADER_PATTERNS: Dict[str, re.Pattern[str]] = {
    name: re.compile(r"^[ \t/*#@]*" + re.escape(name) + r":(.*)$", re.IGNORECASE | re.MULTILINE)
    for name in dict.fromkeys(THEME_HEADERS + PLUGIN_HEADERS + ("Template Name",))
}

_HEADER_CLEANUP = re.compile(r"\s*(?:\*/|\?>).*")
_WP_VERSION = re.compile(r"\$wp_version\s*=\s*'(.*?)';")

HeaderMap = Dict[str, Optional[str]]


def _pattern_for(name: str) -> re.Pattern[str]:
    pattern = _HEADER_PATTERNS.get(name)
    if pattern is None:
        pattern = re.compile(
            r"^[ \t/*#@]*" + re.escape(name) + r":(.*)$", re.IGNORECASE | re.MULTILINE
        )
        _HEADER_PATTERNS[name] = pattern
    return pattern


def cleanup_header_comment(value: str) -> str:
    """Strip a trailing comment close or PHP close tag from a header value."""
    return _HEADER_CLEANUP.sub("", value).strip()


def parse_file_data(text: str, fields: Sequence[str]) -> HeaderMap:
    """Return ``{field: value}`` for each requested header field.

    Fields that are not declared map to ``None``. A declared field whose value is
    blank maps to an empty string.
    """
    headers: HeaderMap = {}
    for name in fields:
        match = _pattern_for(name).search(text)
        headers[name] = cleanup_header_comment(match.group(1)) if match else None
    return headers


def read_file_head(path: Path, limit: int = HEADER_READ_LIMIT) -> str:
    """Read the first ``limit`` bytes of ``path`` with line endings normalised."""
    with path.open("rb") as handle:
        raw = handle.read(limit)
    text = raw.decode("utf-8", errors="replace")
    return text.replace("\r\n", "\n").replace("\r", "\n")


def get_file_data(path: Path, fields: Sequence[str]) -> HeaderMap:
    return parse_file_data(read_file_head(path), fields)


@dataclass(frozen=True)
class ThemeMetadata:
    """Headers declared in a theme's ``style.css``."""

    path: Path
    name: str
    uri: Optional[str] = None
    description: Optional[str] = None
    author: Optional[str] = None
    author_uri: Optional[str] = None
    version: Optional[str] = None
    license: Optional[str] = None
    domain_path: Optional[str] = None
    text_domain: Optional[str] = None

    kind = "theme"

    @classmethod
    def from_headers(cls, path: Path, headers: Mapping[str, Optional[str]]) -> "ThemeMetadata":
        return cls(
            path=path,
            name=headers.get("Theme Name") or "",
            uri=headers.get("Theme URI"),
            description=headers.get("Description"),
            author=headers.get("Author"),
            author_uri=headers.get("Author URI"),
            version=headers.get("Version"),
            license=headers.get("License"),
            domain_path=headers.get("Domain Path"),
            text_domain=headers.get("Text Domain"),
        )

    def headers(self) -> List[Tuple[str, Optional[str]]]:
        values = (
            self.name,
            self.uri,
            self.description,
            self.author,
            self.author_uri,
            self.version,
            self.license,
            self.domain_path,
            self.text_domain,
        )
        return list(zip(THEME_HEADERS, values))


@dataclass(frozen=True)
class PluginMetadata:
    """Headers declared in a plugin's main PHP file."""

    path: Path
    name: str
    uri: Optional[str] = None
    description: Optional[str] = None
    author: Optional[str] = None
    author_uri: Optional[str] = None
    version: Optional[str] = None
    domain_path: Optional[str] = None
    text_domain: Optional[str] = None

    kind = "plugin"

    @classmethod
    def from_headers(cls, path: Path, headers: Mapping[str, Optional[str]]) -> "PluginMetadata":
        return cls(
            path=path,
            name=headers.get("Plugin Name") or "",
            uri=headers.get("Plugin URI"),
            description=headers.get("Description"),
            author=headers.get("Author"),
            author_uri=headers.get("Author URI"),
            version=headers.get("Version"),
            domain_path=headers.get("Domain Path"),
            text_domain=headers.get("Text Domain"),
        )

    def headers(self) -> List[Tuple[str, Optional[str]]]:
        values = (
            self.name,
            self.uri,
            self.description,
            self.author,
            self.author_uri,
            self.version,
            self.domain_path,
            self.text_domain,
        )
        return list(zip(PLUGIN_HEADERS, values))


@dataclass(frozen=True)
class GenericProject:
    """A source tree without a recognisable theme or plugin header."""

    kind = "generic"

    def headers(self) -> List[Tuple[str, Optional[str]]]:
        return []


ProjectMetadata = Union[ThemeMetadata, PluginMetadata, GenericProject]


def detect_project(source: Path) -> ProjectMetadata:
    """Classify ``source`` as a theme, plugin or generic project.

    A stylesheet with a ``Theme Name`` header wins outright; plugin files are
    only inspected when no theme was found.
    """
    stylesheet = source / STYLESHEET_NAME
    if stylesheet.is_file():
        try:
            theme_headers = get_file_data(stylesheet, THEME_HEADERS)
        except OSError as exc:
            logger.debug("Could not read %s: %s", stylesheet, exc)
        else:
            if theme_headers.get("Theme Name"):
                logger.info("Theme stylesheet detected.")
                logger.debug("Theme stylesheet: %s", stylesheet)
                return ThemeMetadata.from_headers(stylesheet, theme_headers)

    for plugin_file in _iter_plugin_candidates(source):
        try:
            plugin_headers = get_file_data(plugin_file, PLUGIN_HEADERS)
        except OSError as exc:
            logger.debug("Could not read %s: %s", plugin_file, exc)
            continue
        if plugin_headers.get("Plugin Name"):
            logger.info("Plugin file detected.")
            logger.debug("Plugin file: %s", plugin_file)
            return PluginMetadata.from_headers(plugin_file, plugin_headers)

    logger.debug("No valid theme stylesheet or plugin file found, treating as a regular project.")
    return GenericProject()


def _iter_plugin_candidates(source: Path) -> List[Path]:
    candidates = [
        path.resolve()
        for path in source.iterdir()
        if path.is_file() and path.suffix.lower() == PLUGIN_EXTENSION
    ]
    return sorted(candidates, key=lambda path: path.name)


def detect_wp_version(source: Path) -> Optional[str]:
    """Return the WordPress version declared in ``wp-includes/version.php``."""
    version_file = source / VERSION_FILE
    if not version_file.is_file():
        return None
    try:
        text = version_file.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return None
    match = _WP_VERSION.search(text)
    return match.group(1) if match else None


__all__ = [
    "GenericProject",
    "HEADER_READ_LIMIT",
    "NON_TRANSLATABLE_HEADERS",
    "PLUGIN_HEADERS",
    "PluginMetadata",
    "ProjectMetadata",
    "THEME_HEADERS",
    "ThemeMetadata",
    "cleanup_header_comment",
    "detect_project",
    "detect_wp_version",
    "get_file_data",
    "parse_file_data",
    "read_file_head",
]
