"""Resolution of a makepot run configuration from CLI input and project metadata."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

import yaml

from .errors import ConfigError
from .logging import get_logger
from .metadata import GenericProject, PluginMetadata, ProjectMetadata, ThemeMetadata, detect_project

logger = get_logger("config")

PROJECT_FILE_NAME = ".makepot.yml"

DEFAULT_EXCLUDES: Tuple[str, ...] = (
    "node_modules",
    ".git",
    ".svn",
    ".CVS",
    ".hg",
    "vendor",
    "Gruntfile.js",
    "webpack.config.js",
    "*.min.js",
)

PathList = Union[str, Sequence[str], None]


@dataclass
class MakePotOptions:
    """Raw user input for a run, before any resolution happens.

    ``merge`` is ``True`` when the flag was given without a value, a path string
    when it was given one and ``None`` when it was absent.
    """

    source: str
    destination: Optional[str] = None
    slug: Optional[str] = None
    domain: Optional[str] = None
    ignore_domain: bool = False
    merge: Union[bool, str, None] = None
    include: PathList = None
    exclude: PathList = None
    headers: Union[str, Mapping[str, Any], None] = None
    skip_js: Optional[bool] = None
    copyright_holder: Optional[str] = None
    package_name: Optional[str] = None


@dataclass
class ProjectSettings:
    """Defaults read from an optional ``.makepot.yml`` in the source root."""

    slug: Optional[str] = None
    domain: Optional[str] = None
    include: List[str] = field(default_factory=list)
    exclude: List[str] = field(default_factory=list)
    headers: Dict[str, str] = field(default_factory=dict)
    skip_js: Optional[bool] = None
    copyright_holder: Optional[str] = None
    package_name: Optional[str] = None


@dataclass(frozen=True)
class MakePotConfig:
    """Immutable, fully resolved settings for one catalog build."""

    source: Path
    destination: Path
    slug: str
    domain: Optional[str]
    metadata: ProjectMetadata = field(default_factory=GenericProject)
    merge: Optional[Path] = None
    include: Tuple[str, ...] = ()
    exclude: Tuple[str, ...] = DEFAULT_EXCLUDES
    headers: Tuple[Tuple[str, str], ...] = ()
    skip_js: bool = False
    copyright_holder: Optional[str] = None
    package_name: Optional[str] = None

    @property
    def is_theme(self) -> bool:
        return isinstance(self.metadata, ThemeMetadata)

    @property
    def is_plugin(self) -> bool:
        return isinstance(self.metadata, PluginMetadata)


def unslash(value: str) -> str:
    """Remove surrounding whitespace and leading/trailing slashes."""
    return value.strip().strip("/\\")


def normalize_paths(values: Iterable[str]) -> List[str]:
    """Trim, drop empty and deduplicate path fragments preserving order."""
    result: List[str] = []
    for value in values:
        cleaned = unslash(value)
        if cleaned and cleaned not in result:
            result.append(cleaned)
    return result


def resolve_config(
    options: MakePotOptions,
    *,
    detector: Callable[[Path], ProjectMetadata] = detect_project,
) -> MakePotConfig:
    """Build the run configuration, raising :class:`ConfigError` when invalid."""
    source = _resolve_source(options.source)
    settings = load_project_file(source)

    metadata = detector(source)

    slug = options.slug or settings.slug or source.name
    domain = _resolve_domain(options, settings, metadata, slug)
    destination = _resolve_destination(options, source, metadata, slug)
    logger.debug("Destination: %s", destination)

    merge = _resolve_merge(options.merge, destination)

    include_values = _split_paths(options.include) if options.include is not None else settings.include
    include = normalize_paths(include_values)
    if include:
        logger.debug("Only including the following files: %s", ",".join(include))

    extra_excludes = _split_paths(options.exclude) if options.exclude is not None else settings.exclude
    exclude = normalize_paths([*DEFAULT_EXCLUDES, *extra_excludes])
    logger.debug("Excluding the following files: %s", ",".join(exclude))

    headers = dict(settings.headers)
    headers.update(_parse_headers(options.headers))

    skip_js = options.skip_js if options.skip_js is not None else bool(settings.skip_js)

    return MakePotConfig(
        source=source,
        destination=destination,
        slug=slug,
        domain=domain,
        metadata=metadata,
        merge=merge,
        include=tuple(include),
        exclude=tuple(exclude),
        headers=tuple(headers.items()),
        skip_js=skip_js,
        copyright_holder=options.copyright_holder or settings.copyright_holder,
        package_name=options.package_name or settings.package_name,
    )


def ensure_destination_dir(destination: Path) -> None:
    """Create the destination's parent directory, tolerating a concurrent creator."""
    parent = destination.parent
    if parent.is_dir():
        return
    try:
        parent.mkdir(parents=True)
    except OSError:
        # Another process may have created it between the checks.
        if not parent.is_dir():
            raise ConfigError("Could not create destination directory!") from None


def load_project_file(source: Path) -> ProjectSettings:
    """Load ``.makepot.yml`` defaults from the source root if present."""
    path = source / PROJECT_FILE_NAME
    if not path.is_file():
        return ProjectSettings()

    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return ProjectSettings()

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    if data is None:
        return ProjectSettings()
    if not isinstance(data, dict):
        raise ConfigError(f"{PROJECT_FILE_NAME} must contain a mapping at the root")

    logger.debug("Loaded project defaults from %s", path)
    headers = data.get("headers")
    if headers is not None and not isinstance(headers, dict):
        raise ConfigError(f"'headers' in {PROJECT_FILE_NAME} must be a mapping")

    return ProjectSettings(
        slug=_as_str(data.get("slug")),
        domain=_as_str(data.get("domain")),
        include=_split_paths(data.get("include")),
        exclude=_split_paths(data.get("exclude")),
        headers={str(key): str(value) for key, value in (headers or {}).items()},
        skip_js=_as_bool(data.get("skip_js")),
        copyright_holder=_as_str(data.get("copyright_holder")),
        package_name=_as_str(data.get("package_name")),
    )


def _resolve_source(source: str) -> Path:
    try:
        path = Path(source).expanduser().resolve(strict=True)
    except (OSError, RuntimeError):
        raise ConfigError("Not a valid source directory!") from None
    if not path.is_dir():
        raise ConfigError("Not a valid source directory!")
    if not os.access(path, os.R_OK | os.X_OK):
        raise ConfigError("Not a valid source directory!")
    return path


def _resolve_domain(
    options: MakePotOptions,
    settings: ProjectSettings,
    metadata: ProjectMetadata,
    slug: str,
) -> Optional[str]:
    if options.ignore_domain:
        logger.debug("Extracting all strings regardless of text domain")
        return None

    domain = slug
    text_domain = _declared(metadata, "text_domain")
    if text_domain:
        domain = text_domain
    if settings.domain:
        domain = settings.domain
    if options.domain:
        domain = options.domain

    logger.debug('Extracting all strings with text domain "%s"', domain)
    return domain


def _resolve_destination(
    options: MakePotOptions, source: Path, metadata: ProjectMetadata, slug: str
) -> Path:
    if options.destination:
        return Path(options.destination).expanduser().absolute()

    domain_path = _declared(metadata, "domain_path")
    if domain_path and unslash(domain_path):
        return source / unslash(domain_path) / f"{slug}.pot"
    return source / f"{slug}.pot"


def _resolve_merge(merge: Union[bool, str, None], destination: Path) -> Optional[Path]:
    if merge is None or merge is False:
        return None

    if merge is True:
        candidate = destination
    elif merge:
        candidate = Path(merge).expanduser().absolute()
    else:
        return None

    if not candidate.exists():
        logger.warning("Invalid file provided to --merge: %s", candidate)
        return None
    return candidate


def _declared(metadata: ProjectMetadata, attribute: str) -> Optional[str]:
    if isinstance(metadata, (ThemeMetadata, PluginMetadata)):
        return getattr(metadata, attribute)
    return None


def _parse_headers(value: Union[str, Mapping[str, Any], None]) -> Dict[str, str]:
    if value is None:
        return {}
    if isinstance(value, str):
        if not value.strip():
            return {}
        try:
            loaded = json.loads(value)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid JSON provided to --headers: {exc}") from exc
    else:
        loaded = value
    if not isinstance(loaded, Mapping):
        raise ConfigError("--headers must be a JSON object of header names to values")
    return {str(key): str(item) for key, item in loaded.items()}


def _split_paths(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return value.split(",")
    if isinstance(value, Sequence):
        parts: List[str] = []
        for item in value:
            if isinstance(item, str):
                parts.extend(item.split(","))
        return parts
    return []


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


__all__ = [
    "DEFAULT_EXCLUDES",
    "MakePotConfig",
    "MakePotOptions",
    "PROJECT_FILE_NAME",
    "ProjectSettings",
    "ensure_destination_dir",
    "load_project_file",
    "normalize_paths",
    "resolve_config",
    "unslash",
]
