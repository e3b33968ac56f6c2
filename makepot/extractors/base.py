"""Base classes and shared helpers for string extractors."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from ..logging import get_logger
from ..models import Catalog, CatalogEntry
from .calls import FunctionCall

logger = get_logger("extractors")

# Domain WordPress assigns to gettext calls that omit the text domain argument.
DEFAULT_DOMAIN = "default"

ARGUMENT_SHAPES: Dict[str, Tuple[str, ...]] = {
    "text_domain": ("text", "domain"),
    "text_context_domain": ("text", "context", "domain"),
    "single_plural_number_domain": ("single", "plural", "number", "domain"),
    "single_plural_number_context_domain": ("single", "plural", "number", "context", "domain"),
    "single_plural_domain": ("single", "plural", "domain"),
    "single_plural_context_domain": ("single", "plural", "context", "domain"),
}


@dataclass(frozen=True)
class ExtractionOptions:
    """Filters handed to an extractor for one pass over the source tree."""

    include: Tuple[str, ...] = ()
    exclude: Tuple[str, ...] = ()
    extensions: Tuple[str, ...] = ()
    extract_templates: bool = False


class Extractor(ABC):
    """Contract for extractors that add translatable strings to a catalog.

    The catalog's domain selects which calls are kept; a catalog without a
    domain accepts strings from every text domain.
    """

    name: str = "extractor"
    extensions: Tuple[str, ...] = ()
    functions: Mapping[str, str] = {}

    def extract(self, source: Path, catalog: Catalog, options: ExtractionOptions) -> None:
        """Scan every selected file below ``source`` and add its strings to ``catalog``."""
        count = 0
        for path in iter_source_files(source, options):
            relative = path.relative_to(source).as_posix()
            text = path.read_text(encoding="utf-8", errors="replace")
            for entry in self.extract_from_string(text, relative, catalog.domain, options):
                catalog.add(entry)
                count += 1
        logger.debug("%s extractor found %d strings", self.name, count)

    def extract_from_string(
        self,
        text: str,
        file_name: str,
        domain: Optional[str],
        options: ExtractionOptions,
    ) -> List[CatalogEntry]:
        entries: List[CatalogEntry] = []
        for call in self.find_calls(text):
            entry = build_entry(call, self.functions[call.name], domain, file_name)
            if entry is not None:
                entries.append(entry)
        entries.extend(self.extra_entries(text, file_name, options))
        return entries

    def extra_entries(
        self, text: str, file_name: str, options: ExtractionOptions
    ) -> List[CatalogEntry]:
        return []

    @abstractmethod
    def find_calls(self, text: str) -> List[FunctionCall]:
        """Return the gettext calls found in a single source file."""


def build_entry(
    call: FunctionCall, shape: str, domain: Optional[str], file_name: str
) -> Optional[CatalogEntry]:
    """Map a function call onto a catalog entry according to its argument shape."""
    roles = ARGUMENT_SHAPES[shape]
    values: Dict[str, Optional[str]] = {}
    present: Dict[str, bool] = {}
    for position, role in enumerate(roles):
        present[role] = position < len(call.arguments)
        values[role] = call.arguments[position] if present[role] else None

    original = values.get("text") if "text" in roles else values.get("single")
    if not original:
        return None
    if "plural" in roles and not values["plural"]:
        return None
    if "context" in roles and values["context"] is None:
        return None

    if domain is not None:
        call_domain = values["domain"] if present["domain"] else DEFAULT_DOMAIN
        if call_domain != domain:
            return None

    entry = CatalogEntry(
        original=original,
        context=values.get("context") or "",
        plural=values.get("plural") or None,
    )
    entry.add_reference(f"{file_name}:{call.line}")
    if call.comment:
        entry.add_extracted_comment(call.comment)
    return entry


def path_matches(relative: str, fragments: Sequence[str]) -> bool:
    """Return True when ``relative`` falls under any of the path ``fragments``.

    A fragment matches the exact path, any directory prefix of it, or (as a
    shell pattern) the path or one of its components.
    """
    parts = relative.split("/")
    for fragment in fragments:
        if relative == fragment or relative.startswith(f"{fragment}/"):
            return True
        if fnmatchcase(relative, fragment):
            return True
        if "/" not in fragment and any(fnmatchcase(part, fragment) for part in parts):
            return True
    return False


def is_excluded(relative: str, include: Sequence[str], exclude: Sequence[str]) -> bool:
    """Exclusion holds unless an include fragment explicitly reaches inside it."""
    matching = [fragment for fragment in exclude if path_matches(relative, [fragment])]
    if not matching:
        return False
    overrides = [
        fragment
        for fragment in include
        if all(path_matches(fragment, [excluded]) for excluded in matching)
    ]
    return not overrides


def is_selected(relative: str, options: ExtractionOptions) -> bool:
    if options.extensions:
        suffix = relative.rsplit(".", 1)[-1].lower() if "." in relative else ""
        if suffix not in {extension.lower().lstrip(".") for extension in options.extensions}:
            return False
    if options.include and not path_matches(relative, options.include):
        return False
    return not is_excluded(relative, options.include, options.exclude)


def iter_source_files(root: Path, options: ExtractionOptions) -> Iterator[Path]:
    """Yield files below ``root`` selected by ``options`` in a stable order."""
    for dirpath, dirnames, filenames in os.walk(root):
        current_dir = Path(dirpath)
        rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

        kept = []
        for name in sorted(dirnames):
            rel_path = f"{rel_dir}/{name}" if rel_dir else name
            if is_excluded(rel_path, options.include, options.exclude):
                continue
            kept.append(name)
        dirnames[:] = kept

        for filename in sorted(filenames):
            rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
            if is_selected(rel_path, options):
                yield current_dir / filename


__all__ = [
    "ARGUMENT_SHAPES",
    "DEFAULT_DOMAIN",
    "ExtractionOptions",
    "Extractor",
    "build_entry",
    "is_excluded",
    "is_selected",
    "iter_source_files",
    "path_matches",
]
