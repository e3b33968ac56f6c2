"""Pipeline that assembles and writes the POT file for a resolved configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from .catalog.headers import apply_headers
from .catalog.merge import load_merge_base
from .catalog.po import CatalogReader, CatalogWriter, PoCatalogReader, PoCatalogWriter
from .config import MakePotConfig, ensure_destination_dir
from .diagnostics import CommentConflict, report_ambiguous_comments
from .errors import CatalogWriteError, ExtractionError
from .extractors import ExtractionOptions, Extractor, JsExtractor, PhpExtractor
from .extractors.base import is_selected
from .logging import get_logger
from .metadata import NON_TRANSLATABLE_HEADERS, PluginMetadata, ProjectMetadata, ThemeMetadata
from .models import Catalog, CatalogEntry, MergePolicy, split_reference

_METADATA_COMMENT_SUFFIXES = (" of the theme", " of the plugin")


@dataclass
class PotResult:
    """Outcome of a successful run."""

    destination: Path
    catalog: Catalog
    conflicts: List[CommentConflict] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.catalog)


def metadata_entries(metadata: ProjectMetadata) -> List[CatalogEntry]:
    """Return entries for the user-facing header fields of a theme or plugin."""
    if isinstance(metadata, ThemeMetadata):
        noun = "theme"
    elif isinstance(metadata, PluginMetadata):
        noun = "plugin"
    else:
        return []

    entries: List[CatalogEntry] = []
    for header, value in metadata.headers():
        if header in NON_TRANSLATABLE_HEADERS or not value:
            continue
        entry = CatalogEntry(original=value)
        entry.add_extracted_comment(f"{header} of the {noun}")
        entries.append(entry)
    return entries


class PotMaker:
    """Runs merge, header, extraction and diagnostics stages for one catalog."""

    def __init__(
        self,
        php_extractor: Extractor | None = None,
        js_extractor: Extractor | None = None,
        reader: CatalogReader | None = None,
        writer: CatalogWriter | None = None,
    ) -> None:
        self.php_extractor = php_extractor or PhpExtractor()
        self.js_extractor = js_extractor or JsExtractor()
        self.reader = reader or PoCatalogReader()
        self.writer = writer or PoCatalogWriter()
        self.logger = get_logger("pipeline")

    def run(self, config: MakePotConfig) -> PotResult:
        """Build the catalog described by ``config`` and write it to disk."""
        ensure_destination_dir(config.destination)

        catalog = self.build(config)
        conflicts = report_ambiguous_comments(catalog, self.logger)

        if not self.writer.write(catalog, config.destination):
            raise CatalogWriteError("Could not generate a POT file!")

        count = len(catalog)
        self.logger.debug("Extracted %d %s", count, "string" if count == 1 else "strings")
        return PotResult(destination=config.destination, catalog=catalog, conflicts=conflicts)

    def build(self, config: MakePotConfig) -> Catalog:
        """Assemble the catalog without writing it."""
        catalog = load_merge_base(config, self.reader)
        apply_headers(catalog, config)

        # Scanned entries are collected apart so carried-over ones can be pruned.
        fresh = Catalog(domain=catalog.domain, headers={})
        for entry in metadata_entries(config.metadata):
            fresh.add(entry)

        scans = [
            ExtractionOptions(
                include=config.include,
                exclude=config.exclude,
                extensions=self.php_extractor.extensions or ("php",),
                extract_templates=config.is_theme,
            )
        ]
        self._run_extractor(self.php_extractor, config, fresh, scans[0])

        if config.skip_js:
            self.logger.debug("Skipping JavaScript string extraction")
        else:
            scans.append(
                ExtractionOptions(
                    include=config.include,
                    exclude=config.exclude,
                    extensions=self.js_extractor.extensions or ("js",),
                )
            )
            self._run_extractor(self.js_extractor, config, fresh, scans[-1])

        dropped = _prune_carried(catalog, fresh, scans)
        if dropped:
            self.logger.debug("Dropped %d stale carried-over entries", dropped)

        catalog.merge_with(fresh, MergePolicy.ADD)
        return catalog

    def _run_extractor(
        self,
        extractor: Extractor,
        config: MakePotConfig,
        catalog: Catalog,
        options: ExtractionOptions,
    ) -> None:
        self.logger.debug("Running %s extractor over %s", extractor.name, config.source)
        try:
            extractor.extract(config.source, catalog, options)
        except Exception as exc:
            raise ExtractionError(extractor.name, str(exc)) from exc


def _prune_carried(catalog: Catalog, fresh: Catalog, scans: List[ExtractionOptions]) -> int:
    """Reconcile entries carried over from the merge source with this run's scan.

    Whatever the scan covered is taken from ``fresh``: stale entries are removed
    and rescanned ones lose the references and comments of the previous scan.
    Entries from files outside the scan are left untouched.
    """
    dropped = 0
    for entry in catalog:
        rescanned = _was_rescanned(entry, scans)
        if entry.key not in fresh:
            if rescanned:
                catalog.remove(entry.key)
                dropped += 1
        elif rescanned:
            entry.references = []
            entry.extracted_comments = []
        else:
            entry.references = [
                reference for reference in entry.references if not _was_scanned(reference, scans)
            ]
    return dropped


def _was_rescanned(entry: CatalogEntry, scans: List[ExtractionOptions]) -> bool:
    """True when this run would have re-produced ``entry`` had it still existed.

    Metadata entries carry no references and are regenerated on every run; any
    other entry counts only when each file it references falls within a scan.
    """
    if not entry.references:
        return bool(entry.extracted_comments) and all(
            comment.endswith(_METADATA_COMMENT_SUFFIXES) for comment in entry.extracted_comments
        )
    return all(_was_scanned(reference, scans) for reference in entry.references)


def _was_scanned(reference: str, scans: List[ExtractionOptions]) -> bool:
    relative, _ = split_reference(reference)
    return any(is_selected(relative, options) for options in scans)


__all__ = ["PotMaker", "PotResult", "metadata_entries"]
