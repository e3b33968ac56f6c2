"""Gettext PO/POT encoding and decoding built on polib."""

from __future__ import annotations

from pathlib import Path
from typing import List, Protocol

import polib

from ..errors import CatalogReadError
from ..logging import get_logger
from ..models import Catalog, CatalogEntry, split_reference

logger = get_logger("catalog.po")

DOMAIN_HEADER = "X-Domain"


class CatalogReader(Protocol):
    """Decodes a catalog file from disk."""

    def read(self, path: Path) -> Catalog:
        ...


class CatalogWriter(Protocol):
    """Encodes a catalog to disk, returning whether the write succeeded."""

    def write(self, catalog: Catalog, path: Path) -> bool:
        ...


def read_catalog(path: Path) -> Catalog:
    """Decode the PO/POT file at ``path`` into a :class:`Catalog`."""
    try:
        po_file = polib.pofile(str(path))
    except (OSError, ValueError, UnicodeDecodeError) as exc:
        raise CatalogReadError(f"Could not read catalog {path}: {exc}") from exc

    headers = dict(po_file.metadata)
    domain = headers.pop(DOMAIN_HEADER, None) or None
    catalog = Catalog(domain=domain, headers=headers, comment=po_file.header or "")

    for po_entry in po_file:
        if po_entry.obsolete:
            continue
        catalog.add(_entry_from_po(po_entry))
    return catalog


def write_catalog(catalog: Catalog, path: Path) -> bool:
    """Encode ``catalog`` as a POT file at ``path``."""
    po_file = polib.POFile()
    po_file.header = catalog.comment
    metadata = dict(catalog.headers)
    if catalog.domain:
        metadata[DOMAIN_HEADER] = catalog.domain
    po_file.metadata = metadata

    for entry in catalog:
        po_file.append(_entry_to_po(entry))

    try:
        po_file.save(str(path))
    except OSError as exc:
        logger.error("Could not write %s: %s", path, exc)
        return False
    return True


class PoCatalogReader:
    def read(self, path: Path) -> Catalog:
        return read_catalog(path)


class PoCatalogWriter:
    def write(self, catalog: Catalog, path: Path) -> bool:
        return write_catalog(catalog, path)


def _entry_from_po(po_entry: polib.POEntry) -> CatalogEntry:
    references = [
        f"{file_name}:{line}" if line else file_name
        for file_name, line in po_entry.occurrences
    ]
    return CatalogEntry(
        original=po_entry.msgid,
        context=po_entry.msgctxt or "",
        plural=po_entry.msgid_plural or None,
        extracted_comments=_split_comment(po_entry.comment),
        references=references,
        translator_comments=_split_comment(po_entry.tcomment),
        flags=list(po_entry.flags),
    )


def _entry_to_po(entry: CatalogEntry) -> polib.POEntry:
    po_entry = polib.POEntry(
        msgid=entry.original,
        msgstr="",
        comment="\n".join(entry.extracted_comments),
        tcomment="\n".join(entry.translator_comments),
        occurrences=[split_reference(reference) for reference in entry.references],
        flags=list(entry.flags),
    )
    if entry.context:
        po_entry.msgctxt = entry.context
    if entry.plural:
        po_entry.msgid_plural = entry.plural
        po_entry.msgstr_plural = {0: "", 1: ""}
    return po_entry


def _split_comment(comment: str | None) -> List[str]:
    if not comment:
        return []
    return [line for line in comment.splitlines() if line.strip()]


__all__ = [
    "CatalogReader",
    "CatalogWriter",
    "DOMAIN_HEADER",
    "PoCatalogReader",
    "PoCatalogWriter",
    "read_catalog",
    "write_catalog",
]
