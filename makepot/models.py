"""Core catalog models shared across makepot components."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import IntFlag
from typing import Dict, Iterator, List, Optional, Tuple

EntryKey = Tuple[str, str, Optional[str]]

HEADER_LANGUAGE = "Language"


class MergePolicy(IntFlag):
    """Controls how :meth:`Catalog.merge_with` folds another catalog in."""

    ADD = 1
    REMOVE = 2


@dataclass
class CatalogEntry:
    """A single translatable string with its comments and source references."""

    original: str
    context: str = ""
    plural: Optional[str] = None
    extracted_comments: List[str] = field(default_factory=list)
    references: List[str] = field(default_factory=list)
    translator_comments: List[str] = field(default_factory=list)
    flags: List[str] = field(default_factory=list)

    @property
    def key(self) -> EntryKey:
        return (self.context or "", self.original, self.plural or None)

    def add_extracted_comment(self, comment: str) -> None:
        comment = comment.strip()
        if comment and comment not in self.extracted_comments:
            self.extracted_comments.append(comment)

    def add_reference(self, reference: str) -> None:
        if reference and reference not in self.references:
            self.references.append(reference)

    def absorb(self, other: "CatalogEntry") -> None:
        """Fold comments, references and flags of an entry with the same key."""
        for comment in other.extracted_comments:
            self.add_extracted_comment(comment)
        for reference in other.references:
            self.add_reference(reference)
        for comment in other.translator_comments:
            if comment not in self.translator_comments:
                self.translator_comments.append(comment)
        for flag in other.flags:
            if flag not in self.flags:
                self.flags.append(flag)

    def copy(self) -> "CatalogEntry":
        return CatalogEntry(
            original=self.original,
            context=self.context,
            plural=self.plural,
            extracted_comments=list(self.extracted_comments),
            references=list(self.references),
            translator_comments=list(self.translator_comments),
            flags=list(self.flags),
        )


def split_reference(reference: str) -> Tuple[str, str]:
    """Split a ``file:line`` reference; the line is empty when absent."""
    file_name, sep, line = reference.rpartition(":")
    if sep and line.isdigit():
        return file_name, line
    return reference, ""


def default_headers(now: datetime | None = None) -> Dict[str, str]:
    """Return the standard gettext template headers in their canonical order."""
    timestamp = (now or datetime.now(UTC)).strftime("%Y-%m-%dT%H:%M:%S%z")
    if len(timestamp) > 5 and timestamp[-5] in "+-":
        timestamp = f"{timestamp[:-2]}:{timestamp[-2:]}"
    return {
        "Project-Id-Version": "",
        "Report-Msgid-Bugs-To": "",
        "Last-Translator": "",
        "Language-Team": "",
        "MIME-Version": "1.0",
        "Content-Type": "text/plain; charset=UTF-8",
        "Content-Transfer-Encoding": "8bit",
        "POT-Creation-Date": timestamp,
        "PO-Revision-Date": "YEAR-MO-DA HO:MI+ZONE",
        HEADER_LANGUAGE: "",
    }


class Catalog:
    """Ordered collection of catalog entries plus document headers.

    Entries are keyed by ``(context, original, plural)``; adding an entry whose
    key already exists folds its comments and references into the stored one.
    """

    def __init__(
        self,
        *,
        domain: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        comment: str = "",
    ) -> None:
        self.domain = domain
        self.headers: Dict[str, str] = dict(headers) if headers is not None else default_headers()
        self.comment = comment
        self._entries: Dict[EntryKey, CatalogEntry] = {}

    def set_header(self, name: str, value: str) -> None:
        self.headers[name] = value

    def get_header(self, name: str) -> Optional[str]:
        return self.headers.get(name)

    def delete_header(self, name: str) -> None:
        self.headers.pop(name, None)

    def add(self, entry: CatalogEntry) -> CatalogEntry:
        """Insert ``entry`` or merge it into the existing entry with the same key."""
        existing = self._entries.get(entry.key)
        if existing is None:
            self._entries[entry.key] = entry
            return entry
        existing.absorb(entry)
        return existing

    def find(
        self, original: str, context: str = "", plural: Optional[str] = None
    ) -> Optional[CatalogEntry]:
        return self._entries.get((context or "", original, plural or None))

    def remove(self, key: EntryKey) -> None:
        self._entries.pop(key, None)

    def merge_with(self, other: "Catalog", policy: MergePolicy) -> None:
        """Fold ``other`` into this catalog.

        ``ADD`` copies entries that only exist in ``other``; ``REMOVE`` drops
        entries of this catalog that ``other`` does not contain. Headers and the
        leading comment are never taken from ``other``.
        """
        if MergePolicy.REMOVE in policy:
            for key in [key for key in self._entries if key not in other]:
                del self._entries[key]

        for entry in other:
            existing = self._entries.get(entry.key)
            if existing is not None:
                existing.absorb(entry)
            elif MergePolicy.ADD in policy:
                self._entries[entry.key] = entry.copy()

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(list(self._entries.values()))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries


__all__ = [
    "Catalog",
    "CatalogEntry",
    "EntryKey",
    "HEADER_LANGUAGE",
    "MergePolicy",
    "default_headers",
    "split_reference",
]
