"""Shared representation of gettext calls found by the language extractors."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

TRANSLATOR_TAG = "translators:"


@dataclass
class FunctionCall:
    """A call to one of the watched functions with its decoded arguments.

    Arguments that are not static string literals are ``None``.
    """

    name: str
    line: int
    arguments: List[Optional[str]] = field(default_factory=list)
    comment: Optional[str] = None


def clean_comment(text: str) -> str:
    """Normalise a source comment to the text a translator should see."""
    body = text
    if body.startswith("/*"):
        body = body[2:]
        if body.endswith("*/"):
            body = body[:-2]
    elif body.startswith("//"):
        body = body[2:]
    elif body.startswith("#"):
        body = body[1:]

    lines = []
    for raw in body.splitlines():
        stripped = raw.strip()
        if stripped.startswith("*"):
            stripped = stripped[1:].strip()
        if stripped:
            lines.append(stripped)
    return " ".join(lines)


def translator_comment(text: str) -> Optional[str]:
    """Return the ``translators:`` part of a comment, if it has one."""
    cleaned = clean_comment(text)
    marker = cleaned.lower().find(TRANSLATOR_TAG)
    if marker == -1:
        return None
    return cleaned[marker:]


__all__ = ["FunctionCall", "TRANSLATOR_TAG", "clean_comment", "translator_comment"]
