"""Post-extraction checks on the assembled catalog."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from .logging import get_logger
from .models import Catalog


@dataclass
class CommentConflict:
    """An entry whose occurrences carry differing translator comments."""

    original: str
    context: str
    comments: List[str]

    @property
    def count(self) -> int:
        return len(self.comments)

    def message(self) -> str:
        return f'The string "{self.original}" has {self.count} different translator comments.'


def find_ambiguous_comments(catalog: Catalog) -> List[CommentConflict]:
    conflicts: List[CommentConflict] = []
    for entry in catalog:
        distinct = list(dict.fromkeys(entry.extracted_comments))
        if len(distinct) > 1:
            conflicts.append(
                CommentConflict(original=entry.original, context=entry.context, comments=distinct)
            )
    return conflicts


def report_ambiguous_comments(
    catalog: Catalog, logger: Optional[logging.Logger] = None
) -> List[CommentConflict]:
    """Warn about every entry with conflicting translator comments."""
    logger = logger or get_logger("diagnostics")
    conflicts = find_ambiguous_comments(catalog)
    for conflict in conflicts:
        logger.warning(conflict.message())
    return conflicts


__all__ = ["CommentConflict", "find_ambiguous_comments", "report_ambiguous_comments"]
