"""Folding of an existing catalog into a freshly generated one."""

from __future__ import annotations

from typing import Optional

from ..config import MakePotConfig
from ..logging import get_logger
from ..models import Catalog, MergePolicy
from .po import CatalogReader, PoCatalogReader

logger = get_logger("catalog.merge")

MERGE_POLICY = MergePolicy.ADD | MergePolicy.REMOVE


def load_merge_base(config: MakePotConfig, reader: Optional[CatalogReader] = None) -> Catalog:
    """Return the catalog the run starts from.

    Without a merge source this is an empty catalog. Otherwise every entry of the
    existing file is carried over; its headers and leading comment are not, since
    those are recomputed for each run.
    """
    catalog = Catalog()
    if config.merge is None:
        return catalog

    logger.debug("Merging with existing POT file: %s", config.merge)
    existing = (reader or PoCatalogReader()).read(config.merge)
    catalog.merge_with(existing, MERGE_POLICY)
    logger.debug("Carried over %d entries from %s", len(catalog), config.merge)
    return catalog


__all__ = ["MERGE_POLICY", "load_merge_base"]
