"""Catalog persistence, header synthesis and merge helpers."""

from .headers import apply_headers, file_comment, project_display_name
from .merge import load_merge_base
from .po import PoCatalogReader, PoCatalogWriter, read_catalog, write_catalog

__all__ = [
    "PoCatalogReader",
    "PoCatalogWriter",
    "apply_headers",
    "file_comment",
    "load_merge_base",
    "project_display_name",
    "read_catalog",
    "write_catalog",
]
