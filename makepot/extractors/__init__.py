"""String extractors for the source languages makepot scans."""

from .base import ExtractionOptions, Extractor, iter_source_files, path_matches
from .javascript import JsExtractor
from .php import PhpExtractor

__all__ = [
    "ExtractionOptions",
    "Extractor",
    "JsExtractor",
    "PhpExtractor",
    "iter_source_files",
    "path_matches",
]
