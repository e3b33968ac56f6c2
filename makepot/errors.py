"""Exception hierarchy shared by the makepot pipeline."""

from __future__ import annotations


class MakePotError(RuntimeError):
    """Base class for fatal errors that abort a makepot run."""


class ConfigError(MakePotError):
    """Raised when the run configuration cannot be resolved."""


class CatalogReadError(MakePotError):
    """Raised when an existing catalog cannot be decoded."""


class CatalogWriteError(MakePotError):
    """Raised when the final catalog cannot be persisted."""


class ExtractionError(MakePotError):
    """Raised when a string extractor fails while scanning the source tree."""

    def __init__(self, extractor: str, message: str) -> None:
        super().__init__(message)
        self.extractor = extractor
        self.message = message


__all__ = [
    "CatalogReadError",
    "CatalogWriteError",
    "ConfigError",
    "ExtractionError",
    "MakePotError",
]
