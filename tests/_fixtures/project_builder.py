"""Helper utilities for constructing temporary plugin and theme trees in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Mapping

from makepot.config import MakePotConfig, MakePotOptions, resolve_config


class ProjectBuilder:
    """Utility for writing files into a throwaway project and resolving its config."""

    def __init__(self, tmp_path: Path, name: str = "my-project") -> None:
        self.root = tmp_path / name
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the project."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def config(self, **overrides: object) -> MakePotConfig:
        """Resolve a configuration for the project with optional flag overrides."""
        options = MakePotOptions(source=str(self.root), **overrides)  # type: ignore[arg-type]
        return resolve_config(options)

    def path(self) -> Path:
        """Return the project root path."""
        return self.root


__all__ = ["ProjectBuilder"]
