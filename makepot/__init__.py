"""Generate gettext POT files for WordPress plugins, themes and PHP projects."""

__version__ = "0.4.0"

__all__ = ["__version__"]
