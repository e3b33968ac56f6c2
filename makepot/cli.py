"""CLI entrypoint for the makepot command."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from . import __version__
from .config import MakePotOptions, resolve_config
from .errors import MakePotError
from .logging import configure_logging
from .pipeline import PotMaker


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="makepot",
        description=(
            "Create a POT file for a WordPress plugin or theme. Scans PHP and "
            "JavaScript files, as well as theme stylesheets, for translatable strings."
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        metavar="PATH",
        help="Also write debug output for the run to this file.",
    )
    parser.add_argument("source", help="Directory to scan for string extraction.")
    parser.add_argument(
        "destination",
        nargs="?",
        default=None,
        help="Name of the resulting POT file.",
    )
    parser.add_argument(
        "--slug",
        help="Plugin or theme slug. Defaults to the source directory's basename.",
    )
    parser.add_argument(
        "--domain",
        help=(
            "Text domain to look for in the source code. Defaults to the plugin or "
            "theme \"Text Domain\" header, falling back to the slug."
        ),
    )
    parser.add_argument(
        "--ignore-domain",
        action="store_true",
        help="Ignore the text domain completely and extract strings with any text domain.",
    )
    parser.add_argument(
        "--merge",
        nargs="?",
        const=True,
        default=None,
        metavar="FILE",
        help=(
            "Existing POT file whose content should be merged with the extracted "
            "strings. If left empty, defaults to the destination POT file. Give the "
            "file as --merge=FILE: a separate word after --merge is taken as the "
            "merge file, not as the destination."
        ),
    )
    parser.add_argument(
        "--include",
        metavar="PATHS",
        help="Only take specific files and folders into account (comma-separated).",
    )
    parser.add_argument(
        "--exclude",
        metavar="PATHS",
        help=(
            "Additional ignored paths as CSV (e.g. 'tests,bin,.github'). node_modules, "
            ".git, .svn, .CVS, .hg and vendor are always ignored."
        ),
    )
    parser.add_argument(
        "--headers",
        metavar="JSON",
        help="JSON object of custom headers which will be added to the POT file.",
    )
    parser.add_argument(
        "--skip-js",
        "--skip-secondary-scan",
        dest="skip_js",
        action="store_const",
        const=True,
        default=None,
        help="Skip JavaScript string extraction, e.g. when a separate build step handles it.",
    )
    parser.add_argument(
        "--copyright-holder",
        metavar="NAME",
        help="Name to use for the copyright comment in the resulting POT file.",
    )
    parser.add_argument(
        "--package-name",
        metavar="NAME",
        help="Package name to use in the resulting POT file when none is detected.",
    )
    return parser


def _options_from_args(args: argparse.Namespace) -> MakePotOptions:
    return MakePotOptions(
        source=args.source,
        destination=args.destination,
        slug=args.slug,
        domain=args.domain,
        ignore_domain=bool(args.ignore_domain),
        merge=args.merge,
        include=args.include,
        exclude=args.exclude,
        headers=args.headers,
        skip_js=args.skip_js,
        copyright_holder=args.copyright_holder,
        package_name=args.package_name,
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for makepot."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    try:
        config = resolve_config(_options_from_args(args))
        result = PotMaker().run(config)
    except MakePotError as exc:
        parser.exit(1, f"Error: {exc}\n")

    count = result.count
    print("Success: POT file successfully generated!")
    print(f"{count} {'string' if count == 1 else 'strings'} written to {_relativize(result.destination)}")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
