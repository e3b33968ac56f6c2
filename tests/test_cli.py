"""CLI parser and entrypoint behaviour tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from makepot.cli import _build_parser, _options_from_args, main
from tests._fixtures.project_builder import ProjectBuilder


def test_cli_requires_source() -> None:
    parser = _build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args([])


def test_cli_accepts_source_and_destination() -> None:
    args = _build_parser().parse_args(["src", "out/foo.pot"])
    assert args.source == "src"
    assert args.destination == "out/foo.pot"
    assert args.merge is None
    assert args.skip_js is None


def test_cli_merge_without_value_means_destination() -> None:
    args = _build_parser().parse_args(["src", "--merge"])
    assert args.merge is True


def test_cli_merge_with_value_keeps_path() -> None:
    args = _build_parser().parse_args(["src", "--merge=old.pot"])
    assert args.merge == "old.pot"


def test_cli_skip_secondary_scan_is_alias_for_skip_js() -> None:
    args = _build_parser().parse_args(["src", "--skip-secondary-scan"])
    assert args.skip_js is True


def test_cli_options_carry_every_flag() -> None:
    args = _build_parser().parse_args(
        [
            "--verbose",
            "src",
            "--slug",
            "foo",
            "--domain",
            "foo-domain",
            "--ignore-domain",
            "--include",
            "src,lib",
            "--exclude",
            "tests",
            "--headers",
            '{"X-Custom": "1"}',
            "--copyright-holder",
            "Jane",
            "--package-name",
            "Foo Package",
        ]
    )
    options = _options_from_args(args)

    assert args.verbose is True
    assert options.source == "src"
    assert options.slug == "foo"
    assert options.domain == "foo-domain"
    assert options.ignore_domain is True
    assert options.include == "src,lib"
    assert options.exclude == "tests"
    assert options.headers == '{"X-Custom": "1"}'
    assert options.copyright_holder == "Jane"
    assert options.package_name == "Foo Package"


def test_main_reports_success_with_relative_path(
    project_builder: ProjectBuilder,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    project_builder.write({"main.php": "<?php\n_e( 'Hello', 'my-project' );\n"})
    monkeypatch.chdir(tmp_path)

    main(["my-project"])

    out = capsys.readouterr().out.splitlines()
    assert out == [
        "Success: POT file successfully generated!",
        f"1 string written to {Path('my-project') / 'my-project.pot'}",
    ]
    assert (project_builder.path() / "my-project.pot").is_file()


def test_main_pluralises_string_count(
    project_builder: ProjectBuilder, capsys: pytest.CaptureFixture[str]
) -> None:
    project_builder.write({"main.php": "<?php\n__( 'One', 'my-project' );\n__( 'Two', 'my-project' );\n"})

    main([str(project_builder.path())])

    assert "2 strings written to" in capsys.readouterr().out


def test_main_exits_with_error_for_invalid_source(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / "missing")])

    assert excinfo.value.code == 1
    assert "Error: Not a valid source directory!\n" in capsys.readouterr().err


def test_main_exits_with_error_for_invalid_headers(
    project_builder: ProjectBuilder, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main([str(project_builder.path()), "--headers", "[1, 2]"])

    assert excinfo.value.code == 1
    assert "Error: " in capsys.readouterr().err
    assert not (project_builder.path() / "my-project.pot").exists()


def test_cli_merge_followed_by_separate_value_takes_it_as_merge_file() -> None:
    parser = _build_parser()

    args = parser.parse_args(["src", "--merge", "out.pot"])

    assert args.merge == "out.pot"
    assert args.destination is None
    merge_action = next(action for action in parser._actions if action.dest == "merge")
    assert "--merge=FILE" in merge_action.help


def test_main_writes_debug_output_to_log_file(
    project_builder: ProjectBuilder, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    project_builder.write({"main.php": "<?php\n__( 'Logged', 'my-project' );\n"})
    log_file = tmp_path / "logs" / "makepot.log"

    main([str(project_builder.path()), "--log-file", str(log_file)])

    content = log_file.read_text(encoding="utf-8")
    assert "DEBUG makepot.pipeline: Running php extractor over" in content
    assert "Extracted 1 string" in content
    assert "Debug (" not in capsys.readouterr().err
