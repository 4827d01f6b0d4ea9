"""CLI parser and command tests."""

from __future__ import annotations

import pytest

from ngcontext.cli import _build_parser, main
from tests._fixtures.project_builder import ProjectBuilder


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "search", "needle"])
    assert args.verbose is True
    assert args.command == "search"


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["usage", "--verbose"])
    assert args.verbose is True
    assert args.command == "usage"


def test_cli_collects_repeated_type_flags() -> None:
    parser = _build_parser()
    args = parser.parse_args(["search", "signal", "--type", ".ts", "--type", ".html"])
    assert args.file_types == [".ts", ".html"]
    assert args.directory is None


def test_cli_rejects_unknown_grouping() -> None:
    parser = _build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(["usage", "--group-by", "folder"])


def test_cli_search_prints_report(project: ProjectBuilder, capsys: pytest.CaptureFixture[str]) -> None:
    project.write({"src/app/app.component.ts": "export class AppComponent {}\n"})

    main(["--root", str(project.root), "search", "AppComponent"])

    output = capsys.readouterr().out
    assert '# 🔍 Search Results for "AppComponent"' in output
    assert "src/app/app.component.ts" in output


def test_cli_read_reports_out_of_scope(project: ProjectBuilder, capsys: pytest.CaptureFixture[str]) -> None:
    main(["--root", str(project.root), "read", "../outside.ts"])

    output = capsys.readouterr().out
    assert "outside the project directory" in output


def test_cli_exits_on_invalid_config(project: ProjectBuilder) -> None:
    project.write({".ngcontext.yml": "- not\n- a mapping\n"})

    with pytest.raises(SystemExit) as excinfo:
        main(["--root", str(project.root), "inventory"])

    assert excinfo.value.code == 1


def test_cli_exits_on_missing_root(project: ProjectBuilder, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--root", str(project.root / "typo"), "search", "password"])

    assert excinfo.value.code == 1
    assert "does not exist" in capsys.readouterr().err
