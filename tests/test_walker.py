"""Tests for ngcontext.walker."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List

import pytest

from ngcontext.walker import walk
from tests._fixtures.project_builder import ProjectBuilder


def test_walk_is_depth_first_in_name_order(project: ProjectBuilder) -> None:
    project.write(
        {
            "b.ts": "",
            "a/z.ts": "",
            "a/inner/y.ts": "",
            "c.md": "",
        }
    )
    seen: List[str] = []

    report = walk(project.path(), lambda path: seen.append(path.relative_to(project.path()).as_posix()))

    assert seen == ["a/inner/y.ts", "a/z.ts", "b.ts", "c.md"]
    assert report.visited == 4
    assert report.skipped == []


def test_walk_prunes_hidden_and_build_directories(project: ProjectBuilder) -> None:
    project.write(
        {
            "src/main.ts": "",
            "node_modules/lib/index.js": "",
            "dist/main.js": "",
            ".angular/cache.json": "",
        }
    )
    seen: List[Path] = []

    walk(project.path(), seen.append)

    assert [path.name for path in seen] == ["main.ts"]


def test_walk_records_failing_visits_and_continues(project: ProjectBuilder) -> None:
    project.write({"bad.ts": "", "good.ts": ""})
    seen: List[str] = []

    def _visit(path: Path) -> None:
        if path.name == "bad.ts":
            raise OSError("permission denied")
        seen.append(path.name)

    report = walk(project.path(), _visit)

    assert seen == ["good.ts"]
    assert report.visited == 1
    assert len(report.skipped) == 1
    assert report.skipped[0].path.endswith("bad.ts")
    assert "permission denied" in report.skipped[0].reason


def test_walk_records_undecodable_files(project: ProjectBuilder) -> None:
    (project.path() / "binary.ts").write_bytes(b"\xff\xfe\xfa")

    report = walk(project.path(), lambda path: path.read_text(encoding="utf-8"))

    assert report.visited == 0
    assert [entry.reason.split(":")[0] for entry in report.skipped] == ["UnicodeDecodeError"]


def test_walk_of_missing_directory_reports_skip_without_raising(tmp_path: Path) -> None:
    report = walk(tmp_path / "missing", lambda path: None)

    assert report.visited == 0
    assert len(report.skipped) == 1


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
def test_walk_does_not_follow_symlink_cycles(project: ProjectBuilder) -> None:
    project.write({"src/app.ts": ""})
    os.symlink(project.path(), project.path() / "src" / "loop")
    seen: List[Path] = []

    report = walk(project.path(), seen.append)

    assert [path.name for path in seen] == ["app.ts"]
    assert report.visited == 1
