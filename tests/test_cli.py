from __future__ import annotations

import builtins
import json
from pathlib import Path

import pytest

from helpers import snapshot, write_bytes
from dirprune import __version__, cli


def _tree(root: Path) -> None:
    write_bytes(root / "app" / "node_modules" / "lib" / "index.js", 300)
    write_bytes(root / "app" / "dist" / "bundle.js", 50)
    write_bytes(root / "app" / "src" / "main.js", 10)


def _args(root: Path, targets: Path, *extra: str) -> list[str]:
    return ["--path", str(root), "--targets", str(targets), *extra]


def test_help_exits_zero() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--help"])
    assert excinfo.value.code == 0


def test_version(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit):
        cli.main(["--version"])
    assert __version__ in capsys.readouterr().out


def test_missing_path_is_fatal(tmp_path: Path, targets_file) -> None:
    with pytest.raises(SystemExit, match="does not exist"):
        cli.main(_args(tmp_path / "missing", targets_file("dist")))


def test_missing_targets_file_is_fatal(tmp_path: Path) -> None:
    with pytest.raises(SystemExit, match="Error reading targets"):
        cli.main(_args(tmp_path, tmp_path / "nope.txt"))


def test_workers_must_be_positive(tmp_path: Path, targets_file) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(_args(tmp_path, targets_file("dist"), "--workers", "0"))
    assert excinfo.value.code == 2


def test_dry_run_lists_without_deleting(
    tmp_path: Path, targets_file, capsys: pytest.CaptureFixture[str]
) -> None:
    _tree(tmp_path)
    targets = targets_file("node_modules", "dist")
    before = snapshot(tmp_path)

    assert cli.main(_args(tmp_path / "app", targets, "--dry-run")) == 0

    out = capsys.readouterr().out
    assert f"Found: {tmp_path / 'app' / 'dist'}" in out
    assert f"Found: {tmp_path / 'app' / 'node_modules'}" in out
    assert "DRY RUN MODE" in out
    assert "Directories found: 2" in out
    assert "Total size: 350 B" in out
    assert "Dry run completed" in out
    assert snapshot(tmp_path) == before


def test_nothing_found(tmp_path: Path, targets_file, capsys: pytest.CaptureFixture[str]) -> None:
    _tree(tmp_path)

    assert cli.main(_args(tmp_path / "app", targets_file("target"), "--yes")) == 0

    assert "No target directories found" in capsys.readouterr().out


def test_yes_deletes_and_writes_report(
    tmp_path: Path, targets_file, capsys: pytest.CaptureFixture[str]
) -> None:
    _tree(tmp_path)
    report_path = tmp_path / "out" / "report.json"

    result = cli.main(
        _args(
            tmp_path / "app",
            targets_file("node_modules", "dist"),
            "--yes",
            "--skip-warning",
            "--workers",
            "2",
            "--report",
            str(report_path),
        )
    )
    assert result == 0

    out = capsys.readouterr().out
    assert "WARNING" not in out
    assert "Successfully deleted: 2 out of 2 directories" in out
    assert "Freed space: 350 B" in out
    assert not (tmp_path / "app" / "node_modules").exists()
    assert not (tmp_path / "app" / "dist").exists()

    report = json.loads(report_path.read_text())
    assert report["state"] == "reported"
    assert report["summary"] == {
        "found": 2,
        "total_size": 350,
        "deleted_count": 2,
        "bytes_freed": 350,
    }


@pytest.mark.parametrize("answer", ["n", "", "nope"])
def test_prompt_declined(
    tmp_path: Path,
    targets_file,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    answer: str,
) -> None:
    _tree(tmp_path)
    monkeypatch.setattr(builtins, "input", lambda prompt: answer)

    cli.main(_args(tmp_path / "app", targets_file("dist")))

    assert "cancelled by user" in capsys.readouterr().out
    assert (tmp_path / "app" / "dist").exists()


def test_prompt_eof_declines(
    tmp_path: Path, targets_file, monkeypatch: pytest.MonkeyPatch
) -> None:
    _tree(tmp_path)

    def _eof(prompt: str) -> str:
        raise EOFError

    monkeypatch.setattr(builtins, "input", _eof)

    cli.main(_args(tmp_path / "app", targets_file("dist")))

    assert (tmp_path / "app" / "dist").exists()


@pytest.mark.parametrize("answer", ["y", "Y", "yes"])
def test_prompt_accepted(
    tmp_path: Path, targets_file, monkeypatch: pytest.MonkeyPatch, answer: str
) -> None:
    _tree(tmp_path)
    monkeypatch.setattr(builtins, "input", lambda prompt: answer)

    cli.main(_args(tmp_path / "app", targets_file("dist")))

    assert not (tmp_path / "app" / "dist").exists()
    assert (tmp_path / "app" / "node_modules").exists()


def test_verbose_mentions_workers(
    tmp_path: Path, targets_file, capsys: pytest.CaptureFixture[str]
) -> None:
    _tree(tmp_path)

    cli.main(_args(tmp_path / "app", targets_file("dist"), "-v", "--dry-run", "--workers", "7"))

    assert "Using 7 concurrent workers" in capsys.readouterr().out
