"""Tests for the launcher entrypoint."""

from __future__ import annotations

import sys
import types
from pathlib import Path

import pytest

from glucose_tracker import __main__ as launcher


def test_parse_args_defaults(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    ns = launcher.parse_args([])
    assert ns.db_path == str(Path.cwd() / "glucose_tracker.sqlite3")
    assert ns.storage_key == "diabetesData"


def test_parse_args_custom_values() -> None:
    ns = launcher.parse_args(["--db-path", "/tmp/g.sqlite3", "--storage-key", "k"])
    assert ns.db_path == "/tmp/g.sqlite3"
    assert ns.storage_key == "k"


def test_main_passes_arguments_to_app(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    captured: dict[str, object] = {}

    def _run_app(db_path: Path, storage_key: str) -> int:
        captured["db_path"] = db_path
        captured["storage_key"] = storage_key
        return 0

    fake_app = types.ModuleType("glucose_tracker.app")
    fake_app.run_app = _run_app  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "glucose_tracker.app", fake_app)
    db_file = tmp_path / "g.sqlite3"
    monkeypatch.setattr("sys.argv", ["prog", "--db-path", str(db_file)])

    assert launcher.main() == 0
    assert captured == {"db_path": db_file.resolve(), "storage_key": "diabetesData"}


def test_main_reports_missing_kivy(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def _run_app(db_path: Path, storage_key: str) -> int:
        raise ImportError("No module named 'kivy'")

    fake_app = types.ModuleType("glucose_tracker.app")
    fake_app.run_app = _run_app  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "glucose_tracker.app", fake_app)
    monkeypatch.setattr("sys.argv", ["prog"])

    assert launcher.main() == 1
    assert "pip install kivy" in capsys.readouterr().out
