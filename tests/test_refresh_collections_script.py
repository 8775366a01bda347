"""Tests for the collection refresh command line entry point."""

import importlib.util
from pathlib import Path

import pytest

SCRIPT_PATH = Path(__file__).resolve().parents[1] / "scripts" / "refresh_collections.py"


def _load_script():
    spec = importlib.util.spec_from_file_location("refresh_collections", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_refresh_reports_every_outcome(make_template, capsys):
    for _ in range(3):
        make_template(tags=("christmas",), downloads=2)
    script = _load_script()

    exit_code = script.main(["--month", "11", "--year", "2025"])

    lines = capsys.readouterr().out.splitlines()
    assert exit_code == 0
    assert "trending:downloads_7d: skipped (3 candidates)" in lines
    holiday = next(line for line in lines if line.startswith("seasonal:holiday:2025"))
    assert holiday.startswith("seasonal:holiday:2025: collection ")
    assert holiday.endswith("(3 candidates)")
    assert len(lines) == 4 + 3


def test_refresh_can_run_a_single_generator(capsys):
    script = _load_script()

    script.main(["--only", "seasonal", "--month", "2", "--year", "2026"])

    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "seasonal:winter:2025: skipped (0 candidates)",
        "seasonal:valentine:2026: skipped (0 candidates)",
    ]


def test_refresh_exits_on_invalid_month():
    script = _load_script()

    with pytest.raises(SystemExit, match="Collection refresh failed"):
        script.main(["--only", "seasonal", "--month", "13"])
