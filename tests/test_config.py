from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from bfvm.config import InterpreterSettings, load_settings, load_settings_file
from bfvm.tape import OverflowMode


def test_defaults_are_quirky_wrapping_64_bit() -> None:
    s = InterpreterSettings()
    assert s.strict_loops is False
    assert s.cell_bits == 64
    assert s.overflow is OverflowMode.WRAP
    assert s.trace is False


def test_settings_are_frozen() -> None:
    s = InterpreterSettings()
    with pytest.raises(ValidationError):
        s.cell_bits = 8


@pytest.mark.parametrize("bits", [0, 7, 65])
def test_cell_bits_bounds(bits: int) -> None:
    with pytest.raises(ValidationError):
        InterpreterSettings(cell_bits=bits)


def test_overflow_is_case_insensitive() -> None:
    assert InterpreterSettings(overflow=" TRAP ").overflow is OverflowMode.TRAP
    with pytest.raises(ValidationError):
        InterpreterSettings(overflow="saturate")


def test_load_settings_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("BFVM_STRICT_LOOPS", "true")
    monkeypatch.setenv("BFVM_CELL_BITS", "16")
    monkeypatch.setenv("BFVM_OVERFLOW", "trap")
    s = load_settings()
    assert s.strict_loops is True
    assert s.cell_bits == 16
    assert s.overflow is OverflowMode.TRAP


def test_explicit_overrides_beat_environment(monkeypatch) -> None:
    monkeypatch.setenv("BFVM_CELL_BITS", "16")
    s = load_settings(cell_bits=32, overflow=None)
    assert s.cell_bits == 32
    assert s.overflow is OverflowMode.WRAP


def test_blank_environment_values_are_ignored(monkeypatch) -> None:
    monkeypatch.setenv("BFVM_CELL_BITS", "  ")
    assert load_settings().cell_bits == 64


def test_load_settings_file(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("BFVM_TRACE", "1")
    p = tmp_path / "bfvm.yaml"
    p.write_text("strict_loops: true\ncell_bits: 8\n", encoding="utf-8")
    s = load_settings_file(p, overflow="trap")
    assert s.strict_loops is True
    assert s.cell_bits == 8
    assert s.overflow is OverflowMode.TRAP
    assert s.trace is True


def test_empty_settings_file_uses_defaults(tmp_path: Path) -> None:
    p = tmp_path / "empty.yaml"
    p.write_text("", encoding="utf-8")
    assert load_settings_file(p) == InterpreterSettings()


def test_settings_file_must_be_mapping(tmp_path: Path) -> None:
    p = tmp_path / "bad.yaml"
    p.write_text("- strict_loops\n", encoding="utf-8")
    with pytest.raises(ValueError, match="YAML mapping"):
        load_settings_file(p)


def test_settings_file_rejects_unknown_keys(tmp_path: Path) -> None:
    p = tmp_path / "bad.yaml"
    p.write_text("tape_size: 30000\n", encoding="utf-8")
    with pytest.raises(ValueError, match="unknown settings: tape_size"):
        load_settings_file(p)
