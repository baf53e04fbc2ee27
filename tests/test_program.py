from __future__ import annotations

from pathlib import Path

import pytest

from bfvm.api import load_program
from bfvm.instructions import Instruction, instruction_for
from bfvm.program import Program, parse_program


def test_symbol_lookup() -> None:
    assert instruction_for("+") is Instruction.INCREMENT
    assert instruction_for("]") is Instruction.LOOP_CLOSE
    assert instruction_for(",") is Instruction.INPUT
    assert instruction_for("a") is None
    assert instruction_for(" ") is None


def test_every_instruction_has_a_distinct_symbol() -> None:
    symbols = [ins.symbol for ins in Instruction]
    assert sorted(symbols) == sorted("+-<>[].,")


def test_comments_are_dropped() -> None:
    assert parse_program("a+b-c") == parse_program("+-")
    assert list(parse_program("a+b-c")) == [Instruction.INCREMENT, Instruction.DECREMENT]


def test_order_is_preserved() -> None:
    prog = parse_program("hello [ world ] .,\n<>")
    assert prog.to_source() == "[].,<>"
    assert prog[0] is Instruction.LOOP_OPEN
    assert len(prog) == 6


def test_empty_and_comment_only_sources() -> None:
    assert len(parse_program("")) == 0
    assert parse_program("no commands here\n") == Program()


def test_program_from_instruction_list_is_immutable_tuple() -> None:
    ops = [Instruction.MOVE_RIGHT, Instruction.OUTPUT]
    prog = Program(ops)
    ops.append(Instruction.INPUT)
    assert prog.instructions == (Instruction.MOVE_RIGHT, Instruction.OUTPUT)
    assert Program.from_source(">.") == prog


def test_load_program_reads_utf8_file(tmp_path: Path) -> None:
    p = tmp_path / "prog.b"
    p.write_text("« comment » +++.\n", encoding="utf-8")
    assert load_program(p).to_source() == "+++."


def test_program_from_symbols_is_coerced() -> None:
    prog = Program(["+", "."])
    assert prog.instructions == (Instruction.INCREMENT, Instruction.OUTPUT)
    assert prog[0] is Instruction.INCREMENT
    assert prog.to_source() == "+."


def test_program_rejects_unknown_symbols() -> None:
    with pytest.raises(ValueError):
        Program(["+", "x"])
