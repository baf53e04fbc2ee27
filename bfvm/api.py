from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from bfvm.config import InterpreterSettings
from bfvm.interpreter import Interpreter
from bfvm.program import Program, parse_program
from bfvm.streams import BufferOutput, IterableInput
from bfvm.tape import Tape


@dataclass(frozen=True)
class RunResult:
    output: str
    tape: Tape
    steps: int


def load_program(path: Path) -> Program:
    # Undecodable bytes can only be comment text; they become U+FFFD and are dropped.
    return parse_program(path.read_text(encoding="utf-8", errors="replace"))


def run_program(
    program: Program,
    *,
    stdin: Iterable[str] = "",
    settings: InterpreterSettings | None = None,
) -> RunResult:
    interp = Interpreter(settings)
    out = BufferOutput()
    tape = interp.run(program, IterableInput(stdin), out)
    return RunResult(output=out.getvalue(), tape=tape, steps=interp.last_steps)


def run_source(
    *,
    src: str,
    stdin: Iterable[str] = "",
    settings: InterpreterSettings | None = None,
) -> RunResult:
    return run_program(parse_program(src), stdin=stdin, settings=settings)
