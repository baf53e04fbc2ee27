from __future__ import annotations

import logging
from dataclasses import dataclass, field

from bfvm.config import InterpreterSettings
from bfvm.errors import (
    CellOverflow,
    InputExhausted,
    InvalidOutputValue,
    UnmatchedLoopClose,
    UnmatchedLoopOpen,
)
from bfvm.instructions import Instruction
from bfvm.program import Program
from bfvm.streams import InputSource, OutputSink
from bfvm.tape import Tape

logger = logging.getLogger(__name__)

_MAX_CODE_POINT = 0x10FFFF
_SURROGATES = range(0xD800, 0xE000)


@dataclass
class ExecutionState:
    """Transient state of one run. Never shared between runs."""

    tape: Tape
    ip: int = 0
    idx: int = 0
    stack: list[int] = field(default_factory=list)
    steps: int = 0


class Interpreter:
    def __init__(self, settings: InterpreterSettings | None = None) -> None:
        self.settings = settings or InterpreterSettings()
        # Instruction count of the most recent run, for reporting only.
        self.last_steps = 0

    def new_tape(self) -> Tape:
        return Tape(cell_bits=self.settings.cell_bits, overflow=self.settings.overflow)

    def run(self, program: Program, input_source: InputSource, output_sink: OutputSink) -> Tape:
        state = ExecutionState(tape=self.new_tape())
        self.last_steps = 0
        end = len(program)
        trace = self.settings.trace
        logger.debug(
            "run start: %d instructions, strict_loops=%s", end, self.settings.strict_loops
        )

        try:
            while state.ip < end:
                ins = program[state.ip]
                if trace:
                    logger.debug(
                        "step %d ip=%d %s idx=%d cell=%d",
                        state.steps,
                        state.ip,
                        ins.symbol,
                        state.idx,
                        state.tape.get(state.idx),
                    )
                self._step(program, ins, state, input_source, output_sink)
                state.ip += 1
                state.steps += 1
        finally:
            self.last_steps = state.steps
        logger.debug(
            "run finished: %d steps, %d cells, %d open loops",
            state.steps,
            len(state.tape),
            len(state.stack),
        )
        return state.tape

    def _step(
        self,
        program: Program,
        ins: Instruction,
        state: ExecutionState,
        input_source: InputSource,
        output_sink: OutputSink,
    ) -> None:
        if ins is Instruction.INCREMENT:
            self._shift(state, 1)
        elif ins is Instruction.DECREMENT:
            self._shift(state, -1)
        elif ins is Instruction.MOVE_RIGHT:
            state.idx += 1
        elif ins is Instruction.MOVE_LEFT:
            state.idx -= 1
        elif ins is Instruction.OUTPUT:
            value = state.tape.get(state.idx)
            if value < 0 or value > _MAX_CODE_POINT or value in _SURROGATES:
                raise InvalidOutputValue(value, ip=state.ip, idx=state.idx)
            output_sink.write(chr(value))
        elif ins is Instruction.INPUT:
            char = input_source.read_char()
            if char is None:
                raise InputExhausted(ip=state.ip, idx=state.idx)
            self._store(state, ord(char))
        elif ins is Instruction.LOOP_OPEN:
            if self.settings.strict_loops and state.tape.get(state.idx) == 0:
                # Land on the matching ']'; the caller's ip += 1 steps past it.
                state.ip = _matching_close(program, state.ip, idx=state.idx)
            else:
                state.stack.append(state.ip)
        elif ins is Instruction.LOOP_CLOSE:
            if not state.stack:
                raise UnmatchedLoopClose(ip=state.ip, idx=state.idx)
            if state.tape.get(state.idx) != 0:
                state.ip = state.stack[-1]
            else:
                state.stack.pop()
        else:
            raise AssertionError(f"unhandled instruction: {ins!r}")

    def _shift(self, state: ExecutionState, delta: int) -> None:
        try:
            state.tape.shift(state.idx, delta)
        except CellOverflow as exc:
            raise CellOverflow(index=exc.index, value=exc.value, bits=exc.bits, ip=state.ip) from exc

    def _store(self, state: ExecutionState, value: int) -> None:
        try:
            state.tape.set(state.idx, value)
        except CellOverflow as exc:
            raise CellOverflow(index=exc.index, value=exc.value, bits=exc.bits, ip=state.ip) from exc


def _matching_close(program: Program, open_ip: int, *, idx: int) -> int:
    depth = 0
    for ip in range(open_ip, len(program)):
        ins = program[ip]
        if ins is Instruction.LOOP_OPEN:
            depth += 1
        elif ins is Instruction.LOOP_CLOSE:
            depth -= 1
            if depth == 0:
                return ip
    raise UnmatchedLoopOpen(ip=open_ip, idx=idx)
