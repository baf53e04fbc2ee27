from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from bfvm.instructions import Instruction, instruction_for


@dataclass(frozen=True, slots=True)
class Program:
    """An immutable, ordered sequence of instructions."""

    instructions: tuple[Instruction, ...] = ()

    def __post_init__(self) -> None:
        # Accept any iterable of instructions or their symbols; always store a tuple.
        # An unknown symbol raises ValueError here, not during a run.
        object.__setattr__(self, "instructions", tuple(Instruction(i) for i in self.instructions))

    @classmethod
    def from_source(cls, source: Iterable[str]) -> Program:
        return parse_program(source)

    def to_source(self) -> str:
        return "".join(ins.symbol for ins in self.instructions)

    def __len__(self) -> int:
        return len(self.instructions)

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self.instructions)

    def __getitem__(self, ip: int) -> Instruction:
        return self.instructions[ip]


def parse_program(source: Iterable[str]) -> Program:
    ops: list[Instruction] = []
    for char in source:
        ins = instruction_for(char)
        if ins is not None:
            ops.append(ins)
    return Program(ops)
