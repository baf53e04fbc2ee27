from __future__ import annotations

from enum import Enum


class Instruction(str, Enum):
    INCREMENT = "+"
    DECREMENT = "-"
    MOVE_RIGHT = ">"
    MOVE_LEFT = "<"
    LOOP_OPEN = "["
    LOOP_CLOSE = "]"
    OUTPUT = "."
    INPUT = ","

    @property
    def symbol(self) -> str:
        return self.value


SYMBOL_TABLE: dict[str, Instruction] = {ins.value: ins for ins in Instruction}


def instruction_for(char: str) -> Instruction | None:
    """Map one source character to its instruction, or None for comment text."""
    return SYMBOL_TABLE.get(char)
