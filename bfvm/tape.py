from __future__ import annotations

from collections.abc import Iterator
from enum import Enum

from bfvm.errors import CellOverflow


class OverflowMode(str, Enum):
    WRAP = "wrap"
    TRAP = "trap"


class Tape:
    """Sparse, logically infinite memory addressed by signed integer index.

    Cells hold signed integers of ``cell_bits`` width. Out-of-range writes
    either wrap two's-complement style or raise CellOverflow, depending on
    ``overflow``. Indices themselves are unbounded.
    """

    DEFAULT: int = 0

    def __init__(self, *, cell_bits: int = 64, overflow: OverflowMode = OverflowMode.WRAP) -> None:
        if cell_bits < 1:
            raise ValueError("cell_bits must be positive")
        self.cell_bits = cell_bits
        self.overflow = OverflowMode(overflow)
        self._min = -(1 << (cell_bits - 1))
        self._max = (1 << (cell_bits - 1)) - 1
        self._cells: dict[int, int] = {}

    def get(self, index: int) -> int:
        return self._cells.get(index, Tape.DEFAULT)

    def set(self, index: int, value: int) -> None:
        self._cells[index] = self._fit(index, value)

    def shift(self, index: int, delta: int) -> None:
        self.set(index, self.get(index) + delta)

    def _fit(self, index: int, value: int) -> int:
        if self._min <= value <= self._max:
            return value
        if self.overflow == OverflowMode.TRAP:
            raise CellOverflow(index=index, value=value, bits=self.cell_bits)
        span = 1 << self.cell_bits
        return (value - self._min) % span + self._min

    def cells(self) -> dict[int, int]:
        """Snapshot of every materialised cell, ordered by index."""
        return dict(sorted(self._cells.items()))

    def __getitem__(self, index: int) -> int:
        return self.get(index)

    def __setitem__(self, index: int, value: int) -> None:
        self.set(index, value)

    def __contains__(self, index: object) -> bool:
        return index in self._cells

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._cells))

    def __repr__(self) -> str:
        return f"Tape(cells={self.cells()!r}, cell_bits={self.cell_bits}, overflow={self.overflow.value!r})"
