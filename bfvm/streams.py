from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, TextIO, runtime_checkable


@runtime_checkable
class InputSource(Protocol):
    """Single-pass producer of characters.

    ``read_char`` returns the next character, or None once the source is
    exhausted. Exhaustion is permanent.
    """

    def read_char(self) -> str | None: ...


@runtime_checkable
class OutputSink(Protocol):
    """Append-only character sink; text is emitted in call order."""

    def write(self, text: str) -> None: ...


class IterableInput:
    def __init__(self, chars: Iterable[str]) -> None:
        # A list of strings reads like their concatenation.
        self._it = (char for chunk in chars for char in chunk)
        self._exhausted = False

    def read_char(self) -> str | None:
        if self._exhausted:
            return None
        char = next(self._it, None)
        if char is None:
            self._exhausted = True
        return char


class TextStreamInput:
    """Reads lazily, one character per call, from a text stream such as stdin."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._exhausted = False

    def read_char(self) -> str | None:
        if self._exhausted:
            return None
        char = self._stream.read(1)
        if not char:
            self._exhausted = True
            return None
        return char


class BufferOutput:
    def __init__(self) -> None:
        self._parts: list[str] = []

    def write(self, text: str) -> None:
        self._parts.append(text)

    def getvalue(self) -> str:
        return "".join(self._parts)


class TextStreamOutput:
    def __init__(self, stream: TextIO, *, flush: bool = False) -> None:
        self._stream = stream
        self._flush = flush

    def write(self, text: str) -> None:
        self._stream.write(text)
        if self._flush:
            self._stream.flush()
