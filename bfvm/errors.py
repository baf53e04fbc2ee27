from __future__ import annotations


class VMError(Exception):
    """Base class for every failure that aborts a run."""

    def __init__(self, message: str, *, ip: int | None = None, idx: int | None = None) -> None:
        self.ip = ip
        self.idx = idx
        prefix = ""
        if ip is not None:
            prefix = f"ip {ip}: "
        super().__init__(prefix + str(message))


class UnmatchedLoopClose(VMError):
    def __init__(self, *, ip: int | None = None, idx: int | None = None) -> None:
        super().__init__("unmatched ']' (jump stack is empty)", ip=ip, idx=idx)


class UnmatchedLoopOpen(VMError):
    def __init__(self, *, ip: int | None = None, idx: int | None = None) -> None:
        super().__init__("unmatched '[' (no closing ']' to skip to)", ip=ip, idx=idx)


class InputExhausted(VMError):
    def __init__(self, *, ip: int | None = None, idx: int | None = None) -> None:
        super().__init__("input exhausted", ip=ip, idx=idx)


class InvalidOutputValue(VMError):
    def __init__(self, value: int, *, ip: int | None = None, idx: int | None = None) -> None:
        self.value = value
        super().__init__(f"cell value {value} is not a valid code point", ip=ip, idx=idx)


class CellOverflow(VMError):
    def __init__(
        self, *, index: int, value: int, bits: int, ip: int | None = None
    ) -> None:
        self.index = index
        self.value = value
        self.bits = bits
        super().__init__(
            f"value {value} at cell {index} does not fit in a signed {bits}-bit cell",
            ip=ip,
            idx=index,
        )
