from __future__ import annotations

from pydantic import BaseModel, Field

from bfvm.config import InterpreterSettings
from bfvm.tape import Tape


class RunReport(BaseModel):
    schema_version: int = Field(default=1, ge=1)
    program_length: int = Field(ge=0)
    steps: int = Field(ge=0)
    output: str = ""
    cells: dict[int, int] = Field(default_factory=dict)
    settings: InterpreterSettings

    @classmethod
    def from_run(
        cls,
        *,
        tape: Tape,
        output: str,
        program_length: int,
        steps: int,
        settings: InterpreterSettings,
    ) -> RunReport:
        return cls(
            program_length=program_length,
            steps=steps,
            output=output,
            cells=tape.cells(),
            settings=settings,
        )
