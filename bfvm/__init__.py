from __future__ import annotations

from bfvm.api import RunResult, load_program, run_program, run_source
from bfvm.config import InterpreterSettings, load_settings, load_settings_file
from bfvm.errors import (
    CellOverflow,
    InputExhausted,
    InvalidOutputValue,
    UnmatchedLoopClose,
    UnmatchedLoopOpen,
    VMError,
)
from bfvm.instructions import Instruction, instruction_for
from bfvm.interpreter import Interpreter
from bfvm.program import Program, parse_program
from bfvm.report import RunReport
from bfvm.streams import (
    BufferOutput,
    InputSource,
    IterableInput,
    OutputSink,
    TextStreamInput,
    TextStreamOutput,
)
from bfvm.tape import OverflowMode, Tape

__all__ = [
    "__version__",
    # Core
    "Instruction",
    "instruction_for",
    "Program",
    "parse_program",
    "Tape",
    "OverflowMode",
    "Interpreter",
    # I/O
    "InputSource",
    "OutputSink",
    "IterableInput",
    "TextStreamInput",
    "BufferOutput",
    "TextStreamOutput",
    # Errors
    "VMError",
    "UnmatchedLoopClose",
    "UnmatchedLoopOpen",
    "InputExhausted",
    "InvalidOutputValue",
    "CellOverflow",
    # Settings
    "InterpreterSettings",
    "load_settings",
    "load_settings_file",
    # API
    "RunResult",
    "RunReport",
    "load_program",
    "run_program",
    "run_source",
]

__version__ = "0.1.0"
