from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TextIO

from pydantic import ValidationError

from bfvm.api import load_program
from bfvm.config import InterpreterSettings, load_settings, load_settings_file
from bfvm.errors import VMError
from bfvm.interpreter import Interpreter
from bfvm.report import RunReport
from bfvm.streams import IterableInput, TextStreamInput, TextStreamOutput

logger = logging.getLogger(__name__)


def _existing_path(value: str) -> Path:
    p = Path(value)
    if not p.exists():
        raise argparse.ArgumentTypeError(f"path not found: {value}")
    return p


def _config_path(value: str) -> Path:
    p = _existing_path(value)
    if p.suffix.lower() not in {".yml", ".yaml"}:
        raise argparse.ArgumentTypeError(f"config must be YAML: {value}")
    return p


class _RecordingOutput(TextStreamOutput):
    """Writes through to the stream and keeps a copy for the run report."""

    def __init__(self, stream: TextIO, *, flush: bool = False) -> None:
        super().__init__(stream, flush=flush)
        self.parts: list[str] = []

    def write(self, text: str) -> None:
        self.parts.append(text)
        super().write(text)


def _output_sink(*, record: bool) -> TextStreamOutput:
    # Only keep a copy of the output when a report will be written.
    if record:
        return _RecordingOutput(sys.stdout, flush=True)
    return TextStreamOutput(sys.stdout, flush=True)


def _settings_from_args(args: argparse.Namespace) -> InterpreterSettings:
    overrides = {
        "strict_loops": True if args.strict_loops else None,
        "cell_bits": args.cell_bits,
        "overflow": args.overflow,
        "trace": True if args.trace else None,
    }
    try:
        if args.config is not None:
            return load_settings_file(args.config, **overrides)
        return load_settings(**overrides)
    except (ValidationError, ValueError) as e:
        raise SystemExit(f"invalid settings: {e}") from e


def _cmd_run(args: argparse.Namespace) -> int:
    settings = _settings_from_args(args)
    logging.basicConfig(
        level=logging.DEBUG if settings.trace else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    program = load_program(args.program)
    if args.input is not None:
        source = IterableInput(args.input)
    elif args.input_file is not None:
        try:
            text = args.input_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise SystemExit(f"bfvm: {args.input_file}: {e}") from e
        source = IterableInput(text)
    else:
        source = TextStreamInput(sys.stdin)
    sink = _output_sink(record=args.dump_tape is not None)

    interp = Interpreter(settings)
    try:
        tape = interp.run(program, source, sink)
    except VMError as e:
        sys.stdout.flush()
        raise SystemExit(f"bfvm: {args.program}: {e}") from e

    if args.dump_tape is not None:
        report = RunReport.from_run(
            tape=tape,
            output="".join(sink.parts) if isinstance(sink, _RecordingOutput) else "",
            program_length=len(program),
            steps=interp.last_steps,
            settings=settings,
        )
        args.dump_tape.write_text(report.model_dump_json(indent=2), encoding="utf-8")
        logger.debug("wrote run report to %s", args.dump_tape)
    return 0


def _cmd_parse(args: argparse.Namespace) -> int:
    program = load_program(args.program)
    print(program.to_source())
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="bfvm")
    sub = parser.add_subparsers(dest="cmd", required=True)

    run_p = sub.add_parser("run", help="execute a program file")
    run_p.add_argument("program", type=_existing_path)
    g = run_p.add_mutually_exclusive_group()
    g.add_argument("--input", type=str, default=None, help="program input text (default: stdin)")
    g.add_argument("--input-file", type=_existing_path, default=None, help="read program input from a file")
    run_p.add_argument(
        "--strict-loops",
        action="store_true",
        help="skip a loop body when the cell is zero on entry",
    )
    run_p.add_argument("--cell-bits", type=int, default=None)
    run_p.add_argument("--overflow", choices=["wrap", "trap"], default=None)
    run_p.add_argument("--config", type=_config_path, default=None, help="settings YAML")
    run_p.add_argument("--trace", action="store_true", help="log every step to stderr")
    run_p.add_argument(
        "--dump-tape",
        type=Path,
        default=None,
        help="write a JSON run report (output and final tape) to this path",
    )

    parse_p = sub.add_parser("parse", help="print the program with comments stripped")
    parse_p.add_argument("program", type=_existing_path)

    args = parser.parse_args(argv)

    if args.cmd == "run":
        return _cmd_run(args)
    if args.cmd == "parse":
        return _cmd_parse(args)

    raise AssertionError(f"unhandled cmd: {args.cmd}")
