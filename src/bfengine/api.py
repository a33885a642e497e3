from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

from .engine import run
from .loader import load


@dataclass(frozen=True)
class RunOptions:
    max_tape_size: Optional[int] = None
    trace: bool = False


@dataclass(frozen=True)
class RunResult:
    output: bytes
    steps: int
    pointer: int
    tape: bytes
    trace: Tuple[str, ...] = ()

    @property
    def text(self) -> str:
        return self.output.decode('latin-1')


def _as_bytes(data: Union[bytes, str]) -> bytes:
    if isinstance(data, str):
        return data.encode('latin-1')
    return bytes(data)


def run_string(
    source: str,
    input_data: Union[bytes, str] = b"",
    *,
    options: Optional[RunOptions] = None,
) -> RunResult:
    opts = RunOptions() if options is None else options
    program = load(source)
    stdout = io.BytesIO()
    engine = run(
        program,
        io.BytesIO(_as_bytes(input_data)),
        stdout,
        max_tape_size=opts.max_tape_size,
        trace=opts.trace,
    )
    return RunResult(
        output=stdout.getvalue(),
        steps=engine.state.steps,
        pointer=engine.tape.pointer,
        tape=engine.tape.snapshot(),
        trace=tuple(engine.state.trace),
    )


def run_file(
    path: str | Path,
    input_data: Union[bytes, str] = b"",
    *,
    options: Optional[RunOptions] = None,
    encoding: str = "utf-8",
) -> RunResult:
    p = Path(path)
    return run_string(p.read_text(encoding=encoding), input_data, options=options)
