from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple


def _line_col(source: str, offset: int) -> Tuple[int, int]:
    # 1-based line and column of a source offset.
    line = source.count('\n', 0, offset) + 1
    column = offset - (source.rfind('\n', 0, offset) + 1) + 1
    return line, column


def _build_context(lines: List[str], line_no_1: int, *, context: int = 2, column: Optional[int] = None) -> str:
    idx = max(1, line_no_1)
    start = max(1, idx - context)
    end = min(len(lines), idx + context)

    out: List[str] = []
    for i in range(start, end + 1):
        prefix = '>' if i == idx else ' '
        out.append(f"{prefix} {i:4d} | {lines[i - 1]}")
        if i == idx and column is not None:
            out.append(f"       | {' ' * (column - 1)}^")
    return "\n".join(out)


def _hint_for(message: str, *, kind: str) -> Optional[str]:
    msg = message.lower()
    if kind == 'load':
        if "unmatched ']'" in msg:
            return "Every ']' needs an earlier '[' to close. Remove it or add the missing '['."
        if "unmatched '['" in msg:
            return "Loops must be closed before the end of the program. Add the missing ']'."
        return None
    if kind == 'run':
        if 'left of cell 0' in msg:
            return 'The tape has no negative addresses. Check the balance of < and > in the loop bodies.'
        if 'tape limit' in msg:
            return 'Raise the tape limit (--max-size) or check for a runaway > loop.'
        return None
    return None


@dataclass(eq=False)
class BFError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(eq=False)
class LoadError(BFError):
    index: int
    offset: int
    line: int
    column: int
    context: str


@dataclass(eq=False)
class UnmatchedLoopStartError(LoadError):
    pass


@dataclass(eq=False)
class UnmatchedLoopEndError(LoadError):
    pass


@dataclass(eq=False)
class ExecutionError(BFError):
    ip: int
    pointer: int
    step: int


@dataclass(eq=False)
class PointerUnderflowError(ExecutionError):
    pass


@dataclass(eq=False)
class TapeSizeExceededError(ExecutionError):
    pass


@dataclass(eq=False)
class StreamIOError(ExecutionError):
    pass


def make_load_error(cls, *, message: str, source: str, index: int, offset: int) -> LoadError:
    line, column = _line_col(source, offset)
    lines = source.split('\n')
    ctx = _build_context(lines, line, column=column)
    hint = _hint_for(message, kind='load')
    hint_block = f"\nHint: {hint}" if hint else ""
    return cls(
        message=f"LoadError: {message} at instruction {index} (line {line}, column {column})\n{ctx}{hint_block}",
        index=index,
        offset=offset,
        line=line,
        column=column,
        context=ctx,
    )


def make_execution_error(cls, *, message: str, ip: int, pointer: int, step: int) -> ExecutionError:
    hint = _hint_for(message, kind='run')
    hint_block = f"\nHint: {hint}" if hint else ""
    return cls(
        message=f"RuntimeError: {message} (ip {ip}, pointer {pointer}, step {step}){hint_block}",
        ip=ip,
        pointer=pointer,
        step=step,
    )
