from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Tuple, Union

from .errors import UnmatchedLoopEndError, UnmatchedLoopStartError, make_load_error


class Instruction(enum.Enum):
    MOVE_RIGHT = '>'
    MOVE_LEFT = '<'
    INCREMENT = '+'
    DECREMENT = '-'
    OUTPUT = '.'
    INPUT = ','
    LOOP_START = '['
    LOOP_END = ']'


_BY_CHAR: Dict[str, Instruction] = {ins.value: ins for ins in Instruction}


@dataclass(frozen=True)
class Program:
    """
    A validated instruction sequence.

    Only the eight instruction characters survive loading, so indices into
    `instructions` are dense. `jump_table` maps every '[' index to its ']'
    index and every ']' index back to its '['. `positions[i]` is the offset of
    instruction i in `source`.
    """

    instructions: Tuple[Instruction, ...]
    jump_table: Dict[int, int] = field(repr=False, compare=False)
    positions: Tuple[int, ...] = field(repr=False)
    source: str = field(repr=False, default="")

    def __len__(self) -> int:
        return len(self.instructions)

    def __str__(self) -> str:
        return ''.join(ins.value for ins in self.instructions)


def load(source: str) -> Program:
    instructions: List[Instruction] = []
    positions: List[int] = []
    for offset, ch in enumerate(source):
        ins = _BY_CHAR.get(ch)
        if ins is not None:
            instructions.append(ins)
            positions.append(offset)

    jump_table: Dict[int, int] = {}
    stack: List[int] = []
    for index, ins in enumerate(instructions):
        if ins is Instruction.LOOP_START:
            stack.append(index)
        elif ins is Instruction.LOOP_END:
            if not stack:
                raise make_load_error(
                    UnmatchedLoopEndError,
                    message="unmatched ']'",
                    source=source,
                    index=index,
                    offset=positions[index],
                )
            start = stack.pop()
            jump_table[start] = index
            jump_table[index] = start

    if stack:
        # Report the innermost open loop.
        index = stack[-1]
        raise make_load_error(
            UnmatchedLoopStartError,
            message="unmatched '['",
            source=source,
            index=index,
            offset=positions[index],
        )

    return Program(
        instructions=tuple(instructions),
        jump_table=jump_table,
        positions=tuple(positions),
        source=source,
    )


def load_file(path: Union[str, Path], *, encoding: str = "utf-8") -> Program:
    p = Path(path)
    return load(p.read_text(encoding=encoding))
