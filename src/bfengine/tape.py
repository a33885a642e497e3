from __future__ import annotations

from typing import Optional, Tuple


class Tape:
    """
    Byte cells addressed from 0 upwards.

    The tape starts as a single zero cell and grows to the right on demand,
    optionally capped at `max_size` cells. Movement methods return False
    instead of moving when the move is impossible; callers decide how to
    report it.
    """

    def __init__(self, max_size: Optional[int] = None):
        if max_size is not None and max_size < 1:
            raise ValueError(f"max_size must be at least 1, got {max_size}")
        self.cells = bytearray(1)
        self.pointer = 0
        self.max_size = max_size

    def __len__(self) -> int:
        return len(self.cells)

    def move_right(self) -> bool:
        if self.pointer + 1 >= len(self.cells):
            if self.max_size is not None and len(self.cells) + 1 > self.max_size:
                return False
            self.cells.append(0)
        self.pointer += 1
        return True

    def move_left(self) -> bool:
        if self.pointer == 0:
            return False
        self.pointer -= 1
        return True

    def increment(self) -> None:
        self.cells[self.pointer] = (self.cells[self.pointer] + 1) & 0xFF

    def decrement(self) -> None:
        self.cells[self.pointer] = (self.cells[self.pointer] + 255) & 0xFF

    def read(self) -> int:
        return self.cells[self.pointer]

    def write(self, value: int) -> None:
        self.cells[self.pointer] = value & 0xFF

    def snapshot(self) -> bytes:
        return bytes(self.cells)

    def window(self, radius: int = 8) -> Tuple[int, bytes]:
        start = max(0, self.pointer - radius)
        end = min(len(self.cells), self.pointer + radius + 1)
        return start, bytes(self.cells[start:end])
