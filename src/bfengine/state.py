from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass
class RunState:
    ip: int = 0
    steps: int = 0
    bytes_read: int = 0
    bytes_written: int = 0
    trace: List[str] = field(default_factory=list)
    is_tracing: bool = False
    trace_limit: int = 10000
    trace_dropped: int = 0

    def reset(self) -> None:
        self.ip = 0
        self.steps = 0
        self.bytes_read = 0
        self.bytes_written = 0
        self.trace.clear()
        self.trace_dropped = 0

    def add_trace(self, message: str) -> None:
        if not self.is_tracing:
            return
        if len(self.trace) < self.trace_limit:
            self.trace.append(message)
        else:
            self.trace_dropped += 1
