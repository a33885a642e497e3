from __future__ import annotations

from typing import BinaryIO, Optional

from .errors import (
    ExecutionError,
    PointerUnderflowError,
    StreamIOError,
    TapeSizeExceededError,
    make_execution_error,
)
from .loader import Instruction, Program
from .state import RunState
from .tape import Tape


class Engine:
    """
    Instruction-pointer interpreter for a loaded Program.

    One Engine is one run: it owns a fresh Tape and RunState, borrows the
    caller's streams, and never closes them.

    Streams:
    - input_stream: binary reader, `read(1)` returning b'' at end of input.
      None behaves like an empty stream.
    - output_stream: binary writer, one `write()` of a single byte per '.'.

    A ']' with a nonzero cell sends the IP back to its '[', so every loop
    iteration executes the '[' again and counts it as a step.

    Errors abort the run immediately; tape changes made before the error
    are kept. A stream raising OSError or ValueError (closed file) is
    reported as StreamIOError.
    """

    def __init__(
        self,
        program: Program,
        input_stream: Optional[BinaryIO],
        output_stream: BinaryIO,
        *,
        max_tape_size: Optional[int] = None,
        trace: bool = False,
    ):
        self.program = program
        self.input = input_stream
        self.output = output_stream
        self.tape = Tape(max_size=max_tape_size)
        self.state = RunState(is_tracing=trace)

    @property
    def halted(self) -> bool:
        return self.state.ip >= len(self.program)

    def _error(self, cls, message: str) -> ExecutionError:
        return make_execution_error(
            cls,
            message=message,
            ip=self.state.ip,
            pointer=self.tape.pointer,
            step=self.state.steps,
        )

    def _read_byte(self) -> int:
        flush = getattr(self.output, 'flush', None)
        if flush is not None:
            try:
                flush()
            except (OSError, ValueError) as exc:
                raise self._error(StreamIOError, f"output stream failed: {exc}") from exc

        if self.input is None:
            return 0
        try:
            data = self.input.read(1)
        except (OSError, ValueError) as exc:
            raise self._error(StreamIOError, f"input stream failed: {exc}") from exc
        if not data:
            return 0
        self.state.bytes_read += 1
        return data[0]

    def _write_byte(self, value: int) -> None:
        try:
            self.output.write(bytes((value,)))
        except (OSError, ValueError) as exc:
            raise self._error(StreamIOError, f"output stream failed: {exc}") from exc
        self.state.bytes_written += 1

    def step(self) -> bool:
        state = self.state
        ip = state.ip
        if ip >= len(self.program):
            return False

        tape = self.tape
        ins = self.program.instructions[ip]
        if state.is_tracing:
            state.add_trace(f"step {state.steps} ip={ip} op='{ins.value}' ptr={tape.pointer} cell={tape.read()}")

        if ins is Instruction.MOVE_RIGHT:
            if not tape.move_right():
                raise self._error(TapeSizeExceededError, f"moving right would exceed the tape limit of {tape.max_size} cells")
        elif ins is Instruction.MOVE_LEFT:
            if not tape.move_left():
                raise self._error(PointerUnderflowError, "moved left of cell 0")
        elif ins is Instruction.INCREMENT:
            tape.increment()
        elif ins is Instruction.DECREMENT:
            tape.decrement()
        elif ins is Instruction.OUTPUT:
            self._write_byte(tape.read())
        elif ins is Instruction.INPUT:
            tape.write(self._read_byte())
        elif ins is Instruction.LOOP_START:
            if tape.read() == 0:
                ip = self.program.jump_table[ip]
        elif ins is Instruction.LOOP_END:
            if tape.read() != 0:
                # Back to the '[' itself, which re-checks the cell next step.
                state.ip = self.program.jump_table[ip]
                state.steps += 1
                return True

        state.ip = ip + 1
        state.steps += 1
        return True

    def run(self) -> int:
        """Run until the program halts. Returns the number of steps executed."""
        executed = 0
        while self.step():
            executed += 1
        return executed

    def run_for(self, steps: int) -> Optional[int]:
        """
        Execute at most `steps` instructions.

        Returns the number executed when the budget ran out before the
        program halted, or None once the program has halted.
        """
        executed = 0
        while executed < steps:
            if not self.step():
                return None
            executed += 1
        if self.halted:
            return None
        return executed


def run(
    program: Program,
    input_stream: Optional[BinaryIO],
    output_stream: BinaryIO,
    *,
    max_tape_size: Optional[int] = None,
    trace: bool = False,
) -> Engine:
    engine = Engine(
        program,
        input_stream,
        output_stream,
        max_tape_size=max_tape_size,
        trace=trace,
    )
    engine.run()
    return engine
