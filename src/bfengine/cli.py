import argparse
import os
import sys
import time
from typing import List, Optional

from .engine import Engine
from .errors import ExecutionError, LoadError
from .loader import load

DEFAULT_MAX_TAPE_SIZE = 2 ** 29


def _default_max_size() -> int:
    raw = os.environ.get("BFENGINE_MAX_TAPE_SIZE")
    if raw is None or not raw.strip():
        return DEFAULT_MAX_TAPE_SIZE
    return int(raw)


def _dump_tape(engine: Engine, count: int) -> None:
    cells = engine.tape.cells[:count]
    print("Tape:", file=sys.stderr)
    for i in range(0, len(cells), 8):
        row = " ".join(f"{b:3d}" for b in cells[i:i + 8])
        print(f"  [{i:04}]: {row}", file=sys.stderr)
    print(f"  ptr={engine.tape.pointer}", file=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bfengine",
        description="Run a Brainfuck program. Program output goes to stdout, input is read from stdin.",
    )
    parser.add_argument("source_file", help="Path to the source file")
    parser.add_argument(
        "-m", "--max-size", type=int, default=None,
        help=f"Maximum number of tape cells, 0 for no limit "
             f"(default: $BFENGINE_MAX_TAPE_SIZE or {DEFAULT_MAX_TAPE_SIZE})",
    )
    parser.add_argument(
        "-b", "--steps-before-interrupt", type=int, default=None, metavar="N",
        help="Run in chunks of N steps and report progress between chunks",
    )
    parser.add_argument("--stats", action="store_true", help="Print timings and step count to stderr")
    parser.add_argument("--dump", type=int, default=0, metavar="N", help="Print the first N tape cells after the run")
    parser.add_argument("--trace", action="store_true", help="Print the execution trace to stderr")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.steps_before_interrupt is not None and args.steps_before_interrupt < 1:
        parser.error("--steps-before-interrupt must be at least 1")
    try:
        max_size = args.max_size if args.max_size is not None else _default_max_size()
    except ValueError:
        parser.error("BFENGINE_MAX_TAPE_SIZE must be an integer")
    if max_size < 0:
        parser.error("--max-size must not be negative")

    try:
        with open(args.source_file, 'r', encoding='utf-8', errors='replace') as f:
            code = f.read()
    except FileNotFoundError:
        print(f"source file {args.source_file} does not exist", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"couldn't read source file {args.source_file}: {e.strerror or e}", file=sys.stderr)
        return 1

    start = time.time()
    try:
        program = load(code)
    except LoadError as e:
        print(e, file=sys.stderr)
        return 2
    end = time.time()
    if args.stats:
        print(f"Loading took {(end - start) * 1000:.2f} ms ({len(program)} instructions)", file=sys.stderr)

    engine = Engine(
        program,
        sys.stdin.buffer,
        sys.stdout.buffer,
        max_tape_size=max_size or None,
        trace=args.trace,
    )

    start = time.time()
    try:
        if args.steps_before_interrupt is not None:
            while engine.run_for(args.steps_before_interrupt) is not None:
                print(
                    f"[{engine.state.steps} steps] ip={engine.state.ip} ptr={engine.tape.pointer}",
                    file=sys.stderr,
                )
        else:
            engine.run()
    except ExecutionError as e:
        sys.stdout.buffer.flush()
        print(f"\n{e}", file=sys.stderr)
        return 3
    except KeyboardInterrupt:
        sys.stdout.buffer.flush()
        print(f"\nInterrupted after {engine.state.steps} steps", file=sys.stderr)
        return 130
    finally:
        if args.trace:
            for line in engine.state.trace:
                print(line, file=sys.stderr)
            if engine.state.trace_dropped:
                print(f"... {engine.state.trace_dropped} more steps not traced", file=sys.stderr)
    end = time.time()
    sys.stdout.buffer.flush()

    if args.stats or args.steps_before_interrupt is not None:
        print("Program halted!", file=sys.stderr)
    if args.stats:
        print(f"Execution took {(end - start) * 1000:.2f} ms ({engine.state.steps} steps)", file=sys.stderr)
    if args.dump:
        _dump_tape(engine, args.dump)
    return 0
