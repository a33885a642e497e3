from .api import RunOptions, RunResult, run_file, run_string
from .engine import Engine, run
from .errors import (
    BFError,
    ExecutionError,
    LoadError,
    PointerUnderflowError,
    StreamIOError,
    TapeSizeExceededError,
    UnmatchedLoopEndError,
    UnmatchedLoopStartError,
)
from .loader import Instruction, Program, load, load_file
from .tape import Tape

__all__ = [
    'Instruction',
    'Program',
    'load',
    'load_file',
    'Tape',
    'Engine',
    'run',
    'RunOptions',
    'RunResult',
    'run_string',
    'run_file',
    'BFError',
    'LoadError',
    'UnmatchedLoopStartError',
    'UnmatchedLoopEndError',
    'ExecutionError',
    'PointerUnderflowError',
    'TapeSizeExceededError',
    'StreamIOError',
]
