#!/usr/bin/env python3

import io
import os
import sys

sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

from bfengine import Engine, load_file


def print_state(engine):
    start, cells = engine.tape.window(4)
    row = []
    for offset, value in enumerate(cells):
        addr = start + offset
        if addr == engine.tape.pointer:
            row.append(f"[{value:03}]")
        else:
            row.append(f" {value:03} ")
    print(f"step {engine.state.steps:5d}  ip {engine.state.ip:4d}  " + "".join(row))


def main():
    path = sys.argv[1] if len(sys.argv) > 1 else os.path.join(os.path.dirname(__file__), "at_sign.b")
    out = io.BytesIO()
    engine = Engine(load_file(path), io.BytesIO(), out)

    print_state(engine)
    while engine.run_for(10) is not None:
        print_state(engine)
    print_state(engine)
    print(f"output: {out.getvalue()!r}")


if __name__ == "__main__":
    main()
