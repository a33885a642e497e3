#!/usr/bin/env python3

import os
import sys

sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

from bfengine.api import run_string


def main():
    code = """
    read two bytes and print them in reverse order
    ,>,.<.
    """

    result = run_string(code, "ab")
    print(result.text)
    print(f"steps={result.steps} ptr={result.pointer} tape={list(result.tape)}")


if __name__ == "__main__":
    main()
