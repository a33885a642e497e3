#!/usr/bin/env python3
"""
Tape tests: growth, wrapping arithmetic and pointer bounds.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest

from bfengine.tape import Tape


def test_starts_with_one_zero_cell():
    tape = Tape()
    assert len(tape) == 1
    assert tape.pointer == 0
    assert tape.read() == 0


def test_grows_to_the_right():
    print("Testing tape growth...")

    tape = Tape()
    for _ in range(100):
        assert tape.move_right()
    assert tape.pointer == 100
    assert len(tape) == 101
    assert tape.snapshot() == bytes(101)

    # Moving back does not shrink it
    assert tape.move_left()
    assert len(tape) == 101


def test_move_left_at_zero_is_refused():
    tape = Tape()
    assert not tape.move_left()
    assert tape.pointer == 0


def test_wrapping():
    print("Testing cell wrapping...")

    tape = Tape()
    tape.decrement()
    assert tape.read() == 255
    tape.increment()
    assert tape.read() == 0

    tape.write(255)
    tape.increment()
    assert tape.read() == 0

    tape.write(300)
    assert tape.read() == 44


def test_max_size():
    tape = Tape(max_size=3)
    assert tape.move_right()
    assert tape.move_right()
    assert not tape.move_right()
    assert tape.pointer == 2
    assert len(tape) == 3

    # Revisiting existing cells is always allowed
    assert tape.move_left()
    assert tape.move_right()


def test_refused_moves_return_false_without_raising():
    """The tape reports impossible moves; the engine turns them into errors."""
    tape = Tape()
    assert tape.move_left() is False
    assert tape.pointer == 0
    assert tape.move_right() is True

    capped = Tape(max_size=1)
    assert capped.move_right() is False
    assert capped.pointer == 0
    assert len(capped) == 1


def test_invalid_max_size():
    with pytest.raises(ValueError):
        Tape(max_size=0)


def test_window():
    tape = Tape()
    for value in range(1, 6):
        tape.write(value)
        tape.move_right()
    start, cells = tape.window(2)
    assert start == 3
    assert cells == bytes([4, 5, 0])


def main():
    print("=== Tape Tests ===\n")
    tests = [
        test_starts_with_one_zero_cell,
        test_grows_to_the_right,
        test_move_left_at_zero_is_refused,
        test_wrapping,
        test_max_size,
        test_refused_moves_return_false_without_raising,
        test_invalid_max_size,
        test_window,
    ]
    for test in tests:
        test()
    print("\n✓ All tape tests passed")


if __name__ == "__main__":
    main()
