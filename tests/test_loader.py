#!/usr/bin/env python3
"""
Loader tests: instruction filtering, jump table construction and bracket errors.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest

from bfengine import Instruction, load, load_file
from bfengine.errors import LoadError, UnmatchedLoopEndError, UnmatchedLoopStartError


def test_filters_non_instructions():
    """Comments and whitespace are dropped before indexing."""
    print("Testing instruction filtering...")

    program = load("+ add one\n[ loop #] done -")

    assert str(program) == "+[]-"
    assert len(program) == 4
    assert program.instructions[1] is Instruction.LOOP_START
    assert program.positions == (0, 10, 18, 25)


def test_comments_do_not_change_jump_table():
    print("Testing comment invariance...")

    plain = load("+[]+")
    commented = load("+[#]+")

    assert plain.instructions == commented.instructions
    assert plain.jump_table == commented.jump_table == {1: 2, 2: 1}


def test_jump_table_is_bijection():
    """jump[jump[i]] == i for every bracket."""
    print("Testing jump table bijection...")

    sources = ["[]", "[[]]", "[][]", "+[->[-]<[>+<-]]", "[[[][]][[]]]>[<]"]
    for src in sources:
        program = load(src)
        brackets = [
            i for i, ins in enumerate(program.instructions)
            if ins in (Instruction.LOOP_START, Instruction.LOOP_END)
        ]
        assert sorted(program.jump_table) == brackets
        for i in brackets:
            j = program.jump_table[i]
            assert program.jump_table[j] == i
            if program.instructions[i] is Instruction.LOOP_START:
                assert j > i
                assert program.instructions[j] is Instruction.LOOP_END


def test_nested_matching():
    program = load("[[][]]")
    assert program.jump_table[0] == 5
    assert program.jump_table[1] == 2
    assert program.jump_table[3] == 4


def test_empty_program():
    program = load("")
    assert len(program) == 0
    assert program.jump_table == {}

    only_comments = load("hello world\n")
    assert len(only_comments) == 0


def test_unmatched_loop_end():
    print("Testing unmatched ']'...")

    with pytest.raises(UnmatchedLoopEndError) as info:
        load("]")
    assert info.value.index == 0
    assert info.value.line == 1
    assert info.value.column == 1
    assert isinstance(info.value, LoadError)


def test_unmatched_loop_end_after_balanced():
    with pytest.raises(UnmatchedLoopEndError) as info:
        load("+[]\n x ]")
    err = info.value
    assert err.index == 3
    assert err.offset == 7
    assert err.line == 2
    assert err.column == 4
    assert "unmatched ']'" in str(err)
    assert "Hint:" in str(err)


def test_unmatched_loop_start_reports_innermost():
    print("Testing unmatched '['...")

    with pytest.raises(UnmatchedLoopStartError) as info:
        load("[+[-]+[")
    err = info.value
    assert err.index == 6
    assert err.line == 1
    assert err.column == 7
    assert ">    1 | [+[-]+[" in err.context


def test_unmatched_loop_start_nested():
    with pytest.raises(UnmatchedLoopStartError) as info:
        load("[[]")
    assert info.value.index == 0


def test_load_file(tmp_path):
    path = tmp_path / "prog.b"
    path.write_text("++ comment\n[-]", encoding="utf-8")

    program = load_file(path)
    assert str(program) == "++[-]"


def test_program_is_immutable():
    program = load("+")
    with pytest.raises(AttributeError):
        program.instructions = ()


def main():
    print("=== Loader Tests ===\n")
    import tempfile
    import pathlib
    tests = [
        test_filters_non_instructions,
        test_comments_do_not_change_jump_table,
        test_jump_table_is_bijection,
        test_nested_matching,
        test_empty_program,
        test_unmatched_loop_end,
        test_unmatched_loop_end_after_balanced,
        test_unmatched_loop_start_reports_innermost,
        test_unmatched_loop_start_nested,
        test_program_is_immutable,
    ]
    for test in tests:
        test()
    with tempfile.TemporaryDirectory() as tmp:
        test_load_file(pathlib.Path(tmp))
    print("\n✓ All loader tests passed")


if __name__ == "__main__":
    main()
