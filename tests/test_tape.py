"""
Intcode VM: Tape parsing tests

Program text in, immutable word sequence out. Parse failures must name
the offending token so a bad puzzle input is easy to find.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from intcode_vm import Tape, TapeError, IntcodeError


class TestParse:
    def test_simple_program(self):
        tape = Tape.parse("1,9,10,3,2,3,11,0,99,30,40,50")
        assert len(tape) == 12
        assert tape[0] == 1
        assert tape[-1] == 50

    def test_whitespace_and_signs(self):
        tape = Tape.parse("  1, -2 ,+3\n")
        assert tuple(tape) == (1, -2, 3)

    def test_trailing_comma_tolerated(self):
        assert tuple(Tape.parse("1,2,99,\n")) == (1, 2, 99)

    def test_blank_text_is_empty_tape(self):
        assert len(Tape.parse("   \n")) == 0

    def test_large_literal(self):
        tape = Tape.parse("104,1125899906842624,99")
        assert tape[1] == 1125899906842624

    def test_non_integer_token(self):
        with pytest.raises(TapeError) as exc:
            Tape.parse("1,x,99")
        assert exc.value.position == 2
        assert exc.value.token == "x"

    def test_empty_token(self):
        with pytest.raises(TapeError) as exc:
            Tape.parse("1,,2")
        assert exc.value.position == 2

    def test_float_token_rejected(self):
        with pytest.raises(TapeError):
            Tape.parse("1,2.5,99")

    def test_underscore_separator_rejected(self):
        with pytest.raises(TapeError) as exc:
            Tape.parse("1_0,99")
        assert exc.value.position == 1

    def test_non_ascii_digits_rejected(self):
        with pytest.raises(TapeError) as exc:
            Tape.parse("1,\u0663,99")      # ARABIC-INDIC DIGIT THREE
        assert exc.value.position == 2

    def test_lone_sign_rejected(self):
        with pytest.raises(TapeError):
            Tape.parse("1,-,99")

    def test_out_of_range_literal(self):
        with pytest.raises(TapeError):
            Tape.parse(str(1 << 63))

    def test_error_is_intcode_and_value_error(self):
        with pytest.raises(IntcodeError):
            Tape.parse("abc")
        with pytest.raises(ValueError):
            Tape.parse("abc")


class TestTapeObject:
    def test_immutable(self):
        tape = Tape.parse("1,2,3")
        with pytest.raises(TypeError):
            tape[0] = 5

    def test_equality_and_hash(self):
        a = Tape.parse("1, 2, 3")
        b = Tape([1, 2, 3])
        assert a == b
        assert hash(a) == hash(b)
        assert a != Tape([1, 2])

    def test_to_text_is_canonical(self):
        assert Tape.parse(" 1 ,-2, 3 ").to_text() == "1,-2,3"

    def test_default_is_halt(self):
        assert tuple(Tape.default()) == (99,)

    def test_non_int_word_rejected(self):
        with pytest.raises(TapeError):
            Tape([1, "2"])

    def test_from_file(self, tmp_path):
        path = tmp_path / "prog.txt"
        path.write_text("1,0,0,0,99\n", encoding="utf-8")
        assert tuple(Tape.from_file(path)) == (1, 0, 0, 0, 99)
