"""
Intcode VM: Word Arithmetic

Python ints are unbounded, so every arithmetic result is folded back into
a signed 64-bit two's complement word. This keeps ADD/MUL overflow
behaviour identical to a fixed-width machine: products of two 8-digit
operands and literals up to ~10^15 fit without wrapping, anything past
2^63 wraps.
"""

from ..config import WORD_BITS

WORD_MASK = (1 << WORD_BITS) - 1
SIGN_BIT = 1 << (WORD_BITS - 1)


def to_word(value: int) -> int:
    """Wrap an arbitrary int into the signed 64-bit range."""
    value &= WORD_MASK
    if value & SIGN_BIT:
        value -= 1 << WORD_BITS
    return value


def add(a: int, b: int) -> int:
    return to_word(a + b)


def mul(a: int, b: int) -> int:
    return to_word(a * b)


def less_than(a: int, b: int) -> int:
    return 1 if a < b else 0


def equals(a: int, b: int) -> int:
    return 1 if a == b else 0
