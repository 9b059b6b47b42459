"""
Intcode VM: Instruction Decoder

An instruction word packs the operation and the parameter modes as
decimal digits:

      ABCDE
       1002
    DE  two-digit opcode (02 = MUL)
    C   mode of parameter 0 (0 = position)
    B   mode of parameter 1 (1 = immediate)
    A   mode of parameter 2 (0, leading zero omitted)

Missing high digits default to position mode. Digits are read
right-to-left, one per parameter, so the number of modes decoded is
always the operand count of the opcode.

Addressing modes:
  POSITION   operand is an address; the value lives at memory[operand]
  IMMEDIATE  operand is the value itself (never a write target)
  RELATIVE   operand is an offset from the relative base
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, Sequence, Tuple

from ..errors import IllegalOpcode, IllegalMode


class Mode(IntEnum):
    POSITION = 0
    IMMEDIATE = 1
    RELATIVE = 2


# ──────────────────────────────────────────────
# Opcode table
# ──────────────────────────────────────────────
# Format: opcode -> (mnemonic, operand_count)

ADD = 'ADD'
MUL = 'MUL'
IN = 'IN'
OUT = 'OUT'
JT = 'JT'
JF = 'JF'
LT = 'LT'
EQ = 'EQ'
ARB = 'ARB'
HALT = 'HALT'

OPCODES = {
    1:  (ADD,  3),   # dest <- a + b
    2:  (MUL,  3),   # dest <- a * b
    3:  (IN,   1),   # dest <- next input (suspends when queue empty)
    4:  (OUT,  1),   # output <- src
    5:  (JT,   2),   # if cond != 0: ip <- target
    6:  (JF,   2),   # if cond == 0: ip <- target
    7:  (LT,   3),   # dest <- 1 if a < b else 0
    8:  (EQ,   3),   # dest <- 1 if a == b else 0
    9:  (ARB,  1),   # relative_base += a
    99: (HALT, 0),
}

# Mode letters used by the disassembler
_MODE_PREFIX = {Mode.POSITION: '', Mode.IMMEDIATE: '#', Mode.RELATIVE: '@'}


@dataclass(frozen=True)
class Instruction:
    """A decoded instruction word."""
    opcode: int
    mnemonic: str
    modes: Tuple[Mode, ...]
    raw: int

    @property
    def size(self) -> int:
        """Words occupied including the opcode word."""
        return 1 + len(self.modes)


def decode(word: int, address: int = None) -> Instruction:
    """Split an instruction word into opcode and per-parameter modes.

    Raises IllegalOpcode for an unknown operation and IllegalMode for a
    mode digit outside 0..2. `address` only enriches the error message.
    """
    if word < 0:
        raise IllegalOpcode(word, address)

    opcode = word % 100
    entry = OPCODES.get(opcode)
    if entry is None:
        raise IllegalOpcode(word, address)
    mnemonic, count = entry

    modes = []
    digits = word // 100
    for _ in range(count):
        digit = digits % 10
        digits //= 10
        try:
            modes.append(Mode(digit))
        except ValueError:
            raise IllegalMode(word, digit, address) from None

    return Instruction(opcode, mnemonic, tuple(modes), word)


def format_instruction(instr: Instruction, operands: Sequence[int]) -> str:
    """Render an instruction as 'MUL  [4], #3, [4]'."""
    parts = []
    for mode, operand in zip(instr.modes, operands):
        if mode == Mode.POSITION:
            parts.append(f"[{operand}]")
        else:
            parts.append(f"{_MODE_PREFIX[mode]}{operand}")
    return f"{instr.mnemonic:<4s} {', '.join(parts)}".rstrip()


def disassemble(words: Sequence[int], start: int = 0) -> Iterator[Tuple[int, str]]:
    """Walk a word sequence linearly, yielding (address, text) per item.

    Intcode freely mixes code and data, so this is a best-effort listing:
    anything that does not decode (or whose operands run off the end) is
    shown as a DATA word and the walk resumes at the next address.
    """
    addr = start
    end = len(words)
    while addr < end:
        word = words[addr]
        try:
            instr = decode(word, addr)
        except (IllegalOpcode, IllegalMode):
            yield addr, f"DATA {word}"
            addr += 1
            continue
        if addr + instr.size > end:
            yield addr, f"DATA {word}"
            addr += 1
            continue
        operands = [words[addr + 1 + i] for i in range(len(instr.modes))]
        yield addr, format_instruction(instr, operands)
        addr += instr.size
