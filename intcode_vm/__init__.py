"""
Intcode VM
==========
A resumable interpreter for Intcode programs: flat integer tapes with
position, immediate and relative addressing, a blocking IN instruction
that suspends the machine, and an OUT port that lets separate machines
be wired into feedback pipelines.

Architecture:
    ┌──────────┐    ┌──────────┐    ┌─────────────────────────────┐
    │ Program  │───>│   Tape   │───>│          Computer           │
    │ (text)   │    │ (words)  │    │  Memory <-> CPU <-> IOStream │
    └──────────┘    └──────────┘    └─────────────────────────────┘

    - tape.py:         text -> immutable word sequence
    - mem/memory.py:   growable zero-extending store, addressing modes
    - cpu/decoder.py:  opcode + mode digits, disassembler
    - cpu/core.py:     fetch/decode/execute, suspend/resume on IN
    - periph/io.py:    input FIFO, output queue
    - emu.py:          Computer, the composition root
    - chain.py:        output->input wiring between Computers
"""

__version__ = "1.0.0"

from typing import Iterable, Optional, Tuple

from .errors import (
    IntcodeError, TapeError, NegativeAddressError, ImmediateWriteError,
    DecodeError, IllegalOpcode, IllegalMode, StepLimitExceeded,
    NoOutputError, ChainStalled,
)
from .tape import Tape
from .mem.memory import Memory
from .cpu.decoder import Mode, Instruction, decode, disassemble
from .cpu.regs import CPUState
from .cpu.core import CPU
from .periph.io import IOStream
from .emu import Computer
from .chain import Chain


def run_program(source, inputs: Iterable[int] = (), *,
                max_steps: Optional[int] = None) -> Tuple[int, Tuple[int, ...]]:
    """Run a program once from a fresh Computer.

    Args:
        source: Program text, a Tape, or a sequence of ints.
        inputs: Values queued before the run, consumed first to last.
        max_steps: Optional step budget (StepLimitExceeded past it).

    Returns:
        (word at address 0, outputs in production order)
    """
    comp = Computer(source)
    comp.add_input(*inputs)
    result = comp.run(max_steps)
    return result, comp.output
