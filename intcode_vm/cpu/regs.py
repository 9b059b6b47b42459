"""
Intcode VM: CPU Register Set + Run State

Register model:
  ip             instruction pointer (word address of the next fetch)
  relative_base  base for RELATIVE mode operands, moved only by ARB
  state          AWAITING_INSTRUCTION / AWAITING_INPUT / HALTED
  pending        instruction held while AWAITING_INPUT, replayed on resume
  steps          executed step counter (for budgets and traces)
"""

from enum import Enum
from typing import Optional

from .decoder import Instruction


class CPUState(Enum):
    AWAITING_INSTRUCTION = 'AWAITING_INSTRUCTION'
    AWAITING_INPUT = 'AWAITING_INPUT'
    HALTED = 'HALTED'


class Registers:
    """Intcode CPU register set."""

    __slots__ = ('ip', 'relative_base', 'state', 'pending', 'steps')

    def __init__(self):
        self.ip: int = 0
        self.relative_base: int = 0
        self.state: CPUState = CPUState.AWAITING_INSTRUCTION
        self.pending: Optional[Instruction] = None
        self.steps: int = 0

    @property
    def halted(self) -> bool:
        return self.state is CPUState.HALTED

    @property
    def awaiting_input(self) -> bool:
        return self.state is CPUState.AWAITING_INPUT

    def display(self) -> str:
        """Format register state for debugging."""
        pending = f" pending={self.pending.mnemonic}" if self.pending else ""
        return (f"IP={self.ip} RB={self.relative_base} "
                f"STATE={self.state.value} STEPS={self.steps}{pending}")

    def reset(self):
        """Reset to power-on state."""
        self.ip = 0
        self.relative_base = 0
        self.state = CPUState.AWAITING_INSTRUCTION
        self.pending = None
        self.steps = 0
