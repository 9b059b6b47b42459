"""
Intcode VM: Computer (composition root)

Binds one Memory, one CPU and one IOStream and exposes the surface that
drivers use:

    comp = Computer(Tape.parse("3,9,8,9,10,9,4,9,99,-1,8"))
    comp.add_input(8)
    comp.run()
    comp.output            # (1,)

Execution model:
  - run() steps until the CPU halts, or suspends on IN with an empty
    input queue. It returns the word at address 0 either way; callers
    check `state` to tell the two apart.
  - step() executes exactly one instruction. Drivers that need a budget
    finer than run(max_steps=...) can loop over it themselves.
  - reset_and_load() restores CPU registers, clears both queues and
    reloads memory from a tape, so repeated trials are exactly
    reproducible.

A Computer is single-threaded and owned by one driver. Pipelines are
built by the driver moving output from one Computer to another's input
(see chain.py); no state is shared between instances.
"""

import logging
from collections import deque
from typing import Iterable, Optional, Tuple, Union

from .config import TRACE_LIMIT
from .cpu.core import CPU
from .cpu.decoder import decode, format_instruction
from .cpu.regs import CPUState
from .errors import DecodeError, StepLimitExceeded
from .mem.memory import Memory
from .periph.io import IOStream
from .tape import Tape

log = logging.getLogger(__name__)

TapeLike = Union[Tape, str, Iterable[int]]


def _as_tape(program: TapeLike) -> Tape:
    if isinstance(program, Tape):
        return program
    if isinstance(program, str):
        return Tape.parse(program)
    return Tape(program)


class Computer:
    """One Intcode machine."""

    def __init__(self, tape: Optional[TapeLike] = None):
        self.cpu = CPU()
        self.mem = Memory()
        self.io = IOStream()

        self._tape: Tape = Tape.default()

        # Trace output (bounded; oldest lines fall off)
        self._trace = False
        self._trace_output: deque = deque(maxlen=TRACE_LIMIT)

        self.load(tape if tape is not None else Tape.default())

    # ══════════════════════════════════════════════
    # Loading
    # ══════════════════════════════════════════════

    def load(self, tape: TapeLike):
        """Install a tape and reset CPU registers and both IO queues."""
        self._tape = _as_tape(tape)
        self.cpu.reset()
        self.io.reset()
        self.mem.load(self._tape)
        self._trace_output.clear()
        log.info("Loaded tape: %d words", len(self._tape))

    def reset_and_load(self, tape: Optional[TapeLike] = None):
        """Reinitialize the machine. With no tape, the last one is reloaded."""
        self.load(tape if tape is not None else self._tape)

    @property
    def tape(self) -> Tape:
        return self._tape

    # ══════════════════════════════════════════════
    # Memory patching / IO
    # ══════════════════════════════════════════════

    def read(self, addr: int) -> int:
        return self.mem.read_direct(addr)

    def write(self, addr: int, value: int):
        """Patch a memory cell directly (e.g. noun/verb before a run)."""
        self.mem.write_direct(addr, value)

    def add_input(self, *values: int):
        """Enqueue input values; the first argument is consumed first."""
        self.io.extend_input(values)

    @property
    def output(self) -> Tuple[int, ...]:
        return self.io.output

    # ══════════════════════════════════════════════
    # State
    # ══════════════════════════════════════════════

    @property
    def state(self) -> CPUState:
        return self.cpu.state

    @property
    def halted(self) -> bool:
        return self.cpu.regs.halted

    @property
    def awaiting_input(self) -> bool:
        return self.cpu.regs.awaiting_input

    @property
    def ip(self) -> int:
        return self.cpu.regs.ip

    @property
    def relative_base(self) -> int:
        return self.cpu.regs.relative_base

    @property
    def steps(self) -> int:
        return self.cpu.regs.steps

    # ══════════════════════════════════════════════
    # Execution
    # ══════════════════════════════════════════════

    def step(self) -> CPUState:
        """Execute one instruction (or one retry of a pending IN)."""
        if self._trace:
            self._record_trace()
        return self.cpu.step(self.mem, self.io)

    def run(self, max_steps: Optional[int] = None) -> int:
        """Run until HALT or until IN finds the input queue empty.

        Args:
            max_steps: Step budget for this call. StepLimitExceeded is
                raised when it runs out before the machine stops.

        Returns:
            The word at memory address 0.
        """
        taken = 0
        while True:
            state = self.cpu.state
            if state is CPUState.HALTED:
                break
            if state is CPUState.AWAITING_INPUT and not self.io.has_input:
                break
            if max_steps is not None and taken >= max_steps:
                raise StepLimitExceeded(max_steps, self.ip)
            self.step()
            taken += 1

        log.debug("run() stopped: %s after %d steps (ip=%d)",
                  self.cpu.state.value, taken, self.ip)
        return self.mem.read_direct(0)

    # ══════════════════════════════════════════════
    # Trace / Debug
    # ══════════════════════════════════════════════

    def _record_trace(self):
        regs = self.cpu.regs
        if regs.state is CPUState.HALTED:
            return
        if regs.state is CPUState.AWAITING_INPUT:
            line = f"{regs.ip - 1:06d}: {'IN (resume)':<28s} RB={regs.relative_base}"
        else:
            try:
                instr = decode(self.mem.read_direct(regs.ip), regs.ip)
            except DecodeError:
                return  # the CPU raises the real error
            operands = [self.mem.read_direct(regs.ip + 1 + i)
                        for i in range(len(instr.modes))]
            text = format_instruction(instr, operands)
            line = f"{regs.ip:06d}: {text:<28s} RB={regs.relative_base}"
        self._trace_output.append(line)
        log.debug(line)

    def enable_trace(self, enable: bool = True):
        """Enable per-instruction trace recording."""
        self._trace = enable

    def get_trace(self) -> str:
        return '\n'.join(self._trace_output)

    def clear_trace(self):
        self._trace_output.clear()

    def display(self) -> str:
        """One-line machine summary for debugging."""
        return (f"{self.cpu.regs.display()} MEM={len(self.mem)} "
                f"IN={len(self.io.pending_input)} OUT={len(self.io.output)}")
