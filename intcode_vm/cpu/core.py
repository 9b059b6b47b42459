"""
Intcode VM: Fetch / Decode / Execute Engine

Execution model (one step):
  1. AWAITING_INSTRUCTION: fetch the word at IP, advance IP past it,
     decode opcode + modes, run the handler. Each operand read advances
     IP by one; a taken jump overwrites IP instead.
  2. AWAITING_INPUT: replay only the pending IN instruction. IP still
     points at its operand, so nothing is re-fetched or re-decoded.
  3. HALTED: terminal. Further steps do nothing.

The CPU owns its registers only. Memory and IOStream are passed into
step() by the Computer that binds them together.
"""

import logging

from . import alu
from .decoder import (
    decode, Instruction, Mode,
    ADD, MUL, IN, OUT, JT, JF, LT, EQ, ARB, HALT,
)
from .regs import Registers, CPUState
from ..errors import IntcodeError, ImmediateWriteError, NegativeAddressError
from ..mem.memory import effective_address

log = logging.getLogger(__name__)


class CPU:
    """Intcode instruction engine."""

    def __init__(self):
        self.regs = Registers()
        self._dispatch = self._build_dispatch()

    @property
    def state(self) -> CPUState:
        return self.regs.state

    def reset(self):
        self.regs.reset()

    # ══════════════════════════════════════════════
    # Execution
    # ══════════════════════════════════════════════

    def step(self, memory, io) -> CPUState:
        """Execute one instruction (or retry a pending IN).

        Returns the state the CPU settled into. Decode and address errors
        propagate to the caller; IP is left on the faulting opcode so the
        machine can be inspected afterwards. Faulting steps are not counted.
        """
        regs = self.regs

        if regs.state is CPUState.HALTED:
            return regs.state

        if regs.state is CPUState.AWAITING_INPUT:
            instr = regs.pending
            pc = regs.ip - 1
        else:
            pc = regs.ip
            instr = decode(memory.read_direct(pc), pc)
            regs.ip = pc + 1

        try:
            state = self._dispatch[instr.mnemonic](instr, memory, io)
        except IntcodeError:
            regs.ip = pc
            regs.state = CPUState.AWAITING_INSTRUCTION
            regs.pending = None
            raise

        regs.steps += 1
        regs.state = state
        if state is CPUState.AWAITING_INPUT:
            regs.pending = instr
            log.debug("IN at %d suspended: input queue empty", pc)
        else:
            regs.pending = None
            if state is CPUState.HALTED:
                log.debug("HALT at %d after %d steps", pc, regs.steps)
        return state

    # ══════════════════════════════════════════════
    # Operand access
    # ══════════════════════════════════════════════

    def _consume(self) -> int:
        """Return the address of the next operand cell and advance IP."""
        addr = self.regs.ip
        self.regs.ip = addr + 1
        return addr

    def _load(self, memory, mode: Mode) -> int:
        return memory.read(self._consume(), mode, self.regs.relative_base)

    def _store(self, memory, mode: Mode, value: int):
        memory.write(self._consume(), value, mode, self.regs.relative_base)

    def _jump(self, target: int):
        if target < 0:
            raise NegativeAddressError(target, "jump target")
        self.regs.ip = target

    # ══════════════════════════════════════════════
    # Instruction handlers
    # ══════════════════════════════════════════════
    # Handler signature: handler(instr, memory, io) -> CPUState

    def _build_dispatch(self) -> dict:
        return {
            ADD:  self._op_add,
            MUL:  self._op_mul,
            IN:   self._op_in,
            OUT:  self._op_out,
            JT:   self._op_jt,
            JF:   self._op_jf,
            LT:   self._op_lt,
            EQ:   self._op_eq,
            ARB:  self._op_arb,
            HALT: self._op_halt,
        }

    def _binary(self, instr: Instruction, memory, fn) -> CPUState:
        a = self._load(memory, instr.modes[0])
        b = self._load(memory, instr.modes[1])
        self._store(memory, instr.modes[2], fn(a, b))
        return CPUState.AWAITING_INSTRUCTION

    def _op_add(self, instr, memory, io):
        return self._binary(instr, memory, alu.add)

    def _op_mul(self, instr, memory, io):
        return self._binary(instr, memory, alu.mul)

    def _op_lt(self, instr, memory, io):
        return self._binary(instr, memory, alu.less_than)

    def _op_eq(self, instr, memory, io):
        return self._binary(instr, memory, alu.equals)

    def _op_in(self, instr, memory, io):
        """Consume one input value. With an empty queue IP stays on the operand.

        The destination is resolved before the value is dequeued, so a
        faulting destination leaves the input queue untouched.
        """
        if not io.has_input:
            return CPUState.AWAITING_INPUT
        addr = self._consume()
        target = effective_address(memory, addr, instr.modes[0], self.regs.relative_base)
        if target is None:
            raise ImmediateWriteError(addr)
        memory.write_direct(target, io.take_input())
        return CPUState.AWAITING_INSTRUCTION

    def _op_out(self, instr, memory, io):
        io.emit(self._load(memory, instr.modes[0]))
        return CPUState.AWAITING_INSTRUCTION

    def _op_jt(self, instr, memory, io):
        cond = self._load(memory, instr.modes[0])
        target = self._load(memory, instr.modes[1])
        if cond != 0:
            self._jump(target)
        return CPUState.AWAITING_INSTRUCTION

    def _op_jf(self, instr, memory, io):
        cond = self._load(memory, instr.modes[0])
        target = self._load(memory, instr.modes[1])
        if cond == 0:
            self._jump(target)
        return CPUState.AWAITING_INSTRUCTION

    def _op_arb(self, instr, memory, io):
        self.regs.relative_base += self._load(memory, instr.modes[0])
        return CPUState.AWAITING_INSTRUCTION

    def _op_halt(self, instr, memory, io):
        return CPUState.HALTED
