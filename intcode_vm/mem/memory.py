"""
Intcode VM: Growable Word Memory

Memory is a flat list of signed 64-bit words, initially a copy of the
loaded tape. It has no fixed size:

  - reading at or past the end returns 0 and does NOT grow the store
  - writing past the end zero-fills every new cell up to and including
    the target, then stores the value
  - any negative address is a fatal NegativeAddressError

Addressing:
  read_direct / write_direct      memory[addr]
  read_indirect / write_indirect  memory[memory[addr]]   (POSITION mode)
  read / write with a Mode        POSITION, IMMEDIATE or RELATIVE

RELATIVE resolution needs the CPU's relative base. It is passed in as an
argument on every call; Memory never holds a reference to the CPU.
"""

from typing import Dict, Iterable, List, Optional

from ..cpu.alu import to_word
from ..cpu.decoder import Mode
from ..errors import NegativeAddressError, ImmediateWriteError


def effective_address(memory: 'Memory', addr: int, mode: Mode,
                      relative_base: int = 0) -> Optional[int]:
    """Resolve the address an operand stored at `addr` refers to.

    Returns None for IMMEDIATE mode (the operand cell is the value).
    """
    if mode == Mode.POSITION:
        target = memory.read_direct(addr)
    elif mode == Mode.RELATIVE:
        target = memory.read_direct(addr) + relative_base
    elif mode == Mode.IMMEDIATE:
        return None
    else:
        raise ValueError(f"Unknown addressing mode: {mode}")

    if target < 0:
        raise NegativeAddressError(target, f"{Mode(mode).name.lower()} operand at {addr}")
    return target


class Memory:
    """Zero-extending word-addressable store."""

    def __init__(self, words: Iterable[int] = ()):
        self._ram: List[int] = [to_word(w) for w in words]

    def __len__(self) -> int:
        return len(self._ram)

    # --- Core read/write ---

    def read_direct(self, addr: int) -> int:
        """Read the word at addr. Past-the-end reads return 0."""
        if addr < 0:
            raise NegativeAddressError(addr, "read")
        if addr >= len(self._ram):
            return 0
        return self._ram[addr]

    def write_direct(self, addr: int, value: int):
        """Store value at addr, zero-filling any gap after the current end."""
        if addr < 0:
            raise NegativeAddressError(addr, "write")
        gap = addr + 1 - len(self._ram)
        if gap > 0:
            self._ram.extend([0] * gap)
        self._ram[addr] = to_word(value)

    def read_indirect(self, addr: int) -> int:
        """Treat the cell at addr as a pointer and read through it."""
        return self.read_direct(self.read_direct(addr))

    def write_indirect(self, addr: int, value: int):
        self.write_direct(self.read_direct(addr), value)

    # --- Mode-aware access (operands) ---

    def read(self, addr: int, mode: Mode, relative_base: int = 0) -> int:
        """Read the value of the operand stored at addr."""
        if mode == Mode.IMMEDIATE:
            return self.read_direct(addr)
        return self.read_direct(effective_address(self, addr, mode, relative_base))

    def write(self, addr: int, value: int, mode: Mode, relative_base: int = 0):
        """Write value to the location the operand at addr designates."""
        if mode == Mode.IMMEDIATE:
            raise ImmediateWriteError(addr)
        self.write_direct(effective_address(self, addr, mode, relative_base), value)

    # --- Bulk ---

    def load(self, words: Iterable[int]):
        """Replace the whole store with a copy of words."""
        self._ram = [to_word(w) for w in words]

    def dump(self) -> List[int]:
        """Copy of the current contents."""
        return list(self._ram)

    # --- Snapshots ---

    def snapshot(self) -> tuple:
        return tuple(self._ram)

    @staticmethod
    def diff_snapshots(snap_a: tuple, snap_b: tuple) -> Dict[int, tuple]:
        """Compare two snapshots, return {addr: (old, new)} for changes.

        The shorter snapshot is treated as zero-extended, matching read
        semantics, so growth that only wrote zeros is not a change.
        """
        changes = {}
        for i in range(max(len(snap_a), len(snap_b))):
            old = snap_a[i] if i < len(snap_a) else 0
            new = snap_b[i] if i < len(snap_b) else 0
            if old != new:
                changes[i] = (old, new)
        return changes

    # --- Dump ---

    def format_range(self, start: int = 0, length: int = None, width: int = 8) -> str:
        """Produce an address-prefixed dump, `width` words per line."""
        if length is None:
            length = max(len(self._ram) - start, 0)
        lines = []
        for offset in range(0, length, width):
            addr = start + offset
            count = min(width, length - offset)
            cells = ' '.join(f'{self.read_direct(addr + i):>6d}' for i in range(count))
            lines.append(f'{addr:06d}  {cells}')
        return '\n'.join(lines)
