"""
Intcode VM: IOStream (IN/OUT port)

The machine's only link to its environment:

  input   FIFO queue. Callers enqueue at the tail (add_input), the IN
          instruction dequeues at the head (take_input). Values are
          consumed in exactly the order they were supplied.
  output  Append-only list. OUT appends in production order; the VM
          never reads it back. Drivers inspect it, or drain it to
          forward values into another machine's input.

An empty input queue is not an error. take_input() returns None and the
CPU suspends in AWAITING_INPUT until more input arrives.
"""

from collections import deque
from typing import Iterable, List, Optional, Tuple

from ..cpu.alu import to_word
from ..errors import NoOutputError


class IOStream:
    """Input queue + output queue for one Computer."""

    def __init__(self):
        # Input FIFO: append() at tail, popleft() at head
        self._input: deque = deque()
        # Output in production order
        self._output: List[int] = []

    # --- Input side ---

    def add_input(self, value: int):
        """Enqueue one value at the tail of the input queue."""
        self._input.append(to_word(value))

    def extend_input(self, values: Iterable[int]):
        """Enqueue several values, first one consumed first."""
        for value in values:
            self.add_input(value)

    def take_input(self) -> Optional[int]:
        """Dequeue from the head of the input queue. None when empty."""
        if not self._input:
            return None
        return self._input.popleft()

    @property
    def has_input(self) -> bool:
        return bool(self._input)

    @property
    def pending_input(self) -> Tuple[int, ...]:
        """Values not yet consumed, head first."""
        return tuple(self._input)

    # --- Output side ---

    def emit(self, value: int):
        """Append a produced value to the output queue."""
        self._output.append(value)

    @property
    def output(self) -> Tuple[int, ...]:
        """All values produced since the last reset or drain, in order."""
        return tuple(self._output)

    def first_output(self) -> int:
        if not self._output:
            raise NoOutputError("No output has been produced")
        return self._output[0]

    def last_output(self) -> int:
        if not self._output:
            raise NoOutputError("No output has been produced")
        return self._output[-1]

    def drain_output(self) -> List[int]:
        """Remove and return every produced value, oldest first.

        This is a caller-side operation for forwarding outputs down a
        pipeline; the VM itself never consumes output.
        """
        values = self._output
        self._output = []
        return values

    def reset(self):
        """Clear both queues."""
        self._input.clear()
        self._output = []
