"""
Intcode VM: Chained Computers

Wires independent Computers into a pipeline by moving each one's output
into the next one's input, in production order. With feedback enabled
the last machine's output loops back into the first, and the chain is
driven round-robin until the last machine halts.

This is cooperative scheduling done entirely by the driver. Each
Computer still runs synchronously and owns no reference to its peers.

    amps = [Computer(tape) for _ in range(5)]
    for amp, phase in zip(amps, (9, 8, 7, 6, 5)):
        amp.add_input(phase)
    Chain(amps).run_feedback([0])      # thruster signal
"""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from .emu import Computer
from .errors import ChainStalled, NoOutputError

log = logging.getLogger(__name__)


class Chain:
    """Ordered list of Computers connected output -> input."""

    def __init__(self, computers: Sequence[Computer]):
        if not computers:
            raise ValueError("Chain needs at least one computer")
        self.computers: List[Computer] = list(computers)

    def __len__(self) -> int:
        return len(self.computers)

    @property
    def last(self) -> Computer:
        return self.computers[-1]

    def _forward(self, src: Computer, dst: Computer) -> List[int]:
        values = src.io.drain_output()
        dst.io.extend_input(values)
        return values

    def run_once(self, initial_inputs: Iterable[int] = (),
                 max_steps: Optional[int] = None) -> Tuple[int, ...]:
        """Run each computer once, front to back.

        Output of every computer but the last is forwarded downstream.
        Returns the last computer's output (left in place).
        """
        self.computers[0].io.extend_input(initial_inputs)
        for src, dst in zip(self.computers, self.computers[1:]):
            src.run(max_steps)
            self._forward(src, dst)
        self.last.run(max_steps)
        return self.last.output

    def run_feedback(self, initial_inputs: Iterable[int] = (),
                     max_steps: Optional[int] = None) -> int:
        """Drive the loop until the last computer halts.

        Returns the last value the final computer produced. Raises
        ChainStalled when a full round executes nothing, and
        NoOutputError if the last computer halts without ever producing
        a value.
        """
        self.computers[0].io.extend_input(initial_inputs)
        count = len(self.computers)
        final: Optional[int] = None
        rounds = 0

        while True:
            rounds += 1
            progressed = False
            for i, comp in enumerate(self.computers):
                before = comp.steps
                comp.run(max_steps)
                if comp.steps != before:
                    progressed = True
                values = self._forward(comp, self.computers[(i + 1) % count])
                if comp is self.last and values:
                    final = values[-1]

            if self.last.halted:
                break
            if not progressed:
                states = ', '.join(c.state.value for c in self.computers)
                raise ChainStalled(f"No computer made progress in round {rounds} ({states})")

        log.debug("Feedback chain of %d finished after %d rounds", count, rounds)
        if final is None:
            raise NoOutputError("Last computer halted without producing output")
        return final
