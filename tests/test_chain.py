"""
Intcode VM: Chain tests

Output of one machine forwarded into the next, straight through or in a
feedback loop. Uses the amplifier examples: five copies of a program,
each seeded with a phase setting.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from itertools import permutations

import pytest
from intcode_vm import Chain, Computer, Tape, ChainStalled, NoOutputError


SERIES = "3,15,3,16,1002,16,10,16,1,16,15,15,4,15,99,0,0"
FEEDBACK = ("3,26,1001,26,-4,26,3,27,1002,27,2,27,1,27,26,27,4,27,"
            "1001,28,-1,28,1005,28,6,99,0,0,5")
FEEDBACK_2 = ("3,52,1001,52,-5,52,3,53,1,52,56,54,1007,54,5,55,1005,55,26,"
              "1001,54,-5,54,1105,1,12,1,53,54,53,1008,54,0,55,1001,55,1,55,"
              "2,53,55,53,4,53,1001,56,-1,56,1005,56,6,99,0,0,0,0,10")


def _amps(program, phases):
    tape = Tape.parse(program)
    amps = [Computer(tape) for _ in phases]
    for amp, phase in zip(amps, phases):
        amp.add_input(phase)
    return Chain(amps)


class TestSeries:
    def test_single_pass(self):
        chain = _amps(SERIES, (4, 3, 2, 1, 0))
        assert chain.run_once([0]) == (43210,)

    def test_best_phase_order(self):
        best = max(_amps(SERIES, p).run_once([0])[0] for p in permutations(range(5)))
        assert best == 43210

    def test_intermediate_outputs_are_forwarded(self):
        chain = _amps(SERIES, (4, 3, 2, 1, 0))
        chain.run_once([0])
        assert all(c.output == () for c in chain.computers[:-1])


class TestFeedback:
    def test_feedback_loop(self):
        chain = _amps(FEEDBACK, (9, 8, 7, 6, 5))
        assert chain.run_feedback([0]) == 139629729
        assert all(c.halted for c in chain.computers)

    def test_feedback_loop_second_example(self):
        assert _amps(FEEDBACK_2, (9, 7, 8, 5, 6)).run_feedback([0]) == 18216

    def test_reused_machines_after_reset(self):
        chain = _amps(FEEDBACK, (9, 8, 7, 6, 5))
        first = chain.run_feedback([0])
        for comp, phase in zip(chain.computers, (9, 8, 7, 6, 5)):
            comp.reset_and_load()
            comp.add_input(phase)
        assert chain.run_feedback([0]) == first

    def test_stalled_chain(self):
        chain = Chain([Computer("3,0,99"), Computer("3,0,99")])
        with pytest.raises(ChainStalled):
            chain.run_feedback()

    def test_halt_without_output(self):
        with pytest.raises(NoOutputError):
            Chain([Computer("99")]).run_feedback()


class TestConstruction:
    def test_empty_chain_rejected(self):
        with pytest.raises(ValueError):
            Chain([])

    def test_len_and_last(self):
        comps = [Computer(), Computer()]
        chain = Chain(comps)
        assert len(chain) == 2
        assert chain.last is comps[1]
