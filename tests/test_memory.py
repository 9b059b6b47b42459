"""
Intcode VM: Memory tests

Growable store: reads past the end are 0 and do not grow, writes past
the end zero-fill, negative addresses are always fatal.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from intcode_vm import Memory, Mode, NegativeAddressError, ImmediateWriteError
from intcode_vm.mem.memory import effective_address


class TestDirectAccess:
    def test_read_within_bounds(self):
        mem = Memory([5, 6, 7])
        assert mem.read_direct(2) == 7

    def test_read_past_end_is_zero_without_growth(self):
        mem = Memory([5, 6, 7])
        assert mem.read_direct(1000) == 0
        assert len(mem) == 3

    def test_write_past_end_zero_fills(self):
        mem = Memory([1, 2, 3])
        mem.write_direct(7, 9)
        assert mem.dump() == [1, 2, 3, 0, 0, 0, 0, 9]

    def test_write_past_end_preserves_lower_cells(self):
        mem = Memory()
        mem.write_direct(2, 11)
        mem.write_direct(5, 22)
        assert mem.read_direct(2) == 11
        assert mem.read_direct(5) == 22
        assert mem.read_direct(3) == 0
        assert len(mem) == 6

    def test_write_at_end_appends(self):
        mem = Memory([1])
        mem.write_direct(1, 2)
        assert mem.dump() == [1, 2]

    def test_negative_read(self):
        with pytest.raises(NegativeAddressError):
            Memory([1]).read_direct(-1)

    def test_negative_write(self):
        mem = Memory([1])
        with pytest.raises(NegativeAddressError) as exc:
            mem.write_direct(-4, 0)
        assert exc.value.address == -4
        assert mem.dump() == [1]

    def test_negative_is_index_error(self):
        with pytest.raises(IndexError):
            Memory().read_direct(-1)

    def test_values_wrap_to_64_bits(self):
        mem = Memory()
        mem.write_direct(0, 1 << 63)
        assert mem.read_direct(0) == -(1 << 63)


class TestIndirectAccess:
    def test_read_indirect(self):
        mem = Memory([2, 0, 42])
        assert mem.read_indirect(0) == 42

    def test_write_indirect(self):
        mem = Memory([3, 0, 0, 0])
        mem.write_indirect(0, 8)
        assert mem.read_direct(3) == 8

    def test_indirect_through_negative_pointer(self):
        mem = Memory([-1])
        with pytest.raises(NegativeAddressError):
            mem.read_indirect(0)


class TestModes:
    def test_position_read(self):
        mem = Memory([2, 0, 77])
        assert mem.read(0, Mode.POSITION) == 77

    def test_immediate_read(self):
        mem = Memory([2, 0, 77])
        assert mem.read(0, Mode.IMMEDIATE) == 2

    def test_relative_read(self):
        mem = Memory([-3, 0, 0, 0, 0, 55])
        assert mem.read(0, Mode.RELATIVE, relative_base=8) == 55

    def test_relative_write(self):
        mem = Memory([4])
        mem.write(0, 9, Mode.RELATIVE, relative_base=6)
        assert mem.read_direct(10) == 9

    def test_relative_negative_effective_address(self):
        mem = Memory([-5])
        with pytest.raises(NegativeAddressError):
            mem.read(0, Mode.RELATIVE, relative_base=2)

    def test_immediate_write_rejected(self):
        with pytest.raises(ImmediateWriteError):
            Memory([0]).write(0, 1, Mode.IMMEDIATE)

    def test_effective_address_is_pure(self):
        mem = Memory([3, 10])
        assert effective_address(mem, 0, Mode.POSITION) == 3
        assert effective_address(mem, 1, Mode.RELATIVE, 5) == 15
        assert effective_address(mem, 1, Mode.IMMEDIATE) is None
        assert mem.dump() == [3, 10]


class TestSnapshots:
    def test_diff_snapshots(self):
        mem = Memory([1, 2, 3])
        before = mem.snapshot()
        mem.write_direct(1, 20)
        mem.write_direct(5, 0)
        mem.write_direct(6, 4)
        changes = Memory.diff_snapshots(before, mem.snapshot())
        assert changes == {1: (2, 20), 6: (0, 4)}

    def test_format_range(self):
        text = Memory([1, 2, 3]).format_range(0, 3)
        assert text.startswith("000000")
        assert text.split()[1:] == ["1", "2", "3"]
