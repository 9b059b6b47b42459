"""Peripherals attached to the CPU's IN/OUT instructions."""
