"""Simulator for a PIC16-style microcontroller core with banked memory."""

__version__ = "0.1.0"
__all__ = ["register", "memory", "opcodes", "cpu", "cli"]