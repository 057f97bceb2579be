"""An 8-bit special function register."""

from __future__ import annotations

BYTE_MASK = 0xFF


class Register:
    """A single 8-bit register; assigned values wrap to eight bits."""

    __slots__ = ("_value",)

    def __init__(self, value: int = 0) -> None:
        self._value = value & BYTE_MASK

    @property
    def value(self) -> int:
        """The register contents, always in the range 0..255."""
        return self._value

    @value.setter
    def value(self, new_value: int) -> None:
        self._value = new_value & BYTE_MASK

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __repr__(self) -> str:
        return f"Register(0x{self._value:02X})"