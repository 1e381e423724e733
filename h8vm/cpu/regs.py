"""
H8VM - CPU Register Set

Register model:
  A..H  8-bit general purpose registers
  MB    8-bit memory bank register
  AB    16-bit (A:B concatenation, A=high, B=low)
  CD    16-bit (C:D)
  EF    16-bit (E:F)
  GH    16-bit (G:H)
  PC    16-bit program counter (own storage, not a pair)
  SP    16-bit stack pointer (own storage, not a pair)

Operand encoding: a register operand is a single byte. Byte registers
occupy 0x01-0x09, wide registers 0x12/0x34/0x56/0x78/0xF0/0xF1. The two
ranges never overlap, so one byte always classifies to exactly one
register (see any_register()).
"""

from enum import IntEnum
from typing import Union

from ..errors import InvalidRegister
from ..util import high_and_low_value, wide_value


class Register(IntEnum):
    A = 0x01
    B = 0x02
    C = 0x03
    D = 0x04
    E = 0x05
    F = 0x06
    G = 0x07
    H = 0x08
    MB = 0x09

    @classmethod
    def from_addr(cls, addr: int) -> 'Register':
        """Validate an operand byte as a byte register."""
        try:
            return cls(addr)
        except ValueError:
            raise InvalidRegister(addr) from None

    @property
    def addr(self) -> int:
        return int(self)

    def __str__(self):
        return self.name


class WideRegister(IntEnum):
    AB = 0x12
    CD = 0x34
    EF = 0x56
    GH = 0x78
    PC = 0xF0
    SP = 0xF1

    @classmethod
    def from_addr(cls, addr: int) -> 'WideRegister':
        """Validate an operand byte as a wide register."""
        try:
            return cls(addr)
        except ValueError:
            raise InvalidRegister(addr) from None

    @property
    def addr(self) -> int:
        return int(self)

    @property
    def is_pair(self) -> bool:
        """True for the four registers composed of two byte registers."""
        return self in _PAIRS

    def high_and_low(self) -> tuple:
        """(high, low) byte registers backing a paired wide register."""
        try:
            return _PAIRS[self]
        except KeyError:
            raise ValueError(f"{self.name} is not a register pair") from None

    def __str__(self):
        return self.name


_PAIRS = {
    WideRegister.AB: (Register.A, Register.B),
    WideRegister.CD: (Register.C, Register.D),
    WideRegister.EF: (Register.E, Register.F),
    WideRegister.GH: (Register.G, Register.H),
}

AnyRegister = Union[Register, WideRegister]


def any_register(addr: int) -> AnyRegister:
    """Classify an operand byte as a byte register or a wide register.

    Raises InvalidRegister(addr) when the byte is in neither table.
    """
    try:
        return Register.from_addr(addr)
    except InvalidRegister:
        return WideRegister.from_addr(addr)


def is_wide(reg: AnyRegister) -> bool:
    return isinstance(reg, WideRegister)


class Registers:
    """Register file. Every field is zero after construction."""

    __slots__ = ('A', 'B', 'C', 'D', 'E', 'F', 'G', 'H', 'MB', 'PC', 'SP')

    def __init__(self):
        self.reset()

    def reset(self):
        self.A: int = 0
        self.B: int = 0
        self.C: int = 0
        self.D: int = 0
        self.E: int = 0
        self.F: int = 0
        self.G: int = 0
        self.H: int = 0
        self.MB: int = 0
        self.PC: int = 0
        self.SP: int = 0

    # --- 8-bit access ---

    def get(self, reg: Register) -> int:
        return getattr(self, reg.name)

    def set(self, reg: Register, value: int):
        setattr(self, reg.name, value & 0xFF)

    # --- 16-bit access ---

    def get_wide(self, reg: WideRegister) -> int:
        """Read PC/SP directly, or recombine a pair as (high << 8) | low."""
        if not reg.is_pair:
            return getattr(self, reg.name)
        high_reg, low_reg = reg.high_and_low()
        return wide_value(self.get(high_reg), self.get(low_reg))

    def set_wide(self, reg: WideRegister, value: int):
        """Write PC/SP directly, or split value across a pair."""
        value &= 0xFFFF
        if not reg.is_pair:
            setattr(self, reg.name, value)
            return
        high_reg, low_reg = reg.high_and_low()
        high, low = high_and_low_value(value)
        self.set(high_reg, high)
        self.set(low_reg, low)

    @property
    def AB(self) -> int:
        return self.get_wide(WideRegister.AB)

    @property
    def CD(self) -> int:
        return self.get_wide(WideRegister.CD)

    @property
    def EF(self) -> int:
        return self.get_wide(WideRegister.EF)

    @property
    def GH(self) -> int:
        return self.get_wide(WideRegister.GH)

    # --- Display ---

    def display(self) -> str:
        """One register per line: byte registers, then PC and SP."""
        lines = [f"  {reg}:   {self.get(reg):#04x}" for reg in Register]
        for reg in (WideRegister.PC, WideRegister.SP):
            lines.append(f"  {reg}:   {self.get_wide(reg):#06x}")
        return '\n'.join(lines)

    def summary(self) -> str:
        """Single-line state, used by the instruction trace."""
        return (f"A={self.A:02X} B={self.B:02X} C={self.C:02X} "
                f"D={self.D:02X} E={self.E:02X} F={self.F:02X} "
                f"G={self.G:02X} H={self.H:02X} MB={self.MB:02X} "
                f"PC={self.PC:04X} SP={self.SP:04X}")

    def __eq__(self, other):
        if not isinstance(other, Registers):
            return NotImplemented
        return all(getattr(self, f) == getattr(other, f) for f in self.__slots__)

    def __repr__(self):
        return f"Registers({self.summary()})"
