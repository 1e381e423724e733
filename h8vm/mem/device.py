"""
H8VM - Addressable Devices

A Device stores bytes at addresses 0..len-1. The memory mapper owns
devices and hands them addresses already translated to be relative to
the start of their mapped region.

Contract for every implementation:
  get(addr) / set(addr, value)            8-bit access
  get_wide(addr) / set_wide(addr, value)  16-bit access, big-endian
  addr >= len(device) raises OutOfBounds(addr); len-1 is the last
  valid address.

Wide access defaults to two byte accesses (high at addr, low at addr+1)
so a backend only has to provide the byte operations.
"""

from abc import ABC, abstractmethod

from ..errors import OutOfBounds
from ..util import high_and_low_value, wide_value

RAM_SIZE = 0x10000


class Device(ABC):
    """Capability contract for anything that stores bytes at addresses."""

    @abstractmethod
    def get(self, addr: int) -> int:
        """Read byte at addr."""

    @abstractmethod
    def set(self, addr: int, value: int):
        """Write byte at addr."""

    def get_wide(self, addr: int) -> int:
        high = self.get(addr)
        low = self.get(addr + 1)
        return wide_value(high, low)

    def set_wide(self, addr: int, value: int):
        high, low = high_and_low_value(value)
        self.set(addr, high)
        self.set(addr + 1, low)


class _ByteBuffer(Device):
    """Device backed by a bytearray, shared by the RAM implementations."""

    def __init__(self, size: int):
        self._mem = bytearray(size)

    def __len__(self):
        return len(self._mem)

    def _check(self, addr: int):
        if not 0 <= addr < len(self._mem):
            raise OutOfBounds(addr)

    def get(self, addr: int) -> int:
        self._check(addr)
        return self._mem[addr]

    def set(self, addr: int, value: int):
        self._check(addr)
        self._mem[addr] = value & 0xFF

    def end(self) -> int:
        """Last valid address (0 for an empty device)."""
        return max(len(self._mem) - 1, 0)

    def get_slice(self, start: int, length: int) -> bytes:
        return bytes(self._mem[start:start + length])

    def __repr__(self):
        return f"{type(self).__name__}(size={len(self._mem):#x})"


class RamArray(_ByteBuffer):
    """Fixed 64K zero-initialised RAM."""

    def __init__(self):
        super().__init__(RAM_SIZE)


class DynMem(_ByteBuffer):
    """Zero-initialised buffer of arbitrary size.

    Used for boot ROM images: construct with the ROM size, then
    replace() the image in at offset 0.
    """

    def __init__(self, size: int = 0):
        super().__init__(size)

    def replace(self, data: bytes, start: int = 0):
        """Overwrite len(data) bytes beginning at start.

        Raises ValueError if the data does not fit in the buffer.
        """
        end = start + len(data)
        if start < 0 or end > len(self._mem):
            raise ValueError(
                f"{len(data)} bytes at {start:#06x} do not fit in "
                f"{len(self._mem)} byte buffer"
            )
        self._mem[start:end] = data

    def resize(self, size: int):
        """Grow (zero-filled) or truncate, keeping existing contents."""
        if size > len(self._mem):
            self._mem.extend(bytes(size - len(self._mem)))
        else:
            del self._mem[size:]
