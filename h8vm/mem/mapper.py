"""
H8VM - Memory Mapper (system bus)

Presents one flat 16-bit address space built from devices bound to
inclusive [start, end] regions.

Lookup: regions are scanned most-recently-added first and the first
region containing the address wins, so a later add_device() shadows any
earlier region where they overlap. The address handed to the device is
addr - region.start. An address in no region raises OutOfBounds with the
untranslated bus address.

Example (boot ROM over RAM):
    bus = MemoryMapper()
    bus.add_device(RamArray(), 0x0000, 0xFFFD)
    bus.add_device(boot_rom, 0x0000, 0x00FF)   # $0000-$00FF served by ROM
"""

import logging
from typing import List, Optional

from ..errors import OutOfBounds
from .device import Device

logger = logging.getLogger(__name__)

ADDR_MAX = 0xFFFF


class Region:
    """A device bound to an inclusive address range."""

    __slots__ = ('device', 'start', 'end')

    def __init__(self, device: Device, start: int, end: int):
        self.device = device
        self.start = start
        self.end = end  # inclusive

    def contains(self, addr: int) -> bool:
        return self.start <= addr <= self.end

    def __repr__(self):
        return f"Region({self.start:#06x}-{self.end:#06x}, {self.device!r})"


class MemoryMapper(Device):
    """Routes every access to the device owning the address."""

    def __init__(self):
        self._regions: List[Region] = []
        self._start = 0
        self._end = 0

    def add_device(self, device: Device, start: int, end: int):
        """Map device at [start, end]; it takes priority over older regions.

        Raises ValueError unless 0 <= start <= end <= 0xFFFF.
        """
        if not 0 <= start <= end <= ADDR_MAX:
            raise ValueError(
                f"invalid region {start:#06x}-{end:#06x} for 16-bit bus"
            )
        if not self._regions or start < self._start:
            self._start = start
        if not self._regions or end > self._end:
            self._end = end
        self._regions.insert(0, Region(device, start, end))
        logger.debug("mapped %r at $%04X-$%04X", device, start, end)

    def start(self) -> Optional[int]:
        """Lowest mapped address, or None if nothing is mapped."""
        return self._start if self._regions else None

    def end(self) -> Optional[int]:
        """Highest mapped address, or None if nothing is mapped."""
        return self._end if self._regions else None

    def regions(self) -> list:
        """(start, end, device) for each region, in lookup order."""
        return [(r.start, r.end, r.device) for r in self._regions]

    def _find_region(self, addr: int) -> Region:
        for region in self._regions:
            if region.contains(addr):
                return region
        raise OutOfBounds(addr)

    # --- Device contract ---

    def get(self, addr: int) -> int:
        region = self._find_region(addr)
        return region.device.get(addr - region.start)

    def set(self, addr: int, value: int):
        region = self._find_region(addr)
        region.device.set(addr - region.start, value)

    def get_wide(self, addr: int) -> int:
        region = self._find_region(addr)
        return region.device.get_wide(addr - region.start)

    def set_wide(self, addr: int, value: int):
        region = self._find_region(addr)
        region.device.set_wide(addr - region.start, value)

    def __repr__(self):
        return f"MemoryMapper({self._regions!r})"
