"""
H8VM - Emulator for a simple 8-bit CPU
=======================================
Fetches encoded instructions from a mapped 16-bit address space, decodes
them and applies them to the register file and memory.

Architecture:
    ┌──────────┐    ┌──────────┐    ┌──────────┐    ┌──────────────┐
    │   Cpu    │───>│ decoder  │───>│   ops    │───>│  Registers   │
    │ (emu.py) │    │ (opcode) │    │(handlers)│    │  MemoryMapper│
    └──────────┘    └──────────┘    └──────────┘    └──────────────┘
                                                           │
                                              ┌────────────┴──────────┐
                                              │ RamArray   DynMem ... │
                                              └───────────────────────┘

    - cpu/regs.py:    byte registers A-H, MB; wide AB CD EF GH, PC, SP
    - cpu/decoder.py: opcode table, unknown opcodes decode as NOP
    - cpu/ops.py:     one handler per instruction
    - mem/device.py:  Device contract + RAM backends
    - mem/mapper.py:  region routing, newest region wins on overlap
    - emu.py:         fetch/step/run
"""

__version__ = "0.1.0"

from .errors import (
    VMError, CpuError, Halt, InvalidRegister, NoMemory, DeviceError, OutOfBounds,
)
from .cpu.regs import Register, WideRegister, Registers, any_register
from .cpu.decoder import Operation, OPCODES, decode_opcode
from .mem.device import Device, RamArray, DynMem
from .mem.mapper import MemoryMapper
from .emu import Cpu

DEFAULT_BOOT_SIZE = 0x100
DEFAULT_RAM_END = 0xFFFD


def boot(image: bytes, *, boot_size: int = DEFAULT_BOOT_SIZE,
         ram_end: int = DEFAULT_RAM_END, trace: bool = False) -> Cpu:
    """Build the standard machine and return a CPU ready to run image.

    Memory map:
        $0000-ram_end          RamArray
        $0000-(boot_size-1)    boot ROM (DynMem holding image), shadows RAM

    PC starts at $0000 (first boot ROM byte), SP at ram_end.

    Raises ValueError if image is larger than the boot ROM, boot_size
    is not positive, or either region falls outside the 16-bit bus.
    """
    if boot_size <= 0:
        raise ValueError(f"boot ROM size must be positive, got {boot_size}")
    memory = MemoryMapper()
    memory.add_device(RamArray(), 0x0000, ram_end)
    rom = DynMem(boot_size)
    rom.replace(bytes(image), 0)
    memory.add_device(rom, 0x0000, boot_size - 1)
    return Cpu(memory, trace=trace)
