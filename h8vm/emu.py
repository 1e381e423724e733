"""
H8VM - Main Emulator Class

Integrates:
  - CPU registers (cpu/regs.py)
  - Opcode decoder + handlers (cpu/decoder.py, cpu/ops.py)
  - System bus (mem/mapper.py)

Execution model:
  1. Fetch opcode byte at PC (PC += 1)
  2. Decode to an Operation (unknown bytes decode as NOP)
  3. Execute handler, which fetches its operands and updates
     registers / memory

Termination: step() raises a VMError subclass.
  - Halt             HLT executed
  - InvalidRegister  bad register operand
  - OutOfBounds      bus access outside every mapped region
  - DeviceError      any other backend failure

Usage:
    bus = MemoryMapper()
    bus.add_device(RamArray(), 0x0000, 0xFFFF)
    cpu = Cpu(bus)
    cpu.memory.set(0x0000, 0xFF)   # HLT
    cpu.run()
"""

import logging
from typing import List

from .cpu.decoder import Operation, decode_opcode
from .cpu.regs import (
    AnyRegister, Register, Registers, WideRegister, any_register,
)
from .errors import Halt, NoMemory, VMError
from .mem.mapper import MemoryMapper

logger = logging.getLogger(__name__)


class Cpu:
    """Fetch/decode/execute engine.

    The CPU owns its memory map; do not share one MemoryMapper between
    several CPUs. PC starts at the lowest mapped address and SP at the
    highest.
    """

    def __init__(self, memory: MemoryMapper, trace: bool = False):
        start, end = memory.start(), memory.end()
        if start is None or end is None:
            raise NoMemory()

        self.memory = memory
        self.registers = Registers()
        self.registers.set_wide(WideRegister.PC, start)
        self.registers.set_wide(WideRegister.SP, end)

        self._trace = trace
        self._trace_output: List[str] = []

        logger.info("CPU created: PC=$%04X SP=$%04X", start, end)

    @property
    def pc(self) -> int:
        return self.registers.PC

    @property
    def sp(self) -> int:
        return self.registers.SP

    # ══════════════════════════════════════════════
    # Fetch
    # ══════════════════════════════════════════════

    def fetch(self) -> int:
        """Fetch byte at PC, advance PC by 1."""
        addr = self.registers.PC
        self.registers.PC = (addr + 1) & 0xFFFF
        return self.memory.get(addr)

    def fetch_wide(self) -> int:
        """Fetch 16-bit value at PC (high byte first), advance PC by 2.

        PC advances by the full 2 before either byte is read, so a
        failure on the second byte still leaves PC two bytes on.
        """
        addr = self.registers.PC
        self.registers.PC = (addr + 2) & 0xFFFF
        high = self.memory.get(addr)
        low = self.memory.get((addr + 1) & 0xFFFF)
        return (high << 8) | low

    def fetch_register(self) -> Register:
        return Register.from_addr(self.fetch())

    def fetch_register_wide(self) -> WideRegister:
        return WideRegister.from_addr(self.fetch())

    def fetch_any_register(self) -> AnyRegister:
        return any_register(self.fetch())

    # ══════════════════════════════════════════════
    # Execution
    # ══════════════════════════════════════════════

    def step(self) -> Operation:
        """Execute one instruction and return it.

        Raises a VMError subclass when execution cannot continue,
        including Halt for HLT. The opcode byte (and any operand bytes
        read before a failure) stay consumed.

        With tracing on, the instruction is recorded even when it
        raises; a fault other than Halt adds an "  ERROR:" line.
        """
        pc = self.registers.PC
        op = decode_opcode(self.fetch())
        try:
            op.execute(self)
        except Halt:
            self._trace_step(pc, op)
            raise
        except VMError as e:
            self._trace_step(pc, op)
            self._trace_line(f"  ERROR: {e}")
            raise

        self._trace_step(pc, op)
        return op

    def run(self) -> VMError:
        """Step until a terminating condition, then return it.

        Every VMError ends the run, Halt included; the caller decides
        whether the returned condition matters.
        """
        steps = 0
        while True:
            try:
                self.step()
            except VMError as e:
                logger.info("stopped after %d instructions at PC=$%04X: %s",
                            steps, self.registers.PC, e)
                return e
            steps += 1

    # ══════════════════════════════════════════════
    # Trace / Debug
    # ══════════════════════════════════════════════

    def _trace_step(self, pc: int, op: Operation):
        self._trace_line(f"${pc:04X}: {op.mnemonic:16s} {self.registers.summary()}")

    def _trace_line(self, line: str):
        if self._trace:
            self._trace_output.append(line)
            logger.debug(line)

    def enable_trace(self, enabled: bool = True):
        self._trace = enabled

    def get_trace(self) -> str:
        return '\n'.join(self._trace_output)

    def clear_trace(self):
        self._trace_output.clear()

    def reset(self):
        """Zero the registers and re-seed PC/SP from the memory map."""
        self.registers.reset()
        self.registers.PC = self.memory.start()
        self.registers.SP = self.memory.end()
        self.clear_trace()

    def __repr__(self):
        return f"Cpu({self.registers.summary()})"
