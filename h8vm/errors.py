"""
H8VM - Error taxonomy

Every condition that stops the CPU is an exception derived from VMError:

  VMError
    CpuError
      Halt              HLT executed (normal termination, not a fault)
      InvalidRegister   operand byte matched no register encoding
      NoMemory          CPU constructed over an empty memory map
    DeviceError         backend-specific storage failure
      OutOfBounds       address outside the device / every mapped region

Cpu.step() lets these propagate unchanged. Cpu.run() treats any of them
as the end of the run.
"""


class VMError(Exception):
    """Base class for all emulator conditions."""


class CpuError(VMError):
    pass


class Halt(CpuError):
    def __init__(self):
        super().__init__("CPU halted")


class InvalidRegister(CpuError):
    """Raised when a register operand byte has no matching register."""

    def __init__(self, addr: int):
        self.addr = addr
        super().__init__(f"No register at address: {addr:#04x}")


class NoMemory(CpuError):
    def __init__(self):
        super().__init__("no memory")


class DeviceError(VMError):
    """Storage backend failure that is not an out-of-bounds access."""


class OutOfBounds(DeviceError):
    """Raised for an access outside a device or outside every mapped region.

    ``addr`` is the address as the failing component saw it: a device
    reports its own (translated) address, the mapper reports the
    untranslated bus address.
    """

    def __init__(self, addr: int):
        self.addr = addr
        super().__init__(f"invalid device address: {addr:#06x}")
