from .device import Device, RamArray, DynMem, RAM_SIZE
from .mapper import MemoryMapper
