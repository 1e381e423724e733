"""
Shared fixtures for the H8VM test suite.

make_cpu(program, mem_size) builds a CPU over a single DynMem mapped at
$0000 with program loaded at offset 0, so PC starts on its first byte.
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from h8vm import Cpu, DynMem, MemoryMapper

TEST_MEM_SIZE = 0xFFFF
TEST_OP_MEM_SIZE = 256


def build_cpu(program: bytes = b'', mem_size: int = TEST_MEM_SIZE) -> Cpu:
    mem = DynMem(mem_size)
    mem.replace(bytes(program))
    bus = MemoryMapper()
    bus.add_device(mem, 0, mem.end())
    return Cpu(bus)


@pytest.fixture
def make_cpu():
    return build_cpu
