"""
H8VM - Instruction handlers

Handler signature: handler(cpu) -> None

The opcode byte has already been fetched when a handler runs. Each
handler fetches its own operands through cpu.fetch*(), in the order
they are encoded, then updates registers and/or memory. Any fetch or
memory access may raise; the instruction stops right there and bytes
already fetched stay consumed (PC is not rewound).

Operand layout per instruction (after the opcode byte):

  NOP               -
  HLT               -
  MOV_LIT_REG       lit8  reg8
  MOV_LIT_REG_WIDE  lit16 reg16
  MOV_REG_REG       reg   reg       (second operand width follows the first)
  MOV_REG_MEM       reg   addr16
  MOV_MEM_REG       addr16 reg
  MOV_LIT_MEM       lit8  addr16
  MOV_LIT_MEM_WIDE  lit16 addr16
  MOV_REG_PTR_REG   reg16 reg       (reg16 holds the address)
  MOV_LIT_OFF_REG   lit16 reg16 reg (address = lit16 + reg16)
"""

from ..errors import Halt
from .regs import is_wide


def op_nop(cpu):
    pass


def op_hlt(cpu):
    raise Halt()


def op_mov_lit_reg(cpu):
    literal = cpu.fetch()
    reg = cpu.fetch_register()
    cpu.registers.set(reg, literal)


def op_mov_lit_reg_wide(cpu):
    literal = cpu.fetch_wide()
    reg = cpu.fetch_register_wide()
    cpu.registers.set_wide(reg, literal)


def op_mov_reg_reg(cpu):
    src = cpu.fetch_any_register()
    if is_wide(src):
        dst = cpu.fetch_register_wide()
        cpu.registers.set_wide(dst, cpu.registers.get_wide(src))
    else:
        dst = cpu.fetch_register()
        cpu.registers.set(dst, cpu.registers.get(src))


def op_mov_reg_mem(cpu):
    src = cpu.fetch_any_register()
    addr = cpu.fetch_wide()
    if is_wide(src):
        cpu.memory.set_wide(addr, cpu.registers.get_wide(src))
    else:
        cpu.memory.set(addr, cpu.registers.get(src))


def op_mov_mem_reg(cpu):
    addr = cpu.fetch_wide()
    _mov_mem_reg(cpu, addr)


def op_mov_lit_mem(cpu):
    literal = cpu.fetch()
    addr = cpu.fetch_wide()
    cpu.memory.set(addr, literal)


def op_mov_lit_mem_wide(cpu):
    literal = cpu.fetch_wide()
    addr = cpu.fetch_wide()
    cpu.memory.set_wide(addr, literal)


def op_mov_reg_ptr_reg(cpu):
    ptr = cpu.fetch_register_wide()
    addr = cpu.registers.get_wide(ptr)
    _mov_mem_reg(cpu, addr)


def op_mov_lit_off_reg(cpu):
    base = cpu.fetch_wide()
    offset_reg = cpu.fetch_register_wide()
    addr = (base + cpu.registers.get_wide(offset_reg)) & 0xFFFF
    _mov_mem_reg(cpu, addr)


def _mov_mem_reg(cpu, addr: int):
    """Fetch a destination register and load it from memory at addr.

    Width of the memory read follows the destination register.
    """
    dst = cpu.fetch_any_register()
    if is_wide(dst):
        cpu.registers.set_wide(dst, cpu.memory.get_wide(addr))
    else:
        cpu.registers.set(dst, cpu.memory.get(addr))
