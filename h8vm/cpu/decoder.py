"""
H8VM - Opcode Decoder / Dispatch Table

Maps opcode bytes to (mnemonic, size, handler). Size is the full
encoded length in bytes, opcode included. It documents the encoding;
the CPU does not use it to advance PC (handlers fetch their own
operands).

Decoding is permissive: a byte with no entry decodes as NOP instead of
raising. Programs containing stray bytes therefore skip over them one
byte at a time.
"""

from enum import IntEnum

from . import ops


class Operation(IntEnum):
    NOP              = 0x00
    MOV_LIT_REG      = 0x10
    MOV_LIT_REG_WIDE = 0x11
    MOV_REG_REG      = 0x12
    MOV_REG_MEM      = 0x13
    MOV_MEM_REG      = 0x14
    MOV_LIT_MEM      = 0x15
    MOV_LIT_MEM_WIDE = 0x16
    MOV_REG_PTR_REG  = 0x17
    MOV_LIT_OFF_REG  = 0x18
    HLT              = 0xFF

    @classmethod
    def from_code(cls, code: int) -> 'Operation':
        """Exact lookup; unknown codes become NOP."""
        try:
            return cls(code)
        except ValueError:
            return cls.NOP

    @property
    def code(self) -> int:
        return int(self)

    @property
    def mnemonic(self) -> str:
        return OPCODES[self][0]

    @property
    def size(self) -> int:
        return OPCODES[self][1]

    def execute(self, cpu):
        """Run this instruction's handler against cpu."""
        OPCODES[self][2](cpu)

    def __str__(self):
        return self.mnemonic


# Format: opcode -> (mnemonic, size, handler)
OPCODES = {
    # ── Control ──
    Operation.NOP:              ('NOP',              1, ops.op_nop),
    Operation.HLT:              ('HLT',              1, ops.op_hlt),

    # ── Literal → register ──
    Operation.MOV_LIT_REG:      ('MOV_LIT_REG',      3, ops.op_mov_lit_reg),
    Operation.MOV_LIT_REG_WIDE: ('MOV_LIT_REG_WIDE', 4, ops.op_mov_lit_reg_wide),

    # ── Register ↔ register / memory ──
    Operation.MOV_REG_REG:      ('MOV_REG_REG',      3, ops.op_mov_reg_reg),
    Operation.MOV_REG_MEM:      ('MOV_REG_MEM',      4, ops.op_mov_reg_mem),
    Operation.MOV_MEM_REG:      ('MOV_MEM_REG',      4, ops.op_mov_mem_reg),

    # ── Literal → memory ──
    Operation.MOV_LIT_MEM:      ('MOV_LIT_MEM',      4, ops.op_mov_lit_mem),
    Operation.MOV_LIT_MEM_WIDE: ('MOV_LIT_MEM_WIDE', 5, ops.op_mov_lit_mem_wide),

    # ── Indirect loads ──
    Operation.MOV_REG_PTR_REG:  ('MOV_REG_PTR_REG',  3, ops.op_mov_reg_ptr_reg),
    Operation.MOV_LIT_OFF_REG:  ('MOV_LIT_OFF_REG',  5, ops.op_mov_lit_off_reg),
}


def decode_opcode(code: int) -> Operation:
    """Decode one opcode byte."""
    return Operation.from_code(code & 0xFF)
