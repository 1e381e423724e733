from .regs import Register, WideRegister, AnyRegister, Registers, any_register, is_wide
from .decoder import Operation, OPCODES, decode_opcode
