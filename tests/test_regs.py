"""
Register file and register operand decoding.

Operand table:
  0x01-0x09  A B C D E F G H MB
  0x12 AB  0x34 CD  0x56 EF  0x78 GH  0xF0 PC  0xF1 SP
"""
import pytest

from h8vm.cpu.regs import Register, WideRegister, Registers, any_register, is_wide
from h8vm.errors import InvalidRegister
from h8vm.util import high_and_low_value

ADDR_NAME_REG = [
    (0x01, "A", Register.A),
    (0x02, "B", Register.B),
    (0x03, "C", Register.C),
    (0x04, "D", Register.D),
    (0x05, "E", Register.E),
    (0x06, "F", Register.F),
    (0x07, "G", Register.G),
    (0x08, "H", Register.H),
    (0x09, "MB", Register.MB),
    (0x12, "AB", WideRegister.AB),
    (0x34, "CD", WideRegister.CD),
    (0x56, "EF", WideRegister.EF),
    (0x78, "GH", WideRegister.GH),
    (0xF0, "PC", WideRegister.PC),
    (0xF1, "SP", WideRegister.SP),
]

PAIRS = [
    (WideRegister.AB, Register.A, Register.B),
    (WideRegister.CD, Register.C, Register.D),
    (WideRegister.EF, Register.E, Register.F),
    (WideRegister.GH, Register.G, Register.H),
]


class TestRegisterFile:
    def test_init_zeroed(self):
        regs = Registers()
        for reg in Register:
            assert regs.get(reg) == 0
        for reg in WideRegister:
            assert regs.get_wide(reg) == 0

    def test_set_and_get(self):
        regs = Registers()
        regs.set(Register.A, 1)
        assert regs.get(Register.A) == 1
        regs.set(Register.A, 2)
        assert regs.get(Register.A) == 2

    def test_set_masks_to_byte(self):
        """set($1AB) keeps the low byte → $AB"""
        regs = Registers()
        regs.set(Register.C, 0x1AB)
        assert regs.get(Register.C) == 0xAB

    def test_set_wide_and_get_wide(self):
        regs = Registers()
        regs.set_wide(WideRegister.AB, 0x0101)
        assert regs.get_wide(WideRegister.AB) == 0x0101

    @pytest.mark.parametrize("wide, high_reg, low_reg", PAIRS)
    def test_set_wide_splits_into_pair(self, wide, high_reg, low_reg):
        """set_wide($AB12) → high register $AB, low register $12"""
        regs = Registers()
        high, low = high_and_low_value(0xAB12)
        regs.set_wide(wide, 0xAB12)
        assert regs.get(high_reg) == high
        assert regs.get(low_reg) == low

    @pytest.mark.parametrize("wide, high_reg, low_reg", PAIRS)
    def test_set_bytes_and_get_wide(self, wide, high_reg, low_reg):
        """High=$AB, low=$12 → pair reads $AB12"""
        regs = Registers()
        regs.set(high_reg, 0xAB)
        regs.set(low_reg, 0x12)
        assert regs.get_wide(wide) == 0xAB12

    def test_pc_sp_are_independent_storage(self):
        """PC/SP writes never touch the byte registers"""
        regs = Registers()
        regs.set_wide(WideRegister.PC, 0x1234)
        regs.set_wide(WideRegister.SP, 0xFFFE)
        for reg in Register:
            assert regs.get(reg) == 0
        assert regs.PC == 0x1234
        assert regs.SP == 0xFFFE

    def test_pair_properties(self):
        regs = Registers()
        regs.set_wide(WideRegister.EF, 0xBEEF)
        assert regs.EF == 0xBEEF
        assert regs.E == 0xBE
        assert regs.F == 0xEF

    def test_reset(self):
        regs = Registers()
        regs.set_wide(WideRegister.GH, 0xFFFF)
        regs.PC = 0x10
        regs.reset()
        assert regs == Registers()

    def test_display(self):
        """One line per register, PC/SP as 16-bit hex"""
        regs = Registers()
        regs.set(Register.A, 0xAB)
        regs.PC = 0x0100
        lines = regs.display().split('\n')
        assert lines[0] == "  A:   0xab"
        assert len(lines) == len(Register) + 2
        assert lines[-2] == "  PC:   0x0100"
        assert lines[-1] == "  SP:   0x0000"


class TestRegisterDecoding:
    @pytest.mark.parametrize("addr, name, reg", ADDR_NAME_REG)
    def test_any_register_from_addr(self, addr, name, reg):
        assert any_register(addr) is reg

    @pytest.mark.parametrize("addr, name, reg", ADDR_NAME_REG)
    def test_addr_and_name(self, addr, name, reg):
        assert reg.addr == addr
        assert str(reg) == name

    def test_register_from_addr(self):
        for addr, _, reg in ADDR_NAME_REG:
            if isinstance(reg, Register):
                assert Register.from_addr(addr) is reg

    def test_wide_register_from_addr(self):
        for addr, _, reg in ADDR_NAME_REG:
            if isinstance(reg, WideRegister):
                assert WideRegister.from_addr(addr) is reg

    @pytest.mark.parametrize("decode", [Register.from_addr, WideRegister.from_addr, any_register])
    def test_invalid_address(self, decode):
        """$00 is not a register in any width"""
        with pytest.raises(InvalidRegister) as exc:
            decode(0x00)
        assert exc.value.addr == 0x00
        assert str(exc.value) == "No register at address: 0x00"

    def test_byte_register_rejected_as_wide(self):
        """$03 (C) is not a wide register"""
        with pytest.raises(InvalidRegister) as exc:
            WideRegister.from_addr(Register.C.addr)
        assert exc.value.addr == Register.C.addr

    def test_wide_register_rejected_as_byte(self):
        """$34 (CD) is not a byte register"""
        with pytest.raises(InvalidRegister) as exc:
            Register.from_addr(WideRegister.CD.addr)
        assert exc.value.addr == WideRegister.CD.addr

    def test_any_register_std(self):
        reg = any_register(0x01)
        assert reg is Register.A
        assert not is_wide(reg)

    def test_any_register_wide(self):
        reg = any_register(0x12)
        assert reg is WideRegister.AB
        assert is_wide(reg)

    def test_ranges_disjoint(self):
        assert not {r.addr for r in Register} & {r.addr for r in WideRegister}

    def test_high_and_low(self):
        assert WideRegister.GH.high_and_low() == (Register.G, Register.H)

    @pytest.mark.parametrize("reg", [WideRegister.PC, WideRegister.SP])
    def test_high_and_low_not_a_pair(self, reg):
        """PC and SP have no byte halves"""
        assert not reg.is_pair
        with pytest.raises(ValueError):
            reg.high_and_low()
