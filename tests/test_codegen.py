# =============================================================================
# test_codegen.py - Code Generator (Pass 2) Tests
# =============================================================================
# Tests for byte emission, range checks and listing/symbol output.
#
# Test coverage includes:
#   - Operand byte count per addressing mode
#   - Little-endian absolute operands
#   - Two's complement relative offsets
#   - Inconsistent opcode table entries
#   - Listing and symbol file formatting
# =============================================================================

import pytest

from asm6502.assembler.codegen import (
    EncodedInstruction,
    Program,
    encode_instruction,
    encode_operand,
    format_listing,
    format_symbols,
    generate,
)
from asm6502.assembler.lexer import lex_line
from asm6502.assembler.operands import Operand, classify_operand
from asm6502.assembler.symbols import assign_addresses
from asm6502.cpu import AddressingMode, InstructionInfo, NMOS_6502_TABLE
from asm6502.errors import AssemblerError, ErrorCollector, RangeError


def encode(text: str, address: int = 0) -> EncodedInstruction:
    """Lex one line and encode it with the NMOS table."""
    instruction = lex_line(text).instruction
    info = NMOS_6502_TABLE.lookup(instruction.mnemonic, instruction.operand.mode)
    return encode_instruction(info, instruction.operand, address, 1)


# =============================================================================
# Encoding Tests
# =============================================================================

class TestEncodeInstruction:
    """Opcode followed by the operand bytes."""

    def test_immediate(self):
        """LDA #$01 -> A9 01."""
        assert encode("LDA #$01").to_bytes() == bytes([0xA9, 0x01])

    def test_zeropage_is_two_bytes(self):
        encoded = encode("LDA $3F")
        assert encoded.size == 2
        assert encoded.to_bytes() == bytes([0xA5, 0x3F])

    def test_absolute_is_little_endian(self):
        """$1234 is emitted low byte first."""
        encoded = encode("LDA $1234")
        assert encoded.size == 3
        assert encoded.to_bytes() == bytes([0xAD, 0x34, 0x12])

    def test_absolute_indexed(self):
        assert encode("STA $C000,X").to_bytes() == bytes([0x9D, 0x00, 0xC0])
        assert encode("LDA $ABCD,Y").to_bytes() == bytes([0xB9, 0xCD, 0xAB])

    def test_implicit_and_accumulator(self):
        assert encode("DEX").to_bytes() == bytes([0xCA])
        assert encode("ASL A").to_bytes() == bytes([0x0A])

    def test_indirect_forms(self):
        assert encode("LDA ($10,X)").to_bytes() == bytes([0xA1, 0x10])
        assert encode("LDA ($10),Y").to_bytes() == bytes([0xB1, 0x10])

    def test_relative_negative(self):
        """-5 is emitted as its two's complement byte."""
        assert encode("BNE *-5").to_bytes() == bytes([0xD0, 0xFB])

    def test_relative_bounds(self):
        assert encode("BEQ *-128").operand_bytes == (0x80,)
        assert encode("BEQ *127").operand_bytes == (0x7F,)

    def test_relative_hex_unchanged(self):
        """*FB keeps its literal byte whatever the address."""
        assert encode("BNE *FB", address=0x1234).operand_bytes == (0xFB,)

    def test_keeps_address_and_line(self):
        encoded = encode("NOP", address=0x0300)
        assert encoded.address == 0x0300
        assert encoded.line_number == 1

    def test_one_byte_indirect_from_injected_table(self, small_table):
        info = small_table.lookup("JMP", AddressingMode.INDIRECT)
        encoded = encode_instruction(info, classify_operand("($20)"), 0)
        assert encoded.to_bytes() == bytes([0x6C, 0x20])

    def test_inconsistent_table_entry(self):
        """An entry whose operand size disagrees with the mode is reported."""
        bad = InstructionInfo(0xAD, 2, 4, 1)
        with pytest.raises(AssemblerError) as exc_info:
            encode_instruction(bad, Operand(AddressingMode.ABSOLUTE, 0x1234), 0)
        assert "opcode table" in exc_info.value.hint


class TestEncodeOperand:
    """Range checks on payloads."""

    def test_widths(self):
        assert encode_operand(Operand(AddressingMode.IMPLICIT)) == ()
        assert encode_operand(Operand(AddressingMode.ZEROPAGE_Y, 0xFF)) == (0xFF,)
        assert encode_operand(Operand(AddressingMode.ABSOLUTE, 0x00FF)) == (0xFF, 0x00)

    def test_byte_overflow(self):
        """Values that bypassed Operand validation are still range checked."""
        operand = Operand(AddressingMode.ZEROPAGE, 0x10)
        object.__setattr__(operand, "value", 0x100)
        with pytest.raises(RangeError):
            encode_operand(operand)

    def test_relative_overflow(self):
        operand = Operand(AddressingMode.RELATIVE, 0)
        object.__setattr__(operand, "value", 128)
        with pytest.raises(RangeError):
            encode_operand(operand)


# =============================================================================
# Pass 2 Tests
# =============================================================================

class TestGenerate:
    """Encoding every placed instruction."""

    def test_generate_in_order(self):
        lines = [lex_line(text, n) for n, text in enumerate(["loop: DEX", "BNE *FB"], start=1)]
        encoded = generate(assign_addresses(lines, NMOS_6502_TABLE))
        assert [e.address for e in encoded] == [0, 1]
        assert b"".join(e.to_bytes() for e in encoded) == bytes([0xCA, 0xD0, 0xFB])

    def test_records_errors_per_line(self):
        bad = InstructionInfo(0xAD, 2, 4, 1)
        lines = [lex_line("LDA $1234", 3)]
        pass1 = assign_addresses(lines, NMOS_6502_TABLE)
        # Swap in an inconsistent entry after pass 1
        object.__setattr__(pass1.placed[0], "info", bad)

        collector = ErrorCollector()
        assert generate(pass1, collector) == []
        assert collector.error_count() == 1
        assert collector.errors[0].location.line == 3


# =============================================================================
# Output Formatting Tests
# =============================================================================

class TestOutputFormats:
    """Listing and symbol file text."""

    def _program(self):
        lines = [
            lex_line(text, n)
            for n, text in enumerate(["; demo", "start: LDA #$01", "loop:", "BNE *FB"], start=1)
        ]
        pass1 = assign_addresses(lines, NMOS_6502_TABLE, base_address=0x0200)
        program = Program(
            instructions=tuple(generate(pass1)),
            symbols=pass1.symbols.to_dict(),
            origin=0x0200,
        )
        return program, lines

    def test_program_code(self):
        program, _ = self._program()
        assert program.code == bytes([0xA9, 0x01, 0xD0, 0xFB])
        assert program.size == 4
        assert program.diagnostics == ()

    def test_listing(self):
        program, lines = self._program()
        listing = format_listing(program, lines)
        assert "$0200  A9 01        2  start: LDA #$01" in listing
        assert "$0202               3  loop:" in listing
        assert "$0202  D0 FB        4  BNE *FB" in listing
        assert "Symbol Table" in listing
        assert "loop                 = $0202" in listing

    def test_symbols(self):
        program, _ = self._program()
        text = format_symbols(program)
        assert text.splitlines() == [
            "# Symbol table",
            "# Generated by asm6502",
            "loop $0202",
            "start $0200",
        ]
