# =============================================================================
# test_operands.py - Operand Classification Tests
# =============================================================================
# Tests for mapping operand text to one of the 13 addressing modes.
#
# Test coverage includes:
#   - Every addressing mode and its payload
#   - Zeropage / absolute disambiguation by digit count
#   - Relative offset bounds and hex two's complement form
#   - Malformed literals
#   - Canonical formatting and the two-digit literal round trip
# =============================================================================

import pytest

from asm6502.assembler.operands import (
    Operand,
    IMPLICIT_OPERAND,
    classify_operand,
    format_operand,
)
from asm6502.cpu import AddressingMode
from asm6502.errors import ErrorKind, OperandFormatError, RangeError


# =============================================================================
# Mode Recognition Tests
# =============================================================================

class TestModes:
    """One representative operand per addressing mode."""

    @pytest.mark.parametrize("text,mode,value", [
        ("", AddressingMode.IMPLICIT, None),
        ("A", AddressingMode.ACCUMULATOR, None),
        ("#$3F", AddressingMode.IMMEDIATE, 0x3F),
        ("$3F", AddressingMode.ZEROPAGE, 0x3F),
        ("$3F,X", AddressingMode.ZEROPAGE_X, 0x3F),
        ("$3F,Y", AddressingMode.ZEROPAGE_Y, 0x3F),
        ("*-5", AddressingMode.RELATIVE, -5),
        ("$1234", AddressingMode.ABSOLUTE, 0x1234),
        ("$1234,X", AddressingMode.ABSOLUTE_X, 0x1234),
        ("$1234,Y", AddressingMode.ABSOLUTE_Y, 0x1234),
        ("($10)", AddressingMode.INDIRECT, 0x10),
        ("($10,X)", AddressingMode.INDIRECT_X, 0x10),
        ("($10),Y", AddressingMode.INDIRECT_Y, 0x10),
    ])
    def test_mode(self, text, mode, value):
        """Each operand form maps to its mode and payload."""
        operand = classify_operand(text)
        assert operand.mode is mode
        assert operand.value == value

    def test_empty_is_shared_implicit(self):
        """Empty text returns the implicit operand."""
        assert classify_operand("") == IMPLICIT_OPERAND

    def test_accumulator_lower_case(self):
        """The accumulator may be written in lower case."""
        assert classify_operand("a").mode is AddressingMode.ACCUMULATOR

    def test_immediate_without_dollar(self):
        """Immediate operands may omit the '$'."""
        assert classify_operand("#3F") == Operand(AddressingMode.IMMEDIATE, 0x3F)

    def test_lower_case_hex_and_index(self):
        """Hex digits and index registers are case-insensitive."""
        assert classify_operand("$ab,x") == Operand(AddressingMode.ZEROPAGE_X, 0xAB)
        assert classify_operand("($1f),y") == Operand(AddressingMode.INDIRECT_Y, 0x1F)

    def test_surrounding_whitespace_ignored(self):
        """Whitespace around the operand is not significant."""
        assert classify_operand("  $1234 ").mode is AddressingMode.ABSOLUTE


# =============================================================================
# Zeropage / Absolute Disambiguation
# =============================================================================

class TestDigitCount:
    """Zeropage and absolute differ only by hex digit count."""

    def test_two_digits_is_zeropage(self):
        assert classify_operand("$00").mode is AddressingMode.ZEROPAGE

    def test_four_digits_is_absolute(self):
        """Leading zeros still make a four-digit absolute address."""
        operand = classify_operand("$003F")
        assert operand.mode is AddressingMode.ABSOLUTE
        assert operand.value == 0x3F

    @pytest.mark.parametrize("text", ["$1", "$123", "$12345", "$1,X", "$123,Y"])
    def test_other_digit_counts_rejected(self, text):
        """One, three or five digits match neither form."""
        with pytest.raises(OperandFormatError):
            classify_operand(text)


# =============================================================================
# Relative Operand Tests
# =============================================================================

class TestRelative:
    """Relative offsets: bounds, signs and the hex form."""

    @pytest.mark.parametrize("text,value", [
        ("*-128", -128),
        ("*127", 127),
        ("*+127", 127),
        ("*0", 0),
        ("*-1", -1),
        ("*+12", 12),
    ])
    def test_in_range(self, text, value):
        assert classify_operand(text) == Operand(AddressingMode.RELATIVE, value)

    @pytest.mark.parametrize("text", ["*-129", "*128", "*+128", "*999"])
    def test_out_of_range(self, text):
        """Offsets outside -128..127 raise RangeError."""
        with pytest.raises(RangeError) as exc_info:
            classify_operand(text)
        assert exc_info.value.kind is ErrorKind.RANGE

    def test_hex_form_is_twos_complement(self):
        """Two hex digits that are not all decimal are a signed byte."""
        assert classify_operand("*FB").value == -5
        assert classify_operand("*7F").value == 127
        assert classify_operand("*80").value == 80  # all decimal digits
        assert classify_operand("*8a").value == 0x8A - 0x100

    def test_all_decimal_digits_are_decimal(self):
        """'*12' is twelve, not $12."""
        assert classify_operand("*12").value == 12

    @pytest.mark.parametrize("text", ["*", "*-", "*+-1", "*-1000", "*12345", "*FBC", "*G0", "*١٢"])
    def test_malformed(self, text):
        with pytest.raises(OperandFormatError):
            classify_operand(text)


# =============================================================================
# Malformed Operand Tests
# =============================================================================

class TestMalformed:
    """Operand text that matches no pattern."""

    @pytest.mark.parametrize("text", [
        "#$GG",
        "#$1",
        "#$123",
        "$GG",
        "$12,Z",
        "($1234)",
        "($10,Y)",
        "($10),X",
        "(10)",
        "1234",
        "label",
        "AB",
    ])
    def test_rejected(self, text):
        with pytest.raises(OperandFormatError) as exc_info:
            classify_operand(text)
        assert exc_info.value.kind is ErrorKind.OPERAND_FORMAT

    def test_error_has_hint(self):
        """Format errors suggest the accepted forms."""
        with pytest.raises(OperandFormatError) as exc_info:
            classify_operand("$123")
        assert exc_info.value.hint is not None


# =============================================================================
# Operand Construction Tests
# =============================================================================

class TestOperandConstruction:
    """The Operand payload must fit its mode."""

    def test_zeropage_rejects_word(self):
        """A zeropage operand never carries a double-byte value."""
        with pytest.raises(RangeError):
            Operand(AddressingMode.ZEROPAGE, 0x1234)

    def test_absolute_accepts_word(self):
        assert Operand(AddressingMode.ABSOLUTE, 0xFFFF).value == 0xFFFF

    def test_absolute_rejects_overflow(self):
        with pytest.raises(RangeError):
            Operand(AddressingMode.ABSOLUTE, 0x10000)

    def test_implicit_rejects_value(self):
        with pytest.raises(RangeError):
            Operand(AddressingMode.IMPLICIT, 1)

    def test_immediate_requires_value(self):
        with pytest.raises(RangeError):
            Operand(AddressingMode.IMMEDIATE)

    def test_relative_rejects_unsigned_byte(self):
        with pytest.raises(RangeError):
            Operand(AddressingMode.RELATIVE, 0xFB)

    def test_repr(self):
        assert repr(Operand(AddressingMode.ABSOLUTE_X, 0x1234)) == "Operand(ABSOLUTE_X, $1234)"
        assert repr(Operand(AddressingMode.RELATIVE, -5)) == "Operand(RELATIVE, -5)"


# =============================================================================
# Formatting and Round Trip Tests
# =============================================================================

class TestFormatting:
    """Canonical text for operands."""

    @pytest.mark.parametrize("text,expected", [
        ("", ""),
        ("a", "A"),
        ("#3f", "#$3F"),
        ("*FB", "*-5"),
        ("*7", "*+7"),
        ("$0a,x", "$0A,X"),
        ("$abcd,Y", "$ABCD,Y"),
        ("($10)", "($10)"),
        ("($10,x)", "($10,X)"),
        ("($10),y", "($10),Y"),
    ])
    def test_canonical_form(self, text, expected):
        assert format_operand(classify_operand(text)) == expected

    def test_two_digit_literal_round_trip(self):
        """Every two-digit literal survives classify, format, classify."""
        for byte in range(256):
            for template in ("#${:02X}", "${:02X}", "${:02X},X", "(${:02X}),Y"):
                operand = classify_operand(template.format(byte))
                again = classify_operand(format_operand(operand))
                assert again == operand
                assert again.value == byte
