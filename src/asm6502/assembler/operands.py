"""
6502 Operand Classification
===========================

This module maps the operand text written after a mnemonic to one of the
13 addressing modes together with its numeric payload.

Classification Order
--------------------
| Priority | Text            | Mode                      |
|----------|-----------------|---------------------------|
| 1        | (empty)         | Implicit                  |
| 2        | `A`             | Accumulator               |
| 3        | `#hh`, `#$hh`   | Immediate                 |
| 4        | `*-5`, `*FB`    | Relative                  |
| 5        | `($hh)` ...     | Indirect / ,X / ),Y       |
| 6        | `$hh` ...       | Zeropage / ,X / ,Y        |
| 7        | `$hhhh` ...     | Absolute / ,X / ,Y        |

Zeropage and absolute are told apart by the number of hex digits (two or
four). Whitespace around the operand is never significant.

Relative operands are literal offsets, not branch targets. A signed
decimal of at most four characters (`*-128`, `*+12`, `*7`) is taken as
is; two hex digits that are not all decimal digits (`*FB`) are taken as a
two's complement byte.

Example
-------
>>> from asm6502.assembler.operands import classify_operand
>>> classify_operand("$1234,X")
Operand(ABSOLUTE_X, $1234)
>>> classify_operand("*-5")
Operand(RELATIVE, -5)
"""

import re
from dataclasses import dataclass
from typing import Optional

from asm6502.cpu import AddressingMode
from asm6502.errors import OperandFormatError, RangeError


# =============================================================================
# Operand Value Ranges
# =============================================================================

BYTE_MIN, BYTE_MAX = 0x00, 0xFF
WORD_MIN, WORD_MAX = 0x0000, 0xFFFF
OFFSET_MIN, OFFSET_MAX = -128, 127


def _value_range(mode: AddressingMode) -> tuple[int, int]:
    """Return the inclusive (min, max) payload range for a mode with operands."""
    if mode is AddressingMode.RELATIVE:
        return OFFSET_MIN, OFFSET_MAX
    if mode.operand_width == 2:
        return WORD_MIN, WORD_MAX
    return BYTE_MIN, BYTE_MAX


# =============================================================================
# Operand Data Class
# =============================================================================

@dataclass(frozen=True)
class Operand:
    """
    A classified operand: addressing mode plus payload.

    Attributes:
        mode: The addressing mode
        value: None for implicit/accumulator, a signed byte for relative,
               a double byte for absolute modes, otherwise a byte

    Raises:
        RangeError: If the payload does not fit the mode
    """
    mode: AddressingMode
    value: Optional[int] = None

    def __post_init__(self):
        if self.mode.operand_width == 0:
            if self.value is not None:
                raise RangeError(f"{self.mode} operand takes no value", self.value)
            return

        if self.value is None:
            raise RangeError(f"{self.mode} operand requires a value")

        low, high = _value_range(self.mode)
        if not low <= self.value <= high:
            raise RangeError(
                f"{self.mode} value {self.value} out of range ({low} to {high})",
                self.value,
            )

    def __repr__(self) -> str:
        if self.value is None:
            return f"Operand({self.mode.name})"
        if self.mode is AddressingMode.RELATIVE:
            return f"Operand({self.mode.name}, {self.value})"
        return f"Operand({self.mode.name}, ${self.value:0{self.mode.operand_width * 2}X})"


IMPLICIT_OPERAND = Operand(AddressingMode.IMPLICIT)


# =============================================================================
# Operand Patterns
# =============================================================================

_HEX = r"[0-9A-Fa-f]"

_IMMEDIATE_RE = re.compile(rf"#\$?({_HEX}{{2}})")
_RELATIVE_DECIMAL_RE = re.compile(r"[+-][0-9]{1,3}|[0-9]{1,4}")
_RELATIVE_HEX_RE = re.compile(rf"{_HEX}{{2}}")
_INDIRECT_RE = re.compile(rf"\(\$({_HEX}+)\)")
_INDIRECT_X_RE = re.compile(rf"\(\$({_HEX}+),X\)", re.IGNORECASE)
_INDIRECT_Y_RE = re.compile(rf"\(\$({_HEX}+)\),Y", re.IGNORECASE)
_DIRECT_RE = re.compile(rf"\$({_HEX}+)(?:,([XY]))?", re.IGNORECASE)

_ZEROPAGE_MODES = {
    None: AddressingMode.ZEROPAGE,
    "X": AddressingMode.ZEROPAGE_X,
    "Y": AddressingMode.ZEROPAGE_Y,
}

_ABSOLUTE_MODES = {
    None: AddressingMode.ABSOLUTE,
    "X": AddressingMode.ABSOLUTE_X,
    "Y": AddressingMode.ABSOLUTE_Y,
}


# =============================================================================
# Classification
# =============================================================================

def classify_operand(text: str) -> Operand:
    """
    Classify operand text into an addressing mode and payload.

    Args:
        text: The operand as written after the mnemonic (may be empty)

    Returns:
        The classified Operand

    Raises:
        OperandFormatError: If the text matches no pattern or holds a
                            malformed literal
        RangeError: If a relative offset is outside -128..127
    """
    text = text.strip()

    if not text:
        return IMPLICIT_OPERAND

    if text.upper() == "A":
        return Operand(AddressingMode.ACCUMULATOR)

    lead = text[0]
    if lead == "#":
        return _classify_immediate(text)
    if lead == "*":
        return _classify_relative(text)
    if lead == "(":
        return _classify_indirect(text)
    if lead == "$":
        return _classify_direct(text)

    raise OperandFormatError(
        f"unrecognized operand '{text}'",
        hint="operands are A, #hh, *offset, $hh, $hhhh, ($hh), ($hh,X) or ($hh),Y",
    )


def _classify_immediate(text: str) -> Operand:
    match = _IMMEDIATE_RE.fullmatch(text)
    if match is None:
        raise OperandFormatError(
            f"invalid immediate operand '{text}'",
            hint="immediate operands are '#' followed by two hex digits, e.g. #$3F",
        )
    return Operand(AddressingMode.IMMEDIATE, int(match.group(1), 16))


def _classify_relative(text: str) -> Operand:
    body = text[1:]

    if _RELATIVE_DECIMAL_RE.fullmatch(body):
        value = int(body)
        if not OFFSET_MIN <= value <= OFFSET_MAX:
            raise RangeError(
                f"relative offset {value} out of range ({OFFSET_MIN} to {OFFSET_MAX})",
                value,
            )
        return Operand(AddressingMode.RELATIVE, value)

    if _RELATIVE_HEX_RE.fullmatch(body):
        byte = int(body, 16)
        return Operand(AddressingMode.RELATIVE, byte - 0x100 if byte > OFFSET_MAX else byte)

    raise OperandFormatError(
        f"invalid relative operand '{text}'",
        hint="relative operands are '*' followed by a signed decimal (*-5) or a hex byte (*FB)",
    )


def _classify_indirect(text: str) -> Operand:
    for pattern, mode in (
        (_INDIRECT_RE, AddressingMode.INDIRECT),
        (_INDIRECT_X_RE, AddressingMode.INDIRECT_X),
        (_INDIRECT_Y_RE, AddressingMode.INDIRECT_Y),
    ):
        match = pattern.fullmatch(text)
        if match is None:
            continue
        digits = match.group(1)
        if len(digits) != 2:
            raise OperandFormatError(
                f"indirect operand '{text}' must hold exactly two hex digits",
                hint="indirect pointers live in the zeropage, e.g. ($10),Y",
            )
        return Operand(mode, int(digits, 16))

    raise OperandFormatError(
        f"invalid indirect operand '{text}'",
        hint="indirect operands are ($hh), ($hh,X) or ($hh),Y",
    )


def _classify_direct(text: str) -> Operand:
    match = _DIRECT_RE.fullmatch(text)
    if match is None:
        raise OperandFormatError(
            f"invalid address operand '{text}'",
            hint="addresses are '$' followed by two or four hex digits, optionally ,X or ,Y",
        )

    digits, index = match.group(1), match.group(2)
    index = index.upper() if index else None

    if len(digits) == 2:
        return Operand(_ZEROPAGE_MODES[index], int(digits, 16))
    if len(digits) == 4:
        return Operand(_ABSOLUTE_MODES[index], int(digits, 16))

    raise OperandFormatError(
        f"address '{text}' has {len(digits)} hex digits",
        hint="use two digits for a zeropage address or four for an absolute one",
    )


# =============================================================================
# Formatting
# =============================================================================

def format_operand(operand: Operand) -> str:
    """
    Render an operand in canonical source form.

    Returns:
        Text that classify_operand() maps back to the same operand
    """
    mode, value = operand.mode, operand.value

    if mode is AddressingMode.IMPLICIT:
        return ""
    if mode is AddressingMode.ACCUMULATOR:
        return "A"
    if mode is AddressingMode.IMMEDIATE:
        return f"#${value:02X}"
    if mode is AddressingMode.RELATIVE:
        return f"*{value:+d}"
    if mode is AddressingMode.ZEROPAGE:
        return f"${value:02X}"
    if mode is AddressingMode.ZEROPAGE_X:
        return f"${value:02X},X"
    if mode is AddressingMode.ZEROPAGE_Y:
        return f"${value:02X},Y"
    if mode is AddressingMode.ABSOLUTE:
        return f"${value:04X}"
    if mode is AddressingMode.ABSOLUTE_X:
        return f"${value:04X},X"
    if mode is AddressingMode.ABSOLUTE_Y:
        return f"${value:04X},Y"
    if mode is AddressingMode.INDIRECT:
        return f"(${value:02X})"
    if mode is AddressingMode.INDIRECT_X:
        return f"(${value:02X},X)"
    return f"(${value:02X}),Y"
