"""
6502 Code Generator (Pass 2)
============================

This module turns the placed instructions from pass 1 into machine code.

Pass 2 (Byte Emission)
----------------------
- Visit every placed instruction in source order
- Emit the opcode byte, then the operand bytes for its addressing mode
- Validate that each operand value fits its field

Pass 2 never touches the symbol table; the address of each instruction
was fixed in pass 1 and is only carried through for listings.

Operand Encoding
----------------
| Modes                                  | Operand bytes                  |
|----------------------------------------|--------------------------------|
| implicit, accumulator                  | none                           |
| immediate, zeropage[,X/Y], indirect... | the byte                       |
| relative                               | two's complement of the offset |
| absolute[,X/Y]                         | low byte, then high byte       |

Output Formats
--------------
- Raw binary code (Program.code)
- Listing with addresses, bytes and source, followed by the symbol table
- Symbol file, one `name $ADDR` per line
"""

from dataclasses import dataclass, field
from typing import Optional
import logging
import struct

from asm6502.assembler.lexer import Line
from asm6502.assembler.operands import Operand
from asm6502.assembler.symbols import Pass1Result
from asm6502.cpu import AddressingMode, InstructionInfo
from asm6502.errors import (
    AssemblerError,
    Diagnostic,
    ErrorCollector,
    RangeError,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Encoded Output Records
# =============================================================================

@dataclass(frozen=True)
class EncodedInstruction:
    """
    One instruction's machine code.

    Attributes:
        line_number: Source line the instruction came from
        address: Address of the opcode byte
        opcode: The opcode byte
        operand_bytes: Operand bytes in emission order (0 to 2 of them)
    """
    line_number: int
    address: int
    opcode: int
    operand_bytes: tuple[int, ...] = ()

    @property
    def size(self) -> int:
        return 1 + len(self.operand_bytes)

    def to_bytes(self) -> bytes:
        return bytes((self.opcode, *self.operand_bytes))

    def __repr__(self) -> str:
        hex_str = " ".join(f"{b:02X}" for b in self.to_bytes())
        return f"EncodedInstruction(line={self.line_number}, ${self.address:04X}: {hex_str})"


@dataclass(frozen=True)
class Program:
    """
    A successfully assembled program.

    Attributes:
        instructions: Encoded instructions in source order
        symbols: Label name -> address, in definition order
        origin: Address of the first instruction
        diagnostics: Always empty for a returned program
    """
    instructions: tuple[EncodedInstruction, ...]
    symbols: dict[str, int] = field(default_factory=dict)
    origin: int = 0
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def code(self) -> bytes:
        """The concatenated machine code."""
        return b"".join(instr.to_bytes() for instr in self.instructions)

    @property
    def size(self) -> int:
        return sum(instr.size for instr in self.instructions)


# =============================================================================
# Instruction Encoding
# =============================================================================

def encode_operand(operand: Operand) -> tuple[int, ...]:
    """
    Encode an operand's payload into its bytes.

    Raises:
        RangeError: If the value does not fit the mode's field
    """
    mode, value = operand.mode, operand.value
    width = mode.operand_width

    if width == 0:
        return ()

    if mode is AddressingMode.RELATIVE:
        if not -128 <= value <= 127:
            raise RangeError(f"relative offset {value} out of range (-128 to 127)", value)
        return (value & 0xFF,)

    if width == 1:
        if not 0 <= value <= 0xFF:
            raise RangeError(f"{mode} value ${value:X} does not fit in a byte", value)
        return (value,)

    if not 0 <= value <= 0xFFFF:
        raise RangeError(f"{mode} value ${value:X} does not fit in two bytes", value)
    # 6502 is little-endian
    return tuple(struct.pack("<H", value))


def encode_instruction(
    info: InstructionInfo,
    operand: Operand,
    address: int,
    line_number: int = 0,
) -> EncodedInstruction:
    """
    Encode one instruction.

    Args:
        info: Encoding chosen in pass 1
        operand: The classified operand
        address: Address assigned in pass 1
        line_number: Source line for the result

    Returns:
        The EncodedInstruction, opcode first

    Raises:
        RangeError: If the operand value does not fit its field
        AssemblerError: If the table entry's operand size disagrees with the mode
    """
    if info.operand_size != operand.mode.operand_width:
        raise AssemblerError(
            f"opcode table entry ${info.opcode:02X} has a {info.operand_size}-byte "
            f"operand but {operand.mode} needs {operand.mode.operand_width}",
            hint="the opcode table is inconsistent",
        )

    return EncodedInstruction(
        line_number=line_number,
        address=address,
        opcode=info.opcode,
        operand_bytes=encode_operand(operand),
    )


def generate(
    pass1: Pass1Result,
    collector: Optional[ErrorCollector] = None,
) -> list[EncodedInstruction]:
    """
    Run pass 2 over the instructions placed in pass 1.

    Failures are recorded per line in the collector and encoding moves
    on to the next instruction. Without a collector the first failure is
    raised.

    Returns:
        Encoded instructions in source order (those that succeeded)
    """
    encoded = []

    for placed in pass1.placed:
        line = placed.line
        try:
            encoded.append(encode_instruction(
                placed.info,
                line.instruction.operand,
                placed.address,
                line.number,
            ))
        except AssemblerError as e:
            e.with_context(line.location, line.text)
            if collector is None:
                raise
            collector.add(e)

    logger.debug(
        f"Pass 2: encoded {len(encoded)} instructions, "
        f"{sum(instr.size for instr in encoded)} bytes"
    )
    return encoded


# =============================================================================
# Listing and Symbol Output
# =============================================================================

def format_listing(program: Program, lines: list[Line]) -> str:
    """
    Format an assembly listing.

    Every source line appears once. Instruction lines show their address
    and bytes; label-only lines show the label's address.

    Returns:
        The listing text, followed by the symbol table
    """
    by_line = {instr.line_number: instr for instr in program.instructions}

    out = []
    out.append("6502 Assembler Listing")
    out.append("=" * 60)
    out.append("")
    out.append("Addr   Code      Line  Source")
    out.append("-" * 60)

    for line in lines:
        instr = by_line.get(line.number)
        if instr is not None:
            hex_str = " ".join(f"{b:02X}" for b in instr.to_bytes())
            out.append(f"${instr.address:04X}  {hex_str:8s}  {line.number:4d}  {line.text}")
        elif line.label is not None and line.label in program.symbols:
            address = program.symbols[line.label]
            out.append(f"${address:04X}  {'':8s}  {line.number:4d}  {line.text}")
        else:
            out.append(f"{'':5s}  {'':8s}  {line.number:4d}  {line.text}")

    out.append("")
    out.append("Symbol Table")
    out.append("-" * 30)
    for name, address in sorted(program.symbols.items()):
        out.append(f"{name:20s} = ${address:04X}")

    return "\n".join(out)


def format_symbols(program: Program) -> str:
    """
    Format a symbol file.

    Format: name address (one per line, sorted by name)
    """
    out = ["# Symbol table", "# Generated by asm6502"]
    for name, address in sorted(program.symbols.items()):
        out.append(f"{name} ${address:04X}")
    return "\n".join(out) + "\n"
