"""
asm6502 CPU Package
===================

CPU architecture definitions shared by the assembler stages: the
addressing modes, the per-encoding InstructionInfo record, the
OpcodeTable lookup service and the bundled NMOS 6502 table.

Usage:
    from asm6502.cpu import (
        AddressingMode,
        InstructionInfo,
        OpcodeTable,
        NMOS_6502_TABLE,
    )
"""

from asm6502.cpu.nmos6502 import (
    # Core types
    AddressingMode,
    InstructionInfo,
    OpcodeTable,
    # Bundled instruction set
    NMOS_6502_OPCODES,
    NMOS_6502_TABLE,
    # Table construction
    make_info,
    load_opcode_table,
)

__all__ = [
    "AddressingMode",
    "InstructionInfo",
    "OpcodeTable",
    "NMOS_6502_OPCODES",
    "NMOS_6502_TABLE",
    "make_info",
    "load_opcode_table",
]
