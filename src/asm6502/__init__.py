"""
asm6502 - Two-Pass Assembler for the MOS 6502
=============================================

This package assembles line-oriented 6502 assembly language into raw
machine code. Operands use one of 13 addressing modes; the opcode table
is supplied by the caller, with the NMOS 6502 instruction set bundled as
the default.

Main Components
---------------
- **assembler**: Lexer, operand classifier, pass 1 and pass 2
- **cpu**: Addressing modes, opcode tables and the NMOS 6502 table
- **errors**: Exception hierarchy and diagnostics
- **config**: Run settings, optionally read from the environment
- **cli**: The `asm6502` command

Quick Start
-----------
    >>> from asm6502 import Assembler
    >>> asm = Assembler()
    >>> program = asm.assemble_string("LDA $1234")
    >>> list(program.code)
    [173, 52, 18]

Or use the command-line tool:
    $ asm6502 prog.asm -o prog.bin -l prog.lst

Version History
---------------
1.0.0 - Initial release
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from asm6502.assembler import Assembler, AssemblerState, Program, assemble, assemble_file
from asm6502.config import AssemblerConfig
from asm6502.cpu import AddressingMode, InstructionInfo, OpcodeTable, NMOS_6502_TABLE, load_opcode_table
from asm6502.errors import (
    Asm6502Error,
    AssemblerError,
    AssemblySyntaxError,
    UnknownMnemonicError,
    UnsupportedAddressingModeError,
    OperandFormatError,
    RangeError,
    DuplicateLabelError,
    AssemblyFailedError,
    TooManyErrors,
    OpcodeTableError,
    Diagnostic,
    ErrorKind,
    SourceLocation,
)

__all__ = [
    # Version info
    "__version__",
    # Assembler
    "Assembler",
    "AssemblerState",
    "Program",
    "assemble",
    "assemble_file",
    "AssemblerConfig",
    # CPU
    "AddressingMode",
    "InstructionInfo",
    "OpcodeTable",
    "NMOS_6502_TABLE",
    "load_opcode_table",
    # Exception hierarchy
    "Asm6502Error",
    "AssemblerError",
    "AssemblySyntaxError",
    "UnknownMnemonicError",
    "UnsupportedAddressingModeError",
    "OperandFormatError",
    "RangeError",
    "DuplicateLabelError",
    "AssemblyFailedError",
    "TooManyErrors",
    "OpcodeTableError",
    "Diagnostic",
    "ErrorKind",
    "SourceLocation",
]
