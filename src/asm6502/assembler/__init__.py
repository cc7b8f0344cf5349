"""
6502 Two-Pass Assembler
=======================

This package assembles line-oriented 6502 assembly source into a raw
instruction stream, a symbol table and a list of diagnostics.

Main Components
---------------
- **Assembler**: Orchestrates a run and collects diagnostics
- **LineLexer**: Splits a line into label, instruction and comment
- **classify_operand**: Maps operand text to one of the 13 addressing modes
- **SymbolTable / assign_addresses**: Pass 1, label addresses and sizes
- **encode_instruction / generate**: Pass 2, opcode and operand bytes

Assembly Process
----------------
1. **Lexing**: every line is lexed and its operand classified; lines are
   independent and may be lexed in parallel
2. **Pass 1**: a left-to-right fold over the lines threading the running
   address, producing the frozen symbol table
3. **Pass 2**: byte emission, low byte first for two-byte operands

Example Usage
-------------
>>> from asm6502.assembler import assemble
>>> assemble("LDA #$01").code
b'\\xa9\\x01'
"""

from asm6502.assembler.assembler import Assembler, AssemblerState, assemble, assemble_file
from asm6502.assembler.lexer import Instruction, Line, LineLexer, lex_line, split_source
from asm6502.assembler.operands import Operand, IMPLICIT_OPERAND, classify_operand, format_operand
from asm6502.assembler.symbols import (
    Symbol,
    SymbolTable,
    PlacedInstruction,
    Pass1Result,
    assign_addresses,
    pass1_step,
    resolve_instruction,
)
from asm6502.assembler.codegen import (
    EncodedInstruction,
    Program,
    encode_instruction,
    encode_operand,
    generate,
    format_listing,
    format_symbols,
)

__all__ = [
    # Main class and functions
    "Assembler",
    "AssemblerState",
    "assemble",
    "assemble_file",
    # Lexer
    "Instruction",
    "Line",
    "LineLexer",
    "lex_line",
    "split_source",
    # Operands
    "Operand",
    "IMPLICIT_OPERAND",
    "classify_operand",
    "format_operand",
    # Pass 1
    "Symbol",
    "SymbolTable",
    "PlacedInstruction",
    "Pass1Result",
    "assign_addresses",
    "pass1_step",
    "resolve_instruction",
    # Pass 2
    "EncodedInstruction",
    "Program",
    "encode_instruction",
    "encode_operand",
    "generate",
    "format_listing",
    "format_symbols",
]
