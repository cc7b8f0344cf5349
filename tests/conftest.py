"""
asm6502 - Shared Test Fixtures
==============================

pytest fixtures used across the assembler test modules.

It provides:
- a small injected opcode table, including a one-byte INDIRECT entry
  that the bundled NMOS table does not carry
- an Assembler wired to that table
- a helper for writing source files into tmp_path
"""

import pytest

from asm6502.assembler import Assembler
from asm6502.cpu import AddressingMode, OpcodeTable, make_info


@pytest.fixture
def small_table() -> OpcodeTable:
    """A hand-built opcode table covering every operand width."""
    return OpcodeTable({
        ("LDA", AddressingMode.IMMEDIATE): make_info(0xA9, AddressingMode.IMMEDIATE),
        ("LDA", AddressingMode.ZEROPAGE): make_info(0xA5, AddressingMode.ZEROPAGE, 3),
        ("LDA", AddressingMode.ABSOLUTE): make_info(0xAD, AddressingMode.ABSOLUTE, 4),
        ("DEX", AddressingMode.IMPLICIT): make_info(0xCA, AddressingMode.IMPLICIT),
        ("BNE", AddressingMode.RELATIVE): make_info(0xD0, AddressingMode.RELATIVE, 2, 1),
        ("ASL", AddressingMode.ACCUMULATOR): make_info(0x0A, AddressingMode.ACCUMULATOR),
        ("JMP", AddressingMode.INDIRECT): make_info(0x6C, AddressingMode.INDIRECT, 5),
    })


@pytest.fixture
def small_asm(small_table) -> Assembler:
    """An Assembler using the small table."""
    return Assembler(opcode_table=small_table)


@pytest.fixture
def write_source(tmp_path):
    """Write assembly source to a file in tmp_path and return its path."""
    def _write(source: str, name: str = "prog.asm"):
        path = tmp_path / name
        path.write_text(source)
        return path
    return _write
