"""
Symbol Table and Address Assignment (Pass 1)
============================================

Pass 1 walks the lexed lines once, left to right, threading the running
address as explicit fold state. For every line it:

1. records the line's label at the current address, and
2. looks the instruction up in the opcode table and advances the
   address by the instruction's encoded size.

No bytes are produced here. The result is the final, frozen symbol table
plus the address and encoding chosen for each instruction, which is
everything pass 2 needs.

Operands in this language are numeric literals only, so labels are never
resolved into operands; the table exists for export (listings, symbol
files, debuggers).
"""

import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from asm6502.assembler.lexer import Line
from asm6502.cpu import InstructionInfo, OpcodeTable
from asm6502.errors import (
    AssemblerError,
    DuplicateLabelError,
    ErrorCollector,
    RangeError,
    SourceLocation,
    UnknownMnemonicError,
    UnsupportedAddressingModeError,
)

logger = logging.getLogger(__name__)

ADDRESS_SPACE_END = 0x10000


# =============================================================================
# Symbol Table
# =============================================================================

@dataclass(frozen=True)
class Symbol:
    """
    Symbol table entry.

    Attributes:
        name: Label name as written in source
        address: Byte address assigned in pass 1
        location: Where the label was defined
    """
    name: str
    address: int
    location: SourceLocation


class SymbolTable:
    """
    Label name to address mapping, built once by pass 1.

    Names are unique and entries are never changed or removed. After
    freeze() the table is read-only.

    Usage:
        symbols = SymbolTable()
        symbols.define("loop", 0x0200, line.location)
        symbols.freeze()
        symbols["loop"].address
    """

    def __init__(self):
        self._symbols: dict[str, Symbol] = {}
        self._frozen = False

    def define(self, name: str, address: int, location: SourceLocation,
               source_line: Optional[str] = None) -> Symbol:
        """
        Add a label.

        Raises:
            DuplicateLabelError: If the name is already defined
            AssemblerError: If the table has been frozen
        """
        if self._frozen:
            raise AssemblerError(f"symbol table is frozen, cannot define '{name}'", location)

        if name in self._symbols:
            raise DuplicateLabelError(
                name,
                location=location,
                original_location=self._symbols[name].location,
                source_line=source_line,
            )

        symbol = Symbol(name=name, address=address, location=location)
        self._symbols[name] = symbol
        return symbol

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, name: str) -> Optional[Symbol]:
        return self._symbols.get(name)

    def to_dict(self) -> dict[str, int]:
        """Return a plain name -> address mapping in definition order."""
        return {name: sym.address for name, sym in self._symbols.items()}

    def __getitem__(self, name: str) -> Symbol:
        return self._symbols[name]

    def __contains__(self, name: str) -> bool:
        return name in self._symbols

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._symbols.values())

    def __len__(self) -> int:
        return len(self._symbols)


# =============================================================================
# Pass 1 Fold
# =============================================================================

@dataclass(frozen=True)
class PlacedInstruction:
    """An instruction line with the address and encoding pass 1 chose."""
    line: Line
    address: int
    info: InstructionInfo


@dataclass
class Pass1Result:
    """
    Output of pass 1.

    Attributes:
        placed: Successfully placed instructions, in source order
        symbols: The frozen symbol table
        base_address: Address the program starts at
        end_address: Address following the last instruction
    """
    placed: tuple[PlacedInstruction, ...]
    symbols: SymbolTable
    base_address: int
    end_address: int


def resolve_instruction(line: Line, table: OpcodeTable) -> InstructionInfo:
    """
    Look up the encoding for a line's instruction.

    Raises:
        UnknownMnemonicError: If the table has no such mnemonic
        UnsupportedAddressingModeError: If the mnemonic lacks the operand's mode
    """
    instruction = line.instruction
    mnemonic = instruction.mnemonic
    mode = instruction.operand.mode

    if not table.has_mnemonic(mnemonic):
        raise UnknownMnemonicError(mnemonic, line.location, line.text)

    info = table.lookup(mnemonic, mode)
    if info is None:
        raise UnsupportedAddressingModeError(
            mnemonic,
            str(mode),
            line.location,
            line.text,
            valid_modes=[str(m) for m in table.modes_for(mnemonic)],
        )
    return info


def pass1_step(address: int, line: Line, table: OpcodeTable,
               symbols: SymbolTable) -> tuple[int, Optional[PlacedInstruction]]:
    """
    Process one line: define its label, then place its instruction.

    Args:
        address: Running address before this line

    Returns:
        (address after this line, placed instruction or None). A label is
        defined even when the instruction on the same line fails.
    """
    if line.label is not None:
        if address >= ADDRESS_SPACE_END:
            raise RangeError(
                f"label '{line.label}' falls past the end of memory",
                address,
                location=line.location,
                source_line=line.text,
            )
        symbols.define(line.label, address, line.location, line.text)

    if line.instruction is None:
        return address, None

    info = resolve_instruction(line, table)
    end = address + info.size
    if end > ADDRESS_SPACE_END:
        raise RangeError(
            f"instruction at ${address:04X} runs past the end of memory",
            end,
            location=line.location,
            source_line=line.text,
        )

    return end, PlacedInstruction(line=line, address=address, info=info)


def assign_addresses(
    lines: list[Line],
    table: OpcodeTable,
    base_address: int = 0,
    collector: Optional[ErrorCollector] = None,
) -> Pass1Result:
    """
    Run pass 1 over all lines.

    Failures are recorded per line in the collector and processing moves
    on to the next line with the address unchanged. Without a collector
    the first failure is raised.

    Args:
        lines: Lexed lines in source order
        table: Opcode table to size instructions with
        base_address: Address of the first instruction
        collector: Where to record per-line errors

    Returns:
        Pass1Result with the frozen symbol table
    """
    symbols = SymbolTable()
    address = base_address
    placed: list[PlacedInstruction] = []

    for line in lines:
        try:
            address, instruction = pass1_step(address, line, table, symbols)
        except AssemblerError as e:
            if collector is None:
                raise
            collector.add(e)
            continue
        if instruction is not None:
            placed.append(instruction)

    symbols.freeze()

    logger.debug(
        f"Pass 1: placed {len(placed)} instructions, {len(symbols)} symbols, "
        f"${base_address:04X}-${address:04X}"
    )

    return Pass1Result(
        placed=tuple(placed),
        symbols=symbols,
        base_address=base_address,
        end_address=address,
    )
