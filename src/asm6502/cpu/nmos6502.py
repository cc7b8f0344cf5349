"""
NMOS 6502 Instruction Set Definition
====================================

This module defines the addressing modes of the 6502, the per-encoding
instruction record, the OpcodeTable lookup service the assembler is
configured with, and the bundled NMOS 6502 table used when no other
table is supplied.

The 6502 is little-endian: double-byte operands are stored low byte
first, so `LDA $1234` assembles to $AD $34 $12.

Addressing Modes
----------------
| Mode        | Syntax     | Operand bytes | Example      |
|-------------|------------|---------------|--------------|
| Implicit    | (none)     | 0             | `INX`        |
| Accumulator | `A`        | 0             | `ASL A`      |
| Immediate   | `#hh`      | 1             | `LDA #$01`   |
| Zeropage    | `$hh`      | 1             | `LDA $3F`    |
| Zeropage,X  | `$hh,X`    | 1             | `LDA $3F,X`  |
| Zeropage,Y  | `$hh,Y`    | 1             | `LDX $3F,Y`  |
| Relative    | `*d`       | 1 (signed)    | `BNE *-5`    |
| Absolute    | `$hhhh`    | 2             | `JMP $1234`  |
| Absolute,X  | `$hhhh,X`  | 2             | `LDA $1234,X`|
| Absolute,Y  | `$hhhh,Y`  | 2             | `LDA $1234,Y`|
| Indirect    | `($hh)`    | 1             |              |
| Indirect,X  | `($hh,X)`  | 1             | `LDA ($10,X)`|
| Indirect,Y  | `($hh),Y`  | 1             | `LDA ($10),Y`|

The source syntax only provides a one-byte indirect operand, while the
NMOS `JMP ($hhhh)` instruction takes a two-byte pointer. The bundled
table therefore has no INDIRECT entry; a table loaded from JSON may
define one-byte indirect encodings for derived CPUs.

Reference
---------
- http://www.6502.org/tutorials/6502opcodes.html
"""

import json
import logging
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import Iterator, Mapping, Optional

from asm6502.errors import OpcodeTableError

logger = logging.getLogger(__name__)


# =============================================================================
# Addressing Mode Enumeration
# =============================================================================

class AddressingMode(Enum):
    """
    6502 addressing modes.

    The mode alone determines how many operand bytes follow the opcode
    and how they are interpreted.
    """
    IMPLICIT = auto()
    ACCUMULATOR = auto()
    IMMEDIATE = auto()
    ZEROPAGE = auto()
    ZEROPAGE_X = auto()
    ZEROPAGE_Y = auto()
    RELATIVE = auto()
    ABSOLUTE = auto()
    ABSOLUTE_X = auto()
    ABSOLUTE_Y = auto()
    INDIRECT = auto()
    INDIRECT_X = auto()   # Indexed indirect
    INDIRECT_Y = auto()   # Indirect indexed

    def __str__(self) -> str:
        """Return human-readable name for error messages."""
        return _MODE_NAMES[self]

    @property
    def key(self) -> str:
        """Name used for this mode in opcode table files."""
        return self.name.lower()

    @property
    def operand_width(self) -> int:
        """Number of operand bytes following the opcode (0, 1 or 2)."""
        if self in _NO_OPERAND_MODES:
            return 0
        if self in _WORD_OPERAND_MODES:
            return 2
        return 1

    @classmethod
    def from_key(cls, key: str) -> "AddressingMode":
        """
        Look up a mode by its table-file name ("zeropage_x", "absolute").

        Raises:
            ValueError: If no mode has that name
        """
        try:
            return cls[key.strip().upper()]
        except KeyError:
            raise ValueError(f"unknown addressing mode '{key}'") from None


_MODE_NAMES = {
    AddressingMode.IMPLICIT: "implicit",
    AddressingMode.ACCUMULATOR: "accumulator",
    AddressingMode.IMMEDIATE: "immediate",
    AddressingMode.ZEROPAGE: "zeropage",
    AddressingMode.ZEROPAGE_X: "zeropage,X",
    AddressingMode.ZEROPAGE_Y: "zeropage,Y",
    AddressingMode.RELATIVE: "relative",
    AddressingMode.ABSOLUTE: "absolute",
    AddressingMode.ABSOLUTE_X: "absolute,X",
    AddressingMode.ABSOLUTE_Y: "absolute,Y",
    AddressingMode.INDIRECT: "indirect",
    AddressingMode.INDIRECT_X: "(indirect,X)",
    AddressingMode.INDIRECT_Y: "(indirect),Y",
}

_NO_OPERAND_MODES = frozenset({AddressingMode.IMPLICIT, AddressingMode.ACCUMULATOR})

_WORD_OPERAND_MODES = frozenset({
    AddressingMode.ABSOLUTE,
    AddressingMode.ABSOLUTE_X,
    AddressingMode.ABSOLUTE_Y,
})


# =============================================================================
# Instruction Information
# =============================================================================

@dataclass(frozen=True)
class InstructionInfo:
    """
    Information about a specific instruction encoding.

    Attributes:
        opcode: The opcode byte
        size: Total instruction size in bytes (opcode + operand)
        cycles: Base number of CPU cycles
        operand_size: Size of operand in bytes (0, 1, or 2)
        page_penalty: Extra cycles when an index crosses a page boundary
    """
    opcode: int
    size: int
    cycles: int
    operand_size: int
    page_penalty: int = 0

    def __repr__(self) -> str:
        return f"InstructionInfo(opcode=${self.opcode:02X}, size={self.size}, cycles={self.cycles})"


# =============================================================================
# Opcode Table Service
# =============================================================================

class OpcodeTable:
    """
    Lookup service mapping (mnemonic, addressing mode) to an encoding.

    The assembler never defines opcode values itself; it is handed one
    of these. Mnemonics are matched case-insensitively.

    Usage:
        table = OpcodeTable({("LDA", AddressingMode.IMMEDIATE): InstructionInfo(0xA9, 2, 2, 1)})
        info = table.lookup("lda", AddressingMode.IMMEDIATE)
    """

    def __init__(self, entries: Mapping[tuple[str, AddressingMode], InstructionInfo]):
        """
        Build a table from a mapping of (mnemonic, mode) to InstructionInfo.

        Raises:
            OpcodeTableError: If an entry is inconsistent with its mode
        """
        self._entries: dict[tuple[str, AddressingMode], InstructionInfo] = {}
        self._modes: dict[str, list[AddressingMode]] = {}

        for (mnemonic, mode), info in entries.items():
            name = mnemonic.upper()
            if not 0 <= info.opcode <= 0xFF:
                raise OpcodeTableError(
                    f"{name} {mode}: opcode ${info.opcode:X} is not a single byte"
                )
            if info.operand_size != mode.operand_width:
                raise OpcodeTableError(
                    f"{name} {mode}: operand size {info.operand_size} does not "
                    f"match the mode's {mode.operand_width}-byte operand"
                )
            if info.size != info.operand_size + 1:
                raise OpcodeTableError(
                    f"{name} {mode}: size {info.size} should be {info.operand_size + 1}"
                )
            modes = self._modes.setdefault(name, [])
            if (name, mode) not in self._entries:
                modes.append(mode)
            self._entries[(name, mode)] = info

    def lookup(self, mnemonic: str, mode: AddressingMode) -> Optional[InstructionInfo]:
        """Return the encoding for mnemonic in mode, or None."""
        return self._entries.get((mnemonic.upper(), mode))

    def has_mnemonic(self, mnemonic: str) -> bool:
        """Check whether the table knows the mnemonic in any mode."""
        return mnemonic.upper() in self._modes

    def modes_for(self, mnemonic: str) -> list[AddressingMode]:
        """Return the modes a mnemonic supports, in table order."""
        return list(self._modes.get(mnemonic.upper(), []))

    @property
    def mnemonics(self) -> frozenset[str]:
        return frozenset(self._modes)

    def __contains__(self, key: tuple[str, AddressingMode]) -> bool:
        mnemonic, mode = key
        return (mnemonic.upper(), mode) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[tuple[str, AddressingMode]]:
        return iter(self._entries)

    def items(self):
        return self._entries.items()


def make_info(opcode: int, mode: AddressingMode, cycles: int = 2, page_penalty: int = 0) -> InstructionInfo:
    """Build an InstructionInfo whose sizes follow from the addressing mode."""
    width = mode.operand_width
    return InstructionInfo(opcode, width + 1, cycles, width, page_penalty)


def load_opcode_table(path: str | Path) -> OpcodeTable:
    """
    Load an opcode table from a JSON file.

    The file maps mnemonics to mode entries. Each entry is an opcode given
    as a hex string or an integer, or an object with "opcode" and optional
    "cycles" and "page_penalty":

        {
            "LDA": {"immediate": "A9", "zeropage": "A5"},
            "BNE": {"relative": {"opcode": "D0", "cycles": 2, "page_penalty": 1}}
        }

    Raises:
        OpcodeTableError: If the file is unreadable or malformed
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise OpcodeTableError(f"cannot read opcode table '{path}': {e}") from e
    except json.JSONDecodeError as e:
        raise OpcodeTableError(f"opcode table '{path}' is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise OpcodeTableError(f"opcode table '{path}' must be a JSON object")

    entries: dict[tuple[str, AddressingMode], InstructionInfo] = {}
    for mnemonic, modes in data.items():
        if not isinstance(modes, dict):
            raise OpcodeTableError(f"{mnemonic}: expected an object of addressing modes")
        for mode_key, entry in modes.items():
            try:
                mode = AddressingMode.from_key(mode_key)
            except ValueError as e:
                raise OpcodeTableError(f"{mnemonic}: {e}") from e

            cycles, page_penalty = 2, 0
            if isinstance(entry, dict):
                raw_opcode = entry.get("opcode")
                try:
                    cycles = int(entry.get("cycles", cycles))
                    page_penalty = int(entry.get("page_penalty", page_penalty))
                except (TypeError, ValueError):
                    raise OpcodeTableError(f"{mnemonic} {mode}: cycle counts must be integers") from None
            else:
                raw_opcode = entry

            entries[(mnemonic, mode)] = make_info(
                _parse_opcode(raw_opcode, mnemonic, mode), mode, cycles, page_penalty
            )

    table = OpcodeTable(entries)

    seen: dict[int, tuple[str, AddressingMode]] = {}
    for key, info in table.items():
        if info.opcode in seen:
            other_mnemonic, other_mode = seen[info.opcode]
            logger.warning(
                f"{path}: opcode ${info.opcode:02X} is used by both "
                f"{other_mnemonic} {other_mode} and {key[0]} {key[1]}"
            )
        else:
            seen[info.opcode] = key

    logger.debug(f"Loaded {len(table)} opcode entries for {len(table.mnemonics)} mnemonics from {path}")
    return table


def _parse_opcode(raw, mnemonic: str, mode: AddressingMode) -> int:
    """Parse an opcode given as an int or a hex string ("A9", "$A9", "0xA9")."""
    if isinstance(raw, bool) or raw is None:
        raise OpcodeTableError(f"{mnemonic} {mode}: missing opcode")
    if isinstance(raw, int):
        return raw
    text = str(raw).strip()
    if text.startswith("$"):
        text = text[1:]
    elif text.lower().startswith("0x"):
        text = text[2:]
    try:
        return int(text, 16)
    except ValueError:
        raise OpcodeTableError(f"{mnemonic} {mode}: invalid opcode '{raw}'") from None


# =============================================================================
# NMOS 6502 Opcode Table
# =============================================================================
# Key: (mnemonic, addressing_mode)
# Value: InstructionInfo(opcode, total_size, cycles, operand_size, page_penalty)
# =============================================================================

_IMP = AddressingMode.IMPLICIT
_ACC = AddressingMode.ACCUMULATOR
_IMM = AddressingMode.IMMEDIATE
_ZP = AddressingMode.ZEROPAGE
_ZPX = AddressingMode.ZEROPAGE_X
_ZPY = AddressingMode.ZEROPAGE_Y
_REL = AddressingMode.RELATIVE
_ABS = AddressingMode.ABSOLUTE
_ABX = AddressingMode.ABSOLUTE_X
_ABY = AddressingMode.ABSOLUTE_Y
_INX = AddressingMode.INDIRECT_X
_INY = AddressingMode.INDIRECT_Y

NMOS_6502_OPCODES: dict[tuple[str, AddressingMode], InstructionInfo] = {
    # =========================================================================
    # LOAD / STORE
    # =========================================================================
    ("LDA", _IMM): InstructionInfo(0xA9, 2, 2, 1),
    ("LDA", _ZP): InstructionInfo(0xA5, 2, 3, 1),
    ("LDA", _ZPX): InstructionInfo(0xB5, 2, 4, 1),
    ("LDA", _ABS): InstructionInfo(0xAD, 3, 4, 2),
    ("LDA", _ABX): InstructionInfo(0xBD, 3, 4, 2, 1),
    ("LDA", _ABY): InstructionInfo(0xB9, 3, 4, 2, 1),
    ("LDA", _INX): InstructionInfo(0xA1, 2, 6, 1),
    ("LDA", _INY): InstructionInfo(0xB1, 2, 5, 1, 1),

    ("LDX", _IMM): InstructionInfo(0xA2, 2, 2, 1),
    ("LDX", _ZP): InstructionInfo(0xA6, 2, 3, 1),
    ("LDX", _ZPY): InstructionInfo(0xB6, 2, 4, 1),
    ("LDX", _ABS): InstructionInfo(0xAE, 3, 4, 2),
    ("LDX", _ABY): InstructionInfo(0xBE, 3, 4, 2, 1),

    ("LDY", _IMM): InstructionInfo(0xA0, 2, 2, 1),
    ("LDY", _ZP): InstructionInfo(0xA4, 2, 3, 1),
    ("LDY", _ZPX): InstructionInfo(0xB4, 2, 4, 1),
    ("LDY", _ABS): InstructionInfo(0xAC, 3, 4, 2),
    ("LDY", _ABX): InstructionInfo(0xBC, 3, 4, 2, 1),

    ("STA", _ZP): InstructionInfo(0x85, 2, 3, 1),
    ("STA", _ZPX): InstructionInfo(0x95, 2, 4, 1),
    ("STA", _ABS): InstructionInfo(0x8D, 3, 4, 2),
    ("STA", _ABX): InstructionInfo(0x9D, 3, 5, 2),
    ("STA", _ABY): InstructionInfo(0x99, 3, 5, 2),
    ("STA", _INX): InstructionInfo(0x81, 2, 6, 1),
    ("STA", _INY): InstructionInfo(0x91, 2, 6, 1),

    ("STX", _ZP): InstructionInfo(0x86, 2, 3, 1),
    ("STX", _ZPY): InstructionInfo(0x96, 2, 4, 1),
    ("STX", _ABS): InstructionInfo(0x8E, 3, 4, 2),

    ("STY", _ZP): InstructionInfo(0x84, 2, 3, 1),
    ("STY", _ZPX): InstructionInfo(0x94, 2, 4, 1),
    ("STY", _ABS): InstructionInfo(0x8C, 3, 4, 2),

    # =========================================================================
    # ARITHMETIC AND LOGIC
    # N Z (C V where noted)
    # =========================================================================

    # ADC - add with carry, results depend on the decimal flag
    ("ADC", _IMM): InstructionInfo(0x69, 2, 2, 1),
    ("ADC", _ZP): InstructionInfo(0x65, 2, 3, 1),
    ("ADC", _ZPX): InstructionInfo(0x75, 2, 4, 1),
    ("ADC", _ABS): InstructionInfo(0x6D, 3, 4, 2),
    ("ADC", _ABX): InstructionInfo(0x7D, 3, 4, 2, 1),
    ("ADC", _ABY): InstructionInfo(0x79, 3, 4, 2, 1),
    ("ADC", _INX): InstructionInfo(0x61, 2, 6, 1),
    ("ADC", _INY): InstructionInfo(0x71, 2, 5, 1, 1),

    # SBC - subtract with carry
    ("SBC", _IMM): InstructionInfo(0xE9, 2, 2, 1),
    ("SBC", _ZP): InstructionInfo(0xE5, 2, 3, 1),
    ("SBC", _ZPX): InstructionInfo(0xF5, 2, 4, 1),
    ("SBC", _ABS): InstructionInfo(0xED, 3, 4, 2),
    ("SBC", _ABX): InstructionInfo(0xFD, 3, 4, 2, 1),
    ("SBC", _ABY): InstructionInfo(0xF9, 3, 4, 2, 1),
    ("SBC", _INX): InstructionInfo(0xE1, 2, 6, 1),
    ("SBC", _INY): InstructionInfo(0xF1, 2, 5, 1, 1),

    ("AND", _IMM): InstructionInfo(0x29, 2, 2, 1),
    ("AND", _ZP): InstructionInfo(0x25, 2, 3, 1),
    ("AND", _ZPX): InstructionInfo(0x35, 2, 4, 1),
    ("AND", _ABS): InstructionInfo(0x2D, 3, 4, 2),
    ("AND", _ABX): InstructionInfo(0x3D, 3, 4, 2, 1),
    ("AND", _ABY): InstructionInfo(0x39, 3, 4, 2, 1),
    ("AND", _INX): InstructionInfo(0x21, 2, 6, 1),
    ("AND", _INY): InstructionInfo(0x31, 2, 5, 1, 1),

    ("ORA", _IMM): InstructionInfo(0x09, 2, 2, 1),
    ("ORA", _ZP): InstructionInfo(0x05, 2, 3, 1),
    ("ORA", _ZPX): InstructionInfo(0x15, 2, 4, 1),
    ("ORA", _ABS): InstructionInfo(0x0D, 3, 4, 2),
    ("ORA", _ABX): InstructionInfo(0x1D, 3, 4, 2, 1),
    ("ORA", _ABY): InstructionInfo(0x19, 3, 4, 2, 1),
    ("ORA", _INX): InstructionInfo(0x01, 2, 6, 1),
    ("ORA", _INY): InstructionInfo(0x11, 2, 5, 1, 1),

    ("EOR", _IMM): InstructionInfo(0x49, 2, 2, 1),
    ("EOR", _ZP): InstructionInfo(0x45, 2, 3, 1),
    ("EOR", _ZPX): InstructionInfo(0x55, 2, 4, 1),
    ("EOR", _ABS): InstructionInfo(0x4D, 3, 4, 2),
    ("EOR", _ABX): InstructionInfo(0x5D, 3, 4, 2, 1),
    ("EOR", _ABY): InstructionInfo(0x59, 3, 4, 2, 1),
    ("EOR", _INX): InstructionInfo(0x41, 2, 6, 1),
    ("EOR", _INY): InstructionInfo(0x51, 2, 5, 1, 1),

    # BIT - test bits, N V Z
    ("BIT", _ZP): InstructionInfo(0x24, 2, 3, 1),
    ("BIT", _ABS): InstructionInfo(0x2C, 3, 4, 2),

    # =========================================================================
    # COMPARE
    # Sets flags as if a subtraction was carried out, N Z C
    # =========================================================================
    ("CMP", _IMM): InstructionInfo(0xC9, 2, 2, 1),
    ("CMP", _ZP): InstructionInfo(0xC5, 2, 3, 1),
    ("CMP", _ZPX): InstructionInfo(0xD5, 2, 4, 1),
    ("CMP", _ABS): InstructionInfo(0xCD, 3, 4, 2),
    ("CMP", _ABX): InstructionInfo(0xDD, 3, 4, 2, 1),
    ("CMP", _ABY): InstructionInfo(0xD9, 3, 4, 2, 1),
    ("CMP", _INX): InstructionInfo(0xC1, 2, 6, 1),
    ("CMP", _INY): InstructionInfo(0xD1, 2, 5, 1, 1),

    ("CPX", _IMM): InstructionInfo(0xE0, 2, 2, 1),
    ("CPX", _ZP): InstructionInfo(0xE4, 2, 3, 1),
    ("CPX", _ABS): InstructionInfo(0xEC, 3, 4, 2),

    ("CPY", _IMM): InstructionInfo(0xC0, 2, 2, 1),
    ("CPY", _ZP): InstructionInfo(0xC4, 2, 3, 1),
    ("CPY", _ABS): InstructionInfo(0xCC, 3, 4, 2),

    # =========================================================================
    # INCREMENT / DECREMENT
    # =========================================================================
    ("INC", _ZP): InstructionInfo(0xE6, 2, 5, 1),
    ("INC", _ZPX): InstructionInfo(0xF6, 2, 6, 1),
    ("INC", _ABS): InstructionInfo(0xEE, 3, 6, 2),
    ("INC", _ABX): InstructionInfo(0xFE, 3, 7, 2),

    ("DEC", _ZP): InstructionInfo(0xC6, 2, 5, 1),
    ("DEC", _ZPX): InstructionInfo(0xD6, 2, 6, 1),
    ("DEC", _ABS): InstructionInfo(0xCE, 3, 6, 2),
    ("DEC", _ABX): InstructionInfo(0xDE, 3, 7, 2),

    ("INX", _IMP): InstructionInfo(0xE8, 1, 2, 0),
    ("INY", _IMP): InstructionInfo(0xC8, 1, 2, 0),
    ("DEX", _IMP): InstructionInfo(0xCA, 1, 2, 0),
    ("DEY", _IMP): InstructionInfo(0x88, 1, 2, 0),

    # =========================================================================
    # SHIFTS AND ROTATES
    # N Z C
    # =========================================================================
    ("ASL", _ACC): InstructionInfo(0x0A, 1, 2, 0),
    ("ASL", _ZP): InstructionInfo(0x06, 2, 5, 1),
    ("ASL", _ZPX): InstructionInfo(0x16, 2, 6, 1),
    ("ASL", _ABS): InstructionInfo(0x0E, 3, 6, 2),
    ("ASL", _ABX): InstructionInfo(0x1E, 3, 7, 2),

    ("LSR", _ACC): InstructionInfo(0x4A, 1, 2, 0),
    ("LSR", _ZP): InstructionInfo(0x46, 2, 5, 1),
    ("LSR", _ZPX): InstructionInfo(0x56, 2, 6, 1),
    ("LSR", _ABS): InstructionInfo(0x4E, 3, 6, 2),
    ("LSR", _ABX): InstructionInfo(0x5E, 3, 7, 2),

    ("ROL", _ACC): InstructionInfo(0x2A, 1, 2, 0),
    ("ROL", _ZP): InstructionInfo(0x26, 2, 5, 1),
    ("ROL", _ZPX): InstructionInfo(0x36, 2, 6, 1),
    ("ROL", _ABS): InstructionInfo(0x2E, 3, 6, 2),
    ("ROL", _ABX): InstructionInfo(0x3E, 3, 7, 2),

    ("ROR", _ACC): InstructionInfo(0x6A, 1, 2, 0),
    ("ROR", _ZP): InstructionInfo(0x66, 2, 5, 1),
    ("ROR", _ZPX): InstructionInfo(0x76, 2, 6, 1),
    ("ROR", _ABS): InstructionInfo(0x6E, 3, 6, 2),
    ("ROR", _ABX): InstructionInfo(0x7E, 3, 7, 2),

    # =========================================================================
    # BRANCHES
    # 2 cycles, +1 if taken, +1 more if the target is on another page
    # =========================================================================
    ("BPL", _REL): InstructionInfo(0x10, 2, 2, 1, 1),  # branch on plus
    ("BMI", _REL): InstructionInfo(0x30, 2, 2, 1, 1),  # branch on minus
    ("BVC", _REL): InstructionInfo(0x50, 2, 2, 1, 1),  # branch on overflow clear
    ("BVS", _REL): InstructionInfo(0x70, 2, 2, 1, 1),  # branch on overflow set
    ("BCC", _REL): InstructionInfo(0x90, 2, 2, 1, 1),  # branch on carry clear
    ("BCS", _REL): InstructionInfo(0xB0, 2, 2, 1, 1),  # branch on carry set
    ("BNE", _REL): InstructionInfo(0xD0, 2, 2, 1, 1),  # branch on not equal
    ("BEQ", _REL): InstructionInfo(0xF0, 2, 2, 1, 1),  # branch on equal

    # =========================================================================
    # JUMPS AND SUBROUTINES
    # =========================================================================
    ("JMP", _ABS): InstructionInfo(0x4C, 3, 3, 2),
    ("JSR", _ABS): InstructionInfo(0x20, 3, 6, 2),
    ("RTS", _IMP): InstructionInfo(0x60, 1, 6, 0),  # pulls PC low byte first, returns to PC+1
    ("RTI", _IMP): InstructionInfo(0x40, 1, 6, 0),  # pulls flags then PC
    ("BRK", _IMP): InstructionInfo(0x00, 1, 7, 0),

    # =========================================================================
    # FLAGS
    # =========================================================================
    ("CLC", _IMP): InstructionInfo(0x18, 1, 2, 0),  # clear carry
    ("SEC", _IMP): InstructionInfo(0x38, 1, 2, 0),  # set carry
    ("CLI", _IMP): InstructionInfo(0x58, 1, 2, 0),  # clear interrupt disable
    ("SEI", _IMP): InstructionInfo(0x78, 1, 2, 0),  # set interrupt disable
    ("CLV", _IMP): InstructionInfo(0xB8, 1, 2, 0),  # clear overflow
    ("CLD", _IMP): InstructionInfo(0xD8, 1, 2, 0),  # clear decimal
    ("SED", _IMP): InstructionInfo(0xF8, 1, 2, 0),  # set decimal

    # =========================================================================
    # REGISTER TRANSFERS AND STACK
    # =========================================================================
    ("TAX", _IMP): InstructionInfo(0xAA, 1, 2, 0),
    ("TXA", _IMP): InstructionInfo(0x8A, 1, 2, 0),
    ("TAY", _IMP): InstructionInfo(0xA8, 1, 2, 0),
    ("TYA", _IMP): InstructionInfo(0x98, 1, 2, 0),
    ("TSX", _IMP): InstructionInfo(0xBA, 1, 2, 0),
    ("TXS", _IMP): InstructionInfo(0x9A, 1, 2, 0),
    ("PHA", _IMP): InstructionInfo(0x48, 1, 3, 0),
    ("PLA", _IMP): InstructionInfo(0x68, 1, 4, 0),
    ("PHP", _IMP): InstructionInfo(0x08, 1, 3, 0),
    ("PLP", _IMP): InstructionInfo(0x28, 1, 4, 0),

    ("NOP", _IMP): InstructionInfo(0xEA, 1, 2, 0),
}

NMOS_6502_TABLE = OpcodeTable(NMOS_6502_OPCODES)
