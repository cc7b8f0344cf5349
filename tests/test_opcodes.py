# =============================================================================
# test_opcodes.py - Opcode Table Tests
# =============================================================================
# Tests for the addressing mode enum, the OpcodeTable lookup service,
# the bundled NMOS 6502 table and JSON table loading.
# =============================================================================

import json

import pytest

from asm6502.cpu import (
    AddressingMode,
    InstructionInfo,
    OpcodeTable,
    NMOS_6502_OPCODES,
    NMOS_6502_TABLE,
    make_info,
    load_opcode_table,
)
from asm6502.errors import OpcodeTableError


# =============================================================================
# Addressing Mode Tests
# =============================================================================

class TestAddressingMode:
    """AddressingMode helpers."""

    def test_thirteen_modes(self):
        assert len(AddressingMode) == 13

    @pytest.mark.parametrize("mode,width", [
        (AddressingMode.IMPLICIT, 0),
        (AddressingMode.ACCUMULATOR, 0),
        (AddressingMode.IMMEDIATE, 1),
        (AddressingMode.ZEROPAGE_Y, 1),
        (AddressingMode.RELATIVE, 1),
        (AddressingMode.INDIRECT, 1),
        (AddressingMode.INDIRECT_Y, 1),
        (AddressingMode.ABSOLUTE, 2),
        (AddressingMode.ABSOLUTE_X, 2),
    ])
    def test_operand_width(self, mode, width):
        assert mode.operand_width == width

    def test_str_is_human_readable(self):
        assert str(AddressingMode.ZEROPAGE_X) == "zeropage,X"
        assert str(AddressingMode.INDIRECT_Y) == "(indirect),Y"

    def test_from_key(self):
        assert AddressingMode.from_key("zeropage_x") is AddressingMode.ZEROPAGE_X
        assert AddressingMode.from_key(AddressingMode.ABSOLUTE.key) is AddressingMode.ABSOLUTE

    def test_from_key_unknown(self):
        with pytest.raises(ValueError):
            AddressingMode.from_key("extended")


# =============================================================================
# OpcodeTable Tests
# =============================================================================

class TestOpcodeTable:
    """Lookup behaviour of an injected table."""

    def test_lookup(self, small_table):
        info = small_table.lookup("LDA", AddressingMode.IMMEDIATE)
        assert info.opcode == 0xA9
        assert info.size == 2

    def test_lookup_case_insensitive(self, small_table):
        assert small_table.lookup("lda", AddressingMode.ZEROPAGE).opcode == 0xA5

    def test_lookup_missing_mode(self, small_table):
        assert small_table.lookup("LDA", AddressingMode.ZEROPAGE_X) is None

    def test_has_mnemonic(self, small_table):
        assert small_table.has_mnemonic("dex")
        assert not small_table.has_mnemonic("XYZ")

    def test_modes_for(self, small_table):
        assert small_table.modes_for("LDA") == [
            AddressingMode.IMMEDIATE,
            AddressingMode.ZEROPAGE,
            AddressingMode.ABSOLUTE,
        ]
        assert small_table.modes_for("XYZ") == []

    def test_container_protocol(self, small_table):
        assert ("JMP", AddressingMode.INDIRECT) in small_table
        assert ("JMP", AddressingMode.ABSOLUTE) not in small_table
        assert len(small_table) == 7
        assert small_table.mnemonics == frozenset({"LDA", "DEX", "BNE", "ASL", "JMP"})

    def test_rejects_wrong_operand_size(self):
        """An entry whose operand size disagrees with its mode is refused."""
        with pytest.raises(OpcodeTableError):
            OpcodeTable({("LDA", AddressingMode.ABSOLUTE): InstructionInfo(0xAD, 2, 4, 1)})

    def test_rejects_wrong_total_size(self):
        with pytest.raises(OpcodeTableError):
            OpcodeTable({("LDA", AddressingMode.IMMEDIATE): InstructionInfo(0xA9, 3, 2, 1)})

    def test_rejects_multi_byte_opcode(self):
        with pytest.raises(OpcodeTableError):
            OpcodeTable({("LDA", AddressingMode.IMMEDIATE): InstructionInfo(0x1A9, 2, 2, 1)})

    def test_make_info_sizes(self):
        info = make_info(0x4C, AddressingMode.ABSOLUTE, 3)
        assert (info.opcode, info.size, info.cycles, info.operand_size) == (0x4C, 3, 3, 2)


# =============================================================================
# Bundled NMOS 6502 Table Tests
# =============================================================================

class TestNmos6502Table:
    """The bundled default table."""

    def test_entry_count(self):
        """All 151 documented opcodes except the two-byte JMP indirect."""
        assert len(NMOS_6502_TABLE) == 150

    def test_no_duplicate_opcodes(self):
        """Every opcode byte identifies exactly one (mnemonic, mode)."""
        opcodes = [info.opcode for info in NMOS_6502_OPCODES.values()]
        assert len(opcodes) == len(set(opcodes))

    def test_fifty_six_mnemonics(self):
        assert len(NMOS_6502_TABLE.mnemonics) == 56

    @pytest.mark.parametrize("mnemonic,mode,opcode", [
        ("LDA", AddressingMode.IMMEDIATE, 0xA9),
        ("LDA", AddressingMode.ABSOLUTE, 0xAD),
        ("STA", AddressingMode.INDIRECT_Y, 0x91),
        ("LDX", AddressingMode.ZEROPAGE_Y, 0xB6),
        ("ASL", AddressingMode.ACCUMULATOR, 0x0A),
        ("BNE", AddressingMode.RELATIVE, 0xD0),
        ("JMP", AddressingMode.ABSOLUTE, 0x4C),
        ("DEX", AddressingMode.IMPLICIT, 0xCA),
        ("BRK", AddressingMode.IMPLICIT, 0x00),
    ])
    def test_known_opcodes(self, mnemonic, mode, opcode):
        assert NMOS_6502_TABLE.lookup(mnemonic, mode).opcode == opcode

    def test_no_immediate_store(self):
        assert NMOS_6502_TABLE.lookup("STA", AddressingMode.IMMEDIATE) is None

    def test_no_one_byte_indirect(self):
        """JMP ($hhhh) takes a two-byte pointer, so no INDIRECT entry exists."""
        assert NMOS_6502_TABLE.lookup("JMP", AddressingMode.INDIRECT) is None

    def test_page_penalty(self):
        assert NMOS_6502_TABLE.lookup("LDA", AddressingMode.ABSOLUTE_X).page_penalty == 1
        assert NMOS_6502_TABLE.lookup("STA", AddressingMode.ABSOLUTE_X).page_penalty == 0


# =============================================================================
# JSON Table Loading Tests
# =============================================================================

class TestLoadOpcodeTable:
    """Reading a table from a JSON file."""

    def test_load(self, tmp_path):
        path = tmp_path / "table.json"
        path.write_text(json.dumps({
            "LDA": {"immediate": "A9", "zeropage": "$A5", "absolute": "0xAD"},
            "BNE": {"relative": {"opcode": "D0", "cycles": 2, "page_penalty": 1}},
            "NOP": {"implicit": 234},
        }))
        table = load_opcode_table(path)
        assert len(table) == 5
        assert table.lookup("LDA", AddressingMode.ZEROPAGE).opcode == 0xA5
        assert table.lookup("LDA", AddressingMode.ABSOLUTE).size == 3
        assert table.lookup("BNE", AddressingMode.RELATIVE).page_penalty == 1
        assert table.lookup("NOP", AddressingMode.IMPLICIT).opcode == 0xEA

    def test_missing_file(self, tmp_path):
        with pytest.raises(OpcodeTableError):
            load_opcode_table(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(OpcodeTableError):
            load_opcode_table(path)

    def test_unknown_mode(self, tmp_path):
        path = tmp_path / "table.json"
        path.write_text(json.dumps({"LDA": {"extended": "B6"}}))
        with pytest.raises(OpcodeTableError):
            load_opcode_table(path)

    def test_bad_opcode(self, tmp_path):
        path = tmp_path / "table.json"
        path.write_text(json.dumps({"LDA": {"immediate": "ZZ"}}))
        with pytest.raises(OpcodeTableError):
            load_opcode_table(path)

    def test_opcode_too_large(self, tmp_path):
        path = tmp_path / "table.json"
        path.write_text(json.dumps({"LDA": {"immediate": "1A9"}}))
        with pytest.raises(OpcodeTableError):
            load_opcode_table(path)

    def test_top_level_must_be_object(self, tmp_path):
        path = tmp_path / "table.json"
        path.write_text("[]")
        with pytest.raises(OpcodeTableError):
            load_opcode_table(path)

    def test_shared_opcode_warns(self, tmp_path, caplog):
        """Two entries with the same opcode byte load, with a warning."""
        path = tmp_path / "table.json"
        path.write_text(json.dumps({"NOP": {"implicit": "EA"}, "XNO": {"implicit": "EA"}}))
        with caplog.at_level("WARNING", logger="asm6502.cpu.nmos6502"):
            table = load_opcode_table(path)
        assert len(table) == 2
        assert "opcode $EA is used by both" in caplog.text
