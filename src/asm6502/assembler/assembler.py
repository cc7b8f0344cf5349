"""
6502 Assembler - Main Interface
===============================

This module provides the main Assembler class, which is the primary
interface for assembling 6502 source code. It coordinates the lexer,
pass 1 (address assignment) and pass 2 (code generation) and collects
diagnostics from all of them.

Example Usage
-------------
>>> from asm6502.assembler import Assembler
>>>
>>> asm = Assembler()
>>> program = asm.assemble_string('''
... start:  LDX #$08
... loop:   DEX
...         BNE *-3
...         RTS
... ''')
>>> program.code.hex()
'a208cad0fd60'
>>> asm.get_symbols()
{'start': 0, 'loop': 2}

Run States
----------
Each run walks START -> LEXING -> PASS1 -> PASS2 -> DONE. Every line is
processed even after a failure, so one run reports every defect. If any
diagnostic was recorded the run ends in FAILED and no bytes are produced.

Command-Line Usage
------------------
    $ asm6502 prog.asm -o prog.bin -l prog.lst -s prog.sym
"""

from concurrent.futures import ThreadPoolExecutor
from enum import Enum, auto
from pathlib import Path
from typing import Iterable, Optional, Union
import logging

from asm6502.assembler.codegen import Program, format_listing, format_symbols, generate
from asm6502.assembler.lexer import Line, lex_line, split_source
from asm6502.assembler.symbols import assign_addresses
from asm6502.config import AssemblerConfig
from asm6502.cpu import NMOS_6502_TABLE, OpcodeTable
from asm6502.errors import (
    AssemblerError,
    AssemblyFailedError,
    Diagnostic,
    ErrorCollector,
    TooManyErrors,
)

logger = logging.getLogger(__name__)


class AssemblerState(Enum):
    """Stage of the current assembly run."""
    START = auto()
    LEXING = auto()
    PASS1 = auto()
    PASS2 = auto()
    DONE = auto()
    FAILED = auto()


class Assembler:
    """
    Main 6502 assembler class.

    The opcode table is injected; the bundled NMOS 6502 table is used when
    none is given. Each assemble_* call starts a fresh run with its own
    symbol table and diagnostics, and the accessors report on the last run.

    Attributes:
        opcode_table: The table instructions are looked up in
        config: Base address, error limit, worker count and default filename
    """

    def __init__(self, opcode_table: Optional[OpcodeTable] = None,
                 config: Optional[AssemblerConfig] = None):
        """
        Initialize the assembler.

        Args:
            opcode_table: Instruction encodings (default: NMOS_6502_TABLE)
            config: Run settings (default: AssemblerConfig())

        Raises:
            ValueError: If the configuration is invalid
        """
        self.opcode_table = opcode_table if opcode_table is not None else NMOS_6502_TABLE
        self.config = config if config is not None else AssemblerConfig()
        self.config.validate()

        self._state = AssemblerState.START
        self._errors = ErrorCollector(max_errors=self.config.max_errors)
        self._lines: list[Line] = []
        self._program: Optional[Program] = None

    @property
    def state(self) -> AssemblerState:
        return self._state

    # =========================================================================
    # Assembly Methods
    # =========================================================================

    def assemble_lines(self, lines: Iterable[str], filename: Optional[str] = None) -> Program:
        """
        Assemble an ordered sequence of source lines.

        Args:
            lines: Source lines, first line is line 1
            filename: Name used in diagnostics (default: config.filename)

        Returns:
            The assembled Program

        Raises:
            AssemblyFailedError: If any line failed; carries every diagnostic
        """
        filename = filename or self.config.filename
        self._reset()

        try:
            self._transition(AssemblerState.LEXING)
            self._lines = self._lex_all(list(lines), filename)

            self._transition(AssemblerState.PASS1)
            pass1 = assign_addresses(
                self._lines, self.opcode_table, self.config.base_address, self._errors
            )

            self._transition(AssemblerState.PASS2)
            encoded = generate(pass1, self._errors)
        except TooManyErrors as e:
            self._errors.add_warning(e.message)
            self._fail()

        if self._errors.has_errors():
            self._fail()

        self._program = Program(
            instructions=tuple(encoded),
            symbols=pass1.symbols.to_dict(),
            origin=self.config.base_address,
        )
        self._transition(AssemblerState.DONE)

        logger.debug(
            f"Assembled {filename}: {len(self._lines)} lines, "
            f"{self._program.size} bytes, {len(self._program.symbols)} symbols"
        )
        return self._program

    def assemble_string(self, source: str, filename: Optional[str] = None) -> Program:
        """
        Assemble source code from a string.

        Args:
            source: Assembly source code
            filename: Virtual filename for error messages

        Returns:
            The assembled Program

        Raises:
            AssemblyFailedError: If assembly fails
        """
        return self.assemble_lines(split_source(source), filename)

    def assemble_file(self, filepath: Union[str, Path]) -> Program:
        """
        Assemble source code from a file.

        Raises:
            AssemblyFailedError: If assembly fails
            FileNotFoundError: If source file not found
        """
        filepath = Path(filepath)
        logger.debug(f"Assembling {filepath}")
        source = filepath.read_text(encoding="utf-8")
        return self.assemble_string(source, str(filepath))

    # =========================================================================
    # Run Stages
    # =========================================================================

    def _reset(self) -> None:
        self._state = AssemblerState.START
        self._errors = ErrorCollector(max_errors=self.config.max_errors)
        self._lines = []
        self._program = None

    def _transition(self, state: AssemblerState) -> None:
        logger.debug(f"{self._state.name} -> {state.name}")
        self._state = state

    def _fail(self) -> None:
        """Move to FAILED and raise with everything collected so far."""
        self._transition(AssemblerState.FAILED)
        raise AssemblyFailedError(self._errors.diagnostics(), self._errors.report())

    def _lex_all(self, texts: list[str], filename: str) -> list[Line]:
        """
        Lex every line, recording failures.

        Lines are independent, so with more than one worker they are lexed
        on a thread pool; map() keeps the results in source order. Lines
        that fail to lex are left out of the passes.
        """
        numbered = [(number, text, filename) for number, text in enumerate(texts, start=1)]

        if self.config.workers > 1 and len(numbered) > 1:
            with ThreadPoolExecutor(max_workers=self.config.workers) as pool:
                results = list(pool.map(_lex_or_error, numbered))
        else:
            results = [_lex_or_error(item) for item in numbered]

        lines = []
        for result in results:
            if isinstance(result, AssemblerError):
                self._errors.add(result)
            else:
                lines.append(result)

        logger.debug(f"Lexed {len(texts)} lines, {len(texts) - len(lines)} failed")
        return lines

    # =========================================================================
    # Output Methods
    # =========================================================================

    def has_errors(self) -> bool:
        return self._errors.has_errors()

    def get_diagnostics(self) -> list[Diagnostic]:
        """Return the last run's diagnostics, ordered by line."""
        return self._errors.diagnostics()

    def get_error_report(self) -> str:
        """
        Get formatted error report.

        Returns:
            Error report string
        """
        return self._errors.report()

    def get_program(self) -> Optional[Program]:
        """Return the last successfully assembled program, if any."""
        return self._program

    def get_code(self) -> bytes:
        """
        Get the generated machine code.

        Returns:
            Code bytes (empty when the last run failed)
        """
        return self._program.code if self._program else b""

    def get_symbols(self) -> dict[str, int]:
        """
        Get the symbol table.

        Returns:
            Dictionary mapping label names to addresses
        """
        return dict(self._program.symbols) if self._program else {}

    def get_listing(self) -> str:
        """
        Get the assembly listing as a string.

        Raises:
            AssemblerError: If nothing has been assembled successfully
        """
        return format_listing(self._require_program(), self._lines)

    def write_binary(self, filepath: Union[str, Path]) -> None:
        """
        Write raw binary output (machine code only, no header).

        Args:
            filepath: Output file path
        """
        code = self._require_program().code
        Path(filepath).write_bytes(code)
        logger.debug(f"Wrote {len(code)} bytes to {filepath}")

    def write_listing(self, filepath: Union[str, Path]) -> None:
        """
        Write assembly listing file.

        The listing file shows:
        - Addresses
        - Generated bytes
        - Source lines
        - Symbol table
        """
        Path(filepath).write_text(self.get_listing() + "\n", encoding="utf-8")
        logger.debug(f"Wrote listing to {filepath}")

    def write_symbols(self, filepath: Union[str, Path]) -> None:
        """Write symbol table file."""
        Path(filepath).write_text(format_symbols(self._require_program()), encoding="utf-8")
        logger.debug(f"Wrote symbols to {filepath}")

    def _require_program(self) -> Program:
        if self._program is None:
            raise AssemblerError(
                "no assembled program available",
                hint="assemble successfully before requesting output",
            )
        return self._program


def _lex_or_error(item: tuple[int, str, str]) -> Union[Line, AssemblerError]:
    """Lex one numbered line, returning the error instead of raising it."""
    number, text, filename = item
    try:
        return lex_line(text, number, filename)
    except AssemblerError as e:
        return e


# =============================================================================
# Convenience Functions
# =============================================================================

def assemble(source: str, filename: str = "<input>",
             opcode_table: Optional[OpcodeTable] = None,
             base_address: int = 0) -> Program:
    """
    Convenience function to assemble source code.

    Args:
        source: Assembly source code
        filename: Virtual filename for errors
        opcode_table: Instruction encodings (default: NMOS_6502_TABLE)
        base_address: Address of the first instruction

    Returns:
        The assembled Program

    Raises:
        AssemblyFailedError: If assembly fails
    """
    asm = Assembler(opcode_table, AssemblerConfig(base_address=base_address))
    return asm.assemble_string(source, filename)


def assemble_file(filepath: Union[str, Path],
                  opcode_table: Optional[OpcodeTable] = None,
                  base_address: int = 0) -> Program:
    """
    Convenience function to assemble a file.

    Raises:
        AssemblyFailedError: If assembly fails
        FileNotFoundError: If source file not found
    """
    asm = Assembler(opcode_table, AssemblerConfig(base_address=base_address))
    return asm.assemble_file(filepath)
