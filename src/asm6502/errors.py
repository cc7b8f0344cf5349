"""
asm6502 Error Hierarchy
=======================

This module defines the exception hierarchy for the assembler. All
exceptions inherit from Asm6502Error, so callers can catch every
assembler-related failure with a single except clause.

Exception Hierarchy
-------------------
Asm6502Error (base)
├── AssemblerError (per-line assembly errors)
│   ├── AssemblySyntaxError - malformed line structure
│   ├── UnknownMnemonicError - mnemonic absent from the opcode table
│   ├── UnsupportedAddressingModeError - mnemonic lacks the operand's mode
│   ├── OperandFormatError - operand text matches no addressing mode
│   ├── RangeError - numeric value outside its field width
│   ├── DuplicateLabelError - label defined twice
│   ├── AssemblyFailedError - aggregate of every diagnostic in a run
│   └── TooManyErrors - collection limit reached
└── OpcodeTableError - invalid opcode table data

Each per-line error knows its ErrorKind and converts to a Diagnostic
(line, kind, message), which is what a Program carries.

Error messages follow this format:
    filename:line:column: error: description
        source_line_text
        ^
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class Asm6502Error(Exception):
    """
    Base exception for all asm6502 errors.

        try:
            assembler.assemble_file("program.asm")
        except Asm6502Error as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    A location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed, 0 when unknown)
    """
    filename: str
    line: int
    column: int = 0

    def __str__(self) -> str:
        if self.column > 0:
            return f"{self.filename}:{self.line}:{self.column}"
        return f"{self.filename}:{self.line}"


class ErrorKind(Enum):
    """Classification of a per-line assembly error."""
    SYNTAX = "syntax"
    UNKNOWN_MNEMONIC = "unknown-mnemonic"
    UNSUPPORTED_ADDRESSING_MODE = "unsupported-addressing-mode"
    OPERAND_FORMAT = "operand-format"
    RANGE = "range"
    DUPLICATE_LABEL = "duplicate-label"
    INTERNAL = "internal"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Diagnostic:
    """
    One recorded assembly failure.

    Attributes:
        line: Source line number (1-indexed, 0 when not tied to a line)
        kind: What went wrong
        message: Human-readable description
    """
    line: int
    kind: ErrorKind
    message: str

    def __str__(self) -> str:
        return f"line {self.line}: {self.kind}: {self.message}"


# =============================================================================
# Assembler Exceptions
# =============================================================================

class AssemblerError(Asm6502Error):
    """
    Base exception for all per-line assembler errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The actual source text at the error location (optional)
    """

    kind = ErrorKind.INTERNAL

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            prog.asm:3:5: error: unknown mnemonic 'XYZ'
                XYZ $10
                ^
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)

    def with_context(
        self,
        location: SourceLocation,
        source_line: Optional[str] = None,
    ) -> "AssemblerError":
        """
        Attach a location to an error raised by location-unaware code.

        The operand classifier and the encoder work on bare strings and
        values; the driver fills in where the failure happened.
        """
        if self.location is None:
            self.location = location
        if self.source_line is None:
            self.source_line = source_line
        self.args = (self._format_message(),)
        return self

    def to_diagnostic(self) -> Diagnostic:
        """Convert to the (line, kind, message) record a Program carries."""
        line = self.location.line if self.location else 0
        return Diagnostic(line=line, kind=self.kind, message=self.message)


class AssemblySyntaxError(AssemblerError):
    """
    Malformed line structure.

    Examples:
        - Label name containing non-alphanumeric characters
        - Mnemonic that is not exactly three letters
        - Trailing text after the operand
    """
    kind = ErrorKind.SYNTAX


class UnknownMnemonicError(AssemblerError):
    """Mnemonic not present in the opcode table."""

    kind = ErrorKind.UNKNOWN_MNEMONIC

    def __init__(
        self,
        mnemonic: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.mnemonic = mnemonic
        super().__init__(
            f"unknown mnemonic '{mnemonic}'",
            location=location,
            source_line=source_line,
        )


class UnsupportedAddressingModeError(AssemblerError):
    """
    Mnemonic does not support the operand's addressing mode.

    Example:
        STA #$41  ; STA has no immediate form
    """

    kind = ErrorKind.UNSUPPORTED_ADDRESSING_MODE

    def __init__(
        self,
        mnemonic: str,
        mode: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        valid_modes: Optional[list[str]] = None,
    ):
        self.mnemonic = mnemonic
        self.mode = mode
        self.valid_modes = valid_modes or []

        hint = None
        if self.valid_modes:
            modes_str = ", ".join(self.valid_modes)
            hint = f"{mnemonic} supports: {modes_str}"

        super().__init__(
            f"'{mnemonic}' does not support {mode} addressing mode",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class OperandFormatError(AssemblerError):
    """
    Operand text matches no addressing mode, or holds a malformed literal.

    Examples:
        LDA $123    ; three hex digits is neither zeropage nor absolute
        LDA #$GG    ; not hexadecimal
    """
    kind = ErrorKind.OPERAND_FORMAT


class RangeError(AssemblerError):
    """
    Numeric value outside its field width.

    Raised for relative offsets outside -128..127, for payloads that do
    not fit their addressing mode, and for programs running past $FFFF.
    """

    kind = ErrorKind.RANGE

    def __init__(
        self,
        message: str,
        value: Optional[int] = None,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.value = value
        super().__init__(message, location=location, hint=hint, source_line=source_line)


class DuplicateLabelError(AssemblerError):
    """
    Label defined more than once.

    Includes the location of the first definition when available.
    """

    kind = ErrorKind.DUPLICATE_LABEL

    def __init__(
        self,
        label: str,
        location: Optional[SourceLocation] = None,
        original_location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.label = label
        self.original_location = original_location

        hint = None
        if original_location:
            hint = f"'{label}' was first defined at {original_location}"

        super().__init__(
            f"duplicate label '{label}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class AssemblyFailedError(AssemblerError):
    """
    Raised by the driver when a run ends with diagnostics.

    Output is all-or-nothing: no bytes are produced when this is raised.

    Attributes:
        diagnostics: Every failure recorded during the run, in line order
        report: Formatted report of the underlying errors
    """

    def __init__(self, diagnostics: list[Diagnostic], report: str = ""):
        self.diagnostics = list(diagnostics)
        self.report = report
        count = len(self.diagnostics)
        word = "error" if count == 1 else "errors"
        message = f"assembly failed with {count} {word}"
        if report:
            message = f"{message}:\n\n{report}"
        super().__init__(message)


class TooManyErrors(AssemblerError):
    """Raised when the error collector reaches its limit."""

    def __init__(self, message: str = "Too many errors"):
        super().__init__(message)


# =============================================================================
# Opcode Table Exceptions
# =============================================================================

class OpcodeTableError(Asm6502Error):
    """
    Invalid opcode table data.

    Raised when loading a table file that is not valid JSON, names an
    unknown addressing mode, or holds an opcode outside 0..255.
    """
    pass


# =============================================================================
# Error Collection for Multiple Error Reporting
# =============================================================================

class ErrorCollector:
    """
    Collects multiple errors for batch reporting.

    The assembler records each failing line here and keeps going, so a
    single run reports every defect.

    Example:
        collector = ErrorCollector(max_errors=100)
        try:
            collector.add(UnknownMnemonicError("XYZ", location))
        except TooManyErrors:
            pass

        if collector.has_errors():
            print(collector.report())
    """

    def __init__(self, max_errors: int = 100):
        """
        Initialize the error collector.

        Args:
            max_errors: Maximum errors to collect before raising TooManyErrors
        """
        self.errors: list[AssemblerError] = []
        self.warnings: list[str] = []
        self.max_errors = max_errors

    def add(self, error: AssemblerError) -> None:
        """
        Add an error to the collection.

        Raises:
            TooManyErrors: If max_errors has been reached
        """
        self.errors.append(error)
        if len(self.errors) >= self.max_errors:
            raise TooManyErrors(f"Too many errors ({self.max_errors}), stopping")

    def add_warning(self, message: str) -> None:
        """Add a warning message."""
        self.warnings.append(message)

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def error_count(self) -> int:
        return len(self.errors)

    def diagnostics(self) -> list[Diagnostic]:
        """Return the collected errors as diagnostics, ordered by line."""
        return sorted(
            (error.to_diagnostic() for error in self.errors),
            key=lambda d: d.line,
        )

    def report(self) -> str:
        """
        Format all errors and warnings for display.

        Returns:
            Formatted string with all errors, warnings and a summary line
        """
        lines = []

        ordered = sorted(
            self.errors,
            key=lambda e: e.location.line if e.location else 0,
        )
        for error in ordered:
            lines.append(str(error))
            lines.append("")

        if self.warnings:
            lines.append("Warnings:")
            for warning in self.warnings:
                lines.append(f"  {warning}")

        error_word = "error" if len(self.errors) == 1 else "errors"
        warning_word = "warning" if len(self.warnings) == 1 else "warnings"
        lines.append(
            f"{len(self.errors)} {error_word}, {len(self.warnings)} {warning_word}"
        )

        return "\n".join(lines)

    def clear(self) -> None:
        """Clear all collected errors and warnings."""
        self.errors.clear()
        self.warnings.clear()
