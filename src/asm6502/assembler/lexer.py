"""
6502 Assembly Line Lexer
========================

This module splits one line of assembly source into its structural parts:
an optional label, an optional mnemonic with its operand, and an optional
comment, in that order.

Line Grammar
------------
    [label:] [MNE [operand]] [; comment]

- **label**: ASCII letters and digits, terminated by a colon
- **mnemonic**: exactly three letters, case-insensitive
- **operand**: one run of non-blank characters, separated from the
  mnemonic by at least one space or tab
- **comment**: everything after a semicolon

Blank lines and comment-only lines are valid and carry neither label nor
instruction. A label may stand alone on its line.

The operand text is classified as part of lexing, so every Line holds a
fully typed Instruction. Lexing a line is pure and independent of every
other line.

Example
-------
>>> from asm6502.assembler.lexer import lex_line
>>> line = lex_line("loop: LDA $10,X ; fetch", 4)
>>> line.label, line.instruction.mnemonic, line.comment
('loop', 'LDA', 'fetch')
"""

from dataclasses import dataclass
from typing import Optional
import string

from asm6502.assembler.operands import Operand, IMPLICIT_OPERAND, classify_operand
from asm6502.errors import AssemblerError, AssemblySyntaxError, SourceLocation


# =============================================================================
# Line Records
# =============================================================================

@dataclass(frozen=True)
class Instruction:
    """
    A mnemonic and its classified operand.

    Attributes:
        mnemonic: Three-letter mnemonic, upper case
        operand: The classified operand (implicit when none was written)
    """
    mnemonic: str
    operand: Operand = IMPLICIT_OPERAND


@dataclass(frozen=True)
class Line:
    """
    One lexed source line.

    Attributes:
        number: Line number in source (1-indexed)
        text: The raw source text, for diagnostics and listings
        label: Label defined on this line, if any
        instruction: Instruction on this line, if any
        comment: Comment text without the leading semicolon, if any
        filename: Name of the source file
    """
    number: int
    text: str
    label: Optional[str] = None
    instruction: Optional[Instruction] = None
    comment: Optional[str] = None
    filename: str = "<input>"

    @property
    def location(self) -> SourceLocation:
        return SourceLocation(self.filename, self.number)

    @property
    def is_empty(self) -> bool:
        """True for blank and comment-only lines."""
        return self.label is None and self.instruction is None


# =============================================================================
# Lexer Implementation
# =============================================================================

class LineLexer:
    """
    Lexes a single line of 6502 assembly.

    Usage:
        line = LineLexer("start: NOP", 1, "prog.asm").lex()

    Attributes:
        text: The line being lexed (trailing newline removed)
        number: Line number for error reporting
        filename: Name of the source file
    """

    LABEL_CHARS = string.ascii_letters + string.digits

    WHITESPACE = " \t"

    COMMENT_START = ";"

    def __init__(self, text: str, number: int = 1, filename: str = "<input>"):
        self.text = text.rstrip("\r\n")
        self.number = number
        self.filename = filename
        self._pos = 0

    def lex(self) -> Line:
        """
        Split the line into label, instruction and comment.

        Returns:
            The lexed Line

        Raises:
            AssemblySyntaxError: For a malformed label or mnemonic, or
                                 characters left after the operand
            OperandFormatError: If the operand matches no addressing mode
            RangeError: If a relative offset is out of range
        """
        label = None
        instruction = None

        self._skip_whitespace()

        if not self._at_statement_end():
            word_start = self._pos
            word = self._scan_word(stop=self.WHITESPACE + self.COMMENT_START + ":")

            if self._peek() == ":":
                label = self._check_label(word, word_start)
                self._advance()  # consume :
                self._skip_whitespace()
            else:
                self._pos = word_start

        if not self._at_statement_end():
            instruction = self._scan_instruction()

        self._skip_whitespace()
        comment = self._scan_comment()

        return Line(
            number=self.number,
            text=self.text,
            label=label,
            instruction=instruction,
            comment=comment,
            filename=self.filename,
        )

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.text)

    def _at_statement_end(self) -> bool:
        """True at end of line or at the start of a comment."""
        return self._at_end() or self._peek() == self.COMMENT_START

    def _peek(self) -> str:
        """Return the current character, or empty string past the end."""
        if self._at_end():
            return ""
        return self.text[self._pos]

    def _advance(self) -> str:
        char = self._peek()
        self._pos += 1
        return char

    def _skip_whitespace(self) -> bool:
        """Skip spaces and tabs. Returns True if any were skipped."""
        start = self._pos
        # '' in WHITESPACE is True, so check for end first
        while not self._at_end() and self._peek() in self.WHITESPACE:
            self._advance()
        return self._pos > start

    def _scan_word(self, stop: str) -> str:
        """Consume characters up to end of line or any character in stop."""
        start = self._pos
        while not self._at_end() and self._peek() not in stop:
            self._advance()
        return self.text[start:self._pos]

    def _location(self, pos: int) -> SourceLocation:
        return SourceLocation(self.filename, self.number, pos + 1)

    def _error(self, message: str, pos: int, hint: Optional[str] = None) -> AssemblySyntaxError:
        """Create a syntax error pointing at pos."""
        return AssemblySyntaxError(
            message, self._location(pos), hint=hint, source_line=self.text
        )

    # =========================================================================
    # Element Scanning
    # =========================================================================

    def _check_label(self, name: str, start: int) -> str:
        if not name:
            raise self._error("empty label before ':'", start)
        if any(char not in self.LABEL_CHARS for char in name):
            raise self._error(
                f"malformed label '{name}'",
                start,
                hint="labels may only contain letters and digits",
            )
        return name

    def _scan_instruction(self) -> Instruction:
        mnemonic_start = self._pos
        mnemonic = self._scan_word(stop=self.WHITESPACE + self.COMMENT_START)

        if len(mnemonic) != 3 or any(char not in string.ascii_letters for char in mnemonic):
            raise self._error(
                f"invalid mnemonic '{mnemonic}'",
                mnemonic_start,
                hint="mnemonics are exactly three letters, e.g. LDA",
            )

        operand = IMPLICIT_OPERAND
        self._skip_whitespace()

        if not self._at_statement_end():
            operand_start = self._pos
            operand_text = self._scan_word(stop=self.WHITESPACE + self.COMMENT_START)
            try:
                operand = classify_operand(operand_text)
            except AssemblerError as e:
                raise e.with_context(self._location(operand_start), self.text)

            self._skip_whitespace()
            if not self._at_statement_end():
                raise self._error(
                    f"unexpected text '{self.text[self._pos:].rstrip()}' after operand",
                    self._pos,
                    hint="comments must start with ';'",
                )

        return Instruction(mnemonic=mnemonic.upper(), operand=operand)

    def _scan_comment(self) -> Optional[str]:
        if self._at_end():
            return None
        if self._peek() != self.COMMENT_START:
            raise self._error(f"unexpected text '{self.text[self._pos:]}'", self._pos)
        self._advance()  # consume ;
        return self.text[self._pos:].strip()


# =============================================================================
# Convenience Functions
# =============================================================================

def lex_line(text: str, number: int = 1, filename: str = "<input>") -> Line:
    """Lex one line of source. See LineLexer.lex() for errors raised."""
    return LineLexer(text, number, filename).lex()


def split_source(source: str) -> list[str]:
    """
    Split source text into lines, without line terminators.

    Only LF and CRLF end a line; form feeds and other control characters
    stay in the line text. A final newline does not add an empty line.
    """
    lines = [line.rstrip("\r") for line in source.split("\n")]
    if lines and lines[-1] == "":
        lines.pop()
    return lines
