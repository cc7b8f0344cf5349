"""
asm6502 Command-Line Interface
==============================

This package provides the `asm6502` command, a thin driver around the
assembler that reads a source file, writes the raw binary and optional
listing and symbol files, and maps failures to exit codes.
"""

__all__ = ["asm"]
