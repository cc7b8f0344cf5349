"""
asm6502 - Assembler Configuration
=================================

Settings for an assembly run. Configuration can come from:
- Default values (defined here)
- Environment variables
- Command-line options (applied by the CLI on top of the above)

Environment variables (all optional):
    ASM6502_BASE_ADDRESS: Address of the first instruction ("512", "0x0200", "$0200")
    ASM6502_MAX_ERRORS: Diagnostics to collect before stopping
    ASM6502_WORKERS: Threads used to lex lines (1 disables the pool)
"""

from dataclasses import dataclass
import os


def parse_address(text: str) -> int:
    """
    Parse an address written as decimal, 0x-prefixed hex or $-prefixed hex.

    Raises:
        ValueError: If the text is not a number
    """
    text = text.strip()
    if text.startswith("$"):
        return int(text[1:], 16)
    if text.lower().startswith("0x"):
        return int(text[2:], 16)
    return int(text)


@dataclass
class AssemblerConfig:
    """
    Configuration for an assembly run.

    Attributes:
        base_address: Address assigned to the first instruction (default: 0)
        max_errors: Diagnostics to collect before giving up (default: 100)
        workers: Lexing threads; 1 lexes on the calling thread (default: 1)
        filename: Name used in diagnostics for string input (default: "<input>")
    """

    # ═══════════════════════════════════════════════════════════════════════════
    # LAYOUT
    # ═══════════════════════════════════════════════════════════════════════════

    base_address: int = 0

    # ═══════════════════════════════════════════════════════════════════════════
    # DIAGNOSTICS
    # ═══════════════════════════════════════════════════════════════════════════

    max_errors: int = 100
    filename: str = "<input>"

    # ═══════════════════════════════════════════════════════════════════════════
    # CONCURRENCY
    # ═══════════════════════════════════════════════════════════════════════════

    workers: int = 1

    # ═══════════════════════════════════════════════════════════════════════════
    # FACTORY METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    @classmethod
    def from_env(cls) -> "AssemblerConfig":
        """
        Create AssemblerConfig from environment variables.

        Invalid values are ignored and the default is kept.

        Returns:
            AssemblerConfig with values from environment variables
        """
        config = cls()

        if base := os.environ.get("ASM6502_BASE_ADDRESS"):
            try:
                config.base_address = parse_address(base)
            except ValueError:
                pass  # Ignore invalid values

        if max_errors := os.environ.get("ASM6502_MAX_ERRORS"):
            try:
                config.max_errors = int(max_errors)
            except ValueError:
                pass

        if workers := os.environ.get("ASM6502_WORKERS"):
            try:
                config.workers = int(workers)
            except ValueError:
                pass

        return config

    # ═══════════════════════════════════════════════════════════════════════════
    # HELPER METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    def validate(self) -> None:
        """
        Check that every setting is usable.

        Raises:
            ValueError: If a setting is out of range
        """
        if not 0 <= self.base_address <= 0xFFFF:
            raise ValueError(f"base address ${self.base_address:X} is outside $0000-$FFFF")
        if self.max_errors < 1:
            raise ValueError(f"max_errors must be at least 1, got {self.max_errors}")
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")
