"""
Hack Assembler - Main Interface
===============================

This module provides the main Assembler class, the primary interface for
assembling Hack source code. It runs the two-pass resolver and keeps the
result around for the output writers.

Example Usage
-------------
>>> from hack_sdk.assembler import Assembler
>>>
>>> asm = Assembler()
>>> asm.assemble_string('''
...     @2
...     D=A
...     @3
...     D=D+A
...     @0
...     M=D
... ''')
['0000000000000010', '1110110000010000', ...]
>>>
>>> asm.write_hack("Add.hack")

Command-Line Usage
------------------
    $ hackasm Add.asm -o Add.hack -s Add.sym -l Add.lst
"""

import logging
from pathlib import Path
from typing import Optional

from hack_sdk.config import AssemblerConfig
from hack_sdk.errors import AddressOutOfRangeError
from hack_sdk.assembler.parser import Instruction, Label
from hack_sdk.assembler.resolver import Resolver
from hack_sdk.assembler.symbols import SymbolTable
from hack_sdk.assembler.tables import MAX_ADDRESS

logger = logging.getLogger(__name__)


class Assembler:
    """
    Main Hack assembler class.

    Each call to `assemble_string()` or `assemble_file()` is an
    independent run with a fresh symbol table; the results of the most
    recent run are available through the getters and writers.

    Attributes:
        config: Assembly settings (variable base, redefinition policy)
    """

    def __init__(self, config: AssemblerConfig | None = None,
                 defines: dict[str, int] | None = None):
        """
        Initialize the assembler.

        Args:
            config: Assembly settings; defaults to AssemblerConfig()
            defines: Dictionary of pre-defined symbols
        """
        self.config = config or AssemblerConfig()
        self._defines: dict[str, int] = {}
        self._source = ""
        self._source_file: Optional[Path] = None
        self._instructions: list[Instruction] = []
        self._code: list[str] = []
        self._symbols = SymbolTable()

        if defines:
            for name, value in defines.items():
                self.define_symbol(name, value)

    # =========================================================================
    # Configuration
    # =========================================================================

    def define_symbol(self, name: str, value: int) -> None:
        """
        Pre-define a symbol for every following run.

        Args:
            name: Symbol name
            value: Symbol address (0..32767)
        """
        if not 0 <= value <= MAX_ADDRESS:
            raise AddressOutOfRangeError(value, symbol=name)
        self._defines[name] = value

    # =========================================================================
    # Assembly Methods
    # =========================================================================

    def assemble(self, source: str, filename: str = "<input>",
                 output_path: str | Path | None = None) -> list[str]:
        """
        Assemble source code (alias for assemble_string with output option).

        Args:
            source: Hack assembly source code
            filename: Virtual filename for error messages
            output_path: Optional .hack file to write

        Returns:
            The binary words
        """
        code = self.assemble_string(source, filename)
        if output_path:
            self.write_hack(output_path)
        return code

    def assemble_string(self, source: str, filename: str = "<input>") -> list[str]:
        """
        Assemble source code from a string.

        Args:
            source: Hack assembly source code
            filename: Virtual filename for error messages

        Returns:
            One 16-character binary string per instruction

        Raises:
            AssemblerError: If assembly fails
        """
        symbols = SymbolTable()
        for name, value in self._defines.items():
            symbols.define(name, value)

        resolver = Resolver(
            symbols,
            variable_base=self.config.variable_base,
            allow_redefinition=self.config.allow_redefinition,
        )

        logger.debug(f"Assembling {filename}")
        self._source = source
        self._code = resolver.run(source, filename)
        self._instructions = resolver.instructions
        self._symbols = symbols

        logger.debug(f"Generated {len(self._code)} words from {filename}")
        return list(self._code)

    def assemble_file(self, filepath: str | Path) -> list[str]:
        """
        Assemble source code from a file.

        Args:
            filepath: Path to assembly source file

        Returns:
            The binary words

        Raises:
            AssemblerError: If assembly fails
            FileNotFoundError: If source file not found
        """
        filepath = Path(filepath)
        self._source_file = filepath

        source = filepath.read_text()
        return self.assemble_string(source, str(filepath))

    # =========================================================================
    # Output Methods
    # =========================================================================

    def get_code(self) -> list[str]:
        """Return the binary words of the last run."""
        return list(self._code)

    def get_instructions(self) -> list[Instruction]:
        """Return the parsed statements of the last run, labels included."""
        return list(self._instructions)

    def get_symbols(self) -> dict[str, int]:
        """
        Get the symbol table.

        Returns:
            Dictionary mapping symbol names to addresses
        """
        return self._symbols.resolved()

    def get_listing(self) -> str:
        """
        Get the assembly listing as a string.

        Returns:
            Listing with ROM addresses, binary words, and source lines
        """
        source_lines = self._source.split("\n")

        lines = []
        lines.append("Hack Assembler Listing")
        lines.append("=" * 60)
        lines.append("")
        lines.append("Addr   Word              Line  Source")
        lines.append("-" * 60)

        words = iter(self._code)
        address = 0
        for stmt in self._instructions:
            line_no = stmt.location.line
            text = source_lines[line_no - 1].strip() if line_no <= len(source_lines) else ""
            if isinstance(stmt, Label):
                lines.append(f"{'':5s}  {'':16s}  {line_no:4d}  {text}")
                continue
            lines.append(f"{address:5d}  {next(words)}  {line_no:4d}  {text}")
            address += 1

        lines.append("")
        lines.append("Symbol Table")
        lines.append("-" * 30)
        for name, address in sorted(self.get_symbols().items()):
            lines.append(f"{name:20s} = {address}")
        return "\n".join(lines)

    def write_hack(self, filepath: str | Path) -> None:
        """
        Write the binary words in .hack format (one word per line).

        Args:
            filepath: Output file path
        """
        text = "".join(f"{word}\n" for word in self._code)
        Path(filepath).write_text(text)
        logger.debug(f"Wrote {len(self._code)} words to {filepath}")

    def write_listing(self, filepath: str | Path) -> None:
        """
        Write assembly listing file.

        Args:
            filepath: Output file path
        """
        Path(filepath).write_text(self.get_listing() + "\n")
        logger.debug(f"Wrote listing to {filepath}")

    def write_symbols(self, filepath: str | Path) -> None:
        """
        Write symbol table file.

        Format: name address (one per line)
        """
        with open(filepath, "w") as f:
            f.write("# Symbol table\n")
            f.write("# Generated by hackasm\n")
            for name, address in sorted(self.get_symbols().items()):
                f.write(f"{name} {address}\n")
        logger.debug(f"Wrote symbols to {filepath}")


# =============================================================================
# Convenience Functions
# =============================================================================

def assemble(source: str, filename: str = "<input>") -> list[str]:
    """
    Convenience function to assemble source code.

    Args:
        source: Hack assembly source code
        filename: Virtual filename for errors

    Returns:
        One 16-character binary string per instruction

    Raises:
        AssemblerError: If assembly fails
    """
    return Assembler().assemble_string(source, filename)


def assemble_file(filepath: str | Path) -> list[str]:
    """
    Convenience function to assemble a file.

    Args:
        filepath: Path to source file

    Returns:
        One 16-character binary string per instruction

    Raises:
        AssemblerError: If assembly fails
    """
    return Assembler().assemble_file(filepath)
