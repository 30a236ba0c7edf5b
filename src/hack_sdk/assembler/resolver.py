"""
Hack Two-Pass Resolver
======================

This module turns parsed statements into Hack machine code using the
classic two-pass scheme.

Pass 1 (Symbol Collection)
--------------------------
- Pull statements from the parser until the input is exhausted
- Count instructions; labels do not count
- Bind each label to the address of the instruction that follows it
- Enter every new `@name` as an unresolved symbol

Pass 2 (Code Generation)
------------------------
- Emit the precomputed bits of constants and C-instructions
- Emit the address of every resolved `@name`
- Allocate RAM for unresolved names, starting at 16, in the order they
  are first referenced

Variable allocation must wait for pass 2 because a name referenced
before its label is declared is a forward jump, not a variable.
"""

import logging
from typing import Iterable, Optional, Sequence

from hack_sdk.errors import AddressOutOfRangeError, SourceLocation
from hack_sdk.assembler.parser import (
    AddressVariable,
    Compute,
    Constant,
    Instruction,
    Label,
    Parser,
)
from hack_sdk.assembler.symbols import SymbolTable
from hack_sdk.assembler.tables import MAX_ADDRESS, VARIABLE_BASE, encode_address

logger = logging.getLogger(__name__)


class Resolver:
    """
    Resolves symbols and emits binary words for one assembly run.

    Usage:
        resolver = Resolver()
        words = resolver.run(source, "Max.asm")
        resolver.symbols.address_of("LOOP")

    Attributes:
        symbols: The symbol table owned by this run
        instructions: Statements captured by the last run, labels included
        variable_base: First RAM address handed out to variables
        allow_redefinition: Let a later label rebind a resolved name
    """

    def __init__(
        self,
        symbols: Optional[SymbolTable] = None,
        variable_base: int = VARIABLE_BASE,
        allow_redefinition: bool = False,
    ):
        self.symbols = symbols if symbols is not None else SymbolTable()
        self.variable_base = variable_base
        self.allow_redefinition = allow_redefinition
        self.instructions: list[Instruction] = []

        self._address = 0
        self._next_variable = variable_base
        self._source_lines: Sequence[str] = ()

    def run(self, source: str, filename: str = "<input>") -> list[str]:
        """
        Assemble a complete source buffer.

        Returns:
            One 16-character binary string per instruction, in source order

        Raises:
            AssemblerError: On the first error; nothing is returned
        """
        # Only "\n" ends a line, as in Cursor
        self._source_lines = source.split("\n")
        self.instructions = self.first_pass(Parser(source, filename))
        return self.second_pass(self.instructions)

    # =========================================================================
    # Pass 1: Symbol Collection
    # =========================================================================

    def first_pass(self, instructions: Iterable[Instruction]) -> list[Instruction]:
        """
        Walk the statements once, binding labels and noting references.

        Returns:
            The statements, captured for the second pass
        """
        self._address = 0
        captured: list[Instruction] = []

        for stmt in instructions:
            captured.append(stmt)

            if isinstance(stmt, Label):
                self.symbols.bind_label(
                    stmt.name,
                    self._address,
                    stmt.location,
                    allow_redefinition=self.allow_redefinition,
                    source_line=self._source_line(stmt.location),
                )
                logger.debug(f"Label '{stmt.name}' = {self._address}")
                continue

            if isinstance(stmt, AddressVariable):
                self.symbols.reference(stmt.name, stmt.location)

            self._address += 1

        logger.debug(
            f"Pass 1: {len(captured)} statements, {self._address} instructions"
        )
        return captured

    # =========================================================================
    # Pass 2: Code Generation
    # =========================================================================

    def second_pass(self, instructions: Iterable[Instruction]) -> list[str]:
        """Resolve every symbol and emit the binary words."""
        self._next_variable = self.variable_base
        words: list[str] = []

        for stmt in instructions:
            if isinstance(stmt, (Constant, Compute)):
                words.append(stmt.bits)
            elif isinstance(stmt, AddressVariable):
                words.append(self._resolve(stmt))

        logger.debug(
            f"Pass 2: {len(words)} words, "
            f"{self._next_variable - self.variable_base} variables allocated"
        )
        return words

    def _resolve(self, stmt: AddressVariable) -> str:
        """Encode an @name, allocating RAM for it if it is still unresolved."""
        address = self.symbols.address_of(stmt.name)

        if address is None:
            address = self._next_variable
            self._next_variable += 1
            self.symbols.allocate(stmt.name, address)
            logger.debug(f"Variable '{stmt.name}' allocated at {address}")

        if address > MAX_ADDRESS:
            raise AddressOutOfRangeError(
                address,
                stmt.location,
                source_line=self._source_line(stmt.location),
                symbol=stmt.name,
            )

        return encode_address(address)

    def _source_line(self, location: SourceLocation) -> Optional[str]:
        index = location.line - 1
        if 0 <= index < len(self._source_lines):
            return self._source_lines[index].rstrip("\r")
        return None
