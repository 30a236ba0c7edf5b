"""
Hack Symbol Table
=================

Maps symbol names to ROM or RAM addresses. A symbol is either resolved
(it has an address) or merely referenced: an `@name` whose meaning is
not yet known. Referenced names that no label claims become variables
in the second pass.

Names are case-sensitive: `LOOP` and `loop` are different symbols.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Mapping, Optional

from hack_sdk.errors import DuplicateSymbolError, SourceLocation
from hack_sdk.assembler.tables import BUILTIN_SYMBOLS


class SymbolKind(Enum):
    BUILTIN = auto()    # R0..R15, SP, SCREEN, ...
    DEFINED = auto()    # pre-defined by the caller
    LABEL = auto()      # (name) in the source
    VARIABLE = auto()   # referenced with @name, allocated in pass 2


# Duplicate-symbol hints for names that have no source location
_ORIGIN_HINTS = {
    SymbolKind.BUILTIN: "'{name}' is a built-in symbol of the Hack platform",
    SymbolKind.DEFINED: "'{name}' was pre-defined, e.g. with -D on the command line",
}


# =============================================================================
# Symbol Table Entry
# =============================================================================

@dataclass
class Symbol:
    """
    Symbol table entry.

    Attributes:
        name: Symbol name
        address: Resolved address, or None while unallocated
        kind: Where the symbol came from
        location: Where the symbol was defined or first referenced
    """
    name: str
    address: Optional[int]
    kind: SymbolKind
    location: Optional[SourceLocation] = None

    @property
    def resolved(self) -> bool:
        return self.address is not None


class SymbolTable:
    """
    Symbol table for one assembly run.

    The table starts out seeded with the Hack built-in symbols. It is
    created per run and never shared.

    Usage:
        table = SymbolTable()
        table.reference("i", location)
        table.bind_label("LOOP", 4, location)
        table.allocate("i", 16)
    """

    def __init__(self, builtins: Mapping[str, int] = BUILTIN_SYMBOLS):
        self._symbols: dict[str, Symbol] = {}
        for name, address in builtins.items():
            self._symbols[name] = Symbol(name, address, SymbolKind.BUILTIN)

    def __contains__(self, name: str) -> bool:
        return name in self._symbols

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._symbols.values())

    def get(self, name: str) -> Optional[Symbol]:
        """Return the entry for `name`, or None."""
        return self._symbols.get(name)

    def address_of(self, name: str) -> Optional[int]:
        """Return the address of `name`, or None if unknown or unallocated."""
        symbol = self._symbols.get(name)
        return symbol.address if symbol else None

    # =========================================================================
    # Mutation
    # =========================================================================

    def define(self, name: str, address: int) -> None:
        """
        Pre-define a symbol (like -D on a command line).

        Replaces any existing entry, built-ins included.
        """
        self._symbols[name] = Symbol(name, address, SymbolKind.DEFINED)

    def reference(self, name: str, location: Optional[SourceLocation] = None) -> Symbol:
        """
        Record a reference to `name`.

        Unknown names are entered unresolved; known names are left as
        they are.
        """
        symbol = self._symbols.get(name)
        if symbol is None:
            symbol = Symbol(name, None, SymbolKind.VARIABLE, location)
            self._symbols[name] = symbol
        return symbol

    def bind_label(
        self,
        name: str,
        address: int,
        location: Optional[SourceLocation] = None,
        allow_redefinition: bool = False,
        source_line: Optional[str] = None,
    ) -> Symbol:
        """
        Bind a label to a ROM address.

        A name that was only referenced so far (a forward reference)
        becomes a label. A name that already has an address cannot be
        rebound unless `allow_redefinition` is set, in which case the
        last binding wins.

        Raises:
            DuplicateSymbolError: If the name is already resolved
        """
        existing = self._symbols.get(name)
        if existing is not None and existing.resolved and not allow_redefinition:
            hint = _ORIGIN_HINTS.get(existing.kind)
            raise DuplicateSymbolError(
                name,
                location=location,
                original_location=existing.location,
                source_line=source_line,
                hint=hint.format(name=name) if hint else None,
            )

        symbol = Symbol(name, address, SymbolKind.LABEL, location)
        self._symbols[name] = symbol
        return symbol

    def allocate(self, name: str, address: int) -> Symbol:
        """Assign a RAM address to a referenced, unresolved symbol."""
        symbol = self._symbols[name]
        symbol.address = address
        return symbol

    # =========================================================================
    # Queries
    # =========================================================================

    def resolved(self) -> dict[str, int]:
        """Return a dictionary of resolved symbol names to addresses."""
        return {
            name: sym.address
            for name, sym in self._symbols.items()
            if sym.address is not None
        }

    def unresolved(self) -> list[str]:
        """Return the names still waiting for an address, in insertion order."""
        return [name for name, sym in self._symbols.items() if sym.address is None]
