"""
Hack Assembler
==============

This module provides a two-pass assembler for the Hack computer. It
converts Hack assembly source into `.hack` text: one 16-character binary
word per instruction.

Main Components
---------------
- **Assembler**: Main assembler class with file and output helpers
- **Cursor**: Character scanner with lookahead and comment skipping
- **Parser**: Classifies and parses one instruction at a time
- **SymbolTable**: Built-in, label and variable addresses
- **Resolver**: Runs the two passes and emits binary words

Assembly Process
----------------
1. **Pass 1 (Parser + Resolver.first_pass)**:
   - Parse every instruction, encoding constants and C-instructions
   - Bind labels to ROM addresses
   - Note symbols referenced with @name

2. **Pass 2 (Resolver.second_pass)**:
   - Allocate RAM from address 16 for names no label claimed
   - Emit one binary word per instruction

Example Usage
-------------
>>> from hack_sdk.assembler import assemble
>>> assemble("@17\\nD=A")
['0000000000010001', '1110110000010000']
"""

from hack_sdk.assembler.assembler import Assembler, assemble, assemble_file
from hack_sdk.assembler.cursor import Cursor, EOF_CHAR
from hack_sdk.assembler.parser import (
    Parser,
    Statement,
    Instruction,
    InstructionType,
    Constant,
    AddressVariable,
    Label,
    Compute,
    parse_source,
)
from hack_sdk.assembler.resolver import Resolver
from hack_sdk.assembler.symbols import Symbol, SymbolKind, SymbolTable
from hack_sdk.assembler.tables import (
    COMP,
    DEST,
    JUMP,
    BUILTIN_SYMBOLS,
    MAX_ADDRESS,
    VARIABLE_BASE,
)

__all__ = [
    # Main class and functions
    "Assembler",
    "assemble",
    "assemble_file",
    # Cursor
    "Cursor",
    "EOF_CHAR",
    # Parser
    "Parser",
    "Statement",
    "Instruction",
    "InstructionType",
    "Constant",
    "AddressVariable",
    "Label",
    "Compute",
    "parse_source",
    # Resolution
    "Resolver",
    "Symbol",
    "SymbolKind",
    "SymbolTable",
    # Encoding tables
    "COMP",
    "DEST",
    "JUMP",
    "BUILTIN_SYMBOLS",
    "MAX_ADDRESS",
    "VARIABLE_BASE",
]
