"""
Hack SDK - Assembler Toolchain for the Hack Computer
====================================================

This package provides an assembler for the 16-bit Hack computer from
"The Elements of Computing Systems" (nand2tetris).

The Hack CPU executes 16-bit instructions from a 32K-word ROM and
addresses a 32K-word RAM whose upper region maps the screen (SCREEN,
16384) and keyboard (KBD, 24576).

Main Components
---------------
- **assembler**: Two-pass Hack assembler (hackasm)
    Converts assembly source files (.asm) to binary text files (.hack)

Quick Start
-----------
Assemble a program:
    >>> from hack_sdk.assembler import Assembler
    >>> asm = Assembler()
    >>> words = asm.assemble_file("Max.asm")
    >>> asm.write_hack("Max.hack")

Or use the command-line tool:
    $ hackasm Max.asm -o Max.hack

Reference Documentation
-----------------------
- Nisan & Schocken, The Elements of Computing Systems, chapter 6
- https://www.nand2tetris.org/project06
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from hack_sdk.assembler import Assembler, assemble, assemble_file
from hack_sdk.config import AssemblerConfig
from hack_sdk.errors import (
    HackError,
    AssemblerError,
    AssemblySyntaxError,
    SourceLocation,
    ErrorKind,
    UnexpectedCharacterError,
    MalformedLabelError,
    EmptyComputationError,
    UnknownMnemonicError,
    UnknownDestinationError,
    UnknownComputationError,
    UnknownJumpError,
    AddressOutOfRangeError,
    DuplicateSymbolError,
)

__all__ = [
    # Version info
    "__version__",
    # Assembler
    "Assembler",
    "assemble",
    "assemble_file",
    "AssemblerConfig",
    # Exception hierarchy
    "HackError",
    "AssemblerError",
    "AssemblySyntaxError",
    "SourceLocation",
    "ErrorKind",
    "UnexpectedCharacterError",
    "MalformedLabelError",
    "EmptyComputationError",
    "UnknownMnemonicError",
    "UnknownDestinationError",
    "UnknownComputationError",
    "UnknownJumpError",
    "AddressOutOfRangeError",
    "DuplicateSymbolError",
]
