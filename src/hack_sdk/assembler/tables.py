"""
Hack Instruction Encoding Tables
================================

This module defines the fixed mnemonic-to-bits tables of the Hack
instruction set and the predefined symbols of the Hack platform.

Instruction Formats
-------------------
The Hack CPU executes two 16-bit instruction formats:

1. **A-instruction**: `@value`
   - Bit 15 is 0, bits 14..0 hold the value
   - Example: @17 -> 0000000000010001

2. **C-instruction**: `dest=comp;jump`
   - Bits 15..13 are 111
   - Bits 12..6 hold a + cccccc (the computation, 7 bits)
   - Bits 5..3 hold d1 d2 d3 (the destination, 3 bits)
   - Bits 2..0 hold j1 j2 j3 (the jump condition, 3 bits)
   - Example: D=D+A -> 111 0000010 010 000

The `a` bit selects between A (a=0) and M (a=1) as the ALU's second
operand, which is why every M-based computation mirrors an A-based one.

Predefined Symbols
------------------
| Symbol      | Value | Meaning                       |
|-------------|-------|-------------------------------|
| R0..R15     | 0..15 | Virtual registers             |
| SP          | 0     | Stack pointer                 |
| LCL         | 1     | Local segment base            |
| ARG         | 2     | Argument segment base         |
| THIS        | 3     | This segment base             |
| THAT        | 4     | That segment base             |
| SCREEN      | 16384 | Screen memory map base        |
| KBD         | 24576 | Keyboard memory map           |

Reference
---------
- Nisan & Schocken, The Elements of Computing Systems, chapter 6
"""

from types import MappingProxyType
from typing import Mapping


# =============================================================================
# Instruction Layout
# =============================================================================

WORD_BITS = 16
ADDRESS_BITS = 15
MAX_ADDRESS = (1 << ADDRESS_BITS) - 1   # 32767

A_INSTRUCTION_PREFIX = "0"
C_INSTRUCTION_PREFIX = "111"

# First address handed out to variables (after R0..R15)
VARIABLE_BASE = 16


# =============================================================================
# Computation Table (a + cccccc)
# =============================================================================

COMP: Mapping[str, str] = MappingProxyType({
    # a = 0 : operate on A
    "0":   "0101010",
    "1":   "0111111",
    "-1":  "0111010",
    "D":   "0001100",
    "A":   "0110000",
    "!D":  "0001101",
    "!A":  "0110001",
    "-D":  "0001111",
    "-A":  "0110011",
    "D+1": "0011111",
    "A+1": "0110111",
    "D-1": "0001110",
    "A-1": "0110010",
    "D+A": "0000010",
    "D-A": "0010011",
    "A-D": "0000111",
    "D&A": "0000000",
    "D|A": "0010101",
    # a = 1 : operate on M
    "M":   "1110000",
    "!M":  "1110001",
    "-M":  "1110011",
    "M+1": "1110111",
    "M-1": "1110010",
    "D+M": "1000010",
    "D-M": "1010011",
    "M-D": "1000111",
    "D&M": "1000000",
    "D|M": "1010101",
})


# =============================================================================
# Destination Table (d1 d2 d3 = A D M)
# =============================================================================

DEST: Mapping[str, str] = MappingProxyType({
    "":    "000",
    "M":   "001",
    "D":   "010",
    "DM":  "011",
    "A":   "100",
    "AM":  "101",
    "AD":  "110",
    "ADM": "111",
})


# =============================================================================
# Jump Table (j1 j2 j3 = out<0, out=0, out>0)
# =============================================================================

JUMP: Mapping[str, str] = MappingProxyType({
    "":    "000",
    "JGT": "001",
    "JEQ": "010",
    "JGE": "011",
    "JLT": "100",
    "JNE": "101",
    "JLE": "110",
    "JMP": "111",
})


# =============================================================================
# Character Classes
# =============================================================================

# Registers that can appear as a destination
DEST_CHARS = frozenset("ADM")

# Characters that can appear in a computation mnemonic
COMP_CHARS = frozenset("01-+!&|ADM")

# Characters allowed in symbols; Hack also permits '.', '$' and ':'
SYMBOL_CHARS = frozenset(
    "abcdefghijklmnopqrstuvwxyz"
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "0123456789_.$:"
)


# =============================================================================
# Predefined Symbols
# =============================================================================

def _builtin_symbols() -> dict[str, int]:
    symbols = {f"R{n}": n for n in range(16)}
    symbols.update({
        "SP": 0,
        "LCL": 1,
        "ARG": 2,
        "THIS": 3,
        "THAT": 4,
        "SCREEN": 16384,
        "KBD": 24576,
    })
    return symbols


BUILTIN_SYMBOLS: Mapping[str, int] = MappingProxyType(_builtin_symbols())


# =============================================================================
# Lookup Functions
# =============================================================================

def canonical_dest(mnemonic: str) -> str | None:
    """
    Map a destination spelled in any register order to its table key.

    'MD' and 'AMD' are the spellings used by most Hack sources; the table
    stores them as 'DM' and 'ADM'. Repeated registers never match.

    Returns:
        The canonical key, or None if the letters form no destination
    """
    if mnemonic in DEST:
        return mnemonic
    if len(set(mnemonic)) != len(mnemonic):
        return None
    key = "".join(sorted(mnemonic))
    return key if key in DEST else None


def encode_address(value: int) -> str:
    """
    Encode a value as a 16-bit A-instruction.

    The caller is responsible for range checking; values must lie in
    0..MAX_ADDRESS.
    """
    return A_INSTRUCTION_PREFIX + format(value, f"0{ADDRESS_BITS}b")


def encode_compute(dest: str, comp: str, jump: str) -> str:
    """Assemble a C-instruction from already-encoded fields."""
    return C_INSTRUCTION_PREFIX + comp + dest + jump
