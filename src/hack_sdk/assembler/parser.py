"""
Hack Assembly Language Parser
=============================

This module converts Hack assembly text into a list of instruction
statements. It reads characters straight from a Cursor; each call to
`Parser.next_instruction()` consumes exactly one syntactic unit.

Statement Types
---------------
1. **Constant**: A-instruction with a decimal operand, encoded eagerly
   ```asm
   @17
   ```

2. **AddressVariable**: A-instruction with a symbolic operand, encoded
   once the symbol table is complete
   ```asm
   @LOOP
   @counter
   ```

3. **Label**: Label declaration, emits no code
   ```asm
   (LOOP)
   ```

4. **Compute**: C-instruction, encoded eagerly
   ```asm
   D=M
   D;JGT
   AM=M-1
   ```

C-instruction Grammar
---------------------
    [dest=]comp[;jump]

`A`, `D` and `M` can start either a destination or a computation, so the
parser reads the destination speculatively on a copy of the cursor and
only commits once it sees the `=`.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional

from hack_sdk.errors import (
    AddressOutOfRangeError,
    EmptyComputationError,
    MalformedLabelError,
    SourceLocation,
    UnexpectedCharacterError,
    UnknownComputationError,
    UnknownDestinationError,
    UnknownJumpError,
)
from hack_sdk.assembler.cursor import Cursor
from hack_sdk.assembler.tables import (
    COMP,
    COMP_CHARS,
    DEST,
    DEST_CHARS,
    JUMP,
    MAX_ADDRESS,
    SYMBOL_CHARS,
    canonical_dest,
    encode_address,
    encode_compute,
)


class InstructionType(Enum):
    """Kinds of Hack instruction, as reported by `instruction_type`."""
    ADDRESS = auto()   # @value
    COMPUTE = auto()   # dest=comp;jump
    LABEL = auto()     # (name)


# =============================================================================
# Statement Data Classes
# =============================================================================

@dataclass
class Statement:
    """
    Base class for all parsed statements.

    Every statement has a source location for error reporting.
    """
    location: SourceLocation


@dataclass
class Constant(Statement):
    """
    A-instruction whose operand is a decimal literal.

    Attributes:
        value: The literal value (0..32767)
        bits: The 16-bit encoding
    """
    value: int
    bits: str

    @property
    def instruction_type(self) -> InstructionType:
        return InstructionType.ADDRESS

    @property
    def symbol(self) -> str:
        return str(self.value)


@dataclass
class AddressVariable(Statement):
    """
    A-instruction whose operand is a symbol.

    The symbol may be a built-in, a label, or a variable; which one is
    only known after the first pass.
    """
    name: str

    @property
    def instruction_type(self) -> InstructionType:
        return InstructionType.ADDRESS

    @property
    def symbol(self) -> str:
        return self.name


@dataclass
class Label(Statement):
    """Label declaration; binds `name` to the next instruction's address."""
    name: str

    @property
    def instruction_type(self) -> InstructionType:
        return InstructionType.LABEL

    @property
    def symbol(self) -> str:
        return self.name


@dataclass
class Compute(Statement):
    """
    C-instruction.

    Attributes:
        bits: The 16-bit encoding
        dest: Destination mnemonic as written ("" if absent)
        comp: Computation mnemonic
        jump: Jump mnemonic ("" if absent)
    """
    bits: str
    dest: str = ""
    comp: str = ""
    jump: str = ""

    @property
    def instruction_type(self) -> InstructionType:
        return InstructionType.COMPUTE


Instruction = Constant | AddressVariable | Label | Compute


# =============================================================================
# Parser Implementation
# =============================================================================

class Parser:
    """
    Parses Hack assembly source into statements.

    Usage:
        parser = Parser(source_text, "Max.asm")
        statements = parser.parse()

    or incrementally:
        while (stmt := parser.next_instruction()) is not None:
            ...
    """

    def __init__(self, source: str, filename: str = "<input>"):
        self._cursor = Cursor(source, filename)

    def __iter__(self) -> Iterator[Instruction]:
        while (stmt := self.next_instruction()) is not None:
            yield stmt

    def parse(self) -> list[Instruction]:
        """Parse the whole source."""
        return list(self)

    def next_instruction(self) -> Optional[Instruction]:
        """
        Parse the next instruction.

        Returns:
            The next statement, or None once the input is exhausted

        Raises:
            AssemblerError: If the source is malformed
        """
        cursor = self._cursor
        cursor.skip_whitespace()

        if cursor.at_end():
            return None

        location = cursor.location
        char = cursor.peek()

        if char == "@":
            return self._parse_address(location)

        if char == "(":
            return self._parse_label(location)

        # ';' and '=' start a C-instruction whose comp field is missing
        if char in COMP_CHARS or char in ";=":
            return self._parse_compute(location)

        raise UnexpectedCharacterError(
            char,
            location,
            source_line=cursor.current_line(),
            expected="'@', '(' or a computation",
        )

    # =========================================================================
    # A-instructions and Labels
    # =========================================================================

    def _parse_address(self, location: SourceLocation) -> Instruction:
        """Parse '@value'."""
        cursor = self._cursor
        cursor.advance()  # consume @

        operand_location = cursor.location
        symbol = cursor.read_while(SYMBOL_CHARS)

        if not symbol:
            raise UnexpectedCharacterError(
                "" if cursor.at_end() else cursor.peek(),
                operand_location,
                source_line=cursor.current_line(),
                expected="a symbol or constant after '@'",
            )

        if symbol.isdigit():
            # int() refuses very long digit strings
            digits = symbol.lstrip("0") or "0"
            if len(digits) > len(str(MAX_ADDRESS)):
                raise AddressOutOfRangeError(
                    digits,
                    operand_location,
                    source_line=cursor.current_line(),
                )

            value = int(digits)
            if value > MAX_ADDRESS:
                raise AddressOutOfRangeError(
                    value,
                    operand_location,
                    source_line=cursor.current_line(),
                )
            return Constant(location, value=value, bits=encode_address(value))

        return AddressVariable(location, name=symbol)

    def _parse_label(self, location: SourceLocation) -> Label:
        """Parse '(name)'."""
        cursor = self._cursor
        cursor.advance()  # consume (

        name = cursor.read_while(SYMBOL_CHARS)
        if not name or not cursor.match(")"):
            raise MalformedLabelError(
                name,
                cursor.location,
                source_line=cursor.current_line(),
            )

        return Label(location, name=name)

    # =========================================================================
    # C-instructions
    # =========================================================================

    def _parse_compute(self, location: SourceLocation) -> Compute:
        """Parse '[dest=]comp[;jump]' and encode it."""
        cursor = self._cursor
        source_line = cursor.current_line()

        dest = self._parse_dest()

        comp_location = cursor.location
        comp = cursor.read_while(COMP_CHARS)
        if not comp:
            raise EmptyComputationError(comp_location, source_line=source_line)

        jump = ""
        jump_location = cursor.location
        if cursor.match(";"):
            jump_location = cursor.location
            jump = self._parse_jump()

        dest_key = canonical_dest(dest)
        if dest_key is None:
            raise UnknownDestinationError(
                dest, location, source_line=source_line, valid=[d for d in DEST if d]
            )

        comp_bits = COMP.get(comp)
        if comp_bits is None:
            raise UnknownComputationError(comp, comp_location, source_line=source_line)

        jump_bits = JUMP.get(jump)
        if jump_bits is None:
            raise UnknownJumpError(
                jump, jump_location, source_line=source_line, valid=[j for j in JUMP if j]
            )

        return Compute(
            location,
            bits=encode_compute(DEST[dest_key], comp_bits, jump_bits),
            dest=dest,
            comp=comp,
            jump=jump,
        )

    def _parse_dest(self) -> str:
        """
        Read 'dest=' if present.

        The registers are read on a copy of the cursor. Only when they are
        followed by '=' does the real cursor move past them; otherwise
        nothing is consumed and they are read again as the computation.
        """
        ahead = self._cursor.copy()
        letters = ahead.read_while(DEST_CHARS)

        if letters and ahead.peek() == "=":
            for _ in range(len(letters) + 1):
                self._cursor.advance()
            return letters

        return ""

    def _parse_jump(self) -> str:
        """Read a three-letter jump mnemonic after ';', or '' if none."""
        cursor = self._cursor
        if cursor.peek() != "J":
            return ""

        chars = []
        while len(chars) < 3 and cursor.peek().isalpha():
            chars.append(cursor.advance())
        return "".join(chars)


def parse_source(source: str, filename: str = "<input>") -> list[Instruction]:
    """
    Convenience function to parse source code.

    Args:
        source: Hack assembly source code
        filename: Virtual filename for errors

    Returns:
        List of parsed statements
    """
    return Parser(source, filename).parse()
