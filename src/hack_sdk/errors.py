"""
Hack SDK Error Hierarchy
========================

This module defines the exception hierarchy for the Hack assembler.
All exceptions inherit from HackError, allowing callers to catch every
toolchain error with a single except clause if desired.

Exception Hierarchy
-------------------
HackError (base)
└── AssemblerError (assembler-related)
    ├── AssemblySyntaxError - malformed source text
    │   ├── UnexpectedCharacterError - no valid token starts here
    │   ├── MalformedLabelError - label without closing ')'
    │   └── EmptyComputationError - C-instruction without comp field
    ├── UnknownMnemonicError - mnemonic missing from its table
    │   ├── UnknownDestinationError
    │   ├── UnknownComputationError
    │   └── UnknownJumpError
    ├── AddressOutOfRangeError - value does not fit in 15 bits
    └── DuplicateSymbolError - label redefines a resolved symbol

Every assembler error carries an ErrorKind, the offending token and,
when known, the source location. Messages follow this format:
    filename:line:column: error: description
        source_line_text
        ^
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class HackError(Exception):
    """
    Base exception for all Hack SDK errors.

        try:
            assembler.assemble_file("Max.asm")
        except HackError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


class ErrorKind(Enum):
    """Classification of assembly failures."""
    UNEXPECTED_CHARACTER = auto()
    MALFORMED_LABEL = auto()
    UNKNOWN_DESTINATION = auto()
    UNKNOWN_COMPUTATION = auto()
    UNKNOWN_JUMP = auto()
    EMPTY_COMPUTATION = auto()
    ADDRESS_OUT_OF_RANGE = auto()
    DUPLICATE_SYMBOL = auto()


# =============================================================================
# Assembler Exceptions
# =============================================================================

class AssemblerError(HackError):
    """
    Base exception for all assembler-related errors.

    Attributes:
        message: The error description
        token: The offending mnemonic, symbol or character (optional)
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The actual source text at the error location (optional)
    """

    kind: Optional[ErrorKind] = None

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
        token: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        self.token = token
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            Max.asm:7:1: error: unknown computation 'D+2'
                D=D+2
                ^
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        # Source context with caret pointer
        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class AssemblySyntaxError(AssemblerError):
    """
    Syntax error in assembly source code.

    Raised when the scanner or parser meets text that does not fit the
    Hack instruction grammar.
    """
    pass


class UnexpectedCharacterError(AssemblySyntaxError):
    """No valid instruction or token starts at this character."""

    kind = ErrorKind.UNEXPECTED_CHARACTER

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        expected: Optional[str] = None,
    ):
        if char:
            message = f"unexpected character {char!r}"
        else:
            message = "unexpected end of input"
        if expected:
            message = f"{message}, expected {expected}"
        super().__init__(
            message,
            location=location,
            source_line=source_line,
            token=char,
        )


class MalformedLabelError(AssemblySyntaxError):
    """
    Label declaration without a name or a closing parenthesis.

    Example:
        (LOOP      ; Error: missing ')'
    """

    kind = ErrorKind.MALFORMED_LABEL

    def __init__(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        if name:
            message = f"label '({name}' is missing its closing ')'"
        else:
            message = "label declaration has no name"
        super().__init__(
            message,
            location=location,
            hint="labels are written as (NAME)",
            source_line=source_line,
            token=name,
        )


class EmptyComputationError(AssemblySyntaxError):
    """
    C-instruction with no computation field.

    The comp part is mandatory even when dest and jump are present:
        M=        ; Error
        ;JMP      ; Error
    """

    kind = ErrorKind.EMPTY_COMPUTATION

    def __init__(
        self,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        super().__init__(
            "computation instruction has an empty comp field",
            location=location,
            hint="write e.g. 'D=M', '0;JMP' or 'M=M+1'",
            source_line=source_line,
            token="",
        )


class UnknownMnemonicError(AssemblerError):
    """
    Mnemonic absent from its encoding table.

    Subclasses set `field` to the name of the C-instruction part.
    """

    field = "mnemonic"

    def __init__(
        self,
        mnemonic: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        valid: Optional[list[str]] = None,
    ):
        self.mnemonic = mnemonic
        self.valid = valid or []

        hint = None
        if self.valid:
            hint = f"valid {self.field} mnemonics: {', '.join(self.valid)}"

        super().__init__(
            f"unknown {self.field} '{mnemonic}'",
            location=location,
            hint=hint,
            source_line=source_line,
            token=mnemonic,
        )


class UnknownDestinationError(UnknownMnemonicError):
    kind = ErrorKind.UNKNOWN_DESTINATION
    field = "destination"


class UnknownComputationError(UnknownMnemonicError):
    kind = ErrorKind.UNKNOWN_COMPUTATION
    field = "computation"


class UnknownJumpError(UnknownMnemonicError):
    kind = ErrorKind.UNKNOWN_JUMP
    field = "jump"


class AddressOutOfRangeError(AssemblerError):
    """
    Address does not fit in the 15-bit A-instruction payload.

    A-instructions carry a 0 opcode bit followed by 15 value bits, so the
    largest encodable constant, label or variable address is 32767.

    `value` is the digit string itself when the literal is too long to
    convert to an int.
    """

    kind = ErrorKind.ADDRESS_OUT_OF_RANGE

    def __init__(
        self,
        value: int | str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        symbol: Optional[str] = None,
    ):
        self.value = value
        self.symbol = symbol

        shown = str(value)
        if len(shown) > 12:
            shown = f"{shown[:6]}...({len(shown)} digits)"

        if symbol:
            message = f"address {shown} of symbol '{symbol}' does not fit in 15 bits"
        else:
            message = f"constant {shown} does not fit in 15 bits"

        super().__init__(
            message,
            location=location,
            hint="addresses range from 0 to 32767",
            source_line=source_line,
            token=symbol if symbol else str(value),
        )


class DuplicateSymbolError(AssemblerError):
    """
    Label declared for a name that already has an address.

    Includes the original definition location when available.
    Forward references to a label are not duplicates.
    """

    kind = ErrorKind.DUPLICATE_SYMBOL

    def __init__(
        self,
        symbol: str,
        location: Optional[SourceLocation] = None,
        original_location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        hint: Optional[str] = None,
    ):
        self.symbol = symbol
        self.original_location = original_location

        if hint is None and original_location:
            hint = f"'{symbol}' was first defined at {original_location}"

        super().__init__(
            f"duplicate symbol '{symbol}'",
            location=location,
            hint=hint,
            source_line=source_line,
            token=symbol,
        )
