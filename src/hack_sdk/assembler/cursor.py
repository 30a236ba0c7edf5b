"""
Hack Assembly Character Cursor
==============================

This module implements the character-level scanner used by the Hack
instruction parser. The Hack grammar is small enough that the parser
works directly on characters instead of a token stream, so the cursor
only offers lookahead, consumption, and whitespace/comment skipping.

Comments
--------
Hack uses C++-style line comments:
- Double slash: "// comment" (anywhere, through end of line)

End of Input
------------
Reading past the end of the buffer never fails. `peek()`, `peek_next()`
and `advance()` return the sentinel EOF_CHAR instead, which belongs to
no character class of the grammar.

Example
-------
>>> cursor = Cursor("  // set D\\nD=A")
>>> cursor.skip_whitespace()
>>> cursor.peek(), cursor.peek_next()
('D', '=')
>>> cursor.location
SourceLocation(filename='<input>', line=2, column=1)
"""

import copy
from typing import Collection

from hack_sdk.errors import SourceLocation


# Returned by every read past the end of the buffer
EOF_CHAR = "\0"

WHITESPACE = " \t\r\n"


class Cursor:
    """
    Position in a source buffer with line/column tracking.

    Cursors are cheap to copy; the parser copies one to read ahead
    speculatively and throws the copy away if the guess was wrong.

    Attributes:
        source: The source text being scanned
        filename: Name of the source file (for error reporting)
    """

    def __init__(self, source: str, filename: str = "<input>"):
        self.source = source
        self.filename = filename

        self._pos = 0
        self._line = 1
        self._column = 1
        self._line_start_pos = 0

    def copy(self) -> "Cursor":
        """Return an independent cursor at the same position."""
        return copy.copy(self)

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def at_end(self) -> bool:
        """Check if we've reached the end of source."""
        return self._pos >= len(self.source)

    def peek(self) -> str:
        """Look at the next character without consuming it."""
        return self._char_at(self._pos)

    def peek_next(self) -> str:
        """Look one character past peek() without consuming anything."""
        return self._char_at(self._pos + 1)

    def advance(self) -> str:
        """
        Consume and return the next character.

        Updates line and column tracking. At end of input nothing is
        consumed and EOF_CHAR is returned.
        """
        if self.at_end():
            return EOF_CHAR

        char = self.source[self._pos]
        self._pos += 1

        if char == "\n":
            self._line += 1
            self._column = 1
            self._line_start_pos = self._pos
        else:
            self._column += 1

        return char

    def match(self, expected: str) -> bool:
        """Consume the next character if it equals `expected`."""
        if self.peek() == expected:
            self.advance()
            return True
        return False

    def read_while(self, chars: Collection[str]) -> str:
        """Consume the longest run of characters drawn from `chars`."""
        start = self._pos
        while self.peek() in chars:
            self.advance()
        return self.source[start:self._pos]

    def _char_at(self, pos: int) -> str:
        if pos >= len(self.source):
            return EOF_CHAR
        return self.source[pos]

    # =========================================================================
    # Whitespace and Comment Handling
    # =========================================================================

    def skip_whitespace(self) -> None:
        """
        Skip spaces, tabs, line breaks and '//' comments.

        Stops at the first character that is neither whitespace nor the
        start of a comment. A lone '/' is left in place.
        """
        while True:
            char = self.peek()
            if char in WHITESPACE:
                self.advance()
            elif char == "/" and self.peek_next() == "/":
                while not self.at_end() and self.peek() != "\n":
                    self.advance()
            else:
                return

    # =========================================================================
    # Position Reporting
    # =========================================================================

    @property
    def location(self) -> SourceLocation:
        """Location of the next character to be read."""
        return SourceLocation(self.filename, self._line, self._column)

    def current_line(self) -> str:
        """
        Get the current line of source text.

        Useful for error reporting.
        """
        line_end = self.source.find("\n", self._line_start_pos)
        if line_end == -1:
            line_end = len(self.source)
        return self.source[self._line_start_pos:line_end].rstrip("\r")
