"""
OT Assembly Language Lexer
==========================

This module implements the lexer (tokenizer) for OT assembly language.
The language is line oriented and whitespace separated, so the lexer
splits each line into words and classifies each word by its shape.
Mnemonics and register names are left as plain words; the parser
decides what they mean.

Token Types
-----------
- WORD: Mnemonics, register names, condition names (``LET``, ``reg0``)
- NUMBER: Signed decimal integers (``5``, ``-3``, ``+7``)
- LABEL_DEF: Label definitions (``@loop:``), value is the bare name
- LABEL_REF: Label references (``@loop``), value is the bare name
- NEWLINE: End of a line that produced tokens
- EOF: End of file

Comments
--------
A word starting with ``#`` begins a comment that runs to the end of the
line. Lines that are blank or only a comment produce no tokens at all.

Example
-------
>>> from ot_asm.assembler.lexer import Lexer
>>> lexer = Lexer("@loop:\\nLET @loop  # jump back", "example.ot")
>>> for token in lexer.tokenize():
...     print(token)
Token(LABEL_DEF, 'loop', 1:1)
Token(NEWLINE, 1:7)
Token(WORD, 'LET', 2:1)
Token(LABEL_REF, 'loop', 2:5)
Token(NEWLINE, 2:23)
Token(EOF, 3:1)
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional
import re

from ot_asm.errors import AssemblySyntaxError, SourceLocation


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """Token types for OT assembly language."""

    # Structural tokens
    NEWLINE = auto()     # End of line (statement boundary)
    EOF = auto()         # End of file

    # Values
    WORD = auto()        # Mnemonics, registers, conditions
    NUMBER = auto()      # Signed decimal literal
    LABEL_DEF = auto()   # @name:
    LABEL_REF = auto()   # @name


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    Represents a single token from the source code.

    Attributes:
        type: The TokenType classification
        value: The token value (word text, label name, or int for numbers)
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        filename: Name of the source file
    """
    type: TokenType
    value: str | int | None
    line: int
    column: int
    filename: str

    def __repr__(self) -> str:
        if self.value is not None:
            return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"
        return f"Token({self.type.name}, {self.line}:{self.column})"

    @property
    def text(self) -> str:
        """The token as it would be written in source."""
        if self.type == TokenType.LABEL_DEF:
            return f"@{self.value}:"
        if self.type == TokenType.LABEL_REF:
            return f"@{self.value}"
        if self.value is None:
            return ""
        return str(self.value)

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Tokenizes OT assembly source code.

    Usage:
        lexer = Lexer(source_text, filename)
        tokens = list(lexer.tokenize())

    Attributes:
        source: The source code being tokenized
        filename: Name of the source file (for error reporting)
        lines: The source split into lines (for error context)
    """

    COMMENT_CHAR = "#"
    LABEL_CHAR = "@"
    LABEL_DEF_SUFFIX = ":"

    # Whatever Python's int() accepts as a plain signed decimal
    NUMBER_PATTERN = re.compile(r"[+-]?[0-9]+")

    WORD_PATTERN = re.compile(r"\S+")

    def __init__(self, source: str, filename: str = "<input>", line_number: int = 1):
        """
        Initialize the lexer with source code.

        Args:
            source: The assembly source code to tokenize
            filename: Name of the source file (for error messages)
            line_number: Starting line number (default 1)
        """
        self.source = source
        self.filename = filename
        self.lines = source.splitlines()
        self._first_line = line_number

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens from the source code.

        Yields:
            Token objects representing each lexical element

        Raises:
            AssemblySyntaxError: If a label has no name
        """
        line_no = self._first_line
        for line_no, text in enumerate(self.lines, start=self._first_line):
            produced = False
            for match in self.WORD_PATTERN.finditer(text):
                word = match.group()
                if word.startswith(self.COMMENT_CHAR):
                    break
                yield self._classify(word, line_no, match.start() + 1)
                produced = True

            if produced:
                yield self._make_token(TokenType.NEWLINE, None, line_no, len(text) + 1)

        end_line = line_no + 1 if self.lines else self._first_line
        yield self._make_token(TokenType.EOF, None, end_line, 1)

    # =========================================================================
    # Token Creation
    # =========================================================================

    def _make_token(
        self,
        token_type: TokenType,
        value: str | int | None,
        line: int,
        column: int,
    ) -> Token:
        return Token(
            type=token_type,
            value=value,
            line=line,
            column=column,
            filename=self.filename,
        )

    def _classify(self, word: str, line: int, column: int) -> Token:
        """Classify a single whitespace-delimited word."""
        if word.startswith(self.LABEL_CHAR):
            if word.endswith(self.LABEL_DEF_SUFFIX):
                name = word[1:-1]
                token_type = TokenType.LABEL_DEF
            else:
                name = word[1:]
                token_type = TokenType.LABEL_REF
            if not name:
                raise self._error(f"expected label name after '{self.LABEL_CHAR}'", line, column)
            return self._make_token(token_type, name, line, column)

        if self.NUMBER_PATTERN.fullmatch(word):
            return self._make_token(TokenType.NUMBER, int(word), line, column)

        return self._make_token(TokenType.WORD, word, line, column)

    def _error(self, message: str, line: int, column: int) -> AssemblySyntaxError:
        """Create a syntax error pointing at the given position."""
        location = SourceLocation(self.filename, line, column)
        return AssemblySyntaxError(message, location, source_line=self.get_line(line))

    # =========================================================================
    # Utility Methods
    # =========================================================================

    def get_line(self, line: int) -> Optional[str]:
        """
        Get a line of source text by its line number.

        Returns None if the line number is outside the source.
        """
        index = line - self._first_line
        if 0 <= index < len(self.lines):
            return self.lines[index]
        return None
