"""
OT Assembly Language Parser
===========================

This module implements the parser for OT assembly language. It converts
the token stream from the lexer into a list of statements that the label
resolver and code generator consume.

Statement Types
---------------
The parser produces exactly five kinds of statement, one per line:

1. **LabelDef**: Label definition, consumes no instruction address
   ```
   @loop:
   ```

2. **LoadImmediate**: Load a literal or a label address
   ```
   LET 5
   LET @loop
   ```

3. **Calculate**: ALU operation
   ```
   ADD
   ```

4. **CopyRegister**: Register to register copy (destination first)
   ```
   COPY REG0 IN
   ```

5. **SetCondition**: Select the branch condition
   ```
   LSEQ
   ```

Mnemonics, register names and condition names are case-insensitive.
Anything after a complete statement on the same line is ignored.
"""

from dataclasses import dataclass, field
from typing import Optional, Union
import logging

from ot_asm.errors import (
    AssemblySyntaxError,
    ImmediateRangeError,
    SourceLocation,
    UnknownConditionError,
    UnknownRegisterError,
)
from ot_asm.assembler.lexer import Token, TokenType, Lexer
from ot_asm.cpu import (
    Condition,
    Operator,
    Register,
    LOAD_MNEMONIC,
    COPY_MNEMONIC,
    MAX_IMMEDIATE,
    get_condition,
    get_operator,
    get_register,
    is_condition,
    is_operator,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Immediate Operands
# =============================================================================

@dataclass(frozen=True)
class IntImmediate:
    """Literal immediate, already range checked."""
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class LabelImmediate:
    """Label reference, resolved to an address during code generation."""
    name: str

    def __str__(self) -> str:
        return f"@{self.name}"


Immediate = Union[IntImmediate, LabelImmediate]


# =============================================================================
# Statement Data Classes
# =============================================================================
# Statements are immutable once parsed. The source location is carried for
# error reporting but does not take part in equality, so two statements
# parsed from different lines compare equal if they mean the same thing.
# str() renders the canonical mnemonic form used by the listing writer.
# =============================================================================

@dataclass(frozen=True)
class Statement:
    """Base class for all parsed statements."""
    location: SourceLocation = field(compare=False)


@dataclass(frozen=True)
class LabelDef(Statement):
    """
    Label definition statement.

    Attributes:
        name: Label name without the '@' prefix and ':' suffix
    """
    name: str

    def __str__(self) -> str:
        return f"@{self.name}:"


@dataclass(frozen=True)
class LoadImmediate(Statement):
    """LET statement."""
    immediate: Immediate

    def __str__(self) -> str:
        return f"{LOAD_MNEMONIC} {self.immediate}"


@dataclass(frozen=True)
class Calculate(Statement):
    """ALU operation statement."""
    operator: Operator

    def __str__(self) -> str:
        return self.operator.name


@dataclass(frozen=True)
class CopyRegister(Statement):
    """
    COPY statement.

    Attributes:
        destination: Register written
        source: Register read
    """
    destination: Register
    source: Register

    def __str__(self) -> str:
        return f"{COPY_MNEMONIC} {self.destination.name} {self.source.name}"


@dataclass(frozen=True)
class SetCondition(Statement):
    """Condition selection statement."""
    condition: Condition

    def __str__(self) -> str:
        return self.condition.name


# =============================================================================
# Operand Helpers
# =============================================================================

def parse_register(token: Token, source_line: Optional[str] = None) -> Register:
    """
    Resolve a token to a register.

    Raises:
        UnknownRegisterError: If the token does not name a register
    """
    register = get_register(token.text) if token.type == TokenType.WORD else None
    if register is None:
        raise UnknownRegisterError(token.text, token.location, source_line=source_line)
    return register


def parse_condition(token: Token, source_line: Optional[str] = None) -> Condition:
    """
    Resolve a token to a condition.

    Raises:
        UnknownConditionError: If the token does not name a condition
    """
    condition = get_condition(token.text) if token.type == TokenType.WORD else None
    if condition is None:
        raise UnknownConditionError(token.text, token.location, source_line=source_line)
    return condition


def parse_operator(token: Token, source_line: Optional[str] = None) -> Operator:
    """
    Resolve a token to an ALU operator.

    Raises:
        AssemblySyntaxError: If the token does not name an operator
    """
    operator = get_operator(token.text) if token.type == TokenType.WORD else None
    if operator is None:
        raise AssemblySyntaxError(
            f"unknown operator '{token.text}'",
            token.location,
            source_line=source_line,
        )
    return operator


# =============================================================================
# Parser Implementation
# =============================================================================

class Parser:
    """
    Parses OT assembly tokens into statements.

    Usage:
        lexer = Lexer(source, filename)
        tokens = list(lexer.tokenize())
        parser = Parser(tokens, filename, source_lines=lexer.lines)
        statements = parser.parse()
    """

    def __init__(
        self,
        tokens: list[Token],
        filename: str = "<input>",
        source_lines: list[str] | None = None,
        first_line: int = 1,
    ):
        """
        Initialize the parser.

        Args:
            tokens: List of tokens from lexer
            filename: Source filename for error reporting
            source_lines: Source text lines, used to quote the offending
                          line in error messages
            first_line: Line number of source_lines[0], matching the
                        line_number the Lexer was built with
        """
        self._tokens = tokens
        self._filename = filename
        self._source_lines = source_lines or []
        self._first_line = first_line
        self._pos = 0

    def parse(self) -> list[Statement]:
        """
        Parse all tokens into statements.

        Returns:
            List of Statement objects in source order

        Raises:
            AssemblySyntaxError: If a syntax error is encountered
            ImmediateRangeError: If a literal immediate is out of range
        """
        statements: list[Statement] = []

        while not self._at_end():
            if self._match(TokenType.NEWLINE):
                continue

            statements.append(self._parse_line())

        logger.debug("Parsed %d statements from %s", len(statements), self._filename)
        return statements

    # =========================================================================
    # Token Navigation
    # =========================================================================

    def _at_end(self) -> bool:
        return self._check(TokenType.EOF)

    def _current(self) -> Token:
        """The token under the cursor; EOF once the list is exhausted."""
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        if self._tokens and self._tokens[-1].type == TokenType.EOF:
            return self._tokens[-1]
        return Token(TokenType.EOF, None, 1, 1, self._filename)

    def _advance(self) -> Token:
        token = self._current()
        self._pos += 1
        return token

    def _check(self, *types: TokenType) -> bool:
        return self._current().type in types

    def _match(self, *types: TokenType) -> Optional[Token]:
        """Consume the current token if it has one of the given types."""
        return self._advance() if self._check(*types) else None

    def _expect_operand(self, message: str) -> Token:
        """Consume the next token on this line, raise if the line has ended."""
        if self._check(TokenType.NEWLINE, TokenType.EOF):
            raise self._error(message, self._current())
        return self._advance()

    def _skip_to_eol(self) -> None:
        """Skip remaining tokens to end of line."""
        skipped = []
        while not self._check(TokenType.NEWLINE, TokenType.EOF):
            skipped.append(self._advance())
        if skipped:
            logger.debug(
                "%s: ignoring trailing tokens: %s",
                skipped[0].location,
                " ".join(t.text for t in skipped),
            )

    def _source_line(self, token: Token) -> Optional[str]:
        index = token.line - self._first_line
        if 0 <= index < len(self._source_lines):
            return self._source_lines[index]
        return None

    def _error(self, message: str, token: Token, hint: Optional[str] = None) -> AssemblySyntaxError:
        return AssemblySyntaxError(
            message, token.location, hint=hint, source_line=self._source_line(token)
        )

    # =========================================================================
    # Line Parsing
    # =========================================================================

    def _parse_line(self) -> Statement:
        """Parse a single non-empty line into one statement."""
        token = self._advance()

        if token.type == TokenType.LABEL_DEF:
            stmt: Statement = LabelDef(location=token.location, name=token.value)
        elif token.type == TokenType.WORD:
            stmt = self._parse_instruction(token)
        else:
            raise self._error(f"unknown instruction '{token.text}'", token)

        self._skip_to_eol()
        self._match(TokenType.NEWLINE)
        return stmt

    def _parse_instruction(self, mnemonic_token: Token) -> Statement:
        """Dispatch on the mnemonic word."""
        name = mnemonic_token.text.upper()
        location = mnemonic_token.location
        source_line = self._source_line(mnemonic_token)

        if name == LOAD_MNEMONIC:
            return LoadImmediate(location=location, immediate=self._parse_immediate())

        if is_operator(name):
            return Calculate(location=location, operator=parse_operator(mnemonic_token, source_line))

        if name == COPY_MNEMONIC:
            destination = parse_register(
                self._expect_operand("missing target registers"), source_line
            )
            source = parse_register(
                self._expect_operand("missing target registers"), source_line
            )
            return CopyRegister(location=location, destination=destination, source=source)

        if is_condition(name):
            return SetCondition(location=location, condition=parse_condition(mnemonic_token, source_line))

        raise self._error(f"unknown instruction '{mnemonic_token.text}'", mnemonic_token)

    def _parse_immediate(self) -> Immediate:
        """Parse the operand of LET: a literal 0..31 or a @label."""
        token = self._expect_operand("missing immediate number")

        if token.type == TokenType.LABEL_REF:
            return LabelImmediate(token.value)

        if token.type == TokenType.NUMBER:
            if not 0 <= token.value <= MAX_IMMEDIATE:
                raise ImmediateRangeError(
                    token.value, token.location, source_line=self._source_line(token)
                )
            return IntImmediate(token.value)

        raise self._error(
            f"invalid immediate '{token.text}'",
            token,
            hint=f"expected a decimal number from 0 to {MAX_IMMEDIATE} or a @label",
        )


# =============================================================================
# Convenience Function
# =============================================================================

def parse_source(source: str, filename: str = "<input>") -> list[Statement]:
    """Tokenize and parse source text in one call."""
    lexer = Lexer(source, filename)
    return Parser(list(lexer.tokenize()), filename, source_lines=lexer.lines).parse()
