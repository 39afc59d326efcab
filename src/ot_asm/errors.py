"""
OT-ASM Error Hierarchy
======================

Every error the assembler raises derives from OtAsmError, so a caller can
stop any failed run with a single except clause.

Hierarchy
---------
OtAsmError
└── AssemblerError
    ├── AssemblySyntaxError - missing operand, unknown mnemonic, bad number
    │   ├── UnknownRegisterError - not REG0-REG5, IO, IN or OUT
    │   └── UnknownConditionError - not one of the eight conditions
    ├── ImmediateRangeError - LET literal outside 0..31
    ├── AddressSpaceError - label address needs more than 6 bits
    ├── UndefinedSymbolError - LET @name with no @name: anywhere
    └── DuplicateSymbolError - @name: appears twice

Rendered errors look like this:

    loop.ot:6:5: error: undefined symbol 'lop'
        LET @lop
            ^
    hint: did you mean 'loop'?

The quoted line and caret appear only when the source text is known.
"""

from dataclasses import dataclass
from typing import Iterator, Optional


class OtAsmError(Exception):
    """
    Root of all OT-ASM exceptions.

        try:
            Assembler().assemble_file("loop.ot")
        except OtAsmError as e:
            click.echo(e, err=True)
    """


@dataclass(frozen=True)
class SourceLocation:
    """A 1-based line and column inside a named source."""
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"


# Four spaces before the quoted source line
_QUOTE_INDENT = 4


# =============================================================================
# Assembler Errors
# =============================================================================

class AssemblerError(OtAsmError):
    """
    An error found while assembling.

    Subclasses may set ``HINT`` to give every instance the same advice.

    Attributes:
        message: Short description, without location
        location: SourceLocation of the offending token, if known
        hint: Suggested fix, if any
        source_line: Text of the offending line, if known
    """

    HINT: Optional[str] = None

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint if hint is not None else self.HINT
        self.source_line = source_line
        super().__init__("\n".join(self._render()))

    def _render(self) -> Iterator[str]:
        prefix = f"{self.location}: " if self.location else ""
        yield f"{prefix}error: {self.message}"

        if self.location is not None and self.source_line is not None:
            yield " " * _QUOTE_INDENT + self.source_line
            if self.location.column > 0:
                yield " " * (_QUOTE_INDENT + self.location.column - 1) + "^"

        if self.hint:
            yield f"hint: {self.hint}"


class AssemblySyntaxError(AssemblerError):
    """
    The source does not form a valid statement.

    Raised for unknown mnemonics, missing operands (``LET`` alone,
    ``COPY REG0``) and immediates that are not decimal integers.
    """


class UnknownRegisterError(AssemblySyntaxError):
    """Register name is not one of REG0-REG5, IO, IN or OUT."""

    HINT = "registers are REG0-REG5 and IO (aliases IN, OUT)"

    def __init__(self, name: str, location: Optional[SourceLocation] = None,
                 source_line: Optional[str] = None):
        self.name = name
        super().__init__(f"unknown register '{name}'", location, source_line=source_line)


class UnknownConditionError(AssemblySyntaxError):
    """Condition name is not one of the eight branch conditions."""

    HINT = "conditions are OFF, EQ, LS, LSEQ, ON, NEQ, GREQ, GR"

    def __init__(self, name: str, location: Optional[SourceLocation] = None,
                 source_line: Optional[str] = None):
        self.name = name
        super().__init__(f"unknown condition '{name}'", location, source_line=source_line)


class ImmediateRangeError(AssemblerError):
    """
    Literal immediate outside the 5-bit field.

    A LET byte spends two bits on its class tag and one more is reserved,
    which leaves literals in 0..31.
    """

    HINT = "immediates must be in the range 0 to 31"

    def __init__(self, value: int, location: Optional[SourceLocation] = None,
                 source_line: Optional[str] = None):
        self.value = value
        bound = "non negative" if value < 0 else "less than 32"
        super().__init__(
            f"immediate number must be {bound}: {value}", location, source_line=source_line
        )


class AddressSpaceError(AssemblerError):
    """
    Label address does not fit in the 6-bit operand field.

    Only the first 64 instructions can be the target of ``LET @label``.
    """

    HINT = "label addresses must be below 64"

    def __init__(self, label: str, address: int,
                 location: Optional[SourceLocation] = None,
                 source_line: Optional[str] = None):
        self.label = label
        self.address = address
        super().__init__(
            f"label '@{label}' at address {address} can't fit in 6 bits",
            location,
            source_line=source_line,
        )


class UndefinedSymbolError(AssemblerError):
    """
    ``LET @name`` refers to a label that is never defined.

    Up to three close spellings from the symbol table are offered as a hint.
    """

    def __init__(self, symbol: str, location: Optional[SourceLocation] = None,
                 hint: Optional[str] = None, source_line: Optional[str] = None,
                 similar_symbols: Optional[list[str]] = None):
        self.symbol = symbol
        self.similar_symbols = list(similar_symbols or [])
        if hint is None and self.similar_symbols:
            quoted = ", ".join(repr(s) for s in self.similar_symbols[:3])
            hint = f"did you mean {quoted}?"
        super().__init__(f"undefined symbol '{symbol}'", location, hint, source_line)


class DuplicateSymbolError(AssemblerError):
    """
    A label is defined twice while redefinition is not allowed.

    ``original_location`` points at the first definition.
    """

    def __init__(self, symbol: str, location: Optional[SourceLocation] = None,
                 original_location: Optional[SourceLocation] = None,
                 source_line: Optional[str] = None):
        self.symbol = symbol
        self.original_location = original_location
        hint = None
        if original_location is not None:
            hint = f"'{symbol}' was first defined at {original_location}"
        super().__init__(f"duplicate symbol '{symbol}'", location, hint, source_line)
