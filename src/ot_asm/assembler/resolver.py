"""
OT Label Resolver
=================

First of the two assembly passes. Walks the statement list once, assigning
each label the address of the instruction that follows it, and produces a
read-only symbol table for the code generator.

Only instructions advance the address counter; label definitions sit
between instructions and take no space:

    LET 5        # address 0
    @loop:       # loop = 1
    ADD          # address 1

Because every label is collected before any code is generated, a
``LET @label`` may refer to a label defined further down the file.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Optional
import difflib
import logging

from ot_asm.errors import (
    AddressSpaceError,
    AssemblerError,
    DuplicateSymbolError,
    SourceLocation,
)
from ot_asm.assembler.parser import (
    Statement,
    LabelDef,
    LoadImmediate,
    Calculate,
    CopyRegister,
    SetCondition,
)
from ot_asm.cpu import ADDRESS_SPACE

logger = logging.getLogger(__name__)


# =============================================================================
# Symbol Table
# =============================================================================

@dataclass(frozen=True)
class Symbol:
    """
    Symbol table entry.

    Attributes:
        name: Label name
        address: Index of the instruction the label points at
        location: Where the label was defined
    """
    name: str
    address: int
    location: SourceLocation


class SymbolTable(Mapping[str, int]):
    """
    Read-only mapping of label name to instruction address.

    Built once by LabelResolver and never modified afterwards. Indexing
    yields the address; symbol() gives the full entry.
    """

    def __init__(self, symbols: dict[str, Symbol]):
        self._symbols = dict(symbols)

    def __getitem__(self, name: str) -> int:
        return self._symbols[name].address

    def __iter__(self) -> Iterator[str]:
        return iter(self._symbols)

    def __len__(self) -> int:
        return len(self._symbols)

    def __repr__(self) -> str:
        return f"SymbolTable({self.as_dict()!r})"

    def symbol(self, name: str) -> Optional[Symbol]:
        """Return the full entry for a label, or None if undefined."""
        return self._symbols.get(name)

    def similar(self, name: str, limit: int = 3) -> list[str]:
        """Return defined label names that look like a misspelling of name."""
        return difflib.get_close_matches(name, list(self._symbols), n=limit)

    def as_dict(self) -> dict[str, int]:
        """Return a plain dict copy of name -> address."""
        return {name: sym.address for name, sym in self._symbols.items()}


# =============================================================================
# Resolver
# =============================================================================

class LabelResolver:
    """
    Builds the symbol table for a statement list.

    Usage:
        resolver = LabelResolver()
        symbols = resolver.resolve(statements)

    Attributes:
        allow_redefinition: If True, a label defined twice takes the address
                            of its last definition instead of raising
                            DuplicateSymbolError
    """

    def __init__(self, allow_redefinition: bool = False):
        self.allow_redefinition = allow_redefinition

    def resolve(self, statements: list[Statement]) -> SymbolTable:
        """
        Assign an address to every label.

        Args:
            statements: Parsed statements in source order

        Returns:
            The completed symbol table

        Raises:
            AddressSpaceError: If a label's address is 64 or more
            DuplicateSymbolError: If a label is defined twice and
                                  redefinition is not allowed
        """
        symbols: dict[str, Symbol] = {}
        address = 0

        for stmt in statements:
            if isinstance(stmt, LabelDef):
                self._define_label(symbols, stmt, address)
            elif isinstance(stmt, (LoadImmediate, Calculate, CopyRegister, SetCondition)):
                address += 1
            else:
                raise AssemblerError(
                    f"internal error: unknown statement type {type(stmt).__name__}",
                    stmt.location,
                )

        logger.debug("Resolved %d labels over %d instructions", len(symbols), address)
        return SymbolTable(symbols)

    def _define_label(self, symbols: dict[str, Symbol], label: LabelDef, address: int) -> None:
        """Record a label definition at the current address."""
        if address >= ADDRESS_SPACE:
            raise AddressSpaceError(label.name, address, label.location)

        existing = symbols.get(label.name)
        if existing is not None:
            if not self.allow_redefinition:
                raise DuplicateSymbolError(
                    label.name,
                    location=label.location,
                    original_location=existing.location,
                )
            logger.debug(
                "%s: label '@%s' redefined, was %d now %d",
                label.location, label.name, existing.address, address,
            )

        symbols[label.name] = Symbol(
            name=label.name,
            address=address,
            location=label.location,
        )


def resolve_labels(statements: list[Statement], allow_redefinition: bool = False) -> SymbolTable:
    """Convenience wrapper around LabelResolver.resolve()."""
    return LabelResolver(allow_redefinition=allow_redefinition).resolve(statements)
