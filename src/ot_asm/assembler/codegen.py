"""
OT Code Generator
=================

Second of the two assembly passes. Encodes each instruction statement into
exactly one byte, looking up label references in the symbol table built by
the label resolver.

Encoding
--------
```
 7 6 5 4 3 2 1 0
+---+-----------+
|tag|  operand  |
+---+-----------+
```

| Statement    | Byte                                  |
|--------------|---------------------------------------|
| LET n        | n (tag 00)                            |
| LET @label   | address of label (tag 00)             |
| ADD, SUB ... | (1 << 6) + operator index             |
| COPY dst src | (2 << 6) + (src << 3) + dst           |
| EQ, GR ...   | (3 << 6) + condition index            |
| @label:      | nothing                               |

Example:
    LET 5          ->   5
    @loop:
    ADD            ->  68
    COPY REG0 REG1 -> 136
    LSEQ           -> 195
    LET @loop      ->   1
"""

from typing import Optional
import logging

from ot_asm.errors import (
    AddressSpaceError,
    AssemblerError,
    UndefinedSymbolError,
)
from ot_asm.assembler.parser import (
    Statement,
    LabelDef,
    LoadImmediate,
    Calculate,
    CopyRegister,
    SetCondition,
    IntImmediate,
    LabelImmediate,
)
from ot_asm.assembler.resolver import SymbolTable
from ot_asm.cpu import (
    ADDRESS_SPACE,
    SOURCE_REGISTER_SHIFT,
    InstructionClass,
    encode,
)

logger = logging.getLogger(__name__)


class CodeGenerator:
    """
    Generates OT machine code from parsed statements.

    Usage:
        symbols = LabelResolver().resolve(statements)
        codegen = CodeGenerator()
        code = codegen.generate(statements, symbols)
    """

    def __init__(self) -> None:
        self._code = bytearray()
        self._symbols: Optional[SymbolTable] = None

    def generate(self, statements: list[Statement], symbols: SymbolTable) -> bytes:
        """
        Generate object code from parsed statements.

        Args:
            statements: Parsed statements in source order
            symbols: Symbol table from the label resolver

        Returns:
            One byte per non-label statement, in source order

        Raises:
            UndefinedSymbolError: If a LET refers to an undefined label
        """
        self._code = bytearray()
        self._symbols = symbols

        for stmt in statements:
            if not isinstance(stmt, LabelDef):
                self._code.extend(self._encode(stmt))

        instruction_count = sum(not isinstance(stmt, LabelDef) for stmt in statements)
        if len(self._code) != instruction_count:
            raise AssemblerError(
                f"internal error: generated {len(self._code)} bytes "
                f"for {instruction_count} instructions"
            )

        logger.debug("Generated %d bytes of code", len(self._code))
        return bytes(self._code)

    def get_code(self) -> bytes:
        """Return the code from the last call to generate()."""
        return bytes(self._code)

    # =========================================================================
    # Encoding
    # =========================================================================

    def _encode(self, stmt: Statement) -> bytes:
        """Bytes emitted for one instruction statement."""
        return bytes([self._encode_statement(stmt)])

    def _encode_statement(self, stmt: Statement) -> int:
        """Encode a single instruction statement to its byte."""
        if isinstance(stmt, LoadImmediate):
            return encode(InstructionClass.LOAD_IMMEDIATE, self._immediate_value(stmt))

        if isinstance(stmt, Calculate):
            return encode(InstructionClass.CALCULATE, stmt.operator)

        if isinstance(stmt, CopyRegister):
            operand = stmt.destination + (stmt.source << SOURCE_REGISTER_SHIFT)
            return encode(InstructionClass.COPY, operand)

        if isinstance(stmt, SetCondition):
            return encode(InstructionClass.CONDITION, stmt.condition)

        raise AssemblerError(
            f"internal error: cannot encode {type(stmt).__name__}",
            stmt.location,
        )

    def _immediate_value(self, stmt: LoadImmediate) -> int:
        """Return the literal value or the resolved label address."""
        immediate = stmt.immediate

        if isinstance(immediate, IntImmediate):
            return immediate.value

        if isinstance(immediate, LabelImmediate):
            address = self._symbols.get(immediate.name)
            if address is None:
                raise UndefinedSymbolError(
                    immediate.name,
                    location=stmt.location,
                    similar_symbols=self._symbols.similar(immediate.name),
                )
            if address >= ADDRESS_SPACE:
                raise AddressSpaceError(immediate.name, address, stmt.location)
            return address

        raise AssemblerError(
            f"internal error: unknown immediate {immediate!r}",
            stmt.location,
        )


def generate_code(statements: list[Statement], symbols: SymbolTable) -> bytes:
    """Convenience wrapper around CodeGenerator.generate()."""
    return CodeGenerator().generate(statements, symbols)
