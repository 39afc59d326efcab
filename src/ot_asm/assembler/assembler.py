"""
OT Assembler - Main Interface
=============================

This module provides the main Assembler class, which is the primary interface
for assembling OT source code. It runs the lexer, parser, label resolver and
code generator in order and keeps each stage's result for the output writers.

Example Usage
-------------
>>> from ot_asm.assembler import Assembler
>>>
>>> asm = Assembler()
>>> asm.assemble_string('''
... LET 5
... @loop:
... ADD
... COPY REG0 REG1
... LSEQ
... LET @loop
... ''')
b'\\x05D\\x88\\xc3\\x01'
>>> print(asm.get_listing(), end="")
5   # LET 5
    # @loop:
68  # ADD
136 # COPY REG0 REG1
195 # LSEQ
1   # LET @loop

Assembly Process
----------------
1. **Parsing (Lexer + Parser)**: source text to statements
2. **Label resolution (LabelResolver)**: labels to instruction addresses
3. **Code generation (CodeGenerator)**: one byte per instruction

Any error aborts the run before anything is written.
"""

from pathlib import Path
from typing import Optional, TextIO
import logging

from ot_asm.config import AssemblerConfig
from ot_asm.errors import AssemblerError
from ot_asm.assembler.parser import Statement, parse_source
from ot_asm.assembler.resolver import LabelResolver, SymbolTable
from ot_asm.assembler.codegen import CodeGenerator
from ot_asm.assembler import listing

logger = logging.getLogger(__name__)


class Assembler:
    """
    Main OT assembler class.

    Attributes:
        config: Settings for this assembler (output format, label policy)
    """

    def __init__(self, config: Optional[AssemblerConfig] = None):
        """
        Initialize the assembler.

        Args:
            config: Assembler settings; defaults to AssemblerConfig()
        """
        self.config = config or AssemblerConfig()
        self._source_name: Optional[str] = None
        self._statements: list[Statement] = []
        self._symbols: SymbolTable = SymbolTable({})
        self._code: bytes = b""
        self._assembled = False

    # =========================================================================
    # Assembly Methods
    # =========================================================================

    def assemble_string(self, source: str, filename: str = "<input>") -> bytes:
        """
        Assemble source code from a string.

        Args:
            source: Assembly source code
            filename: Virtual filename for error messages

        Returns:
            Generated machine code, one byte per instruction

        Raises:
            AssemblerError: If assembly fails
        """
        self._assembled = False
        self._source_name = filename
        logger.debug("Assembling %s", filename)

        statements = parse_source(source, filename)

        resolver = LabelResolver(allow_redefinition=self.config.allow_redefinition)
        symbols = resolver.resolve(statements)

        code = CodeGenerator().generate(statements, symbols)

        self._statements = statements
        self._symbols = symbols
        self._code = code
        self._assembled = True

        logger.debug(
            "%s: %d statements, %d labels, %d bytes",
            filename, len(statements), len(symbols), len(code),
        )
        return code

    def assemble_stream(self, stream: TextIO, filename: str = "<stdin>") -> bytes:
        """
        Assemble source code read from an open text stream.

        The whole stream is read before parsing starts.
        """
        return self.assemble_string(stream.read(), filename)

    def assemble_file(self, filepath: str | Path) -> bytes:
        """
        Assemble source code from a file.

        Source files are read as UTF-8.

        Raises:
            AssemblerError: If assembly fails
            FileNotFoundError: If source file not found
            UnicodeDecodeError: If the file is not valid UTF-8; the reason
                                names the file
        """
        filepath = Path(filepath)
        try:
            source = filepath.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            e.reason = f"{e.reason} in {filepath}"
            raise
        return self.assemble_string(source, str(filepath))

    # =========================================================================
    # Results
    # =========================================================================

    def get_statements(self) -> list[Statement]:
        """Return the parsed statements from the last assembly."""
        return list(self._statements)

    def get_code(self) -> bytes:
        """Return the generated machine code."""
        return self._code

    def get_symbols(self) -> dict[str, int]:
        """Return a dictionary of label names to addresses."""
        return self._symbols.as_dict()

    def get_symbol_table(self) -> SymbolTable:
        """Return the read-only symbol table."""
        return self._symbols

    def get_listing(self) -> str:
        """Return the annotated decimal listing."""
        self._require_result()
        return listing.format_listing(self._statements, self._code)

    # =========================================================================
    # Output Methods
    # =========================================================================

    def write_output(self, filepath: str | Path) -> None:
        """Write the primary output in the configured format."""
        if self.config.output_format == "binary":
            self.write_binary(filepath)
        else:
            self.write_listing(filepath)

    def write_listing(self, filepath: str | Path) -> None:
        """Write the annotated decimal listing."""
        self._require_result()
        listing.write_listing(filepath, self._statements, self._code)
        logger.info("Wrote listing to %s", filepath)

    def write_binary(self, filepath: str | Path) -> None:
        """Write raw machine code (one byte per instruction, no header)."""
        self._require_result()
        listing.write_binary(filepath, self._code)
        logger.info("Wrote %d bytes to %s", len(self._code), filepath)

    def write_symbols(self, filepath: str | Path) -> None:
        """Write the symbol table file."""
        self._require_result()
        listing.write_symbols(filepath, self._symbols)
        logger.info("Wrote symbols to %s", filepath)

    def _require_result(self) -> None:
        if not self._assembled:
            raise AssemblerError("nothing has been assembled")


# =============================================================================
# Convenience Functions
# =============================================================================

def assemble(source: str, filename: str = "<input>", allow_redefinition: bool = False) -> bytes:
    """
    Convenience function to assemble source code.

    Returns:
        Generated machine code

    Raises:
        AssemblerError: If assembly fails
    """
    asm = Assembler(AssemblerConfig(allow_redefinition=allow_redefinition))
    return asm.assemble_string(source, filename)


def assemble_file(filepath: str | Path, allow_redefinition: bool = False) -> bytes:
    """
    Convenience function to assemble a file.

    Raises:
        AssemblerError: If assembly fails
        FileNotFoundError: If source file not found
    """
    asm = Assembler(AssemblerConfig(allow_redefinition=allow_redefinition))
    return asm.assemble_file(filepath)
