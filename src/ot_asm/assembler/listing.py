"""
OT Listing Writer
=================

Renders assembled code as an annotated decimal listing, one line per
statement, in source order:

```
5   # LET 5
    # @loop:
68  # ADD
136 # COPY REG0 REG1
195 # LSEQ
1   # LET @loop
```

Label definitions become comment-only lines so that the listing keeps
every label in place without emitting a byte for it.
"""

from pathlib import Path
from typing import Iterator

from ot_asm.errors import AssemblerError
from ot_asm.assembler.parser import Statement, LabelDef
from ot_asm.assembler.resolver import SymbolTable


def iter_listing_lines(statements: list[Statement], code: bytes) -> Iterator[str]:
    """
    Yield listing lines (without newlines) for statements and their code.

    The bytes are consumed in lockstep with the non-label statements.

    Raises:
        AssemblerError: If code and statements disagree in length
    """
    code_iter = iter(code)
    for stmt in statements:
        if isinstance(stmt, LabelDef):
            yield f"    # {stmt}"
            continue

        byte = next(code_iter, None)
        if byte is None:
            raise AssemblerError(
                "internal error: length of code and statements is not consistent",
                stmt.location,
            )
        yield f"{byte:<3} # {stmt}"

    if next(code_iter, None) is not None:
        raise AssemblerError("internal error: length of code and statements is not consistent")


def format_listing(statements: list[Statement], code: bytes) -> str:
    """Return the full listing as a string, each line ending in a newline."""
    return "".join(f"{line}\n" for line in iter_listing_lines(statements, code))


def write_listing(filepath: str | Path, statements: list[Statement], code: bytes) -> None:
    """Write the listing to a file."""
    # Render first so a failure leaves no partial file behind
    listing = format_listing(statements, code)
    with open(filepath, "w") as f:
        f.write(listing)


def write_binary(filepath: str | Path, code: bytes) -> None:
    """Write the raw machine code, one byte per instruction, no header."""
    Path(filepath).write_bytes(code)


def format_symbols(symbols: SymbolTable) -> str:
    """
    Format the symbol table.

    Format: name address (one per line, sorted by name)
    """
    lines = ["# Symbol table", "# Generated by otasm"]
    for name in sorted(symbols):
        lines.append(f"{name} {symbols[name]}")
    return "".join(f"{line}\n" for line in lines)


def write_symbols(filepath: str | Path, symbols: SymbolTable) -> None:
    """Write the symbol table file."""
    with open(filepath, "w") as f:
        f.write(format_symbols(symbols))
