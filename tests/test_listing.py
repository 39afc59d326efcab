# =============================================================================
# test_listing.py - Output Writer Tests
# =============================================================================
# Tests for the annotated decimal listing, raw binary and symbol file writers.
# =============================================================================

import pytest

from ot_asm.assembler.codegen import generate_code
from ot_asm.assembler.listing import (
    format_listing,
    format_symbols,
    iter_listing_lines,
    write_binary,
    write_listing,
    write_symbols,
)
from ot_asm.assembler.parser import parse_source
from ot_asm.assembler.resolver import resolve_labels
from ot_asm.errors import AssemblerError


LOOP_PROGRAM = """
LET 5
@loop:
ADD
COPY REG0 REG1
LSEQ
LET @loop
"""

LOOP_LISTING = (
    "5   # LET 5\n"
    "    # @loop:\n"
    "68  # ADD\n"
    "136 # COPY REG0 REG1\n"
    "195 # LSEQ\n"
    "1   # LET @loop\n"
)


def build(source: str):
    statements = parse_source(source)
    symbols = resolve_labels(statements)
    return statements, symbols, generate_code(statements, symbols)


# =============================================================================
# Listing Tests
# =============================================================================

class TestListing:
    """Test the annotated decimal listing."""

    def test_example_program(self):
        statements, _, code = build(LOOP_PROGRAM)
        assert format_listing(statements, code) == LOOP_LISTING

    def test_one_line_per_statement(self):
        statements, _, code = build("@a:\n@b:\nADD\n@c:")
        lines = list(iter_listing_lines(statements, code))
        assert lines == ["    # @a:", "    # @b:", "68  # ADD", "    # @c:"]

    def test_mnemonics_are_canonical(self):
        """The comment echoes the canonical form, not the source spelling."""
        statements, _, code = build("let 3\ncopy out in\ngreq")
        assert format_listing(statements, code) == (
            "3   # LET 3\n"
            "182 # COPY IO IO\n"
            "198 # GREQ\n"
        )

    def test_empty_program(self):
        assert format_listing([], b"") == ""

    def test_too_few_bytes(self):
        statements, _, code = build("ADD\nSUB")
        with pytest.raises(AssemblerError, match="not consistent"):
            format_listing(statements, code[:1])

    def test_too_many_bytes(self):
        statements, _, code = build("ADD")
        with pytest.raises(AssemblerError, match="not consistent"):
            format_listing(statements, code + b"\x00")

    def test_write_listing(self, tmp_path):
        statements, _, code = build(LOOP_PROGRAM)
        out = tmp_path / "loop.out"
        write_listing(out, statements, code)
        assert out.read_text() == LOOP_LISTING

    def test_failed_listing_writes_nothing(self, tmp_path):
        statements, _, code = build("ADD\nSUB")
        out = tmp_path / "bad.out"
        with pytest.raises(AssemblerError):
            write_listing(out, statements, b"")
        assert not out.exists()


# =============================================================================
# Binary Output Tests
# =============================================================================

class TestBinary:
    """Test raw binary output."""

    def test_write_binary(self, tmp_path):
        _, _, code = build(LOOP_PROGRAM)
        out = tmp_path / "loop.bin"
        write_binary(out, code)
        assert out.read_bytes() == bytes([5, 68, 136, 195, 1])


# =============================================================================
# Symbol File Tests
# =============================================================================

class TestSymbols:
    """Test the symbol table file."""

    def test_format_symbols(self):
        _, symbols, _ = build("@start:\nADD\n@end:\n")
        assert format_symbols(symbols) == (
            "# Symbol table\n"
            "# Generated by otasm\n"
            "end 1\n"
            "start 0\n"
        )

    def test_write_symbols(self, tmp_path):
        _, symbols, _ = build(LOOP_PROGRAM)
        out = tmp_path / "loop.sym"
        write_symbols(out, symbols)
        assert out.read_text().splitlines()[-1] == "loop 1"
