# =============================================================================
# test_assembler.py - Full Assembler Integration Tests
# =============================================================================
# End-to-end integration tests for the OT assembler.
# These tests verify the full pipeline from source code to listing output.
#
# Test coverage includes:
#   - Complete program assembly
#   - File and stream input
#   - Output dispatch (listing, binary, symbols)
#   - Error reporting with line numbers
#   - Label redefinition policy
# =============================================================================

import io

import pytest

from ot_asm import Assembler, AssemblerConfig, assemble, assemble_file
from ot_asm.assembler import LabelDef
from ot_asm.errors import (
    AddressSpaceError,
    AssemblerError,
    AssemblySyntaxError,
    DuplicateSymbolError,
    ImmediateRangeError,
    OtAsmError,
    UndefinedSymbolError,
)


LOOP_PROGRAM = """\
# Count down in a loop
LET 5
@loop:
ADD
COPY REG0 REG1
LSEQ
LET @loop
"""

LOOP_CODE = bytes([5, 68, 136, 195, 1])

LOOP_LISTING = (
    "5   # LET 5\n"
    "    # @loop:\n"
    "68  # ADD\n"
    "136 # COPY REG0 REG1\n"
    "195 # LSEQ\n"
    "1   # LET @loop\n"
)


# =============================================================================
# Full Assembly Pipeline Tests
# =============================================================================

class TestFullPipeline:
    """Test the complete assembly pipeline from source to code."""

    def test_example_program(self):
        asm = Assembler()
        assert asm.assemble_string(LOOP_PROGRAM) == LOOP_CODE
        assert asm.get_listing() == LOOP_LISTING

    def test_results_available_after_assembly(self):
        asm = Assembler()
        asm.assemble_string(LOOP_PROGRAM)
        assert asm.get_code() == LOOP_CODE
        assert asm.get_symbols() == {"loop": 1}
        assert asm.get_symbol_table()["loop"] == 1
        statements = asm.get_statements()
        assert len(statements) == 6
        assert isinstance(statements[1], LabelDef)

    def test_empty_program(self):
        asm = Assembler()
        assert asm.assemble_string("") == b""
        assert asm.get_listing() == ""

    def test_mixed_case_program(self):
        """Case differences in mnemonics and registers do not change the code."""
        upper = assemble("LET 3\nCOPY IO REG2\nNAND\nGR")
        lower = assemble("let 3\ncopy out reg2\nnand\ngr")
        assert upper == lower

    def test_forward_reference(self):
        code = assemble("LET @done\nEQ\nADD\n@done:\nSUB")
        assert code == bytes([3, 193, 68, 69])

    def test_reassembly_replaces_results(self):
        asm = Assembler()
        asm.assemble_string(LOOP_PROGRAM)
        asm.assemble_string("SUB")
        assert asm.get_code() == bytes([69])
        assert asm.get_symbols() == {}

    def test_failed_assembly_clears_results(self):
        asm = Assembler()
        asm.assemble_string(LOOP_PROGRAM)
        with pytest.raises(AssemblerError):
            asm.assemble_string("LET 99")
        with pytest.raises(AssemblerError, match="nothing has been assembled"):
            asm.get_listing()


# =============================================================================
# Input Tests
# =============================================================================

class TestInput:
    """Test file and stream input."""

    def test_assemble_file(self, tmp_path):
        source = tmp_path / "loop.ot"
        source.write_text(LOOP_PROGRAM)
        asm = Assembler()
        assert asm.assemble_file(source) == LOOP_CODE

    def test_assemble_file_convenience(self, tmp_path):
        source = tmp_path / "loop.ot"
        source.write_text(LOOP_PROGRAM)
        assert assemble_file(str(source)) == LOOP_CODE

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Assembler().assemble_file(tmp_path / "missing.ot")

    def test_source_read_as_utf8(self, tmp_path):
        source = tmp_path / "utf8.ot"
        source.write_bytes("# café\nADD\n".encode("utf-8"))
        assert Assembler().assemble_file(source) == bytes([68])

    def test_invalid_utf8_names_the_file(self, tmp_path):
        source = tmp_path / "bad.ot"
        source.write_bytes(b"LET 5\n\xff\xfe\n")
        with pytest.raises(UnicodeDecodeError, match="bad.ot"):
            Assembler().assemble_file(source)

    def test_errors_name_the_file(self, tmp_path):
        source = tmp_path / "bad.ot"
        source.write_text("ADD\nLET 40\n")
        with pytest.raises(ImmediateRangeError) as exc_info:
            Assembler().assemble_file(source)
        assert exc_info.value.location.filename == str(source)
        assert exc_info.value.location.line == 2

    def test_assemble_stream(self):
        asm = Assembler()
        assert asm.assemble_stream(io.StringIO(LOOP_PROGRAM)) == LOOP_CODE

    def test_stream_default_name(self):
        with pytest.raises(AssemblySyntaxError) as exc_info:
            Assembler().assemble_stream(io.StringIO("JMP"))
        assert exc_info.value.location.filename == "<stdin>"


# =============================================================================
# Output Tests
# =============================================================================

class TestOutput:
    """Test output file writing."""

    def test_write_listing(self, tmp_path):
        asm = Assembler()
        asm.assemble_string(LOOP_PROGRAM)
        out = tmp_path / "loop.out"
        asm.write_output(out)
        assert out.read_text() == LOOP_LISTING

    def test_write_binary(self, tmp_path):
        asm = Assembler(AssemblerConfig(output_format="binary"))
        asm.assemble_string(LOOP_PROGRAM)
        out = tmp_path / "loop.bin"
        asm.write_output(out)
        assert out.read_bytes() == LOOP_CODE

    def test_write_symbols(self, tmp_path):
        asm = Assembler()
        asm.assemble_string("@start:\nADD\n@end:")
        out = tmp_path / "prog.sym"
        asm.write_symbols(out)
        assert out.read_text().splitlines()[2:] == ["end 1", "start 0"]

    @pytest.mark.parametrize("method", ["write_listing", "write_binary", "write_symbols"])
    def test_write_before_assembly(self, tmp_path, method):
        asm = Assembler()
        with pytest.raises(AssemblerError, match="nothing has been assembled"):
            getattr(asm, method)(tmp_path / "out")
        assert not (tmp_path / "out").exists()


# =============================================================================
# Error Tests
# =============================================================================

class TestErrors:
    """Test that every failure mode surfaces as an OtAsmError."""

    @pytest.mark.parametrize("source,error", [
        ("FOO", AssemblySyntaxError),
        ("LET", AssemblySyntaxError),
        ("COPY REG0", AssemblySyntaxError),
        ("LET -1", ImmediateRangeError),
        ("LET @missing", UndefinedSymbolError),
        ("@x:\n@x:", DuplicateSymbolError),
        ("\n".join(["ADD"] * 64 + ["@late:"]), AddressSpaceError),
    ])
    def test_error_kinds(self, source, error):
        with pytest.raises(error) as exc_info:
            assemble(source)
        assert isinstance(exc_info.value, OtAsmError)

    def test_error_line_number(self):
        with pytest.raises(AssemblySyntaxError) as exc_info:
            assemble("LET 1\nADD\n\nMOV REG0 REG1\n", "prog.ot")
        assert str(exc_info.value).startswith("prog.ot:4:1: error:")


# =============================================================================
# Label Redefinition Tests
# =============================================================================

class TestRedefinition:
    """Test the allow_redefinition setting."""

    SOURCE = "@x:\nADD\n@x:\nLET @x"

    def test_default_rejects(self):
        with pytest.raises(DuplicateSymbolError):
            Assembler().assemble_string(self.SOURCE)

    def test_config_allows(self):
        asm = Assembler(AssemblerConfig(allow_redefinition=True))
        assert asm.assemble_string(self.SOURCE) == bytes([68, 1])

    def test_convenience_function_allows(self):
        assert assemble(self.SOURCE, allow_redefinition=True) == bytes([68, 1])
