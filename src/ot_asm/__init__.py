"""
OT-ASM - Assembler for the OT Toy Processor
===========================================

This package translates OT assembly mnemonics into one-byte machine
instructions, rendered as an annotated decimal listing or a raw binary
image.

The OT processor has a 7-entry register file (REG0-REG5 and an I/O
register), a six-operation ALU and eight branch conditions. Each
instruction is a single byte whose top two bits select its class.

Main Components
---------------
- **assembler**: Lexer, parser, label resolver, code generator and
  listing writer
- **cpu**: Instruction set tables (operators, conditions, registers)
- **cli**: The ``otasm`` command-line tool

Quick Start
-----------
Assemble a program:
    >>> from ot_asm import Assembler
    >>> asm = Assembler()
    >>> code = asm.assemble_file("loop.ot")
    >>> asm.write_listing("loop.out")

Or use the command-line tool:
    $ otasm loop.ot              # writes loop.out
    $ otasm - < loop.ot          # writes stdin.out
    $ otasm -f binary loop.ot    # writes loop.bin
"""

__version__ = "0.1.0"

from ot_asm.assembler import Assembler, assemble, assemble_file
from ot_asm.config import AssemblerConfig
from ot_asm.errors import (
    OtAsmError,
    AssemblerError,
    AssemblySyntaxError,
    UnknownRegisterError,
    UnknownConditionError,
    ImmediateRangeError,
    AddressSpaceError,
    UndefinedSymbolError,
    DuplicateSymbolError,
    SourceLocation,
)

__all__ = [
    "__version__",
    # Assembler
    "Assembler",
    "AssemblerConfig",
    "assemble",
    "assemble_file",
    # Exception hierarchy
    "OtAsmError",
    "AssemblerError",
    "AssemblySyntaxError",
    "UnknownRegisterError",
    "UnknownConditionError",
    "ImmediateRangeError",
    "AddressSpaceError",
    "UndefinedSymbolError",
    "DuplicateSymbolError",
    "SourceLocation",
]
