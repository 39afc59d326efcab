"""
OT Assembler
============

This package provides the assembler for the OT toy processor, an 8-bit
machine whose every instruction is exactly one byte.

Main Components
---------------
- **Assembler**: Main assembler class that orchestrates the assembly process
- **Lexer**: Splits source lines into classified tokens
- **Parser**: Parses tokens into statements (LET, ALU ops, COPY, conditions, labels)
- **LabelResolver**: Assigns instruction addresses to labels (pass 1)
- **CodeGenerator**: Encodes statements into bytes (pass 2)
- **listing**: Annotated decimal listing, raw binary and symbol file writers

Example Usage
-------------
>>> from ot_asm.assembler import assemble
>>> list(assemble("LET 5\\nADD\\n"))
[5, 68]
"""

from ot_asm.assembler.assembler import Assembler, assemble, assemble_file
from ot_asm.assembler.lexer import Lexer, Token, TokenType
from ot_asm.assembler.parser import (
    Parser,
    Statement,
    LabelDef,
    LoadImmediate,
    Calculate,
    CopyRegister,
    SetCondition,
    Immediate,
    IntImmediate,
    LabelImmediate,
    parse_source,
)
from ot_asm.assembler.resolver import LabelResolver, Symbol, SymbolTable, resolve_labels
from ot_asm.assembler.codegen import CodeGenerator, generate_code
from ot_asm.assembler.listing import format_listing, format_symbols

__all__ = [
    # Main class and functions
    "Assembler",
    "assemble",
    "assemble_file",
    # Lexer
    "Lexer",
    "Token",
    "TokenType",
    # Parser
    "Parser",
    "Statement",
    "LabelDef",
    "LoadImmediate",
    "Calculate",
    "CopyRegister",
    "SetCondition",
    "Immediate",
    "IntImmediate",
    "LabelImmediate",
    "parse_source",
    # Label resolution
    "LabelResolver",
    "Symbol",
    "SymbolTable",
    "resolve_labels",
    # Code generator
    "CodeGenerator",
    "generate_code",
    # Output
    "format_listing",
    "format_symbols",
]
