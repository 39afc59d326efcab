"""
OT-ASM CPU Package
==================

Instruction set definitions for the OT toy processor, shared by the
parser (which looks up mnemonics and register names) and the code
generator (which packs class tags and operands into bytes).

Usage:
    from ot_asm.cpu import (
        InstructionClass,
        Operator,
        Register,
        get_register,
    )
"""

from ot_asm.cpu.isa import (
    # Field widths
    CLASS_SHIFT,
    OPERAND_MASK,
    SOURCE_REGISTER_SHIFT,
    IMMEDIATE_BITS,
    MAX_IMMEDIATE,
    ADDRESS_BITS,
    ADDRESS_SPACE,
    # Core types
    InstructionClass,
    Operator,
    Condition,
    Register,
    # Name tables
    OPERATORS,
    CONDITIONS,
    REGISTERS,
    LOAD_MNEMONIC,
    COPY_MNEMONIC,
    MNEMONICS,
    # Lookup functions
    get_operator,
    get_condition,
    get_register,
    is_operator,
    is_condition,
    instruction_class,
    encode,
)

__all__ = [
    "CLASS_SHIFT",
    "OPERAND_MASK",
    "SOURCE_REGISTER_SHIFT",
    "IMMEDIATE_BITS",
    "MAX_IMMEDIATE",
    "ADDRESS_BITS",
    "ADDRESS_SPACE",
    "InstructionClass",
    "Operator",
    "Condition",
    "Register",
    "OPERATORS",
    "CONDITIONS",
    "REGISTERS",
    "LOAD_MNEMONIC",
    "COPY_MNEMONIC",
    "MNEMONICS",
    "get_operator",
    "get_condition",
    "get_register",
    "is_operator",
    "is_condition",
    "instruction_class",
    "encode",
]
