"""
OT Instruction Set Definition
=============================

This module defines the complete instruction set of the OT toy processor.
Every instruction is a single byte: the top 2 bits select the instruction
class and the bottom 6 bits carry its operand.

Instruction Classes
-------------------
| Tag  | Class          | Mnemonic     | Operand bits                  |
|------|----------------|--------------|-------------------------------|
| `00` | LOAD_IMMEDIATE | LET n/@label | 6-bit value (literals 0..31)  |
| `01` | CALCULATE      | OR..SUB      | operator index (0..5)         |
| `10` | COPY           | COPY dst src | dst + (src << 3)              |
| `11` | CONDITION      | OFF..GR      | condition index (0..7)        |

Register File
-------------
REG0..REG5 are general purpose. The seventh register is the I/O port,
reachable under three names (IO, IN, OUT). The alias says nothing about
direction: ``COPY OUT REG0`` and ``COPY IN REG0`` encode identically.
"""

from enum import IntEnum
from typing import Optional


# =============================================================================
# Field Widths
# =============================================================================

CLASS_SHIFT = 6             # Class tag lives in bits 6-7
OPERAND_MASK = 0x3F         # Bottom 6 bits
SOURCE_REGISTER_SHIFT = 3   # COPY source register lives in bits 3-5

IMMEDIATE_BITS = 5
MAX_IMMEDIATE = (1 << IMMEDIATE_BITS) - 1   # 31

ADDRESS_BITS = 6
ADDRESS_SPACE = 1 << ADDRESS_BITS           # 64 addressable instructions


# =============================================================================
# Enumerations
# =============================================================================

class InstructionClass(IntEnum):
    """2-bit class tag stored in the top bits of every instruction byte."""
    LOAD_IMMEDIATE = 0
    CALCULATE = 1
    COPY = 2
    CONDITION = 3

    @property
    def tag(self) -> int:
        """The class value shifted into bits 6-7."""
        return self.value << CLASS_SHIFT


class Operator(IntEnum):
    """ALU operations selected by a CALCULATE instruction."""
    OR = 0
    NAND = 1
    NOR = 2
    AND = 3
    ADD = 4
    SUB = 5


class Condition(IntEnum):
    """Conditions selected by a CONDITION instruction."""
    OFF = 0     # Never
    EQ = 1      # Equal to zero
    LS = 2      # Less than zero
    LSEQ = 3    # Less than or equal to zero
    ON = 4      # Always
    NEQ = 5     # Not equal to zero
    GREQ = 6    # Greater than or equal to zero
    GR = 7      # Greater than zero


class Register(IntEnum):
    """Register file. Fits in 3 bits."""
    REG0 = 0
    REG1 = 1
    REG2 = 2
    REG3 = 3
    REG4 = 4
    REG5 = 5
    IO = 6


# =============================================================================
# Name Tables
# =============================================================================

OPERATORS: dict[str, Operator] = {op.name: op for op in Operator}

CONDITIONS: dict[str, Condition] = {cond.name: cond for cond in Condition}

# IN and OUT are the same physical register as IO
REGISTERS: dict[str, Register] = {
    **{reg.name: reg for reg in Register},
    "IN": Register.IO,
    "OUT": Register.IO,
}

LOAD_MNEMONIC = "LET"
COPY_MNEMONIC = "COPY"

MNEMONICS = frozenset({LOAD_MNEMONIC, COPY_MNEMONIC, *OPERATORS, *CONDITIONS})


# =============================================================================
# Lookup Functions
# =============================================================================

def get_operator(name: str) -> Optional[Operator]:
    """Look up an operator by name (case-insensitive)."""
    return OPERATORS.get(name.upper())


def get_condition(name: str) -> Optional[Condition]:
    """Look up a condition by name (case-insensitive)."""
    return CONDITIONS.get(name.upper())


def get_register(name: str) -> Optional[Register]:
    """
    Look up a register by name (case-insensitive).

    IO, IN and OUT all return Register.IO.
    """
    return REGISTERS.get(name.upper())


def is_operator(name: str) -> bool:
    return name.upper() in OPERATORS


def is_condition(name: str) -> bool:
    return name.upper() in CONDITIONS


def instruction_class(byte: int) -> InstructionClass:
    """Decode the class tag of an encoded instruction byte."""
    return InstructionClass((byte >> CLASS_SHIFT) & 0b11)


def encode(cls: InstructionClass, operand: int) -> int:
    """
    Pack a class tag and a 6-bit operand into one instruction byte.

    Raises:
        ValueError: If the operand does not fit in 6 bits
    """
    if not 0 <= operand <= OPERAND_MASK:
        raise ValueError(f"operand {operand} does not fit in 6 bits")
    return cls.tag | operand
