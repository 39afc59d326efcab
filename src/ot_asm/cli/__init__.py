"""
OT-ASM Command-Line Interface
=============================

- **otasm**: OT assembler

The tool is implemented as a Click-based CLI application with
comprehensive help and error reporting.
"""

__all__ = ["otasm"]
