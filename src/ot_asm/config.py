"""
OT-ASM Configuration
====================

Assembler settings. Configuration can come from:
- Default values (defined here)
- Environment variables (AssemblerConfig.from_env)
- Command-line flags, which the CLI applies on top of the environment

Environment variables (all optional):
    OTASM_FORMAT: Output format, "listing" or "binary"
    OTASM_ALLOW_REDEFINITION: "1"/"true"/"yes" to let a label be redefined
    OTASM_VERBOSE: "1"/"true"/"yes" for debug logging
"""

from dataclasses import dataclass
import os


OUTPUT_FORMATS = ("listing", "binary")

# File extension used for each output format when no output path is given
OUTPUT_EXTENSIONS = {
    "listing": ".out",
    "binary": ".bin",
}

# Output stem used when the source is read from standard input
STDIN_STEM = "stdin"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


@dataclass
class AssemblerConfig:
    """
    Configuration for an assembly run.

    Attributes:
        output_format: "listing" (annotated decimal text) or "binary"
        allow_redefinition: If True, a redefined label takes its last
                            address; if False (default) it is an error
        verbose: Enable debug logging
    """

    output_format: str = "listing"
    allow_redefinition: bool = False
    verbose: bool = False

    def __post_init__(self) -> None:
        self.output_format = self.output_format.lower()
        if self.output_format not in OUTPUT_FORMATS:
            raise ValueError(
                f"unknown output format '{self.output_format}'. "
                f"Valid formats: {', '.join(OUTPUT_FORMATS)}"
            )

    @property
    def output_extension(self) -> str:
        """Extension given to derived output paths for this format."""
        return OUTPUT_EXTENSIONS[self.output_format]

    @classmethod
    def from_env(cls) -> "AssemblerConfig":
        """
        Create AssemblerConfig from environment variables.

        Invalid OTASM_FORMAT values are ignored.
        """
        config = cls()

        if output_format := os.environ.get("OTASM_FORMAT"):
            if output_format.lower() in OUTPUT_FORMATS:
                config.output_format = output_format.lower()

        if allow := os.environ.get("OTASM_ALLOW_REDEFINITION"):
            config.allow_redefinition = allow.lower() in _TRUE_VALUES

        if verbose := os.environ.get("OTASM_VERBOSE"):
            config.verbose = verbose.lower() in _TRUE_VALUES

        return config
