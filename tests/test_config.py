# =============================================================================
# test_config.py - Assembler Configuration Tests
# =============================================================================

import pytest

from ot_asm.config import AssemblerConfig


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("OTASM_FORMAT", "OTASM_ALLOW_REDEFINITION", "OTASM_VERBOSE"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestDefaults:
    """Test default values and validation."""

    def test_defaults(self):
        config = AssemblerConfig()
        assert config.output_format == "listing"
        assert config.allow_redefinition is False
        assert config.verbose is False

    def test_output_extension(self):
        assert AssemblerConfig().output_extension == ".out"
        assert AssemblerConfig(output_format="binary").output_extension == ".bin"

    def test_format_normalized(self):
        assert AssemblerConfig(output_format="Binary").output_format == "binary"

    def test_unknown_format(self):
        with pytest.raises(ValueError, match="unknown output format 'hex'"):
            AssemblerConfig(output_format="hex")


class TestFromEnv:
    """Test AssemblerConfig.from_env()."""

    def test_empty_environment(self, clean_env):
        assert AssemblerConfig.from_env() == AssemblerConfig()

    def test_format(self, clean_env):
        clean_env.setenv("OTASM_FORMAT", "BINARY")
        assert AssemblerConfig.from_env().output_format == "binary"

    def test_invalid_format_ignored(self, clean_env):
        clean_env.setenv("OTASM_FORMAT", "hex")
        assert AssemblerConfig.from_env().output_format == "listing"

    @pytest.mark.parametrize("value,expected", [
        ("1", True),
        ("true", True),
        ("YES", True),
        ("0", False),
        ("no", False),
    ])
    def test_flags(self, clean_env, value, expected):
        clean_env.setenv("OTASM_ALLOW_REDEFINITION", value)
        clean_env.setenv("OTASM_VERBOSE", value)
        config = AssemblerConfig.from_env()
        assert config.allow_redefinition is expected
        assert config.verbose is expected
