# =============================================================================
# test_assembler.py - Full Assembler Integration Tests
# =============================================================================
# End-to-end integration tests for the complete Hack assembler.
# These tests verify the full pipeline from source code to .hack output.
#
# Test coverage includes:
#   - Complete program assembly against reference output
#   - Symbol table, listing and .hack output files
#   - Pre-defined symbols and configuration
#   - Error reporting with line numbers
# =============================================================================

import pytest

from hack_sdk import assemble, assemble_file
from hack_sdk.assembler import Assembler
from hack_sdk.config import AssemblerConfig
from hack_sdk.errors import (
    AddressOutOfRangeError,
    AssemblerError,
    DuplicateSymbolError,
    HackError,
    UnknownComputationError,
)


# Fills the first R0 rows of the screen's left column, one word per row.
FILL_SOURCE = """\
// Fill.asm: blacken RAM[0] screen rows
    @R0
    D=M
    @n
    M=D         // n = R0
    @SCREEN
    D=A
    @addr
    M=D         // addr = SCREEN
(LOOP)
    @n
    D=M
    @END
    D;JLE       // if n <= 0 goto END
    @addr
    A=M
    M=-1        // RAM[addr] = -1
    D=A
    @32
    D=D+A
    @addr
    M=D         // addr += 32
    @n
    M=M-1       // n--
    @LOOP
    0;JMP
(END)
    @END
    0;JMP
"""

FILL_HACK = [
    "0000000000000000",
    "1111110000010000",
    "0000000000010000",
    "1110001100001000",
    "0100000000000000",
    "1110110000010000",
    "0000000000010001",
    "1110001100001000",
    "0000000000010000",
    "1111110000010000",
    "0000000000011000",
    "1110001100000110",
    "0000000000010001",
    "1111110000100000",
    "1110111010001000",
    "1110110000010000",
    "0000000000100000",
    "1110000010010000",
    "0000000000010001",
    "1110001100001000",
    "0000000000010000",
    "1111110010001000",
    "0000000000001000",
    "1110101010000111",
    "0000000000011000",
    "1110101010000111",
]

# nand2tetris project 06 Max.asm
MAX_SOURCE = """\
// Computes R2 = max(R0, R1)
   @R0
   D=M              // D = first number
   @R1
   D=D-M            // D = first number - second number
   @OUTPUT_FIRST
   D;JGT            // if D>0 (first is greater) goto output_first
   @R1
   D=M              // D = second number
   @OUTPUT_D
   0;JMP            // goto output_d
(OUTPUT_FIRST)
   @R0
   D=M              // D = first number
(OUTPUT_D)
   @R2
   M=D              // M[2] = D (greatest number)
(INFINITE_LOOP)
   @INFINITE_LOOP
   0;JMP            // infinite loop
"""

MAX_HACK = [
    "0000000000000000",
    "1111110000010000",
    "0000000000000001",
    "1111010011010000",
    "0000000000001010",
    "1110001100000001",
    "0000000000000001",
    "1111110000010000",
    "0000000000001100",
    "1110101010000111",
    "0000000000000000",
    "1111110000010000",
    "0000000000000010",
    "1110001100001000",
    "0000000000001110",
    "1110101010000111",
]


# =============================================================================
# Full Assembly Pipeline Tests
# =============================================================================

class TestFullPipeline:
    """Test the complete assembly pipeline."""

    def test_fill_program(self):
        """Screen-fill loop with labels and variables matches reference."""
        assert assemble(FILL_SOURCE) == FILL_HACK

    def test_fill_program_symbols(self):
        asm = Assembler()
        asm.assemble_string(FILL_SOURCE)
        symbols = asm.get_symbols()
        assert symbols["LOOP"] == 8
        assert symbols["END"] == 24
        assert symbols["n"] == 16
        assert symbols["addr"] == 17

    def test_max_program(self):
        assert assemble(MAX_SOURCE) == MAX_HACK

    def test_every_word_is_16_bits(self):
        for word in assemble(FILL_SOURCE):
            assert len(word) == 16
            assert set(word) <= {"0", "1"}

    def test_minimal_program(self):
        assert assemble("@17") == ["0000000000010001"]

    def test_empty_source(self):
        assert assemble("") == []

    def test_only_comments(self):
        assert assemble("// just a comment\n\n// another\n") == []

    def test_runs_are_independent(self):
        """Each run starts from a fresh symbol table."""
        asm = Assembler()
        asm.assemble_string("@a\n@b")
        assert asm.assemble_string("@b") == ["0000000000010000"]
        assert "a" not in asm.get_symbols()

    def test_windows_line_endings(self):
        source = MAX_SOURCE.replace("\n", "\r\n")
        assert assemble(source) == MAX_HACK

    def test_bare_carriage_returns(self):
        """A lone '\\r' separates instructions but does not start a line."""
        assert assemble("@2\rD=A\r") == ["0000000000000010", "1110110000010000"]
        with pytest.raises(UnknownComputationError) as exc_info:
            assemble("@1\rD=D+D\r")
        assert exc_info.value.location.line == 1

    def test_control_characters_in_comments(self):
        source = "// page\x0cbreak\x0bx\x1cy\n@2\nD=A\n"
        assert assemble(source) == ["0000000000000010", "1110110000010000"]


# =============================================================================
# Error Handling Tests
# =============================================================================

class TestErrorHandling:
    """Test error reporting."""

    def test_error_line_number(self):
        source = "@1\nD=A\n\nD=D+D\n"
        with pytest.raises(UnknownComputationError) as exc_info:
            assemble(source, "Bad.asm")
        assert exc_info.value.location.line == 4
        assert "Bad.asm:4:3" in str(exc_info.value)

    def test_no_partial_output(self):
        asm = Assembler()
        asm.assemble_string("@1")
        with pytest.raises(AssemblerError):
            asm.assemble_string("@2\n@99999")
        assert asm.get_code() == ["0000000000000001"]

    def test_duplicate_label(self):
        with pytest.raises(DuplicateSymbolError):
            assemble("(LOOP)\n@LOOP\n(LOOP)\n0;JMP")

    def test_errors_share_base_class(self):
        with pytest.raises(HackError):
            assemble("(BROKEN")


# =============================================================================
# Pre-defined Symbol and Configuration Tests
# =============================================================================

class TestConfiguration:
    """Test defines and AssemblerConfig."""

    def test_predefined_symbol(self):
        asm = Assembler(defines={"LIMIT": 100})
        assert asm.assemble_string("@LIMIT") == [format(100, "016b")]

    def test_define_symbol_method(self):
        asm = Assembler()
        asm.define_symbol("BASE", 2048)
        assert asm.assemble_string("@BASE") == [format(2048, "016b")]

    def test_define_out_of_range(self):
        asm = Assembler()
        with pytest.raises(AddressOutOfRangeError):
            asm.define_symbol("BIG", 40000)

    def test_label_cannot_rebind_define(self):
        asm = Assembler(defines={"LIMIT": 100})
        with pytest.raises(DuplicateSymbolError):
            asm.assemble_string("(LIMIT)\n@LIMIT")

    def test_variable_base(self):
        asm = Assembler(config=AssemblerConfig(variable_base=256))
        assert asm.assemble_string("@x") == [format(256, "016b")]

    def test_allow_redefinition(self):
        asm = Assembler(config=AssemblerConfig(allow_redefinition=True))
        words = asm.assemble_string("(SCREEN)\n@SCREEN")
        assert words == ["0000000000000000"]

    def test_config_defaults(self):
        config = AssemblerConfig()
        assert config.variable_base == 16
        assert config.allow_redefinition is False

    def test_config_from_env(self, monkeypatch):
        monkeypatch.setenv("HACKASM_VARIABLE_BASE", "64")
        monkeypatch.setenv("HACKASM_ALLOW_REDEFINITION", "yes")
        config = AssemblerConfig.from_env()
        assert config.variable_base == 64
        assert config.allow_redefinition is True

    def test_config_from_env_ignores_invalid(self, monkeypatch):
        monkeypatch.setenv("HACKASM_VARIABLE_BASE", "lots")
        monkeypatch.delenv("HACKASM_ALLOW_REDEFINITION", raising=False)
        config = AssemblerConfig.from_env()
        assert config.variable_base == 16
        assert config.allow_redefinition is False


# =============================================================================
# Output Tests
# =============================================================================

class TestOutput:
    """Test listing, symbol and .hack output."""

    def test_get_instructions_includes_labels(self):
        asm = Assembler()
        asm.assemble_string(MAX_SOURCE)
        instructions = asm.get_instructions()
        assert len(instructions) == 19
        assert len(asm.get_code()) == 16

    def test_listing(self):
        asm = Assembler()
        asm.assemble_string(MAX_SOURCE)
        listing = asm.get_listing()
        assert "Hack Assembler Listing" in listing
        assert "   10  0000000000000000" in listing
        assert "(OUTPUT_FIRST)" in listing
        assert "OUTPUT_FIRST         = 10" in listing

    def test_listing_with_form_feed_in_comment(self):
        asm = Assembler()
        asm.assemble_string("@1 // a\x0cb\nD=A\n")
        listing = asm.get_listing()
        assert "    1  1110110000010000     2  D=A" in listing

    def test_duplicate_error_with_form_feed_in_comment(self):
        with pytest.raises(DuplicateSymbolError) as exc_info:
            assemble("(X) // a\x0cb\n@1\n(X)\n")
        assert exc_info.value.source_line == "(X)"

    def test_write_hack(self, tmp_path):
        out = tmp_path / "Max.hack"
        asm = Assembler()
        asm.assemble(MAX_SOURCE, output_path=out)
        assert out.read_text().splitlines() == MAX_HACK
        assert out.read_text().endswith("\n")

    def test_write_symbols(self, tmp_path):
        out = tmp_path / "Fill.sym"
        asm = Assembler()
        asm.assemble_string(FILL_SOURCE)
        asm.write_symbols(out)
        lines = out.read_text().splitlines()
        assert lines[0] == "# Symbol table"
        assert "LOOP 8" in lines
        assert "addr 17" in lines

    def test_write_listing(self, tmp_path):
        out = tmp_path / "Fill.lst"
        asm = Assembler()
        asm.assemble_string(FILL_SOURCE)
        asm.write_listing(out)
        assert "Symbol Table" in out.read_text()


# =============================================================================
# File I/O Tests
# =============================================================================

class TestFileIO:
    """Test assembling from files."""

    def test_assemble_from_file(self, tmp_path):
        source = tmp_path / "Fill.asm"
        source.write_text(FILL_SOURCE)
        assert assemble_file(source) == FILL_HACK

    def test_filename_in_errors(self, tmp_path):
        source = tmp_path / "Broken.asm"
        source.write_text("@1\n(OOPS\n")
        with pytest.raises(AssemblerError) as exc_info:
            Assembler().assemble_file(source)
        assert exc_info.value.location.filename == str(source)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            assemble_file(tmp_path / "missing.asm")
