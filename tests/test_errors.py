"""Tests for error reporting and diagnostics."""

import pytest

from mobjasm import MObjParseError, ParseErrorKind, assemble, format_error
from mobjasm.errors import syntax_error


def _error(source: str) -> MObjParseError:
    with pytest.raises(MObjParseError) as excinfo:
        assemble(source)
    return excinfo.value


class TestParseError:
    """Tests for the error type itself."""

    def test_is_syntax_error(self):
        """Test errors can be caught as SyntaxError."""
        with pytest.raises(SyntaxError):
            assemble("frobnicate")

    def test_default_message(self):
        """Test each kind has a default message."""
        error = MObjParseError(ParseErrorKind.GPR_OUT_OF_RANGE, 1, 2)
        assert str(error) == "GPR out of range 0..=4095"
        assert error.span == (1, 2)
        assert error.expected == []

    def test_syntax_error_helper(self):
        """Test syntax_error carries the acceptable tokens."""
        error = syntax_error("Expected ','", 3, 4, ['","'])
        assert error.kind == ParseErrorKind.SYNTAX_ERROR
        assert error.expected == ['","']

    def test_locate(self):
        """Test offsets map to 1-based line and column."""
        source = "nop\n  goto r9999"
        error = _error(source)
        assert error.span == (12, 16)
        assert error.locate(source) == (2, 9)

    def test_no_partial_output(self):
        """Test a failing program returns nothing at all."""
        with pytest.raises(MObjParseError):
            assemble("nop\nnop\ngoto PSR200")


class TestFormatError:
    """Tests for caret diagnostics."""

    def test_tilde_underline(self):
        """Test a wide span is underlined with tildes."""
        source = "goto r4096"
        assert format_error(source, _error(source)) == (
            "<input>:1:7: GPR out of range 0..=4095\n"
            "  goto r4096\n"
            "        ~~~~"
        )

    def test_caret_and_expected_tokens(self):
        """Test a narrow span gets a caret and the acceptable tokens."""
        source = "nop\nmove r1 r2"
        text = format_error(source, _error(source), "menu.mobj")
        assert text == (
            "menu.mobj:2:9: Expected ','\n"
            "  Acceptable tokens:\n"
            '  * ","\n'
            "  move r1 r2\n"
            "          ^"
        )

    def test_end_of_input(self):
        """Test an error at end of input points past the last character."""
        source = "goto"
        text = format_error(source, _error(source))
        assert text.splitlines()[0].startswith("<input>:1:5: Unexpected end of input")
        assert text.splitlines()[-1] == "      ^"
