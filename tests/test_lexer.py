"""Tests for the MObj lexer."""

import sys
sys.path.insert(0, '..')

import pytest

from mobjasm import MObjParseError, ParseErrorKind
from mobjasm.lexer import Lexer, TokenType, tokenize


def test_basic_statement():
    """Test lexing a basic statement."""
    tokens = tokenize("goto 1")

    assert tokens[0].type == TokenType.KEYWORD
    assert tokens[0].value == "goto"
    assert (tokens[0].start, tokens[0].end) == (0, 4)
    assert tokens[1].type == TokenType.NUMBER
    assert tokens[1].value == 1
    assert (tokens[1].start, tokens[1].end) == (5, 6)
    assert tokens[2].type == TokenType.EOF


def test_numbers():
    """Test decimal and hex literals."""
    numbers = [t.value for t in tokenize("move 255, 0xFF, 0X1a, 007") if t.type == TokenType.NUMBER]
    assert numbers == [255, 255, 26, 7]


def test_register_prefixes_split_from_numbers():
    """Test r/PSR prefixes lex separately from their index."""
    tokens = tokenize("r12 PSR0x10")
    assert [(t.type, t.value) for t in tokens[:4]] == [
        (TokenType.KEYWORD, "r"), (TokenType.NUMBER, 12),
        (TokenType.KEYWORD, "psr"), (TokenType.NUMBER, 16),
    ]


def test_keywords_are_case_insensitive():
    """Test keywords fold to lower case."""
    values = [t.value for t in tokenize("NOP Move R1 psr2 NONE Enabled SKIP_OUT")[:-1]]
    assert values == ["nop", "move", "r", 1, "psr", 2, "none", "enabled", "skip_out"]


def test_maximal_munch():
    """Test longer keywords win over their prefixes."""
    for text in ("set_stream_ss", "SET_STREAM_SS", "play_pl_pi", "resume", "rnd", "none"):
        tokens = tokenize(text)
        assert len(tokens) == 2, text
        assert tokens[0].value == text.lower()
    assert [t.value for t in tokenize("set_stream")[:-1]] == ["set_stream"]


def test_comments():
    """Test comment handling."""
    tokens = tokenize("/* block\n comment */ nop // line comment\n// another\nbreak")
    keywords = [t.value for t in tokens if t.type == TokenType.KEYWORD]
    assert keywords == ["nop", "break"]


def test_line_tracking():
    """Test line and column of tokens."""
    tokens = tokenize("nop\n  goto 3")
    assert (tokens[1].line, tokens[1].column) == (2, 3)


def test_offsets_are_bytes():
    """Test offsets count UTF-8 bytes, not characters."""
    tokens = tokenize("/* é */ nop")
    assert tokens[0].start == 9
    assert tokens[0].end == 12


def test_unterminated_block_comment():
    """Test an unclosed /* is a syntax error spanning to end of input."""
    with pytest.raises(MObjParseError) as excinfo:
        tokenize("nop /* abc")
    assert excinfo.value.kind == ParseErrorKind.SYNTAX_ERROR
    assert excinfo.value.span == (4, 10)


def test_invalid_token_spans_word():
    """Test an unknown word is reported as a whole."""
    with pytest.raises(MObjParseError) as excinfo:
        tokenize("frobnicate 1, 2")
    assert excinfo.value.span == (0, 10)

    with pytest.raises(MObjParseError) as excinfo:
        tokenize("goto -1")
    assert excinfo.value.span == (5, 6)


def test_lexer_is_lazy():
    """Test tokens before an invalid one are still produced."""
    lexer = Lexer("nop $")
    assert lexer.next_token().value == "nop"
    with pytest.raises(MObjParseError):
        lexer.next_token()


def test_keywords_match_without_word_boundary():
    """Test a keyword prefix is split off the front of a longer word."""
    assert [t.value for t in tokenize("gotor1")[:-1]] == ["goto", "r", 1]

    with pytest.raises(MObjParseError) as excinfo:
        tokenize("addx 1, 2")
    assert excinfo.value.span == (3, 4)


if __name__ == '__main__':
    test_basic_statement()
    test_numbers()
    test_register_prefixes_split_from_numbers()
    test_keywords_are_case_insensitive()
    test_maximal_munch()
    test_comments()
    test_line_tracking()
    test_offsets_are_bytes()
    test_unterminated_block_comment()
    test_invalid_token_spans_word()
    test_lexer_is_lazy()
    test_keywords_match_without_word_boundary()
    print("\nAll lexer tests passed!")
