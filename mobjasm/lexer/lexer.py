"""
MObj Lexer - Tokenizes MObj assembly source into tokens.

Handles:
- Comma separators
- Keywords (mnemonics, register prefixes r/PSR, none/enabled/disabled/skip_out),
  case-insensitive with maximal munch
- Numbers (decimal and 0x hex)
- Comments (// line and /* block */)

Tokens carry byte offsets into the UTF-8 encoded source so errors can point
at the exact text responsible.
"""

import re
from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional, List, Iterator

from ..errors import syntax_error
from ..mobj.opcodes import MnemonicTable
from ..mobj.operands import U32_MAX


class TokenType(Enum):
    """MObj token types."""
    KEYWORD = auto()     # mnemonic or modifier, value is lower-cased
    NUMBER = auto()      # 123, 0x7B
    COMMA = auto()       # ,

    # End of file
    EOF = auto()


@dataclass
class Token:
    """Represents a single token."""
    type: TokenType
    value: object
    start: int
    end: int
    line: int
    column: int

    def __repr__(self):
        return f"Token({self.type.name}, {self.value!r}, {self.start}..{self.end})"


# Longest keywords first so the alternation behaves as maximal munch
_KEYWORD_RE = re.compile(
    '|'.join(re.escape(k) for k in sorted(MnemonicTable.keywords(), key=len, reverse=True)),
    re.IGNORECASE,
)
_NUMBER_RE = re.compile(r'0[xX][0-9a-fA-F]+|[0-9]+')
_WORD_RE = re.compile(r'\w+')


def _literal_value(text: str) -> int:
    """Value of a numeric literal; one past U32_MAX when it has too many significant digits."""
    if text[:2] in ('0x', '0X'):
        digits, base, width = text[2:].lstrip('0'), 16, 8
    else:
        digits, base, width = text.lstrip('0'), 10, 10
    if len(digits) > width:
        return U32_MAX + 1
    return int(digits or '0', base)


def _utf8_len(ch: str) -> int:
    code = ord(ch)
    if code < 0x80:
        return 1
    if code < 0x800:
        return 2
    if code < 0x10000:
        return 3
    return 4


class Lexer:
    """Tokenizes MObj assembly source."""

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.offset = 0  # byte offset of self.pos
        self.line = 1
        self.column = 1
        self.done = False

    def peek(self, offset: int = 0) -> Optional[str]:
        """Peek at character at current position + offset."""
        pos = self.pos + offset
        if pos < len(self.source):
            return self.source[pos]
        return None

    def advance(self) -> Optional[str]:
        """Consume and return current character."""
        if self.pos >= len(self.source):
            return None

        ch = self.source[self.pos]
        self.pos += 1
        self.offset += _utf8_len(ch)

        if ch == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        return ch

    def skip(self, count: int):
        for _ in range(count):
            self.advance()

    def skip_whitespace_and_comments(self):
        """Skip whitespace, // line comments and /* block */ comments."""
        while self.pos < len(self.source):
            ch = self.peek()
            if ch.isspace():
                self.advance()
            elif ch == '/' and self.peek(1) == '/':
                while self.peek() is not None and self.peek() != '\n':
                    self.advance()
            elif ch == '/' and self.peek(1) == '*':
                start = self.offset
                end = self.source.find('*/', self.pos + 2)
                if end == -1:
                    self.skip(len(self.source) - self.pos)
                    raise syntax_error("Unterminated block comment", start, self.offset)
                self.skip(end + 2 - self.pos)
            else:
                break

    def read_keyword(self) -> Optional[Token]:
        match = _KEYWORD_RE.match(self.source, self.pos)
        if not match:
            return None
        start, line, column = self.offset, self.line, self.column
        self.skip(len(match.group()))
        return Token(TokenType.KEYWORD, match.group().lower(), start, self.offset, line, column)

    def read_number(self) -> Optional[Token]:
        """Read a number (decimal or hex); range checking is left to the parser."""
        match = _NUMBER_RE.match(self.source, self.pos)
        if not match:
            return None
        text = match.group()
        value = _literal_value(text)
        start, line, column = self.offset, self.line, self.column
        self.skip(len(text))
        return Token(TokenType.NUMBER, value, start, self.offset, line, column)

    def next_token(self) -> Token:
        """Produce the next token, or EOF once the source is exhausted."""
        self.skip_whitespace_and_comments()

        if self.pos >= len(self.source):
            self.done = True
            return Token(TokenType.EOF, None, self.offset, self.offset, self.line, self.column)

        ch = self.peek()
        if ch == ',':
            token = Token(TokenType.COMMA, ',', self.offset, self.offset + 1, self.line, self.column)
            self.advance()
            return token

        token = self.read_keyword() or self.read_number()
        if token is not None:
            return token

        # Invalid token: report the whole word so `frobnicate` is flagged as a unit
        match = _WORD_RE.match(self.source, self.pos)
        text = match.group() if match else ch
        start = self.offset
        end = start + len(text.encode('utf-8'))
        raise syntax_error(f"Invalid token: {text!r}", start, end)

    def tokens(self) -> Iterator[Token]:
        """Lazily yield tokens up to and including EOF."""
        while not self.done:
            yield self.next_token()

    def tokenize(self) -> List[Token]:
        """Tokenize the entire source code."""
        return list(self.tokens())


def tokenize(source: str) -> List[Token]:
    """Convenience function to tokenize MObj source code."""
    lexer = Lexer(source)
    return lexer.tokenize()
