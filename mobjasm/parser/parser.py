"""
MObj Parser - Turns a token stream into command records.

Each statement is a mnemonic followed by the operands its arity class
requires. Operands are resolved and range-checked as they are read;
composite commands are collected into a clause first and handed to their
packer once the whole clause has been recognised.
"""

from dataclasses import replace
from typing import List, Optional

from ..errors import syntax_error
from ..lexer import Lexer, Token, TokenType
from ..mobj.builder import build_command
from ..mobj.command import MObjCmd
from ..mobj.composite import (
    SetButtonPageClause, SetStreamClause, pack_set_button_page, pack_set_stream,
)
from ..mobj.opcodes import ArityClass, MnemonicEntry, MnemonicTable, SetSystemOption
from ..mobj.operands import Operand, check_literal, make_gpr, make_imm, make_psr

OPERAND_EXPECTED = ['"r" NUM', '"PSR" NUM', 'NUM']
OPTIONAL_OPERAND_EXPECTED = OPERAND_EXPECTED + ['"none"']


class Parser:
    """Parses MObj tokens into a list of commands."""

    def __init__(self, lexer: Lexer):
        self.lexer = lexer
        self.previous_token: Optional[Token] = None
        self.current_token = lexer.next_token()

    def error(self, message: str, expected: Optional[List[str]] = None):
        """Raise a syntax error at the current token."""
        token = self.current_token
        if token.type == TokenType.EOF:
            message = f"Unexpected end of input: {message}"
        raise syntax_error(message, token.start, token.end, expected)

    def advance(self) -> Token:
        """Consume and return current token."""
        token = self.current_token
        if token.type != TokenType.EOF:
            self.previous_token = token
            self.current_token = self.lexer.next_token()
        return token

    def at_keyword(self, *names: str) -> bool:
        token = self.current_token
        return token.type == TokenType.KEYWORD and token.value in names

    def expect_comma(self) -> Token:
        if self.current_token.type != TokenType.COMMA:
            self.error("Expected ','", ['","'])
        return self.advance()

    def expect_keyword(self, *names: str) -> Token:
        if not self.at_keyword(*names):
            self.error(f"Expected {' or '.join(names)}", [f'"{n}"' for n in names])
        return self.advance()

    def parse(self) -> List[MObjCmd]:
        """Parse the entire program."""
        commands = []
        while self.current_token.type != TokenType.EOF:
            commands.append(self.parse_statement())
        return commands

    def parse_statement(self) -> MObjCmd:
        token = self.current_token
        entry = None
        if token.type == TokenType.KEYWORD:
            entry = MnemonicTable.get_entry(token.value)
        if entry is None:
            self.error(f"Unrecognized token {token.value!r}", ['mnemonic'])
        self.advance()

        arity = entry.arity
        if arity in (ArityClass.SET_STREAM, ArityClass.SET_STREAM_SS):
            return pack_set_stream(SetSystemOption(entry.option), self.parse_set_stream_clause())
        if arity == ArityClass.SET_BUTTON_PAGE:
            return pack_set_button_page(self.parse_set_button_page_clause())
        return build_command(entry, self.parse_operands(entry))

    def parse_operands(self, entry: MnemonicEntry) -> List[Operand]:
        operands = []
        for i in range(entry.arity.operand_count):
            if i > 0:
                self.expect_comma()
            operands.append(self.parse_operand())
        return operands

    def parse_number(self, expected: List[str]) -> Token:
        """Check the current token is an in-range number without consuming it."""
        token = self.current_token
        if token.type != TokenType.NUMBER:
            self.error("Expected a number", expected)
        check_literal(token.value, token.start, token.end)
        return token

    def parse_operand(self) -> Operand:
        """Parse `r NUM`, `PSR NUM` or `NUM`."""
        start = self.current_token.start
        if self.at_keyword('r'):
            self.advance()
            num = self.parse_number(['NUM'])
            op = make_gpr(num.value, num.start, num.end)
        elif self.at_keyword('psr'):
            self.advance()
            num = self.parse_number(['NUM'])
            op = make_psr(num.value, num.start, num.end)
        else:
            num = self.parse_number(OPERAND_EXPECTED)
            op = make_imm(num.value, num.start, num.end)
        self.advance()
        # Widen the span to include the register prefix
        return replace(op, start=start)

    def parse_optional_operand(self) -> Optional[Operand]:
        """Parse an operand or `none`."""
        if self.at_keyword('none'):
            self.advance()
            return None
        if not (self.at_keyword('r', 'psr') or self.current_token.type == TokenType.NUMBER):
            self.error("Expected an operand or none", OPTIONAL_OPERAND_EXPECTED)
        return self.parse_operand()

    def parse_set_stream_clause(self) -> SetStreamClause:
        """Parse `audio, pg_text_st, enabled|disabled, ig, angle`."""
        start = self.current_token.start
        primary_audio = self.parse_optional_operand()
        self.expect_comma()
        pg_text_st = self.parse_optional_operand()
        self.expect_comma()
        flag = self.expect_keyword('enabled', 'disabled')
        self.expect_comma()
        ig = self.parse_optional_operand()
        self.expect_comma()
        angle = self.parse_optional_operand()
        return SetStreamClause(
            primary_audio, pg_text_st, flag.value == 'enabled', ig, angle,
            start, self.previous_token.end,
        )

    def parse_set_button_page_clause(self) -> SetButtonPageClause:
        """Parse `button, page [, skip_out]`."""
        start = self.current_token.start
        button = self.parse_optional_operand()
        self.expect_comma()
        page = self.parse_optional_operand()
        skip_out = False
        if self.current_token.type == TokenType.COMMA:
            self.advance()
            self.expect_keyword('skip_out')
            skip_out = True
        return SetButtonPageClause(button, page, skip_out, start, self.previous_token.end)


def parse(source: str) -> List[MObjCmd]:
    """Convenience function to assemble MObj source code."""
    return Parser(Lexer(source)).parse()
