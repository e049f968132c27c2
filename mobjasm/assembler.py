"""
Main MObj assembler.

Coordinates lexing, parsing and command packing.
"""

import sys
from typing import List

from .errors import MObjParseError, format_error
from .lexer import Lexer
from .parser import Parser
from .mobj import MObjCmd


class MObjAssembler:
    """Main MObj assembler class."""

    def __init__(self, verbose: bool = False, filename: str = "<input>"):
        self.verbose = verbose
        self.filename = filename

    def log(self, message: str):
        """Print log message if verbose mode is enabled."""
        if self.verbose:
            print(f"[mobjasm] {message}", file=sys.stderr)

    def assemble_string(self, source: str) -> List[MObjCmd]:
        """
        Assemble MObj source text into commands.

        Args:
            source: Program text, zero or more statements

        Returns:
            Commands in program order

        Raises:
            MObjParseError: for the first error found; nothing is returned
        """
        self.log(f"Assembling {self.filename} ({len(source)} chars)...")
        try:
            commands = Parser(Lexer(source)).parse()
        except MObjParseError as e:
            self.log(format_error(source, e, self.filename))
            raise
        self.log(f"Assembled {len(commands)} command(s)")
        return commands

    def assemble_to_bytes(self, source: str) -> bytes:
        """Assemble source and serialize the commands back to back."""
        return b''.join(cmd.to_bytes() for cmd in self.assemble_string(source))


def assemble(source: str) -> List[MObjCmd]:
    """Convenience function to assemble MObj source code."""
    return MObjAssembler().assemble_string(source)


def assemble_to_bytes(source: str) -> bytes:
    """Convenience function to assemble MObj source code into bytecode."""
    return MObjAssembler().assemble_to_bytes(source)
