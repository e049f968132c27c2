"""
MObj Assembler (mobjasm) - Assembles Blu-ray movie object navigation commands.

This package compiles the MObj mnemonic language into the 12-byte command
records found in MovieObject.bdmv and IG button programs.
"""

__version__ = "0.1.0"

from .errors import MObjParseError, ParseErrorKind, format_error
from .assembler import MObjAssembler, assemble, assemble_to_bytes
from .mobj import MObjCmd, InstructionWord
