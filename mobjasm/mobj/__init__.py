"""MObj command set definitions and bytecode encoding."""

from .opcodes import (
    MObjGroup, BranchSubGroup, SetSubGroup, ArityClass, MnemonicEntry, MnemonicTable,
)
from .operands import Operand, GprOperand, PsrOperand, ImmOperand, decode_operand
from .command import InstructionWord, MObjCmd, COMMAND_SIZE
from .builder import build_command
from .composite import (
    SetStreamClause, SetButtonPageClause, pack_set_stream, pack_set_button_page,
    decode_set_stream, decode_set_button_page,
)

__all__ = [
    'MObjGroup', 'BranchSubGroup', 'SetSubGroup', 'ArityClass', 'MnemonicEntry', 'MnemonicTable',
    'Operand', 'GprOperand', 'PsrOperand', 'ImmOperand', 'decode_operand',
    'InstructionWord', 'MObjCmd', 'COMMAND_SIZE',
    'build_command',
    'SetStreamClause', 'SetButtonPageClause', 'pack_set_stream', 'pack_set_button_page',
    'decode_set_stream', 'decode_set_button_page',
]
