"""
MObj opcode definitions.

Defines the group / sub-group / option hierarchy of the movie object command
set and the static mnemonic table used for statement dispatch.
"""

from enum import Enum, IntEnum, auto
from dataclasses import dataclass
from typing import Dict, Optional


class MObjGroup(IntEnum):
    """Top-level instruction group."""
    BRANCH = 0
    CMP = 1
    SET = 2


class BranchSubGroup(IntEnum):
    """Branch instruction sub-groups."""
    GOTO = 0
    JUMP = 1
    PLAY = 2


class SetSubGroup(IntEnum):
    """Set instruction sub-groups."""
    SET = 0
    SET_SYSTEM = 1


class GotoOption(IntEnum):
    NOP = 0
    GOTO = 1
    BREAK = 2


class JumpOption(IntEnum):
    JUMP_OBJECT = 0
    JUMP_TITLE = 1
    CALL_OBJECT = 2
    CALL_TITLE = 3
    RESUME = 4


class PlayOption(IntEnum):
    PLAY_PL = 0
    PLAY_PL_PI = 1
    PLAY_PL_PM = 2
    TERMINATE_PL = 3
    LINK_PI = 4
    LINK_MK = 5


class CmpOption(IntEnum):
    BC = 1
    EQ = 2
    NE = 3
    GE = 4
    GT = 5
    LE = 6
    LT = 7


class SetOption(IntEnum):
    MOVE = 1
    SWAP = 2
    ADD = 3
    SUB = 4
    MUL = 5
    DIV = 6
    MOD = 7
    RND = 8
    AND = 9
    OR = 10
    XOR = 11
    BSET = 12
    BCLR = 13
    SHL = 14
    SHR = 15


class SetSystemOption(IntEnum):
    SET_STREAM = 1
    SET_NV_TIMER = 2
    SET_BUTTON_PAGE = 3
    ENABLE_BUTTON = 4
    DISABLE_BUTTON = 5
    SET_SEC_STREAM = 6
    POPUP_OFF = 7
    STILL_ON = 8
    STILL_OFF = 9
    SET_OUTPUT_MODE = 10
    SET_STREAM_SS = 11
    BD_PLUS_MSG = 0x10


class ArityClass(Enum):
    """Operand shapes a mnemonic may require."""
    ZERO_OP_BRANCH = auto()
    ONE_OP_BRANCH = auto()
    TWO_OP_BRANCH = auto()
    TWO_OP_CMP = auto()
    ZERO_OP_SET = auto()
    ONE_OP_SET = auto()
    TWO_OP_SET = auto()
    SET_STREAM = auto()       # a, b, enabled|disabled, c, d
    SET_STREAM_SS = auto()    # same shape as SET_STREAM
    SET_BUTTON_PAGE = auto()  # button, page [, skip_out]

    @property
    def operand_count(self) -> int:
        """Value stored in the instruction word's operand count field."""
        if self in (ArityClass.ZERO_OP_BRANCH, ArityClass.ZERO_OP_SET):
            return 0
        if self in (ArityClass.ONE_OP_BRANCH, ArityClass.ONE_OP_SET):
            return 1
        return 2

    @property
    def is_composite(self) -> bool:
        return self in (ArityClass.SET_STREAM, ArityClass.SET_STREAM_SS,
                        ArityClass.SET_BUTTON_PAGE)


@dataclass(frozen=True)
class MnemonicEntry:
    """Represents one mnemonic of the command set."""
    name: str
    group: MObjGroup
    sub_group: int
    option: int
    arity: ArityClass

    def __repr__(self):
        return f"MnemonicEntry({self.name}, {self.group.name}, {self.arity.name})"


def _entry(name: str, group: MObjGroup, sub_group: int, option: int,
           arity: ArityClass) -> MnemonicEntry:
    return MnemonicEntry(name, group, int(sub_group), int(option), arity)


_B = MObjGroup.BRANCH
_S = MObjGroup.SET


class MnemonicTable:
    """MObj mnemonic table."""

    MNEMONICS: Dict[str, MnemonicEntry] = {e.name: e for e in (
        # Branch / Goto
        _entry('nop', _B, BranchSubGroup.GOTO, GotoOption.NOP, ArityClass.ZERO_OP_BRANCH),
        _entry('goto', _B, BranchSubGroup.GOTO, GotoOption.GOTO, ArityClass.ONE_OP_BRANCH),
        _entry('break', _B, BranchSubGroup.GOTO, GotoOption.BREAK, ArityClass.ZERO_OP_BRANCH),

        # Branch / Jump
        _entry('jump_object', _B, BranchSubGroup.JUMP, JumpOption.JUMP_OBJECT, ArityClass.ONE_OP_BRANCH),
        _entry('jump_title', _B, BranchSubGroup.JUMP, JumpOption.JUMP_TITLE, ArityClass.ONE_OP_BRANCH),
        _entry('call_object', _B, BranchSubGroup.JUMP, JumpOption.CALL_OBJECT, ArityClass.ONE_OP_BRANCH),
        _entry('call_title', _B, BranchSubGroup.JUMP, JumpOption.CALL_TITLE, ArityClass.ONE_OP_BRANCH),
        _entry('resume', _B, BranchSubGroup.JUMP, JumpOption.RESUME, ArityClass.ZERO_OP_BRANCH),

        # Branch / Play
        _entry('play_pl', _B, BranchSubGroup.PLAY, PlayOption.PLAY_PL, ArityClass.ONE_OP_BRANCH),
        _entry('play_pl_pi', _B, BranchSubGroup.PLAY, PlayOption.PLAY_PL_PI, ArityClass.TWO_OP_BRANCH),
        _entry('play_pl_pm', _B, BranchSubGroup.PLAY, PlayOption.PLAY_PL_PM, ArityClass.TWO_OP_BRANCH),
        _entry('terminate_pl', _B, BranchSubGroup.PLAY, PlayOption.TERMINATE_PL, ArityClass.ZERO_OP_BRANCH),
        _entry('link_pi', _B, BranchSubGroup.PLAY, PlayOption.LINK_PI, ArityClass.ONE_OP_BRANCH),
        _entry('link_mk', _B, BranchSubGroup.PLAY, PlayOption.LINK_MK, ArityClass.ONE_OP_BRANCH),

        # Compare (no sub-group)
        *(_entry(opt.name.lower(), MObjGroup.CMP, 0, opt, ArityClass.TWO_OP_CMP)
          for opt in CmpOption),

        # Set / Set
        *(_entry(opt.name.lower(), _S, SetSubGroup.SET, opt, ArityClass.TWO_OP_SET)
          for opt in SetOption),

        # Set / SetSystem
        _entry('set_stream', _S, SetSubGroup.SET_SYSTEM, SetSystemOption.SET_STREAM, ArityClass.SET_STREAM),
        _entry('set_nv_timer', _S, SetSubGroup.SET_SYSTEM, SetSystemOption.SET_NV_TIMER, ArityClass.TWO_OP_SET),
        _entry('set_button_page', _S, SetSubGroup.SET_SYSTEM, SetSystemOption.SET_BUTTON_PAGE,
               ArityClass.SET_BUTTON_PAGE),
        _entry('enable_button', _S, SetSubGroup.SET_SYSTEM, SetSystemOption.ENABLE_BUTTON, ArityClass.ONE_OP_SET),
        _entry('disable_button', _S, SetSubGroup.SET_SYSTEM, SetSystemOption.DISABLE_BUTTON, ArityClass.ONE_OP_SET),
        _entry('set_sec_stream', _S, SetSubGroup.SET_SYSTEM, SetSystemOption.SET_SEC_STREAM, ArityClass.TWO_OP_SET),
        _entry('popup_off', _S, SetSubGroup.SET_SYSTEM, SetSystemOption.POPUP_OFF, ArityClass.ZERO_OP_SET),
        _entry('still_on', _S, SetSubGroup.SET_SYSTEM, SetSystemOption.STILL_ON, ArityClass.ZERO_OP_SET),
        _entry('still_off', _S, SetSubGroup.SET_SYSTEM, SetSystemOption.STILL_OFF, ArityClass.ZERO_OP_SET),
        _entry('set_output_mode', _S, SetSubGroup.SET_SYSTEM, SetSystemOption.SET_OUTPUT_MODE,
               ArityClass.ONE_OP_SET),
        _entry('set_stream_ss', _S, SetSubGroup.SET_SYSTEM, SetSystemOption.SET_STREAM_SS, ArityClass.SET_STREAM_SS),
        _entry('bd_plus_msg', _S, SetSubGroup.SET_SYSTEM, SetSystemOption.BD_PLUS_MSG, ArityClass.TWO_OP_SET),
    )}

    # Keywords that are not mnemonics: register prefixes and composite modifiers
    MODIFIERS = ('r', 'psr', 'none', 'enabled', 'disabled', 'skip_out')

    @classmethod
    def get_entry(cls, name: str) -> Optional[MnemonicEntry]:
        """Get mnemonic entry by name (case-insensitive)."""
        return cls.MNEMONICS.get(name.lower())

    @classmethod
    def find_entry(cls, group: int, sub_group: int, option: int) -> Optional[MnemonicEntry]:
        """Reverse lookup of an entry from instruction word fields."""
        for entry in cls.MNEMONICS.values():
            if entry.group == group and entry.option == option and (
                    entry.group == MObjGroup.CMP or entry.sub_group == sub_group):
                return entry
        return None

    @classmethod
    def keywords(cls):
        """All keywords recognised by the lexer, lower-cased."""
        return tuple(cls.MNEMONICS) + cls.MODIFIERS
