"""
Packers for composite SetSystem commands.

set_stream, set_stream_ss and set_button_page pack several optional
sub-operands into the two operand fields instead of one value per field. The
parser records the whole clause first; the packers here then validate the
sub-operands against their sub-field widths and emit the command.

set_stream / set_stream_ss:

    dst = [P|   primary audio id  ][P|E|  pg_text_st id  ]
    src = [P|       ig id         ][P|     angle id      ]

    Each half is 16 bits: P (0x8000) marks a present id, E (0x4000, dst only)
    enables PG/TextST display, and the low 12 bits hold the id.

set_button_page:

    dst = [P|        button id (30 bits)       ]
    src = [P|S|       page id (30 bits)        ]

    P (bit 31) marks a present id, S (bit 30) is the skip_out flag.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from ..errors import MObjParseError, ParseErrorKind
from .command import InstructionWord, MObjCmd
from .opcodes import MObjGroup, SetSubGroup, SetSystemOption
from .operands import Operand, PsrOperand, decode_operand

STREAM_ID_MASK = 0xFFF
STREAM_PRESENT = 0x8000
STREAM_PG_TEXT_ST_ENABLED = 0x4000

BUTTON_PAGE_ID_MASK = 0x3FFFFFFF
BUTTON_PAGE_PRESENT = 0x80000000
BUTTON_PAGE_SKIP_OUT = 0x40000000


@dataclass(frozen=True)
class SetStreamClause:
    """Operands of a set_stream / set_stream_ss statement, unresolved into fields."""
    primary_audio: Optional[Operand]
    pg_text_st: Optional[Operand]
    pg_text_st_enabled: bool
    ig: Optional[Operand]
    angle: Optional[Operand]
    start: int = 0
    end: int = 0


@dataclass(frozen=True)
class SetButtonPageClause:
    """Operands of a set_button_page statement."""
    button: Optional[Operand]
    page: Optional[Operand]
    skip_out: bool = False
    start: int = 0
    end: int = 0


def _fits(op: Operand, mask: int) -> bool:
    # A PSR's discriminant lives in bit 31, which no sub-field keeps
    return not isinstance(op, PsrOperand) and op.raw & ~mask == 0


def _pair_immediate(first: Optional[Operand], second: Optional[Operand]) -> bool:
    """Value of the immediate flag shared by a pair of stream sub-operands."""
    op = first if first is not None else second
    return op is not None and op.is_immediate


def _stream_field(op: Optional[Operand]) -> int:
    if op is None:
        return 0
    return STREAM_PRESENT | (op.raw & STREAM_ID_MASK)


def pack_set_stream(option: SetSystemOption, clause: SetStreamClause) -> MObjCmd:
    """
    Validate and pack a set_stream / set_stream_ss clause.

    Every error is reported against the whole clause: whether a value fits
    depends on the field layout, not on any single token.
    """
    if option not in (SetSystemOption.SET_STREAM, SetSystemOption.SET_STREAM_SS):
        raise ValueError(f"{option!r} is not a stream-setting command")

    operands = (clause.primary_audio, clause.pg_text_st, clause.ig, clause.angle)
    for op in operands:
        if op is not None and not _fits(op, STREAM_ID_MASK):
            raise MObjParseError(
                ParseErrorKind.SUB_FIELD_OVERFLOW, clause.start, clause.end,
                f"Stream operand {op} does not fit a 12-bit stream id",
            )

    for first, second in ((clause.primary_audio, clause.pg_text_st), (clause.ig, clause.angle)):
        if first is not None and second is not None and first.is_immediate != second.is_immediate:
            raise MObjParseError(ParseErrorKind.OPERAND_TYPE_MISMATCH, clause.start, clause.end)

    dst = _stream_field(clause.primary_audio) << 16 | _stream_field(clause.pg_text_st)
    if clause.pg_text_st_enabled:
        dst |= STREAM_PG_TEXT_ST_ENABLED
    src = _stream_field(clause.ig) << 16 | _stream_field(clause.angle)

    inst = InstructionWord(
        operand_count=2,
        group=MObjGroup.SET,
        sub_group=SetSubGroup.SET_SYSTEM,
        imm_op1=_pair_immediate(clause.primary_audio, clause.pg_text_st),
        imm_op2=_pair_immediate(clause.ig, clause.angle),
        option=option,
    )
    return MObjCmd(inst, dst, src)


def _button_page_field(op: Optional[Operand]) -> int:
    if op is None:
        return 0
    if not _fits(op, BUTTON_PAGE_ID_MASK):
        raise MObjParseError(
            ParseErrorKind.SUB_FIELD_OVERFLOW, op.start, op.end,
            f"Operand {op} does not fit a 30-bit button/page id",
        )
    return BUTTON_PAGE_PRESENT | op.raw


def pack_set_button_page(clause: SetButtonPageClause) -> MObjCmd:
    """Validate and pack a set_button_page clause."""
    dst = _button_page_field(clause.button)
    src = _button_page_field(clause.page)
    if clause.skip_out:
        src |= BUTTON_PAGE_SKIP_OUT

    inst = InstructionWord(
        operand_count=2,
        group=MObjGroup.SET,
        sub_group=SetSubGroup.SET_SYSTEM,
        imm_op1=clause.button is not None and clause.button.is_immediate,
        imm_op2=clause.page is not None and clause.page.is_immediate,
        option=SetSystemOption.SET_BUTTON_PAGE,
    )
    return MObjCmd(inst, dst, src)


def _decode_stream_half(half: int, is_immediate: bool) -> Optional[Operand]:
    if not half & STREAM_PRESENT:
        return None
    return decode_operand(half & STREAM_ID_MASK, is_immediate)


def decode_set_stream(cmd: MObjCmd) -> SetStreamClause:
    """Recover the clause values packed by pack_set_stream."""
    return SetStreamClause(
        primary_audio=_decode_stream_half(cmd.dst >> 16, cmd.inst.imm_op1),
        pg_text_st=_decode_stream_half(cmd.dst & 0xFFFF, cmd.inst.imm_op1),
        pg_text_st_enabled=bool(cmd.dst & STREAM_PG_TEXT_ST_ENABLED),
        ig=_decode_stream_half(cmd.src >> 16, cmd.inst.imm_op2),
        angle=_decode_stream_half(cmd.src & 0xFFFF, cmd.inst.imm_op2),
    )


def _decode_button_page(value: int, is_immediate: bool) -> Optional[Operand]:
    if not value & BUTTON_PAGE_PRESENT:
        return None
    return decode_operand(value & BUTTON_PAGE_ID_MASK, is_immediate)


def decode_set_button_page(cmd: MObjCmd) -> Tuple[Optional[Operand], Optional[Operand], bool]:
    """Recover (button, page, skip_out) packed by pack_set_button_page."""
    return (
        _decode_button_page(cmd.dst, cmd.inst.imm_op1),
        _decode_button_page(cmd.src, cmd.inst.imm_op2),
        bool(cmd.src & BUTTON_PAGE_SKIP_OUT),
    )
