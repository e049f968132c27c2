"""
MObj operand definitions.

An operand is a general-purpose register, a player-status register or an
immediate value. Registers are stored in the operand field with bit 31 as the
kind discriminant (clear for GPR, set for PSR); immediates are stored as-is and
flagged through the instruction word instead.
"""

from dataclasses import dataclass, field

from ..errors import MObjParseError, ParseErrorKind


GPR_MAX = 0xFFF
PSR_MAX = 0x7F
U32_MAX = 0xFFFFFFFF

PSR_FLAG = 0x80000000


@dataclass(frozen=True)
class Operand:
    """Base class for resolved operands. start/end locate the source text."""
    start: int = field(default=0, compare=False)
    end: int = field(default=0, compare=False)

    @property
    def raw(self) -> int:
        raise NotImplementedError

    @property
    def is_immediate(self) -> bool:
        return False


@dataclass(frozen=True)
class GprOperand(Operand):
    index: int = 0

    @property
    def raw(self) -> int:
        return self.index

    def __str__(self):
        return f"r{self.index}"


@dataclass(frozen=True)
class PsrOperand(Operand):
    index: int = 0

    @property
    def raw(self) -> int:
        return PSR_FLAG | self.index

    def __str__(self):
        return f"PSR{self.index}"


@dataclass(frozen=True)
class ImmOperand(Operand):
    value: int = 0

    @property
    def raw(self) -> int:
        return self.value

    @property
    def is_immediate(self) -> bool:
        return True

    def __str__(self):
        return str(self.value)


def make_gpr(index: int, start: int, end: int) -> GprOperand:
    """Resolve `r<index>`; start/end are the span of the index literal."""
    if index > GPR_MAX:
        raise MObjParseError(ParseErrorKind.GPR_OUT_OF_RANGE, start, end)
    return GprOperand(start, end, index)


def make_psr(index: int, start: int, end: int) -> PsrOperand:
    """Resolve `PSR<index>`; start/end are the span of the index literal."""
    if index > PSR_MAX:
        raise MObjParseError(ParseErrorKind.PSR_OUT_OF_RANGE, start, end)
    return PsrOperand(start, end, index)


def check_literal(value: int, start: int, end: int) -> int:
    """Numeric literals of every operand kind must fit in 32 bits unsigned."""
    if value > U32_MAX:
        raise MObjParseError(ParseErrorKind.NUMERIC_LITERAL_OUT_OF_RANGE, start, end)
    return value


def make_imm(value: int, start: int, end: int) -> ImmOperand:
    return ImmOperand(start, end, check_literal(value, start, end))


def decode_operand(raw: int, is_immediate: bool) -> Operand:
    """Recover an operand from its stored 32-bit value."""
    if is_immediate:
        return ImmOperand(value=raw)
    if raw & PSR_FLAG == 0:
        return GprOperand(index=raw & GPR_MAX)
    return PsrOperand(index=raw & PSR_MAX)
