"""
MObj command records and instruction word bit packing.

A command is 12 bytes: the packed instruction word followed by the dst and
src operand fields, each a big-endian 32-bit value.

Instruction word layout, most significant bit first:

    31-29  operand count
    28-27  group
    26-24  sub-group
    23     imm_op1
    22     imm_op2
    21-20  reserved
    19-16  branch option
    15-12  reserved
    11-8   compare option
    7-5    reserved
    4-0    set option
"""

import struct
from dataclasses import dataclass
from typing import Optional

from .opcodes import MObjGroup, MnemonicTable, MnemonicEntry
from .operands import Operand, decode_operand

COMMAND_SIZE = 12

_OP_CNT_SHIFT = 29
_GRP_SHIFT = 27
_SUB_GRP_SHIFT = 24
_IMM_OP1_BIT = 1 << 23
_IMM_OP2_BIT = 1 << 22
_BRANCH_OPT_SHIFT = 16
_CMP_OPT_SHIFT = 8

# (shift, mask) of the option field selected by each group
_OPTION_FIELDS = {
    MObjGroup.BRANCH: (_BRANCH_OPT_SHIFT, 0xF),
    MObjGroup.CMP: (_CMP_OPT_SHIFT, 0xF),
    MObjGroup.SET: (0, 0x1F),
}


@dataclass(frozen=True)
class InstructionWord:
    """Operation information of one command."""
    operand_count: int = 0
    group: MObjGroup = MObjGroup.BRANCH
    sub_group: int = 0
    imm_op1: bool = False
    imm_op2: bool = False
    option: int = 0

    def pack(self) -> int:
        """Pack the fields into a 32-bit word."""
        shift, mask = _OPTION_FIELDS[MObjGroup(self.group)]
        word = (self.operand_count & 0x7) << _OP_CNT_SHIFT
        word |= (int(self.group) & 0x3) << _GRP_SHIFT
        word |= (self.sub_group & 0x7) << _SUB_GRP_SHIFT
        if self.imm_op1:
            word |= _IMM_OP1_BIT
        if self.imm_op2:
            word |= _IMM_OP2_BIT
        word |= (self.option & mask) << shift
        return word

    @classmethod
    def unpack(cls, word: int) -> 'InstructionWord':
        """
        Unpack a 32-bit word.

        Raises ValueError when the group field does not name a known group.
        """
        group = MObjGroup((word >> _GRP_SHIFT) & 0x3)
        shift, mask = _OPTION_FIELDS[group]
        return cls(
            operand_count=(word >> _OP_CNT_SHIFT) & 0x7,
            group=group,
            sub_group=(word >> _SUB_GRP_SHIFT) & 0x7,
            imm_op1=bool(word & _IMM_OP1_BIT),
            imm_op2=bool(word & _IMM_OP2_BIT),
            option=(word >> shift) & mask,
        )


@dataclass(frozen=True)
class MObjCmd:
    """A command in the MObj VM."""
    inst: InstructionWord
    dst: int = 0
    src: int = 0

    def to_bytes(self) -> bytes:
        """Serialize to the 12-byte on-disc form."""
        return struct.pack('>III', self.inst.pack(), self.dst, self.src)

    @classmethod
    def from_bytes(cls, data: bytes, offset: int = 0) -> 'MObjCmd':
        """Read one command from data at offset.

        Raises ValueError for short input or an instruction word whose
        group, sub-group and option name no known command.
        """
        if len(data) - offset < COMMAND_SIZE:
            raise ValueError(f"Need {COMMAND_SIZE} bytes for a command, got {len(data) - offset}")
        word, dst, src = struct.unpack_from('>III', data, offset)
        cmd = cls(InstructionWord.unpack(word), dst, src)
        if cmd.entry is None:
            raise ValueError(f"Unknown instruction 0x{word:08x}")
        return cmd

    @property
    def entry(self) -> Optional[MnemonicEntry]:
        return MnemonicTable.find_entry(self.inst.group, self.inst.sub_group, self.inst.option)

    @property
    def mnemonic(self) -> str:
        entry = self.entry
        return entry.name if entry else "<BAD INSTRUCTION>"

    def dst_operand(self) -> Operand:
        return decode_operand(self.dst, self.inst.imm_op1)

    def src_operand(self) -> Operand:
        return decode_operand(self.src, self.inst.imm_op2)

    def __repr__(self):
        return f"MObjCmd({self.mnemonic}, inst=0x{self.inst.pack():08x}, dst=0x{self.dst:08x}, src=0x{self.src:08x})"
