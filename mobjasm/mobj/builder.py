"""Command builder for the non-composite arity classes."""

from typing import Sequence

from .command import InstructionWord, MObjCmd
from .opcodes import MnemonicEntry
from .operands import Operand


def build_command(entry: MnemonicEntry, operands: Sequence[Operand]) -> MObjCmd:
    """
    Assemble a command from a mnemonic entry and its resolved operands.

    Operands are already range-checked; this only places them. Slots the arity
    class does not use are left zero.
    """
    if entry.arity.is_composite:
        raise ValueError(f"{entry.name} must be built by its composite packer")
    if len(operands) != entry.arity.operand_count:
        raise ValueError(
            f"{entry.name} takes {entry.arity.operand_count} operand(s), got {len(operands)}"
        )

    dst = operands[0] if len(operands) > 0 else None
    src = operands[1] if len(operands) > 1 else None

    inst = InstructionWord(
        operand_count=entry.arity.operand_count,
        group=entry.group,
        sub_group=entry.sub_group,
        imm_op1=dst is not None and dst.is_immediate,
        imm_op2=src is not None and src.is_immediate,
        option=entry.option,
    )
    return MObjCmd(
        inst,
        dst=dst.raw if dst is not None else 0,
        src=src.raw if src is not None else 0,
    )
