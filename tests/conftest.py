"""
Test fixtures and helpers for the MObj assembler tests.

The helpers wrap the assembler so individual tests can state a statement and
the record or error it should produce in one line.
"""

import pytest
import sys
from typing import List, Optional, Tuple
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from mobjasm import MObjParseError, ParseErrorKind, assemble
from mobjasm.mobj import MObjCmd


def assemble_one(source: str) -> MObjCmd:
    """Assemble source that must hold exactly one statement."""
    commands = assemble(source)
    assert len(commands) == 1, f"expected one command from {source!r}, got {len(commands)}"
    return commands[0]


def assert_parse_error(source: str, kind: ParseErrorKind,
                       span: Optional[Tuple[int, int]] = None) -> MObjParseError:
    """Assert that assembling source fails with the given kind (and span)."""
    with pytest.raises(MObjParseError) as excinfo:
        assemble(source)
    error = excinfo.value
    assert error.kind == kind, f"{source!r}: expected {kind.name}, got {error!r}"
    if span is not None:
        assert error.span == span, f"{source!r}: expected span {span}, got {error.span}"
    return error


def words(commands: List[MObjCmd]) -> List[int]:
    """Packed instruction words of a command list."""
    return [cmd.inst.pack() for cmd in commands]
