"""
MObj assembly errors.

A single exception type covers both grammar failures raised by the lexer and
parser and range failures raised while resolving or packing operands. Every
error carries the half-open byte span [start, end) of the source text that
caused it.
"""

from enum import Enum, auto
from typing import List, Optional, Tuple


class ParseErrorKind(Enum):
    """Kinds of assembly errors."""
    GPR_OUT_OF_RANGE = auto()
    PSR_OUT_OF_RANGE = auto()
    NUMERIC_LITERAL_OUT_OF_RANGE = auto()
    SUB_FIELD_OVERFLOW = auto()
    OPERAND_TYPE_MISMATCH = auto()
    SYNTAX_ERROR = auto()


_DEFAULT_MESSAGES = {
    ParseErrorKind.GPR_OUT_OF_RANGE: "GPR out of range 0..=4095",
    ParseErrorKind.PSR_OUT_OF_RANGE: "PSR out of range 0..=127",
    ParseErrorKind.NUMERIC_LITERAL_OUT_OF_RANGE: "All numbers must be in u32 range",
    ParseErrorKind.SUB_FIELD_OVERFLOW: "Operand does not fit its sub-field",
    ParseErrorKind.OPERAND_TYPE_MISMATCH:
        "Operands sharing an immediate flag must be both registers or both immediates",
    ParseErrorKind.SYNTAX_ERROR: "Syntax error",
}


class MObjParseError(SyntaxError):
    """Raised for the first error found while assembling MObj source."""

    def __init__(self, kind: ParseErrorKind, start: int, end: int,
                 message: Optional[str] = None, expected: Optional[List[str]] = None):
        self.kind = kind
        self.start = start
        self.end = end
        self.message = message or _DEFAULT_MESSAGES[kind]
        self.expected = list(expected or [])
        super().__init__(self.message)

    @property
    def span(self) -> Tuple[int, int]:
        return (self.start, self.end)

    def locate(self, source: str) -> Tuple[int, int]:
        """Map the start offset to a 1-based (line, column) pair in source."""
        prefix = source.encode('utf-8')[:self.start].decode('utf-8', errors='ignore')
        line = prefix.count('\n') + 1
        column = len(prefix) - (prefix.rfind('\n') + 1) + 1
        return line, column

    def __repr__(self):
        return f"MObjParseError({self.kind.name}, {self.start}..{self.end}, {self.message!r})"


def syntax_error(message: str, start: int, end: int,
                 expected: Optional[List[str]] = None) -> MObjParseError:
    """Build a SYNTAX_ERROR for the given span."""
    return MObjParseError(ParseErrorKind.SYNTAX_ERROR, start, end, message, expected)


def format_error(source: str, error: MObjParseError, filename: str = "<input>") -> str:
    """
    Render an error as a highlighted-text diagnostic.

    The offending line is printed under the message, with a caret under
    narrow spans and a run of tildes under wider ones. Syntax errors also list
    the tokens the parser would have accepted.
    """
    line, column = error.locate(source)
    out = [f"{filename}:{line}:{column}: {error.message}"]
    if error.expected:
        out.append("  Acceptable tokens:")
        for token in error.expected:
            out.append(f"  * {token}")

    data = source.encode('utf-8')
    line_start = data.rfind(b'\n', 0, error.start) + 1
    line_end = data.find(b'\n', error.start)
    if line_end == -1:
        line_end = len(data)
    text = data[line_start:line_end].decode('utf-8', errors='replace')
    out.append(f"  {text}")

    indent = ' ' * (column - 1)
    # Spans crossing a line break are clipped to the first line
    width = min(error.end, line_end) - error.start
    if width <= 1:
        out.append(f"  {indent}^")
    else:
        out.append(f"  {indent}~{'~' * (width - 2)}~")
    return '\n'.join(out)
