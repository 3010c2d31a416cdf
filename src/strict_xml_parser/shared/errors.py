"""Error kinds and positioned parse failures for strict XML parsing.

Every rule violation found while scanning is reported as a single exception
type, :class:`XMLParseError`, carrying an :class:`ErrorKind`, the raw offset into
the input text, and the human-readable ``line N, column M`` location computed
from that offset.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class ErrorKind(Enum):
    """Kinds of well-formedness failures reported by the parser."""

    NO_XML_DECLARATION = "NoXmlDeclaration"
    UNSUPPORTED_VERSION = "UnsupportedVersion"
    ILLEGAL_ATTRIBUTES = "IllegalAttributes"
    NO_ESCAPED_CHARACTER = "NoEscapedCharacter"
    ILLEGAL_COMMENT = "IllegalComment"
    MISSING_CLOSING_TAG = "MissingClosingTag"
    NO_NAME_TAG = "NoNameTag"
    ILLEGAL_TAG_NAME = "IllegalTagName"
    MISMATCHED_CLOSING_TAG = "MismatchedClosingTag"
    CLOSING_TAG_WITH_ATTRIBUTES = "ClosingTagWithAttributes"
    CLOSING_TAG_SELF_CLOSING = "ClosingTagSelfClosing"
    ILLEGAL_FORMAT_TRAILING_CONTENT = "IllegalFormatTrailingContent"


@dataclass(frozen=True)
class SourceLocation:
    """Line/column location of an offset in the input text (both 1-based)."""

    offset: int
    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate location values."""
        if self.offset < 0:
            raise ValueError("Offset must be >= 0")
        if self.line < 1:
            raise ValueError("Line number must be >= 1")
        if self.column < 1:
            raise ValueError("Column number must be >= 1")

    def __str__(self) -> str:
        return f"line {self.line}, column {self.column}"


def locate(text: str, offset: int) -> SourceLocation:
    """Convert a raw offset into a line/column location.

    Lines are counted by ``\\n`` characters between the start of the input and
    the offset; the column counts characters from the most recent line start.

    Args:
        text: Complete input text
        offset: Offset into ``text`` (clamped to the text length)

    Returns:
        SourceLocation for the offset
    """
    offset = max(0, min(offset, len(text)))
    line = text.count("\n", 0, offset) + 1
    line_start = text.rfind("\n", 0, offset) + 1
    return SourceLocation(offset=offset, line=line, column=offset - line_start + 1)


class XMLParseError(Exception):
    """Raised when the input violates one of the parser's well-formedness rules."""

    def __init__(self, kind: ErrorKind, description: str, location: SourceLocation):
        self.kind = kind
        self.description = description
        self.location = location
        super().__init__(f"{description}: {location}")

    @property
    def message(self) -> str:
        """Full human-readable message including the location."""
        return str(self)

    @property
    def offset(self) -> int:
        return self.location.offset

    @property
    def line(self) -> int:
        return self.location.line

    @property
    def column(self) -> int:
        return self.location.column

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        return {
            "kind": self.kind.value,
            "message": self.message,
            "offset": self.offset,
            "line": self.line,
            "column": self.column,
        }


def make_error(
    kind: ErrorKind, description: str, text: str, offset: int
) -> XMLParseError:
    """Build a positioned :class:`XMLParseError` for ``offset`` within ``text``."""
    return XMLParseError(kind, description, locate(text, offset))


class ScanError(Exception):
    """Unpositioned failure raised by the stateless scanning helpers.

    The helpers only know offsets relative to the slice they were handed;
    callers shift ``offset`` and convert to :class:`XMLParseError` with the
    whole input text in hand.
    """

    def __init__(self, kind: ErrorKind, description: str, offset: int):
        super().__init__(description)
        self.kind = kind
        self.description = description
        self.offset = offset

    def positioned(self, text: str) -> XMLParseError:
        """Resolve the failure against the full input text."""
        return make_error(self.kind, self.description, text, self.offset)
