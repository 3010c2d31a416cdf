"""Scanning layer for strict XML parsing.

Stateless building blocks applied by the tree builder: the position cursor,
the compiled lexical patterns, entity unescaping, attribute list parsing and
declaration recognition.

Key Components:
    Cursor: Anchored pattern matching from a moving offset
    EscapePolicy: Forbidden raw characters for text and attribute values
    parse_attributes: Quoted attribute list parsing
    read_declaration: XML declaration recognition
"""

from .attributes import parse_attributes
from .cursor import Cursor
from .declaration import SUPPORTED_VERSION, read_declaration
from .entities import (
    EscapePolicy,
    unescape,
    unescape_double_quoted,
    unescape_inner_text,
    unescape_single_quoted,
)

__all__ = [
    "Cursor",
    "EscapePolicy",
    "SUPPORTED_VERSION",
    "parse_attributes",
    "read_declaration",
    "unescape",
    "unescape_double_quoted",
    "unescape_inner_text",
    "unescape_single_quoted",
]
