"""Attribute list parsing.

e.g. ``' key1="value1" key2=\\'value2\\''`` -> ``{"key1": "value1", "key2": "value2"}``
"""

from typing import Dict, Optional

from strict_xml_parser.shared.errors import ErrorKind, ScanError

from . import patterns
from .cursor import Cursor
from .entities import unescape_double_quoted, unescape_single_quoted


def parse_attributes(text: str, begin: int = 0, end: Optional[int] = None) -> Dict[str, str]:
    """Parse ``text[begin:end]`` as whitespace-separated quoted attributes.

    Keys are taken as written. A key seen twice keeps its last value.

    Args:
        text: Complete input text
        begin: Start of the attribute slice
        end: End of the attribute slice (defaults to the end of ``text``)

    Returns:
        Mapping of attribute names to unescaped values

    Raises:
        ScanError: IllegalAttributes when non-whitespace remains after the
            last attribute; NoEscapedCharacter when a value fails unescaping
    """
    cursor = Cursor(text, begin, end)
    attributes: Dict[str, str] = {}

    while True:
        m = cursor.match(patterns.ATTRIBUTE)
        if m is None:
            break
        key, quote, value = m.group(1), m.group(2), m.group(3)
        if quote == '"':
            attributes[key] = unescape_double_quoted(value, m.start(3))
        else:
            attributes[key] = unescape_single_quoted(value, m.start(3))

    offset = patterns.first_non_whitespace(cursor.remaining)
    if offset >= 0:
        raise ScanError(
            ErrorKind.ILLEGAL_ATTRIBUTES,
            "Illegal attributes",
            cursor.current + offset,
        )

    return attributes
