"""Recognition of the mandatory ``<?xml version="1.0" ...?>`` declaration."""

from typing import Dict, Tuple

from strict_xml_parser.shared.errors import ErrorKind, ScanError, make_error

from . import patterns
from .attributes import parse_attributes
from .cursor import Cursor

SUPPORTED_VERSION = "1.0"


def read_declaration(cursor: Cursor) -> Tuple[str, Dict[str, str]]:
    """Consume the XML declaration at the cursor.

    The declaration must start exactly at the cursor, with no leading
    whitespace. Attributes after ``version`` (``encoding``, ``standalone``,
    ...) are recorded but not acted upon.

    Args:
        cursor: Cursor positioned at the start of the input

    Returns:
        Tuple of (version, declaration attributes)

    Raises:
        XMLParseError: NoXmlDeclaration, UnsupportedVersion, IllegalAttributes
            or NoEscapedCharacter
    """
    text = cursor.text
    m = cursor.match(patterns.DECLARATION)
    if m is None:
        raise make_error(
            ErrorKind.NO_XML_DECLARATION, "No XML declaration", text, cursor.current
        )

    version = m.group(1)
    if version != SUPPORTED_VERSION:
        raise make_error(
            ErrorKind.UNSUPPORTED_VERSION,
            f"Unsupported XML version \"{version}\"",
            text,
            m.start(1),
        )

    try:
        attributes = parse_attributes(text, m.start(2), m.end(2))
    except ScanError as e:
        raise e.positioned(text) from None

    return version, attributes
