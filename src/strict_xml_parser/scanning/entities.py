"""Validation and unescaping of character content.

Three policies share one algorithm and differ only in which raw characters
they reject:

- inner text rejects ``<``
- double-quoted attribute values reject ``<``, ``'`` and ``"``
- single-quoted attribute values reject ``<`` and ``'``

Only the five predefined entities are rewritten. Numeric character references
(``&#160;``, ``&#x2663;``) are checked for syntax and then left in the text as
written.
"""

import re
from enum import Enum

from strict_xml_parser.shared.errors import ErrorKind, ScanError

from . import patterns


class EscapePolicy(Enum):
    """Which raw characters a piece of content may not contain."""

    INNER_TEXT = "<"
    DOUBLE_QUOTED = "<'\""
    SINGLE_QUOTED = "<'"

    @property
    def forbidden(self) -> "re.Pattern[str]":
        """Pattern matching any forbidden raw character."""
        return _FORBIDDEN[self]


_FORBIDDEN = {
    policy: re.compile("[" + re.escape(policy.value) + "]")
    for policy in EscapePolicy
}


def unescape(text: str, policy: EscapePolicy, offset: int = 0) -> str:
    """Validate ``text`` against ``policy`` and rewrite predefined entities.

    Args:
        text: Raw content slice
        policy: Escape policy for the kind of content
        offset: Offset of ``text`` in the whole input, added to error offsets

    Returns:
        The unescaped content

    Raises:
        ScanError: NoEscapedCharacter for a forbidden raw character or an
            ``&`` that does not start an accepted reference
    """
    m = policy.forbidden.search(text)
    if m is not None:
        raise ScanError(
            ErrorKind.NO_ESCAPED_CHARACTER,
            f"Found an unescaped character {m.group()!r}",
            offset + m.start(),
        )

    m = patterns.UNDEFINED_ENTITY.search(text)
    if m is not None:
        raise ScanError(
            ErrorKind.NO_ESCAPED_CHARACTER,
            "Found an unescaped \"&\" or an undefined entity",
            offset + m.start(),
        )

    for entity, character in patterns.PREDEFINED_ENTITIES:
        text = text.replace(entity, character)
    return text


def unescape_inner_text(text: str, offset: int = 0) -> str:
    """Unescape text found between tags."""
    return unescape(text, EscapePolicy.INNER_TEXT, offset)


def unescape_double_quoted(text: str, offset: int = 0) -> str:
    """Unescape a ``"``-delimited attribute value."""
    return unescape(text, EscapePolicy.DOUBLE_QUOTED, offset)


def unescape_single_quoted(text: str, offset: int = 0) -> str:
    """Unescape a ``'``-delimited attribute value."""
    return unescape(text, EscapePolicy.SINGLE_QUOTED, offset)
