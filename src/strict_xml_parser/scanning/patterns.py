"""Compiled lexical patterns for strict XML scanning.

All patterns are applied anchored at a cursor offset with
:meth:`re.Pattern.match`, so none of them start with ``^``. Whitespace means
ASCII whitespace only (``re.ASCII``); characters such as U+00A0 are content.
"""

import re

# Markers recognized right after "<"
COMMENT_OPEN = "!--"
CDATA_OPEN = "![CDATA["

TEXT_NODE_NAME = "#text"

# <?xml version="X" ...?> -> (version, trailing attribute text)
DECLARATION = re.compile(r'<\?xml\s+version="(.+?)"([\s\S]*?)\?>', re.ASCII)

# Leading text, then the head of the next tag -> (text, tag head)
# The head is a comment opener, a CDATA opener, or a possibly empty name
# optionally prefixed with "/" for closing tags.
TAG_HEAD = re.compile(r"([^<]*)<(!--|!\[CDATA\[|/?[^>\s/]*)", re.ASCII)

# Body of a comment up to the first "--" -> ("--", ">" or "")
COMMENT_BODY = re.compile(r"[\s\S]*?(--)(>?)")

# Body of a CDATA section -> (content)
CDATA_BODY = re.compile(r"([\s\S]*?)\]\]>")

# Rest of an ordinary tag up to the first ">" -> (attribute blob, "/" or "")
TAG_TAIL = re.compile(r"([\s\S]*?)(/?)>")

# key="value" or key='value' with mandatory leading whitespace
# -> (key, quote, raw value)
# A key starts at the first non-whitespace character, or is a single
# whitespace character when none precedes the "=".
ATTRIBUTE = re.compile(r"""\s+([^\s=][^=]*|\s)=(["'])([\s\S]*?)\2""", re.ASCII)

ILLEGAL_TAG_NAME_CHARACTER = re.compile(r"""[<>'"&]""")

# "&" not starting one of the accepted references
UNDEFINED_ENTITY = re.compile(
    r"&(?!lt;|gt;|apos;|quot;|amp;|#[0-9]+;|#x[0-9a-fA-F]{4};)"
)

NON_WHITESPACE = re.compile(r"\S", re.ASCII)

# Applied in this order, each as a global substitution
PREDEFINED_ENTITIES = (
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&apos;", "'"),
    ("&quot;", '"'),
    ("&amp;", "&"),
)


def first_non_whitespace(text: str, start: int = 0) -> int:
    """Offset of the first non-whitespace character at or after ``start``, or -1."""
    m = NON_WHITESPACE.search(text, start)
    return m.start() if m else -1


def is_blank(text: str) -> bool:
    """Whether ``text`` is empty or whitespace only."""
    return NON_WHITESPACE.search(text) is None
