"""Core tree building implementation for strict XML parsing.

This module implements the single-pass builder that scans the input text tag
by tag, keeps the chain of open elements through parent links, and rejects
the input at the first well-formedness violation.
"""

from typing import Dict, List, Match, Optional

from strict_xml_parser.scanning import patterns
from strict_xml_parser.scanning.attributes import parse_attributes
from strict_xml_parser.scanning.cursor import Cursor
from strict_xml_parser.scanning.declaration import read_declaration
from strict_xml_parser.scanning.entities import unescape_inner_text
from strict_xml_parser.shared import (
    ErrorKind,
    ScanError,
    XMLParseError,
    get_logger,
    make_error,
)

from .node import Document, Node


class XMLTreeBuilder:
    """Builds a :class:`Document` from XML text.

    The builder keeps a synthetic container node above the root element; its
    empty name never matches a closing tag, so a closing tag with nothing open
    is reported like any other mismatch. Builders are cheap and hold no state
    between calls to :meth:`build`.
    """

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        """Initialize tree builder.

        Args:
            correlation_id: Optional correlation ID for request tracking
        """
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "xml_tree_builder")
        self._reset_state()

    def _reset_state(self) -> None:
        """Reset internal state for a new build."""
        self._text = ""
        self._container = Node(name="")
        self._current = self._container
        self._text_buffer: List[str] = []
        self._elements_created = 0

    def build(self, text: str) -> Document:
        """Parse ``text`` into a document tree.

        Args:
            text: Complete XML text, starting with the XML declaration

        Returns:
            Document holding the declaration data and the root element

        Raises:
            XMLParseError: on the first well-formedness violation
        """
        self._reset_state()
        self._text = text

        self.logger.debug(
            "Starting tree building",
            extra={"character_count": len(text)}
        )

        try:
            cursor = Cursor(text)
            version, attributes = read_declaration(cursor)

            while True:
                m = cursor.match(patterns.TAG_HEAD)
                if m is None:
                    break

                self._append_text(m.group(1), m.start(1))

                head = m.group(2)
                tag_start = m.start(2) - 1
                if head == patterns.COMMENT_OPEN:
                    self._skip_comment(cursor, tag_start)
                elif head == patterns.CDATA_OPEN:
                    self._read_cdata(cursor, tag_start)
                else:
                    self._read_tag(cursor, head, tag_start)

            self._finish(cursor)

            root: Optional[Node] = None
            if self._container.children:
                root = self._container.children[0]
                root._detach()

            document = Document(version=version, attributes=attributes, root=root)

            self.logger.debug(
                "Tree building completed",
                extra={"element_count": self._elements_created}
            )
            return document
        finally:
            self._reset_state()

    def _error(self, kind: ErrorKind, description: str, offset: int) -> XMLParseError:
        return make_error(kind, description, self._text, offset)

    def _at_top_level(self) -> bool:
        return self._current is self._container

    def _reject_outside_root(self, content: str, offset: int) -> None:
        """Only whitespace may appear outside the root element."""
        index = patterns.first_non_whitespace(content)
        if index >= 0:
            raise self._error(
                ErrorKind.ILLEGAL_FORMAT_TRAILING_CONTENT,
                "Illegal format: content outside the root element",
                offset + index,
            )

    def _append_text(self, raw: str, offset: int) -> None:
        """Decode text found before a tag and add it to the buffer."""
        if not raw:
            return
        try:
            decoded = unescape_inner_text(raw, offset)
        except ScanError as e:
            raise e.positioned(self._text) from None

        if self._at_top_level():
            self._reject_outside_root(raw, offset)
        self._text_buffer.append(decoded)

    def _flush_text(self) -> None:
        """Attach buffered non-blank text to the current element."""
        text = "".join(self._text_buffer)
        self._text_buffer.clear()
        if not patterns.is_blank(text):
            self._current._append_child(Node.text_node(text))

    def _skip_comment(self, cursor: Cursor, tag_start: int) -> None:
        m = cursor.match(patterns.COMMENT_BODY)
        if m is None:
            raise self._error(
                ErrorKind.MISSING_CLOSING_TAG,
                "Missing an end of the comment section",
                tag_start,
            )
        if not m.group(2):
            raise self._error(
                ErrorKind.ILLEGAL_COMMENT,
                "Two dashes in the middle of a comment are not allowed",
                m.start(1),
            )

    def _read_cdata(self, cursor: Cursor, tag_start: int) -> None:
        m = cursor.match(patterns.CDATA_BODY)
        if m is None:
            raise self._error(
                ErrorKind.MISSING_CLOSING_TAG,
                "Missing an end of the CDATA section",
                tag_start,
            )

        content = m.group(1)
        if self._at_top_level():
            self._reject_outside_root(content, m.start(1))
        # CDATA content is taken verbatim
        self._text_buffer.append(content)

    def _read_tag(self, cursor: Cursor, name: str, tag_start: int) -> None:
        """Handle an opening, self-closing or closing tag whose name was read."""
        if not name:
            raise self._error(ErrorKind.NO_NAME_TAG, "Found a no name tag", tag_start)

        bad = patterns.ILLEGAL_TAG_NAME_CHARACTER.search(name)
        if bad is not None:
            raise self._error(
                ErrorKind.ILLEGAL_TAG_NAME,
                f"Illegal character {bad.group()!r} in the tag name \"{name}\"",
                tag_start + 1 + bad.start(),
            )

        tail = cursor.match(patterns.TAG_TAIL)
        if tail is None:
            raise self._error(
                ErrorKind.MISSING_CLOSING_TAG,
                f"Missing \">\" for the tag \"{name}\"",
                tag_start,
            )

        try:
            attributes = parse_attributes(self._text, tail.start(1), tail.end(1))
        except ScanError as e:
            raise e.positioned(self._text) from None

        self._flush_text()

        if name.startswith("/"):
            self._close_element(name, attributes, tail, tag_start)
        else:
            self._open_element(name, attributes, bool(tail.group(2)), tag_start)

    def _open_element(
        self,
        name: str,
        attributes: Dict[str, str],
        self_closing: bool,
        tag_start: int
    ) -> None:
        if self._at_top_level() and self._container.children:
            raise self._error(
                ErrorKind.ILLEGAL_FORMAT_TRAILING_CONTENT,
                f"Illegal format: more than one root element, \"{name}\"",
                tag_start,
            )

        node = Node(name=name, attributes=attributes, start_offset=tag_start)
        self._current._append_child(node)
        self._elements_created += 1

        if not self_closing:
            self._current = node

    def _close_element(
        self,
        name: str,
        attributes: Dict[str, str],
        tail: Match[str],
        tag_start: int
    ) -> None:
        if attributes:
            raise self._error(
                ErrorKind.CLOSING_TAG_WITH_ATTRIBUTES,
                f"Closing tag can not have attributes, \"{name}\"",
                patterns.first_non_whitespace(self._text, tail.start(1)),
            )
        if tail.group(2):
            raise self._error(
                ErrorKind.CLOSING_TAG_SELF_CLOSING,
                f"Closing tag can not end with \"/>\", \"{name}\"",
                tail.start(2),
            )

        current = self._current
        if self._at_top_level():
            raise self._error(
                ErrorKind.MISMATCHED_CLOSING_TAG,
                f"Missing an opening tag for the tag \"{name}\"",
                tag_start,
            )
        if name[1:] != current.name:
            raise self._error(
                ErrorKind.MISMATCHED_CLOSING_TAG,
                f"Missing a closing tag for the tag \"{current.name}\"",
                tag_start,
            )

        current._collapse_text()
        parent = current.parent
        if parent is None:
            raise RuntimeError("Open element lost its parent during tree building")
        self._current = parent

    def _finish(self, cursor: Cursor) -> None:
        """Check what is left once no further tag can be found.

        Unclosed elements and content after the root are both rejected, so a
        document always has exactly one complete root element.
        """
        if not self._at_top_level():
            unclosed = self._current
            raise self._error(
                ErrorKind.MISSING_CLOSING_TAG,
                f"Missing a closing tag for the tag \"{unclosed.name}\"",
                unclosed.start_offset if unclosed.start_offset is not None else cursor.current,
            )

        offset = patterns.first_non_whitespace(self._text, cursor.current)
        if offset >= 0:
            raise self._error(
                ErrorKind.ILLEGAL_FORMAT_TRAILING_CONTENT,
                "Illegal format",
                offset,
            )
