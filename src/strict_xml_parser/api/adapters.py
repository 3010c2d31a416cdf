"""Conversion between parsed documents and lxml element trees.

lxml is imported when a conversion runs, so the parser itself has no import
time dependency on it.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from strict_xml_parser.shared import get_logger
from strict_xml_parser.tree import Document, Node

LXML_DECLARATION = '<?xml version="1.0"?>'


class AdapterError(Exception):
    """Raised when a document cannot be converted to or from lxml."""


@dataclass
class ConversionStats:
    """Running totals for conversions made by one adapter."""

    count: int = 0
    total_ms: float = 0.0
    history: Dict[str, int] = field(default_factory=dict)

    @property
    def average_ms(self) -> float:
        return self.total_ms / self.count if self.count else 0.0

    def record(self, direction: str, elapsed_ms: float) -> None:
        self.count += 1
        self.total_ms += elapsed_ms
        self.history[direction] = self.history.get(direction, 0) + 1


class LxmlAdapter:
    """Bidirectional conversion between :class:`Document` and ``lxml.etree``.

    Text of a :class:`Node` maps onto lxml's text/tail model: an element's
    ``value`` and any ``#text`` child that precedes the first element child
    become the element's ``text``; a ``#text`` child that follows an element
    child becomes that child's ``tail``. Numeric character references are
    carried over as the literal text the parser kept.

    Examples:
        >>> from strict_xml_parser import parse
        >>> adapter = LxmlAdapter()
        >>> element = adapter.to_target(parse('<?xml version="1.0"?><a>x</a>'))
        >>> element.text
        'x'
    """

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "lxml_adapter")
        self.stats = ConversionStats()

    def to_target(self, document: Document) -> Any:
        """Convert a document to an ``lxml.etree._Element``.

        Args:
            document: Parsed document

        Returns:
            Root element of the equivalent lxml tree

        Raises:
            AdapterError: when the document has no root or lxml rejects a
                tag name, attribute name or text
        """
        import lxml.etree as etree

        if document.root is None:
            raise AdapterError("Document has no root element")

        start_time = time.perf_counter()
        try:
            element = self._convert_node(document.root, etree)
        except ValueError as e:
            raise AdapterError(f"Failed to convert to lxml: {e}") from e

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        self.stats.record("to_lxml", elapsed_ms)
        self.logger.debug(
            "Converted document to lxml",
            extra={"root_tag": element.tag, "conversion_time_ms": elapsed_ms}
        )
        return element

    def from_target(self, element: Any) -> Document:
        """Convert an lxml element (or element tree) to a document.

        The element is serialized without its tail, prefixed with an XML 1.0
        declaration and parsed.

        Raises:
            AdapterError: when ``element`` is not an lxml element
            XMLParseError: when the serialized form is not accepted
        """
        import lxml.etree as etree

        from .parser import parse

        if hasattr(element, "getroot"):
            element = element.getroot()
        if not hasattr(element, "tag"):
            raise AdapterError("Target data is not a valid lxml element")

        start_time = time.perf_counter()
        xml_string = etree.tostring(element, encoding="unicode", with_tail=False)
        document = parse(LXML_DECLARATION + xml_string, self.correlation_id)

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        self.stats.record("from_lxml", elapsed_ms)
        self.logger.debug(
            "Converted lxml element to document",
            extra={"xml_length": len(xml_string), "conversion_time_ms": elapsed_ms}
        )
        return document

    def _convert_node(self, node: Node, etree: Any) -> Any:
        lxml_element = etree.Element(node.name)

        for key, value in node.attributes.items():
            lxml_element.set(key, value)

        text = node.value
        last_child = None
        for child in node.children:
            if child.is_text:
                if last_child is None:
                    text += child.value
                else:
                    last_child.tail = (last_child.tail or "") + child.value
                continue
            last_child = self._convert_node(child, etree)
            lxml_element.append(last_child)

        if text:
            lxml_element.text = text
        return lxml_element


def to_lxml(document: Document, correlation_id: Optional[str] = None) -> Any:
    """Convert a parsed document to an lxml element tree."""
    return LxmlAdapter(correlation_id).to_target(document)


def from_lxml(element: Any, correlation_id: Optional[str] = None) -> Document:
    """Parse an lxml element through its serialized form."""
    return LxmlAdapter(correlation_id).from_target(element)
