"""Tree building engine for strict XML parsing.

Key Components:
    XMLTreeBuilder: Single-pass builder from XML text to a document tree
    Document: Declaration data plus the root element
    Node: Element or synthetic ``#text`` node with attributes, value and children
"""

from .builder import XMLTreeBuilder
from .node import Document, Node

__all__ = [
    "Document",
    "Node",
    "XMLTreeBuilder",
]
