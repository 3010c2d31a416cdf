"""Document and node model produced by the tree builder.

Nodes own their children; the reference from a child back to its parent is a
``weakref`` and never keeps the parent alive. Trees are only built by
:class:`~strict_xml_parser.tree.builder.XMLTreeBuilder` and expose read
operations only.
"""

import weakref
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

from strict_xml_parser.scanning.patterns import TEXT_NODE_NAME


@dataclass(eq=False)
class Node:
    """A single element or synthetic ``#text`` node of the document tree.

    An element whose only content is one run of text holds that text in
    ``value`` and has no children. Elements with mixed or element-only
    content keep every piece as a child and leave ``value`` empty.
    """

    name: str
    attributes: Dict[str, str] = field(default_factory=dict)
    value: str = ""
    children: List["Node"] = field(default_factory=list)

    # Offset of the "<" that opened the element, for diagnostics
    start_offset: Optional[int] = field(default=None, repr=False)

    _parent_ref: Optional["weakref.ReferenceType[Node]"] = field(
        default=None, init=False, repr=False
    )

    @classmethod
    def text_node(cls, value: str) -> "Node":
        """Create a synthetic text node."""
        return cls(name=TEXT_NODE_NAME, value=value)

    @property
    def parent(self) -> Optional["Node"]:
        """Enclosing node, or None for the root."""
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @property
    def is_text(self) -> bool:
        """Check if this is a synthetic text node."""
        return self.name == TEXT_NODE_NAME

    def _append_child(self, child: "Node") -> None:
        child._parent_ref = weakref.ref(self)
        self.children.append(child)

    def _detach(self) -> None:
        self._parent_ref = None

    def _collapse_text(self) -> None:
        """Move a lone text child into ``value``."""
        if len(self.children) == 1 and self.children[0].is_text:
            self.value = self.children[0].value
            self.children.clear()

    def walk(self) -> Iterator[Tuple[int, "Node"]]:
        """Yield ``(depth, node)`` pairs in document order, this node at depth 0.

        Iterative, so nesting depth is not bounded by the recursion limit.
        """
        stack = [(0, self)]
        while stack:
            depth, node = stack.pop()
            yield depth, node
            stack.extend((depth + 1, child) for child in reversed(node.children))

    def iter(self) -> Iterator["Node"]:
        """Iterate over this node and its descendants in document order."""
        return (node for _, node in self.walk())

    def inner_text(self) -> str:
        """Concatenate own value and every descendant's text, in document order."""
        return "".join(node.value for node in self.iter())

    def description(self, indent: int = 0) -> str:
        """Indented outline of this subtree, one line per node."""
        lines = []
        for depth, node in self.walk():
            parts = [" " * (indent + depth) + "+ " + node.name]
            for key in sorted(node.attributes):
                parts.append(f", {key}={node.attributes[key]}")
            if node.value:
                parts.append(f", {node.value}")
            lines.append("".join(parts) + "\n")
        return "".join(lines)

    def find(self, name: str) -> Optional["Node"]:
        """Find first descendant element with matching name."""
        return next(
            (node for node in self.iter() if node is not self and node.name == name),
            None,
        )

    def find_all(self, name: str) -> List["Node"]:
        """Find all descendant elements with matching name."""
        return [node for node in self.iter() if node is not self and node.name == name]

    def get_depth(self) -> int:
        """Get depth of this node in the tree (root = 0)."""
        depth = 0
        parent = self.parent
        while parent is not None:
            depth += 1
            parent = parent.parent
        return depth

    def to_dict(self) -> Dict[str, Any]:
        """Convert node to dictionary representation."""
        result: Dict[str, Any] = {}
        stack: List[Tuple["Node", Optional[List[Dict[str, Any]]]]] = [(self, None)]
        while stack:
            node, siblings = stack.pop()
            entry: Dict[str, Any] = {
                "name": node.name,
                "attributes": dict(node.attributes),
            }
            if node.value:
                entry["value"] = node.value
            if siblings is None:
                result = entry
            else:
                siblings.append(entry)
            if node.children:
                entry["children"] = []
                stack.extend((child, entry["children"]) for child in reversed(node.children))
        return result


@dataclass(eq=False)
class Document:
    """Parsed document: declaration data plus the root element, if any."""

    version: str
    attributes: Dict[str, str] = field(default_factory=dict)
    root: Optional[Node] = None

    @property
    def encoding(self) -> Optional[str]:
        """Declared encoding, recorded but not acted upon."""
        return self.attributes.get("encoding")

    def iter_elements(self) -> List[Node]:
        """All element nodes in document order."""
        if self.root is None:
            return []
        return [node for node in self.root.iter() if not node.is_text]

    def find(self, name: str) -> Optional[Node]:
        """Find first element with matching name, the root included."""
        if self.root is None:
            return None
        if self.root.name == name:
            return self.root
        return self.root.find(name)

    def find_all(self, name: str) -> List[Node]:
        """Find all elements with matching name, the root included."""
        if self.root is None:
            return []
        return [node for node in self.root.iter() if node.name == name]

    def inner_text(self) -> str:
        """Inner text of the root element, or an empty string."""
        return self.root.inner_text() if self.root is not None else ""

    def description(self) -> str:
        """Diagnostic outline of the whole document."""
        header = f"XML version={self.version}\n"
        if self.root is None:
            return header
        return header + self.root.description(0)

    def to_dict(self) -> Dict[str, Any]:
        """Convert document to dictionary representation."""
        result: Dict[str, Any] = {
            "version": self.version,
            "attributes": dict(self.attributes),
        }
        if self.root is not None:
            result["root"] = self.root.to_dict()
        return result
