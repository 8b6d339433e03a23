"""Template tree nodes consumed by the extractors.

Any parser may produce these; the extractors only rely on child order,
node kind, positions and the per-kind attributes below.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from .config import DOC_MARKER
from .models import Position


@dataclass(eq=False)
class Node:
    begin: Position
    end: Position
    children: list[Node] = field(default_factory=list, kw_only=True)
    parent: Node | None = field(default=None, kw_only=True, repr=False)

    def append(self, child: Node) -> Node:
        child.parent = self
        self.children.append(child)
        return child

    @property
    def index(self) -> int:
        """Position of this node within its parent's children (by identity)."""
        if self.parent is None:
            return -1
        for i, sibling in enumerate(self.parent.children):
            if sibling is self:
                return i
        return -1


@dataclass(eq=False)
class RootNode(Node):
    pass


@dataclass(eq=False)
class TextNode(Node):
    source: str

    @property
    def is_whitespace(self) -> bool:
        return not self.source.strip()


@dataclass(eq=False)
class CommentNode(Node):
    text: str  # Between the comment delimiters


@dataclass(eq=False)
class DefinitionNode(Node):
    name: str
    arguments: list[str]
    source: str
    is_function: bool = False
    catch_all: str | None = None


@dataclass(eq=False)
class ElementNode(Node):
    """Any other directive, user-directive call or interpolation."""

    keyword: str
    source: str


def is_doc_comment(node: Node) -> bool:
    return isinstance(node, CommentNode) and node.text.startswith(DOC_MARKER)


def walk(root: Node) -> Iterator[Node]:
    """Yield every node in document order using an explicit stack."""
    stack = [root]
    while stack:
        node = stack.pop()
        stack.extend(reversed(node.children))
        yield node
