"""Macro and function documentation extractor."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .comments import parse_comment
from .diagnostics import DiagnosticSink
from .models import CategoryRegion, DefinitionRecord, FileDoc, TagMap
from .regions import find_category, resolve_regions
from .tree import CommentNode, DefinitionNode, Node, TextNode, is_doc_comment, walk

log = logging.getLogger(__name__)


@dataclass
class Collection:
    """Definitions of one file plus the comments their lookups consumed."""

    definitions: list[DefinitionRecord] = field(default_factory=list)
    consumed: set[CommentNode] = field(default_factory=set)


def _attached_comment(
    definition: DefinitionNode, consumed: set[CommentNode]
) -> CommentNode | None:
    """Find the doc comment directly above a definition.

    Walks preceding siblings backwards, skipping whitespace-only text.
    The first comment met ends the search; it is attached only if it is
    a doc comment.
    """
    parent = definition.parent
    if parent is None:
        return None

    for j in range(definition.index - 1, -1, -1):
        sibling = parent.children[j]
        if isinstance(sibling, TextNode) and sibling.is_whitespace:
            continue
        if isinstance(sibling, CommentNode):
            consumed.add(sibling)
            return sibling if is_doc_comment(sibling) else None
        return None
    return None


def _make_record(
    node: DefinitionNode,
    comment: CommentNode | None,
    regions: list[CategoryRegion],
    filename: str,
) -> DefinitionRecord:
    region = find_category(node.begin, regions)
    return DefinitionRecord(
        name=node.name,
        kind="function" if node.is_function else "macro",
        arguments=list(node.arguments),
        catch_all=node.catch_all,
        source=node.source,
        filename=filename,
        position=node.begin,
        category=region.name if region else None,
        tags=parse_comment(comment.text if comment else None),
    )


def collect_definitions(
    root: Node, regions: list[CategoryRegion], filename: str
) -> Collection:
    """Build a DefinitionRecord for every macro and function in the tree."""
    result = Collection()
    for node in walk(root):
        if not isinstance(node, DefinitionNode):
            continue
        comment = _attached_comment(node, result.consumed)
        result.definitions.append(_make_record(node, comment, regions, filename))
    return result


def file_description(root: Node, consumed: set[CommentNode]) -> TagMap | None:
    """Parse the leading doc comment of a file, unless a definition owns it."""
    if not root.children:
        return None
    first = root.children[0]
    if is_doc_comment(first) and first not in consumed:
        return parse_comment(first.text)
    return None


def extract_file(
    root: Node, filename: str, sink: DiagnosticSink | None = None
) -> FileDoc:
    """Extract the documentation model of one parsed template."""
    scan = resolve_regions(root, sink)
    collection = collect_definitions(root, scan.regions, filename)

    doc = FileDoc(
        filename=filename,
        description=file_description(root, collection.consumed),
        definitions=collection.definitions,
    )
    for name in scan.categories:
        doc.categories.setdefault(name, [])
    for record in collection.definitions:
        doc.categories.setdefault(record.category or "", []).append(record)

    log.debug(
        "%s: %d definitions, %d regions",
        filename,
        len(collection.definitions),
        len(scan.regions),
    )
    return doc
