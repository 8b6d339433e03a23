"""Category regions declared by @begin / @end marker comments."""

from __future__ import annotations

from dataclasses import dataclass, field

from .comments import parse_comment
from .diagnostics import DiagnosticSink, LoggingSink
from .models import END_OF_FILE, CategoryRegion, Position
from .tree import CommentNode, Node, walk


@dataclass
class RegionScan:
    """Regions found in one file, in discovery order."""

    regions: list[CategoryRegion] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)  # Names, first-seen order

    def add(self, region: CategoryRegion) -> None:
        self.regions.append(region)
        if region.name not in self.categories:
            self.categories.append(region.name)


def resolve_regions(root: Node, sink: DiagnosticSink | None = None) -> RegionScan:
    """Walk the tree and pair @begin/@end markers into regions.

    Malformed markers are reported to ``sink`` and recovered from:
    a nested @begin closes the open region at the new marker, a stray @end
    is ignored, and a region still open at the end of the file runs to
    END_OF_FILE.
    """
    if sink is None:
        sink = LoggingSink()
    scan = RegionScan()

    name: str | None = None
    start: Position | None = None

    for node in walk(root):
        if not isinstance(node, CommentNode):
            continue
        tags = parse_comment(node.text)

        if "@begin" in tags:
            if start is not None:
                sink.report(f"nested @begin at {node.begin}")
                scan.add(CategoryRegion(name, start, node.begin))
            name = tags.get("@begin").strip()
            start = node.begin

        if "@end" in tags:
            if start is None:
                sink.report(f"@end without @begin at {node.begin}")
            else:
                scan.add(CategoryRegion(name, start, node.end))
                name = start = None

    if start is not None:
        sink.report(f"missing @end for @begin {name!r} (EOF)")
        scan.add(CategoryRegion(name, start, END_OF_FILE))

    return scan


def find_category(
    position: Position, regions: list[CategoryRegion]
) -> CategoryRegion | None:
    """Return the first region strictly containing ``position``."""
    for region in regions:
        if region.contains(position):
            return region
    return None
