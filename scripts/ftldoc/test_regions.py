"""Tests for category region resolution."""

from ftldoc.diagnostics import CollectingSink
from ftldoc.models import END_OF_FILE, CategoryRegion, Position
from ftldoc.parser import parse_template
from ftldoc.regions import find_category, resolve_regions
from ftldoc.tree import CommentNode, ElementNode, RootNode


def _comment(text, line, width=10):
    return CommentNode(Position(line, 1), Position(line, width), text)


def _tree(*children):
    root = RootNode(Position(1, 1), Position(99, 1))
    for child in children:
        root.append(child)
    return root


def test_no_markers():
    sink = CollectingSink()
    scan = resolve_regions(_tree(_comment("- just docs", 1)), sink)
    assert scan.regions == []
    assert scan.categories == []
    assert len(sink) == 0


def test_begin_end_pair():
    sink = CollectingSink()
    root = _tree(_comment(" @begin Forms ", 2), _comment(" @end", 8, width=12))
    scan = resolve_regions(root, sink)
    assert scan.regions == [CategoryRegion("Forms", Position(2, 1), Position(8, 12))]
    assert scan.categories == ["Forms"]
    assert len(sink) == 0


def test_markers_in_doc_comments():
    root = _tree(_comment("-\n@begin Tables", 1), _comment("-@end", 5))
    scan = resolve_regions(root, CollectingSink())
    assert [r.name for r in scan.regions] == ["Tables"]


def test_end_without_begin():
    sink = CollectingSink()
    scan = resolve_regions(_tree(_comment(" @end", 3)), sink)
    assert scan.regions == []
    assert len(sink) == 1
    assert "@end without @begin" in sink.messages[0]


def test_missing_end():
    sink = CollectingSink()
    scan = resolve_regions(_tree(_comment(" @begin A", 3)), sink)
    assert scan.regions == [CategoryRegion("A", Position(3, 1), END_OF_FILE)]
    assert scan.regions[0].unbounded
    assert len(sink) == 1
    assert "missing @end" in sink.messages[0]


def test_nested_begin_closes_at_new_marker():
    sink = CollectingSink()
    root = _tree(
        _comment(" @begin A", 1),
        _comment(" @begin B", 5),
        _comment(" @end", 9),
    )
    scan = resolve_regions(root, sink)
    assert scan.regions == [
        CategoryRegion("A", Position(1, 1), Position(5, 1)),
        CategoryRegion("B", Position(5, 1), Position(9, 10)),
    ]
    assert len(sink) == 1
    assert "nested @begin" in sink.messages[0]


def test_markers_found_in_nested_blocks():
    block = ElementNode(Position(2, 1), Position(6, 8), "if", "")
    block.append(_comment(" @begin Inner", 3))
    root = _tree(_comment(" @begin Outer", 1), block, _comment(" @end", 7))
    sink = CollectingSink()
    scan = resolve_regions(root, sink)
    assert [r.name for r in scan.regions] == ["Outer", "Inner"]
    assert scan.regions[1].end == Position(7, 10)
    assert len(sink) == 1


def test_same_name_listed_once():
    root = _tree(
        _comment(" @begin A", 1),
        _comment(" @end", 2),
        _comment(" @begin A", 3),
        _comment(" @end", 4),
    )
    scan = resolve_regions(root, CollectingSink())
    assert len(scan.regions) == 2
    assert scan.categories == ["A"]


def test_parsed_template_regions():
    source = "<#-- @begin Forms -->\n<#macro a></#macro>\n<#-- @end -->\n"
    scan = resolve_regions(parse_template(source), CollectingSink())
    assert scan.regions == [CategoryRegion("Forms", Position(1, 1), Position(3, 13))]


class TestFindCategory:
    region = CategoryRegion("A", Position(2, 5), Position(8, 3))

    def test_strictly_inside(self):
        assert find_category(Position(2, 6), [self.region]) is self.region
        assert find_category(Position(8, 2), [self.region]) is self.region
        assert find_category(Position(5, 1), [self.region]) is self.region

    def test_bounds_are_exclusive(self):
        assert find_category(Position(2, 5), [self.region]) is None
        assert find_category(Position(8, 3), [self.region]) is None

    def test_outside(self):
        assert find_category(Position(1, 99), [self.region]) is None
        assert find_category(Position(2, 4), [self.region]) is None
        assert find_category(Position(9, 1), [self.region]) is None

    def test_unbounded_region(self):
        region = CategoryRegion("B", Position(3, 1), END_OF_FILE)
        assert find_category(Position(100000, 1), [region]) is region

    def test_first_discovered_wins(self):
        inner = CategoryRegion("B", Position(3, 1), Position(4, 1))
        assert find_category(Position(3, 5), [self.region, inner]) is self.region
        assert find_category(Position(3, 5), [inner, self.region]) is inner

    def test_no_regions(self):
        assert find_category(Position(1, 1), []) is None


def test_empty_sink_is_used():
    sink = CollectingSink()
    assert not sink.messages
    resolve_regions(parse_template("<#-- @end -->"), sink)
    assert sink.messages == ["@end without @begin at 1:1"]
