"""Data models for documentation extraction."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field


@dataclass(frozen=True, order=True)
class Position:
    """A 1-based (line, column) location; compares line-major."""

    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


# Region end meaning "rest of file"
END_OF_FILE = Position(sys.maxsize, sys.maxsize)


@dataclass
class Param:
    """A documented parameter from a @param tag."""

    name: str
    description: str


@dataclass
class TagMap:
    """Parsed doc comment."""

    tags: dict[str, str] = field(default_factory=dict)  # "@author" -> value, last wins
    params: list[Param] = field(default_factory=list)  # declaration order
    comment: str = ""  # Body text, newlines removed
    short_comment: str = ""  # First sentence of comment

    def get(self, tag: str, default: str | None = None) -> str | None:
        return self.tags.get(tag, default)

    def __contains__(self, tag: str) -> bool:
        return tag in self.tags

    def param(self, name: str) -> Param | None:
        for p in self.params:
            if p.name == name:
                return p
        return None


@dataclass(frozen=True)
class CategoryRegion:
    """A named span between @begin and @end markers."""

    name: str
    start: Position
    end: Position  # END_OF_FILE when the region was never closed

    @property
    def unbounded(self) -> bool:
        return self.end == END_OF_FILE

    def contains(self, position: Position) -> bool:
        """Exclusive on both bounds."""
        return self.start < position < self.end


@dataclass
class DefinitionRecord:
    """Extracted macro or function documentation."""

    name: str
    kind: str  # "macro" | "function"
    arguments: list[str]
    source: str  # Raw definition text
    filename: str
    position: Position
    catch_all: str | None = None
    category: str | None = None  # None means uncategorized
    tags: TagMap = field(default_factory=TagMap)

    @property
    def is_function(self) -> bool:
        return self.kind == "function"


@dataclass
class FileDoc:
    """Documentation for one processed template file."""

    filename: str
    description: TagMap | None = None
    definitions: list[DefinitionRecord] = field(default_factory=list)
    categories: dict[str, list[DefinitionRecord]] = field(default_factory=dict)


@dataclass
class GlobalIndex:
    """Definitions accumulated across every processed file."""

    all_categories: dict[str, list[DefinitionRecord]] = field(default_factory=dict)
    all_definitions: list[DefinitionRecord] = field(default_factory=list)
    files: list[FileDoc] = field(default_factory=list)  # Processing order
    failed: list[str] = field(default_factory=list)  # Files skipped after an error
