"""ftldoc - Documentation extraction for FreeMarker template macros."""

from .comments import parse_comment
from .errors import FtlDocError, TemplateSyntaxError
from .extractors import extract_file
from .models import (
    CategoryRegion,
    DefinitionRecord,
    FileDoc,
    GlobalIndex,
    Param,
    Position,
    TagMap,
)
from .parser import parse_file, parse_template
from .pipeline import build_index

__all__ = [
    "build_index",
    "extract_file",
    "parse_comment",
    "parse_file",
    "parse_template",
    "CategoryRegion",
    "DefinitionRecord",
    "FileDoc",
    "GlobalIndex",
    "Param",
    "Position",
    "TagMap",
    "FtlDocError",
    "TemplateSyntaxError",
]
