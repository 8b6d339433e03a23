"""Run extraction over a list of template files."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from pathlib import Path

from . import config
from .aggregate import DocIndex, sort_file
from .diagnostics import DiagnosticSink, LoggingSink
from .extractors import extract_file
from .models import FileDoc, GlobalIndex
from .parser import parse_file
from .tree import RootNode

log = logging.getLogger(__name__)

Parse = Callable[[Path], RootNode]
Emit = Callable[[FileDoc], None]


def process_file(
    path: Path,
    parse: Parse = parse_file,
    sink: DiagnosticSink | None = None,
) -> FileDoc:
    """Parse one template and extract its documentation model."""
    if sink is None:
        sink = LoggingSink(prefix=f"{path.name}: ")
    root = parse(path)
    return sort_file(extract_file(root, path.name, sink))


def build_index(
    paths: Iterable[Path],
    parse: Parse = parse_file,
    sink: DiagnosticSink | None = None,
    emit: Emit | None = None,
    sort_files: bool | None = None,
) -> GlobalIndex:
    """Process every file in order and return the finalized index.

    A file that fails to parse, or whose ``emit`` callback raises, is
    logged and skipped; nothing from it reaches the index.
    """
    paths = list(paths)
    if sort_files is None:
        sort_files = config.SORT_FILES
    if sort_files:
        paths.sort(key=lambda p: p.name)

    index = DocIndex()
    for path in paths:
        try:
            doc = process_file(path, parse, sink)
            if emit is not None:
                emit(doc)
        except Exception:
            log.exception("Skipping %s", path)
            index.add_failure(path.name)
            continue
        index.add_file(doc)

    return index.finalize()
