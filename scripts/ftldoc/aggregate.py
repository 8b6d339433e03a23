"""Per-file and cross-file collections of definitions."""

from __future__ import annotations

import logging

from .models import DefinitionRecord, FileDoc, GlobalIndex

log = logging.getLogger(__name__)


def sort_definitions(definitions: list[DefinitionRecord]) -> list[DefinitionRecord]:
    """Case-insensitive by name; equal names keep their input order."""
    return sorted(definitions, key=lambda d: d.name.lower())


def _sorted_categories(
    categories: dict[str, list[DefinitionRecord]],
) -> dict[str, list[DefinitionRecord]]:
    return {name: sort_definitions(categories[name]) for name in sorted(categories)}


def sort_file(doc: FileDoc) -> FileDoc:
    doc.definitions = sort_definitions(doc.definitions)
    doc.categories = _sorted_categories(doc.categories)
    return doc


class DocIndex:
    """Accumulates file documentation into a GlobalIndex.

    Files are committed one at a time in processing order; ``finalize``
    sorts every exposed list once the last file has been added.
    """

    def __init__(self) -> None:
        self.index = GlobalIndex()
        self._finalized = False

    def add_file(self, doc: FileDoc) -> None:
        if self._finalized:
            raise RuntimeError("DocIndex is already finalized")
        self.index.files.append(doc)
        for name, records in doc.categories.items():
            self.index.all_categories.setdefault(name, []).extend(records)
        self.index.all_definitions.extend(doc.definitions)

    def add_failure(self, filename: str) -> None:
        self.index.failed.append(filename)

    def finalize(self) -> GlobalIndex:
        if not self._finalized:
            for doc in self.index.files:
                sort_file(doc)
            self.index.all_categories = _sorted_categories(self.index.all_categories)
            self.index.all_definitions = sort_definitions(self.index.all_definitions)
            self._finalized = True
            log.info(
                "Indexed %d definitions in %d categories from %d files",
                len(self.index.all_definitions),
                len(self.index.all_categories),
                len(self.index.files),
            )
        return self.index
