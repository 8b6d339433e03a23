"""Template contexts handed to the page renderer.

Each function returns plain dicts and lists, ready for a template engine
or for JSON output.
"""

from __future__ import annotations

from typing import Any

from .models import DefinitionRecord, FileDoc, GlobalIndex, TagMap

PAGE_SUFFIX = ".html"


def comment_context(tags: TagMap | None) -> dict[str, Any]:
    """Flatten a TagMap the way page templates read it."""
    if tags is None:
        return {}
    result: dict[str, Any] = dict(tags.tags)
    result["@param"] = [{"name": p.name, "description": p.description} for p in tags.params]
    result["comment"] = tags.comment
    result["short_comment"] = tags.short_comment
    return result


def definition_context(record: DefinitionRecord) -> dict[str, Any]:
    result = comment_context(record.tags)
    result.update(
        {
            "category": record.category,
            "name": record.name,
            "code": record.source,
            "isfunction": record.is_function,
            "type": record.kind,
            "arguments": list(record.arguments),
            "catchall": record.catch_all,
            "filename": record.filename,
            "line": record.position.line,
        }
    )
    return result


def _definitions(records: list[DefinitionRecord]) -> list[dict[str, Any]]:
    return [definition_context(r) for r in records]


def _categories(
    categories: dict[str, list[DefinitionRecord]],
) -> dict[str, list[dict[str, Any]]]:
    return {name: _definitions(records) for name, records in categories.items()}


def generate_file_context(doc: FileDoc) -> dict[str, Any]:
    """Context for one file's page."""
    return {
        "filename": doc.filename,
        "macros": _definitions(doc.definitions),
        "comment": comment_context(doc.description),
        "categories": _categories(doc.categories),
    }


def generate_all_categories_context(index: GlobalIndex) -> dict[str, Any]:
    return {"categories": _categories(index.all_categories)}


def generate_all_alpha_context(index: GlobalIndex) -> dict[str, Any]:
    return {"macros": _definitions(index.all_definitions)}


def generate_overview_context(index: GlobalIndex) -> dict[str, Any]:
    return {"files": [generate_file_context(doc) for doc in index.files]}


def generate_filelist_context(index: GlobalIndex, suffix: str = PAGE_SUFFIX) -> dict[str, Any]:
    """File list page; files are listed by name regardless of processing order."""
    return {
        "suffix": suffix,
        "files": sorted(doc.filename for doc in index.files),
    }


def generate_pages(index: GlobalIndex) -> dict[str, dict[str, Any]]:
    """All global page contexts, keyed by page name."""
    return {
        "files": generate_filelist_context(index),
        "index-all-cat": generate_all_categories_context(index),
        "index-all-alpha": generate_all_alpha_context(index),
        "overview": generate_overview_context(index),
    }
