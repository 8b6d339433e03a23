"""Documentation validation and quality checks."""

from __future__ import annotations

from dataclasses import dataclass, field

from .models import DefinitionRecord, GlobalIndex


@dataclass
class ValidationResult:
    """Results from documentation validation."""

    errors: list[str] = field(default_factory=list)  # Run fails if non-empty
    warnings: list[str] = field(default_factory=list)  # Printed but allowed


def _is_documented(record: DefinitionRecord) -> bool:
    tags = record.tags
    return bool(tags.comment or tags.params or tags.tags)


def validate_docs(index: GlobalIndex, strict: bool = False) -> ValidationResult:
    """Validate extracted documentation.

    Checks:
    1. Every macro/function should have a doc comment (warning, error in strict)
    2. Every @param should name a declared argument (warning)

    Args:
        index: The finalized index
        strict: If True, undocumented definitions are errors instead of warnings

    Returns:
        ValidationResult with errors and warnings
    """
    result = ValidationResult()

    for record in index.all_definitions:
        label = f"{record.filename}: {record.kind} {record.name}"
        if not _is_documented(record):
            msg = f"{label}: missing doc comment (undocumented)"
            if strict:
                result.errors.append(msg)
            else:
                result.warnings.append(msg)
            continue

        declared = set(record.arguments)
        if record.catch_all:
            declared.add(record.catch_all)
        for param in record.tags.params:
            if param.name not in declared:
                result.warnings.append(
                    f"{label}: @param {param.name} is not an argument"
                )

    return result


def compute_coverage(index: GlobalIndex) -> float:
    """Fraction of definitions with a doc comment (1.0 when there are none)."""
    total = len(index.all_definitions)
    documented = sum(1 for r in index.all_definitions if _is_documented(r))
    return documented / total if total > 0 else 1.0
