"""Documentation extractor for FreeMarker templates.

Generates, in the output directory:
    {file}.json              - Context for each template's page
    files.json               - File list
    index-all-cat.json       - All macros/functions by category
    index-all-alpha.json     - All macros/functions alphabetically
    overview.json            - Every file with its definitions
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from . import config
from .generators import generate_file_context, generate_pages
from .models import FileDoc
from .pipeline import build_index
from .validators import compute_coverage, validate_docs


def _write_json(path: Path, data: dict[str, Any], encoding: str) -> None:
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding=encoding)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="ftldoc", description="Extract macro documentation from FreeMarker templates."
    )
    parser.add_argument("files", nargs="+", type=Path, help="Template files to document")
    parser.add_argument(
        "-o", "--output-dir", type=Path, default=Path("ftldoc-out"), help="Output directory"
    )
    parser.add_argument(
        "--sort-files",
        action="store_true",
        default=config.SORT_FILES,
        help="Process files in name order instead of the order given",
    )
    parser.add_argument(
        "--strict", action="store_true", help="Fail on undocumented macros and functions"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress")
    parser.add_argument("--encoding", default=config.OUTPUT_ENCODING, help="Output encoding")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Generate all documentation contexts."""
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    out_dir: Path = args.output_dir
    out_dir.mkdir(parents=True, exist_ok=True)

    def emit(doc: FileDoc) -> None:
        target = out_dir / f"{doc.filename}.json"
        print(f"Generating {target}...")
        _write_json(target, generate_file_context(doc), args.encoding)

    index = build_index(args.files, emit=emit, sort_files=args.sort_files)

    for name, context in generate_pages(index).items():
        _write_json(out_dir / f"{name}.json", context, args.encoding)
        print(f"  {out_dir / name}.json")

    if index.failed:
        print(f"\nSkipped {len(index.failed)} file(s): {', '.join(index.failed)}")

    validation = validate_docs(index, strict=args.strict)
    for warning in validation.warnings:
        print(f"  ⚠ {warning}", file=sys.stderr)
    if validation.errors:
        print("\nValidation errors:")
        for err in validation.errors:
            print(f"  ✗ {err}")
        return 1

    print(
        f"\nDocumented {len(index.all_definitions)} definitions in "
        f"{len(index.files)} files, coverage {compute_coverage(index):.0%}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
