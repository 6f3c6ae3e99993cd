#!/usr/bin/env python3
"""
Dump the AST of a C/C++ file through the cursor visitor API.

Declarations are printed as ``<kind>: <spelling> (<usr>)``; the walk only
descends into classes, structs, enums and namespaces.

Usage:
    python run_dump.py --fname foo.cxx
    python run_dump.py --fname foo.cxx -- -I include -std=c++17
    python run_dump.py --fname foo.cxx --report-dir output/run_reports
"""

import argparse
import logging
import sys
from typing import Any, Dict, List, Optional, TextIO

from core.run_artifacts import DEFAULT_REPORT_DIR, write_run_report
from core.structured_logging import configure_structured_logging, phase_scope, set_run_id

logger = logging.getLogger(__name__)

TOOL_NAME = "run_dump"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Everything after ``--`` is handed to clang unchanged.
    """
    parser = argparse.ArgumentParser(
        description="Dump the AST of a C/C++ file via the Cursor visitor API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python run_dump.py --fname foo.cxx\n"
            "  python run_dump.py --fname foo.cxx -- -I include -DNDEBUG\n"
        ),
    )
    parser.add_argument("--fname", default="", help="The file to analyze.")
    parser.add_argument(
        "--report-dir",
        default=None,
        help=f"Write a JSON run report here (e.g. {DEFAULT_REPORT_DIR}).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=False,
        help="Enable DEBUG logging.",
    )
    parser.add_argument("clang_args", nargs="*", help="Arguments passed to clang.")
    return parser.parse_args(argv)


def dump_translation_unit(
    fname: str,
    clang_args: List[str],
    out: TextIO = sys.stdout,
) -> Dict[str, Any]:
    """Parse ``fname`` and print its top-level declarations to ``out``.

    Returns a summary with the number of visited cursors and the
    diagnostics clang reported.

    Raises:
        TranslationUnitLoadError: If libclang cannot parse the file.
    """
    from clangbind import ChildVisitResult, CursorKind, Index

    recurse_into = {
        CursorKind.CLASS_DECL,
        CursorKind.ENUM_DECL,
        CursorKind.STRUCT_DECL,
        CursorKind.NAMESPACE,
    }
    visited = 0

    with Index(display_diagnostics=True) as idx:
        with phase_scope("parse"):
            tu = idx.parse(fname, clang_args)
        with tu:
            print(f"tu: {tu.spelling}", file=out)
            cursor = tu.cursor
            print(f"cursor-isnull: {cursor.is_null()}", file=out)
            print(f"cursor: {cursor.spelling}", file=out)
            print(f"cursor-kind: {cursor.kind.spelling}", file=out)

            tu_file = tu.file(fname)
            print(f"tu-fname: {tu_file.name if tu_file else '<none>'}", file=out)

            def visitor(child, parent):
                nonlocal visited
                visited += 1
                if child.is_null():
                    print("cursor: <none>", file=out)
                    return ChildVisitResult.CONTINUE
                print(f"{child.kind.spelling}: {child.spelling} ({child.usr})", file=out)
                if child.kind in recurse_into:
                    return ChildVisitResult.RECURSE
                return ChildVisitResult.CONTINUE

            with phase_scope("visit"):
                cursor.visit(visitor)

            with tu.diagnostics as diagnostics:
                messages = [
                    {"severity": d.severity.spelling, "message": d.format()}
                    for d in diagnostics
                ]

    logger.info("Visited %d cursors, %d diagnostics", visited, len(messages))
    return {
        "fname": fname,
        "clang_args": list(clang_args),
        "cursor_count": visited,
        "diagnostics": messages,
    }


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the AST dump tool."""
    args = parse_args(argv)
    configure_structured_logging(logging.DEBUG if args.verbose else logging.INFO)
    run_id = set_run_id()

    print(":: run_dump...")
    print(f":: fname: {args.fname}")
    print(f":: args: {args.clang_args}")
    if not args.fname:
        print("please provide a file name to analyze")
        sys.exit(1)

    from clangbind import LibclangError

    try:
        summary = dump_translation_unit(args.fname, args.clang_args)
    except LibclangError as e:
        logger.error(f"Could not dump {args.fname}: {e}")
        sys.exit(1)

    if args.report_dir:
        path = write_run_report(summary, run_id, output_dir=args.report_dir, tool=TOOL_NAME)
        logger.info(f"Run report written to {path}")

    print(":: bye.")


if __name__ == "__main__":
    main()
