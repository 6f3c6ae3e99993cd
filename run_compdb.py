#!/usr/bin/env python3
"""
Dump the content of a Clang compilation database.

Usage:
    python run_compdb.py build/
    python run_compdb.py '$HOME/src/project/build' --report-dir output/run_reports
"""

import argparse
import logging
import os
import sys
from typing import Any, Dict, List, Optional, TextIO

from core.run_artifacts import write_run_report
from core.structured_logging import configure_structured_logging, phase_scope, set_run_id

logger = logging.getLogger(__name__)

TOOL_NAME = "run_compdb"
COMPDB_FILENAME = "compile_commands.json"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Dump the content of a Clang compilation database",
    )
    parser.add_argument(
        "directory",
        help=f"Directory containing a '{COMPDB_FILENAME}' file (env vars are expanded).",
    )
    parser.add_argument(
        "--report-dir",
        default=None,
        help="Write a JSON run report to this directory.",
    )
    return parser.parse_args(argv)


def _quote(arg: str) -> str:
    return '"' + arg.replace("\\", "\\\\").replace('"', '\\"') + '"'


def dump_compilation_database(directory: str, out: TextIO = sys.stdout) -> Dict[str, Any]:
    """Print every compile command found in ``directory``.

    Raises:
        FileNotFoundError: If the directory has no compile_commands.json.
        CompilationDatabaseError: If libclang cannot load the database.
    """
    from clangbind import CompilationDatabase

    fname = os.path.join(directory, COMPDB_FILENAME)
    if not os.path.isfile(fname):
        raise FileNotFoundError(f"could not open file [{fname}]")

    commands: List[Dict[str, Any]] = []
    with phase_scope("load"):
        db = CompilationDatabase.from_directory(directory)

    with db, db.get_all_compile_commands() as cmds:
        ncmds = len(cmds)
        print(f":: got {ncmds} compile commands", file=out)
        for i, cmd in enumerate(cmds):
            args = list(cmd.arguments)
            print(f"::  --- cmd={i} ---", file=out)
            print(f"::  dir= {_quote(cmd.directory)}", file=out)
            print(f"::  nargs= {len(args)}", file=out)
            print("::  args= {%s}" % ", ".join(_quote(a) for a in args), file=out)
            if i + 1 != ncmds:
                print("::", file=out)
            commands.append({"directory": cmd.directory, "arguments": args})

    return {"directory": directory, "command_count": len(commands), "commands": commands}


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the compilation database dump tool."""
    args = parse_args(argv)
    configure_structured_logging()
    run_id = set_run_id()

    directory = os.path.expandvars(args.directory)
    print(f":: inspecting [{directory}]...")

    from clangbind import LibclangError

    try:
        summary = dump_compilation_database(directory)
    except FileNotFoundError as e:
        logger.error(f"File error: {e}")
        sys.exit(1)
    except LibclangError as e:
        logger.error(f"could not open compilation database at [{directory}]: {e}")
        sys.exit(1)

    if args.report_dir:
        path = write_run_report(summary, run_id, output_dir=args.report_dir, tool=TOOL_NAME)
        logger.info(f"Run report written to {path}")

    print(f":: inspecting [{directory}]... [done]")


if __name__ == "__main__":
    main()
