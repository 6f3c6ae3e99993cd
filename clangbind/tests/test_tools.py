"""Tests for the run_dump and run_compdb command-line tools."""

import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

import run_compdb
import run_dump
from clangbind.tests.util import requires_libclang

CXX_SOURCE = """\
namespace ns {
struct S { int x; };
}
int f(void);
"""


class TestParseArgs(unittest.TestCase):
    def test_run_dump_clang_args_after_separator(self) -> None:
        args = run_dump.parse_args(["--fname", "foo.cxx", "--", "-I", "include", "-DX"])
        self.assertEqual(args.fname, "foo.cxx")
        self.assertEqual(args.clang_args, ["-I", "include", "-DX"])
        self.assertIsNone(args.report_dir)
        self.assertFalse(args.verbose)

    def test_run_dump_defaults(self) -> None:
        args = run_dump.parse_args([])
        self.assertEqual(args.fname, "")
        self.assertEqual(args.clang_args, [])

    def test_run_dump_requires_fname(self) -> None:
        with redirect_stdout(io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                run_dump.main([])
        self.assertEqual(ctx.exception.code, 1)

    def test_run_compdb_directory(self) -> None:
        args = run_compdb.parse_args(["build", "--report-dir", "out"])
        self.assertEqual(args.directory, "build")
        self.assertEqual(args.report_dir, "out")

    def test_run_compdb_missing_database(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(FileNotFoundError):
                run_compdb.dump_compilation_database(tmpdir, out=io.StringIO())
            with redirect_stdout(io.StringIO()):
                with self.assertRaises(SystemExit) as ctx:
                    run_compdb.main([tmpdir])
        self.assertEqual(ctx.exception.code, 1)

    def test_quote(self) -> None:
        self.assertEqual(run_compdb._quote('a "b"'), '"a \\"b\\""')


@requires_libclang
class TestRunDump(unittest.TestCase):
    def setUp(self) -> None:
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)
        self.fname = os.path.join(self.tmpdir.name, "sample.cxx")
        Path(self.fname).write_text(CXX_SOURCE, encoding="utf-8")

    def test_dump_translation_unit(self) -> None:
        out = io.StringIO()
        summary = run_dump.dump_translation_unit(self.fname, ["-std=c++11"], out=out)
        lines = out.getvalue().splitlines()

        self.assertEqual(lines[0], f"tu: {self.fname}")
        self.assertEqual(lines[1], "cursor-isnull: False")
        self.assertEqual(lines[2], f"cursor: {self.fname}")
        self.assertEqual(lines[3], "cursor-kind: TranslationUnit")
        self.assertEqual(lines[4], f"tu-fname: {self.fname}")
        self.assertTrue(lines[5].startswith("Namespace: ns (c:@N@ns)"))
        self.assertTrue(lines[6].startswith("StructDecl: S ("))
        self.assertTrue(lines[7].startswith("FieldDecl: x ("))
        self.assertTrue(lines[8].startswith("FunctionDecl: f ("))

        self.assertEqual(summary["cursor_count"], 4)
        self.assertEqual(summary["clang_args"], ["-std=c++11"])
        self.assertEqual(summary["diagnostics"], [])

    def test_main_writes_report(self) -> None:
        report_dir = os.path.join(self.tmpdir.name, "reports")
        with redirect_stdout(io.StringIO()) as stdout:
            run_dump.main(["--fname", self.fname, "--report-dir", report_dir])
        self.assertIn(":: bye.", stdout.getvalue())
        reports = list(Path(report_dir).glob("run_dump-*.json"))
        self.assertEqual(len(reports), 1)
        payload = json.loads(reports[0].read_text(encoding="utf-8"))
        self.assertEqual(payload["fname"], self.fname)
        self.assertEqual(payload["tool"], "run_dump")

    def test_main_fails_on_unparsable_input(self) -> None:
        missing = os.path.join(self.tmpdir.name, "missing.cxx")
        with redirect_stdout(io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                run_dump.main(["--fname", missing])
        self.assertEqual(ctx.exception.code, 1)


@requires_libclang
class TestRunCompdb(unittest.TestCase):
    def test_dump_compilation_database(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            build_dir = os.path.realpath(tmpdir)
            entries = [
                {"directory": build_dir, "arguments": ["clang", "-c", "a.c"], "file": "a.c"},
                {"directory": build_dir, "arguments": ["clang", "-c", "b.c"], "file": "b.c"},
            ]
            Path(build_dir, "compile_commands.json").write_text(
                json.dumps(entries), encoding="utf-8"
            )
            out = io.StringIO()
            summary = run_compdb.dump_compilation_database(build_dir, out=out)

        text = out.getvalue()
        self.assertTrue(text.startswith(":: got 2 compile commands\n"))
        self.assertIn("::  --- cmd=0 ---", text)
        self.assertIn(f'::  dir= "{build_dir}"', text)
        self.assertIn('::  args= {"clang", "-c", "a.c"}', text)
        self.assertEqual(summary["command_count"], 2)
        self.assertEqual(summary["commands"][1]["arguments"], ["clang", "-c", "b.c"])


if __name__ == "__main__":
    unittest.main()
