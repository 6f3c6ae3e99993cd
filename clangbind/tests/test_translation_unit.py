"""Tests for Index and TranslationUnit lifecycle."""

import os
import tempfile
import unittest
from pathlib import Path

from clangbind import (
    CursorKind,
    DisposedHandleError,
    GlobalOptions,
    Index,
    TranslationUnit,
    TranslationUnitFlags,
    TranslationUnitLoadError,
    get_clang_version,
)
from clangbind.tests.util import get_cursor, get_tu, requires_libclang

SOURCE = """\
int one;
int two(int x) { return x + 1; }
"""


@requires_libclang
class TestIndex(unittest.TestCase):
    def test_create_and_dispose(self) -> None:
        index = Index.create()
        self.assertFalse(index.disposed)
        index.dispose()
        self.assertTrue(index.disposed)
        index.dispose()
        with self.assertRaises(DisposedHandleError):
            index.obj

    def test_global_options(self) -> None:
        with Index() as index:
            index.global_options = GlobalOptions.THREAD_BACKGROUND_PRIORITY_FOR_EDITING
            self.assertEqual(
                index.global_options,
                GlobalOptions.THREAD_BACKGROUND_PRIORITY_FOR_EDITING,
            )

    def test_version_string(self) -> None:
        self.assertIn("clang version", get_clang_version())


@requires_libclang
class TestTranslationUnit(unittest.TestCase):
    def setUp(self) -> None:
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)

    def _write(self, name: str, content: str) -> str:
        path = os.path.join(self.tmpdir.name, name)
        Path(path).write_text(content, encoding="utf-8")
        return path

    def test_parse_file_on_disk(self) -> None:
        path = self._write("one.c", SOURCE)
        with Index() as index:
            with index.parse(path, ["-std=c99"]) as tu:
                self.assertTrue(tu.is_valid())
                self.assertEqual(tu.spelling, path)
                self.assertIs(tu.index, index)
                self.assertEqual(tu.cursor.kind, CursorKind.TRANSLATION_UNIT)
                self.assertEqual(tu.cursor.spelling, path)
                names = [c.spelling for c in tu.cursor.get_children()]
                self.assertEqual(names, ["one", "two"])
            self.assertFalse(tu.is_valid())

    def test_parse_unsaved_file(self) -> None:
        tu = TranslationUnit.from_source("fake.c", unsaved_files=[("fake.c", SOURCE)])
        self.assertEqual(tu.spelling, "fake.c")
        self.assertIsNotNone(get_cursor(tu, "two"))
        tu.dispose()

    def test_file_name_in_arguments(self) -> None:
        path = self._write("args.c", SOURCE)
        with Index() as index, index.parse(None, [path]) as tu:
            self.assertEqual(tu.spelling, path)

    def test_parse_missing_file_raises(self) -> None:
        missing = os.path.join(self.tmpdir.name, "non-existent.c")
        with self.assertRaises(TranslationUnitLoadError):
            TranslationUnit.from_source(missing)

    def test_use_after_dispose_raises(self) -> None:
        tu = get_tu(SOURCE)
        tu.dispose()
        with self.assertRaises(DisposedHandleError):
            tu.cursor

    def test_file_lookup(self) -> None:
        path = self._write("lookup.c", SOURCE)
        with Index() as index, index.parse(path) as tu:
            f = tu.file(path)
            self.assertIsNotNone(f)
            self.assertEqual(f.name, path)
            self.assertEqual(tu.get_file(path), f)
            self.assertIsNone(tu.file(os.path.join(self.tmpdir.name, "other.c")))

    def test_include_guard(self) -> None:
        header = self._write("guarded.h", "#ifndef G\n#define G\nint g;\n#endif\n")
        main = self._write("main.c", '#include "guarded.h"\n')
        with Index() as index, index.parse(main) as tu:
            self.assertTrue(tu.is_file_multiple_include_guarded(tu.file(header)))

    def test_reparse_picks_up_unsaved_changes(self) -> None:
        tu = get_tu("int a;")
        self.assertIsNotNone(get_cursor(tu, "a"))
        tu.reparse(unsaved_files=[("t.c", "int b;")])
        self.assertIsNone(get_cursor(tu, "a"))
        self.assertIsNotNone(get_cursor(tu, "b"))
        tu.dispose()

    def test_save_and_load(self) -> None:
        path = os.path.join(self.tmpdir.name, "foo.ast")
        tu = get_tu("int foo();")
        tu.save(path)
        self.assertTrue(os.path.exists(path))
        self.assertGreater(os.path.getsize(path), 0)

        with Index() as index:
            with index.create_translation_unit(path) as loaded:
                self.assertIsNotNone(get_cursor(loaded, "foo"))
            with TranslationUnit.from_ast_file(path, index=index) as loaded:
                self.assertIsNotNone(get_cursor(loaded, "foo"))
        tu.dispose()

    def test_load_missing_ast_raises(self) -> None:
        with Index() as index:
            with self.assertRaises(TranslationUnitLoadError):
                index.create_translation_unit(
                    os.path.join(self.tmpdir.name, "missing.ast")
                )

    def test_from_source_file(self) -> None:
        path = self._write("cc1.c", SOURCE)
        with Index() as index:
            with index.create_translation_unit_from_source_file(path, ["-std=c99"]) as tu:
                self.assertIsNotNone(get_cursor(tu, "one"))

    def test_skip_function_bodies(self) -> None:
        tu = get_tu("int f(void) { int local = 1; return local; }")
        self.assertIsNotNone(get_cursor(tu, "local"))
        tu.dispose()
        tu = TranslationUnit.from_source(
            "t.c",
            unsaved_files=[("t.c", "int f(void) { int local = 1; return local; }")],
            options=TranslationUnitFlags.SKIP_FUNCTION_BODIES,
        )
        self.assertIsNone(get_cursor(tu, "local"))
        tu.dispose()

    def test_location_and_cursor_at(self) -> None:
        tu = get_tu(SOURCE)
        f = tu.file("t.c")
        loc = tu.location(f, 2, 5)
        self.assertEqual((loc.line, loc.column), (2, 5))
        self.assertEqual(tu.cursor_at(loc).spelling, "two")
        by_offset = tu.location_for_offset(f, 4)
        self.assertEqual((by_offset.line, by_offset.column), (1, 5))
        tu.dispose()

    def test_get_tokens_by_extent(self) -> None:
        tu = get_tu("int one;")
        cursor = get_cursor(tu, "one")
        spellings = [t.spelling for t in tu.get_tokens(extent=cursor.extent)]
        self.assertEqual(spellings[:2], ["int", "one"])
        tu.dispose()


if __name__ == "__main__":
    unittest.main()
