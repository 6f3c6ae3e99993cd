"""Tests for string, argv and unsaved-file marshaling."""

import io
import pathlib
import unittest
from ctypes import c_char_p

from clangbind.cxstring import c_interop_string, make_argv, to_bytes
from clangbind.translation_unit import UnsavedFiles


class TestToBytes(unittest.TestCase):
    def test_str_is_utf8_encoded(self):
        self.assertEqual(to_bytes("héllo"), "héllo".encode("utf-8"))

    def test_bytes_pass_through(self):
        self.assertEqual(to_bytes(b"abc"), b"abc")

    def test_path_like(self):
        self.assertEqual(to_bytes(pathlib.PurePosixPath("/tmp/a.c")), b"/tmp/a.c")

    def test_rejects_other_types(self):
        with self.assertRaises(TypeError):
            to_bytes(42)


class TestInteropString(unittest.TestCase):
    def test_value_decodes(self):
        s = c_interop_string("ünïcode")
        self.assertEqual(s.value, "ünïcode")
        self.assertEqual(str(s), "ünïcode")

    def test_default_is_empty(self):
        self.assertEqual(c_interop_string().value, "")

    def test_from_param_none_is_null(self):
        self.assertIsNone(c_interop_string.from_param(None))

    def test_from_param_accepts_str_bytes_and_paths(self):
        self.assertEqual(c_interop_string.from_param("a.c").value, "a.c")
        self.assertEqual(c_interop_string.from_param(b"b.c").value, "b.c")
        self.assertEqual(
            c_interop_string.from_param(pathlib.PurePosixPath("c.c")).value, "c.c"
        )

    def test_from_param_rejects_other_types(self):
        with self.assertRaises(TypeError):
            c_interop_string.from_param(3.5)


class TestMakeArgv(unittest.TestCase):
    def test_empty(self):
        self.assertEqual(make_argv(None), (None, 0))
        self.assertEqual(make_argv([]), (None, 0))

    def test_arguments_are_encoded(self):
        argv, argc = make_argv(["-I", "include", b"-DX=1"])
        self.assertEqual(argc, 3)
        self.assertEqual(len(argv), 3)
        self.assertIsInstance(argv[0], bytes)
        self.assertEqual(list(argv), [b"-I", b"include", b"-DX=1"])
        self.assertEqual(argv._type_, c_char_p)


class TestUnsavedFiles(unittest.TestCase):
    def test_empty(self):
        unsaved = UnsavedFiles()
        self.assertEqual(len(unsaved), 0)
        self.assertIsNone(unsaved.pointer)

    def test_pairs(self):
        unsaved = UnsavedFiles([("t.c", "int x;"), ("u.h", b"#define Y 1\n")])
        self.assertEqual(len(unsaved), 2)
        self.assertEqual(unsaved.array[0].Filename, b"t.c")
        self.assertEqual(unsaved.array[0].Contents, b"int x;")
        self.assertEqual(unsaved.array[0].Length, 6)
        self.assertEqual(unsaved.array[1].Length, len(b"#define Y 1\n"))
        self.assertIs(unsaved.pointer, unsaved.array)

    def test_mapping(self):
        unsaved = UnsavedFiles({"main.c": "int main(void) { return 0; }"})
        self.assertEqual(list(unsaved), [(b"main.c", b"int main(void) { return 0; }")])

    def test_file_like_contents(self):
        unsaved = UnsavedFiles([("t.c", io.StringIO("int é;"))])
        self.assertEqual(unsaved.array[0].Contents, "int é;".encode("utf-8"))
        # Length counts encoded bytes, not characters.
        self.assertEqual(unsaved.array[0].Length, len("int é;".encode("utf-8")))

    def test_coerce_keeps_instances(self):
        unsaved = UnsavedFiles([("t.c", "")])
        self.assertIs(UnsavedFiles.coerce(unsaved), unsaved)
        self.assertEqual(len(UnsavedFiles.coerce(None)), 0)


if __name__ == "__main__":
    unittest.main()
