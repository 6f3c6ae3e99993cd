"""Helpers shared by the binding tests."""

import functools
import unittest

from clangbind.errors import LibclangError
from clangbind.library import conf


@functools.lru_cache(maxsize=None)
def libclang_available() -> bool:
    try:
        conf.lib
    except LibclangError:
        return False
    return True


def requires_libclang(test_item):
    """Skip the decorated test (or TestCase) when libclang cannot be loaded."""
    return unittest.skipUnless(
        libclang_available(), "libclang shared library not available"
    )(test_item)


def get_tu(source, lang="c", all_warnings=False, flags=()):
    """Obtain a translation unit from source and language.

    By default, the translation unit is created from source file "t.<ext>"
    where <ext> is the default file extension for the specified language. By
    default it is C, so "t.c" is the default file name.

    Supported languages are {c, cpp, objc}.

    all_warnings is a convenience argument to enable all compiler warnings.
    """
    from clangbind.translation_unit import TranslationUnit

    args = list(flags)
    name = "t.c"
    if lang == "cpp":
        name = "t.cpp"
        args.append("-std=c++11")
    elif lang == "objc":
        name = "t.m"
    elif lang != "c":
        raise ValueError("Unknown language: %s" % lang)

    if all_warnings:
        args += ["-Wall", "-Wextra"]

    return TranslationUnit.from_source(name, args, unsaved_files=[(name, source)])


def get_cursor(source, spelling):
    """Obtain a cursor from a source object.

    This provides a convenient search mechanism to find a cursor with specific
    spelling within a source. The first argument can be either a
    TranslationUnit or Cursor instance.

    If the cursor is not found, None is returned.
    """
    root_cursor = source if hasattr(source, "walk_preorder") else source.cursor
    for cursor in root_cursor.walk_preorder():
        if cursor.spelling == spelling:
            return cursor
    return None


def get_cursors(source, spelling):
    """Obtain all cursors from a source object with a specific spelling."""
    root_cursor = source if hasattr(source, "walk_preorder") else source.cursor
    return [c for c in root_cursor.walk_preorder() if c.spelling == spelling]
