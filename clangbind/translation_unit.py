"""
Translation units and unsaved-file marshaling.

A ``TranslationUnit`` owns its native handle and keeps the ``Index`` that
created it alive. Cursors, types and tokens taken from it keep it alive in
turn.
"""

import logging
import os
from collections.abc import Mapping
from ctypes import POINTER, Structure, byref, c_char_p, c_int, c_uint, c_ulong
from typing import Iterable, Optional, Tuple, Union

from clangbind.completion import (
    CodeCompleteResults,
    code_complete_results_p,
    default_code_complete_options,
)
from clangbind.cursor import Cursor
from clangbind.cxstring import CXString, c_interop_string, c_object_p, to_bytes
from clangbind.diagnostics import Diagnostic, Diagnostics
from clangbind.enumerations import (
    ReparseFlags,
    SaveError,
    SaveTranslationUnitFlags,
    TranslationUnitFlags,
)
from clangbind.errors import TranslationUnitReparseError, TranslationUnitSaveError
from clangbind.library import ClangObject, conf
from clangbind.module import Module
from clangbind.source import File, SourceLocation, SourceRange
from clangbind.tokens import Token, Tokens

logger = logging.getLogger(__name__)

UnsavedFileContents = Union[str, bytes]
UnsavedFilesArg = Union[
    None,
    Mapping,
    Iterable[Tuple[Union[str, bytes, "os.PathLike[str]"], UnsavedFileContents]],
]


class UnsavedFile(Structure):
    """A file whose in-memory contents replace what is on disk."""

    _fields_ = [("Filename", c_char_p), ("Contents", c_char_p), ("Length", c_ulong)]


class UnsavedFiles:
    """Marshals ``{name: contents}`` (or ``(name, contents)`` pairs) to C.

    Contents may be ``str``, ``bytes`` or a file-like object with ``read()``.
    The encoded buffers live as long as this object does.
    """

    def __init__(self, files: UnsavedFilesArg = None):
        if files is None:
            items = []
        elif isinstance(files, Mapping):
            items = list(files.items())
        else:
            items = list(files)

        self._buffers = []
        for name, contents in items:
            if hasattr(contents, "read"):
                contents = contents.read()
            self._buffers.append((to_bytes(name), to_bytes(contents)))

        self.array = (UnsavedFile * len(self._buffers))()
        for i, (name, contents) in enumerate(self._buffers):
            self.array[i].Filename = name
            self.array[i].Contents = contents
            self.array[i].Length = len(contents)

    def __len__(self):
        return len(self._buffers)

    def __iter__(self):
        return iter(self._buffers)

    @property
    def pointer(self):
        """Argument for the ``unsaved_files`` parameter; None when empty."""
        return self.array if self._buffers else None

    @classmethod
    def coerce(cls, files: UnsavedFilesArg) -> "UnsavedFiles":
        if isinstance(files, UnsavedFiles):
            return files
        return cls(files)


class TranslationUnit(ClangObject):
    """Represents a source code translation unit.

    This is equivalent to a compiled source file; owned units are released
    by ``dispose()`` or when leaving a ``with`` block.
    """

    _dispose_function = "clang_disposeTranslationUnit"

    def __init__(self, ptr, index=None, owned: bool = True):
        ClangObject.__init__(self, ptr)
        self.index = index
        if not owned:
            self._dispose_function = None

    @classmethod
    def from_source(
        cls,
        filename,
        args=None,
        unsaved_files: UnsavedFilesArg = None,
        options=TranslationUnitFlags.NONE,
        index=None,
    ) -> "TranslationUnit":
        """Create a TranslationUnit by parsing source.

        A throwaway Index is created when ``index`` is not given.
        """
        if index is None:
            from clangbind.index import Index

            index = Index()
        return index.parse(filename, args, unsaved_files, options)

    @classmethod
    def from_ast_file(cls, filename, index=None) -> "TranslationUnit":
        """Create a TranslationUnit instance from a saved AST file."""
        if index is None:
            from clangbind.index import Index

            index = Index()
        return index.create_translation_unit(filename)

    def is_valid(self) -> bool:
        return not self.disposed and bool(self._obj)

    @property
    def spelling(self) -> str:
        """Get the original translation unit source file name."""
        return conf.lib.clang_getTranslationUnitSpelling(self)

    @property
    def cursor(self) -> Cursor:
        """Retrieve the cursor that represents the given translation unit."""
        return conf.lib.clang_getTranslationUnitCursor(self)

    def file(self, name) -> Optional[File]:
        """The File for ``name`` if it takes part in this unit, else None."""
        return conf.lib.clang_getFile(self, name)

    get_file = file

    def is_file_multiple_include_guarded(self, file: File) -> bool:
        return bool(conf.lib.clang_isFileMultipleIncludeGuarded(self, file))

    def cursor_at(self, location: SourceLocation) -> Cursor:
        """Most specific cursor covering ``location``."""
        return conf.lib.clang_getCursor(self, location)

    def location(self, file: File, line: int, column: int) -> SourceLocation:
        return conf.lib.clang_getLocation(self, file, line, column)

    def location_for_offset(self, file: File, offset: int) -> SourceLocation:
        return conf.lib.clang_getLocationForOffset(self, file, offset)

    @property
    def diagnostics(self) -> Diagnostics:
        """
        Return the diagnostics of the translation unit. Each one owns a native
        handle; dispose the list when done.
        """
        return Diagnostics(
            (
                conf.lib.clang_getDiagnostic(self, i)
                for i in range(conf.lib.clang_getNumDiagnostics(self))
            ),
            owner=self,
        )

    @property
    def default_reparse_options(self) -> ReparseFlags:
        return ReparseFlags(conf.lib.clang_defaultReparseOptions(self))

    @property
    def default_save_options(self) -> SaveTranslationUnitFlags:
        return SaveTranslationUnitFlags(conf.lib.clang_defaultSaveOptions(self))

    def reparse(self, unsaved_files: UnsavedFilesArg = None, options=None) -> None:
        """
        Reparse an already parsed translation unit.

        After a failure the unit is unusable and may only be disposed.
        """
        unsaved = UnsavedFiles.coerce(unsaved_files)
        if options is None:
            options = conf.lib.clang_defaultReparseOptions(self)
        logger.debug("Reparsing %s", self.spelling)
        code = conf.lib.clang_reparseTranslationUnit(
            self, len(unsaved), unsaved.pointer, int(options)
        )
        if code != 0:
            logger.warning("Reparse failed with code %d", code)
            raise TranslationUnitReparseError(code)

    def save(self, filename, options=None) -> None:
        """Saves the TranslationUnit to a file.

        The file can later be loaded with ``Index.create_translation_unit``.
        Raises TranslationUnitSaveError on failure.
        """
        if options is None:
            options = conf.lib.clang_defaultSaveOptions(self)
        logger.debug("Saving translation unit to %s", os.fspath(filename))
        code = conf.lib.clang_saveTranslationUnit(self, filename, int(options))
        if code != 0:
            save_error = SaveError.from_id(code)
            logger.warning("Saving translation unit failed: %s", save_error.name)
            raise TranslationUnitSaveError(save_error, "Error saving TU.")

    def complete_at(
        self,
        path,
        line: int,
        column: int,
        unsaved_files: UnsavedFilesArg = None,
        options=None,
    ) -> CodeCompleteResults:
        """
        Code complete in this translation unit.

        ``options`` takes CodeCompleteFlags and defaults to
        ``default_code_complete_options()``.
        """
        unsaved = UnsavedFiles.coerce(unsaved_files)
        if options is None:
            options = default_code_complete_options()
        results = conf.lib.clang_codeCompleteAt(
            self, path, line, column, unsaved.pointer, len(unsaved), int(options)
        )
        results._tu = self
        return results

    def num_top_level_headers(self, module: Module) -> int:
        return conf.lib.clang_Module_getNumTopLevelHeaders(self, module)

    def top_level_header(self, module: Module, i: int) -> Optional[File]:
        return conf.lib.clang_Module_getTopLevelHeader(self, module, i)

    def tokenize(self, extent: SourceRange) -> Tokens:
        """Tokens overlapping ``extent``; dispose the result when done."""
        array = POINTER(Token)()
        count = c_uint()
        conf.lib.clang_tokenize(self, extent, byref(array), byref(count))
        return Tokens(self, array, count.value)

    def get_tokens(self, locations=None, extent=None):
        """Obtain tokens in this translation unit.

        Pass ``extent`` (a SourceRange) or ``locations`` (a pair of
        SourceLocation) to restrict the range.
        """
        if extent is None:
            extent = SourceRange.from_locations(locations[0], locations[1])
        with self.tokenize(extent) as tokens:
            return list(tokens)

    def token_spelling(self, token: Token) -> str:
        return conf.lib.clang_getTokenSpelling(self, token)

    def token_location(self, token: Token) -> SourceLocation:
        return conf.lib.clang_getTokenLocation(self, token)

    def token_extent(self, token: Token) -> SourceRange:
        return conf.lib.clang_getTokenExtent(self, token)

    def __repr__(self):
        if not self.is_valid():
            return "<TranslationUnit invalid>"
        return "<TranslationUnit %s>" % self.spelling


FUNCTIONS = [
    ("clang_disposeTranslationUnit", [TranslationUnit]),
    (
        "clang_getTranslationUnitSpelling",
        [TranslationUnit],
        CXString,
        CXString.from_result,
    ),
    (
        "clang_getTranslationUnitCursor",
        [TranslationUnit],
        Cursor,
        Cursor.from_result,
    ),
    (
        "clang_getFile",
        [TranslationUnit, c_interop_string],
        c_object_p,
        File.from_result,
    ),
    ("clang_isFileMultipleIncludeGuarded", [TranslationUnit, File], c_uint),
    ("clang_getCursor", [TranslationUnit, SourceLocation], Cursor, Cursor.from_result),
    ("clang_getLocation", [TranslationUnit, File, c_uint, c_uint], SourceLocation),
    ("clang_getLocationForOffset", [TranslationUnit, File, c_uint], SourceLocation),
    ("clang_getNumDiagnostics", [TranslationUnit], c_uint),
    (
        "clang_getDiagnostic",
        [TranslationUnit, c_uint],
        c_object_p,
        Diagnostic.from_result,
    ),
    ("clang_defaultReparseOptions", [TranslationUnit], c_uint),
    ("clang_defaultSaveOptions", [TranslationUnit], c_uint),
    (
        "clang_reparseTranslationUnit",
        [TranslationUnit, c_uint, POINTER(UnsavedFile), c_uint],
        c_int,
    ),
    (
        "clang_saveTranslationUnit",
        [TranslationUnit, c_interop_string, c_uint],
        c_int,
    ),
    (
        "clang_codeCompleteAt",
        [
            TranslationUnit,
            c_interop_string,
            c_uint,
            c_uint,
            POINTER(UnsavedFile),
            c_uint,
            c_uint,
        ],
        code_complete_results_p,
        CodeCompleteResults.from_result,
    ),
    ("clang_Module_getNumTopLevelHeaders", [TranslationUnit, Module], c_uint),
    (
        "clang_Module_getTopLevelHeader",
        [TranslationUnit, Module, c_uint],
        c_object_p,
        File.from_result,
    ),
]
