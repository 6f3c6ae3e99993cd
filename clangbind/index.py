"""The Index: a set of translation units sharing libclang state."""

import logging
import os
from ctypes import POINTER, c_int, c_uint, c_void_p

from clangbind.cxstring import c_interop_string, c_object_p, make_argv
from clangbind.enumerations import GlobalOptions, TranslationUnitFlags
from clangbind.errors import TranslationUnitLoadError
from clangbind.library import ClangObject, conf
from clangbind.translation_unit import (
    TranslationUnit,
    UnsavedFile,
    UnsavedFiles,
    UnsavedFilesArg,
)

logger = logging.getLogger(__name__)


class Index(ClangObject):
    """
    The Index type provides the primary interface to the Clang CIndex library,
    primarily by providing an interface for reading and parsing translation
    units.

    Translation units keep their index alive; disposing the index explicitly
    before its translation units is an error on the caller's side.
    """

    _dispose_function = "clang_disposeIndex"

    def __init__(
        self,
        exclude_declarations_from_pch: bool = False,
        display_diagnostics: bool = False,
    ):
        ptr = conf.lib.clang_createIndex(
            int(exclude_declarations_from_pch), int(display_diagnostics)
        )
        logger.debug(
            "Created index (exclude_declarations_from_pch=%s, display_diagnostics=%s)",
            exclude_declarations_from_pch,
            display_diagnostics,
        )
        ClangObject.__init__(self, ptr)

    @staticmethod
    def create(exclude_decls: bool = False) -> "Index":
        """Create a new Index, optionally excluding PCH declarations."""
        return Index(exclude_declarations_from_pch=exclude_decls)

    @property
    def global_options(self) -> GlobalOptions:
        return GlobalOptions(conf.lib.clang_CXIndex_getGlobalOptions(self))

    @global_options.setter
    def global_options(self, options) -> None:
        conf.lib.clang_CXIndex_setGlobalOptions(self, int(options))

    def parse(
        self,
        path,
        args=None,
        unsaved_files: UnsavedFilesArg = None,
        options=TranslationUnitFlags.NONE,
    ) -> TranslationUnit:
        """Load the translation unit from the given source code file by running
        clang and generating the AST before loading.

        ``path`` may be None when the source file is named in ``args``.
        Raises TranslationUnitLoadError when libclang cannot parse it.
        """
        argv, argc = make_argv(args)
        unsaved = UnsavedFiles.coerce(unsaved_files)
        logger.debug("Parsing %s with %d argument(s)", path, argc)
        ptr = conf.lib.clang_parseTranslationUnit(
            self,
            path,
            argv,
            argc,
            unsaved.pointer,
            len(unsaved),
            int(options),
        )
        if not ptr:
            logger.warning("Error parsing translation unit %s", path)
            raise TranslationUnitLoadError("Error parsing translation unit.")
        return TranslationUnit(ptr, index=self)

    def create_translation_unit(self, ast_file) -> TranslationUnit:
        """Load a translation unit from a file saved by ``TranslationUnit.save``."""
        logger.debug("Loading AST file %s", os.fspath(ast_file))
        ptr = conf.lib.clang_createTranslationUnit(self, ast_file)
        if not ptr:
            logger.warning("Error reading AST file %s", os.fspath(ast_file))
            raise TranslationUnitLoadError("Error reading AST file: %s" % os.fspath(ast_file))
        return TranslationUnit(ptr, index=self)

    def create_translation_unit_from_source_file(
        self,
        filename,
        args=None,
        unsaved_files: UnsavedFilesArg = None,
    ) -> TranslationUnit:
        """Build a translation unit the way ``clang -cc1`` would.

        ``args`` are the command-line arguments clang would receive, minus
        ``-o``, ``-c`` and the source file itself.
        """
        argv, argc = make_argv(args)
        unsaved = UnsavedFiles.coerce(unsaved_files)
        logger.debug("Creating translation unit from %s", filename)
        ptr = conf.lib.clang_createTranslationUnitFromSourceFile(
            self, filename, argc, argv, len(unsaved), unsaved.pointer
        )
        if not ptr:
            logger.warning("Error creating translation unit from %s", filename)
            raise TranslationUnitLoadError(
                "Error creating translation unit from source file."
            )
        return TranslationUnit(ptr, index=self)


FUNCTIONS = [
    ("clang_createIndex", [c_int, c_int], c_object_p),
    ("clang_disposeIndex", [Index]),
    ("clang_CXIndex_getGlobalOptions", [Index], c_uint),
    ("clang_CXIndex_setGlobalOptions", [Index, c_uint]),
    (
        "clang_parseTranslationUnit",
        [
            Index,
            c_interop_string,
            c_void_p,
            c_int,
            POINTER(UnsavedFile),
            c_uint,
            c_uint,
        ],
        c_object_p,
    ),
    ("clang_createTranslationUnit", [Index, c_interop_string], c_object_p),
    (
        "clang_createTranslationUnitFromSourceFile",
        [Index, c_interop_string, c_int, c_void_p, c_uint, POINTER(UnsavedFile)],
        c_object_p,
    ),
]
