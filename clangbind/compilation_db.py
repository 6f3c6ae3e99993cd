"""
Compilation databases (``compile_commands.json``).

``CompileCommands`` keeps its database alive and ``CompileCommand`` keeps
its ``CompileCommands`` alive, so commands stay valid as long as they are
referenced and nothing was disposed explicitly.
"""

import logging
import os
from ctypes import POINTER, byref, c_uint
from typing import Iterator, List

from clangbind.cxstring import CXString, c_interop_string, c_object_p
from clangbind.enumerations import CompilationDatabaseErrorCode
from clangbind.errors import CompilationDatabaseError
from clangbind.library import ClangObject, conf

logger = logging.getLogger(__name__)


class CompileCommand(ClangObject):
    """One command; borrowed from the CompileCommands it came from."""

    def __init__(self, cmd, ccmds: "CompileCommands"):
        ClangObject.__init__(self, cmd)
        self.ccmds = ccmds

    @property
    def directory(self) -> str:
        """Get the working directory for this CompileCommand"""
        return conf.lib.clang_CompileCommand_getDirectory(self)

    @property
    def filename(self) -> str:
        """Get the source file the command compiles."""
        return conf.lib.clang_CompileCommand_getFilename(self)

    @property
    def num_args(self) -> int:
        return conf.lib.clang_CompileCommand_getNumArgs(self)

    def arg(self, i: int) -> str:
        return conf.lib.clang_CompileCommand_getArg(self, i)

    @property
    def arguments(self) -> Iterator[str]:
        """
        Get an iterable object providing each argument in the
        command line for the compiler invocation.

        Invariant : the first argument is the compiler executable
        """
        for i in range(self.num_args):
            yield self.arg(i)

    @property
    def num_mapped_sources(self) -> int:
        return conf.lib.clang_CompileCommand_getNumMappedSources(self)

    def mapped_source_path(self, i: int) -> str:
        return conf.lib.clang_CompileCommand_getMappedSourcePath(self, i)

    def mapped_source_content(self, i: int) -> str:
        return conf.lib.clang_CompileCommand_getMappedSourceContent(self, i)

    def __repr__(self):
        return "<CompileCommand %s in %s>" % (self.filename, self.directory)


class CompileCommands(ClangObject):
    """
    CompileCommands is an iterable object containing all CompileCommand
    that can be used for building a specific file.
    """

    _dispose_function = "clang_CompileCommands_dispose"

    def __init__(self, ccmds, db: "CompilationDatabase"):
        ClangObject.__init__(self, ccmds)
        self.db = db

    def dispose(self) -> None:
        if self._obj is not None and not self._obj:
            self._obj = None
            return
        super().dispose()

    @property
    def size(self) -> int:
        if not self.obj:
            return 0
        return conf.lib.clang_CompileCommands_getSize(self)

    def __len__(self):
        return self.size

    def command(self, i: int) -> CompileCommand:
        if i < 0 or i >= self.size:
            raise IndexError(i)
        cc = conf.lib.clang_CompileCommands_getCommand(self, i)
        if not cc:
            raise IndexError(i)
        return CompileCommand(cc, self)

    def __getitem__(self, i: int) -> CompileCommand:
        return self.command(i)

    def __iter__(self):
        for i in range(self.size):
            yield self.command(i)

    def commands(self) -> List[CompileCommand]:
        return list(self)


class CompilationDatabase(ClangObject):
    """
    The CompilationDatabase is a wrapper class around
    clang::tooling::CompilationDatabase

    It enables querying how a specific source file can be built.
    """

    _dispose_function = "clang_CompilationDatabase_dispose"

    @staticmethod
    def from_directory(build_dir) -> "CompilationDatabase":
        """Builds a CompilationDatabase from the database found in build_dir"""
        error_code = c_uint()
        logger.debug("Loading compilation database from %s", os.fspath(build_dir))
        ptr = conf.lib.clang_CompilationDatabase_fromDirectory(
            build_dir, byref(error_code)
        )
        code = CompilationDatabaseErrorCode.from_id(error_code.value)
        if code != CompilationDatabaseErrorCode.NO_ERROR or not ptr:
            if ptr:
                conf.lib.clang_CompilationDatabase_dispose(ptr)
            logger.warning(
                "Could not load compilation database from %s", os.fspath(build_dir)
            )
            raise CompilationDatabaseError(
                CompilationDatabaseErrorCode.CAN_NOT_LOAD_DATABASE
                if code == CompilationDatabaseErrorCode.NO_ERROR
                else code,
                "CompilationDatabase loading failed",
            )
        return CompilationDatabase(ptr)

    def get_compile_commands(self, filename) -> CompileCommands:
        """
        Get an iterable object providing all the CompileCommands available to
        build filename.
        """
        return CompileCommands(
            conf.lib.clang_CompilationDatabase_getCompileCommands(self, filename), self
        )

    def get_all_compile_commands(self) -> CompileCommands:
        """
        Get an iterable object providing all the CompileCommands available from
        the database.
        """
        return CompileCommands(
            conf.lib.clang_CompilationDatabase_getAllCompileCommands(self), self
        )


FUNCTIONS = [
    (
        "clang_CompilationDatabase_fromDirectory",
        [c_interop_string, POINTER(c_uint)],
        c_object_p,
    ),
    ("clang_CompilationDatabase_dispose", [c_object_p]),
    (
        "clang_CompilationDatabase_getCompileCommands",
        [CompilationDatabase, c_interop_string],
        c_object_p,
    ),
    (
        "clang_CompilationDatabase_getAllCompileCommands",
        [CompilationDatabase],
        c_object_p,
    ),
    ("clang_CompileCommands_dispose", [c_object_p]),
    ("clang_CompileCommands_getSize", [CompileCommands], c_uint),
    ("clang_CompileCommands_getCommand", [CompileCommands, c_uint], c_object_p),
    (
        "clang_CompileCommand_getDirectory",
        [CompileCommand],
        CXString,
        CXString.from_result,
    ),
    (
        "clang_CompileCommand_getFilename",
        [CompileCommand],
        CXString,
        CXString.from_result,
    ),
    ("clang_CompileCommand_getNumArgs", [CompileCommand], c_uint),
    (
        "clang_CompileCommand_getArg",
        [CompileCommand, c_uint],
        CXString,
        CXString.from_result,
    ),
    ("clang_CompileCommand_getNumMappedSources", [CompileCommand], c_uint),
    (
        "clang_CompileCommand_getMappedSourcePath",
        [CompileCommand, c_uint],
        CXString,
        CXString.from_result,
    ),
    (
        "clang_CompileCommand_getMappedSourceContent",
        [CompileCommand, c_uint],
        CXString,
        CXString.from_result,
    ),
]
