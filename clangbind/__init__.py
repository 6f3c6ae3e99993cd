"""
ctypes bindings for libclang, the C interface to the Clang compiler.

Every class wraps a libclang handle or plain-data struct and every method is
a direct call into the shared library, which is loaded lazily on first use.
Owning handles (Index, TranslationUnit, Diagnostic, Tokens ...) release
their native memory through ``dispose()`` or a ``with`` block.
"""

from clangbind.library import Config, conf, get_clang_version
from clangbind.errors import (
    CompilationDatabaseError,
    DisposedHandleError,
    FileUniqueIDError,
    LibclangError,
    TranslationUnitLoadError,
    TranslationUnitReparseError,
    TranslationUnitSaveError,
    TypeLayoutError,
)
from clangbind.enumerations import (
    AccessSpecifier,
    AvailabilityKind,
    CallingConv,
    ChildVisitResult,
    CodeCompleteFlags,
    CommentKind,
    CompilationDatabaseErrorCode,
    CompletionChunkKind,
    CompletionContext,
    DiagnosticDisplayOptions,
    DiagnosticSeverity,
    GlobalOptions,
    LanguageKind,
    LinkageKind,
    NameRefFlags,
    RefQualifierKind,
    ReparseFlags,
    Result,
    SaveError,
    SaveTranslationUnitFlags,
    TokenKind,
    TranslationUnitFlags,
    TypeLayoutErrorKind,
)
from clangbind.cursor_kind import CursorKind
from clangbind.source import (
    File,
    FilePosition,
    FileUniqueID,
    PresumedPosition,
    SourceLocation,
    SourceRange,
)
from clangbind.availability import PlatformAvailability, PlatformAvailabilityInfo, Version
from clangbind.cxtype import Type, TypeKind
from clangbind.comment import Comment
from clangbind.module import Module
from clangbind.diagnostics import Diagnostic, Diagnostics, FixIt, default_display_options
from clangbind.completion import (
    CodeCompleteResults,
    CompletionChunk,
    CompletionResult,
    CompletionString,
    default_code_complete_options,
)
from clangbind.cursor import Cursor, CursorSet, OverriddenCursors
from clangbind.tokens import Token, Tokens
from clangbind.translation_unit import TranslationUnit, UnsavedFile, UnsavedFiles
from clangbind.index import Index
from clangbind.compilation_db import (
    CompilationDatabase,
    CompileCommand,
    CompileCommands,
)

__all__ = [
    # Library loading
    "Config",
    "conf",
    "get_clang_version",
    # Errors
    "CompilationDatabaseError",
    "DisposedHandleError",
    "FileUniqueIDError",
    "LibclangError",
    "TranslationUnitLoadError",
    "TranslationUnitReparseError",
    "TranslationUnitSaveError",
    "TypeLayoutError",
    # Enumerations
    "AccessSpecifier",
    "AvailabilityKind",
    "CallingConv",
    "ChildVisitResult",
    "CodeCompleteFlags",
    "CommentKind",
    "CompilationDatabaseErrorCode",
    "CompletionChunkKind",
    "CompletionContext",
    "CursorKind",
    "DiagnosticDisplayOptions",
    "DiagnosticSeverity",
    "GlobalOptions",
    "LanguageKind",
    "LinkageKind",
    "NameRefFlags",
    "RefQualifierKind",
    "ReparseFlags",
    "Result",
    "SaveError",
    "SaveTranslationUnitFlags",
    "TokenKind",
    "TranslationUnitFlags",
    "TypeKind",
    "TypeLayoutErrorKind",
    # Source positions
    "File",
    "FilePosition",
    "FileUniqueID",
    "PresumedPosition",
    "SourceLocation",
    "SourceRange",
    # AST
    "Comment",
    "Cursor",
    "CursorSet",
    "Module",
    "OverriddenCursors",
    "PlatformAvailability",
    "PlatformAvailabilityInfo",
    "Token",
    "Tokens",
    "Type",
    "Version",
    # Diagnostics and completion
    "CodeCompleteResults",
    "CompletionChunk",
    "CompletionResult",
    "CompletionString",
    "Diagnostic",
    "Diagnostics",
    "FixIt",
    "default_code_complete_options",
    "default_display_options",
    # Top-level objects
    "CompilationDatabase",
    "CompileCommand",
    "CompileCommands",
    "Index",
    "TranslationUnit",
    "UnsavedFile",
    "UnsavedFiles",
]
