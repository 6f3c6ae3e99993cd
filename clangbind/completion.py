"""
Code completion results.

``CodeCompleteResults`` owns the result array; every ``CompletionString``
and ``CompletionResult`` taken from it is only valid until it is disposed.
"""

import logging
from ctypes import POINTER, Structure, c_int, c_uint, c_ulonglong, c_void_p
from typing import List

from clangbind.cursor_kind import CursorKind
from clangbind.cxstring import CXString, c_object_p
from clangbind.diagnostics import Diagnostic, Diagnostics
from clangbind.enumerations import (
    AvailabilityKind,
    CodeCompleteFlags,
    CompletionChunkKind,
    CompletionContext,
    completion_chunk_kind_spelling,
)
from clangbind.library import ClangObject, conf

logger = logging.getLogger(__name__)


def default_code_complete_options() -> CodeCompleteFlags:
    """Flags libclang recommends for ``TranslationUnit.complete_at``."""
    return CodeCompleteFlags(conf.lib.clang_defaultCodeCompleteOptions())


class CompletionChunk:
    """One piece (text, placeholder, punctuation ...) of a completion."""

    def __init__(self, completion_string: "CompletionString", key: int):
        self.cs = completion_string
        self.key = key

    @property
    def text(self) -> str:
        return conf.lib.clang_getCompletionChunkText(self.cs, self.key)

    @property
    def kind_id(self) -> int:
        return conf.lib.clang_getCompletionChunkKind(self.cs, self.key)

    @property
    def kind(self) -> CompletionChunkKind:
        return CompletionChunkKind.from_id(self.kind_id)

    @property
    def completion_string(self):
        """Nested completion string of an ``OPTIONAL`` chunk, else None."""
        res = conf.lib.clang_getCompletionChunkCompletionString(self.cs, self.key)
        if not res:
            return None
        return CompletionString(res)

    def is_kind_optional(self) -> bool:
        return self.kind_id == CompletionChunkKind.OPTIONAL.value

    def is_kind_typed_text(self) -> bool:
        return self.kind_id == CompletionChunkKind.TYPED_TEXT.value

    def is_kind_placeholder(self) -> bool:
        return self.kind_id == CompletionChunkKind.PLACEHOLDER.value

    def __str__(self):
        return "%s %s" % (completion_chunk_kind_spelling(self.kind_id), self.text)

    def __repr__(self):
        return "{'%s', %s}" % (self.text, completion_chunk_kind_spelling(self.kind_id))


class CompletionString(ClangObject):
    """The text and annotations of a single completion candidate."""

    def __len__(self):
        return conf.lib.clang_getNumCompletionChunks(self)

    def __getitem__(self, key: int) -> CompletionChunk:
        if key < 0 or key >= len(self):
            raise IndexError(key)
        return CompletionChunk(self, key)

    @property
    def chunks(self) -> List[CompletionChunk]:
        return [CompletionChunk(self, i) for i in range(len(self))]

    @property
    def priority(self) -> int:
        """Smaller values indicate more likely completions."""
        return conf.lib.clang_getCompletionPriority(self)

    @property
    def availability(self) -> AvailabilityKind:
        return AvailabilityKind.from_id(conf.lib.clang_getCompletionAvailability(self))

    @property
    def num_annotations(self) -> int:
        return conf.lib.clang_getCompletionNumAnnotations(self)

    def annotation(self, i: int) -> str:
        return conf.lib.clang_getCompletionAnnotation(self, i)

    @property
    def parent(self) -> str:
        """Name of the semantic parent, e.g. the class of a member."""
        return conf.lib.clang_getCompletionParent(self, None)

    @property
    def brief_comment(self) -> str:
        return conf.lib.clang_getCompletionBriefComment(self)

    def __repr__(self):
        return (
            " | ".join(str(chunk) for chunk in self.chunks)
            + " || Priority: %s || Availability: %s || Brief comment: %s"
            % (self.priority, self.availability, self.brief_comment)
        )

    @staticmethod
    def from_result(res, fn=None, args=None):
        if not res:
            return None
        return CompletionString(res)


class CompletionResult(Structure):
    _fields_ = [("cursorKind", c_int), ("completionString", c_object_p)]

    @property
    def cursor_kind(self) -> CursorKind:
        return CursorKind.from_id(self.cursorKind)

    @property
    def completion_string(self) -> CompletionString:
        return CompletionString(self.completionString)

    def __repr__(self):
        return "%s: %r" % (self.cursor_kind.name, self.completion_string)


class _CodeCompleteResultsData(Structure):
    _fields_ = [("Results", POINTER(CompletionResult)), ("NumResults", c_uint)]


class CodeCompleteResults(ClangObject):
    """Owned result set of ``clang_codeCompleteAt``.

    A failed completion yields an instance whose ``is_valid()`` is False.
    """

    _dispose_function = "clang_disposeCodeCompleteResults"

    def is_valid(self) -> bool:
        return bool(self._obj)

    def dispose(self) -> None:
        if self._obj is not None and not self._obj:
            self._obj = None
            return
        super().dispose()

    @property
    def results(self) -> List[CompletionResult]:
        if not self.is_valid():
            return []
        data = self.obj.contents
        return [data.Results[i] for i in range(data.NumResults)]

    def __len__(self):
        return self.obj.contents.NumResults if self.is_valid() else 0

    def __getitem__(self, key: int) -> CompletionResult:
        if key < 0 or key >= len(self):
            raise IndexError(key)
        return self.obj.contents.Results[key]

    def __iter__(self):
        return iter(self.results)

    def sort(self) -> None:
        """Sort the results alphabetically, in place."""
        if not self.is_valid():
            return
        data = self.obj.contents
        conf.lib.clang_sortCodeCompletionResults(data.Results, data.NumResults)

    @property
    def diagnostics(self) -> Diagnostics:
        if not self.is_valid():
            return Diagnostics(owner=self)
        return Diagnostics(
            (
                conf.lib.clang_codeCompleteGetDiagnostic(self, i)
                for i in range(conf.lib.clang_codeCompleteGetNumDiagnostics(self))
            ),
            owner=self,
        )

    @property
    def contexts(self) -> CompletionContext:
        return CompletionContext(conf.lib.clang_codeCompleteGetContexts(self))

    def __repr__(self):
        return "<CodeCompleteResults %d results>" % len(self)

    @staticmethod
    def from_result(res, fn=None, args=None) -> "CodeCompleteResults":
        if not res:
            logger.warning("clang_codeCompleteAt returned no results")
        return CodeCompleteResults(res)


code_complete_results_p = POINTER(_CodeCompleteResultsData)

FUNCTIONS = [
    ("clang_defaultCodeCompleteOptions", [], c_uint),
    ("clang_disposeCodeCompleteResults", [code_complete_results_p]),
    ("clang_sortCodeCompletionResults", [POINTER(CompletionResult), c_uint]),
    ("clang_codeCompleteGetNumDiagnostics", [code_complete_results_p], c_uint),
    (
        "clang_codeCompleteGetDiagnostic",
        [code_complete_results_p, c_uint],
        c_object_p,
        Diagnostic.from_result,
    ),
    ("clang_codeCompleteGetContexts", [code_complete_results_p], c_ulonglong),
    ("clang_getCompletionPriority", [CompletionString], c_uint),
    ("clang_getCompletionAvailability", [CompletionString], c_int),
    ("clang_getCompletionNumAnnotations", [CompletionString], c_uint),
    (
        "clang_getCompletionAnnotation",
        [CompletionString, c_uint],
        CXString,
        CXString.from_result,
    ),
    (
        "clang_getCompletionParent",
        [CompletionString, c_void_p],
        CXString,
        CXString.from_result,
    ),
    (
        "clang_getCompletionBriefComment",
        [CompletionString],
        CXString,
        CXString.from_result,
    ),
    ("clang_getNumCompletionChunks", [CompletionString], c_uint),
    (
        "clang_getCompletionChunkText",
        [CompletionString, c_uint],
        CXString,
        CXString.from_result,
    ),
    ("clang_getCompletionChunkKind", [CompletionString, c_uint], c_int),
    (
        "clang_getCompletionChunkCompletionString",
        [CompletionString, c_uint],
        c_object_p,
    ),
]
