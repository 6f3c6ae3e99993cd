"""
Diagnostics reported while parsing or completing code.

A ``Diagnostic`` owns its native handle and must be disposed; the
``Diagnostics`` list disposes all of its members at once.
"""

from ctypes import POINTER, byref, c_int, c_uint
from typing import List, NamedTuple, Tuple

from clangbind.cxstring import CXString
from clangbind.enumerations import DiagnosticDisplayOptions, DiagnosticSeverity
from clangbind.errors import DisposedHandleError
from clangbind.library import ClangObject, conf
from clangbind.source import SourceLocation, SourceRange


class FixIt(NamedTuple):
    """
    A FixIt represents a transformation to be applied to the source to
    "fix-it". The fix-it should be applied by replacing the given source range
    with the given value.
    """

    value: str
    range: SourceRange


def default_display_options() -> DiagnosticDisplayOptions:
    """Options libclang uses to format diagnostics the way clang prints them."""
    return DiagnosticDisplayOptions(conf.lib.clang_defaultDiagnosticDisplayOptions())


class Diagnostic(ClangObject):
    """
    A Diagnostic is a single instance of a Clang diagnostic. It includes the
    diagnostic severity, the message, the location the diagnostic occurred, as
    well as additional source ranges and associated fix-it hints.
    """

    _dispose_function = "clang_disposeDiagnostic"

    def __init__(self, obj, owner=None):
        super().__init__(obj)
        # Translation unit or completion results holding the native storage.
        self._owner = owner

    @property
    def obj(self):
        owner = self._owner
        if owner is not None and owner.disposed:
            raise DisposedHandleError(
                f"Diagnostic belongs to a disposed {type(owner).__name__}"
            )
        return super().obj

    def dispose(self) -> None:
        owner = self._owner
        if owner is not None and owner.disposed:
            self._obj = None
            return
        super().dispose()

    @property
    def severity(self) -> DiagnosticSeverity:
        return DiagnosticSeverity.from_id(conf.lib.clang_getDiagnosticSeverity(self))

    @property
    def location(self) -> SourceLocation:
        return conf.lib.clang_getDiagnosticLocation(self)

    @property
    def spelling(self) -> str:
        return conf.lib.clang_getDiagnosticSpelling(self)

    @property
    def option(self) -> Tuple[str, str]:
        """Command-line options enabling and disabling this diagnostic.

        Returns ``(enable, disable)``, e.g. ``("-Wconversion",
        "-Wno-conversion")``; both are empty when no option controls it.
        """
        disable = CXString()
        enable = conf.lib.clang_getDiagnosticOption(self, byref(disable))
        return enable, disable.consume()

    @property
    def ranges(self) -> List[SourceRange]:
        return [
            conf.lib.clang_getDiagnosticRange(self, i)
            for i in range(conf.lib.clang_getDiagnosticNumRanges(self))
        ]

    @property
    def fixits(self) -> List[FixIt]:
        result = []
        for i in range(conf.lib.clang_getDiagnosticNumFixIts(self)):
            replacement_range = SourceRange()
            value = conf.lib.clang_getDiagnosticFixIt(self, i, byref(replacement_range))
            result.append(FixIt(value, replacement_range))
        return result

    @property
    def category_number(self) -> int:
        """The category number for this diagnostic or 0 if unavailable."""
        return conf.lib.clang_getDiagnosticCategory(self)

    @property
    def category_text(self) -> str:
        """Name of the category, e.g. ``Semantic Issue``."""
        return conf.lib.clang_getDiagnosticCategoryText(self)

    def format(self, options=None) -> str:
        """
        Format this diagnostic for display. The options argument takes
        DiagnosticDisplayOptions flags and defaults to
        ``default_display_options()``.
        """
        if options is None:
            options = conf.lib.clang_defaultDiagnosticDisplayOptions()
        return conf.lib.clang_formatDiagnostic(self, int(options))

    def __str__(self):
        return self.format()

    def __repr__(self):
        return "<Diagnostic severity %r, location %r, spelling %r>" % (
            self.severity,
            self.location,
            self.spelling,
        )

    @staticmethod
    def from_result(res, fn=None, args=None) -> "Diagnostic":
        owner = args[0] if args and isinstance(args[0], ClangObject) else None
        return Diagnostic(res, owner)


class Diagnostics(list):
    """A list of owned diagnostics.

    ``owner`` is the translation unit or completion results the diagnostics
    were read from; the list keeps it alive.
    """

    def __init__(self, iterable=(), owner=None):
        super().__init__(iterable)
        self.owner = owner

    def dispose(self) -> None:
        for diagnostic in self:
            diagnostic.dispose()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.dispose()
        return False


FUNCTIONS = [
    ("clang_disposeDiagnostic", [Diagnostic]),
    ("clang_getDiagnosticSeverity", [Diagnostic], c_int),
    ("clang_getDiagnosticLocation", [Diagnostic], SourceLocation),
    ("clang_getDiagnosticSpelling", [Diagnostic], CXString, CXString.from_result),
    (
        "clang_getDiagnosticOption",
        [Diagnostic, POINTER(CXString)],
        CXString,
        CXString.from_result,
    ),
    ("clang_getDiagnosticNumRanges", [Diagnostic], c_uint),
    ("clang_getDiagnosticRange", [Diagnostic, c_uint], SourceRange),
    ("clang_getDiagnosticNumFixIts", [Diagnostic], c_uint),
    (
        "clang_getDiagnosticFixIt",
        [Diagnostic, c_uint, POINTER(SourceRange)],
        CXString,
        CXString.from_result,
    ),
    ("clang_getDiagnosticCategory", [Diagnostic], c_uint),
    ("clang_getDiagnosticCategoryText", [Diagnostic], CXString, CXString.from_result),
    ("clang_formatDiagnostic", [Diagnostic, c_uint], CXString, CXString.from_result),
    ("clang_defaultDiagnosticDisplayOptions", [], c_uint),
]
