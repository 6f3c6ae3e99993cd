"""Lexical tokens of a translation unit."""

from ctypes import POINTER, Structure, c_int, c_uint, c_void_p
from typing import List

from clangbind.cursor import Cursor
from clangbind.cxstring import CXString, c_object_p
from clangbind.enumerations import TokenKind
from clangbind.errors import DisposedHandleError
from clangbind.library import ClangObject, conf
from clangbind.source import SourceLocation, SourceRange


class Token(Structure):
    """Represents a single token from the preprocessor.

    Tokens are effectively segments of source code. Source code is first parsed
    into tokens before being converted into the AST and Cursors.

    Tokens are obtained from parsed TranslationUnit instances. You currently
    can't create tokens manually.
    """

    _fields_ = [("int_data", c_uint * 4), ("ptr_data", c_void_p)]

    @property
    def kind(self) -> TokenKind:
        """Obtain the TokenKind of the current token."""
        return TokenKind.from_id(conf.lib.clang_getTokenKind(self))

    @property
    def spelling(self) -> str:
        """The spelling of this token.

        This is the textual representation of the token in source.
        """
        return conf.lib.clang_getTokenSpelling(self._tu, self)

    @property
    def location(self) -> SourceLocation:
        """The SourceLocation this Token occurs at."""
        return conf.lib.clang_getTokenLocation(self._tu, self)

    @property
    def extent(self) -> SourceRange:
        """The SourceRange this Token occupies."""
        return conf.lib.clang_getTokenExtent(self._tu, self)

    def __repr__(self):
        return "<Token %s: %r>" % (self.kind.name, self.spelling)


class Tokens(ClangObject):
    """Owned token array produced by ``TranslationUnit.tokenize``."""

    def __init__(self, tu, array, count: int):
        ClangObject.__init__(self, array)
        self._tu = tu
        self._count = count if array else 0

    def dispose(self) -> None:
        if self._obj is None:
            return
        array, self._obj = self._obj, None
        if array:
            conf.lib.clang_disposeTokens(self._tu, array, self._count)

    def __del__(self):
        if getattr(self, "_obj", None) is not None:
            self.dispose()

    def __len__(self):
        if self.disposed:
            raise DisposedHandleError("Tokens have already been disposed")
        return self._count

    def __getitem__(self, key: int) -> Token:
        if key < 0 or key >= len(self):
            raise IndexError(key)
        token = Token.from_buffer_copy(self.obj[key])
        token._tu = self._tu
        return token

    def __iter__(self):
        for i in range(len(self)):
            yield self[i]

    def annotate(self) -> List[Cursor]:
        """Cursor covering each token, in token order."""
        count = len(self)
        if not count:
            return []
        cursors = (Cursor * count)()
        conf.lib.clang_annotateTokens(self._tu, self.obj, count, cursors)
        result = []
        for cursor in cursors:
            cursor._tu = self._tu
            result.append(cursor)
        return result


FUNCTIONS = [
    ("clang_getTokenKind", [Token], c_int),
    ("clang_getTokenSpelling", [c_object_p, Token], CXString, CXString.from_result),
    ("clang_getTokenLocation", [c_object_p, Token], SourceLocation),
    ("clang_getTokenExtent", [c_object_p, Token], SourceRange),
    (
        "clang_tokenize",
        [c_object_p, SourceRange, POINTER(POINTER(Token)), POINTER(c_uint)],
    ),
    ("clang_disposeTokens", [c_object_p, POINTER(Token), c_uint]),
    ("clang_annotateTokens", [c_object_p, POINTER(Token), c_uint, POINTER(Cursor)]),
]
