"""Parsed documentation comments attached to declarations."""

from ctypes import Structure, c_int, c_uint, c_void_p
from typing import Iterator

from clangbind.cxstring import CXString
from clangbind.enumerations import CommentKind
from clangbind.library import conf


class Comment(Structure):
    """A node of a parsed comment AST; valid while its translation unit is."""

    _fields_ = [("ASTNode", c_void_p), ("TranslationUnit", c_void_p)]

    @property
    def kind(self) -> CommentKind:
        return CommentKind.from_id(conf.lib.clang_Comment_getKind(self))

    def is_null(self) -> bool:
        return self.kind == CommentKind.NULL

    @property
    def num_children(self) -> int:
        return conf.lib.clang_Comment_getNumChildren(self)

    def child(self, i: int) -> "Comment":
        return conf.lib.clang_Comment_getChild(self, i)

    @property
    def children(self) -> Iterator["Comment"]:
        for i in range(self.num_children):
            yield self.child(i)

    @property
    def text(self) -> str:
        """Text of a ``TEXT`` node; empty for every other kind."""
        return conf.lib.clang_TextComment_getText(self)

    def __repr__(self):
        return "<Comment %s>" % self.kind.name


FUNCTIONS = [
    ("clang_Comment_getKind", [Comment], c_int),
    ("clang_Comment_getNumChildren", [Comment], c_uint),
    ("clang_Comment_getChild", [Comment, c_uint], Comment),
    ("clang_TextComment_getText", [Comment], CXString, CXString.from_result),
]
