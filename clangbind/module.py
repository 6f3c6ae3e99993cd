"""Clang modules (``@import`` / ``import std.vector``)."""

from ctypes import c_int

from clangbind.cxstring import CXString, c_object_p
from clangbind.library import ClangObject, conf
from clangbind.source import File


class Module(ClangObject):
    """A module handle; owned by the translation unit that imported it."""

    def is_null(self) -> bool:
        return not self._obj

    @property
    def ast_file(self):
        """The module file this module was loaded from."""
        return conf.lib.clang_Module_getASTFile(self)

    @property
    def parent(self) -> "Module":
        """Parent of a sub-module; a null module for top-level modules."""
        return conf.lib.clang_Module_getParent(self)

    @property
    def name(self) -> str:
        """Last component of the name, e.g. ``vector`` for ``std.vector``."""
        return conf.lib.clang_Module_getName(self)

    @property
    def full_name(self) -> str:
        return conf.lib.clang_Module_getFullName(self)

    @property
    def is_system(self) -> bool:
        return bool(conf.lib.clang_Module_isSystem(self))

    def __repr__(self):
        if self.is_null():
            return "<Module null>"
        return "<Module %s>" % self.full_name

    @staticmethod
    def from_result(res, fn=None, args=None) -> "Module":
        return Module(res)


FUNCTIONS = [
    ("clang_Module_getASTFile", [Module], c_object_p, File.from_result),
    ("clang_Module_getParent", [Module], c_object_p, Module.from_result),
    ("clang_Module_getName", [Module], CXString, CXString.from_result),
    ("clang_Module_getFullName", [Module], CXString, CXString.from_result),
    ("clang_Module_isSystem", [Module], c_int),
]
