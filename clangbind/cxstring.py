"""
String marshaling between Python and libclang.

Python strings are passed to C as UTF-8 encoded ``char*`` buffers, and every
``CXString`` returned by the library is copied into a Python ``str`` and
then disposed exactly once.
"""

import os
from ctypes import POINTER, Structure, c_char_p, c_uint, c_void_p
from typing import Iterable, Optional, Union

StrOrBytes = Union[str, bytes, "os.PathLike[str]"]

# Handles are marshalled as void** so that ctypes does not narrow them to a
# C int when they come back in as arguments.
c_object_p = POINTER(c_void_p)


def to_bytes(value: StrOrBytes) -> bytes:
    """Encode ``value`` for a C ``const char*`` parameter."""
    if isinstance(value, bytes):
        return value
    if isinstance(value, os.PathLike):
        value = os.fspath(value)
        if isinstance(value, bytes):
            return value
    if not isinstance(value, str):
        raise TypeError(
            f"Cannot convert {type(value).__name__} to a C string"
        )
    return value.encode("utf-8")


class c_interop_string(c_char_p):
    """``c_char_p`` that accepts ``str``, ``bytes``, path-likes and None."""

    def __init__(self, p=None):
        if p is None:
            p = b""
        super().__init__(to_bytes(p))

    def __str__(self):
        return self.value or ""

    @property
    def value(self) -> Optional[str]:
        raw = super().value
        if raw is None:
            return None
        return raw.decode("utf-8", errors="replace")

    @classmethod
    def from_param(cls, param):
        if param is None:
            # NULL is meaningful for several entry points (e.g. the source
            # filename of clang_parseTranslationUnit).
            return None
        if isinstance(param, (str, bytes, os.PathLike)):
            return cls(param)
        raise TypeError(
            f"Cannot convert '{type(param).__name__}' to '{cls.__name__}'"
        )

    @staticmethod
    def to_python_string(result, *args) -> Optional[str]:
        return result.value


class CXString(Structure):
    """A string owned by libclang; must be released with clang_disposeString."""

    _fields_ = [("data", c_void_p), ("private_flags", c_uint)]

    def consume(self) -> str:
        """Copy the text out and dispose the native string."""
        from clangbind.library import conf

        try:
            text = conf.lib.clang_getCString(self)
        finally:
            conf.lib.clang_disposeString(self)
        return text or ""

    @staticmethod
    def from_result(result, fn=None, args=None) -> str:
        assert isinstance(result, CXString)
        return result.consume()


def make_argv(args: Optional[Iterable[StrOrBytes]]):
    """Build a ``char*[]`` for a command line.

    Returns ``(argv, argc)``; ``argv`` is None when there are no arguments.
    The returned array owns its encoded buffers for as long as it is alive.
    """
    encoded = [to_bytes(arg) for arg in (args or ())]
    if not encoded:
        return None, 0
    argv = (c_char_p * len(encoded))(*encoded)
    return argv, len(encoded)


FUNCTIONS = [
    ("clang_getCString", [CXString], c_interop_string, c_interop_string.to_python_string),
    ("clang_disposeString", [CXString]),
]
