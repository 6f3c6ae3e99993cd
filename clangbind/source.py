"""
Source locations, ranges and files.

``SourceLocation`` and ``SourceRange`` are plain-data structs copied by
value; ``File`` borrows a handle owned by its translation unit.
"""

import logging
from ctypes import (
    POINTER,
    Structure,
    byref,
    c_int,
    c_longlong,
    c_uint,
    c_ulonglong,
    c_void_p,
    cast,
)
from datetime import datetime, timezone
from typing import NamedTuple, Optional, Tuple

from clangbind.cxstring import CXString, c_object_p
from clangbind.errors import FileUniqueIDError
from clangbind.library import ClangObject, conf

logger = logging.getLogger(__name__)


class FilePosition(NamedTuple):
    """A decomposed location: ``file`` is None for locations without one."""

    file: Optional["File"]
    line: int
    column: int
    offset: int


class PresumedPosition(NamedTuple):
    """A location as adjusted by ``#line`` directives."""

    filename: str
    line: int
    column: int


class FileUniqueID(Structure):
    """Identity of a file on disk that survives renames and links."""

    _fields_ = [("_data", c_ulonglong * 3)]

    @property
    def data(self) -> Tuple[int, int, int]:
        return tuple(self._data)

    def __eq__(self, other):
        if not isinstance(other, FileUniqueID):
            return NotImplemented
        return self.data == other.data

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    def __hash__(self):
        return hash(self.data)

    def __repr__(self):
        return "<FileUniqueID %r>" % (self.data,)


class File(ClangObject):
    """
    The File class represents a particular source file that is part of a
    translation unit.
    """

    @property
    def name(self) -> str:
        """Return the complete file and path name of the file."""
        return conf.lib.clang_getFileName(self)

    @property
    def mod_time(self) -> datetime:
        """Last modification time of the file, in UTC."""
        return datetime.fromtimestamp(conf.lib.clang_getFileTime(self), tz=timezone.utc)

    def unique_id(self) -> FileUniqueID:
        uid = FileUniqueID()
        code = conf.lib.clang_getFileUniqueID(self, byref(uid))
        if code != 0:
            logger.warning("clang_getFileUniqueID failed for %s (err=%d)", self.name, code)
            raise FileUniqueIDError(code)
        return uid

    @property
    def _address(self) -> Optional[int]:
        return cast(self.obj, c_void_p).value

    def __eq__(self, other):
        if not isinstance(other, File):
            return NotImplemented
        return self._address == other._address

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    def __hash__(self):
        return hash(self._address)

    def __str__(self):
        return self.name

    def __repr__(self):
        return "<File: %s>" % (self.name)

    @staticmethod
    def from_result(res, fn=None, args=None) -> Optional["File"]:
        if not res:
            return None
        return File(res)


class SourceLocation(Structure):
    """
    A SourceLocation represents a particular location within a source file.
    """

    _fields_ = [("ptr_data", c_void_p * 2), ("int_data", c_uint)]

    @staticmethod
    def null() -> "SourceLocation":
        return conf.lib.clang_getNullLocation()

    def is_null(self) -> bool:
        return self == SourceLocation.null()

    @property
    def is_in_system_header(self) -> bool:
        return bool(conf.lib.clang_Location_isInSystemHeader(self))

    @property
    def is_from_main_file(self) -> bool:
        return bool(conf.lib.clang_Location_isFromMainFile(self))

    def _decompose(self, function_name: str) -> FilePosition:
        f = c_object_p()
        line, column, offset = c_uint(), c_uint(), c_uint()
        getattr(conf.lib, function_name)(
            self, byref(f), byref(line), byref(column), byref(offset)
        )
        return FilePosition(
            File(f) if f else None, int(line.value), int(column.value), int(offset.value)
        )

    @property
    def expansion_location(self) -> FilePosition:
        """Where the location ends up after macro expansion."""
        return self._decompose("clang_getExpansionLocation")

    @property
    def instantiation_location(self) -> FilePosition:
        """Legacy name for the expansion location."""
        return self._decompose("clang_getInstantiationLocation")

    @property
    def spelling_location(self) -> FilePosition:
        """Where the characters making up the location were written."""
        return self._decompose("clang_getSpellingLocation")

    @property
    def file_location(self) -> FilePosition:
        """The location inside the file buffer, ignoring ``#line``."""
        return self._decompose("clang_getFileLocation")

    @property
    def presumed_location(self) -> PresumedPosition:
        filename = CXString()
        line, column = c_uint(), c_uint()
        conf.lib.clang_getPresumedLocation(
            self, byref(filename), byref(line), byref(column)
        )
        return PresumedPosition(filename.consume(), int(line.value), int(column.value))

    @property
    def file(self) -> Optional[File]:
        """Get the file represented by this source location."""
        return self.expansion_location.file

    @property
    def line(self) -> int:
        return self.expansion_location.line

    @property
    def column(self) -> int:
        return self.expansion_location.column

    @property
    def offset(self) -> int:
        return self.expansion_location.offset

    def __eq__(self, other):
        if not isinstance(other, SourceLocation):
            return NotImplemented
        return bool(conf.lib.clang_equalLocations(self, other))

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    __hash__ = None

    def __repr__(self):
        file, line, column, _ = self.expansion_location
        filename = file.name if file else None
        return "<SourceLocation file %r, line %r, column %r>" % (filename, line, column)


class SourceRange(Structure):
    """
    A SourceRange describes a range of source locations within the source
    code.
    """

    _fields_ = [
        ("ptr_data", c_void_p * 2),
        ("begin_int_data", c_uint),
        ("end_int_data", c_uint),
    ]

    @staticmethod
    def null() -> "SourceRange":
        return conf.lib.clang_getNullRange()

    @staticmethod
    def from_locations(start: SourceLocation, end: SourceLocation) -> "SourceRange":
        return conf.lib.clang_getRange(start, end)

    def is_null(self) -> bool:
        return bool(conf.lib.clang_Range_isNull(self))

    @property
    def start(self) -> SourceLocation:
        """Return a SourceLocation representing the first character within a
        source range.
        """
        return conf.lib.clang_getRangeStart(self)

    @property
    def end(self) -> SourceLocation:
        """Return a SourceLocation representing the last character within a
        source range.
        """
        return conf.lib.clang_getRangeEnd(self)

    def __eq__(self, other):
        if not isinstance(other, SourceRange):
            return NotImplemented
        return bool(conf.lib.clang_equalRanges(self, other))

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    __hash__ = None

    def __repr__(self):
        return "<SourceRange start %r, end %r>" % (self.start, self.end)


_position_out = [POINTER(c_object_p), POINTER(c_uint), POINTER(c_uint), POINTER(c_uint)]

FUNCTIONS = [
    ("clang_getNullLocation", [], SourceLocation),
    ("clang_equalLocations", [SourceLocation, SourceLocation], c_uint),
    ("clang_Location_isInSystemHeader", [SourceLocation], c_int),
    ("clang_Location_isFromMainFile", [SourceLocation], c_int),
    ("clang_getExpansionLocation", [SourceLocation] + _position_out),
    ("clang_getInstantiationLocation", [SourceLocation] + _position_out),
    ("clang_getSpellingLocation", [SourceLocation] + _position_out),
    ("clang_getFileLocation", [SourceLocation] + _position_out),
    (
        "clang_getPresumedLocation",
        [SourceLocation, POINTER(CXString), POINTER(c_uint), POINTER(c_uint)],
    ),
    ("clang_getNullRange", [], SourceRange),
    ("clang_getRange", [SourceLocation, SourceLocation], SourceRange),
    ("clang_equalRanges", [SourceRange, SourceRange], c_uint),
    ("clang_Range_isNull", [SourceRange], c_int),
    ("clang_getRangeStart", [SourceRange], SourceLocation),
    ("clang_getRangeEnd", [SourceRange], SourceLocation),
    ("clang_getFileName", [File], CXString, CXString.from_result),
    ("clang_getFileTime", [File], c_longlong),
    ("clang_getFileUniqueID", [File, POINTER(FileUniqueID)], c_int),
]
