"""Per-platform availability attributes of a declaration."""

from ctypes import POINTER, Structure, byref, c_int
from dataclasses import dataclass, field
from typing import List

from clangbind.cxstring import CXString
from clangbind.errors import DisposedHandleError
from clangbind.library import conf


class Version(Structure):
    """A version number; components libclang does not know are negative."""

    _fields_ = [("Major", c_int), ("Minor", c_int), ("Subminor", c_int)]

    @property
    def major(self) -> int:
        return self.Major

    @property
    def minor(self) -> int:
        return self.Minor

    @property
    def subminor(self) -> int:
        return self.Subminor

    def __str__(self):
        parts = []
        for part in (self.Major, self.Minor, self.Subminor):
            if part < 0:
                break
            parts.append(str(part))
        return ".".join(parts)

    def __repr__(self):
        return "<Version %s>" % (str(self) or "unknown")


class PlatformAvailability(Structure):
    """One ``availability`` attribute; its strings are owned by libclang."""

    _fields_ = [
        ("Platform", CXString),
        ("Introduced", Version),
        ("Deprecated", Version),
        ("Obsoleted", Version),
        ("Unavailable", c_int),
        ("Message", CXString),
    ]

    @property
    def disposed(self) -> bool:
        return getattr(self, "_disposed", False)

    def _string(self, value: CXString) -> str:
        if self.disposed:
            raise DisposedHandleError("PlatformAvailability has already been disposed")
        return conf.lib.clang_getCString(value) or ""

    @property
    def platform(self) -> str:
        return self._string(self.Platform)

    @property
    def introduced(self) -> Version:
        return self.Introduced

    @property
    def deprecated(self) -> Version:
        return self.Deprecated

    @property
    def obsoleted(self) -> Version:
        return self.Obsoleted

    @property
    def unavailable(self) -> bool:
        return bool(self.Unavailable)

    @property
    def message(self) -> str:
        return self._string(self.Message)

    def dispose(self) -> None:
        """Release the platform and message strings. Calling it again is a no-op."""
        if self.disposed:
            return
        self._disposed = True
        conf.lib.clang_disposeCXPlatformAvailability(byref(self))

    def __repr__(self):
        if self.disposed:
            return "<PlatformAvailability disposed>"
        return "<PlatformAvailability %s introduced=%s>" % (self.platform, self.introduced)


@dataclass
class PlatformAvailabilityInfo:
    """Result of ``Cursor.platform_availability``.

    ``platforms`` hold native strings until ``dispose()`` is called.
    """

    always_deprecated: bool
    deprecated_message: str
    always_unavailable: bool
    unavailable_message: str
    platforms: List[PlatformAvailability] = field(default_factory=list)

    def dispose(self) -> None:
        for platform in self.platforms:
            platform.dispose()
        self.platforms = []

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.dispose()
        return False


FUNCTIONS = [
    ("clang_disposeCXPlatformAvailability", [POINTER(PlatformAvailability)]),
]
