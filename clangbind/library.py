"""
Loading libclang and declaring its foreign-function signatures.

Each binding module publishes a ``FUNCTIONS`` table of
``(name, argtypes[, restype[, errcheck]])`` entries. The tables are
registered on the shared library the first time ``conf.lib`` is accessed,
so importing the package never touches the native library.
"""

import importlib
import logging
from ctypes import cdll
from typing import Any, List, Optional, Sequence

from core.library_config import (
    LibraryConfig,
    candidate_library_files,
    load_library_config,
)
from clangbind.cxstring import CXString
from clangbind.errors import DisposedHandleError, LibclangError

logger = logging.getLogger(__name__)

# Modules whose FUNCTIONS tables make up the full C API surface.
FUNCTION_TABLE_MODULES = (
    "clangbind.cxstring",
    "clangbind.library",
    "clangbind.cursor_kind",
    "clangbind.source",
    "clangbind.availability",
    "clangbind.cxtype",
    "clangbind.comment",
    "clangbind.module",
    "clangbind.diagnostics",
    "clangbind.completion",
    "clangbind.cursor",
    "clangbind.tokens",
    "clangbind.translation_unit",
    "clangbind.index",
    "clangbind.compilation_db",
)


class CachedProperty:
    """Decorator that lazy-loads the value of a property.

    The first access runs the wrapped function and stores its result on the
    instance under the same name, shadowing the descriptor.
    """

    def __init__(self, wrapped):
        self.wrapped = wrapped
        self.__doc__ = getattr(wrapped, "__doc__", None)

    def __get__(self, instance, instance_type=None):
        if instance is None:
            return self
        value = self.wrapped(instance)
        setattr(instance, self.wrapped.__name__, value)
        return value


class ClangObject:
    """Base for wrappers around an opaque libclang handle.

    ``_dispose_function`` names the C entry point releasing the handle;
    wrappers without one (files, modules ...) borrow memory owned elsewhere.
    """

    _dispose_function: Optional[str] = None

    def __init__(self, obj):
        self._obj = obj

    @property
    def obj(self):
        if self._obj is None:
            raise DisposedHandleError(
                f"{type(self).__name__} has already been disposed"
            )
        return self._obj

    def ensure_alive(self) -> None:
        """Raise DisposedHandleError if the handle was released."""
        self.obj

    @property
    def _as_parameter_(self):
        return self.obj

    @property
    def disposed(self) -> bool:
        return self._obj is None

    @classmethod
    def from_param(cls, value):
        if isinstance(value, ClangObject):
            return value.obj
        return value

    def dispose(self) -> None:
        """Release the native handle. Calling it again is a no-op."""
        if self._obj is None:
            return
        obj, self._obj = self._obj, None
        if self._dispose_function:
            getattr(conf.lib, self._dispose_function)(obj)
            logger.debug("Disposed %s", type(self).__name__)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.dispose()
        return False

    def __del__(self):
        if self._dispose_function and getattr(self, "_obj", None) is not None:
            self.dispose()


class CheckedLibrary:
    """Loaded libclang whose calls reject disposed handles up front.

    ctypes reports failures while converting arguments as
    ``ctypes.ArgumentError``; checking ``ClangObject`` arguments before the
    call lets ``DisposedHandleError`` reach the caller unchanged.
    """

    def __init__(self, lib):
        self._lib = lib

    def __getattr__(self, name):
        func = getattr(self._lib, name)

        def call(*args):
            for arg in args:
                if isinstance(arg, ClangObject):
                    arg.ensure_alive()
            return func(*args)

        call.__name__ = name
        call.__wrapped__ = func
        setattr(self, name, call)
        return call


def collect_functions(modules: Sequence[str] = FUNCTION_TABLE_MODULES) -> List[tuple]:
    """Concatenate the FUNCTIONS tables of ``modules``."""
    table: List[tuple] = []
    for module_name in modules:
        module = importlib.import_module(module_name)
        table.extend(getattr(module, "FUNCTIONS", ()))
    return table


def register_function(lib: Any, item: tuple, ignore_errors: bool) -> bool:
    """Attach the prototype described by ``item`` to ``lib``.

    Returns False when the symbol is missing and ``ignore_errors`` is set.
    """
    name = item[0]
    try:
        func = getattr(lib, name)
    except AttributeError as exc:
        if ignore_errors:
            logger.debug("Skipping missing libclang symbol %s", name)
            return False
        raise LibclangError(
            f"{exc}. Please ensure that the bindings are compatible with "
            "your libclang version."
        ) from exc

    if len(item) >= 2:
        func.argtypes = item[1]
    if len(item) >= 3:
        func.restype = item[2]
    if len(item) == 4:
        func.errcheck = item[3]
    return True


def register_functions(lib: Any, ignore_errors: bool, functions=None) -> int:
    """Register every prototype with a libclang library instance.

    Returns the number of functions registered.
    """
    table = collect_functions() if functions is None else functions
    registered = 0
    for item in table:
        if register_function(lib, item, ignore_errors):
            registered += 1
    logger.debug("Registered %d of %d libclang functions", registered, len(table))
    return registered


class Config:
    """Process-wide libclang settings.

    Anything not set explicitly through the ``set_*`` methods falls back to
    ``core.library_config.load_library_config`` (YAML file plus
    ``CLANGBIND_*`` environment variables).
    """

    library_path: Optional[str] = None
    library_file: Optional[str] = None
    compatibility_check: Optional[bool] = None
    loaded = False

    @staticmethod
    def _ensure_not_loaded(what: str) -> None:
        if Config.loaded:
            raise LibclangError(
                f"{what} must be set before using any other functionalities "
                "in libclang."
            )

    @staticmethod
    def set_library_path(path) -> None:
        """Set the directory in which to search for libclang."""
        Config._ensure_not_loaded("library path")
        Config.library_path = str(path)

    @staticmethod
    def set_library_file(filename) -> None:
        """Set the exact location of libclang."""
        Config._ensure_not_loaded("library file")
        Config.library_file = str(filename)

    @staticmethod
    def set_compatibility_check(check_status: bool) -> None:
        """Fail on missing symbols (True) or silently skip them (False).

        Disabling the check lets the bindings load against an older
        libclang; calling an entry point it lacks then raises
        AttributeError at call time.
        """
        Config._ensure_not_loaded("compatibility_check")
        Config.compatibility_check = bool(check_status)

    def settings(self) -> LibraryConfig:
        """Effective settings: explicit overrides on top of the config file."""
        base = load_library_config()
        return LibraryConfig(
            library_file=Config.library_file or base.library_file,
            library_path=Config.library_path or base.library_path,
            compatibility_check=(
                base.compatibility_check
                if Config.compatibility_check is None
                else Config.compatibility_check
            ),
        )

    @CachedProperty
    def lib(self):
        settings = self.settings()
        lib = self.get_cindex_library(settings)
        register_functions(lib, not settings.compatibility_check)
        Config.loaded = True
        return CheckedLibrary(lib)

    def get_filenames(self, settings: Optional[LibraryConfig] = None) -> List[str]:
        return candidate_library_files(settings or self.settings())

    def get_cindex_library(self, settings: Optional[LibraryConfig] = None):
        errors = []
        for filename in self.get_filenames(settings):
            try:
                library = cdll.LoadLibrary(filename)
            except OSError as exc:
                logger.debug("Could not load %s: %s", filename, exc)
                errors.append(f"{filename}: {exc}")
                continue
            logger.debug("Loaded libclang from %s", filename)
            return library

        logger.error("Unable to load libclang (tried %d candidates)", len(errors))
        raise LibclangError(
            "Unable to load libclang ("
            + "; ".join(errors)
            + "). To provide a path to libclang use Config.set_library_path(), "
            "Config.set_library_file() or the CLANGBIND_LIBRARY_FILE / "
            "CLANGBIND_LIBRARY_PATH environment variables."
        )

    def function_exists(self, name: str) -> bool:
        try:
            getattr(self.lib, name)
        except AttributeError:
            return False
        return True


conf = Config()


def find_translation_unit(args):
    """Owning translation unit among the arguments of a native call.

    Values derived from a translation unit (cursors, types, tokens) keep it
    alive by remembering it in ``_tu``.
    """
    from clangbind.translation_unit import TranslationUnit

    for arg in args or ():
        if isinstance(arg, TranslationUnit):
            return arg
        tu = getattr(arg, "_tu", None)
        if tu is not None:
            return tu
    return None


def get_clang_version() -> str:
    """Version string of the loaded libclang, e.g. ``clang version 17.0.6``."""
    return conf.lib.clang_getClangVersion()


FUNCTIONS = [
    ("clang_getClangVersion", [], CXString, CXString.from_result),
]

__all__ = [
    "CachedProperty",
    "CheckedLibrary",
    "ClangObject",
    "Config",
    "collect_functions",
    "conf",
    "find_translation_unit",
    "get_clang_version",
    "register_function",
    "register_functions",
]
