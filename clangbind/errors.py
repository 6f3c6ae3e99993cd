"""Exceptions raised by the libclang bindings."""


class LibclangError(RuntimeError):
    """Base error for the bindings.

    Raised directly when the shared library cannot be loaded, a required
    entry point is missing, or the configuration is changed after loading.
    """


class DisposedHandleError(LibclangError):
    """A native handle was used after ``dispose()``."""


class TranslationUnitLoadError(LibclangError):
    """libclang could not create a translation unit.

    The C API returns NULL without further detail, so the message only names
    the input that failed.
    """


class TranslationUnitReparseError(LibclangError):
    """Reparsing failed; the translation unit may only be disposed now."""

    def __init__(self, code: int, message: str = ""):
        self.code = code
        super().__init__(message or f"Reparse failed with code {code}")


class TranslationUnitSaveError(LibclangError):
    """Saving a translation unit failed.

    ``save_error`` holds the ``SaveError`` enumerator reported by libclang.
    """

    def __init__(self, save_error, message: str = ""):
        self.save_error = save_error
        super().__init__(
            f"Error {int(save_error.value)} ({save_error.name}): {message}"
            if message
            else f"Error {int(save_error.value)} ({save_error.name})"
        )


class CompilationDatabaseError(LibclangError):
    """A compilation database could not be loaded.

    ``cdb_error`` holds the ``CompilationDatabaseErrorCode``.
    """

    def __init__(self, cdb_error, message: str = ""):
        self.cdb_error = cdb_error
        super().__init__(message or f"Compilation database error: {cdb_error.name}")


class TypeLayoutError(LibclangError):
    """A sizeof/alignof/offsetof query was rejected by libclang.

    ``kind`` holds the ``TypeLayoutErrorKind``.
    """

    def __init__(self, kind):
        self.kind = kind
        super().__init__(f"TypeLayout={kind.spelling}")


class FileUniqueIDError(LibclangError):
    """libclang could not compute a unique ID for a file."""

    def __init__(self, code: int):
        self.code = code
        super().__init__(f"Could not get FileUniqueID (err={code})")
