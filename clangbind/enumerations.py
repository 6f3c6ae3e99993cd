"""
Python mirrors of the small libclang enumerations.

Plain kinds derive from ``BaseEnumeration`` and can be handed straight to a
native call through ``from_param``. Bit masks derive from ``BaseFlags``
(an ``IntFlag``) so they combine with ``|``.
"""

from enum import Enum, IntFlag


class BaseEnumeration(Enum):
    """
    Common base class for named enumerations held in sync with Index.h values.
    """

    def from_param(self):
        return self.value

    @classmethod
    def from_id(cls, id):
        return cls(id)

    def __repr__(self):
        return "%s.%s" % (self.__class__.__name__, self.name)


class OpenEnumeration(BaseEnumeration):
    """
    Enumeration that newer libclang releases keep extending.

    A value with no named member maps to a synthesized ``UNKNOWN_<value>``
    member instead of raising, so it can still be passed back to libclang.
    """

    @classmethod
    def _missing_(cls, value):
        if not isinstance(value, int):
            return None
        member = object.__new__(cls)
        member._name_ = "UNKNOWN_%d" % value
        member._value_ = value
        return cls._value2member_map_.setdefault(value, member)


class BaseFlags(IntFlag):
    """Common base class for bit-mask enumerations."""

    def from_param(self):
        return int(self)


class ChildVisitResult(BaseEnumeration):
    """Traversal control returned by a cursor visitor."""

    BREAK = 0
    CONTINUE = 1
    RECURSE = 2


class AvailabilityKind(BaseEnumeration):
    """Availability of an entity."""

    AVAILABLE = 0
    DEPRECATED = 1
    NOT_AVAILABLE = 2
    NOT_ACCESSIBLE = 3

    @property
    def spelling(self) -> str:
        return _AVAILABILITY_SPELLINGS[self]

    def __str__(self):
        return self.spelling


_AVAILABILITY_SPELLINGS = {
    AvailabilityKind.AVAILABLE: "Available",
    AvailabilityKind.DEPRECATED: "Deprecated",
    AvailabilityKind.NOT_AVAILABLE: "NotAvailable",
    AvailabilityKind.NOT_ACCESSIBLE: "NotAccessible",
}


class CallingConv(BaseEnumeration):
    """Calling convention of a function type."""

    DEFAULT = 0
    C = 1
    X86_STDCALL = 2
    X86_FASTCALL = 3
    X86_THISCALL = 4
    X86_PASCAL = 5
    AAPCS = 6
    AAPCS_VFP = 7
    X86_REGCALL = 8
    INTEL_OCL_BICC = 9
    WIN64 = 10
    X86_64_SYSV = 11
    X86_VECTORCALL = 12
    SWIFT = 13
    PRESERVE_MOST = 14
    PRESERVE_ALL = 15
    AARCH64_VECTORCALL = 16
    SWIFT_ASYNC = 17
    AARCH64_SVE_PCS = 18
    M68K_RTD = 19
    INVALID = 100
    UNEXPOSED = 200

    # Alias kept by Index.h for the Win64 convention.
    X86_64_WIN64 = 10


class LinkageKind(BaseEnumeration):
    """Linkage of the entity referred to by a cursor."""

    INVALID = 0
    NO_LINKAGE = 1
    INTERNAL = 2
    UNIQUE_EXTERNAL = 3
    EXTERNAL = 4


class LanguageKind(BaseEnumeration):
    """Language of the entity referred to by a cursor."""

    INVALID = 0
    C = 1
    OBJ_C = 2
    C_PLUS_PLUS = 3


class AccessSpecifier(BaseEnumeration):
    """C++ access control level of a base class or member."""

    INVALID = 0
    PUBLIC = 1
    PROTECTED = 2
    PRIVATE = 3


class NameRefFlags(BaseFlags):
    """Pieces to include in ``Cursor.reference_name_range``."""

    WANT_QUALIFIER = 0x1
    WANT_TEMPLATE_ARGS = 0x2
    WANT_SINGLE_PIECE = 0x4


class RefQualifierKind(BaseEnumeration):
    """Ref-qualifier of a C++ member function type."""

    NONE = 0
    LVALUE = 1
    RVALUE = 2


class Result(BaseEnumeration):
    """Generic result code of the libclang indexing entry points."""

    SUCCESS = 0
    INVALID = 1
    VISIT_BREAK = 2


class TypeLayoutErrorKind(BaseEnumeration):
    """Negative codes returned by the sizeof/alignof/offsetof queries."""

    INVALID = -1
    INCOMPLETE = -2
    DEPENDENT = -3
    NOT_CONSTANT_SIZE = -4
    INVALID_FIELD_NAME = -5
    UNDEDUCED = -6

    @property
    def spelling(self) -> str:
        return _LAYOUT_SPELLINGS[self]

    def __str__(self):
        return self.spelling


_LAYOUT_SPELLINGS = {
    TypeLayoutErrorKind.INVALID: "Invalid",
    TypeLayoutErrorKind.INCOMPLETE: "Incomplete",
    TypeLayoutErrorKind.DEPENDENT: "Dependent",
    TypeLayoutErrorKind.NOT_CONSTANT_SIZE: "NotConstantSize",
    TypeLayoutErrorKind.INVALID_FIELD_NAME: "InvalidFieldName",
    TypeLayoutErrorKind.UNDEDUCED: "Undeduced",
}


class TokenKind(BaseEnumeration):
    """Describes a specific type of a Token."""

    PUNCTUATION = 0
    KEYWORD = 1
    IDENTIFIER = 2
    LITERAL = 3
    COMMENT = 4


class DiagnosticSeverity(BaseEnumeration):
    """Severity of a diagnostic."""

    IGNORED = 0
    NOTE = 1
    WARNING = 2
    ERROR = 3
    FATAL = 4

    @property
    def spelling(self) -> str:
        return self.name.capitalize()

    def __str__(self):
        return self.spelling


class DiagnosticDisplayOptions(BaseFlags):
    """Options for ``Diagnostic.format``."""

    NONE = 0x0
    SOURCE_LOCATION = 0x01
    COLUMN = 0x02
    SOURCE_RANGES = 0x04
    OPTION = 0x08
    CATEGORY_ID = 0x10
    CATEGORY_NAME = 0x20


class TranslationUnitFlags(BaseFlags):
    """Options accepted when parsing a translation unit."""

    NONE = 0x0
    DETAILED_PREPROCESSING_RECORD = 0x01
    INCOMPLETE = 0x02
    PRECOMPILED_PREAMBLE = 0x04
    CACHE_COMPLETION_RESULTS = 0x08
    FOR_SERIALIZATION = 0x10
    CXX_CHAINED_PCH = 0x20
    SKIP_FUNCTION_BODIES = 0x40
    INCLUDE_BRIEF_COMMENTS_IN_CODE_COMPLETION = 0x80
    CREATE_PREAMBLE_ON_FIRST_PARSE = 0x100
    KEEP_GOING = 0x200
    SINGLE_FILE_PARSE = 0x400
    LIMIT_SKIP_FUNCTION_BODIES_TO_PREAMBLE = 0x800
    INCLUDE_ATTRIBUTED_TYPES = 0x1000
    VISIT_IMPLICIT_ATTRIBUTES = 0x2000
    IGNORE_NON_ERRORS_FROM_INCLUDED_FILES = 0x4000
    RETAIN_EXCLUDED_CONDITIONAL_BLOCKS = 0x8000


class SaveTranslationUnitFlags(BaseFlags):
    """Options accepted by ``TranslationUnit.save``."""

    NONE = 0x0


class ReparseFlags(BaseFlags):
    """Options accepted by ``TranslationUnit.reparse``."""

    NONE = 0x0


class SaveError(BaseEnumeration):
    """Result of ``clang_saveTranslationUnit``."""

    NONE = 0
    UNKNOWN = 1
    TRANSLATION_ERRORS = 2
    INVALID_TU = 3


class CodeCompleteFlags(BaseFlags):
    """Options accepted by ``TranslationUnit.complete_at``."""

    NONE = 0x0
    INCLUDE_MACROS = 0x01
    INCLUDE_CODE_PATTERNS = 0x02
    INCLUDE_BRIEF_COMMENTS = 0x04
    SKIP_PREAMBLE = 0x08
    INCLUDE_COMPLETIONS_WITH_FIX_ITS = 0x10


class CompletionContext(BaseFlags):
    """Kinds of completions that are appropriate at a location."""

    UNEXPOSED = 0
    ANY_TYPE = 1 << 0
    ANY_VALUE = 1 << 1
    OBJC_OBJECT_VALUE = 1 << 2
    OBJC_SELECTOR_VALUE = 1 << 3
    CXX_CLASS_TYPE_VALUE = 1 << 4
    DOT_MEMBER_ACCESS = 1 << 5
    ARROW_MEMBER_ACCESS = 1 << 6
    OBJC_PROPERTY_ACCESS = 1 << 7
    ENUM_TAG = 1 << 8
    UNION_TAG = 1 << 9
    STRUCT_TAG = 1 << 10
    CLASS_TAG = 1 << 11
    NAMESPACE = 1 << 12
    NESTED_NAME_SPECIFIER = 1 << 13
    OBJC_INTERFACE = 1 << 14
    OBJC_PROTOCOL = 1 << 15
    OBJC_CATEGORY = 1 << 16
    OBJC_INSTANCE_MESSAGE = 1 << 17
    OBJC_CLASS_MESSAGE = 1 << 18
    OBJC_SELECTOR_NAME = 1 << 19
    MACRO_NAME = 1 << 20
    NATURAL_LANGUAGE = 1 << 21
    INCLUDED_FILE = 1 << 22
    UNKNOWN = (1 << 23) - 1


class CompletionChunkKind(BaseEnumeration):
    """Kind of a piece of a completion string."""

    OPTIONAL = 0
    TYPED_TEXT = 1
    TEXT = 2
    PLACEHOLDER = 3
    INFORMATIVE = 4
    CURRENT_PARAMETER = 5
    LEFT_PAREN = 6
    RIGHT_PAREN = 7
    LEFT_BRACKET = 8
    RIGHT_BRACKET = 9
    LEFT_BRACE = 10
    RIGHT_BRACE = 11
    LEFT_ANGLE = 12
    RIGHT_ANGLE = 13
    COMMA = 14
    RESULT_TYPE = 15
    COLON = 16
    SEMI_COLON = 17
    EQUAL = 18
    HORIZONTAL_SPACE = 19
    VERTICAL_SPACE = 20

    @property
    def spelling(self) -> str:
        return "".join(part.capitalize() for part in self.name.split("_"))

    def __str__(self):
        return self.spelling


def completion_chunk_kind_spelling(value: int) -> str:
    """Spelling for a raw chunk kind; unknown values read ``Invalid``."""
    try:
        return CompletionChunkKind(value).spelling
    except ValueError:
        return "Invalid"


class CommentKind(BaseEnumeration):
    """Kind of a node in a parsed documentation comment."""

    NULL = 0
    TEXT = 1
    INLINE_COMMAND = 2
    HTML_START_TAG = 3
    HTML_END_TAG = 4
    PARAGRAPH = 5
    BLOCK_COMMAND = 6
    PARAM_COMMAND = 7
    TPARAM_COMMAND = 8
    VERBATIM_BLOCK_COMMAND = 9
    VERBATIM_BLOCK_LINE = 10
    VERBATIM_LINE = 11
    FULL_COMMENT = 12


class CompilationDatabaseErrorCode(BaseEnumeration):
    """Error code reported when loading a compilation database."""

    NO_ERROR = 0
    CAN_NOT_LOAD_DATABASE = 1


class GlobalOptions(BaseFlags):
    """Thread-priority options of an index."""

    NONE = 0x0
    THREAD_BACKGROUND_PRIORITY_FOR_INDEXING = 0x1
    THREAD_BACKGROUND_PRIORITY_FOR_EDITING = 0x2
    THREAD_BACKGROUND_PRIORITY_FOR_ALL = 0x3


__all__ = [
    "AccessSpecifier",
    "AvailabilityKind",
    "BaseEnumeration",
    "BaseFlags",
    "CallingConv",
    "ChildVisitResult",
    "CodeCompleteFlags",
    "CommentKind",
    "CompilationDatabaseErrorCode",
    "CompletionChunkKind",
    "CompletionContext",
    "DiagnosticDisplayOptions",
    "DiagnosticSeverity",
    "GlobalOptions",
    "LanguageKind",
    "LinkageKind",
    "NameRefFlags",
    "RefQualifierKind",
    "ReparseFlags",
    "Result",
    "SaveError",
    "SaveTranslationUnitFlags",
    "TokenKind",
    "TranslationUnitFlags",
    "TypeLayoutErrorKind",
    "completion_chunk_kind_spelling",
]
