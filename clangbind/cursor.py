"""
Cursors: handles on the nodes of a translation unit's AST.

``Cursor`` is a plain-data struct copied by value. Every cursor obtained
from a translation unit remembers it in ``_tu`` so the unit is not
collected while cursors derived from it are still in use.
"""

import logging
from ctypes import (
    CFUNCTYPE,
    POINTER,
    Structure,
    byref,
    c_int,
    c_longlong,
    c_uint,
    c_ulonglong,
    c_void_p,
    py_object,
)
from typing import Callable, Iterator, List, Optional, Union

from clangbind.availability import PlatformAvailability, PlatformAvailabilityInfo
from clangbind.comment import Comment
from clangbind.completion import CompletionString
from clangbind.cursor_kind import CursorKind
from clangbind.cxstring import CXString, c_object_p
from clangbind.cxtype import Type
from clangbind.enumerations import (
    AccessSpecifier,
    AvailabilityKind,
    ChildVisitResult,
    LanguageKind,
    LinkageKind,
    Result,
    TypeLayoutErrorKind,
)
from clangbind.errors import DisposedHandleError, TypeLayoutError
from clangbind.library import ClangObject, conf, find_translation_unit
from clangbind.module import Module
from clangbind.source import File, SourceLocation, SourceRange

logger = logging.getLogger(__name__)

VisitorResult = Union[ChildVisitResult, int]
CursorVisitor = Callable[["Cursor", "Cursor"], VisitorResult]


def _visit_result_value(result) -> int:
    if isinstance(result, ChildVisitResult):
        return result.value
    if isinstance(result, bool) or not isinstance(result, int):
        raise TypeError(
            "visitor must return a ChildVisitResult, got %r" % (result,)
        )
    return ChildVisitResult.from_id(result).value


def _reference_result_value(result) -> int:
    value = _visit_result_value(result)
    if value == ChildVisitResult.RECURSE.value:
        raise ValueError(
            "reference visitor must return CONTINUE or BREAK, got %r" % (result,)
        )
    return value


class _VisitState:
    """Client data handed through the native traversal."""

    def __init__(self, visitor, tu):
        self.visitor = visitor
        self.tu = tu
        self.error: Optional[BaseException] = None

    def raise_pending(self) -> None:
        if self.error is not None:
            error, self.error = self.error, None
            logger.debug("Traversal stopped by %s from visitor", type(error).__name__)
            raise error


class Cursor(Structure):
    """
    The Cursor class represents a reference to an element within the AST. It
    acts as a kind of iterator.
    """

    _fields_ = [("_kind_id", c_int), ("xdata", c_int), ("data", c_void_p * 3)]

    @staticmethod
    def null() -> "Cursor":
        return conf.lib.clang_getNullCursor()

    def is_null(self) -> bool:
        return bool(conf.lib.clang_Cursor_isNull(self))

    def __eq__(self, other):
        if not isinstance(other, Cursor):
            return NotImplemented
        return bool(conf.lib.clang_equalCursors(self, other))

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    def __hash__(self):
        return conf.lib.clang_hashCursor(self)

    @property
    def kind(self) -> CursorKind:
        """Return the kind of this cursor."""
        return CursorKind.from_id(self._kind_id)

    @property
    def spelling(self) -> str:
        """Return the spelling of the entity pointed at by the cursor."""
        return conf.lib.clang_getCursorSpelling(self)

    @property
    def display_name(self) -> str:
        """
        Return the display name for the entity referenced by this cursor.

        The display name contains extra information that helps identify the
        cursor, such as the parameters of a function or template or the
        arguments of a class template specialization.
        """
        return conf.lib.clang_getCursorDisplayName(self)

    @property
    def usr(self) -> str:
        """Return the Unified Symbol Resolution (USR) for the entity referenced
        by the given cursor.

        A Unified Symbol Resolution (USR) is a string that identifies a
        particular entity (function, class, variable, etc.) within a
        program. USRs can be compared across translation units to determine,
        e.g., when references in one translation refer to an entity defined in
        another translation unit."""
        return conf.lib.clang_getCursorUSR(self)

    @property
    def linkage(self) -> LinkageKind:
        return LinkageKind.from_id(conf.lib.clang_getCursorLinkage(self))

    @property
    def availability(self) -> AvailabilityKind:
        return AvailabilityKind.from_id(conf.lib.clang_getCursorAvailability(self))

    def platform_availability(self) -> PlatformAvailabilityInfo:
        """Availability attributes of the declaration, per platform.

        The returned object owns native strings; dispose it when done.
        """
        always_deprecated, always_unavailable = c_int(), c_int()
        deprecated_message, unavailable_message = CXString(), CXString()
        count = conf.lib.clang_getCursorPlatformAvailability(
            self,
            byref(always_deprecated),
            byref(deprecated_message),
            byref(always_unavailable),
            byref(unavailable_message),
            None,
            0,
        )
        deprecated_message.consume()
        unavailable_message.consume()

        platforms = (PlatformAvailability * max(count, 0))()
        deprecated_message, unavailable_message = CXString(), CXString()
        conf.lib.clang_getCursorPlatformAvailability(
            self,
            byref(always_deprecated),
            byref(deprecated_message),
            byref(always_unavailable),
            byref(unavailable_message),
            platforms,
            len(platforms),
        )
        return PlatformAvailabilityInfo(
            always_deprecated=bool(always_deprecated.value),
            deprecated_message=deprecated_message.consume(),
            always_unavailable=bool(always_unavailable.value),
            unavailable_message=unavailable_message.consume(),
            platforms=list(platforms),
        )

    @property
    def language(self) -> LanguageKind:
        return LanguageKind.from_id(conf.lib.clang_getCursorLanguage(self))

    @property
    def translation_unit(self):
        """Returns the TranslationUnit to which this Cursor belongs."""
        tu = getattr(self, "_tu", None)
        if tu is not None:
            return tu
        from clangbind.translation_unit import TranslationUnit

        handle = conf.lib.clang_Cursor_getTranslationUnit(self)
        if not handle:
            return None
        return TranslationUnit(handle, owned=False)

    @property
    def objc_type_encoding(self) -> str:
        """Return the Objective-C type encoding as a str."""
        return conf.lib.clang_getDeclObjCTypeEncoding(self)

    @property
    def semantic_parent(self) -> "Cursor":
        """Return the semantic parent for this cursor."""
        return conf.lib.clang_getCursorSemanticParent(self)

    @property
    def lexical_parent(self) -> "Cursor":
        """Return the lexical parent for this cursor."""
        return conf.lib.clang_getCursorLexicalParent(self)

    def overridden_cursors(self) -> "OverriddenCursors":
        """Methods this method overrides; dispose the result when done."""
        overridden = POINTER(Cursor)()
        count = c_uint()
        conf.lib.clang_getOverriddenCursors(self, byref(overridden), byref(count))
        return OverriddenCursors(overridden, count.value, getattr(self, "_tu", None))

    @property
    def included_file(self) -> Optional[File]:
        """Returns the File that is included by the current inclusion cursor."""
        return conf.lib.clang_getIncludedFile(self)

    @property
    def location(self) -> SourceLocation:
        """
        Return the source location (the starting character) of the entity
        pointed at by the cursor.
        """
        return conf.lib.clang_getCursorLocation(self)

    @property
    def extent(self) -> SourceRange:
        """
        Return the source range (the range of text) occupied by the entity
        pointed at by the cursor.
        """
        return conf.lib.clang_getCursorExtent(self)

    @property
    def type(self) -> Type:
        """Retrieve the Type (if any) of the entity pointed at by the cursor."""
        return conf.lib.clang_getCursorType(self)

    @property
    def typedef_decl_underlying_type(self) -> Type:
        """Return the underlying type of a typedef declaration."""
        return conf.lib.clang_getTypedefDeclUnderlyingType(self)

    @property
    def enum_decl_integer_type(self) -> Type:
        """Return the integer type of an enum declaration."""
        return conf.lib.clang_getEnumDeclIntegerType(self)

    @property
    def enum_constant_decl_value(self) -> int:
        return conf.lib.clang_getEnumConstantDeclValue(self)

    @property
    def enum_constant_decl_unsigned_value(self) -> int:
        return conf.lib.clang_getEnumConstantDeclUnsignedValue(self)

    @property
    def field_decl_bit_width(self) -> int:
        """Bit width of a bit-field declaration, or -1 for other cursors."""
        return conf.lib.clang_getFieldDeclBitWidth(self)

    @property
    def num_arguments(self) -> int:
        """Number of arguments of a function or method; -1 otherwise."""
        return conf.lib.clang_Cursor_getNumArguments(self)

    def argument(self, i: int) -> "Cursor":
        return conf.lib.clang_Cursor_getArgument(self, i)

    def get_arguments(self) -> Iterator["Cursor"]:
        """Return an iterator for accessing the arguments of this cursor."""
        for i in range(max(self.num_arguments, 0)):
            yield self.argument(i)

    @property
    def result_type(self) -> Type:
        """Retrieve the Type of the result for this Cursor."""
        return conf.lib.clang_getCursorResultType(self)

    @property
    def is_bit_field(self) -> bool:
        return bool(conf.lib.clang_Cursor_isBitField(self))

    @property
    def is_virtual_base(self) -> bool:
        return bool(conf.lib.clang_isVirtualBase(self))

    @property
    def access_specifier(self) -> AccessSpecifier:
        return AccessSpecifier.from_id(conf.lib.clang_getCXXAccessSpecifier(self))

    @property
    def num_overloaded_decls(self) -> int:
        return conf.lib.clang_getNumOverloadedDecls(self)

    def overloaded_decl(self, i: int) -> "Cursor":
        return conf.lib.clang_getOverloadedDecl(self, i)

    @property
    def ib_outlet_collection_type(self) -> Type:
        return conf.lib.clang_getIBOutletCollectionType(self)

    def visit(self, visitor: CursorVisitor) -> bool:
        """Traverse the children of this cursor.

        ``visitor(cursor, parent)`` is called for each child and returns a
        ChildVisitResult. Returns True when the traversal ended on BREAK.
        An exception raised by the visitor ends the traversal and is
        re-raised here.
        """
        state = _VisitState(visitor, getattr(self, "_tu", None))
        broken = conf.lib.clang_visitChildren(self, _cursor_visit_callback, state)
        state.raise_pending()
        return bool(broken)

    def get_children(self) -> Iterator["Cursor"]:
        """Return an iterator for accessing the children of this cursor."""
        children: List[Cursor] = []

        def collect(child, parent):
            children.append(child)
            return ChildVisitResult.CONTINUE

        self.visit(collect)
        return iter(children)

    def walk_preorder(self) -> Iterator["Cursor"]:
        """Depth-first preorder walk over the cursor and its descendants.

        Yields cursors.
        """
        yield self
        for child in self.get_children():
            for descendant in child.walk_preorder():
                yield descendant

    @property
    def referenced(self) -> "Cursor":
        """
        For a cursor that is a reference, returns a cursor
        representing the entity that it references.
        """
        return conf.lib.clang_getCursorReferenced(self)

    @property
    def definition(self) -> "Cursor":
        """
        If the cursor is a reference to a declaration or a declaration of
        some entity, return a cursor that points to the definition of that
        entity.
        """
        return conf.lib.clang_getCursorDefinition(self)

    def is_definition(self) -> bool:
        return bool(conf.lib.clang_isCursorDefinition(self))

    @property
    def canonical(self) -> "Cursor":
        """Return the canonical Cursor corresponding to this Cursor.

        The canonical cursor is the cursor which is representative for the
        underlying entity. For example, if you have multiple forward
        declarations for the same class, the canonical cursor for the forward
        declarations will be identical.
        """
        return conf.lib.clang_getCanonicalCursor(self)

    @property
    def is_dynamic_call(self) -> bool:
        """Whether a call or message expression dispatches dynamically."""
        return bool(conf.lib.clang_Cursor_isDynamicCall(self))

    @property
    def receiver_type(self) -> Type:
        return conf.lib.clang_Cursor_getReceiverType(self)

    @property
    def is_variadic(self) -> bool:
        return bool(conf.lib.clang_Cursor_isVariadic(self))

    @property
    def comment_range(self) -> SourceRange:
        return conf.lib.clang_Cursor_getCommentRange(self)

    @property
    def raw_comment_text(self) -> str:
        """Returns the raw comment text associated with that Cursor"""
        return conf.lib.clang_Cursor_getRawCommentText(self)

    @property
    def brief_comment_text(self) -> str:
        """Returns the brief comment text associated with that Cursor"""
        return conf.lib.clang_Cursor_getBriefCommentText(self)

    @property
    def parsed_comment(self) -> Comment:
        return conf.lib.clang_Cursor_getParsedComment(self)

    @property
    def module(self) -> Module:
        return conf.lib.clang_Cursor_getModule(self)

    def cxx_method_is_pure_virtual(self) -> bool:
        return bool(conf.lib.clang_CXXMethod_isPureVirtual(self))

    def cxx_method_is_static(self) -> bool:
        return bool(conf.lib.clang_CXXMethod_isStatic(self))

    def cxx_method_is_virtual(self) -> bool:
        return bool(conf.lib.clang_CXXMethod_isVirtual(self))

    @property
    def template_cursor_kind(self) -> CursorKind:
        """Kind of the specializations a template would produce."""
        return CursorKind.from_id(conf.lib.clang_getTemplateCursorKind(self))

    @property
    def specialized_cursor_template(self) -> "Cursor":
        return conf.lib.clang_getSpecializedCursorTemplate(self)

    def reference_name_range(self, flags=0, piece: int = 0) -> SourceRange:
        """Range of one piece of a reference's name; see NameRefFlags."""
        return conf.lib.clang_getCursorReferenceNameRange(self, int(flags), piece)

    @property
    def completion_string(self) -> Optional[CompletionString]:
        return conf.lib.clang_getCursorCompletionString(self)

    def offset_of_field(self) -> int:
        """Offset in bits of a field from the start of its record."""
        value = conf.lib.clang_Cursor_getOffsetOfField(self)
        if value < 0:
            raise TypeLayoutError(TypeLayoutErrorKind.from_id(value))
        return value

    def find_references_in_file(self, file: File, visitor) -> Result:
        """Report each reference to this cursor's entity inside ``file``.

        ``visitor(cursor, extent)`` returns ChildVisitResult.CONTINUE or
        BREAK; RECURSE has no meaning here and raises ValueError. Exceptions
        raised by the visitor are re-raised here.
        """
        state = _VisitState(visitor, getattr(self, "_tu", None))
        range_visitor = _CursorAndRangeVisitor(state, _reference_visit_callback)
        result = conf.lib.clang_findReferencesInFile(self, file, range_visitor)
        state.raise_pending()
        return Result.from_id(result)

    def __repr__(self):
        if self.is_null():
            return "<Cursor null>"
        return "<Cursor %s: %s>" % (self.kind.name, self.spelling)

    @staticmethod
    def from_result(res, fn=None, args=None) -> "Cursor":
        assert isinstance(res, Cursor)
        res._tu = find_translation_unit(args)
        return res


def _dispatch_visit(child, parent, state) -> int:
    try:
        child._tu = state.tu
        parent._tu = state.tu
        return _visit_result_value(state.visitor(child, parent))
    except BaseException as exc:
        state.error = exc
        return ChildVisitResult.BREAK.value


def _dispatch_reference(state, cursor, extent) -> int:
    try:
        cursor._tu = state.tu
        return _reference_result_value(state.visitor(cursor, extent))
    except BaseException as exc:
        state.error = exc
        return ChildVisitResult.BREAK.value


_CURSOR_VISIT = CFUNCTYPE(c_int, Cursor, Cursor, py_object)
_REFERENCE_VISIT = CFUNCTYPE(c_int, py_object, Cursor, SourceRange)

_cursor_visit_callback = _CURSOR_VISIT(_dispatch_visit)
_reference_visit_callback = _REFERENCE_VISIT(_dispatch_reference)


class _CursorAndRangeVisitor(Structure):
    _fields_ = [("context", py_object), ("visit", _REFERENCE_VISIT)]


class CursorSet(ClangObject):
    """A set of cursors, deduplicated by libclang's cursor identity."""

    _dispose_function = "clang_disposeCXCursorSet"

    def __init__(self):
        ClangObject.__init__(self, conf.lib.clang_createCXCursorSet())

    def contains(self, cursor: Cursor) -> bool:
        return bool(conf.lib.clang_CXCursorSet_contains(self, cursor))

    def insert(self, cursor: Cursor) -> bool:
        """Add ``cursor``; returns False when it was already present."""
        return bool(conf.lib.clang_CXCursorSet_insert(self, cursor))

    def __contains__(self, cursor):
        return self.contains(cursor)


class OverriddenCursors(ClangObject):
    """Owned array returned by ``Cursor.overridden_cursors``."""

    _dispose_function = "clang_disposeOverriddenCursors"

    def __init__(self, array, count: int, tu=None):
        ClangObject.__init__(self, array)
        self._count = count if array else 0
        self._tu = tu

    def dispose(self) -> None:
        if self._obj is not None and not self._obj:
            self._obj = None
            return
        super().dispose()

    def __len__(self):
        if self.disposed:
            raise DisposedHandleError("OverriddenCursors has already been disposed")
        return self._count

    def __getitem__(self, key: int) -> Cursor:
        if key < 0 or key >= len(self):
            raise IndexError(key)
        cursor = Cursor.from_buffer_copy(self.obj[key])
        cursor._tu = self._tu
        return cursor

    def __iter__(self):
        for i in range(len(self)):
            yield self[i]


FUNCTIONS = [
    ("clang_getNullCursor", [], Cursor, Cursor.from_result),
    ("clang_Cursor_isNull", [Cursor], c_int),
    ("clang_equalCursors", [Cursor, Cursor], c_uint),
    ("clang_hashCursor", [Cursor], c_uint),
    ("clang_getCursorSpelling", [Cursor], CXString, CXString.from_result),
    ("clang_getCursorDisplayName", [Cursor], CXString, CXString.from_result),
    ("clang_getCursorUSR", [Cursor], CXString, CXString.from_result),
    ("clang_getCursorLinkage", [Cursor], c_int),
    ("clang_getCursorAvailability", [Cursor], c_int),
    (
        "clang_getCursorPlatformAvailability",
        [
            Cursor,
            POINTER(c_int),
            POINTER(CXString),
            POINTER(c_int),
            POINTER(CXString),
            POINTER(PlatformAvailability),
            c_int,
        ],
        c_int,
    ),
    ("clang_getCursorLanguage", [Cursor], c_int),
    ("clang_Cursor_getTranslationUnit", [Cursor], c_object_p),
    ("clang_getDeclObjCTypeEncoding", [Cursor], CXString, CXString.from_result),
    ("clang_getCursorSemanticParent", [Cursor], Cursor, Cursor.from_result),
    ("clang_getCursorLexicalParent", [Cursor], Cursor, Cursor.from_result),
    (
        "clang_getOverriddenCursors",
        [Cursor, POINTER(POINTER(Cursor)), POINTER(c_uint)],
    ),
    ("clang_disposeOverriddenCursors", [POINTER(Cursor)]),
    ("clang_getIncludedFile", [Cursor], c_object_p, File.from_result),
    ("clang_getCursorLocation", [Cursor], SourceLocation),
    ("clang_getCursorExtent", [Cursor], SourceRange),
    ("clang_getCursorType", [Cursor], Type, Type.from_result),
    ("clang_getTypedefDeclUnderlyingType", [Cursor], Type, Type.from_result),
    ("clang_getEnumDeclIntegerType", [Cursor], Type, Type.from_result),
    ("clang_getEnumConstantDeclValue", [Cursor], c_longlong),
    ("clang_getEnumConstantDeclUnsignedValue", [Cursor], c_ulonglong),
    ("clang_getFieldDeclBitWidth", [Cursor], c_int),
    ("clang_Cursor_getNumArguments", [Cursor], c_int),
    ("clang_Cursor_getArgument", [Cursor, c_uint], Cursor, Cursor.from_result),
    ("clang_getCursorResultType", [Cursor], Type, Type.from_result),
    ("clang_Cursor_isBitField", [Cursor], c_uint),
    ("clang_isVirtualBase", [Cursor], c_uint),
    ("clang_getCXXAccessSpecifier", [Cursor], c_int),
    ("clang_getNumOverloadedDecls", [Cursor], c_uint),
    ("clang_getOverloadedDecl", [Cursor, c_uint], Cursor, Cursor.from_result),
    ("clang_getIBOutletCollectionType", [Cursor], Type, Type.from_result),
    ("clang_visitChildren", [Cursor, _CURSOR_VISIT, py_object], c_uint),
    ("clang_getCursorReferenced", [Cursor], Cursor, Cursor.from_result),
    ("clang_getCursorDefinition", [Cursor], Cursor, Cursor.from_result),
    ("clang_isCursorDefinition", [Cursor], c_uint),
    ("clang_getCanonicalCursor", [Cursor], Cursor, Cursor.from_result),
    ("clang_Cursor_isDynamicCall", [Cursor], c_int),
    ("clang_Cursor_getReceiverType", [Cursor], Type, Type.from_result),
    ("clang_Cursor_isVariadic", [Cursor], c_uint),
    ("clang_Cursor_getCommentRange", [Cursor], SourceRange),
    ("clang_Cursor_getRawCommentText", [Cursor], CXString, CXString.from_result),
    ("clang_Cursor_getBriefCommentText", [Cursor], CXString, CXString.from_result),
    ("clang_Cursor_getParsedComment", [Cursor], Comment),
    ("clang_Cursor_getModule", [Cursor], c_object_p, Module.from_result),
    ("clang_CXXMethod_isPureVirtual", [Cursor], c_uint),
    ("clang_CXXMethod_isStatic", [Cursor], c_uint),
    ("clang_CXXMethod_isVirtual", [Cursor], c_uint),
    ("clang_getTemplateCursorKind", [Cursor], c_int),
    ("clang_getSpecializedCursorTemplate", [Cursor], Cursor, Cursor.from_result),
    (
        "clang_getCursorReferenceNameRange",
        [Cursor, c_uint, c_uint],
        SourceRange,
    ),
    (
        "clang_getCursorCompletionString",
        [Cursor],
        c_object_p,
        CompletionString.from_result,
    ),
    ("clang_Cursor_getOffsetOfField", [Cursor], c_longlong),
    (
        "clang_findReferencesInFile",
        [Cursor, File, _CursorAndRangeVisitor],
        c_int,
    ),
    ("clang_createCXCursorSet", [], c_object_p),
    ("clang_disposeCXCursorSet", [CursorSet]),
    ("clang_CXCursorSet_contains", [CursorSet, Cursor], c_uint),
    ("clang_CXCursorSet_insert", [CursorSet, Cursor], c_uint),
    ("clang_getTypeDeclaration", [Type], Cursor, Cursor.from_result),
]
