"""The Type struct and the TypeKind enumeration."""

import logging
from ctypes import Structure, c_int, c_longlong, c_uint, c_void_p

from clangbind.cxstring import CXString, c_interop_string
from clangbind.enumerations import (
    CallingConv,
    OpenEnumeration,
    RefQualifierKind,
    TypeLayoutErrorKind,
)
from clangbind.errors import TypeLayoutError
from clangbind.library import conf, find_translation_unit

logger = logging.getLogger(__name__)


class TypeKind(OpenEnumeration):
    """
    Describes the kind of type.
    """

    @property
    def spelling(self) -> str:
        """Retrieve the spelling of this TypeKind."""
        return conf.lib.clang_getTypeKindSpelling(self.value)

    def __str__(self):
        return self.spelling

    INVALID = 0
    UNEXPOSED = 1
    VOID = 2
    BOOL = 3
    CHAR_U = 4
    UCHAR = 5
    CHAR16 = 6
    CHAR32 = 7
    USHORT = 8
    UINT = 9
    ULONG = 10
    ULONGLONG = 11
    UINT128 = 12
    CHAR_S = 13
    SCHAR = 14
    WCHAR = 15
    SHORT = 16
    INT = 17
    LONG = 18
    LONGLONG = 19
    INT128 = 20
    FLOAT = 21
    DOUBLE = 22
    LONGDOUBLE = 23
    NULLPTR = 24
    OVERLOAD = 25
    DEPENDENT = 26
    OBJCID = 27
    OBJCCLASS = 28
    OBJCSEL = 29
    FLOAT128 = 30
    HALF = 31
    FLOAT16 = 32
    SHORTACCUM = 33
    ACCUM = 34
    LONGACCUM = 35
    USHORTACCUM = 36
    UACCUM = 37
    ULONGACCUM = 38
    BFLOAT16 = 39
    IBM128 = 40
    COMPLEX = 100
    POINTER = 101
    BLOCKPOINTER = 102
    LVALUEREFERENCE = 103
    RVALUEREFERENCE = 104
    RECORD = 105
    ENUM = 106
    TYPEDEF = 107
    OBJCINTERFACE = 108
    OBJCOBJECTPOINTER = 109
    FUNCTIONNOPROTO = 110
    FUNCTIONPROTO = 111
    CONSTANTARRAY = 112
    VECTOR = 113
    INCOMPLETEARRAY = 114
    VARIABLEARRAY = 115
    DEPENDENTSIZEDARRAY = 116
    MEMBERPOINTER = 117
    AUTO = 118
    ELABORATED = 119
    PIPE = 120
    OCLIMAGE1DRO = 121
    OCLIMAGE1DARRAYRO = 122
    OCLIMAGE1DBUFFERRO = 123
    OCLIMAGE2DRO = 124
    OCLIMAGE2DARRAYRO = 125
    OCLIMAGE2DDEPTHRO = 126
    OCLIMAGE2DARRAYDEPTHRO = 127
    OCLIMAGE2DMSAARO = 128
    OCLIMAGE2DARRAYMSAARO = 129
    OCLIMAGE2DMSAADEPTHRO = 130
    OCLIMAGE2DARRAYMSAADEPTHRO = 131
    OCLIMAGE3DRO = 132
    OCLIMAGE1DWO = 133
    OCLIMAGE1DARRAYWO = 134
    OCLIMAGE1DBUFFERWO = 135
    OCLIMAGE2DWO = 136
    OCLIMAGE2DARRAYWO = 137
    OCLIMAGE2DDEPTHWO = 138
    OCLIMAGE2DARRAYDEPTHWO = 139
    OCLIMAGE2DMSAAWO = 140
    OCLIMAGE2DARRAYMSAAWO = 141
    OCLIMAGE2DMSAADEPTHWO = 142
    OCLIMAGE2DARRAYMSAADEPTHWO = 143
    OCLIMAGE3DWO = 144
    OCLIMAGE1DRW = 145
    OCLIMAGE1DARRAYRW = 146
    OCLIMAGE1DBUFFERRW = 147
    OCLIMAGE2DRW = 148
    OCLIMAGE2DARRAYRW = 149
    OCLIMAGE2DDEPTHRW = 150
    OCLIMAGE2DARRAYDEPTHRW = 151
    OCLIMAGE2DMSAARW = 152
    OCLIMAGE2DARRAYMSAARW = 153
    OCLIMAGE2DMSAADEPTHRW = 154
    OCLIMAGE2DARRAYMSAADEPTHRW = 155
    OCLIMAGE3DRW = 156
    OCLSAMPLER = 157
    OCLEVENT = 158
    OCLQUEUE = 159
    OCLRESERVEID = 160
    OBJCOBJECT = 161
    OBJCTYPEPARAM = 162
    ATTRIBUTED = 163
    OCLINTELSUBGROUPAVCMCEPAYLOAD = 164
    OCLINTELSUBGROUPAVCIMEPAYLOAD = 165
    OCLINTELSUBGROUPAVCREFPAYLOAD = 166
    OCLINTELSUBGROUPAVCSICPAYLOAD = 167
    OCLINTELSUBGROUPAVCMCERESULT = 168
    OCLINTELSUBGROUPAVCIMERESULT = 169
    OCLINTELSUBGROUPAVCREFRESULT = 170
    OCLINTELSUBGROUPAVCSICRESULT = 171
    OCLINTELSUBGROUPAVCIMERESULTSINGLEREFERENCESTREAMOUT = 172
    OCLINTELSUBGROUPAVCIMERESULTSDUALREFERENCESTREAMOUT = 173
    OCLINTELSUBGROUPAVCIMERESULTSSINGLEREFERENCESTREAMIN = 174
    OCLINTELSUBGROUPAVCIMEDUALREFERENCESTREAMIN = 175
    EXTVECTOR = 176
    ATOMIC = 177
    BTFTAGATTRIBUTED = 178


def _check_layout(value: int) -> int:
    if value < 0:
        kind = TypeLayoutErrorKind.from_id(value)
        logger.debug("Type layout query rejected: %s", kind.spelling)
        raise TypeLayoutError(kind)
    return value


class Type(Structure):
    """
    The type of an element in the abstract syntax tree.
    """

    _fields_ = [("_kind_id", c_int), ("data", c_void_p * 2)]

    @property
    def kind(self) -> TypeKind:
        """Return the kind of this type."""
        return TypeKind.from_id(self._kind_id)

    @property
    def translation_unit(self):
        """The TranslationUnit to which this Type is associated."""
        return getattr(self, "_tu", None)

    @property
    def spelling(self) -> str:
        """Retrieve the spelling of this Type."""
        return conf.lib.clang_getTypeSpelling(self)

    @property
    def canonical_type(self) -> "Type":
        """Return the canonical type for a Type.

        Clang's type system explicitly models typedefs and all the
        ways a specific type can be represented. The canonical type
        is the underlying type with all the "sugar" removed. For
        example, if 'T' is a typedef for 'int', the canonical type for
        'T' would be 'int'.
        """
        return conf.lib.clang_getCanonicalType(self)

    @property
    def is_const_qualified(self) -> bool:
        return bool(conf.lib.clang_isConstQualifiedType(self))

    @property
    def is_volatile_qualified(self) -> bool:
        return bool(conf.lib.clang_isVolatileQualifiedType(self))

    @property
    def is_restrict_qualified(self) -> bool:
        return bool(conf.lib.clang_isRestrictQualifiedType(self))

    @property
    def pointee_type(self) -> "Type":
        """For pointer types, returns the type of the pointee."""
        return conf.lib.clang_getPointeeType(self)

    @property
    def declaration(self):
        """Return the cursor for the declaration of the given type."""
        return conf.lib.clang_getTypeDeclaration(self)

    @property
    def result_type(self) -> "Type":
        """Retrieve the result type associated with a function type."""
        return conf.lib.clang_getResultType(self)

    @property
    def is_pod(self) -> bool:
        """Determine whether this Type represents plain old data (POD)."""
        return bool(conf.lib.clang_isPODType(self))

    @property
    def array_element_type(self) -> "Type":
        """Element type of a constant array; invalid for other kinds."""
        return conf.lib.clang_getArrayElementType(self)

    @property
    def array_size(self) -> int:
        """Size of a constant array, or -1 for other kinds."""
        return conf.lib.clang_getArraySize(self)

    @property
    def calling_conv(self) -> CallingConv:
        return CallingConv.from_id(conf.lib.clang_getFunctionTypeCallingConv(self))

    @property
    def num_arg_types(self) -> int:
        """Number of parameters of a function type, or -1 for other kinds."""
        return conf.lib.clang_getNumArgTypes(self)

    def arg_type(self, i: int) -> "Type":
        """Type of the i'th parameter; invalid when out of range."""
        return conf.lib.clang_getArgType(self, i)

    def argument_types(self):
        """Iterate over the parameter types of a function prototype."""
        for i in range(max(self.num_arg_types, 0)):
            yield self.arg_type(i)

    @property
    def is_function_variadic(self) -> bool:
        return bool(conf.lib.clang_isFunctionTypeVariadic(self))

    @property
    def ref_qualifier(self) -> RefQualifierKind:
        return RefQualifierKind.from_id(conf.lib.clang_Type_getCXXRefQualifier(self))

    def size_of(self) -> int:
        """Size of the type in bytes, as ``sizeof`` would report it.

        Raises TypeLayoutError for incomplete, dependent or otherwise
        unsized types.
        """
        return _check_layout(conf.lib.clang_Type_getSizeOf(self))

    def align_of(self) -> int:
        """Alignment of the type in bytes."""
        return _check_layout(conf.lib.clang_Type_getAlignOf(self))

    def offset_of(self, field: str) -> int:
        """Offset of ``field`` in bits from the start of this record type."""
        return _check_layout(conf.lib.clang_Type_getOffsetOf(self, field))

    def is_valid(self) -> bool:
        return self._kind_id != TypeKind.INVALID.value

    def __eq__(self, other):
        if not isinstance(other, Type):
            return NotImplemented
        return bool(conf.lib.clang_equalTypes(self, other))

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    __hash__ = None

    def __repr__(self):
        return "<Type %s: %s>" % (self.kind.name, self.spelling)

    @staticmethod
    def from_result(res, fn=None, args=None) -> "Type":
        assert isinstance(res, Type)
        res._tu = find_translation_unit(args)
        return res


FUNCTIONS = [
    ("clang_equalTypes", [Type, Type], c_uint),
    ("clang_getTypeSpelling", [Type], CXString, CXString.from_result),
    ("clang_getTypeKindSpelling", [c_uint], CXString, CXString.from_result),
    ("clang_getCanonicalType", [Type], Type, Type.from_result),
    ("clang_isConstQualifiedType", [Type], c_uint),
    ("clang_isVolatileQualifiedType", [Type], c_uint),
    ("clang_isRestrictQualifiedType", [Type], c_uint),
    ("clang_getPointeeType", [Type], Type, Type.from_result),
    ("clang_getResultType", [Type], Type, Type.from_result),
    ("clang_isPODType", [Type], c_uint),
    ("clang_getArrayElementType", [Type], Type, Type.from_result),
    ("clang_getArraySize", [Type], c_longlong),
    ("clang_getFunctionTypeCallingConv", [Type], c_int),
    ("clang_getNumArgTypes", [Type], c_int),
    ("clang_getArgType", [Type, c_uint], Type, Type.from_result),
    ("clang_isFunctionTypeVariadic", [Type], c_uint),
    ("clang_Type_getCXXRefQualifier", [Type], c_int),
    ("clang_Type_getSizeOf", [Type], c_longlong),
    ("clang_Type_getAlignOf", [Type], c_longlong),
    ("clang_Type_getOffsetOf", [Type, c_interop_string], c_longlong),
]
