"""The CursorKind enumeration and its libclang classification predicates."""

from ctypes import c_uint

from clangbind.cxstring import CXString
from clangbind.enumerations import OpenEnumeration
from clangbind.library import conf


class CursorKind(OpenEnumeration):
    """
    A CursorKind describes the kind of entity that a cursor points to.
    """

    @staticmethod
    def get_all_kinds():
        """Return all CursorKind enumeration instances."""
        return list(CursorKind)

    def is_declaration(self) -> bool:
        return conf.lib.clang_isDeclaration(self)

    def is_reference(self) -> bool:
        return conf.lib.clang_isReference(self)

    def is_expression(self) -> bool:
        return conf.lib.clang_isExpression(self)

    def is_statement(self) -> bool:
        return conf.lib.clang_isStatement(self)

    def is_attribute(self) -> bool:
        return conf.lib.clang_isAttribute(self)

    def is_invalid(self) -> bool:
        return conf.lib.clang_isInvalid(self)

    def is_translation_unit(self) -> bool:
        return conf.lib.clang_isTranslationUnit(self)

    def is_preprocessing(self) -> bool:
        return conf.lib.clang_isPreprocessing(self)

    def is_unexposed(self) -> bool:
        return conf.lib.clang_isUnexposed(self)

    @property
    def spelling(self) -> str:
        """Name libclang gives this kind, e.g. ``FunctionDecl``."""
        return conf.lib.clang_getCursorKindSpelling(self)

    # Declarations
    UNEXPOSED_DECL = 1
    STRUCT_DECL = 2
    UNION_DECL = 3
    CLASS_DECL = 4
    ENUM_DECL = 5
    FIELD_DECL = 6
    ENUM_CONSTANT_DECL = 7
    FUNCTION_DECL = 8
    VAR_DECL = 9
    PARM_DECL = 10
    OBJC_INTERFACE_DECL = 11
    OBJC_CATEGORY_DECL = 12
    OBJC_PROTOCOL_DECL = 13
    OBJC_PROPERTY_DECL = 14
    OBJC_IVAR_DECL = 15
    OBJC_INSTANCE_METHOD_DECL = 16
    OBJC_CLASS_METHOD_DECL = 17
    OBJC_IMPLEMENTATION_DECL = 18
    OBJC_CATEGORY_IMPL_DECL = 19
    TYPEDEF_DECL = 20
    CXX_METHOD = 21
    NAMESPACE = 22
    LINKAGE_SPEC = 23
    CONSTRUCTOR = 24
    DESTRUCTOR = 25
    CONVERSION_FUNCTION = 26
    TEMPLATE_TYPE_PARAMETER = 27
    TEMPLATE_NON_TYPE_PARAMETER = 28
    TEMPLATE_TEMPLATE_PARAMETER = 29
    FUNCTION_TEMPLATE = 30
    CLASS_TEMPLATE = 31
    CLASS_TEMPLATE_PARTIAL_SPECIALIZATION = 32
    NAMESPACE_ALIAS = 33
    USING_DIRECTIVE = 34
    USING_DECLARATION = 35
    TYPE_ALIAS_DECL = 36
    OBJC_SYNTHESIZE_DECL = 37
    OBJC_DYNAMIC_DECL = 38
    CXX_ACCESS_SPEC_DECL = 39

    # References
    OBJC_SUPER_CLASS_REF = 40
    OBJC_PROTOCOL_REF = 41
    OBJC_CLASS_REF = 42
    TYPE_REF = 43
    CXX_BASE_SPECIFIER = 44
    TEMPLATE_REF = 45
    NAMESPACE_REF = 46
    MEMBER_REF = 47
    LABEL_REF = 48
    OVERLOADED_DECL_REF = 49
    VARIABLE_REF = 50

    # Error conditions
    INVALID_FILE = 70
    NO_DECL_FOUND = 71
    NOT_IMPLEMENTED = 72
    INVALID_CODE = 73

    # Expressions
    UNEXPOSED_EXPR = 100
    DECL_REF_EXPR = 101
    MEMBER_REF_EXPR = 102
    CALL_EXPR = 103
    OBJC_MESSAGE_EXPR = 104
    BLOCK_EXPR = 105
    INTEGER_LITERAL = 106
    FLOATING_LITERAL = 107
    IMAGINARY_LITERAL = 108
    STRING_LITERAL = 109
    CHARACTER_LITERAL = 110
    PAREN_EXPR = 111
    UNARY_OPERATOR = 112
    ARRAY_SUBSCRIPT_EXPR = 113
    BINARY_OPERATOR = 114
    COMPOUND_ASSIGNMENT_OPERATOR = 115
    CONDITIONAL_OPERATOR = 116
    CSTYLE_CAST_EXPR = 117
    COMPOUND_LITERAL_EXPR = 118
    INIT_LIST_EXPR = 119
    ADDR_LABEL_EXPR = 120
    STMT_EXPR = 121
    GENERIC_SELECTION_EXPR = 122
    GNU_NULL_EXPR = 123
    CXX_STATIC_CAST_EXPR = 124
    CXX_DYNAMIC_CAST_EXPR = 125
    CXX_REINTERPRET_CAST_EXPR = 126
    CXX_CONST_CAST_EXPR = 127
    CXX_FUNCTIONAL_CAST_EXPR = 128
    CXX_TYPEID_EXPR = 129
    CXX_BOOL_LITERAL_EXPR = 130
    CXX_NULL_PTR_LITERAL_EXPR = 131
    CXX_THIS_EXPR = 132
    CXX_THROW_EXPR = 133
    CXX_NEW_EXPR = 134
    CXX_DELETE_EXPR = 135
    CXX_UNARY_EXPR = 136
    OBJC_STRING_LITERAL = 137
    OBJC_ENCODE_EXPR = 138
    OBJC_SELECTOR_EXPR = 139
    OBJC_PROTOCOL_EXPR = 140
    OBJC_BRIDGE_CAST_EXPR = 141
    PACK_EXPANSION_EXPR = 142
    SIZE_OF_PACK_EXPR = 143
    LAMBDA_EXPR = 144
    OBJ_BOOL_LITERAL_EXPR = 145
    OBJ_SELF_EXPR = 146
    OMP_ARRAY_SECTION_EXPR = 147
    OBJC_AVAILABILITY_CHECK_EXPR = 148
    FIXED_POINT_LITERAL = 149
    OMP_ARRAY_SHAPING_EXPR = 150
    OMP_ITERATOR_EXPR = 151
    CXX_ADDRSPACE_CAST_EXPR = 152
    CONCEPT_SPECIALIZATION_EXPR = 153
    REQUIRES_EXPR = 154
    CXX_PAREN_LIST_INIT_EXPR = 155
    PACK_INDEXING_EXPR = 156

    # Statements
    UNEXPOSED_STMT = 200
    LABEL_STMT = 201
    COMPOUND_STMT = 202
    CASE_STMT = 203
    DEFAULT_STMT = 204
    IF_STMT = 205
    SWITCH_STMT = 206
    WHILE_STMT = 207
    DO_STMT = 208
    FOR_STMT = 209
    GOTO_STMT = 210
    INDIRECT_GOTO_STMT = 211
    CONTINUE_STMT = 212
    BREAK_STMT = 213
    RETURN_STMT = 214
    ASM_STMT = 215
    OBJC_AT_TRY_STMT = 216
    OBJC_AT_CATCH_STMT = 217
    OBJC_AT_FINALLY_STMT = 218
    OBJC_AT_THROW_STMT = 219
    OBJC_AT_SYNCHRONIZED_STMT = 220
    OBJC_AUTORELEASE_POOL_STMT = 221
    OBJC_FOR_COLLECTION_STMT = 222
    CXX_CATCH_STMT = 223
    CXX_TRY_STMT = 224
    CXX_FOR_RANGE_STMT = 225
    SEH_TRY_STMT = 226
    SEH_EXCEPT_STMT = 227
    SEH_FINALLY_STMT = 228
    MS_ASM_STMT = 229
    NULL_STMT = 230
    DECL_STMT = 231
    OMP_PARALLEL_DIRECTIVE = 232
    OMP_SIMD_DIRECTIVE = 233
    OMP_FOR_DIRECTIVE = 234
    OMP_SECTIONS_DIRECTIVE = 235
    OMP_SECTION_DIRECTIVE = 236
    OMP_SINGLE_DIRECTIVE = 237
    OMP_PARALLEL_FOR_DIRECTIVE = 238
    OMP_PARALLEL_SECTIONS_DIRECTIVE = 239
    OMP_TASK_DIRECTIVE = 240
    OMP_MASTER_DIRECTIVE = 241
    OMP_CRITICAL_DIRECTIVE = 242
    OMP_TASKYIELD_DIRECTIVE = 243
    OMP_BARRIER_DIRECTIVE = 244
    OMP_TASKWAIT_DIRECTIVE = 245
    OMP_FLUSH_DIRECTIVE = 246
    SEH_LEAVE_STMT = 247
    OMP_ORDERED_DIRECTIVE = 248
    OMP_ATOMIC_DIRECTIVE = 249
    OMP_FOR_SIMD_DIRECTIVE = 250
    OMP_PARALLELFORSIMD_DIRECTIVE = 251
    OMP_TARGET_DIRECTIVE = 252
    OMP_TEAMS_DIRECTIVE = 253
    OMP_TASKGROUP_DIRECTIVE = 254
    OMP_CANCELLATION_POINT_DIRECTIVE = 255
    OMP_CANCEL_DIRECTIVE = 256
    OMP_TARGET_DATA_DIRECTIVE = 257
    OMP_TASK_LOOP_DIRECTIVE = 258
    OMP_TASK_LOOP_SIMD_DIRECTIVE = 259
    OMP_DISTRIBUTE_DIRECTIVE = 260
    OMP_TARGET_ENTER_DATA_DIRECTIVE = 261
    OMP_TARGET_EXIT_DATA_DIRECTIVE = 262
    OMP_TARGET_PARALLEL_DIRECTIVE = 263
    OMP_TARGET_PARALLELFOR_DIRECTIVE = 264
    OMP_TARGET_UPDATE_DIRECTIVE = 265
    OMP_DISTRIBUTE_PARALLELFOR_DIRECTIVE = 266
    OMP_DISTRIBUTE_PARALLEL_FOR_SIMD_DIRECTIVE = 267
    OMP_DISTRIBUTE_SIMD_DIRECTIVE = 268
    OMP_TARGET_PARALLEL_FOR_SIMD_DIRECTIVE = 269
    OMP_TARGET_SIMD_DIRECTIVE = 270
    OMP_TEAMS_DISTRIBUTE_DIRECTIVE = 271
    OMP_TEAMS_DISTRIBUTE_SIMD_DIRECTIVE = 272
    OMP_TEAMS_DISTRIBUTE_PARALLEL_FOR_SIMD_DIRECTIVE = 273
    OMP_TEAMS_DISTRIBUTE_PARALLEL_FOR_DIRECTIVE = 274
    OMP_TARGET_TEAMS_DIRECTIVE = 275
    OMP_TARGET_TEAMS_DISTRIBUTE_DIRECTIVE = 276
    OMP_TARGET_TEAMS_DISTRIBUTE_PARALLEL_FOR_DIRECTIVE = 277
    OMP_TARGET_TEAMS_DISTRIBUTE_PARALLEL_FOR_SIMD_DIRECTIVE = 278
    OMP_TARGET_TEAMS_DISTRIBUTE_SIMD_DIRECTIVE = 279
    BUILTIN_BIT_CAST_EXPR = 280
    OMP_MASTER_TASK_LOOP_DIRECTIVE = 281
    OMP_PARALLEL_MASTER_TASK_LOOP_DIRECTIVE = 282
    OMP_MASTER_TASK_LOOP_SIMD_DIRECTIVE = 283
    OMP_PARALLEL_MASTER_TASK_LOOP_SIMD_DIRECTIVE = 284
    OMP_PARALLEL_MASTER_DIRECTIVE = 285
    OMP_DEPOBJ_DIRECTIVE = 286
    OMP_SCAN_DIRECTIVE = 287
    OMP_TILE_DIRECTIVE = 288
    OMP_CANONICAL_LOOP = 289
    OMP_INTEROP_DIRECTIVE = 290
    OMP_DISPATCH_DIRECTIVE = 291
    OMP_MASKED_DIRECTIVE = 292
    OMP_UNROLL_DIRECTIVE = 293
    OMP_META_DIRECTIVE = 294
    OMP_GENERIC_LOOP_DIRECTIVE = 295
    OMP_TEAMS_GENERIC_LOOP_DIRECTIVE = 296
    OMP_TARGET_TEAMS_GENERIC_LOOP_DIRECTIVE = 297
    OMP_PARALLEL_GENERIC_LOOP_DIRECTIVE = 298
    OMP_TARGET_PARALLEL_GENERIC_LOOP_DIRECTIVE = 299
    OMP_PARALLEL_MASKED_DIRECTIVE = 300
    OMP_MASKED_TASK_LOOP_DIRECTIVE = 301
    OMP_MASKED_TASK_LOOP_SIMD_DIRECTIVE = 302
    OMP_PARALLEL_MASKED_TASK_LOOP_DIRECTIVE = 303
    OMP_PARALLEL_MASKED_TASK_LOOP_SIMD_DIRECTIVE = 304
    OMP_ERROR_DIRECTIVE = 305
    OMP_SCOPE_DIRECTIVE = 306
    OPEN_ACC_COMPUTE_DIRECTIVE = 320

    # Translation unit
    TRANSLATION_UNIT = 350

    # Attributes
    UNEXPOSED_ATTR = 400
    IB_ACTION_ATTR = 401
    IB_OUTLET_ATTR = 402
    IB_OUTLET_COLLECTION_ATTR = 403
    CXX_FINAL_ATTR = 404
    CXX_OVERRIDE_ATTR = 405
    ANNOTATE_ATTR = 406
    ASM_LABEL_ATTR = 407
    PACKED_ATTR = 408
    PURE_ATTR = 409
    CONST_ATTR = 410
    NODUPLICATE_ATTR = 411
    CUDACONSTANT_ATTR = 412
    CUDADEVICE_ATTR = 413
    CUDAGLOBAL_ATTR = 414
    CUDAHOST_ATTR = 415
    CUDASHARED_ATTR = 416
    VISIBILITY_ATTR = 417
    DLLEXPORT_ATTR = 418
    DLLIMPORT_ATTR = 419
    NS_RETURNS_RETAINED = 420
    NS_RETURNS_NOT_RETAINED = 421
    NS_RETURNS_AUTORELEASED = 422
    NS_CONSUMES_SELF = 423
    NS_CONSUMED = 424
    OBJC_EXCEPTION = 425
    OBJC_NSOBJECT = 426
    OBJC_INDEPENDENT_CLASS = 427
    OBJC_PRECISE_LIFETIME = 428
    OBJC_RETURNS_INNER_POINTER = 429
    OBJC_REQUIRES_SUPER = 430
    OBJC_ROOT_CLASS = 431
    OBJC_SUBCLASSING_RESTRICTED = 432
    OBJC_EXPLICIT_PROTOCOL_IMPL = 433
    OBJC_DESIGNATED_INITIALIZER = 434
    OBJC_RUNTIME_VISIBLE = 435
    OBJC_BOXABLE = 436
    FLAG_ENUM = 437
    CONVERGENT_ATTR = 438
    WARN_UNUSED_ATTR = 439
    WARN_UNUSED_RESULT_ATTR = 440
    ALIGNED_ATTR = 441

    # Preprocessing
    PREPROCESSING_DIRECTIVE = 500
    MACRO_DEFINITION = 501
    MACRO_INSTANTIATION = 502
    INCLUSION_DIRECTIVE = 503

    # Extra declarations
    MODULE_IMPORT_DECL = 600
    TYPE_ALIAS_TEMPLATE_DECL = 601
    STATIC_ASSERT = 602
    FRIEND_DECL = 603
    CONCEPT_DECL = 604

    # Overload candidates
    OVERLOAD_CANDIDATE = 700


def _is_kind(result, fn, args) -> bool:
    return bool(result)


FUNCTIONS = [
    ("clang_isDeclaration", [CursorKind], c_uint, _is_kind),
    ("clang_isReference", [CursorKind], c_uint, _is_kind),
    ("clang_isExpression", [CursorKind], c_uint, _is_kind),
    ("clang_isStatement", [CursorKind], c_uint, _is_kind),
    ("clang_isAttribute", [CursorKind], c_uint, _is_kind),
    ("clang_isInvalid", [CursorKind], c_uint, _is_kind),
    ("clang_isTranslationUnit", [CursorKind], c_uint, _is_kind),
    ("clang_isPreprocessing", [CursorKind], c_uint, _is_kind),
    ("clang_isUnexposed", [CursorKind], c_uint, _is_kind),
    ("clang_getCursorKindSpelling", [CursorKind], CXString, CXString.from_result),
]
