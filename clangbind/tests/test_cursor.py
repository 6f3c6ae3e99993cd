"""Tests for cursors and the visitor passthrough."""

import os
import tempfile
import unittest
from pathlib import Path

from clangbind import (
    AccessSpecifier,
    AvailabilityKind,
    ChildVisitResult,
    Cursor,
    CursorKind,
    CursorSet,
    LanguageKind,
    LinkageKind,
    Result,
    TranslationUnit,
    TranslationUnitFlags,
    TypeKind,
)
from clangbind.tests.util import get_cursor, get_cursors, get_tu, requires_libclang

CHILDREN_TEST = """\
struct s0 {
  int a;
  int b;
};

struct s1;

void f0(int a0, int a1) {
  int l0, l1;

  if (a0)
    return;

  for (;;) {
    break;
  }
}
"""

PARENT_TEST = """\
class C {
    void f();
};

void C::f() { }
"""


@requires_libclang
class TestVisit(unittest.TestCase):
    def setUp(self) -> None:
        self.tu = get_tu(CHILDREN_TEST)
        self.addCleanup(self.tu.dispose)

    def test_get_children(self) -> None:
        it = self.tu.cursor.get_children()
        tu_nodes = list(it)

        self.assertEqual(len(tu_nodes), 3)
        for cursor in tu_nodes:
            self.assertIsNotNone(cursor.translation_unit)

        self.assertNotEqual(tu_nodes[0], tu_nodes[1])
        self.assertEqual(tu_nodes[0].kind, CursorKind.STRUCT_DECL)
        self.assertEqual(tu_nodes[0].spelling, "s0")
        self.assertEqual(tu_nodes[0].is_definition(), True)
        self.assertEqual(tu_nodes[0].location.file.name, "t.c")
        self.assertEqual(tu_nodes[0].location.line, 1)
        self.assertEqual(tu_nodes[0].location.column, 8)
        self.assertNotEqual(hash(tu_nodes[0]), 0)

        s0_nodes = list(tu_nodes[0].get_children())
        self.assertEqual(len(s0_nodes), 2)
        self.assertEqual(s0_nodes[0].kind, CursorKind.FIELD_DECL)
        self.assertEqual(s0_nodes[0].spelling, "a")
        self.assertEqual(s0_nodes[0].type.kind, TypeKind.INT)
        self.assertEqual(s0_nodes[1].kind, CursorKind.FIELD_DECL)
        self.assertEqual(s0_nodes[1].spelling, "b")

        self.assertEqual(tu_nodes[1].kind, CursorKind.STRUCT_DECL)
        self.assertEqual(tu_nodes[1].spelling, "s1")
        self.assertFalse(tu_nodes[1].is_definition())

        self.assertEqual(tu_nodes[2].kind, CursorKind.FUNCTION_DECL)
        self.assertEqual(tu_nodes[2].spelling, "f0")
        self.assertEqual(tu_nodes[2].display_name, "f0(int, int)")
        self.assertTrue(tu_nodes[2].is_definition())

    def test_visit_passes_parent(self) -> None:
        seen = []

        def visitor(child, parent):
            seen.append((child.spelling, parent.kind))
            return ChildVisitResult.CONTINUE

        broken = self.tu.cursor.visit(visitor)
        self.assertFalse(broken)
        self.assertEqual(
            seen,
            [
                ("s0", CursorKind.TRANSLATION_UNIT),
                ("s1", CursorKind.TRANSLATION_UNIT),
                ("f0", CursorKind.TRANSLATION_UNIT),
            ],
        )

    def test_visit_recurse(self) -> None:
        fields = []

        def visitor(child, parent):
            if child.kind == CursorKind.FIELD_DECL:
                fields.append((parent.spelling, child.spelling))
            if child.kind == CursorKind.STRUCT_DECL:
                return ChildVisitResult.RECURSE
            return ChildVisitResult.CONTINUE

        self.tu.cursor.visit(visitor)
        self.assertEqual(fields, [("s0", "a"), ("s0", "b")])

    def test_visit_break(self) -> None:
        seen = []

        def visitor(child, parent):
            seen.append(child.spelling)
            return ChildVisitResult.BREAK

        self.assertTrue(self.tu.cursor.visit(visitor))
        self.assertEqual(seen, ["s0"])

    def test_visit_accepts_plain_integers(self) -> None:
        count = []

        def visitor(child, parent):
            count.append(child)
            return 2

        self.assertFalse(self.tu.cursor.visit(visitor))
        self.assertGreater(len(count), 3)

    def test_visitor_exception_propagates(self) -> None:
        seen = []

        def visitor(child, parent):
            seen.append(child.spelling)
            raise KeyError(child.spelling)

        with self.assertRaises(KeyError):
            self.tu.cursor.visit(visitor)
        self.assertEqual(seen, ["s0"])

    def test_invalid_visitor_result(self) -> None:
        with self.assertRaises(TypeError):
            self.tu.cursor.visit(lambda child, parent: None)
        with self.assertRaises(ValueError):
            self.tu.cursor.visit(lambda child, parent: 7)

    def test_walk_preorder(self) -> None:
        kinds = [c.kind for c in self.tu.cursor.walk_preorder()]
        self.assertEqual(kinds[0], CursorKind.TRANSLATION_UNIT)
        self.assertIn(CursorKind.FOR_STMT, kinds)
        self.assertIn(CursorKind.BREAK_STMT, kinds)
        self.assertLess(kinds.index(CursorKind.IF_STMT), kinds.index(CursorKind.FOR_STMT))

    def test_walk_statement_expression(self) -> None:
        tu = get_tu("int f(void) { return ({ int x = 1; x; }); }\n")
        kinds = [c.kind for c in tu.cursor.walk_preorder()]
        self.assertIn(CursorKind.STMT_EXPR, kinds)
        self.assertTrue(CursorKind.STMT_EXPR.is_expression())
        self.assertEqual(CursorKind.STMT_EXPR.spelling, "StmtExpr")
        tu.dispose()


@requires_libclang
class TestCursorProperties(unittest.TestCase):
    def test_null_cursor(self) -> None:
        null = Cursor.null()
        self.assertTrue(null.is_null())
        self.assertEqual(null, Cursor.null())
        self.assertEqual(repr(null), "<Cursor null>")

        tu = get_tu("int x;")
        self.assertTrue(get_cursor(tu, "x").semantic_parent.semantic_parent.is_null())
        tu.dispose()

    def test_semantic_and_lexical_parent(self) -> None:
        tu = get_tu(PARENT_TEST, lang="cpp")
        curs = get_cursors(tu, "f")
        decl = get_cursor(tu, "C")
        self.assertEqual(len(curs), 2)
        self.assertEqual(curs[0].semantic_parent, curs[1].semantic_parent)
        self.assertEqual(curs[0].semantic_parent, decl)
        self.assertEqual(curs[0].lexical_parent, decl)
        self.assertEqual(curs[1].lexical_parent, tu.cursor)
        tu.dispose()

    def test_canonical_and_definition(self) -> None:
        source = "struct X; struct X; struct X { int member; };"
        tu = get_tu(source)
        cursors = [c for c in tu.cursor.get_children() if c.spelling == "X"]
        self.assertEqual(len(cursors), 3)
        self.assertEqual(cursors[1].canonical, cursors[2].canonical)
        self.assertEqual(cursors[0].definition, cursors[2])
        tu.dispose()

    def test_referenced(self) -> None:
        tu = get_tu("void foo(); void bar() { foo(); }")
        foo = get_cursor(tu, "foo")
        calls = [c for c in tu.cursor.walk_preorder() if c.kind == CursorKind.CALL_EXPR]
        self.assertEqual(len(calls), 1)
        self.assertEqual(calls[0].referenced.spelling, foo.spelling)
        self.assertEqual(calls[0].referenced, foo)
        tu.dispose()

    def test_usr_and_linkage(self) -> None:
        tu = get_tu("static int hidden; int shown; void f(void) { int local; }")
        self.assertEqual(get_cursor(tu, "shown").usr, "c:@shown")
        self.assertEqual(get_cursor(tu, "hidden").linkage, LinkageKind.INTERNAL)
        self.assertEqual(get_cursor(tu, "shown").linkage, LinkageKind.EXTERNAL)
        self.assertEqual(get_cursor(tu, "local").linkage, LinkageKind.NO_LINKAGE)
        tu.dispose()

    def test_language_and_availability(self) -> None:
        tu = get_tu("void f(void);")
        f = get_cursor(tu, "f")
        self.assertEqual(f.language, LanguageKind.C)
        self.assertEqual(f.availability, AvailabilityKind.AVAILABLE)
        tu.dispose()

        tu = get_tu("class A { A(const A&) = delete; };", lang="cpp")
        ctor = [c for c in get_cursor(tu, "A").get_children() if c.kind == CursorKind.CONSTRUCTOR]
        self.assertEqual(ctor[0].availability, AvailabilityKind.NOT_AVAILABLE)
        tu.dispose()

    def test_platform_availability(self) -> None:
        tu = get_tu('void f(void) __attribute__((deprecated("use g")));')
        with get_cursor(tu, "f").platform_availability() as info:
            self.assertTrue(info.always_deprecated)
            self.assertEqual(info.deprecated_message, "use g")
            self.assertFalse(info.always_unavailable)
        tu.dispose()

    def test_enum_values(self) -> None:
        tu = get_tu("enum E : unsigned long long { A = 1, B = 0xFFFFFFFFFFFFFFFF };", lang="cpp")
        enum = get_cursor(tu, "E")
        self.assertEqual(enum.enum_decl_integer_type.kind, TypeKind.ULONGLONG)
        self.assertEqual(get_cursor(tu, "A").enum_constant_decl_value, 1)
        self.assertEqual(
            get_cursor(tu, "B").enum_constant_decl_unsigned_value, 0xFFFFFFFFFFFFFFFF
        )
        tu.dispose()

    def test_typedef_underlying_type(self) -> None:
        tu = get_tu("typedef int foo;")
        self.assertEqual(get_cursor(tu, "foo").typedef_decl_underlying_type.kind, TypeKind.INT)
        tu.dispose()

    def test_arguments(self) -> None:
        tu = get_tu("void f(int i, double d); int x;")
        f = get_cursor(tu, "f")
        self.assertEqual(f.num_arguments, 2)
        self.assertEqual([a.spelling for a in f.get_arguments()], ["i", "d"])
        self.assertEqual(f.argument(1).type.kind, TypeKind.DOUBLE)
        self.assertEqual(f.result_type.kind, TypeKind.VOID)
        self.assertEqual(get_cursor(tu, "x").num_arguments, -1)
        self.assertEqual(list(get_cursor(tu, "x").get_arguments()), [])
        tu.dispose()

    def test_bit_fields(self) -> None:
        tu = get_tu("struct S { int a : 3; int b; };")
        a, b = get_cursor(tu, "a"), get_cursor(tu, "b")
        self.assertTrue(a.is_bit_field)
        self.assertEqual(a.field_decl_bit_width, 3)
        self.assertFalse(b.is_bit_field)
        self.assertEqual(b.offset_of_field(), 32)
        tu.dispose()

    def test_access_and_methods(self) -> None:
        source = """\
class Base {
public:
  virtual void pure() = 0;
  static void s();
protected:
  int p;
};
class Derived : public virtual Base {
  void pure() override;
};
"""
        tu = get_tu(source, lang="cpp")
        base_pure, derived_pure = get_cursors(tu, "pure")
        self.assertTrue(base_pure.cxx_method_is_pure_virtual())
        self.assertTrue(base_pure.cxx_method_is_virtual())
        self.assertTrue(get_cursor(tu, "s").cxx_method_is_static())
        self.assertEqual(get_cursor(tu, "p").access_specifier, AccessSpecifier.PROTECTED)
        self.assertEqual(derived_pure.access_specifier, AccessSpecifier.PRIVATE)

        bases = [
            c for c in get_cursor(tu, "Derived").get_children()
            if c.kind == CursorKind.CXX_BASE_SPECIFIER
        ]
        self.assertTrue(bases[0].is_virtual_base)

        with derived_pure.overridden_cursors() as overridden:
            self.assertEqual(len(overridden), 1)
            self.assertEqual(overridden[0], base_pure)
        tu.dispose()

    def test_template_kinds(self) -> None:
        tu = get_tu("template <typename T> struct Box { T v; };", lang="cpp")
        template = get_cursor(tu, "Box")
        self.assertEqual(template.kind, CursorKind.CLASS_TEMPLATE)
        self.assertEqual(template.template_cursor_kind, CursorKind.STRUCT_DECL)
        tu.dispose()

    def test_comments(self) -> None:
        source = "/// Brief text.\n///\n/// More detail.\nint documented;\nint plain;\n"
        tu = get_tu(source)
        documented = get_cursor(tu, "documented")
        self.assertEqual(documented.brief_comment_text, "Brief text.")
        self.assertIn("More detail.", documented.raw_comment_text)
        self.assertFalse(documented.comment_range.is_null())
        self.assertFalse(documented.parsed_comment.is_null())
        self.assertEqual(get_cursor(tu, "plain").raw_comment_text, "")
        tu.dispose()

    def test_variadic(self) -> None:
        tu = get_tu("void f(int, ...); void g(int);")
        self.assertTrue(get_cursor(tu, "f").is_variadic)
        self.assertFalse(get_cursor(tu, "g").is_variadic)
        tu.dispose()

    def test_extent(self) -> None:
        tu = get_tu("int foo(void);\nint bar = 1;\n")
        extent = get_cursor(tu, "bar").extent
        self.assertEqual((extent.start.line, extent.start.column), (2, 1))
        self.assertEqual((extent.end.line, extent.end.column), (2, 12))
        tu.dispose()

    def test_included_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            header = os.path.join(tmpdir, "inc.h")
            main = os.path.join(tmpdir, "main.c")
            Path(header).write_text("#define INC 1\n", encoding="utf-8")
            Path(main).write_text('#include "inc.h"\nint x = INC;\n', encoding="utf-8")
            tu = TranslationUnit.from_source(
                main, options=TranslationUnitFlags.DETAILED_PREPROCESSING_RECORD
            )
            inclusions = [
                c for c in tu.cursor.get_children()
                if c.kind == CursorKind.INCLUSION_DIRECTIVE
            ]
            self.assertEqual(len(inclusions), 1)
            self.assertEqual(inclusions[0].spelling, "inc.h")
            self.assertTrue(inclusions[0].included_file.name.endswith("inc.h"))
            tu.dispose()

    def test_find_references_in_file(self) -> None:
        source = "int counter;\nvoid bump(void) { counter++; counter += 2; }\n"
        tu = get_tu(source)
        counter = get_cursor(tu, "counter")
        found = []

        def visitor(cursor, extent):
            found.append(extent.start.line)
            return ChildVisitResult.CONTINUE

        result = counter.find_references_in_file(tu.file("t.c"), visitor)
        self.assertEqual(result, Result.SUCCESS)
        self.assertEqual(found.count(2), 2)

        first_only = []

        def stop(cursor, extent):
            first_only.append(cursor)
            return ChildVisitResult.BREAK

        result = counter.find_references_in_file(tu.file("t.c"), stop)
        self.assertEqual(result, Result.VISIT_BREAK)
        self.assertEqual(len(first_only), 1)
        tu.dispose()

    def test_find_references_rejects_recurse(self) -> None:
        tu = get_tu("int g;\nvoid use(void) { g = g + g; }\n")
        g = get_cursor(tu, "g")
        seen = []

        def visitor(cursor, extent):
            seen.append(cursor.spelling)
            return ChildVisitResult.RECURSE

        with self.assertRaises(ValueError):
            g.find_references_in_file(tu.file("t.c"), visitor)
        self.assertEqual(len(seen), 1)
        with self.assertRaises(ValueError):
            g.find_references_in_file(tu.file("t.c"), lambda cursor, extent: 2)
        tu.dispose()


@requires_libclang
class TestCursorSet(unittest.TestCase):
    def test_insert_and_contains(self) -> None:
        tu = get_tu("int a; int b;")
        a, b = get_cursor(tu, "a"), get_cursor(tu, "b")
        with CursorSet() as cursors:
            self.assertTrue(cursors.insert(a))
            self.assertFalse(cursors.insert(a))
            self.assertIn(a, cursors)
            self.assertNotIn(b, cursors)
        self.assertTrue(cursors.disposed)
        tu.dispose()


if __name__ == "__main__":
    unittest.main()
