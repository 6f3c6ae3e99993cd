"""Tests for tokenization and token annotation."""

import unittest

from clangbind import CursorKind, DisposedHandleError, SourceRange, TokenKind
from clangbind.tests.util import get_cursor, get_tu, requires_libclang


@requires_libclang
class TestTokens(unittest.TestCase):
    def setUp(self) -> None:
        self.tu = get_tu("int foo = 10;\n// trailing\n")
        self.addCleanup(self.tu.dispose)

    def _full_extent(self) -> SourceRange:
        f = self.tu.file("t.c")
        return SourceRange.from_locations(
            self.tu.location(f, 1, 1), self.tu.location(f, 2, 12)
        )

    def test_tokenize(self) -> None:
        with self.tu.tokenize(self._full_extent()) as tokens:
            spellings = [t.spelling for t in tokens]
            kinds = [t.kind for t in tokens]
        self.assertEqual(spellings[:5], ["int", "foo", "=", "10", ";"])
        self.assertEqual(
            kinds[:5],
            [
                TokenKind.KEYWORD,
                TokenKind.IDENTIFIER,
                TokenKind.PUNCTUATION,
                TokenKind.LITERAL,
                TokenKind.PUNCTUATION,
            ],
        )
        self.assertIn(TokenKind.COMMENT, kinds)

    def test_token_location_and_extent(self) -> None:
        with self.tu.tokenize(self._full_extent()) as tokens:
            foo = tokens[1]
            self.assertEqual((foo.location.line, foo.location.column), (1, 5))
            self.assertEqual(foo.extent.start.column, 5)
            self.assertEqual(foo.extent.end.column, 8)
            self.assertEqual(self.tu.token_spelling(foo), "foo")
            self.assertEqual(self.tu.token_location(foo), foo.location)
            self.assertEqual(self.tu.token_extent(foo), foo.extent)

    def test_index_out_of_range(self) -> None:
        with self.tu.tokenize(self._full_extent()) as tokens:
            with self.assertRaises(IndexError):
                tokens[len(tokens)]
            with self.assertRaises(IndexError):
                tokens[-1]

    def test_tokens_outlive_array(self) -> None:
        tokens = self.tu.tokenize(self._full_extent())
        first = tokens[0]
        tokens.dispose()
        self.assertEqual(first.spelling, "int")
        with self.assertRaises(DisposedHandleError):
            len(tokens)
        tokens.dispose()

    def test_annotate(self) -> None:
        with self.tu.tokenize(get_cursor(self.tu, "foo").extent) as tokens:
            cursors = tokens.annotate()
            self.assertEqual(len(cursors), len(tokens))
        self.assertEqual(cursors[1].kind, CursorKind.VAR_DECL)
        self.assertEqual(cursors[1].spelling, "foo")
        self.assertEqual(cursors[3].kind, CursorKind.INTEGER_LITERAL)
        self.assertIs(cursors[1].translation_unit, self.tu)

    def test_get_tokens_by_locations(self) -> None:
        f = self.tu.file("t.c")
        tokens = self.tu.get_tokens(
            locations=(self.tu.location(f, 1, 1), self.tu.location(f, 1, 8))
        )
        self.assertEqual([t.spelling for t in tokens][:2], ["int", "foo"])

    def test_empty_range(self) -> None:
        with self.tu.tokenize(SourceRange.null()) as tokens:
            self.assertEqual(len(tokens), 0)
            self.assertEqual(tokens.annotate(), [])


if __name__ == "__main__":
    unittest.main()
