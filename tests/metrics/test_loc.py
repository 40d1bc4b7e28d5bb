"""Tests for line counting."""

import pytest

from complexity_insight.exceptions import MissingPositionError
from complexity_insight.metrics import count_decl_loc, count_loc
from complexity_insight.metrics import nodes as n


def span(start_line, end_line):
    return n.Span(n.Position(start_line, 1), n.Position(end_line, 2))


class TestCountLoc:
    def test_single_line(self, tb):
        assert count_loc(tb.func("f", start=4)) == 1

    def test_multi_line(self, tb):
        assert count_loc(tb.func("f", start=3, end=7)) == 5

    def test_missing_span_raises(self):
        with pytest.raises(MissingPositionError):
            count_loc(n.Ident("x"))


class TestCountDeclLoc:
    def test_no_declarations(self, tb):
        assert count_decl_loc(tb.func("f", start=1, end=3)) == 0

    def test_value_specs_and_short_declarations(self, tb):
        const = n.ValueSpec((tb.bound("aa"),), None, (tb.lit("1"),), span=span(2, 5))
        short = n.AssignStmt((tb.bound("x"),), ":=", (tb.lit("0"),), span=span(6, 6))
        decl = tb.func("f", n.DeclStmt(n.GenDecl("const", (const,))), short, start=1, end=7)
        assert count_decl_loc(decl) == 5

    def test_plain_assignment_is_ignored(self, tb):
        assign = n.AssignStmt((tb.bound("x"),), "=", (tb.lit("0"),), span=span(2, 2))
        assert count_decl_loc(tb.func("f", assign, start=1, end=3)) == 0

    def test_declaration_without_span_raises(self, tb):
        spec = n.ValueSpec((tb.bound("a"),), tb.free("int"))
        decl = tb.func("f", n.DeclStmt(n.GenDecl("var", (spec,))))
        with pytest.raises(MissingPositionError):
            count_decl_loc(decl)
