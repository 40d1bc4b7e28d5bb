"""Tests for the cyclomatic complexity calculator."""

from complexity_insight.metrics import cyclomatic_complexity
from complexity_insight.metrics import nodes as n

POS = n.Position(1, 1)


class TestBaseline:
    def test_empty_function(self, tb):
        assert cyclomatic_complexity(tb.func("f")) == 1

    def test_straight_line_code(self, tb):
        x = tb.bound("x")
        decl = tb.func(
            "f",
            n.AssignStmt((x,), ":=", (tb.lit("1"),)),
            n.ExprStmt(tb.call(tb.free("println"), tb.bound("x"))),
            n.ReturnStmt(keyword=POS),
        )
        assert cyclomatic_complexity(decl) == 1


class TestConditionals:
    def test_if_without_else(self, tb):
        assert cyclomatic_complexity(tb.func("f", tb.if_(tb.free("true")))) == 2

    def test_if_else(self, tb):
        stmt = tb.if_(tb.free("false"), orelse=tb.block())
        assert cyclomatic_complexity(tb.func("f", stmt)) == 3

    def test_if_else_with_or_condition(self, tb):
        cond = n.BinaryExpr(tb.bound("a"), "||", tb.bound("b"))
        stmt = tb.if_(cond, orelse=tb.block())
        assert cyclomatic_complexity(tb.func("f", stmt)) == 4

    def test_else_if_chain_counts_each_condition(self, tb):
        tail = tb.if_(tb.free("c"))
        middle = tb.if_(tb.free("b"), orelse=tail)
        head = tb.if_(tb.free("a"), orelse=middle)
        assert cyclomatic_complexity(tb.func("f", head)) == 4

    def test_logical_and(self, tb):
        cond = n.BinaryExpr(
            n.BinaryExpr(tb.bound("a"), "&&", tb.bound("b")), "&&", tb.bound("c")
        )
        assert cyclomatic_complexity(tb.func("f", tb.if_(cond))) == 4

    def test_other_binary_operators_do_not_count(self, tb):
        cond = n.BinaryExpr(tb.bound("a"), "==", tb.bound("b"))
        assert cyclomatic_complexity(tb.func("f", tb.if_(cond))) == 2


def _golden_loop(tb, else_ifs: int) -> n.FuncDecl:
    # for { if {} else if {} ... else if { switch with 3 cases } else {} }
    inner = tb.if_(tb.free("false"), tb.switch(tb.bound("n"), 2, default=True), orelse=tb.block())
    chain = inner
    for _ in range(else_ifs - 1):
        chain = tb.if_(tb.free("false"), orelse=chain)
    head = tb.if_(tb.free("false"), orelse=chain)
    return tb.func("f2", tb.for_(head, cond=tb.free("true")))


class TestGoldenScenarios:
    def test_three_else_ifs(self, tb):
        assert cyclomatic_complexity(_golden_loop(tb, else_ifs=3)) == 8

    def test_four_else_ifs(self, tb):
        assert cyclomatic_complexity(_golden_loop(tb, else_ifs=4)) == 9

    def test_switch_is_flat(self, tb):
        decl = tb.func("f4", tb.switch(tb.bound("n"), 10))
        assert cyclomatic_complexity(decl) == 2


class TestLoopsAndConcurrency:
    def test_range(self, tb):
        stmt = n.RangeStmt(
            tb.bound("i"), None, ":=", tb.bound("xs"), tb.block(), keyword=POS
        )
        assert cyclomatic_complexity(tb.func("f", stmt)) == 2

    def test_select(self, tb):
        stmt = n.SelectStmt(tb.block(n.CommClause(None, colon=POS)), keyword=POS)
        assert cyclomatic_complexity(tb.func("f", stmt)) == 2

    def test_go_statement_adds_two(self, tb):
        stmt = n.GoStmt(tb.call(tb.bound("worker")), keyword=POS)
        assert cyclomatic_complexity(tb.func("f", stmt)) == 3

    def test_send_and_receive(self, tb):
        send = n.SendStmt(tb.bound("ch"), tb.lit("1"), arrow=POS)
        recv = n.ExprStmt(n.UnaryExpr("<-", tb.bound("ch")))
        assert cyclomatic_complexity(tb.func("f", send, recv)) == 3

    def test_type_switch_does_not_count(self, tb):
        assign = n.ExprStmt(n.TypeAssertExpr(tb.bound("v"), None, lparen=POS, rparen=POS))
        stmt = n.TypeSwitchStmt(None, assign, tb.block(), keyword=POS)
        assert cyclomatic_complexity(tb.func("f", stmt)) == 1

    def test_closure_body_counts_toward_enclosing_function(self, tb):
        closure = n.FuncLit(
            n.FuncType(n.FieldList(opening=POS, closing=POS), keyword=POS),
            tb.block(tb.if_(tb.free("true"))),
        )
        decl = tb.func("f", n.ExprStmt(tb.call(closure)))
        assert cyclomatic_complexity(decl) == 2
