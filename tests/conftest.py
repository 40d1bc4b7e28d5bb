"""Shared test fixtures for Complexity Insight tests."""

from pathlib import Path

import pytest

from complexity_insight.metrics import BindingTable, SourceFile
from complexity_insight.metrics import nodes as n
from complexity_insight.scanning.go_lexicon import GO_CLASSIFIER

FIXTURES = Path(__file__).parent / "fixtures"

# Any position marks a token as present; the calculators never compare them.
POS = n.Position(1, 1)


def span(start_line: int, end_line: int, column: int = 1) -> n.Span:
    return n.Span(n.Position(start_line, column), n.Position(end_line, column + 1))


class TreeBuilder:
    """Builds syntax nodes and records identifier bindings as it goes."""

    def __init__(self):
        self.bindings = BindingTable()

    # -- identifiers -------------------------------------------------------

    def bound(self, name: str) -> n.Ident:
        ident = n.Ident(name)
        self.bindings.bind(ident, True)
        return ident

    def free(self, name: str) -> n.Ident:
        ident = n.Ident(name)
        self.bindings.bind(ident, False)
        return ident

    def lit(self, value: str, kind: str = "INT") -> n.BasicLit:
        return n.BasicLit(kind, value)

    # -- statements --------------------------------------------------------

    def block(self, *stmts) -> n.BlockStmt:
        return n.BlockStmt(tuple(stmts), lbrace=POS, rbrace=POS)

    def if_(self, cond, *stmts, orelse=None) -> n.IfStmt:
        return n.IfStmt(None, cond, self.block(*stmts), orelse, keyword=POS)

    def for_(self, *stmts, cond=None) -> n.ForStmt:
        return n.ForStmt(None, cond, None, self.block(*stmts), keyword=POS)

    def switch(self, tag, case_count: int, default: bool = False) -> n.SwitchStmt:
        clauses = [n.CaseClause((self.lit(str(i)),), colon=POS) for i in range(case_count)]
        if default:
            clauses.append(n.CaseClause(None, colon=POS))
        return n.SwitchStmt(None, tag, self.block(*clauses), keyword=POS)

    def call(self, fun, *args) -> n.CallExpr:
        return n.CallExpr(fun, tuple(args), lparen=POS, rparen=POS)

    # -- declarations ------------------------------------------------------

    def func(self, name: str, *stmts, start: int = 1, end=None, recv=None) -> n.FuncDecl:
        signature = n.FuncType(n.FieldList(opening=POS, closing=POS), keyword=POS)
        return n.FuncDecl(
            recv,
            n.Ident(name),
            signature,
            self.block(*stmts),
            span=span(start, start if end is None else end),
        )

    def source(self, *decls, path: str = "a.go") -> SourceFile:
        return SourceFile(
            path=path,
            root=n.File(n.Ident("a"), tuple(decls)),
            classifier=GO_CLASSIFIER,
            resolver=self.bindings,
        )


@pytest.fixture
def tb() -> TreeBuilder:
    """Fresh tree builder with an empty binding table."""
    return TreeBuilder()


@pytest.fixture
def go_fixture() -> Path:
    """Golden Go file with known complexity values."""
    return FIXTURES / "go" / "a.go"
