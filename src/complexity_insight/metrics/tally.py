"""Operator/operand token tally for Halstead metrics.

``tally_tokens`` walks one function declaration and counts every operator
and operand occurrence, keyed by literal token text. The walk is a
hand-written dispatch over node variants rather than a generic traversal:
each handler decides which of its children are visited, so some children
(parameter names, type switch bodies, labeled statements ...) are never
counted. Variants without a handler contribute nothing.

Identifier classification is inverted on purpose: an identifier bound to a
declaration in scope is an operand, an unbound one (builtins, package
names, undeclared names) is an operator.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Optional

from .lexicon import LexicalClassifier, SymbolResolver
from .nodes import (
    AssignStmt,
    BasicLit,
    BinaryExpr,
    BlockStmt,
    BranchStmt,
    CallExpr,
    CaseClause,
    ChanType,
    CompositeLit,
    DeclStmt,
    DeferStmt,
    EllipsisExpr,
    ExprStmt,
    ForStmt,
    FuncDecl,
    FuncLit,
    FuncType,
    GenDecl,
    GoStmt,
    Ident,
    IfStmt,
    IncDecStmt,
    IndexExpr,
    KeyValueExpr,
    ParenExpr,
    Position,
    RangeStmt,
    ReturnStmt,
    SelectorExpr,
    SelectStmt,
    SendStmt,
    SliceExpr,
    StarExpr,
    SwitchStmt,
    SyntaxNode,
    TypeAssertExpr,
    UnaryExpr,
    ValueSpec,
)

logger = logging.getLogger(__name__)


@dataclass
class TokenTally:
    """Occurrence counts of operators and operands, keyed by token text."""

    operators: Counter = field(default_factory=Counter)
    operands: Counter = field(default_factory=Counter)

    @property
    def distinct_operators(self) -> int:
        return len(self.operators)

    @property
    def distinct_operands(self) -> int:
        return len(self.operands)

    @property
    def total_operators(self) -> int:
        return sum(self.operators.values())

    @property
    def total_operands(self) -> int:
        return sum(self.operands.values())


class TallyWalker:
    """Accumulates a TokenTally while visiting syntax nodes.

    Args:
        classifier: Decides which raw tokens are operators or literals.
        resolver: Decides whether an identifier is bound.
    """

    def __init__(self, classifier: LexicalClassifier, resolver: SymbolResolver):
        self.classifier = classifier
        self.resolver = resolver
        self.tally = TokenTally()

    # -- helpers -----------------------------------------------------------

    def _operator(self, symbol: str) -> None:
        self.tally.operators[symbol] += 1

    def _operand(self, symbol: str) -> None:
        self.tally.operands[symbol] += 1

    def _classified(self, symbol: str) -> None:
        if self.classifier.is_operator(symbol):
            self._operator(symbol)
        else:
            self._operand(symbol)

    def _keyword(self, pos: Optional[Position], symbol: str) -> None:
        if pos is not None:
            self._operator(symbol)

    def _pair(self, left: Optional[Position], right: Optional[Position], symbol: str) -> None:
        if left is not None and right is not None:
            self._operator(symbol)

    # -- dispatch ----------------------------------------------------------

    def visit(self, node: Optional[SyntaxNode]) -> None:
        if node is None:
            return
        handler = getattr(self, f"visit_{type(node).__name__}", None)
        if handler is not None:
            handler(node)

    def visit_all(self, nodes: Iterable[SyntaxNode]) -> None:
        for node in nodes:
            self.visit(node)

    # -- declarations ------------------------------------------------------

    def visit_FuncDecl(self, node: FuncDecl) -> None:
        self._operator("func")
        self._operator(node.name.name)
        self._operator("()")
        if node.recv is not None:
            self._operator("()")
        self.visit(node.body)

    def visit_GenDecl(self, node: GenDecl) -> None:
        self._pair(node.lparen, node.rparen, "()")
        self._classified(node.tok)
        self.visit_all(node.specs)

    def visit_ValueSpec(self, node: ValueSpec) -> None:
        # Values are re-walked once per declared name.
        for name in node.names:
            self.visit(name)
            self.visit(node.type)
            self.visit_all(node.values)

    # -- statements --------------------------------------------------------

    def visit_DeclStmt(self, node: DeclStmt) -> None:
        self.visit(node.decl)

    def visit_ExprStmt(self, node: ExprStmt) -> None:
        self.visit(node.x)

    def visit_SendStmt(self, node: SendStmt) -> None:
        self.visit(node.chan)
        self._keyword(node.arrow, "<-")
        self.visit(node.value)

    def visit_IncDecStmt(self, node: IncDecStmt) -> None:
        self.visit(node.x)
        if self.classifier.is_operator(node.tok):
            self._operator(node.tok)

    def visit_AssignStmt(self, node: AssignStmt) -> None:
        if self.classifier.is_operator(node.tok):
            self._operator(node.tok)
        self.visit_all(node.lhs)
        self.visit_all(node.rhs)

    def visit_GoStmt(self, node: GoStmt) -> None:
        self._keyword(node.keyword, "go")
        self.visit(node.call)

    def visit_DeferStmt(self, node: DeferStmt) -> None:
        self._keyword(node.keyword, "defer")
        self.visit(node.call)

    def visit_ReturnStmt(self, node: ReturnStmt) -> None:
        self._keyword(node.keyword, "return")
        self.visit_all(node.results)

    def visit_BranchStmt(self, node: BranchStmt) -> None:
        self._classified(node.tok)
        self.visit(node.label)

    def visit_BlockStmt(self, node: BlockStmt) -> None:
        self._pair(node.lbrace, node.rbrace, "{}")
        self.visit_all(node.stmts)

    def visit_IfStmt(self, node: IfStmt) -> None:
        self._keyword(node.keyword, "if")
        self.visit(node.init)
        self.visit(node.cond)
        self.visit(node.body)
        if node.orelse is not None:
            self._operator("else")
            self.visit(node.orelse)

    def visit_CaseClause(self, node: CaseClause) -> None:
        if node.values is None:
            self._operator("default")
        else:
            self.visit_all(node.values)
        self._keyword(node.colon, ":")
        self.visit_all(node.body)

    def visit_SwitchStmt(self, node: SwitchStmt) -> None:
        self._keyword(node.keyword, "switch")
        self.visit(node.init)
        self.visit(node.tag)
        self.visit(node.body)

    def visit_SelectStmt(self, node: SelectStmt) -> None:
        self._keyword(node.keyword, "select")
        self.visit(node.body)

    def visit_ForStmt(self, node: ForStmt) -> None:
        self._keyword(node.keyword, "for")
        self.visit(node.init)
        self.visit(node.cond)
        self.visit(node.post)
        self.visit(node.body)

    def visit_RangeStmt(self, node: RangeStmt) -> None:
        self._keyword(node.keyword, "for")
        if node.key is not None:
            self.visit(node.key)
            self._classified(node.tok)
        self.visit(node.value)
        self._operator("range")
        self.visit(node.x)
        self.visit(node.body)

    # -- expressions -------------------------------------------------------

    def visit_Ident(self, node: Ident) -> None:
        if self.resolver.is_bound(node):
            self._operand(node.name)
        else:
            self._operator(node.name)

    def visit_BasicLit(self, node: BasicLit) -> None:
        if self.classifier.is_literal(node.kind):
            self._operand(node.value)
        else:
            self._operator(node.value)

    def visit_ParenExpr(self, node: ParenExpr) -> None:
        self._pair(node.lparen, node.rparen, "()")
        self.visit(node.x)

    def visit_SelectorExpr(self, node: SelectorExpr) -> None:
        self.visit(node.x)
        self.visit(node.sel)

    def visit_IndexExpr(self, node: IndexExpr) -> None:
        # Index brackets are tallied under the brace key.
        self.visit(node.x)
        self._pair(node.lbrack, node.rbrack, "{}")
        self.visit(node.index)

    def visit_SliceExpr(self, node: SliceExpr) -> None:
        self.visit(node.x)
        self._pair(node.lbrack, node.rbrack, "[]")
        self.visit(node.low)
        self.visit(node.high)
        self.visit(node.max)

    def visit_TypeAssertExpr(self, node: TypeAssertExpr) -> None:
        self.visit(node.x)
        self._pair(node.lparen, node.rparen, "()")
        self.visit(node.type)

    def visit_CallExpr(self, node: CallExpr) -> None:
        self.visit(node.fun)
        self._pair(node.lparen, node.rparen, "()")
        self._keyword(node.ellipsis, "...")
        self.visit_all(node.args)

    def visit_StarExpr(self, node: StarExpr) -> None:
        self._keyword(node.star, "*")
        self.visit(node.x)

    def visit_UnaryExpr(self, node: UnaryExpr) -> None:
        self._classified(node.op)
        self.visit(node.x)

    def visit_BinaryExpr(self, node: BinaryExpr) -> None:
        spine = []
        while isinstance(node, BinaryExpr):
            spine.append(node)
            node = node.x
        self.visit(node)
        for expr in reversed(spine):
            self._operator(expr.op)
            self.visit(expr.y)

    def visit_KeyValueExpr(self, node: KeyValueExpr) -> None:
        self.visit(node.key)
        self._keyword(node.colon, ":")
        self.visit(node.value)

    def visit_FuncLit(self, node: FuncLit) -> None:
        self.visit(node.type)
        self.visit(node.body)

    def visit_CompositeLit(self, node: CompositeLit) -> None:
        self._pair(node.lbrace, node.rbrace, "{}")
        self.visit(node.type)
        self.visit_all(node.elts)

    def visit_EllipsisExpr(self, node: EllipsisExpr) -> None:
        self._keyword(node.pos, "...")
        self.visit(node.elt)

    # -- types -------------------------------------------------------------

    def visit_FuncType(self, node: FuncType) -> None:
        self._keyword(node.keyword, "func")
        self._operator("()")
        for param in node.params.fields:
            self.visit(param.type)

    def visit_ChanType(self, node: ChanType) -> None:
        self._keyword(node.keyword, "chan")
        self._keyword(node.arrow, "<-")
        self.visit(node.value)


def tally_tokens(
    decl: FuncDecl, classifier: LexicalClassifier, resolver: SymbolResolver
) -> TokenTally:
    """Count operator and operand occurrences in a function declaration.

    Args:
        decl: Function declaration to walk.
        classifier: Operator/literal classification for the source language.
        resolver: Identifier binding information for the declaration's file.

    Returns:
        TokenTally with per-token occurrence counts.

    Raises:
        UnresolvedBindingError: If an identifier has no binding data.
    """
    walker = TallyWalker(classifier, resolver)
    walker.visit(decl)
    logger.debug(
        "Tallied %s: %d operators, %d operands",
        decl.name.name,
        walker.tally.total_operators,
        walker.tally.total_operands,
    )
    return walker.tally
