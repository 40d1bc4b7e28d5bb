"""Cyclomatic complexity as a weighted decision-point count.

Concurrency constructs are weighted in: launching a goroutine adds two,
channel sends and receives add one each. A final ``else`` block counts as
its own path, while an ``else if`` is counted through the nested IfStmt.
Nested function literals are part of the enclosing function's count.
"""

from __future__ import annotations

from .nodes import (
    BinaryExpr,
    BlockStmt,
    ForStmt,
    FuncDecl,
    GoStmt,
    IfStmt,
    RangeStmt,
    SelectStmt,
    SendStmt,
    SwitchStmt,
    UnaryExpr,
    walk,
)

_LOOP_AND_SELECTION = (ForStmt, RangeStmt, SelectStmt, SwitchStmt)
_SHORT_CIRCUIT_OPS = frozenset({"&&", "||"})


def cyclomatic_complexity(decl: FuncDecl) -> int:
    """Return the cyclomatic complexity of ``decl`` (always >= 1)."""
    complexity = 1
    for node in walk(decl):
        if isinstance(node, GoStmt):
            complexity += 2
        elif isinstance(node, SendStmt):
            complexity += 1
        elif isinstance(node, UnaryExpr):
            if node.op == "<-":
                complexity += 1
        elif isinstance(node, IfStmt):
            complexity += 1
            if isinstance(node.orelse, BlockStmt):
                complexity += 1
        elif isinstance(node, _LOOP_AND_SELECTION):
            complexity += 1
        elif isinstance(node, BinaryExpr):
            if node.op in _SHORT_CIRCUIT_OPS:
                complexity += 1
    return complexity
