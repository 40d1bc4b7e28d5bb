"""Line counts from node spans."""

from __future__ import annotations

from ..exceptions import MissingPositionError
from .nodes import AssignStmt, FuncDecl, SyntaxNode, ValueSpec, walk


def count_loc(node: SyntaxNode) -> int:
    """Number of source lines spanned by ``node``, inclusive.

    Raises:
        MissingPositionError: If the node carries no span.
    """
    if node.span is None:
        raise MissingPositionError(type(node).__name__)
    return node.span.line_count


def count_decl_loc(decl: FuncDecl) -> int:
    """Lines spent on variable/constant declarations inside ``decl``.

    Sums the spans of every value spec and every ``:=`` assignment. Spans
    are not deduplicated.
    """
    total = 0
    for node in walk(decl):
        if isinstance(node, ValueSpec):
            total += count_loc(node)
        elif isinstance(node, AssignStmt) and node.tok == ":=":
            total += count_loc(node)
    return total
