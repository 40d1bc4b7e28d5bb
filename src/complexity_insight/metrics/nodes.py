"""Syntax node model consumed by the metric calculators.

The calculators never see a parser's concrete tree. A language front end
(see ``complexity_insight.scanning``) converts its parse tree into these
variants, which follow the shape of a Go abstract syntax tree:

    File -> FuncDecl / GenDecl -> statements -> expressions

Every variant is a frozen dataclass tagged with a ``NodeCategory``.
Keyword and delimiter positions are optional: ``None`` means the token is
not syntactically present (for example the parentheses of an ungrouped
``var`` declaration), and the token tally only counts pairs whose two
positions exist.

Nodes compare and hash by identity, so two identical-looking identifiers at
different places in a file stay distinct keys for symbol resolution.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import ClassVar, Iterator, Optional

_variant = dataclass(frozen=True, eq=False)


class NodeCategory(Enum):
    """Coarse category of a syntax node variant."""

    FILE = "file"
    DECLARATION = "declaration"
    SPEC = "spec"
    STATEMENT = "statement"
    CLAUSE = "clause"
    BLOCK = "block"
    EXPRESSION = "expression"
    LITERAL = "literal"
    IDENTIFIER = "identifier"
    TYPE_SIGNATURE = "type-signature"


@dataclass(frozen=True)
class Position:
    """1-based line and column of a token."""

    line: int
    column: int


@dataclass(frozen=True)
class Span:
    """Source range of a node; ``end`` is the position just after the node."""

    start: Position
    end: Position

    @property
    def line_count(self) -> int:
        return self.end.line - self.start.line + 1


@_variant
class SyntaxNode:
    """Base class of all node variants."""

    category: ClassVar[NodeCategory]
    span: Optional[Span] = field(default=None, kw_only=True)


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------


@_variant
class Ident(SyntaxNode):
    category = NodeCategory.IDENTIFIER
    name: str


@_variant
class BasicLit(SyntaxNode):
    """A literal constant; ``kind`` is the front end's token kind (e.g. INT)."""

    category = NodeCategory.LITERAL
    kind: str
    value: str


@_variant
class ParenExpr(SyntaxNode):
    category = NodeCategory.EXPRESSION
    x: SyntaxNode
    lparen: Optional[Position] = None
    rparen: Optional[Position] = None


@_variant
class SelectorExpr(SyntaxNode):
    category = NodeCategory.EXPRESSION
    x: SyntaxNode
    sel: Ident


@_variant
class IndexExpr(SyntaxNode):
    category = NodeCategory.EXPRESSION
    x: SyntaxNode
    index: SyntaxNode
    lbrack: Optional[Position] = None
    rbrack: Optional[Position] = None


@_variant
class IndexListExpr(SyntaxNode):
    """Generic instantiation with more than one type argument."""

    category = NodeCategory.EXPRESSION
    x: SyntaxNode
    indices: tuple[SyntaxNode, ...]
    lbrack: Optional[Position] = None
    rbrack: Optional[Position] = None


@_variant
class SliceExpr(SyntaxNode):
    category = NodeCategory.EXPRESSION
    x: SyntaxNode
    low: Optional[SyntaxNode] = None
    high: Optional[SyntaxNode] = None
    max: Optional[SyntaxNode] = None
    lbrack: Optional[Position] = None
    rbrack: Optional[Position] = None


@_variant
class TypeAssertExpr(SyntaxNode):
    """``x.(T)``; ``type`` is None for the ``x.(type)`` form of a type switch."""

    category = NodeCategory.EXPRESSION
    x: SyntaxNode
    type: Optional[SyntaxNode] = None
    lparen: Optional[Position] = None
    rparen: Optional[Position] = None


@_variant
class CallExpr(SyntaxNode):
    category = NodeCategory.EXPRESSION
    fun: SyntaxNode
    args: tuple[SyntaxNode, ...] = ()
    lparen: Optional[Position] = None
    rparen: Optional[Position] = None
    ellipsis: Optional[Position] = None


@_variant
class StarExpr(SyntaxNode):
    """Pointer type or pointer dereference."""

    category = NodeCategory.EXPRESSION
    x: SyntaxNode
    star: Optional[Position] = None


@_variant
class UnaryExpr(SyntaxNode):
    category = NodeCategory.EXPRESSION
    op: str
    x: SyntaxNode


@_variant
class BinaryExpr(SyntaxNode):
    category = NodeCategory.EXPRESSION
    x: SyntaxNode
    op: str
    y: SyntaxNode


@_variant
class KeyValueExpr(SyntaxNode):
    category = NodeCategory.EXPRESSION
    key: SyntaxNode
    value: SyntaxNode
    colon: Optional[Position] = None


@_variant
class CompositeLit(SyntaxNode):
    category = NodeCategory.EXPRESSION
    type: Optional[SyntaxNode]
    elts: tuple[SyntaxNode, ...] = ()
    lbrace: Optional[Position] = None
    rbrace: Optional[Position] = None


@_variant
class EllipsisExpr(SyntaxNode):
    """``...T`` in a variadic parameter, or ``[...]`` array length."""

    category = NodeCategory.EXPRESSION
    elt: Optional[SyntaxNode] = None
    pos: Optional[Position] = None


@_variant
class FuncLit(SyntaxNode):
    """Anonymous function (closure) expression."""

    category = NodeCategory.EXPRESSION
    type: FuncType
    body: BlockStmt


# ---------------------------------------------------------------------------
# Types and signatures
# ---------------------------------------------------------------------------


@_variant
class Field(SyntaxNode):
    """A parameter, result, struct field or interface element."""

    category = NodeCategory.TYPE_SIGNATURE
    names: tuple[Ident, ...]
    type: Optional[SyntaxNode]
    tag: Optional[BasicLit] = None


@_variant
class FieldList(SyntaxNode):
    category = NodeCategory.TYPE_SIGNATURE
    fields: tuple[Field, ...] = ()
    opening: Optional[Position] = None
    closing: Optional[Position] = None


@_variant
class FuncType(SyntaxNode):
    category = NodeCategory.TYPE_SIGNATURE
    params: FieldList
    results: Optional[FieldList] = None
    type_params: Optional[FieldList] = None
    keyword: Optional[Position] = None


@_variant
class ChanType(SyntaxNode):
    category = NodeCategory.TYPE_SIGNATURE
    value: SyntaxNode
    keyword: Optional[Position] = None
    arrow: Optional[Position] = None


@_variant
class ArrayType(SyntaxNode):
    """Array type, or slice type when ``len`` is None."""

    category = NodeCategory.TYPE_SIGNATURE
    len: Optional[SyntaxNode]
    elt: SyntaxNode


@_variant
class MapType(SyntaxNode):
    category = NodeCategory.TYPE_SIGNATURE
    key: SyntaxNode
    value: SyntaxNode


@_variant
class StructType(SyntaxNode):
    category = NodeCategory.TYPE_SIGNATURE
    fields: FieldList


@_variant
class InterfaceType(SyntaxNode):
    category = NodeCategory.TYPE_SIGNATURE
    methods: FieldList


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------


@_variant
class BlockStmt(SyntaxNode):
    category = NodeCategory.BLOCK
    stmts: tuple[SyntaxNode, ...] = ()
    lbrace: Optional[Position] = None
    rbrace: Optional[Position] = None


@_variant
class DeclStmt(SyntaxNode):
    category = NodeCategory.STATEMENT
    decl: GenDecl


@_variant
class ExprStmt(SyntaxNode):
    category = NodeCategory.STATEMENT
    x: SyntaxNode


@_variant
class SendStmt(SyntaxNode):
    """Channel send ``ch <- v``."""

    category = NodeCategory.STATEMENT
    chan: SyntaxNode
    value: SyntaxNode
    arrow: Optional[Position] = None


@_variant
class IncDecStmt(SyntaxNode):
    category = NodeCategory.STATEMENT
    x: SyntaxNode
    tok: str


@_variant
class AssignStmt(SyntaxNode):
    """Assignment; ``tok`` is ``=``, ``:=`` or an augmented operator."""

    category = NodeCategory.STATEMENT
    lhs: tuple[SyntaxNode, ...]
    tok: str
    rhs: tuple[SyntaxNode, ...]


@_variant
class GoStmt(SyntaxNode):
    """Concurrent task launch."""

    category = NodeCategory.STATEMENT
    call: SyntaxNode
    keyword: Optional[Position] = None


@_variant
class DeferStmt(SyntaxNode):
    category = NodeCategory.STATEMENT
    call: SyntaxNode
    keyword: Optional[Position] = None


@_variant
class ReturnStmt(SyntaxNode):
    category = NodeCategory.STATEMENT
    results: tuple[SyntaxNode, ...] = ()
    keyword: Optional[Position] = None


@_variant
class BranchStmt(SyntaxNode):
    """``break``, ``continue``, ``goto`` or ``fallthrough``."""

    category = NodeCategory.STATEMENT
    tok: str
    label: Optional[Ident] = None


@_variant
class IfStmt(SyntaxNode):
    """Conditional; ``orelse`` is a BlockStmt, another IfStmt, or None."""

    category = NodeCategory.STATEMENT
    init: Optional[SyntaxNode]
    cond: SyntaxNode
    body: BlockStmt
    orelse: Optional[SyntaxNode] = None
    keyword: Optional[Position] = None


@_variant
class CaseClause(SyntaxNode):
    """Switch case; ``values`` is None for the default clause."""

    category = NodeCategory.CLAUSE
    values: Optional[tuple[SyntaxNode, ...]]
    body: tuple[SyntaxNode, ...] = ()
    colon: Optional[Position] = None


@_variant
class SwitchStmt(SyntaxNode):
    category = NodeCategory.STATEMENT
    init: Optional[SyntaxNode]
    tag: Optional[SyntaxNode]
    body: BlockStmt
    keyword: Optional[Position] = None


@_variant
class TypeSwitchStmt(SyntaxNode):
    category = NodeCategory.STATEMENT
    init: Optional[SyntaxNode]
    assign: SyntaxNode
    body: BlockStmt
    keyword: Optional[Position] = None


@_variant
class CommClause(SyntaxNode):
    """Select case; ``comm`` is None for the default clause."""

    category = NodeCategory.CLAUSE
    comm: Optional[SyntaxNode]
    body: tuple[SyntaxNode, ...] = ()
    colon: Optional[Position] = None


@_variant
class SelectStmt(SyntaxNode):
    """Multiplexed channel select."""

    category = NodeCategory.STATEMENT
    body: BlockStmt
    keyword: Optional[Position] = None


@_variant
class ForStmt(SyntaxNode):
    category = NodeCategory.STATEMENT
    init: Optional[SyntaxNode]
    cond: Optional[SyntaxNode]
    post: Optional[SyntaxNode]
    body: BlockStmt
    keyword: Optional[Position] = None


@_variant
class RangeStmt(SyntaxNode):
    """Range iteration; ``tok`` is empty when there is no key."""

    category = NodeCategory.STATEMENT
    key: Optional[SyntaxNode]
    value: Optional[SyntaxNode]
    tok: str
    x: SyntaxNode
    body: BlockStmt
    keyword: Optional[Position] = None


@_variant
class LabeledStmt(SyntaxNode):
    category = NodeCategory.STATEMENT
    label: Ident
    stmt: Optional[SyntaxNode] = None


@_variant
class EmptyStmt(SyntaxNode):
    category = NodeCategory.STATEMENT


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------


@_variant
class ValueSpec(SyntaxNode):
    """``var``/``const`` spec: one or more names, optional type and values."""

    category = NodeCategory.SPEC
    names: tuple[Ident, ...]
    type: Optional[SyntaxNode] = None
    values: tuple[SyntaxNode, ...] = ()


@_variant
class TypeSpec(SyntaxNode):
    category = NodeCategory.SPEC
    name: Ident
    type: SyntaxNode
    type_params: Optional[FieldList] = None


@_variant
class ImportSpec(SyntaxNode):
    category = NodeCategory.SPEC
    name: Optional[Ident]
    path: BasicLit


@_variant
class GenDecl(SyntaxNode):
    """Declaration group introduced by ``tok`` (var, const, type, import)."""

    category = NodeCategory.DECLARATION
    tok: str
    specs: tuple[SyntaxNode, ...] = ()
    lparen: Optional[Position] = None
    rparen: Optional[Position] = None


@_variant
class FuncDecl(SyntaxNode):
    """Named function, or method when ``recv`` is set."""

    category = NodeCategory.DECLARATION
    recv: Optional[FieldList]
    name: Ident
    type: FuncType
    body: Optional[BlockStmt] = None


@_variant
class File(SyntaxNode):
    category = NodeCategory.FILE
    package: Optional[Ident]
    decls: tuple[SyntaxNode, ...] = ()


# ---------------------------------------------------------------------------
# Traversal
# ---------------------------------------------------------------------------


def iter_child_nodes(node: SyntaxNode) -> Iterator[SyntaxNode]:
    """Yield the direct children of ``node`` in field order."""
    for f in fields(node):
        if f.name == "span":
            continue
        value = getattr(node, f.name)
        if isinstance(value, SyntaxNode):
            yield value
        elif isinstance(value, tuple):
            for item in value:
                if isinstance(item, SyntaxNode):
                    yield item


def walk(node: SyntaxNode) -> Iterator[SyntaxNode]:
    """Depth-first preorder traversal of ``node`` and all its descendants."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(list(iter_child_nodes(current))))
