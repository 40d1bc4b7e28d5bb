"""Convert a tree-sitter-go concrete syntax tree into the metric node model.

The output mirrors what go/parser would build for the same file:

    - ``x.(type)`` switches become TypeSwitchStmt with an AssignStmt/ExprStmt
      header, select cases become CommClause
    - unary ``*`` and pointer types become StarExpr
    - type conversions ``T(x)`` become CallExpr
    - ``nil``, ``true``, ``false`` and ``iota`` are plain identifiers
    - slices, arrays and ``[...]T`` all become ArrayType

Positions are 1-based; columns count bytes, like go/token. A tree that
contains ERROR or MISSING nodes is rejected, as is any node type this
module does not know.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Optional

from ..exceptions import ParsingError
from ..metrics.nodes import (
    ArrayType,
    AssignStmt,
    BasicLit,
    BinaryExpr,
    BlockStmt,
    BranchStmt,
    CallExpr,
    CaseClause,
    ChanType,
    CommClause,
    CompositeLit,
    DeclStmt,
    DeferStmt,
    EllipsisExpr,
    EmptyStmt,
    ExprStmt,
    Field,
    FieldList,
    File,
    ForStmt,
    FuncDecl,
    FuncLit,
    FuncType,
    GenDecl,
    GoStmt,
    Ident,
    IfStmt,
    ImportSpec,
    IncDecStmt,
    IndexExpr,
    IndexListExpr,
    InterfaceType,
    KeyValueExpr,
    LabeledStmt,
    MapType,
    ParenExpr,
    Position,
    RangeStmt,
    ReturnStmt,
    SelectorExpr,
    SelectStmt,
    SendStmt,
    SliceExpr,
    Span,
    StarExpr,
    StructType,
    SwitchStmt,
    SyntaxNode,
    TypeAssertExpr,
    TypeSpec,
    TypeSwitchStmt,
    UnaryExpr,
    ValueSpec,
)

if TYPE_CHECKING:
    from .treesitter_parser import Node, Tree

logger = logging.getLogger(__name__)

_IDENTIFIER_TYPES = frozenset(
    {
        "identifier",
        "field_identifier",
        "type_identifier",
        "package_identifier",
        "label_name",
        "blank_identifier",
        "dot",
        "nil",
        "true",
        "false",
        "iota",
    }
)

_LITERAL_KINDS = {
    "int_literal": "INT",
    "float_literal": "FLOAT",
    "imaginary_literal": "IMAG",
    "rune_literal": "CHAR",
    "interpreted_string_literal": "STRING",
    "raw_string_literal": "STRING",
}

_BRANCH_TYPES = {
    "break_statement": "break",
    "continue_statement": "continue",
    "goto_statement": "goto",
    "fallthrough_statement": "fallthrough",
}

_GEN_DECL_TYPES = frozenset({"const_declaration", "var_declaration", "type_declaration"})


def _named(node: Node) -> list[Node]:
    """Named children without comments."""
    return [c for c in node.named_children if c.type != "comment"]


def _field_children(node: Node, field: str) -> list[Node]:
    """Named children under ``field``; the separating commas share the field."""
    return [c for c in node.children_by_field_name(field) if c.is_named]


class GoTreeConverter:
    """Builds a ``File`` node from a tree-sitter-go tree.

    Args:
        source: The exact bytes that were parsed.
        path: File path, used in error messages.
    """

    def __init__(self, source: bytes, path: str):
        self._source = source
        self._path = path

    def convert(self, tree: Tree) -> File:
        """Convert a parsed Go file.

        Raises:
            ParsingError: If the tree has syntax errors or unsupported nodes.
        """
        root = tree.root_node
        if root.has_error:
            raise ParsingError(self._path, "go", self._describe_error(root))

        package = None
        decls: list[SyntaxNode] = []
        for child in _named(root):
            if child.type == "package_clause":
                package = self._ident(_named(child)[0])
            elif child.type in ("function_declaration", "method_declaration"):
                decls.append(self._func_decl(child))
            elif child.type == "import_declaration":
                decls.append(self._import_decl(child))
            elif child.type in _GEN_DECL_TYPES:
                decls.append(self._gen_decl(child))
            else:
                raise self._unsupported(child)

        logger.debug(f"Converted {self._path}: {len(decls)} top-level declarations")
        return File(package, tuple(decls), span=self._span(root))

    # -- positions ---------------------------------------------------------

    def _span(self, node: Node) -> Span:
        return Span(self._pos(node.start_point), self._pos(node.end_point))

    @staticmethod
    def _pos(point: tuple[int, int]) -> Position:
        return Position(point[0] + 1, point[1] + 1)

    def _token(self, node: Node, *kinds: str) -> Optional[Position]:
        """Position of the first anonymous child token of one of ``kinds``."""
        for child in node.children:
            if child.type in kinds and not child.is_missing:
                return self._pos(child.start_point)
        return None

    def _last_token(self, node: Node, *kinds: str) -> Optional[Position]:
        for child in reversed(node.children):
            if child.type in kinds and not child.is_missing:
                return self._pos(child.start_point)
        return None

    def _text(self, node: Node) -> str:
        return self._source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

    # -- errors ------------------------------------------------------------

    def _unsupported(self, node: Node) -> ParsingError:
        line, col = node.start_point
        return ParsingError(
            self._path, "go", f"unsupported syntax {node.type!r} at {line + 1}:{col + 1}"
        )

    def _describe_error(self, root: Node) -> str:
        stack = [root]
        while stack:
            node = stack.pop()
            if node.type == "ERROR" or node.is_missing:
                line, col = node.start_point
                what = f"missing {node.type!r}" if node.is_missing else "syntax error"
                return f"{what} at {line + 1}:{col + 1}"
            stack.extend(reversed(node.children))
        return "syntax error"

    # -- declarations ------------------------------------------------------

    def _func_decl(self, node: Node) -> FuncDecl:
        recv_node = node.child_by_field_name("receiver")
        recv = self._field_list(recv_node) if recv_node is not None else None
        body_node = node.child_by_field_name("body")
        return FuncDecl(
            recv,
            self._ident(node.child_by_field_name("name")),
            self._func_type(node),
            self._block(body_node) if body_node is not None else None,
            span=self._span(node),
        )

    def _func_type(self, node: Node) -> FuncType:
        """Signature of a function declaration, literal or function type."""
        result = node.child_by_field_name("result")
        if result is None:
            results = None
        elif result.type == "parameter_list":
            results = self._field_list(result)
        else:
            results = FieldList(
                (Field((), self._expr(result), span=self._span(result)),),
                span=self._span(result),
            )
        tparams = node.child_by_field_name("type_parameters")
        return FuncType(
            self._field_list(node.child_by_field_name("parameters")),
            results,
            self._field_list(tparams) if tparams is not None else None,
            keyword=self._token(node, "func"),
            span=self._span(node),
        )

    def _field_list(self, node: Node) -> FieldList:
        """Parameter, receiver or type parameter list.

        tree-sitter-go reads a long group such as ``(a, b, ..., j int)`` as a
        type-only ``a`` followed by a named group. Go forbids mixing named and
        type-only parameters, so in a list that has names every bare type
        identifier is folded into the next group as a name.
        """
        fields = []
        declarations = _named(node)
        has_names = any(c.child_by_field_name("name") is not None for c in declarations)
        pending: list[Node] = []
        for child in declarations:
            if child.type in ("parameter_declaration", "type_parameter_declaration"):
                type_node = child.child_by_field_name("type")
                name_nodes = _field_children(child, "name")
                if has_names and not name_nodes and type_node.type == "type_identifier":
                    pending.append(type_node)
                    continue
                names = tuple(self._ident(n) for n in pending + name_nodes)
                start = pending[0] if pending else child
                pending = []
                fields.append(
                    Field(
                        names,
                        self._expr(type_node),
                        span=Span(self._pos(start.start_point), self._pos(child.end_point)),
                    )
                )
            elif child.type == "variadic_parameter_declaration":
                name = child.child_by_field_name("name")
                names = (self._ident(name),) if name is not None else ()
                ftype = EllipsisExpr(
                    self._expr(child.child_by_field_name("type")),
                    pos=self._token(child, "..."),
                    span=self._span(child),
                )
                fields.append(Field(names, ftype, span=self._span(child)))
            else:
                raise self._unsupported(child)
        # Unreachable for valid Go; keep stray names as type-only fields.
        fields.extend(Field((), self._expr(p), span=self._span(p)) for p in pending)
        return FieldList(
            tuple(fields),
            opening=self._token(node, "(", "["),
            closing=self._last_token(node, ")", "]"),
            span=self._span(node),
        )

    def _import_decl(self, node: Node) -> GenDecl:
        container = node
        for child in _named(node):
            if child.type == "import_spec_list":
                container = child
        specs = []
        for spec in _named(container):
            if spec.type != "import_spec":
                raise self._unsupported(spec)
            name = spec.child_by_field_name("name")
            path = spec.child_by_field_name("path")
            specs.append(
                ImportSpec(
                    self._ident(name) if name is not None else None,
                    BasicLit("STRING", self._text(path), span=self._span(path)),
                    span=self._span(spec),
                )
            )
        return GenDecl(
            "import",
            tuple(specs),
            lparen=self._token(container, "("),
            rparen=self._last_token(container, ")"),
            span=self._span(node),
        )

    def _gen_decl(self, node: Node) -> GenDecl:
        """const, var or type declaration, grouped or not."""
        tok = node.children[0].type
        container = node
        for child in _named(node):
            if child.type == "var_spec_list":
                container = child
        specs = tuple(self._spec(child) for child in _named(container))
        return GenDecl(
            tok,
            specs,
            lparen=self._token(container, "("),
            rparen=self._last_token(container, ")"),
            span=self._span(node),
        )

    def _spec(self, node: Node) -> SyntaxNode:
        if node.type in ("const_spec", "var_spec"):
            ftype = node.child_by_field_name("type")
            value = node.child_by_field_name("value")
            return ValueSpec(
                tuple(self._ident(n) for n in _field_children(node, "name")),
                self._expr(ftype) if ftype is not None else None,
                self._exprs(value) if value is not None else (),
                span=self._span(node),
            )
        if node.type in ("type_spec", "type_alias"):
            tparams = node.child_by_field_name("type_parameters")
            return TypeSpec(
                self._ident(node.child_by_field_name("name")),
                self._expr(node.child_by_field_name("type")),
                self._field_list(tparams) if tparams is not None else None,
                span=self._span(node),
            )
        raise self._unsupported(node)

    # -- statements --------------------------------------------------------

    def _stmts(self, nodes: list[Node]) -> tuple[SyntaxNode, ...]:
        result: list[SyntaxNode] = []
        for node in nodes:
            if node.type == "statement_list":
                result.extend(self._stmts(_named(node)))
            else:
                result.append(self._stmt(node))
        return tuple(result)

    def _stmt(self, node: Node) -> SyntaxNode:
        if node.type in _GEN_DECL_TYPES:
            return DeclStmt(self._gen_decl(node), span=self._span(node))
        if node.type in _BRANCH_TYPES:
            label = _named(node)
            return BranchStmt(
                _BRANCH_TYPES[node.type],
                self._ident(label[0]) if label else None,
                span=self._span(node),
            )
        handler: Optional[Callable[[Node], SyntaxNode]] = getattr(
            self, f"_stmt_{node.type}", None
        )
        if handler is None:
            raise self._unsupported(node)
        return handler(node)

    def _block(self, node: Node) -> BlockStmt:
        return BlockStmt(
            self._stmts(_named(node)),
            lbrace=self._token(node, "{"),
            rbrace=self._last_token(node, "}"),
            span=self._span(node),
        )

    def _stmt_block(self, node: Node) -> BlockStmt:
        return self._block(node)

    def _stmt_expression_statement(self, node: Node) -> ExprStmt:
        return ExprStmt(self._expr(_named(node)[0]), span=self._span(node))

    def _stmt_send_statement(self, node: Node) -> SendStmt:
        return SendStmt(
            self._expr(node.child_by_field_name("channel")),
            self._expr(node.child_by_field_name("value")),
            arrow=self._token(node, "<-"),
            span=self._span(node),
        )

    def _stmt_inc_statement(self, node: Node) -> IncDecStmt:
        return IncDecStmt(self._expr(_named(node)[0]), "++", span=self._span(node))

    def _stmt_dec_statement(self, node: Node) -> IncDecStmt:
        return IncDecStmt(self._expr(_named(node)[0]), "--", span=self._span(node))

    def _stmt_assignment_statement(self, node: Node) -> AssignStmt:
        return AssignStmt(
            self._exprs(node.child_by_field_name("left")),
            self._text(node.child_by_field_name("operator")),
            self._exprs(node.child_by_field_name("right")),
            span=self._span(node),
        )

    def _stmt_short_var_declaration(self, node: Node) -> AssignStmt:
        return AssignStmt(
            self._exprs(node.child_by_field_name("left")),
            ":=",
            self._exprs(node.child_by_field_name("right")),
            span=self._span(node),
        )

    def _stmt_receive_statement(self, node: Node) -> SyntaxNode:
        right = self._expr(node.child_by_field_name("right"))
        left = node.child_by_field_name("left")
        if left is None:
            return ExprStmt(right, span=self._span(node))
        tok = ":=" if self._token(node, ":=") is not None else "="
        return AssignStmt(self._exprs(left), tok, (right,), span=self._span(node))

    def _stmt_go_statement(self, node: Node) -> GoStmt:
        return GoStmt(
            self._expr(_named(node)[0]), keyword=self._token(node, "go"), span=self._span(node)
        )

    def _stmt_defer_statement(self, node: Node) -> DeferStmt:
        return DeferStmt(
            self._expr(_named(node)[0]), keyword=self._token(node, "defer"), span=self._span(node)
        )

    def _stmt_return_statement(self, node: Node) -> ReturnStmt:
        values = _named(node)
        return ReturnStmt(
            self._exprs(values[0]) if values else (),
            keyword=self._token(node, "return"),
            span=self._span(node),
        )

    def _stmt_labeled_statement(self, node: Node) -> LabeledStmt:
        label = node.child_by_field_name("label")
        rest = [c for c in _named(node) if c != label]
        stmt = self._stmt(rest[0]) if rest else EmptyStmt(span=self._span(node))
        return LabeledStmt(self._ident(label), stmt, span=self._span(node))

    def _stmt_empty_labeled_statement(self, node: Node) -> LabeledStmt:
        label = node.child_by_field_name("label") or _named(node)[0]
        return LabeledStmt(self._ident(label), EmptyStmt(span=self._span(node)), span=self._span(node))

    def _stmt_empty_statement(self, node: Node) -> EmptyStmt:
        return EmptyStmt(span=self._span(node))

    def _stmt_if_statement(self, node: Node) -> IfStmt:
        init = node.child_by_field_name("initializer")
        alternative = node.child_by_field_name("alternative")
        if alternative is None:
            orelse = None
        elif alternative.type == "if_statement":
            orelse = self._stmt_if_statement(alternative)
        else:
            orelse = self._block(alternative)
        return IfStmt(
            self._stmt(init) if init is not None else None,
            self._expr(node.child_by_field_name("condition")),
            self._block(node.child_by_field_name("consequence")),
            orelse,
            keyword=self._token(node, "if"),
            span=self._span(node),
        )

    def _stmt_for_statement(self, node: Node) -> SyntaxNode:
        body_node = node.child_by_field_name("body")
        body = self._block(body_node)
        keyword = self._token(node, "for")
        header = [c for c in _named(node) if c != body_node]

        if not header:
            return ForStmt(None, None, None, body, keyword=keyword, span=self._span(node))

        clause = header[0]
        if clause.type == "for_clause":
            init = clause.child_by_field_name("initializer")
            cond = clause.child_by_field_name("condition")
            post = clause.child_by_field_name("update")
            return ForStmt(
                self._stmt(init) if init is not None else None,
                self._expr(cond) if cond is not None else None,
                self._stmt(post) if post is not None else None,
                body,
                keyword=keyword,
                span=self._span(node),
            )
        if clause.type == "range_clause":
            left = clause.child_by_field_name("left")
            lhs = self._exprs(left) if left is not None else ()
            if lhs:
                tok = ":=" if self._token(clause, ":=") is not None else "="
            else:
                tok = ""
            return RangeStmt(
                lhs[0] if len(lhs) > 0 else None,
                lhs[1] if len(lhs) > 1 else None,
                tok,
                self._expr(clause.child_by_field_name("right")),
                body,
                keyword=keyword,
                span=self._span(node),
            )
        return ForStmt(None, self._expr(clause), None, body, keyword=keyword, span=self._span(node))

    def _switch_body(self, node: Node, make_clause: Callable[[Node], SyntaxNode]) -> BlockStmt:
        clauses = tuple(make_clause(c) for c in _named(node) if c.type.endswith("_case"))
        return BlockStmt(
            clauses,
            lbrace=self._token(node, "{"),
            rbrace=self._last_token(node, "}"),
            span=self._span(node),
        )

    def _clause_body(self, node: Node, *header: Optional[Node]) -> tuple[SyntaxNode, ...]:
        return self._stmts([c for c in _named(node) if c not in header])

    def _case_clause(self, node: Node) -> CaseClause:
        if node.type == "default_case":
            values = None
            header: list[Optional[Node]] = []
        elif node.type == "expression_case":
            value = node.child_by_field_name("value")
            values = self._exprs(value)
            header = [value]
        elif node.type == "type_case":
            types = _field_children(node, "type")
            values = tuple(self._expr(t) for t in types)
            header = list(types)
        else:
            raise self._unsupported(node)
        return CaseClause(
            values,
            self._clause_body(node, *header),
            colon=self._token(node, ":"),
            span=self._span(node),
        )

    def _stmt_expression_switch_statement(self, node: Node) -> SwitchStmt:
        init = node.child_by_field_name("initializer")
        tag = node.child_by_field_name("value")
        return SwitchStmt(
            self._stmt(init) if init is not None else None,
            self._expr(tag) if tag is not None else None,
            self._switch_body(node, self._case_clause),
            keyword=self._token(node, "switch"),
            span=self._span(node),
        )

    def _stmt_type_switch_statement(self, node: Node) -> TypeSwitchStmt:
        init = node.child_by_field_name("initializer")
        alias = node.child_by_field_name("alias")
        value = node.child_by_field_name("value")
        guard = TypeAssertExpr(
            self._expr(value),
            None,
            lparen=self._token(node, "("),
            rparen=self._token(node, ")"),
            span=self._span(value),
        )
        if alias is not None:
            assign: SyntaxNode = AssignStmt(self._exprs(alias), ":=", (guard,), span=self._span(value))
        else:
            assign = ExprStmt(guard, span=self._span(value))
        return TypeSwitchStmt(
            self._stmt(init) if init is not None else None,
            assign,
            self._switch_body(node, self._case_clause),
            keyword=self._token(node, "switch"),
            span=self._span(node),
        )

    def _comm_clause(self, node: Node) -> CommClause:
        if node.type == "default_case":
            comm = None
            header: list[Optional[Node]] = []
        elif node.type == "communication_case":
            comm_node = node.child_by_field_name("communication")
            comm = self._stmt(comm_node)
            header = [comm_node]
        else:
            raise self._unsupported(node)
        return CommClause(
            comm,
            self._clause_body(node, *header),
            colon=self._token(node, ":"),
            span=self._span(node),
        )

    def _stmt_select_statement(self, node: Node) -> SelectStmt:
        return SelectStmt(
            self._switch_body(node, self._comm_clause),
            keyword=self._token(node, "select"),
            span=self._span(node),
        )

    # -- expressions and types ---------------------------------------------

    def _exprs(self, node: Node) -> tuple[SyntaxNode, ...]:
        """Elements of an expression_list (or a single expression)."""
        if node.type != "expression_list":
            return (self._expr(node),)
        return tuple(self._expr(c) for c in _named(node))

    def _ident(self, node: Node) -> Ident:
        return Ident(self._text(node), span=self._span(node))

    def _expr(self, node: Node) -> SyntaxNode:
        if node.type in _IDENTIFIER_TYPES:
            return self._ident(node)
        kind = _LITERAL_KINDS.get(node.type)
        if kind is not None:
            return BasicLit(kind, self._text(node), span=self._span(node))
        handler: Optional[Callable[[Node], SyntaxNode]] = getattr(
            self, f"_expr_{node.type}", None
        )
        if handler is None:
            raise self._unsupported(node)
        return handler(node)

    def _expr_parenthesized_expression(self, node: Node) -> ParenExpr:
        return ParenExpr(
            self._expr(_named(node)[0]),
            lparen=self._token(node, "("),
            rparen=self._last_token(node, ")"),
            span=self._span(node),
        )

    _expr_parenthesized_type = _expr_parenthesized_expression

    def _expr_selector_expression(self, node: Node) -> SelectorExpr:
        return SelectorExpr(
            self._expr(node.child_by_field_name("operand")),
            self._ident(node.child_by_field_name("field")),
            span=self._span(node),
        )

    def _expr_qualified_type(self, node: Node) -> SelectorExpr:
        return SelectorExpr(
            self._ident(node.child_by_field_name("package")),
            self._ident(node.child_by_field_name("name")),
            span=self._span(node),
        )

    def _expr_index_expression(self, node: Node) -> IndexExpr:
        return IndexExpr(
            self._expr(node.child_by_field_name("operand")),
            self._expr(node.child_by_field_name("index")),
            lbrack=self._token(node, "["),
            rbrack=self._last_token(node, "]"),
            span=self._span(node),
        )

    def _expr_slice_expression(self, node: Node) -> SliceExpr:
        def optional(field_name: str) -> Optional[SyntaxNode]:
            child = node.child_by_field_name(field_name)
            return self._expr(child) if child is not None else None

        return SliceExpr(
            self._expr(node.child_by_field_name("operand")),
            optional("start"),
            optional("end"),
            optional("capacity"),
            lbrack=self._token(node, "["),
            rbrack=self._last_token(node, "]"),
            span=self._span(node),
        )

    def _expr_type_assertion_expression(self, node: Node) -> TypeAssertExpr:
        return TypeAssertExpr(
            self._expr(node.child_by_field_name("operand")),
            self._expr(node.child_by_field_name("type")),
            lparen=self._token(node, "("),
            rparen=self._last_token(node, ")"),
            span=self._span(node),
        )

    def _expr_type_conversion_expression(self, node: Node) -> CallExpr:
        return CallExpr(
            self._expr(node.child_by_field_name("type")),
            (self._expr(node.child_by_field_name("operand")),),
            lparen=self._token(node, "("),
            rparen=self._last_token(node, ")"),
            span=self._span(node),
        )

    def _expr_call_expression(self, node: Node) -> CallExpr:
        fun = self._expr(node.child_by_field_name("function"))
        type_args = node.child_by_field_name("type_arguments")
        if type_args is not None:
            fun = self._instantiate(fun, type_args, self._span(node))

        arguments = node.child_by_field_name("arguments")
        args: list[SyntaxNode] = []
        ellipsis = None
        for child in _named(arguments):
            if child.type == "variadic_argument":
                args.append(self._expr(_named(child)[0]))
                ellipsis = self._token(child, "...")
            else:
                args.append(self._expr(child))
        return CallExpr(
            fun,
            tuple(args),
            lparen=self._token(arguments, "("),
            rparen=self._last_token(arguments, ")"),
            ellipsis=ellipsis,
            span=self._span(node),
        )

    def _instantiate(self, x: SyntaxNode, type_args: Node, span: Span) -> SyntaxNode:
        """Generic instantiation ``x[T1, T2]``."""
        indices = tuple(self._expr(c) for c in _named(type_args))
        lbrack = self._token(type_args, "[")
        rbrack = self._last_token(type_args, "]")
        if len(indices) == 1:
            return IndexExpr(x, indices[0], lbrack=lbrack, rbrack=rbrack, span=span)
        return IndexListExpr(x, indices, lbrack=lbrack, rbrack=rbrack, span=span)

    def _expr_generic_type(self, node: Node) -> SyntaxNode:
        return self._instantiate(
            self._expr(node.child_by_field_name("type")),
            node.child_by_field_name("type_arguments"),
            self._span(node),
        )

    def _expr_type_instantiation_expression(self, node: Node) -> SyntaxNode:
        parts = _named(node)
        indices = tuple(self._expr(c) for c in parts[1:])
        x = self._expr(parts[0])
        lbrack = self._token(node, "[")
        rbrack = self._last_token(node, "]")
        if len(indices) == 1:
            return IndexExpr(x, indices[0], lbrack=lbrack, rbrack=rbrack, span=self._span(node))
        return IndexListExpr(x, indices, lbrack=lbrack, rbrack=rbrack, span=self._span(node))

    def _expr_unary_expression(self, node: Node) -> SyntaxNode:
        operator = node.child_by_field_name("operator")
        operand = self._expr(node.child_by_field_name("operand"))
        op = self._text(operator)
        if op == "*":
            return StarExpr(operand, star=self._pos(operator.start_point), span=self._span(node))
        return UnaryExpr(op, operand, span=self._span(node))

    def _expr_binary_expression(self, node: Node) -> BinaryExpr:
        # Unrolled along the left spine; generated tables nest thousands deep.
        spine: list[Node] = []
        while node.type == "binary_expression":
            spine.append(node)
            node = node.child_by_field_name("left")
        expr = self._expr(node)
        for parent in reversed(spine):
            expr = BinaryExpr(
                expr,
                self._text(parent.child_by_field_name("operator")),
                self._expr(parent.child_by_field_name("right")),
                span=self._span(parent),
            )
        return expr

    def _element(self, node: Node) -> SyntaxNode:
        if node.type == "literal_element":
            node = _named(node)[0]
        return self._expr(node)

    def _expr_literal_value(self, node: Node, ltype: Optional[SyntaxNode] = None) -> CompositeLit:
        elts: list[SyntaxNode] = []
        for child in _named(node):
            if child.type == "keyed_element":
                key, value = _named(child)[:2]
                elts.append(
                    KeyValueExpr(
                        self._element(key),
                        self._element(value),
                        colon=self._token(child, ":"),
                        span=self._span(child),
                    )
                )
            else:
                elts.append(self._element(child))
        return CompositeLit(
            ltype,
            tuple(elts),
            lbrace=self._token(node, "{"),
            rbrace=self._last_token(node, "}"),
            span=self._span(node),
        )

    def _expr_composite_literal(self, node: Node) -> CompositeLit:
        literal = self._expr_literal_value(
            node.child_by_field_name("body"), self._expr(node.child_by_field_name("type"))
        )
        return CompositeLit(
            literal.type,
            literal.elts,
            lbrace=literal.lbrace,
            rbrace=literal.rbrace,
            span=self._span(node),
        )

    def _expr_func_literal(self, node: Node) -> FuncLit:
        return FuncLit(
            self._func_type(node),
            self._block(node.child_by_field_name("body")),
            span=self._span(node),
        )

    def _expr_function_type(self, node: Node) -> FuncType:
        return self._func_type(node)

    def _expr_pointer_type(self, node: Node) -> StarExpr:
        return StarExpr(
            self._expr(_named(node)[0]), star=self._token(node, "*"), span=self._span(node)
        )

    def _expr_array_type(self, node: Node) -> ArrayType:
        return ArrayType(
            self._expr(node.child_by_field_name("length")),
            self._expr(node.child_by_field_name("element")),
            span=self._span(node),
        )

    def _expr_implicit_length_array_type(self, node: Node) -> ArrayType:
        return ArrayType(
            EllipsisExpr(None, pos=self._token(node, "..."), span=self._span(node)),
            self._expr(node.child_by_field_name("element")),
            span=self._span(node),
        )

    def _expr_slice_type(self, node: Node) -> ArrayType:
        return ArrayType(None, self._expr(node.child_by_field_name("element")), span=self._span(node))

    def _expr_map_type(self, node: Node) -> MapType:
        return MapType(
            self._expr(node.child_by_field_name("key")),
            self._expr(node.child_by_field_name("value")),
            span=self._span(node),
        )

    def _expr_channel_type(self, node: Node) -> ChanType:
        return ChanType(
            self._expr(node.child_by_field_name("value")),
            keyword=self._pos(node.start_point),
            arrow=self._token(node, "<-"),
            span=self._span(node),
        )

    def _expr_negated_type(self, node: Node) -> UnaryExpr:
        return UnaryExpr("~", self._expr(_named(node)[0]), span=self._span(node))

    def _expr_type_elem(self, node: Node) -> SyntaxNode:
        """Union of type terms ``A | ~B``, folded left like a binary expression."""
        terms = [self._expr(c) for c in _named(node)]
        result = terms[0]
        for term in terms[1:]:
            result = BinaryExpr(result, "|", term, span=self._span(node))
        return result

    _expr_type_constraint = _expr_type_elem
    _expr_constraint_elem = _expr_type_elem

    def _expr_interface_type_name(self, node: Node) -> SyntaxNode:
        return self._expr(_named(node)[0])

    def _expr_struct_type(self, node: Node) -> StructType:
        fields = []
        field_list = _named(node)[0]
        for decl in _named(field_list):
            if decl.type != "field_declaration":
                raise self._unsupported(decl)
            names = tuple(self._ident(n) for n in _field_children(decl, "name"))
            ftype = self._expr(decl.child_by_field_name("type"))
            star = self._token(decl, "*")
            if not names and star is not None:
                ftype = StarExpr(ftype, star=star, span=self._span(decl))
            tag = decl.child_by_field_name("tag")
            fields.append(
                Field(
                    names,
                    ftype,
                    BasicLit("STRING", self._text(tag), span=self._span(tag)) if tag else None,
                    span=self._span(decl),
                )
            )
        return StructType(
            FieldList(
                tuple(fields),
                opening=self._token(field_list, "{"),
                closing=self._last_token(field_list, "}"),
                span=self._span(field_list),
            ),
            span=self._span(node),
        )

    def _expr_interface_type(self, node: Node) -> InterfaceType:
        fields = []
        for elem in _named(node):
            if elem.type in ("method_elem", "method_spec"):
                signature = self._func_type(elem)
                fields.append(
                    Field(
                        (self._ident(elem.child_by_field_name("name")),),
                        signature,
                        span=self._span(elem),
                    )
                )
            else:
                fields.append(Field((), self._expr(elem), span=self._span(elem)))
        return InterfaceType(
            FieldList(
                tuple(fields),
                opening=self._token(node, "{"),
                closing=self._last_token(node, "}"),
                span=self._span(node),
            ),
            span=self._span(node),
        )

