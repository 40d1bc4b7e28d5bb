"""Identifier resolution for Go files, following go/parser's object resolution.

Every identifier of a converted file receives a binding: True when it is
declared in the file and visible at the point of use, False otherwise
(builtins, imported package names, selector fields, unknown labels).

Scoping rules:

    - top-level names live in the file scope; references that miss every
      local scope are resolved against it once the whole file has been seen,
      so forward references to later declarations are bound
    - methods, ``init`` and imports are never declared in the file scope
    - a function scope holds receiver, type parameters, parameters, results
      and the top-level statements of the body
    - blocks, if/for/range/switch/type switch statements and case clauses
      open nested scopes
    - ``:=`` binds every identifier on its left side, including ``_``;
      ``_`` is never inserted into a scope and a use of ``_`` stays unbound
    - var/const values are resolved before the names they initialize are
      declared; a type name is declared before its definition is walked
    - labels have their own per-function scope and resolve at the end of the
      function body
    - composite literal keys are looked up immediately and never deferred
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..metrics.lexicon import BindingTable
from ..metrics.nodes import (
    AssignStmt,
    BinaryExpr,
    BlockStmt,
    BranchStmt,
    CaseClause,
    CommClause,
    CompositeLit,
    FieldList,
    File,
    ForStmt,
    FuncDecl,
    FuncLit,
    FuncType,
    GenDecl,
    Ident,
    IfStmt,
    IndexExpr,
    IndexListExpr,
    InterfaceType,
    KeyValueExpr,
    LabeledStmt,
    RangeStmt,
    SelectorExpr,
    SelectStmt,
    StarExpr,
    StructType,
    SwitchStmt,
    SyntaxNode,
    TypeSpec,
    TypeSwitchStmt,
    ValueSpec,
    iter_child_nodes,
    walk,
)

logger = logging.getLogger(__name__)


class _Scope:
    def __init__(self, outer: Optional[_Scope]):
        self.outer = outer
        self.names: set[str] = set()


class GoResolver:
    """Computes the BindingTable of one Go file.

    Usage:
        bindings = GoResolver(file_node).resolve()
    """

    def __init__(self, file: File):
        self._file = file
        self._table = BindingTable()
        self._top: Optional[_Scope] = None
        self._file_scope: Optional[_Scope] = None
        self._unresolved: list[Ident] = []
        self._label_scope: Optional[_Scope] = None
        self._targets: list[list[Ident]] = []

    def resolve(self) -> BindingTable:
        for node in walk(self._file):
            if isinstance(node, Ident):
                self._table.bind(node, False)

        self._file_scope = self._open_scope()
        for decl in self._file.decls:
            self.visit(decl)
        self._close_scope()

        for ident in self._unresolved:
            if ident.name in self._file_scope.names:
                self._table.bind(ident, True)

        logger.debug(
            f"Resolved {len(self._table)} identifiers "
            f"({len(self._unresolved)} deferred to file scope)"
        )
        return self._table

    # -- scopes ------------------------------------------------------------

    def _open_scope(self) -> _Scope:
        self._top = _Scope(self._top)
        return self._top

    def _close_scope(self) -> None:
        assert self._top is not None
        self._top = self._top.outer

    def _open_label_scope(self) -> None:
        self._label_scope = _Scope(self._label_scope)
        self._targets.append([])

    def _close_label_scope(self) -> None:
        assert self._label_scope is not None
        for ident in self._targets.pop():
            if ident.name in self._label_scope.names:
                self._table.bind(ident, True)
        self._label_scope = self._label_scope.outer

    def _declare(self, idents: Iterable[Ident], scope: Optional[_Scope] = None) -> None:
        scope = scope or self._top
        for ident in idents:
            self._table.bind(ident, True)
            if ident.name != "_":
                scope.names.add(ident.name)

    def _resolve(self, ident: Ident, collect: bool = True) -> None:
        if ident.name == "_":
            return
        scope = self._top
        while scope is not None:
            if ident.name in scope.names:
                self._table.bind(ident, True)
                return
            scope = scope.outer
        if collect:
            self._unresolved.append(ident)

    def _short_var_decl(self, lhs: Iterable[SyntaxNode]) -> None:
        self._declare(x for x in lhs if isinstance(x, Ident))

    # -- field lists -------------------------------------------------------

    def _resolve_list(self, fields: Optional[FieldList]) -> None:
        if fields is None:
            return
        for f in fields.fields:
            self.visit(f.type)

    def _declare_list(self, fields: Optional[FieldList]) -> None:
        if fields is None:
            return
        for f in fields.fields:
            self._declare(f.names)

    def _walk_type_params(self, fields: Optional[FieldList]) -> None:
        self._declare_list(fields)
        self._resolve_list(fields)

    def _walk_func_type(self, ftype: FuncType) -> None:
        self._resolve_list(ftype.params)
        self._resolve_list(ftype.results)
        self._declare_list(ftype.params)
        self._declare_list(ftype.results)

    def _walk_body(self, body: Optional[BlockStmt]) -> None:
        if body is None:
            return
        self._open_label_scope()
        self.visit_all(body.stmts)
        self._close_label_scope()

    def _walk_recv(self, recv: Optional[FieldList]) -> None:
        if recv is None or not recv.fields:
            return
        rtype = recv.fields[0].type
        if isinstance(rtype, StarExpr):
            rtype = rtype.x

        to_resolve: list[Optional[SyntaxNode]] = []
        if isinstance(rtype, (IndexExpr, IndexListExpr)):
            params = (rtype.index,) if isinstance(rtype, IndexExpr) else rtype.indices
            to_resolve.append(rtype.x)
            for param in params:
                if isinstance(param, Ident):
                    # Receiver type parameters enter the scope, the
                    # identifier itself stays unbound.
                    if param.name != "_":
                        self._top.names.add(param.name)
                else:
                    to_resolve.append(param)
        else:
            to_resolve.append(rtype)

        for node in to_resolve:
            self.visit(node)
        for f in recv.fields[1:]:
            self.visit(f.type)

    # -- dispatch ----------------------------------------------------------

    def visit(self, node: Optional[SyntaxNode]) -> None:
        if node is None:
            return
        handler = getattr(self, f"visit_{type(node).__name__}", None)
        if handler is not None:
            handler(node)
        else:
            self.visit_all(iter_child_nodes(node))

    def visit_all(self, nodes: Iterable[SyntaxNode]) -> None:
        for node in nodes:
            self.visit(node)

    # -- declarations ------------------------------------------------------

    def visit_FuncDecl(self, node: FuncDecl) -> None:
        self._open_scope()
        self._walk_recv(node.recv)
        self._walk_type_params(node.type.type_params)
        self._resolve_list(node.type.params)
        self._resolve_list(node.type.results)
        self._declare_list(node.recv)
        self._declare_list(node.type.params)
        self._declare_list(node.type.results)
        self._walk_body(node.body)
        self._close_scope()

        if node.recv is None and node.name.name != "init":
            self._declare([node.name], self._file_scope)

    def visit_GenDecl(self, node: GenDecl) -> None:
        if node.tok in ("const", "var"):
            for spec in node.specs:
                assert isinstance(spec, ValueSpec)
                self.visit_all(spec.values)
                self.visit(spec.type)
                self._declare(spec.names)
        elif node.tok == "type":
            for spec in node.specs:
                assert isinstance(spec, TypeSpec)
                self._declare([spec.name])
                if spec.type_params is not None:
                    self._open_scope()
                    self._walk_type_params(spec.type_params)
                    self.visit(spec.type)
                    self._close_scope()
                else:
                    self.visit(spec.type)
        # Imports declare nothing.

    # -- expressions and types ---------------------------------------------

    def visit_Ident(self, node: Ident) -> None:
        self._resolve(node)

    def visit_BinaryExpr(self, node: BinaryExpr) -> None:
        spine = []
        while isinstance(node, BinaryExpr):
            spine.append(node)
            node = node.x
        self.visit(node)
        for expr in reversed(spine):
            self.visit(expr.y)

    def visit_SelectorExpr(self, node: SelectorExpr) -> None:
        self.visit(node.x)

    def visit_FuncLit(self, node: FuncLit) -> None:
        self._open_scope()
        self._walk_func_type(node.type)
        self._walk_body(node.body)
        self._close_scope()

    def visit_FuncType(self, node: FuncType) -> None:
        self._open_scope()
        self._walk_func_type(node)
        self._close_scope()

    def visit_StructType(self, node: StructType) -> None:
        self._open_scope()
        self._resolve_list(node.fields)
        self._declare_list(node.fields)
        self._close_scope()

    def visit_InterfaceType(self, node: InterfaceType) -> None:
        self._open_scope()
        self._resolve_list(node.methods)
        self._declare_list(node.methods)
        self._close_scope()

    def visit_CompositeLit(self, node: CompositeLit) -> None:
        self.visit(node.type)
        for elt in node.elts:
            if isinstance(elt, KeyValueExpr):
                if isinstance(elt.key, Ident):
                    self._resolve(elt.key, collect=False)
                else:
                    self.visit(elt.key)
                self.visit(elt.value)
            else:
                self.visit(elt)

    # -- statements --------------------------------------------------------

    def visit_LabeledStmt(self, node: LabeledStmt) -> None:
        self._declare([node.label], self._label_scope)
        self.visit(node.stmt)

    def visit_BranchStmt(self, node: BranchStmt) -> None:
        if node.tok != "fallthrough" and node.label is not None and self._targets:
            self._targets[-1].append(node.label)

    def visit_AssignStmt(self, node: AssignStmt) -> None:
        self.visit_all(node.rhs)
        if node.tok == ":=":
            self._short_var_decl(node.lhs)
        else:
            self.visit_all(node.lhs)

    def visit_BlockStmt(self, node: BlockStmt) -> None:
        self._open_scope()
        self.visit_all(node.stmts)
        self._close_scope()

    def visit_IfStmt(self, node: IfStmt) -> None:
        self._open_scope()
        self.visit(node.init)
        self.visit(node.cond)
        self.visit(node.body)
        self.visit(node.orelse)
        self._close_scope()

    def visit_CaseClause(self, node: CaseClause) -> None:
        self.visit_all(node.values or ())
        self._open_scope()
        self.visit_all(node.body)
        self._close_scope()

    def visit_SwitchStmt(self, node: SwitchStmt) -> None:
        self._open_scope()
        self.visit(node.init)
        self.visit(node.tag)
        self.visit_all(node.body.stmts)
        self._close_scope()

    def visit_TypeSwitchStmt(self, node: TypeSwitchStmt) -> None:
        self._open_scope()
        self.visit(node.init)
        self._open_scope()
        self.visit(node.assign)
        self.visit_all(node.body.stmts)
        self._close_scope()
        self._close_scope()

    def visit_CommClause(self, node: CommClause) -> None:
        self._open_scope()
        self.visit(node.comm)
        self.visit_all(node.body)
        self._close_scope()

    def visit_SelectStmt(self, node: SelectStmt) -> None:
        self.visit_all(node.body.stmts)

    def visit_ForStmt(self, node: ForStmt) -> None:
        self._open_scope()
        self.visit(node.init)
        self.visit(node.cond)
        self.visit(node.post)
        self.visit(node.body)
        self._close_scope()

    def visit_RangeStmt(self, node: RangeStmt) -> None:
        self._open_scope()
        self.visit(node.x)
        lhs = [e for e in (node.key, node.value) if e is not None]
        if node.tok == ":=":
            self.visit_all(e for e in lhs if not isinstance(e, Ident))
            self._short_var_decl(lhs)
        else:
            self.visit_all(lhs)
        self.visit(node.body)
        self._close_scope()
