"""Language services the token tally depends on.

The tally never hardcodes a language's operator set or its scoping rules.
A front end supplies a ``LexicalClassifier`` (which symbols are operators,
which token kinds are literals) and a ``SymbolResolver`` (whether an
identifier occurrence is bound to a declaration in scope).
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..exceptions import UnresolvedBindingError
from .nodes import Ident


class LexicalClassifier(ABC):
    """Classifies raw token text for a source language."""

    @abstractmethod
    def is_operator(self, symbol: str) -> bool:
        """Return True if ``symbol`` is an operator token (``+``, ``:=``, ``&&`` ...)."""

    @abstractmethod
    def is_literal(self, kind: str) -> bool:
        """Return True if ``kind`` names a literal token kind (INT, STRING ...)."""


class SymbolResolver(ABC):
    """Answers identifier binding queries for one parsed file."""

    @abstractmethod
    def is_bound(self, ident: Ident) -> bool:
        """Return True if ``ident`` refers to a declaration in scope.

        Raises:
            UnresolvedBindingError: If the resolver has no data for ``ident``.
        """


class BindingTable(SymbolResolver):
    """SymbolResolver backed by a precomputed identifier -> bound mapping.

    Identifiers are keyed by identity, so the table only answers for the
    exact node objects it was filled with.
    """

    def __init__(self) -> None:
        self._bindings: dict[Ident, bool] = {}

    def bind(self, ident: Ident, bound: bool) -> None:
        self._bindings[ident] = bound

    def is_bound(self, ident: Ident) -> bool:
        try:
            return self._bindings[ident]
        except KeyError:
            line = ident.span.start.line if ident.span is not None else None
            raise UnresolvedBindingError(ident.name, line) from None

    def __contains__(self, ident: object) -> bool:
        return ident in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)
