"""Go lexical classification, following the token classes of go/token."""

from __future__ import annotations

from ..metrics.lexicon import LexicalClassifier

# Operators and delimiters. Keywords (var, const, break, goto ...) are not
# operators.
GO_OPERATORS = frozenset(
    {
        "+", "-", "*", "/", "%",
        "&", "|", "^", "<<", ">>", "&^",
        "+=", "-=", "*=", "/=", "%=",
        "&=", "|=", "^=", "<<=", ">>=", "&^=",
        "&&", "||", "<-", "++", "--",
        "==", "<", ">", "=", "!",
        "!=", "<=", ">=", ":=", "...",
        "(", "[", "{", ",", ".",
        ")", "]", "}", ";", ":",
        "~",
    }
)  # fmt: skip

GO_KEYWORDS = frozenset(
    {
        "break", "case", "chan", "const", "continue",
        "default", "defer", "else", "fallthrough", "for",
        "func", "go", "goto", "if", "import",
        "interface", "map", "package", "range", "return",
        "select", "struct", "switch", "type", "var",
    }
)  # fmt: skip

GO_LITERAL_KINDS = frozenset({"INT", "FLOAT", "IMAG", "CHAR", "STRING"})


class GoLexicalClassifier(LexicalClassifier):
    """LexicalClassifier for Go source."""

    def is_operator(self, symbol: str) -> bool:
        return symbol in GO_OPERATORS

    def is_literal(self, kind: str) -> bool:
        return kind in GO_LITERAL_KINDS

    def is_keyword(self, symbol: str) -> bool:
        return symbol in GO_KEYWORDS


GO_CLASSIFIER = GoLexicalClassifier()
