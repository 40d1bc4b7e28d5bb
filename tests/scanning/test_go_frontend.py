"""End-to-end tests of the Go front end against real tree-sitter parses."""

import pytest

from complexity_insight.config import ThresholdConfig
from complexity_insight.exceptions import ParsingError
from complexity_insight.metrics import nodes as n
from complexity_insight.metrics import run_pass, tally_tokens
from complexity_insight.scanning import (
    GO_CLASSIFIER,
    TREE_SITTER_AVAILABLE,
    GoResolver,
    GoTreeConverter,
    TreeSitterParser,
    get_supported_languages,
    load_source,
    load_sources,
)

pytestmark = pytest.mark.skipif(
    not TREE_SITTER_AVAILABLE or "go" not in get_supported_languages(),
    reason="tree-sitter-go not installed",
)


def _convert(code: str) -> n.File:
    source = code.encode()
    tree = TreeSitterParser().parse(source, "go")
    return GoTreeConverter(source, "x.go").convert(tree)


def _func(root: n.File, name: str) -> n.FuncDecl:
    return next(d for d in root.decls if isinstance(d, n.FuncDecl) and d.name.name == name)


class TestParser:
    def test_go_is_supported(self):
        assert TreeSitterParser().is_language_supported("go")

    def test_unknown_language_returns_none(self):
        assert TreeSitterParser().parse(b"x", "cobol") is None


class TestGoldenFile:
    @pytest.fixture
    def by_name(self, go_fixture):
        result = run_pass([load_source(go_fixture)], ThresholdConfig())
        return {m.name: m for m in result.metrics}

    def test_functions_in_declaration_order(self, go_fixture):
        result = run_pass([load_source(go_fixture)], ThresholdConfig())
        assert [m.name for m in result.metrics] == ["f0", "f1", "f2", "f3", "f4", "f5"]

    def test_cyclomatic_complexity(self, by_name):
        expected = {"f0": 1, "f1": 3, "f2": 8, "f3": 4, "f4": 2, "f5": 1}
        assert {name: m.cyclomatic_complexity for name, m in by_name.items()} == expected

    def test_halstead_of_raw_string_function(self, by_name):
        f5 = by_name["f5"]
        assert f"{f5.halstead_difficulty:.3f}" == "3.750"
        assert f"{f5.halstead_volume:.3f}" == "39.863"

    def test_positions_and_lines(self, by_name):
        f5 = by_name["f5"]
        assert (f5.line, f5.col) == (62, 1)
        assert f5.loc == 7
        assert f5.const_decl_loc == 4
        assert by_name["f0"].loc == 2

    def test_nothing_flagged_with_defaults(self, by_name):
        assert not any(m.flagged for m in by_name.values())


class TestConverter:
    def test_method_declaration(self):
        root = _convert("package p\ntype T struct{}\nfunc (t *T) Run(n int) error { return nil }\n")
        decl = _func(root, "Run")
        assert decl.recv is not None
        assert decl.recv.fields[0].names[0].name == "t"
        assert isinstance(decl.recv.fields[0].type, n.StarExpr)

    def test_else_if_chain_shape(self):
        root = _convert(
            "package p\nfunc f(a, b bool) {\n\tif a {\n\t} else if b {\n\t} else {\n\t}\n}\n"
        )
        stmt = _func(root, "f").body.stmts[0]
        assert isinstance(stmt, n.IfStmt)
        assert isinstance(stmt.orelse, n.IfStmt)
        assert isinstance(stmt.orelse.orelse, n.BlockStmt)

    def test_receive_and_send(self):
        root = _convert("package p\nfunc f(ch chan int) {\n\tch <- 1\n\t<-ch\n}\n")
        send, recv = _func(root, "f").body.stmts
        assert isinstance(send, n.SendStmt)
        assert isinstance(recv, n.ExprStmt)
        assert isinstance(recv.x, n.UnaryExpr) and recv.x.op == "<-"

    def test_raw_string_keeps_its_text(self):
        root = _convert("package p\nconst s = `a\nb`\n")
        spec = root.decls[0].specs[0]
        assert spec.values[0].kind == "STRING"
        assert spec.values[0].value == "`a\nb`"

    def test_comments_are_ignored(self):
        root = _convert("package p\n\n// doc\nfunc f() {\n\t// inside\n\tg() // trailing\n}\n")
        assert len(_func(root, "f").body.stmts) == 1

    def test_syntax_error_raises(self):
        with pytest.raises(ParsingError):
            _convert("package p\nfunc f( {\n")

    def test_type_case_with_several_types(self):
        code = (
            "package p\nfunc f(v any) int {\n\tswitch v.(type) {\n"
            "\tcase string, []byte:\n\t\treturn 1\n\t}\n\treturn 0\n}\n"
        )
        switch = _func(_convert(code), "f").body.stmts[0]
        assert isinstance(switch, n.TypeSwitchStmt)
        clause = switch.body.stmts[0]
        assert len(clause.values) == 2
        assert clause.values[0].name == "string"

    def test_value_spec_with_several_names(self):
        code = 'package p\nfunc f() {\n\tconst name, id = "x", 17\n}\n'
        spec = _func(_convert(code), "f").body.stmts[0].decl.specs[0]
        assert [ident.name for ident in spec.names] == ["name", "id"]
        assert len(spec.values) == 2

    def test_struct_field_with_several_names(self):
        root = _convert("package p\ntype T struct {\n\tx, y int\n}\n")
        field = root.decls[0].specs[0].type.fields.fields[0]
        assert [ident.name for ident in field.names] == ["x", "y"]

    def test_long_parameter_group_stays_one_field(self):
        names = ["trap"] + [f"a{i}" for i in range(1, 10)]
        code = f"package p\nfunc f({', '.join(names)} uintptr) {{}}\n"
        fields = _func(_convert(code), "f").type.params.fields
        assert len(fields) == 1
        assert [ident.name for ident in fields[0].names] == names
        assert fields[0].type.name == "uintptr"

    def test_unnamed_parameters_stay_types(self):
        fields = _func(_convert("package p\nfunc f(int, string) {}\n"), "f").type.params.fields
        assert [f.names for f in fields] == [(), ()]
        assert [f.type.name for f in fields] == ["int", "string"]

    def test_long_concatenation_is_left_nested(self):
        terms = " + ".join(['"a"'] * 1200)
        code = f"package p\nfunc f() string {{\n\treturn {terms}\n}}\n"
        expr = _func(_convert(code), "f").body.stmts[0].results[0]
        depth = 0
        while isinstance(expr, n.BinaryExpr):
            assert expr.op == "+"
            expr = expr.x
            depth += 1
        assert depth == 1199
        assert expr.value == '"a"'


class TestResolution:
    def _tally(self, code: str, name: str):
        root = _convert(code)
        return tally_tokens(_func(root, name), GO_CLASSIFIER, GoResolver(root).resolve())

    def test_locals_are_operands_and_builtins_operators(self):
        tally = self._tally(
            'package p\nimport "fmt"\nfunc f(x []int) {\n\ty := len(x)\n\tfmt.Println(y)\n}\n',
            "f",
        )
        assert tally.operands["x"] == 1
        assert tally.operands["y"] == 2
        assert tally.operators["len"] == 1
        assert tally.operators["fmt"] == 1
        assert tally.operators["Println"] == 1

    def test_forward_reference_to_top_level_function(self):
        tally = self._tally("package p\nfunc f() { g() }\nfunc g() {}\n", "f")
        assert tally.operands["g"] == 1

    def test_methods_are_not_declared(self):
        code = "package p\ntype T int\nfunc (T) m() {}\nfunc f() { m() }\n"
        tally = self._tally(code, "f")
        assert tally.operators["m"] == 1

    def test_selector_field_is_unbound(self):
        code = "package p\ntype T struct{ n int }\nfunc f(t T) int { return t.n }\n"
        tally = self._tally(code, "f")
        assert tally.operands["t"] == 1
        assert tally.operators["n"] == 1

    def test_block_scope_ends(self):
        code = "package p\nfunc f() {\n\t{\n\t\tv := 1\n\t\t_ = v\n\t}\n\tv()\n}\n"
        tally = self._tally(code, "f")
        assert tally.operands["v"] == 2
        assert tally.operators["v"] == 1

    def test_names_of_multi_name_const(self):
        tally = self._tally('package p\nfunc f() {\n\tconst name, id = "x", 17\n}\n', "f")
        assert tally.operands == {"const": 1, "name": 1, "id": 1, '"x"': 2, "17": 2}

    def test_long_parameter_group_declares_every_name(self):
        names = ", ".join(["trap"] + [f"a{i}" for i in range(1, 10)])
        tally = self._tally(f"package p\nfunc f({names} uintptr) {{ use(trap) }}\n", "f")
        assert tally.operands["trap"] == 1
        assert "trap" not in tally.operators

    def test_type_switch_with_several_types_per_case(self, tmp_path):
        path = tmp_path / "x.go"
        path.write_text(
            "package p\nfunc f(v any) int {\n\tswitch v.(type) {\n"
            "\tcase string, []byte:\n\t\treturn 1\n\t}\n\treturn 0\n}\n"
        )
        result = run_pass([load_source(path)], ThresholdConfig())
        assert [m.name for m in result.metrics] == ["f"]

    def test_long_concatenation(self):
        terms = " + ".join(['"a"'] * 1200)
        tally = self._tally(f"package p\nfunc f() string {{\n\treturn {terms}\n}}\n", "f")
        assert tally.operators["+"] == 1199
        assert tally.operands['"a"'] == 1200

    def test_every_identifier_has_a_binding(self, go_fixture):
        source = load_source(go_fixture)
        idents = [node for node in n.walk(source.root) if isinstance(node, n.Ident)]
        assert idents
        assert all(ident in source.resolver for ident in idents)


class TestLoader:
    def test_sources_keep_input_order(self, tmp_path):
        paths = []
        for name in ("b.go", "a.go", "c.go"):
            path = tmp_path / name
            path.write_text(f"package p\nfunc {name[0]}() {{}}\n")
            paths.append(path)
        sources = load_sources(paths, workers=3)
        assert [s.path for s in sources] == [str(p) for p in paths]

    def test_broken_file_aborts(self, tmp_path):
        good = tmp_path / "good.go"
        good.write_text("package p\n")
        bad = tmp_path / "bad.go"
        bad.write_text("package p\nfunc {\n")
        with pytest.raises(ParsingError):
            load_sources([good, bad])
