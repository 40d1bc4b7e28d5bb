"""Tests for function location and the metric pass."""

import logging

import pytest

from complexity_insight.config import ThresholdConfig
from complexity_insight.exceptions import MissingPositionError, UnresolvedBindingError
from complexity_insight.metrics import compute_metrics, locate_functions, run_pass
from complexity_insight.metrics import nodes as n

POS = n.Position(1, 1)


class TestLocateFunctions:
    def test_declaration_order(self, tb):
        source = tb.source(tb.func("a", start=1), tb.func("b", start=3), tb.func("c", start=5))
        units = list(locate_functions(source))
        assert [u.name for u in units] == ["a", "b", "c"]
        assert [u.line for u in units] == [1, 3, 5]
        assert all(u.file == "a.go" for u in units)

    def test_closures_are_not_units(self, tb):
        closure = n.FuncLit(n.FuncType(n.FieldList(opening=POS, closing=POS), keyword=POS), tb.block())
        source = tb.source(tb.func("outer", n.ExprStmt(closure)))
        assert [u.name for u in locate_functions(source)] == ["outer"]

    def test_type_and_var_declarations_are_skipped(self, tb):
        var = n.GenDecl("var", (n.ValueSpec((tb.bound("x"),), tb.free("int")),))
        source = tb.source(var, tb.func("f"))
        assert [u.name for u in locate_functions(source)] == ["f"]

    def test_missing_span_raises(self, tb):
        decl = n.FuncDecl(None, n.Ident("f"), n.FuncType(n.FieldList()), tb.block())
        with pytest.raises(MissingPositionError):
            list(locate_functions(tb.source(decl)))


class TestComputeMetrics:
    def test_empty_function(self, tb):
        source = tb.source(tb.func("f", start=5))
        (unit,) = locate_functions(source)
        m = compute_metrics(unit, ThresholdConfig(), source.classifier, source.resolver)
        assert m.name == "f"
        assert (m.line, m.col) == (5, 1)
        assert m.cyclomatic_complexity == 1
        assert m.halstead_volume == pytest.approx(8.0)
        assert m.halstead_difficulty == 0.0
        assert m.loc == 1
        assert m.const_decl_loc == 0
        assert m.maintainability_index == 93
        assert not m.too_complex
        assert not m.not_maintainable
        assert not m.flagged

    def test_complexity_ceiling_is_exclusive(self, tb):
        source = tb.source(tb.func("f", tb.if_(tb.free("true"))))
        (unit,) = locate_functions(source)
        at = compute_metrics(unit, ThresholdConfig(cyclo_over=2), source.classifier, source.resolver)
        over = compute_metrics(unit, ThresholdConfig(cyclo_over=1), source.classifier, source.resolver)
        assert not at.too_complex
        assert over.too_complex

    def test_maintainability_floor_is_exclusive(self, tb):
        source = tb.source(tb.func("f"))
        (unit,) = locate_functions(source)
        at = compute_metrics(unit, ThresholdConfig(maint_under=93), source.classifier, source.resolver)
        below = compute_metrics(unit, ThresholdConfig(maint_under=94), source.classifier, source.resolver)
        assert not at.not_maintainable
        assert below.not_maintainable
        assert below.flagged


class TestRunPass:
    def test_emits_in_file_then_declaration_order(self, tb):
        first = tb.source(tb.func("a"), tb.func("b", start=2), path="x.go")
        second = tb.source(tb.func("c"), path="y.go")
        seen = []
        result = run_pass([first, second], ThresholdConfig(), seen.append)
        assert [(m.file, m.name) for m in seen] == [("x.go", "a"), ("x.go", "b"), ("y.go", "c")]
        assert list(result.metrics) == seen

    def test_default_sink_discards(self, tb):
        result = run_pass([tb.source(tb.func("f"))], ThresholdConfig())
        assert len(result.metrics) == 1

    def test_flagged_records(self, tb):
        source = tb.source(tb.func("simple"), tb.func("branchy", tb.if_(tb.free("ok")), start=2))
        result = run_pass([source], ThresholdConfig(cyclo_over=1))
        assert [m.name for m in result.flagged] == ["branchy"]
        assert result.failed

    def test_clean_pass_is_not_failed(self, tb):
        result = run_pass([tb.source(tb.func("f"))], ThresholdConfig())
        assert not result.failed

    def test_is_idempotent(self, tb):
        source = tb.source(tb.func("f", tb.for_(tb.if_(tb.free("ok"))), start=1, end=9))
        first = run_pass([source], ThresholdConfig())
        second = run_pass([source], ThresholdConfig())
        assert first.metrics == second.metrics

    def test_missing_binding_aborts_without_output(self, tb):
        good = tb.source(tb.func("good"), path="good.go")
        bad = tb.source(tb.func("bad", n.ExprStmt(n.Ident("ghost"))), path="bad.go")
        seen = []
        with pytest.raises(UnresolvedBindingError):
            run_pass([good, bad], ThresholdConfig(), seen.append)
        assert seen == []

    def test_abort_is_logged(self, tb, caplog):
        bad = tb.source(tb.func("bad", n.ExprStmt(n.Ident("ghost"))), path="bad.go")
        with caplog.at_level(logging.ERROR, logger="complexity_insight"):
            with pytest.raises(UnresolvedBindingError):
                run_pass([bad], ThresholdConfig())
        assert "bad.go" in caplog.text
