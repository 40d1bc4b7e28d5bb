"""Tests for the formatters package."""

import io
import xml.etree.ElementTree as ET

import pytest
from rich.console import Console

from complexity_insight.formatters import (
    CheckstyleFormatter,
    CsvFormatter,
    RichFormatter,
    TextFormatter,
    get_formatter,
    violation_messages,
)
from complexity_insight.metrics import FuncMetrics


def _metrics(name="f", file="a.go", line=3, cyclo=1, mi=90, complex_=False, unmaintainable=False):
    return FuncMetrics(
        file=file,
        line=line,
        col=1,
        name=name,
        cyclomatic_complexity=cyclo,
        maintainability_index=mi,
        halstead_difficulty=3.75,
        halstead_volume=39.86314,
        time_to_code_hours=0.00231,
        loc=7,
        const_decl_loc=4,
        too_complex=complex_,
        not_maintainable=unmaintainable,
    )


CLEAN = _metrics("clean")
COMPLEX = _metrics("busy", line=10, cyclo=14, complex_=True)
BOTH = _metrics("legacy", file="b.go", line=20, cyclo=30, mi=5, complex_=True, unmaintainable=True)


class TestViolationMessages:
    def test_clean_has_none(self):
        assert violation_messages(CLEAN) == []

    def test_both_flags_complexity_first(self):
        assert violation_messages(BOTH) == [
            "func legacy seems to be complex (cyclomatic complexity=30)",
            "func legacy seems to have low maintainability (maintainability index=5)",
        ]


class TestTextFormatter:
    def test_one_line_per_violation(self):
        output = TextFormatter().format([CLEAN, COMPLEX, BOTH])
        assert output.splitlines() == [
            "a.go:10:1: func busy seems to be complex (cyclomatic complexity=14)",
            "b.go:20:1: func legacy seems to be complex (cyclomatic complexity=30)",
            "b.go:20:1: func legacy seems to have low maintainability (maintainability index=5)",
        ]

    def test_diagnostics_cover_every_function(self):
        output = TextFormatter(diagnostics=True).format([CLEAN])
        assert output == (
            "a.go:3:1: Cyclomatic complexity: 1, Halstead difficulty: 3.750, volume: 39.863\n"
        )

    def test_render_prints(self, capsys):
        TextFormatter().render([COMPLEX])
        assert "busy" in capsys.readouterr().out


class TestCsvFormatter:
    def test_flagged_rows_only(self):
        output = CsvFormatter().format([CLEAN, COMPLEX, BOTH])
        assert output.splitlines() == [
            "a.go,10,busy,14,90,3.750,39.863,0.002,7,4,true,false",
            "b.go,20,legacy,30,5,3.750,39.863,0.002,7,4,true,true",
        ]

    def test_empty(self):
        assert CsvFormatter().format([CLEAN]) == ""

    def test_paths_with_commas_are_quoted(self):
        odd = _metrics("f", file="dir,x/a.go", complex_=True)
        assert CsvFormatter().format([odd]).startswith('"dir,x/a.go",3,f,')


class TestCheckstyleFormatter:
    def test_grouped_by_file(self):
        output = CheckstyleFormatter().format([COMPLEX, BOTH, CLEAN])
        assert output.startswith('<?xml version="1.0" encoding="UTF-8"?>\n')
        root = ET.fromstring(output.split("\n", 1)[1])
        assert root.tag == "checkstyle"
        assert root.get("version") == "5.0"
        files = root.findall("file")
        assert [f.get("name") for f in files] == ["a.go", "b.go"]
        assert len(files[0].findall("error")) == 1
        assert len(files[1].findall("error")) == 2

        error = files[0].find("error")
        assert error.get("line") == "10"
        assert error.get("column") == "1"
        assert error.get("severity") == "error"
        assert error.get("source") == "complexity"
        assert "cyclomatic complexity=14" in error.get("message")

    def test_no_violations(self):
        output = CheckstyleFormatter().format([CLEAN])
        root = ET.fromstring(output.split("\n", 1)[1])
        assert root.findall("file") == []


class TestRichFormatter:
    def test_format_contains_all_functions(self):
        output = RichFormatter().format([CLEAN, COMPLEX, BOTH])
        for name in ("clean", "busy", "legacy"):
            assert name in output

    def test_worst_first(self):
        output = RichFormatter().format([CLEAN, COMPLEX, BOTH])
        assert output.index("legacy") < output.index("busy") < output.index("clean")

    def test_render_summary(self):
        buffer = io.StringIO()
        RichFormatter(console=Console(file=buffer, width=120)).render([CLEAN, COMPLEX])
        assert "1 of 2 functions flagged" in buffer.getvalue()

    def test_brackets_in_paths_are_kept(self):
        output = RichFormatter().format([_metrics(file="[x]/a.go")])
        assert "[x]/a.go:3" in output


class TestGetFormatter:
    @pytest.mark.parametrize(
        "name,cls",
        [
            ("txt", TextFormatter),
            ("diagnostics", TextFormatter),
            ("csv", CsvFormatter),
            ("checkstyle", CheckstyleFormatter),
            ("table", RichFormatter),
        ],
    )
    def test_known_names(self, name, cls):
        assert isinstance(get_formatter(name), cls)

    def test_diagnostics_mode(self):
        assert get_formatter("diagnostics").diagnostics is True
        assert get_formatter("txt").diagnostics is False

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown formatter"):
            get_formatter("json")
