"""Tests for diagnostics and value helpers."""

import pytest

from podscratch.diagnostics import Diagnostic, DiagnosticCollector, DiagnosticContext, DiagnosticLevel
from podscratch.errors import (
    BlockArgumentError,
    BlockExecutionError,
    ExecutionError,
    PodError,
    ScriptStructureError,
)
from podscratch.utils import plain_number, to_number, to_text, truthy


class TestDiagnostic:

    def test_str_with_location(self):
        diagnostic = Diagnostic(DiagnosticLevel.ERROR, "Broken", "cat", script=0, block=3, block_kind="end")
        assert str(diagnostic) == "Error: Broken: Resource 'cat' Script 0 Block 3\n  -> end"

    def test_str_resource_only(self):
        assert str(Diagnostic(DiagnosticLevel.INFO, "Loaded", "stage")) == "Info: Loaded: Resource 'stage'"


class TestDiagnosticContext:

    def test_levels(self):
        ctx = DiagnosticContext(pod_name="scratch")
        ctx.info("Loaded", resource="stage")
        assert not ctx.has_errors() and not ctx.has_warnings()
        ctx.warning("Never runs", resource="cat", script=1)
        ctx.error("Broken", resource="cat", script=0, block=2)
        ctx.error("Broken again", resource="dog", script=0)
        assert ctx.has_errors() and ctx.has_warnings()
        assert [d.message for d in ctx.get_errors()] == ["Broken", "Broken again"]
        assert [d.resource for d in ctx.get_warnings()] == ["cat"]
        assert ctx.summary() == "2 errors, 1 warning"
        ctx.clear()
        assert ctx.summary() == "No issues"

    def test_collector_merges_contexts(self, capsys):
        first = DiagnosticContext(pod_name="a")
        second = DiagnosticContext(pod_name="b")
        first.warning("w", resource="cat")
        second.error("e", resource="dog")
        collector = DiagnosticCollector()
        collector.add_context_diagnostics(first)
        collector.add_context_diagnostics(second)
        assert collector.has_errors() and collector.has_warnings()
        assert collector.summary() == "1 error, 1 warning"
        collector.print_all()
        out = capsys.readouterr().out
        assert "Warning: w: Resource 'cat'" in out
        assert "Error: e: Resource 'dog'" in out


class TestErrors:

    def test_detail_in_message(self):
        assert str(PodError("Bad", detail="why")) == "Bad (why)"
        assert str(PodError("Bad")) == "Bad"

    def test_structure_error_carries_index(self):
        error = ScriptStructureError("Bad", block_index=4)
        assert error.block_index == 4
        assert isinstance(error, PodError)

    def test_argument_errors_are_not_structure_errors(self):
        error = BlockArgumentError("Bad value", block_index=2)
        assert error.block_index == 2
        assert isinstance(error, ExecutionError)
        assert not isinstance(error, ScriptStructureError)
        assert not issubclass(BlockExecutionError, ScriptStructureError)


class TestValues:

    @pytest.mark.parametrize("value, expected", [
        ("true", True), (True, True), ("false", False), (False, False), ("True", False), (1, False),
    ])
    def test_truthy(self, value, expected):
        assert truthy(value) is expected

    @pytest.mark.parametrize("value, expected", [
        (3, 3.0), ("2.5", 2.5), (" 4 ", 4.0), ("abc", 0.0), ("", 0.0), ("nan", 0.0), (True, 1.0),
    ])
    def test_to_number(self, value, expected):
        assert to_number(value) == expected

    def test_to_text(self):
        assert to_text(2.0) == "2"
        assert to_text(2.5) == "2.5"
        assert to_text(False) == "false"

    def test_plain_number(self):
        assert plain_number(4.0) == 4 and isinstance(plain_number(4.0), int)
        assert plain_number(4.5) == 4.5
        assert plain_number(float("inf")) == float("inf")
