"""Tests for diagnostics: codes, templates, formatter, exceptions, depth guard."""

import json
import logging
import sys

import pytest

from svextract.core.depth_guard import DepthGuard, DepthLimitExceededError, depth_clamp
from svextract.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    DiagnosticFormatter,
    DiagnosticStyle,
    ErrorTemplate,
    ExtractError,
    InvalidDefinitionError,
    SourceSpan,
)


class TestSourceSpan:
    """Span invariants."""

    def test_str(self) -> None:
        assert str(SourceSpan(line=4, column=6)) == "L4:6"

    def test_line_must_be_positive(self) -> None:
        with pytest.raises(ValueError, match="line must be >= 1"):
            SourceSpan(line=0, column=0)

    def test_column_must_be_non_negative(self) -> None:
        with pytest.raises(ValueError, match="column must be >= 0"):
            SourceSpan(line=1, column=-1)


class TestErrorTemplate:
    """Message texts."""

    def test_invalid_definition_entry(self) -> None:
        diagnostic = ErrorTemplate.invalid_definition_entry("SpreadElement", SourceSpan(4, 6), "App.svelte")
        assert diagnostic.message == "Found invalid 'SpreadElement' at L4:6"
        assert diagnostic.code is DiagnosticCode.INVALID_DEFINITION_ENTRY
        assert diagnostic.severity == "error"

    def test_invalid_definition_entry_without_span(self) -> None:
        diagnostic = ErrorTemplate.invalid_definition_entry("SpreadElement", None)
        assert diagnostic.message == "Found invalid 'SpreadElement' at L?:?"

    def test_warnings(self) -> None:
        assert ErrorTemplate.path_conflict("a.b", "b").severity == "warning"
        assert ErrorTemplate.config_load_failed("c.py", "boom").severity == "warning"
        assert ErrorTemplate.output_unreadable("o.json", "bad").severity == "warning"


class TestDiagnosticFormatter:
    """Output styles."""

    DIAGNOSTIC = ErrorTemplate.invalid_definition_entry("SpreadElement", SourceSpan(4, 6), "src/App.svelte")

    def test_rust_style(self) -> None:
        text = DiagnosticFormatter().format(self.DIAGNOSTIC)
        lines = text.splitlines()
        assert lines[0] == "error[INVALID_DEFINITION_ENTRY]: Found invalid 'SpreadElement' at L4:6"
        assert "--> src/App.svelte:4:6" in text
        assert "= help:" in text

    def test_simple_style(self) -> None:
        text = DiagnosticFormatter(style=DiagnosticStyle.SIMPLE).format(self.DIAGNOSTIC)
        assert text == "INVALID_DEFINITION_ENTRY: Found invalid 'SpreadElement' at L4:6"

    def test_json_style(self) -> None:
        data = json.loads(DiagnosticFormatter(style=DiagnosticStyle.JSON).format(self.DIAGNOSTIC))
        assert data["code"] == "INVALID_DEFINITION_ENTRY"
        assert data["code_value"] == 1001
        assert data["severity"] == "error"

    def test_color(self) -> None:
        text = DiagnosticFormatter(color=True).format(self.DIAGNOSTIC)
        assert "\033[" in text

    def test_format_all(self) -> None:
        second = Diagnostic(code=DiagnosticCode.PATH_CONFLICT, message="conflict", severity="warning")
        text = DiagnosticFormatter(style=DiagnosticStyle.SIMPLE).format_all([self.DIAGNOSTIC, second])
        assert text.split("\n\n")[1] == "PATH_CONFLICT: conflict"


class TestExceptions:
    """Exception hierarchy."""

    def test_diagnostic_attached(self) -> None:
        diagnostic = ErrorTemplate.invalid_definition_entry("SpreadElement", SourceSpan(1, 0))
        error = InvalidDefinitionError(diagnostic)
        assert error.diagnostic is diagnostic
        assert "Found invalid 'SpreadElement' at L1:0" in str(error)
        assert isinstance(error, ExtractError)

    def test_plain_message(self) -> None:
        error = ExtractError("plain")
        assert error.diagnostic is None
        assert str(error) == "plain"


class TestDepthGuard:
    """Recursion protection."""

    def test_enter_exit(self) -> None:
        guard = DepthGuard(max_depth=2)
        with guard:
            assert guard.depth == 1
            with guard:
                assert guard.depth == 2
        assert guard.depth == 0

    def test_limit(self) -> None:
        guard = DepthGuard(max_depth=1)
        with guard, pytest.raises(DepthLimitExceededError), guard:
            pass
        assert guard.depth == 0

    def test_clamp(self, caplog: pytest.LogCaptureFixture) -> None:
        limit = (sys.getrecursionlimit() - 50) // 2
        assert depth_clamp(10) == 10
        with caplog.at_level(logging.WARNING):
            assert depth_clamp(limit + 100) == limit
        assert "Clamping" in caplog.text
