"""Diagnostic formatting service.

Centralizes diagnostic output formatting with configurable options.
Python 3.13+. Zero external dependencies.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from .codes import Diagnostic

__all__ = [
    "DiagnosticFormatter",
    "DiagnosticStyle",
]


class DiagnosticStyle(StrEnum):
    """Output style options for diagnostic formatting."""

    RUST = "rust"  # Compiler-style multi-line output (default)
    SIMPLE = "simple"  # Single-line format
    JSON = "json"  # JSON format for tooling integration


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Diagnostic formatting service.

    Centralizes formatting of Diagnostic objects into human-readable
    or machine-readable output.

    Attributes:
        style: Output style (rust, simple, json)
        color: Enable ANSI color codes (for terminal output)

    Example:
        >>> formatter = DiagnosticFormatter()
        >>> print(formatter.format(diagnostic))
        error[INVALID_DEFINITION_ENTRY]: Found invalid 'SpreadElement' at L4:6
          --> src/App.svelte:4:6
          = help: Every entry of a defineMessages() catalog must be a key: value pair

        >>> formatter = DiagnosticFormatter(style=DiagnosticStyle.SIMPLE)
        >>> print(formatter.format(diagnostic))
        INVALID_DEFINITION_ENTRY: Found invalid 'SpreadElement' at L4:6
    """

    style: DiagnosticStyle = DiagnosticStyle.RUST
    color: bool = False

    def format(self, diagnostic: Diagnostic) -> str:
        """Format a single diagnostic.

        Args:
            diagnostic: Diagnostic to format

        Returns:
            Formatted diagnostic string
        """
        match self.style:
            case DiagnosticStyle.RUST:
                return self._format_rust(diagnostic)
            case DiagnosticStyle.SIMPLE:
                return self._format_simple(diagnostic)
            case DiagnosticStyle.JSON:
                return self._format_json(diagnostic)

    def format_all(self, diagnostics: Iterable[Diagnostic]) -> str:
        """Format multiple diagnostics separated by blank lines."""
        return "\n\n".join(self.format(d) for d in diagnostics)

    def _location(self, diagnostic: Diagnostic) -> str | None:
        span = diagnostic.span
        if diagnostic.filename and span:
            return f"{diagnostic.filename}:{span.line}:{span.column}"
        if span:
            return f"line {span.line}, column {span.column}"
        return diagnostic.filename

    def _format_rust(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic in compiler style.

        Example output:
            error[UNEXPECTED_TOKEN]: Unexpected token ':' at L3:12
              --> src/App.svelte:3:12
              = help: Files using a preprocessed language need a preprocess hook
        """
        severity = diagnostic.severity

        if self.color:
            if severity == "error":
                severity_str = f"\033[1;31m{severity}\033[0m"  # Bold red
            else:
                severity_str = f"\033[1;33m{severity}\033[0m"  # Bold yellow
        else:
            severity_str = severity

        parts = [f"{severity_str}[{diagnostic.code.name}]: {diagnostic.message}"]

        location = self._location(diagnostic)
        if location:
            parts.append(f"  --> {location}")

        if diagnostic.hint:
            parts.append(f"  = help: {diagnostic.hint}")

        return "\n".join(parts)

    def _format_simple(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic in single-line format.

        Example output:
            UNEXPECTED_EOF: Unexpected end of input: tag opened at L2:4 is never closed
        """
        return f"{diagnostic.code.name}: {diagnostic.message}"

    def _format_json(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic as JSON.

        Example output:
            {"code": "PATH_CONFLICT", "message": "...", "severity": "warning"}
        """
        data: dict[str, str | int | None] = {
            "code": diagnostic.code.name,
            "code_value": diagnostic.code.value,
            "message": diagnostic.message,
            "severity": diagnostic.severity,
        }

        if diagnostic.span:
            data["line"] = diagnostic.span.line
            data["column"] = diagnostic.span.column

        if diagnostic.filename:
            data["filename"] = diagnostic.filename

        if diagnostic.hint:
            data["hint"] = diagnostic.hint

        return json.dumps(data, ensure_ascii=False)
