"""Diagnostic codes and data structures.

Defines error codes, source spans, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceSpan",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Extraction errors (message definitions and records)
        2000-2999: Syntax errors (component file parsing)
        3000-3999: Accumulation errors (path addressing)
        4000-4999: Input/output and configuration problems
        5000-5999: Resource limits
    """

    # Extraction errors (1000-1999)
    INVALID_DEFINITION_ENTRY = 1001

    # Syntax errors (2000-2999)
    UNEXPECTED_TOKEN = 2001
    UNEXPECTED_EOF = 2002
    DUPLICATE_SCRIPT = 2003
    EMPTY_EXPRESSION = 2004

    # Accumulation errors (3000-3999)
    PATH_CONFLICT = 3001

    # Input/output and configuration (4000-4999)
    CONFIG_LOAD_FAILED = 4001
    CONFIG_INVALID_PREPROCESS = 4002
    OUTPUT_UNREADABLE = 4003
    SOURCE_UNREADABLE = 4004
    PREPROCESS_FAILED = 4005

    # Resource limits (5000-5999)
    MAX_DEPTH_EXCEEDED = 5001


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Source code location for error reporting.

    Follows the script-parser convention used throughout svextract:
    lines are 1-indexed, columns are 0-indexed character offsets.

    Attributes:
        line: Line number (1-indexed)
        column: Column number (0-indexed)
    """

    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate SourceSpan invariants.

        Raises:
            ValueError: If line is less than 1 or column is negative.
        """
        if self.line < 1:
            msg = f"SourceSpan.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)
        if self.column < 0:
            msg = f"SourceSpan.column must be >= 0 (0-indexed), got {self.column}"
            raise ValueError(msg)

    def __str__(self) -> str:
        return f"L{self.line}:{self.column}"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Provides rich error information for both humans and tools.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        span: Source location (None for errors without a position)
        hint: Suggestion for fixing the error
        filename: Component file the error was found in
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    hint: str | None = None
    filename: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like a compiler error.

        Delegates to DiagnosticFormatter for consistent output.

        Example output:
            error[INVALID_DEFINITION_ENTRY]: Found invalid 'SpreadElement' at L4:6
              --> src/App.svelte:4:6
              = help: Every entry of a defineMessages() catalog must be a key: value pair

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
