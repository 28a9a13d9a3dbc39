"""Diagnostic system for svextract errors.

Provides structured error diagnostics with codes, spans, hints and the
component file they were found in.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan
from .errors import (
    ConfigError,
    ExtractError,
    InvalidDefinitionError,
    PathConflictError,
    SourceReadError,
    TemplateSyntaxError,
)
from .formatter import DiagnosticFormatter, DiagnosticStyle
from .templates import ErrorTemplate

__all__ = [
    "ConfigError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "DiagnosticStyle",
    "ErrorTemplate",
    "ExtractError",
    "InvalidDefinitionError",
    "PathConflictError",
    "SourceReadError",
    "SourceSpan",
    "TemplateSyntaxError",
]
