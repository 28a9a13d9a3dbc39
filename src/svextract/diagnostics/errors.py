"""svextract exception hierarchy with structured diagnostics.

All exceptions optionally store Diagnostic objects for rich error information.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic


class ExtractError(Exception):
    """Base exception for all svextract errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize ExtractError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class InvalidDefinitionError(ExtractError):
    """A defineMessages() catalog entry is not a plain key/value property.

    Structural error: aborts extraction of the current file, and the batch
    driver stops the whole run.
    """


class TemplateSyntaxError(ExtractError):
    """A component file could not be parsed.

    Raised for unexpected tokens in scripts or markup expressions, unclosed
    or empty markup tags, and duplicate script blocks.
    """


class PathConflictError(ExtractError):
    """A dotted path runs through a value that cannot hold children.

    Example:
        Writing "app.title" after "app" already holds a string.

    The accumulation engine catches this, logs it and keeps the existing
    value (first writer wins).
    """


class ConfigError(ExtractError):
    """A config module defines an unusable preprocess hook."""


class SourceReadError(ExtractError):
    """A component file could not be read, decoded or preprocessed.

    Fatal like a syntax error: the batch driver stops the whole run.
    """
