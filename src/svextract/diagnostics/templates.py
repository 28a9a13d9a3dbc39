"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This keeps messages testable, consistently formatted, and documents every
    error case in one place.
    """

    @staticmethod
    def invalid_definition_entry(
        kind: str, span: SourceSpan | None, filename: str | None = None
    ) -> Diagnostic:
        """A defineMessages() catalog entry that is not a key/value pair.

        Args:
            kind: Node kind of the offending entry (e.g. "SpreadElement")
            span: Location of the entry (None for hand-built trees)
            filename: Component file being extracted

        Returns:
            Diagnostic for INVALID_DEFINITION_ENTRY
        """
        msg = f"Found invalid '{kind}' at {span if span else 'L?:?'}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_DEFINITION_ENTRY,
            message=msg,
            span=span,
            hint="Every entry of a defineMessages() catalog must be a key: value pair",
            filename=filename,
        )

    @staticmethod
    def unexpected_token(
        snippet: str, span: SourceSpan, filename: str | None = None
    ) -> Diagnostic:
        """Script or markup expression contains a syntax error.

        Args:
            snippet: Source text of the offending node (truncated)
            span: Location of the error
            filename: Component file being parsed

        Returns:
            Diagnostic for UNEXPECTED_TOKEN
        """
        msg = f"Unexpected token {snippet!r} at {span}"
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_TOKEN,
            message=msg,
            span=span,
            hint="Files using a preprocessed language need a preprocess hook",
            filename=filename,
        )

    @staticmethod
    def unclosed_tag(span: SourceSpan, filename: str | None = None) -> Diagnostic:
        """A markup '{' has no matching '}'.

        Args:
            span: Location of the opening brace
            filename: Component file being parsed

        Returns:
            Diagnostic for UNEXPECTED_EOF
        """
        msg = f"Unexpected end of input: tag opened at {span} is never closed"
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_EOF,
            message=msg,
            span=span,
            hint="Close the tag with '}'",
            filename=filename,
        )

    @staticmethod
    def empty_expression(span: SourceSpan, filename: str | None = None) -> Diagnostic:
        """A markup tag without an expression.

        Args:
            span: Location of the opening brace
            filename: Component file being parsed

        Returns:
            Diagnostic for EMPTY_EXPRESSION
        """
        msg = f"Expected an expression at {span}"
        return Diagnostic(
            code=DiagnosticCode.EMPTY_EXPRESSION,
            message=msg,
            span=span,
            filename=filename,
        )

    @staticmethod
    def duplicate_script(
        context: str, span: SourceSpan, filename: str | None = None
    ) -> Diagnostic:
        """A second <script> block for the same context.

        Args:
            context: "instance" or "module"
            span: Location of the second script tag
            filename: Component file being parsed

        Returns:
            Diagnostic for DUPLICATE_SCRIPT
        """
        msg = f"A component can only have one {context}-level <script> element"
        return Diagnostic(
            code=DiagnosticCode.DUPLICATE_SCRIPT,
            message=msg,
            span=span,
            filename=filename,
        )

    @staticmethod
    def path_conflict(path: str, segment: str) -> Diagnostic:
        """A path segment descends into a non-container value.

        Args:
            path: Full dotted path being written
            segment: Segment whose parent holds a plain value

        Returns:
            Diagnostic for PATH_CONFLICT
        """
        msg = f"Cannot write '{path}': segment '{segment}' is below a non-container value"
        return Diagnostic(
            code=DiagnosticCode.PATH_CONFLICT,
            message=msg,
            hint="Use --shallow to keep dotted ids as flat keys",
            severity="warning",
        )

    @staticmethod
    def config_load_failed(path: str, reason: str) -> Diagnostic:
        """Config module exists but could not be imported.

        Args:
            path: Path of the config module
            reason: Error raised while importing it

        Returns:
            Diagnostic for CONFIG_LOAD_FAILED
        """
        msg = f"Could not load config '{path}': {reason}"
        return Diagnostic(
            code=DiagnosticCode.CONFIG_LOAD_FAILED,
            message=msg,
            hint="Continuing without a preprocess hook",
            severity="warning",
        )

    @staticmethod
    def config_invalid_preprocess(path: str) -> Diagnostic:
        """Config module defines a non-callable preprocess attribute.

        Args:
            path: Path of the config module

        Returns:
            Diagnostic for CONFIG_INVALID_PREPROCESS
        """
        msg = f"'preprocess' in config '{path}' is not callable"
        return Diagnostic(
            code=DiagnosticCode.CONFIG_INVALID_PREPROCESS,
            message=msg,
            hint="Define preprocess(source: str, filename: str) -> str",
        )

    @staticmethod
    def output_unreadable(path: str, reason: str) -> Diagnostic:
        """Existing output file could not be read back as a dictionary.

        Args:
            path: Output file path
            reason: Decoding or I/O error

        Returns:
            Diagnostic for OUTPUT_UNREADABLE
        """
        msg = f"Could not read existing output '{path}': {reason}"
        return Diagnostic(
            code=DiagnosticCode.OUTPUT_UNREADABLE,
            message=msg,
            hint="Starting from an empty dictionary",
            severity="warning",
        )

    @staticmethod
    def source_unreadable(path: str, reason: str) -> Diagnostic:
        """Component file could not be read or decoded.

        Args:
            path: Component file path
            reason: I/O or decoding error

        Returns:
            Diagnostic for SOURCE_UNREADABLE
        """
        msg = f"Could not read component '{path}': {reason}"
        return Diagnostic(
            code=DiagnosticCode.SOURCE_UNREADABLE,
            message=msg,
            hint="Component files must be UTF-8 encoded text",
            filename=path,
        )

    @staticmethod
    def preprocess_failed(path: str, reason: str) -> Diagnostic:
        """The configured preprocess hook raised while transforming a file."""
        msg = f"Preprocess hook failed for '{path}': {reason}"
        return Diagnostic(
            code=DiagnosticCode.PREPROCESS_FAILED,
            message=msg,
            hint="Check the preprocess function in the config module",
            filename=path,
        )

    @staticmethod
    def expression_depth_exceeded(max_depth: int) -> Diagnostic:
        """Tree nesting exceeds the configured limit.

        Args:
            max_depth: The limit that was exceeded

        Returns:
            Diagnostic for MAX_DEPTH_EXCEEDED
        """
        msg = f"Maximum nesting depth ({max_depth}) exceeded"
        return Diagnostic(
            code=DiagnosticCode.MAX_DEPTH_EXCEEDED,
            message=msg,
            hint="Reduce nesting in the script or markup expression",
        )
