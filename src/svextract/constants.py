"""Shared constants for svextract.

Centralized configuration constants used across the syntax, extraction
and command-line layers. Placing constants here avoids circular imports
and provides a single source of truth.

Constants are grouped by domain:
- Translation library: import source and API names recognized in templates
- Depth limits: Recursion protection for tree conversion and walking
- Input/output: File selection, config discovery, output rendering

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Translation library
    "LIB_NAME",
    "DEFINE_MESSAGES_METHOD_NAME",
    "FORMAT_METHOD_NAMES",
    "REACTIVE_SIGIL",
    # Depth limits
    "MAX_DEPTH",
    # Input/output
    "TEMPLATE_FILE_PATTERN",
    "DEFAULT_CONFIG_FILENAME",
    "OUTPUT_INDENT",
    "SOURCE_ENCODING",
]

# ============================================================================
# TRANSLATION LIBRARY
# ============================================================================

# Import source whose bindings are tracked.
LIB_NAME: str = "svelte-i18n"

# Imported name of the message-definition-block function.
DEFINE_MESSAGES_METHOD_NAME: str = "defineMessages"

# Imported names of the formatting stores. Templates call them through
# their auto-subscribed form: $_('id'), $t('id'), $format('id').
FORMAT_METHOD_NAMES: frozenset[str] = frozenset({"format", "_", "t"})

# Prefix that turns a store binding into its subscribed value.
REACTIVE_SIGIL: str = "$"

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Maximum nesting depth of a converted script/markup tree.
# Conversion spends two interpreter frames per level and walking one, so
# 200 levels stays well below the default recursion limit of 1000.
MAX_DEPTH: int = 200

# ============================================================================
# INPUT/OUTPUT
# ============================================================================

# Files matched by the glob are kept only if their path matches this pattern
# (case-insensitive search).
TEMPLATE_FILE_PATTERN: str = r"\.html|svelte$"

# Config module looked up in the working directory (or in a directory
# passed to --config).
DEFAULT_CONFIG_FILENAME: str = "svextract.config.py"

# Indentation of the rendered JSON dictionary.
OUTPUT_INDENT: int = 2

SOURCE_ENCODING: str = "utf-8"
