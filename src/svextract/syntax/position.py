"""Position utilities for component source code.

Converts character offsets to line/column positions for diagnostics.

Conventions: offsets and columns are character (code point) based;
location_at() returns 1-based lines and 0-based columns.
"""

from .ast import SourceLocation


def line_offset(source: str, pos: int) -> int:
    """Get 0-based line number from character offset.

    Args:
        source: Complete component source text
        pos: Character offset in source

    Returns:
        0-based line number

    Example:
        >>> source = "line1\\nline2\\nline3"
        >>> line_offset(source, 0)   # Start of file
        0
        >>> line_offset(source, 6)   # Start of line2
        1
    """
    if pos < 0:
        msg = f"Position must be >= 0, got {pos}"
        raise ValueError(msg)
    pos = min(pos, len(source))

    # O(1) memory: count in range instead of creating substring
    return source.count("\n", 0, pos)


def column_offset(source: str, pos: int) -> int:
    """Get 0-based column number from character offset.

    Args:
        source: Complete component source text
        pos: Character offset in source

    Returns:
        0-based column number (characters from line start)

    Example:
        >>> source = "hello\\nworld"
        >>> column_offset(source, 8)   # 'r' in "world"
        2
    """
    if pos < 0:
        msg = f"Position must be >= 0, got {pos}"
        raise ValueError(msg)
    pos = min(pos, len(source))

    line_start = source.rfind("\n", 0, pos) + 1
    return pos - line_start


def location_at(source: str, pos: int) -> SourceLocation:
    """Get the SourceLocation (1-based line, 0-based column) of an offset."""
    return SourceLocation(line=line_offset(source, pos) + 1, column=column_offset(source, pos))
