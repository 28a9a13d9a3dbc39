"""Depth limiting for recursion protection.

Provides reusable depth tracking to prevent stack overflow from:
- Deeply nested script expressions during tree conversion
- Deeply nested trees during visitor walks
- Programmatically constructed adversarial trees

Thread-safe: uses explicit state, no thread-local storage.
Python 3.13+.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field

from svextract.constants import MAX_DEPTH
from svextract.diagnostics import ExtractError
from svextract.diagnostics.templates import ErrorTemplate

__all__ = ["DepthGuard", "DepthLimitExceededError", "depth_clamp"]

logger = logging.getLogger(__name__)


class DepthLimitExceededError(ExtractError):
    """Raised when maximum tree depth is exceeded.

    This error indicates either:
    - Adversarial input designed to cause stack overflow
    - Malformed programmatic tree construction
    - Unintended deep nesting in component source
    """


@dataclass(slots=True)
class DepthGuard:
    """Context manager for tracking and limiting recursion depth.

    Usage:
        guard = DepthGuard()
        with guard:
            # Recursive operation
            self._convert(child)

    Mutability Note:
        Intentionally mutable (not frozen=True) to enable stateful depth
        tracking via context manager protocol. The current_depth field is
        incremented/decremented on __enter__/__exit__.

    Attributes:
        max_depth: Maximum allowed depth (default: MAX_DEPTH)
        current_depth: Current recursion depth
    """

    max_depth: int = MAX_DEPTH
    current_depth: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        """Clamp max_depth against Python recursion limit."""
        self.max_depth = depth_clamp(self.max_depth)

    def __enter__(self) -> DepthGuard:
        """Enter guarded section, increment depth.

        Validates depth limit BEFORE incrementing: __exit__ is not called when
        __enter__ raises, so incrementing first would leave current_depth
        permanently elevated.
        """
        if self.current_depth >= self.max_depth:
            raise DepthLimitExceededError(
                ErrorTemplate.expression_depth_exceeded(self.max_depth)
            )
        self.current_depth += 1
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit guarded section, decrement depth."""
        self.current_depth -= 1

    @property
    def depth(self) -> int:
        """Current depth (alias for current_depth)."""
        return self.current_depth


def depth_clamp(requested_depth: int, reserve_frames: int = 50) -> int:
    """Clamp requested depth against Python recursion limit.

    Tree conversion uses two frames per level, so the safe depth is half
    of what remains after reserving frames for call overhead. Logs a
    warning if clamping occurs.

    Args:
        requested_depth: Desired maximum depth
        reserve_frames: Stack frames to reserve for call overhead (default: 50)

    Returns:
        Safe depth value, clamped if necessary

    Example:
        >>> import sys
        >>> sys.setrecursionlimit(1000)
        >>> depth_clamp(200)  # OK, within limit
        200
        >>> depth_clamp(600)  # Exceeds limit, clamped to 475
        475
    """
    max_safe_depth = (sys.getrecursionlimit() - reserve_frames) // 2
    if requested_depth > max_safe_depth:
        logger.warning(
            "Requested depth %d exceeds Python recursion limit (%d). "
            "Clamping to %d to prevent RecursionError.",
            requested_depth,
            sys.getrecursionlimit(),
            max_safe_depth,
        )
        return max_safe_depth
    return requested_depth
