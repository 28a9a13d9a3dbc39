"""Core utilities shared across syntax and extraction layers.

By isolating these utilities here, we maintain a clean dependency graph:

    core <- syntax <- extraction

Exports:
    DepthGuard: Context manager for recursion depth limiting
    DepthLimitExceededError: Exception raised when depth limit exceeded
    resolve / assign: Dotted-path addressing of nested dictionaries
    MISSING: Sentinel returned by resolve() for absent paths

Python 3.13+.
"""

from .depth_guard import DepthGuard, DepthLimitExceededError
from .paths import MISSING, assign, is_defined, resolve, tokenize_path

__all__ = [
    "MISSING",
    "DepthGuard",
    "DepthLimitExceededError",
    "assign",
    "is_defined",
    "resolve",
    "tokenize_path",
]
