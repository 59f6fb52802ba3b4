"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Error types raised by the memoization layer.
"""

from __future__ import annotations


class CacheError(RuntimeError):
    """Base class for errors raised by memocache itself."""


class InvalidCacheArgumentError(CacheError, TypeError):
    """Raised at wrap time when the target function or resolver is not callable."""


class CacheConfigError(CacheError, ValueError):
    """Raised when cache options fail validation."""


class CacheBackendError(CacheError):
    """Raised when store backend registration/resolution fails."""
