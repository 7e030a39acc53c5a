"""Docs-cache exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class DocsCacheError(Exception):
    """Base exception for all docs-cache failures."""


class DocsCacheConfigError(DocsCacheError):
    """Raised for invalid runtime configuration or lifecycle usage."""


class DocsCacheNetworkError(DocsCacheError):
    """Raised when the remote index cannot be retrieved."""


class DocsCacheIndexError(DocsCacheNetworkError):
    """Raised when the remote index body does not have the expected shape."""


class DocsCacheFilesystemError(DocsCacheError):
    """Raised for cache directory creation, write, and read failures."""
