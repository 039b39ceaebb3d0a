"""Configuration error definitions."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when a ``DOCPATCH_*`` setting cannot be parsed."""
