"""Sanitize untrusted paths before joining them onto a trusted base directory."""

__version__ = "0.1.0"

from .options import (
    DEFAULT_OPTIONS,
    DecodeRule,
    InvalidConfiguration,
    SanitizeOptions,
    resolve_options,
)
from .safe_path import PathTraversalError, join_sanitized, safe_join
from .sanitize import sanitize

__all__ = [
    "DEFAULT_OPTIONS",
    "DecodeRule",
    "InvalidConfiguration",
    "PathTraversalError",
    "SanitizeOptions",
    "__version__",
    "join_sanitized",
    "resolve_options",
    "safe_join",
    "sanitize",
]
