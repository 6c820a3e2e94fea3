"""Robust text loading for legacy source files."""

from .content import ContentLoader, ContentCache, ContentSource, sanitize_bytes

__all__ = [
    "ContentLoader",
    "ContentCache",
    "ContentSource",
    "sanitize_bytes",
]
