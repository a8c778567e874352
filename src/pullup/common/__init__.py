"""
Common utilities and shared functionality for pullup.
This package provides single sources of truth for cross-cutting concerns.
"""

from .rendering import (
    normalize_whitespace,
    normalized_body,
    render_block,
    render_class,
    render_expression,
    render_method,
)

__all__ = [
    "normalize_whitespace",
    "normalized_body",
    "render_block",
    "render_class",
    "render_expression",
    "render_method",
]
