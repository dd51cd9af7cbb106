"""Utilities for rendering markdown values and wrapping documents."""

from .link_rewriter import LocalLinkExtension, local_slug
from .page import DocumentBuilder, render_page, wrap_document
from .renderer import MarkdownRenderer

__all__ = [
    "DocumentBuilder",
    "LocalLinkExtension",
    "MarkdownRenderer",
    "local_slug",
    "render_page",
    "wrap_document",
]
