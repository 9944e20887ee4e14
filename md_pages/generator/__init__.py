"""Utilities for rendering, assembling, and formatting exported pages."""

from .formatter import format_with_fallback, prettify_html
from .models import RenderedPage, SourceDocument
from .page_builder import PageBuilder
from .postprocess import postprocess_html
from .renderer import HtmlContentRenderer

__all__ = [
    "HtmlContentRenderer",
    "PageBuilder",
    "RenderedPage",
    "SourceDocument",
    "format_with_fallback",
    "postprocess_html",
    "prettify_html",
]
