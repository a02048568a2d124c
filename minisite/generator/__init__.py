"""Utilities for parsing, rendering, and generating minisite pages."""

from .highlighter import Highlighter
from .link_rewriter import AbsoluteImageExtension
from .models import Page, PartialPage
from .page_generator import PageBuilder
from .renderer import HtmlContentRenderer
from .splicer import ContentPipeline

__all__ = [
    "AbsoluteImageExtension",
    "ContentPipeline",
    "Highlighter",
    "HtmlContentRenderer",
    "Page",
    "PageBuilder",
    "PartialPage",
]
