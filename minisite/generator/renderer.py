"""Utilities for rendering markdown spans into HTML."""

from __future__ import annotations

import typing as typ

from markdown import Markdown

from .code_blocks import HighlightedFenceExtension
from .highlighter import Highlighter
from .link_rewriter import AbsoluteImageExtension

if typ.TYPE_CHECKING:
    from markdown.extensions import Extension

    from .models import PartialPage
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any

BASE_EXTENSIONS: tuple[str, ...] = ("tables", "sane_lists")


class HtmlContentRenderer:
    """Render markdown with highlighted code and absolute image links."""

    def __init__(self, highlighter: Highlighter | None = None) -> None:
        """Initialize a renderer around a shared highlighter.

        Parameters
        ----------
        highlighter : Highlighter, optional
            Highlighter receiving every fenced code block. Defaults to a
            ``monokai`` Pygments highlighter.
        """
        self.highlighter = highlighter or Highlighter()

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self.highlighter.stylesheet

    def markdown(self, text: str, page: PartialPage | None = None) -> str:
        """Render markdown into HTML.

        Parameters
        ----------
        text : str
            Markdown span to convert.
        page : PartialPage, optional
            Page the span belongs to; relative image URLs are resolved
            against its permalink. Without a page, image URLs are left as
            written.

        Returns
        -------
        str
            Rendered HTML, or an empty string for blank input.

        Raises
        ------
        HighlightError
            If the highlighter fails on a fenced code block.
        """
        if not text.strip():
            return ""
        extensions: list[Extension | str] = [
            *BASE_EXTENSIONS,
            HighlightedFenceExtension(self.highlighter),
        ]
        if page is not None:
            extensions.append(AbsoluteImageExtension(page.permalink))
        md = Markdown(extensions=extensions)
        return md.convert(text)


__all__ = ["HtmlContentRenderer"]
