"""Syntax highlighting for fenced code blocks."""

from __future__ import annotations

import re
from html import escape

from pygments import highlight
from pygments.formatters.html import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from minisite.errors import HighlightError

CODEHILITE_OPEN_TAG = re.compile(r'<div class="codehilite">')
PLAIN_TEXT = "text"


class Highlighter:
    """Render code into Pygments HTML, falling back to plain text."""

    def __init__(self, style: str = "monokai") -> None:
        """Initialize the highlighter with a Pygments ``style`` name."""
        self.style = style
        self._formatter = HtmlFormatter(style=style, cssclass="codehilite")

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def highlight(self, language: str, code: str) -> str:
        """Render ``code`` into highlighted HTML tagged with ``language``.

        Parameters
        ----------
        language : str
            Fence language token; unknown or empty tokens use the plain
            text lexer.
        code : str
            Source snippet to highlight.

        Returns
        -------
        str
            HTML containing the highlighted block with ``data-language``
            metadata applied.

        Raises
        ------
        HighlightError
            If Pygments fails while formatting the snippet.
        """
        lang = language or PLAIN_TEXT
        try:
            lexer = get_lexer_by_name(lang)
        except ClassNotFound:
            lexer = get_lexer_by_name(PLAIN_TEXT)
        try:
            html = highlight(code, lexer, self._formatter)
        except (TypeError, ValueError) as exc:
            msg = f"failed to highlight {lang!r} code block: {exc}"
            raise HighlightError(msg) from exc
        return self._attach_language_attribute(html, lang)

    @staticmethod
    def _attach_language_attribute(html: str, language: str) -> str:
        """Add a single language attribute to an already highlighted block."""
        safe_lang = escape(language, quote=True)
        replacement = f'<div class="codehilite" data-language="{safe_lang}">'
        return CODEHILITE_OPEN_TAG.sub(lambda _match: replacement, html, 1)


__all__ = ["Highlighter"]
